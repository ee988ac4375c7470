from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.question import Question


async def get_question_by_id(session: AsyncSession, question_id: int) -> Question | None:
    """ID로 문제 조회"""
    result = await session.execute(select(Question).where(Question.id == question_id))
    return result.scalar_one_or_none()


async def get_questions_by_ids(
    session: AsyncSession,
    question_ids: set[int],
) -> dict[int, Question]:
    """여러 문제를 한 번에 조회

    삭제된 문제는 결과 dict 에 포함되지 않는다. 호출 측에서 누락을 직접 처리해야 한다.
    """
    if not question_ids:
        return {}
    result = await session.execute(select(Question).where(Question.id.in_(question_ids)))
    return {question.id: question for question in result.scalars().all()}


async def get_questions_by_test_id(session: AsyncSession, test_id: int) -> Sequence[Question]:
    """시험별 문제 목록 (등록 순서)"""
    result = await session.execute(
        select(Question).where(Question.test_id == test_id).order_by(Question.id)
    )
    return result.scalars().all()


async def create_question(
    session: AsyncSession,
    test_id: int,
    question: str,
    options: list[dict],
) -> Question:
    """문제 생성"""
    new_question = Question(test_id=test_id, question=question, options=options)
    session.add(new_question)
    await session.commit()
    await session.refresh(new_question)
    return new_question


async def create_questions_bulk(
    session: AsyncSession,
    test_id: int,
    items: list[tuple[str, list[dict]]],
) -> int:
    """문제 일괄 생성 (한 트랜잭션)"""
    session.add_all(
        Question(test_id=test_id, question=text, options=options) for text, options in items
    )
    await session.commit()
    return len(items)


async def delete_question(session: AsyncSession, question: Question) -> None:
    """문제 삭제 - 이 문제를 참조하는 결과는 건드리지 않는다"""
    await session.delete(question)
    await session.commit()
