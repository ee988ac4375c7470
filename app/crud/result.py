from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.result import Result, ResultAnswer


async def create_result(
    session: AsyncSession,
    student_id: int,
    test_id: int,
    score: int,
    total_questions: int,
    correct_answers: int,
    wrong_answers: int,
    answers: list[tuple[int | None, int]],
) -> Result:
    """시험 결과 생성 (답안은 제출 순서대로 position 부여)"""
    result = Result(
        student_id=student_id,
        test_id=test_id,
        score=score,
        total_questions=total_questions,
        correct_answers=correct_answers,
        wrong_answers=wrong_answers,
        answers=[
            ResultAnswer(position=position, question_id=question_id, selected_index=selected_index)
            for position, (question_id, selected_index) in enumerate(answers)
        ],
    )
    session.add(result)
    await session.commit()

    # server_default(created_at)와 답안을 다시 읽어온다
    created = await get_result_by_id(session, result.id, populate_existing=True)
    return created


async def get_result_by_id(
    session: AsyncSession,
    result_id: int,
    populate_existing: bool = False,
) -> Result | None:
    """ID로 결과 조회 (답안 포함)"""
    stmt = select(Result).where(Result.id == result_id).options(selectinload(Result.answers))
    if populate_existing:
        stmt = stmt.execution_options(populate_existing=True)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def get_results_by_student(session: AsyncSession, student_id: int) -> Sequence[Result]:
    """학생별 결과 (최신순)"""
    stmt = (
        select(Result)
        .where(Result.student_id == student_id)
        .order_by(Result.created_at.desc(), Result.id.desc())
    )
    result = await session.execute(stmt)
    return result.scalars().all()


async def get_all_results(session: AsyncSession) -> Sequence[Result]:
    """전체 결과 (점수 높은 순)"""
    result = await session.execute(select(Result).order_by(Result.score.desc(), Result.id))
    return result.scalars().all()


async def get_top_results(
    session: AsyncSession,
    limit: int,
    test_id: int | None = None,
) -> Sequence[Result]:
    """리더보드용 상위 결과"""
    stmt = select(Result)
    if test_id is not None:
        stmt = stmt.where(Result.test_id == test_id)
    stmt = stmt.order_by(Result.score.desc(), Result.created_at, Result.id).limit(limit)
    result = await session.execute(stmt)
    return result.scalars().all()


async def delete_results_by_student(session: AsyncSession, student_id: int) -> int:
    """학생 계정 삭제 시 결과 일괄 삭제 (명시적 cascade)"""
    result_ids = select(Result.id).where(Result.student_id == student_id)
    await session.execute(delete(ResultAnswer).where(ResultAnswer.result_id.in_(result_ids)))
    deleted = await session.execute(delete(Result).where(Result.student_id == student_id))
    await session.commit()
    return deleted.rowcount or 0
