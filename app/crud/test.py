from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.question import Question
from app.models.test import Test


async def get_test_by_id(session: AsyncSession, test_id: int) -> Test | None:
    """ID로 시험 조회"""
    result = await session.execute(select(Test).where(Test.id == test_id))
    return result.scalar_one_or_none()


async def get_tests_by_ids(session: AsyncSession, test_ids: set[int]) -> dict[int, Test]:
    """여러 시험을 한 번에 조회 (결과 populate 용, 없는 ID는 빠진다)"""
    if not test_ids:
        return {}
    result = await session.execute(select(Test).where(Test.id.in_(test_ids)))
    return {test.id: test for test in result.scalars().all()}


async def get_all_tests(session: AsyncSession) -> Sequence[Test]:
    """모든 시험 조회 (최신순)"""
    result = await session.execute(select(Test).order_by(Test.created_at.desc(), Test.id.desc()))
    return result.scalars().all()


async def get_active_tests(session: AsyncSession) -> Sequence[Test]:
    """학생에게 노출되는 활성 시험 조회"""
    result = await session.execute(select(Test).where(Test.is_active.is_(True)).order_by(Test.id))
    return result.scalars().all()


async def create_test(
    session: AsyncSession,
    title: str,
    duration: int | None,
    total_marks: int,
    passing_marks: int,
    is_active: bool = True,
    created_by: int | None = None,
) -> Test:
    """시험 생성"""
    test = Test(
        title=title,
        duration=duration,
        total_marks=total_marks,
        passing_marks=passing_marks,
        is_active=is_active,
        created_by=created_by,
    )
    session.add(test)
    await session.commit()
    await session.refresh(test)
    return test


async def update_test_active(session: AsyncSession, test: Test, is_active: bool) -> Test:
    """시험 활성화 상태 변경"""
    test.is_active = is_active
    await session.commit()
    await session.refresh(test)
    return test


async def delete_test(session: AsyncSession, test: Test) -> None:
    """시험 삭제 - 문제는 함께 삭제, 결과는 남긴다"""
    await session.execute(delete(Question).where(Question.test_id == test.id))
    await session.delete(test)
    await session.commit()
