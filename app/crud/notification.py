from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.notification import Notification


async def create_notification(
    session: AsyncSession,
    type: str,
    title: str,
    message: str,
    link: str = "#",
) -> Notification:
    """알림 생성"""
    notification = Notification(type=type, title=title, message=message, link=link)
    session.add(notification)
    await session.commit()
    await session.refresh(notification)
    return notification


async def get_notification_by_id(session: AsyncSession, notification_id: int) -> Notification | None:
    result = await session.execute(select(Notification).where(Notification.id == notification_id))
    return result.scalar_one_or_none()


async def get_recent_notifications(session: AsyncSession, limit: int = 50) -> Sequence[Notification]:
    """최근 알림 (최신순)"""
    stmt = (
        select(Notification)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
    )
    result = await session.execute(stmt)
    return result.scalars().all()


async def mark_notification_read(session: AsyncSession, notification: Notification) -> Notification:
    notification.is_read = True
    await session.commit()
    await session.refresh(notification)
    return notification


async def delete_notification(session: AsyncSession, notification: Notification) -> None:
    await session.delete(notification)
    await session.commit()
