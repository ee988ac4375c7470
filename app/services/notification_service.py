import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import notification as notification_crud
from app.exceptions import NotificationNotFoundError
from app.schemas import notification as notification_schema

logger = logging.getLogger(__name__)

RECENT_NOTIFICATION_LIMIT = 50


async def notify_safely(
    session: AsyncSession,
    type: str,
    title: str,
    message: str,
    link: str = "#",
) -> None:
    """알림 생성. 실패해도 호출한 작업(시험 제출, 시험 생성)은 실패시키지 않는다"""
    try:
        await notification_crud.create_notification(session, type=type, title=title, message=message, link=link)
        logger.debug(f"알림 생성: type={type}, title={title}")
    except Exception as e:
        logger.error(f"알림 생성 실패: {e.__class__.__name__}: {e}", exc_info=True)
        await session.rollback()


async def get_notifications(session: AsyncSession) -> list[notification_schema.NotificationResponse]:
    """최근 알림 목록"""
    notifications = await notification_crud.get_recent_notifications(session, RECENT_NOTIFICATION_LIMIT)
    return [notification_schema.NotificationResponse.model_validate(n) for n in notifications]


async def mark_as_read(session: AsyncSession, notification_id: int) -> notification_schema.SuccessResponse:
    notification = await notification_crud.get_notification_by_id(session, notification_id)
    if not notification:
        raise NotificationNotFoundError(notification_id)
    await notification_crud.mark_notification_read(session, notification)
    return notification_schema.SuccessResponse()


async def delete_notification(session: AsyncSession, notification_id: int) -> notification_schema.SuccessResponse:
    notification = await notification_crud.get_notification_by_id(session, notification_id)
    if not notification:
        raise NotificationNotFoundError(notification_id)
    await notification_crud.delete_notification(session, notification)
    return notification_schema.SuccessResponse()
