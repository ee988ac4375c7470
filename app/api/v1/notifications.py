from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import get_db
from app.schemas import notification as notification_schema
from app.services import notification_service

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[notification_schema.NotificationResponse])
async def get_notifications(
    db: AsyncSession = Depends(get_db),
):
    """최근 알림 50건 조회 API"""
    return await notification_service.get_notifications(db)


@router.put("/{notification_id}/read", response_model=notification_schema.SuccessResponse)
async def mark_as_read(
    notification_id: int,
    db: AsyncSession = Depends(get_db),
):
    """알림 읽음 처리 API"""
    return await notification_service.mark_as_read(db, notification_id)


@router.delete("/{notification_id}", response_model=notification_schema.SuccessResponse)
async def delete_notification(
    notification_id: int,
    db: AsyncSession = Depends(get_db),
):
    """알림 삭제 API"""
    return await notification_service.delete_notification(db, notification_id)
