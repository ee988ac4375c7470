from datetime import datetime

from pydantic import Field

from app.schemas.base import CamelModel


class NotificationResponse(CamelModel):
    """알림 응답 스키마"""
    id: int = Field(..., alias="_id")
    type: str
    title: str
    message: str
    link: str
    is_read: bool
    created_at: datetime


class SuccessResponse(CamelModel):
    success: bool = True
