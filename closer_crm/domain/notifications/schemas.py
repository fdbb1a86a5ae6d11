"""Notification schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class NotificationCreate(BaseModel):
    userId: int
    message: str = Field(min_length=1)


class NotificationCreated(BaseModel):
    notificationId: int
    message: str


class NotificationResponse(BaseModel):
    notificationId: int
    message: str
    isRead: bool
    createdAt: Optional[datetime] = None
