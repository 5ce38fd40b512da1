from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from src.scrum.models import NotificationType


class NotificationRead(BaseModel):
    id: UUID
    type: NotificationType
    title: str
    message: str
    read: bool
    data: dict[str, Any]
    created_at: datetime

    model_config = {"from_attributes": True}


class NotificationCount(BaseModel):
    total: int
    unread: int
