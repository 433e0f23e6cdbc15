from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel


NotificationType = Literal["like", "comment", "friend_request", "message"]


class InsertNotification(BaseModel):
    user_id: str
    type: NotificationType
    title: str
    content: Optional[str] = None
    target_id: Optional[str] = None


class Notification(InsertNotification):
    id: str
    is_read: bool = False
    created_at: datetime
