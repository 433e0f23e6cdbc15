from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel


MembershipRole = Literal["member", "moderator", "admin"]


class InsertGroup(BaseModel):
    name: str
    description: Optional[str] = None
    avatar: Optional[str] = None
    cover_photo: Optional[str] = None
    owner_id: str
    is_private: bool = False


class Group(InsertGroup):
    id: str
    members_count: int = 0
    created_at: datetime


class GroupMembership(BaseModel):
    id: str
    group_id: str
    user_id: str
    role: MembershipRole = "member"
    joined_at: datetime
