from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class UserProfile(BaseModel):
    """Public view of a user. Never carries the password hash."""

    id: str
    username: str
    email: str
    display_name: str
    bio: Optional[str] = None
    avatar: Optional[str] = None
    cover_photo: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    is_online: bool = False
    last_seen: Optional[datetime] = None
    created_at: datetime


class User(UserProfile):
    password_hash: str = Field(repr=False)

    def profile(self) -> UserProfile:
        return UserProfile(**self.model_dump(exclude={"password_hash"}))


class InsertUser(BaseModel):
    username: str
    email: str
    password: str
    display_name: str
    bio: Optional[str] = None
    avatar: Optional[str] = None
    cover_photo: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None


class UserWithStats(UserProfile):
    friends_count: int
    posts_count: int
    is_friend: bool = False
    friendship_status: str = "none"
