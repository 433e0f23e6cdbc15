from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from socialhub.users.models import UserProfile


# "blocked" exists for stored data only; nothing transitions into it.
FriendshipStatus = Literal["pending", "accepted", "blocked"]


class Friendship(BaseModel):
    id: str
    user_id: str  # requester
    friend_id: str  # recipient
    status: FriendshipStatus = "pending"
    created_at: datetime

    def involves(self, user_id: str, other_id: str) -> bool:
        return {self.user_id, self.friend_id} == {user_id, other_id}


class FriendRequest(Friendship):
    user: UserProfile
