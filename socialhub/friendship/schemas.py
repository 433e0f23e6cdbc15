from pydantic import BaseModel
from typing import List

from socialhub.users.models import UserProfile
from .models import Friendship, FriendRequest


# friend request
class FriendRequestModel(BaseModel):
    user_id: str
    friend_id: str


class FriendRequestResponseModel(BaseModel):
    message: str
    request: Friendship


# accept_friend_request
class AcceptFriendRequestModel(BaseModel):
    user_id: str  # the recipient accepting the request
    friend_id: str  # the original requester


class AcceptFriendRequestResponseModel(BaseModel):
    friendship_accept: bool


# remove friend
class RemoveFriendResponseModel(BaseModel):
    friend_removed: bool


# listings
FriendsResponseModel = List[UserProfile]
FriendRequestsResponseModel = List[FriendRequest]
