from fastapi import APIRouter, HTTPException, Depends

from socialhub.core.dependencies import get_storage
from socialhub.core.storage import IStorage

from .schemas import (
    FriendRequestModel,
    FriendRequestResponseModel,
    AcceptFriendRequestModel,
    AcceptFriendRequestResponseModel,
    RemoveFriendResponseModel,
    FriendsResponseModel,
    FriendRequestsResponseModel,
)


router = APIRouter()


@router.post("/request", response_model=FriendRequestResponseModel, status_code=201)
async def send_friend_request(
    data: FriendRequestModel, storage: IStorage = Depends(get_storage)
):
    """
    Send a friend request from `user_id` to `friend_id`.

    A series of validation steps ensure that requests are not duplicated,
    users cannot send requests to themselves, and that existing friendships
    or pending requests are respected.

    **Process**
    1. Validate that both users exist.
    2. Prevent self–friend-requests.
    3. Prevent duplicate pending requests in either direction.
    4. Prevent sending requests to users who are already friends.
    5. Create a new `pending` friendship request.

    **Returns**
    - `{ "message": "Friend request sent.", "request": {...} }`

    **Errors**
    - 400: Invalid body, or attempt to send a friend request to yourself.
    - 404: Either user does not exist.
    - 409: Duplicate request or already friends.
    """
    sender_id, receiver_id = data.user_id, data.friend_id

    # Prevent sending to self
    if sender_id == receiver_id:
        raise HTTPException(400, detail="Cannot send friend request to yourself.")

    # Both users exist
    if not await storage.get_user(sender_id) or not await storage.get_user(receiver_id):
        raise HTTPException(404, detail="User not found")

    # Prevent sending if friend request already exist
    incoming = await storage.get_friend_requests(receiver_id)
    outgoing = await storage.get_friend_requests(sender_id)
    if any(r.user_id == sender_id for r in incoming) or any(
        r.user_id == receiver_id for r in outgoing
    ):
        raise HTTPException(
            409,
            detail="Friend request already sent (or already pending from the other user).",
        )

    # Prevent sending if already friends
    friends = await storage.get_friends(sender_id)
    if any(friend.id == receiver_id for friend in friends):
        raise HTTPException(409, detail="Already friends with this user.")

    friendship = await storage.send_friend_request(sender_id, receiver_id)

    return {
        "message": "Friend request sent.",
        "request": friendship,
    }


@router.post(
    "/accept", response_model=AcceptFriendRequestResponseModel, status_code=200
)
async def accept_friend_request(
    data: AcceptFriendRequestModel, storage: IStorage = Depends(get_storage)
):
    """
    Accept a pending friend request.

    Only the receiver of the request can accept it: `user_id` must be the
    user the request was sent to and `friend_id` the user who sent it.

    **Errors**
    - 404: No pending request from `friend_id` to `user_id`.
    """
    accepted = await storage.accept_friend_request(data.user_id, data.friend_id)
    if not accepted:
        raise HTTPException(status_code=404, detail="Friend request not found")

    return {"friendship_accept": True}


@router.get("/requests/{user_id}", response_model=FriendRequestsResponseModel, status_code=200)
async def get_friend_requests(user_id: str, storage: IStorage = Depends(get_storage)):
    """Pending requests addressed to `user_id`, each with the requesting user."""
    return await storage.get_friend_requests(user_id)


@router.delete(
    "/{user_id}/{friend_id}",
    response_model=RemoveFriendResponseModel,
    status_code=200,
)
async def remove_friend(
    user_id: str, friend_id: str, storage: IStorage = Depends(get_storage)
):
    """
    Remove the relationship between two users.

    Deletes friendship rows in both directions whatever their status, so this
    also cancels or declines a pending request.

    **Errors**
    - 404: No friendship exists between the users.
    """
    removed = await storage.remove_friend(user_id, friend_id)
    if not removed:
        raise HTTPException(status_code=404, detail="Friendship not found")

    return {"friend_removed": True}


@router.get("/{user_id}", response_model=FriendsResponseModel, status_code=200)
async def get_friends(user_id: str, storage: IStorage = Depends(get_storage)):
    friends = await storage.get_friends(user_id)
    return [friend.profile() for friend in friends]
