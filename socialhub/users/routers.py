from typing import List

from fastapi import APIRouter, HTTPException, Depends

from socialhub.core.dependencies import get_storage
from socialhub.core.storage import IStorage
from socialhub.groups.models import Group
from .models import UserProfile, UserWithStats
from .schemas import UpdateUserModel


router = APIRouter()


@router.get("/search/{query}", response_model=List[UserProfile], status_code=200)
async def search_users(query: str, storage: IStorage = Depends(get_storage)):
    """
    Search users by display name or username.

    Matching is a case-insensitive substring match. An empty list is returned
    when nothing matches.
    """
    users = await storage.search_users(query)
    return [user.profile() for user in users]


@router.get("/{user_id}", response_model=UserProfile, status_code=200)
async def get_user(user_id: str, storage: IStorage = Depends(get_storage)):
    user = await storage.get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user.profile()


@router.put("/{user_id}", response_model=UserProfile, status_code=200)
async def update_user(
    user_id: str, data: UpdateUserModel, storage: IStorage = Depends(get_storage)
):
    """
    Update profile fields of a user.

    Only fields present in the body are changed. Unknown fields, including
    `password`, are ignored.

    **Errors**
    - 400: Invalid field types
    - 404: User not found
    """
    user = await storage.update_user(user_id, data.model_dump(exclude_unset=True))
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user.profile()


@router.get(
    "/{user_id}/suggested-friends", response_model=List[UserWithStats], status_code=200
)
async def get_suggested_friends(user_id: str, storage: IStorage = Depends(get_storage)):
    return await storage.get_suggested_friends(user_id)


@router.get("/{user_id}/groups", response_model=List[Group], status_code=200)
async def get_user_groups(user_id: str, storage: IStorage = Depends(get_storage)):
    return await storage.get_user_groups(user_id)
