from typing import List

from fastapi import APIRouter, HTTPException, Depends

from socialhub.core.dependencies import get_storage
from socialhub.core.storage import IStorage
from socialhub.posts.models import PostWithAuthor
from .models import Group, InsertGroup
from .schemas import CreateGroupModel, GroupMembershipModel, GroupMessageResponseModel


router = APIRouter()


@router.post("", response_model=Group, status_code=201)
async def create_group(data: CreateGroupModel, storage: IStorage = Depends(get_storage)):
    """
    Create a group. The owner becomes its first member with the `admin` role,
    so `members_count` starts at 1.
    """
    return await storage.create_group(InsertGroup(**data.model_dump()))


@router.get("/{group_id}", response_model=Group, status_code=200)
async def get_group(group_id: str, storage: IStorage = Depends(get_storage)):
    group = await storage.get_group(group_id)
    if not group:
        raise HTTPException(status_code=404, detail="Group not found")
    return group


@router.post("/{group_id}/join", response_model=GroupMessageResponseModel, status_code=200)
async def join_group(
    group_id: str, data: GroupMembershipModel, storage: IStorage = Depends(get_storage)
):
    """
    Add `user_id` to the group as a `member`.

    **Errors**
    - 400: Invalid body, or the join was refused
    - 404: Group not found
    """
    if not await storage.get_group(group_id):
        raise HTTPException(status_code=404, detail="Group not found")

    joined = await storage.join_group(data.user_id, group_id)
    if not joined:
        raise HTTPException(status_code=400, detail="Failed to join group")

    return {"message": "Joined group successfully"}


@router.post("/{group_id}/leave", response_model=GroupMessageResponseModel, status_code=200)
async def leave_group(
    group_id: str, data: GroupMembershipModel, storage: IStorage = Depends(get_storage)
):
    """
    Remove `user_id` from the group.

    **Errors**
    - 400: The user is not a member of the group
    """
    left = await storage.leave_group(data.user_id, group_id)
    if not left:
        raise HTTPException(status_code=400, detail="Failed to leave group")

    return {"message": "Left group successfully"}


@router.get("/{group_id}/posts", response_model=List[PostWithAuthor], status_code=200)
async def get_group_posts(group_id: str, storage: IStorage = Depends(get_storage)):
    return await storage.get_group_posts(group_id)
