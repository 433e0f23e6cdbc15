from typing import List

from fastapi import APIRouter, HTTPException, Depends

from socialhub.core.dependencies import get_storage
from socialhub.core.storage import IStorage
from .models import InsertNotification, Notification
from .schemas import UnreadCountResponseModel, NotificationMessageResponseModel


router = APIRouter()


@router.post("", response_model=Notification, status_code=201)
async def create_notification(
    data: InsertNotification, storage: IStorage = Depends(get_storage)
):
    return await storage.create_notification(data)


@router.get("/{user_id}", response_model=List[Notification], status_code=200)
async def get_user_notifications(user_id: str, storage: IStorage = Depends(get_storage)):
    """Notifications for `user_id`, newest first."""
    return await storage.get_user_notifications(user_id)


@router.get("/{user_id}/unread-count", response_model=UnreadCountResponseModel, status_code=200)
async def get_unread_count(user_id: str, storage: IStorage = Depends(get_storage)):
    return {"count": await storage.get_unread_notifications_count(user_id)}


@router.post(
    "/{notification_id}/read",
    response_model=NotificationMessageResponseModel,
    status_code=200,
)
async def mark_notification_as_read(
    notification_id: str, storage: IStorage = Depends(get_storage)
):
    marked = await storage.mark_notification_as_read(notification_id)
    if not marked:
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"message": "Notification marked as read"}
