from typing import List

from fastapi import APIRouter, HTTPException, Depends

from socialhub.core.dependencies import get_storage
from socialhub.core.storage import IStorage

from .models import (
    Conversation,
    ConversationWithParticipants,
    InsertMessage,
    Message,
    MessageWithSender,
)
from .schemas import (
    CreateConversationModel,
    SendMessageModel,
    MarkReadModel,
    MarkReadResponseModel,
)


router = APIRouter()


@router.post("/conversations", response_model=Conversation, status_code=201)
async def create_conversation(
    data: CreateConversationModel, storage: IStorage = Depends(get_storage)
):
    """
    Start a conversation between the given users.

    The participant list is fixed once the conversation exists.

    **Input**
    - `participant_ids`: Two or more distinct user IDs.

    **Errors**
    - 400: Fewer than two participants, or duplicates
    """
    return await storage.create_conversation(data.participant_ids)


@router.get(
    "/conversations/user/{user_id}",
    response_model=List[ConversationWithParticipants],
    status_code=200,
)
async def get_user_conversations(user_id: str, storage: IStorage = Depends(get_storage)):
    """
    Conversations `user_id` takes part in, most recently active first.

    `unread_count` is currently always 0.
    """
    return await storage.get_user_conversations(user_id)


@router.get(
    "/conversations/{conversation_id}",
    response_model=ConversationWithParticipants,
    status_code=200,
)
async def get_conversation(conversation_id: str, storage: IStorage = Depends(get_storage)):
    conversation = await storage.get_conversation(conversation_id)
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return conversation


@router.get(
    "/conversations/{conversation_id}/messages",
    response_model=List[MessageWithSender],
    status_code=200,
)
async def get_conversation_messages(
    conversation_id: str, storage: IStorage = Depends(get_storage)
):
    return await storage.get_conversation_messages(conversation_id)


@router.post(
    "/conversations/{conversation_id}/read",
    response_model=MarkReadResponseModel,
    status_code=200,
)
async def mark_messages_as_read(
    conversation_id: str, data: MarkReadModel, storage: IStorage = Depends(get_storage)
):
    marked = await storage.mark_messages_as_read(conversation_id, data.user_id)
    if not marked:
        raise HTTPException(status_code=400, detail="Failed to mark as read")
    return {"message": "Messages marked as read"}


@router.post("/messages", response_model=Message, status_code=201)
async def send_message(data: SendMessageModel, storage: IStorage = Depends(get_storage)):
    """
    Send a message to an existing conversation.

    Messages are always sent to conversations, never directly to users. The
    conversation's `last_message_id` and `updated_at` move to this message.

    **Input**
    - `conversation_id`: ID of the conversation
    - `sender_id`: ID of the sending participant
    - `content`: Message text
    - `type`: `text`, `image` or `file` (default `text`)

    **Errors**
    - 400: Invalid body
    - 403: Sender is not a participant of the conversation
    - 404: Conversation not found
    """
    conversation = await storage.get_conversation(data.conversation_id)
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")

    if data.sender_id not in conversation.participant_ids:
        raise HTTPException(
            status_code=403, detail="Sender is not a participant of this conversation."
        )

    return await storage.send_message(InsertMessage(**data.model_dump()))
