from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel

from socialhub.users.models import UserProfile


MessageType = Literal["text", "image", "file"]


class Conversation(BaseModel):
    id: str
    participant_ids: List[str]
    last_message_id: Optional[str] = None
    updated_at: datetime
    created_at: datetime


class InsertMessage(BaseModel):
    conversation_id: str
    sender_id: str
    content: str
    type: MessageType = "text"


class Message(InsertMessage):
    id: str
    read_by: List[str] = []
    created_at: datetime


class MessageWithSender(Message):
    sender: UserProfile


class ConversationWithParticipants(Conversation):
    participants: List[UserProfile]
    last_message: Optional[MessageWithSender] = None
    # Always 0: unread tracking per participant is not implemented.
    unread_count: int = 0
