from pydantic import BaseModel, Field, field_validator
from typing import List

from .models import InsertMessage


# Create conversation
class CreateConversationModel(BaseModel):
    participant_ids: List[str] = Field(min_length=2)

    @field_validator("participant_ids")
    @classmethod
    def validate_participants(cls, participant_ids: List[str]) -> List[str]:
        if len(set(participant_ids)) != len(participant_ids):
            raise ValueError("Participants must be distinct.")
        return participant_ids


# Send Messages
class SendMessageModel(InsertMessage):
    @field_validator("content")
    @classmethod
    def validate_content(cls, content: str) -> str:
        if not content.strip():
            raise ValueError("Message must not be empty.")
        return content


# Mark as read
class MarkReadModel(BaseModel):
    user_id: str


class MarkReadResponseModel(BaseModel):
    message: str
