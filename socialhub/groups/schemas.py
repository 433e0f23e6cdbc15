from pydantic import BaseModel, field_validator

from .models import InsertGroup


class CreateGroupModel(InsertGroup):
    @field_validator("name")
    @classmethod
    def validate_name(cls, name: str) -> str:
        name = name.strip()
        if not name:
            raise ValueError("Group name must not be empty.")
        return name


class GroupMembershipModel(BaseModel):
    user_id: str


class GroupMessageResponseModel(BaseModel):
    message: str
