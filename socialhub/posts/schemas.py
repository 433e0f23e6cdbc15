from pydantic import BaseModel, field_validator

from .models import InsertComment, InsertPost, LikeTargetType


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("Content must not be empty.")
    return value


# Create post
class CreatePostModel(InsertPost):
    @field_validator("content")
    @classmethod
    def validate_content(cls, content: str) -> str:
        return _not_blank(content)


# Create comment
class CreateCommentModel(InsertComment):
    @field_validator("content")
    @classmethod
    def validate_content(cls, content: str) -> str:
        return _not_blank(content)


# Likes
class ToggleLikeModel(BaseModel):
    user_id: str
    target_id: str
    target_type: LikeTargetType


class ToggleLikeResponseModel(BaseModel):
    liked: bool


class IsLikedResponseModel(BaseModel):
    is_liked: bool


class MessageResponseModel(BaseModel):
    message: str
