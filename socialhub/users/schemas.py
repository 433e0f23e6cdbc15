from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional


class UpdateUserModel(BaseModel):
    """Profile fields a user may change. Password changes go elsewhere."""

    model_config = ConfigDict(extra="ignore")

    display_name: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    cover_photo: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    is_online: Optional[bool] = None

    @field_validator("display_name", "is_online")
    @classmethod
    def reject_explicit_null(cls, value):
        # Only runs for values present in the body; these two cannot be cleared.
        if value is None:
            raise ValueError("Field cannot be null.")
        return value

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, display_name: str) -> str:
        display_name = display_name.strip()
        if not display_name:
            raise ValueError("Display name must not be empty.")
        return display_name
