import re
from pydantic import BaseModel, SecretStr, field_validator
from typing import Optional

from socialhub.users.models import UserProfile


"""
auth/register
"""


class UserRegistrationModel(BaseModel):
    email: str
    username: str
    password: SecretStr
    display_name: str
    bio: Optional[str] = None
    avatar: Optional[str] = None
    cover_photo: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, email: str) -> str:
        email = email.strip()
        if not re.match(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", email):
            raise ValueError("Email address is not valid.")
        return email.lower()

    @field_validator("username")
    @classmethod
    def validate_username(cls, username: str) -> str:
        # Length check (min 3, max 30)
        if not (3 <= len(username) <= 30):
            raise ValueError(
                f"Username must be between 3 and 30 characters long (got {len(username)})."
            )

        # Allow only characters (letters, numbers, underscores, and dots)
        if not re.match(r"^[a-zA-Z0-9_.]+$", username):
            raise ValueError(
                "Username must only contain letters, numbers, underscores, and dots."
            )

        return username.lower()

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, display_name: str) -> str:
        display_name = display_name.strip()
        if not display_name:
            raise ValueError("Display name must not be empty.")
        return display_name

    @field_validator("password")
    @classmethod
    def validate_password(cls, password: SecretStr) -> SecretStr:
        password_str = password.get_secret_value()

        # Minimum length of 8 characters (no maximum)
        if len(password_str) < 8:
            raise ValueError("Password must be at least 8 characters long.")

        if not re.search(r"[A-Za-z]", password_str) or not re.search(r"[0-9]", password_str):
            raise ValueError("Password must contain at least one letter and one number.")

        return password


"""
auth/login
"""


class UserLoginModel(BaseModel):
    email: str
    password: SecretStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, email: str) -> str:
        return email.strip().lower()


"""
shared response
"""


class AuthResponseModel(BaseModel):
    user: UserProfile
