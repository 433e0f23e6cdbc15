import logging
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Depends

from socialhub.core.dependencies import get_storage
from socialhub.core.storage import IStorage
from socialhub.users.models import InsertUser
from socialhub.utils.passwords import verify_password
from .schemas import (
    UserRegistrationModel,
    UserLoginModel,
    AuthResponseModel,
)


logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register", response_model=AuthResponseModel, status_code=201)
async def register_user(
    data: UserRegistrationModel, storage: IStorage = Depends(get_storage)
):
    """
    Register a new user.

    Creates a user record with a hashed password and returns its public
    profile. The password is never echoed back.

    **Input Fields**
    - **email**: A valid email address. Must not already be registered.
    - **username**: 3–30 characters, containing only letters, numbers, underscores, or dots. Must not already be taken.
    - **password**: Minimum 8 characters, at least one letter and one number.
    - **display_name**: Name shown on the profile.
    - **bio**, **avatar**, **cover_photo**, **location**, **website**: optional.

    **Returns**
    - `user`: The new user's public profile.

    **Errors**
    - 400: Invalid input, or the email or username is already registered
    """
    existing_user = await storage.get_user_by_email(
        data.email
    ) or await storage.get_user_by_username(data.username)
    if existing_user:
        raise HTTPException(status_code=400, detail="User already exists")

    fields = data.model_dump(exclude={"password"})
    user = await storage.create_user(
        InsertUser(**fields, password=data.password.get_secret_value())
    )

    logger.info(f"user_register_success email={data.email}, username={data.username}")

    return {"user": user.profile()}


@router.post("/login", response_model=AuthResponseModel, status_code=200)
async def login_user(user_data: UserLoginModel, storage: IStorage = Depends(get_storage)):
    """
    Authenticate a user with email and password.

    On success the user is marked online and `last_seen` is refreshed.

    **Returns**
    - `user`: The authenticated user's public profile.

    **Errors**
    - 401: Invalid email or password
    """
    user = await storage.get_user_by_email(user_data.email)

    if not user or not verify_password(
        user_data.password.get_secret_value(), user.password_hash
    ):
        logger.info(f"user_login_failed email={user_data.email}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    user = await storage.update_user(
        user.id, {"is_online": True, "last_seen": datetime.now(timezone.utc)}
    )

    logger.info(f"user_login_success email={user_data.email}")

    return {"user": user.profile()}
