from fastapi import Request

from .config import Settings
from .storage import IStorage


def get_storage(request: Request) -> IStorage:
    return request.app.state.storage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
