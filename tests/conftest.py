import asyncio
import random

import pytest
from fastapi.testclient import TestClient

from socialhub.core.config import Settings
from socialhub.core.storage import MemStorage
from socialhub.core.store import EntityStore
from socialhub.core.suggestions import RandomStatsSuggestionPolicy
from socialhub.main import create_app
from socialhub.users.models import InsertUser


def run(coro):
    return asyncio.run(coro)


def make_user(storage, username, **overrides):
    fields = {
        "username": username,
        "email": f"{username}@example.com",
        "password": "secret123",
        "display_name": username.title(),
    }
    fields.update(overrides)
    return run(storage.create_user(InsertUser(**fields)))


@pytest.fixture
def store():
    return EntityStore()


@pytest.fixture
def storage(store):
    policy = RandomStatsSuggestionPolicy(limit=5, rng=random.Random(7))
    return MemStorage(store, suggestion_policy=policy)


@pytest.fixture
def settings():
    return Settings(seed_demo_data=False, log_level="WARNING")


@pytest.fixture
def app(settings, storage):
    return create_app(settings, storage=storage)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def register(client):
    def _register(username, password="secret123", **extra):
        body = {
            "email": f"{username}@example.com",
            "username": username,
            "password": password,
            "display_name": username.title(),
        }
        body.update(extra)
        response = client.post("/api/auth/register", json=body)
        assert response.status_code == 201, response.text
        return response.json()["user"]

    return _register
