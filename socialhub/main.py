import logging
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from dotenv import load_dotenv

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .auth import routers as auth_router
from .users import routers as users_router
from .posts import routers as posts_router
from .friendship import routers as friend_router
from .groups import routers as groups_router
from .chat import routers as chat_router
from .notifications import routers as notifications_router

from .core.config import Settings
from .core.errors import unhandled_exception_handler, validation_exception_handler
from .core.middleware import logging_middleware
from .core.storage import IStorage, MemStorage, seed_demo_data
from .core.store import EntityStore
from .core.suggestions import RandomStatsSuggestionPolicy
from .utils.logging_config import setup_logging

load_dotenv()
logger = logging.getLogger(__name__)


def build_storage(settings: Settings) -> IStorage:
    store = EntityStore()
    if settings.seed_demo_data:
        seed_demo_data(store)

    return MemStorage(
        store,
        suggestion_policy=RandomStatsSuggestionPolicy(limit=settings.suggestion_limit),
        feed_limit=settings.feed_default_limit,
    )


def create_app(settings: Optional[Settings] = None, storage: Optional[IStorage] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(title="SocialHub API")
    app.state.settings = settings
    app.state.storage = storage if storage is not None else build_storage(settings)

    app.include_router(auth_router.router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(users_router.router, prefix="/api/users", tags=["Users"])
    app.include_router(posts_router.router, prefix="/api/posts", tags=["Posts"])
    app.include_router(posts_router.comments_router, prefix="/api/comments", tags=["Comments"])
    app.include_router(posts_router.likes_router, prefix="/api/likes", tags=["Likes"])
    app.include_router(friend_router.router, prefix="/api/friends", tags=["Friendship"])
    app.include_router(groups_router.router, prefix="/api/groups", tags=["Groups"])
    app.include_router(chat_router.router, prefix="/api", tags=["Chat"])
    app.include_router(
        notifications_router.router, prefix="/api/notifications", tags=["Notifications"]
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.middleware("http")(logging_middleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    def healthz():
        return {"ok": True, "time": datetime.now(timezone.utc).isoformat()}

    logger.info(f"app_created seed_demo_data={settings.seed_demo_data}")
    return app


app = create_app()


def run():
    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)
