from typing import List

from pydantic import BaseModel

from socialhub.utils.env_helper import env_bool, env_int, env_list, env_none_or_str


DEFAULT_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:8080",
]


class Settings(BaseModel):
    cors_origins: List[str] = DEFAULT_ORIGINS
    seed_demo_data: bool = True
    feed_default_limit: int = 10
    suggestion_limit: int = 5
    log_level: str = "INFO"
    log_format: str = "default"
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            cors_origins=env_list("CORS_ORIGINS", DEFAULT_ORIGINS),
            seed_demo_data=env_bool("SEED_DEMO_DATA", default=True),
            feed_default_limit=env_int("FEED_DEFAULT_LIMIT", 10),
            suggestion_limit=env_int("SUGGESTION_LIMIT", 5),
            log_level=env_none_or_str("LOG_LEVEL", "INFO"),
            log_format=env_none_or_str("LOG_FORMAT", "default"),
            host=env_none_or_str("HOST", "127.0.0.1"),
            port=env_int("PORT", 8000),
        )
