# postboard/config.py
import os
from typing import List

from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Settings(BaseModel):
    """
    Process-wide configuration. Built once at startup (see `from_env`) and
    handed to the app factory, which passes it on to whatever needs it.
    """

    database_url: str = "sqlite+aiosqlite:///./postboard.db"
    port: int = 5000
    allowed_origins: List[str] = Field(default_factory=lambda: ["*"])
    api_prefix: str = ""
    max_request_body_bytes: int = 50 * 1024 * 1024
    max_image_length: int = 7_000_000
    log_level: str = "INFO"
    sql_echo: bool = False

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        # unknown names fall back to INFO
        value = value.upper()
        return value if value in LOG_LEVELS else "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("ALLOWED_ORIGINS", "*")
        return cls(
            database_url=normalize_database_url(os.getenv("DATABASE_URL") or cls.model_fields["database_url"].default),
            port=int(os.getenv("PORT", "5000")),
            allowed_origins=[o.strip() for o in origins.split(",") if o.strip()],
            api_prefix=os.getenv("API_PREFIX", "").rstrip("/"),
            max_request_body_bytes=int(os.getenv("MAX_REQUEST_BODY_BYTES", str(50 * 1024 * 1024))),
            max_image_length=int(os.getenv("MAX_IMAGE_LENGTH", "7000000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            sql_echo=_env_bool("SQL_ECHO"),
        )


def normalize_database_url(url: str) -> str:
    # hosting providers hand out postgres:// urls; the async engine needs a driver
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url
