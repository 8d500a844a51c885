"""
Runtime configuration helpers for the MemeStack client.

Loads the API base URL and client tuning knobs from the environment, with
defaults from a .env file located in the working directory.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path.cwd() / ".env"

# Load .env defaults without overriding variables provided by the shell
load_dotenv(dotenv_path=ENV_PATH, override=False)


class Settings(BaseSettings):
    api_url: str = Field(default="http://localhost:5000/api", alias="MEMESTACK_API_URL")
    request_timeout: float = Field(default=10.0, alias="MEMESTACK_REQUEST_TIMEOUT")
    page_size: int = Field(default=12, alias="MEMESTACK_PAGE_SIZE")
    session_path: Path = Field(
        default=Path.home() / ".memestack" / "session.json",
        alias="MEMESTACK_SESSION_PATH",
    )
    success_close_delay: float = Field(default=1.5, alias="MEMESTACK_SUCCESS_CLOSE_DELAY")
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, alias="MEMESTACK_MAX_UPLOAD_BYTES")

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
