from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HTTPFAIL_",
        case_sensitive=False,
    )

    # Body of fail responses: plain text or a JSON envelope.
    response_format: Literal["text", "json"] = "text"

    # 5xx fails are always logged; 4xx only when this is on.
    log_client_errors: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
