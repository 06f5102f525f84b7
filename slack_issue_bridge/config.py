"""Pydantic-based configuration helpers for the Slack issue bridge."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Iterable, List, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator


DEFAULT_GITHUB_API_URL = "https://api.github.com"


class AppSettings(BaseModel):
    """Settings required to initialise the Slack app and the GitHub client."""

    bot_token: str = Field(..., alias="SLACK_BOT_TOKEN")
    signing_secret: str = Field(..., alias="SLACK_SIGNING_SECRET")
    github_token: str = Field(..., alias="GITHUB_BOT_TOKEN")
    github_org: str = Field(..., alias="GITHUB_ORG")
    github_default_repo: str | None = Field(None, alias="GITHUB_DEFAULT_REPO")
    github_api_url: str = Field(DEFAULT_GITHUB_API_URL, alias="GITHUB_API_URL")
    github_timeout: float = Field(10.0, alias="GITHUB_TIMEOUT_SECONDS")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_format: Literal["json", "console"] = Field("json", alias="LOG_FORMAT")
    port: int = Field(3000, alias="PORT")

    @field_validator("github_org")
    @classmethod
    def _require_org(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("GitHub organisation must not be blank")
        return value

    @field_validator("github_default_repo", mode="before")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @field_validator("github_api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("github_timeout")
    @classmethod
    def _ensure_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("GitHub timeout must be greater than zero")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


def _format_missing(fields: Iterable[str]) -> str:
    """Return a human-friendly comma-separated list of missing env vars."""

    unique: List[str] = []
    for field in fields:
        if field not in unique:
            unique.append(field)
    return ", ".join(unique)


@lru_cache()
def get_settings() -> AppSettings:
    """Fetch and cache settings from environment variables."""

    try:
        return AppSettings.model_validate(os.environ)
    except ValidationError as exc:
        missing = [str(error["loc"][0]) for error in exc.errors() if error["type"] == "missing"]
        if not missing:
            raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
        message = (
            "Missing required environment variables: "
            f"{_format_missing(missing)}"
        )
        raise RuntimeError(message) from exc
