from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
        description="Root log level used by setup_logging().",
    )

    # Validation messages
    message_language: str = Field(
        default="en-US",
        validation_alias=AliasChoices("MESSAGE_LANGUAGE", "message_language"),
        description="Language used to resolve validation message templates.",
    )
    message_domain: str = Field(
        default="validation",
        validation_alias=AliasChoices("MESSAGE_DOMAIN", "message_domain"),
        description="Catalog domain that holds the validator message templates.",
    )
    messages_path: str | None = Field(
        default=None,
        validation_alias=AliasChoices("MESSAGES_PATH", "messages_path"),
        description=(
            "Optional JSON file with translations: {language: {domain: {template: text}}}. "
            "Templates without a translation are used as-is."
        ),
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
