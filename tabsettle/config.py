"""
Application configuration loaded from environment variables or a .env file.
"""
from typing import List, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=True,
    )

    APP_NAME: str = "tabsettle"
    DEBUG: bool = False

    HOST: str = "127.0.0.1"
    PORT: int = 5000

    # Comma-separated origins allowed to call /api/*
    CORS_ORIGINS: Union[List[str], str] = "*"

    LOG_LEVEL: str = "INFO"

    # Keep transfer dicts in from/to/amount order in responses
    JSON_SORT_KEYS: bool = False

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str) and v.strip() != "*":
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper()


settings = Settings()
