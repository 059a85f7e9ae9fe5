"""Environment-driven settings for the planner backend.

Values are read from ``PPF_``-prefixed environment variables or a local
``.env`` file, e.g. ``PPF_LOG_LEVEL=DEBUG``.
"""

from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PPF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    cors_origins: List[str] = Field(
        default=[
            "http://localhost:4200",
            "http://127.0.0.1:4200",
            "http://localhost:5173",
        ],
        description="Origins allowed to call /api/*",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root logging level",
    )
    debug: bool = Field(default=False, description="Run Flask in debug mode")


settings = Settings()
