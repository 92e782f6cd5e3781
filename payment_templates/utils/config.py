"""Configuration management using pydantic-settings"""

import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Extra JSON templates, overriding built-ins with the same id
    templates_dir: Optional[str] = Field(default=None, description="Directory with *.json templates")
    log_level: str = Field(default="INFO", description="Logging level")

    # Form sessions (API)
    session_ttl_minutes: int = Field(default=30, description="Idle minutes before a form session expires")
    max_sessions: int = Field(default=1000, description="Max form sessions kept in memory")
    session_evict_interval: int = Field(default=300, description="Seconds between expired-session sweeps")

    api_title: str = Field(default="Payment Request Templates API", description="OpenAPI title")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> Settings:
    """Get application settings"""
    return Settings()


def setup_logging(level: Optional[str] = None):
    """Configure root logging once, from settings unless ``level`` is given"""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
