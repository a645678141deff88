"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "info"

    # Font retargeting
    source_font: str = "Arial"
    target_font: str = "Cambria"

    # File handling
    file_extension: str = ".svg"
    backup_suffix: str = ".backup"

    model_config = {
        "env_prefix": "SVGCLEANER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
