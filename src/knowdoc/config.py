"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `KNOWDOC_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """knowdoc settings.

    All fields are environment-configurable. Prefix is `KNOWDOC_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="KNOWDOC_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    app_env: Literal["dev", "prod"] = Field(default="dev")
    log_level: str = Field(default="INFO")

    # Projection
    # 模板表格中作为记录标题的列名
    title_field: str = Field(default="名称")
    title_placeholder: str = Field(default="知识数据")
    preview_placeholder: str = Field(default="数据预览")

    # Source
    source_sheet: str = Field(default="知识源")
    source_path: Path | None = Field(default=None)

    # Identifiers
    slug_fallback_prefix: str = Field(default="heading", min_length=1)
    slug_fallback_length: int = Field(default=6, ge=4, le=32)
    dedupe_identifiers: bool = Field(default=False)

    # Navigation
    nav_header_offset_px: int = Field(default=64, ge=0)
    nav_highlight_ms: int = Field(default=1000, ge=0, le=60000)
    nav_highlight_class: str = Field(default="heading-highlight")
    nav_smooth_scroll: bool = Field(default=True)

    def allocation_options(self) -> dict[str, object]:
        """Keyword arguments for identifier allocation."""

        return {
            "prefix": self.slug_fallback_prefix,
            "token_length": self.slug_fallback_length,
            "dedupe": self.dedupe_identifiers,
        }


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("KNOWDOC_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
