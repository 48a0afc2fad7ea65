"""Configuration settings for branchlog."""

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_config_dir() -> Path:
    """Get platform-specific default config directory."""
    app_name = "branchlog"

    if sys.platform == "win32":
        base = os.environ.get("APPDATA")
        if not base:
            base = Path.home() / "AppData" / "Roaming"
        return Path(base) / app_name
    elif sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / app_name
    else:
        xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config_home:
            return Path(xdg_config_home) / app_name
        return Path.home() / ".config" / app_name


class Settings(BaseSettings):
    """Application settings with support for .env files.

    Values come from BRANCHLOG_* environment variables, then the global
    config directory .env, then a local .env. Command-line flags override
    all of them.
    """

    model_config = SettingsConfigDict(
        env_file=[
            get_default_config_dir() / ".env",
            ".env",
        ],
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="BRANCHLOG_",
        extra="ignore",
    )

    default_count: int = Field(default=12, ge=1, description="Commits shown when no count is given")

    color: Literal["auto", "always", "never"] = Field(
        default="auto", description="When to emit ANSI colors: auto (terminals only), always or never"
    )
    hide_merged: bool = Field(default=False, description="Skip the MERGED section for diverged branches")
    show_graph: bool = Field(default=False, description="Print the graph connector column before each row")

    verify_signatures: bool = Field(
        default=True, description="Ask git for signature status; disable when gpg is slow or missing"
    )
    date_format: Literal["short", "iso-strict", "unix"] = Field(
        default="short", description="Value passed to git log --date, limited to formats without spaces"
    )
    column_separator: str = " | "

    git_timeout: float = Field(default=10.0, description="Seconds before a git query is abandoned")

    debug_mode: bool = False


settings = Settings()
