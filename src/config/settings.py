"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use MATCHERTEXT_ prefix (e.g., MATCHERTEXT_OUTPUT_FORMAT=xml).

Settings can also be loaded from a .env file in the working directory.
"""

from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use MATCHERTEXT_ prefix. List values are JSON.

    Examples:
        MATCHERTEXT_OUTPUT_FORMAT=minml
        MATCHERTEXT_TRANSFORMERS='["entity"]'
        MATCHERTEXT_DEBUG_MODE=true
    """

    model_config = SettingsConfigDict(
        env_prefix="MATCHERTEXT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Output configuration
    output_format: Literal["html", "xml", "minml"] = Field(
        default="html",
        description="Format the CLI writes when --to is not given",
    )

    highlight_style: str = Field(
        default="default",
        description="Pygments style used by --highlight",
    )

    # Parser configuration
    transformers: List[str] = Field(
        default_factory=lambda: ["entity", "quote"],
        description="Registry names of the transformers applied while parsing, in order",
    )

    # Diagnostics
    debug_mode: bool = Field(
        default=False,
        description="Print a traceback when the CLI fails",
    )


# Singleton instance - import this in your code
appsettings = AppSettings()
