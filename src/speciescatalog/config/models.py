"""Configuration models for the species catalog.

This module contains all configuration-related Pydantic models used throughout the application.
"""

import re

from pydantic import BaseModel, Field, field_validator


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool | None = None  # None = auto-detect based on environment
    include_caller: bool = False  # Include file:line info (useful for debugging)
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "species-catalog"})


class ChatConfig(BaseModel):
    """Completion service settings for the species chat assistant.

    The credential itself is never stored here; it is read from the
    OPENAI_API_KEY environment variable when the client is created.
    """

    model: str = "gpt-4o-mini"
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=500, gt=0)


class ChartConfig(BaseModel):
    """Animal speed chart settings."""

    per_diet_limit: int = Field(default=5, gt=0)  # Fastest animals kept per diet
    headroom: float = Field(default=0.1, ge=0.0)  # Fraction added above the max speed


class CatalogConfig(BaseModel):
    """Configuration settings for the species catalog application."""

    config_version: str = "1.0.0"

    site_name: str = "Species Catalog"

    # Header set by the upstream identity proxy carrying the viewer's profile id
    viewer_header: str = "X-Viewer-Id"

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    chat: ChatConfig = Field(default_factory=ChatConfig)
    chart: ChartConfig = Field(default_factory=ChartConfig)

    @field_validator("viewer_header")
    @classmethod
    def validate_viewer_header(cls, v: str) -> str:
        """Validate the viewer header is a legal HTTP header name."""
        if not re.match(r"^[A-Za-z0-9-]+$", v):
            raise ValueError(
                f"Invalid viewer header '{v}'. Must contain only letters, numbers, and hyphens."
            )
        return v
