"""
Placement Configuration

Defaults that the compositor cannot report, loaded from environment
variables:

- SWAY_ATTACH_SHADOW: window shadow insets as 't,l,r,b' (or one value)
- SWAY_ATTACH_FLIP: default flip hints (none, x, y, x,y, both)
- SWAY_ATTACH_CONNECT_ATTEMPTS: IPC connection attempts before giving up
- LOG_LEVEL: logging level name
"""

import logging
import os

from pydantic import BaseModel, Field, field_validator

from .models.geometry import FlipHints, ShadowInsets

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class PlacementConfig(BaseModel):
    """Environment-driven placement defaults."""

    shadow: ShadowInsets = Field(
        default_factory=ShadowInsets, description="Shadow insets for every window"
    )
    flip_hints: FlipHints = Field(
        default_factory=FlipHints, description="Flip hints when the caller sets none"
    )
    connect_attempts: int = Field(
        default=10, ge=1, le=50, description="IPC connection attempts"
    )
    log_level: str = Field(default="WARNING", description="Logging level without --verbose/--debug")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the level is one logging understands."""
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}': must be one of {', '.join(_LOG_LEVELS)}"
            )
        return level

    @classmethod
    def from_environment(cls) -> "PlacementConfig":
        """Load placement configuration from environment variables."""
        return cls(
            shadow=ShadowInsets.parse(os.getenv("SWAY_ATTACH_SHADOW", "0")),
            flip_hints=FlipHints.parse(os.getenv("SWAY_ATTACH_FLIP", "none")),
            connect_attempts=int(os.getenv("SWAY_ATTACH_CONNECT_ATTEMPTS", "10")),
            log_level=os.getenv("LOG_LEVEL", "WARNING"),
        )

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)
