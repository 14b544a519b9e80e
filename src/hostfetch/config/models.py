"""Pydantic models for hostfetch configuration."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator
from rich.errors import StyleSyntaxError
from rich.style import Style

from hostfetch.snapshot import attribute_names


class ColorConfig(BaseModel):
    """Rich style strings for each part of the display."""

    logo: str = "blue"
    header: str = "bold green"
    separator: str = "blue"
    label: str = "bold yellow"

    @field_validator("logo", "header", "separator", "label")
    @classmethod
    def _valid_style(cls, value: str) -> str:
        try:
            Style.parse(value)
        except StyleSyntaxError as e:
            raise ValueError(f"invalid style '{value}': {e}") from e
        return value


class HostfetchConfig(BaseModel):
    """Top-level hostfetch configuration."""

    logo: Literal["auto", "windows", "tux", "apple", "generic", "none"] = "auto"
    logo_width: int = Field(default=40, ge=0)
    command_timeout: float | None = Field(default=10.0, gt=0)  # None = wait forever
    hidden_fields: list[str] = Field(default_factory=list)
    colors: ColorConfig = Field(default_factory=ColorConfig)

    @field_validator("hidden_fields")
    @classmethod
    def _known_fields(cls, value: list[str]) -> list[str]:
        # The user@host header is always shown
        known = set(attribute_names()) - {"username", "hostname"}
        unknown = [name for name in value if name not in known]
        if unknown:
            raise ValueError(f"unknown fields: {', '.join(unknown)}")
        return value
