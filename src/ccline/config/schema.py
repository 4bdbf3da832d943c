"""Configuration schema using Pydantic for validation."""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

POWERLINE_ARROW = "\ue0b0"


class SegmentId(str, Enum):
    """Identifiers of the segments a statusline can contain."""

    MODEL = "model"
    DIRECTORY = "directory"
    GIT = "git"
    USAGE = "usage"
    COST = "cost"
    SESSION = "session"
    OUTPUT_STYLE = "output_style"
    UPDATE = "update"


class StyleMode(str, Enum):
    """Icon set used when rendering."""

    PLAIN = "plain"
    NERD_FONT = "nerd_font"
    POWERLINE = "powerline"


class Color16(BaseModel):
    """4-bit palette color (0-7 standard, 8-15 bright)."""

    c16: int = Field(ge=0, le=15)

    model_config = {"extra": "forbid", "frozen": True}


class Color256(BaseModel):
    """8-bit palette color."""

    c256: int = Field(ge=0, le=255)

    model_config = {"extra": "forbid", "frozen": True}


class Rgb(BaseModel):
    """24-bit true color."""

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)

    model_config = {"extra": "forbid", "frozen": True}


AnsiColor = Union[Color16, Color256, Rgb]


class IconConfig(BaseModel):
    """Icon variants for plain terminals and Nerd Font terminals."""

    plain: str = ""
    nerd_font: str = ""


class ColorConfig(BaseModel):
    """Color slots for a segment; each slot is set independently."""

    icon: Optional[AnsiColor] = None
    text: Optional[AnsiColor] = None
    background: Optional[AnsiColor] = None


class TextStyleConfig(BaseModel):
    """Text styling for a segment."""

    text_bold: bool = False


class SegmentConfig(BaseModel):
    """Configuration for a single segment instance."""

    id: SegmentId
    enabled: bool = True
    icon: IconConfig = Field(default_factory=IconConfig)
    colors: ColorConfig = Field(default_factory=ColorConfig)
    styles: TextStyleConfig = Field(default_factory=TextStyleConfig)
    options: dict[str, Any] = Field(default_factory=dict)


class StyleConfig(BaseModel):
    """Global rendering style."""

    mode: StyleMode = StyleMode.NERD_FONT
    separator: str = " | "


class Config(BaseModel):
    """Complete statusline configuration."""

    theme: str = "default"
    style: StyleConfig = Field(default_factory=StyleConfig)
    segments: list[SegmentConfig] = Field(default_factory=list)

    model_config = {"extra": "forbid"}
