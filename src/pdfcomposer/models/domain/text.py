"""Text element domain model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...middleware.logging import logger
from ...pdf_writer.colors import BLACK, normalize_hex
from .enums import FontFamily, FontStyle


class TextElement(BaseModel):
    """A single positioned line of text.

    Coordinates use the document space: origin top-left, Y growing downward.

    Attributes:
        text: Content of the line
        x: Left edge in points
        y: Top edge in points
        font_size: Font size in points
        style: Normal, bold, italic or bold-italic
        strikethrough: Draw a rule through the text
        color: 6-digit hex RGB, black when invalid
        font_family: One of the supported families, helvetica when unknown
        rotation: Angle in degrees, normalized to 0-359
        scale_x: Horizontal scale factor
        scale_y: Vertical scale factor
        opacity: Fill opacity, clamped to 0.0-1.0
        page_break_needed: Placement crossed the bottom margin
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Content of the line")
    x: float = Field(..., description="Left edge in points")
    y: float = Field(..., description="Top edge in points")
    font_size: float = Field(12.0, gt=0, description="Font size in points")
    style: FontStyle = Field(FontStyle.NORMAL, description="Font style")
    strikethrough: bool = Field(False, description="Strike through the text")
    color: str = Field(BLACK, description="Hex RGB text color")
    font_family: FontFamily = Field(FontFamily.HELVETICA, description="Font family")
    rotation: int = Field(0, ge=0, lt=360, description="Rotation in degrees")
    scale_x: float = Field(1.0, gt=0, description="Horizontal scale")
    scale_y: float = Field(1.0, gt=0, description="Vertical scale")
    opacity: float = Field(1.0, ge=0.0, le=1.0, description="Fill opacity")
    page_break_needed: bool = Field(False, description="Crossed the bottom margin")

    @field_validator("color", mode="before")
    @classmethod
    def _default_color(cls, value: Any) -> str:
        if value is None:
            return BLACK
        color = normalize_hex(value)
        if color is None:
            logger.debug("Invalid text color, using black", extra={"color": value})
            return BLACK
        return color

    @field_validator("font_family", mode="before")
    @classmethod
    def _default_family(cls, value: Any) -> FontFamily:
        if isinstance(value, FontFamily):
            return value
        try:
            return FontFamily(str(value).strip().lower())
        except ValueError:
            logger.debug("Unsupported font family, using helvetica", extra={"font": value})
            return FontFamily.HELVETICA

    @field_validator("rotation", mode="before")
    @classmethod
    def _normalize_rotation(cls, value: Any) -> int:
        return int(value) % 360

    @field_validator("opacity", mode="before")
    @classmethod
    def _clamp_opacity(cls, value: Any) -> float:
        return min(1.0, max(0.0, float(value)))

    @field_validator("scale_x", "scale_y", mode="before")
    @classmethod
    def _default_scale(cls, value: Any) -> float:
        if value is None or float(value) <= 0:
            logger.debug("Non-positive scale, using 1.0", extra={"scale": value})
            return 1.0
        return float(value)

    def _replace(self, **changes: Any) -> "TextElement":
        # model_copy skips validation
        return type(self).model_validate({**self.model_dump(), **changes})

    def with_rotation(self, angle: int) -> "TextElement":
        """Return a copy rotated by ``angle`` degrees (normalized mod 360)."""
        return self._replace(rotation=angle)

    def with_scale(self, scale_x: float, scale_y: float) -> "TextElement":
        """Return a copy with the given scale factors."""
        return self._replace(scale_x=scale_x, scale_y=scale_y)

    def with_opacity(self, opacity: float) -> "TextElement":
        """Return a copy with ``opacity`` clamped to 0.0-1.0."""
        return self._replace(opacity=opacity)
