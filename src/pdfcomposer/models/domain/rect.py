"""Rectangle domain model."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...middleware.logging import logger
from ...pdf_writer.colors import normalize_hex
from .enums import DrawMode


class RectElement(BaseModel):
    """A rectangle, or any raw path via ``raw_operators``.

    Attributes:
        x: Left edge in points
        y: Top edge in points
        width: Width in points
        height: Height in points
        mode: Stroke, fill or both
        stroke_color: Hex RGB, None means black
        fill_color: Hex RGB, None means black
        stroke_width: Line width in points
        raw_operators: Pre-rendered operators emitted verbatim
    """

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    mode: DrawMode = DrawMode.STROKE
    stroke_color: Optional[str] = None
    fill_color: Optional[str] = None
    stroke_width: float = Field(1.0, ge=0)
    raw_operators: Optional[str] = None

    @field_validator("stroke_color", "fill_color", mode="before")
    @classmethod
    def _check_color(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        color = normalize_hex(value)
        if color is None:
            logger.debug("Invalid rectangle color, using black", extra={"color": value})
        return color

    @field_validator("stroke_width", mode="before")
    @classmethod
    def _default_stroke_width(cls, value: Any) -> float:
        return 1.0 if value is None else value
