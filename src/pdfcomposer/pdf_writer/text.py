"""Text layout: width estimation, line height, word wrap and coordinate flip.

No font metrics are embedded, so widths come from an approximate per-character
model (see ``estimate_width``).
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..config.layout import DEFAULT_LAYOUT, LayoutConfig
from ..middleware.logging import logger
from ..models.domain import FontFamily, FontStyle, HeadingLevel, TextElement


def estimate_width(
    text: str,
    font_size: float,
    style: FontStyle = FontStyle.NORMAL,
    config: LayoutConfig = DEFAULT_LAYOUT,
) -> float:
    """
    Estimate the rendered width of ``text`` in points.

    Each character contributes the base width scaled by ``font_size / 12``,
    weighted by its class: narrow characters 55%, wide characters 145%,
    everything else 100%. Bold adds 10% and italic 8%.

    Args:
        text (str): Text to measure.
        font_size (float): Font size in points.
        style (FontStyle): Font style.
        config (LayoutConfig): Width model constants.

    Returns:
        float: Estimated width in points.
    """
    units = 0.0
    for char in text:
        if char in config.narrow_chars:
            units += config.narrow_factor
        elif char in config.wide_chars:
            units += config.wide_factor
        else:
            units += 1.0

    width = units * config.char_width * font_size / config.reference_font_size
    if style.is_bold:
        width *= config.bold_factor
    if style.is_italic:
        width *= config.italic_factor
    return width


def line_height(
    font_size: float,
    heading: Optional[HeadingLevel] = None,
    config: LayoutConfig = DEFAULT_LAYOUT,
) -> float:
    """Line height for ``font_size``; headings get a larger ratio."""
    ratio = config.line_height_ratio
    if heading is not None:
        ratio += config.heading_ratio_boost[heading]
    return font_size * ratio


def flip_y(y: float, font_size: float, page_height: float) -> float:
    """Convert a top-left Y into a PDF baseline Y."""
    return page_height - y - font_size


class LayoutOptions(BaseModel):
    """Options for a text placement.

    ``heading`` overrides ``font_size`` with the heading's fixed size and
    disables wrapping. ``wrap_x`` sets the X of every line after the first;
    when None the lines keep the starting X.
    """

    font_size: float = Field(12.0, gt=0)
    style: FontStyle = FontStyle.NORMAL
    max_width: Optional[float] = Field(None, gt=0)
    wrap_x: Optional[float] = None
    heading: Optional[HeadingLevel] = None
    color: Optional[str] = None
    font_family: FontFamily | str = FontFamily.HELVETICA
    strikethrough: bool = False
    rotation: int = 0
    scale_x: float = 1.0
    scale_y: float = 1.0
    opacity: float = 1.0


class TextLayoutEngine:
    """Turns a text placement into positioned lines."""

    def __init__(self, config: LayoutConfig = DEFAULT_LAYOUT) -> None:
        self.config = config

    def font_size_for(self, options: LayoutOptions) -> float:
        if options.heading is not None:
            return self.config.heading_sizes[options.heading]
        return options.font_size

    def line_height_for(self, options: LayoutOptions) -> float:
        return line_height(self.font_size_for(options), options.heading, self.config)

    def layout(
        self,
        text: str,
        x: Optional[float] = None,
        y: Optional[float] = None,
        options: Optional[LayoutOptions] = None,
        cursor_y: Optional[float] = None,
        continued: bool = False,
    ) -> List[TextElement]:
        """
        Lay out ``text`` into lines.

        Stops at the first line crossing the bottom margin. That line is
        returned with ``page_break_needed`` set and carries every word not
        yet placed; continuing on a new page is up to the caller.

        Args:
            text (str): Text to place.
            x (Optional[float]): Left edge, the page margin when None.
            y (Optional[float]): Top edge; when None, ``cursor_y`` or the top
                margin if there is no cursor.
            options (Optional[LayoutOptions]): Font and wrapping options.
            cursor_y (Optional[float]): Bottom of the previous placement.
            continued (bool): The text continues a paragraph from an earlier
                page, so its first line keeps the full ``max_width``.

        Returns:
            List[TextElement]: Lines in reading order.
        """
        options = options or LayoutOptions()
        config = self.config
        font_size = self.font_size_for(options)
        height = self.line_height_for(options)

        if x is None:
            x = config.margin
        if y is None:
            y = cursor_y if cursor_y is not None else config.margin

        def make(content: str, line_x: float, line_y: float) -> TextElement:
            return TextElement(
                text=content,
                x=line_x,
                y=line_y,
                font_size=font_size,
                style=options.style,
                strikethrough=options.strikethrough,
                color=options.color,
                font_family=options.font_family,
                rotation=options.rotation,
                scale_x=options.scale_x,
                scale_y=options.scale_y,
                opacity=options.opacity,
                page_break_needed=line_y + height > config.bottom_limit,
            )

        if options.heading is not None or options.max_width is None:
            return [make(text, x, y)]

        def width(content: str) -> float:
            return estimate_width(content, font_size, options.style, config)

        budget = options.max_width
        if x > config.margin and not continued:
            budget -= x - config.margin

        words = text.split()
        if width(text) <= budget or len(words) <= 1:
            return [make(text, x, y)]

        lines: List[TextElement] = []
        line_x, line_y = x, y
        start = 0
        for i in range(1, len(words)):
            current = " ".join(words[start:i])
            if width(current) + width(" " + words[i]) <= budget:
                continue

            element = make(current, line_x, line_y)
            if element.page_break_needed:
                lines.append(make(" ".join(words[start:]), line_x, line_y))
                logger.debug(
                    "Text crossed the bottom margin",
                    extra={"y": line_y, "placed_lines": len(lines) - 1},
                )
                return lines
            lines.append(element)

            start = i
            line_y += height
            line_x = options.wrap_x if options.wrap_x is not None else x
            budget = options.max_width

        lines.append(make(" ".join(words[start:]), line_x, line_y))
        return lines
