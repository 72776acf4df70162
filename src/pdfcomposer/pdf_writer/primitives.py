"""Conversion of positioned elements into content stream operators.

All inputs use the document space (origin top-left, Y down); every function
flips into PDF space (origin bottom-left, Y up).
"""

import math
from typing import Optional

from ..config.layout import DEFAULT_LAYOUT, LayoutConfig
from ..models.domain import DrawMode, RectElement, TextElement
from .colors import hex_to_rgb
from .text import estimate_width, flip_y


def fmt(value: float) -> str:
    """Format a number as a compact PDF numeric operand."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def escape_text(text: str) -> str:
    """Escape a string for a PDF literal string in WinAnsi encoding.

    Characters outside cp1252 become ``?``.
    """
    encoded = text.encode("cp1252", errors="replace").decode("latin-1")
    return (
        encoded.replace("\\", "\\\\")
        .replace("(", "\\(")
        .replace(")", "\\)")
        .replace("\r", " ")
        .replace("\n", " ")
    )


def rect_operators(rect: RectElement, page_height: float) -> str:
    """
    Build the operators painting ``rect``.

    A raw operator override is returned verbatim.

    Args:
        rect (RectElement): Rectangle in document space.
        page_height (float): Height of the target page.

    Returns:
        str: Operator block.
    """
    if rect.raw_operators is not None:
        return rect.raw_operators

    pdf_y = page_height - rect.y - rect.height
    path = f"{fmt(rect.x)} {fmt(pdf_y)} {fmt(rect.width)} {fmt(rect.height)} re"

    ops = ["q"]
    if rect.mode in (DrawMode.STROKE, DrawMode.BOTH):
        ops.append(f"{hex_to_rgb(rect.stroke_color)} RG")
    if rect.mode in (DrawMode.FILL, DrawMode.BOTH):
        ops.append(f"{hex_to_rgb(rect.fill_color)} rg")
    if rect.mode != DrawMode.FILL:
        ops.append(f"{fmt(rect.stroke_width)} w")

    paint = {DrawMode.STROKE: "S", DrawMode.FILL: "f", DrawMode.BOTH: "B"}[rect.mode]
    ops.append(f"{path} {paint}")
    ops.append("Q")
    return "\n".join(ops)


def line_operators(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    page_height: float,
    color: Optional[str] = None,
    width: float = 1.0,
) -> str:
    """Operators stroking a straight line, for use as a raw rectangle override."""
    return "\n".join(
        [
            "q",
            f"{hex_to_rgb(color)} RG",
            f"{fmt(width)} w",
            f"{fmt(x1)} {fmt(page_height - y1)} m {fmt(x2)} {fmt(page_height - y2)} l S",
            "Q",
        ]
    )


def text_operators(
    element: TextElement,
    config: LayoutConfig = DEFAULT_LAYOUT,
    graphics_state: Optional[str] = None,
) -> str:
    """
    Build the operators drawing one text line.

    Rotation and scale go into a ``cm`` around the baseline origin so the
    strikethrough rule follows the text.

    Args:
        element (TextElement): Line in document space.
        config (LayoutConfig): Page geometry and font table.
        graphics_state (Optional[str]): ExtGState name carrying the opacity.

    Returns:
        str: Operator block.
    """
    font_name, synthetic_italic = config.font_for(element.font_family, element.style)
    pdf_y = flip_y(element.y, element.font_size, config.page_height)
    angle = math.radians(element.rotation)
    cos, sin = math.cos(angle), math.sin(angle)
    color = hex_to_rgb(element.color)
    shear = config.italic_shear if synthetic_italic else 0.0

    ops = ["q"]
    if graphics_state:
        ops.append(f"/{graphics_state} gs")
    ops.append(
        f"{fmt(cos * element.scale_x)} {fmt(sin * element.scale_x)} "
        f"{fmt(-sin * element.scale_y)} {fmt(cos * element.scale_y)} "
        f"{fmt(element.x)} {fmt(pdf_y)} cm"
    )
    ops.extend(
        [
            "BT",
            f"/{font_name} {fmt(element.font_size)} Tf",
            f"{color} rg",
            f"1 0 {fmt(shear)} 1 0 0 Tm",
            f"({escape_text(element.text)}) Tj",
            "ET",
        ]
    )
    if element.strikethrough:
        width = estimate_width(element.text, element.font_size, element.style, config)
        rule_y = element.font_size * 0.3
        ops.extend(
            [
                f"{color} RG",
                f"{fmt(config.strikethrough_width)} w",
                f"0 {fmt(rule_y)} m {fmt(width)} {fmt(rule_y)} l S",
            ]
        )
    ops.append("Q")
    return "\n".join(ops)


def image_operators(
    name: str, x: float, y: float, width: float, height: float, page_height: float
) -> str:
    """Operators painting the XObject ``name`` scaled into the given box."""
    pdf_y = page_height - y - height
    return "\n".join(
        [
            "q",
            f"{fmt(width)} 0 0 {fmt(height)} {fmt(x)} {fmt(pdf_y)} cm",
            f"/{name} Do",
            "Q",
        ]
    )
