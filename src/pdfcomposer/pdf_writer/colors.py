"""Hex color handling shared by text, rectangles and tables."""

import string
from typing import Optional

BLACK = "000000"
BLACK_TRIPLE = "0.000 0.000 0.000"


def normalize_hex(color: Optional[str]) -> Optional[str]:
    """Return the uppercase 6-digit form of ``color`` or None when invalid.

    A leading ``#`` is accepted.
    """
    if not isinstance(color, str):
        return None
    value = color.strip().lstrip("#")
    if len(value) != 6 or any(c not in string.hexdigits for c in value):
        return None
    return value.upper()


def hex_to_rgb(color: Optional[str]) -> str:
    """Convert a hex color to a normalized ``"r g b"`` operand triple.

    Each channel is divided by 255 and rendered to 3 decimals. Invalid input
    yields black.
    """
    value = normalize_hex(color)
    if value is None:
        return BLACK_TRIPLE
    channels = (int(value[i : i + 2], 16) / 255 for i in (0, 2, 4))
    return " ".join(f"{c:.3f}" for c in channels)
