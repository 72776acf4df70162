"""Image embedding: format normalization, filter chain and hex payload."""

from typing import Dict, List, Optional

from ..middleware.logging import logger
from ..models.domain import EmbeddedImage, ImageFormat

COLOR_SPACE = "/DeviceRGB"
BITS_PER_COMPONENT = 8
END_OF_DATA = ">"

# tags with a known filter chain
FORMAT_ALIASES: Dict[str, ImageFormat] = {
    "": ImageFormat.JPEG,
    "JPG": ImageFormat.JPEG,
    "JPEG": ImageFormat.JPEG,
    "PNG": ImageFormat.PNG,
}

FILTER_CHAINS: Dict[ImageFormat, List[str]] = {
    ImageFormat.JPEG: ["/ASCIIHexDecode", "/DCTDecode"],
    ImageFormat.PNG: ["/ASCIIHexDecode", "/FlateDecode"],
}


def normalize_format(format_tag: Optional[str]) -> str:
    """
    Normalize an image format tag.

    Empty tags and JPG mean JPEG. Unrecognized tags are returned unchanged.

    Args:
        format_tag (Optional[str]): Tag supplied by the caller.

    Returns:
        str: JPEG, PNG or the original tag.
    """
    known = FORMAT_ALIASES.get((format_tag or "").strip().upper())
    return known.value if known is not None else format_tag


def filter_chain(normalized_format: str) -> List[str]:
    """Decode filters for a normalized format; unknown formats use the JPEG chain."""
    try:
        return list(FILTER_CHAINS[ImageFormat(normalized_format)])
    except ValueError:
        logger.debug(
            "Unrecognized image format, using JPEG filters",
            extra={"format": normalized_format},
        )
        return list(FILTER_CHAINS[ImageFormat.JPEG])


def embed(data: bytes, format_tag: Optional[str] = None) -> EmbeddedImage:
    """
    Prepare raw image bytes for an XObject stream.

    Args:
        data (bytes): Encoded image bytes, used as-is.
        format_tag (Optional[str]): Format tag supplied by the caller.

    Returns:
        EmbeddedImage: Normalized format, filters, color space and hex payload.
    """
    normalized = normalize_format(format_tag)
    payload = data.hex().upper() + END_OF_DATA
    return EmbeddedImage(
        normalized_format=normalized,
        filters=filter_chain(normalized),
        color_space=COLOR_SPACE,
        hex_payload=payload,
        byte_length=len(payload),
    )


def image_xobject(embedded: EmbeddedImage, width: float, height: float) -> str:
    """
    Build the stream dictionary of an image XObject.

    Width and height come from the placement box, not from the pixels.

    Args:
        embedded (EmbeddedImage): Prepared payload.
        width (float): Box width in points.
        height (float): Box height in points.

    Returns:
        str: Dictionary text.
    """
    return (
        "<< /Type /XObject /Subtype /Image"
        f" /Width {max(1, round(width))} /Height {max(1, round(height))}"
        f" /ColorSpace {embedded.color_space}"
        f" /BitsPerComponent {BITS_PER_COMPONENT}"
        f" /Filter [{' '.join(embedded.filters)}]"
        f" /Length {embedded.byte_length} >>"
    )
