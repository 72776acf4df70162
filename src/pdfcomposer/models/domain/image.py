"""Image domain models."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ImageElement(BaseModel):
    """An image placed on a page.

    The box is given in document space; the image is scaled to it.

    Attributes:
        identifier: Unique name of the image within the document
        format: Format tag supplied by the caller (JPEG, JPG, PNG, ...)
        data: Raw encoded image bytes
        x: Left edge in points
        y: Top edge in points
        width: Box width in points
        height: Box height in points
    """

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., min_length=1, description="Unique image name")
    format: Optional[str] = Field(None, description="Caller supplied format tag")
    data: bytes = Field(..., description="Raw encoded image bytes")
    x: float = Field(..., description="Left edge in points")
    y: float = Field(..., description="Top edge in points")
    width: float = Field(..., gt=0, description="Box width in points")
    height: float = Field(..., gt=0, description="Box height in points")


class EmbeddedImage(BaseModel):
    """Image payload prepared for an XObject stream.

    Attributes:
        normalized_format: JPEG, PNG or the caller's unrecognized tag
        filters: Decode filter chain, outermost first
        color_space: Device color space name
        hex_payload: Hex encoded bytes terminated by the end-of-data marker
        byte_length: Length of ``hex_payload`` including the marker
    """

    model_config = ConfigDict(frozen=True)

    normalized_format: str
    filters: List[str]
    color_space: str
    hex_payload: str
    byte_length: int


class ImageResource(BaseModel):
    """An image registered as an indirect XObject of the document.

    Attributes:
        name: XObject resource name
        object_number: Indirect object number
        dictionary: Serialized stream dictionary
        embedded: Encoded payload
    """

    name: str
    object_number: int = Field(..., ge=3)
    dictionary: str
    embedded: EmbeddedImage
