"""Domain models for the PDF composer."""

from .document import Cursor, Document
from .enums import (
    Alignment,
    DocumentStatus,
    DrawMode,
    FontFamily,
    FontStyle,
    HeaderVisibility,
    HeadingLevel,
    ImageFormat,
    TableTheme,
)
from .image import EmbeddedImage, ImageElement, ImageResource
from .page import Page
from .rect import RectElement
from .table import CellStyle, Column, TableOptions
from .text import TextElement

__all__ = [
    "Alignment",
    "CellStyle",
    "Column",
    "Cursor",
    "Document",
    "DocumentStatus",
    "DrawMode",
    "EmbeddedImage",
    "FontFamily",
    "FontStyle",
    "HeaderVisibility",
    "HeadingLevel",
    "ImageElement",
    "ImageFormat",
    "ImageResource",
    "Page",
    "RectElement",
    "TableOptions",
    "TableTheme",
    "TextElement",
]
