"""Compose PDF documents from text, images, rectangles and tables."""

from .config.layout import DEFAULT_LAYOUT, LayoutConfig
from .models.domain import (
    CellStyle,
    Column,
    DrawMode,
    FontFamily,
    FontStyle,
    HeaderVisibility,
    HeadingLevel,
    TableOptions,
    TableTheme,
)
from .services.composer import DocumentComposer
from .services.output import LocalFileSink, OutputSink, S3OutputSink

__all__ = [
    "CellStyle",
    "Column",
    "DEFAULT_LAYOUT",
    "DocumentComposer",
    "DrawMode",
    "FontFamily",
    "FontStyle",
    "HeaderVisibility",
    "HeadingLevel",
    "LayoutConfig",
    "LocalFileSink",
    "OutputSink",
    "S3OutputSink",
    "TableOptions",
    "TableTheme",
]
