"""Request models for API endpoints."""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, HttpUrl, model_validator

from ..domain import (
    Column,
    DrawMode,
    FontStyle,
    HeadingLevel,
    TableOptions,
)


class TextCommand(BaseModel):
    """Place a block of text, wrapped when ``max_width`` is set."""

    type: Literal["text"] = "text"
    text: str
    x: Optional[float] = None
    y: Optional[float] = None
    max_width: Optional[float] = Field(None, gt=0)
    font_size: float = Field(12.0, gt=0)
    style: FontStyle = FontStyle.NORMAL
    wrap_x: Optional[float] = None
    color: Optional[str] = None
    font_family: str = "helvetica"
    strikethrough: bool = False
    rotation: int = 0
    scale_x: float = 1.0
    scale_y: float = 1.0
    opacity: float = 1.0


class HeadingCommand(BaseModel):
    """Place a heading."""

    type: Literal["heading"] = "heading"
    text: str
    level: HeadingLevel = HeadingLevel.H1
    x: Optional[float] = None
    y: Optional[float] = None
    color: Optional[str] = None
    font_family: str = "helvetica"


class ImageCommand(BaseModel):
    """Place an image given inline (base64) or by URL."""

    type: Literal["image"] = "image"
    data_base64: Optional[str] = Field(None, description="Base64 encoded image bytes")
    url: Optional[HttpUrl] = Field(None, description="URL to fetch the image from")
    format: Optional[str] = Field(None, description="Format tag of inline data")
    identifier: Optional[str] = None
    x: float
    y: float
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)

    @model_validator(mode="after")
    def _one_source(self) -> "ImageCommand":
        if (self.data_base64 is None) == (self.url is None):
            raise ValueError("Exactly one of data_base64 or url is required")
        return self


class RectCommand(BaseModel):
    """Place a rectangle."""

    type: Literal["rect"] = "rect"
    x: float
    y: float
    width: float
    height: float
    mode: DrawMode = DrawMode.STROKE
    stroke_color: Optional[str] = None
    fill_color: Optional[str] = None
    stroke_width: Optional[float] = 1.0


class TableCommand(BaseModel):
    """Draw a table at the cursor."""

    type: Literal["table"] = "table"
    columns: List[Column]
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    options: TableOptions = Field(default_factory=TableOptions)


class PageBreakCommand(BaseModel):
    """Start a new page."""

    type: Literal["page_break"] = "page_break"


class CursorCommand(BaseModel):
    """Move the vertical cursor."""

    type: Literal["cursor"] = "cursor"
    y: Optional[float] = None


RenderCommand = Annotated[
    Union[
        TextCommand,
        HeadingCommand,
        ImageCommand,
        RectCommand,
        TableCommand,
        PageBreakCommand,
        CursorCommand,
    ],
    Field(discriminator="type"),
]


class RenderRequest(BaseModel):
    """Request model for POST /documents.

    Commands are applied in order to a new document.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Document name")
    commands: List[RenderCommand] = Field(
        ..., min_length=1, description="Drawing commands in order"
    )
