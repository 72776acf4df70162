"""API models for request/response handling."""

from .requests import (
    CursorCommand,
    HeadingCommand,
    ImageCommand,
    PageBreakCommand,
    RectCommand,
    RenderCommand,
    RenderRequest,
    TableCommand,
    TextCommand,
)
from .responses import APIErrorResponse, RenderResponse, VersionResponse

__all__ = [
    # Requests
    'CursorCommand',
    'HeadingCommand',
    'ImageCommand',
    'PageBreakCommand',
    'RectCommand',
    'RenderCommand',
    'RenderRequest',
    'TableCommand',
    'TextCommand',

    # Responses
    'APIErrorResponse',
    'RenderResponse',
    'VersionResponse',
]
