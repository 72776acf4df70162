"""API-related exceptions."""

from typing import Any, Dict, Optional

from . import PDFComposerError


class APIError(PDFComposerError):
    """Base class for API-related errors."""

    pass


class BadRequestError(APIError):
    """400 Bad Request errors."""

    def __init__(
        self,
        message: str = "Invalid request",
        code: str = "BAD_REQUEST",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, code=code, details=details, status_code=400)
