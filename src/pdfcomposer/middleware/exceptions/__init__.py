"""Exception handling for the PDF composer."""

from typing import Any, Dict, Optional


class PDFComposerError(Exception):
    """Base exception for all PDF composer errors."""

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.status_code = status_code


from .api import BadRequestError
from .business import (
    DocumentCompositionError,
    DuplicateImageError,
    ImageFormatError,
    InvalidDocumentStateError,
    NoColumnsError,
    NoOutputTargetError,
    SerializationError,
)
from .storage import (
    S3UploadError,
    StorageError,
    URLDownloadError,
)

__all__ = [
    # Base
    "PDFComposerError",
    # API Errors
    "BadRequestError",
    # Business Errors
    "DocumentCompositionError",
    "DuplicateImageError",
    "ImageFormatError",
    "InvalidDocumentStateError",
    "NoColumnsError",
    "NoOutputTargetError",
    "SerializationError",
    # Storage Errors
    "StorageError",
    "S3UploadError",
    "URLDownloadError",
]
