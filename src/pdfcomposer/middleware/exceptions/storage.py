"""Storage-related exceptions."""

from typing import Any, Dict, Optional

from . import PDFComposerError


class StorageError(PDFComposerError):
    """Base class for storage-related errors."""

    def __init__(
        self, message: str, code: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code=code,
            details=details,
            status_code=500,  # Internal Server Error
        )


class S3UploadError(StorageError):
    """Raised when an S3 upload operation fails."""

    def __init__(
        self,
        message: str = "Failed to upload document to S3",
        code: str = "S3_UPLOAD_FAILED",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code, details)


class URLDownloadError(StorageError):
    """Raised when a URL download operation fails."""

    def __init__(
        self,
        message: str = "Failed to download resource from URL",
        code: str = "URL_DOWNLOAD_FAILED",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code, details)
