"""Document composition exceptions."""

from typing import Any, Dict, Optional

from . import PDFComposerError


class DocumentCompositionError(PDFComposerError):
    """Base class for errors raised while composing a document."""

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code=code,
            details=details,
            status_code=422  # Unprocessable Entity
        )


class NoColumnsError(DocumentCompositionError):
    """A table was drawn without any column definitions."""

    def __init__(
        self,
        message: str = "Table has no columns",
        code: str = "NO_COLUMNS",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code, details)


class NoOutputTargetError(DocumentCompositionError):
    """A table renderer was used without a bound output target."""

    def __init__(
        self,
        message: str = "Table renderer has no output target",
        code: str = "NO_OUTPUT_TARGET",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code, details)


class InvalidDocumentStateError(DocumentCompositionError):
    """Errors for operations on a document that no longer accepts them."""

    def __init__(
        self,
        message: str = "Invalid document state",
        code: str = "INVALID_STATE",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code, details)


class DuplicateImageError(DocumentCompositionError):
    """An image identifier was reused for a different payload."""

    def __init__(
        self,
        identifier: str,
        message: str = "Image identifier already registered",
        code: str = "DUPLICATE_IMAGE",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message, code, {"identifier": identifier, **(details or {})}
        )


class ImageFormatError(DocumentCompositionError):
    """Image bytes could not be read."""

    def __init__(
        self,
        message: str = "Unreadable image data",
        code: str = "INVALID_IMAGE",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code, details)


class SerializationError(PDFComposerError):
    """The object stream could not be written consistently."""

    def __init__(
        self,
        message: str = "Failed to serialize document",
        code: str = "SERIALIZATION_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code, details, status_code=500)
