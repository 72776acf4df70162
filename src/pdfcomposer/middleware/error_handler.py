from enum import Enum
from http import HTTPStatus
from typing import Any, Dict, Optional

from aws_lambda_powertools.middleware_factory import lambda_handler_decorator
from pydantic import BaseModel, ValidationError

from ..models.api.responses import APIErrorResponse
from .exceptions import (
    BadRequestError,
    DocumentCompositionError,
    DuplicateImageError,
    ImageFormatError,
    InvalidDocumentStateError,
    NoColumnsError,
    NoOutputTargetError,
    PDFComposerError,
    SerializationError,
    StorageError,
    URLDownloadError,
)
from .logging import logger


class ErrorCode(Enum):
    # Validation errors
    VALIDATION_INVALID_INPUT = "VALIDATION_INVALID_INPUT"

    # API errors
    BAD_REQUEST = "BAD_REQUEST"

    # Composition errors
    COMPOSITION_ERROR = "COMPOSITION_ERROR"
    NO_COLUMNS = "NO_COLUMNS"
    NO_OUTPUT_TARGET = "NO_OUTPUT_TARGET"
    INVALID_STATE = "INVALID_STATE"
    DUPLICATE_IMAGE = "DUPLICATE_IMAGE"
    INVALID_IMAGE = "INVALID_IMAGE"
    SERIALIZATION_ERROR = "SERIALIZATION_ERROR"

    # Storage errors
    STORAGE_ERROR = "STORAGE_ERROR"
    URL_DOWNLOAD_FAILED = "URL_DOWNLOAD_FAILED"

    # System errors
    SYSTEM_INTERNAL_ERROR = "SYSTEM_INTERNAL_ERROR"

    @property
    def default_message(self) -> str:
        messages: Dict["ErrorCode", str] = {
            ErrorCode.VALIDATION_INVALID_INPUT: "Invalid input",
            ErrorCode.BAD_REQUEST: "Bad request",
            ErrorCode.COMPOSITION_ERROR: "Document could not be composed",
            ErrorCode.NO_COLUMNS: "Table has no columns",
            ErrorCode.NO_OUTPUT_TARGET: "Table renderer has no output target",
            ErrorCode.INVALID_STATE: "Invalid document state",
            ErrorCode.DUPLICATE_IMAGE: "Image identifier already registered",
            ErrorCode.INVALID_IMAGE: "Unreadable image data",
            ErrorCode.SERIALIZATION_ERROR: "Failed to serialize document",
            ErrorCode.STORAGE_ERROR: "Storage operation failed",
            ErrorCode.URL_DOWNLOAD_FAILED: "Failed to download resource from URL",
            ErrorCode.SYSTEM_INTERNAL_ERROR: "An unexpected error occurred",
        }
        return messages[self]

    @classmethod
    def from_exception(cls, e: Exception) -> "ErrorCode":
        """Map exceptions to error codes, most specific class first."""
        mappings: Dict[type, "ErrorCode"] = {
            ValidationError: ErrorCode.VALIDATION_INVALID_INPUT,
            BadRequestError: ErrorCode.BAD_REQUEST,
            DocumentCompositionError: ErrorCode.COMPOSITION_ERROR,
            NoColumnsError: ErrorCode.NO_COLUMNS,
            NoOutputTargetError: ErrorCode.NO_OUTPUT_TARGET,
            InvalidDocumentStateError: ErrorCode.INVALID_STATE,
            DuplicateImageError: ErrorCode.DUPLICATE_IMAGE,
            ImageFormatError: ErrorCode.INVALID_IMAGE,
            SerializationError: ErrorCode.SERIALIZATION_ERROR,
            StorageError: ErrorCode.STORAGE_ERROR,
            URLDownloadError: ErrorCode.URL_DOWNLOAD_FAILED,
        }
        for klass in type(e).__mro__:
            if klass in mappings:
                return mappings[klass]
        return ErrorCode.SYSTEM_INTERNAL_ERROR


class ErrorResponse(BaseModel):
    message: str
    code: ErrorCode
    details: Optional[Dict[str, Any]] = None

    @classmethod
    def from_code(
        cls, code: ErrorCode, details: Optional[Dict[str, Any]] = None
    ) -> "ErrorResponse":
        return cls(message=code.default_message, code=code, details=details)

    @classmethod
    def from_exception(cls, e: Exception) -> "ErrorResponse":
        """Create an ErrorResponse from an exception."""
        code = ErrorCode.from_exception(e)
        message = str(e) if str(e) else code.default_message
        details = getattr(e, "details", None)

        return cls(message=message, code=code, details=details)


def create_error_response(
    status_code: HTTPStatus,
    error_response: ErrorResponse,
) -> Dict[str, Any]:
    """Build an API Gateway proxy response carrying an error body."""
    api_error = APIErrorResponse(
        message=error_response.message,
        code=error_response.code.value,
        details=error_response.details,
    )

    return {
        "statusCode": status_code,
        "body": api_error.model_dump_json(),
        "headers": {"Content-Type": "application/json"},
    }


@lambda_handler_decorator
def error_handler_middleware(handler, event, context):
    """Middleware to handle exceptions and format error responses with error codes."""
    try:
        return handler(event, context)

    except PDFComposerError as e:
        log_level = "warning" if e.status_code < 500 else "error"
        getattr(logger, log_level)(
            f"{e.__class__.__name__}: {str(e)}",
            extra={"code": e.code, "details": e.details},
        )

        error_response = ErrorResponse.from_exception(e)
        return create_error_response(HTTPStatus(e.status_code), error_response)

    except ValidationError as e:
        logger.warning(f"Input validation failed: {e}", exc_info=True)
        error_response = ErrorResponse.from_code(
            ErrorCode.VALIDATION_INVALID_INPUT, details={"errors": str(e)}
        )
        return create_error_response(HTTPStatus.BAD_REQUEST, error_response)

    except Exception as e:
        logger.exception(f"Unhandled error: {e.__class__.__name__}: {str(e)}")
        error_response = ErrorResponse.from_code(
            ErrorCode.SYSTEM_INTERNAL_ERROR, details={"error": str(e)}
        )
        return create_error_response(HTTPStatus.INTERNAL_SERVER_ERROR, error_response)
