"""Response models for API endpoints."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class APIErrorResponse(BaseModel):
    """Standardized error response for API endpoints.

    Attributes:
        message: Human-readable error message
        code: Error code string (e.g., from ErrorCode enum)
        details: Additional error context or details
    """

    message: str
    code: str
    details: Optional[Dict[str, Any]] = None


class VersionResponse(BaseModel):
    """Response containing the API version."""

    version: str


class RenderResponse(BaseModel):
    """Response for POST /documents.

    Attributes:
        document_id: Content-derived document identifier
        name: Name given in the request
        key: Object key in the output bucket
        page_count: Number of pages rendered
        size_in_bytes: Size of the PDF
        url: Presigned download URL
    """

    document_id: str = Field(..., description="Document identifier")
    name: str = Field(..., description="Document name")
    key: str = Field(..., description="Object key in the output bucket")
    page_count: int = Field(..., ge=1)
    size_in_bytes: int = Field(..., ge=0)
    url: str = Field(..., description="Presigned download URL")
