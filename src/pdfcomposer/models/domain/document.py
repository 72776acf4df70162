"""Document domain model."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .enums import DocumentStatus
from .image import ImageResource
from .page import Page


class Cursor(BaseModel):
    """Last auto-advancing placement, in document space."""

    x: float
    y: float


class Document(BaseModel):
    """A PDF document being composed.

    This is the aggregate root for the composition domain.

    Attributes:
        pages: Pages in output order
        images: Registered images by XObject name
        graphics_states: ExtGState names by fill opacity
        cursor: Position after the last auto-advancing placement
        status: Lifecycle status
    """

    pages: List[Page] = Field(default_factory=list, description="List of pages")
    images: Dict[str, ImageResource] = Field(
        default_factory=dict, description="Registered images by name"
    )
    graphics_states: Dict[float, str] = Field(
        default_factory=dict, description="ExtGState names by opacity"
    )
    cursor: Optional[Cursor] = Field(
        default=None, description="Position after the last auto-advancing placement"
    )
    status: DocumentStatus = Field(
        default=DocumentStatus.DRAFT, description="Lifecycle status"
    )

    def update_status(self, new_status: DocumentStatus) -> None:
        """Update document status if transition is valid.

        Args:
            new_status: New status to transition to

        Raises:
            ValueError: If status transition is invalid
        """
        if not self.status.can_transition_to(new_status):
            raise ValueError(
                f"Invalid status transition from {self.status} to {new_status}"
            )
        self.status = new_status

    def add_page(self, page: Page) -> None:
        """Add a page to the document.

        Args:
            page: Page to add
        """
        self.pages.append(page)

    @property
    def current_page(self) -> Optional[Page]:
        return self.pages[-1] if self.pages else None

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def is_finalized(self) -> bool:
        return self.status == DocumentStatus.FINALIZED
