"""Page domain model."""

from typing import List

from pydantic import BaseModel, Field


class Page(BaseModel):
    """A page being composed.

    Attributes:
        number: Page number (1-based)
        object_number: Indirect object number of the page dictionary
        content_object_number: Indirect object number of the content stream
        operators: Drawing operators in content stream order
    """

    number: int = Field(..., gt=0, description="Page number (1-based)")
    object_number: int = Field(..., ge=3, description="Page object number")
    content_object_number: int = Field(
        ..., ge=3, description="Content stream object number"
    )
    operators: List[str] = Field(
        default_factory=list, description="Drawing operators of the content stream"
    )

    def add_operators(self, operators: str) -> None:
        """Append a block of operators to the content stream.

        Args:
            operators: Operator text, empty blocks are ignored
        """
        if operators:
            self.operators.append(operators)

    @property
    def content(self) -> str:
        """Content stream text."""
        return "\n".join(self.operators)
