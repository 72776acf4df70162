"""Table definition models."""

from typing import Optional

from pydantic import BaseModel, Field

from .enums import Alignment, FontStyle, HeaderVisibility, TableTheme


class CellStyle(BaseModel):
    """Style overrides for header, body or alternate rows and single columns.

    Unset fields fall back to the next style in line.
    """

    font_size: Optional[float] = Field(None, gt=0)
    font_style: Optional[FontStyle] = None
    text_color: Optional[str] = None
    fill_color: Optional[str] = None
    align: Optional[Alignment] = None

    def merged_over(self, base: "CellStyle") -> "CellStyle":
        """Return ``base`` with the fields set on this style applied on top."""
        return base.model_copy(update=self.model_dump(exclude_none=True))


class Column(BaseModel):
    """A table column.

    Attributes:
        title: Header text
        key: Key of the cell value in each row mapping
        width: Fixed width in points, or None for an equal share
        style: Per-column overrides applied to body cells
    """

    title: str
    key: str
    width: Optional[float] = Field(None, gt=0)
    style: Optional[CellStyle] = None


class TableOptions(BaseModel):
    """Table drawing options.

    Attributes:
        theme: Grid or striped
        header_visibility: Every page, first page only or never
        start_y: Top of the table, or None for the document cursor
        margin: Horizontal margin and spacing after the table, or None for the page margin
        header_style: Header row style
        body_style: Body row style
        alternate_style: Style of odd rows
    """

    theme: TableTheme = TableTheme.GRID
    header_visibility: HeaderVisibility = HeaderVisibility.EVERY_PAGE
    start_y: Optional[float] = None
    margin: Optional[float] = Field(None, ge=0)
    header_style: CellStyle = Field(
        default_factory=lambda: CellStyle(font_style=FontStyle.BOLD, fill_color="EEEEEE")
    )
    body_style: CellStyle = Field(default_factory=CellStyle)
    alternate_style: CellStyle = Field(
        default_factory=lambda: CellStyle(fill_color="F5F5F5")
    )
