"""Immutable page geometry, font table and layout constants."""

from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain.enums import FontFamily, FontStyle, HeadingLevel


class FontResource(BaseModel):
    """A standard Type1 font registered in the shared resource dictionary.

    Attributes:
        name: Resource name used by the Tf operator (e.g. F1)
        base_font: PostScript name of the standard font
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Resource name")
    base_font: str = Field(..., description="Standard font name")


STANDARD_FONTS: Tuple[FontResource, ...] = (
    FontResource(name="F1", base_font="Helvetica"),
    FontResource(name="F2", base_font="Helvetica-Bold"),
    FontResource(name="F3", base_font="Helvetica-Oblique"),
    FontResource(name="F4", base_font="Helvetica-BoldOblique"),
    FontResource(name="F5", base_font="Times-Roman"),
    FontResource(name="F6", base_font="Times-Bold"),
    FontResource(name="F7", base_font="Courier"),
    FontResource(name="F8", base_font="Courier-Bold"),
)

# (family, style) -> (resource name, italic has to be synthesized)
FONT_SELECTION: Dict[Tuple[FontFamily, FontStyle], Tuple[str, bool]] = {
    (FontFamily.HELVETICA, FontStyle.NORMAL): ("F1", False),
    (FontFamily.HELVETICA, FontStyle.BOLD): ("F2", False),
    (FontFamily.HELVETICA, FontStyle.ITALIC): ("F3", False),
    (FontFamily.HELVETICA, FontStyle.BOLD_ITALIC): ("F4", False),
    (FontFamily.ARIAL, FontStyle.NORMAL): ("F1", False),
    (FontFamily.ARIAL, FontStyle.BOLD): ("F2", False),
    (FontFamily.ARIAL, FontStyle.ITALIC): ("F3", False),
    (FontFamily.ARIAL, FontStyle.BOLD_ITALIC): ("F4", False),
    (FontFamily.TIMES, FontStyle.NORMAL): ("F5", False),
    (FontFamily.TIMES, FontStyle.BOLD): ("F6", False),
    (FontFamily.TIMES, FontStyle.ITALIC): ("F5", True),
    (FontFamily.TIMES, FontStyle.BOLD_ITALIC): ("F6", True),
    (FontFamily.COURIER, FontStyle.NORMAL): ("F7", False),
    (FontFamily.COURIER, FontStyle.BOLD): ("F8", False),
    (FontFamily.COURIER, FontStyle.ITALIC): ("F7", True),
    (FontFamily.COURIER, FontStyle.BOLD_ITALIC): ("F8", True),
}


class LayoutConfig(BaseModel):
    """Read-only lookup shared by the layout engine, table renderer and serializer.

    Coordinates are in points. The page is US Letter.
    """

    model_config = ConfigDict(frozen=True)

    page_width: float = 612.0
    page_height: float = 792.0
    margin: float = 50.0

    # width model
    reference_font_size: float = 12.0
    char_width: float = 6.0
    bold_factor: float = 1.10
    italic_factor: float = 1.08
    narrow_chars: str = "ijlt.,;:!'|()[]fI1 "
    narrow_factor: float = 0.55
    wide_chars: str = "mwMW@%&"
    wide_factor: float = 1.45

    # line height
    line_height_ratio: float = 1.2
    heading_sizes: Dict[HeadingLevel, float] = Field(
        default_factory=lambda: {
            HeadingLevel.H1: 24.0,
            HeadingLevel.H2: 18.0,
            HeadingLevel.H3: 14.0,
        }
    )
    heading_ratio_boost: Dict[HeadingLevel, float] = Field(
        default_factory=lambda: {
            HeadingLevel.H1: 0.3,
            HeadingLevel.H2: 0.2,
            HeadingLevel.H3: 0.1,
        }
    )

    fonts: Tuple[FontResource, ...] = STANDARD_FONTS
    italic_shear: float = 0.2
    strikethrough_width: float = 0.6

    # tables
    table_font_size: float = 10.0
    table_row_height: float = 20.0
    table_header_height: float = 24.0
    table_cell_padding: float = 5.0
    table_rule_width: float = 0.5

    @property
    def bottom_limit(self) -> float:
        """Lowest Y (top-left space) content may reach."""
        return self.page_height - self.margin

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    def font_for(self, family: FontFamily, style: FontStyle) -> Tuple[str, bool]:
        """Resolve a family and style to a font resource name.

        Returns:
            Resource name and whether italic must be synthesized with a shear
        """
        return FONT_SELECTION.get((family, style), ("F1", False))


DEFAULT_LAYOUT = LayoutConfig()
