"""Domain enums for the PDF composer."""

from enum import Enum, IntEnum


class DocumentStatus(str, Enum):
    """Document lifecycle status.

    Inherits from str to ensure JSON serialization works correctly.
    """

    DRAFT = "draft"
    FINALIZED = "finalized"

    def can_transition_to(self, new_status: "DocumentStatus") -> bool:
        """Check if current status can transition to new status."""
        valid_transitions = {
            DocumentStatus.DRAFT: {DocumentStatus.FINALIZED},
            DocumentStatus.FINALIZED: set(),  # Terminal state
        }
        return new_status in valid_transitions.get(self, set())


class FontStyle(str, Enum):
    """Font style of a text element."""

    NORMAL = "normal"
    BOLD = "bold"
    ITALIC = "italic"
    BOLD_ITALIC = "bold_italic"

    @property
    def is_bold(self) -> bool:
        return self in (FontStyle.BOLD, FontStyle.BOLD_ITALIC)

    @property
    def is_italic(self) -> bool:
        return self in (FontStyle.ITALIC, FontStyle.BOLD_ITALIC)


class FontFamily(str, Enum):
    """Supported font families. Helvetica is the primary family."""

    HELVETICA = "helvetica"
    ARIAL = "arial"
    TIMES = "times"
    COURIER = "courier"


class HeadingLevel(IntEnum):
    """Heading levels, H1 being the largest."""

    H1 = 1
    H2 = 2
    H3 = 3


class DrawMode(str, Enum):
    """Painting mode of a rectangle."""

    STROKE = "stroke"
    FILL = "fill"
    BOTH = "both"


class Alignment(str, Enum):
    """Horizontal alignment of cell text."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class TableTheme(str, Enum):
    """Visual theme of a table."""

    GRID = "grid"
    STRIPED = "striped"


class HeaderVisibility(str, Enum):
    """When the table header row is drawn."""

    EVERY_PAGE = "every_page"
    FIRST_PAGE = "first_page"
    NEVER = "never"


class ImageFormat(str, Enum):
    """Image encodings the pipeline knows a filter chain for."""

    JPEG = "JPEG"
    PNG = "PNG"
