"""Table layout: column sizing, theming, pagination and cell text."""

from typing import Any, List, Mapping, Optional, Protocol, Sequence

from ..config.layout import DEFAULT_LAYOUT, LayoutConfig
from ..middleware.exceptions import NoColumnsError, NoOutputTargetError
from ..middleware.logging import logger
from ..models.domain import (
    Alignment,
    CellStyle,
    Column,
    DrawMode,
    FontStyle,
    HeaderVisibility,
    RectElement,
    TableOptions,
    TableTheme,
    TextElement,
)
from .primitives import line_operators, rect_operators, text_operators
from .text import estimate_width

ELLIPSIS = "..."
STRIPED_HEADER_FILL = "333333"
STRIPED_HEADER_TEXT = "FFFFFF"
GRID_RULE_COLOR = "999999"


class TableTarget(Protocol):
    """Where a table draws: the current page of a document."""

    @property
    def cursor_y(self) -> Optional[float]: ...

    def add_operators(self, operators: str) -> None: ...

    def new_page(self) -> None: ...


class TableRenderer:
    """Draws tables onto a ``TableTarget``, starting new pages as rows overflow."""

    def __init__(
        self, target: Optional[TableTarget], config: LayoutConfig = DEFAULT_LAYOUT
    ) -> None:
        self.target = target
        self.config = config

    def column_widths(self, columns: Sequence[Column], available: float) -> List[float]:
        """
        Allocate column widths.

        Fixed widths are kept; what is left of ``available`` is split equally
        between the other columns.

        Args:
            columns (Sequence[Column]): Column definitions.
            available (float): Width between the margins.

        Returns:
            List[float]: One width per column.
        """
        fixed = sum(c.width for c in columns if c.width is not None)
        flexible = [c for c in columns if c.width is None]
        remaining = max(0.0, available - fixed)
        if fixed > available:
            logger.warning(
                "Fixed column widths exceed the available width",
                extra={"fixed": fixed, "available": available},
            )
        share = remaining / len(flexible) if flexible else 0.0
        return [c.width if c.width is not None else share for c in columns]

    def truncate(self, text: str, width: float, font_size: float, style: FontStyle) -> str:
        """Shorten ``text`` with an ellipsis until it fits ``width``."""

        def measure(value: str) -> float:
            return estimate_width(value, font_size, style, self.config)

        if measure(text) <= width:
            return text
        while text and measure(text + ELLIPSIS) > width:
            text = text[:-1]
        return text.rstrip() + ELLIPSIS

    def draw(
        self,
        columns: Sequence[Column],
        rows: Sequence[Mapping[str, Any]],
        options: Optional[TableOptions] = None,
    ) -> float:
        """
        Draw a table and return the Y at which following content should start.

        Args:
            columns (Sequence[Column]): Column definitions, in order.
            rows (Sequence[Mapping[str, Any]]): Row values keyed by column key.
            options (Optional[TableOptions]): Theme, header policy and styles.

        Returns:
            float: Bottom of the last row plus the table margin.

        Raises:
            NoOutputTargetError: If the renderer has no target.
            NoColumnsError: If ``columns`` is empty.
        """
        if self.target is None:
            logger.warning("Table drawn without an output target")
            raise NoOutputTargetError()
        if not columns:
            logger.warning("Table drawn without columns")
            raise NoColumnsError()

        options = options or TableOptions()
        config = self.config
        margin = options.margin if options.margin is not None else config.margin
        widths = self.column_widths(columns, config.page_width - 2 * margin)
        header_height = config.table_header_height
        row_height = config.table_row_height

        y = options.start_y
        if y is None:
            y = self.target.cursor_y if self.target.cursor_y is not None else config.margin

        first_block = header_height if self._show_header(options, True) else row_height
        if y + first_block > config.bottom_limit and y > config.margin:
            self.target.new_page()
            y = config.margin

        segment = _Segment(top=y)
        if self._show_header(options, True):
            self._draw_header(columns, widths, margin, y, options)
            y += header_height
            segment.row_bottoms.append(y)

        for index, row in enumerate(rows):
            if y + row_height > config.bottom_limit and y > segment.top:
                self._finish_segment(segment, widths, margin, y, options)
                self.target.new_page()
                y = config.margin
                segment = _Segment(top=y)
                if self._show_header(options, False):
                    self._draw_header(columns, widths, margin, y, options)
                    y += header_height
                    segment.row_bottoms.append(y)

            self._draw_row(columns, widths, margin, y, row, index, options)
            y += row_height
            segment.row_bottoms.append(y)

        self._finish_segment(segment, widths, margin, y, options)
        logger.debug(
            "Table drawn",
            extra={"columns": len(columns), "rows": len(rows), "bottom": y},
        )
        return y + margin

    @staticmethod
    def _show_header(options: TableOptions, first_page: bool) -> bool:
        if options.header_visibility == HeaderVisibility.EVERY_PAGE:
            return True
        if options.header_visibility == HeaderVisibility.FIRST_PAGE:
            return first_page
        return False

    def _base_style(self) -> CellStyle:
        return CellStyle(
            font_size=self.config.table_font_size,
            font_style=FontStyle.NORMAL,
            text_color="000000",
            align=Alignment.LEFT,
        )

    def _header_style(self, options: TableOptions) -> CellStyle:
        style = options.header_style.merged_over(self._base_style())
        if options.theme == TableTheme.STRIPED:
            style = style.model_copy(
                update={"fill_color": STRIPED_HEADER_FILL, "text_color": STRIPED_HEADER_TEXT}
            )
        return style

    def _row_style(self, index: int, options: TableOptions) -> CellStyle:
        style = options.body_style.merged_over(self._base_style())
        if index % 2 == 1:
            style = options.alternate_style.merged_over(style)
        elif options.theme == TableTheme.STRIPED:
            style = style.model_copy(update={"fill_color": None})
        return style

    def _draw_header(
        self,
        columns: Sequence[Column],
        widths: List[float],
        left: float,
        top: float,
        options: TableOptions,
    ) -> None:
        style = self._header_style(options)
        x = left
        for column, width in zip(columns, widths):
            self._draw_cell(column.title, x, top, width, self.config.table_header_height, style)
            x += width

    def _draw_row(
        self,
        columns: Sequence[Column],
        widths: List[float],
        left: float,
        top: float,
        row: Mapping[str, Any],
        index: int,
        options: TableOptions,
    ) -> None:
        row_style = self._row_style(index, options)
        x = left
        for column, width in zip(columns, widths):
            style = column.style.merged_over(row_style) if column.style else row_style
            value = row.get(column.key)
            self._draw_cell(
                "" if value is None else str(value),
                x,
                top,
                width,
                self.config.table_row_height,
                style,
            )
            x += width

    def _draw_cell(
        self, text: str, x: float, top: float, width: float, height: float, style: CellStyle
    ) -> None:
        config = self.config
        if style.fill_color:
            fill = RectElement(
                x=x, y=top, width=width, height=height,
                mode=DrawMode.FILL, fill_color=style.fill_color,
            )
            self.target.add_operators(rect_operators(fill, config.page_height))

        padding = config.table_cell_padding
        interior = width - 2 * padding
        # no room for any text, not even the ellipsis
        if not text or interior <= 0:
            return
        content = self.truncate(text, interior, style.font_size, style.font_style)
        text_width = estimate_width(content, style.font_size, style.font_style, config)

        if style.align == Alignment.CENTER:
            text_x = x + (width - text_width) / 2
        elif style.align == Alignment.RIGHT:
            text_x = x + width - padding - text_width
        else:
            text_x = x + padding

        element = TextElement(
            text=content,
            x=text_x,
            y=top + (height - style.font_size) / 2,
            font_size=style.font_size,
            style=style.font_style,
            color=style.text_color,
        )
        self.target.add_operators(text_operators(element, config))

    def _finish_segment(
        self,
        segment: "_Segment",
        widths: List[float],
        left: float,
        bottom: float,
        options: TableOptions,
    ) -> None:
        """Draw the grid of the rows placed on the current page."""
        if options.theme != TableTheme.GRID or bottom <= segment.top:
            return
        config = self.config
        total = sum(widths)

        def rule(x1: float, y1: float, x2: float, y2: float) -> None:
            line = RectElement(
                raw_operators=line_operators(
                    x1, y1, x2, y2, config.page_height,
                    GRID_RULE_COLOR, config.table_rule_width,
                )
            )
            self.target.add_operators(rect_operators(line, config.page_height))

        outline = RectElement(
            x=left,
            y=segment.top,
            width=total,
            height=bottom - segment.top,
            mode=DrawMode.STROKE,
            stroke_color=GRID_RULE_COLOR,
            stroke_width=config.table_rule_width,
        )
        self.target.add_operators(rect_operators(outline, config.page_height))

        x = left
        for width in widths[:-1]:
            x += width
            rule(x, segment.top, x, bottom)
        for row_bottom in segment.row_bottoms[:-1]:
            rule(left, row_bottom, left + total, row_bottom)


class _Segment:
    """Rows of one table placed on a single page."""

    def __init__(self, top: float) -> None:
        self.top = top
        self.row_bottoms: List[float] = []
