"""Document composition service.

``DocumentComposer`` owns the document being built: its pages, the cursor,
registered images and the object writer handing out object numbers. Draw calls
are translated by the layout components into content stream operators of the
current page.
"""

import re
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence

from ..config.layout import DEFAULT_LAYOUT, LayoutConfig
from ..middleware.exceptions import DuplicateImageError, InvalidDocumentStateError
from ..middleware.logging import logger
from ..models.domain import (
    Column,
    Cursor,
    Document,
    DocumentStatus,
    DrawMode,
    FontFamily,
    FontStyle,
    HeadingLevel,
    ImageElement,
    ImageResource,
    Page,
    RectElement,
    TableOptions,
    TextElement,
)
from ..pdf_writer.images import embed, image_xobject
from ..pdf_writer.primitives import (
    image_operators,
    line_operators,
    rect_operators,
    text_operators,
)
from ..pdf_writer.serializer import DocumentSerializer, ObjectWriter
from ..pdf_writer.tables import TableRenderer
from ..pdf_writer.text import LayoutOptions, TextLayoutEngine
from .image_source import load_image_file
from .output import OutputSink

INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class DocumentComposer:
    """Builds a single PDF document from drawing commands.

    Not thread-safe; one composer serves one caller.
    """

    def __init__(self, config: LayoutConfig = DEFAULT_LAYOUT) -> None:
        self.config = config
        self.document = Document()
        self.writer = ObjectWriter()
        self.text_engine = TextLayoutEngine(config)
        self._output: Optional[bytes] = None

    # --- state ---

    def _ensure_draft(self) -> None:
        if self.document.status != DocumentStatus.DRAFT:
            logger.warning("Draw call on a finalized document")
            raise InvalidDocumentStateError(
                "Document is finalized", details={"status": self.document.status}
            )

    def add_page(self) -> Page:
        """Start a new page; the cursor is reset to the top margin."""
        self._ensure_draft()
        page = Page(
            number=self.document.page_count + 1,
            object_number=self.writer.reserve_object_number(),
            content_object_number=self.writer.reserve_object_number(),
        )
        self.document.add_page(page)
        self.document.cursor = None
        logger.debug("Page added", extra={"page": page.number})
        return page

    def new_page(self) -> None:
        self.add_page()

    @property
    def current_page(self) -> Page:
        return self.document.current_page or self.add_page()

    def add_operators(self, operators: str) -> None:
        self.current_page.add_operators(operators)

    @property
    def cursor_y(self) -> Optional[float]:
        """Bottom of the last auto-advancing placement, None at the top of a page."""
        return self.document.cursor.y if self.document.cursor else None

    @cursor_y.setter
    def cursor_y(self, value: Optional[float]) -> None:
        if value is None:
            self.document.cursor = None
            return
        x = self.document.cursor.x if self.document.cursor else self.config.margin
        self.document.cursor = Cursor(x=x, y=value)

    def _graphics_state(self, opacity: float) -> Optional[str]:
        if opacity >= 1.0:
            return None
        key = round(opacity, 3)
        states = self.document.graphics_states
        if key not in states:
            states[key] = f"GS{len(states) + 1}"
        return states[key]

    # --- text ---

    def place_text(
        self,
        text: str,
        x: Optional[float] = None,
        y: Optional[float] = None,
        max_width: Optional[float] = None,
        font_size: float = 12.0,
        style: FontStyle = FontStyle.NORMAL,
        wrap_x: Optional[float] = None,
        color: Optional[str] = None,
        font_family: FontFamily | str = FontFamily.HELVETICA,
        strikethrough: bool = False,
        rotation: int = 0,
        scale_x: float = 1.0,
        scale_y: float = 1.0,
        opacity: float = 1.0,
        auto_page_break: bool = True,
    ) -> List[TextElement]:
        """Place text, wrapping it when ``max_width`` is given.

        Args:
            text: Text to place
            x: Left edge, the page margin when None
            y: Top edge, the cursor when None
            max_width: Wrap width in points, no wrapping when None
            font_size: Font size in points
            style: Font style
            wrap_x: X of continuation lines, the starting X when None
            color: Hex RGB color
            font_family: Font family name
            strikethrough: Strike through the text
            rotation: Rotation in degrees
            scale_x: Horizontal scale
            scale_y: Vertical scale
            opacity: Fill opacity
            auto_page_break: Continue on a new page when the text overflows

        Returns:
            The lines placed; with ``auto_page_break`` off, a last element
            flagged ``page_break_needed`` holds the text that did not fit
        """
        options = LayoutOptions(
            font_size=font_size,
            style=style,
            max_width=max_width,
            wrap_x=wrap_x,
            color=color,
            font_family=font_family,
            strikethrough=strikethrough,
            rotation=rotation,
            scale_x=scale_x,
            scale_y=scale_y,
            opacity=opacity,
        )
        return self._place(text, x, y, options, auto_page_break)

    def place_heading(
        self,
        text: str,
        level: HeadingLevel = HeadingLevel.H1,
        x: Optional[float] = None,
        y: Optional[float] = None,
        color: Optional[str] = None,
        font_family: FontFamily | str = FontFamily.HELVETICA,
        style: FontStyle = FontStyle.BOLD,
        auto_page_break: bool = True,
    ) -> List[TextElement]:
        """Place a heading. Headings are never wrapped."""
        options = LayoutOptions(
            heading=HeadingLevel(level),
            style=style,
            color=color,
            font_family=font_family,
        )
        return self._place(text, x, y, options, auto_page_break)

    def _place(
        self,
        text: str,
        x: Optional[float],
        y: Optional[float],
        options: LayoutOptions,
        auto_page_break: bool,
    ) -> List[TextElement]:
        self._ensure_draft()
        # absolute single-line labels leave the cursor alone
        advances = y is None or options.max_width is not None or options.heading is not None
        height = self.text_engine.line_height_for(options)
        placed: List[TextElement] = []
        continued = False

        while True:
            elements = self.text_engine.layout(
                text, x, y, options, cursor_y=self.cursor_y, continued=continued
            )
            fitting = [e for e in elements if not e.page_break_needed]
            for element in fitting:
                self.add_operators(
                    text_operators(element, self.config, self._graphics_state(element.opacity))
                )
            placed.extend(fitting)
            if fitting and advances:
                self.document.cursor = Cursor(x=fitting[-1].x, y=fitting[-1].y + height)

            overflow = elements[-1] if elements[-1].page_break_needed else None
            if overflow is None:
                return placed
            if not auto_page_break:
                placed.append(overflow)
                return placed
            if overflow.y <= self.config.margin:
                # does not fit even on an empty page
                logger.warning(
                    "Text taller than the printable area",
                    extra={"font_size": overflow.font_size},
                )
                self.add_operators(
                    text_operators(overflow, self.config, self._graphics_state(overflow.opacity))
                )
                if advances:
                    self.document.cursor = Cursor(x=overflow.x, y=overflow.y + height)
                placed.append(overflow)
                return placed

            self.add_page()
            text, x, y = overflow.text, overflow.x, None
            continued = continued or bool(fitting)

    # --- images ---

    def place_image(
        self,
        data: bytes,
        format: Optional[str] = None,
        x: float = 0.0,
        y: float = 0.0,
        width: float = 100.0,
        height: float = 100.0,
        identifier: Optional[str] = None,
    ) -> ImageElement:
        """Place an image scaled into the given box.

        Placing the same identifier again reuses the registered image.

        Raises:
            DuplicateImageError: If the identifier is registered with other bytes
        """
        self._ensure_draft()
        name = INVALID_NAME_CHARS.sub("_", identifier) if identifier else None
        if not name:
            counter = len(self.document.images) + 1
            while f"Im{counter}" in self.document.images:
                counter += 1
            name = f"Im{counter}"
        element = ImageElement(
            identifier=name, format=format, data=data,
            x=x, y=y, width=width, height=height,
        )

        embedded = embed(element.data, element.format)
        registered = self.document.images.get(name)
        if registered is not None:
            if registered.embedded.hex_payload != embedded.hex_payload:
                logger.warning("Image identifier reused", extra={"identifier": name})
                raise DuplicateImageError(name)
        else:
            self.document.images[name] = ImageResource(
                name=name,
                object_number=self.writer.reserve_object_number(),
                dictionary=image_xobject(embedded, element.width, element.height),
                embedded=embedded,
            )

        self.add_operators(
            image_operators(
                name, element.x, element.y, element.width, element.height,
                self.config.page_height,
            )
        )
        return element

    def place_image_file(
        self,
        path: str | Path,
        x: float = 0.0,
        y: float = 0.0,
        width: float = 100.0,
        height: float = 100.0,
        identifier: Optional[str] = None,
    ) -> ImageElement:
        """Place an image read from disk, converting formats PDF cannot carry."""
        data, image_format = load_image_file(path)
        return self.place_image(data, image_format, x, y, width, height, identifier)

    # --- shapes and tables ---

    def place_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        mode: DrawMode = DrawMode.STROKE,
        stroke_color: Optional[str] = None,
        fill_color: Optional[str] = None,
        stroke_width: Optional[float] = 1.0,
        raw_operators: Optional[str] = None,
    ) -> RectElement:
        """Place a rectangle, or raw operators when ``raw_operators`` is given."""
        self._ensure_draft()
        rect = RectElement(
            x=x, y=y, width=width, height=height, mode=mode,
            stroke_color=stroke_color, fill_color=fill_color,
            stroke_width=stroke_width, raw_operators=raw_operators,
        )
        self.add_operators(rect_operators(rect, self.config.page_height))
        return rect

    def place_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        color: Optional[str] = None,
        width: float = 1.0,
    ) -> RectElement:
        """Place a straight rule, e.g. a diagonal, through the raw override."""
        return self.place_rect(
            x=min(x1, x2), y=min(y1, y2), width=abs(x2 - x1), height=abs(y2 - y1),
            raw_operators=line_operators(
                x1, y1, x2, y2, self.config.page_height, color, width
            ),
        )

    def draw_table(
        self,
        columns: Sequence[Column],
        rows: Sequence[Mapping[str, Any]],
        options: Optional[TableOptions] = None,
    ) -> float:
        """Draw a table at the cursor and move the cursor below it.

        Returns:
            New cursor Y

        Raises:
            NoColumnsError: If ``columns`` is empty
        """
        self._ensure_draft()
        bottom = TableRenderer(self, self.config).draw(columns, rows, options)
        self.document.cursor = Cursor(x=self.config.margin, y=bottom)
        return bottom

    # --- output ---

    def render(self) -> bytes:
        """Serialize the document. Terminal: the document is finalized.

        Repeated calls return the same bytes.
        """
        if self._output is not None:
            return self._output
        self._ensure_draft()
        if not self.document.pages:
            self.add_page()

        output = DocumentSerializer(self.writer, self.config).serialize(self.document)
        self.document.update_status(DocumentStatus.FINALIZED)
        self._output = output
        logger.info(
            "Document rendered",
            extra={
                "pages": self.document.page_count,
                "images": len(self.document.images),
                "size_in_bytes": len(output),
            },
        )
        return output

    def finalize(self, sink: OutputSink) -> str:
        """Render the document and hand the bytes to ``sink``.

        Sink errors propagate unchanged; the rendered bytes are kept, so the
        call may be repeated.

        Returns:
            Identifier assigned by the sink
        """
        output = self.render()
        identifier = sink.write(output)
        logger.info("Document written", extra={"identifier": identifier})
        return identifier
