"""Indirect object writer and document serialization.

Object 1 is always the catalog and object 2 the page tree. Pages, content
streams and images take the following numbers in creation order.
"""

from typing import Dict, List, Optional, Tuple

from ..config.layout import DEFAULT_LAYOUT, LayoutConfig
from ..middleware.exceptions import SerializationError
from ..middleware.logging import logger
from ..models.domain import Document, Page
from .primitives import fmt

HEADER = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n"
CATALOG_OBJECT = 1
PAGES_OBJECT = 2
FIRST_FREE_OBJECT = 3
PROC_SET = "[/PDF /Text /ImageB /ImageC /ImageI]"


class ObjectWriter:
    """Append-only writer of indirect objects.

    Keeps the output buffer, the byte offset of every object in object-number
    order, and the counter handing out object numbers.
    """

    def __init__(self) -> None:
        self._buffer = bytearray(HEADER)
        self._offsets: List[int] = []
        self._next_number = FIRST_FREE_OBJECT
        self._finished = False

    def reserve_object_number(self) -> int:
        """Hand out the next free object number."""
        number = self._next_number
        self._next_number += 1
        return number

    @property
    def last_reserved(self) -> int:
        """Highest object number handed out, counting the reserved ones."""
        return self._next_number - 1

    @property
    def offsets(self) -> List[int]:
        return list(self._offsets)

    @property
    def object_count(self) -> int:
        return len(self._offsets)

    @property
    def size(self) -> int:
        return len(self._buffer)

    def append_object(self, number: int, content: str | bytes) -> int:
        """Append object ``number`` and return the offset it starts at.

        Args:
            number: Object number, must follow the last appended one
            content: Object body

        Returns:
            Byte offset of the ``<n> 0 obj`` marker

        Raises:
            SerializationError: If the writer is finished or the number is out of order
        """
        if self._finished:
            raise SerializationError(
                "Writer already finished", details={"object_number": number}
            )
        expected = len(self._offsets) + 1
        if number != expected:
            raise SerializationError(
                "Objects must be appended in number order",
                details={"object_number": number, "expected": expected},
            )

        body = content.encode("latin-1") if isinstance(content, str) else content
        offset = len(self._buffer)
        self._buffer += f"{number} 0 obj\n".encode("latin-1")
        self._buffer += body
        self._buffer += b"\nendobj\n"
        self._offsets.append(offset)
        return offset

    def append_stream(
        self, number: int, data: str, dictionary: Optional[str] = None
    ) -> int:
        """Append a stream object; ``dictionary`` defaults to just ``/Length``."""
        if dictionary is None:
            dictionary = f"<< /Length {len(data.encode('latin-1'))} >>"
        return self.append_object(number, f"{dictionary}\nstream\n{data}\nendstream")

    def finish(self, root: int = CATALOG_OBJECT) -> bytes:
        """Write the xref section and trailer and return the complete output.

        Finishing is terminal; no object can be appended afterwards.
        """
        if self._finished:
            raise SerializationError("Writer already finished")
        self._finished = True

        xref_offset = len(self._buffer)
        size = len(self._offsets) + 1
        entries = ["xref\n", f"0 {size}\n", "0000000000 65535 f \n"]
        entries.extend(f"{offset:010d} 00000 n \n" for offset in self._offsets)
        entries.append(f"trailer\n<< /Size {size} /Root {root} 0 R >>\n")
        entries.append(f"startxref\n{xref_offset}\n%%EOF\n")
        self._buffer += "".join(entries).encode("latin-1")
        return bytes(self._buffer)


class DocumentSerializer:
    """Writes a composed document through an ``ObjectWriter``."""

    def __init__(self, writer: ObjectWriter, config: LayoutConfig = DEFAULT_LAYOUT):
        self.writer = writer
        self.config = config

    def serialize(self, document: Document) -> bytes:
        """
        Serialize ``document`` into PDF bytes.

        Args:
            document (Document): Composed document.

        Returns:
            bytes: Complete PDF output.

        Raises:
            SerializationError: If a reserved object number has no object.
        """
        objects: Dict[int, Tuple[Optional[str], Optional[str]]] = {}
        for page in document.pages:
            objects[page.object_number] = (self.page_dictionary(page), None)
            objects[page.content_object_number] = (None, page.content)
        for image in document.images.values():
            objects[image.object_number] = (
                image.dictionary,
                image.embedded.hex_payload,
            )

        self.writer.append_object(
            CATALOG_OBJECT, f"<< /Type /Catalog /Pages {PAGES_OBJECT} 0 R >>"
        )
        self.writer.append_object(PAGES_OBJECT, self.pages_dictionary(document))

        for number in range(FIRST_FREE_OBJECT, self.writer.last_reserved + 1):
            if number not in objects:
                raise SerializationError(
                    "Reserved object number was never assigned",
                    details={"object_number": number},
                )
            dictionary, stream = objects[number]
            if stream is None:
                self.writer.append_object(number, dictionary)
            else:
                self.writer.append_stream(number, stream, dictionary)

        output = self.writer.finish()
        logger.debug(
            "Document serialized",
            extra={
                "pages": document.page_count,
                "objects": self.writer.object_count,
                "bytes": len(output),
            },
        )
        return output

    def media_box(self) -> str:
        return f"[0 0 {fmt(self.config.page_width)} {fmt(self.config.page_height)}]"

    def page_dictionary(self, page: Page) -> str:
        return (
            f"<< /Type /Page /Parent {PAGES_OBJECT} 0 R /MediaBox {self.media_box()}"
            f" /Contents {page.content_object_number} 0 R >>"
        )

    def pages_dictionary(self, document: Document) -> str:
        kids = " ".join(f"{page.object_number} 0 R" for page in document.pages)
        return (
            f"<< /Type /Pages /Kids [{kids}] /Count {document.page_count}"
            f" /MediaBox {self.media_box()} /Resources {self.resources(document)} >>"
        )

    def resources(self, document: Document) -> str:
        """Shared resource dictionary inherited by every page."""
        fonts = " ".join(
            f"/{font.name} << /Type /Font /Subtype /Type1 /BaseFont /{font.base_font}"
            " /Encoding /WinAnsiEncoding >>"
            for font in self.config.fonts
        )
        parts = [f"/ProcSet {PROC_SET}", f"/Font << {fonts} >>"]
        if document.images:
            xobjects = " ".join(
                f"/{name} {image.object_number} 0 R"
                for name, image in document.images.items()
            )
            parts.append(f"/XObject << {xobjects} >>")
        if document.graphics_states:
            states = " ".join(
                f"/{name} << /Type /ExtGState /ca {fmt(opacity)} /CA {fmt(opacity)} >>"
                for opacity, name in document.graphics_states.items()
            )
            parts.append(f"/ExtGState << {states} >>")
        return f"<< {' '.join(parts)} >>"
