"""Tests for DocumentComposer, from draw calls to serialized bytes."""

import re
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

import pypdfium2 as pdfium
from PIL import Image

from pdfcomposer.middleware.exceptions import (
    DuplicateImageError,
    InvalidDocumentStateError,
    NoColumnsError,
)
from pdfcomposer.models.domain import (
    Column,
    DocumentStatus,
    DrawMode,
    FontStyle,
    HeadingLevel,
)
from pdfcomposer.services.composer import DocumentComposer
from pdfcomposer.services.output import OutputSink

JPEG_BYTES = b"\xff\xd8\xff\xe0abc"
RECT = re.compile(r"(-?[\d.]+) (-?[\d.]+) (-?[\d.]+) (-?[\d.]+) re")


def xref_offsets(output: bytes):
    """Return the in-use offsets listed in the xref table, by object number."""
    start = int(re.search(rb"startxref\n(\d+)\n", output).group(1))
    lines = output[start:].split(b"\n")
    count = int(lines[1].split()[1])
    entries = lines[2 : 2 + count]
    return {n: int(entry[:10]) for n, entry in enumerate(entries) if entry.endswith(b"n ")}


class TestDocumentComposerText(unittest.TestCase):
    """Test cases for text placement and the cursor."""

    def setUp(self):
        """Set up test fixtures."""
        self.composer = DocumentComposer()

    def test_first_text_starts_at_margin(self):
        element = self.composer.place_text("Hello")[0]

        self.assertEqual((element.x, element.y), (50, 50))
        self.assertAlmostEqual(self.composer.cursor_y, 64.4)
        self.assertEqual(self.composer.document.page_count, 1)

    def test_cursor_advances_by_line_height(self):
        self.composer.place_text("one")
        element = self.composer.place_text("two")[0]

        self.assertAlmostEqual(element.y, 64.4)

    def test_text_after_heading_does_not_overlap(self):
        heading = self.composer.place_heading("Title", level=HeadingLevel.H1)[0]
        body = self.composer.place_text("Body")[0]

        self.assertGreaterEqual(body.y, heading.y + heading.font_size)
        self.assertAlmostEqual(body.y, 86.0)

    def test_cursor_is_bottom_of_last_line(self):
        lines = self.composer.place_text("aaaa bbbb cccc dddd", max_width=60)

        self.assertEqual(len(lines), 2)
        self.assertAlmostEqual(self.composer.cursor_y, lines[-1].y + 14.4)

    def test_absolute_label_keeps_cursor(self):
        """Test that an absolute single-line label does not move the cursor."""
        self.composer.place_text("one")
        self.composer.place_text("label", x=300, y=400)
        element = self.composer.place_text("two")[0]

        self.assertAlmostEqual(element.y, 64.4)

    def test_heading_defaults_to_bold(self):
        element = self.composer.place_heading("Title", level=HeadingLevel.H2)[0]

        self.assertEqual(element.font_size, 18)
        self.assertEqual(element.style, FontStyle.BOLD)
        self.assertIn("/F2 18 Tf", self.composer.current_page.content)

    def test_overflow_continues_on_new_page(self):
        """Test that wrapped text crossing the bottom continues on a new page."""
        self.composer.place_text("start")
        self.composer.cursor_y = 730

        placed = self.composer.place_text("aaaa bbbb cccc dddd", max_width=60)

        self.assertEqual(self.composer.document.page_count, 2)
        self.assertEqual([e.text for e in placed], ["aaaa bbbb", "cccc dddd"])
        self.assertEqual(placed[0].y, 50)
        self.assertFalse(any(e.page_break_needed for e in placed))
        self.assertIn("(aaaa bbbb) Tj", self.composer.current_page.content)

    def test_continuation_on_new_page_uses_full_width(self):
        """Test that an indented paragraph continues on a new page without the indent."""
        self.composer.cursor_y = 700

        placed = self.composer.place_text(
            "aaaa bbbb cccc dddd eeee gggg", x=80, max_width=60, wrap_x=80
        )

        self.assertEqual(self.composer.document.page_count, 2)
        self.assertEqual(
            [e.text for e in placed], ["aaaa", "bbbb cccc", "dddd eeee", "gggg"]
        )
        self.assertEqual(placed[2].y, 50)

    def test_overflow_without_auto_page_break(self):
        self.composer.place_text("start")
        self.composer.cursor_y = 730

        placed = self.composer.place_text(
            "aaaa bbbb cccc dddd", max_width=60, auto_page_break=False
        )

        self.assertEqual(self.composer.document.page_count, 1)
        self.assertTrue(placed[-1].page_break_needed)
        self.assertEqual(placed[-1].text, "aaaa bbbb cccc dddd")

    def test_opacity_registers_graphics_state(self):
        self.composer.place_text("faded", opacity=0.5)
        self.composer.place_text("also faded", opacity=0.5)

        self.assertEqual(self.composer.document.graphics_states, {0.5: "GS1"})
        self.assertIn("/GS1 gs", self.composer.current_page.content)

    def test_cursor_reset_on_new_page(self):
        self.composer.place_text("one")
        self.composer.add_page()

        self.assertIsNone(self.composer.cursor_y)


class TestDocumentComposerImages(unittest.TestCase):
    """Test cases for image registration."""

    def setUp(self):
        """Set up test fixtures."""
        self.composer = DocumentComposer()

    def test_place_image(self):
        element = self.composer.place_image(JPEG_BYTES, "jpg", 10, 20, 100, 50)

        self.assertEqual(element.identifier, "Im1")
        resource = self.composer.document.images["Im1"]
        self.assertEqual(resource.object_number, 3)
        self.assertIn("/Im1 Do", self.composer.current_page.content)

    def test_identifier_is_sanitized(self):
        element = self.composer.place_image(JPEG_BYTES, identifier="logo image!")

        self.assertEqual(element.identifier, "logo_image_")

    def test_same_image_is_reused(self):
        self.composer.place_image(JPEG_BYTES, identifier="logo")
        self.composer.place_image(JPEG_BYTES, identifier="logo", x=200)

        self.assertEqual(len(self.composer.document.images), 1)
        self.assertEqual(self.composer.current_page.content.count("/logo Do"), 2)

    def test_generated_name_skips_taken_identifier(self):
        self.composer.place_image(b"\xff\xd8A", "jpeg", identifier="Im2")
        element = self.composer.place_image(b"\xff\xd8B", "jpeg")

        self.assertEqual(element.identifier, "Im3")
        self.assertEqual(set(self.composer.document.images), {"Im2", "Im3"})

    def test_identifier_reused_for_other_bytes(self):
        self.composer.place_image(JPEG_BYTES, identifier="logo")

        with self.assertRaises(DuplicateImageError) as context:
            self.composer.place_image(b"\x89PNG", "png", identifier="logo")

        self.assertEqual(context.exception.details["identifier"], "logo")

    def test_place_image_file_converts_format(self):
        """Test that a GIF on disk is embedded as JPEG."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "pixel.gif"
            Image.new("RGB", (4, 4), (0, 128, 255)).save(path, format="GIF")

            self.composer.place_image_file(path, 10, 10, 40, 40, identifier="pixel")

        embedded = self.composer.document.images["pixel"].embedded
        self.assertEqual(embedded.normalized_format, "JPEG")
        self.assertTrue(embedded.hex_payload.startswith("FFD8"))


class TestDocumentComposerShapes(unittest.TestCase):
    """Test cases for rectangles, lines and tables."""

    def setUp(self):
        """Set up test fixtures."""
        self.composer = DocumentComposer()

    def test_place_rect(self):
        self.composer.place_rect(10, 20, 100, 50, mode=DrawMode.FILL, fill_color="FF0000")

        self.assertIn("10 722 100 50 re f", self.composer.current_page.content)

    def test_place_line(self):
        self.composer.place_line(0, 0, 100, 100, color="0000FF")

        self.assertIn("0 792 m 100 692 l S", self.composer.current_page.content)

    def test_draw_table_moves_cursor(self):
        columns = [Column(title="A", key="a")]
        bottom = self.composer.draw_table(columns, [{"a": 1}])

        self.assertEqual(bottom, 144)
        self.assertEqual(self.composer.cursor_y, 144)

    def test_draw_table_paginates(self):
        columns = [Column(title="A", key="a")]
        self.composer.draw_table(columns, [{"a": i} for i in range(40)])

        self.assertEqual(self.composer.document.page_count, 2)

    def test_draw_table_without_columns(self):
        with self.assertRaises(NoColumnsError):
            self.composer.draw_table([], [{"a": 1}])

        self.assertEqual(self.composer.current_page.content, "")
        self.assertIsNone(self.composer.cursor_y)

    def test_table_starts_below_text(self):
        lines = self.composer.place_text("aaaa bbbb cccc dddd eeee " * 3, max_width=150)
        text_bottom = lines[-1].y + 14.4
        before = len(self.composer.current_page.content)

        self.composer.draw_table([Column(title="A", key="a")], [{"a": 1}])

        table_ops = self.composer.current_page.content[before:]
        x, pdf_y, width, height = map(float, RECT.search(table_ops).groups())
        self.assertAlmostEqual(792 - pdf_y - height, text_bottom, places=2)
        self.assertAlmostEqual(self.composer.cursor_y, text_bottom + 24 + 20 + 50, places=2)


class TestDocumentComposerOutput(unittest.TestCase):
    """Test cases for serialization and finalization."""

    def setUp(self):
        """Set up test fixtures."""
        self.composer = DocumentComposer()

    def test_empty_document_has_one_blank_page(self):
        output = self.composer.render()

        self.assertEqual(self.composer.document.page_count, 1)
        self.assertIn(b"/Size 5 ", output)

    def test_xref_offsets_point_at_objects(self):
        """Test that every xref entry points at its object marker.

        Pages take two objects each, the page dictionary and its content
        stream.
        """
        self.composer.place_heading("Report")
        self.composer.place_text("Body text " * 40, max_width=300)
        self.composer.place_image(JPEG_BYTES, "jpeg", 50, 200, 80, 80)
        self.composer.add_page()
        self.composer.place_rect(50, 50, 100, 100)

        output = self.composer.render()
        offsets = xref_offsets(output)

        # catalog, page tree, two objects per page, one per image
        self.assertEqual(len(offsets), 2 + 2 * 2 + 1)
        for number, offset in offsets.items():
            self.assertTrue(
                output[offset:].startswith(f"{number} 0 obj".encode()),
                f"object {number} not at {offset}",
            )

    def test_heading_paragraph_and_table(self):
        """Test a heading, a three-line paragraph and a grid table on one page.

        Each page is two objects, its dictionary and its content stream, so
        the document holds 2 + 2 * pages + images objects instead of
        2 + pages + images.
        """
        heading = self.composer.place_heading("Quarterly report")[0]
        lines = self.composer.place_text("aaaa bbbb cccc dddd eeee " * 3, max_width=150)
        columns = [Column(title="Item", key="item"), Column(title="Total", key="total")]
        rows = [{"item": f"Item {i}", "total": i * 10} for i in range(3)]
        self.composer.draw_table(columns, rows)

        self.assertEqual(len(lines), 3)
        self.assertGreaterEqual(lines[0].y, heading.y + heading.font_size)

        output = self.composer.render()
        offsets = xref_offsets(output)
        ordered = [offsets[number] for number in sorted(offsets)]

        self.assertEqual(self.composer.document.page_count, 1)
        self.assertEqual(sorted(offsets), [1, 2, 3, 4])
        self.assertTrue(all(a < b for a, b in zip(ordered, ordered[1:])))
        self.assertIn(b"/Size 5 ", output)

    def test_image_stream(self):
        self.composer.place_image(JPEG_BYTES, "jpg", 0, 0, 10, 10)
        output = self.composer.render()

        self.assertIn(b"/Filter [/ASCIIHexDecode /DCTDecode]", output)
        self.assertIn(b"FFD8FFE0616263>", output)
        self.assertIn(b"/XObject << /Im1 3 0 R >>", output)

    def test_render_is_terminal_and_cached(self):
        self.composer.place_text("Hello")
        output = self.composer.render()

        self.assertIs(self.composer.render(), output)
        self.assertEqual(self.composer.document.status, DocumentStatus.FINALIZED)
        with self.assertRaises(InvalidDocumentStateError):
            self.composer.place_text("late")
        with self.assertRaises(InvalidDocumentStateError):
            self.composer.add_page()

    def test_finalize_hands_bytes_to_sink(self):
        sink = MagicMock(spec=OutputSink)
        sink.write.return_value = "doc_1"

        identifier = self.composer.finalize(sink)

        self.assertEqual(identifier, "doc_1")
        sink.write.assert_called_once_with(self.composer.render())

    def test_sink_error_propagates(self):
        sink = MagicMock(spec=OutputSink)
        sink.write.side_effect = OSError("disk full")

        with self.assertRaises(OSError):
            self.composer.finalize(sink)

    def test_output_opens_in_pdfium(self):
        """Test that a PDF reader accepts the output."""
        self.composer.place_text("Hello PDF")
        self.composer.place_rect(50, 100, 200, 50, stroke_color="FF0000")
        self.composer.add_page()
        self.composer.place_text("Second page", style=FontStyle.BOLD)

        pdf = pdfium.PdfDocument(self.composer.render())
        try:
            self.assertEqual(len(pdf), 2)
            page = pdf[0]
            self.assertEqual(tuple(page.get_size()), (612.0, 792.0))
            text = page.get_textpage().get_text_range()
            self.assertIn("Hello PDF", text)
        finally:
            pdf.close()


if __name__ == "__main__":
    unittest.main()
