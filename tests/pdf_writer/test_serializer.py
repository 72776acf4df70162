"""Unit tests for the object writer and document serializer."""

import re
import unittest

from pdfcomposer.middleware.exceptions import SerializationError
from pdfcomposer.models.domain import Document, Page
from pdfcomposer.pdf_writer.serializer import HEADER, DocumentSerializer, ObjectWriter


class TestObjectWriter(unittest.TestCase):
    """Test cases for ObjectWriter."""

    def setUp(self):
        """Set up test fixtures."""
        self.writer = ObjectWriter()

    def test_reserve_starts_after_fixed_objects(self):
        self.assertEqual(self.writer.reserve_object_number(), 3)
        self.assertEqual(self.writer.reserve_object_number(), 4)
        self.assertEqual(self.writer.last_reserved, 4)

    def test_append_returns_offset(self):
        offset = self.writer.append_object(1, "<< >>")

        self.assertEqual(offset, len(HEADER))
        self.assertEqual(self.writer.offsets, [len(HEADER)])
        self.assertEqual(self.writer.object_count, 1)

    def test_append_out_of_order(self):
        with self.assertRaises(SerializationError) as context:
            self.writer.append_object(2, "<< >>")

        self.assertEqual(context.exception.details["expected"], 1)

    def test_append_stream_length(self):
        self.writer.append_object(1, "<< >>")
        self.writer.append_stream(2, "abc")
        output = self.writer.finish()

        self.assertIn(b"<< /Length 3 >>\nstream\nabc\nendstream", output)

    def test_finish_writes_xref_and_trailer(self):
        self.writer.append_object(1, "<< /Type /Catalog >>")
        output = self.writer.finish()

        self.assertTrue(output.startswith(b"%PDF-1.4\n"))
        self.assertIn(b"xref\n0 2\n0000000000 65535 f \n", output)
        self.assertIn(f"{len(HEADER):010d} 00000 n \n".encode(), output)
        self.assertIn(b"/Size 2 /Root 1 0 R", output)
        self.assertTrue(output.endswith(b"%%EOF\n"))

        startxref = int(re.search(rb"startxref\n(\d+)\n", output).group(1))
        self.assertTrue(output[startxref:].startswith(b"xref"))

    def test_finish_is_terminal(self):
        self.writer.finish()

        with self.assertRaises(SerializationError):
            self.writer.append_object(1, "<< >>")
        with self.assertRaises(SerializationError):
            self.writer.finish()


class TestDocumentSerializer(unittest.TestCase):
    """Test cases for DocumentSerializer."""

    def setUp(self):
        """Set up test fixtures."""
        self.writer = ObjectWriter()
        self.serializer = DocumentSerializer(self.writer)

    def _page(self, number: int) -> Page:
        return Page(
            number=number,
            object_number=self.writer.reserve_object_number(),
            content_object_number=self.writer.reserve_object_number(),
        )

    def test_serialize_pages(self):
        """Test that pages and the shared resources are written."""
        document = Document()
        first = self._page(1)
        first.add_operators("0 0 m 10 10 l S")
        document.add_page(first)
        document.add_page(self._page(2))

        output = self.serializer.serialize(document)

        self.assertIn(b"1 0 obj\n<< /Type /Catalog /Pages 2 0 R >>", output)
        self.assertIn(b"/Kids [3 0 R 5 0 R] /Count 2", output)
        self.assertIn(b"/MediaBox [0 0 612 792]", output)
        self.assertIn(b"/Contents 4 0 R", output)
        self.assertIn(b"/F1 << /Type /Font /Subtype /Type1 /BaseFont /Helvetica", output)
        self.assertIn(b"/F8 << /Type /Font /Subtype /Type1 /BaseFont /Courier-Bold", output)
        self.assertIn(b"/Encoding /WinAnsiEncoding", output)
        self.assertIn(b"/ProcSet [/PDF /Text /ImageB /ImageC /ImageI]", output)
        self.assertNotIn(b"/XObject", output)
        self.assertNotIn(b"/ExtGState", output)
        self.assertIn(b"<< /Length 15 >>\nstream\n0 0 m 10 10 l S\nendstream", output)
        self.assertIn(b"/Size 7 ", output)

    def test_graphics_states_are_shared_resources(self):
        document = Document(graphics_states={0.5: "GS1"})
        document.add_page(self._page(1))

        output = self.serializer.serialize(document)

        self.assertIn(b"/ExtGState << /GS1 << /Type /ExtGState /ca 0.5 /CA 0.5 >> >>", output)

    def test_unassigned_reserved_number(self):
        """Test that a reserved number without an object is rejected."""
        document = Document()
        document.add_page(self._page(1))
        self.writer.reserve_object_number()

        with self.assertRaises(SerializationError) as context:
            self.serializer.serialize(document)

        self.assertEqual(context.exception.details["object_number"], 5)


if __name__ == "__main__":
    unittest.main()
