import importlib.util
import unittest
from io import BytesIO

from domain.errors import ExtractionError
from infrastructure.text_extraction.plain_text_extractor import PlainTextExtractor


class TestPlainTextExtractor(unittest.TestCase):
    def test_decodes_bytes_and_passes_strings_through(self):
        extractor = PlainTextExtractor()
        self.assertEqual(extractor.extract("conspectus".encode("utf-8")), "conspectus")
        self.assertEqual(extractor.extract("already text"), "already text")

    def test_strips_byte_order_mark(self):
        self.assertEqual(PlainTextExtractor().extract(b"\xef\xbb\xbfnotes"), "notes")


@unittest.skipIf(importlib.util.find_spec("PyPDF2") is None, "PyPDF2 not installed")
class TestPdfExtractor(unittest.TestCase):
    def test_invalid_pdf_raises_extraction_error(self):
        from infrastructure.text_extraction.pdf_extractor import PdfExtractor

        with self.assertRaises(ExtractionError):
            PdfExtractor().extract(b"this is not a pdf")

    def test_blank_pages_yield_empty_text(self):
        from PyPDF2 import PdfWriter

        from infrastructure.text_extraction.pdf_extractor import PdfExtractor

        writer = PdfWriter()
        writer.add_blank_page(width=200, height=200)
        writer.add_blank_page(width=200, height=200)
        buffer = BytesIO()
        writer.write(buffer)

        self.assertEqual(PdfExtractor().extract(buffer.getvalue()), "")


if __name__ == "__main__":
    unittest.main()
