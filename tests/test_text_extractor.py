"""
Tests for format-aware text extraction.
"""
import asyncio
from unittest.mock import patch

import pytest

from conftest import make_docx_bytes, make_pdf_bytes
from doc_summary.errors import DocumentProcessingError
from doc_summary.models import ExtractionResult, UnsupportedReason
from doc_summary.text_extractor import (
    DOCX_MIME_TYPE,
    LEGACY_DOC_MIME_TYPE,
    PDF_MIME_TYPE,
    TextExtractor,
    clean_extracted_text,
    extract,
    extract_async,
)


def write(tmp_path, name, data):
    path = tmp_path / name
    path.write_bytes(data)
    return path


class TestSupportedFormats:
    """PDF and DOCX uploads yield their text."""

    def test_pdf_text_in_page_order(self, tmp_path):
        path = write(tmp_path, "upload", make_pdf_bytes("First page", "Second page"))

        result = extract(path, PDF_MIME_TYPE)

        assert result.is_text
        assert "First page" in result.content
        assert "Second page" in result.content
        assert result.content.index("First page") < result.content.index("Second page")

    def test_docx_paragraphs(self, tmp_path):
        path = write(tmp_path, "upload", make_docx_bytes("Heading line", "Body paragraph"))

        result = extract(path, DOCX_MIME_TYPE)

        assert result.is_text
        assert "Heading line" in result.content
        assert "Body paragraph" in result.content

    def test_docx_table_text_included(self, tmp_path):
        import docx

        document = docx.Document()
        table = document.add_table(rows=1, cols=2)
        table.rows[0].cells[0].text = "Cell A"
        table.rows[0].cells[1].text = "Cell B"
        path = tmp_path / "table.docx"
        document.save(str(path))

        result = extract(path, DOCX_MIME_TYPE)

        assert "Cell A\tCell B" in result.content

    def test_async_wrapper(self, tmp_path):
        path = write(tmp_path, "upload", make_pdf_bytes("Async text"))

        result = asyncio.run(extract_async(path, PDF_MIME_TYPE))

        assert "Async text" in result.content

    def test_extractor_class_async(self, tmp_path):
        path = write(tmp_path, "upload", make_docx_bytes("Class wrapper"))

        result = asyncio.run(TextExtractor().extract_async(path, DOCX_MIME_TYPE))

        assert result.content == "Class wrapper"


class TestRejectedFormats:
    """Legacy and unknown types are rejected without being opened."""

    def test_legacy_doc_rejected_without_parse(self, tmp_path):
        path = write(tmp_path, "upload", b"\xd0\xcf\x11\xe0legacy")

        with patch("doc_summary.text_extractor.docx.Document") as mock_docx, \
                patch("doc_summary.text_extractor.pymupdf.open") as mock_pdf:
            result = extract(path, LEGACY_DOC_MIME_TYPE)

        assert not result.is_text
        assert result.reason == UnsupportedReason.LEGACY_FORMAT
        assert ".doc is not supported" in result.message
        mock_docx.assert_not_called()
        mock_pdf.assert_not_called()

    @pytest.mark.parametrize("mime_type", ["text/plain", "image/png", "", "application/octet-stream"])
    def test_unknown_types_rejected(self, tmp_path, mime_type):
        path = write(tmp_path, "upload", b"hello")

        result = extract(path, mime_type)

        assert result.reason == UnsupportedReason.UNSUPPORTED_FORMAT
        assert result.message == "Unsupported file type. Please upload a PDF, or DOCX file."


class TestEmptyAndMalformed:
    """Empty text and broken files are distinct failures."""

    def test_blank_pdf_has_no_text(self, tmp_path):
        path = write(tmp_path, "upload", make_pdf_bytes(""))

        result = extract(path, PDF_MIME_TYPE)

        assert result.reason == UnsupportedReason.NO_TEXT
        assert result.message == "Could not extract text from the document."

    def test_whitespace_only_docx_has_no_text(self, tmp_path):
        path = write(tmp_path, "upload", make_docx_bytes("   ", "\t", ""))

        result = extract(path, DOCX_MIME_TYPE)

        assert result.reason == UnsupportedReason.NO_TEXT

    def test_malformed_pdf_raises(self, tmp_path):
        path = write(tmp_path, "upload", b"this is not a pdf at all")

        with pytest.raises(DocumentProcessingError):
            extract(path, PDF_MIME_TYPE)

    def test_malformed_docx_raises(self, tmp_path):
        path = write(tmp_path, "upload", b"not a zip package")

        with pytest.raises(DocumentProcessingError):
            extract(path, DOCX_MIME_TYPE)


class TestExtractionResult:
    def test_text_variant_rejects_empty_content(self):
        with pytest.raises(ValueError):
            ExtractionResult.text("   ")

    def test_unsupported_variant_has_no_content(self):
        result = ExtractionResult.unsupported(UnsupportedReason.NO_TEXT)
        assert result.content is None
        assert not result.is_text


def test_clean_extracted_text():
    raw = "  Title\r\n\r\n\r\n\r\nBody\x00 line\rnext  \n"
    assert clean_extracted_text(raw) == "Title\n\nBody line\nnext"
