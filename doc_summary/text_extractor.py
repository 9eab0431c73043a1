"""
text_extractor.py - Plain text extraction from uploaded documents

PDF files are read with PyMuPDF, DOCX packages with python-docx. The legacy
binary Word format and everything else is rejected without being opened.
"""

import asyncio
import logging
import re
from pathlib import Path
from typing import Callable, Dict, List

import docx
import pymupdf

from .errors import DocumentProcessingError
from .models import ExtractionResult, UnsupportedReason

_LOG = logging.getLogger("text_extractor")

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
LEGACY_DOC_MIME_TYPE = "application/msword"


def extract_pdf_text(file_path: Path) -> str:
    """Concatenate the text layer of every page, in page order."""
    with pymupdf.open(str(file_path), filetype="pdf") as doc:
        return "".join(page.get_text() for page in doc)


def extract_docx_text(file_path: Path) -> str:
    """Raw paragraph and table text from the main document part."""
    document = docx.Document(str(file_path))
    blocks: List[str] = [p.text for p in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            blocks.append("\t".join(cell.text for cell in row.cells))
    return "\n\n".join(blocks)


_EXTRACTORS: Dict[str, Callable[[Path], str]] = {
    PDF_MIME_TYPE: extract_pdf_text,
    DOCX_MIME_TYPE: extract_docx_text,
}


def clean_extracted_text(text: str) -> str:
    """Normalize line endings, drop NULs, collapse blank line runs and strip."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("\x00", "")
    text = re.sub(r"\n\s*\n\s*\n", "\n\n", text)
    return text.strip()


def extract(file_path: Path, mime_type: str) -> ExtractionResult:
    """Extract text from *file_path* according to its declared MIME type.

    Args:
        file_path: Path to a readable file
        mime_type: MIME type declared by the uploader

    Returns:
        ``ExtractionResult.text`` with non-empty content, or
        ``ExtractionResult.unsupported`` with the reason

    Raises:
        DocumentProcessingError: If a supported file cannot be parsed
    """
    if mime_type == LEGACY_DOC_MIME_TYPE:
        _LOG.info("Rejected legacy .doc upload %s", file_path)
        return ExtractionResult.unsupported(UnsupportedReason.LEGACY_FORMAT)

    extractor = _EXTRACTORS.get(mime_type)
    if extractor is None:
        _LOG.info("Rejected upload %s with unsupported type %r", file_path, mime_type)
        return ExtractionResult.unsupported(UnsupportedReason.UNSUPPORTED_FORMAT)

    try:
        raw_text = extractor(Path(file_path))
    except Exception as e:
        _LOG.error("Failed to parse %s as %s: %s", file_path, mime_type, e)
        raise DocumentProcessingError(f"Failed to read document: {e}") from e

    text = clean_extracted_text(raw_text or "")
    if not text:
        _LOG.info("No extractable text in %s", file_path)
        return ExtractionResult.unsupported(UnsupportedReason.NO_TEXT)

    _LOG.debug("Extracted %d characters from %s", len(text), file_path)
    return ExtractionResult.text(text)


async def extract_async(file_path: Path, mime_type: str) -> ExtractionResult:
    """Run :func:`extract` on a worker thread so the event loop stays free."""
    return await asyncio.to_thread(extract, file_path, mime_type)


class TextExtractor:
    """Text extraction utilities."""

    def extract(self, file_path: Path, mime_type: str) -> ExtractionResult:
        return extract(file_path, mime_type)

    async def extract_async(self, file_path: Path, mime_type: str) -> ExtractionResult:
        return await extract_async(file_path, mime_type)
