"""
Document-related data models.

This module contains the models for an uploaded document and the result of
extracting its text.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class UnsupportedReason(str, Enum):
    """Why a document yielded no text for summarization."""

    UNSUPPORTED_FORMAT = "unsupported_format"
    LEGACY_FORMAT = "legacy_format"
    NO_TEXT = "no_text"


UNSUPPORTED_MESSAGES = {
    UnsupportedReason.UNSUPPORTED_FORMAT: "Unsupported file type. Please upload a PDF, or DOCX file.",
    UnsupportedReason.LEGACY_FORMAT: "File type .doc is not supported. Please upload a .docx or .pdf file.",
    UnsupportedReason.NO_TEXT: "Could not extract text from the document.",
}


class UploadedDocument(BaseModel):
    """A file written to the ephemeral upload store for one request."""

    file_path: Path = Field(description="Location of the stored upload")
    mime_type: str = Field(default="", description="MIME type declared by the client")
    original_filename: Optional[str] = Field(default=None, description="Filename sent by the client")


class ExtractionResult(BaseModel):
    """Either extracted text or the reason there is none."""

    content: Optional[str] = Field(default=None, description="Extracted plain text")
    reason: Optional[UnsupportedReason] = Field(default=None, description="Set when no text is available")

    @model_validator(mode="after")
    def _check_variant(self) -> "ExtractionResult":
        if self.reason is None and not (self.content and self.content.strip()):
            raise ValueError("text result must carry non-empty content")
        if self.reason is not None and self.content is not None:
            raise ValueError("unsupported result cannot carry content")
        return self

    @classmethod
    def text(cls, content: str) -> "ExtractionResult":
        """Create a text result."""
        return cls(content=content)

    @classmethod
    def unsupported(cls, reason: UnsupportedReason) -> "ExtractionResult":
        """Create an unsupported result."""
        return cls(reason=reason)

    @property
    def is_text(self) -> bool:
        return self.reason is None

    @property
    def message(self) -> str:
        """User-facing explanation for an unsupported result."""
        if self.reason is None:
            return ""
        return UNSUPPORTED_MESSAGES[self.reason]
