"""
Summary and rendering data models.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_LANGUAGE = "Indonesian"


class SummaryRequest(BaseModel):
    """Text plus the language the summary should be written in."""

    text: str = Field(description="Extracted document text")
    target_language: str = Field(default=DEFAULT_LANGUAGE, description="Output language")

    @field_validator("target_language", mode="before")
    @classmethod
    def _default_language(cls, value):
        if value is None or not str(value).strip():
            return DEFAULT_LANGUAGE
        return str(value).strip()


class GenerationOutcome(BaseModel):
    """Result of one summarize call, after all attempts."""

    markdown: Optional[str] = Field(default=None, description="Generated markdown summary")
    cause: Optional[str] = Field(default=None, description="Failure description")
    attempts: int = Field(default=0, description="Number of generation calls made")

    @classmethod
    def success(cls, markdown: str, attempts: int) -> "GenerationOutcome":
        """Create a successful outcome."""
        return cls(markdown=markdown, attempts=attempts)

    @classmethod
    def failure(cls, cause: str, attempts: int) -> "GenerationOutcome":
        """Create a failed outcome."""
        return cls(cause=cause, attempts=attempts)

    @property
    def is_success(self) -> bool:
        return self.markdown is not None


class RenderRequest(BaseModel):
    """Body of a PDF download request."""

    summary: Optional[str] = Field(default=None, description="Markdown summary to render")

    @property
    def is_empty(self) -> bool:
        return not isinstance(self.summary, str) or len(self.summary) == 0


class PdfArtifact(BaseModel):
    """A rendered PDF, held in memory only."""

    content: bytes = Field(description="PDF bytes")
    filename: str = Field(default="hasil.pdf", description="Download filename")

    @property
    def size(self) -> int:
        return len(self.content)
