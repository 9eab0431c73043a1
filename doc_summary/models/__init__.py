"""
Models package for the document summary pipeline.

Pydantic models for uploaded documents, extraction results, summary
generation outcomes and rendered PDF artifacts.
"""

from .document_models import (
    UnsupportedReason,
    UploadedDocument,
    ExtractionResult,
)

from .summary_models import (
    DEFAULT_LANGUAGE,
    SummaryRequest,
    GenerationOutcome,
    RenderRequest,
    PdfArtifact,
)

__all__ = [
    "UnsupportedReason",
    "UploadedDocument",
    "ExtractionResult",
    "DEFAULT_LANGUAGE",
    "SummaryRequest",
    "GenerationOutcome",
    "RenderRequest",
    "PdfArtifact",
]
