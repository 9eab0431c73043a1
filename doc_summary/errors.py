"""
errors.py - Exception hierarchy for the document summary pipeline

Each error maps onto one failure mode so the HTTP layer can pick a status
code without inspecting messages.
"""


class DocumentSummaryError(Exception):
    """Base class for every pipeline failure."""


class ValidationError(DocumentSummaryError):
    """Bad or missing user input (no file, unsupported type, empty text or markdown)."""


class DocumentProcessingError(DocumentSummaryError):
    """A supported document could not be parsed."""


class TransientUpstreamError(DocumentSummaryError):
    """The generation service is temporarily unavailable (HTTP 503)."""

    def __init__(self, message: str, status: int = 503):
        super().__init__(message)
        self.status = status


class UpstreamError(DocumentSummaryError):
    """Any non-retryable generation failure, including an unusable response."""

    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.status = status


class RenderError(DocumentSummaryError):
    """The rendering engine failed or produced an empty PDF."""


__all__ = [
    "DocumentSummaryError",
    "ValidationError",
    "DocumentProcessingError",
    "TransientUpstreamError",
    "UpstreamError",
    "RenderError",
]
