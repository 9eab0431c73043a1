# Document summary package: text extraction, summary generation and PDF rendering

from .errors import (
    DocumentSummaryError,
    ValidationError,
    DocumentProcessingError,
    TransientUpstreamError,
    UpstreamError,
    RenderError,
)
from .text_extractor import (
    TextExtractor,
    extract,
    extract_async,
    clean_extracted_text,
    PDF_MIME_TYPE,
    DOCX_MIME_TYPE,
    LEGACY_DOC_MIME_TYPE,
)
from .summary_generator import (
    SummaryGenerator,
    RetryState,
    build_prompt,
    classify_error,
)
from .llm_utils import (
    LLMProvider,
    extract_response_text,
    get_error_status,
    is_service_unavailable,
)
from .pdf_renderer import (
    PdfRenderer,
    PdfOptions,
    RenderEngine,
    PlaywrightEngine,
    markdown_to_html,
    build_document,
)
from .upload_store import UploadStore
from .logging_config import (
    setup_logging,
    stop_logging,
    ThreadSafeLoggingConfig,
)

__all__ = [
    "DocumentSummaryError",
    "ValidationError",
    "DocumentProcessingError",
    "TransientUpstreamError",
    "UpstreamError",
    "RenderError",
    "TextExtractor",
    "extract",
    "extract_async",
    "clean_extracted_text",
    "PDF_MIME_TYPE",
    "DOCX_MIME_TYPE",
    "LEGACY_DOC_MIME_TYPE",
    "SummaryGenerator",
    "RetryState",
    "build_prompt",
    "classify_error",
    "LLMProvider",
    "extract_response_text",
    "get_error_status",
    "is_service_unavailable",
    "PdfRenderer",
    "PdfOptions",
    "RenderEngine",
    "PlaywrightEngine",
    "markdown_to_html",
    "build_document",
    "UploadStore",
    "setup_logging",
    "stop_logging",
    "ThreadSafeLoggingConfig",
]
