"""
Summarization service: upload → text → markdown summary.
"""
import logging
from typing import Optional

from werkzeug.datastructures import FileStorage

from doc_summary.errors import UpstreamError, ValidationError
from doc_summary.models import DEFAULT_LANGUAGE
from doc_summary.summary_generator import SummaryGenerator
from doc_summary.text_extractor import TextExtractor
from doc_summary.upload_store import UploadStore

logger = logging.getLogger(__name__)


class DocumentSummaryService:
    """Runs one upload through extraction and summary generation."""

    def __init__(self,
                 upload_store: UploadStore,
                 summary_generator: SummaryGenerator,
                 extractor: Optional[TextExtractor] = None,
                 default_language: str = DEFAULT_LANGUAGE):
        self.upload_store = upload_store
        self.summary_generator = summary_generator
        self.extractor = extractor or TextExtractor()
        self.default_language = default_language

    def resolve_language(self, language: Optional[str]) -> str:
        if language and language.strip():
            return language.strip()
        return self.default_language

    async def summarize_upload(self, upload: FileStorage, language: Optional[str] = None) -> str:
        """Summarize an uploaded document.

        The stored upload is removed before this returns, whatever the outcome.

        Raises:
            ValidationError: Unsupported type or no extractable text
            DocumentProcessingError: The document could not be parsed
            UpstreamError: The generation service failed
        """
        document = self.upload_store.save(upload)
        with self.upload_store.hold(document):
            result = await self.extractor.extract_async(document.file_path, document.mime_type)
            if not result.is_text:
                raise ValidationError(result.message)

            target_language = self.resolve_language(language)
            logger.info(
                "Summarizing %s (%d characters) in %s",
                document.original_filename, len(result.content), target_language
            )
            outcome = await self.summary_generator.summarize(result.content, target_language)
            if not outcome.is_success:
                raise UpstreamError(outcome.cause)
            return outcome.markdown
