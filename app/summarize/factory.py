"""
Factory for creating the summarize module.
"""
from pathlib import Path
from typing import Any, Dict

from doc_summary.llm_utils import LLMProvider
from doc_summary.summary_generator import SummaryGenerator
from doc_summary.upload_store import UploadStore
from .services import DocumentSummaryService
from .routes import create_summarize_routes


def create_summarize_module(
    upload_dir: Path,
    llm_config,
    summary_config,
    summary_generator: SummaryGenerator = None,
    upload_store: UploadStore = None,
) -> Dict[str, Any]:
    """Create summarize module with services and routes.

    Args:
        upload_dir: Directory for request-scoped uploads
        llm_config: LLMConfig used to build the generation client
        summary_config: SummaryConfig with retry policy and default language
        summary_generator: Optional pre-built generator (tests inject fakes here)
        upload_store: Optional pre-built upload store

    Returns:
        Dictionary containing the services and blueprint
    """
    if summary_generator is None:
        provider = LLMProvider(
            api_key=llm_config.api_key or None,
            base_url=llm_config.base_url or None,
            provider=llm_config.provider,
            model=llm_config.model or None,
            temperature=llm_config.temperature,
            timeout=llm_config.timeout,
        )
        summary_generator = SummaryGenerator(
            llm_provider=provider,
            max_retries=summary_config.max_retries,
            retry_delay=summary_config.retry_delay,
            max_input_char=llm_config.max_input_char,
        )

    upload_store = upload_store or UploadStore(upload_dir)

    summary_service = DocumentSummaryService(
        upload_store=upload_store,
        summary_generator=summary_generator,
        default_language=summary_config.default_language,
    )

    blueprint = create_summarize_routes(summary_service)

    return {
        "blueprint": blueprint,
        "service": summary_service,
        "generator": summary_generator,
        "upload_store": upload_store,
    }
