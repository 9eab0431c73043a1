"""
Document upload and summarization module.
"""

from .services import DocumentSummaryService
from .factory import create_summarize_module

__all__ = ["DocumentSummaryService", "create_summarize_module"]
