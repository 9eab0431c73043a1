"""
Markdown summary to PDF download module.
"""

from .services import PdfExportService
from .factory import create_pdf_export_module

__all__ = ["PdfExportService", "create_pdf_export_module"]
