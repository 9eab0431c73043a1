"""
Factory for creating the PDF export module.
"""
from typing import Any, Dict

from doc_summary.pdf_renderer import PdfOptions, PdfRenderer, PlaywrightEngine
from .services import PdfExportService
from .routes import create_pdf_export_routes


def create_pdf_export_module(render_config, renderer: PdfRenderer = None) -> Dict[str, Any]:
    """Create PDF export module with services and routes.

    Args:
        render_config: RenderConfig with page setup and engine timeout
        renderer: Optional pre-built renderer (tests inject a fake engine here)

    Returns:
        Dictionary containing the services and blueprint
    """
    if renderer is None:
        options = PdfOptions(
            page_format=render_config.page_format,
            margin=render_config.margin,
            print_background=render_config.print_background,
        )
        renderer = PdfRenderer(
            engine_factory=lambda: PlaywrightEngine(timeout_ms=render_config.timeout_ms),
            options=options,
        )

    pdf_export_service = PdfExportService(renderer)
    blueprint = create_pdf_export_routes(pdf_export_service)

    return {
        "blueprint": blueprint,
        "service": pdf_export_service,
        "renderer": renderer,
    }
