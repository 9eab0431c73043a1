"""
PDF export service.
"""
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from doc_summary.errors import ValidationError
from doc_summary.models import PdfArtifact, RenderRequest
from doc_summary.pdf_renderer import EMPTY_SUMMARY_MESSAGE, PdfRenderer


class PdfExportService:
    """Validates download requests and renders them to PDF."""

    def __init__(self, renderer: PdfRenderer):
        self.renderer = renderer

    def parse_request(self, payload: Optional[Any]) -> RenderRequest:
        """Build a RenderRequest from a JSON or form body."""
        if not isinstance(payload, dict):
            raise ValidationError(EMPTY_SUMMARY_MESSAGE)
        try:
            render_request = RenderRequest.model_validate(payload)
        except PydanticValidationError:
            raise ValidationError(EMPTY_SUMMARY_MESSAGE)
        if render_request.is_empty:
            raise ValidationError(EMPTY_SUMMARY_MESSAGE)
        return render_request

    async def export(self, payload: Optional[Any]) -> PdfArtifact:
        """Render the `summary` field of *payload* to a PDF artifact."""
        render_request = self.parse_request(payload)
        return await self.renderer.render(render_request.summary)
