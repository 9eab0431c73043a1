"""
Routes for downloading a summary as PDF.
"""
import logging

from flask import Blueprint, request, jsonify, make_response

from doc_summary.errors import RenderError, ValidationError
from .services import PdfExportService

logger = logging.getLogger(__name__)


def create_pdf_export_routes(pdf_export_service: PdfExportService) -> Blueprint:
    """Create Flask routes for PDF export."""

    bp = Blueprint('pdf_export', __name__)

    @bp.route("/download-pdf", methods=["POST"])
    async def download_pdf():
        """Render the submitted markdown summary and return it as an attachment."""
        payload = request.get_json(silent=True)
        if payload is None and request.form:
            payload = request.form.to_dict()

        try:
            artifact = await pdf_export_service.export(payload)
        except ValidationError as e:
            logger.error(f"Rejected PDF download request: {e}")
            return jsonify({"message": str(e)}), 400
        except RenderError as e:
            return jsonify({"message": str(e)}), 500
        except Exception as e:
            logger.exception(f"Error generating PDF: {e}")
            return jsonify({"message": f"Failed to generate PDF file: {e}"}), 500

        response = make_response(artifact.content)
        response.headers['Content-Disposition'] = f'attachment; filename="{artifact.filename}"'
        response.headers['Content-Type'] = 'application/pdf'
        return response

    return bp
