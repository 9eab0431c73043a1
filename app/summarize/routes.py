"""
Routes for document upload and summarization.
"""
import logging

from flask import Blueprint, request, jsonify

from doc_summary.errors import ValidationError
from .services import DocumentSummaryService

logger = logging.getLogger(__name__)


def create_summarize_routes(summary_service: DocumentSummaryService) -> Blueprint:
    """Create Flask routes for document summarization."""

    bp = Blueprint('summarize', __name__)

    @bp.route("/upload-and-summarize", methods=["POST"])
    async def upload_and_summarize():
        """Summarize the uploaded `documentFile` in the requested `language`."""
        upload = request.files.get("documentFile")
        if upload is None or not upload.filename:
            return jsonify({"message": "No file uploaded."}), 400

        try:
            summary = await summary_service.summarize_upload(upload, request.form.get("language"))
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except Exception as e:
            logger.exception(f"Error processing file {upload.filename}: {e}")
            return jsonify({"message": f"Error processing document: {e}"}), 500

        return jsonify({"summary": summary})

    return bp
