import argparse
import logging
from pathlib import Path

from flask import Flask, jsonify, send_from_directory, abort
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.middleware.proxy_fix import ProxyFix

from config_manager import ConfigManager
from app.summarize.factory import create_summarize_module
from app.pdf_export.factory import create_pdf_export_module

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent.parent


def create_app(
    config_manager: ConfigManager = None,
    upload_dir: Path = None,
    summary_generator=None,
    pdf_renderer=None,
) -> Flask:
    """Build the Flask application.

    Args:
        config_manager: Configuration source, a fresh ConfigManager by default
        upload_dir: Overrides the configured upload directory
        summary_generator: Optional SummaryGenerator replacing the LLM-backed one
        pdf_renderer: Optional PdfRenderer replacing the Playwright-backed one
    """
    config_manager = config_manager or ConfigManager()
    paths_config = config_manager.get_paths_config()
    app_config = config_manager.get_app_config()

    static_dir = BASE_DIR / paths_config.static_dir
    if upload_dir is None:
        upload_dir = BASE_DIR / paths_config.upload_dir

    app = Flask(__name__, static_folder=str(static_dir), static_url_path="")
    app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1, x_prefix=1)
    app.config["MAX_CONTENT_LENGTH"] = app_config.max_upload_mb * 1024 * 1024

    # -------------------------------------------------------------------------
    # Modules
    # -------------------------------------------------------------------------

    summarize_module = create_summarize_module(
        upload_dir=Path(upload_dir),
        llm_config=config_manager.get_llm_config(),
        summary_config=config_manager.get_summary_config(),
        summary_generator=summary_generator,
    )

    pdf_export_module = create_pdf_export_module(
        render_config=config_manager.get_render_config(),
        renderer=pdf_renderer,
    )

    app.register_blueprint(summarize_module["blueprint"])
    app.register_blueprint(pdf_export_module["blueprint"])

    app.extensions["summarize"] = summarize_module
    app.extensions["pdf_export"] = pdf_export_module

    # -------------------------------------------------------------------------
    # Common endpoints
    # -------------------------------------------------------------------------

    @app.get("/")
    def index():
        """Serve the upload page."""
        if not (static_dir / "index.html").exists():
            abort(404)
        return send_from_directory(static_dir, "index.html")

    @app.get("/healthz")
    def healthz():
        """Health check for load balancers and monitoring."""
        upload_store = summarize_module["upload_store"]
        return jsonify({
            "status": "ok",
            "pending_uploads": len(upload_store.residual_files()),
        })

    @app.errorhandler(RequestEntityTooLarge)
    def upload_too_large(e):
        return jsonify({
            "message": f"File is too large. Maximum upload size is {app_config.max_upload_mb} MB."
        }), 413

    return app


# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------

def main():
    from doc_summary.logging_config import setup_logging, stop_logging

    parser = argparse.ArgumentParser(description="Document summary web service")
    parser.add_argument("--port", type=int, help="Port to run the server on")
    parser.add_argument("--host", type=str, help="Host to bind the server to")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    args = parser.parse_args()

    config_manager = ConfigManager()
    app_config = config_manager.get_app_config()
    llm_config = config_manager.get_llm_config()

    # Override configuration with command line arguments
    if args.port:
        app_config.port = args.port
    if args.host:
        app_config.host = args.host
    if args.debug:
        app_config.debug = args.debug

    setup_logging(debug=app_config.debug)
    app = create_app(config_manager)

    logger.info("Configuration loaded: provider=%s model=%s", llm_config.provider, llm_config.model or "default")
    logger.info("Server listening at http://%s:%d", app_config.host, app_config.port)
    try:
        app.run(host=app_config.host, port=app_config.port, debug=app_config.debug)
    finally:
        stop_logging()


if __name__ == "__main__":
    main()
