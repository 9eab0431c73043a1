"""
Smoke tests: every module imports and the app wires both blueprints.
"""


def test_package_imports():
    import doc_summary

    assert doc_summary.SummaryGenerator is not None
    assert doc_summary.PdfRenderer is not None
    assert doc_summary.TextExtractor is not None


def test_app_modules_import():
    from app.summarize import DocumentSummaryService, create_summarize_module
    from app.pdf_export import PdfExportService, create_pdf_export_module

    assert callable(create_summarize_module)
    assert callable(create_pdf_export_module)
    assert DocumentSummaryService is not None
    assert PdfExportService is not None


def test_app_registers_routes(config, upload_dir, fake_generate):
    from app.main import create_app
    from doc_summary.summary_generator import SummaryGenerator

    app = create_app(config, upload_dir=upload_dir, summary_generator=SummaryGenerator(generate=fake_generate))
    rules = {rule.rule for rule in app.url_map.iter_rules()}

    assert {"/upload-and-summarize", "/download-pdf", "/healthz", "/"} <= rules
    assert set(app.extensions) >= {"summarize", "pdf_export"}
