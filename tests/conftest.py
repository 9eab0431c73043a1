"""
Shared fixtures: document builders, a fake rendering engine and an app wired
to fakes instead of the LLM and Chromium.
"""
import io
from unittest.mock import AsyncMock

import docx
import pymupdf
import pytest

from config_manager import ConfigManager
from doc_summary.pdf_renderer import PdfRenderer, RenderEngine
from doc_summary.summary_generator import SummaryGenerator


class FakeAPIError(Exception):
    """Stands in for an OpenAI-compatible client error carrying a status code."""

    def __init__(self, message, status_code):
        super().__init__(message)
        self.status_code = status_code


class FakeAIMessage:
    def __init__(self, content):
        self.content = content


def make_pdf_bytes(*page_texts):
    """PDF with one page per text; an empty string gives a blank page."""
    doc = pymupdf.open()
    for text in page_texts or ("",):
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


def make_docx_bytes(*paragraphs):
    document = docx.Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


class FakeEngine(RenderEngine):
    """Records its lifecycle; prints the loaded HTML's text into a real PDF."""

    instances = []

    def __init__(self, pdf_bytes=None, fail_on=None):
        self.pdf_bytes = pdf_bytes
        self.fail_on = fail_on
        self.launched = False
        self.shutdown_calls = 0
        self.html = None
        self.options = None
        FakeEngine.instances.append(self)

    async def launch(self):
        if self.fail_on == "launch":
            raise RuntimeError("browser failed to start")
        self.launched = True

    async def load_content(self, html):
        if self.fail_on == "load":
            raise RuntimeError("page crashed")
        self.html = html

    async def render_to_pdf(self, options):
        self.options = options
        if self.fail_on == "pdf":
            raise RuntimeError("print failed")
        if self.pdf_bytes is not None:
            return self.pdf_bytes
        return make_pdf_bytes("Ringkasan Dokumen")

    async def shutdown(self):
        self.shutdown_calls += 1


@pytest.fixture(autouse=True)
def reset_fake_engines():
    FakeEngine.instances = []
    yield
    FakeEngine.instances = []


@pytest.fixture()
def fake_generate():
    """Generation service returning a fixed markdown summary."""
    return AsyncMock(return_value=FakeAIMessage("# Ringkasan\n\n- poin penting"))


@pytest.fixture()
def no_sleep():
    return AsyncMock()


@pytest.fixture()
def config(tmp_path, monkeypatch):
    for var in ("UPLOAD_DIR", "MAX_UPLOAD_MB", "DEFAULT_LANGUAGE", "SUMMARY_MAX_RETRIES"):
        monkeypatch.delenv(var, raising=False)
    return ConfigManager(str(tmp_path / "missing_config.json"))


@pytest.fixture()
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture()
def make_client(config, upload_dir, no_sleep):
    """Build a test client around a given generation function and engine factory."""
    from app.main import create_app

    def _make(generate, engine_factory=FakeEngine):
        generator = SummaryGenerator(generate=generate, retry_delay=5.0, sleep=no_sleep)
        app = create_app(
            config,
            upload_dir=upload_dir,
            summary_generator=generator,
            pdf_renderer=PdfRenderer(engine_factory=engine_factory),
        )
        app.config.update(TESTING=True)
        return app.test_client()

    return _make


@pytest.fixture()
def client(make_client, fake_generate):
    return make_client(fake_generate)
