"""
pdf_renderer.py - Markdown summary to PDF rendering

A summary is converted to HTML with markdown-it (CommonMark), wrapped in a fixed print
stylesheet and handed to a headless Chromium instance (Playwright) which
prints it to PDF. Every render owns a fresh engine that is shut down when the
render finishes, whether it succeeded or not.
"""

import abc
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

from jinja2 import Template
from markdown_it import MarkdownIt
from playwright.async_api import async_playwright

from .errors import RenderError, ValidationError
from .models import PdfArtifact

_LOG = logging.getLogger("pdf_renderer")

EMPTY_SUMMARY_MESSAGE = "Summary content is missing or empty."
EMPTY_PDF_MESSAGE = "Failed to generate PDF file. The file is empty."

# CommonMark plus GFM tables: a sub-list nests once indented to its parent's
# content column (2 spaces under "- ", 3 under "1. ").
_MARKDOWN = MarkdownIt("commonmark").enable(["table", "strikethrough"])

DEFAULT_LAUNCH_ARGS = ("--no-sandbox", "--disable-setuid-sandbox")

DOCUMENT_TEMPLATE = Template("""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Dokumen Ringkas</title>
    <style>
        body {
            font-family: 'Times New Roman', serif;
            padding: 20px;
            line-height: 1.6;
        }
        h1, h2, h3, h4, h5, h6 {
            font-family: 'Times New Roman', serif;
            color: #333;
            border-bottom: 2px solid #ccc;
            padding-bottom: 10px;
        }
        p, ul, ol, li {
            font-family: 'Times New Roman', serif;
            color: #555;
        }
        h1 { font-size: 24px; }
        h2 { font-size: 20px; }
        h3 { font-size: 18px; }
        p { margin-bottom: 1em; }
        ul, ol { margin-left: 2em; }
        li { margin-bottom: 0.5em; }
        pre {
            background-color: #f4f4f4;
            padding: 10px;
            border-radius: 5px;
            white-space: pre-wrap;
            word-wrap: break-word;
        }
        table { border-collapse: collapse; }
        th, td { border: 1px solid #ccc; padding: 4px 8px; }
    </style>
</head>
<body>
    <h1>Ringkasan Dokumen</h1>
    <div>{{ body | safe }}</div>
</body>
</html>
""")


@dataclass(frozen=True)
class PdfOptions:
    """Page setup passed to the engine's print-to-PDF call."""

    page_format: str = "A4"
    margin: str = "1cm"
    print_background: bool = True

    @property
    def margins(self) -> Dict[str, str]:
        return {side: self.margin for side in ("top", "bottom", "left", "right")}


def markdown_to_html(md_text: str) -> str:
    """Convert Markdown → HTML fragment."""
    return _MARKDOWN.render(md_text)


def build_document(body_html: str) -> str:
    """Wrap an HTML fragment in the print document template."""
    return DOCUMENT_TEMPLATE.render(body=body_html)


class RenderEngine(abc.ABC):
    """An isolated HTML-to-PDF engine instance.

    Use as ``async with engine:`` so ``shutdown`` runs on every exit path.
    """

    @abc.abstractmethod
    async def launch(self) -> None:
        ...

    @abc.abstractmethod
    async def load_content(self, html: str) -> None:
        ...

    @abc.abstractmethod
    async def render_to_pdf(self, options: PdfOptions) -> bytes:
        ...

    @abc.abstractmethod
    async def shutdown(self) -> None:
        """Release the engine. Must be safe to call more than once."""

    async def __aenter__(self) -> "RenderEngine":
        try:
            await self.launch()
        except BaseException:
            await self.shutdown()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()


class PlaywrightEngine(RenderEngine):
    """Headless Chromium driven through Playwright."""

    def __init__(self, launch_args: Sequence[str] = DEFAULT_LAUNCH_ARGS, timeout_ms: Optional[float] = None):
        self.launch_args = list(launch_args)
        self.timeout_ms = timeout_ms
        self._playwright = None
        self._browser = None
        self._page = None

    async def launch(self) -> None:
        _LOG.info("Launching headless browser...")
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=True, args=self.launch_args
        )
        self._page = await self._browser.new_page()
        if self.timeout_ms is not None:
            self._page.set_default_timeout(self.timeout_ms)

    async def load_content(self, html: str) -> None:
        _LOG.info("Setting HTML content on the page...")
        await self._page.set_content(html, wait_until="domcontentloaded")

    async def render_to_pdf(self, options: PdfOptions) -> bytes:
        _LOG.info("Generating PDF...")
        return await self._page.pdf(
            format=options.page_format,
            print_background=options.print_background,
            margin=options.margins,
        )

    async def shutdown(self) -> None:
        browser, self._browser, self._page = self._browser, None, None
        playwright, self._playwright = self._playwright, None
        try:
            if browser is not None:
                await browser.close()
        finally:
            if playwright is not None:
                await playwright.stop()


EngineFactory = Callable[[], RenderEngine]


class PdfRenderer:
    """Renders markdown summaries to PDF artifacts."""

    def __init__(
        self,
        engine_factory: EngineFactory = PlaywrightEngine,
        options: Optional[PdfOptions] = None,
    ):
        self.engine_factory = engine_factory
        self.options = options or PdfOptions()

    def compose_html(self, summary_markdown: str) -> str:
        return build_document(markdown_to_html(summary_markdown))

    async def render(self, summary_markdown: Optional[str]) -> PdfArtifact:
        """Render *summary_markdown* to PDF bytes.

        Raises:
            ValidationError: If the markdown is missing or empty; no engine is started
            RenderError: If the engine fails or returns an empty buffer
        """
        if not isinstance(summary_markdown, str) or len(summary_markdown) == 0:
            raise ValidationError(EMPTY_SUMMARY_MESSAGE)

        _LOG.info("Summary content received. Length: %d", len(summary_markdown))
        html = self.compose_html(summary_markdown)

        try:
            async with self.engine_factory() as engine:
                await engine.load_content(html)
                pdf_bytes = await engine.render_to_pdf(self.options)
        except Exception as e:
            _LOG.error("Error generating PDF: %s", e)
            raise RenderError(f"Failed to generate PDF file: {e}") from e

        size = len(pdf_bytes) if pdf_bytes else 0
        _LOG.info("Generated PDF buffer size: %d bytes", size)
        if size == 0:
            _LOG.error("Rendering engine produced an empty PDF buffer")
            raise RenderError(EMPTY_PDF_MESSAGE)

        return PdfArtifact(content=bytes(pdf_bytes))
