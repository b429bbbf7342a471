#!/usr/bin/env python3
"""
Main slide generator module that ties together parsing, extraction and output.
"""

import asyncio
import logging
import threading
from concurrent.futures import Future
from pathlib import Path
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from .config import Settings
from .content_extractor import ContentExtractor
from .errors import ExtractionTimeoutError
from .markdown_parser import MarkdownParser
from .models import ExtractionResult, Presentation
from .pptx_exporter import PPTXExporter
from .renderer import RevealRenderer
from .source_manager import MARKDOWN, SourceManager
from .storage import SlideStore

logger = logging.getLogger(__name__)

NO_SLIDES_MESSAGE = "No slides found. Make sure the page has at least one heading."

MARKDOWN_SUFFIXES = (".md", ".markdown")


class SlideGenerator:
    """
    Main class for turning Notion pages and Markdown documents into slides.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        source_manager: Optional[SourceManager] = None,
    ):
        """Create a new :class:`SlideGenerator`.

        Parameters
        ----------
        settings
            Presentation and extraction settings.  Defaults are used when
            omitted.
        source_manager
            Registry of source profiles.  A manager with the built-in
            ``notion`` and ``markdown`` profiles is created when omitted.
        """
        self.settings = settings or Settings()
        self.source_manager = source_manager or SourceManager()
        self.extractor = ContentExtractor(source_manager=self.source_manager)
        self.markdown_parser = MarkdownParser()
        self.renderer = RevealRenderer()
        self.pptx_exporter = PPTXExporter()
        # Title from the front matter of the last parsed markdown document
        self.document_title = ""

    def parse_document(self, text: str, is_markdown: bool = False) -> Tag:
        """
        Build the document tree the extractors read.

        Args:
            text: HTML, or raw Markdown when *is_markdown* is true
            is_markdown: Convert *text* with :class:`MarkdownParser` first

        Returns:
            BeautifulSoup document
        """
        if is_markdown:
            root = self.markdown_parser.to_tree(text)
            self.document_title = self.markdown_parser.title
            return root
        self.document_title = ""
        return BeautifulSoup(text, "html.parser")

    def resolve_source_type(self, root: Tag, source_type: Optional[str] = None, url: str = "",
                            is_markdown: bool = False) -> str:
        """Explicit source type, else the detected one, else ``markdown``."""
        if source_type:
            return source_type
        if is_markdown:
            return MARKDOWN
        detected = self.source_manager.detect_source(url, root)
        if detected is None:
            logger.info("Could not detect the source type, falling back to %s", MARKDOWN)
            return MARKDOWN
        return detected

    def convert(self, root: Tag, source_type: str) -> ExtractionResult:
        """
        Extract slides synchronously.

        Raises:
            InvalidRootError: If *root* is missing or not an element
            UnsupportedSourceError: If *source_type* is not registered
        """
        result = self.extractor.extract_result(root, source_type)
        if result.no_slides_found:
            logger.debug("Extraction of %s content produced no slides", source_type)
        return result

    async def generate(
        self,
        text: str,
        source_type: Optional[str] = None,
        url: str = "",
        is_markdown: bool = False,
    ) -> ExtractionResult:
        """
        Parse *text* and extract its slides under the extraction timeout.

        Args:
            text: Document content (HTML or Markdown)
            source_type: Source type; detected from *url* and the tree when omitted
            url: Where the document came from, used for source detection
            is_markdown: Whether *text* is raw Markdown

        Returns:
            ExtractionResult: slides plus the source type they were extracted as

        Raises:
            ExtractionTimeoutError: If extraction exceeds ``settings.extraction_timeout``
        """
        root = self.parse_document(text, is_markdown=is_markdown)
        source_type = self.resolve_source_type(root, source_type, url=url, is_markdown=is_markdown)
        timeout = self.settings.extraction_timeout

        future = _start_daemon(self.convert, root, source_type)
        try:
            return await asyncio.wait_for(asyncio.wrap_future(future), timeout)
        except asyncio.TimeoutError as exc:
            # the worker cannot be interrupted; it finishes on its own and is discarded
            logger.debug("Abandoning extraction of %s content after %gs", source_type, timeout)
            raise ExtractionTimeoutError(f"Extraction took longer than {timeout:g} seconds") from exc

    def presentation(self, result: ExtractionResult) -> Presentation:
        presentation = Presentation.from_slides(result.slides, source_type=result.source_type)
        if self.document_title:
            presentation.title = self.document_title
        return presentation

    def write(self, result: ExtractionResult, output_path) -> str:
        """
        Write *result* in the format implied by the output suffix.

        ``.json`` uses :class:`SlideStore`, ``.pptx`` the PPTX exporter,
        ``.md`` plain markdown and anything else the reveal.js page.
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        suffix = output_path.suffix.lower()
        presentation = self.presentation(result)

        if suffix == ".json":
            SlideStore(output_path).save_presentation(presentation)
        elif suffix == ".pptx":
            self.pptx_exporter.export(result.slides, str(output_path))
        elif suffix in MARKDOWN_SUFFIXES:
            markdown = "\n\n---\n\n".join(slide.to_markdown().strip() for slide in result.slides)
            output_path.write_text(markdown + "\n", encoding="utf-8")
        else:
            self.renderer.write(result.slides, output_path, settings=self.settings, title=presentation.title)
        return str(output_path)


def _start_daemon(func, *args) -> Future:
    """
    Run *func* on a daemon thread and return a future for its result.

    An extraction abandoned after a timeout holds up neither ``asyncio.run``
    nor interpreter exit.
    """
    future: Future = Future()

    def run():
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = func(*args)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)

    threading.Thread(target=run, daemon=True, name="SlideExtractionWorker").start()
    return future


def main(argv=None):
    """Command-line entry point for the slide generator."""
    import argparse
    import sys

    from .config import load_settings
    from .errors import SlidesError

    def _build_parser() -> argparse.ArgumentParser:
        p = argparse.ArgumentParser(prog="notion-slides", description="Turn a Notion page or Markdown document into slides.")
        p.add_argument("document", type=Path, help="HTML page or Markdown file to convert")
        p.add_argument("--output", "-o", type=Path, default=Path("output/presentation.html"),
                       help="Destination file; .html, .json, .pptx or .md")
        p.add_argument("--source", "-s", help="Source type (notion, markdown, github-markdown, …); detected when omitted")
        p.add_argument("--url", default="", help="Original URL of the document, used to detect the source type")
        p.add_argument("--settings", type=Path, help="JSON settings file")
        p.add_argument("--theme", "-t", help="reveal.js theme (black, white, notion, …)")
        p.add_argument("--transition", help="Slide transition (none, fade, slide, convex, concave, zoom)")
        p.add_argument("--timeout", type=float, help="Extraction timeout in seconds")
        p.add_argument("--debug", action="store_true", help="Enable verbose logging")
        return p

    async def _generate_async(args, settings: Settings) -> int:
        """Async wrapper for slide generation."""
        doc_path: Path = args.document
        if not doc_path.exists():
            logger.error("Document '%s' not found", doc_path)
            return 1

        text = doc_path.read_text(encoding="utf-8")
        is_markdown = doc_path.suffix.lower() in MARKDOWN_SUFFIXES
        url = args.url or doc_path.name

        generator = SlideGenerator(settings=settings)
        result = await generator.generate(text, source_type=args.source, url=url, is_markdown=is_markdown)
        if result.no_slides_found:
            logger.warning(NO_SLIDES_MESSAGE)
            return 2

        output_path = generator.write(result, args.output)
        logger.info("✅ %d slides written to %s", result.slide_count, output_path)
        return 0

    parser = _build_parser()
    args = parser.parse_args(argv)

    # Set up logging
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO, format="%(levelname)s  %(message)s")

    try:
        settings = load_settings(args.settings)
        overrides = {}
        if args.theme:
            overrides["theme"] = args.theme
        if args.transition:
            overrides["transition"] = args.transition
        if args.timeout is not None:
            overrides["extraction_timeout"] = args.timeout
        if args.debug:
            overrides["debug_logging"] = True
        if overrides:
            settings = Settings.from_dict({**settings.to_dict(), **overrides})
        if settings.debug_logging:
            logging.getLogger().setLevel(logging.DEBUG)

        # Run async generation
        code = asyncio.run(_generate_async(args, settings))
    except SlidesError as exc:
        logger.error("Extraction failed: %s", exc)
        code = 1

    sys.exit(code)


if __name__ == "__main__":
    main()
