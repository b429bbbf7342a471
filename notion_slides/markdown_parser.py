"""
Markdown parser producing the HTML tree the extractors read.
"""
import logging
import re
from typing import Any, Dict

import yaml
from bs4 import BeautifulSoup
from markdown_it import MarkdownIt
from mdit_py_plugins.attrs import attrs_block_plugin, attrs_plugin
from mdit_py_plugins.front_matter import front_matter_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

logger = logging.getLogger(__name__)


class MarkdownParser:
    """
    Markdown to HTML conversion using markdown-it-py.

    Raw markdown goes through the same extraction path as rendered markdown
    pages, so the output mirrors what GitHub / GitLab style renderers emit:
    native headings, lists, ``<pre><code class="language-x">`` blocks and
    tables.
    """

    def __init__(self, typographer: bool = False):
        """
        Initialize the markdown parser.

        Args:
            typographer: Enable smart quotes and other typographic replacements.
        """
        # Front matter of the last parsed document
        self.front_matter: Dict[str, Any] = {}

        self.markdown_processor = MarkdownIt('commonmark', {
            'html': True,              # Enable HTML tags
            'typographer': typographer,
        })

        # Enable additional features
        self.markdown_processor.enable(['table', 'strikethrough'])

        # ---------------------------------------------------------
        # PLUGIN ECOSYSTEM
        # ---------------------------------------------------------
        # 1) attrs_plugin       : `{.class key=val}` after inline elements.
        # 2) attrs_block_plugin : `{data-background="#222"}` on the line before a
        #                         block; how slide metadata reaches a heading.
        # 3) front_matter_plugin: YAML front-matter (`---`) with the deck title.
        # 4) tasklists_plugin   : GitHub style `- [x] Done` checkboxes.
        self.markdown_processor = (
            self.markdown_processor
                .use(attrs_plugin)
                .use(attrs_block_plugin)
                .use(front_matter_plugin)
                .use(tasklists_plugin)
        )

    def parse(self, markdown_text: str) -> str:
        """
        Parse markdown text to HTML.

        Args:
            markdown_text: Raw markdown content

        Returns:
            HTML string
        """
        text = self._normalize_newlines(markdown_text or "")
        tokens = self.markdown_processor.parse(text)

        self.front_matter = {}
        for token in tokens:
            if token.type == "front_matter":
                self.front_matter = self._load_front_matter(token.content)
                break

        return self.markdown_processor.renderer.render(tokens, self.markdown_processor.options, {})

    def to_tree(self, markdown_text: str) -> BeautifulSoup:
        """Parse markdown and wrap the HTML in a document with a ``<body>``."""
        html = self.parse(markdown_text)
        return BeautifulSoup(f"<html><body>{html}</body></html>", "html.parser")

    @property
    def title(self) -> str:
        """Title declared in the front matter, or ``""``."""
        value = self.front_matter.get("title")
        return str(value).strip() if value is not None else ""

    @staticmethod
    def _normalize_newlines(text: str) -> str:
        return re.sub(r"\r\n?", "\n", text)

    @staticmethod
    def _load_front_matter(content: str) -> Dict[str, Any]:
        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            logger.warning("Ignoring malformed front matter: %s", exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring front matter that is not a mapping")
            return {}
        return data
