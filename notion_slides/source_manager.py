"""
Source manager: maps a source type to the extractor set and rules that apply.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple
from urllib.parse import urlsplit

from bs4.element import Tag

from .errors import UnsupportedSourceError
from .extractors import (
    BlockExtractor,
    BlockquoteExtractor,
    CodeBlockExtractor,
    DividerExtractor,
    ExtractorBase,
    HeadingExtractor,
    ImageExtractor,
    ListExtractor,
    ParagraphExtractor,
    TableExtractor,
)

logger = logging.getLogger(__name__)

NOTION = "notion"
MARKDOWN = "markdown"
GITHUB_MARKDOWN = "github-markdown"
GITLAB_MARKDOWN = "gitlab-markdown"
RENDERED_MARKDOWN = "rendered-markdown"

# Block tags whose text is never part of an enclosing node's text
NESTED_BLOCK_TAGS = ("ul", "ol", "pre", "table", "blockquote")

ExtractorFactory = Callable[[ExtractorBase], BlockExtractor]


@dataclass
class SourceProfile:
    """
    Extraction rules for one kind of source document.

    Class tuples name the source-specific classes each block extractor
    recognises next to the native HTML tags.  ``extra_extractors`` are
    factories for additional extractors tried before the built-in ones.
    """
    name: str
    heading_classes: Dict[str, int] = field(default_factory=dict)
    list_block_classes: Tuple[str, ...] = ()
    code_block_classes: Tuple[str, ...] = ()
    quote_classes: Tuple[str, ...] = ()
    table_classes: Tuple[str, ...] = ()
    image_classes: Tuple[str, ...] = ()
    divider_classes: Tuple[str, ...] = ()
    paragraph_classes: Tuple[str, ...] = ()
    container_selectors: Tuple[str, ...] = ()
    ignored_tags: Tuple[str, ...] = ("script", "style", "template", "noscript", "head", "title", "meta", "link")
    code_language_selector: Optional[str] = None
    strip_heading_prefix: bool = False
    extra_extractors: Sequence[ExtractorFactory] = ()

    @property
    def nested_classes(self) -> Tuple[str, ...]:
        return self.list_block_classes + self.code_block_classes + self.quote_classes + self.table_classes

    def build_base(self) -> ExtractorBase:
        return ExtractorBase(NESTED_BLOCK_TAGS, self.nested_classes, name=self.name)

    def build_extractors(self, base: Optional[ExtractorBase] = None) -> List[BlockExtractor]:
        """Fresh extractor instances in the order the orchestrator tries them."""
        base = base or self.build_base()
        code = CodeBlockExtractor(
            base.scoped(f"{self.name}.code"),
            code_block_classes=self.code_block_classes,
            language_label_selector=self.code_language_selector,
        )
        table = TableExtractor(base.scoped(f"{self.name}.table"), table_classes=self.table_classes)
        image = ImageExtractor(base.scoped(f"{self.name}.image"), image_classes=self.image_classes)
        paragraph = ParagraphExtractor(base.scoped(f"{self.name}.paragraph"), paragraph_classes=self.paragraph_classes)
        quote = BlockquoteExtractor(base.scoped(f"{self.name}.quote"), quote_classes=self.quote_classes)
        lists = ListExtractor(base.scoped(f"{self.name}.list"), item_block_classes=self.list_block_classes)
        # lists and quotes nest inside each other
        lists.block_extractors = [code, quote, table, image, paragraph]
        quote.block_extractors = [lists, code, table]

        extractors: List[BlockExtractor] = [factory(base) for factory in self.extra_extractors]
        extractors.extend([
            HeadingExtractor(
                base.scoped(f"{self.name}.heading"),
                heading_classes=self.heading_classes,
                strip_placeholder_prefix=self.strip_heading_prefix,
            ),
            code,
            lists,
            table,
            quote,
            image,
            DividerExtractor(base.scoped(f"{self.name}.divider"), divider_classes=self.divider_classes),
            paragraph,
        ])
        return extractors


NOTION_PROFILE = SourceProfile(
    name=NOTION,
    heading_classes={
        "notion-header-block": 1,
        "notion-sub_header-block": 2,
        "notion-sub_sub_header-block": 3,
    },
    list_block_classes=(
        "notion-bulleted_list-block",
        "notion-numbered_list-block",
        "notion-to_do-block",
        "notion-toggle-block",
        "notion-list-block",
    ),
    code_block_classes=("notion-code-block",),
    quote_classes=("notion-quote-block", "notion-callout-block"),
    table_classes=("notion-table-block",),
    image_classes=("notion-image-block",),
    divider_classes=("notion-divider-block",),
    paragraph_classes=("notion-text-block",),
    container_selectors=(".notion-page-content",),
    code_language_selector=".notion-code-language",
    strip_heading_prefix=True,
)

MARKDOWN_PROFILE = SourceProfile(
    name=MARKDOWN,
    container_selectors=(".markdown-body", ".md-content", ".wiki-content", ".markdown", "article"),
)


class SourceManager:
    """
    Registry of source profiles keyed by source type.

    Aliases share a profile; the alias itself is still reported as the
    source type of the slides it produces.
    """

    def __init__(self, register_defaults: bool = True):
        self._profiles: Dict[str, SourceProfile] = {}
        if register_defaults:
            self.register(NOTION_PROFILE)
            self.register(MARKDOWN_PROFILE, aliases=(GITHUB_MARKDOWN, GITLAB_MARKDOWN, RENDERED_MARKDOWN))

    def register(self, profile: SourceProfile, aliases: Iterable[str] = ()) -> None:
        for key in (profile.name, *aliases):
            if key in self._profiles:
                logger.debug("Replacing source profile for %s", key)
            self._profiles[key] = profile

    @property
    def source_types(self) -> List[str]:
        return sorted(self._profiles)

    def get_profile(self, source_type: str) -> SourceProfile:
        try:
            return self._profiles[source_type]
        except (KeyError, TypeError):
            raise UnsupportedSourceError(source_type, self.source_types) from None

    def get_extractors(self, source_type: str) -> List[BlockExtractor]:
        return self.get_profile(source_type).build_extractors()

    def detect_source(self, url: str = "", root: Optional[Tag] = None) -> Optional[str]:
        """
        Guess the source type of a document from its URL and structure.

        Returns:
            The source type, or None when nothing matches.
        """
        url = (url or "").lower()
        parts = urlsplit(url)
        # scheme-less URLs such as "notion.so/page" parse as a bare path
        host = parts.netloc or parts.path.split("/", 1)[0]
        path = parts.path

        def has(selector: str) -> bool:
            return root is not None and root.select_one(selector) is not None

        if _on_host(host, "notion.so") or _on_host(host, "notion.site"):
            source = NOTION
        elif path.endswith((".md", ".markdown")):
            source = MARKDOWN
        elif _on_host(host, "github.com") and has(".markdown-body"):
            source = GITHUB_MARKDOWN
        elif _on_host(host, "gitlab.com") and (has(".md-content") or has(".wiki-content")):
            source = GITLAB_MARKDOWN
        elif has(".markdown") or has(".markdown-body") or has(".md-content"):
            source = RENDERED_MARKDOWN
        elif has(".notion-page-content"):
            source = NOTION
        else:
            source = None

        logger.debug("Detected source type %s for %r", source, url)
        return source


def _on_host(host: str, domain: str) -> bool:
    """True when *host* is *domain* or one of its subdomains."""
    host = host.rsplit("@", 1)[-1].split(":", 1)[0]
    return host == domain or host.endswith("." + domain)
