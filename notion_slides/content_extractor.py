"""
Content extractor: walks a source tree and assigns slide boundaries.

The walk is iterative (an explicit stack of child iterators) and never
modifies the tree.  Every element is offered to the block extractors of the
active source profile in priority order; headings open slide buffers and
everything else is appended to the innermost open buffer.
"""
import logging
from typing import Iterator, List, Optional, Sequence, Set, Tuple

from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

from .content_processor import ContentProcessor
from .errors import InvalidRootError
from .extractors import BlockExtractor, ExtractorBase, collapse_whitespace, tag_name
from .models import BlockKind, ExtractionResult, Fragment, Slide, SlideBuffer
from .source_manager import SourceManager, SourceProfile

logger = logging.getLogger(__name__)

_SKIPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


class ContentExtractor:
    """
    Turn a document tree into slides.

    Args:
        source_manager: Registry used to resolve source types.  A manager
            with the built-in profiles is created when omitted.
        processor: Converts the buffer arena into slides.
    """

    def __init__(self, source_manager: Optional[SourceManager] = None, processor: Optional[ContentProcessor] = None):
        self.source_manager = source_manager or SourceManager()
        self.processor = processor or ContentProcessor()

    def extract(self, root: Tag, source_type: str) -> List[Slide]:
        """
        Extract the slides of *root*.

        Args:
            root: Document root (a BeautifulSoup document or any element).
            source_type: Key of a registered source profile.

        Returns:
            Slides in document order.  An empty list means no slides were
            found, which is not an error.

        Raises:
            InvalidRootError: *root* is missing or not an element.
            UnsupportedSourceError: *source_type* is not registered.
        """
        if root is None:
            raise InvalidRootError("No document root was given")
        if not isinstance(root, Tag):
            raise InvalidRootError(f"Document root must be an element, got {type(root).__name__}")

        profile = self.source_manager.get_profile(source_type)
        base = profile.build_base()
        extractors = profile.build_extractors(base)
        container = self.find_container(root, profile)
        logger.debug("Extracting %s content from <%s>", source_type, tag_name(container) or "document")

        buffers = self._collect_buffers(container, profile, base, extractors)
        slides = self.processor.finalize(buffers, source_type=source_type)
        logger.debug("Found %d top-level slides in %d buffers", len(slides), len(buffers))
        return slides

    def extract_result(self, root: Tag, source_type: str) -> ExtractionResult:
        """Same as :meth:`extract`, wrapped with the source type."""
        return ExtractionResult(slides=self.extract(root, source_type), source_type=source_type)

    @staticmethod
    def find_container(root: Tag, profile: SourceProfile) -> Tag:
        """First element matching the profile's container selectors, else ``<body>``, else *root*."""
        for selector in profile.container_selectors:
            match = root.select_one(selector)
            if match is not None:
                return match
        if tag_name(root) != "body":
            body = root.find("body")
            if body is not None:
                return body
        return root

    # ------------------------------------------------------------------
    # Walk
    # ------------------------------------------------------------------
    def _collect_buffers(
        self,
        container: Tag,
        profile: SourceProfile,
        base: ExtractorBase,
        extractors: Sequence[BlockExtractor],
    ) -> List[SlideBuffer]:
        arena: List[SlideBuffer] = []
        open_stack: List[int] = []

        for fragment in self._iter_fragments(container, profile, base, extractors):
            if fragment.is_heading():
                level = fragment.level or 1
                while open_stack and arena[open_stack[-1]].level >= level:
                    open_stack.pop()
                parent = open_stack[-1] if open_stack else None
                arena.append(SlideBuffer(heading=fragment, level=level, parent_index=parent))
                open_stack.append(len(arena) - 1)
            elif fragment.is_empty():
                continue
            elif open_stack:
                arena[open_stack[-1]].append(fragment)
            else:
                logger.debug("Discarding %s content before the first heading", fragment.kind.value)
        return arena

    def _iter_fragments(
        self,
        container: Tag,
        profile: SourceProfile,
        base: ExtractorBase,
        extractors: Sequence[BlockExtractor],
    ) -> Iterator[Fragment]:
        ignored = frozenset(profile.ignored_tags)
        wrappers: Set[int] = set()
        stack: List[Iterator] = [iter(container.children)]

        while stack:
            node = next(stack[-1], None)
            if node is None:
                stack.pop()
                continue

            if isinstance(node, NavigableString):
                if isinstance(node, _SKIPPED_STRINGS):
                    continue
                text = collapse_whitespace(str(node))
                if text:
                    yield Fragment(text=text, kind=BlockKind.PARAGRAPH)
                continue

            if not isinstance(node, Tag) or tag_name(node) in ignored:
                continue

            matched, fragment = self._render(node, extractors)
            if matched:
                if fragment is not None:
                    yield fragment
                continue

            if self._contains_block(node, extractors, ignored, wrappers):
                stack.append(iter(node.children))
                continue

            text = base.get_element_text(node)
            if text:
                yield Fragment(text=text, kind=BlockKind.PARAGRAPH)

    @staticmethod
    def _detect(extractor: BlockExtractor, node: Tag) -> bool:
        try:
            return extractor.detect(node)
        except Exception as exc:
            logger.warning("%s detection failed on <%s>: %s", type(extractor).__name__, tag_name(node), exc)
            return False

    def _render(self, node: Tag, extractors: Sequence[BlockExtractor]) -> Tuple[bool, Optional[Fragment]]:
        """
        Offer *node* to the extractors in order.

        Returns ``(matched, fragment)``; *fragment* is None when the matching
        extractor failed, in which case the node is skipped.
        """
        for extractor in extractors:
            if not self._detect(extractor, node):
                continue
            try:
                return True, extractor.render(node)
            except Exception as exc:
                logger.warning("Skipping <%s>: %s failed: %s", tag_name(node), type(extractor).__name__, exc)
                logger.debug("Render failure details", exc_info=True)
                return True, None
        return False, None

    def _contains_block(self, node: Tag, extractors: Sequence[BlockExtractor], ignored, wrappers: Set[int]) -> bool:
        """
        True when some descendant of *node* is matched by an extractor.

        Every element between *node* and the first match also contains that
        match; their ids are added to *wrappers* so nested wrappers are
        answered without another scan.
        """
        if id(node) in wrappers:
            return True
        for descendant in node.descendants:
            if not isinstance(descendant, Tag) or tag_name(descendant) in ignored:
                continue
            if any(self._detect(extractor, descendant) for extractor in extractors):
                for parent in descendant.parents:
                    if parent is node:
                        break
                    wrappers.add(id(parent))
                return True
        return False
