"""
Shared primitives for block extractors.

Block extractors do not inherit from a common class.  Each one holds an
:class:`ExtractorBase` and calls into it for element lookup, class tests,
text extraction and debug logging; the orchestrator only relies on the
:class:`BlockExtractor` protocol (``kind`` / ``detect`` / ``render``).
"""
import logging
import re
from typing import Iterable, List, Optional, Protocol, Sequence, Union

from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

from ..models import BlockKind, Fragment

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")

# Strings that are part of the tree but never part of the visible text
_INVISIBLE_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)
_INVISIBLE_TAGS = frozenset({"script", "style", "template", "noscript"})
# Sibling blocks are separated by a space, so <p>a</p><p>b</p> reads "a b"
_SPACED_TAGS = frozenset({"p", "div", "li"})


def collapse_whitespace(text: str) -> str:
    """Trim *text* and collapse every internal whitespace run to one space."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def tag_name(node) -> str:
    """Lower-cased tag name of *node*, ``""`` for anything that is not an element."""
    if isinstance(node, Tag) and node.name:
        return node.name.lower()
    return ""


class BlockExtractor(Protocol):
    """Capability set every block extractor offers to the orchestrator."""

    kind: BlockKind

    def detect(self, node: Tag) -> bool:
        ...

    def render(self, node: Tag) -> Fragment:
        ...


class ExtractorBase:
    """
    Element matching, text extraction and debug logging shared by extractors.

    Args:
        nested_tags: Tag names of block-level descendants owned by their own
            extractor (their text is excluded from the enclosing node's text).
        nested_classes: Class names with the same meaning as *nested_tags*.
        name: Prefix used in debug messages.
    """

    def __init__(
        self,
        nested_tags: Iterable[str] = (),
        nested_classes: Iterable[str] = (),
        name: str = "extractor",
    ):
        self.nested_tags = frozenset(t.lower() for t in nested_tags)
        self.nested_classes = frozenset(nested_classes)
        self.name = name

    def scoped(self, name: str) -> "ExtractorBase":
        """Same configuration, different debug prefix."""
        return ExtractorBase(self.nested_tags, self.nested_classes, name=name)

    # ------------------------------------------------------------------
    # Element matching
    # ------------------------------------------------------------------
    def find_elements(self, root: Tag, selectors: Union[str, Sequence[str]]) -> List[Tag]:
        """
        Return the elements under *root* matching one or several CSS selectors.

        Matches come back in document order without duplicates, even when an
        element satisfies more than one selector.
        """
        if root is None:
            return []
        if isinstance(selectors, str):
            selectors = [selectors]
        unique: List[str] = []
        for selector in selectors:
            selector = selector.strip()
            if selector and selector not in unique:
                unique.append(selector)
        if not unique:
            return []
        return list(root.select(", ".join(unique)))

    def has_class(self, node, class_name: str) -> bool:
        """True iff *class_name* is one of the node's classes (exact match)."""
        if not isinstance(node, Tag):
            return False
        classes = node.get("class")
        if not classes:
            return False
        if isinstance(classes, str):
            classes = classes.split()
        return class_name in classes

    def has_any_class(self, node, class_names: Iterable[str]) -> bool:
        return any(self.has_class(node, name) for name in class_names)

    def is_nested_block(self, node) -> bool:
        """True for block-level nodes whose text belongs to their own extractor."""
        if tag_name(node) in self.nested_tags:
            return True
        return self.has_any_class(node, self.nested_classes)

    # ------------------------------------------------------------------
    # Text extraction
    # ------------------------------------------------------------------
    def get_element_text(self, node) -> str:
        """
        Normalized text of *node*.

        Leading and trailing whitespace is removed and internal runs are
        collapsed to a single space.  Nested block-level descendants are
        skipped so their text is not counted twice.
        """
        if node is None:
            return ""
        if isinstance(node, NavigableString):
            if isinstance(node, _INVISIBLE_STRINGS):
                return ""
            return collapse_whitespace(str(node))
        parts: List[str] = []
        self._collect_text(node, parts)
        return collapse_whitespace("".join(parts))

    def get_inline_markdown(self, node) -> str:
        """
        Like :meth:`get_element_text`, but keeps inline formatting as markdown.
        """
        if node is None:
            return ""
        if isinstance(node, NavigableString):
            return self.get_element_text(node)
        return collapse_whitespace(self._inline_markdown(node))

    def _collect_text(self, node: Tag, parts: List[str]) -> None:
        for child in node.children:
            if isinstance(child, NavigableString):
                if not isinstance(child, _INVISIBLE_STRINGS):
                    parts.append(str(child))
                continue
            name = tag_name(child)
            if name in _INVISIBLE_TAGS or self.is_nested_block(child):
                continue
            if name == "br":
                parts.append(" ")
                continue
            spaced = name in _SPACED_TAGS
            if spaced:
                parts.append(" ")
            self._collect_text(child, parts)
            if spaced:
                parts.append(" ")

    def _inline_markdown(self, node: Tag) -> str:
        out: List[str] = []
        for child in node.children:
            if isinstance(child, NavigableString):
                if not isinstance(child, _INVISIBLE_STRINGS):
                    out.append(str(child))
                continue
            name = tag_name(child)
            if name in _INVISIBLE_TAGS or self.is_nested_block(child):
                continue
            if name == "br":
                out.append(" ")
            elif name in ("strong", "b"):
                out.append(_wrap(self._inline_markdown(child), "**"))
            elif name in ("em", "i"):
                out.append(_wrap(self._inline_markdown(child), "*"))
            elif name in ("del", "s", "strike"):
                out.append(_wrap(self._inline_markdown(child), "~~"))
            elif name == "code":
                out.append(_wrap(child.get_text(), "`"))
            elif name == "a" and child.get("href"):
                label = collapse_whitespace(self._inline_markdown(child))
                out.append(f"[{label}]({child['href']})" if label else "")
            elif name == "img" and child.get("src"):
                out.append(f"![{child.get('alt') or 'Image'}]({child['src']})")
            elif name in _SPACED_TAGS:
                out.append(f" {self._inline_markdown(child)} ")
            else:
                out.append(self._inline_markdown(child))
        return "".join(out)

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    def debug(self, message: str, *args) -> None:
        """Log a debug message; free when debug logging is disabled."""
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("[%s] " + message, self.name, *args)


def _wrap(text: str, marker: str) -> str:
    """Wrap the non-blank core of *text* in *marker*, keeping outer spacing."""
    core = text.strip()
    if not core:
        return text
    lead = " " if text[:1].isspace() else ""
    trail = " " if text[-1:].isspace() else ""
    return f"{lead}{marker}{collapse_whitespace(core)}{marker}{trail}"


def first_descendant(node: Tag, names: Sequence[str]) -> Optional[Tag]:
    """First descendant of *node* whose tag name is in *names* (or None)."""
    for descendant in node.descendants:
        if tag_name(descendant) in names:
            return descendant
    return None
