"""
Heading extractor: native ``h1``-``h6`` tags and source-specific heading blocks.
"""
import re
from typing import Dict, Optional

from bs4.element import Tag

from ..models import BlockKind, Fragment, SlideMetadata
from .base import ExtractorBase, tag_name

NATIVE_HEADINGS = {f"h{level}": level for level in range(1, 7)}

# Notion renders untitled heading blocks as "Heading 2: ..." placeholders
_PLACEHOLDER_PREFIX_RE = re.compile(r"^Heading\s+[1-6]\s*(?::\s*|$)", re.IGNORECASE)

# Bookkeeping attributes that never describe slide styling
_IGNORED_DATA_ATTRIBUTES = ("data-block-id", "data-content-editable", "data-root")


class HeadingExtractor:
    """
    Maps heading nodes to ``(level, text)`` heading fragments.

    Args:
        base: Shared extractor primitives.
        heading_classes: Source-specific class name -> heading level.
        strip_placeholder_prefix: Remove Notion's ``Heading N:`` prefix.
    """

    kind = BlockKind.HEADING

    def __init__(
        self,
        base: ExtractorBase,
        heading_classes: Optional[Dict[str, int]] = None,
        strip_placeholder_prefix: bool = False,
    ):
        self.base = base
        self.heading_classes = dict(heading_classes or {})
        self.strip_placeholder_prefix = strip_placeholder_prefix

    def detect(self, node: Tag) -> bool:
        return self.heading_level(node) is not None

    def heading_level(self, node: Tag) -> Optional[int]:
        """Level of *node* as a heading, or None when it is not one."""
        name = tag_name(node)
        if name in NATIVE_HEADINGS:
            return NATIVE_HEADINGS[name]
        for class_name, level in self.heading_classes.items():
            if self.base.has_class(node, class_name):
                return level
        return None

    def render(self, node: Tag) -> Fragment:
        level = self.heading_level(node) or 1
        text = self.base.get_element_text(node)
        if self.strip_placeholder_prefix:
            text = _PLACEHOLDER_PREFIX_RE.sub("", text).strip()
        if not text:
            self.base.debug("Empty heading at level %d", level)
        return Fragment(text=text, kind=self.kind, level=level, metadata=self.metadata_for(node))

    def to_markdown(self, node: Tag) -> str:
        """``#``-prefixed markdown for *node*."""
        fragment = self.render(node)
        return f"{'#' * fragment.level} {fragment.text}"

    def metadata_for(self, node: Tag) -> SlideMetadata:
        """Collect reveal.js style hints from the heading's attributes."""
        background: Dict[str, str] = {}
        transition: Dict[str, str] = {}
        attributes: Dict[str, str] = {}

        for key, value in node.attrs.items():
            if not key.startswith("data-") or key.startswith(_IGNORED_DATA_ATTRIBUTES):
                continue
            if isinstance(value, list):
                value = " ".join(value)
            if key == "data-background":
                background["color"] = value
            elif key.startswith("data-background-"):
                background[key[len("data-background-"):]] = value
            elif key == "data-transition":
                transition["style"] = value
            elif key == "data-transition-speed":
                transition["speed"] = value
            else:
                attributes[key[len("data-"):]] = value

        classes = node.get("class") or []
        if isinstance(classes, str):
            classes = classes.split()
        styling_classes = tuple(
            c for c in classes
            if c not in self.heading_classes and not c.startswith("notion-")
        )
        return SlideMetadata(
            classes=styling_classes,
            background=background,
            transition=transition,
            attributes=attributes,
        )
