"""
Divider extractor.

Dividers are recognised only so that they are dropped: a markdown ``---``
inside slide content would be read as a slide separator by reveal.js.
"""
from typing import Iterable

from bs4.element import Tag

from ..models import BlockKind, Fragment
from .base import ExtractorBase, tag_name


class DividerExtractor:
    kind = BlockKind.DIVIDER

    def __init__(self, base: ExtractorBase, divider_classes: Iterable[str] = ()):
        self.base = base
        self.divider_classes = tuple(divider_classes)

    def detect(self, node: Tag) -> bool:
        return tag_name(node) == "hr" or self.base.has_any_class(node, self.divider_classes)

    def render(self, node: Tag) -> Fragment:
        return Fragment(text="", kind=self.kind)
