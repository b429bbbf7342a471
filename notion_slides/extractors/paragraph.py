"""
Paragraph extractor: text blocks with inline formatting kept as markdown.
"""
from typing import Iterable

from bs4.element import Tag

from ..models import BlockKind, Fragment
from .base import ExtractorBase, tag_name


class ParagraphExtractor:
    kind = BlockKind.PARAGRAPH

    def __init__(self, base: ExtractorBase, paragraph_classes: Iterable[str] = ()):
        self.base = base
        self.paragraph_classes = tuple(paragraph_classes)

    def detect(self, node: Tag) -> bool:
        return tag_name(node) == "p" or self.base.has_any_class(node, self.paragraph_classes)

    def render(self, node: Tag) -> Fragment:
        return Fragment(text=self.base.get_inline_markdown(node), kind=self.kind)
