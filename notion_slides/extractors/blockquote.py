"""
Blockquote extractor.
"""
from typing import Iterable, List, Optional, Sequence

from bs4.element import NavigableString, Tag

from ..models import BlockKind, Fragment
from .base import BlockExtractor, ExtractorBase, tag_name

_BLOCK_CHILDREN = frozenset({"p", "div", "blockquote", "figure", "section"})

class BlockquoteExtractor:
    """
    Renders quotes and callouts as ``> `` prefixed markdown lines.

    Lists, code and tables inside the quote are rendered by
    *block_extractors*; quotes inside quotes get one more ``>``.
    """

    kind = BlockKind.QUOTE

    def __init__(
        self,
        base: ExtractorBase,
        quote_classes: Iterable[str] = (),
        block_extractors: Sequence[BlockExtractor] = (),
    ):
        self.base = base
        self.quote_classes = tuple(quote_classes)
        self.block_extractors = list(block_extractors)

    def detect(self, node: Tag) -> bool:
        return tag_name(node) == "blockquote" or self.base.has_any_class(node, self.quote_classes)

    def render(self, node: Tag) -> Fragment:
        if any(self._is_block(child) for child in node.children):
            # one line per child block, so multi-paragraph quotes keep their breaks
            lines: List[str] = []
            for child in node.children:
                lines.extend(self._child_lines(child))
        else:
            text = self.base.get_inline_markdown(node)
            lines = [text] if text else []
        return Fragment(text="\n".join(f"> {line}" if line else ">" for line in lines), kind=self.kind)

    def _is_block(self, child) -> bool:
        if not isinstance(child, Tag):
            return False
        return tag_name(child) in _BLOCK_CHILDREN or self._block_extractor(child) is not None

    def _block_extractor(self, node: Tag) -> Optional[BlockExtractor]:
        for extractor in self.block_extractors:
            if extractor.detect(node):
                return extractor
        return None

    def _child_lines(self, child) -> List[str]:
        if isinstance(child, NavigableString):
            text = self.base.get_element_text(child)
            return [text] if text else []
        if self.detect(child):
            text = self.render(child).text
            return text.split("\n") if text else []
        extractor = self._block_extractor(child)
        if extractor is not None:
            text = extractor.render(child).text
            return text.split("\n") if text else []
        text = self.base.get_inline_markdown(child)
        return [text] if text else []
