"""
List extractor: native ``ul``/``ol`` lists and one-item-per-node list blocks.
"""
from typing import Iterable, List, Optional, Sequence, Tuple

from bs4.element import NavigableString, Tag

from ..models import BlockKind, Fragment
from .base import BlockExtractor, ExtractorBase, tag_name

NATIVE_LIST_TAGS = ("ul", "ol")
INDENT = "  "

# Blocks rendered under a native list item; paragraphs and images there are item text
_NESTED_ITEM_KINDS = (BlockKind.CODE, BlockKind.QUOTE, BlockKind.TABLE)


class ListExtractor:
    """
    Renders lists as markdown bullet / numbered lines.

    Native lists are rendered item by item, numbering restarting at 1 for
    every list.  Source-specific list blocks (Notion bulleted, numbered,
    to-do and toggle blocks) hold a single logical item each and render as a
    single ``- text`` line, followed by the blocks nested inside them.

    Code, quote and table blocks inside an item are rendered by
    *block_extractors* and indented under the item.

    Args:
        base: Shared extractor primitives.
        item_block_classes: Classes marking single-item list blocks.
        block_extractors: Extractors for non-list blocks nested in items.
    """

    kind = BlockKind.LIST

    def __init__(
        self,
        base: ExtractorBase,
        item_block_classes: Iterable[str] = (),
        block_extractors: Sequence[BlockExtractor] = (),
    ):
        self.base = base
        self.item_block_classes = tuple(item_block_classes)
        self.block_extractors = list(block_extractors)

    def detect(self, node: Tag) -> bool:
        return tag_name(node) in NATIVE_LIST_TAGS or self.is_item_block(node)

    def is_item_block(self, node) -> bool:
        return self.base.has_any_class(node, self.item_block_classes)

    def render(self, node: Tag) -> Fragment:
        if tag_name(node) in NATIVE_LIST_TAGS:
            lines = self._render_native(node, depth=0)
        else:
            lines = self._render_item_block(node, depth=0)
        if not lines:
            self.base.debug("List without items skipped")
        return Fragment(text="\n".join(lines), kind=self.kind)

    # ------------------------------------------------------------------
    # Nested blocks
    # ------------------------------------------------------------------
    def _block_extractor(self, node: Tag, kinds: Optional[Sequence[BlockKind]] = None) -> Optional[BlockExtractor]:
        for extractor in self.block_extractors:
            if (kinds is None or extractor.kind in kinds) and extractor.detect(node):
                return extractor
        return None

    @staticmethod
    def _block_lines(extractor: BlockExtractor, node: Tag, depth: int) -> List[str]:
        text = extractor.render(node).text
        if not text:
            return []
        indent = INDENT * depth
        return [f"{indent}{line}" if line else "" for line in text.split("\n")]

    # ------------------------------------------------------------------
    # Native lists
    # ------------------------------------------------------------------
    def _render_native(self, node: Tag, depth: int) -> List[str]:
        ordered = tag_name(node) == "ol"
        lines: List[str] = []
        index = 0
        for item in node.find_all("li", recursive=False):
            text = self.base.get_inline_markdown(item)
            child_depth = depth
            if text:
                index += 1
                marker = f"{index}." if ordered else "-"
                lines.append(f"{INDENT * depth}{marker} {self._task_marker(item, node)}{text}")
                child_depth = depth + 1
            for child in item.children:
                if not isinstance(child, Tag):
                    continue
                if tag_name(child) in NATIVE_LIST_TAGS:
                    lines.extend(self._render_native(child, child_depth))
                    continue
                extractor = self._block_extractor(child, _NESTED_ITEM_KINDS)
                if extractor is not None:
                    lines.extend(self._block_lines(extractor, child, child_depth))
        return lines

    @staticmethod
    def _task_marker(item: Tag, owner: Tag) -> str:
        """``[ ] ``/``[x] `` for task-list items, empty otherwise."""
        for checkbox in item.find_all("input", attrs={"type": "checkbox"}):
            if checkbox.find_parent(NATIVE_LIST_TAGS) is owner:
                return "[x] " if checkbox.has_attr("checked") else "[ ] "
        return ""

    # ------------------------------------------------------------------
    # Single-item list blocks
    # ------------------------------------------------------------------
    def _render_item_block(self, node: Tag, depth: int) -> List[str]:
        leaf, children = self._scan_item_block(node)
        if leaf is not None:
            text = self.base.get_inline_markdown(leaf)
        else:
            text = self._text_outside(node, children)

        lines: List[str] = []
        child_depth = depth
        if text:
            lines.append(f"{INDENT * depth}- {text}")
            child_depth = depth + 1
        for child, extractor in children:
            if extractor is None:
                lines.extend(self._render_item_block(child, child_depth))
            else:
                lines.extend(self._block_lines(extractor, child, child_depth))
        return lines

    def _scan_item_block(self, node: Tag) -> Tuple[Optional[Tag], List[Tuple[Tag, Optional[BlockExtractor]]]]:
        """
        Find the item's own text leaf and the blocks nested in its body.

        Nested list blocks are paired with ``None``, other blocks with the
        extractor that renders them.  The search never enters a nested
        block, so grandchildren belong to their own item.
        """
        # Notion keeps the item text in an editable leaf; bullets and
        # checkboxes live in sibling elements without text.
        leaf: Optional[Tag] = None
        children: List[Tuple[Tag, Optional[BlockExtractor]]] = []
        stack = _child_tags(node)
        while stack:
            element = stack.pop()
            if self.is_item_block(element):
                children.append((element, None))
                continue
            if element.get("data-content-editable-leaf") == "true":
                if leaf is None:
                    leaf = element
                continue
            extractor = self._block_extractor(element)
            if extractor is not None:
                children.append((element, extractor))
                continue
            stack.extend(_child_tags(element))
        return leaf, children

    def _text_outside(self, node: Tag, children) -> str:
        """Item text of a block without a text leaf, leaving out nested blocks."""
        if not children:
            return self.base.get_inline_markdown(node)
        nested = {id(child) for child, _ in children}
        parts: List[str] = []
        for child in node.children:
            if isinstance(child, NavigableString):
                parts.append(self.base.get_element_text(child))
            elif id(child) not in nested and not any(id(d) in nested for d in child.descendants):
                parts.append(self.base.get_inline_markdown(child))
        return " ".join(part for part in parts if part)


def _child_tags(node: Tag) -> List[Tag]:
    """Element children of *node*, last first, ready to pop in document order."""
    return [child for child in reversed(node.contents) if isinstance(child, Tag)]
