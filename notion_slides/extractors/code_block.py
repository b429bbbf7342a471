"""
Code block extractor.

The only extractor that keeps whitespace exactly as found: indentation and
line breaks are part of the code.
"""
import re
from typing import Iterable, Optional

from bs4.element import Tag

from ..models import BlockKind, Fragment
from .base import ExtractorBase, first_descendant, tag_name

FENCE = "```"

_LANGUAGE_CLASS_RE = re.compile(r"^(?:language|lang|highlight-source)-([A-Za-z0-9_+#.-]+)$")
_HIGHLIGHT_WRAPPERS = ("highlight", "codehilite", "sourceCode")


class CodeBlockExtractor:
    """
    Renders code nodes as fenced markdown code blocks.

    Args:
        base: Shared extractor primitives.
        code_block_classes: Source-specific classes marking code blocks.
        language_label_selector: CSS selector of an element holding the
            language name (Notion shows it as a label inside the block).
    """

    kind = BlockKind.CODE

    def __init__(
        self,
        base: ExtractorBase,
        code_block_classes: Iterable[str] = (),
        language_label_selector: Optional[str] = None,
    ):
        self.base = base
        self.code_block_classes = tuple(code_block_classes)
        self.language_label_selector = language_label_selector

    def detect(self, node: Tag) -> bool:
        if tag_name(node) == "pre" or self.base.has_any_class(node, self.code_block_classes):
            return True
        # GitHub / Pygments wrap the <pre> in a highlight div
        if self._is_highlight_wrapper(node):
            return node.find("pre") is not None
        return False

    def _is_highlight_wrapper(self, node: Tag) -> bool:
        if self.base.has_any_class(node, _HIGHLIGHT_WRAPPERS):
            return True
        classes = node.get("class") or []
        if isinstance(classes, str):
            classes = classes.split()
        return any(c.startswith("highlight-source-") for c in classes)

    def render(self, node: Tag) -> Fragment:
        code_element = self._code_element(node)
        code = code_element.get_text() if code_element is not None else ""
        if code.endswith("\n"):
            # markdown renderers terminate the last line inside <code>
            code = code[:-1]
        if not code.strip():
            self.base.debug("Empty code block skipped")
            return Fragment(text="", kind=self.kind)

        language = self._language(node, code_element)
        return Fragment(text=f"{FENCE}{language}\n{code}\n{FENCE}", kind=self.kind)

    def _code_element(self, node: Tag) -> Optional[Tag]:
        name = tag_name(node)
        if name == "code":
            return node
        if name == "pre":
            return node.find("code") or node
        pre = node.find("pre")
        if pre is not None:
            return pre.find("code") or pre
        leaf = node.find(attrs={"data-content-editable-leaf": "true"})
        if leaf is not None:
            return leaf
        return first_descendant(node, ("code",)) or node

    def _language(self, node: Tag, code_element: Optional[Tag]) -> str:
        candidates = [node]
        if code_element is not None and code_element is not node:
            if tag_name(code_element.parent) == "pre" and code_element.parent is not node:
                candidates.append(code_element.parent)
            candidates.append(code_element)

        for element in candidates:
            for attr in ("data-language", "data-lang"):
                if element.get(attr):
                    return str(element[attr]).strip().lower()
            classes = element.get("class") or []
            if isinstance(classes, str):
                classes = classes.split()
            for class_name in classes:
                match = _LANGUAGE_CLASS_RE.match(class_name)
                if match:
                    return match.group(1).lower()

        if self.language_label_selector:
            label = node.select_one(self.language_label_selector)
            if label is not None:
                return self.base.get_element_text(label).lower()
        return ""
