"""
Table extractor: HTML tables and div-grid tables as GitHub markdown tables.
"""
from typing import Iterable, List

from bs4.element import Tag

from ..models import BlockKind, Fragment
from .base import ExtractorBase, tag_name


class TableExtractor:
    kind = BlockKind.TABLE

    def __init__(self, base: ExtractorBase, table_classes: Iterable[str] = ()):
        self.base = base
        self.table_classes = tuple(table_classes)

    def detect(self, node: Tag) -> bool:
        return tag_name(node) == "table" or self.base.has_any_class(node, self.table_classes)

    def render(self, node: Tag) -> Fragment:
        rows = self._html_rows(node) or self._grid_rows(node)
        rows = [row for row in rows if row]
        if not rows:
            return Fragment(text="", kind=self.kind)

        width = max(len(row) for row in rows)
        lines = [_format_row(rows[0], width), _format_row(["---"] * width, width)]
        lines.extend(_format_row(row, width) for row in rows[1:])
        return Fragment(text="\n".join(lines), kind=self.kind)

    def _html_rows(self, node: Tag) -> List[List[str]]:
        rows = []
        owner = node if tag_name(node) == "table" else None
        for tr in node.find_all("tr"):
            # skip rows of tables nested inside a cell
            if owner is not None and tr.find_parent("table") is not owner:
                continue
            rows.append([self._cell_text(cell) for cell in tr.find_all(["th", "td"], recursive=False)])
        return rows

    def _grid_rows(self, node: Tag) -> List[List[str]]:
        """Rows of a table laid out as nested divs (row divs holding cell divs)."""
        rows = []
        for row in node.find_all(True, recursive=False):
            cells = row.find_all(True, recursive=False)
            if cells:
                rows.append([self._cell_text(cell) for cell in cells])
        return rows

    def _cell_text(self, cell: Tag) -> str:
        return self.base.get_element_text(cell).replace("|", "\\|")


def _format_row(cells: List[str], width: int) -> str:
    padded = [cell or " " for cell in cells] + [" "] * (width - len(cells))
    return "| " + " | ".join(padded) + " |"
