"""
Image extractor.
"""
from typing import Iterable, List

from bs4.element import Tag

from ..models import BlockKind, Fragment
from .base import ExtractorBase, tag_name

# Containers that count as an image block when they hold nothing but images
_IMAGE_CONTAINERS = ("p", "figure", "picture", "a", "span")


class ImageExtractor:
    kind = BlockKind.IMAGE

    def __init__(self, base: ExtractorBase, image_classes: Iterable[str] = ()):
        self.base = base
        self.image_classes = tuple(image_classes)

    def detect(self, node: Tag) -> bool:
        name = tag_name(node)
        if name == "img" or self.base.has_any_class(node, self.image_classes):
            return True
        if name in _IMAGE_CONTAINERS and node.find("img") is not None:
            caption = node.find("figcaption")
            text = self.base.get_element_text(node)
            if caption is not None:
                text = text.replace(self.base.get_element_text(caption), "", 1).strip()
            return not text
        return False

    def render(self, node: Tag) -> Fragment:
        images = [node] if tag_name(node) == "img" else node.find_all("img")
        caption = node.find("figcaption") if tag_name(node) != "img" else None
        caption_text = self.base.get_element_text(caption) if caption is not None else ""

        lines: List[str] = []
        for img in images:
            src = img.get("src") or img.get("data-src")
            if not src:
                continue
            alt = img.get("alt") or img.get("title") or caption_text or "Image"
            lines.append(f"![{alt}]({src})")
        return Fragment(text="\n".join(lines), kind=self.kind)
