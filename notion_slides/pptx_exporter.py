#!/usr/bin/env python3
"""
PowerPoint exporter for extracted slides.
"""
import logging
import re
from typing import Iterator, List, Optional, Sequence, Tuple

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.util import Inches, Pt

from .models import Slide

logger = logging.getLogger(__name__)

TITLE_AND_CONTENT_LAYOUT = 1

_BULLET_RE = re.compile(r"^(?P<indent> *)(?:[-*+]|\d+\.)\s+(?:\[(?P<check>[ xX])\]\s+)?(?P<text>.*)$")
_FENCE_RE = re.compile(r"^\s*(```|~~~)")
_TABLE_SEPARATOR_RE = re.compile(r"^\|?\s*:?-{3,}:?\s*(\|\s*:?-{3,}:?\s*)*\|?$")
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
_LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")
_EMPHASIS_RE = re.compile(r"(\*\*|~~|\*|`)(.+?)\1")


def strip_inline_markdown(text: str) -> str:
    """Plain text of an inline markdown line."""
    text = _IMAGE_RE.sub(lambda m: f"[Image: {m.group(1) or 'Image'}]", text)
    text = _LINK_RE.sub(r"\1", text)
    previous = None
    while previous != text:
        previous = text
        text = _EMPHASIS_RE.sub(r"\2", text)
    return text


def body_lines(content: str) -> Iterator[Tuple[str, int, bool]]:
    """
    Split slide content into ``(text, level, is_code)`` paragraphs.

    Bullet items keep their indentation depth as the level (two spaces per
    level); fenced code is kept verbatim without the fences.
    """
    in_code = False
    for line in content.split("\n"):
        if _FENCE_RE.match(line):
            in_code = not in_code
            continue
        if in_code:
            yield line, 0, True
            continue
        if not line.strip() or _TABLE_SEPARATOR_RE.match(line.strip()):
            continue

        match = _BULLET_RE.match(line)
        if match:
            text = strip_inline_markdown(match.group("text"))
            check = match.group("check")
            if check is not None:
                text = ("☑ " if check.lower() == "x" else "☐ ") + text
            yield text, min(len(match.group("indent")) // 2, 8), False
        elif line.startswith(">"):
            text = strip_inline_markdown(line.lstrip("> ").strip())
            if text:
                yield text, 0, False
        elif line.lstrip().startswith("|"):
            cells = [c.strip().replace("\\|", "|") for c in line.strip().strip("|").split(" | ")]
            yield "    ".join(strip_inline_markdown(c) for c in cells), 0, False
        else:
            yield strip_inline_markdown(line.strip()), 0, False


def _walk(slides: Sequence[Slide]) -> Iterator[Slide]:
    stack: List[Slide] = list(reversed(slides))
    while stack:
        slide = stack.pop()
        yield slide
        stack.extend(reversed(slide.subslides))


class PPTXExporter:
    """
    Write slides to a PowerPoint file with python-pptx.

    Every slide and every subslide becomes one PowerPoint slide using the
    "Title and Content" layout.
    """

    def __init__(self, font_size: int = 18, code_font: str = "Courier New"):
        self.font_size = font_size
        self.code_font = code_font

    def _hex_to_rgb(self, hex_color: str) -> Optional[Tuple[int, int, int]]:
        """Convert hex color to RGB tuple."""
        hex_color = hex_color.strip().lstrip('#')
        if len(hex_color) == 3:
            hex_color = "".join(c * 2 for c in hex_color)
        if len(hex_color) != 6:
            return None
        try:
            return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))
        except ValueError:
            return None

    def export(self, slides: Sequence[Slide], output_path: str) -> str:
        """
        Render slides to a PowerPoint presentation.

        Args:
            slides: Top-level slides; subslides follow their parent
            output_path: Path where the PPTX file should be saved

        Returns:
            The path written
        """
        prs = Presentation()
        prs.slide_width = Inches(13.333)
        prs.slide_height = Inches(7.5)

        count = 0
        for slide in _walk(slides):
            self._add_slide(prs, slide)
            count += 1

        prs.save(str(output_path))
        logger.debug("Wrote %d PowerPoint slides to %s", count, output_path)
        return str(output_path)

    def _add_slide(self, prs, slide: Slide) -> None:
        pptx_slide = prs.slides.add_slide(prs.slide_layouts[TITLE_AND_CONTENT_LAYOUT])
        pptx_slide.shapes.title.text = slide.title

        color = slide.metadata.background.get("color")
        rgb = self._hex_to_rgb(color) if color and color.startswith("#") else None
        if rgb:
            fill = pptx_slide.background.fill
            fill.solid()
            fill.fore_color.rgb = RGBColor(*rgb)

        body = pptx_slide.placeholders[1]
        body.left, body.top = Inches(0.6), Inches(1.6)
        body.width, body.height = prs.slide_width - Inches(1.2), prs.slide_height - Inches(2.0)
        text_frame = body.text_frame
        text_frame.word_wrap = True

        first = True
        for text, level, is_code in body_lines(slide.content):
            paragraph = text_frame.paragraphs[0] if first else text_frame.add_paragraph()
            first = False
            paragraph.level = level
            run = paragraph.add_run()
            run.text = text
            run.font.size = Pt(self.font_size - 4 if is_code else self.font_size)
            if is_code:
                run.font.name = self.code_font
