"""
Content processor: turns the buffer arena of one extraction pass into slides.
"""
import logging
import re
from typing import Dict, List, Optional, Sequence

from .models import Slide, SlideBuffer

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^\s*(```|~~~)")
_HEADING_NO_SPACE_RE = re.compile(r"^(#{1,6})(?=[^\s#])")
_BULLET_RE = re.compile(r"^(\s*)[*+](?=\s)\s*")


def normalize_content(content: str) -> str:
    """
    Trim *content* and tidy its markdown outside fenced code.

    * three or more consecutive newlines become two,
    * ``#Title`` gets the space a heading needs (``# Title``),
    * ``*`` and ``+`` bullets become ``-``, keeping their indentation.

    Lines inside a code fence are left exactly as they are.
    """
    content = content.strip()

    lines: List[str] = []
    blank_run = 0
    fence: Optional[str] = None

    for line in content.split("\n"):
        match = _FENCE_RE.match(line)
        if fence is not None:
            lines.append(line)
            if match and match.group(1) == fence:
                fence = None
            continue
        if line:
            blank_run = 0
        else:
            blank_run += 1
            if blank_run > 1:
                continue
        if match:
            fence = match.group(1)
        else:
            line = _HEADING_NO_SPACE_RE.sub(r"\1 ", line)
            line = _BULLET_RE.sub(r"\1- ", line)
        lines.append(line)
    return "\n".join(lines)


class ContentProcessor:
    """
    Convert :class:`SlideBuffer` objects into :class:`Slide` records.

    Output depends only on the buffers: no timestamps, no randomness.
    """

    def finalize(self, buffers: Sequence[SlideBuffer], source_type: str = "unknown") -> List[Slide]:
        """
        Build the slide tree of one extraction pass.

        Buffers must be in arena order, so every child comes after its
        parent.  They are processed from the last to the first; by the time
        a buffer is reached all its children are finished.  A buffer with
        neither title nor content is dropped and its finished children take
        its place in its parent's subslides (or at the top level).

        Args:
            buffers: The arena, in document order.
            source_type: Recorded on every produced slide.

        Returns:
            Top-level slides in document order.
        """
        # per buffer: finished children, collected back to front
        children: Dict[Optional[int], List[Slide]] = {}

        for index in range(len(buffers) - 1, -1, -1):
            buffer = buffers[index]
            own_children = children.pop(index, [])
            own_children.reverse()

            title = buffer.title.strip()
            content = normalize_content("\n".join(f.text for f in buffer.fragments if not f.is_empty()))
            target = children.setdefault(buffer.parent_index, [])

            if not title and not content:
                logger.debug("Dropping empty slide buffer %d, promoting %d subslides", index, len(own_children))
                # target is filled back to front, so promoted children go in reversed
                target.extend(reversed(own_children))
                continue

            target.append(Slide(
                title=title,
                content=content,
                source_type=source_type,
                metadata=buffer.heading.metadata,
                subslides=tuple(own_children),
            ))

        top_level = children.pop(None, [])
        top_level.reverse()
        return top_level
