"""
Block extractors.

Each extractor recognises one structural category of the source tree and
renders a matched node to a markdown :class:`~notion_slides.models.Fragment`.
"""

from .base import BlockExtractor, ExtractorBase, collapse_whitespace, tag_name
from .blockquote import BlockquoteExtractor
from .code_block import CodeBlockExtractor
from .divider import DividerExtractor
from .heading import HeadingExtractor
from .image import ImageExtractor
from .lists import ListExtractor
from .paragraph import ParagraphExtractor
from .table import TableExtractor

__all__ = [
    'BlockExtractor',
    'ExtractorBase',
    'BlockquoteExtractor',
    'CodeBlockExtractor',
    'DividerExtractor',
    'HeadingExtractor',
    'ImageExtractor',
    'ListExtractor',
    'ParagraphExtractor',
    'TableExtractor',
    'collapse_whitespace',
    'tag_name',
]
