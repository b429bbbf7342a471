"""
Notion / Markdown to slides extraction pipeline.
"""

from .config import Settings, load_settings
from .content_extractor import ContentExtractor
from .content_processor import ContentProcessor
from .errors import (
    ConfigError,
    ExtractionError,
    ExtractionTimeoutError,
    InvalidRootError,
    SlidesError,
    StorageError,
    UnsupportedSourceError,
)
from .generator import SlideGenerator
from .markdown_parser import MarkdownParser
from .models import BlockKind, ExtractionResult, Fragment, Presentation, Slide, SlideBuffer, SlideMetadata
from .source_manager import SourceManager, SourceProfile

__version__ = "0.1.0"

__all__ = [
    'BlockKind',
    'ConfigError',
    'ContentExtractor',
    'ContentProcessor',
    'ExtractionError',
    'ExtractionResult',
    'ExtractionTimeoutError',
    'Fragment',
    'InvalidRootError',
    'MarkdownParser',
    'Presentation',
    'Settings',
    'Slide',
    'SlideBuffer',
    'SlideGenerator',
    'SlideMetadata',
    'SlidesError',
    'SourceManager',
    'SourceProfile',
    'StorageError',
    'UnsupportedSourceError',
    'load_settings',
]
