"""
Exception types raised by the slide extraction pipeline.

Only a few conditions cross the pipeline boundary as exceptions.  Empty
lists, empty headings and unrecognised blocks are absorbed by the extractors
and show up as shorter content or fewer slides instead.
"""


class SlidesError(Exception):
    """Base class for all errors raised by notion_slides."""


class ExtractionError(SlidesError):
    """Extraction could not run to completion."""


class InvalidRootError(ExtractionError):
    """The root node handed to the extractor is missing or not an element."""


class UnsupportedSourceError(ExtractionError, KeyError):
    """No extractor set is registered for the requested source type."""

    def __init__(self, source_type, available=()):
        self.source_type = source_type
        self.available = tuple(available)
        super().__init__(
            f"Unsupported source type: {source_type!r}. "
            f"Available source types: {', '.join(self.available) or 'none'}"
        )

    def __str__(self):
        # KeyError.__str__ would repr() the message
        return self.args[0]


class ExtractionTimeoutError(ExtractionError):
    """The caller-side extraction guard expired."""


class StorageError(SlidesError):
    """A stored presentation could not be read back."""


class ConfigError(SlidesError, ValueError):
    """Settings contain an invalid value."""
