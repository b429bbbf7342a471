"""
Data models for the slide extraction pipeline.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class BlockKind(str, Enum):
    """Structural category of a rendered fragment."""
    HEADING = "heading"
    LIST = "list"
    CODE = "code"
    TABLE = "table"
    QUOTE = "quote"
    IMAGE = "image"
    DIVIDER = "divider"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class SlideMetadata:
    """
    Styling hints carried from the heading that opened a slide.
    """
    classes: Tuple[str, ...] = ()
    background: Dict[str, str] = field(default_factory=dict)  # color / image / size / position
    transition: Dict[str, str] = field(default_factory=dict)  # style / speed
    attributes: Dict[str, str] = field(default_factory=dict)  # any other data-* attribute

    def is_empty(self) -> bool:
        return not (self.classes or self.background or self.transition or self.attributes)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.classes:
            data["classes"] = list(self.classes)
        if self.background:
            data["background"] = dict(self.background)
        if self.transition:
            data["transition"] = dict(self.transition)
        if self.attributes:
            data["dataAttributes"] = dict(self.attributes)
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SlideMetadata":
        data = data or {}
        return cls(
            classes=tuple(data.get("classes") or ()),
            background=dict(data.get("background") or {}),
            transition=dict(data.get("transition") or {}),
            attributes=dict(data.get("dataAttributes") or data.get("attributes") or {}),
        )


@dataclass(frozen=True)
class Fragment:
    """
    One markdown-rendered piece of content produced by a block extractor.
    """
    text: str
    kind: BlockKind = BlockKind.PARAGRAPH
    level: Optional[int] = None  # heading level, None for everything else
    metadata: SlideMetadata = field(default_factory=SlideMetadata)

    def is_heading(self) -> bool:
        return self.kind is BlockKind.HEADING

    def is_empty(self) -> bool:
        return not self.text.strip()


@dataclass
class SlideBuffer:
    """
    Fragments accumulated between a heading and the heading that closes it.

    Buffers live in a flat arena owned by a single extraction pass;
    ``parent_index`` points at the enclosing buffer in that arena.
    """
    heading: Fragment
    level: int
    parent_index: Optional[int] = None
    fragments: List[Fragment] = field(default_factory=list)

    def append(self, fragment: Fragment) -> None:
        self.fragments.append(fragment)

    @property
    def title(self) -> str:
        return self.heading.text


@dataclass(frozen=True)
class Slide:
    """
    A finished slide, optionally holding vertically nested subslides.
    """
    title: str
    content: str = ""
    source_type: str = "unknown"
    metadata: SlideMetadata = field(default_factory=SlideMetadata)
    subslides: Tuple["Slide", ...] = ()

    def is_valid(self) -> bool:
        """A slide needs at least a title to be shown."""
        return bool(self.title.strip())

    def has_subslides(self) -> bool:
        return len(self.subslides) > 0

    def to_markdown(self) -> str:
        """Render the slide (and its subslides as ``##`` sections) as markdown."""
        markdown = f"# {self.title}\n\n"
        if self.content:
            markdown += self.content
        if self.has_subslides():
            markdown += "\n\n"
            for subslide in self.subslides:
                markdown += f"## {subslide.title}\n\n{subslide.content}\n\n"
        return markdown

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "sourceType": self.source_type,
            "metadata": self.metadata.to_dict(),
            "subslides": [subslide.to_dict() for subslide in self.subslides],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Slide":
        """
        Create a Slide from its stored dictionary form.
        """
        return cls(
            title=str(data.get("title") or ""),
            content=str(data.get("content") or ""),
            source_type=data.get("sourceType") or data.get("source_type") or "unknown",
            metadata=SlideMetadata.from_dict(data.get("metadata")),
            subslides=tuple(cls.from_dict(sub) for sub in data.get("subslides") or ()),
        )


@dataclass
class ExtractionResult:
    """
    Slides returned by one extraction call, tagged with the source type.

    An empty result is a valid outcome ("no slides found") and must be told
    apart from an extraction failure, which is raised instead.
    """
    slides: List[Slide]
    source_type: str

    @property
    def no_slides_found(self) -> bool:
        return len(self.slides) == 0

    @property
    def slide_count(self) -> int:
        return len(self.slides)

    def __len__(self) -> int:
        return len(self.slides)

    def __iter__(self):
        return iter(self.slides)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Presentation:
    """
    A stored collection of slides plus envelope metadata.
    """
    slides: List[Slide] = field(default_factory=list)
    title: str = "Untitled Presentation"
    source_type: str = "unknown"
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.metadata.setdefault("createdAt", _now())
        self.metadata.setdefault("updatedAt", self.metadata["createdAt"])

    @property
    def slide_count(self) -> int:
        return len(self.slides)

    def add_slide(self, slide: Slide) -> int:
        """Append a slide if it is valid and return the new slide count."""
        if slide.is_valid():
            self.slides.append(slide)
            self.metadata["updatedAt"] = _now()
        return len(self.slides)

    def get_slide(self, index: int) -> Optional[Slide]:
        if 0 <= index < len(self.slides):
            return self.slides[index]
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "sourceType": self.source_type,
            "metadata": dict(self.metadata),
            "slides": [slide.to_dict() for slide in self.slides],
        }

    @classmethod
    def from_slides(cls, slides: List[Slide], source_type: str = "unknown") -> "Presentation":
        title = slides[0].title if slides and slides[0].title else "Untitled Presentation"
        return cls(slides=list(slides), title=title, source_type=source_type)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Presentation":
        slides = [Slide.from_dict(s) for s in data.get("slides") or ()]
        return cls(
            slides=slides,
            title=data.get("title") or "Untitled Presentation",
            source_type=data.get("sourceType") or "unknown",
            metadata=dict(data.get("metadata") or {}),
        )
