"""
JSON persistence for extracted presentations.
"""
import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from .errors import StorageError
from .models import Presentation, Slide

logger = logging.getLogger(__name__)

STORAGE_VERSION = 1


class SlideStore:
    """
    Store one presentation in a JSON file.

    The file holds ``{"version": 1, "presentation": {...}}``; slides keep the
    shape of :meth:`Slide.to_dict`.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def save(self, slides: List[Slide], source_type: str = "unknown", title: Optional[str] = None) -> Presentation:
        """
        Write *slides* as a new presentation.

        Args:
            slides: Slides in presentation order
            source_type: Source the slides were extracted from
            title: Presentation title; defaults to the first slide's title

        Returns:
            The stored presentation
        """
        presentation = Presentation.from_slides(slides, source_type=source_type)
        if title:
            presentation.title = title
        self.save_presentation(presentation)
        return presentation

    def save_presentation(self, presentation: Presentation) -> None:
        payload = {"version": STORAGE_VERSION, "presentation": presentation.to_dict()}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        logger.debug("Stored %d slides in %s", presentation.slide_count, self.path)

    def load(self) -> Presentation:
        """
        Read the stored presentation.

        Raises:
            FileNotFoundError: If nothing was stored yet
            StorageError: If the file is not a stored presentation
        """
        with open(self.path, "r", encoding="utf-8") as f:
            try:
                payload = json.load(f)
            except json.JSONDecodeError as exc:
                raise StorageError(f"{self.path} is not valid JSON: {exc}") from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("presentation"), dict):
            raise StorageError(f"{self.path} does not contain a stored presentation")
        version = payload.get("version")
        if version != STORAGE_VERSION:
            raise StorageError(f"Unsupported storage version {version!r} in {self.path}")

        try:
            return Presentation.from_dict(payload["presentation"])
        except (TypeError, AttributeError) as exc:
            raise StorageError(f"Malformed presentation in {self.path}: {exc}") from exc

    def exists(self) -> bool:
        return self.path.is_file()

    def clear(self) -> None:
        """Delete the stored presentation if there is one."""
        if self.path.exists():
            self.path.unlink()
