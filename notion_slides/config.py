"""
Presentation and extraction settings.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError, field_validator

from .errors import ConfigError
from .theme_loader import validate_theme

logger = logging.getLogger(__name__)

TRANSITIONS = ("none", "fade", "slide", "convex", "concave", "zoom")


class Settings(BaseModel):
    """
    Settings merged over the defaults.

    Stored settings from the browser extension used camelCase keys
    (``slideNumber``, ``debugLogging``, ``extractionTimeout``); both spellings
    are accepted.  Invalid values raise :class:`ConfigError`.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    theme: str = "black"
    transition: str = "slide"
    slide_number: StrictBool = Field(default=False, alias="slideNumber")
    center: StrictBool = True
    debug_logging: StrictBool = Field(default=False, alias="debugLogging")
    extraction_timeout: float = Field(default=30.0, gt=0, alias="extractionTimeout", description="Seconds")

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise ConfigError(_describe(exc)) from exc

    @field_validator("theme")
    @classmethod
    def check_theme(cls, value: str) -> str:
        if not validate_theme(value):
            raise ValueError(f"Unknown theme: {value!r}")
        return value

    @field_validator("transition")
    @classmethod
    def check_transition(cls, value: str) -> str:
        if value not in TRANSITIONS:
            raise ValueError(f"Unknown transition {value!r}, expected one of {', '.join(TRANSITIONS)}")
        return value

    @field_validator("extraction_timeout", mode="before")
    @classmethod
    def check_timeout_is_number(cls, value: Any) -> Any:
        # "10" and True would otherwise be coerced to a float
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"must be a number of seconds, got {value!r}")
        return value

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Settings":
        """
        Merge *data* over the defaults.

        Keys may be snake_case or camelCase; unknown keys are ignored with a
        warning.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("Settings must be a JSON object")

        known = set(cls.model_fields)
        known.update(info.alias for info in cls.model_fields.values() if info.alias)
        for key in data:
            if key not in known:
                logger.warning("Ignoring unknown setting '%s'", key)
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


def _describe(exc: ValidationError) -> str:
    """One line per invalid field, e.g. ``transition: Value error, Unknown ...``."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "settings"
        messages.append(f"{location}: {error['msg']}")
    return "; ".join(messages)


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load settings from a JSON file.

    Args:
        path: Settings file.  ``None`` returns the defaults.

    Returns:
        Settings

    Raises:
        ConfigError: If the file cannot be read or holds invalid values
    """
    if path is None:
        return Settings()

    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read settings file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Settings file {path} is not valid JSON: {exc}") from exc

    logger.debug("Loaded settings from %s", path)
    return Settings.from_dict(data)
