"""Theme loader for reveal.js presentation themes."""
from pathlib import Path
from typing import List

REVEAL_VERSION = "5.1.0"
REVEAL_CDN = f"https://cdn.jsdelivr.net/npm/reveal.js@{REVEAL_VERSION}"

# Themes shipped with reveal.js itself
REVEAL_THEMES = (
    "black", "white", "league", "beige", "sky", "night",
    "serif", "simple", "solarized", "blood", "moon", "dracula",
)

THEMES_DIR = Path(__file__).parent / "themes"


def _check_name(theme: str) -> None:
    # Validate theme name (security: prevent path traversal)
    if not theme or not theme.replace("_", "").replace("-", "").isalnum():
        raise ValueError(f"Invalid theme name: {theme}")


def get_css(theme: str) -> str:
    """
    Load CSS content for a custom theme shipped with the package.

    Args:
        theme: Theme name (file stem under ``notion_slides/themes``)

    Returns:
        CSS content as string

    Raises:
        FileNotFoundError: If theme file doesn't exist
        ValueError: If theme name is invalid
    """
    _check_name(theme)
    theme_path = THEMES_DIR / f"{theme}.css"

    if not theme_path.exists():
        raise FileNotFoundError(
            f"Theme '{theme}' not found. Available themes: {list_available_themes()}"
        )

    with open(theme_path, 'r', encoding='utf-8') as f:
        return f.read()


def get_theme_url(theme: str) -> str:
    """
    Stylesheet URL of a reveal.js theme.

    Custom themes are layered on top of ``white``, so that is the URL
    returned for them.

    Raises:
        FileNotFoundError: If the theme is neither built in nor shipped
        ValueError: If theme name is invalid
    """
    _check_name(theme)
    if theme in REVEAL_THEMES:
        return f"{REVEAL_CDN}/dist/theme/{theme}.css"
    if (THEMES_DIR / f"{theme}.css").exists():
        return f"{REVEAL_CDN}/dist/theme/white.css"
    raise FileNotFoundError(
        f"Theme '{theme}' not found. Available themes: {list_available_themes()}"
    )


def list_custom_themes() -> List[str]:
    if not THEMES_DIR.exists():
        return []
    return sorted(f.stem for f in THEMES_DIR.glob("*.css") if f.is_file())


def list_available_themes() -> List[str]:
    """
    List all available themes.

    Returns:
        reveal.js theme names followed by the custom ones
    """
    return list(REVEAL_THEMES) + [t for t in list_custom_themes() if t not in REVEAL_THEMES]


def validate_theme(theme: str) -> bool:
    """
    Check if a theme exists.

    Args:
        theme: Theme name to validate

    Returns:
        True if theme exists, False otherwise
    """
    try:
        get_theme_url(theme)
        return True
    except (FileNotFoundError, ValueError):
        return False
