import sys
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

# Ensure project root is on sys.path so `import notion_slides` works
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture
def soup():
    """Parse an HTML snippet into a document tree."""
    def _parse(html: str) -> BeautifulSoup:
        return BeautifulSoup(html, "html.parser")
    return _parse


@pytest.fixture
def first_tag(soup):
    """Parse an HTML snippet and return its first element."""
    def _first(html: str):
        return soup(html).find(True)
    return _first
