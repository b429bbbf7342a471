#!/usr/bin/env python3
"""
Demo - Notion Slides
====================

Converts ``demo_content.md`` and ``notion_page.html`` into every output
format the package writes:
• reveal.js HTML (black and notion themes)
• PowerPoint
• JSON slide store

Run this file and open the files under ``output/``.
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add the project root to the path so we can import our modules
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from notion_slides.config import Settings
from notion_slides.generator import NO_SLIDES_MESSAGE, SlideGenerator

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(message)s')
logger = logging.getLogger(__name__)

EXAMPLES_DIR = Path(__file__).parent


async def generate_demos():
    """Generate the demo decks for both sample documents."""
    output_dir = Path("output")
    output_dir.mkdir(exist_ok=True)

    sources = [
        ("demo_content.md", None, True),
        ("notion_page.html", "https://www.notion.so/acme/Roadmap", False),
    ]
    written = []

    for filename, url, is_markdown in sources:
        text = (EXAMPLES_DIR / filename).read_text(encoding="utf-8")
        stem = Path(filename).stem

        for theme_name in ["black", "notion"]:
            generator = SlideGenerator(settings=Settings(theme=theme_name))
            result = await generator.generate(text, url=url or "", is_markdown=is_markdown)
            if result.no_slides_found:
                logger.warning("%s: %s", filename, NO_SLIDES_MESSAGE)
                break

            written.append(generator.write(result, output_dir / f"{stem}_{theme_name}.html"))
            if theme_name == "black":
                written.append(generator.write(result, output_dir / f"{stem}.pptx"))
                written.append(generator.write(result, output_dir / f"{stem}.json"))
            logger.info("%s: %d slides (%s)", filename, result.slide_count, result.source_type)

    return written


def main():
    for path in asyncio.run(generate_demos()):
        logger.info("✅ Generated: %s", path)


if __name__ == "__main__":
    main()
