"""
reveal.js HTML renderer.

Every slide becomes a ``<section data-markdown>`` whose markdown sits in a
``<textarea data-template>``.  A slide with subslides becomes a vertical
stack: an outer ``<section>`` holding the slide's own section followed by one
section per descendant in document order.
"""
import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from jinja2 import DictLoader, Environment

from .config import Settings
from .models import Slide, SlideMetadata
from .theme_loader import REVEAL_CDN, get_css, get_theme_url, list_custom_themes

logger = logging.getLogger(__name__)

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ title }}</title>
  <link rel="stylesheet" href="{{ reveal_cdn }}/dist/reset.css">
  <link rel="stylesheet" href="{{ reveal_cdn }}/dist/reveal.css">
  <link rel="stylesheet" href="{{ theme_url }}" id="theme-stylesheet">
  <link rel="stylesheet" href="{{ reveal_cdn }}/plugin/highlight/monokai.css">
{%- if custom_css %}
  <style>
{{ custom_css | safe }}
  </style>
{%- endif %}
</head>
<body>
  <div class="reveal">
    <div class="slides">
{%- for group in groups %}
{%- if group.stacked %}
      <section>
{%- for section in group.sections %}
        {{ render_section(section) }}
{%- endfor %}
      </section>
{%- else %}
      {{ render_section(group.sections[0]) }}
{%- endif %}
{%- endfor %}
{%- if not groups %}
      <section>
        <h2>No slides found</h2>
        <p>Make sure the page has at least one heading.</p>
      </section>
{%- endif %}
    </div>
  </div>
  <script src="{{ reveal_cdn }}/dist/reveal.js"></script>
  <script src="{{ reveal_cdn }}/plugin/markdown/markdown.js"></script>
  <script src="{{ reveal_cdn }}/plugin/highlight/highlight.js"></script>
  <script>
    Reveal.initialize({
      controls: true,
      progress: true,
      hash: true,
      center: {{ settings.center | tojson }},
      transition: {{ settings.transition | tojson }},
      slideNumber: {{ settings.slide_number | tojson }},
      plugins: [RevealMarkdown, RevealHighlight]
    });
  </script>
</body>
</html>
"""

_SECTION_MACRO = """{%- macro render_section(section) -%}
<section data-markdown{% for name, value in section.attributes %} {{ name }}="{{ value }}"{% endfor %}>
          <textarea data-template>
{{ section.markdown }}
          </textarea>
        </section>
{%- endmacro %}"""


class _Section:
    def __init__(self, markdown: str, attributes: List[Tuple[str, str]]):
        self.markdown = markdown
        self.attributes = attributes


class _Group:
    def __init__(self, sections: List[_Section], stacked: bool):
        self.sections = sections
        self.stacked = stacked


def metadata_attributes(metadata: SlideMetadata, source_type: Optional[str] = None) -> List[Tuple[str, str]]:
    """HTML attributes carrying a slide's metadata, in a stable order."""
    attributes: List[Tuple[str, str]] = []
    if source_type:
        attributes.append(("data-source-type", source_type))
    if metadata.classes:
        attributes.append(("class", " ".join(metadata.classes)))
    for key, value in sorted(metadata.background.items()):
        attributes.append((f"data-background-{key}", value))
    if "style" in metadata.transition:
        attributes.append(("data-transition", metadata.transition["style"]))
    if "speed" in metadata.transition:
        attributes.append(("data-transition-speed", metadata.transition["speed"]))
    for key, value in sorted(metadata.attributes.items()):
        attributes.append((f"data-{key}", value))
    return attributes


def slide_markdown(slide: Slide, depth: int = 0) -> str:
    """Markdown of a single slide: its title as a heading, then its content."""
    hashes = "#" * min(depth + 1, 6)
    content = slide.content.strip()
    if not slide.title:
        return content
    return f"{hashes} {slide.title}\n\n{content}" if content else f"{hashes} {slide.title}"


def _walk(slides: Sequence[Slide], depth: int) -> Iterator[Tuple[Slide, int]]:
    stack: List[Tuple[Slide, int]] = [(s, depth) for s in reversed(slides)]
    while stack:
        slide, level = stack.pop()
        yield slide, level
        stack.extend((s, level + 1) for s in reversed(slide.subslides))


class RevealRenderer:
    """
    Render slides into a standalone reveal.js page using jinja2.
    """

    def __init__(self):
        self.jinja_env = Environment(
            loader=DictLoader({"page.html": _SECTION_MACRO + _PAGE_TEMPLATE}),
            autoescape=True,
        )

    def build_groups(self, slides: Sequence[Slide]) -> List[_Group]:
        groups: List[_Group] = []
        for slide in slides:
            if not slide.has_subslides():
                groups.append(_Group([self._section(slide, 0)], stacked=False))
                continue
            sections = [self._section(slide, 0)]
            sections.extend(self._section(sub, depth) for sub, depth in _walk(slide.subslides, 1))
            groups.append(_Group(sections, stacked=True))
        return groups

    @staticmethod
    def _section(slide: Slide, depth: int) -> _Section:
        return _Section(slide_markdown(slide, depth), metadata_attributes(slide.metadata, slide.source_type))

    def render(self, slides: Sequence[Slide], settings: Optional[Settings] = None, title: Optional[str] = None) -> str:
        """
        Render *slides* into an HTML page.

        Args:
            slides: Top-level slides
            settings: Presentation settings; defaults when omitted
            title: Page title; the first slide's title when omitted

        Returns:
            The HTML document as a string
        """
        settings = settings or Settings()
        if title is None:
            title = slides[0].title if slides and slides[0].title else "Untitled Presentation"

        custom_css = get_css(settings.theme) if settings.theme in list_custom_themes() else ""
        groups = self.build_groups(slides)
        logger.debug("Rendering %d slide groups with theme %s", len(groups), settings.theme)

        template = self.jinja_env.get_template("page.html")
        return template.render(
            title=title,
            groups=groups,
            settings=settings,
            reveal_cdn=REVEAL_CDN,
            theme_url=get_theme_url(settings.theme),
            custom_css=custom_css,
        )

    def write(self, slides: Sequence[Slide], output_path, settings: Optional[Settings] = None, title: Optional[str] = None) -> str:
        """Render and write the page; returns the path written."""
        html = self.render(slides, settings=settings, title=title)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(html)
        return str(output_path)

