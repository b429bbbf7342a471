"""Test blockquote, table, image, divider and paragraph extractors."""

import pytest
from notion_slides.extractors import (
    BlockquoteExtractor,
    CodeBlockExtractor,
    DividerExtractor,
    ExtractorBase,
    ImageExtractor,
    ListExtractor,
    ParagraphExtractor,
    TableExtractor,
)
from notion_slides.models import BlockKind


@pytest.fixture
def base():
    return ExtractorBase(nested_tags=("ul", "ol", "pre", "table", "blockquote"))


# ---------------------------------------------------------------------------
# Blockquote
# ---------------------------------------------------------------------------
def test_blockquote_single_line(base, first_tag):
    extractor = BlockquoteExtractor(base)
    node = first_tag("<blockquote>Be <em>brief</em>.</blockquote>")

    assert extractor.detect(node)
    fragment = extractor.render(node)
    assert fragment.kind is BlockKind.QUOTE
    assert fragment.text == "> Be *brief*."


def test_blockquote_paragraphs(base, first_tag):
    extractor = BlockquoteExtractor(base)
    node = first_tag("<blockquote>\n<p>First</p>\n<p>Second</p>\n</blockquote>")
    assert extractor.render(node).text == "> First\n> Second"


def test_notion_callout(base, first_tag):
    extractor = BlockquoteExtractor(base, quote_classes=("notion-quote-block", "notion-callout-block"))
    node = first_tag('<div class="notion-callout-block"><div>💡</div><div>Remember this</div></div>')

    assert extractor.detect(node)
    assert extractor.render(node).text == "> 💡\n> Remember this"


def test_empty_blockquote(base, first_tag):
    assert BlockquoteExtractor(base).render(first_tag("<blockquote> </blockquote>")).text == ""


def test_list_inside_blockquote(base, first_tag):
    extractor = BlockquoteExtractor(base, block_extractors=[ListExtractor(base)])
    node = first_tag("<blockquote>\n<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n</blockquote>")
    assert extractor.render(node).text == "> - a\n> - b"


def test_code_inside_blockquote(base, first_tag):
    extractor = BlockquoteExtractor(base, block_extractors=[CodeBlockExtractor(base)])
    node = first_tag("<blockquote><p>Run:</p><pre><code>make\n\nmake test\n</code></pre></blockquote>")
    assert extractor.render(node).text == "> Run:\n> ```\n> make\n>\n> make test\n> ```"


def test_nested_blockquote(base, first_tag):
    node = first_tag("<blockquote><p>a</p><blockquote><p>b</p></blockquote></blockquote>")
    assert BlockquoteExtractor(base).render(node).text == "> a\n> > b"


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------
def test_html_table(base, first_tag):
    extractor = TableExtractor(base)
    node = first_tag(
        "<table><thead><tr><th>Name</th><th>Score</th></tr></thead>"
        "<tbody><tr><td>Ann</td><td>3</td></tr><tr><td>Bob</td><td>a|b</td></tr></tbody></table>"
    )

    assert extractor.detect(node)
    assert extractor.render(node).text == (
        "| Name | Score |\n"
        "| --- | --- |\n"
        "| Ann | 3 |\n"
        "| Bob | a\\|b |"
    )


def test_table_rows_padded(base, first_tag):
    node = first_tag("<table><tr><td>a</td><td>b</td></tr><tr><td>c</td></tr></table>")
    assert TableExtractor(base).render(node).text == "| a | b |\n| --- | --- |\n| c |   |"


def test_nested_table_rows_ignored(base, first_tag):
    node = first_tag(
        "<table><tr><td>outer<table><tr><td>inner</td></tr></table></td></tr></table>"
    )
    assert TableExtractor(base).render(node).text == "| outer |\n| --- |"


def test_div_grid_table(base, first_tag):
    extractor = TableExtractor(base, table_classes=("notion-table-block",))
    node = first_tag(
        '<div class="notion-table-block">'
        "<div><div>H1</div><div>H2</div></div>"
        "<div><div>v1</div><div>v2</div></div>"
        "</div>"
    )
    assert extractor.render(node).text == "| H1 | H2 |\n| --- | --- |\n| v1 | v2 |"


def test_empty_table(base, first_tag):
    assert TableExtractor(base).render(first_tag("<table></table>")).text == ""


# ---------------------------------------------------------------------------
# Image
# ---------------------------------------------------------------------------
def test_image(base, first_tag):
    extractor = ImageExtractor(base)
    node = first_tag('<img src="a.png" alt="Diagram">')

    assert extractor.detect(node)
    assert extractor.render(node).text == "![Diagram](a.png)"


def test_image_alt_defaults(base, first_tag):
    extractor = ImageExtractor(base)
    assert extractor.render(first_tag('<img src="a.png">')).text == "![Image](a.png)"
    assert extractor.render(first_tag('<img data-src="lazy.png" title="Lazy">')).text == "![Lazy](lazy.png)"


def test_paragraph_holding_only_images(base, first_tag):
    extractor = ImageExtractor(base)
    node = first_tag('<p><img src="a.png" alt="A"> <img src="b.png" alt="B"></p>')

    assert extractor.detect(node)
    assert extractor.render(node).text == "![A](a.png)\n![B](b.png)"


def test_figure_caption_used_as_alt(base, first_tag):
    extractor = ImageExtractor(base)
    node = first_tag('<figure><img src="c.png"><figcaption>Chart</figcaption></figure>')

    assert extractor.detect(node)
    assert extractor.render(node).text == "![Chart](c.png)"


def test_paragraph_with_text_is_not_an_image(base, first_tag):
    assert not ImageExtractor(base).detect(first_tag('<p>see <img src="a.png"></p>'))


def test_notion_image_block(base, first_tag):
    extractor = ImageExtractor(base, image_classes=("notion-image-block",))
    node = first_tag('<div class="notion-image-block"><div><img src="n.png" alt="N"></div></div>')
    assert extractor.render(node).text == "![N](n.png)"


# ---------------------------------------------------------------------------
# Divider / paragraph
# ---------------------------------------------------------------------------
def test_divider_is_empty(base, first_tag):
    extractor = DividerExtractor(base, divider_classes=("notion-divider-block",))

    assert extractor.detect(first_tag("<hr>"))
    assert extractor.detect(first_tag('<div class="notion-divider-block"><div></div></div>'))
    assert extractor.render(first_tag("<hr>")).is_empty()


def test_paragraph(base, first_tag):
    extractor = ParagraphExtractor(base, paragraph_classes=("notion-text-block",))
    node = first_tag('<div class="notion-text-block">Plain <b>bold</b>  text</div>')

    assert extractor.detect(node)
    assert extractor.detect(first_tag("<p>x</p>"))
    assert not extractor.detect(first_tag("<div>x</div>"))
    fragment = extractor.render(node)
    assert fragment.kind is BlockKind.PARAGRAPH
    assert fragment.text == "Plain **bold** text"
