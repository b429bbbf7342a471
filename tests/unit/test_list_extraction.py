import pytest
from notion_slides.extractors import (
    BlockquoteExtractor,
    CodeBlockExtractor,
    ExtractorBase,
    ListExtractor,
    ParagraphExtractor,
)

NOTION_LIST_BLOCKS = (
    "notion-bulleted_list-block",
    "notion-numbered_list-block",
    "notion-to_do-block",
    "notion-toggle-block",
)


@pytest.fixture
def extractor():
    base = ExtractorBase(nested_tags=("ul", "ol", "pre", "table", "blockquote"), nested_classes=NOTION_LIST_BLOCKS)
    return ListExtractor(base, item_block_classes=NOTION_LIST_BLOCKS)


@pytest.mark.parametrize(
    "html,expected",
    [
        ("<ol><li>a</li><li>b</li><li>c</li></ol>", "1. a\n2. b\n3. c"),
        ("<ul><li>x</li><li>y</li></ul>", "- x\n- y"),
        ("<ul>\n  <li>  spaced   out </li>\n</ul>", "- spaced out"),
    ],
)
def test_native_lists(extractor, first_tag, html, expected):
    node = first_tag(html)
    assert extractor.detect(node)
    assert extractor.render(node).text == expected


def test_numbering_restarts_per_list(extractor, soup):
    doc = soup("<ol><li>a</li><li>b</li></ol><ol><li>c</li></ol>")
    first, second = doc.find_all("ol")

    assert extractor.render(first).text == "1. a\n2. b"
    assert extractor.render(second).text == "1. c"


def test_inline_formatting_kept(extractor, first_tag):
    node = first_tag('<ul><li><strong>Bold</strong> and <a href="/x">link</a></li></ul>')
    assert extractor.render(node).text == "- **Bold** and [link](/x)"


def test_nested_native_lists_indented(extractor, first_tag):
    node = first_tag(
        "<ul><li>parent<ol><li>one</li><li>two</li></ol></li><li>sibling</li></ul>"
    )
    assert extractor.render(node).text == "- parent\n  1. one\n  2. two\n- sibling"


def test_loose_list_items(extractor, first_tag):
    node = first_tag("<ul><li><p>first</p></li><li><p>second</p></li></ul>")
    assert extractor.render(node).text == "- first\n- second"


def test_task_list_items(extractor, first_tag):
    node = first_tag(
        '<ul class="contains-task-list">'
        '<li class="task-list-item"><input type="checkbox" checked disabled> done</li>'
        '<li class="task-list-item"><input type="checkbox" disabled> todo</li>'
        '</ul>'
    )
    assert extractor.render(node).text == "- [x] done\n- [ ] todo"


@pytest.mark.parametrize("html", ["<ul></ul>", "<ol>\n</ol>", "<ul><li>  </li></ul>"])
def test_empty_list_renders_empty(extractor, first_tag, html):
    fragment = extractor.render(first_tag(html))
    assert fragment.text == ""
    assert fragment.is_empty()


@pytest.mark.parametrize("class_name", NOTION_LIST_BLOCKS)
def test_notion_single_item_blocks(extractor, first_tag, class_name):
    node = first_tag(
        f'<div class="notion-selectable {class_name}">'
        f'<div class="pseudoSelection">•</div>'
        f'<div data-content-editable-leaf="true">Item <b>text</b></div>'
        f'</div>'
    )
    assert extractor.detect(node)
    assert extractor.render(node).text == "- Item **text**"


def test_notion_nested_item_blocks(extractor, first_tag):
    node = first_tag(
        '<div class="notion-bulleted_list-block">'
        '<div data-content-editable-leaf="true">Parent</div>'
        '<div class="children">'
        '<div class="notion-bulleted_list-block"><div data-content-editable-leaf="true">Child</div>'
        '<div class="notion-to_do-block"><div data-content-editable-leaf="true">Grandchild</div></div>'
        '</div>'
        '</div>'
        '</div>'
    )
    assert extractor.render(node).text == "- Parent\n  - Child\n    - Grandchild"


def test_notion_block_without_leaf(extractor, first_tag):
    node = first_tag('<div class="notion-toggle-block">Toggle  me</div>')
    assert extractor.render(node).text == "- Toggle me"


def test_not_a_list(extractor, first_tag):
    assert not extractor.detect(first_tag("<p>- not a list</p>"))
    assert not extractor.detect(first_tag('<div class="notion-list">x</div>'))


# ---------------------------------------------------------------------------
# Blocks nested in items
# ---------------------------------------------------------------------------
@pytest.fixture
def nesting_extractor():
    base = ExtractorBase(nested_tags=("ul", "ol", "pre", "table", "blockquote"), nested_classes=NOTION_LIST_BLOCKS)
    return ListExtractor(
        base,
        item_block_classes=NOTION_LIST_BLOCKS,
        block_extractors=[
            CodeBlockExtractor(base, code_block_classes=("notion-code-block",)),
            BlockquoteExtractor(base),
            ParagraphExtractor(base, paragraph_classes=("notion-text-block",)),
        ],
    )


def test_code_inside_native_item(nesting_extractor, first_tag):
    node = first_tag("<ul><li><p>step</p><pre><code>run()\n</code></pre></li><li>next</li></ul>")
    assert nesting_extractor.render(node).text == "- step\n  ```\n  run()\n  ```\n- next"


def test_quote_inside_native_item(nesting_extractor, first_tag):
    node = first_tag("<ol><li>tip<blockquote><p>careful</p></blockquote></li></ol>")
    assert nesting_extractor.render(node).text == "1. tip\n  > careful"


def test_paragraphs_inside_native_item_stay_item_text(nesting_extractor, first_tag):
    node = first_tag("<ul><li><p>one</p><p>two</p></li></ul>")
    assert nesting_extractor.render(node).text == "- one two"


def test_notion_toggle_body(nesting_extractor, first_tag):
    node = first_tag(
        '<div class="notion-toggle-block">'
        '<div class="pseudoSelection">▶</div>'
        '<div data-content-editable-leaf="true">Details</div>'
        '<div class="notion-block-children">'
        '<div class="notion-text-block"><div data-content-editable-leaf="true">Hidden body</div></div>'
        '<div class="notion-code-block"><div data-content-editable-leaf="true">x = 1</div></div>'
        '<div class="notion-to_do-block"><div data-content-editable-leaf="true">Follow up</div></div>'
        '</div>'
        '</div>'
    )
    assert nesting_extractor.render(node).text == (
        "- Details\n  Hidden body\n  ```\n  x = 1\n  ```\n  - Follow up"
    )


def test_notion_toggle_without_leaf(nesting_extractor, first_tag):
    node = first_tag('<div class="notion-toggle-block">Summary<div class="notion-text-block">body</div></div>')
    assert nesting_extractor.render(node).text == "- Summary\n  body"
