"""Test conversion of slide buffers into slides."""

import pytest
from notion_slides.content_processor import ContentProcessor, normalize_content
from notion_slides.models import BlockKind, Fragment, SlideBuffer, SlideMetadata


def heading(text, level=1, **metadata):
    return Fragment(text=text, kind=BlockKind.HEADING, level=level, metadata=SlideMetadata(**metadata))


def para(text):
    return Fragment(text=text)


def buffer(title, level=1, parent=None, *texts):
    return SlideBuffer(heading=heading(title, level), level=level, parent_index=parent,
                       fragments=[para(t) for t in texts])


def test_single_buffer():
    slides = ContentProcessor().finalize([buffer(" Title ", 1, None, "a", "b")], source_type="notion")

    assert len(slides) == 1
    assert slides[0].title == "Title"
    assert slides[0].content == "a\nb"
    assert slides[0].source_type == "notion"
    assert slides[0].subslides == ()


def test_children_attached_in_order():
    buffers = [
        buffer("A", 1, None, "a"),
        buffer("A.1", 2, 0, "x"),
        buffer("A.1.a", 3, 1),
        buffer("A.2", 2, 0, "y"),
        buffer("B", 1, None),
    ]

    slides = ContentProcessor().finalize(buffers)

    assert [s.title for s in slides] == ["A", "B"]
    assert [s.title for s in slides[0].subslides] == ["A.1", "A.2"]
    assert [s.title for s in slides[0].subslides[0].subslides] == ["A.1.a"]


def test_empty_buffer_dropped():
    assert ContentProcessor().finalize([buffer("  ", 1, None)]) == []


def test_empty_fragments_do_not_count_as_content():
    slides = ContentProcessor().finalize([buffer("", 1, None, "", "   ")])
    assert slides == []


def test_empty_buffer_children_promoted_in_place():
    buffers = [
        buffer("A", 1, None),
        buffer("", 2, 0),          # dropped
        buffer("x", 3, 1, "1"),
        buffer("y", 3, 1, "2"),
        buffer("z", 2, 0, "3"),
    ]

    slides = ContentProcessor().finalize(buffers)

    assert [s.title for s in slides[0].subslides] == ["x", "y", "z"]


def test_empty_top_level_children_promoted_to_top():
    buffers = [buffer("", 1, None), buffer("child", 2, 0, "c"), buffer("next", 1, None, "n")]
    assert [s.title for s in ContentProcessor().finalize(buffers)] == ["child", "next"]


def test_metadata_taken_from_heading():
    buf = SlideBuffer(heading=heading("T", transition={"style": "fade"}), level=1, fragments=[para("c")])
    slide = ContentProcessor().finalize([buf])[0]
    assert slide.metadata.transition == {"style": "fade"}


def test_deterministic():
    buffers = [buffer("A", 1, None, "a"), buffer("B", 2, 0, "b")]
    processor = ContentProcessor()
    assert processor.finalize(buffers) == processor.finalize(buffers)


def test_many_buffers_without_recursion():
    buffers = [buffer(f"h{i}", i + 1, i - 1 if i else None, "x") for i in range(3000)]
    slides = ContentProcessor().finalize(buffers)
    depth = 0
    node = slides[0]
    while node.subslides:
        node = node.subslides[0]
        depth += 1
    assert depth == 2999


def test_normalize_content_collapses_blank_runs():
    assert normalize_content("\n\na\n\n\n\nb\n\n") == "a\n\nb"


def test_normalize_content_leaves_code_alone():
    content = "intro\n\n\n\n```\nx\n\n\n\ny\n```\n\n\n\nend"
    assert normalize_content(content) == "intro\n\n```\nx\n\n\n\ny\n```\n\nend"


def test_normalize_content_unterminated_fence():
    content = "a\n\n\n```\ncode\n\n\n\nmore"
    assert normalize_content(content) == "a\n\n```\ncode\n\n\n\nmore"


@pytest.mark.parametrize(
    "content,expected",
    [
        ("#Title", "# Title"),
        ("###Deep", "### Deep"),
        ("# Already spaced", "# Already spaced"),
        ("* a\n+ b\n  * nested", "- a\n- b\n  - nested"),
        ("*emphasis* stays", "*emphasis* stays"),
        ("**bold** stays", "**bold** stays"),
    ],
)
def test_normalize_content_tidies_markdown(content, expected):
    assert normalize_content(content) == expected


def test_normalize_content_keeps_code_markers():
    content = "```\n#include <stdio.h>\n* not a bullet\n```"
    assert normalize_content(content) == content
