"""Tests for comment merging and block rendering."""

from __future__ import annotations

from eventdecl.comments import EMPTY_COMMENT, CommentFragment, CommentMerger


def test_merge_then_format_preserves_fragment_order() -> None:
    merger = CommentMerger()
    first = CommentFragment(("Fired when a block breaks.", "Second line."))
    second = CommentFragment(("@at *server*",))

    lines = merger.format_lines(merger.merge(first, second), 4)

    assert lines == [
        "    /**",
        "     * Fired when a block breaks.",
        "     * Second line.",
        "     * @at *server*",
        "     */",
    ]


def test_merge_of_nothing_renders_no_block() -> None:
    merger = CommentMerger()

    merged = merger.merge()

    assert merged == EMPTY_COMMENT
    assert not merged
    assert merger.format_lines(merged, 4) == []


def test_blank_lines_render_without_trailing_space() -> None:
    fragment = CommentFragment.of("Summary\n\nDetails")

    assert CommentMerger().format_lines(fragment, 0) == ["/**", " * Summary", " *", " * Details", " */"]
