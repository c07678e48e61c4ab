"""
Unit tests for doc2md.core.tags comment parsing.

Covers tag splitting, multi-line tag value reconstruction (code fences,
lists, paragraphs) and the description formatter.
"""

import pytest

from doc2md.core.tags import (
    CONTINUATION_INDENT,
    LineWrapState,
    Tag,
    format_description,
    parse_doc_comment,
    parse_tags,
    reconstruct_tag_value,
    split_doc_comment,
)


IND = CONTINUATION_INDENT


class TestSplitDocComment:
    """Tests for splitting description and tag chunks."""

    def test_description_only(self):
        description, tags = split_doc_comment("\n * Just text.\n ")
        assert description == "\n * Just text.\n "
        assert tags == []

    def test_tags_follow_description(self):
        description, tags = split_doc_comment("\n * Text.\n * @param a b\n * @return c\n ")
        assert description == "\n * Text.\n"
        assert tags == ["@param a b\n", "@return c\n "]

    def test_inline_at_sign_is_not_a_tag(self):
        _, tags = split_doc_comment("\n * Mail me at someone@example.com\n ")
        assert tags == []


class TestParseTags:
    """Tests for parse_tags."""

    def test_keeps_order_and_duplicates(self):
        tags = parse_tags(["@param a first\n", "@param b second\n", "@return x"])
        assert tags == [
            Tag("param", "a first"),
            Tag("param", "b second"),
            Tag("return", "x"),
        ]

    def test_flag_tag_has_empty_value(self):
        assert parse_tags(["@deprecated\n     "]) == [Tag("deprecated", "")]

    def test_ignores_chunks_without_name(self):
        assert parse_tags(["@ nothing"]) == []


class TestReconstructTagValue:
    """Tests for multi-line tag values."""

    def test_prose_lines_are_flowed(self):
        assert reconstruct_tag_value(" the value\n *   continues here") == (
            "the value continues here"
        )

    def test_paragraph_marker_breaks_paragraph(self):
        value = reconstruct_tag_value(" first line\n * <p>\n * second")
        assert value == f"first line\n\n{IND}second"

    def test_code_block_is_kept_verbatim(self):
        value = reconstruct_tag_value("\n * ```\n * int  a = 1;\n *     b();\n * ```")
        assert value == f"\n{IND}```\n{IND}int  a = 1;\n{IND}    b();\n{IND}```"

    def test_code_block_after_prose_starts_on_new_line(self):
        value = reconstruct_tag_value(" usage:\n * ```\n * run();\n * ```")
        assert value == f"usage:\n{IND}```\n{IND}run();\n{IND}```"

    def test_blank_line_inside_code_block(self):
        value = reconstruct_tag_value("\n * ```\n * a();\n * <p>\n * b();\n * ```")
        assert value == f"\n{IND}```\n{IND}a();\n\n{IND}b();\n{IND}```"

    def test_list_items_get_own_lines(self):
        value = reconstruct_tag_value(" the options\n * - a\n * - b\n * after")
        assert value == f"the options\n\n{IND}- a\n{IND}- b\n\n{IND}after"

    def test_numbered_list(self):
        value = reconstruct_tag_value(" steps\n * 1. one\n * 2. two")
        assert value == f"steps\n\n{IND}1. one\n{IND}2. two"

    def test_list_markers_inside_code_are_code(self):
        value = reconstruct_tag_value("\n * ```\n * - not a list\n * ```")
        assert value == f"\n{IND}```\n{IND}- not a list\n{IND}```"

    def test_hyphenated_prose_is_not_a_list(self):
        assert reconstruct_tag_value(" a well-known\n * -value") == "a well-known -value"

    def test_inline_code_in_prose(self):
        assert reconstruct_tag_value(" calls <code>run()</code>") == "calls `run()`"


class TestLineWrapState:
    """Tests for the state flags of LineWrapState."""

    def test_list_flags(self):
        state = LineWrapState()
        state.feed(" - a")
        assert state.list_block and state.new_list
        state.feed(" - b")
        assert state.list_block and not state.new_list
        state.feed(" prose")
        assert not state.list_block and not state.new_list

    def test_fence_clears_list(self):
        state = LineWrapState()
        state.feed(" - a")
        state.feed(" ```")
        assert state.code_block
        assert not state.list_block
        state.feed(" - b")
        assert not state.list_block
        state.feed(" ```")
        assert not state.code_block

    def test_list_after_code_block_is_separated(self):
        state = LineWrapState()
        for line in [" ```", " x", " ```", " - item"]:
            state.feed(line)
        assert state.value == f"\n{IND}```\n{IND}x\n{IND}```\n\n{IND}- item"


class TestFormatDescription:
    """Tests for format_description."""

    def test_lines_join_into_paragraph(self):
        assert format_description("\n * One line\n * and another.\n") == "One line and another."

    def test_paragraph_markers(self):
        raw = "\n * A simple counter.\n * <p>\n * Use <code>inc()</code> to count.\n"
        assert format_description(raw) == "A simple counter.\n\nUse `inc()` to count."

    def test_trailing_marker_is_dropped(self):
        assert format_description("\n * Returns x.\n * <p>\n") == "Returns x."

    def test_list_block(self):
        raw = "\n * Options:\n * - first\n * - second\n * Done.\n"
        assert format_description(raw) == "Options:\n\n- first\n- second\n\nDone."

    def test_code_block(self):
        raw = "\n * Example:\n * ```\n * if (a)  {\n *     b();\n * ```\n * End.\n"
        assert format_description(raw) == "Example:\n\n```\nif (a)  {\n    b();\n```\n\nEnd."

    def test_empty(self):
        assert format_description("\n") == ""
        assert format_description("") == ""


class TestParseDocComment:
    """Tests for parse_doc_comment."""

    def test_description_and_tags(self):
        doc = "\n * Increments.\n * <p>\n * @param int step the step\n * @return the count\n "
        description, tags = parse_doc_comment(doc)
        assert description == "Increments."
        assert tags == [Tag("param", "int step the step"), Tag("return", "the count")]

    @pytest.mark.parametrize("doc", ["* @deprecated ", "\n * @deprecated\n "])
    def test_tag_only_comment(self, doc):
        description, tags = parse_doc_comment(doc)
        assert description == ""
        assert tags == [Tag("deprecated", "")]
