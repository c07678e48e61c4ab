"""
Unit tests for doc2md.core.text line helpers.
"""

import re

import pytest

from doc2md.core.text import (
    clean_line,
    clean_single_line,
    repeat_string,
    replace_html_with_markdown,
    replace_paragraph_markers,
    split_first_line,
    split_paragraph_markers,
    strip_comment_prefix,
    tokenize_limited,
)


class TestCleanLine:
    """Tests for clean_line and clean_single_line."""

    def test_trims_and_collapses_spaces(self):
        assert clean_line("  a   b  ") == "a b"

    def test_removes_spaces_around_breaks(self):
        assert clean_line("a   b \n  c ") == "a b\nc"

    @pytest.mark.parametrize(
        "text",
        ["  x  y ", "a \n\n b", "\t lead", "one\ttwo   three", ""],
    )
    def test_is_idempotent(self, text):
        once = clean_line(text)
        assert clean_line(once) == once

    def test_single_line_folds_breaks(self):
        assert clean_single_line("public int\n   getX()") == "public int getX()"


class TestMarkup:
    """Tests for inline markup conversion."""

    def test_code_tag_becomes_code_span(self):
        assert replace_html_with_markdown("use <code>foo()</code> now") == "use `foo()` now"

    def test_code_tag_with_spaces(self):
        assert replace_html_with_markdown("< code >x< / code >") == "`x`"

    def test_paragraph_markers_replaced(self):
        assert replace_paragraph_markers("a<p>b</P>c") == "a\n\nb\n\nc"

    def test_split_paragraph_markers(self):
        assert split_paragraph_markers(" <p>") == [" ", ""]
        assert split_paragraph_markers("plain") == ["plain"]

    def test_strip_comment_prefix(self):
        assert strip_comment_prefix("   * text") == "text"
        assert strip_comment_prefix("\t*  indented") == " indented"


class TestTokenizeLimited:
    """Tests for tokenize_limited."""

    def test_rest_stays_in_last_token(self):
        assert tokenize_limited("int x the x value", limit=2) == ["int", "x the x value"]

    def test_pads_missing_tokens(self):
        assert tokenize_limited("Exception", limit=3) == ["Exception", "", ""]

    def test_empty_text(self):
        assert tokenize_limited("", limit=2) == ["", ""]

    def test_custom_separator(self):
        assert tokenize_limited("a,b,c", ",", limit=2) == ["a", "b,c"]
        assert tokenize_limited("a, b", re.compile(r",\s*"), limit=2) == ["a", "b"]

    def test_rejects_zero_limit(self):
        with pytest.raises(ValueError):
            tokenize_limited("a b", limit=0)


class TestSplitFirstLine:
    """Tests for split_first_line."""

    def test_keeps_line_breaks_on_remainder(self):
        assert split_first_line("int x\n\n     - a") == ("int x", "\n\n     - a")

    def test_single_line(self):
        assert split_first_line("int x") == ("int x", "")

    def test_leading_break(self):
        assert split_first_line("\n     ```") == ("", "\n     ```")


class TestRepeatString:
    """Tests for repeat_string."""

    def test_repeat(self):
        assert repeat_string("#", 3) == "###"

    def test_negative_count(self):
        assert repeat_string("#", -1) == ""
