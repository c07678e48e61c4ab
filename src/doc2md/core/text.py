"""
Line normalization helpers shared by the doc-comment pipeline.

Everything in this module is a pure string function: whitespace cleanup,
comment-gutter stripping, inline HTML to Markdown conversion and the small
tokenizing helpers used by the tag renderers.
"""

import re
from typing import List, Tuple, Union


# Spaces hugging a line break or tab
_SPACE_AROUND_BREAK = re.compile(r" *([\n\r\t]) *")
_MULTI_SPACE = re.compile(r"[ ]{2,}")
_BREAKS_AND_TABS = re.compile(r"[\n\r\t]")

_INLINE_CODE = re.compile(r"<\s*?code\s*?>(.*?)<\s*?/\s*?code\s*?>")
_PARAGRAPH_MARKER = re.compile(r"</?p>", re.IGNORECASE)

# Leading "*" of a doc comment line plus one separating blank
_COMMENT_GUTTER = re.compile(r"^[\t ]*\*[\t ]?")

_WHITESPACE = re.compile(r"\s+")


def clean_line(line: str) -> str:
    """
    Normalize whitespace in a line of comment text.

    Trims the line, removes spaces around line breaks and tabs, and
    collapses runs of spaces into one. Applying it twice gives the same
    result as applying it once.

    Args:
        line: Raw text

    Returns:
        Normalized text
    """
    line = line.strip()
    line = _SPACE_AROUND_BREAK.sub(r"\1", line)
    return _MULTI_SPACE.sub(" ", line)


def clean_single_line(line: str) -> str:
    """Normalize a line and fold line breaks and tabs into spaces."""
    return _BREAKS_AND_TABS.sub(" ", clean_line(line))


def replace_html_with_markdown(html: str) -> str:
    """Convert inline ``<code>...</code>`` markup into Markdown code spans."""
    return _INLINE_CODE.sub(r"`\1`", html)


def replace_paragraph_markers(text: str, replacement: str = "\n\n") -> str:
    """Replace ``<p>`` and ``</p>`` markers with ``replacement``."""
    return _PARAGRAPH_MARKER.sub(replacement, text)


def split_paragraph_markers(text: str) -> List[str]:
    """Split text on ``<p>``/``</p>`` markers, dropping the markers."""
    return _PARAGRAPH_MARKER.split(text)


def strip_comment_prefix(line: str) -> str:
    """Remove the leading ``*`` gutter (and one blank after it) from a line."""
    return _COMMENT_GUTTER.sub("", line, count=1)


def tokenize_limited(
    text: str,
    separator: Union[str, re.Pattern[str]] = _WHITESPACE,
    limit: int = 2,
) -> List[str]:
    """
    Split text into exactly ``limit`` tokens.

    The first ``limit - 1`` separators split the text; everything after
    them stays in the last token. Missing tokens are padded with empty
    strings, so callers can always index up to ``limit - 1``.

    Args:
        text: Text to split
        separator: Regex (string or compiled) matching token separators
        limit: Number of tokens to return

    Returns:
        List of ``limit`` tokens

    Example:
        >>> tokenize_limited("int x the x value", limit=2)
        ['int', 'x the x value']
        >>> tokenize_limited("Exception", limit=2)
        ['Exception', '']
    """
    if limit < 1:
        raise ValueError("limit must be at least 1")

    pattern = re.compile(separator) if isinstance(separator, str) else separator
    tokens = pattern.split(text, maxsplit=limit - 1)
    tokens.extend([""] * (limit - len(tokens)))
    return tokens


def split_first_line(text: str) -> Tuple[str, str]:
    """
    Split text into its first line and the remainder.

    The remainder keeps its leading line break(s), so block content that
    follows the first line still starts on a line of its own.

    Example:
        >>> split_first_line("int x\\n\\n     - a")
        ('int x', '\\n\\n     - a')
    """
    head, newline, tail = text.partition("\n")
    return head, newline + tail


def repeat_string(text: str, count: int) -> str:
    """Repeat ``text`` ``count`` times (negative counts give an empty string)."""
    return text * max(count, 0)
