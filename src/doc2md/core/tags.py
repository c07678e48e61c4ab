"""
Doc comment parsing: description text and ``@tag value`` annotations.

A section's raw comment body is split into a leading description and a list
of tag chunks. Each tag chunk is rebuilt into a single value by a small
line-wrap state machine that keeps fenced code blocks verbatim, puts list
items on their own lines and flows everything else into paragraphs.

Usage:
    from doc2md.core.tags import parse_doc_comment

    description, tags = parse_doc_comment(section.doc)
    for tag in tags:
        print(tag.key, tag.value)
"""

import re
from dataclasses import dataclass
from typing import List, Tuple

from doc2md.core.text import (
    clean_line,
    clean_single_line,
    replace_html_with_markdown,
    replace_paragraph_markers,
    split_paragraph_markers,
)

__all__ = [
    "CONTINUATION_INDENT",
    "LineWrapState",
    "Tag",
    "format_description",
    "parse_doc_comment",
    "parse_tags",
    "reconstruct_tag_value",
    "split_doc_comment",
]

# Indentation for continuation lines; nests under both "* " and "   * " bullets
CONTINUATION_INDENT = "     "

# A comment line whose gutter is directly followed by a tag
_TAG_BOUNDARY = re.compile(r"^[\t ]*\*[\t ]*(?=@)", re.MULTILINE)
_TAG_CHUNK = re.compile(r"^[\t ]*@([a-zA-Z]+)(.*)", re.DOTALL)

# Line break plus the next line's gutter
_CONTINUATION = re.compile(r"\r?\n[\t ]*\*")

_DESCRIPTION_LINE = re.compile(r"^[\t ]*\*[\t ](.*?)$", re.MULTILINE)

_CODE_FENCE = re.compile(r"^[\t ]*```")
_LIST_ITEM = re.compile(r"^[\t ]*(?:[-+*]|\d+\.)[\t ]+\S")

_BLANK_LINE_MARKER = "<p>"


@dataclass(frozen=True)
class Tag:
    """A single ``@key value`` annotation."""

    key: str
    value: str


def _is_blank_marker(line: str) -> bool:
    return line.strip().lower() == _BLANK_LINE_MARKER


def _code_line(line: str) -> str:
    """Code content of a comment line: drop the one blank after the gutter."""
    if _is_blank_marker(line):
        return ""
    if line.startswith((" ", "\t")):
        return line[1:]
    return line


class LineWrapState:
    """
    Rebuilds one multi-line tag value.

    ``code_block``, ``list_block`` and ``new_list`` are independent flags
    updated per physical line; ``buffer`` accumulates the Markdown. A fresh
    instance is needed for every tag value.

    Blocks (fences and lists) always start on their own line. When a value
    opens with a block, the buffer starts with a newline so the block does
    not end up on the tag's label line.
    """

    def __init__(self) -> None:
        self.code_block = False
        self.list_block = False
        self.new_list = False
        self.paragraph_break = False
        self.buffer = ""

    def feed(self, line: str) -> None:
        """Process one physical continuation line."""
        if _CODE_FENCE.match(line):
            self.code_block = not self.code_block
            self.list_block = False
            self.new_list = False
            if self.code_block:
                self._trim_trailing_indent()
                self._start_line()
            self.buffer += CONTINUATION_INDENT + line.strip() + "\n"
            return

        if not self.code_block:
            if _LIST_ITEM.match(line):
                self.new_list = not self.list_block
                self.list_block = True
            else:
                if self.list_block:
                    self.buffer += "\n"
                self.list_block = False
                self.new_list = False

        if self.code_block:
            code = _code_line(line)
            self.buffer += (CONTINUATION_INDENT + code if code else "") + "\n"
        elif self.list_block:
            if self.new_list:
                self._start_block()
            self.buffer += CONTINUATION_INDENT + line.strip() + "\n"
        else:
            self._flow(line)

    @property
    def value(self) -> str:
        """The rebuilt value, without trailing whitespace."""
        return self.buffer.rstrip()

    def _flow(self, line: str) -> None:
        pieces = split_paragraph_markers(line)
        for index, piece in enumerate(pieces):
            if index > 0:
                self.paragraph_break = True

            text = replace_html_with_markdown(clean_line(piece))
            if not text:
                continue

            if self.paragraph_break and self.buffer.strip():
                self.buffer = self.buffer.rstrip() + "\n\n" + CONTINUATION_INDENT
            elif self.buffer.endswith("\n"):
                self.buffer += CONTINUATION_INDENT
            elif self.buffer:
                self.buffer += " "

            self.paragraph_break = False
            self.buffer += text

    def _trim_trailing_indent(self) -> None:
        self.buffer = re.sub(r"\n?[ \t]+$", "", self.buffer)

    def _start_line(self) -> None:
        if not self.buffer:
            self.buffer = "\n"
        elif not self.buffer.endswith("\n"):
            self.buffer = self.buffer.rstrip(" \t") + "\n"

    def _start_block(self) -> None:
        self._start_line()
        if self.buffer != "\n" and not self.buffer.endswith("\n\n"):
            self.buffer += "\n"


def reconstruct_tag_value(rest: str) -> str:
    """
    Rebuild the text following ``@name`` into a single tag value.

    Args:
        rest: Raw tag body, possibly spanning several comment lines

    Returns:
        Markdown-ready value
    """
    state = LineWrapState()
    for line in _CONTINUATION.split(rest.rstrip()):
        state.feed(line)
    return state.value


def split_doc_comment(doc: str) -> Tuple[str, List[str]]:
    """Split a comment body into the raw description and raw tag chunks."""
    parts = _TAG_BOUNDARY.split(doc)
    return parts[0], parts[1:]


def parse_tags(raw_tags: List[str]) -> List[Tag]:
    """
    Parse raw tag chunks (each starting with ``@name``) into tags.

    Chunks that do not start with a tag name are ignored. Keys are kept as
    written; order of occurrence is preserved.
    """
    tags: List[Tag] = []
    for chunk in raw_tags:
        match = _TAG_CHUNK.match(chunk)
        if match is None:
            continue
        tags.append(
            Tag(
                key=clean_single_line(match.group(1)),
                value=reconstruct_tag_value(match.group(2)),
            )
        )
    return tags


def format_description(raw: str) -> str:
    """
    Render the free-text part of a doc comment as Markdown.

    Prose lines are joined into paragraphs, ``<p>`` markers become blank
    lines and ``<code>`` becomes a code span. Fenced code blocks are kept
    line by line and list items stay on their own lines; blocks are
    separated from surrounding prose by a blank line.
    """
    blocks: List[str] = []
    prose: List[str] = []
    block: List[str] = []
    code_block = False
    list_block = False

    def flush_prose() -> None:
        text = clean_line(replace_paragraph_markers(" ".join(prose)))
        if text:
            blocks.append(text)
        prose.clear()

    def flush_block() -> None:
        if block:
            blocks.append("\n".join(block))
        block.clear()

    for match in _DESCRIPTION_LINE.finditer(raw):
        line = match.group(1)

        if _CODE_FENCE.match(line):
            if not code_block:
                flush_prose()
                flush_block()
                list_block = False
            block.append(line.strip())
            if code_block:
                flush_block()
            code_block = not code_block
            continue

        if code_block:
            block.append("" if _is_blank_marker(line) else line.rstrip())
            continue

        if _LIST_ITEM.match(line):
            if not list_block:
                flush_prose()
                list_block = True
            block.append(line.rstrip())
            continue

        if list_block:
            flush_block()
            list_block = False
        prose.append(replace_html_with_markdown(clean_line(line)))

    flush_block()
    flush_prose()
    return "\n\n".join(blocks)


def parse_doc_comment(doc: str) -> Tuple[str, List[Tag]]:
    """
    Parse a section's comment body.

    Args:
        doc: Raw comment body (leading asterisks included)

    Returns:
        Tuple of (formatted description, tags in order of occurrence)
    """
    raw_description, raw_tags = split_doc_comment(doc)
    return format_description(raw_description), parse_tags(raw_tags)
