"""
Section extraction for doc-comment sources.

Splits raw source text into documentation sections: a ``/** ... */`` block
comment together with the declaration that follows it. Extraction is
regex-driven and never raises; malformed comments simply do not match.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

from doc2md.core.text import clean_single_line

logger = logging.getLogger(__name__)

# Doc comment body (non-greedy) followed by the declaration head
SECTION_PATTERN = re.compile(r"/\*\*(.*?)\*/([^{;/]+)", re.DOTALL)

_IMPORT_STATEMENT = re.compile(r"^import\s+")
_BLANK_COMMENT_LINE = re.compile(r"\*[ ]*$", re.MULTILINE)
_FIELD_DECLARATION = re.compile(r"^([^{;]+)")

# Optional modifiers, then a type-declaring keyword
_CLASS_DECLARATION = re.compile(
    r"^(?:(?:public|protected|private|internal|abstract|final|static|sealed|"
    r"export|default|declare|readonly)\s+)*"
    r"(?:class|interface|trait|enum)\s+"
)

PARAGRAPH_MARKER = "<p>"


@dataclass(frozen=True)
class Section:
    """A declaration line and the doc comment attached to it."""

    line: str
    doc: str


class Scanner:
    """
    Cursor over a text that yields successive matches of one pattern.

    The scanner is its own iterator: it can be consumed once, it never
    yields the same position twice, and it stops at the end of the text.
    Empty matches advance the cursor by one character.

    Example:
        >>> [m.group() for m in Scanner(r"\\d+", "a1b22c")]
        ['1', '22']
    """

    def __init__(self, pattern: Union[str, re.Pattern[str]], text: str, pos: int = 0):
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.text = text
        self.pos = pos

    @property
    def exhausted(self) -> bool:
        return self.pos > len(self.text)

    def __iter__(self) -> "Scanner":
        return self

    def __next__(self) -> re.Match[str]:
        match = self.next_match()
        if match is None:
            raise StopIteration
        return match

    def next_match(self) -> Optional[re.Match[str]]:
        """Return the next match after the cursor, or None when done."""
        if self.exhausted:
            return None

        match = self.pattern.search(self.text, self.pos)
        if match is None:
            self.pos = len(self.text) + 1
            return None

        if match.end() > match.start():
            self.pos = match.end()
        else:
            self.pos = match.end() + 1
        return match


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def iter_sections(source: str) -> Iterator[Section]:
    """
    Yield documentation sections from source text in document order.

    Import statements that carry a doc comment are skipped. A comment body
    without any asterisk gets one prepended so that single-line comments
    look like regular ones, and blank comment lines become ``<p>`` markers.

    Args:
        source: Raw source code

    Yields:
        Section for every comment + declaration pair
    """
    for match in Scanner(SECTION_PATTERN, normalize_newlines(source)):
        declaration = match.group(2).strip()
        doc = match.group(1)

        if _IMPORT_STATEMENT.match(declaration):
            logger.debug("Skipping documented import: %s", declaration)
            continue

        if "*" not in doc:
            doc = "*" + doc

        doc = _BLANK_COMMENT_LINE.sub("* " + PARAGRAPH_MARKER, doc)
        yield Section(line=declaration, doc=doc)


def extract_sections(source: str) -> List[Section]:
    """Return all documentation sections found in ``source``."""
    return list(iter_sections(source))


def get_field_declaration(line: str) -> str:
    """
    Reduce a declaration line to the part worth showing in a heading.

    Everything before the first ``{`` or ``;`` is kept and folded onto a
    single line. Returns an empty string when nothing describable is left.

    Example:
        >>> get_field_declaration("public int getX() {")
        'public int getX()'
    """
    match = _FIELD_DECLARATION.match(line)
    if match is None:
        return ""
    return clean_single_line(match.group(1))


def is_class_declaration(line: str) -> bool:
    """Whether the declaration opens a class-like scope."""
    return _CLASS_DECLARATION.match(line) is not None
