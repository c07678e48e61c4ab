"""
Doc flavors: how parsed tags are grouped and formatted for Markdown.

A flavor maps every known tag key to an output group ("Parameters",
"Returns", ...) and formats the tag value for that group. Statically typed
languages (Javadoc) keep the value mostly as written; dynamically typed
languages (PHPDoc, JSDoc) carry type information inside the tag and use a
``TypeFormatter`` to render it.

Usage:
    from doc2md.core.flavors import TagGroupBuffer, get_flavor

    flavor = get_flavor("phpdoc")
    buffer = TagGroupBuffer()
    for tag in tags:
        flavor.add_tag(tag, buffer)
    for name, entries in buffer:
        ...
"""

import logging
import re
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union

from doc2md.core.tags import Tag
from doc2md.core.text import split_first_line, tokenize_limited

logger = logging.getLogger(__name__)

__all__ = [
    "DynamicTypesFlavor",
    "Flavor",
    "FLAVORS",
    "JAVADOC",
    "JSDOC",
    "JsTypeFormatter",
    "PHPDOC",
    "PhpTypeFormatter",
    "StaticTypesFlavor",
    "TagGroupBuffer",
    "TypeFormatter",
    "get_flavor",
    "join_entry",
]

ENTRY_SEPARATOR = " — "

# Tags that only mark a declaration; their group renders as a bare label
FLAG_GROUPS: Dict[str, str] = {
    "abstract": "Abstract",
    "constructor": "Constructor",
    "deprec": "Deprecated",
    "deprecated": "Deprecated",
    "private": "Private",
}

# Tags whose value is shown as written
TEXT_GROUPS: Dict[str, str] = {
    "access": "Access",
    "author": "Author",
    "copyright": "Copyright",
    "example": "Example",
    "exports": "Exports",
    "license": "License",
    "link": "Link",
    "name": "Alias",
    "package": "Package",
    "see": "See also",
    "since": "Since",
    "static": "Static",
    "subpackage": "Sub-package",
    "todo": "To-do",
    "version": "Version",
}


class TagGroupBuffer:
    """
    Insertion-ordered mapping of output group name to rendered entries.

    A ``None`` entry marks a flag-style tag. Iterating yields
    ``(name, entries)`` pairs in the order groups were first used.
    """

    def __init__(self) -> None:
        self._groups: Dict[str, List[Optional[str]]] = {}

    def append(self, name: str, entry: Optional[str]) -> None:
        self._groups.setdefault(name, []).append(entry)

    def __iter__(self) -> Iterator[Tuple[str, List[Optional[str]]]]:
        return iter(self._groups.items())

    def __len__(self) -> int:
        return len(self._groups)

    def __contains__(self, name: object) -> bool:
        return name in self._groups

    def __getitem__(self, name: str) -> List[Optional[str]]:
        return self._groups[name]

    def names(self) -> List[str]:
        return list(self._groups)


def join_entry(*pieces: str) -> str:
    """Join the non-empty pieces of an entry with an em dash separator."""
    return ENTRY_SEPARATOR.join(piece for piece in pieces if piece)


def code_span(text: str) -> str:
    """Wrap text in backticks; empty text stays empty."""
    return f"`{text}`" if text else ""


def tokenize_head(value: str, limit: int) -> Tuple[List[str], str]:
    """
    Tokenize the first line of a tag value.

    Returns the tokens and the untouched remainder. The remainder starts
    with its line break(s), so lists and fences that follow the first line
    stay on lines of their own once appended to the entry.
    """
    head, tail = split_first_line(value)
    return tokenize_limited(head, limit=limit), tail


class TypeFormatter:
    """Formats type information of dynamically typed doc comments."""

    def format_type(self, type_token: str) -> str:
        raise NotImplementedError

    def accepts_name(self, type_token: str, name_token: str) -> bool:
        """Whether the second token of ``@param`` really is a parameter name."""
        raise NotImplementedError

    def format_type_and_name(self, type_token: str, name_token: str) -> str:
        raise NotImplementedError


class PhpTypeFormatter(TypeFormatter):
    """PHPDoc: ``@param int $x`` style, names start with ``$``."""

    _NAME = re.compile(r"^\$[A-Za-z0-9_$]+$")

    def format_type(self, type_token: str) -> str:
        return code_span(type_token)

    def accepts_name(self, type_token: str, name_token: str) -> bool:
        return self._NAME.match(name_token) is not None

    def format_type_and_name(self, type_token: str, name_token: str) -> str:
        if self.accepts_name(type_token, name_token):
            return join_entry(code_span(name_token), code_span(type_token))
        # Only a name (in the type position) was given
        return code_span(type_token)


class JsTypeFormatter(TypeFormatter):
    """JSDoc: ``@param {int} x`` style, types wrapped in braces."""

    _BRACED_TYPE = re.compile(r"^\{([^{}]+)\}$")

    def _unwrap(self, type_token: str) -> Optional[str]:
        match = self._BRACED_TYPE.match(type_token)
        return match.group(1) if match else None

    def format_type(self, type_token: str) -> str:
        inner = self._unwrap(type_token)
        return code_span(inner if inner is not None else type_token)

    def accepts_name(self, type_token: str, name_token: str) -> bool:
        return self._unwrap(type_token) is not None

    def format_type_and_name(self, type_token: str, name_token: str) -> str:
        inner = self._unwrap(type_token)
        if inner is not None:
            return join_entry(code_span(name_token), code_span(inner))
        return code_span(type_token)


TagHandler = Callable[[Tag, TagGroupBuffer], None]


class Flavor:
    """
    Base flavor: flag tags, free-text tags and ``@this``.

    Subclasses register handlers for the tags whose value carries type
    information. Unknown tag keys are ignored.
    """

    name = "base"

    def __init__(self) -> None:
        self._handlers: Dict[str, TagHandler] = {}
        for key, group in FLAG_GROUPS.items():
            self._handlers[key] = self._flag(group)
        for key, group in TEXT_GROUPS.items():
            self._handlers[key] = self._text(group)
        self._handlers["this"] = self._add_this

    def add_tag(self, tag: Tag, buffer: TagGroupBuffer) -> None:
        """
        Render one tag into its output group.

        Args:
            tag: Parsed tag
            buffer: Group buffer of the current section
        """
        handler = self._handlers.get(tag.key)
        if handler is None:
            logger.debug("Ignoring unknown tag @%s", tag.key)
            return
        handler(tag, buffer)

    def add_tags(self, tags: List[Tag]) -> TagGroupBuffer:
        """Render a sequence of tags into a fresh buffer."""
        buffer = TagGroupBuffer()
        for tag in tags:
            self.add_tag(tag, buffer)
        return buffer

    @staticmethod
    def _flag(group: str) -> TagHandler:
        def handler(tag: Tag, buffer: TagGroupBuffer) -> None:
            buffer.append(group, None)

        return handler

    @staticmethod
    def _text(group: str) -> TagHandler:
        def handler(tag: Tag, buffer: TagGroupBuffer) -> None:
            buffer.append(group, tag.value)

        return handler

    def _add_this(self, tag: Tag, buffer: TagGroupBuffer) -> None:
        buffer.append("This", code_span(tag.value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class StaticTypesFlavor(Flavor):
    """Javadoc and other statically typed doc comments."""

    def __init__(self, name: str = "javadoc") -> None:
        super().__init__()
        self.name = name
        self._handlers.update(
            {
                "param": self._add_param,
                "exception": self._add_exception,
                "throws": self._add_exception,
                "return": self._add_return,
                "returns": self._add_return,
            }
        )

    def _add_param(self, tag: Tag, buffer: TagGroupBuffer) -> None:
        (type_token, rest), tail = tokenize_head(tag.value, 2)
        buffer.append("Parameters", join_entry(code_span(type_token), rest) + tail)

    def _add_exception(self, tag: Tag, buffer: TagGroupBuffer) -> None:
        (type_token, rest), tail = tokenize_head(tag.value, 2)
        buffer.append("Exceptions", join_entry(code_span(type_token), rest) + tail)

    def _add_return(self, tag: Tag, buffer: TagGroupBuffer) -> None:
        buffer.append("Returns", tag.value)


class DynamicTypesFlavor(Flavor):
    """PHPDoc, JSDoc and other doc comments that declare types inline."""

    def __init__(self, name: str, formatter: TypeFormatter) -> None:
        super().__init__()
        self.name = name
        self.formatter = formatter
        self._handlers.update(
            {
                "param": self._add_param,
                "exception": self._typed("Exceptions"),
                "throws": self._typed("Exceptions"),
                "return": self._typed("Returns"),
                "returns": self._typed("Returns"),
                "var": self._typed("Type"),
            }
        )

    def _add_param(self, tag: Tag, buffer: TagGroupBuffer) -> None:
        (type_token, name_token, rest), tail = tokenize_head(tag.value, 3)
        if name_token and not self.formatter.accepts_name(type_token, name_token):
            # Second token is prose, keep it in the description
            rest = f"{name_token} {rest}".strip()
        head = self.formatter.format_type_and_name(type_token, name_token)
        buffer.append("Parameters", join_entry(head, rest) + tail)

    def _typed(self, group: str) -> TagHandler:
        def handler(tag: Tag, buffer: TagGroupBuffer) -> None:
            (type_token, rest), tail = tokenize_head(tag.value, 2)
            entry = join_entry(self.formatter.format_type(type_token), rest)
            buffer.append(group, entry + tail)

        return handler


JAVADOC = StaticTypesFlavor("javadoc")
PHPDOC = DynamicTypesFlavor("phpdoc", PhpTypeFormatter())
JSDOC = DynamicTypesFlavor("jsdoc", JsTypeFormatter())

FLAVORS: Dict[str, Flavor] = {
    JAVADOC.name: JAVADOC,
    PHPDOC.name: PHPDOC,
    JSDOC.name: JSDOC,
}


def get_flavor(flavor: Union[str, Flavor]) -> Flavor:
    """
    Resolve a flavor object or name.

    Raises:
        ValueError: If the name is not a known flavor
    """
    if isinstance(flavor, Flavor):
        return flavor
    try:
        return FLAVORS[flavor.strip().lower()]
    except KeyError:
        valid = ", ".join(sorted(FLAVORS))
        raise ValueError(f"Unknown flavor '{flavor}'. Valid flavors: {valid}") from None
