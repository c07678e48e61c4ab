"""
Markdown assembly for doc-comment sources.

Turns the sections found in one source file into a single Markdown
document: a top-level "Documentation" heading, one heading per documented
declaration, its description and its tag groups.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from doc2md.core.flavors import JAVADOC, JSDOC, PHPDOC, Flavor, TagGroupBuffer, get_flavor
from doc2md.core.scanner import Section, extract_sections, get_field_declaration, is_class_declaration
from doc2md.core.tags import parse_doc_comment
from doc2md.core.text import repeat_string

logger = logging.getLogger(__name__)


# Data structures

@dataclass
class RenderOptions:
    """
    Options for rendering one source.
    """
    flavor: Union[str, Flavor] = "javadoc"
    heading_level: int = 1


@dataclass
class RenderResult:
    """
    Result of rendering one source.
    """
    markdown: str
    flavor: str
    heading_level: int
    total_sections: int = 0
    rendered_sections: int = 0


# Main rendering functions

def render_source(source: str, options: Optional[RenderOptions] = None) -> RenderResult:
    """
    Render source code with doc comments to Markdown.

    Args:
        source: Raw source code
        options: Optional rendering options

    Returns:
        RenderResult with markdown content and section counts

    Raises:
        ValueError: If the flavor name is unknown
    """
    if options is None:
        options = RenderOptions()

    flavor = get_flavor(options.flavor)
    sections = extract_sections(source)
    level = options.heading_level

    parts: List[str] = [repeat_string("#", level) + " Documentation"]
    rendered = 0

    for section in sections:
        block = render_section(section, level, flavor)
        if block:
            rendered += 1
        parts.append(block)
        if is_class_declaration(section.line):
            level += 1

    logger.debug(
        "Rendered %d of %d sections with %s", rendered, len(sections), flavor.name
    )

    return RenderResult(
        markdown="".join(parts) + "\n",
        flavor=flavor.name,
        heading_level=options.heading_level,
        total_sections=len(sections),
        rendered_sections=rendered,
    )


def render_document(
    source: str,
    heading_level: int = 1,
    flavor: Union[str, Flavor] = JAVADOC,
) -> str:
    """Render source code to a Markdown document string."""
    options = RenderOptions(flavor=flavor, heading_level=heading_level)
    return render_source(source, options).markdown


def render_javadoc(source: str, heading_level: int = 1) -> str:
    """Render Javadoc comments of a Java source to Markdown."""
    return render_document(source, heading_level, JAVADOC)


def render_phpdoc(source: str, heading_level: int = 1) -> str:
    """Render PHPDoc comments of a PHP source to Markdown."""
    return render_document(source, heading_level, PHPDOC)


def render_jsdoc(source: str, heading_level: int = 1) -> str:
    """Render JSDoc comments of a JavaScript source to Markdown."""
    return render_document(source, heading_level, JSDOC)


def render_section(section: Section, heading_level: int, flavor: Flavor) -> str:
    """
    Render one documented declaration.

    Args:
        section: Declaration line and doc comment
        heading_level: Level of the enclosing heading
        flavor: Flavor that groups the tags

    Returns:
        Markdown block starting with a blank line, or "" when the
        declaration cannot be described
    """
    field = get_field_declaration(section.line)
    if not field:
        logger.debug("Skipping section without declaration: %r", section.line)
        return ""

    lines = ["\n\n", repeat_string("#", heading_level + 1), " `", field, "`"]

    description, tags = parse_doc_comment(section.doc)
    if description:
        lines.append("\n\n")
        lines.append(description)

    buffer = flavor.add_tags(tags)
    if buffer:
        lines.append("\n")
        lines.append(render_tag_groups(buffer))

    return "".join(lines)


def render_tag_groups(buffer: TagGroupBuffer) -> str:
    return "".join(render_tag_group(name, entries) for name, entries in buffer)


def render_tag_group(name: str, entries: List[Optional[str]]) -> str:
    """
    Render one tag group as a Markdown list item.

    A group holding only flag entries becomes a bare bold label; a single
    entry goes on the label line and several entries become a nested list.
    """
    if all(entry is None for entry in entries):
        return f"\n * **{name}**"

    values = [entry for entry in entries if entry is not None]
    if len(values) == 1:
        return f"\n * **{name}:**" + _inline(values[0])

    lines = [f"\n * **{name}:**"]
    for value in values:
        lines.append("\n   *" + _inline(value))
    return "".join(lines)


def _inline(value: str) -> str:
    """Text following a bullet marker; block values start on the next line."""
    if not value or value.startswith("\n"):
        return value
    return " " + value
