"""Doc-comment extraction and Markdown rendering for doc2md."""

from doc2md.core.scanner import (
    Scanner,
    Section,
    extract_sections,
    get_field_declaration,
    is_class_declaration,
)

from doc2md.core.tags import (
    Tag,
    format_description,
    parse_doc_comment,
)

from doc2md.core.flavors import (
    FLAVORS,
    JAVADOC,
    JSDOC,
    PHPDOC,
    DynamicTypesFlavor,
    StaticTypesFlavor,
    TagGroupBuffer,
    get_flavor,
)

from doc2md.core.rendering import (
    RenderOptions,
    RenderResult,
    render_document,
    render_javadoc,
    render_jsdoc,
    render_phpdoc,
    render_source,
)

__all__ = [
    "Scanner",
    "Section",
    "extract_sections",
    "get_field_declaration",
    "is_class_declaration",
    "Tag",
    "format_description",
    "parse_doc_comment",
    "FLAVORS",
    "JAVADOC",
    "JSDOC",
    "PHPDOC",
    "DynamicTypesFlavor",
    "StaticTypesFlavor",
    "TagGroupBuffer",
    "get_flavor",
    "RenderOptions",
    "RenderResult",
    "render_document",
    "render_javadoc",
    "render_jsdoc",
    "render_phpdoc",
    "render_source",
]
