"""doc2md - Generate Markdown from Javadoc, PHPDoc and JSDoc comments."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("doc2md")
except PackageNotFoundError:
    # Package not installed (development mode without editable install)
    __version__ = "0.1.0"

from doc2md.core.rendering import render_document, render_javadoc, render_jsdoc, render_phpdoc

__all__ = ["__version__", "render_document", "render_javadoc", "render_jsdoc", "render_phpdoc"]
