"""
Unit tests for doc2md.core.docgen directory generation.
"""

from pathlib import Path

import pytest

from doc2md.core.docgen import (
    INDEX_FILE,
    DocumentationGenerator,
    GeneratedPage,
    build_index,
    normalize_extension,
)
from doc2md.core.errors import Doc2MdError, NoSourceFilesError
from doc2md.core.rendering import render_javadoc, render_jsdoc

SOURCE = "/**\n * Adds.\n */\npublic int add(int a) {\n}\n"


@pytest.fixture
def source_tree(tmp_path):
    """Create a small source tree with nested and non-matching files."""
    root = tmp_path / "src"
    (root / "a").mkdir(parents=True)
    (root / "a" / "c.java").write_text(SOURCE, encoding="utf-8")
    (root / "b.java").write_text("class Plain {}\n", encoding="utf-8")
    (root / "notes.txt").write_text("/** not java */ int x;", encoding="utf-8")
    (root / ".hidden").mkdir()
    (root / ".hidden" / "h.java").write_text(SOURCE, encoding="utf-8")
    return root


class TestDocumentationGenerator:
    """Tests for DocumentationGenerator.generate."""

    def test_writes_mirrored_pages(self, source_tree, tmp_path):
        out = tmp_path / "docs"
        result = DocumentationGenerator(source_tree, out, "java").generate()

        assert [page.source for page in result.pages] == [Path("a/c.java"), Path("b.java")]
        assert [page.target for page in result.pages] == [Path("a/c.md"), Path("b.md")]
        assert (out / "a" / "c.md").read_text(encoding="utf-8") == render_javadoc(SOURCE)
        assert (out / "b.md").read_text(encoding="utf-8") == "# Documentation\n"
        assert not (out / ".hidden").exists()

    def test_writes_index(self, source_tree, tmp_path):
        out = tmp_path / "docs"
        result = DocumentationGenerator(source_tree, out, "java").generate()

        assert result.index_path == out / INDEX_FILE
        assert result.index_path.read_text(encoding="utf-8") == (
            "\n# Documentation\n\n"
            " * [a/c.java doc](a/c.md)\n"
            " * [b.java doc](b.md)\n"
        )

    def test_warns_about_files_without_comments(self, source_tree, tmp_path):
        result = DocumentationGenerator(source_tree, tmp_path / "docs", "java").generate()
        assert result.warnings == ["No doc comments found in b.java"]

    def test_flavor_and_level(self, tmp_path):
        root = tmp_path / "web"
        root.mkdir()
        js = "/**\n * Hi.\n * @param {string} n the name\n */\nfunction hi(n) {}\n"
        (root / "hi.js").write_text(js, encoding="utf-8")

        result = DocumentationGenerator(
            root, tmp_path / "out", ".js", flavor="jsdoc", heading_level=2
        ).generate()

        assert result.flavor == "jsdoc"
        assert (tmp_path / "out" / "hi.md").read_text(encoding="utf-8") == render_jsdoc(js, 2)

    def test_skips_output_dir_inside_source(self, source_tree):
        out = source_tree / "docs"
        out.mkdir()
        (out / "stale.java").write_text(SOURCE, encoding="utf-8")

        result = DocumentationGenerator(source_tree, out, "java").generate()
        assert Path("docs/stale.java") not in [page.source for page in result.pages]

    def test_excludes(self, source_tree, tmp_path):
        result = DocumentationGenerator(
            source_tree, tmp_path / "docs", "java", excludes=["a"]
        ).generate()
        assert [page.source for page in result.pages] == [Path("b.java")]

    def test_no_matching_files(self, source_tree, tmp_path):
        generator = DocumentationGenerator(source_tree, tmp_path / "docs", "php")
        with pytest.raises(NoSourceFilesError) as exc_info:
            generator.generate()
        assert isinstance(exc_info.value, Doc2MdError)
        assert exc_info.value.extension == "php"
        assert "contains no .php files" in str(exc_info.value)
        assert not (tmp_path / "docs").exists()

    def test_missing_source_root(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DocumentationGenerator(tmp_path / "missing", tmp_path / "docs", "java")

    def test_unknown_flavor(self, source_tree, tmp_path):
        with pytest.raises(ValueError):
            DocumentationGenerator(source_tree, tmp_path / "docs", "java", flavor="rdoc")

    def test_to_dict(self, source_tree, tmp_path):
        data = DocumentationGenerator(source_tree, tmp_path / "docs", "java").generate().to_dict()
        assert data["file_count"] == 2
        assert data["files"][0] == {"source": "a/c.java", "target": "a/c.md", "sections": 1}
        assert data["index"].endswith(INDEX_FILE)


class TestHelpers:
    """Tests for module helpers."""

    def test_normalize_extension(self):
        assert normalize_extension(".java") == "java"
        assert normalize_extension(" php ") == "php"

    def test_build_index_empty(self):
        assert build_index([]) == "\n# Documentation\n\n"

    def test_target_for_keeps_inner_dots(self, source_tree, tmp_path):
        generator = DocumentationGenerator(source_tree, tmp_path / "docs", "js")
        assert generator.target_for(Path("lib/app.min.js")) == Path("lib/app.min.md")

    def test_build_index(self):
        pages = [GeneratedPage(source=Path("x/Y.java"), target=Path("x/Y.md"))]
        assert build_index(pages) == "\n# Documentation\n\n * [x/Y.java doc](x/Y.md)\n"
