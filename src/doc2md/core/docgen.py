"""Directory documentation generator for doc2md.

Walks a source tree for files with one extension, renders each file's doc
comments to Markdown and writes the pages under an output directory that
mirrors the source layout. An ``_index.md`` page links every generated page.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from doc2md.core.errors import NoSourceFilesError
from doc2md.core.flavors import Flavor, get_flavor
from doc2md.core.rendering import RenderOptions, render_source

logger = logging.getLogger(__name__)

# Directories we never scan
DEFAULT_EXCLUDE_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "__pycache__",
    "node_modules",
    "vendor",
    ".idea",
    ".vscode",
}

INDEX_FILE = "_index.md"
MARKDOWN_SUFFIX = ".md"


@dataclass
class GeneratedPage:
    source: Path
    target: Path
    sections: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source.as_posix(),
            "target": self.target.as_posix(),
            "sections": self.sections,
        }


@dataclass
class GenerationResult:
    source_root: Path
    output_dir: Path
    flavor: str
    pages: List[GeneratedPage]
    index_path: Path
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_root": str(self.source_root),
            "output_dir": str(self.output_dir),
            "flavor": self.flavor,
            "files": [page.to_dict() for page in self.pages],
            "file_count": len(self.pages),
            "index": str(self.index_path),
        }


def normalize_extension(extension: str) -> str:
    """Strip a leading dot and surrounding whitespace from an extension."""
    return extension.strip().lstrip(".")


def build_index(pages: Sequence[GeneratedPage]) -> str:
    """Markdown index page linking every generated page."""
    lines = ["\n# Documentation\n\n"]
    for page in pages:
        lines.append(f" * [{page.source.as_posix()} doc]({page.target.as_posix()})\n")
    return "".join(lines)


class DocumentationGenerator:
    """Renders every matching source file under a directory to Markdown."""

    def __init__(
        self,
        source_root: Path,
        output_dir: Path,
        extension: str,
        *,
        flavor: Union[str, Flavor] = "javadoc",
        heading_level: int = 1,
        excludes: Optional[Sequence[str]] = None,
    ) -> None:
        self.source_root = Path(source_root).resolve()
        if not self.source_root.is_dir():
            raise FileNotFoundError(f"Source directory not found: {source_root}")

        self.output_dir = Path(output_dir).resolve()
        self.extension = normalize_extension(extension)
        if not self.extension:
            raise ValueError("Extension must not be empty")

        self.flavor = get_flavor(flavor)
        self.heading_level = heading_level

        self.excludes = set(DEFAULT_EXCLUDE_DIRS)
        if excludes:
            self.excludes.update(excludes)

        # Never read back pages we generated ourselves
        try:
            self._output_rel_parts: Optional[Tuple[str, ...]] = self.output_dir.relative_to(
                self.source_root
            ).parts
        except ValueError:
            self._output_rel_parts = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def find_sources(self) -> List[Path]:
        """Source files relative to the source root, sorted."""
        suffix = "." + self.extension
        return sorted(
            path.relative_to(self.source_root)
            for path in self._iter_files()
            if path.name.endswith(suffix) and path.name != suffix
        )

    def generate(self) -> GenerationResult:
        """
        Render all matching files and write the index page.

        Returns:
            GenerationResult describing the written pages

        Raises:
            NoSourceFilesError: If no file matches the extension
        """
        sources = self.find_sources()
        if not sources:
            raise NoSourceFilesError(self.source_root, self.extension)

        options = RenderOptions(flavor=self.flavor, heading_level=self.heading_level)
        pages: List[GeneratedPage] = []
        warnings: List[str] = []

        for rel_source in sources:
            text = self._read_text(self.source_root / rel_source, warnings)
            result = render_source(text, options)

            rel_target = self.target_for(rel_source)
            target = self.output_dir / rel_target
            logger.info("Creating %s", target)
            self._write_text(target, result.markdown)

            if result.total_sections == 0:
                warnings.append(f"No doc comments found in {rel_source.as_posix()}")
            pages.append(
                GeneratedPage(
                    source=rel_source,
                    target=rel_target,
                    sections=result.rendered_sections,
                )
            )

        index_path = self.output_dir / INDEX_FILE
        logger.info("Creating %s", index_path)
        self._write_text(index_path, build_index(pages))

        return GenerationResult(
            source_root=self.source_root,
            output_dir=self.output_dir,
            flavor=self.flavor.name,
            pages=pages,
            index_path=index_path,
            warnings=warnings,
        )

    def target_for(self, rel_source: Path) -> Path:
        """Relative Markdown path for a relative source path."""
        name = rel_source.name[: -(len(self.extension) + 1)] + MARKDOWN_SUFFIX
        return rel_source.with_name(name)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _iter_files(self) -> Iterable[Path]:
        """Yield files under source_root while respecting exclusions."""

        def should_skip_dir(rel_parts: Tuple[str, ...]) -> bool:
            if not rel_parts:
                return False
            if rel_parts[-1].startswith(".") or rel_parts[-1] in self.excludes:
                return True
            if (
                self._output_rel_parts
                and rel_parts[: len(self._output_rel_parts)] == self._output_rel_parts
            ):
                return True
            return Path(*rel_parts).as_posix() in self.excludes

        for dirpath, dirnames, filenames in os.walk(self.source_root):
            rel_dir = Path(dirpath).relative_to(self.source_root)
            dirnames[:] = [
                d for d in dirnames if not should_skip_dir((*rel_dir.parts, d))
            ]
            for filename in filenames:
                if filename.startswith("."):
                    continue
                yield Path(dirpath) / filename

    @staticmethod
    def _read_text(path: Path, warnings: List[str]) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            warnings.append(f"{path.name} is not valid UTF-8; undecodable bytes were dropped")
            return path.read_text(encoding="utf-8", errors="ignore")

    @staticmethod
    def _write_text(target: Path, content: str) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
