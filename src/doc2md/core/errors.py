"""Exception hierarchy for doc2md."""

from pathlib import Path


class Doc2MdError(Exception):
    """Base class for errors raised by doc2md."""


class NoSourceFilesError(Doc2MdError):
    """Raised when a source directory holds no file with the requested extension."""

    def __init__(self, source_root: Path, extension: str):
        self.source_root = source_root
        self.extension = extension
        super().__init__(f"{source_root} contains no .{extension} files")
