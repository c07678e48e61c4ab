"""
Root pytest configuration and shared fixtures.
"""

import logging
from pathlib import Path

import pytest

from doc2md.cli.registry import set_context
from doc2md.config import set_config
from doc2md.core.logging_config import ROOT_LOGGER

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Run every test without ambient DOC2MD_* settings or config files."""
    import os

    for name in list(os.environ):
        if name.startswith("DOC2MD_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)

    set_config(None)
    set_context(None)
    yield
    set_config(None)
    set_context(None)

    root = logging.getLogger(ROOT_LOGGER)
    root.handlers.clear()
    root.setLevel(logging.NOTSET)


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding sample source files."""
    return FIXTURES_DIR


@pytest.fixture
def java_source(fixtures_dir) -> str:
    return (fixtures_dir / "Counter.java").read_text(encoding="utf-8")


@pytest.fixture
def php_source(fixtures_dir) -> str:
    return (fixtures_dir / "sample.php").read_text(encoding="utf-8")


@pytest.fixture
def js_source(fixtures_dir) -> str:
    return (fixtures_dir / "sample.js").read_text(encoding="utf-8")
