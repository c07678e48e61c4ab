"""
Unit tests for doc2md.core.logging_config and doc2md.core.context.
"""

import io
import json
import logging

import pytest

from doc2md.core.context import (
    generate_correlation_id,
    get_command,
    get_correlation_id,
    get_current_context,
    run_context,
)
from doc2md.core.logging_config import (
    ROOT_LOGGER,
    HumanReadableFormatter,
    StructuredFormatter,
    configure_logging,
    get_logger,
)


@pytest.fixture
def stream():
    return io.StringIO()


class TestRunContext:
    """Tests for run_context."""

    def test_sets_and_resets(self):
        assert get_correlation_id() == ""
        with run_context(correlation_id="run_abc", command="convert") as ctx:
            assert ctx.correlation_id == "run_abc"
            assert get_correlation_id() == "run_abc"
            assert get_command() == "convert"
            assert get_current_context().correlation_id == "run_abc"
        assert get_correlation_id() == ""
        assert get_command() == ""

    def test_generates_id(self):
        with run_context() as ctx:
            assert ctx.correlation_id.startswith("run_")
            assert ctx.to_dict()["correlation_id"] == ctx.correlation_id

    def test_generate_correlation_id_prefix(self):
        corr_id = generate_correlation_id(prefix="cli")
        assert corr_id.startswith("cli_")
        assert len(corr_id) == len("cli_") + 12


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_structured_output(self, stream):
        configure_logging(level="DEBUG", format="structured", stream=stream)
        with run_context(correlation_id="run_abc", command="generate"):
            get_logger("tests").info("hello %s", "world")

        entry = json.loads(stream.getvalue().strip())
        assert entry["message"] == "hello world"
        assert entry["level"] == "INFO"
        assert entry["logger"] == f"{ROOT_LOGGER}.tests"
        assert entry["correlation_id"] == "run_abc"
        assert entry["command"] == "generate"

    def test_structured_extra(self, stream):
        configure_logging(level="INFO", format="structured", stream=stream)
        get_logger("tests").info("wrote", extra={"pages": 3})
        entry = json.loads(stream.getvalue().strip())
        assert entry["extra"] == {"pages": 3}
        assert entry["correlation_id"] == "-"

    def test_human_output(self, stream):
        configure_logging(level="INFO", format="human", stream=stream)
        with run_context(correlation_id="run_abc"):
            get_logger("doc2md.core.docgen").info("Creating x.md")

        line = stream.getvalue().strip()
        assert "[INFO] [run_abc] core.docgen: Creating x.md" in line

    def test_level_filters(self, stream):
        configure_logging(level="WARNING", format="human", stream=stream)
        get_logger("tests").info("quiet")
        assert stream.getvalue() == ""

    def test_reconfigure_replaces_handlers(self, stream):
        configure_logging(stream=io.StringIO())
        logger = configure_logging(stream=stream)
        assert len(logger.handlers) == 1

    def test_get_logger_namespaces(self):
        assert get_logger("x").name == "doc2md.x"
        assert get_logger("doc2md.core").name == "doc2md.core"


class TestFormatters:
    """Tests for formatter details."""

    def _record(self, **attrs):
        record = logging.LogRecord("doc2md.cli", logging.ERROR, __file__, 1, "failed", (), None)
        for key, value in attrs.items():
            setattr(record, key, value)
        return record

    def test_human_without_context(self):
        text = HumanReadableFormatter(include_timestamp=False).format(self._record())
        assert text == "[ERROR] cli: failed"

    def test_structured_non_serializable_extra(self):
        entry = json.loads(StructuredFormatter().format(self._record(obj=object())))
        assert isinstance(entry["extra"]["obj"], str)
