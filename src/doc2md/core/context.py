"""Run context for correlating log lines of a single command.

Usage:
    from doc2md.core.context import run_context, get_correlation_id

    with run_context(command="generate") as ctx:
        print(ctx.correlation_id)  # e.g., "run_a1b2c3d4e5f6"
"""

from __future__ import annotations

import secrets
import time
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Dict, Generator, Optional

__all__ = [
    "correlation_id_var",
    "command_var",
    "start_time_var",
    "RunContext",
    "generate_correlation_id",
    "run_context",
    "get_correlation_id",
    "get_command",
    "get_start_time",
    "get_current_context",
]

# -----------------------------------------------------------------------------
# Context Variables
# -----------------------------------------------------------------------------

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")
"""Correlation ID shared by every log record of one run."""

command_var: ContextVar[str] = ContextVar("command", default="")
"""Name of the command being executed."""

start_time_var: ContextVar[float] = ContextVar("start_time", default=0.0)
"""Run start time as Unix timestamp."""


def generate_correlation_id(prefix: str = "run") -> str:
    """Generate a unique correlation ID with optional prefix.

    Format: {prefix}_{12_hex_chars}
    Example: "run_a1b2c3d4e5f6"
    """
    return f"{prefix}_{secrets.token_hex(6)}"


@dataclass
class RunContext:
    """Snapshot of the context variables of one run."""

    correlation_id: str = ""
    command: str = ""
    start_time: float = 0.0

    @property
    def elapsed_ms(self) -> float:
        if self.start_time <= 0:
            return 0.0
        return (time.time() - self.start_time) * 1000

    def to_dict(self) -> Dict[str, Any]:
        return {
            "correlation_id": self.correlation_id,
            "command": self.command,
            "elapsed_ms": round(self.elapsed_ms, 2),
        }


@contextmanager
def run_context(
    *,
    correlation_id: Optional[str] = None,
    command: Optional[str] = None,
) -> Generator[RunContext, None, None]:
    """Set the run context variables for the duration of the with block.

    Args:
        correlation_id: Run ID (auto-generated if None)
        command: Command name

    Yields:
        RunContext snapshot
    """
    corr_id = correlation_id or generate_correlation_id()
    name = command or ""
    start = time.time()

    token_corr = correlation_id_var.set(corr_id)
    token_command = command_var.set(name)
    token_start = start_time_var.set(start)

    try:
        yield RunContext(correlation_id=corr_id, command=name, start_time=start)
    finally:
        correlation_id_var.reset(token_corr)
        command_var.reset(token_command)
        start_time_var.reset(token_start)


def get_correlation_id() -> str:
    return correlation_id_var.get()


def get_command() -> str:
    return command_var.get()


def get_start_time() -> float:
    return start_time_var.get()


def get_current_context() -> RunContext:
    """Return a snapshot of the current context variables."""
    return RunContext(
        correlation_id=get_correlation_id(),
        command=get_command(),
        start_time=get_start_time(),
    )
