"""Structured logging hooks for CLI commands.

Every command runs inside a ``CLILogContext`` so its log lines and its
response envelope share one correlation ID.
"""

import logging
from contextlib import ExitStack
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

from doc2md.core.context import (
    generate_correlation_id,
    get_correlation_id,
    get_current_context,
    run_context,
)
from doc2md.core.logging_config import get_logger

__all__ = [
    "CLILogContext",
    "CLILogger",
    "cli_command",
    "generate_request_id",
    "get_cli_logger",
    "get_request_id",
]

T = TypeVar("T")


def generate_request_id() -> str:
    """Generate a unique request ID for CLI command tracking."""
    return generate_correlation_id(prefix="cli")


def get_request_id() -> str:
    """Get the current request ID, or empty string if not set."""
    return get_correlation_id()


class CLILogContext:
    """Context manager for CLI command logging context.

    Example:
        >>> with CLILogContext(command="convert") as ctx:
        ...     logger.info("Processing", request_id=ctx.request_id)
    """

    def __init__(self, request_id: Optional[str] = None, command: Optional[str] = None):
        self.request_id = request_id or generate_request_id()
        self.command = command or ""
        self._stack = ExitStack()

    def __enter__(self) -> "CLILogContext":
        self._stack.enter_context(
            run_context(correlation_id=self.request_id, command=self.command)
        )
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self._stack.close()


class CLILogger:
    """Logger for CLI commands that attaches keyword context as ``extra``."""

    def __init__(self, name: str = "cli"):
        self._logger = get_logger(name)

    def _log(self, level: int, message: str, **extra: Any) -> None:
        self._logger.log(level, message, extra={"cli_context": extra} if extra else None)

    def debug(self, message: str, **extra: Any) -> None:
        self._log(logging.DEBUG, message, **extra)

    def info(self, message: str, **extra: Any) -> None:
        self._log(logging.INFO, message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        self._log(logging.WARNING, message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        self._log(logging.ERROR, message, **extra)


# Global CLI logger
_cli_logger = CLILogger()


def get_cli_logger() -> CLILogger:
    """Get the global CLI logger."""
    return _cli_logger


def cli_command(
    command_name: Optional[str] = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator for CLI commands.

    Sets a request ID for correlation and logs command start and end.

    Args:
        command_name: Override command name (defaults to function name).

    Example:
        >>> @cli_command("convert")
        ... def convert_cmd(ctx, file):
        ...     ...
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        name = command_name or func.__name__

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            with CLILogContext(command=name):
                success = True
                error_msg = None

                _cli_logger.debug(f"CLI command started: {name}", command=name)

                try:
                    return func(*args, **kwargs)
                except SystemExit as e:
                    success = e.code in (None, 0)
                    raise
                except Exception as e:
                    success = False
                    error_msg = str(e)
                    raise
                finally:
                    _cli_logger.debug(
                        f"CLI command completed: {name}",
                        command=name,
                        success=success,
                        duration_ms=round(get_current_context().elapsed_ms, 2),
                        error=error_msg,
                    )

        return wrapper

    return decorator
