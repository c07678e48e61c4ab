"""Cancellation handling for CLI commands."""

import sys
from functools import wraps
from typing import Any, Callable, TypeVar

__all__ = ["handle_keyboard_interrupt"]

T = TypeVar("T")

# 128 + SIGINT
INTERRUPTED_EXIT_CODE = 130


def handle_keyboard_interrupt() -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator to gracefully handle Ctrl+C in CLI commands.

    Catches KeyboardInterrupt and exits with status 130.

    Example:
        >>> @handle_keyboard_interrupt()
        ... def long_running_task():
        ...     # ... work ...
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return func(*args, **kwargs)
            except KeyboardInterrupt:
                sys.exit(INTERRUPTED_EXIT_CODE)

        return wrapper

    return decorator
