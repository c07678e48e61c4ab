"""doc2md CLI - convert doc comments to Markdown from the command line.

All commands emit structured JSON envelopes for reliable parsing.
"""

from doc2md.cli.config import CLIContext, create_context
from doc2md.cli.logging import (
    CLILogContext,
    cli_command,
    get_cli_logger,
    get_request_id,
)
from doc2md.cli.main import cli
from doc2md.cli.output import emit, emit_failure, emit_success
from doc2md.cli.registry import get_context, set_context
from doc2md.cli.resilience import handle_keyboard_interrupt

__all__ = [
    # Entry point
    "cli",
    # Context
    "CLIContext",
    "create_context",
    "get_context",
    "set_context",
    # Output
    "emit",
    "emit_failure",
    "emit_success",
    # Logging
    "CLILogContext",
    "cli_command",
    "get_cli_logger",
    "get_request_id",
    # Resilience
    "handle_keyboard_interrupt",
]
