"""Command registry for the doc2md CLI.

Centralized registration of all commands.
"""

from typing import Optional

import click

from doc2md.cli.config import CLIContext

# Module-level storage for CLI context (for testing)
_cli_context: Optional[CLIContext] = None


def set_context(ctx: Optional[CLIContext]) -> None:
    """Set the CLI context at module level.

    Primarily used for testing when not using Click's context.
    """
    global _cli_context
    _cli_context = ctx


def get_context(ctx: Optional[click.Context] = None) -> CLIContext:
    """Get CLI context from Click context or module-level storage.

    Args:
        ctx: Optional Click context with cli_context stored in obj.
             If None, returns module-level context.

    Raises:
        RuntimeError: If no context is available.
    """
    if ctx is not None and ctx.obj and "cli_context" in ctx.obj:
        return ctx.obj["cli_context"]

    if _cli_context is not None:
        return _cli_context

    raise RuntimeError("No CLI context available. Call set_context() first.")


def register_all_commands(cli: click.Group) -> None:
    """Register all commands with the CLI.

    Commands are lazily imported to avoid circular dependencies.
    """
    from doc2md.cli.commands import convert_cmd, generate_cmd

    cli.add_command(convert_cmd)
    cli.add_command(generate_cmd)

    @cli.command("version")
    @click.pass_context
    def version(ctx: click.Context) -> None:
        """Show version information."""
        from doc2md import __version__
        from doc2md.cli.output import emit_success
        from doc2md.core.flavors import FLAVORS

        cli_ctx = get_context(ctx)
        config_file = cli_ctx.config.config_file

        emit_success(
            {
                "version": __version__,
                "name": "doc2md",
                "flavors": sorted(FLAVORS),
                "config_file": str(config_file) if config_file else None,
            }
        )
