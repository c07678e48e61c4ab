"""doc2md CLI entry point.

JSON-only output; logs go to stderr.
"""

import click

from doc2md.cli.config import create_context
from doc2md.cli.registry import register_all_commands


@click.group()
@click.option(
    "--config",
    "config_file",
    envvar="DOC2MD_CONFIG_FILE",
    type=click.Path(dir_okay=False),
    help="Path to a doc2md TOML config file",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Override the configured log level",
)
@click.option(
    "--log-format",
    type=click.Choice(["structured", "human"]),
    help="Log line format (structured = JSON)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    log_level: str | None,
    log_format: str | None,
) -> None:
    """doc2md - Generate Markdown from Javadoc, PHPDoc and JSDoc comments.

    All commands output JSON envelopes.
    """
    ctx.ensure_object(dict)
    cli_context = create_context(
        config_file=config_file, log_level=log_level, log_format=log_format
    )
    cli_context.setup_logging()
    ctx.obj["cli_context"] = cli_context


# Register all commands
register_all_commands(cli)


if __name__ == "__main__":
    cli()
