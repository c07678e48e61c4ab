"""Directory documentation command for the doc2md CLI.

Renders every ``*.EXTENSION`` file under a source directory into a mirrored
tree of Markdown pages plus an ``_index.md`` page.
"""

import time
from pathlib import Path
from typing import Optional, Tuple

import click

from doc2md.cli.logging import cli_command, get_cli_logger
from doc2md.cli.output import emit_failure, emit_success
from doc2md.cli.registry import get_context
from doc2md.cli.resilience import handle_keyboard_interrupt
from doc2md.core.docgen import DocumentationGenerator
from doc2md.core.errors import NoSourceFilesError
from doc2md.core.flavors import FLAVORS
from doc2md.core.responses import (
    internal_error,
    no_matches_error,
    not_found_error,
    validation_error,
)

logger = get_cli_logger()


@click.command("generate")
@click.argument("source_dir", type=click.Path(file_okay=False))
@click.argument("extension", required=False)
@click.argument("target_dir", required=False, type=click.Path(file_okay=False))
@click.option(
    "--flavor",
    type=click.Choice(sorted(FLAVORS), case_sensitive=False),
    help="Doc comment flavor (default from config: javadoc).",
)
@click.option(
    "--level",
    "heading_level",
    type=click.IntRange(1, 6),
    help="Base heading level (default from config: 1).",
)
@click.option(
    "--exclude",
    "excludes",
    multiple=True,
    help="Directory name or relative path to skip (repeatable).",
)
@click.pass_context
@cli_command("generate")
@handle_keyboard_interrupt()
def generate_cmd(
    ctx: click.Context,
    source_dir: str,
    extension: Optional[str],
    target_dir: Optional[str],
    flavor: Optional[str],
    heading_level: Optional[int],
    excludes: Tuple[str, ...],
) -> None:
    """Generate Markdown pages for all EXTENSION files under SOURCE_DIR.

    EXTENSION and TARGET_DIR default to the configured values
    (java and docs).
    """
    start_time = time.perf_counter()
    cli_ctx = get_context(ctx)

    effective_extension = cli_ctx.extension(extension)
    destination = cli_ctx.output_dir(target_dir).expanduser()

    try:
        generator = DocumentationGenerator(
            Path(source_dir).expanduser(),
            destination,
            effective_extension,
            flavor=cli_ctx.flavor(flavor),
            heading_level=cli_ctx.heading_level(heading_level),
            excludes=cli_ctx.excludes(list(excludes)),
        )
        result = generator.generate()
    except FileNotFoundError:
        emit_failure(
            not_found_error(
                "Source directory",
                source_dir,
                remediation="Verify the source directory exists",
            )
        )
    except NoSourceFilesError as exc:
        emit_failure(
            no_matches_error(
                f"*.{exc.extension}",
                source_dir,
                remediation="Check the extension argument and the --exclude options",
            )
        )
    except ValueError as exc:
        emit_failure(
            validation_error(
                str(exc),
                remediation="Check the extension and flavor arguments",
            )
        )
    except OSError as exc:
        emit_failure(internal_error(f"Could not write documentation to {destination}: {exc}"))

    logger.info(
        f"Generated {len(result.pages)} pages",
        command="generate",
        output_dir=str(result.output_dir),
    )

    duration_ms = (time.perf_counter() - start_time) * 1000
    emit_success(
        result.to_dict(),
        warnings=result.warnings or None,
        telemetry={"duration_ms": round(duration_ms, 2)},
    )
