"""Single-file conversion command for the doc2md CLI."""

import time
from pathlib import Path
from typing import Optional

import click

from doc2md.cli.logging import cli_command, get_cli_logger
from doc2md.cli.output import emit_failure, emit_success
from doc2md.cli.registry import get_context
from doc2md.cli.resilience import handle_keyboard_interrupt
from doc2md.core.flavors import FLAVORS
from doc2md.core.rendering import RenderOptions, render_source
from doc2md.core.responses import internal_error, not_found_error, validation_error

logger = get_cli_logger()


@click.command("convert")
@click.argument("file", type=click.Path(dir_okay=False))
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
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write the Markdown to this file instead of the JSON payload.",
)
@click.pass_context
@cli_command("convert")
@handle_keyboard_interrupt()
def convert_cmd(
    ctx: click.Context,
    file: str,
    flavor: Optional[str],
    heading_level: Optional[int],
    output: Optional[str],
) -> None:
    """Convert the doc comments of one source FILE to Markdown."""
    start_time = time.perf_counter()
    cli_ctx = get_context(ctx)
    source_path = Path(file).expanduser()

    if not source_path.is_file():
        emit_failure(
            not_found_error(
                "File",
                file,
                remediation="Provide the path of an existing source file",
            )
        )

    options = RenderOptions(
        flavor=cli_ctx.flavor(flavor),
        heading_level=cli_ctx.heading_level(heading_level),
    )

    try:
        text = source_path.read_text(encoding="utf-8", errors="replace")
        result = render_source(text, options)
    except ValueError as exc:
        emit_failure(
            validation_error(
                str(exc),
                field="flavor",
                remediation="Use --flavor with javadoc, phpdoc or jsdoc",
            )
        )
    except OSError as exc:
        emit_failure(internal_error(f"Could not read {file}: {exc}"))

    payload = {
        "source": str(source_path),
        "flavor": result.flavor,
        "heading_level": result.heading_level,
        "sections": result.rendered_sections,
    }

    if output:
        target = Path(output).expanduser()
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(result.markdown, encoding="utf-8")
        except OSError as exc:
            emit_failure(internal_error(f"Could not write {output}: {exc}"))
        logger.info(f"Wrote {target}", command="convert")
        payload["output"] = str(target)
    else:
        payload["markdown"] = result.markdown

    warnings = []
    if result.total_sections == 0:
        warnings.append(f"No doc comments found in {file}")

    duration_ms = (time.perf_counter() - start_time) * 1000
    emit_success(
        payload,
        warnings=warnings or None,
        telemetry={"duration_ms": round(duration_ms, 2)},
    )
