"""The ``usermind validate`` command.

Validates individual flow files, or every flow found in the configured flows
directory when no files are given.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from usermind.cli.context import CLIContext, ExitCode
from usermind.cli.output import OutputFormat, format_error, format_json
from usermind.dsl.errors import ParseError
from usermind.dsl.loader import FlowFileResult, FlowLocator, check_flow_files
from usermind.logging import get_logger

__all__ = ["validate"]


def _result_details(result: FlowFileResult) -> list[str]:
    details = []
    error = result.error
    if isinstance(error, ParseError):
        if error.path:
            details.append(f"Path: {error.path}")
        if error.cause is not None:
            details.append(f"Cause: {error.cause}")
    details.append(f"File: {result.file_path}")
    return details


def _result_record(result: FlowFileResult) -> dict[str, Any]:
    record: dict[str, Any] = {"file": str(result.file_path), "valid": result.valid}
    if result.flow is not None:
        record["name"] = result.flow.name
        record["steps"] = len(result.flow.steps)
    if result.error is not None:
        record["error"] = result.error.message
        record["path"] = getattr(result.error, "path", None)
    return record


def _echo_text(results: list[FlowFileResult]) -> None:
    for result in results:
        if result.flow is not None:
            status = click.style("✓", fg="green", bold=True)
            click.echo(
                f"{status} {result.flow.name} ({result.file_path}, "
                f"{len(result.flow.steps)} steps)"
            )
        else:
            status = click.style("✗", fg="red", bold=True)
            click.echo(f"{status} {result.file_path}")

    valid_count = sum(1 for r in results if r.valid)
    invalid_count = len(results) - valid_count

    click.echo()
    click.echo(click.style("Validation Summary:", bold=True))
    click.echo(f"  Valid: {click.style(str(valid_count), fg='green')}")
    click.echo(f"  Invalid: {click.style(str(invalid_count), fg='red')}")

    for result in results:
        if result.error is None:
            continue
        click.echo()
        click.echo(
            format_error(
                f"Flow parsing failed: {result.error.message}",
                details=_result_details(result),
            ),
            err=True,
        )


@click.command("validate")
@click.argument(
    "files",
    nargs=-1,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TEXT.value,
    help="Output format.",
)
@click.pass_context
def validate(ctx: click.Context, files: tuple[Path, ...], output_format: str) -> None:
    """Validate flow YAML syntax and structure.

    With no FILES, every flow file in the configured flows directory is
    checked.

    Examples:
        usermind validate flows/login.yaml
        usermind validate
        usermind validate --format json flows/*.yaml
    """
    logger = get_logger(__name__)
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]

    paths: list[Path] = list(files)
    if not paths:
        flows_config = cli_ctx.config.flows
        locator = FlowLocator(
            patterns=flows_config.patterns, recursive=flows_config.recursive
        )
        paths = locator.scan(flows_config.directory)
        if not paths:
            click.echo(f"No flow files found in '{flows_config.directory}'")
            raise SystemExit(ExitCode.SUCCESS)

    logger.debug("validate_started", files=len(paths))
    results = check_flow_files(paths)

    if output_format == OutputFormat.JSON.value:
        click.echo(format_json([_result_record(r) for r in results]))
    else:
        _echo_text(results)

    if all(r.valid for r in results):
        raise SystemExit(ExitCode.SUCCESS)
    raise SystemExit(ExitCode.FAILURE)
