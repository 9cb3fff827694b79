"""Typer CLI entrypoint for document analysis."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from rich.table import Table

from cli.commands import config as config_commands
from cli.commands.shared import console, emit_json, err_console, fail
from docintel import __version__

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

app = typer.Typer(
    help="Document analysis against Azure Document Intelligence.",
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
)
app.add_typer(config_commands.app, name="config")


@app.callback()
def root(
    ctx: typer.Context,
    version_flag: bool = typer.Option(
        False,
        "-v",
        "--version",
        help="Show the installed version and exit.",
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Logging level: DEBUG|INFO|WARNING|ERROR",
    ),
) -> None:
    if version_flag:
        typer.echo(__version__)
        raise typer.Exit()
    level = logging.getLevelName(log_level.strip().upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}", param_hint="--log-level")
    logging.basicConfig(level=level, format=LOG_FORMAT)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command(help="Analyze a document and print or write the result")
def analyze(
    file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        metavar="FILE",
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Logical model name (see `docintel models`)",
    ),
    fmt: str = typer.Option(
        "json",
        "--format",
        "-f",
        help="Output format: json|csv|text|markdown",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the result to this file instead of stdout",
    ),
    interval: float | None = typer.Option(
        None,
        "--interval",
        min=0,
        help="Seconds between poll requests",
    ),
    max_ticks: int | None = typer.Option(
        None,
        "--max-ticks",
        min=1,
        help="Maximum number of poll requests",
    ),
    progress: bool = typer.Option(
        True,
        "--progress/--no-progress",
        help="Show a progress bar on stderr",
    ),
) -> None:
    from pydantic import ValidationError

    from core.config import get_settings
    from reporting import get_formatter
    from schemas.requests import AnalysisRequest, AnalyzeOptions
    from services.errors import AnalysisError
    from services.io import read_document, write_text

    try:
        formatter = get_formatter(fmt)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--format") from exc

    try:
        content, name = read_document(file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="FILE") from exc

    settings = get_settings()
    try:
        request = AnalysisRequest(
            file_bytes=content,
            model_selector=model or settings.default_model,
            filename=name,
        )
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid input: {exc}", param_hint="FILE") from exc
    options = AnalyzeOptions(poll_interval_seconds=interval, poll_max_ticks=max_ticks)

    try:
        result = _run_analysis(
            request, options, total=max_ticks or settings.poll_max_ticks, show_progress=progress
        )
    except AnalysisError as exc:
        fail(exc.kind, str(exc))

    for warning in result.warnings:
        err_console.print(f"[yellow]warning[/yellow]: {warning}", highlight=False)

    rendered = formatter.format(result.document)
    if output is None:
        typer.echo(rendered)
        return
    write_text(output, rendered)
    typer.echo(f"Wrote {output}")


@app.command(help="List logical model names and their service model ids")
def models(
    json_out: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    from core.config import get_settings

    settings = get_settings()
    if json_out:
        emit_json(
            {
                "default_model": settings.default_model,
                "fallback_model_id": settings.fallback_model_id,
                "models": settings.model_mapping,
            }
        )
        return

    table = Table(title="Models")
    table.add_column("Name")
    table.add_column("Service model")
    for name, model_id in settings.model_mapping.items():
        marker = " (default)" if name == settings.default_model else ""
        table.add_row(f"{name}{marker}", model_id)
    console.print(table)


def _run_analysis(request, options, *, total: int, show_progress: bool):
    from rich.progress import Progress

    from services.analyzer import run_analysis

    if not show_progress:
        return asyncio.run(run_analysis(request, options))

    with Progress(console=err_console, transient=True) as bar:
        task = bar.add_task("submitted", total=total)

        def on_progress(state) -> None:
            bar.update(task, completed=state.tick, total=state.max_ticks, description=state.state)

        return asyncio.run(run_analysis(request, options, on_progress=on_progress))


def main() -> None:
    app()


__all__ = ["app", "main"]
