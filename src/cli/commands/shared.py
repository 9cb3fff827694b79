"""Shared helpers for CLI subcommands."""

from __future__ import annotations

import json
from typing import Any

import typer
from rich.console import Console

console = Console()
err_console = Console(stderr=True)


def emit_json(data: Any) -> None:
    typer.echo(json.dumps(data, ensure_ascii=False, indent=2))


def fail(kind: str, message: str) -> None:
    """Report a failure on stderr and exit with status 1."""
    err_console.print(f"[bold red]{kind}[/bold red]: {message}", highlight=False)
    raise typer.Exit(code=1)


__all__ = ["console", "emit_json", "err_console", "fail"]
