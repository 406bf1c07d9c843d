"""Translate command failures into a printed message and an exit code."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import httpx
import typer
from rich.console import Console
from rich.markup import escape

from pipelinemonitor.exceptions import UserFacingError

logger = logging.getLogger(__name__)

EXIT_CANCELLED = 130


@contextmanager
def reported_errors(console: Console, action: str) -> Iterator[None]:
    """Print known failures to *console* and exit non-zero.

    *action* names what was being attempted, e.g. ``"fetch timeline"``,
    and prefixes HTTP failures.
    """
    try:
        yield
    except UserFacingError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=e.exit_code)
    except httpx.HTTPError as e:
        logger.debug("HTTP failure during %s", action, exc_info=True)
        console.print(f"[bold red]Failed to {action}:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        console.print("[yellow]Cancelled.[/yellow]")
        raise typer.Exit(code=EXIT_CANCELLED)
