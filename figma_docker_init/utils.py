"""Shared utility functions for figma-docker-init.

Provides the shared Rich console and its coloured output helpers, JSON
loading, async file I/O wrappers and path-containment checks.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_info(message: str) -> None:
    """Print a blue informational message."""
    console.print(f"[blue]{escape(message)}[/blue]")


def print_summary_table(data: dict[str, Any], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(str(key)), escape(str(value)))

    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# JSON / file I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load and parse a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed dictionary.  A non-object top level is wrapped as
        ``{"_root": data}``.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    file_path = Path(path)
    raw = file_path.read_text(encoding="utf-8")
    data = json.loads(raw)
    if not isinstance(data, dict):
        return {"_root": data}
    return data


async def read_text(path: str | Path, errors: str = "strict") -> str:
    """Read a UTF-8 text file without blocking the event loop.

    *errors* is passed to the decoder; use ``"replace"`` to read files that
    may hold stray non-UTF-8 bytes.
    """
    return await asyncio.to_thread(Path(path).read_text, encoding="utf-8", errors=errors)


async def write_text(path: str | Path, content: str) -> None:
    """Write a UTF-8 text file without blocking the event loop."""
    await asyncio.to_thread(_write_file, Path(path), content)


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: write content without creating parents."""
    path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def is_within(path: str | Path, base: str | Path) -> bool:
    """Return ``True`` if *path* equals *base* or lies underneath it.

    Both paths are resolved first and compared component by component, so a
    sibling such as ``/home/user/app-evil`` is *not* considered inside
    ``/home/user/app``.
    """
    resolved = Path(path).resolve()
    resolved_base = Path(base).resolve()
    return resolved == resolved_base or resolved_base in resolved.parents
