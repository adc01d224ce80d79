"""Shared utility functions for cgen.

Provides identifier validation, comment-text normalisation, Rich-based console
reporting, and the file-persistence helpers that sit outside the renderer.
The renderer itself never touches the file system; callers that want the
generated text on disk go through ``save_source`` or ``write_scope``.
"""

from __future__ import annotations

import asyncio
import textwrap
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from cgen.config import FormatConfig
    from cgen.scope import Scope

console = Console()


class CGenWriteError(Exception):
    """Raised when generated source cannot be persisted."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(message)


# ---------------------------------------------------------------------------
# Identifier validation
# ---------------------------------------------------------------------------


def validate_identifier(name: str) -> str:
    """Reject names that cannot appear in a declaration.

    Only emptiness and embedded line breaks are checked.  Keyword collisions
    and character-set rules are deliberately left to the caller, so names
    such as ``std::string`` or ``operator==`` pass through untouched.

    Raises:
        ValueError: If *name* is empty, whitespace-only, or spans lines.
    """
    if not name or not name.strip():
        raise ValueError("identifier must be a non-empty string")
    if "\n" in name or "\r" in name:
        raise ValueError(f"identifier must not contain line breaks: {name!r}")
    return name


# ---------------------------------------------------------------------------
# Comment text
# ---------------------------------------------------------------------------


def comment_lines(text: str, width: int) -> list[str]:
    """Split *text* into comment-safe lines no wider than *width*.

    * Line breaks in the input start new lines; empty lines are kept.
    * Tabs are expanded and trailing whitespace is removed.
    * Long lines are wrapped at word boundaries (words longer than *width*
      are never broken).
    * A trailing backslash would splice the following source line into the
      comment, so such lines are terminated with `` //``.
    """
    lines: list[str] = []
    for raw in text.splitlines() or [""]:
        raw = raw.expandtabs(4).rstrip()
        if not raw:
            lines.append("")
            continue
        wrapped = textwrap.wrap(
            raw,
            width=width,
            break_long_words=False,
            break_on_hyphens=False,
            drop_whitespace=True,
        )
        lines.extend(wrapped or [""])
    return [f"{line} //" if line.endswith("\\") else line for line in lines]


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def save_source(path: str | Path, text: str) -> Path:
    """Write generated source to *path* as UTF-8.

    Parent directories are created automatically.

    Returns:
        The resolved ``Path`` of the written file.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(text, encoding="utf-8")
    return file_path.resolve()


async def write_scope(
    scope: Scope,
    output_dir: str | Path | None = None,
    path: str | Path | None = None,
    config: FormatConfig | None = None,
) -> Path:
    """Render *scope* and write the result to disk.

    The target is *path* when given, otherwise ``output_dir / scope.filename``
    (``output_dir`` defaults to the current directory).  The write itself is
    performed in a worker thread so it does not block the event loop.

    Args:
        scope: The scope to render.
        output_dir: Directory that receives ``scope.filename``.
        path: Explicit destination, overriding the scope's filename.
        config: Formatting options forwarded to ``Scope.render``.

    Returns:
        The resolved path of the written file.

    Raises:
        CGenWriteError: If no destination can be determined or the write
            fails.
    """
    if path is not None:
        target = Path(path)
    elif scope.filename:
        target = Path(output_dir or ".") / scope.filename
    else:
        raise CGenWriteError("Scope has no filename and no explicit path was given")

    text = scope.render(config)
    try:
        written = await asyncio.to_thread(save_source, target, text)
    except OSError as exc:
        print_error(f"Failed to write {target}: {exc}")
        raise CGenWriteError(f"Failed to write {target}: {exc}", path=target) from exc

    print_success(f"Wrote {written}")
    return written
