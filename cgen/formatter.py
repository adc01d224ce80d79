"""Indentation-aware text accumulator used by every renderer.

The formatter tracks the current depth and appends whole lines to a buffer.
Renderers open and close blocks explicitly (or through the ``block`` /
``indented`` context managers); the formatter never repairs an unbalanced
open/close pair on its own.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from cgen.config import FormatConfig


class Formatter:
    """Accumulates indented lines of source text."""

    def __init__(self, config: FormatConfig | None = None) -> None:
        self.config = config or FormatConfig()
        self.depth = 0
        self._lines: list[str] = []
        self._opened = False

    # -- line emission -----------------------------------------------------

    def line(self, text: str = "") -> None:
        """Emit *text* at the current depth.

        Multi-line text is split and every non-empty line is indented;
        empty lines are written without trailing whitespace.
        """
        self._opened = False
        if not text:
            self._lines.append("")
            return
        prefix = self.config.indent_unit * self.depth
        for part in text.split("\n"):
            self._lines.append(prefix + part if part else "")

    def lines(self, texts: list[str]) -> None:
        for text in texts:
            self.line(text)

    def label(self, text: str) -> None:
        """Emit *text* one level shallower than the current depth (``public:``)."""
        self._opened = False
        depth = max(self.depth - 1, 0)
        self._lines.append(self.config.indent_unit * depth + text)

    def blank(self, count: int = 1) -> None:
        """Ensure the output ends with *count* empty lines.

        Nothing is emitted at the very start of the buffer or directly after
        ``open_block``.
        """
        if not self._lines or self._opened:
            return
        trailing = 0
        for existing in reversed(self._lines):
            if existing:
                break
            trailing += 1
        for _ in range(count - trailing):
            self._lines.append("")

    # -- blocks ------------------------------------------------------------

    def open_block(self, header: str, token: str = "{") -> None:
        """Emit ``header {`` and increase the depth by one level."""
        self.line(f"{header} {token}" if header else token)
        self.depth += 1
        self._opened = True

    def reopen_block(self, header: str) -> None:
        """Close the current block and open the next one on the same line.

        Used for ``} else {`` and ``} else if (x) {``.
        """
        self.depth -= 1
        self.line(f"}} {header} {{")
        self.depth += 1
        self._opened = True

    def close_block(self, token: str = "}", semicolon: bool = False) -> None:
        """Decrease the depth and emit the closing token."""
        self.depth -= 1
        self.line(token + (";" if semicolon else ""))

    @contextmanager
    def block(self, header: str, semicolon: bool = False) -> Iterator["Formatter"]:
        """Context-managed ``open_block`` / ``close_block`` pair."""
        self.open_block(header)
        try:
            yield self
        finally:
            self.close_block(semicolon=semicolon)

    @contextmanager
    def indented(self) -> Iterator["Formatter"]:
        """Emit the enclosed lines one level deeper without any braces."""
        self.depth += 1
        try:
            yield self
        finally:
            self.depth -= 1

    # -- output ------------------------------------------------------------

    def is_empty(self) -> bool:
        return not self._lines

    def getvalue(self) -> str:
        """Return the accumulated text, terminated by a single newline."""
        if not self._lines:
            return ""
        return "\n".join(self._lines).rstrip("\n") + "\n"
