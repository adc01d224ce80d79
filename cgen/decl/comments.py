"""Plain ``//`` comments, optionally framed as section headings."""

from __future__ import annotations

from typing import Literal

from cgen.decl.base import Entity
from cgen.formatter import Formatter
from cgen.utils import comment_lines


class Comment(Entity):
    """A block of ``//`` comment lines.

    A heading comment is framed above and below by a rule of slashes that
    ends at ``heading_width`` regardless of the current indentation.
    """

    kind: Literal["comment"] = "comment"
    text: str = ""
    heading: bool = False

    def set_heading(self, value: bool = True) -> "Comment":
        self.heading = value
        return self

    def _rule(self, fmt: Formatter) -> str:
        indent = fmt.depth * fmt.config.indent_width
        return "/" * max(fmt.config.heading_width - indent, 4)

    def render(self, fmt: Formatter) -> None:
        if self.heading:
            fmt.line(self._rule(fmt))
        for line in comment_lines(self.text, fmt.config.doc_width):
            fmt.line(f"// {line}" if line else "//")
        if self.heading:
            fmt.line(self._rule(fmt))
