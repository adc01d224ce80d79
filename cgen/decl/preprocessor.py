"""Preprocessor directives: ``#include`` and ``#define``."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field as PydanticField, field_validator

from cgen.decl.base import DocumentedEntity, Entity
from cgen.formatter import Formatter
from cgen.utils import validate_identifier


class Include(Entity):
    """``#include <path>`` for system headers, ``#include "path"`` otherwise."""

    kind: Literal["include"] = "include"
    path: str
    system: bool = False
    comment: Optional[str] = None

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        return validate_identifier(value)

    def set_system(self, value: bool = True) -> "Include":
        self.system = value
        return self

    def set_comment(self, comment: str) -> "Include":
        """Attach a trailing ``// comment`` to the directive."""
        self.comment = comment
        return self

    def render(self, fmt: Formatter) -> None:
        target = f"<{self.path}>" if self.system else f'"{self.path}"'
        text = f"#include {target}"
        if self.comment:
            text += f"  // {self.comment}"
        fmt.line(text)


class Macro(DocumentedEntity):
    """A ``#define`` directive.

    Function-like macros list their arguments; a multi-line value is emitted
    with ``\\`` continuations and its follow-up lines indented one level.
    """

    kind: Literal["macro"] = "macro"
    args: list[str] = PydanticField(default_factory=list)
    value: Optional[str] = None

    def new_arg(self, arg: str) -> "Macro":
        self.args.append(validate_identifier(arg))
        return self

    def set_value(self, value: str) -> "Macro":
        self.value = value
        return self

    def render(self, fmt: Formatter) -> None:
        self._render_doc(fmt)
        head = f"#define {self.name}"
        if self.args:
            head += f"({', '.join(self.args)})"
        if not self.value:
            fmt.line(head)
            return
        lines = self.value.splitlines()
        if len(lines) == 1:
            fmt.line(f"{head} {lines[0]}")
            return
        fmt.line(f"{head} {lines[0]} \\")
        with fmt.indented():
            for index, line in enumerate(lines[1:], start=2):
                fmt.line(line if index == len(lines) else f"{line} \\")
