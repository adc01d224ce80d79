"""Data declarations: struct fields, class attributes, parameters and variables."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field as PydanticField

from cgen.decl.base import DocumentedEntity, NamedEntity
from cgen.formatter import Formatter
from cgen.types import CType, Visibility


class Field(DocumentedEntity):
    """A struct or union member.  Duplicate names are not checked."""

    type: CType
    width: Optional[int] = PydanticField(default=None, ge=1, description="Bitfield width")

    def bitfield_width(self, width: int) -> "Field":
        self.width = width
        return self

    def declaration(self) -> str:
        text = self.type.declare(self.name)
        if self.width is not None:
            text += f" : {self.width}"
        return text

    def render(self, fmt: Formatter) -> None:
        self._render_doc(fmt)
        fmt.line(f"{self.declaration()};")


class VisibilityMixin(NamedEntity):
    """Access control shared by every class member."""

    visibility: Visibility = Visibility.PRIVATE

    def set_visibility(self, visibility: Visibility):
        self.visibility = visibility
        return self

    def public(self):
        return self.set_visibility(Visibility.PUBLIC)

    def protected(self):
        return self.set_visibility(Visibility.PROTECTED)

    def private(self):
        return self.set_visibility(Visibility.PRIVATE)


class Attribute(Field, VisibilityMixin):
    """A C++ class data member.  Private unless configured otherwise."""

    kind: Literal["attribute"] = "attribute"
    is_static: bool = False
    value: Optional[str] = None

    def set_static(self, value: bool = True) -> "Attribute":
        self.is_static = value
        return self

    def set_value(self, value: str) -> "Attribute":
        """Set the in-class initializer, emitted verbatim after ``=``."""
        self.value = value
        return self

    def render(self, fmt: Formatter) -> None:
        self._render_doc(fmt)
        text = self.declaration()
        if self.is_static:
            text = f"static {text}"
        if self.value is not None:
            text += f" = {self.value}"
        fmt.line(f"{text};")


class Param(NamedEntity):
    """A function or method parameter."""

    type: CType
    default: Optional[str] = None

    def set_default(self, value: str) -> "Param":
        self.default = value
        return self

    def declaration(self) -> str:
        text = self.type.declare(self.name)
        if self.default is not None:
            text += f" = {self.default}"
        return text


class Variable(DocumentedEntity):
    """A global variable.  ``static`` and ``extern`` exclude each other."""

    kind: Literal["variable"] = "variable"
    type: CType
    value: Optional[str] = None
    is_static: bool = False
    is_extern: bool = False

    def set_value(self, value: str) -> "Variable":
        self.value = value
        return self

    def set_static(self, value: bool = True) -> "Variable":
        if value:
            self.is_extern = False
        self.is_static = value
        return self

    def set_extern(self, value: bool = True) -> "Variable":
        if value:
            self.is_static = False
        self.is_extern = value
        return self

    def render(self, fmt: Formatter) -> None:
        self._render_doc(fmt)
        text = self.type.declare(self.name)
        if self.is_extern:
            text = f"extern {text}"
        elif self.is_static:
            text = f"static {text}"
        # extern declarations never carry an initializer
        if self.value is not None and not self.is_extern:
            text += f" = {self.value}"
        fmt.line(f"{text};")
