"""Scope -- the root container and builder entry point.

A ``Scope`` is an append-only, ordered log of top-level declarations.  Every
``new_*`` method appends a fresh entity and returns that same object, so the
caller keeps configuring what the scope will render.  ``render`` walks the
items in insertion order against a single ``Formatter`` and never mutates the
tree, so it can be called any number of times with identical results.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union as TypingUnion

from pydantic import BaseModel, ConfigDict, Field as PydanticField, TypeAdapter, field_validator

from cgen.config import FormatConfig
from cgen.decl.aggregates import Enum, Struct, Union
from cgen.decl.base import Doc, Entity
from cgen.decl.classes import Class
from cgen.decl.comments import Comment
from cgen.decl.fields import Variable
from cgen.decl.functions import Function
from cgen.decl.preprocessor import Include, Macro
from cgen.formatter import Formatter
from cgen.types import CType, void_type
from cgen.utils import validate_identifier


# Kinds whose consecutive items are rendered without blank lines in between.
_COMPACT_KINDS = {"include", "macro"}


class IfDef(Entity):
    """A conditional block: ``#ifdef SYM`` or an include guard.

    The guarded declarations live in nested scopes, so anything that can be
    added to a file can be added to either branch.
    """

    kind: Literal["ifdef"] = "ifdef"
    symbol: str
    then: Scope = PydanticField(default_factory=lambda: Scope())
    other: Optional[Scope] = None
    guard: bool = False

    @field_validator("symbol")
    @classmethod
    def _check_symbol(cls, value: str) -> str:
        return validate_identifier(value)

    def then_scope(self) -> Scope:
        return self.then

    def else_scope(self) -> Scope:
        """The ``#else`` branch, created on first access."""
        if self.other is None:
            self.other = Scope()
        return self.other

    def set_guard(self, value: bool = True) -> "IfDef":
        self.guard = value
        return self

    def render(self, fmt: Formatter) -> None:
        if self.guard:
            fmt.line(f"#ifndef {self.symbol}")
            fmt.line(f"#define {self.symbol} 1")
        else:
            fmt.line(f"#ifdef {self.symbol}")
        fmt.blank()
        self.then.render_into(fmt)
        if self.other is not None:
            fmt.blank()
            fmt.line(f"#else // !{self.symbol}")
            fmt.blank()
            self.other.render_into(fmt)
        fmt.blank()
        fmt.line(f"#endif // {self.symbol}")


ScopeItem = Annotated[
    TypingUnion[
        Doc, Comment, Include, Macro, Variable, Struct, Union, Enum, Class, Function, IfDef
    ],
    PydanticField(discriminator="kind"),
]


class Scope(BaseModel):
    """Root builder holding the ordered top-level declarations of one file."""

    model_config = ConfigDict(validate_assignment=True)

    filename: Optional[str] = None
    doc: Optional[Doc] = None
    items: list[ScopeItem] = PydanticField(default_factory=list)

    # -- metadata ----------------------------------------------------------

    def set_filename(self, filename: str) -> "Scope":
        """Record the advisory output filename.  Nothing is written to disk."""
        self.filename = validate_identifier(filename)
        return self

    def push_doc_str(self, text: str) -> "Scope":
        """Append *text* to the file header comment."""
        if self.doc is None:
            self.doc = Doc()
        self.doc.add_text(text)
        return self

    # -- builders ----------------------------------------------------------

    def push(self, item: ScopeItem) -> "Scope":
        """Append an already-built entity.

        Raises:
            pydantic.ValidationError: If *item* cannot appear at file scope
                (a struct field, a parameter, a class member, ...).
        """
        self.items.append(_scope_items.validate_python(item))
        return self

    def new_include(self, path: str, system: bool = False) -> Include:
        include = Include(path=path, system=system)
        self.items.append(include)
        return include

    def new_macro(self, name: str, value: Optional[str] = None) -> Macro:
        macro = Macro(name=name, value=value)
        self.items.append(macro)
        return macro

    def new_variable(self, name: str, ty: CType) -> Variable:
        variable = Variable(name=name, type=ty)
        self.items.append(variable)
        return variable

    def new_struct(self, name: str) -> Struct:
        struct = Struct(name=name)
        self.items.append(struct)
        return struct

    def new_union(self, name: str) -> Union:
        union = Union(name=name)
        self.items.append(union)
        return union

    def new_enum(self, name: str) -> Enum:
        enum = Enum(name=name)
        self.items.append(enum)
        return enum

    def new_class(self, name: str) -> Class:
        cls = Class(name=name)
        self.items.append(cls)
        return cls

    def new_function(self, name: str, ret: Optional[CType] = None) -> Function:
        function = Function(name=name, return_type=ret or void_type())
        self.items.append(function)
        return function

    def new_comment(self, text: str, heading: bool = False) -> Comment:
        comment = Comment(text=text, heading=heading)
        self.items.append(comment)
        return comment

    def new_doc(self, text: str) -> Doc:
        """Append a free-standing ``///`` doc comment."""
        doc = Doc(texts=[text])
        self.items.append(doc)
        return doc

    def new_ifdef(self, symbol: str) -> IfDef:
        ifdef = IfDef(symbol=symbol)
        self.items.append(ifdef)
        return ifdef

    def new_include_guard(self, symbol: str) -> IfDef:
        """Append an ``#ifndef`` / ``#define`` guard and return it."""
        return self.new_ifdef(symbol).set_guard()

    # -- rendering ---------------------------------------------------------

    def render_into(self, fmt: Formatter) -> None:
        """Render the header comment and every item onto *fmt*."""
        if self.doc is not None:
            self.doc.render(fmt)
            fmt.blank(fmt.config.blank_lines)
        previous: Optional[str] = None
        for item in self.items:
            if previous is not None and not (
                item.kind == previous and item.kind in _COMPACT_KINDS
            ):
                fmt.blank(fmt.config.blank_lines)
            item.render(fmt)
            previous = item.kind

    def render(self, config: FormatConfig | None = None) -> str:
        """Return the generated source text, terminated by a newline."""
        fmt = Formatter(config)
        self.render_into(fmt)
        return fmt.getvalue()

    def __str__(self) -> str:
        return self.render()


IfDef.model_rebuild()
Scope.model_rebuild()

_scope_items = TypeAdapter(ScopeItem)
