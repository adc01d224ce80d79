"""Functions, class methods, constructors and destructors.

Whether a callable renders as a prototype (``int f(int x);``) or a definition
(``int f(int x) {`` ... ``}``) is controlled by ``definition``:

* ``None`` (default): a definition as soon as at least one body line exists.
* ``True``: always a definition; an empty body renders as ``{`` / ``}``.
* ``False``: always a prototype, even if body lines were pushed.

Body lines are plain strings, emitted verbatim, or statements from
``cgen.decl.statements``; the two can be mixed freely.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import Field as PydanticField

from cgen.config import FormatConfig
from cgen.decl.base import DocumentedEntity
from cgen.decl.fields import Param, VisibilityMixin
from cgen.decl.statements import BodyItem, render_body, validate_body_item
from cgen.formatter import Formatter
from cgen.types import CType, NamedType, Visibility, void_type


class _Body(DocumentedEntity):
    body: list[BodyItem] = PydanticField(default_factory=list)
    definition: Optional[bool] = None

    def set_body(self, lines: list[Any]):
        """Replace the body with *lines*: verbatim strings and/or statements."""
        self.body = list(lines)
        return self

    def push_line(self, line: Any):
        """Append a verbatim line or a statement.

        Raises:
            pydantic.ValidationError: If *line* is neither.
        """
        self.body.append(validate_body_item(line))
        return self

    def set_definition(self, value: Optional[bool]):
        self.definition = value
        return self

    def is_definition(self) -> bool:
        if self.definition is not None:
            return self.definition
        return bool(self.body)

    def to_decl(self):
        """Return a body-less prototype copy, e.g. for a header file."""
        return self.model_copy(update={"body": [], "definition": False}, deep=True)

    def _render_signature(self, fmt: Formatter, signature: str) -> None:
        self._render_doc(fmt)
        if not self.is_definition():
            fmt.line(f"{signature};")
            return
        fmt.open_block(signature)
        render_body(fmt, self.body)
        fmt.close_block()


class _Callable(_Body):
    params: list[Param] = PydanticField(default_factory=list)

    def new_param(self, name: str, ty: CType) -> Param:
        """Append a new parameter and return it for further configuration."""
        param = Param(name=name, type=ty)
        self.params.append(param)
        return param

    def push_param(self, param: Param):
        self.params.append(param)
        return self

    def param_by_name(self, name: str) -> Optional[Param]:
        return next((p for p in self.params if p.name == name), None)

    def _param_list(self, config: FormatConfig) -> str:
        if not self.params:
            return "void" if config.void_params else ""
        return ", ".join(param.declaration() for param in self.params)


class Function(_Callable):
    """A free C/C++ function."""

    kind: Literal["function"] = "function"
    return_type: CType = PydanticField(default_factory=void_type)
    is_static: bool = False
    is_inline: bool = False
    is_extern: bool = False

    def set_return_type(self, ty: CType) -> "Function":
        self.return_type = ty
        return self

    def set_static(self, value: bool = True) -> "Function":
        if value:
            self.is_extern = False
        self.is_static = value
        return self

    def set_inline(self, value: bool = True) -> "Function":
        if value:
            self.is_extern = False
        self.is_inline = value
        return self

    def set_extern(self, value: bool = True) -> "Function":
        if value:
            self.is_static = False
            self.is_inline = False
        self.is_extern = value
        return self

    def set_body(self, lines: list[Any]) -> "Function":
        if lines:
            self.is_extern = False
        return super().set_body(lines)

    def push_line(self, line: Any) -> "Function":
        super().push_line(line)
        self.is_extern = False
        return self

    def _specifiers(self) -> list[str]:
        specifiers = []
        if self.is_extern:
            specifiers.append("extern")
        if self.is_static:
            specifiers.append("static")
        if self.is_inline:
            specifiers.append("inline")
        return specifiers

    def _qualifiers(self) -> list[str]:
        return []

    def signature(self, config: FormatConfig | None = None) -> str:
        """The declaration line without the trailing ``;`` or ``{``."""
        config = config or FormatConfig()
        declarator = f"{self.name}({self._param_list(config)})"
        parts = self._specifiers() + [self.return_type.declare(declarator)]
        parts += self._qualifiers()
        return " ".join(parts)

    def render(self, fmt: Formatter) -> None:
        self._render_signature(fmt, self.signature(fmt.config))


class Method(Function, VisibilityMixin):
    """A C++ member function.  Private unless configured otherwise.

    A pure method is always virtual and renders as ``virtual T f() = 0;``;
    pushing body lines clears the pure marker.  Member functions cannot be
    ``extern``.
    """

    kind: Literal["method"] = "method"
    is_extern: Literal[False] = False
    is_virtual: bool = False
    is_pure: bool = False
    is_const: bool = False
    is_override: bool = False

    def set_virtual(self, value: bool = True) -> "Method":
        if not value:
            self.is_pure = False
        self.is_virtual = value
        return self

    def set_pure(self, value: bool = True) -> "Method":
        if value:
            self.is_virtual = True
        self.is_pure = value
        return self

    def set_const(self, value: bool = True) -> "Method":
        self.is_const = value
        return self

    def set_override(self, value: bool = True) -> "Method":
        self.is_override = value
        return self

    def set_extern(self, value: bool = True) -> "Method":
        if value:
            raise ValueError(f"Method '{self.name}' cannot be declared extern")
        return self

    def set_body(self, lines: list[Any]) -> "Method":
        if lines:
            self.is_pure = False
        return super().set_body(lines)

    def push_line(self, line: Any) -> "Method":
        super().push_line(line)
        self.is_pure = False
        return self

    def _specifiers(self) -> list[str]:
        specifiers = []
        if self.is_static:
            specifiers.append("static")
        if self.is_inline:
            specifiers.append("inline")
        if self.is_virtual:
            specifiers.append("virtual")
        return specifiers

    def _qualifiers(self) -> list[str]:
        qualifiers = []
        if self.is_const:
            qualifiers.append("const")
        if self.is_override:
            qualifiers.append("override")
        return qualifiers

    def render(self, fmt: Formatter) -> None:
        if self.is_pure:
            self._render_doc(fmt)
            fmt.line(f"{self.signature(fmt.config)} = 0;")
            return
        super().render(fmt)


class Constructor(_Callable, VisibilityMixin):
    """A class constructor.  ``name`` is the owning class name.

    Copy and move constructors take ``other`` by ``const &`` or ``&&`` ahead
    of any pushed parameters; the parameter type follows the class name, so
    it stays correct after a rename.
    """

    kind: Literal["constructor"] = "constructor"
    visibility: Visibility = Visibility.PUBLIC
    initializers: list[str] = PydanticField(default_factory=list)
    is_explicit: bool = False
    is_default: bool = False
    is_delete: bool = False
    is_copy: bool = False
    is_move: bool = False

    def push_initializer(self, initializer: str) -> "Constructor":
        """Append a member initializer such as ``x_(x)``."""
        self.initializers.append(initializer)
        return self

    def set_explicit(self, value: bool = True) -> "Constructor":
        self.is_explicit = value
        return self

    def set_default(self, value: bool = True) -> "Constructor":
        if value:
            self.is_delete = False
        self.is_default = value
        return self

    def set_delete(self, value: bool = True) -> "Constructor":
        if value:
            self.is_default = False
        self.is_delete = value
        return self

    def set_copy(self, value: bool = True) -> "Constructor":
        """Make this the copy constructor, ``Name(const Name & other)``."""
        if value:
            self.is_move = False
        self.is_copy = value
        return self

    def set_move(self, value: bool = True) -> "Constructor":
        """Make this the move constructor, ``Name(Name && other)``."""
        if value:
            self.is_copy = False
        self.is_move = value
        return self

    def _param_list(self, config: FormatConfig) -> str:
        if not (self.is_copy or self.is_move):
            return super()._param_list(config)
        own = NamedType(name=self.name)
        other = own.reference(rvalue=True) if self.is_move else own.const().reference()
        params = [other.declare("other")]
        params += [param.declaration() for param in self.params]
        return ", ".join(params)

    def is_definition(self) -> bool:
        if self.initializers and self.definition is None:
            return True
        return super().is_definition()

    def render(self, fmt: Formatter) -> None:
        signature = f"{self.name}({self._param_list(fmt.config)})"
        if self.is_explicit:
            signature = f"explicit {signature}"
        if self.is_default or self.is_delete:
            self._render_doc(fmt)
            fmt.line(f"{signature} = {'default' if self.is_default else 'delete'};")
            return
        if self.initializers and self.is_definition():
            signature += f" : {', '.join(self.initializers)}"
        self._render_signature(fmt, signature)


class Destructor(_Body, VisibilityMixin):
    """A class destructor.  ``name`` is the owning class name.

    A pure destructor is always virtual and renders as ``virtual ~Name() = 0;``.
    """

    kind: Literal["destructor"] = "destructor"
    visibility: Visibility = Visibility.PUBLIC
    is_virtual: bool = False
    is_default: bool = False
    is_pure: bool = False

    def set_virtual(self, value: bool = True) -> "Destructor":
        if not value:
            self.is_pure = False
        self.is_virtual = value
        return self

    def set_default(self, value: bool = True) -> "Destructor":
        if value:
            self.is_pure = False
        self.is_default = value
        return self

    def set_pure(self, value: bool = True) -> "Destructor":
        if value:
            self.is_virtual = True
            self.is_default = False
        self.is_pure = value
        return self

    def set_body(self, lines: list[Any]) -> "Destructor":
        if lines:
            self.is_pure = False
        return super().set_body(lines)

    def push_line(self, line: Any) -> "Destructor":
        super().push_line(line)
        self.is_pure = False
        return self

    def render(self, fmt: Formatter) -> None:
        signature = f"~{self.name}()"
        if self.is_virtual:
            signature = f"virtual {signature}"
        if self.is_default or self.is_pure:
            self._render_doc(fmt)
            fmt.line(f"{signature} = {'default' if self.is_default else '0'};")
            return
        self._render_signature(fmt, signature)
