"""C/C++ type expressions.

Every type is an immutable Pydantic model tagged with a ``variant`` literal, and
``CType`` is the discriminated union over all of them.  Composite types
(pointers, references, arrays, template instantiations) hold their inner types
by value; because the models are frozen, two declarations can never observe
each other's edits.

Rendering follows C declarator syntax.  ``declare(name)`` builds the
declarator from the outside in, so the innermost type ends up as the base and
every pointer, reference and array wraps the declarator collected so far:

    Pointer(Pointer(int))   -> ``int **``
    Array(Pointer(int), 4)  -> ``int *[4]``      (array of pointers)
    Pointer(Array(int, 4))  -> ``int (*)[4]``    (pointer to array)
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from cgen.utils import print_warning, validate_identifier


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Visibility(str, Enum):
    """C++ access control for class members and base classes."""
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


class PrimitiveKind(str, Enum):
    """Built-in scalar types."""
    VOID = "void"
    BOOL = "bool"
    CHAR = "char"
    INT = "int"
    FLOAT = "float"
    DOUBLE = "double"
    SIZE = "size"
    UINTPTR = "uintptr"


class TypeTag(str, Enum):
    """Elaborated-type keyword placed in front of a named type."""
    STRUCT = "struct"
    UNION = "union"
    ENUM = "enum"


INT_WIDTHS = (8, 16, 32, 64)

_FIXED_NAMES = {
    PrimitiveKind.VOID: "void",
    PrimitiveKind.BOOL: "bool",
    PrimitiveKind.FLOAT: "float",
    PrimitiveKind.DOUBLE: "double",
    PrimitiveKind.SIZE: "size_t",
    PrimitiveKind.UINTPTR: "uintptr_t",
}


# ---------------------------------------------------------------------------
# Declarator helpers
# ---------------------------------------------------------------------------

def _apply_marker(marker: str, declarator: str) -> str:
    """Prefix *declarator* with a pointer or reference marker."""
    if not declarator:
        return marker
    if declarator[0] == "[" or (declarator[0] in "*&" and marker in ("*", "&", "&&")):
        return marker + declarator
    return f"{marker} {declarator}"


def _apply_base(base: str, declarator: str) -> str:
    if not declarator:
        return base
    if declarator[0] == "[":
        return base + declarator
    return f"{base} {declarator}"


def _qualifiers(is_const: bool, is_volatile: bool) -> str:
    quals = []
    if is_const:
        quals.append("const")
    if is_volatile:
        quals.append("volatile")
    return " ".join(quals)


# ---------------------------------------------------------------------------
# Type variants
# ---------------------------------------------------------------------------

class _TypeBase(BaseModel):
    """Behaviour shared by every type variant."""

    model_config = ConfigDict(frozen=True)

    def declare(self, name: str = "") -> str:
        """Render a declaration of *name* with this type.

        With an empty *name* the result is the abstract type (``int *[4]``).
        """
        return self._declare(name)

    def _declare(self, declarator: str) -> str:
        raise NotImplementedError

    def render(self) -> str:
        """Render the type on its own, without a declared name."""
        return self._declare("")

    def __str__(self) -> str:
        return self.render()

    # -- derivations -------------------------------------------------------

    def pointer(self, const: bool = False, volatile: bool = False) -> PointerType:
        """Return a pointer to this type: ``int`` => ``int *``."""
        return PointerType(inner=self, is_const=const, is_volatile=volatile)

    def reference(self, rvalue: bool = False) -> ReferenceType:
        """Return a reference to this type: ``int`` => ``int &`` (``int &&`` for *rvalue*)."""
        return ReferenceType(inner=self, rvalue=rvalue)

    def array(self, size: Optional[int] = None) -> ArrayType:
        """Return an array of this type: ``int`` => ``int[4]``."""
        return ArrayType(inner=self, size=size)

    # -- predicates --------------------------------------------------------

    def is_pointer(self) -> bool:
        return False

    def is_integer(self) -> bool:
        return False


class _QualifiedBase(_TypeBase):
    """Variants that carry value qualifiers in front of the base name."""

    is_const: bool = False
    is_volatile: bool = False

    def const(self):
        """Return a copy qualified ``const``: ``int *`` => ``const int *``."""
        return self.model_copy(update={"is_const": True})

    def volatile(self):
        """Return a copy qualified ``volatile``."""
        return self.model_copy(update={"is_volatile": True})

    def _base_name(self) -> str:
        raise NotImplementedError

    def _declare(self, declarator: str) -> str:
        quals = _qualifiers(self.is_const, self.is_volatile)
        base = f"{quals} {self._base_name()}" if quals else self._base_name()
        return _apply_base(base, declarator)


class PrimitiveType(_QualifiedBase):
    """A built-in scalar such as ``uint64_t``, ``char`` or ``void``."""

    variant: Literal["primitive"] = "primitive"
    kind: PrimitiveKind
    width: Optional[int] = Field(default=None, ge=0, description="Bit width for INT")
    signed: bool = True

    @field_validator("width")
    @classmethod
    def _check_width(cls, value: Optional[int], info: ValidationInfo) -> Optional[int]:
        if info.data.get("kind") != PrimitiveKind.INT:
            return value
        if value not in INT_WIDTHS:
            print_warning(f"Unsupported integer size: {value}. Defaulting to 64 bits")
            return 64
        return value

    def _base_name(self) -> str:
        if self.kind == PrimitiveKind.INT:
            prefix = "int" if self.signed else "uint"
            return f"{prefix}{self.width or 64}_t"
        if self.kind == PrimitiveKind.CHAR:
            return "char" if self.signed else "unsigned char"
        return _FIXED_NAMES[self.kind]

    def is_integer(self) -> bool:
        return self.kind in (
            PrimitiveKind.INT,
            PrimitiveKind.CHAR,
            PrimitiveKind.BOOL,
            PrimitiveKind.SIZE,
            PrimitiveKind.UINTPTR,
        )


class NamedType(_QualifiedBase):
    """A user-defined or library type referred to by name (``Foo``, ``struct Foo``)."""

    variant: Literal["named"] = "named"
    name: str
    tag: Optional[TypeTag] = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_identifier(value)

    def _base_name(self) -> str:
        if self.tag is not None:
            return f"{self.tag.value} {self.name}"
        return self.name


class TemplateType(_QualifiedBase):
    """A template instantiation such as ``std::vector<int>``."""

    variant: Literal["template"] = "template"
    name: str
    args: tuple[CType, ...] = ()

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_identifier(value)

    def _base_name(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}<{', '.join(arg.render() for arg in self.args)}>"


class PointerType(_TypeBase):
    """Pointer to ``inner``.  The qualifiers apply to the pointer itself."""

    variant: Literal["pointer"] = "pointer"
    inner: CType
    is_const: bool = False
    is_volatile: bool = False

    def const(self) -> PointerType:
        """Return a const pointer: ``int *`` => ``int * const``."""
        return self.model_copy(update={"is_const": True})

    def volatile(self) -> PointerType:
        return self.model_copy(update={"is_volatile": True})

    def _declare(self, declarator: str) -> str:
        quals = _qualifiers(self.is_const, self.is_volatile)
        marker = f"* {quals}" if quals else "*"
        return self.inner._declare(_apply_marker(marker, declarator))

    def is_pointer(self) -> bool:
        return True


class ReferenceType(_TypeBase):
    """C++ reference to ``inner``; ``rvalue`` selects ``&&`` over ``&``."""

    variant: Literal["reference"] = "reference"
    inner: CType
    rvalue: bool = False

    def _declare(self, declarator: str) -> str:
        marker = "&&" if self.rvalue else "&"
        return self.inner._declare(_apply_marker(marker, declarator))


class ArrayType(_TypeBase):
    """Array of ``inner`` with an optional fixed size."""

    variant: Literal["array"] = "array"
    inner: CType
    size: Optional[int] = Field(default=None, ge=0)

    def _declare(self, declarator: str) -> str:
        suffix = "[]" if self.size is None else f"[{self.size}]"
        if declarator and declarator[0] in "*&":
            declarator = f"({declarator})"
        return self.inner._declare(declarator + suffix)


CType = Annotated[
    Union[PrimitiveType, NamedType, TemplateType, PointerType, ReferenceType, ArrayType],
    Field(discriminator="variant"),
]

for _model in (TemplateType, PointerType, ReferenceType, ArrayType):
    _model.model_rebuild()


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------

def void_type() -> PrimitiveType:
    return PrimitiveType(kind=PrimitiveKind.VOID)


def bool_type() -> PrimitiveType:
    return PrimitiveType(kind=PrimitiveKind.BOOL)


def char_type(signed: bool = True) -> PrimitiveType:
    return PrimitiveType(kind=PrimitiveKind.CHAR, signed=signed)


def int_type(bits: int = 32) -> PrimitiveType:
    """Signed fixed-width integer, ``int<bits>_t``."""
    return PrimitiveType(kind=PrimitiveKind.INT, width=bits, signed=True)


def uint_type(bits: int = 32) -> PrimitiveType:
    """Unsigned fixed-width integer, ``uint<bits>_t``."""
    return PrimitiveType(kind=PrimitiveKind.INT, width=bits, signed=False)


def size_type() -> PrimitiveType:
    return PrimitiveType(kind=PrimitiveKind.SIZE)


def uintptr_type() -> PrimitiveType:
    return PrimitiveType(kind=PrimitiveKind.UINTPTR)


def float_type() -> PrimitiveType:
    return PrimitiveType(kind=PrimitiveKind.FLOAT)


def double_type() -> PrimitiveType:
    return PrimitiveType(kind=PrimitiveKind.DOUBLE)


def named_type(name: str, tag: Optional[TypeTag] = None) -> NamedType:
    return NamedType(name=name, tag=tag)


def struct_type(name: str) -> NamedType:
    return NamedType(name=name, tag=TypeTag.STRUCT)


def union_type(name: str) -> NamedType:
    return NamedType(name=name, tag=TypeTag.UNION)


def enum_type(name: str) -> NamedType:
    return NamedType(name=name, tag=TypeTag.ENUM)


def template_type(name: str, *args: CType) -> TemplateType:
    return TemplateType(name=name, args=tuple(args))


def cstr_type() -> PointerType:
    """``char *``"""
    return char_type().pointer()


def std_string_type() -> NamedType:
    return NamedType(name="std::string")
