"""C aggregates: structs, unions and enums.

A struct or union without fields renders as a forward declaration
(``struct Foo;``).  Annotation tags are documentation only; they are emitted
as ``/// @tag`` lines after the doc comment and never change the layout.
"""

from __future__ import annotations

from typing import ClassVar, Literal, Optional

from pydantic import Field as PydanticField

from cgen.decl.base import DocumentedEntity
from cgen.decl.fields import Field
from cgen.formatter import Formatter
from cgen.types import CType, NamedType, TypeTag
from cgen.utils import validate_identifier


class _Record(DocumentedEntity):
    keyword: ClassVar[str] = ""

    fields: list[Field] = PydanticField(default_factory=list)
    annotations: list[str] = PydanticField(default_factory=list)

    def new_field(self, name: str, ty: CType) -> Field:
        """Append a new field and return it for further configuration."""
        field = Field(name=name, type=ty)
        self.fields.append(field)
        return field

    def push_field(self, field: Field):
        self.fields.append(field)
        return self

    def field_by_name(self, name: str) -> Optional[Field]:
        return next((f for f in self.fields if f.name == name), None)

    def field_by_index(self, index: int) -> Optional[Field]:
        if 0 <= index < len(self.fields):
            return self.fields[index]
        return None

    def push_annotation(self, tag: str):
        self.annotations.append(validate_identifier(tag))
        return self

    def to_type(self) -> NamedType:
        """The elaborated type referring to this record (``struct Foo``)."""
        return NamedType(name=self.name, tag=TypeTag(self.keyword))

    def render(self, fmt: Formatter) -> None:
        self._render_doc(fmt)
        for tag in self.annotations:
            fmt.line(f"/// @{tag}")
        header = f"{self.keyword} {self.name}"
        if not self.fields:
            fmt.line(f"{header};")
            return
        fmt.open_block(header)
        for field in self.fields:
            field.render(fmt)
        fmt.close_block(semicolon=True)


class Struct(_Record):
    """A C struct."""

    keyword: ClassVar[str] = "struct"
    kind: Literal["struct"] = "struct"


class Union(_Record):
    """A C union."""

    keyword: ClassVar[str] = "union"
    kind: Literal["union"] = "union"


class Variant(DocumentedEntity):
    """An enumerator, optionally with an explicit value."""

    value: Optional[int] = None

    def set_value(self, value: int) -> "Variant":
        self.value = value
        return self

    def render(self, fmt: Formatter, separator: str = "") -> None:
        self._render_doc(fmt)
        text = self.name if self.value is None else f"{self.name} = {self.value}"
        fmt.line(text + separator)


class Enum(DocumentedEntity):
    """A C enum; variants render one per line, comma separated."""

    kind: Literal["enum"] = "enum"
    variants: list[Variant] = PydanticField(default_factory=list)

    def new_variant(self, name: str, value: Optional[int] = None) -> Variant:
        variant = Variant(name=name, value=value)
        self.variants.append(variant)
        return variant

    def push_variant(self, variant: Variant) -> "Enum":
        self.variants.append(variant)
        return self

    def variant_by_name(self, name: str) -> Optional[Variant]:
        return next((v for v in self.variants if v.name == name), None)

    def to_type(self) -> NamedType:
        return NamedType(name=self.name, tag=TypeTag.ENUM)

    def render(self, fmt: Formatter) -> None:
        self._render_doc(fmt)
        fmt.open_block(f"enum {self.name}")
        last = len(self.variants) - 1
        for index, variant in enumerate(self.variants):
            variant.render(fmt, separator="," if index < last else "")
        fmt.close_block(semicolon=True)
