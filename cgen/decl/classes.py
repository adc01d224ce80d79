"""C++ classes.

Members are kept in a single list in creation order.  Rendering groups them by
visibility: each visibility gets exactly one label, and the groups appear in
the order in which their visibility was first used by a member.  Inside a
group, data members come first, then constructors, the destructor and the
remaining methods.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field as PydanticField, field_validator

from cgen.decl.base import DocumentedEntity
from cgen.decl.fields import Attribute
from cgen.decl.functions import Constructor, Destructor, Method
from cgen.formatter import Formatter
from cgen.types import CType, NamedType, Visibility, void_type
from cgen.utils import validate_identifier

Member = Annotated[
    Union[Attribute, Constructor, Destructor, Method],
    PydanticField(discriminator="kind"),
]

_MEMBER_ORDER = (Attribute, Constructor, Destructor, Method)


class BaseClass(BaseModel):
    """A base-class specifier such as ``public StateBase``."""

    name: str
    visibility: Visibility = Visibility.PUBLIC

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_identifier(value)

    def render(self) -> str:
        return f"{self.visibility.value} {self.name}"


class Class(DocumentedEntity):
    """A C++ class with bases, data members and member functions."""

    kind: Literal["class"] = "class"
    bases: list[BaseClass] = PydanticField(default_factory=list)
    members: list[Member] = PydanticField(default_factory=list)

    def __setattr__(self, name: str, value) -> None:
        super().__setattr__(name, value)
        # constructors and destructors are spelled with the class name
        if name == "name":
            for member in self.members:
                if isinstance(member, (Constructor, Destructor)):
                    member.name = self.name

    # -- bases -------------------------------------------------------------

    def set_base(self, name: str, visibility: Visibility = Visibility.PUBLIC) -> "Class":
        """Replace all base classes with *name*."""
        self.bases = [BaseClass(name=name, visibility=visibility)]
        return self

    def add_base(self, name: str, visibility: Visibility = Visibility.PUBLIC) -> "Class":
        """Append another base class (multiple inheritance)."""
        self.bases.append(BaseClass(name=name, visibility=visibility))
        return self

    # -- members -----------------------------------------------------------

    def new_attribute(self, name: str, ty: CType) -> Attribute:
        attribute = Attribute(name=name, type=ty)
        self.members.append(attribute)
        return attribute

    def push_attribute(self, attribute: Attribute) -> "Class":
        self.members.append(attribute)
        return self

    def new_method(self, name: str, ret: Optional[CType] = None) -> Method:
        method = Method(name=name, return_type=ret or void_type())
        self.members.append(method)
        return method

    def push_method(self, method: Method) -> "Class":
        self.members.append(method)
        return self

    def new_constructor(self) -> Constructor:
        constructor = Constructor(name=self.name)
        self.members.append(constructor)
        return constructor

    def new_destructor(self) -> Destructor:
        """Create the destructor, replacing an earlier one in place."""
        destructor = Destructor(name=self.name)
        for index, member in enumerate(self.members):
            if isinstance(member, Destructor):
                self.members[index] = destructor
                return destructor
        self.members.append(destructor)
        return destructor

    @property
    def attributes(self) -> list[Attribute]:
        return [m for m in self.members if isinstance(m, Attribute)]

    @property
    def methods(self) -> list[Method]:
        return [m for m in self.members if isinstance(m, Method)]

    @property
    def constructors(self) -> list[Constructor]:
        return [m for m in self.members if isinstance(m, Constructor)]

    @property
    def destructor(self) -> Optional[Destructor]:
        return next((m for m in self.members if isinstance(m, Destructor)), None)

    def attribute_by_name(self, name: str) -> Optional[Attribute]:
        return next((a for a in self.attributes if a.name == name), None)

    def method_by_name(self, name: str) -> Optional[Method]:
        return next((m for m in self.methods if m.name == name), None)

    def to_type(self) -> NamedType:
        return NamedType(name=self.name)

    # -- rendering ---------------------------------------------------------

    def visibility_groups(self) -> list[Visibility]:
        """Visibilities in use, in the order they were first introduced."""
        seen: list[Visibility] = []
        for member in self.members:
            if member.visibility not in seen:
                seen.append(member.visibility)
        return seen

    def header(self) -> str:
        text = f"class {self.name}"
        if self.bases:
            text += " : " + ", ".join(base.render() for base in self.bases)
        return text

    def render(self, fmt: Formatter) -> None:
        self._render_doc(fmt)
        fmt.open_block(self.header())
        for group, visibility in enumerate(self.visibility_groups()):
            if group:
                fmt.blank()
            fmt.label(f"{visibility.value}:")
            for member_type in _MEMBER_ORDER:
                for member in self.members:
                    if isinstance(member, member_type) and member.visibility == visibility:
                        member.render(fmt)
        fmt.close_block(semicolon=True)
