"""cgen -- a builder API for generating C/C++ source text.

Declarations are assembled in memory through a ``Scope`` and rendered to
formatted source in one call.  The library only emits text; it never parses or
validates the generated program.

Quick usage::

    from cgen import Scope, Visibility, size_type, cstr_type, uint_type

    scope = Scope()
    foo = scope.new_struct("Foo")
    foo.new_field("one", size_type())
    foo.new_field("two", cstr_type())

    cls = scope.new_class("MyClass").set_base("StateBase", Visibility.PUBLIC)
    cls.new_attribute("name", uint_type(64)).public()

    print(scope.render())
"""

from cgen.config import FormatConfig
from cgen.decl import (
    Attribute,
    BaseClass,
    Block,
    Class,
    Comment,
    Constructor,
    Destructor,
    Doc,
    DoWhileLoop,
    Enum,
    Field,
    ForLoop,
    Function,
    IfElse,
    Include,
    Macro,
    Method,
    Param,
    Struct,
    Switch,
    Union,
    Variable,
    Variant,
    WhileLoop,
    binop,
    call,
    num,
    raw,
    string,
    var,
)
from cgen.formatter import Formatter
from cgen.scope import IfDef, Scope
from cgen.types import (
    ArrayType,
    CType,
    NamedType,
    PointerType,
    PrimitiveKind,
    PrimitiveType,
    ReferenceType,
    TemplateType,
    TypeTag,
    Visibility,
    bool_type,
    char_type,
    cstr_type,
    double_type,
    enum_type,
    float_type,
    int_type,
    named_type,
    size_type,
    std_string_type,
    struct_type,
    template_type,
    uint_type,
    uintptr_type,
    union_type,
    void_type,
)
from cgen.utils import CGenWriteError, save_source, write_scope

__all__ = [
    "ArrayType",
    "Attribute",
    "BaseClass",
    "Block",
    "CGenWriteError",
    "CType",
    "Class",
    "Comment",
    "Constructor",
    "Destructor",
    "Doc",
    "DoWhileLoop",
    "Enum",
    "Field",
    "ForLoop",
    "FormatConfig",
    "Formatter",
    "Function",
    "IfDef",
    "IfElse",
    "Include",
    "Macro",
    "Method",
    "NamedType",
    "Param",
    "PointerType",
    "PrimitiveKind",
    "PrimitiveType",
    "ReferenceType",
    "Scope",
    "Struct",
    "Switch",
    "TemplateType",
    "TypeTag",
    "Union",
    "Variable",
    "Variant",
    "Visibility",
    "WhileLoop",
    "binop",
    "bool_type",
    "call",
    "char_type",
    "cstr_type",
    "double_type",
    "enum_type",
    "float_type",
    "int_type",
    "named_type",
    "num",
    "raw",
    "save_source",
    "size_type",
    "std_string_type",
    "string",
    "struct_type",
    "template_type",
    "uint_type",
    "uintptr_type",
    "union_type",
    "var",
    "void_type",
    "write_scope",
]
