"""Declaration entities -- one Pydantic model per C/C++ construct.

Each entity renders itself onto a ``Formatter``; ``str(entity)`` renders it
stand-alone with the default configuration.  Function bodies can be built from
the statement and expression models in ``cgen.decl.statements``.
"""

from cgen.decl.aggregates import Enum, Struct, Union, Variant
from cgen.decl.base import Doc, DocumentedEntity, Entity, NamedEntity
from cgen.decl.classes import BaseClass, Class
from cgen.decl.comments import Comment
from cgen.decl.fields import Attribute, Field, Param, Variable
from cgen.decl.functions import Constructor, Destructor, Function, Method
from cgen.decl.preprocessor import Include, Macro
from cgen.decl.statements import (
    Assign,
    BinOp,
    Block,
    Call,
    DoWhileLoop,
    ExprStmt,
    ForLoop,
    IfElse,
    Jump,
    Label,
    RawExpr,
    Return,
    Switch,
    Var,
    WhileLoop,
    as_expr,
    binop,
    call,
    not_,
    num,
    raw,
    string,
    this,
    var,
)

__all__ = [
    "Assign",
    "Attribute",
    "BaseClass",
    "BinOp",
    "Block",
    "Call",
    "Class",
    "Comment",
    "Constructor",
    "Destructor",
    "Doc",
    "DocumentedEntity",
    "DoWhileLoop",
    "Entity",
    "Enum",
    "ExprStmt",
    "Field",
    "ForLoop",
    "Function",
    "IfElse",
    "Include",
    "Jump",
    "Label",
    "Macro",
    "Method",
    "NamedEntity",
    "Param",
    "RawExpr",
    "Return",
    "Struct",
    "Switch",
    "Union",
    "Var",
    "Variable",
    "Variant",
    "WhileLoop",
    "as_expr",
    "binop",
    "call",
    "not_",
    "num",
    "raw",
    "string",
    "this",
    "var",
]
