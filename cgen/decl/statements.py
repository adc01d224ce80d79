"""Structured function bodies: expressions and statements.

Body lines can be plain strings (emitted verbatim) or statement entities from
this module, freely mixed.  Statements render onto the same ``Formatter`` as
every other entity, so nested blocks pick up the surrounding indentation.

Expressions are frozen models like the types in ``cgen.types``.  Wherever an
expression is expected, a ``str`` is accepted as raw text, an ``int`` as a
number and a ``bool`` as ``true`` / ``false``::

    body = Block()
    body.new_variable("total", int_type()).set_value("0")
    loop = body.new_for("size_t i = 0", binop("i", "<", "n"), "i++")
    loop.body.assign("total", binop("total", "+", var("xs").index("i")), op="+=")
    body.return_value("total")
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field as PydanticField,
    TypeAdapter,
    field_validator,
    model_validator,
)

from cgen.decl.base import Entity
from cgen.decl.comments import Comment
from cgen.decl.fields import Variable
from cgen.formatter import Formatter
from cgen.types import CType
from cgen.utils import validate_identifier


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

def _coerce_expr(value: Any) -> Any:
    if isinstance(value, bool):
        return BoolLit(value=value)
    if isinstance(value, int):
        return NumLit(value=value)
    if isinstance(value, str):
        return RawExpr(text=value)
    return value


def _wrap(expr: "_ExprBase") -> str:
    """Parenthesise compound operands."""
    if isinstance(expr, BinOp):
        return f"({expr.render()})"
    return expr.render()


class _ExprBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    def render(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()

    def is_pointer(self) -> bool:
        return False

    # -- derivations -------------------------------------------------------

    def attr(self, name: str) -> FieldAccess:
        """``x.name``, or ``x->name`` when this expression is a pointer."""
        return FieldAccess(target=self, name=name)

    def method_call(self, method: str, *args: Any) -> MethodCall:
        return MethodCall(target=self, method=method, args=tuple(args))

    def index(self, position: Any) -> Index:
        return Index(target=self, position=position)

    def deref(self) -> Deref:
        return Deref(inner=self)

    def address(self) -> AddrOf:
        return AddrOf(inner=self)


class RawExpr(_ExprBase):
    """Expression text emitted verbatim."""

    variant: Literal["raw"] = "raw"
    text: str
    pointer: bool = False

    def render(self) -> str:
        return self.text

    def is_pointer(self) -> bool:
        return self.pointer


class Var(_ExprBase):
    """A named variable; its type decides between ``.`` and ``->``."""

    variant: Literal["var"] = "var"
    name: str
    type: Optional[CType] = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_identifier(value)

    def render(self) -> str:
        return self.name

    def is_pointer(self) -> bool:
        return self.type is not None and self.type.is_pointer()


class NumLit(_ExprBase):
    variant: Literal["num"] = "num"
    value: int

    def render(self) -> str:
        return str(self.value)


class StrLit(_ExprBase):
    """A C string literal; quotes, backslashes and control characters are escaped."""

    variant: Literal["str"] = "str"
    value: str

    def render(self) -> str:
        escaped = (
            self.value.replace("\\", "\\\\")
            .replace('"', '\\"')
            .replace("\n", "\\n")
            .replace("\t", "\\t")
        )
        return f'"{escaped}"'


class BoolLit(_ExprBase):
    variant: Literal["bool"] = "bool"
    value: bool

    def render(self) -> str:
        return "true" if self.value else "false"


class Call(_ExprBase):
    """A free function call ``name(a, b)``."""

    variant: Literal["call"] = "call"
    name: str
    args: tuple[Expr, ...] = ()

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_identifier(value)

    def render(self) -> str:
        return f"{self.name}({', '.join(arg.render() for arg in self.args)})"


def _member_target(target: _ExprBase, arrow: Optional[bool]) -> str:
    text = target.render()
    if isinstance(target, (BinOp, UnOp, Deref, AddrOf)):
        text = f"({text})"
    use_arrow = target.is_pointer() if arrow is None else arrow
    return text + ("->" if use_arrow else ".")


class FieldAccess(_ExprBase):
    """Member access; ``arrow`` of ``None`` follows ``target.is_pointer()``."""

    variant: Literal["field"] = "field"
    target: Expr
    name: str
    arrow: Optional[bool] = None

    def render(self) -> str:
        return _member_target(self.target, self.arrow) + self.name


class MethodCall(_ExprBase):
    variant: Literal["method_call"] = "method_call"
    target: Expr
    method: str
    args: tuple[Expr, ...] = ()
    arrow: Optional[bool] = None

    def render(self) -> str:
        args = ", ".join(arg.render() for arg in self.args)
        return f"{_member_target(self.target, self.arrow)}{self.method}({args})"


class Index(_ExprBase):
    variant: Literal["index"] = "index"
    target: Expr
    position: Expr

    def render(self) -> str:
        return f"{_wrap(self.target)}[{self.position.render()}]"


class Deref(_ExprBase):
    variant: Literal["deref"] = "deref"
    inner: Expr

    def render(self) -> str:
        return f"*{_wrap(self.inner)}"


class AddrOf(_ExprBase):
    variant: Literal["addr_of"] = "addr_of"
    inner: Expr

    def render(self) -> str:
        return f"&{_wrap(self.inner)}"

    def is_pointer(self) -> bool:
        return True


class BinOp(_ExprBase):
    """``lhs op rhs``; nested binary operands are parenthesised."""

    variant: Literal["binop"] = "binop"
    lhs: Expr
    op: str
    rhs: Expr

    def render(self) -> str:
        return f"{_wrap(self.lhs)} {self.op} {_wrap(self.rhs)}"


class UnOp(_ExprBase):
    variant: Literal["unop"] = "unop"
    op: str
    inner: Expr

    def render(self) -> str:
        return f"{self.op}{_wrap(self.inner)}"


Expr = Annotated[
    Union[
        RawExpr, Var, NumLit, StrLit, BoolLit, Call, FieldAccess, MethodCall,
        Index, Deref, AddrOf, BinOp, UnOp,
    ],
    BeforeValidator(_coerce_expr),
]

for _model in (Var, Call, FieldAccess, MethodCall, Index, Deref, AddrOf, BinOp, UnOp):
    _model.model_rebuild()

_exprs = TypeAdapter(Expr)


def as_expr(value: Any) -> _ExprBase:
    """Coerce *value* (expression, ``str``, ``int`` or ``bool``) to an expression."""
    return _exprs.validate_python(value)


def raw(text: str) -> RawExpr:
    return RawExpr(text=text)


def var(name: str, ty: Optional[CType] = None) -> Var:
    return Var(name=name, type=ty)


def num(value: int) -> NumLit:
    return NumLit(value=value)


def string(value: str) -> StrLit:
    return StrLit(value=value)


def call(name: str, *args: Any) -> Call:
    return Call(name=name, args=tuple(args))


def binop(lhs: Any, op: str, rhs: Any) -> BinOp:
    return BinOp(lhs=lhs, op=op, rhs=rhs)


def not_(inner: Any) -> UnOp:
    return UnOp(op="!", inner=inner)


def this() -> RawExpr:
    """The C++ ``this`` pointer."""
    return RawExpr(text="this", pointer=True)


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


class Return(Entity):
    kind: Literal["return"] = "return"
    value: Optional[Expr] = None

    def render(self, fmt: Formatter) -> None:
        fmt.line("return;" if self.value is None else f"return {self.value.render()};")


class Assign(Entity):
    """``lhs = rhs;`` or a compound assignment such as ``lhs += rhs;``."""

    kind: Literal["assign"] = "assign"
    lhs: Expr
    rhs: Expr
    op: str = "="

    def render(self, fmt: Formatter) -> None:
        fmt.line(f"{self.lhs.render()} {self.op} {self.rhs.render()};")


class ExprStmt(Entity):
    """An expression evaluated for its side effects (usually a call)."""

    kind: Literal["expr"] = "expr"
    expr: Expr

    def render(self, fmt: Formatter) -> None:
        fmt.line(f"{self.expr.render()};")


class Jump(Entity):
    kind: Literal["jump"] = "jump"
    keyword: Literal["break", "continue", "goto"]
    target: Optional[str] = None

    @model_validator(mode="after")
    def _check_target(self) -> "Jump":
        if self.keyword == "goto" and not self.target:
            raise ValueError("goto requires a target label")
        return self

    def render(self, fmt: Formatter) -> None:
        if self.keyword == "goto":
            fmt.line(f"goto {self.target};")
        else:
            fmt.line(f"{self.keyword};")


class Label(Entity):
    """A ``goto`` target, outdented one level like access labels."""

    kind: Literal["label"] = "label"
    name: str

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_identifier(value)

    def render(self, fmt: Formatter) -> None:
        fmt.label(f"{self.name}:")


def render_body(fmt: Formatter, items: list) -> None:
    """Render body items: strings verbatim, statements through ``render``."""
    for item in items:
        if isinstance(item, str):
            fmt.line(item)
        else:
            item.render(fmt)


class Block(Entity):
    """An ordered list of statements.

    The ``new_*`` builders append a statement and return it; the remaining
    builders return the block for chaining.  A block nested in another block
    renders its statements in place, without braces.
    """

    kind: Literal["block"] = "block"
    stmts: list[BodyItem] = PydanticField(default_factory=list)

    def is_empty(self) -> bool:
        return not self.stmts

    def push(self, stmt: BodyItem) -> "Block":
        """Append a statement or a verbatim line."""
        self.stmts.append(_body_items.validate_python(stmt))
        return self

    def raw(self, text: str) -> "Block":
        self.stmts.append(text)
        return self

    def empty_line(self) -> "Block":
        self.stmts.append("")
        return self

    def new_comment(self, text: str) -> Comment:
        comment = Comment(text=text)
        self.stmts.append(comment)
        return comment

    def new_variable(self, name: str, ty: CType) -> Variable:
        variable = Variable(name=name, type=ty)
        self.stmts.append(variable)
        return variable

    def assign(self, lhs: Any, rhs: Any, op: str = "=") -> "Block":
        self.stmts.append(Assign(lhs=lhs, rhs=rhs, op=op))
        return self

    def expr(self, expr: Any) -> "Block":
        self.stmts.append(ExprStmt(expr=expr))
        return self

    def call(self, name: str, *args: Any) -> "Block":
        return self.expr(Call(name=name, args=tuple(args)))

    def method_call(self, target: Any, method: str, *args: Any) -> "Block":
        return self.expr(MethodCall(target=target, method=method, args=tuple(args)))

    def return_value(self, value: Any = None) -> "Block":
        self.stmts.append(Return(value=value))
        return self

    def break_stmt(self) -> "Block":
        self.stmts.append(Jump(keyword="break"))
        return self

    def continue_stmt(self) -> "Block":
        self.stmts.append(Jump(keyword="continue"))
        return self

    def goto(self, target: str) -> "Block":
        self.stmts.append(Jump(keyword="goto", target=target))
        return self

    def label(self, name: str) -> "Block":
        self.stmts.append(Label(name=name))
        return self

    def new_if(self, cond: Any) -> IfElse:
        stmt = IfElse(cond=cond)
        self.stmts.append(stmt)
        return stmt

    def new_while(self, cond: Any) -> WhileLoop:
        stmt = WhileLoop(cond=cond)
        self.stmts.append(stmt)
        return stmt

    def new_do_while(self, cond: Any) -> DoWhileLoop:
        stmt = DoWhileLoop(cond=cond)
        self.stmts.append(stmt)
        return stmt

    def new_for(self, init: Any = None, cond: Any = None, step: Any = None) -> ForLoop:
        stmt = ForLoop(init=init, cond=cond, step=step)
        self.stmts.append(stmt)
        return stmt

    def new_switch(self, cond: Any) -> Switch:
        stmt = Switch(cond=cond)
        self.stmts.append(stmt)
        return stmt

    def render(self, fmt: Formatter) -> None:
        render_body(fmt, self.stmts)


class Branch(BaseModel):
    """One ``else if`` arm of an ``IfElse``."""

    cond: Expr
    body: Block = PydanticField(default_factory=Block)


class IfElse(Entity):
    """``if`` with optional ``else if`` arms and a final ``else``."""

    kind: Literal["if"] = "if"
    cond: Expr
    then: Block = PydanticField(default_factory=Block)
    elifs: list[Branch] = PydanticField(default_factory=list)
    other: Optional[Block] = None

    def then_block(self) -> Block:
        return self.then

    def new_else_if(self, cond: Any) -> Block:
        """Append an ``else if (cond)`` arm and return its body."""
        branch = Branch(cond=cond)
        self.elifs.append(branch)
        return branch.body

    def else_block(self) -> Block:
        """The ``else`` body, created on first access."""
        if self.other is None:
            self.other = Block()
        return self.other

    def render(self, fmt: Formatter) -> None:
        fmt.open_block(f"if ({self.cond.render()})")
        self.then.render(fmt)
        for branch in self.elifs:
            fmt.reopen_block(f"else if ({branch.cond.render()})")
            branch.body.render(fmt)
        if self.other is not None:
            fmt.reopen_block("else")
            self.other.render(fmt)
        fmt.close_block()


class WhileLoop(Entity):
    kind: Literal["while"] = "while"
    cond: Expr
    body: Block = PydanticField(default_factory=Block)

    def render(self, fmt: Formatter) -> None:
        fmt.open_block(f"while ({self.cond.render()})")
        self.body.render(fmt)
        fmt.close_block()


class DoWhileLoop(Entity):
    kind: Literal["do_while"] = "do_while"
    cond: Expr
    body: Block = PydanticField(default_factory=Block)

    def render(self, fmt: Formatter) -> None:
        fmt.open_block("do")
        self.body.render(fmt)
        fmt.close_block(token=f"}} while ({self.cond.render()});")


class ForLoop(Entity):
    """``for (init; cond; step)``; any of the three clauses may be omitted."""

    kind: Literal["for"] = "for"
    init: Optional[Expr] = None
    cond: Optional[Expr] = None
    step: Optional[Expr] = None
    body: Block = PydanticField(default_factory=Block)

    def header(self) -> str:
        init = self.init.render() if self.init is not None else ""
        cond = f" {self.cond.render()}" if self.cond is not None else ""
        step = f" {self.step.render()}" if self.step is not None else ""
        return f"for ({init};{cond};{step})"

    def render(self, fmt: Formatter) -> None:
        fmt.open_block(self.header())
        self.body.render(fmt)
        fmt.close_block()


class Case(BaseModel):
    """A ``case`` arm; ``break;`` is appended unless ``fallthrough`` is set."""

    label: Expr
    body: Block = PydanticField(default_factory=Block)
    fallthrough: bool = False


class Switch(Entity):
    kind: Literal["switch"] = "switch"
    cond: Expr
    cases: list[Case] = PydanticField(default_factory=list)
    default: Optional[Block] = None

    def new_case(self, label: Any, fallthrough: bool = False) -> Block:
        """Append a ``case label:`` arm and return its body."""
        case = Case(label=label, fallthrough=fallthrough)
        self.cases.append(case)
        return case.body

    def default_block(self) -> Block:
        if self.default is None:
            self.default = Block()
        return self.default

    def render(self, fmt: Formatter) -> None:
        fmt.open_block(f"switch ({self.cond.render()})")
        for case in self.cases:
            fmt.label(f"case {case.label.render()}:")
            case.body.render(fmt)
            if not case.fallthrough:
                fmt.line("break;")
        if self.default is not None:
            fmt.label("default:")
            self.default.render(fmt)
        fmt.close_block()


Statement = Annotated[
    Union[
        Return, Assign, ExprStmt, Jump, Label, Variable, Comment, Block, IfElse,
        WhileLoop, DoWhileLoop, ForLoop, Switch,
    ],
    PydanticField(discriminator="kind"),
]

BodyItem = Union[str, Statement]

for _model in (Return, Assign, ExprStmt, Block, Branch, IfElse, WhileLoop, DoWhileLoop, ForLoop, Case, Switch):
    _model.model_rebuild()

_body_items = TypeAdapter(BodyItem)


def validate_body_item(item: Any) -> Any:
    """Check that *item* can appear in a body, returning it unchanged."""
    return _body_items.validate_python(item)
