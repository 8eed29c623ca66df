#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from mc_source import SourceRange
from mc_types import Type


# ==========================
# AST definitions
# ==========================
#
# Every node is frozen once the parser returns it. Equality is structural and
# ignores source ranges and declared types, so tests can compare whole trees.


@dataclass(frozen=True)
class Node:
    source_range: Optional[SourceRange] = field(default=None, repr=False, compare=False, kw_only=True)


# --- operators ---

# Precedence of every prefix operator; binds tighter than any binary operator.
# Kept apart from the binary table since it may need revisiting once more
# binary operators (e.g. exponentiation) exist.
UNARY_PRECEDENCE = 10


class UnaryOperator(Enum):
    NOT = "not"
    NEG = "neg"
    FNEG = "fneg"

    @property
    def spelling(self) -> str:
        return {
            UnaryOperator.NOT: "not",
            UnaryOperator.NEG: "-",
            UnaryOperator.FNEG: "-.",
        }[self]

    @property
    def precedence(self) -> int:
        return UNARY_PRECEDENCE


class BinaryOperator(Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    XOR = "xor"
    OR = "or"
    AND = "and"
    SLL = "sll"
    SRL = "srl"
    FADD = "fadd"
    FSUB = "fsub"
    FMUL = "fmul"
    FDIV = "fdiv"
    EQUAL = "equal"
    LESS_OR_EQUAL = "lessOrEqual"

    @property
    def spelling(self) -> str:
        return _BINARY_SPELLINGS[self]

    @property
    def precedence(self) -> int:
        return BINARY_PRECEDENCE[self]


_BINARY_SPELLINGS = {
    BinaryOperator.ADD: "+",
    BinaryOperator.SUB: "-",
    BinaryOperator.MUL: "*",
    BinaryOperator.DIV: "/",
    BinaryOperator.XOR: "lxor",
    BinaryOperator.OR: "lor",
    BinaryOperator.AND: "land",
    BinaryOperator.SLL: "lsl",
    BinaryOperator.SRL: "lsr",
    BinaryOperator.FADD: "+.",
    BinaryOperator.FSUB: "-.",
    BinaryOperator.FMUL: "*.",
    BinaryOperator.FDIV: "/.",
    BinaryOperator.EQUAL: "=",
    BinaryOperator.LESS_OR_EQUAL: "<=",
}

# higher binds tighter
BINARY_PRECEDENCE = {
    BinaryOperator.EQUAL: 1,
    BinaryOperator.LESS_OR_EQUAL: 1,
    BinaryOperator.XOR: 2,
    BinaryOperator.OR: 2,
    BinaryOperator.AND: 2,
    BinaryOperator.ADD: 3,
    BinaryOperator.SUB: 3,
    BinaryOperator.FADD: 3,
    BinaryOperator.FSUB: 3,
    BinaryOperator.MUL: 4,
    BinaryOperator.DIV: 4,
    BinaryOperator.FMUL: 4,
    BinaryOperator.FDIV: 4,
    BinaryOperator.SLL: 6,
    BinaryOperator.SRL: 6,
}


# --- expressions ---

@dataclass(frozen=True)
class BoolLiteral(Node):
    value: bool


@dataclass(frozen=True)
class IntLiteral(Node):
    value: int


@dataclass(frozen=True)
class FloatLiteral(Node):
    value: float


@dataclass(frozen=True)
class UnitLiteral(Node):
    """The value `()`."""
    pass


@dataclass(frozen=True)
class Variable(Node):
    name: str


@dataclass(frozen=True)
class SingleOp(Node):
    operator: UnaryOperator
    operand: "Expr"


@dataclass(frozen=True)
class BinaryOp(Node):
    operator: BinaryOperator
    lhs: "Expr"
    rhs: "Expr"


@dataclass(frozen=True)
class If(Node):
    condition: "Expr"
    then_body: "Expr"
    else_body: Optional["Expr"]  # None: the alternative is unit
    # ranges of the `if` and `else` keywords
    if_range: Optional[SourceRange] = field(default=None, repr=False, compare=False, kw_only=True)
    else_range: Optional[SourceRange] = field(default=None, repr=False, compare=False, kw_only=True)


@dataclass(frozen=True)
class Let(Node):
    """
    `let name = body [in next_body]`.

    Without `in`, next_body is None and the binding ends the enclosing
    sequence.
    """
    name: str
    declared_type: Type = field(compare=False)
    body: "Expr"
    next_body: Optional["Expr"]


@dataclass(frozen=True)
class Argument(Node):
    name: str
    type: Type = field(compare=False)


@dataclass(frozen=True)
class LetRec(Node):
    """`let rec name args... = body [in next_body]`: a (recursive) function definition."""
    name: str
    return_type: Type = field(compare=False)
    args: Tuple[Argument, ...]
    body: "Expr"
    next_body: Optional["Expr"]


@dataclass(frozen=True)
class ArrayGet(Node):
    array: "Expr"
    index: "Expr"


@dataclass(frozen=True)
class ArrayPut(Node):
    array: "Expr"
    index: "Expr"
    value: "Expr"


@dataclass(frozen=True)
class ArrayCreate(Node):
    size: "Expr"
    initial: "Expr"


@dataclass(frozen=True)
class Application(Node):
    callee: "Expr"
    args: Tuple["Expr", ...]


Expr = Union[
    BoolLiteral, IntLiteral, FloatLiteral, UnitLiteral, Variable, SingleOp, BinaryOp, If, Let, LetRec, ArrayGet,
    ArrayPut, ArrayCreate, Application,
]


@dataclass(frozen=True)
class ASTRoot(Node):
    """The expressions of one source text, in evaluation order."""
    expressions: Tuple[Expr, ...]


def children(node: Node) -> Tuple[Node, ...]:
    """Direct sub-nodes of `node`, in source order."""
    if isinstance(node, ASTRoot):
        return node.expressions
    if isinstance(node, (BoolLiteral, IntLiteral, FloatLiteral, UnitLiteral, Variable, Argument)):
        return ()
    if isinstance(node, SingleOp):
        return (node.operand,)
    if isinstance(node, BinaryOp):
        return (node.lhs, node.rhs)
    if isinstance(node, If):
        return tuple(n for n in (node.condition, node.then_body, node.else_body) if n is not None)
    if isinstance(node, Let):
        return tuple(n for n in (node.body, node.next_body) if n is not None)
    if isinstance(node, LetRec):
        tail = (node.body,) if node.next_body is None else (node.body, node.next_body)
        return node.args + tail
    if isinstance(node, ArrayGet):
        return (node.array, node.index)
    if isinstance(node, ArrayPut):
        return (node.array, node.index, node.value)
    if isinstance(node, ArrayCreate):
        return (node.size, node.initial)
    if isinstance(node, Application):
        return (node.callee,) + node.args
    raise TypeError(f"not an AST node: {node!r}")


def walk(node: Node):
    """Yield `node` and all its descendants, parents before children."""
    yield node
    for child in children(node):
        yield from walk(child)
