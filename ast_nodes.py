"""
Calc AST model
Immutable statement and expression nodes produced by the parser
and consumed by the interpreter
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


class BinaryOperator(Enum):
    """Arithmetic operators, valued by their source symbol"""
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @classmethod
    def from_symbol(cls, symbol: str) -> "BinaryOperator":
        return cls(symbol)


# ============================================================================
# EXPRESSIONS
# ============================================================================

@dataclass(frozen=True)
class IntLiteral:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class VarRef:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class BinaryOp:
    """Binary operation; precedence and associativity live in the tree shape"""
    operator: BinaryOperator
    left: "Expr"
    right: "Expr"

    def __str__(self) -> str:
        return f"{self.left} {self.operator.value} {self.right}"


@dataclass(frozen=True)
class Paren:
    inner: "Expr"

    def __str__(self) -> str:
        return f"({self.inner})"


Expr = Union[IntLiteral, VarRef, BinaryOp, Paren]


# ============================================================================
# STATEMENTS
# ============================================================================

# `line` is source position only; it takes no part in equality

@dataclass(frozen=True)
class Assign:
    name: str
    value_expr: Expr
    line: Optional[int] = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"{self.name} = {self.value_expr}"


@dataclass(frozen=True)
class PrintExpr:
    expr: Expr
    line: Optional[int] = field(default=None, compare=False)

    def __str__(self) -> str:
        return str(self.expr)


@dataclass(frozen=True)
class Blank:
    line: Optional[int] = field(default=None, compare=False)

    def __str__(self) -> str:
        return ""


Statement = Union[Assign, PrintExpr, Blank]


@dataclass(frozen=True)
class Program:
    """Ordered statements; order is execution order"""
    statements: Tuple[Statement, ...] = ()
    filename: str = field(default="<input>", compare=False)

    def __post_init__(self):
        object.__setattr__(self, "statements", tuple(self.statements))

    def __iter__(self):
        return iter(self.statements)

    def __len__(self) -> int:
        return len(self.statements)


# ============================================================================
# CONVENIENCE CONSTRUCTORS
# ============================================================================

def make_binary_op(symbol: str, left: Expr, right: Expr) -> BinaryOp:
    """Build a BinaryOp from an operator symbol ('+', '-', '*', '/')"""
    return BinaryOp(BinaryOperator.from_symbol(symbol), left, right)


def fold_left(operands: List[Expr], symbols: List[str]) -> Expr:
    """
    Fold a same-precedence chain into a left-associated tree.

    fold_left([a, b, c], ['-', '-']) -> BinaryOp(-, BinaryOp(-, a, b), c)
    """
    if len(operands) != len(symbols) + 1:
        raise ValueError("fold_left needs exactly one more operand than operators")

    result = operands[0]
    for symbol, operand in zip(symbols, operands[1:]):
        result = make_binary_op(symbol, result, operand)
    return result


def node_type(node) -> str:
    """Upper-case node kind name, used in traces and AST dumps"""
    names = {
        IntLiteral: "INT_LITERAL",
        VarRef: "VAR_REF",
        BinaryOp: "BINARY_OP",
        Paren: "PAREN",
        Assign: "ASSIGN",
        PrintExpr: "PRINT_EXPR",
        Blank: "BLANK",
        Program: "PROGRAM",
    }
    return names.get(type(node), type(node).__name__.upper())
