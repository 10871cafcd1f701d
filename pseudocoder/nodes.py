"""AST node definitions.

The parser builds a tree of these dataclasses and the interpreter walks it
with ``match`` statements over the node classes. Every node records the line
and column where it starts so runtime errors can point back at the source.

Binary operator nodes carry the position of their left operand.


File: nodes.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from pseudocoder.operations import Op


# ---- Expressions ----

@dataclass
class StringLit:
    value: str
    line: int
    column: int


@dataclass
class NumberLit:
    value: int | float
    line: int
    column: int


@dataclass
class BoolLit:
    value: bool
    line: int
    column: int


@dataclass
class Identifier:
    name: str
    line: int
    column: int


@dataclass
class BinaryOp:
    left: Expression
    operator: Op
    right: Expression
    line: int
    column: int


@dataclass
class UnaryOp:
    operator: Op
    operand: Expression
    line: int
    column: int


@dataclass
class CallExpr:
    """A function call used for its value."""
    name: str
    args: list[Expression]
    line: int
    column: int


Expression = Union[StringLit, NumberLit, BoolLit, Identifier, BinaryOp, UnaryOp, CallExpr]


# ---- Statements ----

@dataclass
class Write:
    exprs: list[Expression]
    line: int
    column: int


@dataclass
class Read:
    targets: list[Identifier]
    line: int
    column: int


@dataclass
class Declare:
    """``Definir a, b Como Tipo``. ``declared_type`` is the normalized type name."""
    targets: list[Identifier]
    declared_type: str
    line: int
    column: int


@dataclass
class Assign:
    target: Identifier
    expr: Expression
    line: int
    column: int


@dataclass
class While:
    condition: Expression
    body: list[Statement]
    line: int
    column: int


@dataclass
class If:
    condition: Expression
    then_body: list[Statement]
    else_body: list[Statement]
    line: int
    column: int


@dataclass
class ForCount:
    var: Identifier
    start: Expression
    end: Expression
    step: Expression | None
    body: list[Statement]
    line: int
    column: int


@dataclass
class SwitchCase:
    values: list[Expression]
    body: list[Statement]
    line: int
    column: int


@dataclass
class Switch:
    subject: Expression
    cases: list[SwitchCase]
    default: list[Statement] | None
    line: int
    column: int


@dataclass
class Repeat:
    body: list[Statement]
    condition: Expression
    line: int
    column: int


@dataclass
class Param:
    name: str
    by_reference: bool
    line: int
    column: int


@dataclass
class FunctionDecl:
    """``Funcion [resultado <-] nombre(params) ... FinFuncion``."""
    name: str
    params: list[Param]
    result_var: str | None
    body: list[Statement]
    line: int
    column: int


@dataclass
class Call:
    """A function call used as a statement."""
    name: str
    args: list[Expression]
    line: int
    column: int


Statement = Union[Write, Read, Declare, Assign, While, If, ForCount, Switch, Repeat, Call]


# ---- Program structure ----

@dataclass
class Block:
    """A ``Proceso``/``Algoritmo`` unit."""
    name: Identifier
    body: list[Statement]
    line: int
    column: int


@dataclass
class Program:
    """
    Root of the tree. ``body`` holds exactly one :class:`Block`; function
    declarations live beside it in ``functions``.
    """
    body: list[Block]
    functions: list[FunctionDecl] = field(default_factory=list)
    line: int = 1
    column: int = 1
