"""Interpreter.

This is a tree-walk interpreter for evaluating the AST produced by the
parser. It supports declarations, assignment, console input and output,
arithmetic, text concatenation, comparisons, logical operators, conditionals,
the three loop forms, multi-way branches and user-defined functions.

1. Execution Model
The interpreter evaluates an abstract syntax tree in a top-down, recursive
manner. Statements are executed via `execute()`, and expressions are
evaluated using `eval_expr()`. Every statement sequence is run in two passes:
all `Definir` statements first, in source order, then everything else. This
way a variable has its default value no matter where it is declared.

2. Environment
A run owns one :class:`Environment`, a flat mapping from variable name to
runtime value. It is created empty when `evaluate()` starts and dropped when
it returns. A function call gets a fresh environment of its own for the
duration of the call.

3. Input
`Leer` takes values from the pre-supplied input list first, then from the
optional `input_provider` callback. When neither yields a line the target
keeps its previous value (or stays unset) and a warning is logged.

4. Operators
`+` concatenates whenever either operand is text; every other arithmetic
operator requires two numbers. Both policies live in
:meth:`Interpreter.binary_op` so operand kinds are checked in one place.

5. Error Handling
Runtime errors such as undefined variables, operands of the wrong kind or a
division by zero are raised as :class:`ExecutionError` subclasses carrying
the source position. Results past the float range and integers too long to
print are reported the same way, at the operator or the written expression. Output produced before the error is kept in
`self.output` so the runner can show it.


File: interpreter.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging
import math
from collections import deque
from typing import Callable, Iterable, Optional

from pseudocoder.exceptions import (
    ConditionTypeException,
    DivisionByZeroException,
    ExecutionError,
    FunctionCallException,
    LoopLimitException,
    OperandTypeException,
    UndefinedVariableException,
    UnknownOpException,
)
from pseudocoder.nodes import (
    Assign,
    BinaryOp,
    BoolLit,
    Call,
    CallExpr,
    Declare,
    ForCount,
    FunctionDecl,
    Identifier,
    If,
    NumberLit,
    Program,
    Read,
    Repeat,
    StringLit,
    Switch,
    UnaryOp,
    While,
    Write,
)
from pseudocoder.operations import EQUALITY, LOGICAL, ORDERING, Op
from pseudocoder.values import (
    UNSET,
    Unset,
    Value,
    coerce_input,
    concat_text,
    default_for_type,
    format_value,
    kind_name,
    normalize_number,
)

logger = logging.getLogger(__name__)

InputProvider = Callable[[str], Optional[str]]

TOO_LARGE_TO_SHOW = "Numero demasiado grande para mostrarse"


class Environment:
    """Flat mapping from variable name to runtime value."""

    def __init__(self):
        self.vars: dict[str, Value] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.vars

    def declare(self, name: str, default: Value) -> bool:
        """
        Bind ``name`` to ``default`` unless it is already bound.

        Returns:
            bool: True if the variable was newly bound.
        """
        if name in self.vars:
            return False
        self.vars[name] = default
        return True

    def assign(self, name: str, value: Value) -> None:
        self.vars[name] = value

    def lookup(self, node: Identifier) -> Value:
        """
        Return the value bound to an identifier node.

        Raises:
            UndefinedVariableException: If the name is not bound.
        """
        if node.name not in self:
            raise UndefinedVariableException(node.name, node.line, node.column)
        return self.vars[node.name]

    def get(self, name: str, default: Value = UNSET) -> Value:
        return self.vars.get(name, default)


class Interpreter:
    """Tree-walk interpreter for pseudocode programs."""

    def __init__(
        self,
        input_provider: InputProvider | None = None,
        max_iterations: int | None = None,
    ):
        """
        Initialize the interpreter.

        Parameters:
            input_provider: Called with the variable name when ``Leer`` runs
                out of pre-supplied input. Returns the line typed, or None
                when the input was cancelled.
            max_iterations: Optional cap on the iterations of any single loop.
        """
        self.input_provider = input_provider
        self.max_iterations = max_iterations
        self.env = Environment()
        self.functions: dict[str, FunctionDecl] = {}
        self.inputs: deque[str] = deque()
        self.output: list[str] = []
        self.warnings: list[str] = []

    def evaluate(self, program: Program, inputs: Iterable[str] | None = None) -> str:
        """
        Run a program and return its output.

        Parameters:
            program (Program): The parsed program.
            inputs: Lines consumed one per ``Leer`` target, in order.

        Returns:
            str: The lines written by the program, trailing whitespace trimmed.

        Raises:
            ExecutionError: On the first runtime error. ``self.output`` keeps
                whatever was written before it.
        """
        self.env = Environment()
        self.inputs = deque(inputs or [])
        self.output = []
        self.warnings = []
        self.functions = {}
        for func in program.functions:
            if func.name in self.functions:
                raise FunctionCallException(
                    f"La funcion '{func.name}' esta declarada mas de una vez",
                    func.line, func.column,
                )
            self.functions[func.name] = func

        for block in program.body:
            logger.debug("running block '%s'", block.name.name)
            self.execute(block.body)
        return self.output_text()

    def output_text(self) -> str:
        """
        Return the output produced so far.
        """
        return "\n".join(self.output).rstrip()

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def eval_expr(self, node) -> Value:
        """
        Recursively evaluate an expression node and return its computed value.

        Raises:
            UndefinedVariableException: If a variable is referenced that has not been defined.
            OperandTypeException: If an operator gets operands of the wrong kind.
            DivisionByZeroException: On division or modulo by zero.
        """
        match node:
            case StringLit() | NumberLit() | BoolLit():
                return node.value
            case Identifier():
                return self.env.lookup(node)
            case UnaryOp():
                return self.unary_op(node)
            case BinaryOp():
                return self.binary_op(node)
            case CallExpr():
                func = self._resolve_function(node.name, node.line, node.column)
                if func.result_var is None:
                    raise FunctionCallException(
                        f"La funcion '{node.name}' no devuelve ningun valor",
                        node.line, node.column,
                    )
                return self.call_function(func, node.args, node.line, node.column)
        raise RuntimeError(f"Invalid expression node: {node!r}")

    def unary_op(self, node: UnaryOp) -> Value:
        """
        Evaluate ``NO``, unary minus and unary plus.
        """
        operand = self.eval_expr(node.operand)
        match node.operator:
            case Op.NOT:
                if isinstance(operand, bool):
                    return not operand
            case Op.SUB:
                if _is_number(operand):
                    return -operand
            case Op.ADD:
                if _is_number(operand):
                    return operand
            case _:
                raise UnknownOpException(node.operator.value, node.line, node.column)
        raise OperandTypeException(
            node.operator.value, kind_name(operand), None, node.line, node.column
        )

    def binary_op(self, node: BinaryOp) -> Value:
        """
        Evaluate a binary operator node.

        ``Y``/``O`` short-circuit: the right operand is only evaluated when
        the left one does not decide the result.
        """
        op = node.operator
        lhs = self.eval_expr(node.left)

        if op in LOGICAL:
            self._require_logical(op, lhs, None, node)
            if (op == Op.AND and not lhs) or (op == Op.OR and lhs):
                return lhs
            rhs = self.eval_expr(node.right)
            self._require_logical(op, lhs, rhs, node)
            return rhs

        rhs = self.eval_expr(node.right)
        if op == Op.ADD:
            return self._add(lhs, rhs, node)
        if op in EQUALITY:
            return self._equality(op, lhs, rhs, node)
        if op in ORDERING:
            return self._ordering(op, lhs, rhs, node)
        return self._arithmetic(op, lhs, rhs, node)

    def _add(self, lhs: Value, rhs: Value, node: BinaryOp) -> Value:
        """Text wins: concatenate if either side is text, else add numbers."""
        match lhs, rhs:
            case (str(), _) | (_, str()):
                try:
                    return concat_text(lhs) + concat_text(rhs)
                except ValueError as e:
                    raise ExecutionError(TOO_LARGE_TO_SHOW, node.line, node.column) from e
            case (bool(), _) | (_, bool()):
                pass
            case (int() | float(), int() | float()):
                try:
                    return normalize_number(lhs + rhs)
                except OverflowError as e:
                    raise _out_of_range(Op.ADD, node) from e
        raise OperandTypeException(
            Op.ADD.value, kind_name(lhs), kind_name(rhs), node.line, node.column
        )

    def _arithmetic(self, op: Op, lhs: Value, rhs: Value, node: BinaryOp) -> Value:
        """Numbers only: both operands must be numbers."""
        if not (_is_number(lhs) and _is_number(rhs)):
            raise OperandTypeException(
                op.value, kind_name(lhs), kind_name(rhs), node.line, node.column
            )
        if op in (Op.DIV, Op.MOD) and rhs == 0:
            raise DivisionByZeroException(op.value, node.line, node.column)
        # A huge integer mixed with a float, or a float power past the float
        # range, overflows. 0 ^ -1 divides by zero.
        try:
            match op:
                case Op.SUB:
                    result = lhs - rhs
                case Op.MUL:
                    result = lhs * rhs
                case Op.DIV:
                    result = lhs / rhs
                case Op.MOD:
                    result = math.fmod(lhs, rhs)
                case Op.POW:
                    result = lhs ** rhs
                case _:
                    raise UnknownOpException(op.value, node.line, node.column)
        except (OverflowError, ZeroDivisionError) as e:
            raise _out_of_range(op, node) from e
        if isinstance(result, complex):
            raise ExecutionError(
                f"Resultado no real en '{op.value}'", node.line, node.column
            )
        return normalize_number(result)

    def _equality(self, op: Op, lhs: Value, rhs: Value, node: BinaryOp) -> bool:
        if _same_kind(lhs, rhs):
            equal = lhs == rhs
            return equal if op == Op.EQ else not equal
        raise OperandTypeException(
            op.value, kind_name(lhs), kind_name(rhs), node.line, node.column
        )

    def _ordering(self, op: Op, lhs: Value, rhs: Value, node: BinaryOp) -> bool:
        comparable = (
            (_is_number(lhs) and _is_number(rhs))
            or (isinstance(lhs, str) and isinstance(rhs, str))
        )
        if not comparable:
            raise OperandTypeException(
                op.value, kind_name(lhs), kind_name(rhs), node.line, node.column
            )
        match op:
            case Op.LT:
                return lhs < rhs
            case Op.GT:
                return lhs > rhs
            case Op.LE:
                return lhs <= rhs
            case Op.GE:
                return lhs >= rhs
        raise UnknownOpException(op.value, node.line, node.column)

    def _require_logical(self, op: Op, lhs: Value, rhs, node: BinaryOp) -> None:
        if not isinstance(lhs, bool) or (rhs is not None and not isinstance(rhs, bool)):
            raise OperandTypeException(
                op.value,
                kind_name(lhs),
                kind_name(rhs) if rhs is not None else None,
                node.line,
                node.column,
            )

    def condition(self, node) -> bool:
        """
        Evaluate a loop or branch condition, which must be a logical value.
        """
        value = self.eval_expr(node)
        if not isinstance(value, bool):
            raise ConditionTypeException(kind_name(value), node.line, node.column)
        return value

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def execute(self, statements: list) -> None:
        """
        Execute a statement sequence: declarations first, then the rest.
        """
        for stmt in statements:
            if isinstance(stmt, Declare):
                self.exec_declare(stmt)
        for stmt in statements:
            if not isinstance(stmt, Declare):
                self.exec_statement(stmt)

    def exec_statement(self, stmt) -> None:
        """
        Execute a single non-declaration statement.
        """
        match stmt:
            case Write():
                parts = []
                for expr in stmt.exprs:
                    value = self.eval_expr(expr)
                    try:
                        parts.append(format_value(value))
                    except ValueError as e:
                        raise ExecutionError(TOO_LARGE_TO_SHOW, expr.line, expr.column) from e
                self.output.append("".join(parts))
            case Read():
                self.exec_read(stmt)
            case Assign():
                self.env.assign(stmt.target.name, self.eval_expr(stmt.expr))
            case While():
                iterations = 0
                while self.condition(stmt.condition):
                    iterations = self._count_iteration(iterations, stmt)
                    self.execute(stmt.body)
            case Repeat():
                iterations = 0
                while True:
                    iterations = self._count_iteration(iterations, stmt)
                    self.execute(stmt.body)
                    if self.condition(stmt.condition):
                        break
            case If():
                if self.condition(stmt.condition):
                    self.execute(stmt.then_body)
                else:
                    self.execute(stmt.else_body)
            case ForCount():
                self.exec_for(stmt)
            case Switch():
                self.exec_switch(stmt)
            case Call():
                func = self._resolve_function(stmt.name, stmt.line, stmt.column)
                self.call_function(func, stmt.args, stmt.line, stmt.column)
            case _:
                raise RuntimeError(f"Unknown statement type: {type(stmt).__name__}")

    def exec_declare(self, stmt: Declare) -> None:
        default = default_for_type(stmt.declared_type)
        for target in stmt.targets:
            self.env.declare(target.name, default)

    def exec_read(self, stmt: Read) -> None:
        for target in stmt.targets:
            line = self._next_input(target.name)
            if line is None:
                message = (
                    f"Linea {target.line}, columna {target.column}: no se recibio "
                    f"entrada para '{target.name}'"
                )
                logger.warning(message)
                self.warnings.append(message)
                self.env.declare(target.name, UNSET)
                continue
            self.env.assign(target.name, coerce_input(line))

    def _next_input(self, name: str) -> str | None:
        if self.inputs:
            return self.inputs.popleft()
        if self.input_provider is not None:
            return self.input_provider(name)
        return None

    def exec_for(self, stmt: ForCount) -> None:
        start = self.eval_expr(stmt.start)
        end = self.eval_expr(stmt.end)
        step = self.eval_expr(stmt.step) if stmt.step is not None else 1
        for name, value in (("inicio", start), ("fin", end), ("paso", step)):
            if not _is_number(value):
                raise ExecutionError(
                    f"El valor de {name} del ciclo Para debe ser numerico, se obtuvo {kind_name(value)}",
                    stmt.line, stmt.column,
                )
        if step == 0:
            raise ExecutionError("El paso del ciclo Para no puede ser cero", stmt.line, stmt.column)

        name = stmt.var.name
        self.env.assign(name, start)
        iterations = 0
        while True:
            current = self.env.lookup(stmt.var)
            if not _is_number(current):
                raise ExecutionError(
                    f"La variable '{name}' del ciclo Para dejo de ser numerica",
                    stmt.var.line, stmt.var.column,
                )
            if (step > 0 and current > end) or (step < 0 and current < end):
                break
            iterations = self._count_iteration(iterations, stmt)
            self.execute(stmt.body)
            self.env.assign(name, normalize_number(self.env.lookup(stmt.var) + step))

    def exec_switch(self, stmt: Switch) -> None:
        subject = self.eval_expr(stmt.subject)
        for case in stmt.cases:
            for value_node in case.values:
                value = self.eval_expr(value_node)
                if not _same_kind(subject, value):
                    raise OperandTypeException(
                        Op.EQ.value, kind_name(subject), kind_name(value),
                        value_node.line, value_node.column,
                    )
                if subject == value:
                    self.execute(case.body)
                    return
        if stmt.default is not None:
            self.execute(stmt.default)

    def _count_iteration(self, iterations: int, stmt) -> int:
        iterations += 1
        if self.max_iterations is not None and iterations > self.max_iterations:
            raise LoopLimitException(self.max_iterations, stmt.line, stmt.column)
        return iterations

    # ------------------------------------------------------------------
    # Functions
    # ------------------------------------------------------------------

    def _resolve_function(self, name: str, line: int, column: int) -> FunctionDecl:
        if name not in self.functions:
            raise FunctionCallException(f"Funcion '{name}' no definida", line, column)
        return self.functions[name]

    def call_function(self, func: FunctionDecl, arg_nodes: list, line: int, column: int) -> Value:
        """
        Call a user function and return the value of its result variable.

        Arguments are evaluated in the caller's environment. Parameters
        passed ``Por Referencia`` are copied back into the caller's variable
        when the call returns.
        """
        if len(arg_nodes) != len(func.params):
            raise FunctionCallException(
                f"La funcion '{func.name}' espera {len(func.params)} argumentos "
                f"y recibio {len(arg_nodes)}",
                line, column,
            )

        frame = Environment()
        for param, arg in zip(func.params, arg_nodes):
            if param.by_reference and not isinstance(arg, Identifier):
                raise FunctionCallException(
                    f"El parametro '{param.name}' de '{func.name}' se pasa por referencia "
                    "y requiere una variable",
                    arg.line, arg.column,
                )
            frame.assign(param.name, self.eval_expr(arg))

        logger.debug("calling function '%s'", func.name)
        saved_env = self.env
        self.env = frame
        try:
            self.execute(func.body)
            result = frame.get(func.result_var) if func.result_var else UNSET
        except RecursionError as e:
            raise ExecutionError(
                f"Demasiadas llamadas anidadas a '{func.name}'", line, column
            ) from e
        finally:
            self.env = saved_env

        for param, arg in zip(func.params, arg_nodes):
            if param.by_reference:
                self.env.assign(arg.name, frame.get(param.name))
        return result


def _is_number(value: Value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _out_of_range(op: Op, node: BinaryOp) -> ExecutionError:
    return ExecutionError(f"Resultado fuera de rango en '{op.value}'", node.line, node.column)


def _same_kind(lhs: Value, rhs: Value) -> bool:
    match lhs, rhs:
        case (bool(), bool()):
            return True
        case (bool(), _) | (_, bool()):
            return False
        case (int() | float(), int() | float()):
            return True
        case (str(), str()):
            return True
        case (Unset(), Unset()):
            return True
    return False
