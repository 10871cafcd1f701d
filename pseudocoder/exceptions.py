"""Errors.

Every error raised by the parser or interpreter derives from
:class:`PseudoError` and carries the source position it refers to, when one
is known. The runner turns them into a single ``Error en linea ...`` line.


File: exceptions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""


class PseudoError(Exception):
    """
    Base error with an optional source position.
    """
    def __init__(self, message, line=None, column=None):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(message)

    def describe(self) -> str:
        """
        Render the error as a diagnostic line.
        """
        if self.line is not None and self.column is not None:
            return f"Error en linea {self.line}, columna {self.column}: {self.message}"
        if self.line is not None:
            return f"Error en linea {self.line}: {self.message}"
        return f"Error: {self.message}"


class ParseError(PseudoError):
    """
    Error for source that does not match the grammar.
    """


class ExecutionError(PseudoError):
    """
    Base class for errors raised while running a program.
    """


class UndefinedVariableException(ExecutionError):
    """
    Error for undefined variables.
    """
    def __init__(self, varname, line=None, column=None):
        self.varname = varname
        super().__init__(f"Variable '{varname}' no definida", line, column)


class OperandTypeException(ExecutionError):
    """
    Error for operands of the wrong kind.
    """
    def __init__(self, op, left_kind, right_kind=None, line=None, column=None):
        self.op = op
        self.left_kind = left_kind
        self.right_kind = right_kind
        if right_kind is None:
            message = f"Operacion '{op}' no valida para un valor de tipo {left_kind}"
        else:
            message = f"Operacion '{op}' no valida entre {left_kind} y {right_kind}"
        super().__init__(message, line, column)


class ConditionTypeException(ExecutionError):
    """
    Error for conditions that are not logical values.
    """
    def __init__(self, kind, line=None, column=None):
        self.kind = kind
        super().__init__(
            f"La condicion debe ser de tipo logico, se obtuvo {kind}", line, column
        )


class DivisionByZeroException(ExecutionError):
    """
    Error for division or modulo by zero.
    """
    def __init__(self, op, line=None, column=None):
        self.op = op
        message = "Division por cero" if op == "/" else "Modulo por cero"
        super().__init__(message, line, column)


class UnknownOpException(ExecutionError):
    """
    Error for unknown operations.
    """
    def __init__(self, op, line=None, column=None):
        self.op = op
        super().__init__(f"Operacion desconocida '{op}'", line, column)


class FunctionCallException(ExecutionError):
    """
    Error for calls to unknown functions or with the wrong arguments.
    """


class LoopLimitException(ExecutionError):
    """
    Error for a loop that ran past the configured iteration limit.
    """
    def __init__(self, limit, line=None, column=None):
        self.limit = limit
        super().__init__(
            f"El ciclo supero el limite de {limit} iteraciones", line, column
        )
