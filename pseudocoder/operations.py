"""Operators.

Binary and unary operator nodes are labelled with an :class:`Op`. The value
of each member is how the operator is written in pseudocode, so error
messages can quote it back to the user. Word operators (``Y``, ``O``, ``NO``)
and their symbol forms (``&``, ``|``, ``!``) map to the same member.
"""

from enum import Enum


class Op(str, Enum):
    """
    Enumeration of supported operators. The value is the operator's
    source spelling, used in error messages.
    """

    # Arithmetic
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    POW = "^"

    # Comparison
    EQ = "="
    NE = "<>"
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="

    # Boolean
    AND = "Y"
    OR = "O"
    NOT = "NO"

    def __str__(self) -> str:  # pragma: no cover - trivial
        """
        Return the underlying string value for nicer debug output.
        """
        return self.value


EQUALITY = frozenset({Op.EQ, Op.NE})
ORDERING = frozenset({Op.GT, Op.LT, Op.GE, Op.LE})
LOGICAL = frozenset({Op.AND, Op.OR})


__all__ = ["Op", "EQUALITY", "ORDERING", "LOGICAL"]
