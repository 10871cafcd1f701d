"""Runtime values.

A runtime value is one of ``int | float`` (numbers), ``str`` (text), ``bool``
(logical values) or :data:`UNSET`. Consumers dispatch over them with
``match`` class patterns; ``bool`` must always be matched before ``int``
since it is a subclass of it.


File: values.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import math
from typing import Union


class Unset:
    """Value of a variable that was never given one."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = Unset()

Value = Union[int, float, str, bool, Unset]

UNSET_PLACEHOLDER = "<sin asignar>"

NUMERIC_TYPES = frozenset({"entero", "real", "numero", "numerico"})
LOGICAL_TYPES = frozenset({"logico"})
TEXT_TYPES = frozenset({"caracter", "texto", "cadena"})


def kind_name(value: Value) -> str:
    """
    Return the Spanish name of a value's kind, for error messages.
    """
    match value:
        case bool():
            return "logico"
        case int() | float():
            return "numero"
        case str():
            return "texto"
        case Unset():
            return "sin asignar"
    raise TypeError(f"Not a runtime value: {value!r}")


def format_number(number: int | float) -> str:
    """
    Render a number the way the language prints it: integral values have no
    decimal part, other values use the shortest round-tripping form.
    """
    if isinstance(number, float) and math.isfinite(number) and number.is_integer():
        return str(int(number))
    return repr(number) if isinstance(number, float) else str(number)


def format_value(value: Value) -> str:
    """
    Render a value for ``Escribir``.
    """
    match value:
        case bool():
            return "VERDADERO" if value else "FALSO"
        case int() | float():
            return format_number(value)
        case str():
            return value
        case Unset():
            return UNSET_PLACEHOLDER
    raise TypeError(f"Not a runtime value: {value!r}")


def concat_text(value: Value) -> str:
    """
    Render a value as an operand of text concatenation.
    """
    match value:
        case Unset():
            return ""
        case _:
            return format_value(value)


def normalize_number(number: float) -> int | float:
    """
    Collapse integral floats to ``int`` so they behave like literals.
    """
    if isinstance(number, float) and math.isfinite(number) and number.is_integer():
        return int(number)
    return number


def coerce_input(text: str) -> Value:
    """
    Classify one line of user input.

    The trimmed text becomes a number when it parses as one and prints back
    identically (``"7"``, ``"-2.5"``; but not ``"007"`` or ``"1e3"``), a
    logical value when it is ``verdadero``/``falso`` in any case, and
    otherwise the raw text.
    """
    trimmed = text.strip()
    if not trimmed:
        return text
    try:
        number = float(trimmed)
    except ValueError:
        number = None
    if number is not None and math.isfinite(number) and format_number(number) == trimmed:
        return normalize_number(number)
    lowered = trimmed.lower()
    if lowered == "verdadero":
        return True
    if lowered == "falso":
        return False
    return text


def default_for_type(type_name: str) -> Value:
    """
    Initial value for a variable declared with ``Definir ... Como type_name``.
    """
    if type_name in NUMERIC_TYPES:
        return 0
    if type_name in LOGICAL_TYPES:
        return False
    if type_name in TEXT_TYPES:
        return ""
    return UNSET
