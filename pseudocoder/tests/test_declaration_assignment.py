"""
Tests for Definir and assignment: type-directed defaults, the
declare-first pass and undeclared variables.
"""
import pytest

from pseudocoder.exceptions import UndefinedVariableException
from pseudocoder.interpreter import Interpreter
from pseudocoder.values import UNSET

from pseudocoder.tests.utils import parse_source, program, run_source


def test_numeric_declarations_default_to_zero():
    interpreter = run_source(program("Definir A,B,C Como Entero", "Escribir A, B, C"))
    assert interpreter.env.vars == {"A": 0, "B": 0, "C": 0}
    assert interpreter.output == ["000"]


@pytest.mark.parametrize(
    "type_name, expected",
    [
        ("Entero", 0),
        ("Real", 0),
        ("Numero", 0),
        ("Numerico", 0),
        ("Logico", False),
        ("Caracter", ""),
        ("Texto", ""),
        ("Cadena", ""),
        ("Punto", UNSET),
    ],
)
def test_default_for_each_type(type_name, expected):
    interpreter = run_source(program(f"Definir v Como {type_name}"))
    assert interpreter.env.vars["v"] == expected
    assert type(interpreter.env.vars["v"]) is type(expected)


def test_declarations_run_before_other_statements():
    interpreter = run_source(program("Escribir x", "Definir x Como Logico"))
    assert interpreter.output == ["FALSO"]


def test_redeclaration_keeps_existing_value():
    interpreter = run_source(program(
        "Definir x Como Entero",
        "x <- 5",
        "Definir x Como Texto",
        "Escribir x",
    ))
    assert interpreter.output == ["5"]


def test_declaration_in_loop_body_keeps_value():
    interpreter = run_source(program(
        "Definir i Como Entero",
        "Mientras i < 3 Hacer",
        "    Definir total Como Entero",
        "    total <- total + i",
        "    i <- i + 1",
        "FinMientras",
        "Escribir total",
    ))
    assert interpreter.output == ["3"]


def test_assignment_without_declaration():
    interpreter = run_source(program('saludo <- "hola"', "Escribir saludo"))
    assert interpreter.env.vars["saludo"] == "hola"


def test_assignment_overwrites_kind():
    interpreter = run_source(program(
        "Definir x Como Entero",
        'x <- "texto"',
    ))
    assert interpreter.env.vars["x"] == "texto"


def test_variables_are_case_sensitive():
    with pytest.raises(UndefinedVariableException) as excinfo:
        run_source(program("total <- 1", "Escribir Total"))
    assert excinfo.value.varname == "Total"
    assert (excinfo.value.line, excinfo.value.column) == (3, 14)


def test_undefined_variable_message():
    with pytest.raises(UndefinedVariableException) as excinfo:
        run_source(program("x <- y + 1"))
    assert excinfo.value.message == "Variable 'y' no definida"
    assert (excinfo.value.line, excinfo.value.column) == (2, 10)


def test_each_run_starts_with_empty_environment():
    interpreter = Interpreter()
    interpreter.evaluate(parse_source(program("x <- 1")))
    with pytest.raises(UndefinedVariableException):
        interpreter.evaluate(parse_source(program("Escribir x")))


def test_con_and_paso_are_ordinary_names():
    interpreter = run_source(program("con <- 3", "paso <- 2", "Escribir con + paso"))
    assert interpreter.output == ["5"]


def test_environment_membership():
    interpreter = run_source(program("Definir A Como Entero", "B <- 1"))
    assert "A" in interpreter.env
    assert "B" in interpreter.env
    assert "C" not in interpreter.env
