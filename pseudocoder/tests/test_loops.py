"""
Tests for Mientras, Repetir and Para loops, and the optional iteration limit.
"""
import pytest

from pseudocoder.exceptions import ConditionTypeException, ExecutionError, LoopLimitException
from pseudocoder.nodes import ForCount, Repeat, While

from pseudocoder.tests.utils import parse_source, program, run_source


def test_while_loop():
    interpreter = run_source(program(
        "Definir i Como Entero",
        "Mientras i < 3 Hacer",
        "    Escribir i",
        "    i <- i + 1",
        "FinMientras",
    ))
    assert interpreter.output == ["0", "1", "2"]


def test_while_condition_false_at_start():
    interpreter = run_source(program("Mientras FALSO Hacer", '    Escribir "nunca"', "FinMientras"))
    assert interpreter.output == []


def test_while_hacer_on_next_line():
    ast = parse_source(program("Mientras VERDADERO", "Hacer", "FinMientras"))
    assert isinstance(ast.body[0].body[0], While)


def test_nested_while():
    interpreter = run_source(program(
        "i <- 0",
        "Mientras i < 2 Hacer",
        "    j <- 0",
        "    Mientras j < 2 Hacer",
        "        Escribir i, j",
        "        j <- j + 1",
        "    FinMientras",
        "    i <- i + 1",
        "FinMientras",
    ))
    assert interpreter.output == ["00", "01", "10", "11"]


def test_while_condition_must_be_logical():
    with pytest.raises(ConditionTypeException) as excinfo:
        run_source(program("Mientras 1 Hacer", "FinMientras"))
    assert excinfo.value.message == "La condicion debe ser de tipo logico, se obtuvo numero"


def test_repeat_runs_at_least_once():
    interpreter = run_source(program(
        "Repetir",
        '    Escribir "una vez"',
        "Hasta Que VERDADERO",
    ))
    assert interpreter.output == ["una vez"]


def test_repeat_until_condition():
    ast = parse_source(program("i <- 0", "Repetir", "    i <- i + 1", "Hasta Que i >= 3"))
    assert isinstance(ast.body[0].body[1], Repeat)
    interpreter = run_source(program(
        "i <- 0",
        "Repetir",
        "    i <- i + 1",
        "Hasta Que i >= 3",
        "Escribir i",
    ))
    assert interpreter.output == ["3"]


def test_for_loop_default_step():
    interpreter = run_source(program(
        "Para i <- 1 Hasta 3 Hacer",
        "    Escribir i",
        "FinPara",
        "Escribir i",
    ))
    assert interpreter.output == ["1", "2", "3", "4"]


def test_for_loop_with_step():
    ast = parse_source(program("Para i <- 0 Hasta 10 Con Paso 5 Hacer", "FinPara"))
    loop = ast.body[0].body[0]
    assert isinstance(loop, ForCount)
    assert loop.step is not None
    interpreter = run_source(program(
        "Para i <- 0 Hasta 10 Con Paso 5 Hacer",
        "    Escribir i",
        "FinPara",
    ))
    assert interpreter.output == ["0", "5", "10"]


def test_for_loop_negative_step():
    interpreter = run_source(program(
        "Para i <- 3 Hasta 1 Con Paso -1 Hacer",
        "    Escribir i",
        "FinPara",
    ))
    assert interpreter.output == ["3", "2", "1"]


def test_for_loop_fractional_step():
    interpreter = run_source(program(
        "Para x <- 0 Hasta 1 Con Paso 0.5 Hacer",
        "    Escribir x",
        "FinPara",
    ))
    assert interpreter.output == ["0", "0.5", "1"]


def test_for_loop_empty_range():
    interpreter = run_source(program(
        "Para i <- 5 Hasta 1 Hacer",
        '    Escribir "nunca"',
        "FinPara",
    ))
    assert interpreter.output == []


def test_for_loop_zero_step():
    with pytest.raises(ExecutionError) as excinfo:
        run_source(program("Para i <- 1 Hasta 3 Con Paso 0 Hacer", "FinPara"))
    assert excinfo.value.message == "El paso del ciclo Para no puede ser cero"


def test_for_loop_bounds_must_be_numbers():
    with pytest.raises(ExecutionError) as excinfo:
        run_source(program('Para i <- 1 Hasta "tres" Hacer', "FinPara"))
    assert "fin del ciclo Para debe ser numerico" in excinfo.value.message


def test_loop_limit():
    with pytest.raises(LoopLimitException) as excinfo:
        run_source(program("Mientras VERDADERO Hacer", "FinMientras"), max_iterations=10)
    assert excinfo.value.message == "El ciclo supero el limite de 10 iteraciones"
    assert (excinfo.value.line, excinfo.value.column) == (2, 5)


def test_loop_limit_applies_per_loop():
    interpreter = run_source(
        program(
            "Para i <- 1 Hasta 3 Hacer",
            "    Para j <- 1 Hasta 3 Hacer",
            "    FinPara",
            "FinPara",
        ),
        max_iterations=3,
    )
    assert interpreter.env.vars["i"] == 4


def test_loop_limit_on_repeat():
    with pytest.raises(LoopLimitException):
        run_source(program("Repetir", "Hasta Que FALSO"), max_iterations=5)
