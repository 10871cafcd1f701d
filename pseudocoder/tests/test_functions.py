"""
Tests for Funcion/SubProceso declarations and calls.
"""
import pytest

from pseudocoder.exceptions import ExecutionError, FunctionCallException
from pseudocoder.nodes import FunctionDecl

from pseudocoder.tests.utils import parse_source, run_source

DOBLE = (
    "Funcion r <- Doble(x)\n"
    "    r <- x * 2\n"
    "FinFuncion\n"
)


def test_function_declaration_ast():
    source = (
        "SubProceso Cambiar(a Por Referencia, b Por Valor, c)\n"
        "FinSubProceso\n"
        "Proceso P\n"
        "FinProceso\n"
    )
    ast = parse_source(source)
    func = ast.functions[0]
    assert isinstance(func, FunctionDecl)
    assert func.name == "Cambiar"
    assert func.result_var is None
    assert [(p.name, p.by_reference) for p in func.params] == [
        ("a", True), ("b", False), ("c", False),
    ]


def test_function_returns_result_variable():
    source = DOBLE + "Proceso P\n    Escribir Doble(4) + 1\nFinProceso\n"
    ast = parse_source(source)
    assert ast.functions[0].result_var == "r"
    assert run_source(source).output == ["9"]


def test_function_declared_after_block():
    source = "Proceso P\n    Escribir Doble(2.5)\nFinProceso\n" + DOBLE
    assert run_source(source).output == ["5"]


def test_function_without_parameters():
    source = (
        "Funcion s <- Saludo\n"
        '    s <- "hola"\n'
        "FinFuncion\n"
        "Proceso P\n"
        "    Escribir Saludo()\n"
        "FinProceso\n"
    )
    assert run_source(source).output == ["hola"]


def test_by_reference_parameter_is_copied_back():
    source = (
        "SubProceso Incrementar(n Por Referencia)\n"
        "    n <- n + 1\n"
        "FinSubProceso\n"
        "Proceso P\n"
        "    Definir a Como Entero\n"
        "    a <- 5\n"
        "    Incrementar(a)\n"
        "    Escribir a\n"
        "FinProceso\n"
    )
    assert run_source(source).output == ["6"]


def test_by_value_parameter_is_not_copied_back():
    source = (
        "SubProceso Cambiar(n)\n"
        "    n <- 0\n"
        "FinSubProceso\n"
        "Proceso P\n"
        "    a <- 5\n"
        "    Cambiar(a)\n"
        "    Escribir a\n"
        "FinProceso\n"
    )
    assert run_source(source).output == ["5"]


def test_function_has_its_own_environment():
    source = (
        "SubProceso Mostrar()\n"
        "    Escribir a\n"
        "FinSubProceso\n"
        "Proceso P\n"
        "    a <- 1\n"
        "    Mostrar()\n"
        "FinProceso\n"
    )
    with pytest.raises(ExecutionError) as excinfo:
        run_source(source)
    assert excinfo.value.message == "Variable 'a' no definida"


def test_recursive_function():
    source = (
        "Funcion f <- Factorial(n)\n"
        "    Si n <= 1 Entonces\n"
        "        f <- 1\n"
        "    Sino\n"
        "        f <- n * Factorial(n - 1)\n"
        "    FinSi\n"
        "FinFuncion\n"
        "Proceso P\n"
        "    Escribir Factorial(5)\n"
        "FinProceso\n"
    )
    assert run_source(source).output == ["120"]


def test_function_writes_output():
    source = (
        "SubProceso Saludar(nombre)\n"
        '    Escribir "Hola ", nombre\n'
        "FinSubProceso\n"
        "Proceso P\n"
        '    Saludar("Ana")\n'
        "FinProceso\n"
    )
    assert run_source(source).output == ["Hola Ana"]


@pytest.mark.parametrize(
    "body, message",
    [
        ("Falta(1)", "Funcion 'Falta' no definida"),
        ("Escribir Doble(1, 2)", "La funcion 'Doble' espera 1 argumentos y recibio 2"),
    ],
)
def test_call_errors(body, message):
    source = DOBLE + f"Proceso P\n    {body}\nFinProceso\n"
    with pytest.raises(FunctionCallException) as excinfo:
        run_source(source)
    assert excinfo.value.message == message


def test_procedure_used_as_value():
    source = (
        "SubProceso Nada()\n"
        "FinSubProceso\n"
        "Proceso P\n"
        "    x <- Nada()\n"
        "FinProceso\n"
    )
    with pytest.raises(FunctionCallException) as excinfo:
        run_source(source)
    assert "no devuelve ningun valor" in excinfo.value.message


def test_by_reference_requires_variable():
    source = (
        "SubProceso Inc(n Por Referencia)\n"
        "FinSubProceso\n"
        "Proceso P\n"
        "    Inc(1 + 2)\n"
        "FinProceso\n"
    )
    with pytest.raises(FunctionCallException) as excinfo:
        run_source(source)
    assert "requiere una variable" in excinfo.value.message


def test_duplicate_function():
    source = DOBLE + DOBLE + "Proceso P\nFinProceso\n"
    with pytest.raises(FunctionCallException) as excinfo:
        run_source(source)
    assert "mas de una vez" in excinfo.value.message
