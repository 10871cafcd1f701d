"""
Tests for the language server's diagnostics and symbol index.
"""
import pytest
from lsprotocol.types import DiagnosticSeverity, SymbolKind

from pseudocoder.server import (
    PseudoLanguageServer,
    analyze,
    collect_diagnostics,
    program_symbols,
)

from pseudocoder.tests.utils import parse_source

URI = "file:///tmp/suma.psc"

SOURCE = (
    "Funcion r <- Doble(x Por Referencia)\n"
    "    r <- x * 2\n"
    "FinFuncion\n"
    "Proceso Suma\n"
    "    Definir A, B Como Entero\n"
    "    Leer A\n"
    "    Mientras A < 3 Hacer\n"
    "        total <- Doble(A)\n"
    "        A <- A + 1\n"
    "    FinMientras\n"
    "FinProceso\n"
)


@pytest.fixture
def server():
    return PseudoLanguageServer()


def test_valid_source_has_no_diagnostics():
    ast, diagnostics = analyze(SOURCE)
    assert ast is not None
    assert diagnostics == []


def test_parse_error_diagnostic():
    diagnostics = collect_diagnostics("Proceso P\n    x <- \nFinProceso\n")
    assert len(diagnostics) == 1
    diag = diagnostics[0]
    assert diag.severity == DiagnosticSeverity.Error
    assert diag.message.startswith("Se esperaba una expresion")
    assert (diag.range.start.line, diag.range.start.character) == (2, 0)


def test_unknown_text_is_a_warning():
    diagnostics = collect_diagnostics("Proceso P\n    x <- 1 @\nFinProceso\n")
    severities = [d.severity for d in diagnostics]
    assert severities == [DiagnosticSeverity.Error, DiagnosticSeverity.Warning]
    assert diagnostics[1].range.start.character == 11


def test_program_symbols():
    symbols = program_symbols(URI, parse_source(SOURCE))
    by_name = {sym.name: sym for sym in symbols}
    assert by_name["Suma"].kind == SymbolKind.Module
    assert by_name["Doble"].kind == SymbolKind.Function
    assert by_name["Doble"].detail == "Funcion r <- Doble(x Por Referencia)"
    assert by_name["A"].detail == "Definir A Como entero"
    assert (by_name["A"].line, by_name["A"].column) == (4, 12)
    assert by_name["total"].kind == SymbolKind.Variable
    assert by_name["total"].line == 7


def test_update_index_keeps_symbols_while_broken(server):
    assert server.update_index(URI, SOURCE) == []
    assert server.lookup(URI, "Doble").kind == SymbolKind.Function
    diagnostics = server.update_index(URI, SOURCE.replace("FinProceso", ""))
    assert diagnostics[0].severity == DiagnosticSeverity.Error
    assert server.lookup(URI, "total") is not None


def test_lookup_unknown_symbol(server):
    server.update_index(URI, SOURCE)
    assert server.lookup(URI, "nada") is None
    assert server.lookup("file:///otro.psc", "A") is None
