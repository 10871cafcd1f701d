"""
Pseudocode Language Server entry point.

This server provides editor features for pseudocode source files using
`pygls`. It reuses the lexer and parser to publish parse errors as
diagnostics and to build a symbol index of the main block, the functions
and the declared variables, supporting definition lookup, hover information
and document symbols.


File: server.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_DEFINITION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    DefinitionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    Location,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)

from pseudocoder.exceptions import ParseError
from pseudocoder.lexer import tokenize
from pseudocoder.nodes import (
    Assign,
    Declare,
    ForCount,
    FunctionDecl,
    If,
    Program,
    Read,
    Repeat,
    Switch,
    While,
)
from pseudocoder.parser import Parser
from pseudocoder.tokens import TokenKind

logger = logging.getLogger(__name__)


@dataclass
class PseudoSymbol:
    """Represents a named symbol in a pseudocode file."""

    name: str
    kind: SymbolKind
    uri: str
    line: int
    column: int
    detail: str

    @property
    def range(self) -> Range:
        start = Position(self.line, self.column)
        return Range(start, Position(self.line, self.column + len(self.name)))


def _position(line: int, column: int) -> Position:
    """Convert a 1-based source position to a 0-based LSP position."""
    return Position(max(line - 1, 0), max(column - 1, 0))


def analyze(text: str) -> Tuple[Optional[Program], List[Diagnostic]]:
    """
    Parse ``text`` and collect its diagnostics: one error for the first
    parse failure and one warning per fragment the lexer did not recognize.

    Returns:
        tuple: the program, or None if it does not parse, and the diagnostics.
    """
    tokens = tokenize(text)
    ast = None
    diagnostics: List[Diagnostic] = []
    for tok in tokens:
        if tok.kind != TokenKind.UNKNOWN:
            continue
        start = _position(tok.line, tok.column)
        end = Position(start.line, start.character + len(tok.text))
        diagnostics.append(
            Diagnostic(
                range=Range(start, end),
                message=f"Texto no reconocido '{tok.text}'",
                severity=DiagnosticSeverity.Warning,
                source="pseudocoder",
            )
        )
    try:
        ast = Parser(tokens).parse()
    except ParseError as e:
        start = _position(e.line or 1, e.column or 1)
        diagnostics.insert(
            0,
            Diagnostic(
                range=Range(start, Position(start.line, start.character + 1)),
                message=e.message,
                severity=DiagnosticSeverity.Error,
                source="pseudocoder",
            ),
        )
    return ast, diagnostics


def collect_diagnostics(text: str) -> List[Diagnostic]:
    """Return the diagnostics for ``text``."""
    return analyze(text)[1]


def _nested_bodies(stmt) -> List[list]:
    """Return the statement lists nested inside ``stmt``."""
    if isinstance(stmt, (While, Repeat, ForCount)):
        return [stmt.body]
    if isinstance(stmt, If):
        return [stmt.then_body, stmt.else_body]
    if isinstance(stmt, Switch):
        bodies = [case.body for case in stmt.cases]
        if stmt.default is not None:
            bodies.append(stmt.default)
        return bodies
    return []


def _variable_symbols(uri: str, statements: list, seen: set) -> List[PseudoSymbol]:
    """Collect the first declaration, assignment or read of each variable."""
    symbols: List[PseudoSymbol] = []

    def add(ident, detail: str) -> None:
        if ident.name in seen:
            return
        seen.add(ident.name)
        symbols.append(
            PseudoSymbol(
                ident.name, SymbolKind.Variable, uri,
                ident.line - 1, ident.column - 1, detail,
            )
        )

    # Declarations take precedence, as they run first.
    for stmt in statements:
        if isinstance(stmt, Declare):
            for target in stmt.targets:
                add(target, f"Definir {target.name} Como {stmt.declared_type}")
    for stmt in statements:
        if isinstance(stmt, Assign):
            add(stmt.target, stmt.target.name)
        elif isinstance(stmt, Read):
            for target in stmt.targets:
                add(target, target.name)
        elif isinstance(stmt, ForCount):
            add(stmt.var, stmt.var.name)
        for body in _nested_bodies(stmt):
            symbols.extend(_variable_symbols(uri, body, seen))
    return symbols


def _function_detail(func: FunctionDecl) -> str:
    params = []
    for param in func.params:
        params.append(f"{param.name} Por Referencia" if param.by_reference else param.name)
    head = f"{func.result_var} <- {func.name}" if func.result_var else func.name
    return f"Funcion {head}({', '.join(params)})"


def program_symbols(uri: str, ast: Program) -> List[PseudoSymbol]:
    """Extract the main block, function and variable symbols of a program."""
    symbols: List[PseudoSymbol] = []
    for block in ast.body:
        symbols.append(
            PseudoSymbol(
                block.name.name, SymbolKind.Module, uri,
                block.name.line - 1, block.name.column - 1,
                f"Proceso {block.name.name}",
            )
        )
        symbols.extend(_variable_symbols(uri, block.body, set()))
    for func in ast.functions:
        symbols.append(
            PseudoSymbol(
                func.name, SymbolKind.Function, uri,
                func.line - 1, func.column - 1, _function_detail(func),
            )
        )
    return symbols


class PseudoLanguageServer(LanguageServer):
    """Language server for pseudocode source files."""

    def __init__(self) -> None:
        super().__init__("pseudocoder-ls", "v0.1")
        self.symbols_by_uri: Dict[str, List[PseudoSymbol]] = {}

    def update_index(self, uri: str, text: str) -> List[Diagnostic]:
        """Re-parse ``text`` and update the symbol index for ``uri``.

        The previous symbols are kept while the document does not parse, so
        navigation keeps working during an edit.

        Returns:
            List[Diagnostic]: the diagnostics for the document.
        """
        ast, diagnostics = analyze(text)
        if ast is not None:
            self.symbols_by_uri[uri] = program_symbols(uri, ast)
        logger.debug("indexed %s with %d diagnostics", uri, len(diagnostics))
        return diagnostics

    def lookup(self, uri: str, word: str) -> Optional[PseudoSymbol]:
        """Find the symbol named ``word`` in ``uri``, functions first."""
        matches = [sym for sym in self.symbols_by_uri.get(uri, []) if sym.name == word]
        if not matches:
            return None
        matches.sort(key=lambda sym: sym.kind != SymbolKind.Function)
        return matches[0]


lang_server = PseudoLanguageServer()


def _refresh(ls: PseudoLanguageServer, uri: str, text: str) -> None:
    diagnostics = ls.update_index(uri, text)
    ls.publish_diagnostics(uri, diagnostics)


@lang_server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: PseudoLanguageServer, params: DidOpenTextDocumentParams) -> None:
    """Index a document when it is opened."""
    _refresh(ls, params.text_document.uri, params.text_document.text)


@lang_server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: PseudoLanguageServer, params: DidChangeTextDocumentParams) -> None:
    """Re-index a document when it changes."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    _refresh(ls, doc.uri, doc.source)


@lang_server.feature(TEXT_DOCUMENT_DEFINITION)
def definition(ls: PseudoLanguageServer, params: DefinitionParams):
    """Return the definition location for the symbol under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    if not word:
        return None
    sym = ls.lookup(doc.uri, word)
    if sym is None:
        return None
    return Location(uri=sym.uri, range=sym.range)


@lang_server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: PseudoLanguageServer, params: HoverParams) -> Optional[Hover]:
    """Return hover information for the symbol under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    if not word:
        return None
    sym = ls.lookup(doc.uri, word)
    if sym is None:
        return None
    contents = MarkupContent(kind=MarkupKind.PlainText, value=sym.detail)
    return Hover(contents=contents)


@lang_server.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbols(ls: PseudoLanguageServer, params: DocumentSymbolParams):
    """Return the symbols for the given document."""
    symbols = ls.symbols_by_uri.get(params.text_document.uri, [])
    return [
        DocumentSymbol(
            name=sym.name,
            kind=sym.kind,
            range=sym.range,
            selection_range=sym.range,
            detail=sym.detail,
        )
        for sym in symbols
    ]


def main() -> None:
    """Start the language server."""
    lang_server.start_io()


if __name__ == "__main__":
    main()
