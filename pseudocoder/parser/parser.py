"""
Main parser entry point for the pseudocode language.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`pseudocoder.parser.expressions` and `pseudocoder.parser.statements`.

Whitespace and comment tokens are dropped when the parser is created.
Newlines are kept: they separate statements, and each routine skips them
wherever the grammar allows it. Parsing is not error tolerant; the first
mismatch raises :class:`ParseError` and no tree is returned.


File: parser.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging

from pseudocoder.exceptions import ParseError
from pseudocoder.nodes import Program
from pseudocoder.tokens import TRIVIA_KINDS, Token, TokenKind

from . import expressions as _expr
from . import statements as _stmt
from .messages import describe_token, expected_names

logger = logging.getLogger(__name__)


class Parser:
    """Recursive descent parser producing a :class:`Program`."""

    def __init__(self, tokens: list[Token]):
        """
        Initialize the parser with a list of tokens.

        Parameters:
            tokens (list): Tokens from :func:`pseudocoder.lexer.tokenize`,
                ending with an EOF token.
        """
        self.tokens = [tok for tok in tokens if tok.kind not in TRIVIA_KINDS]
        if not self.tokens or self.tokens[-1].kind != TokenKind.EOF:
            raise ValueError("token stream must end with an EOF token")
        self.position = 0
        self.curr_token = self.tokens[self.position]

    def advance(self) -> Token:
        """
        Consume the current token and return it.
        """
        tok = self.curr_token
        if tok.kind != TokenKind.EOF:
            self.position += 1
            self.curr_token = self.tokens[self.position]
        return tok

    def eat(self, *kinds: TokenKind) -> Token:
        """
        Consume the current token if it matches one of the expected kinds.

        Parameters:
            kinds (TokenKind): The accepted token kinds.

        Returns:
            Token: The consumed token.

        Raises:
            ParseError: If the token does not match.
        """
        if self.curr_token.kind in kinds:
            return self.advance()
        self.error_expected(expected_names(kinds))

    def accept(self, kind: TokenKind) -> Token | None:
        """
        Consume the current token if it is of ``kind``, otherwise do nothing.
        """
        if self.curr_token.kind == kind:
            return self.advance()
        return None

    def peek(self, distance: int = 1) -> Token:
        """
        Look ahead ``distance`` tokens, skipping newlines.
        """
        index = self.position
        while distance > 0 and index < len(self.tokens) - 1:
            index += 1
            if self.tokens[index].kind != TokenKind.NEWLINE:
                distance -= 1
        return self.tokens[index]

    def skip_newlines(self) -> None:
        """
        Skip any newline tokens at the current position.
        """
        while self.curr_token.kind == TokenKind.NEWLINE:
            self.advance()

    def skip_separators(self) -> None:
        """
        Skip newlines and stray semicolons between statements.
        """
        while self.curr_token.kind in (TokenKind.NEWLINE, TokenKind.SEMICOLON):
            self.advance()

    def error(self, message: str, tok: Token | None = None):
        """
        Raise a :class:`ParseError` positioned at ``tok`` (default: current token).
        """
        tok = tok or self.curr_token
        if tok.kind == TokenKind.UNKNOWN:
            if tok.text[:1] in ('"', "'"):
                message = "Cadena de texto sin cerrar"
            else:
                message = f"Caracter no reconocido '{tok.text}'"
        raise ParseError(message, tok.line, tok.column)

    def error_expected(self, expected: str):
        """
        Raise a :class:`ParseError` for the current token not being ``expected``.
        """
        self.error(f"Se esperaba {expected} pero se encontro {describe_token(self.curr_token)}")


    # Expression wrappers
    def expr(self):
        """
        Parse a full expression.
        """
        return _expr.parse_expr(self)


    # Statement wrappers
    def statement(self):
        """
        Parse a single statement and its optional trailing semicolon.
        """
        node = _stmt.parse_statement(self)
        self.accept(TokenKind.SEMICOLON)
        return node

    def statements(self, *terminators: TokenKind) -> list:
        """
        Parse statements until one of ``terminators`` is the current token.
        """
        return _stmt.parse_statements(self, terminators)

    def at_statement_start(self) -> bool:
        """
        Return True if the current token can begin a statement.
        """
        return _stmt.at_statement_start(self)


    def parse(self) -> Program:
        """
        Parse the full input into a :class:`Program`.

        Function declarations may appear before or after the single
        ``Proceso``/``Algoritmo`` block.
        """
        blocks = []
        functions = []
        self.skip_separators()
        while self.curr_token.kind != TokenKind.EOF:
            kind = self.curr_token.kind
            if kind in (TokenKind.FUNCION, TokenKind.SUBPROCESO):
                functions.append(_stmt.parse_function_decl(self))
            elif kind in (TokenKind.PROCESO, TokenKind.ALGORITMO):
                if blocks:
                    self.error("Solo puede haber un bloque 'Proceso' o 'Algoritmo' por programa")
                blocks.append(_stmt.parse_program_block(self))
            elif blocks:
                self.error(
                    f"Se encontro {describe_token(self.curr_token)} despues del fin del programa"
                )
            else:
                self.error(
                    "El programa debe comenzar con 'Proceso' o 'Algoritmo', "
                    f"se encontro {describe_token(self.curr_token)}"
                )
            self.skip_separators()

        if not blocks:
            self.error("El programa debe comenzar con 'Proceso' o 'Algoritmo'")

        logger.debug(
            "parsed block '%s' with %d statements and %d functions",
            blocks[0].name.name, len(blocks[0].body), len(functions),
        )
        return Program(body=blocks, functions=functions)


def parse(tokens: list[Token]) -> Program:
    """
    Parse a token list into a :class:`Program`.
    """
    return Parser(tokens).parse()
