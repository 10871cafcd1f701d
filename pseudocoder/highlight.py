"""
Syntax highlighting on top of the lexer.

Every token kind maps to a category and each category to an ANSI colour.
Since the token stream is lossless, joining the spans rebuilds the source.


File: highlight.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from pseudocoder.lexer import tokenize
from pseudocoder.tokens import TYPE_KINDS, TokenKind

CATEGORY_COLORS: dict[str, str] = {
    "keyword": "\033[1;34m",
    "type": "\033[36m",
    "literal": "\033[35m",
    "string": "\033[32m",
    "number": "\033[33m",
    "identifier": "\033[95m",
    "operator": "\033[96m",
    "punctuation": "",
    "comment": "\033[3;90m",
    "whitespace": "",
    "invalid": "\033[4;31m",
}

RESET = "\033[0m"

_FIXED: dict[TokenKind, str] = {
    TokenKind.VERDADERO: "literal",
    TokenKind.FALSO: "literal",
    TokenKind.STRING: "string",
    TokenKind.NUMBER: "number",
    TokenKind.IDENTIFIER: "identifier",
    TokenKind.COMMENT: "comment",
    TokenKind.WHITESPACE: "whitespace",
    TokenKind.NEWLINE: "whitespace",
    TokenKind.EOF: "whitespace",
    TokenKind.UNKNOWN: "invalid",
}

_OPERATORS = frozenset({
    TokenKind.ASSIGN, TokenKind.PLUS, TokenKind.MINUS, TokenKind.MUL,
    TokenKind.DIV, TokenKind.MOD, TokenKind.POW, TokenKind.EQ, TokenKind.NE,
    TokenKind.LT, TokenKind.GT, TokenKind.LE, TokenKind.GE, TokenKind.AND,
    TokenKind.OR, TokenKind.NOT,
})

_PUNCTUATION = frozenset({
    TokenKind.LPAREN, TokenKind.RPAREN, TokenKind.LBRACKET, TokenKind.RBRACKET,
    TokenKind.COMMA, TokenKind.SEMICOLON, TokenKind.COLON,
})


def classify(kind: TokenKind) -> str:
    """
    Return the highlight category of a token kind.
    """
    if kind in _FIXED:
        return _FIXED[kind]
    if kind in TYPE_KINDS:
        return "type"
    if kind in _OPERATORS:
        return "operator"
    if kind in _PUNCTUATION:
        return "punctuation"
    return "keyword"


def spans(source: str) -> list[tuple[str, str]]:
    """
    Split ``source`` into ``(category, text)`` pairs, in order.
    """
    return [
        (classify(tok.kind), tok.text)
        for tok in tokenize(source)
        if tok.kind != TokenKind.EOF
    ]


def to_ansi(source: str) -> str:
    """
    Render ``source`` with ANSI colour escapes.
    """
    parts = []
    for category, text in spans(source):
        color = CATEGORY_COLORS[category]
        parts.append(f"{color}{text}{RESET}" if color else text)
    return "".join(parts)
