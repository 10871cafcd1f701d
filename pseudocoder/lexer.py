"""Lexer for the pseudocode language.

The lexer performs a single pass over the source code using a combined
regular expression of named groups. Each match yields a :class:`Token`
carrying its kind, exact text, line, column and offset.

Unlike a compiler front-end, the lexer keeps whitespace, newlines and
comments as tokens so a highlighter can rebuild the source from the stream.
It never raises: anything it cannot classify (a stray ``@``, a string that
reaches the end of the line before its closing quote) becomes an ``UNKNOWN``
token and it is up to the parser to complain about it.

Keywords are matched case-insensitively and without regard to accents, so
``FinProceso``, ``finproceso`` and ``Según`` all resolve as expected. A few
keywords are written as two words (``Hasta Que``, ``Con Paso``, ``Por
Referencia``, ``De Otro Modo``) and are joined here into one token. ``Hacer``
is resolved against the statement that opened the current line. The
lookback covers the whole line, so a bare ``Mientras x < 3 Hacer`` finds
its loop even with the condition in between.


File: lexer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging
import re

from pseudocoder.tokens import (
    KEYWORDS,
    MULTIWORD_KEYWORDS,
    Token,
    TokenKind,
    normalize_word,
)

logger = logging.getLogger(__name__)

LETTERS = "A-Za-z_áéíóúüÁÉÍÓÚÜñÑ"

token_specification: list[tuple[str, str]] = [
    # Layout
    ('NEWLINE',       r'\n'),
    ('WHITESPACE',    r'[^\S\n]+'),

    # Comments, block comments may run to the end of input
    ('LINE_COMMENT',  r'//[^\n]*'),
    ('BLOCK_COMMENT', r'/\*.*?(?:\*/|\Z)'),

    # Literals
    ('STRING',        r'"[^"\n]*"|\'[^\'\n]*\''),
    ('BAD_STRING',    r'["\'][^\n]*'),
    ('NUMBER',        r'[0-9]+(?:\.[0-9]*)?'),
    ('WORD',          rf'[{LETTERS}][{LETTERS}0-9]*'),

    # Multi-character operators
    ('ASSIGN',        r'<-'),
    ('LE',            r'<='),
    ('GE',            r'>='),
    ('NE',            r'<>|!='),

    # Single-character operators
    ('LT',            r'<'),
    ('GT',            r'>'),
    ('EQ',            r'='),
    ('PLUS',          r'\+'),
    ('MINUS',         r'-'),
    ('MUL',           r'\*'),
    ('DIV',           r'/'),
    ('MOD',           r'%'),
    ('POW',           r'\^'),
    ('AND',           r'&'),
    ('OR',            r'\|'),
    ('NOT',           r'!'),

    # Punctuation
    ('LPAREN',        r'\('),
    ('RPAREN',        r'\)'),
    ('LBRACKET',      r'\['),
    ('RBRACKET',      r'\]'),
    ('COMMA',         r','),
    ('SEMICOLON',     r';'),
    ('COLON',         r':'),

    # Anything else
    ('MISMATCH',      r'.'),
]

TOKEN_REGEX = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in token_specification),
    re.DOTALL,
)

_FOLLOWING_WORD = re.compile(rf'[ \t]+([{LETTERS}][{LETTERS}0-9]*)')

_GROUP_KINDS: dict[str, TokenKind] = {
    'NEWLINE': TokenKind.NEWLINE,
    'WHITESPACE': TokenKind.WHITESPACE,
    'LINE_COMMENT': TokenKind.COMMENT,
    'BLOCK_COMMENT': TokenKind.COMMENT,
    'STRING': TokenKind.STRING,
    'BAD_STRING': TokenKind.UNKNOWN,
    'NUMBER': TokenKind.NUMBER,
    'MISMATCH': TokenKind.UNKNOWN,
}

# Opening keywords that give ``hacer`` its meaning on the same line.
_HACER_OWNERS: dict[TokenKind, TokenKind] = {
    TokenKind.MIENTRAS: TokenKind.HACER_MIENTRAS,
    TokenKind.SEGUN: TokenKind.HACER_SEGUN,
    TokenKind.PARA: TokenKind.HACER,
}


def _match_multiword(code: str, pos: int, words: tuple[str, ...]) -> int | None:
    """
    Try to match the trailing words of a multi-word keyword.

    Parameters:
        code (str): The full source.
        pos (int): Offset just after the first word.
        words (tuple[str, ...]): Normalized words that must follow.

    Returns:
        int | None: The offset after the last word, or None if they don't follow.
    """
    for word in words:
        match_obj = _FOLLOWING_WORD.match(code, pos)
        if match_obj is None or normalize_word(match_obj.group(1)) != word:
            return None
        pos = match_obj.end()
    return pos


def _resolve_hacer(tokens: list[Token]) -> TokenKind:
    """
    Decide which ``hacer`` this is by looking back along the current line.
    """
    for tok in reversed(tokens):
        if tok.kind in (TokenKind.NEWLINE, TokenKind.SEMICOLON):
            break
        if tok.kind in _HACER_OWNERS:
            return _HACER_OWNERS[tok.kind]
    return TokenKind.HACER


def tokenize(code: str) -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    The returned list always ends with exactly one ``EOF`` token, and the
    text of all tokens joined together equals ``code``.

    Parameters:
        code (str): The source code to tokenize.

    Returns:
        list[Token]: A list of Token instances.
    """
    tokens: list[Token] = []
    line_num = 1
    line_start = 0
    pos = 0

    while pos < len(code):
        match_obj = TOKEN_REGEX.match(code, pos)
        group = match_obj.lastgroup
        end = match_obj.end()
        column = pos - line_start + 1

        if group == 'WORD':
            word = normalize_word(match_obj.group())
            kind = KEYWORDS.get(word, TokenKind.IDENTIFIER)
            for rest, multi_kind in MULTIWORD_KEYWORDS.get(word, []):
                multi_end = _match_multiword(code, end, rest)
                if multi_end is not None:
                    kind = multi_kind
                    end = multi_end
                    break
            if kind == TokenKind.HACER:
                kind = _resolve_hacer(tokens)
        elif group in _GROUP_KINDS:
            kind = _GROUP_KINDS[group]
        else:
            kind = TokenKind[group]

        text = code[pos:end]
        tokens.append(Token(kind, text, line_num, column, pos))

        newlines = text.count('\n')
        if newlines:
            line_num += newlines
            line_start = pos + text.rindex('\n') + 1
        pos = end

    tokens.append(Token(TokenKind.EOF, '', line_num, pos - line_start + 1, pos))
    logger.debug("tokenized %d characters into %d tokens", len(code), len(tokens))
    return tokens
