"""Token definitions for the pseudocode language.

Every token produced by :func:`pseudocoder.lexer.tokenize` is tagged with a
:class:`TokenKind`. Structural kinds (whitespace, newlines and comments) are
kept in the stream so that concatenating the text of every token gives back
the source text, which is what the highlighter relies on.


File: tokens.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from enum import Enum
import unicodedata


class TokenKind(str, Enum):
    """
    Enumeration of every token kind the lexer can emit.
    """

    # Program and block delimiters
    PROCESO = "proceso"
    FINPROCESO = "finproceso"
    ALGORITMO = "algoritmo"
    FINALGORITMO = "finalgoritmo"
    SUBPROCESO = "subproceso"
    FINSUBPROCESO = "finsubproceso"
    FUNCION = "funcion"
    FINFUNCION = "finfuncion"

    # Declarations and I/O
    DEFINIR = "definir"
    COMO = "como"
    DIMENSION = "dimension"
    LEER = "leer"
    ESCRIBIR = "escribir"
    POR_REFERENCIA = "por_referencia"
    POR_VALOR = "por_valor"

    # Control flow
    SI = "si"
    ENTONCES = "entonces"
    SINO = "sino"
    FINSI = "finsi"
    SEGUN = "segun"
    HACER_SEGUN = "hacer_segun"
    DE_OTRO_MODO = "de_otro_modo"
    FINSEGUN = "finsegun"
    MIENTRAS = "mientras"
    HACER_MIENTRAS = "hacer_mientras"
    FINMIENTRAS = "finmientras"
    REPETIR = "repetir"
    HASTA_QUE = "hasta_que"
    PARA = "para"
    HASTA = "hasta"
    CON_PASO = "con_paso"
    HACER = "hacer"
    FINPARA = "finpara"

    # Type names
    ENTERO = "entero"
    REAL = "real"
    NUMERO = "numero"
    NUMERICO = "numerico"
    LOGICO = "logico"
    CARACTER = "caracter"
    TEXTO = "texto"
    CADENA = "cadena"

    # Literals
    VERDADERO = "verdadero"
    FALSO = "falso"
    STRING = "string"
    NUMBER = "number"
    IDENTIFIER = "identifier"

    # Assignment
    ASSIGN = "assign"

    # Arithmetic operators
    PLUS = "plus"
    MINUS = "minus"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"
    POW = "pow"

    # Relational operators
    EQ = "eq"
    NE = "ne"
    LT = "lt"
    GT = "gt"
    LE = "le"
    GE = "ge"

    # Logical operators
    AND = "and"
    OR = "or"
    NOT = "not"

    # Punctuation
    LPAREN = "lparen"
    RPAREN = "rparen"
    LBRACKET = "lbracket"
    RBRACKET = "rbracket"
    COMMA = "comma"
    SEMICOLON = "semicolon"
    COLON = "colon"

    # Structural
    COMMENT = "comment"
    WHITESPACE = "whitespace"
    NEWLINE = "newline"
    EOF = "eof"
    UNKNOWN = "unknown"

    def __str__(self) -> str:  # pragma: no cover - trivial
        """
        Return the underlying string value for nicer debug output.
        """
        return self.value


# Single-word keywords, keyed by their lowercase unaccented spelling.
KEYWORDS: dict[str, TokenKind] = {
    "proceso": TokenKind.PROCESO,
    "finproceso": TokenKind.FINPROCESO,
    "algoritmo": TokenKind.ALGORITMO,
    "finalgoritmo": TokenKind.FINALGORITMO,
    "subproceso": TokenKind.SUBPROCESO,
    "finsubproceso": TokenKind.FINSUBPROCESO,
    "funcion": TokenKind.FUNCION,
    "finfuncion": TokenKind.FINFUNCION,
    "definir": TokenKind.DEFINIR,
    "como": TokenKind.COMO,
    "dimension": TokenKind.DIMENSION,
    "leer": TokenKind.LEER,
    "escribir": TokenKind.ESCRIBIR,
    "si": TokenKind.SI,
    "entonces": TokenKind.ENTONCES,
    "sino": TokenKind.SINO,
    "finsi": TokenKind.FINSI,
    "segun": TokenKind.SEGUN,
    "deotromodo": TokenKind.DE_OTRO_MODO,
    "finsegun": TokenKind.FINSEGUN,
    "mientras": TokenKind.MIENTRAS,
    "finmientras": TokenKind.FINMIENTRAS,
    "repetir": TokenKind.REPETIR,
    "hastaque": TokenKind.HASTA_QUE,
    "para": TokenKind.PARA,
    "hasta": TokenKind.HASTA,
    "finpara": TokenKind.FINPARA,
    "hacer": TokenKind.HACER,
    "entero": TokenKind.ENTERO,
    "real": TokenKind.REAL,
    "numero": TokenKind.NUMERO,
    "numerico": TokenKind.NUMERICO,
    "logico": TokenKind.LOGICO,
    "caracter": TokenKind.CARACTER,
    "texto": TokenKind.TEXTO,
    "cadena": TokenKind.CADENA,
    "verdadero": TokenKind.VERDADERO,
    "falso": TokenKind.FALSO,
    "y": TokenKind.AND,
    "o": TokenKind.OR,
    "no": TokenKind.NOT,
    "mod": TokenKind.MOD,
}

# Keywords spelled as two or more words. The first word selects the
# candidates; the remaining words must follow on the same line.
MULTIWORD_KEYWORDS: dict[str, list[tuple[tuple[str, ...], TokenKind]]] = {
    "hasta": [(("que",), TokenKind.HASTA_QUE)],
    "con": [(("paso",), TokenKind.CON_PASO)],
    "por": [
        (("referencia",), TokenKind.POR_REFERENCIA),
        (("valor",), TokenKind.POR_VALOR),
    ],
    "de": [(("otro", "modo"), TokenKind.DE_OTRO_MODO)],
}

TYPE_KINDS = frozenset({
    TokenKind.ENTERO,
    TokenKind.REAL,
    TokenKind.NUMERO,
    TokenKind.NUMERICO,
    TokenKind.LOGICO,
    TokenKind.CARACTER,
    TokenKind.TEXTO,
    TokenKind.CADENA,
})

# Tokens the parser never matches against the grammar.
TRIVIA_KINDS = frozenset({
    TokenKind.WHITESPACE,
    TokenKind.COMMENT,
})


def normalize_word(word: str) -> str:
    """
    Lowercase a word and strip accents from its vowels (``ñ`` is kept).
    """
    result = []
    for char in word.lower():
        if char == "ñ":
            result.append(char)
            continue
        decomposed = unicodedata.normalize("NFD", char)
        result.append(decomposed[0])
    return "".join(result)


class Token:
    """
    Represents a lexical token with its kind, source text and position.
    """
    def __init__(self, kind: TokenKind, text: str, line: int, column: int, offset: int):
        """
        Initialize a new token.

        Parameters:
            kind (TokenKind): The token kind.
            text (str): The exact source text of the token.
            line (int): 1-based line number.
            column (int): 1-based column number.
            offset (int): 0-based offset into the source string.
        """
        self.kind = kind
        self.text = text
        self.line = line
        self.column = column
        self.offset = offset

    def __eq__(self, other) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.text == other.text
            and self.line == other.line
            and self.column == other.column
            and self.offset == other.offset
        )

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return (
            f"Token({self.kind.name}, {self.text!r}, "
            f"line={self.line}, column={self.column})"
        )
