"""
Helpers for wording parse errors.

Token kinds are spelled the way a user writes them (``FinProceso``, ``'<-'``)
and the offending token is quoted from the source.
"""

from pseudocoder.tokens import Token, TokenKind

# How token kinds are spelled in error messages.
KIND_NAMES: dict[TokenKind, str] = {
    TokenKind.PROCESO: "Proceso",
    TokenKind.FINPROCESO: "FinProceso",
    TokenKind.ALGORITMO: "Algoritmo",
    TokenKind.FINALGORITMO: "FinAlgoritmo",
    TokenKind.SUBPROCESO: "SubProceso",
    TokenKind.FINSUBPROCESO: "FinSubProceso",
    TokenKind.FUNCION: "Funcion",
    TokenKind.FINFUNCION: "FinFuncion",
    TokenKind.COMO: "Como",
    TokenKind.ENTONCES: "Entonces",
    TokenKind.SINO: "Sino",
    TokenKind.FINSI: "FinSi",
    TokenKind.HACER_SEGUN: "Hacer",
    TokenKind.HACER_MIENTRAS: "Hacer",
    TokenKind.HACER: "Hacer",
    TokenKind.DE_OTRO_MODO: "De Otro Modo",
    TokenKind.FINSEGUN: "FinSegun",
    TokenKind.FINMIENTRAS: "FinMientras",
    TokenKind.HASTA_QUE: "Hasta Que",
    TokenKind.HASTA: "Hasta",
    TokenKind.FINPARA: "FinPara",
    TokenKind.IDENTIFIER: "un identificador",
    TokenKind.ASSIGN: "'<-'",
    TokenKind.EQ: "'='",
    TokenKind.LPAREN: "'('",
    TokenKind.RPAREN: "')'",
    TokenKind.COMMA: "','",
    TokenKind.COLON: "':'",
}

# Keywords that close a statement sequence.
TERMINATOR_KINDS = frozenset({
    TokenKind.FINPROCESO,
    TokenKind.FINALGORITMO,
    TokenKind.FINSUBPROCESO,
    TokenKind.FINFUNCION,
    TokenKind.FINSI,
    TokenKind.SINO,
    TokenKind.FINSEGUN,
    TokenKind.DE_OTRO_MODO,
    TokenKind.FINMIENTRAS,
    TokenKind.HASTA_QUE,
    TokenKind.FINPARA,
})


def kind_name(kind: TokenKind) -> str:
    """
    Return the spelling of a token kind for use in error messages.
    """
    return KIND_NAMES.get(kind, kind.name)


def expected_names(kinds) -> str:
    """
    Join the spellings of several kinds, dropping duplicates.
    """
    return " o ".join(dict.fromkeys(kind_name(kind) for kind in kinds))


def describe_token(tok: Token) -> str:
    """
    Describe the token actually found, for use in error messages.
    """
    if tok.kind == TokenKind.EOF:
        return "el fin del archivo"
    if tok.kind == TokenKind.NEWLINE:
        return "un salto de linea"
    return f"'{tok.text}'"
