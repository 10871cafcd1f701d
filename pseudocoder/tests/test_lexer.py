"""
Tests for the lexer: lossless tokenization, keyword resolution and
tolerance of malformed input.
"""
import pytest

from pseudocoder.lexer import tokenize
from pseudocoder.tokens import TokenKind

from pseudocoder.tests.utils import kinds, program


SOURCES = [
    "",
    program("Definir A,B Como Entero", "Leer A", "Escribir A, \" y \", B"),
    "Proceso P\r\n\tEscribir 'hola'\r\nFinProceso",
    "Escribir \"sin cerrar\nx <- 1",
    "/* comentario sin cerrar\nEscribir 1",
    "// solo un comentario",
    "a <- 3.5 ^ 2 % 4 <> b != c @ #",
    "Según año Hacer\n  1: Escribir 'ñ'\nFinSegún",
]


@pytest.mark.parametrize("source", SOURCES)
def test_tokenize_is_lossless(source):
    tokens = tokenize(source)
    assert "".join(tok.text for tok in tokens) == source


@pytest.mark.parametrize("source", SOURCES)
def test_single_eof_at_end(source):
    tokens = tokenize(source)
    assert tokens[-1].kind == TokenKind.EOF
    assert [tok.kind for tok in tokens].count(TokenKind.EOF) == 1


def test_empty_source_yields_only_eof():
    tokens = tokenize("")
    assert len(tokens) == 1
    assert (tokens[0].line, tokens[0].column, tokens[0].offset) == (1, 1, 0)


def test_keywords_are_case_and_accent_insensitive():
    assert kinds("PROCESO finproceso FinProceso") == [
        TokenKind.PROCESO, TokenKind.FINPROCESO, TokenKind.FINPROCESO,
    ]
    assert kinds("Según Lógico Número Carácter Función") == [
        TokenKind.SEGUN, TokenKind.LOGICO, TokenKind.NUMERO,
        TokenKind.CARACTER, TokenKind.FUNCION,
    ]


def test_identifiers_keep_spanish_letters():
    tokens = tokenize("año_2 <- 1")
    assert tokens[0].kind == TokenKind.IDENTIFIER
    assert tokens[0].text == "año_2"


def test_word_operators():
    assert kinds("a Y b O NO c MOD d") == [
        TokenKind.IDENTIFIER, TokenKind.AND, TokenKind.IDENTIFIER,
        TokenKind.OR, TokenKind.NOT, TokenKind.IDENTIFIER,
        TokenKind.MOD, TokenKind.IDENTIFIER,
    ]


def test_multi_character_operators_are_greedy():
    assert kinds("<- <= >= <> != < > =") == [
        TokenKind.ASSIGN, TokenKind.LE, TokenKind.GE, TokenKind.NE,
        TokenKind.NE, TokenKind.LT, TokenKind.GT, TokenKind.EQ,
    ]


def test_negative_number_is_minus_then_number():
    assert kinds("-5") == [TokenKind.MINUS, TokenKind.NUMBER]
    assert tokenize("3.14")[0].kind == TokenKind.NUMBER


def test_multiword_keywords_join_across_spaces():
    tokens = tokenize("Hasta  Que x")
    assert tokens[0].kind == TokenKind.HASTA_QUE
    assert tokens[0].text == "Hasta  Que"
    assert kinds("Con Paso") == [TokenKind.CON_PASO]
    assert kinds("Por Referencia, Por Valor") == [
        TokenKind.POR_REFERENCIA, TokenKind.COMMA, TokenKind.POR_VALOR,
    ]
    assert kinds("De Otro Modo:") == [TokenKind.DE_OTRO_MODO, TokenKind.COLON]


def test_multiword_keywords_do_not_cross_newlines():
    assert kinds("Hasta\nQue") == [
        TokenKind.HASTA, TokenKind.NEWLINE, TokenKind.IDENTIFIER,
    ]


def test_hasta_alone():
    assert kinds("Hasta 10") == [TokenKind.HASTA, TokenKind.NUMBER]


def test_con_and_paso_alone_are_identifiers():
    assert kinds("con paso") == [TokenKind.CON_PASO]
    assert kinds("con <- paso") == [
        TokenKind.IDENTIFIER, TokenKind.ASSIGN, TokenKind.IDENTIFIER,
    ]


@pytest.mark.parametrize(
    "source, expected",
    [
        ("Mientras x < 3 Hacer", TokenKind.HACER_MIENTRAS),
        ("Segun opcion Hacer", TokenKind.HACER_SEGUN),
        ("Para i <- 1 Hasta 3 Hacer", TokenKind.HACER),
        ("x <- 1\nHacer", TokenKind.HACER),
    ],
)
def test_hacer_is_resolved_by_its_line(source, expected):
    assert kinds(source)[-1] == expected


def test_hacer_after_semicolon_is_generic():
    assert kinds("Mientras a; Hacer")[-1] == TokenKind.HACER


def test_unterminated_string_is_unknown():
    tokens = tokenize('Escribir "hola\nFin')
    bad = [tok for tok in tokens if tok.kind == TokenKind.UNKNOWN]
    assert len(bad) == 1
    assert bad[0].text == '"hola'
    assert bad[0].line == 1
    assert bad[0].column == 10


def test_unknown_character_is_single_token():
    tokens = tokenize("@@")
    assert [tok.kind for tok in tokens] == [
        TokenKind.UNKNOWN, TokenKind.UNKNOWN, TokenKind.EOF,
    ]
    assert tokens[1].column == 2


def test_comments_are_kept():
    tokens = tokenize("// uno\n/* dos\ntres */x")
    comments = [tok for tok in tokens if tok.kind == TokenKind.COMMENT]
    assert [tok.text for tok in comments] == ["// uno", "/* dos\ntres */"]
    ident = [tok for tok in tokens if tok.kind == TokenKind.IDENTIFIER][0]
    assert (ident.line, ident.column) == (3, 8)


def test_unterminated_block_comment_runs_to_end():
    tokens = tokenize("x /* abierto\nsin fin")
    assert tokens[-2].kind == TokenKind.COMMENT
    assert tokens[-2].text == "/* abierto\nsin fin"


def test_positions_are_tracked():
    tokens = tokenize("Proceso P\n  Leer x")
    leer = [tok for tok in tokens if tok.kind == TokenKind.LEER][0]
    assert (leer.line, leer.column, leer.offset) == (2, 3, 12)
    eof = tokens[-1]
    assert (eof.line, eof.column) == (2, 9)
