"""Statement parsing utilities for the pseudocode language.

These functions operate on a `pseudocoder.parser.parser.Parser` instance and
handle the program block, function declarations and the various statement
forms: output, input, declarations, assignment, calls, conditionals and
loops.

Statements are dispatched on their leading keyword. A statement that starts
with an identifier is an assignment when the identifier is followed by
``<-`` (or ``=``), and a call when it is followed by ``(``.


File: statements.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from pseudocoder.nodes import (
    Assign,
    Block,
    Call,
    Declare,
    ForCount,
    FunctionDecl,
    Identifier,
    If,
    Param,
    Read,
    Repeat,
    Switch,
    SwitchCase,
    While,
    Write,
)
from pseudocoder.tokens import TYPE_KINDS, TokenKind, normalize_word

from .expressions import parse_arguments
from .messages import TERMINATOR_KINDS, describe_token, expected_names

if TYPE_CHECKING:
    from pseudocoder.parser import Parser


# Block openers and the terminator each one requires.
BLOCK_TERMINATORS = {
    TokenKind.PROCESO: TokenKind.FINPROCESO,
    TokenKind.ALGORITMO: TokenKind.FINALGORITMO,
    TokenKind.FUNCION: TokenKind.FINFUNCION,
    TokenKind.SUBPROCESO: TokenKind.FINSUBPROCESO,
}

ASSIGN_KINDS = (TokenKind.ASSIGN, TokenKind.EQ)

STATEMENT_KEYWORDS = frozenset({
    TokenKind.ESCRIBIR,
    TokenKind.LEER,
    TokenKind.DEFINIR,
    TokenKind.DIMENSION,
    TokenKind.MIENTRAS,
    TokenKind.SI,
    TokenKind.PARA,
    TokenKind.SEGUN,
    TokenKind.REPETIR,
})


def _identifier(parser: 'Parser', what: str) -> Identifier:
    """Consume an identifier token, describing it as ``what`` on failure."""
    tok = parser.curr_token
    if tok.kind != TokenKind.IDENTIFIER:
        parser.error_expected(what)
    parser.advance()
    return Identifier(tok.text, tok.line, tok.column)


def _identifier_list(parser: 'Parser', what: str) -> list[Identifier]:
    """Parse ``<identifier> (, <identifier>)*``."""
    targets = [_identifier(parser, what)]
    while parser.accept(TokenKind.COMMA):
        targets.append(_identifier(parser, what))
    return targets


def parse_program_block(parser: 'Parser') -> Block:
    """
    Parse the main program block.

    Syntax:
        Proceso <name> <statement>* FinProceso
        Algoritmo <name> <statement>* FinAlgoritmo

    Args:
        parser: The parser instance.

    Returns:
        Block: the block node.
    """
    tok = parser.eat(TokenKind.PROCESO, TokenKind.ALGORITMO)
    name = _identifier(parser, f"el nombre del {tok.text}")
    terminator = BLOCK_TERMINATORS[tok.kind]
    body = parser.statements(terminator)
    parser.eat(terminator)
    parser.accept(TokenKind.SEMICOLON)
    return Block(name, body, tok.line, tok.column)


def parse_function_decl(parser: 'Parser') -> FunctionDecl:
    """
    Parse a function declaration.

    Syntax:
        Funcion [<result> <-] <name>[(<param> [Por Referencia|Por Valor], ...)]
            <statement>*
        FinFuncion

    ``SubProceso``/``FinSubProceso`` are accepted as synonyms.

    Args:
        parser: The parser instance.

    Returns:
        FunctionDecl: the declaration node.
    """
    tok = parser.eat(TokenKind.FUNCION, TokenKind.SUBPROCESO)
    first = _identifier(parser, "el nombre de la funcion")
    result_var = None
    name = first
    if parser.curr_token.kind in ASSIGN_KINDS:
        parser.advance()
        result_var = first.name
        name = _identifier(parser, "el nombre de la funcion")

    params = []
    if parser.curr_token.kind == TokenKind.LPAREN:
        parser.advance()
        if parser.curr_token.kind != TokenKind.RPAREN:
            params.append(_parse_param(parser))
            while parser.accept(TokenKind.COMMA):
                params.append(_parse_param(parser))
        parser.eat(TokenKind.RPAREN)

    terminator = BLOCK_TERMINATORS[tok.kind]
    body = parser.statements(terminator)
    parser.eat(terminator)
    parser.accept(TokenKind.SEMICOLON)
    return FunctionDecl(name.name, params, result_var, body, tok.line, tok.column)


def _parse_param(parser: 'Parser') -> Param:
    """Parse one formal parameter with its optional passing mode."""
    ident = _identifier(parser, "el nombre de un parametro")
    by_reference = False
    if parser.accept(TokenKind.POR_REFERENCIA):
        by_reference = True
    else:
        parser.accept(TokenKind.POR_VALOR)
    return Param(ident.name, by_reference, ident.line, ident.column)


def parse_statements(parser: 'Parser', terminators: tuple) -> list:
    """
    Parse a statement sequence up to (not including) one of ``terminators``.

    Args:
        parser: The parser instance.
        terminators: token kinds that end the sequence.

    Returns:
        list: the statement nodes.
    """
    statements = []
    while True:
        parser.skip_separators()
        tok = parser.curr_token
        if tok.kind in terminators:
            return statements
        if tok.kind == TokenKind.EOF or tok.kind in TERMINATOR_KINDS:
            parser.error_expected(expected_names(terminators))
        statements.append(parser.statement())


def at_statement_start(parser: 'Parser') -> bool:
    """Return True if the current token can begin a statement."""
    tok = parser.curr_token
    if tok.kind in STATEMENT_KEYWORDS:
        return True
    if tok.kind == TokenKind.IDENTIFIER:
        following = parser.peek().kind
        return following in ASSIGN_KINDS or following == TokenKind.LPAREN
    return False


def parse_statement(parser: 'Parser'):
    """
    Parse a single statement.

    Args:
        parser: The parser instance.

    Returns:
        The statement node.
    """
    tok = parser.curr_token
    if tok.kind == TokenKind.ESCRIBIR:
        return parse_write(parser)
    elif tok.kind == TokenKind.LEER:
        return parse_read(parser)
    elif tok.kind == TokenKind.DEFINIR:
        return parse_declaration(parser)
    elif tok.kind == TokenKind.MIENTRAS:
        return parse_while(parser)
    elif tok.kind == TokenKind.SI:
        return parse_if(parser)
    elif tok.kind == TokenKind.PARA:
        return parse_for(parser)
    elif tok.kind == TokenKind.SEGUN:
        return parse_switch(parser)
    elif tok.kind == TokenKind.REPETIR:
        return parse_repeat(parser)
    elif tok.kind == TokenKind.DIMENSION:
        parser.error("Los arreglos ('Dimension') no estan soportados")
    elif tok.kind in (TokenKind.FUNCION, TokenKind.SUBPROCESO):
        parser.error("Las funciones deben declararse fuera del bloque principal")
    elif tok.kind == TokenKind.IDENTIFIER:
        following = parser.peek().kind
        if following in ASSIGN_KINDS:
            return parse_assignment(parser)
        if following == TokenKind.LPAREN:
            return parse_call(parser)
    parser.error(f"Instruccion no reconocida: {describe_token(tok)}")


def parse_write(parser: 'Parser') -> Write:
    """
    Parse an 'Escribir' statement.

    Syntax:
        Escribir <expression> (, <expression>)*

    Args:
        parser: The parser instance.

    Returns:
        Write: the statement node.
    """
    tok = parser.eat(TokenKind.ESCRIBIR)
    exprs = [parser.expr()]
    while parser.accept(TokenKind.COMMA):
        parser.skip_newlines()
        exprs.append(parser.expr())
    return Write(exprs, tok.line, tok.column)


def parse_read(parser: 'Parser') -> Read:
    """
    Parse a 'Leer' statement.

    Syntax:
        Leer <identifier> (, <identifier>)*

    Args:
        parser: The parser instance.

    Returns:
        Read: the statement node.
    """
    tok = parser.eat(TokenKind.LEER)
    targets = _identifier_list(parser, "una variable")
    return Read(targets, tok.line, tok.column)


def parse_declaration(parser: 'Parser') -> Declare:
    """
    Parse a 'Definir' declaration.

    Syntax:
        Definir <identifier> (, <identifier>)* Como <type>

    The type is one of the type keywords or any identifier (a user type).

    Args:
        parser: The parser instance.

    Returns:
        Declare: the statement node.
    """
    tok = parser.eat(TokenKind.DEFINIR)
    targets = _identifier_list(parser, "una variable")
    parser.eat(TokenKind.COMO)
    type_tok = parser.curr_token
    if type_tok.kind not in TYPE_KINDS and type_tok.kind != TokenKind.IDENTIFIER:
        parser.error_expected("un tipo de dato")
    parser.advance()
    return Declare(targets, normalize_word(type_tok.text), tok.line, tok.column)


def parse_assignment(parser: 'Parser') -> Assign:
    """
    Parse an assignment.

    Syntax:
        <identifier> <- <expression>
        <identifier> = <expression>

    Args:
        parser: The parser instance.

    Returns:
        Assign: the statement node.
    """
    target = _identifier(parser, "una variable")
    parser.skip_newlines()
    parser.eat(*ASSIGN_KINDS)
    parser.skip_newlines()
    expr_node = parser.expr()
    return Assign(target, expr_node, target.line, target.column)


def parse_call(parser: 'Parser') -> Call:
    """
    Parse a function call used as a statement.

    Syntax:
        <identifier>(<expression>, ...)

    Args:
        parser: The parser instance.

    Returns:
        Call: the statement node.
    """
    name = _identifier(parser, "el nombre de la funcion")
    args = parse_arguments(parser)
    return Call(name.name, args, name.line, name.column)


def parse_while(parser: 'Parser') -> While:
    """
    Parse a 'Mientras' loop.

    Syntax:
        Mientras <condition> Hacer <statement>* FinMientras

    Args:
        parser: The parser instance.

    Returns:
        While: the statement node.
    """
    tok = parser.eat(TokenKind.MIENTRAS)
    condition = parser.expr()
    parser.skip_newlines()
    parser.eat(TokenKind.HACER_MIENTRAS, TokenKind.HACER)
    body = parser.statements(TokenKind.FINMIENTRAS)
    parser.eat(TokenKind.FINMIENTRAS)
    return While(condition, body, tok.line, tok.column)


def parse_if(parser: 'Parser') -> If:
    """
    Parse a 'Si' conditional with an optional 'Sino' branch.

    Syntax:
        Si <condition> Entonces <statement>* [Sino <statement>*] FinSi

    Args:
        parser: The parser instance.

    Returns:
        If: the statement node.
    """
    tok = parser.eat(TokenKind.SI)
    condition = parser.expr()
    parser.skip_newlines()
    parser.eat(TokenKind.ENTONCES)
    then_body = parser.statements(TokenKind.SINO, TokenKind.FINSI)
    else_body = []
    if parser.accept(TokenKind.SINO):
        else_body = parser.statements(TokenKind.FINSI)
    parser.eat(TokenKind.FINSI)
    return If(condition, then_body, else_body, tok.line, tok.column)


def parse_for(parser: 'Parser') -> ForCount:
    """
    Parse a 'Para' counting loop.

    Syntax:
        Para <identifier> <- <start> Hasta <end> [Con Paso <step>] Hacer
            <statement>*
        FinPara

    Args:
        parser: The parser instance.

    Returns:
        ForCount: the statement node.
    """
    tok = parser.eat(TokenKind.PARA)
    var = _identifier(parser, "la variable del ciclo")
    parser.eat(*ASSIGN_KINDS)
    start = parser.expr()
    parser.eat(TokenKind.HASTA)
    end = parser.expr()
    step = None
    if parser.accept(TokenKind.CON_PASO):
        step = parser.expr()
    parser.skip_newlines()
    parser.eat(TokenKind.HACER)
    body = parser.statements(TokenKind.FINPARA)
    parser.eat(TokenKind.FINPARA)
    return ForCount(var, start, end, step, body, tok.line, tok.column)


def parse_switch(parser: 'Parser') -> Switch:
    """
    Parse a 'Segun' multi-way branch.

    Syntax:
        Segun <expression> Hacer
            <value> (, <value>)* : <statement>*
            ...
            [De Otro Modo : <statement>*]
        FinSegun

    A case body ends where the next case label begins, i.e. at the first
    token that cannot start a statement.

    Args:
        parser: The parser instance.

    Returns:
        Switch: the statement node.
    """
    tok = parser.eat(TokenKind.SEGUN)
    subject = parser.expr()
    parser.skip_newlines()
    parser.eat(TokenKind.HACER_SEGUN, TokenKind.HACER)

    cases = []
    default = None
    while True:
        parser.skip_separators()
        if parser.curr_token.kind == TokenKind.FINSEGUN:
            break
        if parser.curr_token.kind == TokenKind.DE_OTRO_MODO:
            parser.advance()
            parser.eat(TokenKind.COLON)
            default = parser.statements(TokenKind.FINSEGUN)
            break
        if parser.curr_token.kind == TokenKind.EOF:
            parser.error_expected("FinSegun")

        case_tok = parser.curr_token
        values = [parser.expr()]
        while parser.accept(TokenKind.COMMA):
            values.append(parser.expr())
        parser.eat(TokenKind.COLON)

        body = []
        while True:
            parser.skip_separators()
            if not parser.at_statement_start():
                break
            body.append(parser.statement())
        cases.append(SwitchCase(values, body, case_tok.line, case_tok.column))

    parser.eat(TokenKind.FINSEGUN)
    return Switch(subject, cases, default, tok.line, tok.column)


def parse_repeat(parser: 'Parser') -> Repeat:
    """
    Parse a 'Repetir' loop.

    Syntax:
        Repetir <statement>* Hasta Que <condition>

    Args:
        parser: The parser instance.

    Returns:
        Repeat: the statement node.
    """
    tok = parser.eat(TokenKind.REPETIR)
    body = parser.statements(TokenKind.HASTA_QUE)
    parser.eat(TokenKind.HASTA_QUE)
    condition = parser.expr()
    return Repeat(body, condition, tok.line, tok.column)
