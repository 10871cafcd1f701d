"""
Expression parsing utilities for the pseudocode language.

These functions operate on a `pseudocoder.parser.parser.Parser` instance and
implement the recursive descent logic for expressions, maintaining
operator precedence and associativity. From lowest to highest precedence:

    O  <  Y  <  NO  <  relational  <  + -  <  * / % MOD  <  ^  <  unary - +

All binary operators are left-associative except ``^``. Newlines may follow
a binary operator and may appear anywhere inside parentheses.
"""

from typing import TYPE_CHECKING

from pseudocoder.nodes import (
    BinaryOp,
    BoolLit,
    CallExpr,
    Identifier,
    NumberLit,
    StringLit,
    UnaryOp,
)
from pseudocoder.operations import Op
from pseudocoder.tokens import TokenKind
from pseudocoder.values import normalize_number

if TYPE_CHECKING:
    from pseudocoder.parser import Parser


COMPARISON_OPS = {
    TokenKind.EQ: Op.EQ,
    TokenKind.NE: Op.NE,
    TokenKind.LT: Op.LT,
    TokenKind.GT: Op.GT,
    TokenKind.LE: Op.LE,
    TokenKind.GE: Op.GE,
}

ADDITIVE_OPS = {
    TokenKind.PLUS: Op.ADD,
    TokenKind.MINUS: Op.SUB,
}

MULTIPLICATIVE_OPS = {
    TokenKind.MUL: Op.MUL,
    TokenKind.DIV: Op.DIV,
    TokenKind.MOD: Op.MOD,
}


def _binary(parser: 'Parser', left, op: Op, operand_parser):
    """Consume the operator token and build a node positioned at ``left``."""
    parser.advance()
    parser.skip_newlines()
    right = operand_parser(parser)
    return BinaryOp(left, op, right, left.line, left.column)


# ---- Highest precedence ----

def parse_arguments(parser: 'Parser') -> list:
    """Parse a parenthesized, comma-separated argument list."""
    parser.eat(TokenKind.LPAREN)
    parser.skip_newlines()
    args = []
    if parser.curr_token.kind != TokenKind.RPAREN:
        args.append(parse_expr(parser))
        parser.skip_newlines()
        while parser.accept(TokenKind.COMMA):
            parser.skip_newlines()
            args.append(parse_expr(parser))
            parser.skip_newlines()
    parser.eat(TokenKind.RPAREN)
    return args


def parse_primary(parser: 'Parser'):
    """Parse a literal, variable, function call or parenthesized expression."""
    tok = parser.curr_token

    if tok.kind == TokenKind.NUMBER:
        parser.advance()
        return NumberLit(normalize_number(float(tok.text)), tok.line, tok.column)

    if tok.kind == TokenKind.STRING:
        parser.advance()
        return StringLit(tok.text[1:-1], tok.line, tok.column)

    if tok.kind in (TokenKind.VERDADERO, TokenKind.FALSO):
        parser.advance()
        return BoolLit(tok.kind == TokenKind.VERDADERO, tok.line, tok.column)

    if tok.kind == TokenKind.IDENTIFIER:
        parser.advance()
        if parser.curr_token.kind == TokenKind.LPAREN:
            args = parse_arguments(parser)
            return CallExpr(tok.text, args, tok.line, tok.column)
        return Identifier(tok.text, tok.line, tok.column)

    if tok.kind == TokenKind.LPAREN:
        parser.advance()
        parser.skip_newlines()
        node = parse_expr(parser)
        parser.skip_newlines()
        parser.eat(TokenKind.RPAREN)
        return node

    parser.error_expected("una expresion")


def parse_unary(parser: 'Parser'):
    """Parse unary minus and plus."""
    tok = parser.curr_token
    if tok.kind in (TokenKind.MINUS, TokenKind.PLUS):
        parser.advance()
        op = Op.SUB if tok.kind == TokenKind.MINUS else Op.ADD
        return UnaryOp(op, parse_unary(parser), tok.line, tok.column)
    return parse_primary(parser)


def parse_power(parser: 'Parser'):
    """Parse exponentiation, which groups to the right."""
    base = parse_unary(parser)
    if parser.curr_token.kind == TokenKind.POW:
        return _binary(parser, base, Op.POW, parse_power)
    return base


def parse_term(parser: 'Parser'):
    """Parse multiplication, division, and modulus expressions."""
    result = parse_power(parser)
    while parser.curr_token.kind in MULTIPLICATIVE_OPS:
        op = MULTIPLICATIVE_OPS[parser.curr_token.kind]
        result = _binary(parser, result, op, parse_power)
    return result


def parse_add_sub(parser: 'Parser'):
    """Parse addition and subtraction expressions."""
    result = parse_term(parser)
    while parser.curr_token.kind in ADDITIVE_OPS:
        op = ADDITIVE_OPS[parser.curr_token.kind]
        result = _binary(parser, result, op, parse_term)
    return result


def parse_comparison(parser: 'Parser'):
    """Parse comparison expressions (=, <>, !=, <, >, <=, >=)."""
    result = parse_add_sub(parser)
    while parser.curr_token.kind in COMPARISON_OPS:
        op = COMPARISON_OPS[parser.curr_token.kind]
        result = _binary(parser, result, op, parse_add_sub)
    return result


def parse_not(parser: 'Parser'):
    """Parse logical negation using 'NO' or '!'."""
    tok = parser.curr_token
    if tok.kind == TokenKind.NOT:
        parser.advance()
        return UnaryOp(Op.NOT, parse_not(parser), tok.line, tok.column)
    return parse_comparison(parser)


def parse_logical_and(parser: 'Parser'):
    """Parse logical AND expressions using 'Y' or '&'."""
    result = parse_not(parser)
    while parser.curr_token.kind == TokenKind.AND:
        result = _binary(parser, result, Op.AND, parse_not)
    return result


def parse_logical_or(parser: 'Parser'):
    """Parse logical OR expressions using 'O' or '|'."""
    result = parse_logical_and(parser)
    while parser.curr_token.kind == TokenKind.OR:
        result = _binary(parser, result, Op.OR, parse_logical_and)
    return result


# ---- Entry point ----

def parse_expr(parser: 'Parser'):
    """Parse an expression starting from the lowest-precedence operator."""
    return parse_logical_or(parser)
