"""
Utility functions shared across pseudocoder tests.
"""
from pseudocoder.interpreter import Interpreter
from pseudocoder.lexer import tokenize
from pseudocoder.parser import Parser
from pseudocoder.tokens import TRIVIA_KINDS, TokenKind


def parse_source(source: str):
    """
    Parse source code and return the Program node.
    """
    return Parser(tokenize(source)).parse()


def run_source(source: str, inputs=None, **kwargs) -> Interpreter:
    """
    Run source code and return the interpreter instance after execution.
    """
    interpreter = Interpreter(**kwargs)
    interpreter.evaluate(parse_source(source), inputs)
    return interpreter


def program(*lines: str, name: str = "Prueba") -> str:
    """
    Wrap statement lines in a Proceso block.
    """
    body = "".join(f"    {line}\n" for line in lines)
    return f"Proceso {name}\n{body}FinProceso\n"


def kinds(source: str) -> list[TokenKind]:
    """
    Token kinds of ``source`` without whitespace, comments or EOF.
    """
    return [
        tok.kind for tok in tokenize(source)
        if tok.kind not in TRIVIA_KINDS and tok.kind != TokenKind.EOF
    ]
