"""
Pseudocoder: an interpreter for Spanish-keyword educational pseudocode.

Public entry points:
    execute_pseudocode  Run a program and return its output as one string.
    run_pseudocode      Same, returning a RunResult with the error separated.
    tokenize            Lossless tokenizer used by the parser and highlighter.
    Parser, parse       Recursive descent parser producing a Program.
    Interpreter         Tree-walk evaluator.


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from pseudocoder.exceptions import ExecutionError, ParseError, PseudoError
from pseudocoder.interpreter import Environment, Interpreter
from pseudocoder.lexer import tokenize
from pseudocoder.parser import Parser, parse
from pseudocoder.runner import RunResult, execute_pseudocode, run_pseudocode

__all__ = [
    "Environment",
    "ExecutionError",
    "Interpreter",
    "ParseError",
    "Parser",
    "PseudoError",
    "RunResult",
    "execute_pseudocode",
    "parse",
    "run_pseudocode",
    "tokenize",
]
