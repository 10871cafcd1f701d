"""
Pseudocode runner.

This is the single entry point used by the CLI and any other front-end.

Workflow:
1. The Lexer tokenizes the source code into tokens.
2. The Parser processes the tokens into an AST following the language grammar.
3. The Interpreter walks the AST, executing statements and collecting output.
4. Errors from any stage are turned into one diagnostic line appended to the
   output produced so far, so the caller always receives a string.


File: runner.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable

from pseudocoder.exceptions import PseudoError
from pseudocoder.interpreter import InputProvider, Interpreter
from pseudocoder.lexer import tokenize
from pseudocoder.parser import Parser

logger = logging.getLogger(__name__)

NO_CODE_MESSAGE = "No hay codigo para ejecutar"


@dataclass
class RunResult:
    """Outcome of one run."""
    output: str
    error: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def text(self) -> str:
        """
        The output followed by the diagnostic line, if any.
        """
        if self.error is None:
            return self.output
        return f"{self.output}\n{self.error}" if self.output else self.error


def run_pseudocode(
    code: str,
    inputs: Iterable[str] | None = None,
    input_provider: InputProvider | None = None,
    max_iterations: int | None = None,
) -> RunResult:
    """
    Lex, parse and run a program.

    Parameters:
        code (str): The program source.
        inputs: Pre-recorded input lines, consumed one per ``Leer`` target.
        input_provider: Called for further input once ``inputs`` runs out.
        max_iterations: Optional cap on the iterations of any single loop.

    Returns:
        RunResult: The output, the diagnostic line if the run failed, and
        any input warnings.
    """
    if not code.strip():
        return RunResult("", f"Error: {NO_CODE_MESSAGE}")

    interpreter = Interpreter(input_provider=input_provider, max_iterations=max_iterations)
    try:
        tokens = tokenize(code)
        program = Parser(tokens).parse()
        output = interpreter.evaluate(program, inputs)
        return RunResult(output, None, interpreter.warnings)
    except PseudoError as e:
        logger.debug("run aborted: %s", e.describe())
        error = e.describe()
    except RecursionError:
        logger.exception("recursion limit reached")
        error = "Error: Demasiadas llamadas anidadas"
    except Exception as e:
        logger.exception("unexpected error while running pseudocode")
        error = f"Error: {type(e).__name__}: {e}"
    return RunResult(interpreter.output_text(), error, interpreter.warnings)


def execute_pseudocode(
    code: str,
    inputs: Iterable[str] | None = None,
    input_provider: InputProvider | None = None,
    max_iterations: int | None = None,
) -> str:
    """
    Run a program and return everything it printed, plus a trailing
    diagnostic line if it failed. Never raises for bad programs.
    """
    return run_pseudocode(code, inputs, input_provider, max_iterations).text
