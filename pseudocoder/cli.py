"""
Pseudocode command-line interface.

Usage:
    pseudocoder ejecutar programa.psc [--entradas entradas.txt] [--no-interactivo]
    pseudocoder resaltar programa.psc
    pseudocoder tokens programa.psc

Environment:
    PSEUDODEBUG                 When set, print the tokens and AST before running
                                and log at debug level.
    PSEUDOCODER_MAX_ITERATIONS  Default iteration limit for every loop.


File: cli.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import argparse
import logging
import os
import sys

from pseudocoder.exceptions import PseudoError
from pseudocoder.highlight import to_ansi
from pseudocoder.lexer import tokenize
from pseudocoder.parser import Parser
from pseudocoder.runner import run_pseudocode

logger = logging.getLogger(__name__)


def _read_source(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _read_inputs(path: str | None) -> list[str]:
    if path is None:
        return []
    return _read_source(path).splitlines()


def interactive_input(name: str) -> str | None:
    """
    Ask for one line on the terminal. Returns None if input was cancelled.
    """
    try:
        return input(f"{name}? ")
    except (EOFError, KeyboardInterrupt):
        print()
        return None


def debug_print_tokens_ast(code: str) -> None:
    """
    Print tokenized source and AST
    """
    tokens = tokenize(code)
    print("\nTokens:\n")
    for tok in tokens:
        print(tok)
    print("\nAST:\n")
    try:
        print(Parser(tokens).parse())
    except PseudoError as e:
        print(e.describe())
    print(" ")


def _default_max_iterations() -> int | None:
    value = os.environ.get("PSEUDOCODER_MAX_ITERATIONS")
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning("ignoring PSEUDOCODER_MAX_ITERATIONS=%r, not an integer", value)
        return None


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser for the CLI.
    """
    parser = argparse.ArgumentParser(
        prog="pseudocoder",
        description="Interprete de pseudocodigo en espanol.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # ejecutar
    p_run = sub.add_parser("ejecutar", help="Run a pseudocode program")
    p_run.add_argument("src", help="Path to the .psc source file")
    p_run.add_argument(
        "--entradas",
        metavar="FILE",
        default=None,
        help="File with pre-recorded input, one value per line"
    )
    p_run.add_argument(
        "--no-interactivo",
        action="store_true",
        help="Never prompt; variables read after the inputs run out stay unset"
    )
    p_run.add_argument(
        "--max-iteraciones",
        metavar="N",
        type=int,
        default=_default_max_iterations(),
        help="Abort any loop that runs more than N iterations"
    )

    # resaltar
    p_hl = sub.add_parser("resaltar", help="Print the source with syntax highlighting")
    p_hl.add_argument("src", help="Path to the .psc source file")

    # tokens
    p_tok = sub.add_parser("tokens", help="Print the token stream")
    p_tok.add_argument("src", help="Path to the .psc source file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the CLI.

    Returns:
        int: 0 on success, 1 if the program failed.
    """
    args = build_parser().parse_args(argv)
    debug = bool(os.environ.get("PSEUDODEBUG"))
    logging.basicConfig(
        level=logging.DEBUG if args.verbose or debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        code = _read_source(args.src)
    except OSError as e:
        print(f"No se pudo leer '{args.src}': {e}", file=sys.stderr)
        return 1

    if args.command == "resaltar":
        print(to_ansi(code))
        return 0

    if args.command == "tokens":
        for tok in tokenize(code):
            print(tok)
        return 0

    if debug:
        debug_print_tokens_ast(code)

    try:
        inputs = _read_inputs(args.entradas)
    except OSError as e:
        print(f"No se pudo leer '{args.entradas}': {e}", file=sys.stderr)
        return 1

    result = run_pseudocode(
        code,
        inputs=inputs,
        input_provider=None if args.no_interactivo else interactive_input,
        max_iterations=args.max_iteraciones,
    )
    print(result.text)
    return 1 if result.failed else 0


if __name__ == "__main__":
    sys.exit(main())
