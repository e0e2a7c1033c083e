"""
Monkey CLI Entrypoint.

This module provides the command-line interface for the Monkey front end.
It lexes and parses source code and prints the result; nothing is evaluated.

Features:
    - Read source from `.monkey` files or inline strings.
    - Print the canonical rendering of the parsed program, its JSON AST, or the raw tokens.
    - Report parser errors and exit with a non-zero status.
    - Launch an interactive read-parse-print loop.

Example usage:
    monkey hello.monkey
    monkey -s "let x = 1 + 2 * 3;"
    monkey -s "fn(x) { x }" --json
    monkey --repl --verbose

Functions:
    run_monkey(source: str, is_string: bool = False, show_tokens: bool = False,
               as_json: bool = False) -> int:
        Runs the pipeline (lex → parse → print) and returns the exit status.

    main() -> int:
        Parses CLI arguments and invokes the appropriate action (REPL or file/string).
"""

import argparse
import json
import logging
import sys
from typing import TextIO

from monkey.monkey_lexer import Lexer
from monkey.monkey_parser import Parser

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_IO_ERROR = 2


def print_parser_errors(errors: list[str], out: TextIO | None = None) -> None:
    out = out if out is not None else sys.stderr
    print("parser errors:", file=out)
    for msg in errors:
        print(f"\t{msg}", file=out)


def run_monkey(
    source: str,
    is_string: bool = False,
    show_tokens: bool = False,
    as_json: bool = False,
) -> int:
    """
    Run the Monkey front end: lex, parse, and print the program or its diagnostics.

    Args:
        source (str): Monkey source code or path to a `.monkey` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        show_tokens (bool): If True, prints the token stream instead of the AST.
        as_json (bool): If True, prints the AST as JSON instead of its canonical rendering.

    Returns:
        int: 0 on success, 1 if the parser reported errors, 2 if the file could not be read.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.monkey'.
    """
    if not is_string and not source.endswith(".monkey"):
        raise ValueError("Only .monkey files are supported.")
    # 1. Read source
    if not is_string:
        try:
            with open(source, encoding="utf-8") as f:
                source = f.read()
        except OSError as e:
            print(f"monkey: cannot read {source}: {e.strerror}", file=sys.stderr)
            return EXIT_IO_ERROR

    # 2. Token dump
    if show_tokens:
        for tok in Lexer(source):
            print(f"{tok.line}:{tok.col}\t{tok.type}\t{tok.literal}")
        return EXIT_OK

    # 3. Parsing
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    logger.debug(
        "parsed %d statement(s), %d error(s)",
        len(program.statements),
        len(parser.errors),
    )

    # 4. Output result
    if parser.errors:
        print_parser_errors(parser.errors)
        return EXIT_PARSE_ERROR
    if as_json:
        print(json.dumps(program.to_dict(), indent=2))
    else:
        print(program)
    return EXIT_OK


def main() -> int:
    """
    Entry point for the Monkey CLI.

    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise, runs `run_monkey` on the given file or string.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-t`, `--tokens`: Print tokens instead of the parsed program.
        - `-j`, `--json`: Print the AST as JSON.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Enable debug logging.
    """
    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        from monkey.monkey_repl import start_repl

        start_repl()
        return EXIT_OK
    parser = argparse.ArgumentParser(prog="monkey")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-t", "--tokens", action="store_true", help="Print tokens instead of the AST"
    )
    parser.add_argument(
        "-j", "--json", dest="as_json", action="store_true", help="Print AST as JSON"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of parsing a file",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    if args.repl or args.source is None:
        from monkey.monkey_repl import start_repl

        start_repl(show_tokens=args.tokens)
        return EXIT_OK
    return run_monkey(
        source=args.source,
        is_string=args.string,
        show_tokens=args.tokens,
        as_json=args.as_json,
    )


if __name__ == "__main__":
    sys.exit(main())
