import io
import sys
import traceback

from monkey.monkey_cli import print_parser_errors
from monkey.monkey_lexer import Lexer
from monkey.monkey_parser import Parser

PROMPT = ">> "


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def print_tokens(src: str) -> None:
    for tok in Lexer(src):
        print(f"[token] >>> {tok.type} {tok.literal!r}")


def start_repl(show_tokens: bool = False) -> None:
    """Read lines, parse each one and print the canonical program or its errors."""
    print("Monkey REPL. Type 'exit' or 'quit' to leave, ':tokens' to toggle tokens.")

    while True:
        try:
            line = input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print("\nExiting Monkey REPL.")
            return

        src = line.strip()
        if not src:
            continue
        if src in ("exit", "quit"):
            print("Exiting Monkey REPL.")
            return
        if src == ":tokens":
            show_tokens = not show_tokens
            print(f"[mode] >>> Token display {'ON' if show_tokens else 'OFF'}")
            continue

        try:
            if show_tokens:
                print_tokens(src)
            parser = Parser(Lexer(src))
            program = parser.parse_program()
        except Exception:
            print_traceback()
            continue

        if parser.errors:
            print("[error] >>>")
            print_parser_errors(parser.errors, out=sys.stdout)
            continue
        print(program)
