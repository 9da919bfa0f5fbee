"""
Interactive shell for the Monkey front end.

Reads one line at a time. In `tokens` mode every line is fed to a fresh Lexer
and each token is echoed until EOF. In `parse` mode the line is parsed and the
program is printed back in its fully parenthesized form, followed by any
diagnostics.

Commands:
    exit, quit      leave the shell
    parse-mode      switch between `tokens` and `parse` mode
    verbose-mode    also print the AST dictionary in `parse` mode
"""

import io
import json
import traceback

from monkey.monkey_lexer import Lexer
from monkey.monkey_parser import parse

PROMPT = ">> "
MODES = ("tokens", "parse")


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def echo_tokens(line: str) -> None:
    for tok in Lexer(line):
        print(tok)


def echo_parse(line: str, verbose: bool = False) -> None:
    program, errors = parse(line)
    if errors:
        print("[parse errors] >>>")
        for err in errors:
            print(f"\t{err}")
        return
    print(program)
    if verbose:
        print(json.dumps(program.to_dict(), indent=2))


def start_repl(mode: str = "tokens", verbose: bool = False) -> None:
    if mode not in MODES:
        raise ValueError(f"Unknown REPL mode: {mode}")
    print(f"Monkey REPL [mode={mode}]. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            line = input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            print("Exiting Monkey REPL.")
            return

        src = line.strip()
        if not src:
            continue
        if src in ("exit", "quit"):
            print("Exiting Monkey REPL.")
            return
        if src == "parse-mode":
            mode = "parse" if mode == "tokens" else "tokens"
            print(f"[mode] >>> {mode}")
            continue
        if src == "verbose-mode":
            verbose = not verbose
            print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
            continue

        try:
            if mode == "tokens":
                echo_tokens(line)
            else:
                echo_parse(line, verbose=verbose)
        except Exception:
            print_traceback()
