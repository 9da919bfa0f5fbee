"""
Monkey CLI Entrypoint.

This module provides the command-line interface for the Monkey front end.
It parses source files or inline strings and can launch the interactive REPL.

Features:
    - Read source from `.monkey` files or inline strings.
    - Print the token stream, the parsed program, or the AST as JSON.
    - Report parse diagnostics on stderr with a non-zero exit status.
    - Launch an interactive REPL, greeting the current user.

Example usage:
    monkey hello.monkey
    monkey -s "let x = 1 + 2;" --ast
    monkey -s "a + b * c" --tokens
    monkey --repl --verbose

Functions:
    run_monkey(source: str, is_string: bool = False, tokens: bool = False,
               ast: bool = False) -> int:
        Runs lex → parse → output and returns the process exit status.

    greet() -> None:
        Prints the REPL greeting for the user named by `$USER`.

    main() -> None:
        Parses CLI arguments and invokes the appropriate action.
"""

import argparse
import json
import logging
import os
import sys

from monkey.monkey_lexer import Lexer
from monkey.monkey_parser import parse

logger = logging.getLogger(__name__)


def run_monkey(
    source: str,
    is_string: bool = False,
    tokens: bool = False,
    ast: bool = False,
) -> int:
    """
    Run the Monkey front end on a file or an inline string.

    Args:
        source (str): The Monkey source code or path to a `.monkey` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        tokens (bool): If True, print the token stream instead of parsing.
        ast (bool): If True, print the AST as JSON instead of the program string.

    Returns:
        int: 0 on success, 1 if any parse diagnostics were reported.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.monkey'.
    """
    if not is_string and not source.endswith(".monkey"):
        raise ValueError("Only .monkey files are supported.")
    if not is_string:
        logger.debug("reading %s", source)
        with open(source, encoding="utf-8") as f:
            source = f.read()

    if tokens:
        for tok in Lexer(source):
            print(tok)
        return 0

    program, errors = parse(source)
    if ast:
        print(json.dumps(program.to_dict(), indent=2))
    else:
        print(program)

    for err in errors:
        print(err, file=sys.stderr)
    return 1 if errors else 0


def greet() -> None:
    """
    Print the REPL greeting.

    Exits with status 1 if the `USER` environment variable is not set.
    """
    username = os.environ.get("USER")
    if not username:
        print("Failed to get the current user.", file=sys.stderr)
        sys.exit(1)
    print(f"Hello {username}! This is the Monkey programming language!")
    print("Feel free to type in commands\n")


def main() -> None:
    """
    Entry point for the Monkey CLI.

    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise parses the given file or string and exits with `run_monkey`'s status.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--tokens`: Print the token stream.
        - `--ast`: Print the AST as JSON.
        - `--repl`: Launch the interactive REPL.
        - `--parse`: Start the REPL in parse mode instead of token mode.
        - `--verbose`: Enable debug logging.
    """
    parser = argparse.ArgumentParser(prog="monkey")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--tokens", action="store_true", help="Print the token stream")
    output.add_argument("--ast", action="store_true", help="Print the AST as JSON")
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of parsing",
    )
    parser.add_argument(
        "--parse", action="store_true", help="Start the REPL in parse mode"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.repl or args.source is None:
        from monkey.monkey_repl import start_repl

        greet()
        start_repl(mode="parse" if args.parse else "tokens", verbose=args.verbose)
        return

    sys.exit(
        run_monkey(
            source=args.source,
            is_string=args.string,
            tokens=args.tokens,
            ast=args.ast,
        )
    )


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
