"""
Letter CLI Entrypoint.

This module provides the command-line interface for parsing Letter source code.
It prints the canonical text of the parsed tree, the token stream, or a JSON dump.

Features:
    - Read source from `.letter` files or inline strings.
    - Lex and parse into an AST, then print it in the selected format.
    - Optional assignment-target validation and nesting limit.
    - Launch an interactive REPL.

Example usage:
    letter program.letter
    letter -s "1 + 2 * 3"
    letter -s "a.b[c].d()" --json
    letter -s "let x" --tokens
    letter --repl --verbose

Functions:
    run_letter(source: str, is_string: bool = False, ...) -> None:
        Runs the Letter pipeline (read → lex → parse → print).

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or parse).
"""

import argparse
import json
import sys

from letter.letter_errors import LetterSyntaxError
from letter.letter_lexer import CharacterStream, Lexer
from letter.letter_parser import DEFAULT_MAX_DEPTH, Parser


def run_letter(
    source: str,
    is_string: bool = False,
    tokens: bool = False,
    as_json: bool = False,
    strict: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
    pretty: bool = False,
) -> None:
    """
    Run the Letter front-end: read, lex, parse, and print the result.

    Args:
        source (str): Letter source code or a path to a `.letter` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        tokens (bool): If True, prints the token stream instead of the tree.
        as_json (bool): If True, prints the tree as indented JSON.
        strict (bool): If True, rejects assignments to non-assignable expressions.
        max_depth (int): Maximum nesting of bracketed sub-expressions.
        pretty (bool): If True, prints banners around the output.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.letter',
            or if the tree is too deep for the JSON encoder.
        LetterSyntaxError: If the source cannot be tokenized or parsed.
    """
    if not is_string and not source.endswith(".letter"):
        raise ValueError("Only .letter files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lexing only
    if tokens:
        lexer = Lexer(CharacterStream(source))
        lines = [repr(tok) for tok in lexer.tokens()]
        _print_section("Tokens", "\n".join(lines), pretty)
        return

    # 3. Parsing
    parser = Parser(Lexer(CharacterStream(source)), strict=strict, max_depth=max_depth)
    program = parser.parse()

    # 4. Output
    if as_json:
        try:
            body = json.dumps(program.to_dict(), indent=2)
        except RecursionError:
            raise ValueError("AST is nested too deeply to print as JSON.") from None
        _print_section("AST", body, pretty)
    else:
        _print_section("Letter AST", program.to_text(), pretty)


def _print_section(title: str, body: str, pretty: bool) -> None:
    if pretty:
        banner = "=" * 20
        print(f"{banner}\n{title}\n{banner}\n{body}\n{banner}\n")
    else:
        print(body)


def main() -> None:
    """
    Entry point for the Letter CLI.

    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise parses the given file or string and prints the result.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-t`, `--tokens`: Print the token stream.
        - `-j`, `--json`: Print the AST as JSON.
        - `--strict`: Only identifiers and member expressions may be assigned to.
        - `--max-depth`: Maximum bracket nesting (default 32).
        - `-p`, `--pretty`: Show banners around the output.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Verbose REPL mode (prints tokens).

    Lexical and syntax errors, and bad input files, are reported on stderr with
    exit status 1.
    """
    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        from letter.letter_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="letter")
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
        "--strict",
        action="store_true",
        help="Reject assignments to anything but identifiers and members",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        metavar="N",
        help=f"Maximum bracket nesting (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show output with banners"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of parsing",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from letter.letter_repl import start_repl

        start_repl(verbose=args.verbose, strict=args.strict)
        return

    try:
        run_letter(
            source=args.source,
            is_string=args.string,
            tokens=args.tokens,
            as_json=args.as_json,
            strict=args.strict,
            max_depth=args.max_depth,
            pretty=args.pretty,
        )
    except (LetterSyntaxError, ValueError) as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
