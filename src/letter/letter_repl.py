import io
import traceback

from letter.letter_constants import TokenType
from letter.letter_errors import LetterSyntaxError
from letter.letter_lexer import CharacterStream, Lexer
from letter.letter_parser import Parser


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def open_groups(line: str) -> int:
    """Net count of unclosed `(` and `[` in a line, skipping strings and comments."""
    depth = 0
    for tok in Lexer(CharacterStream(line)).tokens():
        if tok.type in (TokenType.LPAREN, TokenType.LBRACKET):
            depth += 1
        elif tok.type in (TokenType.RPAREN, TokenType.RBRACKET):
            depth -= 1
    return depth


def print_tokens(src: str) -> None:
    lexer = Lexer(CharacterStream(src))
    print("[tokens] >>> " + " ".join(repr(tok) for tok in lexer.tokens()))


def start_repl(verbose: bool = False, strict: bool = False) -> None:
    print("Letter REPL. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            src_lines: list[str] = []
            depth = 0
            while True:
                prompt = ">>> " if not src_lines else "... "
                line = input(prompt)
                if line.strip() in ("exit", "quit") and not src_lines:
                    print("Exiting Letter REPL.")
                    return
                src_lines.append(line)
                depth += open_groups(line)
                if depth <= 0:
                    break
            src = "\n".join(src_lines).strip()
            if not src:
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue

            if verbose:
                print_tokens(src)

            try:
                program = Parser.from_source(src, strict=strict).parse()
                for stmt in program.statements:
                    print(stmt.to_text())
            except LetterSyntaxError as e:
                print(f"[error] >>> {e}")
            except Exception:
                print_traceback()

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Letter REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
