import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Any

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from letter import letter_cli
from letter.letter_errors import LexicalError, ParseError
from letter.letter_parser import DEFAULT_MAX_DEPTH


def test_run_letter_string_input_prints(capsys: pytest.CaptureFixture[str]) -> None:
    letter_cli.run_letter(source="1 + 2 * 3", is_string=True)
    out = capsys.readouterr().out.strip()
    assert out == "(1+(2*3))"


def test_run_letter_program_is_concatenated(capsys: pytest.CaptureFixture[str]) -> None:
    letter_cli.run_letter(source="a = 1; f(a)", is_string=True)
    assert capsys.readouterr().out.strip() == "a = 1f(a)"


def test_run_letter_file_input(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    file_path = tmp_path / "input.letter"
    file_path.write_text("a.b[c].d()", encoding="utf-8")
    letter_cli.run_letter(source=str(file_path))
    assert capsys.readouterr().out.strip() == "a.b[c].d()"


def test_run_letter_rejects_non_letter_file() -> None:
    with pytest.raises(ValueError, match="Only .letter files are supported."):
        letter_cli.run_letter("example.txt", is_string=False)


def test_run_letter_pretty_output(capsys: pytest.CaptureFixture[str]) -> None:
    letter_cli.run_letter(source="x", is_string=True, pretty=True)
    out = capsys.readouterr().out
    assert "Letter AST" in out
    assert "=" * 20 in out


def test_run_letter_tokens(capsys: pytest.CaptureFixture[str]) -> None:
    letter_cli.run_letter(source="let x = 1", is_string=True, tokens=True)
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == [
        "Token(LET, let)",
        "Token(IDENTIFIER, x)",
        "Token(SIMPLE_ASSIGN, =)",
        "Token(NUMBER, 1)",
        "Token(EOF, )",
    ]


def test_run_letter_tokens_stop_at_error(capsys: pytest.CaptureFixture[str]) -> None:
    letter_cli.run_letter(source="a @", is_string=True, tokens=True)
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[-1] == "Token(ERROR, )"


def test_run_letter_json(capsys: pytest.CaptureFixture[str]) -> None:
    letter_cli.run_letter(source="-x", is_string=True, as_json=True)
    data = json.loads(capsys.readouterr().out)
    assert data == {
        "kind": "program",
        "statements": [
            {
                "kind": "expr_stmt",
                "expression": {
                    "kind": "unary",
                    "operator": "-",
                    "operand": {"kind": "identifier", "name": "x"},
                },
            }
        ],
    }


def test_run_letter_pretty_json_banner(capsys: pytest.CaptureFixture[str]) -> None:
    letter_cli.run_letter(source="1", is_string=True, as_json=True, pretty=True)
    out = capsys.readouterr().out
    assert "\nAST\n" in out


def test_run_letter_propagates_errors() -> None:
    with pytest.raises(ParseError):
        letter_cli.run_letter(source="f(", is_string=True)
    with pytest.raises(LexicalError):
        letter_cli.run_letter(source="@", is_string=True)


def test_run_letter_strict_and_depth() -> None:
    with pytest.raises(ParseError, match="Invalid left-hand side"):
        letter_cli.run_letter(source="1 = 2", is_string=True, strict=True)
    with pytest.raises(ParseError, match="Maximum nesting depth of 1"):
        letter_cli.run_letter(source="((1))", is_string=True, max_depth=1)


def test_main_cli_parses(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", ["letter", "-s", "x = 5"])
    called = {}

    def dummy_run(**kwargs: Any) -> None:
        called.update(kwargs)

    monkeypatch.setattr(letter_cli, "run_letter", dummy_run)
    letter_cli.main()
    assert called["source"] == "x = 5"
    assert called["is_string"] is True
    assert called["strict"] is False
    assert called["max_depth"] == DEFAULT_MAX_DEPTH


def test_main_passes_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        sys,
        "argv",
        ["letter", "-s", "x", "--tokens", "--json", "--strict", "--max-depth", "4", "-p"],
    )
    called = {}
    monkeypatch.setattr(letter_cli, "run_letter", lambda **kw: called.update(kw))
    letter_cli.main()
    assert called["tokens"] is True
    assert called["as_json"] is True
    assert called["strict"] is True
    assert called["max_depth"] == 4
    assert called["pretty"] is True


def test_main_end_to_end(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["letter", "-s", "new Foo(1)"])
    letter_cli.main()
    assert capsys.readouterr().out.strip() == "new Foo(1)"


def test_main_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    src_file = tmp_path / "prog.letter"
    src_file.write_text("a || b", encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["letter", str(src_file)])
    letter_cli.main()
    assert capsys.readouterr().out.strip() == "(a||b)"


@pytest.mark.parametrize(
    "source,message",
    [
        ("f(", "Unexpected end of input, expected: RPAREN"),
        ("a[1;]", "Unexpected token: SEMICOLON (';'), expected: RBRACKET"),
        ("}", "Unexpected primary expression: RBRACE ('}')"),
        ("x @ y", "Unexpected character '@' in input"),
    ],
)  # type: ignore[misc]
def test_main_reports_errors(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    source: str,
    message: str,
) -> None:
    monkeypatch.setattr(sys, "argv", ["letter", "-s", source])
    with pytest.raises(SystemExit) as e:
        letter_cli.main()
    assert e.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.strip() == f"[error] >>> {message}"


def test_main_bad_flag_exits_with_usage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", ["letter", "--max-depth", "deep", "-s", "x"])
    with pytest.raises(SystemExit) as e:
        letter_cli.main()
    assert e.value.code == 2


def test_main_calls_repl_on_no_args(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {}

    def fake_repl(*args: Any, **kwargs: Any) -> None:
        called["ran"] = True

    monkeypatch.setattr(sys, "argv", ["letter"])
    monkeypatch.setattr("letter.letter_repl.start_repl", fake_repl)

    letter_cli.main()

    assert called.get("ran") is True


def test_main_repl_flag_calls_repl(monkeypatch: pytest.MonkeyPatch) -> None:
    called_args = {}

    def fake_repl(*, verbose: Any, strict: Any) -> None:
        called_args["verbose"] = verbose
        called_args["strict"] = strict

    monkeypatch.setattr("letter.letter_repl.start_repl", fake_repl)
    monkeypatch.setattr(sys, "argv", ["letter", "--repl", "--verbose", "--strict"])

    letter_cli.main()

    assert called_args == {"verbose": True, "strict": True}


def test_letter_cli_main_entrypoint_runs() -> None:
    cli_path = os.path.join("src", "letter", "letter_cli.py")
    env = dict(os.environ, PYTHONPATH="src")

    result = subprocess.run(
        [sys.executable, cli_path, "-s", "1+2"],
        capture_output=True,
        timeout=10,
        env=env,
    )

    assert result.returncode == 0
    assert result.stdout.decode().strip() == "(1+2)"


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])  # type: ignore[misc]
@given(st.text(max_size=40))  # type: ignore[misc]
def test_run_letter_random_input_only_raises_syntax_errors(source: str) -> None:
    try:
        letter_cli.run_letter(source=source, is_string=True)
    except (LexicalError, ParseError):
        pass


def test_run_letter_long_sum(capsys: pytest.CaptureFixture[str]) -> None:
    letter_cli.run_letter(source="+".join(["1"] * 2000), is_string=True)
    out = capsys.readouterr().out.strip()
    assert out.startswith("(" * 1999 + "1+1)")


def test_run_letter_long_member_chain_json(capsys: pytest.CaptureFixture[str]) -> None:
    source = "a" + ".b" * 50
    letter_cli.run_letter(source=source, is_string=True, as_json=True)
    data = json.loads(capsys.readouterr().out)
    assert data["statements"][0]["expression"]["kind"] == "member"


def test_main_reports_json_too_deep(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def exhausted(*args: Any, **kwargs: Any) -> str:
        raise RecursionError("maximum recursion depth exceeded")

    monkeypatch.setattr(letter_cli.json, "dumps", exhausted)
    monkeypatch.setattr(sys, "argv", ["letter", "-s", "a.b", "--json"])
    with pytest.raises(SystemExit) as e:
        letter_cli.main()
    assert e.value.code == 1
    assert "too deeply to print as JSON" in capsys.readouterr().err


def test_main_deep_nesting_with_raised_limit(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    source = "(" * 300 + "1" + ")" * 300
    monkeypatch.setattr(sys, "argv", ["letter", "-s", source, "--max-depth", "1000"])
    with pytest.raises(SystemExit) as e:
        letter_cli.main()
    assert e.value.code == 1
    assert capsys.readouterr().err.startswith(
        "[error] >>> Maximum nesting depth exceeded"
    )


def test_main_rejects_non_letter_file(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["letter", "notes.txt"])
    with pytest.raises(SystemExit) as e:
        letter_cli.main()
    assert e.value.code == 1
    assert "Only .letter files are supported." in capsys.readouterr().err
