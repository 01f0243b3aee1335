"""Test the command-line entrypoint."""
from pathlib import Path

import pytest

from rpn_calculator import main as cli


def test_parse_args_expressions() -> None:
    """Positional arguments are collected as inline expressions."""
    args = cli.parse_args(["4 2 +", "9 SQRT"])
    assert args.expressions == ["4 2 +", "9 SQRT"]
    assert args.file_path is None
    assert not args.lenient


def test_parse_args_file(tmp_path: Path) -> None:
    """--file must point to an existing file."""
    ops = tmp_path / "ops.txt"
    ops.write_text("1\n")
    args = cli.parse_args(["--file", str(ops), "--lenient"])
    assert Path(args.file_path) == ops
    assert args.lenient


@pytest.mark.parametrize("argv", [
    [],                                  # Nothing to evaluate
    ["--file", "does/not/exist.txt"],    # Missing file
])
def test_parse_args_invalid(argv) -> None:
    """Invalid arguments exit through argparse."""
    with pytest.raises(SystemExit):
        cli.parse_args(argv)


def test_parse_args_rejects_both_sources(tmp_path: Path) -> None:
    """Expressions and --file cannot be combined."""
    ops = tmp_path / "ops.txt"
    ops.write_text("1\n")
    with pytest.raises(SystemExit):
        cli.parse_args(["1 1 +", "--file", str(ops)])


@pytest.mark.parametrize("name,expected", [
    ("operations_short.7z", "operations_short_7z_results.txt"),
    ("ops.tar.xz", "ops_tar_xz_results.txt"),
    ("ops.txt", "ops_txt_results.txt"),
])
def test_build_output_path(name: str, expected: str) -> None:
    """Results files sit next to the input with a flattened suffix."""
    assert cli.build_output_path(Path("resources") / name) == Path("resources") / expected


def test_main_inline_success(capsys) -> None:
    """Inline mode prints one result line per expression and exits 0."""
    assert cli.main(["4 2 +", "3 5 8 * 7 + *"]) == 0
    assert capsys.readouterr().out.splitlines() == ["4 2 + = 6", "3 5 8 * 7 + * = 141"]


def test_main_inline_error(capsys) -> None:
    """A failing expression is reported and the exit code is 1."""
    assert cli.main(["5 0 /", "7"]) == 1
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("5 0 / -> ERROR:")
    assert out[1] == "7 = 7"


def test_main_inline_lenient(capsys) -> None:
    """--lenient returns the top of the stack."""
    assert cli.main(["--lenient", "1 2 3"]) == 0
    assert capsys.readouterr().out == "1 2 3 = 3\n"


def test_main_file_mode(tmp_path: Path, monkeypatch) -> None:
    """File mode hands the input to evaluate_file with the strict flag."""
    ops = tmp_path / "ops.txt"
    ops.write_text("4 2 +\n")
    calls = []
    monkeypatch.setattr(cli, "evaluate_file", lambda path, strict: calls.append((path, strict)))

    assert cli.main(["--file", str(ops)]) == 0
    assert calls == [(ops, True)]
