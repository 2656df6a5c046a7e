"""
Unit tests for CLI module (compiler_bridge/cli.py).

Tests cover:
- Argument parsing
- Exit codes for success, failure and no match
"""

from unittest.mock import AsyncMock, patch

import pytest

from compiler_bridge import cli
from compiler_bridge.errors import TransportError


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "main.cpp"
    path.write_text("int main() {}\n")
    return path


@pytest.mark.unit
def test_parser_defaults(source_file):
    args = cli.build_parser().parse_args(["c++", str(source_file)])

    assert args.language == "c++"
    assert args.compiler_version is None
    assert args.instruction_set is None
    assert args.user_args == ""
    assert args.execute is False
    args.file.close()


@pytest.mark.unit
def test_parser_options(source_file):
    args = cli.build_parser().parse_args(
        ["rs", str(source_file), "-V", "1.80.0", "-i", "amd64", "--args", "-O", "-x"]
    )

    assert args.compiler_version == "1.80.0"
    assert args.instruction_set == "amd64"
    assert args.user_args == "-O"
    assert args.execute is True
    args.file.close()


@pytest.mark.unit
def test_main_prints_message(source_file, capsys):
    with patch.object(cli, "run_request", AsyncMock(return_value="**success** (gcc)")) as mock:
        result = cli.main(["c++", str(source_file), "--log-level", "error"])

    assert result == cli.EXIT_OK
    assert capsys.readouterr().out == "**success** (gcc)\n"
    mock.assert_awaited_once()


@pytest.mark.unit
def test_main_no_match(source_file, capsys):
    with patch.object(cli, "run_request", AsyncMock(return_value=None)):
        result = cli.main(["zig", str(source_file)])

    assert result == cli.EXIT_NO_MATCH
    assert "No compiler matches language 'zig'" in capsys.readouterr().err


@pytest.mark.unit
def test_main_reports_bridge_errors(source_file, capsys):
    error = TransportError(message="Request to compiler service failed", detail="timeout")
    with patch.object(cli, "run_request", AsyncMock(side_effect=error)):
        result = cli.main(["c++", str(source_file)])

    assert result == cli.EXIT_FAILED
    assert "Error (transport): Request to compiler service failed: timeout" in (
        capsys.readouterr().err
    )
