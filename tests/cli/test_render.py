# topmark:header:start
#
#   project      : ConsMark
#   file         : test_render.py
#   file_relpath : tests/cli/test_render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for `consmark render`."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from consmark.cli.exit_codes import ExitCode
from consmark.rendering import ansi
from tests.cli.conftest import assert_CONFIG_ERROR, assert_SUCCESS, run_cli, run_cli_in

if TYPE_CHECKING:
    from pathlib import Path

pytestmark: pytest.MarkDecorator = pytest.mark.cli


def test_render_stdin_plain(isolation: Path) -> None:
    result = run_cli(["render"], input_text="**bold** and _em_\n")
    assert_SUCCESS(result)
    assert result.output == "bold and em\n"


def test_render_adds_missing_final_newline(isolation: Path) -> None:
    result = run_cli(["render", "-"], input_text="**a**")
    assert_SUCCESS(result)
    assert result.output == "a\n"


def test_render_keeps_trailing_blank_lines(isolation: Path) -> None:
    result = run_cli(["render"], input_text="a\n\n\n")
    assert_SUCCESS(result)
    assert result.output == "a\n\n\n"


def test_render_file_markdown(isolation: Path) -> None:
    (isolation / "doc.txt").write_text("## Title\n\n_x_ and <u>\n", encoding="utf-8")
    result = run_cli_in(isolation, ["render", "--target", "md", "doc.txt"])
    assert_SUCCESS(result)
    assert result.output == "## Title\n\n`x` and *<u>u</u>*\n"


def test_render_tty_with_colour(isolation: Path) -> None:
    result = run_cli(["--color", "always", "render", "-t", "tty"], input_text="**bold**\n")
    assert_SUCCESS(result)
    assert result.output == f"{ansi.BOLD}bold{ansi.NOT_BOLD_NOT_FAINT}\n"


def test_render_defaults_to_tty_when_colour_is_forced(isolation: Path) -> None:
    result = run_cli(["--color", "always", "render"], input_text="**bold**\n")
    assert_SUCCESS(result)
    assert ansi.BOLD in result.output


def test_render_tty_without_colour_is_plain(isolation: Path) -> None:
    result = run_cli(["--no-color", "render", "-t", "tty"], input_text="**bold**\n")
    assert_SUCCESS(result)
    assert result.output == "bold\n"


def test_render_wraps_to_width(isolation: Path) -> None:
    result = run_cli(["render", "-w", "7"], input_text="aaa bbb ccc\n")
    assert_SUCCESS(result)
    assert result.output == "aaa bbb\nccc\n"


def test_render_no_wrap(isolation: Path) -> None:
    result = run_cli(["render", "-w", "3", "--no-wrap"], input_text="aaa bbb ccc\n")
    assert_SUCCESS(result)
    assert result.output == "aaa bbb ccc\n"


def test_render_unwrap(isolation: Path) -> None:
    result = run_cli(["render", "--unwrap"], input_text="line1\nline2\n\nnext\n")
    assert_SUCCESS(result)
    assert result.output == "line1 line2\n\nnext\n"


def test_render_unformat(isolation: Path) -> None:
    text = "**a** and \\*b\\*\n"
    result = run_cli(["render", "--unformat", "-t", "plain"], input_text=text)
    assert_SUCCESS(result)
    assert result.output == text


def test_render_crlf_input(isolation: Path) -> None:
    result = run_cli(["render"], input_text=b"_a_\r\nb\r\n")
    assert_SUCCESS(result)
    assert result.output == "a\nb\n"


def test_render_uses_config_file(isolation: Path) -> None:
    (isolation / "consmark.toml").write_text(
        'root = true\ntarget = "markdown"\n', encoding="utf-8"
    )
    result = run_cli(["render"], input_text="_x_\n")
    assert_SUCCESS(result)
    assert result.output == "`x`\n"

    # Command options override the file
    result = run_cli(["render", "-t", "plain"], input_text="_x_\n")
    assert_SUCCESS(result)
    assert result.output == "x\n"


def test_render_explicit_config_overrides_discovered(isolation: Path) -> None:
    (isolation / "consmark.toml").write_text('root = true\ntarget = "markdown"\n', encoding="utf-8")
    (isolation / "plain.toml").write_text('target = "plain"\n', encoding="utf-8")
    result = run_cli(["--config", "plain.toml", "render"], input_text="_x_\n")
    assert_SUCCESS(result)
    assert result.output == "x\n"


def test_render_no_config_ignores_discovered(isolation: Path) -> None:
    (isolation / "consmark.toml").write_text('root = true\ntarget = "markdown"\n', encoding="utf-8")
    result = run_cli(["--no-config", "render"], input_text="_x_\n")
    assert_SUCCESS(result)
    assert result.output == "x\n"


def test_render_missing_file(isolation: Path) -> None:
    result = run_cli(["render", "missing.txt"])
    assert result.exit_code == ExitCode.NO_INPUT, result.output
    assert "No such file" in result.output


def test_render_invalid_utf8(isolation: Path) -> None:
    (isolation / "bad.txt").write_bytes(b"\xff\xfe bad")
    result = run_cli(["render", "bad.txt"])
    assert result.exit_code == ExitCode.DATA_ERROR, result.output
    assert "not valid UTF-8" in result.output


def test_render_invalid_config_value(isolation: Path) -> None:
    (isolation / "consmark.toml").write_text('root = true\ntarget = "html"\n', encoding="utf-8")
    result = run_cli(["render"], input_text="x\n")
    assert_CONFIG_ERROR(result)
    assert "Invalid target 'html'" in result.output


def test_render_malformed_explicit_config(isolation: Path) -> None:
    (isolation / "bad.toml").write_text("width = \n", encoding="utf-8")
    result = run_cli(["--config", "bad.toml", "render"], input_text="x\n")
    assert_CONFIG_ERROR(result)
