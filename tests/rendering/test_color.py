# topmark:header:start
#
#   project      : ConsMark
#   file         : test_color.py
#   file_relpath : tests/rendering/test_color.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for colour mode resolution."""

from __future__ import annotations

import pytest

from consmark.rendering.color import ColorMode, resolve_color_mode
from tests.conftest import parametrize


@parametrize(
    ("raw", "expected"),
    [("auto", ColorMode.AUTO), ("FORCE", ColorMode.ALWAYS), ("off", ColorMode.NEVER)],
)
def test_parse(raw: str, expected: ColorMode) -> None:
    assert ColorMode.parse(raw) is expected


def test_explicit_mode_wins_over_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")
    assert resolve_color_mode(color_mode_override=ColorMode.ALWAYS, stdout_isatty=False)
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert not resolve_color_mode(color_mode_override=ColorMode.NEVER, stdout_isatty=True)


def test_force_color(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert resolve_color_mode(color_mode_override=None, stdout_isatty=False)


def test_force_color_zero_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FORCE_COLOR", "0")
    assert not resolve_color_mode(color_mode_override=ColorMode.AUTO, stdout_isatty=False)


def test_no_color(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "")
    assert not resolve_color_mode(color_mode_override=ColorMode.AUTO, stdout_isatty=True)


@parametrize("isatty", [True, False])
def test_auto_follows_tty(isatty: bool) -> None:
    assert resolve_color_mode(color_mode_override=None, stdout_isatty=isatty) is isatty
