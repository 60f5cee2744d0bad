# topmark:header:start
#
#   project      : ConsMark
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the ConsMark test suite.

This file sets up global fixtures and customizes the logging configuration
for test runs.

Notes:
    Tests should respect the immutable/mutable configuration split: build
    configs with `MutableRenderConfig`, then `freeze()` them. Never mutate a
    frozen `RenderConfig`; `thaw()` it, edit the copy and freeze again.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast

import pytest

from consmark.config import logging
from consmark.markup.formatter import Formatter
from consmark.rendering.targets import OutputTarget, formatter_for

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.cli`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`."""
    return as_typed_mark(pytest.fixture(*args, **kwargs))


def make_formatter(target: OutputTarget | None = None, width: int | None = None) -> Formatter:
    """Return a formatter for ``target`` (null formats when ``None``).

    Args:
        target (OutputTarget | None): Rendering target.
        width (int | None): Width reported by the width callback.

    Returns:
        Formatter: A new formatter; never one of the shared instances.
    """
    callback = (lambda: width) if width is not None else None
    if target is None:
        return Formatter(width_callback=callback)
    return formatter_for(target, callback)


@pytest.fixture(autouse=True)
def silence_consmark_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure ConsMark's log level is not forced via env during tests.

    Also clears the colour environment variables so that colour detection
    only depends on what a test sets.
    """
    monkeypatch.delenv("CONSMARK_LOG_LEVEL", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the log level to TRACE for all tests."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run a test in an isolated project directory.

    The directory holds a ``consmark.toml`` with ``root = true`` so that
    config discovery never walks into the directories above it.

    Returns:
        Path: The working directory of the test.
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    (cwd / "consmark.toml").write_text("root = true\n", encoding="utf-8")
    monkeypatch.chdir(cwd)
    return cwd
