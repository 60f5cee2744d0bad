# topmark:header:start
#
#   project      : ConsMark
#   file         : test_model.py
#   file_relpath : tests/config/test_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the render configuration model and its merge policy."""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

import pytest

from consmark.config.model import CLI_OVERRIDE_STR, MutableRenderConfig, RenderConfig
from consmark.constants import DEFAULT_SPINNER_INTERVAL_MS
from consmark.core.errors import ConfigError
from consmark.core.levels import Level, MessageType
from consmark.markup.formatter import DEFAULT_LEVEL_PREFIXES, DEFAULT_TYPE_PREFIXES
from consmark.rendering.color import ColorMode
from consmark.rendering.targets import OutputTarget

if TYPE_CHECKING:
    from pathlib import Path


def test_defaults() -> None:
    config: RenderConfig = MutableRenderConfig().freeze()
    assert config.target is None
    assert config.color is ColorMode.AUTO
    assert config.width is None
    assert config.wrap is True
    assert config.unwrap is False
    assert config.spinner_interval_ms == DEFAULT_SPINNER_INTERVAL_MS
    assert dict(config.level_prefixes) == dict(DEFAULT_LEVEL_PREFIXES)
    assert dict(config.type_prefixes) == dict(DEFAULT_TYPE_PREFIXES)
    assert config.config_files == ()


def test_resolved_target() -> None:
    config = MutableRenderConfig().freeze()
    assert config.resolved_target(True) is OutputTarget.TTY
    assert config.resolved_target(False) is OutputTarget.PLAIN
    pinned = MutableRenderConfig(target=OutputTarget.MAN).freeze()
    assert pinned.resolved_target(True) is OutputTarget.MAN


def test_frozen_config_is_immutable() -> None:
    config = MutableRenderConfig().freeze()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.wrap = False  # type: ignore[misc]
    with pytest.raises(TypeError):
        config.level_prefixes[Level.INFO] = "x"  # type: ignore[index]


def test_from_toml_dict() -> None:
    draft = MutableRenderConfig.from_toml_dict(
        {
            "target": "Markdown",
            "color": "never",
            "width": 72,
            "wrap": False,
            "unwrap": True,
            "spinner_interval_ms": 0,
            "prefixes": {
                "levels": {"warn": "W ", "error": "E "},
                "types": {"group-start": ">> "},
            },
        },
        source="a.toml",
    )
    assert draft.target is OutputTarget.MARKDOWN
    assert draft.color is ColorMode.NEVER
    assert draft.width == 72
    assert draft.wrap is False
    assert draft.unwrap is True
    assert draft.spinner_interval_ms == 0
    assert draft.level_prefixes == {Level.WARNING: "W ", Level.ERROR: "E "}
    assert draft.type_prefixes == {MessageType.GROUP_START: ">> "}
    assert draft.config_files == ["a.toml"]


@pytest.mark.parametrize(
    ("data", "message"),
    [
        ({"target": "html"}, "Invalid target 'html' in x.toml"),
        ({"color": "sometimes"}, "allowed values: auto, always, never"),
        ({"width": 0}, "must be >= 1"),
        ({"wrap": "yes"}, "must be a boolean"),
        ({"prefixes": {"levels": {"info": 1}}}, "prefixes.levels.info"),
        ({"prefixes": []}, "must be a table"),
    ],
)
def test_from_toml_dict_rejects_bad_values(data: dict[str, object], message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        MutableRenderConfig.from_toml_dict(data, source="x.toml")


def test_from_toml_dict_warns_on_unknown_keys(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        draft = MutableRenderConfig.from_toml_dict(
            {
                "colour": "always",
                "prefixes": {"levels": {"verbose": "v "}, "kinds": {}, "types": {"nope": "n"}},
            }
        )
    assert "unknown config key 'colour'" in caplog.text
    assert "unknown config key 'prefixes.kinds'" in caplog.text
    assert "unknown level 'verbose'" in caplog.text
    assert "unknown message type 'nope'" in caplog.text
    assert draft.color is None
    assert draft.level_prefixes == {}


def test_merge_last_wins_and_prefixes_merge_per_key() -> None:
    low = MutableRenderConfig(
        target=OutputTarget.TTY,
        width=80,
        level_prefixes={Level.INFO: "i ", Level.ERROR: "e "},
        config_files=["low"],
    )
    high = MutableRenderConfig(
        width=100,
        wrap=False,
        level_prefixes={Level.ERROR: "E "},
        config_files=["high"],
    )
    merged = low.merge_with(high)

    assert merged.target is OutputTarget.TTY
    assert merged.width == 100
    assert merged.wrap is False
    assert merged.level_prefixes == {Level.INFO: "i ", Level.ERROR: "E "}
    assert merged.config_files == ["low", "high"]
    # Inputs are left untouched
    assert low.width == 80
    assert high.level_prefixes == {Level.ERROR: "E "}


def test_apply_cli_args() -> None:
    draft = MutableRenderConfig(width=80)
    draft.apply_cli_args({"width": None, "wrap": None})
    assert draft.width == 80
    assert draft.config_files == []

    draft.apply_cli_args({"width": 40, "target": OutputTarget.PLAIN, "other": 1})
    assert draft.width == 40
    assert draft.target is OutputTarget.PLAIN
    assert draft.config_files == [CLI_OVERRIDE_STR]


def test_thaw_freeze_round_trip() -> None:
    config = MutableRenderConfig(
        target=OutputTarget.MAN,
        width=50,
        level_prefixes={Level.DEBUG: "d "},
        config_files=["a"],
    ).freeze()
    thawed = config.thaw()
    thawed.width = 60

    assert thawed.freeze().width == 60
    assert config.width == 50
    assert thawed.freeze().level_prefixes == config.level_prefixes


def test_to_toml_dict_round_trips_through_parser() -> None:
    config = MutableRenderConfig(
        target=OutputTarget.MARKDOWN,
        color=ColorMode.ALWAYS,
        width=66,
        type_prefixes={MessageType.SUCCESS: "OK "},
    ).freeze()
    table = config.to_toml_dict()

    assert table["target"] == "markdown"
    assert table["color"] == "always"
    assert table["prefixes"]["types"]["success"] == "OK "
    assert table["prefixes"]["levels"]["error"] == "! "

    again = MutableRenderConfig.from_toml_dict(table).freeze()
    assert again.to_toml_dict() == table


def test_to_toml_dict_omits_unset_values() -> None:
    table = MutableRenderConfig().freeze().to_toml_dict()
    assert "target" not in table
    assert "width" not in table


def test_load_merged(isolation: Path) -> None:
    (isolation / "consmark.toml").write_text(
        'root = true\ntarget = "tty"\nwidth = 70\n', encoding="utf-8"
    )
    extra = isolation / "extra.toml"
    extra.write_text("width = 90\n", encoding="utf-8")

    draft = MutableRenderConfig.load_merged(extra_config_files=[extra])
    assert draft.target is OutputTarget.TTY
    assert draft.width == 90
    assert draft.config_files == [
        str((isolation / "consmark.toml").resolve()),
        str(extra),
    ]


def test_load_merged_no_config_keeps_explicit_files(isolation: Path) -> None:
    (isolation / "consmark.toml").write_text('root = true\ntarget = "tty"\n', encoding="utf-8")
    extra = isolation / "extra.toml"
    extra.write_text("unwrap = true\n", encoding="utf-8")

    draft = MutableRenderConfig.load_merged(extra_config_files=[extra], no_config=True)
    assert draft.target is None
    assert draft.unwrap is True


def test_explicit_malformed_file_is_an_error(isolation: Path) -> None:
    bad = isolation / "bad.toml"
    bad.write_text("width = \n", encoding="utf-8")
    with pytest.raises(ConfigError):
        MutableRenderConfig.load_merged(extra_config_files=[bad], no_config=True)


def test_pyproject_without_table_is_skipped(isolation: Path) -> None:
    pyproject = isolation / "pyproject.toml"
    pyproject.write_text("[project]\nname = 'x'\n", encoding="utf-8")
    assert MutableRenderConfig.from_toml_file(pyproject) is None
