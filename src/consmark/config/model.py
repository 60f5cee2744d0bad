# topmark:header:start
#
#   project      : ConsMark
#   file         : model.py
#   file_relpath : src/consmark/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render configuration model and merge policy.

This module defines:
    - `RenderConfig`: an immutable snapshot used to build formatters.
    - `MutableRenderConfig`: a mutable builder used while merging sources;
      it can be frozen into `RenderConfig` and thawed back for edits.

Merge order (lowest to highest precedence):
    1) Built-in defaults
    2) Config files discovered upward from the working directory (root-most
       first; within a directory ``pyproject.toml`` then ``consmark.toml``)
    3) Config files passed explicitly with ``--config``
    4) CLI options

A ``None`` field in a `MutableRenderConfig` means "inherit"; prefix tables
merge key by key.

TOML shape (top level of ``consmark.toml`` or ``[tool.consmark]``):

```toml
root = false            # stop upward discovery after this directory
target = "tty"          # plain | tty | markdown | man | loopback
color = "auto"          # auto | always | never
width = 100             # omit to use the terminal width
wrap = true
unwrap = false
spinner_interval_ms = 80

[prefixes.levels]
error = "! "

[prefixes.types]
success = "✔ "
```
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from consmark.config.io import (
    discover_config_files,
    extract_tool_table,
    get_bool_or_none,
    get_int_or_none,
    get_str_or_none,
    get_table_or_none,
    load_toml_dict,
)
from consmark.config.logging import get_logger
from consmark.constants import DEFAULT_SPINNER_INTERVAL_MS
from consmark.core.errors import ConfigError
from consmark.core.levels import Level, MessageType
from consmark.markup.formatter import DEFAULT_LEVEL_PREFIXES, DEFAULT_TYPE_PREFIXES
from consmark.rendering.color import ColorMode
from consmark.rendering.targets import OutputTarget

if TYPE_CHECKING:
    from collections.abc import Iterable

    from consmark.config.io import TomlTable
    from consmark.config.logging import ConsmarkLogger

# Generic mapping accepted by `apply_cli_args` (Click params or plain dicts).
ArgsLike = Mapping[str, Any]

logger: ConsmarkLogger = get_logger(__name__)

_KNOWN_KEYS: frozenset[str] = frozenset(
    {"root", "target", "color", "width", "wrap", "unwrap", "spinner_interval_ms", "prefixes"}
)
_KNOWN_PREFIX_KEYS: frozenset[str] = frozenset({"levels", "types"})

CLI_OVERRIDE_STR = "<CLI overrides>"


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Attributes:
        target (OutputTarget | None): Rendering target; ``None`` picks ``tty`` when
            colour is enabled and ``plain`` otherwise.
        color (ColorMode): Colour intent.
        width (int | None): Wrap width; ``None`` uses the terminal width.
        wrap (bool): Whether rendered text is wrapped at all.
        unwrap (bool): Whether hard-wrapped input lines are joined first.
        spinner_interval_ms (int): Minimum delay between spinner frames.
        level_prefixes (Mapping[Level, str]): Message prefixes by level.
        type_prefixes (Mapping[MessageType, str]): Message prefixes by type.
        config_files (tuple[str, ...]): Sources merged into this snapshot.
    """

    target: OutputTarget | None
    color: ColorMode
    width: int | None
    wrap: bool
    unwrap: bool
    spinner_interval_ms: int
    level_prefixes: Mapping[Level, str]
    type_prefixes: Mapping[MessageType, str]
    config_files: tuple[str, ...] = ()

    def resolved_target(self, color_enabled: bool) -> OutputTarget:
        if self.target is not None:
            return self.target
        return OutputTarget.TTY if color_enabled else OutputTarget.PLAIN

    def to_toml_dict(self) -> TomlTable:
        """Return this snapshot in the TOML shape accepted by `MutableRenderConfig`."""
        table: TomlTable = {}
        if self.target is not None:
            table["target"] = self.target.key
        table["color"] = self.color.key
        if self.width is not None:
            table["width"] = self.width
        table["wrap"] = self.wrap
        table["unwrap"] = self.unwrap
        table["spinner_interval_ms"] = self.spinner_interval_ms
        table["prefixes"] = {
            "levels": {lvl.name.lower(): p for lvl, p in self.level_prefixes.items()},
            "types": {t.value: p for t, p in self.type_prefixes.items()},
        }
        return table

    def thaw(self) -> MutableRenderConfig:
        """Return a mutable copy of this frozen config."""
        return MutableRenderConfig(
            target=self.target,
            color=self.color,
            width=self.width,
            wrap=self.wrap,
            unwrap=self.unwrap,
            spinner_interval_ms=self.spinner_interval_ms,
            level_prefixes=dict(self.level_prefixes),
            type_prefixes=dict(self.type_prefixes),
            config_files=list(self.config_files),
        )


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableRenderConfig:
    """Mutable configuration used during discovery and merging.

    Every scalar field is tri-state: ``None`` means "not set here". `freeze`
    fills in built-in defaults for anything still unset.
    """

    target: OutputTarget | None = None
    color: ColorMode | None = None
    width: int | None = None
    wrap: bool | None = None
    unwrap: bool | None = None
    spinner_interval_ms: int | None = None
    level_prefixes: dict[Level, str] = field(default_factory=lambda: {})
    type_prefixes: dict[MessageType, str] = field(default_factory=lambda: {})
    config_files: list[str] = field(default_factory=lambda: [])

    # ---------------------------- Build/freeze ----------------------------

    def freeze(self) -> RenderConfig:
        """Freeze this builder into an immutable `RenderConfig`."""
        level_prefixes: dict[Level, str] = dict(DEFAULT_LEVEL_PREFIXES)
        level_prefixes.update(self.level_prefixes)
        type_prefixes: dict[MessageType, str] = dict(DEFAULT_TYPE_PREFIXES)
        type_prefixes.update(self.type_prefixes)
        return RenderConfig(
            target=self.target,
            color=self.color if self.color is not None else ColorMode.AUTO,
            width=self.width,
            wrap=self.wrap if self.wrap is not None else True,
            unwrap=bool(self.unwrap),
            spinner_interval_ms=(
                self.spinner_interval_ms
                if self.spinner_interval_ms is not None
                else DEFAULT_SPINNER_INTERVAL_MS
            ),
            level_prefixes=MappingProxyType(level_prefixes),
            type_prefixes=MappingProxyType(type_prefixes),
            config_files=tuple(self.config_files),
        )

    # --------------------------- Loaders/parsers --------------------------

    @classmethod
    def from_toml_dict(cls, data: TomlTable, source: str | None = None) -> MutableRenderConfig:
        """Create a draft from a parsed ConsMark table.

        Unknown keys are logged and ignored.

        Raises:
            ConfigError: If a value has the wrong type or an unknown choice.
        """
        where: str = f" in {source}" if source else ""
        for key in data:
            if key not in _KNOWN_KEYS:
                logger.warning("Ignoring unknown config key '%s'%s", key, where)

        draft = cls()
        if source:
            draft.config_files = [source]

        raw_target: str | None = get_str_or_none(data, "target")
        if raw_target is not None:
            draft.target = _parse_choice(OutputTarget, raw_target, "target", where)

        raw_color: str | None = get_str_or_none(data, "color")
        if raw_color is not None:
            draft.color = _parse_choice(ColorMode, raw_color, "color", where)

        draft.width = get_int_or_none(data, "width", minimum=1)
        draft.wrap = get_bool_or_none(data, "wrap")
        draft.unwrap = get_bool_or_none(data, "unwrap")
        draft.spinner_interval_ms = get_int_or_none(data, "spinner_interval_ms", minimum=0)

        prefixes: TomlTable = get_table_or_none(data, "prefixes") or {}
        for key in prefixes:
            if key not in _KNOWN_PREFIX_KEYS:
                logger.warning("Ignoring unknown config key 'prefixes.%s'%s", key, where)

        for name, value in (get_table_or_none(prefixes, "levels") or {}).items():
            level: Level | None = Level.parse(name)
            if level is None:
                logger.warning("Ignoring prefix for unknown level '%s'%s", name, where)
                continue
            draft.level_prefixes[level] = _prefix_value(f"prefixes.levels.{name}", value)

        for name, value in (get_table_or_none(prefixes, "types") or {}).items():
            msg_type: MessageType | None = MessageType.parse(name)
            if msg_type is None:
                logger.warning("Ignoring prefix for unknown message type '%s'%s", name, where)
                continue
            draft.type_prefixes[msg_type] = _prefix_value(f"prefixes.types.{name}", value)

        logger.trace("Parsed config%s: %s", where, draft)
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableRenderConfig | None:
        """Load a draft from ``consmark.toml`` or ``pyproject.toml``.

        Returns:
            MutableRenderConfig | None: The draft, or ``None`` when a
                ``pyproject.toml`` has no ``[tool.consmark]`` table.

        Raises:
            ConfigError: If the file cannot be read, parsed or validated.
        """
        logger.debug("Loading config from %s", path)
        table: TomlTable | None = extract_tool_table(path, load_toml_dict(path))
        if table is None:
            logger.debug("No [tool.consmark] table in %s", path)
            return None
        return cls.from_toml_dict(table, source=str(path))

    @classmethod
    def load_merged(
        cls,
        *,
        start: Path | None = None,
        extra_config_files: Iterable[Path] = (),
        no_config: bool = False,
    ) -> MutableRenderConfig:
        """Discover and merge configuration layers into a draft.

        Args:
            start (Path | None): Discovery anchor; defaults to the working directory.
            extra_config_files (Iterable[Path]): Files merged after discovery, in order.
            no_config (bool): Skip discovery (explicit files are still merged).

        Returns:
            MutableRenderConfig: The merged draft.
        """
        draft = cls()
        paths: list[Path] = [] if no_config else discover_config_files(start or Path.cwd())
        paths.extend(Path(p) for p in extra_config_files)
        for path in paths:
            layer: MutableRenderConfig | None = cls.from_toml_file(path)
            if layer is not None:
                draft = draft.merge_with(layer)
        return draft

    # ------------------------------- Merging -------------------------------

    def merge_with(self, other: MutableRenderConfig) -> MutableRenderConfig:
        """Return a new draft where values set in ``other`` override this draft."""
        return MutableRenderConfig(
            target=other.target if other.target is not None else self.target,
            color=other.color if other.color is not None else self.color,
            width=other.width if other.width is not None else self.width,
            wrap=other.wrap if other.wrap is not None else self.wrap,
            unwrap=other.unwrap if other.unwrap is not None else self.unwrap,
            spinner_interval_ms=other.spinner_interval_ms
            if other.spinner_interval_ms is not None
            else self.spinner_interval_ms,
            level_prefixes={**self.level_prefixes, **other.level_prefixes},
            type_prefixes={**self.type_prefixes, **other.type_prefixes},
            config_files=self.config_files + other.config_files,
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableRenderConfig:
        """Apply CLI overrides; keys that are absent or ``None`` are left alone.

        Recognised keys: ``target``, ``color``, ``width``, ``wrap``, ``unwrap``.
        """
        logger.debug("Applying CLI arguments to MutableRenderConfig: %s", args)
        applied = False
        for key in ("target", "color", "width", "wrap", "unwrap"):
            value: Any = args.get(key)
            if value is not None:
                setattr(self, key, value)
                applied = True
        if applied:
            self.config_files.append(CLI_OVERRIDE_STR)
        return self


def _parse_choice(enum_cls: Any, raw: str, key: str, where: str) -> Any:
    member: Any = enum_cls.parse(raw)
    if member is None:
        allowed: str = ", ".join(enum_cls.keys())
        raise ConfigError(f"Invalid {key} '{raw}'{where} (allowed values: {allowed})")
    return member


def _prefix_value(key: str, value: object) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"Config key '{key}' must be a string, got {type(value).__name__}")
    return value
