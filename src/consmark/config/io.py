# topmark:header:start
#
#   project      : ConsMark
#   file         : io.py
#   file_relpath : src/consmark/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O and config file discovery.

Parsing is done with `tomlkit` and returned as plain `dict` structures.
Unlike discovery, which is best effort, loading a file that was found or
named explicitly is strict: unreadable or malformed files raise
`ConfigError`.

Typed getters validate one value each and raise `ConfigError` on a type
mismatch; a missing key yields ``None`` so that the caller can inherit the
value from a lower-precedence source.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from consmark.config.logging import get_logger
from consmark.constants import CONSMARK_TOML_NAME, PYPROJECT_TOML_NAME, PYPROJECT_TOOL_TABLE
from consmark.core.errors import ConfigError

if TYPE_CHECKING:
    from consmark.config.logging import ConsmarkLogger

TomlTable = dict[str, Any]

logger: ConsmarkLogger = get_logger(__name__)


def parse_toml_text(text: str, source: str = "<string>") -> TomlTable:
    """Parse TOML text into a plain dict.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        data: Any = tomlkit.parse(text).unwrap()
    except TomlkitParseError as e:
        raise ConfigError(f"Error decoding TOML from {source}: {e}") from e
    return cast("TomlTable", data) if isinstance(data, dict) else {}


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file (UTF-8).

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Error loading TOML from {path}: {e}") from e
    return parse_toml_text(text, str(path))


def extract_tool_table(path: Path, data: TomlTable) -> TomlTable | None:
    """Return the ConsMark table of a parsed config file.

    For ``pyproject.toml`` this is ``[tool.consmark]`` (``None`` if absent);
    any other file is a ConsMark file in its entirety.
    """
    if path.name != PYPROJECT_TOML_NAME:
        return data
    table: Any = data
    for key in PYPROJECT_TOOL_TABLE:
        table = table.get(key) if isinstance(table, dict) else None
    if table is None:
        return None
    if not isinstance(table, dict):
        raise ConfigError(f"[{'.'.join(PYPROJECT_TOOL_TABLE)}] in {path} must be a table")
    return cast("TomlTable", table)


def discover_config_files(start: Path) -> list[Path]:
    """Return config files found by walking upward from ``start``.

    Files are returned root-most first, nearest last; within one directory
    ``pyproject.toml`` (only if it has a ``[tool.consmark]`` table) comes
    before ``consmark.toml`` so that the latter wins a last-wins merge. A file
    that sets ``root = true`` stops the walk after its directory.

    Discovery is best effort: files that cannot be parsed are skipped here
    (with a warning) and never loaded.
    """
    cur: Path = start.resolve()
    if cur.is_file():
        cur = cur.parent

    per_dir: list[list[Path]] = []
    while True:
        stop_here = False
        entries: list[Path] = []
        for name in (PYPROJECT_TOML_NAME, CONSMARK_TOML_NAME):
            p: Path = cur / name
            if not p.is_file():
                continue
            try:
                table: TomlTable | None = extract_tool_table(p, load_toml_dict(p))
            except ConfigError as e:
                logger.warning("Ignoring config file during discovery: %s", e)
                continue
            if table is None:
                continue
            entries.append(p)
            logger.debug("Discovered config file: %s", p)
            if table.get("root") is True:
                stop_here = True

        if entries:
            per_dir.append(entries)
        parent: Path = cur.parent
        if stop_here or parent == cur:
            if stop_here:
                logger.debug("Stopping upward config discovery at %s due to root=true", cur)
            break
        cur = parent

    ordered: list[Path] = []
    for entries in reversed(per_dir):
        ordered.extend(entries)
    return ordered


# --- typed getters ---


def _type_error(key: str, expected: str, value: object) -> ConfigError:
    return ConfigError(f"Config key '{key}' must be {expected}, got {type(value).__name__}")


def get_table_or_none(table: TomlTable, key: str) -> TomlTable | None:
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise _type_error(key, "a table", value)
    return cast("TomlTable", value)


def get_bool_or_none(table: TomlTable, key: str) -> bool | None:
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise _type_error(key, "a boolean", value)
    return value


def get_int_or_none(table: TomlTable, key: str, *, minimum: int | None = None) -> int | None:
    value: Any = table.get(key)
    if value is None:
        return None
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise _type_error(key, "an integer", value)
    if minimum is not None and value < minimum:
        raise ConfigError(f"Config key '{key}' must be >= {minimum}, got {value}")
    return value


def get_str_or_none(table: TomlTable, key: str) -> str | None:
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise _type_error(key, "a string", value)
    return value


def to_toml(table: TomlTable) -> str:
    """Serialize a plain dict as TOML text."""
    return tomlkit.dumps(table)
