# topmark:header:start
#
#   project      : ConsMark
#   file         : constants.py
#   file_relpath : src/consmark/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ConsMark Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    CONSMARK_VERSION: str = get_version("consmark")
except PackageNotFoundError:  # running from a source checkout
    CONSMARK_VERSION = "0.0.0"

# Environment variable consulted for the internal log level.
LOG_LEVEL_ENV_VAR: str = "CONSMARK_LOG_LEVEL"

# Config file names, in discovery order (later files override earlier ones).
PYPROJECT_TOML_NAME: str = "pyproject.toml"
CONSMARK_TOML_NAME: str = "consmark.toml"
PYPROJECT_TOOL_TABLE: tuple[str, str] = ("tool", "consmark")

# Minimum interval between two spinner frames.
DEFAULT_SPINNER_INTERVAL_MS: int = 80

# Width used by the CLI when no terminal width can be determined.
FALLBACK_TERMINAL_WIDTH: int = 80
