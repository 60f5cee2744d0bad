# topmark:header:start
#
#   project      : ConsMark
#   file         : exit_codes.py
#   file_relpath : src/consmark/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Standardized exit codes used by the ConsMark CLI.

Codes above 1 follow the BSD ``sysexits.h`` convention so that scripts can
tell a bad invocation from unreadable input or a broken config file.

Usage:
    ```python
    import subprocess
    from consmark.cli.exit_codes import ExitCode

    result = subprocess.run(["consmark", "render", "README.txt"])
    if result.returncode == ExitCode.CONFIG_ERROR:
        print("Fix consmark.toml first.")
    ```
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes returned by the ConsMark CLI.

    Attributes:
        SUCCESS (int): Command completed.
        FAILURE (int): Generic failure.
        USAGE_ERROR (int): Invalid command line.
        DATA_ERROR (int): Input could not be decoded.
        NO_INPUT (int): Input file does not exist.
        SOFTWARE (int): Internal error in the markup engine.
        IO_ERROR (int): Input could not be read.
        CONFIG_ERROR (int): Configuration is missing, malformed or invalid.
    """

    SUCCESS = 0
    FAILURE = 1
    USAGE_ERROR = 64
    DATA_ERROR = 65
    NO_INPUT = 66
    SOFTWARE = 70
    IO_ERROR = 74
    CONFIG_ERROR = 78
