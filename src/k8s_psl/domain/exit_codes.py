"""Process exit codes used by the wrapper itself.

The wrapped command's own code is passed through untouched and is not
listed here.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    OK = 0
    GENERIC_FAILURE = 1
    USAGE = 2  # click.UsageError.exit_code
    RESOURCE_ERROR = 66
    API_UNREACHABLE = 68
    NOT_EXECUTABLE = 126
    NOT_FOUND = 127


SIGNAL_BASE = 128
"""Children killed by signal N exit with ``SIGNAL_BASE + N`` (shell convention)."""


def from_returncode(returncode: int) -> int:
    """Translate a ``subprocess`` return code into a process exit code.

    Negative return codes mean the child was killed by a signal.
    """
    if returncode < 0:
        return SIGNAL_BASE + (-returncode)
    return returncode
