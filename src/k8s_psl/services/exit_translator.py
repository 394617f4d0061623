"""Exit translator — map command and patch outcomes to a process exit code.

Evaluated in order:

====================================  =========================
command failed / could not launch     the command's own code
command ok, patch RESOURCE_ERROR      66
command ok, patch API_UNREACHABLE     68
command ok, patch applied             0
====================================  =========================

Malformed arguments never reach this point: Click exits with its usage
code before the command runs.
"""

from __future__ import annotations

from k8s_psl.domain.exit_codes import ExitCode
from k8s_psl.domain.types import ErrorKind
from k8s_psl.services.result import ServiceResult

_PATCH_EXIT_CODES: dict[ErrorKind, ExitCode] = {
    ErrorKind.RESOURCE_ERROR: ExitCode.RESOURCE_ERROR,
    ErrorKind.API_UNREACHABLE: ExitCode.API_UNREACHABLE,
}


def exit_code_for_command(result: ServiceResult) -> int:
    """Exit code for a failed (or successful) run_command result."""
    if result.ok:
        return ExitCode.OK
    code = result.data.get("exit_code")
    if isinstance(code, int) and code != 0:
        return code
    return ExitCode.GENERIC_FAILURE


def exit_code_for_patch(result: ServiceResult) -> int:
    if result.ok:
        return ExitCode.OK
    kind = result.error_kind
    if kind is None:
        return ExitCode.GENERIC_FAILURE
    return _PATCH_EXIT_CODES.get(kind, ExitCode.GENERIC_FAILURE)


def exit_code_for(command: ServiceResult, patch: ServiceResult | None) -> int:
    """Pure mapping of (command result, patch result) to an exit code.

    *patch* is None exactly when the command failed and patching was
    never attempted.
    """
    if not command.ok:
        return exit_code_for_command(command)
    if patch is None:
        # A successful command is always followed by a patch attempt.
        return ExitCode.GENERIC_FAILURE
    return exit_code_for_patch(patch)

