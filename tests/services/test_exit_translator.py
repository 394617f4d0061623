"""Tests for the (command result, patch result) -> exit code mapping."""

import pytest

from k8s_psl.domain.types import ErrorKind
from k8s_psl.services.exit_translator import exit_code_for
from k8s_psl.services.result import ServiceError, ServiceResult


def _command(exit_code: int) -> ServiceResult:
    if exit_code == 0:
        return ServiceResult(ok=True, op="run_command", data={"exit_code": 0})
    return ServiceResult(
        ok=False,
        op="run_command",
        data={"exit_code": exit_code},
        error=ServiceError(code=ErrorKind.COMMAND_FAILED, message="failed"),
    )


def _patch(kind: ErrorKind | None) -> ServiceResult:
    if kind is None:
        return ServiceResult(ok=True, op="patch_label")
    return ServiceResult(
        ok=False, op="patch_label", error=ServiceError(code=kind, message="failed")
    )


class TestExitCodeFor:
    def test_all_good(self) -> None:
        assert exit_code_for(_command(0), _patch(None)) == 0

    @pytest.mark.parametrize("code", [1, 2, 66, 127, 143])
    def test_command_code_wins(self, code: int) -> None:
        assert exit_code_for(_command(code), None) == code

    def test_command_failure_ignores_patch(self) -> None:
        assert exit_code_for(_command(5), _patch(ErrorKind.RESOURCE_ERROR)) == 5

    def test_resource_error(self) -> None:
        assert exit_code_for(_command(0), _patch(ErrorKind.RESOURCE_ERROR)) == 66

    def test_api_unreachable(self) -> None:
        assert exit_code_for(_command(0), _patch(ErrorKind.API_UNREACHABLE)) == 68

    def test_missing_command_code_is_generic(self) -> None:
        result = ServiceResult(
            ok=False,
            op="run_command",
            error=ServiceError(code=ErrorKind.LAUNCH_FAILED, message="boom"),
        )
        assert exit_code_for(result, None) == 1

    def test_successful_command_without_patch(self) -> None:
        assert exit_code_for(_command(0), None) == 1
