"""CommandRunner — run the wrapped command with inherited standard streams.

The child shares the wrapper's stdin, stdout and stderr, so its output
reaches the caller unmodified. There is no timeout: the runner blocks for
the whole lifetime of the child.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from k8s_psl.domain.exit_codes import ExitCode, from_returncode
from k8s_psl.domain.types import ErrorKind
from k8s_psl.services.result import ServiceError, ServiceResult
from k8s_psl.services.timing import timed_step

logger = logging.getLogger(__name__)


class CommandRunner:
    """Execute one command and report how it ended."""

    @timed_step
    def run(self, command: Sequence[str]) -> ServiceResult:
        """Run *command* (at least one token) to completion.

        Returns an ok result on exit status 0. Otherwise the result carries
        ``data["exit_code"]``, the code the wrapper should exit with.
        """
        op = "run_command"
        argv = list(command)
        logger.debug("Running command: %s", argv)
        try:
            completed = subprocess.run(argv, check=False)
        except FileNotFoundError as exc:
            return self._launch_failure(op, argv, exc, ExitCode.NOT_FOUND)
        except PermissionError as exc:
            return self._launch_failure(op, argv, exc, ExitCode.NOT_EXECUTABLE)
        except OSError as exc:
            return self._launch_failure(op, argv, exc, ExitCode.GENERIC_FAILURE)

        returncode = completed.returncode
        exit_code = from_returncode(returncode)
        data = {"command": argv, "returncode": returncode, "exit_code": exit_code}
        if returncode == 0:
            return ServiceResult(ok=True, op=op, data=data)

        logger.debug("Command exited with status %d", returncode)
        if returncode < 0:
            message = f"Command killed by signal {-returncode}"
        else:
            message = f"Command exited with status {returncode}"
        return ServiceResult(
            ok=False,
            op=op,
            data=data,
            error=ServiceError(code=ErrorKind.COMMAND_FAILED, message=message),
        )

    @staticmethod
    def _launch_failure(
        op: str,
        argv: list[str],
        exc: OSError,
        exit_code: ExitCode,
    ) -> ServiceResult:
        logger.debug("Command failed to launch: %s", exc)
        return ServiceResult(
            ok=False,
            op=op,
            data={"command": argv, "exit_code": int(exit_code)},
            error=ServiceError(
                code=ErrorKind.LAUNCH_FAILED,
                message=f"Cannot run {argv[0]!r}: {exc.strerror or exc}",
                detail={"errno": exc.errno},
            ),
        )
