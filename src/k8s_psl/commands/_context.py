"""AppContext — settings, logging and result emission for one invocation.

Created once by the root command. Every wrapper-level message goes to
stderr; stdout belongs to the wrapped command.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from k8s_psl.domain.types import ErrorKind
from k8s_psl.output.formatters import format_result

if TYPE_CHECKING:
    from k8s_psl.config.settings import PslSettings
    from k8s_psl.services.result import ServiceResult


class AppContext:
    """Shared state for the wrapper command."""

    def __init__(self, settings: PslSettings) -> None:
        self.settings = settings

        from k8s_psl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def render(self, result: ServiceResult) -> str:
        return format_result(
            result,
            json_output=self.settings.json_output,
            color=sys.stderr.isatty(),
        )

    def emit(self, result: ServiceResult) -> None:
        """Report a ServiceResult on stderr.

        * Success: silent unless ``--verbose`` or ``--json``.
        * Failure: always reported, except a plain non-zero exit of the
          wrapped command, which is only reported when verbose since the
          command speaks for itself.

        Exit codes are decided by the caller, not here.
        """
        loud = self.settings.verbose or self.settings.json_output
        if result.ok:
            if loud:
                click.echo(self.render(result), err=True)
            return
        if loud or result.error_kind is not ErrorKind.COMMAND_FAILED:
            click.echo(self.render(result), err=True)
