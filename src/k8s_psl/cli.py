"""Root CLI command for k8s-psl.

Resolve arguments, run the wrapped command, and label the target
resource only if the command succeeded.
"""

from __future__ import annotations

import click
import structlog
from pydantic import ValidationError

from k8s_psl import __version__
from k8s_psl.commands._base import PslCommand, wrapped_command
from k8s_psl.commands._context import AppContext
from k8s_psl.config.settings import PslSettings
from k8s_psl.domain.refs import LabelAssignment, ResourceRef, build_ref, parse_label, parse_resource
from k8s_psl.domain.types import ResourceKind
from k8s_psl.services.exit_translator import exit_code_for
from k8s_psl.services.patcher import LabelPatcher
from k8s_psl.services.result import ServiceResult
from k8s_psl.services.runner import CommandRunner

log = structlog.get_logger(__name__)

EXAMPLES = """\
  k8s-psl -n batch -l done=yes job/run1 -- ./process.sh --input data.csv
  k8s-psl -n default -l stage=extracted pod/etl-0 -- python extract.py
  K8S_PSL_NAMESPACE=batch k8s-psl -l done=yes job/run1 -- make all
  k8s-psl -v --log-json -n batch -l done=yes job/run1 -- true"""


def _parse_namespace(ctx: click.Context, param: click.Parameter, value: str) -> str:
    if not value:
        raise click.BadParameter("namespace must not be empty", ctx=ctx, param=param)
    return value


def _parse_label(ctx: click.Context, param: click.Parameter, value: str) -> LabelAssignment:
    try:
        return parse_label(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from exc


def _parse_resource(
    ctx: click.Context, param: click.Parameter, value: str
) -> tuple[ResourceKind, str]:
    try:
        return parse_resource(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from exc


@click.command(
    cls=PslCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
    examples=EXAMPLES,
)
@click.version_option(version=__version__, prog_name="k8s-psl")
@click.option(
    "-n",
    "--namespace",
    required=True,
    envvar="K8S_PSL_NAMESPACE",
    show_envvar=True,
    callback=_parse_namespace,
    help="Namespace of the target resource.",
)
@click.option(
    "-l",
    "--label",
    required=True,
    envvar="K8S_PSL_LABEL",
    show_envvar=True,
    metavar="KEY=VALUE",
    callback=_parse_label,
    help="Label to set on success. Repeated flags: last one wins.",
)
@click.option("-v", "--verbose", is_flag=True, help="Debug logs and step timings on stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--json", "json_output", is_flag=True, help="Report the outcome as JSON on stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.argument("resource", metavar="(job|pod)/NAME", callback=_parse_resource)
@click.pass_context
def cli(
    ctx: click.Context,
    namespace: str,
    label: LabelAssignment,
    verbose: bool,
    log_json: bool,
    json_output: bool,
    config_path: str | None,
    resource: tuple[ResourceKind, str],
) -> None:
    """Run COMMAND, then label a Kubernetes Job or Pod if it succeeded.

    \b
    Exit codes:
      0    command succeeded and the label was applied
      N    the command's own non-zero exit code
      66   command succeeded; resource not found or patch rejected
      68   command succeeded; API server unreachable or credentials refused
      2    invalid arguments
    """
    command = wrapped_command(ctx)
    if not command:
        raise click.UsageError("Missing command: expected '-- COMMAND [ARGS]...'", ctx=ctx)

    kind, name = resource
    ref: ResourceRef = build_ref(kind, name, namespace)

    # Unset flags fall through to K8S_PSL_* env vars and the TOML file.
    flags = {"verbose": verbose, "log_json": log_json, "json_output": json_output}
    try:
        settings = PslSettings.from_cli(
            config_path=config_path,
            **{key: value for key, value in flags.items() if value},
        )
    except ValidationError as exc:
        raise click.UsageError(f"Invalid configuration: {exc}", ctx=ctx) from exc

    app = AppContext(settings)
    ctx.obj = app
    log.debug("invocation", resource=str(ref), namespace=namespace, label=str(label))

    run_result = CommandRunner().run(command)
    app.emit(run_result)

    patch_result: ServiceResult | None = None
    if run_result.ok:
        patch_result = LabelPatcher(settings.kube).patch(ref, label)
        app.emit(patch_result)

    ctx.exit(exit_code_for(run_result, patch_result))


def main() -> None:
    """Console-script entry point."""
    cli(prog_name="k8s-psl")
