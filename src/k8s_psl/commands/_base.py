"""Custom Click command class with wrapped-command and --examples support.

``PslCommand`` splits the argument list at the first literal ``--``:
everything before it is parsed by Click as usual, everything after it is
kept verbatim as the command to run. Options after ``--`` therefore
belong to the wrapped command, never to k8s-psl.
"""

from __future__ import annotations

from typing import Any

import click

SEPARATOR = "--"
WRAPPED_COMMAND_META = "k8s_psl.wrapped_command"


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


def wrapped_command(ctx: click.Context) -> tuple[str, ...]:
    """The tokens that followed ``--`` on the command line."""
    return ctx.meta.get(WRAPPED_COMMAND_META, ())


class PslCommand(click.Command):
    """Click Command that takes a trailing ``-- <command> [args...]``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if SEPARATOR in args:
            index = args.index(SEPARATOR)
            ctx.meta[WRAPPED_COMMAND_META] = tuple(args[index + 1 :])
            args = args[:index]
        else:
            ctx.meta[WRAPPED_COMMAND_META] = ()
        return super().parse_args(ctx, args)

    def format_usage(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        pieces = self.collect_usage_pieces(ctx)
        pieces.append(f"{SEPARATOR} COMMAND [ARGS]...")
        formatter.write_usage(ctx.command_path, " ".join(pieces))
