"""Click command class carrying usage examples.

``--help`` stays short; ``--examples`` prints the command's examples
block and exits before any argument is validated.
"""

from __future__ import annotations

from typing import Any

import click


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    command = ctx.command
    assert isinstance(command, RuleCommand)
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(command.examples)
    ctx.exit(0)


class RuleCommand(click.Command):
    """A ``click.Command`` that accepts ``examples=`` in its decorator."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    is_eager=True,
                    expose_value=False,
                    callback=_print_examples,
                    help="Print usage examples and exit.",
                )
            )
