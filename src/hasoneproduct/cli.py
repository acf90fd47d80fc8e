"""Entry point: the ``hasoneproduct`` command group and its global flags."""

from __future__ import annotations

import click

from hasoneproduct import __version__
from hasoneproduct.commands import register_commands
from hasoneproduct.commands._context import AppContext
from hasoneproduct.config.settings import RuleSettings


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="hasoneproduct")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print one status line per result.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and timing metadata.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Read this TOML file instead of discovering hasoneproduct.toml.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """Manage and evaluate the "customer has one of these products" discount requirement."""
    app = AppContext(
        RuleSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    )
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
