"""Subcommand modules for hasoneproduct.

Provides register_commands() which uses deferred imports to keep
``hasoneproduct --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from hasoneproduct.commands.check import check
    from hasoneproduct.commands.configure import configure, show
    from hasoneproduct.commands.lifecycle import install, uninstall, url

    cli.add_command(check)
    cli.add_command(configure)
    cli.add_command(show)
    cli.add_command(install)
    cli.add_command(uninstall)
    cli.add_command(url)
