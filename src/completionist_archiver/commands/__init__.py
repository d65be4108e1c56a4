"""Subcommand modules for completionist-archiver.

Provides register_commands() which uses deferred imports to keep
``completionist-archiver --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all commands on the root CLI group."""
    from completionist_archiver.commands.export import export

    cli.add_command(export)
