#!/usr/bin/env python3
"""
rlist Command Line
------------------

Command-line interface for the reading list.

This module provides the main CLI group and shared context setup for all
commands.

Command Structure:
    - Entries: add, remove, edit, list
    - Topics: topics
    - Transfer: import, export

Most commands answer to short aliases as well (e.g. `rlist ls`,
`rlist rm`, `rlist mv`).

Usage:
    # Get general help
    rlist --help

    # Add an entry with two topics
    rlist add "SQLite docs" https://sqlite.org/docs.html -t databases -t sqlite

    # List entries about databases added this year
    rlist ls -t databases --from 2024-01-01 -l
"""
from pathlib import Path
from typing import Dict, Optional

import click

from rlist import __version__
from rlist.core.config import load_config
from rlist.core.exceptions import (
    ConfigError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from rlist.core.logging_manager import handle_cli_error, setup_logger
from rlist.core.paths import default_log_dir
from rlist.database import ReadingList, ReadingListDB

COMMAND_ALIASES: Dict[str, str] = {
    "a": "add",
    "create": "add",
    "rm": "remove",
    "r": "remove",
    "d": "remove",
    "delete": "remove",
    "e": "edit",
    "mv": "edit",
    "ls": "list",
    "l": "list",
    "q": "list",
    "query": "list",
    "s": "list",
    "search": "list",
    "find": "list",
    "f": "list",
}


class AliasedGroup(click.Group):
    """Group that also resolves the short command aliases."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        return super().get_command(ctx, COMMAND_ALIASES.get(cmd_name, cmd_name))

    def resolve_command(self, ctx, args):
        _, cmd, args = super().resolve_command(ctx, args)
        return cmd.name if cmd else None, cmd, args


@click.group(cls=AliasedGroup)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to config file (default: $XDG_CONFIG_HOME/rlist.yml)",
)
@click.option(
    "--db-path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to database file (overrides the config file)",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Path to log directory (default: ~/rlist/logs)",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.version_option(version=__version__, prog_name="rlist")
@click.pass_context
def cli(ctx, config_path, db_path, log_dir, verbose):
    """rlist - a personal reading list"""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["log_dir"] = Path(log_dir).expanduser() if log_dir else default_log_dir()
    ctx.obj["logger"] = setup_logger(ctx.obj["log_dir"], "cli")

    try:
        config = load_config(config_path, logger=ctx.obj["logger"])
    except ConfigError as e:
        handle_cli_error(ctx, e, "load_config", {"config_path": config_path})
        return

    ctx.obj["config"] = config
    ctx.obj["db_path"] = Path(db_path).expanduser() if db_path else config.db_file


# Errors reported to the user as a one-line message
CLI_ERRORS = (
    ConfigError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)


def get_reading_list(ctx: click.Context) -> ReadingList:
    """Get or create the reading list from context."""
    if "rlist" not in ctx.obj:
        try:
            db = ReadingListDB(
                db_path=ctx.obj["db_path"],
                logger=setup_logger(ctx.obj["log_dir"], "database"),
            )
        except DatabaseError as e:
            handle_cli_error(ctx, e, "open_database", {"db_path": str(ctx.obj["db_path"])})
        ctx.obj["rlist"] = ReadingList(db)
    return ctx.obj["rlist"]


def main() -> None:
    """Console script entry point."""
    cli(obj={})


# Import and register command modules
# These imports must come after CLI group definition
from .entries import add, remove, edit, list_entries, topics  # noqa: E402
from .transfer import export, import_  # noqa: E402

cli.add_command(add)
cli.add_command(remove)
cli.add_command(edit)
cli.add_command(list_entries)
cli.add_command(topics)
cli.add_command(import_)
cli.add_command(export)


if __name__ == "__main__":
    main()
