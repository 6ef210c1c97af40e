"""
Entry Commands
--------------

Commands that change or browse the reading list.

Commands:
    - add: Add an entry
    - remove: Remove an entry by name, or every entry of some topics
    - edit: Change the fields and topics of an entry
    - list: Filter, sort and print entries
    - topics: Show topics with their entry counts, or prune unused ones
"""
import click

from rlist.core.exceptions import InvalidArgumentError, ValidationError
from rlist.core.logging_manager import handle_cli_error
from rlist.core.validators import DataValidator
from rlist.database.query_engine import SORT_KEYS
from . import CLI_ERRORS, get_reading_list
from .display import echo_entries, format_entry, style_topic


class TimestampParamType(click.ParamType):
    """A 'YYYY-MM-DD' or 'YYYY-MM-DD HH:MM:SS' command line value."""

    name = "timestamp"

    def convert(self, value, param, ctx):
        try:
            DataValidator.format_timestamp(value)
        except ValidationError as e:
            self.fail(str(e), param, ctx)
        return value


TIMESTAMP = TimestampParamType()


def _datetime_format(ctx: click.Context) -> str:
    return ctx.obj["config"].datetime_format


@click.command()
@click.argument("name")
@click.argument("url")
@click.option("-a", "--author", help="Author of the entry")
@click.option(
    "-t", "--topic", "topics", multiple=True, help="Topic of the entry (repeatable)"
)
@click.pass_context
def add(ctx, name, url, author, topics):
    """Add an entry to the reading list."""
    rlist = get_reading_list(ctx)
    try:
        entry = rlist.add(name, url, author=author, topics=list(topics))
    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "add", {"name": name, "url": url})
        return

    click.echo("Entry added to rlist")
    click.echo(format_entry(entry, long=True, datetime_format=_datetime_format(ctx)))


@click.command()
@click.argument("name", required=False)
@click.option(
    "-t",
    "--topic",
    "topics",
    multiple=True,
    help="Remove every entry with this topic (repeatable)",
)
@click.pass_context
def remove(ctx, name, topics):
    """
    Remove an entry by NAME, or every entry with one of the given topics.

    NAME takes precedence over topics.
    """
    rlist = get_reading_list(ctx)
    fmt = _datetime_format(ctx)
    try:
        if name is not None:
            removed = rlist.remove_by_name(name)
            click.echo("Removed entry:")
            click.echo(format_entry(removed, long=True, datetime_format=fmt))
            return

        if not topics:
            raise InvalidArgumentError(
                "Nothing to remove: give an entry name or at least one topic"
            )
        removed_entries = rlist.remove_by_topics(list(topics))
    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "remove", {"name": name, "topics": list(topics)})
        return

    if not removed_entries:
        click.echo("No entries were removed")
        return

    click.echo("Removed these entries:")
    echo_entries(removed_entries, datetime_format=fmt)
    if len(removed_entries) > 1:
        click.echo(f"Removed a total of {len(removed_entries)} entries")


@click.command()
@click.argument("old_name")
@click.argument("new_name", required=False)
@click.option("-a", "--author", help="New author ('' clears it)")
@click.option("--url", help="New url")
@click.option(
    "-t",
    "--topic",
    "topics",
    multiple=True,
    help="Replace all topics with these (repeatable)",
)
@click.option("--add-topics", multiple=True, help="Topic to add (repeatable)")
@click.option("--clear-topics", is_flag=True, help="Remove every topic")
@click.option("--remove-topics", multiple=True, help="Topic to remove (repeatable)")
@click.pass_context
def edit(
    ctx, old_name, new_name, author, url, topics, add_topics, clear_topics, remove_topics
):
    """Edit the entry named OLD_NAME, optionally renaming it to NEW_NAME."""
    rlist = get_reading_list(ctx)
    try:
        entry = rlist.edit(
            old_name,
            new_name=new_name,
            author=author,
            url=url,
            topics=list(topics) if topics else None,
            add_topics=list(add_topics),
            clear_topics=clear_topics,
            remove_topics=list(remove_topics),
        )
    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "edit", {"old_name": old_name})
        return

    click.echo("The new entry is:")
    click.echo(format_entry(entry, long=True, datetime_format=_datetime_format(ctx)))


@click.command("list")
@click.argument("query", required=False)
@click.option("-l", "--long", "long_format", is_flag=True, help="Show topics and dates")
@click.option(
    "-t", "--topic", "topics", multiple=True, help="Required topic (repeatable)"
)
@click.option(
    "--any",
    "match_any",
    is_flag=True,
    help="Match entries with any of the topics instead of all of them",
)
@click.option("-a", "--author", help="Author contains this text")
@click.option("--url", help="URL contains this text")
@click.option("-s", "--sort-by", type=click.Choice(SORT_KEYS), help="Sort key")
@click.option("--desc", is_flag=True, help="Sort in descending order")
@click.option(
    "--from", "added_from", type=TIMESTAMP, help="Added on or after this date"
)
@click.option("--to", "added_to", type=TIMESTAMP, help="Added on or before this date")
@click.pass_context
def list_entries(
    ctx,
    query,
    long_format,
    topics,
    match_any,
    author,
    url,
    sort_by,
    desc,
    added_from,
    added_to,
):
    """List entries whose name contains QUERY."""
    rlist = get_reading_list(ctx)
    try:
        entries = rlist.query(
            name=query,
            topics=list(topics),
            author=author,
            url=url,
            sort_by=sort_by,
            descending=desc,
            added_from=added_from,
            added_to=added_to,
            match_any=match_any,
        )
    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "list", {"query": query})
        return

    echo_entries(entries, long=long_format, datetime_format=_datetime_format(ctx))


@click.command()
@click.option("--prune", is_flag=True, help="Delete topics no entry uses")
@click.pass_context
def topics(ctx, prune):
    """List topics with the number of entries using them."""
    rlist = get_reading_list(ctx)
    try:
        if prune:
            removed = rlist.prune_topics()
        else:
            counts = rlist.list_topics()
    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "topics")
        return

    if prune:
        if removed:
            click.echo(f"Deleted {len(removed)} unused topics: {', '.join(removed)}")
        else:
            click.echo("No unused topics")
        return

    if not counts:
        click.echo("No topics yet")
        return
    for name, count in counts:
        click.echo(f"  {style_topic(name)}: {count}")
