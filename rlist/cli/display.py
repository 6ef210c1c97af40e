"""
Entry Display
-------------

Terminal rendering of reading list entries.

    name: url by author                  (short form)
    Topics: python, databases            (long form only)
    Added on 2024-03-01 18:22:05         (long form only)

Names are bold orange, urls bright blue and underlined, authors green.
Every topic gets a color picked from a fixed palette by hashing its name,
so the same topic always shows in the same color.
"""
import hashlib
from typing import Iterable, Tuple

import click

from rlist.core.exceptions import ValidationError
from rlist.core.validators import DataValidator
from rlist.dataclasses.reading_entry import ReadingEntry

NAME_COLOR = (255, 165, 0)

TOPIC_COLORS: Tuple[Tuple[int, int, int], ...] = (
    (200, 10, 20),
    (125, 30, 20),
    (130, 130, 10),
    (10, 150, 120),
    (220, 165, 0),
    (207, 64, 207),
    (255, 117, 43),
    (38, 169, 173),
    (114, 39, 219),
    (219, 39, 78),
    (60, 105, 230),
    (60, 230, 130),
    (5, 171, 74),
    (105, 201, 14),
    (15, 103, 135),
    (161, 66, 51),
    (120, 89, 6),
    (245, 44, 44),
    (230, 195, 20),
    (5, 2, 207),
)


def topic_color(topic: str) -> Tuple[int, int, int]:
    """Stable palette color for a topic name."""
    digest = hashlib.md5(topic.encode("utf-8")).digest()
    return TOPIC_COLORS[int.from_bytes(digest[:4], "big") % len(TOPIC_COLORS)]


def style_topic(topic: str) -> str:
    return click.style(topic, fg=topic_color(topic))


def format_added(added: str, datetime_format: str) -> str:
    """Render a stored timestamp with the configured format."""
    try:
        return DataValidator.parse_timestamp(added).strftime(datetime_format)
    except ValidationError:
        return added


def format_entry(entry: ReadingEntry, long: bool = False, datetime_format: str = "") -> str:
    """
    Render one entry for the terminal.

    Args:
        entry: Entry to render
        long: Add the topics and the date the entry was added
        datetime_format: strftime format for the added date (long form)

    Returns:
        Styled text, possibly spanning several lines
    """
    line = "{name}: {url}".format(
        name=click.style(entry.name, fg=NAME_COLOR, bold=True),
        url=click.style(entry.url, fg="bright_blue", underline=True),
    )
    if entry.author:
        line += f" by {click.style(entry.author, fg='green')}"

    if not long:
        return line

    lines = [line]
    if entry.topics:
        lines.append("Topics: " + ", ".join(style_topic(t) for t in sorted(entry.topics)))
    if entry.added:
        added = format_added(entry.added, datetime_format) if datetime_format else entry.added
        lines.append(f"Added on {added}")
    return "\n".join(lines)


def echo_entries(
    entries: Iterable[ReadingEntry], long: bool = False, datetime_format: str = ""
) -> None:
    """Print entries separated by blank lines."""
    for entry in entries:
        click.echo(format_entry(entry, long=long, datetime_format=datetime_format))
        click.echo()
