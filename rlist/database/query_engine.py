#!/usr/bin/env python3
"""
query_engine.py
--------------------
Builds filtered, sorted views over the entries table.

The engine works in three stages:

    1. build_rows_statement() turns an EntryFilter into one SELECT over
       entries LEFT JOIN entry_topic_links LEFT JOIN topics. Substring and
       date-range filters are applied per row here.
    2. fold_rows() groups the flat (entry, topic) rows into ReadingEntry
       aggregates, one per entry name, in first-seen order.
    3. filter_by_topics() keeps the aggregates whose complete topic set
       satisfies the requested topics (all of them, or any of them).

Topic filtering cannot be a row predicate: the join yields one row per
linked topic, so it must run over the folded aggregates.

Usage:
    stmt = build_rows_statement(EntryFilter(name="py", sort_by="added"))
    entries = fold_rows(session.execute(stmt).all())
    entries = filter_by_topics(entries, ["python", "web"], match_any=False)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from sqlalchemy import Select, func, select

from rlist.core.exceptions import ValidationError
from rlist.core.validators import DataValidator
from rlist.dataclasses.reading_entry import ReadingEntry
from rlist.database.models import Entry, Topic, entry_topic_links

SORT_KEYS = ("name", "url", "author", "added")


@dataclass
class EntryFilter:
    """
    Optional filter and sort parameters for an entry query.

    String filters are case-sensitive substring matches. Timestamp bounds
    accept datetime, date or 'YYYY-MM-DD[ HH:MM:SS]' strings and are both
    inclusive; a bare date as upper bound covers the whole day.
    """

    name: Optional[str] = None
    author: Optional[str] = None
    url: Optional[str] = None
    added_from: Any = None
    added_to: Any = None
    sort_by: Optional[str] = None
    descending: bool = False
    topics: List[str] = field(default_factory=list)
    match_any: bool = False

    def __post_init__(self) -> None:
        if self.sort_by is not None and self.sort_by not in SORT_KEYS:
            raise ValidationError(
                f"Invalid sort key {self.sort_by!r}; "
                f"expected one of: {', '.join(SORT_KEYS)}"
            )
        self.topics = DataValidator.normalize_topics(self.topics)


def _contains(column, value: str):
    # instr() is case-sensitive, unlike SQLite's LIKE
    return func.instr(column, value) > 0


def build_rows_statement(entry_filter: EntryFilter) -> Select:
    """
    Build the flat per-(entry, topic) SELECT for a filter.

    Each result row is (name, url, author, added, topic_name); entries
    without topics appear once with topic_name NULL.

    Args:
        entry_filter: Filter and sort parameters

    Returns:
        SQLAlchemy Select ready for execution

    Raises:
        ValidationError: If a timestamp bound cannot be interpreted
    """
    stmt = (
        select(Entry.name, Entry.url, Entry.author, Entry.added, Topic.name)
        .select_from(Entry)
        .outerjoin(entry_topic_links, entry_topic_links.c.entry_id == Entry.id)
        .outerjoin(Topic, Topic.id == entry_topic_links.c.topic_id)
    )

    # ---- Row-level filters ----
    if entry_filter.name:
        stmt = stmt.where(_contains(Entry.name, entry_filter.name))
    if entry_filter.author:
        stmt = stmt.where(_contains(Entry.author, entry_filter.author))
    if entry_filter.url:
        stmt = stmt.where(_contains(Entry.url, entry_filter.url))

    lower = DataValidator.format_timestamp(entry_filter.added_from)
    upper = DataValidator.format_timestamp(entry_filter.added_to, end_of_day=True)
    if lower is not None:
        stmt = stmt.where(Entry.added >= lower)
    if upper is not None:
        stmt = stmt.where(Entry.added <= upper)

    # ---- Ordering ----
    sort_column = getattr(Entry, entry_filter.sort_by or "name")
    if entry_filter.descending:
        stmt = stmt.order_by(sort_column.desc(), Entry.name.desc())
    else:
        stmt = stmt.order_by(sort_column.asc(), Entry.name.asc())

    return stmt


def fold_rows(rows: Iterable[Sequence[Any]]) -> List[ReadingEntry]:
    """
    Group flat join rows into one ReadingEntry per entry name.

    Rows of the same entry need not be consecutive. Entries keep the
    order in which their first row was seen; a NULL topic adds nothing.

    Args:
        rows: Iterable of (name, url, author, added, topic_name)

    Returns:
        List of ReadingEntry aggregates
    """
    folded: Dict[str, ReadingEntry] = {}
    for name, url, author, added, topic in rows:
        entry = folded.get(name)
        if entry is None:
            entry = ReadingEntry(name=name, url=url, author=author, added=added)
            folded[name] = entry
        if topic is not None and topic not in entry.topics:
            entry.topics.append(topic)
    return list(folded.values())


def filter_by_topics(
    entries: Iterable[ReadingEntry],
    topics: Optional[Sequence[str]],
    match_any: bool = False,
) -> List[ReadingEntry]:
    """
    Keep the entries whose topic set satisfies the requested topics.

    Args:
        entries: Folded entry aggregates
        topics: Requested topic names; empty or None disables filtering
        match_any: If True, one shared topic is enough; otherwise the entry
            must carry every requested topic

    Returns:
        Matching entries in their original order
    """
    entries = list(entries)
    if not topics:
        return entries

    wanted = set(topics)
    if match_any:
        return [entry for entry in entries if entry.topic_set & wanted]
    return [entry for entry in entries if wanted <= entry.topic_set]
