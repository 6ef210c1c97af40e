#!/usr/bin/env python3
"""
entry_manager.py
--------------------
Manages Entry entities and their links to topics.

Entries are the primary records of the reading list. They are identified
externally by a case-sensitive unique name; the numeric id never leaves
the database layer.

Key Features:
    - Create entries, reporting which unique column (name or url) collided
    - Conditional-column updates touching only the supplied fields
    - Link table mutations (associate, unlink by name, unlink all)
    - Delete by name (returning the topics the entry had) or by topic
    - Filtered and complete fetches through the query engine

Usage:
    entry_mgr = EntryManager(session, logger)

    entry_id, entry = entry_mgr.create("SQLite docs", "https://sqlite.org")
    entry_mgr.associate_with_topics(entry_id, topic_ids)

    entries = entry_mgr.query(EntryFilter(author="Hipp", sort_by="added"))
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from typing import Dict, List, Optional, Sequence, Tuple

# --- Third party imports ---
from sqlalchemy import delete, select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError

# --- Local imports ---
from rlist.core.exceptions import ConflictError, NotFoundError
from rlist.dataclasses.reading_entry import ReadingEntry
from rlist.database.decorators import handle_db_errors, log_database_operation
from rlist.database.models import Entry, Topic, entry_topic_links
from rlist.database.query_engine import (
    EntryFilter,
    build_rows_statement,
    filter_by_topics,
    fold_rows,
)
from .base_manager import BaseManager

_UNIQUE_FAILURE = re.compile(r"UNIQUE constraint failed: entries\.(\w+)")


def conflict_from_integrity_error(
    error: IntegrityError, values: Dict[str, Optional[str]]
) -> Optional[ConflictError]:
    """
    Translate a unique-constraint failure on entries into a ConflictError.

    Args:
        error: The IntegrityError raised by the driver
        values: Column values of the failed statement, used to report
            the colliding value

    Returns:
        ConflictError, or None when the failure is not a uniqueness
        violation on the entries table
    """
    match = _UNIQUE_FAILURE.search(str(error.orig))
    if match is None:
        return None
    column = match.group(1)
    return ConflictError(column, values.get(column))


class EntryManager(BaseManager):
    """
    Manages Entry table operations and entry-topic links.
    """

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("create_entry")
    def create(
        self, name: str, url: str, author: Optional[str] = None
    ) -> Tuple[int, ReadingEntry]:
        """
        Create a new entry without topics.

        Args:
            name: Unique entry name
            url: Unique entry url
            author: Optional author

        Returns:
            Tuple of (entry id, ReadingEntry with the store-assigned
            'added' timestamp and no topics)

        Raises:
            ConflictError: If name or url already exists
        """

        entry = Entry(name=name, url=url, author=author)
        self.session.add(entry)
        try:
            self.session.flush()
        except IntegrityError as e:
            conflict = conflict_from_integrity_error(
                e, {"name": name, "url": url}
            )
            if conflict is None:
                raise
            raise conflict from e

        if self.logger:
            self.logger.log_debug(f"Created entry: {name}", {"entry_id": entry.id})

        return entry.id, ReadingEntry(
            name=entry.name, url=entry.url, author=entry.author, added=entry.added
        )

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("get_entry_id")
    def get_id_from_name(self, name: str) -> Optional[int]:
        """Get an entry id by name, or None if it does not exist."""
        return self._get_id_by_field(Entry, "name", name)

    @handle_db_errors
    @log_database_operation("get_entry")
    def get_by_name_without_topics(self, name: str) -> Tuple[int, ReadingEntry]:
        """
        Fetch one entry row by name.

        The returned record has an empty topic list; callers fill it in.

        Raises:
            NotFoundError: If no entry has that name
        """
        row = self.session.execute(
            select(Entry.id, Entry.name, Entry.url, Entry.author, Entry.added).where(
                Entry.name == name
            )
        ).one_or_none()
        if row is None:
            raise NotFoundError("entry", name)

        entry_id, entry_name, url, author, added = row
        return entry_id, ReadingEntry(
            name=entry_name, url=url, author=author, added=added
        )

    def _topic_names_for(self, entry_id: int) -> List[str]:
        return list(
            self.session.execute(
                select(Topic.name)
                .join(entry_topic_links, entry_topic_links.c.topic_id == Topic.id)
                .where(entry_topic_links.c.entry_id == entry_id)
            ).scalars()
        )

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("update_entry")
    def update_fields(
        self,
        old_name: str,
        name: Optional[str] = None,
        url: Optional[str] = None,
        author: Optional[str] = None,
    ) -> Tuple[int, ReadingEntry]:
        """
        Update only the supplied columns of the entry named old_name.

        A field left as None is not touched. An empty author string sets the
        author to NULL.

        Args:
            old_name: Current name of the entry
            name: New name
            url: New url
            author: New author ('' clears it)

        Returns:
            Tuple of (entry id, updated ReadingEntry without topics)

        Raises:
            NotFoundError: If no entry is named old_name
            ConflictError: If the new name or url belongs to another entry
        """
        values: Dict[str, Optional[str]] = {}
        if name is not None:
            values["name"] = name
        if url is not None:
            values["url"] = url
        if author is not None:
            values["author"] = author or None

        if not values:
            return self.get_by_name_without_topics(old_name)

        stmt = (
            update(Entry)
            .where(Entry.name == old_name)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

        try:
            result = self.session.execute(stmt)
        except IntegrityError as e:
            conflict = conflict_from_integrity_error(e, values)
            if conflict is None:
                raise
            raise conflict from e

        if result.rowcount == 0:
            raise NotFoundError("entry", old_name)

        if self.logger:
            self.logger.log_debug(
                f"Updated entry: {old_name}", {"fields": sorted(values)}
            )

        return self.get_by_name_without_topics(values.get("name", old_name))

    # -------------------------------------------------------------------------
    # Topic Links
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("associate_topics")
    def associate_with_topics(self, entry_id: int, topic_ids: Sequence[int]) -> None:
        """
        Link an entry to every topic id given.

        Already existing links are left as they are; an empty list is a
        no-op.
        """
        unique_ids = list(dict.fromkeys(topic_ids))
        if not unique_ids:
            return

        stmt = (
            sqlite_insert(entry_topic_links)
            .values(
                [
                    {"entry_id": entry_id, "topic_id": topic_id}
                    for topic_id in unique_ids
                ]
            )
            .on_conflict_do_nothing(index_elements=["entry_id", "topic_id"])
        )
        self.session.execute(stmt)

    @handle_db_errors
    @log_database_operation("unlink_topics")
    def unlink_topics_by_name(self, entry_id: int, names: Sequence[str]) -> None:
        """
        Remove the links between an entry and the named topics.

        Unknown or unlinked topic names are ignored; an empty list is a
        no-op. The topics themselves are kept.
        """
        if not names:
            return

        topic_ids = select(Topic.id).where(Topic.name.in_(list(names)))
        self.session.execute(
            delete(entry_topic_links).where(
                entry_topic_links.c.entry_id == entry_id,
                entry_topic_links.c.topic_id.in_(topic_ids),
            )
        )

    @handle_db_errors
    @log_database_operation("unlink_all_topics")
    def unlink_all_topics(self, entry_id: int) -> None:
        """Remove every link of an entry."""
        self.session.execute(
            delete(entry_topic_links).where(entry_topic_links.c.entry_id == entry_id)
        )

    # -------------------------------------------------------------------------
    # Deletion
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("remove_entry")
    def remove_by_name(self, name: str) -> ReadingEntry:
        """
        Delete an entry by name.

        Its links are cascade-deleted with it; the topics are kept.

        Returns:
            The removed entry, including the topics it had

        Raises:
            NotFoundError: If no entry has that name
        """
        entry_id, entry = self.get_by_name_without_topics(name)
        entry.topics = self._topic_names_for(entry_id)

        self.session.execute(
            delete(Entry)
            .where(Entry.id == entry_id)
            .execution_options(synchronize_session="fetch")
        )

        if self.logger:
            self.logger.log_debug(f"Removed entry: {name}", {"entry_id": entry_id})

        return entry

    @handle_db_errors
    @log_database_operation("remove_entries_by_topic")
    def remove_related_to(self, topic_id: int) -> int:
        """
        Delete every entry linked to a topic.

        Entries that also carry other topics are deleted as a whole.

        Args:
            topic_id: The topic id

        Returns:
            Number of deleted entries
        """
        linked = select(entry_topic_links.c.entry_id).where(
            entry_topic_links.c.topic_id == topic_id
        )
        result = self.session.execute(
            delete(Entry)
            .where(Entry.id.in_(linked))
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    # -------------------------------------------------------------------------
    # Bulk Fetch
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("query_entries")
    def query(self, entry_filter: EntryFilter) -> List[ReadingEntry]:
        """
        Run a filtered, sorted query.

        Row-level filters and ordering run in SQL; topic filtering runs on
        the folded aggregates.

        Args:
            entry_filter: Filter and sort parameters

        Returns:
            Matching entries with their complete topic lists
        """
        rows = self.session.execute(build_rows_statement(entry_filter)).all()
        entries = fold_rows(rows)
        return filter_by_topics(
            entries, entry_filter.topics, match_any=entry_filter.match_any
        )

    def get_all_complete(self) -> List[ReadingEntry]:
        """Fetch every entry with all of its topics."""
        return self.query(EntryFilter())
