#!/usr/bin/env python3
"""
reading_list.py
--------------------
The reading list service: single entry point for every list operation.

ReadingList coordinates the entry and topic managers to implement add,
edit, remove, remove-by-topic, query, import and export. It never talks
to the store directly; every statement goes through a manager.

Each operation runs inside one session_scope(), so a multi-step mutation
(update then relink, look up then delete) either completes or leaves the
store untouched. Import is the exception: every imported entry gets its
own transaction, so one bad record does not undo the others.

Errors:
    - NotFoundError: the named entry or topic does not exist
    - ConflictError: name or url already used by another entry
    - InvalidArgumentError: nothing to act upon
    - ValidationError: malformed input
    - DatabaseError: anything the store itself failed at

Usage:
    db = ReadingListDB("~/rlist/rlist.sqlite")
    rlist = ReadingList(db)

    rlist.add("SQLite docs", "https://sqlite.org/docs.html", topics=["db"])
    for entry in rlist.query(topics=["db"], sort_by="added"):
        print(entry.name)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Iterable, List, Optional, Sequence, Tuple

# --- Local imports ---
from rlist.core.exceptions import (
    ConflictError,
    InvalidArgumentError,
    ValidationError,
)
from rlist.core.logging_manager import RlistLogger, safe_logger
from rlist.core.validators import DataValidator
from rlist.dataclasses.reading_entry import ReadingEntry
from .manager import ReadingListDB
from .query_engine import EntryFilter


class ReadingList:
    """
    Reading list operations over a ReadingListDB.

    Attributes:
        db: The storage owner providing session scopes and managers
        logger: Operation logger (defaults to the database's)
    """

    def __init__(self, db: ReadingListDB, logger: Optional[RlistLogger] = None):
        self.db = db
        self.logger = logger if logger is not None else db.logger

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _required(value: Optional[str], field_name: str) -> str:
        normalized = DataValidator.normalize_string(value)
        if normalized is None:
            raise ValidationError(f"Entry {field_name} cannot be empty")
        return normalized

    @staticmethod
    def _lookup_name(name: Optional[str]) -> str:
        return DataValidator.normalize_string(name) or ""

    def _link_topics(self, entry_id: int, topics: Sequence[str]) -> None:
        if topics:
            topic_ids = self.db.topics.create_many(topics)
            self.db.entries.associate_with_topics(entry_id, topic_ids)

    def _fresh_topics(self, entry_id: int) -> List[str]:
        return [name for _, name in self.db.topics.get_related_to(entry_id)]

    def _create(self, entry: ReadingEntry) -> ReadingEntry:
        """Insert one entry with its topics in the current session."""
        entry_id, created = self.db.entries.create(entry.name, entry.url, entry.author)
        self._link_topics(entry_id, entry.topics)
        created.topics = list(entry.topics)
        return created

    # -------------------------------------------------------------------------
    # Add / Remove
    # -------------------------------------------------------------------------

    def add(
        self,
        name: str,
        url: str,
        author: Optional[str] = None,
        topics: Optional[Sequence[str]] = None,
    ) -> ReadingEntry:
        """
        Add a new entry, creating any topic it references.

        Args:
            name: Unique entry name
            url: Unique entry url
            author: Optional author
            topics: Topic names to link

        Returns:
            The created entry with its topics and 'added' timestamp

        Raises:
            ConflictError: If name or url is already used
            ValidationError: If name or url is empty
        """
        entry = ReadingEntry(
            name=self._required(name, "name"),
            url=self._required(url, "url"),
            author=DataValidator.normalize_string(author),
            topics=DataValidator.normalize_topics(topics),
        )

        with self.db.session_scope():
            created = self._create(entry)

        safe_logger(self.logger).log_operation(
            "entry_added", {"name": created.name, "topics": created.topics}
        )
        return created

    def remove_by_name(self, name: str) -> ReadingEntry:
        """
        Remove one entry.

        Returns:
            The removed entry with the topics it had

        Raises:
            NotFoundError: If no entry has that name
        """
        with self.db.session_scope():
            removed = self.db.entries.remove_by_name(self._lookup_name(name))

        safe_logger(self.logger).log_operation("entry_removed", {"name": name})
        return removed

    def remove_by_topics(self, topics: Sequence[str]) -> List[ReadingEntry]:
        """
        Remove every entry linked to any of the given topics.

        An entry is removed as a whole even when it carries other topics.
        The topics themselves are kept; see prune_topics().

        Args:
            topics: Topic names

        Returns:
            Removed entries, grouped per requested topic in request order.
            An entry linked to two requested topics is listed under the
            first one only, since it is already gone for the second.

        Raises:
            InvalidArgumentError: If no topic was given
            NotFoundError: If a topic does not exist; nothing is removed
        """
        names = DataValidator.normalize_topics(topics)
        if not names:
            raise InvalidArgumentError("No topics given to remove entries by")

        removed: List[ReadingEntry] = []
        with self.db.session_scope():
            for topic in names:
                topic_id = self.db.topics.get_id_from_name(topic)
                removed.extend(self.db.entries.query(EntryFilter(topics=[topic])))
                self.db.entries.remove_related_to(topic_id)

        safe_logger(self.logger).log_operation(
            "entries_removed_by_topics", {"topics": names, "count": len(removed)}
        )
        return removed

    # -------------------------------------------------------------------------
    # Edit
    # -------------------------------------------------------------------------

    def edit(
        self,
        old_name: str,
        new_name: Optional[str] = None,
        author: Optional[str] = None,
        url: Optional[str] = None,
        topics: Optional[Sequence[str]] = None,
        add_topics: Optional[Sequence[str]] = None,
        clear_topics: bool = False,
        remove_topics: Optional[Sequence[str]] = None,
    ) -> ReadingEntry:
        """
        Change the supplied fields and topics of an entry.

        Fields left as None are not touched; author='' clears the author.

        Topic changes apply in this order:
            1. topics replaces every link (clear, then link the new set);
               when given, add_topics and clear_topics are ignored
            2. otherwise clear_topics removes every link, then add_topics
               links more topics
            3. remove_topics unlinks the named topics

        Args:
            old_name: Current entry name
            new_name: New name
            author: New author
            url: New url
            topics: Replacement topic set
            add_topics: Topics to link in addition to the current ones
            clear_topics: Remove every current link
            remove_topics: Topics to unlink

        Returns:
            The edited entry; its topics are read back from the store

        Raises:
            InvalidArgumentError: If nothing to change was supplied
            NotFoundError: If no entry is named old_name
            ConflictError: If new_name or url belongs to another entry
        """
        if (
            new_name is None
            and author is None
            and url is None
            and topics is None
            and not add_topics
            and not clear_topics
            and not remove_topics
        ):
            raise InvalidArgumentError(f"Nothing to edit for entry {old_name!r}")

        old_name = self._lookup_name(old_name)
        if new_name is not None:
            new_name = self._required(new_name, "name")
        if url is not None:
            url = self._required(url, "url")
        if author is not None:
            author = DataValidator.normalize_string(author) or ""

        with self.db.session_scope():
            if new_name is not None or author is not None or url is not None:
                entry_id, entry = self.db.entries.update_fields(
                    old_name, name=new_name, url=url, author=author
                )
            else:
                entry_id, entry = self.db.entries.get_by_name_without_topics(old_name)

            if topics is not None:
                self.db.entries.unlink_all_topics(entry_id)
                self._link_topics(entry_id, DataValidator.normalize_topics(topics))
            else:
                if clear_topics:
                    self.db.entries.unlink_all_topics(entry_id)
                self._link_topics(entry_id, DataValidator.normalize_topics(add_topics))

            if remove_topics:
                self.db.entries.unlink_topics_by_name(
                    entry_id, DataValidator.normalize_topics(remove_topics)
                )

            entry.topics = self._fresh_topics(entry_id)

        safe_logger(self.logger).log_operation(
            "entry_edited", {"old_name": old_name, "name": entry.name}
        )
        return entry

    # -------------------------------------------------------------------------
    # Query
    # -------------------------------------------------------------------------

    def query(
        self,
        name: Optional[str] = None,
        topics: Optional[Sequence[str]] = None,
        author: Optional[str] = None,
        url: Optional[str] = None,
        sort_by: Optional[str] = None,
        descending: bool = False,
        added_from: Any = None,
        added_to: Any = None,
        match_any: bool = False,
    ) -> List[ReadingEntry]:
        """
        Find entries.

        All given filters must hold. String filters are case-sensitive
        substring matches; added_from and added_to are inclusive bounds.
        With topics, an entry must carry all of them, or any of them when
        match_any is set.

        Without sort_by, entries are ordered by name.

        Raises:
            ValidationError: On an unknown sort key or bad timestamp
        """
        entry_filter = EntryFilter(
            name=name,
            author=author,
            url=url,
            added_from=added_from,
            added_to=added_to,
            sort_by=sort_by,
            descending=descending,
            topics=list(topics or []),
            match_any=match_any,
        )
        with self.db.session_scope():
            return self.db.entries.query(entry_filter)

    def dump_all(self) -> List[ReadingEntry]:
        """Every entry with all of its topics, ignoring any filter."""
        with self.db.session_scope():
            return self.db.entries.get_all_complete()

    # -------------------------------------------------------------------------
    # Import
    # -------------------------------------------------------------------------

    def import_entries(self, records: Iterable[Any]) -> int:
        """
        Add many entries, skipping the ones that cannot be added.

        A record is skipped when it is malformed or its name or url is
        already taken. 'added' values in the records are ignored; the
        store assigns new timestamps.

        Args:
            records: ReadingEntry objects or mappings with name, url and
                optional author and topics

        Returns:
            Number of entries imported
        """
        logger = safe_logger(self.logger)
        imported = 0

        for position, record in enumerate(records):
            try:
                entry = (
                    record
                    if isinstance(record, ReadingEntry)
                    else ReadingEntry.from_dict(record)
                )
                entry = ReadingEntry(
                    name=self._required(entry.name, "name"),
                    url=self._required(entry.url, "url"),
                    author=DataValidator.normalize_string(entry.author),
                    topics=DataValidator.normalize_topics(entry.topics),
                )
                with self.db.session_scope():
                    self._create(entry)
            except (ConflictError, ValidationError) as e:
                logger.log_info(
                    "Skipped record during import",
                    {"position": position, "reason": str(e)},
                )
                continue
            imported += 1

        logger.log_operation("entries_imported", {"count": imported})
        return imported

    # -------------------------------------------------------------------------
    # Topics
    # -------------------------------------------------------------------------

    def list_topics(self) -> List[Tuple[str, int]]:
        """Every topic with its number of entries, most used first."""
        with self.db.session_scope():
            return self.db.topics.get_all_with_counts()

    def prune_topics(self) -> List[str]:
        """
        Delete the topics no entry is linked to.

        Returns:
            Names of the deleted topics
        """
        with self.db.session_scope():
            unused = self.db.topics.get_unused()
            removed = [
                name
                for name in (self.db.topics.delete_by_id(topic.id) for topic in unused)
                if name is not None
            ]

        safe_logger(self.logger).log_operation("topics_pruned", {"topics": removed})
        return removed
