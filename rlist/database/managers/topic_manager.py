#!/usr/bin/env python3
"""
topic_manager.py
--------------------
Manages Topic entities and their lookup for entries.

Topic is the simplest entity in the system - just a unique name with a
many-to-many relationship to entries. Topics are created lazily the first
time an entry references them.

Key Features:
    - Idempotent bulk creation (insert-or-fetch) preserving input order
    - Lookup by name
    - Topics linked to an entry
    - Usage statistics and unused-topic detection

Usage:
    topic_mgr = TopicManager(session, logger)

    # Create or get topics, one id per input name
    ids = topic_mgr.create_many(["python", "databases"])

    # Topics linked to an entry
    pairs = topic_mgr.get_related_to(entry_id)
"""
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from rlist.core.exceptions import NotFoundError
from rlist.database.decorators import handle_db_errors, log_database_operation
from rlist.database.models import Topic, entry_topic_links
from .base_manager import BaseManager


class TopicManager(BaseManager):
    """
    Manages Topic table operations.

    Each topic is a unique string that can be associated with
    multiple entries.
    """

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("create_topics")
    def create_many(self, names: Sequence[str]) -> List[int]:
        """
        Create every topic in names that does not exist yet.

        Args:
            names: Ordered topic names; duplicates are allowed

        Returns:
            The id of every name, in input order. A name that appears more
            than once yields the same id at each position.

        Notes:
            - Pre-existing topics are left untouched (conflict-tolerant insert)
            - An empty input yields an empty list
        """
        if not names:
            return []

        unique_names = list(dict.fromkeys(names))
        stmt = (
            sqlite_insert(Topic)
            .values([{"name": name} for name in unique_names])
            .on_conflict_do_nothing(index_elements=["name"])
        )
        self.session.execute(stmt)

        rows = self.session.execute(
            select(Topic.name, Topic.id).where(Topic.name.in_(unique_names))
        ).all()
        ids_by_name = {name: topic_id for name, topic_id in rows}

        if self.logger:
            self.logger.log_debug(
                "Created or fetched topics",
                {"requested": len(names), "unique": len(unique_names)},
            )

        return [ids_by_name[name] for name in names]

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("get_topic_id")
    def get_id_from_name(self, name: str) -> int:
        """
        Get a topic id by name.

        Raises:
            NotFoundError: If no topic with that name exists
        """
        topic_id = self._get_id_by_field(Topic, "name", name)
        if topic_id is None:
            raise NotFoundError("topic", name)
        return topic_id

    @handle_db_errors
    @log_database_operation("get_related_topics")
    def get_related_to(self, entry_id: int) -> List[Tuple[int, str]]:
        """
        Get all topics linked to an entry.

        Args:
            entry_id: The entry id

        Returns:
            List of (topic_id, name) tuples, unordered. An unknown entry id
            yields an empty list.
        """
        rows = self.session.execute(
            select(Topic.id, Topic.name)
            .join(entry_topic_links, entry_topic_links.c.topic_id == Topic.id)
            .where(entry_topic_links.c.entry_id == entry_id)
        ).all()
        return [(topic_id, name) for topic_id, name in rows]

    # -------------------------------------------------------------------------
    # Usage Queries
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("get_topics_with_counts")
    def get_all_with_counts(self) -> List[Tuple[str, int]]:
        """
        Get every topic with the number of entries linked to it.

        Returns:
            List of (name, count) sorted by count descending, then name
        """
        count = func.count(entry_topic_links.c.entry_id).label("count")
        rows = self.session.execute(
            select(Topic.name, count)
            .outerjoin(entry_topic_links, entry_topic_links.c.topic_id == Topic.id)
            .group_by(Topic.id, Topic.name)
            .order_by(count.desc(), Topic.name.asc())
        ).all()
        return [(name, n) for name, n in rows]

    @handle_db_errors
    @log_database_operation("get_unused_topics")
    def get_unused(self) -> List[Topic]:
        """
        Get all topics that are not linked to any entry.

        Returns:
            List of unused Topic objects ordered by name
        """
        return list(
            self.session.execute(
                select(Topic).where(~Topic.entries.any()).order_by(Topic.name)
            ).scalars()
        )

    # -------------------------------------------------------------------------
    # Deletion
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("delete_topic")
    def delete_by_id(self, topic_id: int) -> Optional[str]:
        """
        Delete a topic row.

        Callers are responsible for only deleting topics that are safe to
        remove; links to the topic are cascade-deleted with it.

        Args:
            topic_id: The topic id

        Returns:
            The removed topic's name, or None if no such topic existed
        """
        name = self.session.execute(
            select(Topic.name).where(Topic.id == topic_id)
        ).scalar_one_or_none()
        if name is None:
            return None

        self.session.execute(
            delete(Topic)
            .where(Topic.id == topic_id)
            .execution_options(synchronize_session="fetch")
        )

        if self.logger:
            self.logger.log_debug(f"Deleted topic: {name}", {"topic_id": topic_id})

        return name
