#!/usr/bin/env python3
"""
reading_entry.py
-------------------

Defines the ReadingEntry record handed out by the database layer.

A ReadingEntry is the aggregate of one row of the entries table plus the
names of every topic linked to it. It is a plain value object: the
numeric entry id never leaves the database layer.

This module handles conversion to and from the list-of-maps structure
used by YAML import and export.
"""
from __future__ import annotations

# --- Standard Library ---
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# --- Local ---
from rlist.core.exceptions import ValidationError
from rlist.core.validators import DataValidator

EXPORT_FIELDS = ("name", "url", "author", "topics", "added")


@dataclass
class ReadingEntry:
    """
    A reading-list item together with its topics.

    Fields:
    - name:   Unique, case-sensitive identifier chosen by the user
    - url:    Unique location of the item
    - author: Optional author
    - topics: Names of linked topics (order carries no meaning)
    - added:  Creation timestamp 'YYYY-MM-DD HH:MM:SS' (local time),
              None for records that were never persisted
    """
    name:   str
    url:    str
    author: Optional[str] = None
    topics: List[str]     = field(default_factory=list)
    added:  Optional[str] = None

    @property
    def topic_set(self) -> set:
        """Topics as a set, for membership tests."""
        return set(self.topics)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a plain mapping in export field order."""
        return {
            "name": self.name,
            "url": self.url,
            "author": self.author,
            "topics": list(self.topics),
            "added": self.added,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ReadingEntry":
        """
        Build a record from an imported mapping.

        Args:
            data: Mapping with required 'name' and 'url', optional
                'author', 'topics' (list or single string) and 'added'

        Returns:
            ReadingEntry instance

        Raises:
            ValidationError: If data is not a mapping, required fields are
                missing, or topics is not a list of strings
        """
        if not isinstance(data, dict):
            raise ValidationError(
                f"Expected a mapping for an entry, got {type(data).__name__}"
            )

        DataValidator.validate_required_fields(data, ["name", "url"])

        topics = data.get("topics") or []
        if isinstance(topics, str):
            topics = [topics]
        if not isinstance(topics, list) or not all(
            isinstance(topic, str) for topic in topics
        ):
            raise ValidationError(
                f"Topics of entry {data['name']!r} must be a list of names"
            )

        added = data.get("added")
        return cls(
            name=str(data["name"]),
            url=str(data["url"]),
            author=DataValidator.normalize_string(data.get("author")),
            topics=DataValidator.normalize_topics(topics),
            added=str(added) if added is not None else None,
        )
