"""
Association Tables
-------------------

Many-to-many relationship table between entries and topics.

A link row is keyed by (entry_id, topic_id), so a pair can be linked at
most once. Removing either side cascades to its links.
"""
# --- Third party imports ---
from sqlalchemy import Column, ForeignKey, Integer, Table

# --- Local imports ---
from .base import Base

entry_topic_links = Table(
    "entry_topic_links",
    Base.metadata,
    Column(
        "entry_id",
        Integer,
        ForeignKey("entries.entry_id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    ),
    Column(
        "topic_id",
        Integer,
        ForeignKey("topics.topic_id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    ),
)
