"""
Database Models Package
------------------------

SQLAlchemy ORM models for the rlist database.

- base: Declarative base
- associations: entry_topic_links many-to-many table
- core: Entry model
- entities: Topic model

Usage:
    from rlist.database.models import Entry, Topic
"""
# Base class
from .base import Base

# Association tables (for direct usage)
from .associations import entry_topic_links

# Core models
from .core import Entry

# Entity models
from .entities import Topic

__all__ = [
    "Base",
    "entry_topic_links",
    "Entry",
    "Topic",
]
