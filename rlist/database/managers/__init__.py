#!/usr/bin/env python3
"""
managers package
--------------------
Entity managers for the rlist database.

Each manager handles the operations for one entity type and inherits
from BaseManager.

Available Managers:
    BaseManager: Abstract base class with common utilities
    TopicManager: Manages Topic entities
    EntryManager: Manages Entry entities and their topic links

Usage:
    from rlist.database.managers import EntryManager, TopicManager

    entry_mgr = EntryManager(session, logger)
    topic_mgr = TopicManager(session, logger)
"""
from .base_manager import BaseManager
from .topic_manager import TopicManager
from .entry_manager import EntryManager

__all__ = [
    "BaseManager",
    "TopicManager",
    "EntryManager",
]
