"""
dataclasses package
-------------------
Value objects exchanged between the database layer and its callers.

- ReadingEntry: an entry with its topic names
"""
from rlist.dataclasses.reading_entry import ReadingEntry

__all__ = ["ReadingEntry"]
