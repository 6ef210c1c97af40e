"""
rlist
=====

A personal reading-list manager.

Entries (a unique name, a unique url, an optional author, a set of topics
and the time they were added) live in a local SQLite database and are
managed from the command line: add, edit, remove, list, import, export.

Main Components:
    - database: SQLAlchemy ORM, entity managers, query engine, ReadingList
    - cli: click command line (`rlist`)
    - core: Logging, configuration, paths, validation, exceptions
    - dataclasses: ReadingEntry records

Example Usage:
    >>> from rlist import ReadingList, ReadingListDB
    >>> db = ReadingListDB("~/rlist/rlist.sqlite")
    >>> rlist = ReadingList(db)
    >>> rlist.add("SQLite docs", "https://sqlite.org/docs.html", topics=["db"])
"""
from rlist.dataclasses import ReadingEntry
from rlist.database import ReadingList, ReadingListDB

__version__ = "1.0.0"

__all__ = ["ReadingEntry", "ReadingList", "ReadingListDB", "__version__"]
