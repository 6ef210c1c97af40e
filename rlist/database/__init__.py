#!/usr/bin/env python3
"""
rlist Database Package
----------------------
Storage and list operations for the rlist reading-list manager.

This package provides:
- Storage bootstrap and session scopes (ReadingListDB)
- Entry and topic managers
- The query engine (substring, date-range and topic filters, sorting)
- The ReadingList service used by the command line
- YAML export and import
"""

from .manager import ReadingListDB
from rlist.core.exceptions import (
    ConflictError,
    DatabaseError,
    ExportError,
    InvalidArgumentError,
    NotFoundError,
    ValidationError,
)
from .export_manager import ExportManager
from .query_engine import EntryFilter, SORT_KEYS
from .reading_list import ReadingList
from .decorators import (
    log_database_operation,
    handle_db_errors,
)

__all__ = [
    # Main manager
    "ReadingListDB",
    "ReadingList",
    # Exceptions
    "ConflictError",
    "DatabaseError",
    "ExportError",
    "InvalidArgumentError",
    "NotFoundError",
    "ValidationError",
    # Core modules
    "EntryFilter",
    "ExportManager",
    "SORT_KEYS",
    # Decorators
    "log_database_operation",
    "handle_db_errors",
]
