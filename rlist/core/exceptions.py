#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the rlist reading-list manager.

Exception Hierarchy:
    Exception (built-in)
    ├── DatabaseError - Storage/infrastructure failures
    │   └── ExportError - Export/import file I/O failures
    ├── NotFoundError - Named entry or topic does not exist
    ├── ConflictError - Unique constraint violated on name or url
    ├── ValidationError - Malformed input data
    │   └── InvalidArgumentError - No actionable parameters supplied
    └── ConfigError - Configuration file unreadable or invalid

NotFoundError, ConflictError and ValidationError are deliberately kept
outside of DatabaseError so that callers can tell a user mistake apart
from an infrastructure failure.

Usage:
    from rlist.core.exceptions import ConflictError, NotFoundError

    try:
        reading_list.add("foo", "https://example.com")
    except ConflictError as e:
        print(f"Already there: {e.column}")
    except NotFoundError as e:
        print(e)
"""
from typing import Optional


class DatabaseError(Exception):
    """
    Base exception for storage-related errors.

    Raised when the backing store fails: the file cannot be opened, a
    statement is malformed, or a constraint violation occurs that could
    not be classified as a ConflictError.

    Examples:
        >>> raise DatabaseError("Database initialization failed: disk I/O error")
    """

    pass


class ExportError(DatabaseError):
    """
    Exception for export and import file failures.

    Examples:
        >>> raise ExportError("Cannot write export file: permission denied")
    """

    pass


class NotFoundError(Exception):
    """
    Raised when a named entry or topic does not exist.

    Attributes:
        kind: Kind of object that was looked up ("entry" or "topic")
        name: The name that was looked up
    """

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(
            f"Could not find any {kind} with name {name!r} in your reading list"
        )


class ConflictError(Exception):
    """
    Raised when creating or renaming an entry would violate uniqueness.

    Attributes:
        column: Column whose unique constraint failed ("name", "url"),
            or None when it cannot be derived from the storage error
        value: Value that collided, when known
    """

    def __init__(self, column: Optional[str], value: Optional[str] = None) -> None:
        self.column = column
        self.value = value
        if column:
            message = (
                f"Your reading list already contains an entry with the same "
                f"{column}: {value!r}"
            )
        else:
            message = (
                "Your reading list already contains an entry with the same "
                "name or url"
            )
        super().__init__(message)


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Missing or empty required fields
    - Unparseable timestamps
    - Malformed import files

    Examples:
        >>> raise ValidationError("Required field 'url' missing or empty")
    """

    pass


class InvalidArgumentError(ValidationError):
    """
    Raised when an operation was called without anything to act upon.

    Examples:
        >>> raise InvalidArgumentError("Nothing to edit")
    """

    pass


class ConfigError(Exception):
    """
    Exception for configuration loading failures.

    Examples:
        >>> raise ConfigError("The db_file config option must be an absolute path")
    """

    pass
