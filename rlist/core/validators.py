#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities for rlist operations.

Provides the normalization applied to names, topics and timestamps
before they reach the database layer.
"""
from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Dict, Iterable, List, Optional

from .exceptions import ValidationError

# Stored representation of Entry.added; zero padding keeps lexicographic
# order equal to chronological order.
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"


class DataValidator:
    """Centralized data validation for database operations."""

    @staticmethod
    def validate_required_fields(
        data: Dict[str, Any], required_fields: List[str]
    ) -> None:
        """
        Validate that required fields are present and non-empty.

        Args:
            data: Data dictionary to validate
            required_fields: List of required field names

        Raises:
            ValidationError: If validation fails
        """
        for field in required_fields:
            if field not in data or not data[field]:
                raise ValidationError(f"Required field '{field}' missing or empty")

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """
        Normalize string value.

        Strips surrounding whitespace; empty results become None.
        Case is preserved (names are case-sensitive).
        """
        if value is None:
            return None
        normalized = str(value).strip()
        return normalized or None

    @staticmethod
    def normalize_topics(topics: Optional[Iterable[Any]]) -> List[str]:
        """
        Normalize a topic list.

        Strips each name, drops empty ones and removes duplicates while
        keeping first-seen order.

        Args:
            topics: Iterable of topic names (or None)

        Returns:
            List of unique, non-empty topic names
        """
        if not topics:
            return []

        seen: Dict[str, None] = {}
        for topic in topics:
            normalized = DataValidator.normalize_string(topic)
            if normalized:
                seen.setdefault(normalized, None)
        return list(seen)

    @staticmethod
    def format_timestamp(value: Any, end_of_day: bool = False) -> Optional[str]:
        """
        Convert a timestamp bound to the stored string representation.

        Args:
            value: datetime, date, or a "YYYY-MM-DD" or "YYYY-MM-DD HH:MM:SS" string
            end_of_day: For bare dates, use 23:59:59 instead of 00:00:00
                (used for inclusive upper bounds)

        Returns:
            'YYYY-MM-DD HH:MM:SS' string, or None when value is None

        Raises:
            ValidationError: If the value cannot be interpreted
        """
        if value is None:
            return None

        if isinstance(value, datetime):
            return value.strftime(TIMESTAMP_FORMAT)

        if isinstance(value, date):
            moment = time(23, 59, 59) if end_of_day else time(0, 0, 0)
            return datetime.combine(value, moment).strftime(TIMESTAMP_FORMAT)

        if isinstance(value, str):
            text = value.strip()
            try:
                return datetime.strptime(text, TIMESTAMP_FORMAT).strftime(
                    TIMESTAMP_FORMAT
                )
            except ValueError:
                pass
            try:
                parsed = datetime.strptime(text, DATE_FORMAT).date()
            except ValueError:
                raise ValidationError(
                    f"Invalid timestamp {value!r}: expected YYYY-MM-DD "
                    f"or YYYY-MM-DD HH:MM:SS"
                ) from None
            return DataValidator.format_timestamp(parsed, end_of_day=end_of_day)

        raise ValidationError(f"Cannot interpret {type(value).__name__} as a timestamp")

    @staticmethod
    def parse_timestamp(value: str) -> datetime:
        """Parse a stored 'YYYY-MM-DD HH:MM:SS' string back to a datetime."""
        try:
            return datetime.strptime(value, TIMESTAMP_FORMAT)
        except (TypeError, ValueError):
            raise ValidationError(f"Malformed stored timestamp: {value!r}") from None
