#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing common query utilities.
All entity managers should inherit from this class.

Key Features:
    - Generic lookup of ids by field
    - Shared session and logger wiring

Usage:
    Subclass BaseManager for each entity type:

    class TopicManager(BaseManager):
        def get_id_from_name(self, name: str) -> int:
            ...
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC
from typing import Any, Optional, Protocol, Type, TypeVar

# --- Third party imports ---
from sqlalchemy import select
from sqlalchemy.orm import Mapped, Session

# --- Local imports ---
from rlist.core.logging_manager import RlistLogger


class HasId(Protocol):
    """Protocol for objects that have an id attribute."""

    id: Mapped[int]


T = TypeVar("T", bound=HasId)


class BaseManager(ABC):
    """
    Abstract base manager providing common utilities.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[RlistLogger] = None):
        """
        Initialize the base manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
        """
        self.session = session
        self.logger = logger

    # -------------------------------------------------------------------------
    # Generic Lookup Helpers
    # -------------------------------------------------------------------------

    def _get_id_by_field(
        self, model_class: Type[T], field_name: str, value: Any
    ) -> Optional[int]:
        """
        Get the primary key of the row whose field equals value.

        Args:
            model_class: ORM model class
            field_name: Field name to filter by
            value: Value to look up

        Returns:
            The id if found, None otherwise
        """
        if value is None:
            return None

        column = getattr(model_class, field_name)
        return self.session.execute(
            select(model_class.id).where(column == value)
        ).scalar_one_or_none()
