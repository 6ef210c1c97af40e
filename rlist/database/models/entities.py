"""
Entity Models
--------------

Models:
    - Topic: Tag/category linked many-to-many with entries
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .associations import entry_topic_links
from .base import Base

if TYPE_CHECKING:
    from .core import Entry


class Topic(Base):
    """
    A topic label for entries.

    Topics are created lazily the first time an entry references them
    and are never required to be declared up front.

    Attributes:
        id: Primary key (column ``topic_id``)
        name: The topic text (unique)

    Relationships:
        entries: Many-to-many with Entry
    """

    __tablename__ = "topics"
    __table_args__ = (CheckConstraint("name != ''", name="ck_topic_non_empty_name"),)

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(
        "topic_id", primary_key=True, autoincrement=True
    )
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)

    # ---- Relationships ----
    entries: Mapped[List["Entry"]] = relationship(
        "Entry",
        secondary=entry_topic_links,
        back_populates="topics",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Topic(id={self.id}, name={self.name!r})>"
