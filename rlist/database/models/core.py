"""
Core Models
------------

Central model of the rlist database.

Models:
    - Entry: A reading-list item (the primary model)
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import CheckConstraint, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .associations import entry_topic_links
from .base import Base

if TYPE_CHECKING:
    from .entities import Topic


# ----- Entry Model -----
class Entry(Base):
    """
    A reading-list item.

    Attributes:
        id: Primary key (column ``entry_id``), never shown to users
        name: Unique, case-sensitive identifier
        url: Unique location of the item
        author: Optional author
        added: Creation time as 'YYYY-MM-DD HH:MM:SS' local time,
            assigned by the database on insert

    Relationships:
        topics: Many-to-many with Topic through entry_topic_links
    """

    __tablename__ = "entries"
    __table_args__ = (
        CheckConstraint("name != ''", name="ck_entry_non_empty_name"),
        CheckConstraint("url != ''", name="ck_entry_non_empty_url"),
    )

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(
        "entry_id", primary_key=True, autoincrement=True
    )
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    url: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    author: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    added: Mapped[str] = mapped_column(
        String(19),
        nullable=False,
        server_default=text("(datetime('now', 'localtime'))"),
    )

    # ---- Relationships ----
    topics: Mapped[List["Topic"]] = relationship(
        "Topic",
        secondary=entry_topic_links,
        back_populates="entries",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Entry(id={self.id}, name={self.name!r})>"
