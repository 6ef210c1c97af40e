#!/usr/bin/env python3
"""
manager.py
-------------------
Storage bootstrap and session management for the rlist database.

Provides:
 - Creation of the store's parent directories and the SQLite file
 - Foreign key enforcement on every connection
 - Idempotent schema creation (entries, topics, entry_topic_links)
 - Transactional session scopes exposing the entity managers

Each session_scope() is one transaction: it commits when the block
finishes and rolls back when it raises.

Usage:
    db = ReadingListDB("~/rlist/rlist.sqlite", log_dir="~/rlist/logs")
    with db.session_scope():
        entry_id, entry = db.entries.create("SQLite docs", "https://sqlite.org")
        db.entries.associate_with_topics(entry_id, db.topics.create_many(["db"]))
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, Union

# --- Third party ---
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

# --- Local imports ---
from rlist.core.exceptions import DatabaseError
from rlist.core.logging_manager import RlistLogger
from .managers import EntryManager, TopicManager
from .models import Base


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    """Turn on SQLite foreign key enforcement for a new connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ----- Main Database Manager -----
class ReadingListDB:
    """
    Owner of the SQLite store behind a reading list.

    Attributes:
        - db_path (Path): Filesystem path to the SQLite database file.
        - engine (Engine): SQLAlchemy engine instance.
        - SessionLocal (sessionmaker): SQLAlchemy session factory.
        - logger (RlistLogger | None): Operation logger.

    Usage:
        db = ReadingListDB("~/rlist/rlist.sqlite")
        with db.session_scope():
            entries = db.entries.get_all_complete()
    """

    # ---- Initialization ----
    def __init__(
        self,
        db_path: Union[str, Path],
        log_dir: Optional[Union[str, Path]] = None,
        logger: Optional[RlistLogger] = None,
    ) -> None:
        """
        Open (creating if needed) the store and its schema.

        Args:
            db_path (str | Path): Path to the SQLite file.
            log_dir (str | Path): Directory for log files (optional)
            logger (RlistLogger): Logger to use instead of creating one
                from log_dir (optional)

        Raises:
            DatabaseError: If the file or schema cannot be created
        """
        self.db_path = Path(db_path).expanduser().resolve()

        # --- Logging ---
        if logger is not None:
            self.logger: Optional[RlistLogger] = logger
        elif log_dir:
            self.log_dir = Path(log_dir).expanduser().resolve()
            self.logger = RlistLogger(self.log_dir, component_name="database")
        else:
            self.logger = None

        # Entity managers (bound in session_scope)
        self._entry_manager: Optional[EntryManager] = None
        self._topic_manager: Optional[TopicManager] = None

        self._setup_engine()

    def _setup_engine(self) -> None:
        """Initialize database engine, session factory and schema."""
        try:
            if self.logger:
                self.logger.log_operation(
                    "database_init_start", {"db_path": str(self.db_path)}
                )

            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self.engine: Engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
            )
            event.listen(self.engine, "connect", _enable_foreign_keys)

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
            )

            self.initialize_schema()

            if self.logger:
                self.logger.log_operation("database_init_complete", {"success": True})

        except Exception as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "database_init"})
            raise DatabaseError(f"Database initialization failed: {e}") from e

    def initialize_schema(self) -> None:
        """Create any missing table. Existing tables are left untouched."""
        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope around operations with logging.

        Also binds the entity managers to the session; they are reachable
        through db.entries and db.topics inside the block.

        Usage:
            with db.session_scope() as session:
                db.topics.create_many(["python"])
        """
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

        self._entry_manager = EntryManager(session, self.logger)
        self._topic_manager = TopicManager(session, self.logger)

        if self.logger:
            self.logger.log_debug("session_start", {"session_id": session_id})

        try:
            yield session
            session.commit()
            if self.logger:
                self.logger.log_debug("session_commit", {"session_id": session_id})

        except Exception as e:
            session.rollback()
            if self.logger:
                self.logger.log_debug(
                    "session_rollback",
                    {"session_id": session_id, "error": type(e).__name__},
                )
            raise
        finally:
            self._entry_manager = None
            self._topic_manager = None

            session.close()
            if self.logger:
                self.logger.log_debug("session_close", {"session_id": session_id})

    # -------------------------------------------------------------------------
    # Entity Manager Properties
    # -------------------------------------------------------------------------

    @property
    def entries(self) -> EntryManager:
        """
        Access EntryManager for entry operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        if self._entry_manager is None:
            raise DatabaseError(
                "EntryManager requires active session. "
                "Use within session_scope."
            )
        return self._entry_manager

    @property
    def topics(self) -> TopicManager:
        """
        Access TopicManager for topic operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        if self._topic_manager is None:
            raise DatabaseError(
                "TopicManager requires active session. "
                "Use within session_scope."
            )
        return self._topic_manager
