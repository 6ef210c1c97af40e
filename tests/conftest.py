"""
conftest.py
-----------
Shared pytest fixtures for rlist tests.

Provides fixtures for:
- Temporary directories
- Database setup and teardown
- Managers bound to a test session
- A ReadingList service over a temporary store
"""
import pytest
from pathlib import Path
from tempfile import TemporaryDirectory


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def isolated_home(tmp_dir, monkeypatch):
    """Point HOME and XDG_CONFIG_HOME at a temporary directory."""
    home = tmp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    return home


# ----- Test Database Fixtures -----

@pytest.fixture
def test_db_path(tmp_dir):
    """Create temporary test database path."""
    return tmp_dir / "store" / "rlist.sqlite"


@pytest.fixture
def test_db(test_db_path):
    """
    Create test database instance with schema.

    Returns a ReadingListDB over a fresh file; the engine is disposed
    after the test.
    """
    from rlist.database.manager import ReadingListDB

    db = ReadingListDB(db_path=test_db_path)

    yield db

    db.dispose()


@pytest.fixture
def db_session(test_db):
    """
    Create a database session for tests.

    Managers are bound to it through test_db.entries / test_db.topics.
    """
    with test_db.session_scope() as session:
        yield session


@pytest.fixture
def entry_manager(test_db, db_session):
    """EntryManager bound to the test session."""
    return test_db.entries


@pytest.fixture
def topic_manager(test_db, db_session):
    """TopicManager bound to the test session."""
    return test_db.topics


@pytest.fixture
def reading_list(test_db):
    """ReadingList service over the test database."""
    from rlist.database.reading_list import ReadingList

    return ReadingList(test_db)


# ----- Data Fixtures -----

@pytest.fixture
def populated_list(reading_list):
    """
    Reading list with a handful of entries.

        sqlite-docs   https://sqlite.org/docs.html   Hipp    {databases, sqlite}
        pep-8         https://peps.python.org/pep-0008  Rossum {python, style}
        sqlalchemy    https://docs.sqlalchemy.org     Bayer   {python, databases}
        loose-notes   https://example.com/notes       -       {}
    """
    reading_list.add(
        "sqlite-docs", "https://sqlite.org/docs.html", "Hipp", ["databases", "sqlite"]
    )
    reading_list.add(
        "pep-8", "https://peps.python.org/pep-0008", "Rossum", ["python", "style"]
    )
    reading_list.add(
        "sqlalchemy", "https://docs.sqlalchemy.org", "Bayer", ["python", "databases"]
    )
    reading_list.add("loose-notes", "https://example.com/notes")
    return reading_list
