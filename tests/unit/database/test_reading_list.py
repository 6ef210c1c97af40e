"""
Tests for the ReadingList service.

Covers the list operations end to end against a temporary SQLite store:
uniqueness, topic idempotence, cascades, edit precedence, topic filter
semantics, remove-by-topic, import and topic pruning.
"""
import pytest
from sqlalchemy import func, select

from rlist.core.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    ValidationError,
)
from rlist.dataclasses import ReadingEntry
from rlist.database.models import Entry, Topic, entry_topic_links


def _count(db, table):
    with db.session_scope() as session:
        return session.execute(select(func.count()).select_from(table)).scalar_one()


def _topic_names(reading_list):
    return {name for name, _ in reading_list.list_topics()}


class TestAdd:
    """Tests for ReadingList.add()."""

    def test_add_returns_entry_with_topics(self, reading_list):
        entry = reading_list.add(
            "foo", "http://x", None, ["tech", "python"]
        )

        assert entry.name == "foo"
        assert entry.topic_set == {"tech", "python"}
        assert entry.added is not None

    def test_add_then_query_by_topic(self, reading_list):
        reading_list.add("foo", "http://x", None, ["tech"])

        result = reading_list.query(topics=["tech"])

        assert [e.name for e in result] == ["foo"]

    def test_topics_are_normalized(self, reading_list):
        entry = reading_list.add("foo", "http://x", topics=[" tech ", "tech", ""])
        assert entry.topics == ["tech"]

    def test_name_collision_leaves_store_unchanged(self, reading_list, test_db):
        reading_list.add("foo", "http://x", topics=["a"])

        with pytest.raises(ConflictError) as exc_info:
            reading_list.add("foo", "http://y", topics=["b"])

        assert exc_info.value.column == "name"
        assert _count(test_db, Entry) == 1
        assert _topic_names(reading_list) == {"a"}

    def test_url_collision(self, reading_list):
        reading_list.add("foo", "http://x")

        with pytest.raises(ConflictError) as exc_info:
            reading_list.add("bar", "http://x")

        assert exc_info.value.column == "url"

    def test_empty_name_is_rejected(self, reading_list):
        with pytest.raises(ValidationError):
            reading_list.add("  ", "http://x")

    def test_shared_topic_is_created_once(self, reading_list, test_db):
        reading_list.add("one", "http://1", topics=["tech"])
        reading_list.add("two", "http://2", topics=["tech"])

        assert _count(test_db, Topic) == 1
        assert _count(test_db, entry_topic_links) == 2


class TestRemove:
    """Tests for removal by name and by topic."""

    def test_remove_by_name_keeps_topic(self, reading_list):
        reading_list.add("foo", "http://x", None, ["tech"])

        removed = reading_list.remove_by_name("foo")

        assert removed.name == "foo"
        assert removed.topics == ["tech"]
        assert reading_list.query() == []
        assert _topic_names(reading_list) == {"tech"}

    def test_remove_by_name_leaves_no_orphan_links(self, reading_list, test_db):
        reading_list.add("foo", "http://x", None, ["a", "b"])
        reading_list.remove_by_name("foo")

        assert _count(test_db, entry_topic_links) == 0

    def test_remove_missing_name(self, reading_list):
        with pytest.raises(NotFoundError):
            reading_list.remove_by_name("missing")

    def test_remove_by_name_strips_lookup_name(self, reading_list):
        reading_list.add(" foo ", "http://x")

        assert reading_list.remove_by_name(" foo ").name == "foo"
        assert reading_list.query() == []

    def test_remove_by_topics_removes_whole_entries(self, populated_list):
        removed = populated_list.remove_by_topics(["python"])

        assert {e.name for e in removed} == {"pep-8", "sqlalchemy"}
        assert {e.name for e in populated_list.query()} == {
            "sqlite-docs",
            "loose-notes",
        }
        # Other topics of removed entries survive as topics
        assert "style" in _topic_names(populated_list)

    def test_remove_by_several_topics(self, populated_list):
        removed = populated_list.remove_by_topics(["sqlite", "style"])

        assert [e.name for e in removed] == ["sqlite-docs", "pep-8"]

    def test_remove_by_topics_unknown_topic_changes_nothing(self, populated_list):
        with pytest.raises(NotFoundError):
            populated_list.remove_by_topics(["python", "missing"])

        assert len(populated_list.query()) == 4

    def test_remove_by_unused_topic_removes_nothing(self, reading_list):
        reading_list.add("foo", "http://x", topics=["tech"])
        reading_list.remove_by_name("foo")
        reading_list.add("bar", "http://y")

        assert reading_list.remove_by_topics(["tech"]) == []
        assert [e.name for e in reading_list.query()] == ["bar"]

    def test_remove_by_no_topics(self, reading_list):
        with pytest.raises(InvalidArgumentError):
            reading_list.remove_by_topics([])


class TestEdit:
    """Tests for ReadingList.edit()."""

    @pytest.fixture
    def foo(self, reading_list):
        return reading_list.add("foo", "http://x", "Ann", ["a", "b"])

    def test_empty_edit_is_rejected(self, reading_list, foo):
        with pytest.raises(InvalidArgumentError):
            reading_list.edit("foo")

    def test_replace_topics(self, reading_list, foo):
        assert reading_list.edit("foo", topics=["c"]).topic_set == {"c"}

    def test_add_topics(self, reading_list, foo):
        assert reading_list.edit("foo", add_topics=["c"]).topic_set == {"a", "b", "c"}

    def test_remove_topics(self, reading_list, foo):
        assert reading_list.edit("foo", remove_topics=["a"]).topic_set == {"b"}

    def test_clear_topics(self, reading_list, foo):
        assert reading_list.edit("foo", clear_topics=True).topics == []

    def test_clear_then_add(self, reading_list, foo):
        entry = reading_list.edit("foo", clear_topics=True, add_topics=["c"])
        assert entry.topic_set == {"c"}

    def test_replace_takes_precedence_over_add(self, reading_list, foo):
        entry = reading_list.edit("foo", topics=["c"], add_topics=["d"])
        assert entry.topic_set == {"c"}

    def test_remove_applies_after_replace(self, reading_list, foo):
        entry = reading_list.edit("foo", topics=["c", "d"], remove_topics=["d"])
        assert entry.topic_set == {"c"}

    def test_adding_linked_topic_is_a_no_op(self, reading_list, test_db, foo):
        reading_list.edit("foo", add_topics=["a"])
        assert _count(test_db, entry_topic_links) == 2

    def test_partial_field_update(self, reading_list, foo):
        entry = reading_list.edit("foo", url="http://new")

        assert entry.url == "http://new"
        assert entry.author == "Ann"
        assert entry.topic_set == {"a", "b"}
        assert entry.added == foo.added

    def test_rename(self, reading_list, foo):
        entry = reading_list.edit("foo", new_name="bar")

        assert entry.name == "bar"
        assert [e.name for e in reading_list.query()] == ["bar"]

    def test_clear_author(self, reading_list, foo):
        assert reading_list.edit("foo", author="").author is None

    def test_old_name_is_stripped(self, reading_list, foo):
        assert reading_list.edit(" foo ", author="Bob").author == "Bob"

    def test_missing_entry(self, reading_list):
        with pytest.raises(NotFoundError):
            reading_list.edit("missing", author="Someone")

    def test_missing_entry_topic_only_edit(self, reading_list):
        with pytest.raises(NotFoundError):
            reading_list.edit("missing", add_topics=["a"])

    def test_conflicting_rename_keeps_topics(self, reading_list, foo):
        reading_list.add("bar", "http://y")

        with pytest.raises(ConflictError):
            reading_list.edit("foo", new_name="bar", topics=["z"])

        (entry,) = reading_list.query(name="foo")
        assert entry.topic_set == {"a", "b"}


class TestQuery:
    """Tests for ReadingList.query()."""

    def test_topic_filter_semantics(self, reading_list):
        reading_list.add("abc", "http://x", topics=["a", "b", "c"])

        assert len(reading_list.query(topics=["a", "b"])) == 1
        assert reading_list.query(topics=["a", "d"]) == []
        assert len(reading_list.query(topics=["a", "d"], match_any=True)) == 1

    def test_default_order_is_by_name(self, populated_list):
        assert [e.name for e in populated_list.query()] == [
            "loose-notes",
            "pep-8",
            "sqlalchemy",
            "sqlite-docs",
        ]

    def test_sort_by_author_descending(self, populated_list):
        result = populated_list.query(sort_by="author", descending=True)
        assert [e.author for e in result] == ["Rossum", "Hipp", "Bayer", None]

    def test_combined_filters(self, populated_list):
        result = populated_list.query(name="sql", topics=["python"])
        assert [e.name for e in result] == ["sqlalchemy"]

    def test_dump_all_ignores_filters(self, populated_list):
        assert len(populated_list.dump_all()) == 4

    def test_upper_bound_at_added_second_is_inclusive(self, reading_list):
        entry = reading_list.add("foo", "http://x")

        result = reading_list.query(added_from=entry.added, added_to=entry.added)

        assert [e.name for e in result] == ["foo"]

    def test_minute_precision_bound_is_rejected(self, reading_list):
        entry = reading_list.add("foo", "http://x")

        with pytest.raises(ValidationError):
            reading_list.query(added_to=entry.added[:16])


class TestImport:
    """Tests for ReadingList.import_entries()."""

    def test_import_counts_and_skips_conflicts(self, reading_list):
        reading_list.add("foo", "http://x")

        imported = reading_list.import_entries(
            [
                {"name": "foo", "url": "http://other"},
                {"name": "bar", "url": "http://x"},
                {"name": "baz", "url": "http://z", "topics": ["t"]},
                ReadingEntry("qux", "http://q", "Ann", ["t", "u"]),
            ]
        )

        assert imported == 2
        assert {e.name for e in reading_list.query()} == {"foo", "baz", "qux"}

    def test_import_skips_malformed_records(self, reading_list):
        imported = reading_list.import_entries(
            ["not a mapping", {"name": "no-url"}, {"name": "ok", "url": "http://ok"}]
        )

        assert imported == 1

    def test_import_skips_non_string_topics(self, reading_list):
        imported = reading_list.import_entries(
            [
                {"name": "x", "url": "http://x", "topics": [{"a": 1}, 3]},
                {"name": "y", "url": "http://y", "topics": ["ok"]},
            ]
        )

        assert imported == 1
        assert [e.name for e in reading_list.query()] == ["y"]
        assert _topic_names(reading_list) == {"ok"}

    def test_duplicates_within_batch(self, reading_list):
        imported = reading_list.import_entries(
            [{"name": "a", "url": "http://a"}, {"name": "a", "url": "http://b"}]
        )
        assert imported == 1

    def test_round_trip(self, populated_list, tmp_dir):
        from rlist.database.manager import ReadingListDB
        from rlist.database.reading_list import ReadingList

        dumped = populated_list.dump_all()
        other = ReadingList(ReadingListDB(tmp_dir / "copy.sqlite"))

        assert other.import_entries([e.to_dict() for e in dumped]) == 4

        def key(entries):
            return {(e.name, e.url, e.author, frozenset(e.topics)) for e in entries}

        assert key(other.dump_all()) == key(dumped)
        other.db.dispose()


class TestTopics:
    """Tests for topic listing and pruning."""

    def test_list_topics(self, populated_list):
        counts = dict(populated_list.list_topics())

        assert counts == {"databases": 2, "python": 2, "sqlite": 1, "style": 1}

    def test_prune_deletes_only_unused(self, populated_list):
        populated_list.remove_by_name("pep-8")

        assert populated_list.prune_topics() == ["style"]
        assert _topic_names(populated_list) == {"databases", "python", "sqlite"}

    def test_prune_with_nothing_unused(self, populated_list):
        assert populated_list.prune_topics() == []
