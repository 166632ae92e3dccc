"""Tests for SQLiteStore."""

import sqlite3

import pytest

from lexparse.core.levels import Level
from lexparse.hierarchy import Flattener, build_tree
from lexparse.storage import SQLiteStore


@pytest.fixture
def store():
    with SQLiteStore() as s:
        s.initialize_schema()
        yield s


class TestSQLiteStore:
    def test_schema_is_idempotent(self, store):
        store.initialize_schema()
        assert store.count(Level.PART) == 0

    def test_replace_loads_all_levels(self, store, sample_data):
        assert store.replace(sample_data) == 15
        assert store.count(Level.ARTICLE) == 4
        assert store.count(Level.SUBCLAUSE) == 2

    def test_foreign_keys_resolved(self, store, sample_data):
        store.replace(sample_data)
        articles = store.fetch(Level.ARTICLE)

        first = articles[0]
        assert (first["Id"], first["PartId"], first["SectionId"], first["ChapterId"]) == (4, 1, 2, 3)
        assert first["ParagraphId"] is None
        assert first["ParagraphNumber"] == 0

        in_paragraph = articles[2]
        assert in_paragraph["Number"] == 1
        assert in_paragraph["ChapterId"] == 10
        assert in_paragraph["ParagraphId"] == 11

        last = articles[3]
        assert (last["SectionId"], last["ChapterId"]) == (13, 14)

    def test_sub_clause_links_to_its_clause(self, store, sample_data):
        store.replace(sample_data)
        second = store.fetch(Level.SUBCLAUSE)[1]
        assert second["ClauseId"] == 5
        assert second["ArticleId"] == 4
        assert second["NameKz"] == "екінші тармақша"

    def test_repeated_chain_picks_preceding_row(self, store):
        text = "\n".join([
            "Глава 1. Первая",
            "Статья 1. А",
            "Глава 1. Повтор",
            "Статья 1. Б",
        ])
        store.replace(Flattener.flatten(build_tree(text)))
        articles = store.fetch(Level.ARTICLE)
        assert [a["ChapterId"] for a in articles] == [1, 3]

    def test_replace_clears_previous_contents(self, store, sample_data):
        store.replace(sample_data)
        store.replace(Flattener.flatten(build_tree("ЧАСТЬ 2. Особенная часть")))
        assert store.count(Level.ARTICLE) == 0
        assert [row["Number"] for row in store.fetch(Level.PART)] == [2]

    def test_failed_batch_rolls_back(self, store, sample_data):
        store.replace(sample_data)
        with pytest.raises(sqlite3.Error):
            store.execute_queries(["DELETE FROM SubClauses;", "INSERT INTO Nowhere VALUES (1);"])
        assert store.count(Level.SUBCLAUSE) == 2

    def test_file_database(self, tmp_path, sample_data):
        db_path = tmp_path / "nested" / "codes.db"
        with SQLiteStore(db_path) as s:
            s.initialize_schema()
            s.replace(sample_data)
        with SQLiteStore(db_path) as s:
            assert s.count(Level.CHAPTER) == 3
