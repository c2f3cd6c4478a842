"""Tests for newsrank.fetchers.local module."""

import json

import pytest

from conftest import NOW
from newsrank.core.lexicon import Category
from newsrank.fetchers.local import ArticleLoadError, load_articles

RECORDS = [
    {"id": "1", "title": "Senate passes budget", "category": "politics",
     "published_at": "2024-06-01T10:00:00Z"},
    {"id": "2", "title": "New phone released", "category": "technology"},
]


class TestLoadArticles:
    def test_json_list(self, tmp_path) -> None:
        path = tmp_path / "pool.json"
        path.write_text(json.dumps(RECORDS))

        articles = load_articles(str(path), now=NOW)

        assert [article.id for article in articles] == ["1", "2"]
        assert articles[0].category == Category.POLITICS
        assert articles[1].published_at == NOW

    def test_json_envelope(self, tmp_path) -> None:
        path = tmp_path / "pool.json"
        path.write_text(json.dumps({"articles": RECORDS}))
        assert len(load_articles(str(path), now=NOW)) == 2

    def test_jsonl_skips_bad_lines(self, tmp_path, caplog) -> None:
        path = tmp_path / "pool.jsonl"
        path.write_text(json.dumps(RECORDS[0]) + "\n{broken\n\n" + json.dumps(RECORDS[1]) + "\n")

        articles = load_articles(str(path), now=NOW)

        assert [article.id for article in articles] == ["1", "2"]
        assert "Skipping line 2" in caplog.text

    def test_yaml(self, tmp_path) -> None:
        path = tmp_path / "pool.yaml"
        path.write_text(
            "articles:\n"
            "  - id: y1\n"
            "    title: Storm hits coast\n"
            "    category: world\n"
            "    tags: [weather, coast]\n"
        )
        articles = load_articles(str(path), now=NOW)
        assert articles[0].id == "y1"
        assert articles[0].tags == ("weather", "coast")

    def test_non_object_entries_skipped(self, tmp_path) -> None:
        path = tmp_path / "pool.json"
        path.write_text(json.dumps([RECORDS[0], "junk", 3]))
        assert len(load_articles(str(path), now=NOW)) == 1

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ArticleLoadError, match="Cannot read"):
            load_articles(str(tmp_path / "absent.json"))

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "pool.json"
        path.write_text("{not json")
        with pytest.raises(ArticleLoadError, match="Cannot parse"):
            load_articles(str(path))

    def test_not_a_list(self, tmp_path) -> None:
        path = tmp_path / "pool.json"
        path.write_text(json.dumps({"id": "1"}))
        with pytest.raises(ArticleLoadError, match="list of articles"):
            load_articles(str(path))

    def test_unsupported_suffix(self, tmp_path) -> None:
        path = tmp_path / "pool.csv"
        path.write_text("id,title\n")
        with pytest.raises(ArticleLoadError, match="Unsupported"):
            load_articles(str(path))

    def test_error_is_a_value_error(self) -> None:
        assert issubclass(ArticleLoadError, ValueError)
