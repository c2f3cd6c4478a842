"""Tests for newsrank.cli module."""

import json
import logging

import pytest

from conftest import words
from newsrank.cli import main, parse_args

NOW_ARG = "2024-06-01T12:00:00Z"

RECORDS = [
    {
        "id": "hero",
        "title": "Chip maker opens new plant in the valley",
        "content": words(800),
        "category": "technology",
        "source": {"name": "Wire", "credibility_score": 0.9, "is_verified": True},
        "published_at": "2024-06-01T11:00:00Z",
        "image_url": "https://images.unsplash.com/photo-1?w=1200",
        "like_count": 40,
        "share_count": 12,
    },
    {
        "id": "old",
        "title": "Lorem ipsum",
        "content": words(300),
        "published_at": "2024-05-20T11:00:00Z",
    },
]


@pytest.fixture(autouse=True)
def restore_logging(monkeypatch):
    monkeypatch.setenv("NEWSRANK_PROCESSING_SHOW_PROGRESS", "false")
    monkeypatch.delenv("NEWSRANK_CONFIG_PATH", raising=False)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def pool_path(tmp_path):
    path = tmp_path / "pool.json"
    path.write_text(json.dumps(RECORDS))
    return str(path)


def test_parse_args_rank() -> None:
    args = parse_args(["rank", "pool.json", "--placement", "hero", "--limit", "2"])
    assert args.command == "rank"
    assert args.placement == "hero"
    assert args.limit == 2


def test_parse_args_rejects_unknown_placement() -> None:
    with pytest.raises(SystemExit):
        parse_args(["rank", "pool.json", "--placement", "sidebar"])


def test_parse_args_rejects_bad_timestamp() -> None:
    with pytest.raises(SystemExit):
        parse_args(["homepage", "pool.json", "--now", "soon"])


def test_classify(pool_path, capsys) -> None:
    assert main(["classify", pool_path, "--now", NOW_ARG]) == 0
    report = json.loads(capsys.readouterr().out)
    assert [entry["id"] for entry in report] == ["hero", "old"]
    assert report[1]["primary_category"] == "general"


def test_rank_markdown(pool_path, capsys) -> None:
    assert main(["rank", pool_path, "--placement", "feed", "--format", "markdown", "--now", NOW_ARG]) == 0
    out = capsys.readouterr().out
    assert out.startswith("# Feed placement - June 01, 2024")
    assert "**Lorem ipsum**" in out


def test_rank_respects_limit(pool_path, capsys) -> None:
    assert main(["rank", pool_path, "--placement", "feed", "--limit", "1", "--now", NOW_ARG]) == 0
    assert len(json.loads(capsys.readouterr().out)) == 1


def test_validate_hero(pool_path, capsys) -> None:
    assert main(["validate-hero", pool_path, "--now", NOW_ARG]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["article"]["id"] == "hero"
    assert report["validation"]["is_valid"] is True


def test_validate_hero_by_id(pool_path, capsys) -> None:
    assert main(["validate-hero", pool_path, "--id", "old", "--now", NOW_ARG]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["validation"]["is_valid"] is False


def test_validate_hero_unknown_id(pool_path) -> None:
    assert main(["validate-hero", pool_path, "--id", "nope", "--now", NOW_ARG]) == 1


def test_validate_hero_without_candidates(tmp_path, capsys) -> None:
    path = tmp_path / "pool.json"
    path.write_text(json.dumps(RECORDS[1:]))
    assert main(["validate-hero", str(path), "--now", NOW_ARG]) == 0
    assert json.loads(capsys.readouterr().out) == {"hero": None}


def test_homepage_to_file(pool_path, tmp_path) -> None:
    output = tmp_path / "homepage.json"
    assert main(["homepage", pool_path, "--now", NOW_ARG, "--output", str(output)]) == 0
    report = json.loads(output.read_text())
    assert report["homepage"]["hero"]["id"] == "hero"
    assert report["metrics"]["total_articles"] > 0


def test_format_from_config(pool_path, tmp_path, capsys) -> None:
    config = tmp_path / "newsrank.yaml"
    config.write_text("output:\n  format: markdown\n")
    assert main(["homepage", pool_path, "--config", str(config), "--now", NOW_ARG]) == 0
    assert capsys.readouterr().out.startswith("# Homepage - June 01, 2024")


def test_missing_article_file(tmp_path) -> None:
    assert main(["classify", str(tmp_path / "absent.json")]) == 1
