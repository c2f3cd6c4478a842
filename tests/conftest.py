"""Shared fixtures for newsrank tests."""

from datetime import datetime, timedelta, timezone

import pytest

from newsrank.core.article import Article, Source
from newsrank.core.lexicon import Category

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def words(count: int) -> str:
    """Neutral filler text with exactly ``count`` words."""
    return " ".join(["lorem"] * count)


def make_article(
    id: str = "a1",
    title: str = "Council approves the new riverside park plan",
    content: str = None,
    summary: str = "",
    category: Category = Category.GENERAL,
    age: timedelta = timedelta(hours=1),
    image_url: str = "https://images.example.com/photo.jpg",
    credibility: float = 0.9,
    verified: bool = True,
    is_breaking: bool = False,
    tags: tuple = (),
    like_count: int = 20,
    share_count: int = 10,
) -> Article:
    return Article(
        id=id,
        title=title,
        content=words(800) if content is None else content,
        summary=summary,
        author="Staff",
        source=Source(name="Daily Example", credibility_score=credibility, is_verified=verified),
        published_at=NOW - age,
        category=category,
        image_url=image_url,
        article_url=f"https://news.example.com/{id}",
        is_breaking=is_breaking,
        tags=tags,
        like_count=like_count,
        share_count=share_count,
    )


@pytest.fixture
def now() -> datetime:
    return NOW
