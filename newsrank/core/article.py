"""
Article data model for newsrank.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from newsrank.core.lexicon import Category
from newsrank.utils.nlp import as_text, estimate_reading_time, strip_html

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 string or epoch seconds into an aware UTC datetime.

    Returns None when the value cannot be interpreted.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value, tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            # e.g. epoch milliseconds
            return None
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _first(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _as_int(value: Any) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


def _as_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Source:
    """
    Publisher of an article.
    """
    name: str
    id: str = ""
    credibility_score: float = 0.0
    is_verified: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "Source":
        if isinstance(data, str):
            return cls(name=data)
        if not isinstance(data, dict):
            return cls(name="")
        credibility = _as_float(_first(data, 'credibility_score', 'credibilityScore'))
        return cls(
            name=as_text(data.get('name')),
            id=as_text(data.get('id')),
            credibility_score=min(1.0, max(0.0, credibility)),
            is_verified=bool(_first(data, 'is_verified', 'isVerified')),
        )


@dataclass(frozen=True)
class Article:
    """
    A news article as delivered by the news-fetch service.

    Instances are never modified by the engine.
    """
    id: str
    title: str
    content: str
    summary: str = ""
    author: str = ""
    source: Source = field(default_factory=lambda: Source(name=""))
    published_at: datetime = field(default_factory=utcnow)
    category: Category = Category.GENERAL
    image_url: Optional[str] = None
    article_url: str = ""
    is_breaking: bool = False
    tags: Tuple[str, ...] = ()
    like_count: int = 0
    share_count: int = 0

    def __post_init__(self):
        # Naive publication times are taken as UTC
        if self.published_at.tzinfo is None:
            object.__setattr__(self, 'published_at', self.published_at.replace(tzinfo=timezone.utc))

    @property
    def reading_time(self) -> int:
        """Estimated reading time in minutes (200 words per minute, at least 1)."""
        return estimate_reading_time(self.content)

    @property
    def has_image(self) -> bool:
        return bool(self.image_url)

    def age_seconds(self, now: Optional[datetime] = None) -> float:
        """Seconds elapsed since publication, relative to ``now``."""
        now = now or utcnow()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return (now - self.published_at).total_seconds()

    @classmethod
    def from_dict(cls, data: Dict[str, Any], now: Optional[datetime] = None) -> "Article":
        """
        Build an Article from a loosely-typed record.

        Missing text fields become empty strings and unknown categories
        become ``general``; the record is never rejected.

        Args:
            data: Record with snake_case (or camelCase) keys
            now: Timestamp to use when the record has none

        Returns:
            Article instance
        """
        published = parse_timestamp(_first(data, 'published_at', 'publishedAt', 'published'))
        if published is None:
            logger.debug(f"Article {data.get('id')!r} has no usable timestamp, using now")
            published = now or utcnow()

        tags = data.get('tags') or ()
        if isinstance(tags, str):
            tags = [tags]

        image_url = as_text(_first(data, 'image_url', 'imageUrl')) or None

        return cls(
            id=as_text(data.get('id')),
            title=as_text(data.get('title')),
            content=strip_html(as_text(_first(data, 'content', 'body', 'text'))),
            summary=strip_html(as_text(data.get('summary'))),
            author=as_text(data.get('author')),
            source=Source.from_dict(data.get('source')),
            published_at=published,
            category=Category.parse(as_text(data.get('category'))),
            image_url=image_url,
            article_url=as_text(_first(data, 'article_url', 'articleUrl', 'url')),
            is_breaking=bool(_first(data, 'is_breaking', 'isBreaking')),
            tags=tuple(as_text(tag) for tag in tags if as_text(tag)),
            like_count=_as_int(_first(data, 'like_count', 'likeCount')),
            share_count=_as_int(_first(data, 'share_count', 'shareCount')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'summary': self.summary,
            'author': self.author,
            'source': {
                'id': self.source.id,
                'name': self.source.name,
                'credibility_score': self.source.credibility_score,
                'is_verified': self.source.is_verified,
            },
            'published_at': self.published_at.isoformat(),
            'category': self.category.value,
            'image_url': self.image_url,
            'article_url': self.article_url,
            'is_breaking': self.is_breaking,
            'tags': list(self.tags),
            'like_count': self.like_count,
            'share_count': self.share_count,
            'reading_time': self.reading_time,
        }
