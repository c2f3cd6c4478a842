"""
Homepage placement selection and scoring.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple, Union

from newsrank.core.article import Article, utcnow
from newsrank.core.lexicon import Category

logger = logging.getLogger(__name__)

HOUR = 3600
DAY = 24 * HOUR

# Composite score weights
RELEVANCE_WEIGHT = 0.30
RECENCY_WEIGHT = 0.25
ENGAGEMENT_WEIGHT = 0.20
QUALITY_WEIGHT = 0.15
BREAKING_WEIGHT = 0.10

# Engagement saturates at these counts
LIKES_FOR_FULL_ENGAGEMENT = 100
SHARES_FOR_FULL_ENGAGEMENT = 50


class Placement(str, Enum):
    HERO = "hero"
    BREAKING = "breaking"
    TRENDING = "trending"
    CATEGORY = "category"
    FEED = "feed"

    @property
    def display_priority(self) -> int:
        """Position of the placement on the page, 1 is first."""
        return _DISPLAY_PRIORITY[self]

    @classmethod
    def parse(cls, value: Union["Placement", str]) -> "Placement":
        """
        Look up a placement by name.

        Raises:
            ValueError: for names outside the fixed set
        """
        if isinstance(value, Placement):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown placement {value!r}; expected one of: {valid}") from None


_DISPLAY_PRIORITY = {
    Placement.BREAKING: 1,
    Placement.HERO: 2,
    Placement.TRENDING: 3,
    Placement.CATEGORY: 4,
    Placement.FEED: 5,
}


class CardType(str, Enum):
    HERO = "hero"
    STANDARD = "standard"
    COMPACT = "compact"
    BREAKING = "breaking"


@dataclass(frozen=True)
class PlacementCriteria:
    min_read_minutes: int
    max_read_minutes: int
    require_image: bool
    min_like_count: int
    max_age_seconds: float
    priority_categories: FrozenSet[Category]
    excluded_categories: FrozenSet[Category]
    max_results: int


PLACEMENT_CRITERIA: Dict[Placement, PlacementCriteria] = {
    Placement.HERO: PlacementCriteria(
        min_read_minutes=3,
        max_read_minutes=15,
        require_image=True,
        min_like_count=10,
        max_age_seconds=24 * HOUR,
        priority_categories=frozenset({Category.TECHNOLOGY, Category.BUSINESS,
                                       Category.WORLD, Category.POLITICS}),
        excluded_categories=frozenset(),
        max_results=1,
    ),
    Placement.BREAKING: PlacementCriteria(
        min_read_minutes=1,
        max_read_minutes=8,
        require_image=True,
        min_like_count=0,
        max_age_seconds=2 * HOUR,
        priority_categories=frozenset({Category.POLITICS, Category.WORLD,
                                       Category.TECHNOLOGY, Category.HEALTH}),
        excluded_categories=frozenset({Category.ENTERTAINMENT, Category.SPORTS}),
        max_results=3,
    ),
    Placement.TRENDING: PlacementCriteria(
        min_read_minutes=1,
        max_read_minutes=10,
        require_image=False,
        min_like_count=5,
        max_age_seconds=7 * DAY,
        priority_categories=frozenset(Category),
        excluded_categories=frozenset(),
        max_results=5,
    ),
    Placement.CATEGORY: PlacementCriteria(
        min_read_minutes=2,
        max_read_minutes=12,
        require_image=True,
        min_like_count=3,
        max_age_seconds=3 * DAY,
        priority_categories=frozenset(),
        excluded_categories=frozenset(),
        max_results=4,
    ),
    Placement.FEED: PlacementCriteria(
        min_read_minutes=1,
        max_read_minutes=20,
        require_image=False,
        min_like_count=0,
        max_age_seconds=30 * DAY,
        priority_categories=frozenset(),
        excluded_categories=frozenset(),
        max_results=20,
    ),
}


def criteria_for(placement: Union[Placement, str]) -> PlacementCriteria:
    return PLACEMENT_CRITERIA[Placement.parse(placement)]


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class ArticleScore:
    relevance: float
    recency: float
    engagement: float
    quality: float
    breaking: float

    @property
    def total(self) -> float:
        return (
            self.relevance * RELEVANCE_WEIGHT
            + self.recency * RECENCY_WEIGHT
            + self.engagement * ENGAGEMENT_WEIGHT
            + self.quality * QUALITY_WEIGHT
            + self.breaking * BREAKING_WEIGHT
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'relevance': round(self.relevance, 4),
            'recency': round(self.recency, 4),
            'engagement': round(self.engagement, 4),
            'quality': round(self.quality, 4),
            'breaking': round(self.breaking, 4),
            'total': round(self.total, 4),
        }


def _read_time_in_bounds(article: Article, criteria: PlacementCriteria) -> bool:
    return criteria.min_read_minutes <= article.reading_time <= criteria.max_read_minutes


def meets_criteria(article: Article, criteria: PlacementCriteria, now: datetime) -> bool:
    """
    Hard eligibility checks: reading time, image, likes and age.
    """
    if not _read_time_in_bounds(article, criteria):
        return False
    if criteria.require_image and not article.has_image:
        return False
    if article.like_count < criteria.min_like_count:
        return False
    if article.age_seconds(now) > criteria.max_age_seconds:
        return False
    return True


def is_eligible(
    article: Article,
    placement: Union[Placement, str],
    now: Optional[datetime] = None,
) -> bool:
    """
    True if the article may be shown in the placement at all.

    The breaking placement additionally refuses its excluded categories.
    """
    placement = Placement.parse(placement)
    criteria = PLACEMENT_CRITERIA[placement]
    if not meets_criteria(article, criteria, now or utcnow()):
        return False
    if placement == Placement.BREAKING and article.category in criteria.excluded_categories:
        return False
    return True


def score_article(
    article: Article,
    placement: Union[Placement, str],
    now: Optional[datetime] = None,
) -> ArticleScore:
    """
    Compute the composite placement score of an article.

    Args:
        article: Article to score
        placement: Placement whose criteria apply
        now: Reference time for recency

    Returns:
        ArticleScore with every component in [0, 1]
    """
    criteria = criteria_for(placement)
    now = now or utcnow()

    relevance = 0.5
    if article.category in criteria.priority_categories:
        relevance += 0.3
    if article.category in criteria.excluded_categories:
        relevance -= 0.5

    age = article.age_seconds(now)
    if age > criteria.max_age_seconds:
        recency = 0.0
    else:
        recency = 1 - age / criteria.max_age_seconds

    like_score = min(1.0, article.like_count / LIKES_FOR_FULL_ENGAGEMENT)
    share_score = min(1.0, article.share_count / SHARES_FOR_FULL_ENGAGEMENT)
    engagement = (like_score + share_score) / 2

    quality = 0.5
    if article.has_image:
        quality += 0.2
    if _read_time_in_bounds(article, criteria):
        quality += 0.2
    if article.source.is_verified:
        quality += 0.1

    return ArticleScore(
        relevance=_clamp(relevance),
        recency=_clamp(recency),
        engagement=_clamp(engagement),
        quality=_clamp(quality),
        breaking=1.0 if article.is_breaking else 0.0,
    )


def rank_for_placement(
    articles: Sequence[Article],
    placement: Union[Placement, str],
    limit: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[Tuple[Article, ArticleScore]]:
    """
    Eligible articles with their scores, best first.

    Args:
        articles: Candidate pool, in source order
        placement: Target placement
        limit: Maximum results (defaults to the placement's own maximum)
        now: Reference time

    Returns:
        List of (article, score) pairs; ties keep pool order
    """
    placement = Placement.parse(placement)
    criteria = PLACEMENT_CRITERIA[placement]
    now = now or utcnow()
    max_count = criteria.max_results if limit is None else max(0, limit)

    scored = [
        (article, score_article(article, placement, now))
        for article in articles
        if is_eligible(article, placement, now)
    ]
    scored.sort(key=lambda pair: pair[1].total, reverse=True)

    logger.debug(f"{placement.value}: {len(scored)}/{len(articles)} eligible, keeping {max_count}")
    return scored[:max_count]


def select_for_placement(
    articles: Sequence[Article],
    placement: Union[Placement, str],
    limit: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[Article]:
    """
    Select and order articles for a homepage placement.

    Raises:
        ValueError: if ``placement`` is not one of the five placement names
    """
    return [article for article, _ in rank_for_placement(articles, placement, limit, now)]


def card_type_for(article: Article, placement: Union[Placement, str]) -> CardType:
    """
    Card style used to render an article in a placement.
    """
    placement = Placement.parse(placement)
    if placement == Placement.BREAKING:
        return CardType.BREAKING
    if placement == Placement.HERO:
        return CardType.HERO
    if article.is_breaking:
        return CardType.BREAKING
    if placement == Placement.FEED:
        return CardType.COMPACT
    return CardType.STANDARD
