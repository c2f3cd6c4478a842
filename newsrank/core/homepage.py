"""
Homepage assembly: fill every placement from a single article pool.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from newsrank.core.article import Article, utcnow
from newsrank.core.hero import ValidationResult, validate_hero
from newsrank.core.lexicon import Category
from newsrank.core.placement import Placement, score_article, select_for_placement

logger = logging.getLogger(__name__)

# Number of categories that get their own homepage section
CATEGORY_SECTIONS = 4

MIN_TITLE_LENGTH = 10
MAX_TITLE_LENGTH = 100
MIN_SUMMARY_LENGTH = 20
MAX_SUMMARY_LENGTH = 200


@dataclass(frozen=True)
class Homepage:
    hero: Optional[Article]
    hero_validation: Optional[ValidationResult]
    breaking: Tuple[Article, ...]
    trending: Tuple[Article, ...]
    categories: Tuple[Tuple[Category, Tuple[Article, ...]], ...]
    feed: Tuple[Article, ...]

    def articles_for(self, placement: Placement) -> List[Article]:
        placement = Placement.parse(placement)
        if placement == Placement.HERO:
            return [self.hero] if self.hero else []
        if placement == Placement.BREAKING:
            return list(self.breaking)
        if placement == Placement.TRENDING:
            return list(self.trending)
        if placement == Placement.CATEGORY:
            return [article for _, articles in self.categories for article in articles]
        return list(self.feed)

    def displayed_articles(self) -> List[Article]:
        """All articles on the page in display order, repeats included."""
        articles = [self.hero] if self.hero else []
        for placement in (Placement.BREAKING, Placement.TRENDING, Placement.CATEGORY, Placement.FEED):
            articles.extend(self.articles_for(placement))
        return articles

    def to_dict(self) -> Dict[str, Any]:
        return {
            'hero': self.hero.to_dict() if self.hero else None,
            'hero_validation': self.hero_validation.to_dict() if self.hero_validation else None,
            'breaking': [article.to_dict() for article in self.breaking],
            'trending': [article.to_dict() for article in self.trending],
            'categories': {
                category.value: [article.to_dict() for article in articles]
                for category, articles in self.categories
            },
            'feed': [article.to_dict() for article in self.feed],
        }


def assemble_homepage(articles: Sequence[Article], now: Optional[datetime] = None) -> Homepage:
    """
    Select articles for every placement.

    Args:
        articles: Deduplicated article pool
        now: Reference time shared by every placement

    Returns:
        Homepage
    """
    now = now or utcnow()

    heroes = select_for_placement(articles, Placement.HERO, limit=1, now=now)
    hero = heroes[0] if heroes else None

    sections = []
    for category in list(Category)[:CATEGORY_SECTIONS]:
        in_category = [article for article in articles if article.category == category]
        sections.append((category, tuple(select_for_placement(in_category, Placement.CATEGORY, now=now))))

    homepage = Homepage(
        hero=hero,
        hero_validation=validate_hero(hero, now) if hero else None,
        breaking=tuple(select_for_placement(articles, Placement.BREAKING, now=now)),
        trending=tuple(select_for_placement(articles, Placement.TRENDING, now=now)),
        categories=tuple(sections),
        feed=tuple(select_for_placement(articles, Placement.FEED, now=now)),
    )
    logger.debug(f"Assembled homepage with {len(homepage.displayed_articles())} article slots "
                f"from {len(articles)} articles")
    return homepage


class IssueLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class ArticleIssue:
    code: str
    level: IssueLevel
    description: str


@dataclass(frozen=True)
class ArticleValidation:
    article: Article
    issues: Tuple[ArticleIssue, ...]

    @property
    def is_valid(self) -> bool:
        return not self.issues

    @property
    def severity(self) -> IssueLevel:
        levels = {issue.level for issue in self.issues}
        if IssueLevel.CRITICAL in levels:
            return IssueLevel.CRITICAL
        if IssueLevel.WARNING in levels:
            return IssueLevel.WARNING
        return IssueLevel.INFO


def validate_article(article: Article) -> ArticleValidation:
    """
    Check an article against the display rules for regular homepage cards.
    """
    issues = []

    if not MIN_TITLE_LENGTH <= len(article.title) <= MAX_TITLE_LENGTH:
        issues.append(ArticleIssue(
            'invalid_title_length', IssueLevel.WARNING,
            f"Title length ({len(article.title)}) is outside recommended range"))

    if not MIN_SUMMARY_LENGTH <= len(article.summary) <= MAX_SUMMARY_LENGTH:
        issues.append(ArticleIssue(
            'invalid_summary_length', IssueLevel.WARNING,
            f"Summary length ({len(article.summary)}) is outside recommended range"))

    if not article.has_image:
        issues.append(ArticleIssue('missing_image', IssueLevel.INFO, "Article is missing an image"))

    if not article.source.is_verified:
        issues.append(ArticleIssue('unverified_source', IssueLevel.INFO,
                                   "Article source is not verified"))

    return ArticleValidation(article=article, issues=tuple(issues))


@dataclass(frozen=True)
class QualityMetrics:
    total_articles: int
    articles_with_images: int
    verified_sources: int
    breaking_news_count: int
    average_quality_score: float

    @property
    def image_coverage(self) -> float:
        return self.articles_with_images / self.total_articles if self.total_articles else 0.0

    @property
    def source_verification_rate(self) -> float:
        return self.verified_sources / self.total_articles if self.total_articles else 0.0

    @property
    def quality_grade(self) -> str:
        score = self.average_quality_score
        if score >= 0.8:
            return "A+"
        if score >= 0.7:
            return "A"
        if score >= 0.6:
            return "B"
        if score >= 0.5:
            return "C"
        if score >= 0.4:
            return "D"
        return "F"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_articles': self.total_articles,
            'articles_with_images': self.articles_with_images,
            'verified_sources': self.verified_sources,
            'breaking_news_count': self.breaking_news_count,
            'average_quality_score': round(self.average_quality_score, 4),
            'image_coverage': round(self.image_coverage, 4),
            'source_verification_rate': round(self.source_verification_rate, 4),
            'quality_grade': self.quality_grade,
        }


def quality_metrics(homepage: Homepage, now: Optional[datetime] = None) -> QualityMetrics:
    """
    Summary statistics over every article shown on the homepage.

    The average score uses the feed criteria so all slots are comparable.
    """
    now = now or utcnow()
    articles = homepage.displayed_articles()
    total = len(articles)
    score_sum = sum(score_article(article, Placement.FEED, now).total for article in articles)

    return QualityMetrics(
        total_articles=total,
        articles_with_images=sum(1 for article in articles if article.has_image),
        verified_sources=sum(1 for article in articles if article.source.is_verified),
        breaking_news_count=sum(1 for article in articles if article.is_breaking),
        average_quality_score=score_sum / max(total, 1),
    )
