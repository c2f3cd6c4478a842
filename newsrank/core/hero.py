"""
Hero article quality validation and selection.

A hero candidate starts from a perfect score of 100 and loses points for
each problem found. Every deduction is recorded as an issue with a severity
plus a recommendation an editor can act on.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from newsrank.core.article import Article, utcnow
from newsrank.core.lexicon import Category

logger = logging.getLogger(__name__)

MAX_SCORE = 100.0
MIN_OVERALL_SCORE = 75.0
MIN_IMAGE_QUALITY_SCORE = 60.0
MIN_TITLE_QUALITY_SCORE = 70.0
ATTENTION_SCORE = 60.0

MIN_TITLE_LENGTH = 20
MAX_TITLE_LENGTH = 120

MAX_AGE_HOURS = 24.0
MIN_SOURCE_CREDIBILITY = 0.7

SUPPORTED_CATEGORIES = frozenset({
    Category.POLITICS, Category.BUSINESS, Category.TECHNOLOGY, Category.HEALTH,
    Category.WORLD, Category.SPORTS, Category.ENTERTAINMENT,
})
PREFERRED_CATEGORIES = frozenset({
    Category.POLITICS, Category.BUSINESS, Category.TECHNOLOGY, Category.WORLD,
})

ENGAGEMENT_WORDS = ('breaking', 'exclusive', 'urgent', 'major', 'significant', 'important')


class IssueSeverity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """0 for the most severe."""
        return list(IssueSeverity).index(self)


class ValidationIssue(str, Enum):
    LOW_IMAGE_QUALITY = "low_image_quality"
    POOR_TITLE = "poor_title"
    OUTDATED_CONTENT = "outdated_content"
    LOW_SOURCE_CREDIBILITY = "low_source_credibility"
    IRRELEVANT_CATEGORY = "irrelevant_category"
    MISSING_IMAGE = "missing_image"
    TITLE_TOO_SHORT = "title_too_short"
    TITLE_TOO_LONG = "title_too_long"

    @property
    def severity(self) -> IssueSeverity:
        return _ISSUE_SEVERITY[self]

    @property
    def display_name(self) -> str:
        return self.value.replace('_', ' ').title()


_ISSUE_SEVERITY = {
    ValidationIssue.MISSING_IMAGE: IssueSeverity.CRITICAL,
    ValidationIssue.TITLE_TOO_SHORT: IssueSeverity.CRITICAL,
    ValidationIssue.LOW_IMAGE_QUALITY: IssueSeverity.HIGH,
    ValidationIssue.POOR_TITLE: IssueSeverity.HIGH,
    ValidationIssue.OUTDATED_CONTENT: IssueSeverity.MEDIUM,
    ValidationIssue.LOW_SOURCE_CREDIBILITY: IssueSeverity.MEDIUM,
    ValidationIssue.IRRELEVANT_CATEGORY: IssueSeverity.LOW,
    ValidationIssue.TITLE_TOO_LONG: IssueSeverity.LOW,
}


class QualityLevel(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    ACCEPTABLE = "acceptable"
    POOR = "poor"
    UNACCEPTABLE = "unacceptable"

    @classmethod
    def for_score(cls, score: float) -> "QualityLevel":
        if score >= 90:
            return cls.EXCELLENT
        if score >= 80:
            return cls.GOOD
        if score >= 70:
            return cls.ACCEPTABLE
        if score >= 60:
            return cls.POOR
        return cls.UNACCEPTABLE


class HeroType(str, Enum):
    BREAKING = "breaking"
    FEATURED = "featured"
    TRENDING = "trending"
    EDITORIAL = "editorial"
    SPONSORED = "sponsored"


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    score: float
    issues: Tuple[ValidationIssue, ...]
    recommendations: Tuple[str, ...]

    @property
    def quality_level(self) -> QualityLevel:
        return QualityLevel.for_score(self.score)

    @property
    def has_critical_issues(self) -> bool:
        return any(issue.severity == IssueSeverity.CRITICAL for issue in self.issues)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'is_valid': self.is_valid,
            'score': self.score,
            'quality_level': self.quality_level.value,
            'issues': [
                {'issue': issue.value, 'severity': issue.severity.value}
                for issue in self.issues
            ],
            'recommendations': list(self.recommendations),
        }


def image_quality_score(article: Article) -> float:
    """
    Rough image quality estimate from the image URL alone.

    No image is fetched; known high-resolution URL patterns earn points.
    """
    if not article.image_url:
        return 0.0

    url = article.image_url
    score = 50.0
    if 'unsplash.com' in url:
        score += 20.0
    if 'w=800' in url or 'w=1200' in url:
        score += 20.0
    if '16:9' in url:
        score += 10.0
    return min(MAX_SCORE, score)


def title_quality_score(title: str) -> float:
    score = 50.0

    if MIN_TITLE_LENGTH <= len(title) <= MAX_TITLE_LENGTH:
        score += 20.0

    lowered = title.lower()
    if any(word in lowered for word in ENGAGEMENT_WORDS):
        score += 15.0

    # Declarative titles read better than questions or exclamations
    if '?' not in title and '!' not in title:
        score += 10.0

    if 5 <= len(title.split(' ')) <= 15:
        score += 15.0

    return min(MAX_SCORE, score)


def _hours_since(article: Article, now: datetime) -> float:
    return article.age_seconds(now) / 3600


def validate_hero(article: Article, now: Optional[datetime] = None) -> ValidationResult:
    """
    Validate an article against the hero quality rubric.

    Args:
        article: Hero candidate
        now: Reference time for the age check

    Returns:
        ValidationResult with score, issues and recommendations
    """
    now = now or utcnow()
    issues: List[ValidationIssue] = []
    recommendations: List[str] = []
    score = MAX_SCORE

    def deduct(issue: ValidationIssue, recommendation: str, points: float) -> None:
        nonlocal score
        issues.append(issue)
        recommendations.append(recommendation)
        score -= points

    if image_quality_score(article) < MIN_IMAGE_QUALITY_SCORE:
        deduct(ValidationIssue.LOW_IMAGE_QUALITY,
               "Use a higher quality image with 16:9 aspect ratio", 20.0)

    if not article.image_url:
        deduct(ValidationIssue.MISSING_IMAGE, "Add a compelling hero image", 30.0)

    if title_quality_score(article.title) < MIN_TITLE_QUALITY_SCORE:
        deduct(ValidationIssue.POOR_TITLE, "Improve title clarity and engagement", 15.0)

    if len(article.title) < MIN_TITLE_LENGTH:
        deduct(ValidationIssue.TITLE_TOO_SHORT, "Make title more descriptive", 10.0)

    if len(article.title) > MAX_TITLE_LENGTH:
        deduct(ValidationIssue.TITLE_TOO_LONG, "Shorten title for better readability", 5.0)

    if _hours_since(article, now) > MAX_AGE_HOURS:
        deduct(ValidationIssue.OUTDATED_CONTENT, "Consider using more recent content", 10.0)

    if article.source.credibility_score < MIN_SOURCE_CREDIBILITY:
        deduct(ValidationIssue.LOW_SOURCE_CREDIBILITY, "Verify source credibility", 15.0)

    if article.category not in SUPPORTED_CATEGORIES:
        deduct(ValidationIssue.IRRELEVANT_CATEGORY,
               "Consider using a more relevant category", 5.0)

    score = max(0.0, min(MAX_SCORE, score))
    has_critical = any(issue.severity == IssueSeverity.CRITICAL for issue in issues)

    return ValidationResult(
        is_valid=score >= MIN_OVERALL_SCORE and not has_critical,
        score=score,
        issues=tuple(issues),
        recommendations=tuple(recommendations),
    )


def determine_hero_type(article: Article, now: Optional[datetime] = None) -> HeroType:
    """
    Badge to show on a hero article. Sponsored heroes are set by editors only.
    """
    if article.is_breaking:
        return HeroType.BREAKING
    if _hours_since(article, now or utcnow()) < 2:
        return HeroType.TRENDING
    if article.source.credibility_score > 0.8:
        return HeroType.FEATURED
    return HeroType.EDITORIAL


def hero_priority_score(article: Article, now: Optional[datetime] = None) -> float:
    """
    Score used to choose between hero candidates, 0 to 100.
    """
    score = 50.0

    if article.is_breaking:
        score += 30.0

    hours = _hours_since(article, now or utcnow())
    if hours < 1:
        score += 20.0
    elif hours < 6:
        score += 15.0
    elif hours < 12:
        score += 10.0

    score += article.source.credibility_score * 20.0

    if article.category in PREFERRED_CATEGORIES:
        score += 10.0

    score += title_quality_score(article.title) * 0.1

    return min(MAX_SCORE, score)


@dataclass(frozen=True)
class HeroSelection:
    article: Article
    hero_type: HeroType
    validation: ValidationResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            'article': self.article.to_dict(),
            'hero_type': self.hero_type.value,
            'validation': self.validation.to_dict(),
        }


def select_hero(articles: Sequence[Article], now: Optional[datetime] = None) -> Optional[HeroSelection]:
    """
    Choose the best hero among recent, credible articles.

    Args:
        articles: Candidate pool
        now: Reference time

    Returns:
        HeroSelection, or None if no article is recent and credible enough
    """
    now = now or utcnow()
    candidates = [
        article for article in articles
        if _hours_since(article, now) <= MAX_AGE_HOURS
        and article.source.credibility_score >= MIN_SOURCE_CREDIBILITY
    ]
    if not candidates:
        logger.debug("No suitable hero article found")
        return None

    best = max(candidates, key=lambda article: hero_priority_score(article, now))
    return HeroSelection(
        article=best,
        hero_type=determine_hero_type(best, now),
        validation=validate_hero(best, now),
    )


def quality_summary(result: ValidationResult) -> str:
    """One-line description such as "Good quality - 1 issue found"."""
    level = result.quality_level.value.capitalize()
    count = len(result.issues)
    if count == 0:
        return f"{level} quality - No issues found"
    return f"{level} quality - {count} issue{'' if count == 1 else 's'} found"


def most_critical_issue(result: ValidationResult) -> Optional[ValidationIssue]:
    """The most severe issue; the earliest one wins among equals."""
    if not result.issues:
        return None
    return min(result.issues, key=lambda issue: issue.severity.rank)


def needs_immediate_attention(result: ValidationResult) -> bool:
    return result.has_critical_issues or result.score < ATTENTION_SCORE
