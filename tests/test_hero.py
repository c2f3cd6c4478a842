"""Tests for newsrank.core.hero module."""

from datetime import timedelta

import pytest

from conftest import make_article
from newsrank.core.lexicon import Category
from newsrank.core.hero import (
    HeroType,
    IssueSeverity,
    QualityLevel,
    ValidationIssue,
    ValidationResult,
    determine_hero_type,
    hero_priority_score,
    image_quality_score,
    most_critical_issue,
    needs_immediate_attention,
    quality_summary,
    select_hero,
    title_quality_score,
    validate_hero,
)

GOOD_IMAGE = "https://images.unsplash.com/photo-1?w=1200"


def hero_candidate(**overrides):
    defaults = dict(category=Category.TECHNOLOGY, image_url=GOOD_IMAGE)
    defaults.update(overrides)
    return make_article(**defaults)


class TestScores:
    def test_image_quality_from_url(self) -> None:
        assert image_quality_score(make_article(image_url=None)) == 0.0
        assert image_quality_score(make_article(image_url="https://cdn.example.com/a.jpg")) == 50.0
        assert image_quality_score(make_article(image_url=GOOD_IMAGE)) == 90.0
        assert image_quality_score(make_article(image_url=GOOD_IMAGE + "&ratio=16:9")) == 100.0

    def test_title_quality(self) -> None:
        assert title_quality_score("Council approves the new riverside park plan") == 95.0
        assert title_quality_score("Rate cut") == 60.0
        assert title_quality_score("Is the major budget deal finally done this week?") == 100.0

    def test_question_titles_score_lower(self) -> None:
        declarative = "Council approves the new riverside park plan"
        assert title_quality_score(declarative + "?") < title_quality_score(declarative)


class TestValidateHero:
    def test_clean_article_is_valid(self, now) -> None:
        result = validate_hero(hero_candidate(), now)
        assert result.is_valid is True
        assert result.score == 100.0
        assert result.issues == ()
        assert result.quality_level == QualityLevel.EXCELLENT

    def test_weak_candidate_scenario(self, now) -> None:
        article = make_article(title="Rate cut", image_url=None, credibility=0.4,
                               category=Category.BUSINESS)

        result = validate_hero(article, now)

        assert result.issues == (
            ValidationIssue.LOW_IMAGE_QUALITY,
            ValidationIssue.MISSING_IMAGE,
            ValidationIssue.POOR_TITLE,
            ValidationIssue.TITLE_TOO_SHORT,
            ValidationIssue.LOW_SOURCE_CREDIBILITY,
        )
        assert result.score == 10.0
        assert result.is_valid is False
        assert result.has_critical_issues is True
        assert len(result.recommendations) == len(result.issues)

    def test_critical_issue_invalidates_high_score(self, now) -> None:
        # poor_title and title_too_short leave exactly 75, but the short title is critical
        article = hero_candidate(title="Markets rally today")
        result = validate_hero(article, now)
        assert ValidationIssue.TITLE_TOO_SHORT in result.issues
        assert result.score >= 75
        assert result.is_valid is False

    def test_outdated_and_irrelevant(self, now) -> None:
        article = hero_candidate(age=timedelta(hours=30), category=Category.LOCAL)
        result = validate_hero(article, now)
        assert result.issues == (ValidationIssue.OUTDATED_CONTENT, ValidationIssue.IRRELEVANT_CATEGORY)
        assert result.score == 85.0
        assert result.is_valid is True

    def test_title_too_long(self, now) -> None:
        title = "A very detailed headline about the council meeting " * 3
        result = validate_hero(hero_candidate(title=title.strip()), now)
        assert ValidationIssue.TITLE_TOO_LONG in result.issues

    @pytest.mark.parametrize("change", [
        dict(image_url=None),
        dict(image_url="https://cdn.example.com/a.jpg"),
        dict(title="Short"),
        dict(age=timedelta(days=3)),
        dict(credibility=0.2),
        dict(category=Category.LOCAL),
    ])
    def test_each_defect_lowers_score(self, change, now) -> None:
        baseline = validate_hero(hero_candidate(), now)
        degraded = validate_hero(hero_candidate(**change), now)
        assert degraded.score < baseline.score
        assert len(degraded.issues) > len(baseline.issues)

    def test_score_never_negative(self, now) -> None:
        article = make_article(title="?", image_url=None, credibility=0.0,
                               age=timedelta(days=9), category=Category.LOCAL)
        result = validate_hero(article, now)
        assert result.score == 0.0
        assert result.quality_level == QualityLevel.UNACCEPTABLE

    def test_to_dict(self, now) -> None:
        data = validate_hero(make_article(title="Rate cut", image_url=None), now).to_dict()
        assert data["is_valid"] is False
        assert {"issue": "missing_image", "severity": "critical"} in data["issues"]


class TestQualityLevel:
    @pytest.mark.parametrize("score,level", [
        (100, QualityLevel.EXCELLENT),
        (90, QualityLevel.EXCELLENT),
        (89.9, QualityLevel.GOOD),
        (80, QualityLevel.GOOD),
        (70, QualityLevel.ACCEPTABLE),
        (60, QualityLevel.POOR),
        (59, QualityLevel.UNACCEPTABLE),
    ])
    def test_for_score(self, score, level) -> None:
        assert QualityLevel.for_score(score) == level

    def test_severity_ranking(self) -> None:
        assert IssueSeverity.CRITICAL.rank < IssueSeverity.HIGH.rank < IssueSeverity.LOW.rank
        assert ValidationIssue.MISSING_IMAGE.severity == IssueSeverity.CRITICAL
        assert ValidationIssue.TITLE_TOO_LONG.display_name == "Title Too Long"


class TestHeroSelection:
    def test_hero_type(self, now) -> None:
        assert determine_hero_type(make_article(is_breaking=True), now) == HeroType.BREAKING
        assert determine_hero_type(make_article(age=timedelta(hours=1)), now) == HeroType.TRENDING
        assert determine_hero_type(make_article(age=timedelta(hours=5), credibility=0.9), now) == HeroType.FEATURED
        assert determine_hero_type(make_article(age=timedelta(hours=5), credibility=0.8), now) == HeroType.EDITORIAL

    def test_priority_score(self, now) -> None:
        # 50 + 15 (1h old) + 18 (credibility) + 9.5 (title)
        assert hero_priority_score(make_article(), now) == pytest.approx(92.5)

    def test_priority_score_is_capped(self, now) -> None:
        article = hero_candidate(is_breaking=True, age=timedelta(minutes=10))
        assert hero_priority_score(article, now) == 100.0

    def test_select_hero_filters_and_picks_best(self, now) -> None:
        pool = [
            make_article(id="stale", age=timedelta(hours=30), is_breaking=True),
            make_article(id="dubious", credibility=0.5, is_breaking=True),
            make_article(id="steady", age=timedelta(hours=10)),
            make_article(id="fresh", age=timedelta(minutes=20), category=Category.WORLD),
        ]
        selection = select_hero(pool, now)
        assert selection.article.id == "fresh"
        assert selection.hero_type == HeroType.TRENDING
        assert isinstance(selection.validation, ValidationResult)
        assert selection.to_dict()["hero_type"] == "trending"

    def test_select_hero_none_when_nothing_qualifies(self, now) -> None:
        assert select_hero([make_article(credibility=0.1)], now) is None
        assert select_hero([], now) is None


class TestSummaries:
    def test_quality_summary(self, now) -> None:
        assert quality_summary(validate_hero(hero_candidate(), now)) == "Excellent quality - No issues found"
        one_issue = validate_hero(hero_candidate(image_url="https://cdn.example.com/a.jpg"), now)
        assert quality_summary(one_issue) == "Good quality - 1 issue found"
        weak = validate_hero(make_article(title="Rate cut", image_url=None, credibility=0.4), now)
        assert quality_summary(weak).endswith("issues found")

    def test_most_critical_issue(self, now) -> None:
        weak = validate_hero(make_article(title="Rate cut", image_url=None, credibility=0.4), now)
        assert most_critical_issue(weak) == ValidationIssue.MISSING_IMAGE
        assert most_critical_issue(validate_hero(hero_candidate(), now)) is None

    def test_needs_immediate_attention(self, now) -> None:
        assert needs_immediate_attention(validate_hero(hero_candidate(), now)) is False
        weak = validate_hero(make_article(title="Rate cut", image_url=None), now)
        assert needs_immediate_attention(weak) is True
        low = ValidationResult(is_valid=False, score=55.0,
                               issues=(ValidationIssue.OUTDATED_CONTENT,), recommendations=("x",))
        assert needs_immediate_attention(low) is True
