"""Tests for newsrank.core.signals module."""

import pytest

from conftest import make_article
from newsrank.core.lexicon import Category, build_lexicon
from newsrank.core.signals import Priority, detect_breaking, determine_priority


class TestDetectBreaking:
    def test_flag_wins(self) -> None:
        assert detect_breaking(make_article(title="Quiet afternoon", is_breaking=True))

    def test_title_keyword(self) -> None:
        assert detect_breaking(make_article(title="URGENT: storm warning issued"))

    def test_summary_keyword(self) -> None:
        assert detect_breaking(make_article(title="Storm", summary="Police made an arrest overnight"))

    def test_content_is_ignored(self) -> None:
        assert not detect_breaking(make_article(title="Park plan", content="breaking emergency"))

    def test_custom_lexicon(self) -> None:
        lexicon = build_lexicon()
        article = make_article(title="Park plan approved")
        assert detect_breaking(article, lexicon) is False


class TestDeterminePriority:
    def test_high_priority_keyword(self) -> None:
        article = make_article(title="A significant day for the park")
        assert determine_priority(article, Category.LOCAL) == Priority.HIGH

    def test_innovation_only_counts_for_technology(self) -> None:
        article = make_article(title="Startup unveils a new bike lock")
        assert determine_priority(article, Category.TECHNOLOGY) == Priority.HIGH
        assert determine_priority(article, Category.LOCAL) == Priority.LOW

    @pytest.mark.parametrize("category,priority", [
        (Category.BUSINESS, Priority.HIGH),
        (Category.HEALTH, Priority.HIGH),
        (Category.SCIENCE, Priority.MEDIUM),
        (Category.SPORTS, Priority.MEDIUM),
        (Category.LOCAL, Priority.LOW),
        (Category.GENERAL, Priority.LOW),
    ])
    def test_category_default(self, category, priority) -> None:
        article = make_article(title="Park plan approved")
        assert determine_priority(article, category) == priority

    def test_never_critical(self) -> None:
        article = make_article(title="Breaking: critical emergency")
        for category in Category:
            assert determine_priority(article, category) != Priority.CRITICAL
