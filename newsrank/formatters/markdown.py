"""
Markdown reports for newsrank results.
"""
import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from newsrank.core.article import Article
from newsrank.core.classifier import ClassificationResult
from newsrank.core.hero import ValidationResult, quality_summary
from newsrank.core.homepage import Homepage, QualityMetrics
from newsrank.core.lexicon import CATEGORY_INFO
from newsrank.core.placement import ArticleScore, Placement, card_type_for

logger = logging.getLogger(__name__)


def _escape(text: str) -> str:
    """Keep table cells on one line and free of column separators."""
    return " ".join(text.split()).replace('|', '\\|')


class MarkdownFormatter:
    """
    Formats engine results as Markdown.
    """
    def __init__(self, today: Optional[datetime] = None):
        """
        Initialize the MarkdownFormatter.

        Args:
            today: Date printed in report headers
        """
        self.today = (today or datetime.now()).strftime("%B %d, %Y")

    def _article_line(self, article: Article, placement: Optional[Placement] = None) -> str:
        line = f"**{_escape(article.title) or '(untitled)'}**"
        details = [CATEGORY_INFO[article.category].display_name, f"{article.reading_time} min read"]
        if article.source.name:
            details.insert(0, article.source.name)
        if placement is not None:
            details.append(f"{card_type_for(article, placement).value} card")
        return f"{line} ({', '.join(details)})"

    def format_classifications(self, pairs: Sequence[Tuple[Article, ClassificationResult]]) -> str:
        lines = [f"# Article Classification - {self.today}", ""]
        lines.append("| Article | Category | Subcategory | Confidence | Breaking | Priority |")
        lines.append("|---|---|---|---|---|---|")
        for article, result in pairs:
            lines.append(
                f"| {_escape(article.title)} "
                f"| {CATEGORY_INFO[result.primary_category].display_name} "
                f"| {result.subcategory or '-'} "
                f"| {result.confidence:.2f} "
                f"| {'yes' if result.is_breaking else 'no'} "
                f"| {result.priority.value} |"
            )
        return "\n".join(lines) + "\n"

    def format_ranking(self, placement: Placement, ranked: Sequence[Tuple[Article, ArticleScore]]) -> str:
        lines = [f"# {placement.value.capitalize()} placement - {self.today}", ""]
        if not ranked:
            lines.append("_No eligible articles._")
            return "\n".join(lines) + "\n"
        for position, (article, score) in enumerate(ranked, 1):
            lines.append(f"{position}. {self._article_line(article, placement)}")
            lines.append(
                f"   - total {score.total:.3f} (relevance {score.relevance:.2f}, "
                f"recency {score.recency:.2f}, engagement {score.engagement:.2f}, "
                f"quality {score.quality:.2f}, breaking {score.breaking:.0f})"
            )
        return "\n".join(lines) + "\n"

    def format_validation(self, article: Article, result: ValidationResult) -> str:
        lines = [f"# Hero validation - {self.today}", ""]
        lines.append(self._article_line(article, Placement.HERO))
        lines.append("")
        lines.append(f"- Score: {result.score:.0f}/100")
        lines.append(f"- Verdict: {'valid' if result.is_valid else 'not valid'}")
        lines.append(f"- {quality_summary(result)}")
        if result.issues:
            lines.extend(["", "## Issues", ""])
            for issue, recommendation in zip(result.issues, result.recommendations):
                lines.append(f"- [{issue.severity.value}] {issue.display_name}: {recommendation}")
        return "\n".join(lines) + "\n"

    def format_homepage(self, homepage: Homepage, metrics: QualityMetrics) -> str:
        lines = [f"# Homepage - {self.today}", ""]

        lines.extend(["## Hero", ""])
        if homepage.hero:
            lines.append(self._article_line(homepage.hero, Placement.HERO))
            if homepage.hero_validation:
                lines.append(f"_{quality_summary(homepage.hero_validation)}_")
        else:
            lines.append("_No hero article._")

        sections: List[Tuple[str, Placement, Sequence[Article]]] = [
            ("Breaking", Placement.BREAKING, homepage.breaking),
            ("Trending", Placement.TRENDING, homepage.trending),
        ]
        sections.extend(
            (CATEGORY_INFO[category].display_name, Placement.CATEGORY, articles)
            for category, articles in homepage.categories
        )
        sections.append(("Feed", Placement.FEED, homepage.feed))

        for title, placement, articles in sections:
            lines.extend(["", f"## {title}", ""])
            if not articles:
                lines.append("_Nothing to show._")
            for article in articles:
                lines.append(f"- {self._article_line(article, placement)}")

        lines.extend(["", "## Quality", ""])
        lines.append(f"- Grade: {metrics.quality_grade} ({metrics.average_quality_score:.2f})")
        lines.append(f"- Articles shown: {metrics.total_articles}")
        lines.append(f"- Image coverage: {metrics.image_coverage:.0%}")
        lines.append(f"- Verified sources: {metrics.source_verification_rate:.0%}")
        lines.append(f"- Breaking stories: {metrics.breaking_news_count}")
        return "\n".join(lines) + "\n"
