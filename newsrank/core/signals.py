"""
Breaking-news and priority signals.
"""
from enum import Enum

from newsrank.core.article import Article
from newsrank.core.lexicon import Category, DEFAULT_LEXICON, Lexicon
from newsrank.utils.nlp import contains_any


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    # Only set by external alerting; never derived from article text.
    CRITICAL = "critical"


CATEGORY_PRIORITY = {
    Category.TECHNOLOGY: Priority.HIGH,
    Category.BUSINESS: Priority.HIGH,
    Category.POLITICS: Priority.HIGH,
    Category.WORLD: Priority.HIGH,
    Category.HEALTH: Priority.HIGH,
    Category.SCIENCE: Priority.MEDIUM,
    Category.SPORTS: Priority.MEDIUM,
    Category.ENTERTAINMENT: Priority.MEDIUM,
    Category.LOCAL: Priority.LOW,
    Category.GENERAL: Priority.LOW,
}


def _headline_text(article: Article) -> str:
    return f"{article.title} {article.summary}".lower()


def detect_breaking(article: Article, lexicon: Lexicon = DEFAULT_LEXICON) -> bool:
    """
    True if the article is flagged as breaking or its title/summary uses breaking language.
    """
    if article.is_breaking:
        return True
    return contains_any(_headline_text(article), lexicon.breaking_keywords)


def determine_priority(
    article: Article,
    category: Category,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> Priority:
    """
    Priority tier for an article classified into ``category``.

    Args:
        article: The article
        category: Its primary category
        lexicon: Keyword tables

    Returns:
        LOW, MEDIUM or HIGH
    """
    text = _headline_text(article)

    if contains_any(text, lexicon.high_priority_keywords):
        return Priority.HIGH

    if category == Category.TECHNOLOGY and contains_any(text, lexicon.innovation_keywords()):
        return Priority.HIGH

    return CATEGORY_PRIORITY.get(category, Priority.LOW)
