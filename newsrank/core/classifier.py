"""
Keyword-based article classification for newsrank.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from newsrank.core.article import Article
from newsrank.core.lexicon import Category, DEFAULT_LEXICON, Lexicon
from newsrank.core.signals import Priority, detect_breaking, determine_priority
from newsrank.utils.nlp import count_matches, count_occurrences

logger = logging.getLogger(__name__)

# Field weights for the category score
TITLE_WEIGHT = 0.4
CONTENT_WEIGHT = 0.3
SUMMARY_WEIGHT = 0.2
TAGS_WEIGHT = 0.1

# Scores at or below this are treated as noise
MIN_CATEGORY_SCORE = 0.1
MAX_ALTERNATIVES = 3

# Categories whose articles get a subcategory
SUBCATEGORY_PARENTS = (Category.TECHNOLOGY, Category.BUSINESS, Category.SCIENCE)


@dataclass(frozen=True)
class ClassificationResult:
    primary_category: Category
    subcategory: Optional[str]
    confidence: float
    alternatives: Tuple[Tuple[Category, float], ...]
    is_breaking: bool
    priority: Priority

    def to_dict(self) -> Dict[str, Any]:
        return {
            'primary_category': self.primary_category.value,
            'subcategory': self.subcategory,
            'confidence': round(self.confidence, 4),
            'alternatives': [
                {'category': category.value, 'score': round(score, 4)}
                for category, score in self.alternatives
            ],
            'is_breaking': self.is_breaking,
            'priority': self.priority.value,
        }


class CategoryClassifier:
    """
    Scores articles against every category of a lexicon.

    The classifier holds no state besides its lexicon, so one instance can be
    shared freely between threads.
    """
    def __init__(self, lexicon: Lexicon = DEFAULT_LEXICON):
        self.lexicon = lexicon

    def _field_ratio(self, text: str, keywords: Tuple[str, ...]) -> float:
        if not keywords or not text:
            return 0.0
        return min(1.0, count_matches(text, keywords) / len(keywords))

    def _tags_ratio(self, tags: Tuple[str, ...], keywords: Tuple[str, ...]) -> float:
        # Each tag is matched on its own so keywords never span two tags
        if not keywords or not tags:
            return 0.0
        lowered = [tag.lower() for tag in tags]
        found = [keyword for keyword in keywords if any(keyword in tag for tag in lowered)]
        return min(1.0, len(found) / len(keywords))

    def score_category(self, article: Article, category: Category) -> float:
        """
        Weighted keyword-match score of an article for one category.

        Args:
            article: The article to score
            category: Category to score against

        Returns:
            Score between 0.0 and 1.0
        """
        keywords = self.lexicon.keywords_for(category)
        if not keywords:
            return 0.0

        score = (
            self._field_ratio(article.title, keywords) * TITLE_WEIGHT
            + self._field_ratio(article.content, keywords) * CONTENT_WEIGHT
            + self._field_ratio(article.summary, keywords) * SUMMARY_WEIGHT
            + self._tags_ratio(article.tags, keywords) * TAGS_WEIGHT
        )
        return min(1.0, max(0.0, score))

    def classify(self, article: Article) -> ClassificationResult:
        """
        Classify an article into a primary category.

        Args:
            article: The article to classify

        Returns:
            ClassificationResult; "general" with zero confidence when nothing matches
        """
        scores: List[Tuple[Category, float]] = []
        for category in Category:
            score = self.score_category(article, category)
            if score > MIN_CATEGORY_SCORE:
                scores.append((category, score))

        # sorted() is stable, so enumeration order settles ties
        scores = sorted(scores, key=lambda item: item[1], reverse=True)
        is_breaking = detect_breaking(article, self.lexicon)

        if not scores:
            logger.debug(f"No category cleared the noise floor for article {article.id!r}")
            return ClassificationResult(
                primary_category=Category.GENERAL,
                subcategory=None,
                confidence=0.0,
                alternatives=(),
                is_breaking=is_breaking,
                priority=determine_priority(article, Category.GENERAL, self.lexicon),
            )

        primary, confidence = scores[0]
        return ClassificationResult(
            primary_category=primary,
            subcategory=self.resolve_subcategory(article, primary),
            confidence=confidence,
            alternatives=tuple(scores[1:1 + MAX_ALTERNATIVES]),
            is_breaking=is_breaking,
            priority=determine_priority(article, primary, self.lexicon),
        )

    def resolve_subcategory(self, article: Article, category: Category) -> Optional[str]:
        """
        Pick the subcategory whose keywords occur most often in the article.

        Occurrences are counted, not distinct matches, so long articles
        favour whichever subcategory they mention repeatedly.

        Args:
            article: The article
            category: Its primary category

        Returns:
            Subcategory display name or None
        """
        if category not in SUBCATEGORY_PARENTS:
            return None

        text = f"{article.title} {article.summary} {article.content}".lower()

        best_name = None
        best_count = 0
        for subcategory in self.lexicon.subcategories_for(category):
            count = count_occurrences(text, subcategory.keywords)
            if count > best_count:
                best_name, best_count = subcategory.display_name, count

        return best_name

    def subcategories_for(self, category: Category) -> List[str]:
        return [sub.display_name for sub in self.lexicon.subcategories_for(category)]

    def validate_categorization(self, article: Article, expected: Category) -> bool:
        """
        True if the article is confidently classified as ``expected``.
        """
        result = self.classify(article)
        return result.primary_category == expected and result.confidence > 0.5

    def category_statistics(self, articles: Iterable[Article]) -> Dict[Category, int]:
        """
        Count articles per primary category.
        """
        statistics = {category: 0 for category in Category}
        for article in articles:
            statistics[self.classify(article).primary_category] += 1
        return statistics

    def subcategory_statistics(self, articles: Iterable[Article], category: Category) -> Dict[str, int]:
        """
        Count resolved subcategories among articles classified into ``category``.
        """
        statistics = {name: 0 for name in self.subcategories_for(category)}
        for article in articles:
            if self.classify(article).primary_category != category:
                continue
            subcategory = self.resolve_subcategory(article, category)
            if subcategory:
                statistics[subcategory] += 1
        return statistics


def classify(article: Article, lexicon: Lexicon = DEFAULT_LEXICON) -> ClassificationResult:
    """Classify one article with a throwaway classifier."""
    return CategoryClassifier(lexicon).classify(article)
