"""
Concurrent batch processing of article pools.
"""
import asyncio
import logging
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar, Union

from tqdm import tqdm

from newsrank.core.article import Article, utcnow
from newsrank.core.classifier import CategoryClassifier, ClassificationResult
from newsrank.core.placement import ArticleScore, Placement, score_article

logger = logging.getLogger(__name__)

MAX_CONCURRENT_TASKS = 8

T = TypeVar('T')


class BatchProcessor:
    """
    Runs per-article work in worker threads.

    Articles are independent, so they are processed in any order; results
    always come back in pool order.
    """
    def __init__(
        self,
        classifier: Optional[CategoryClassifier] = None,
        max_concurrent: int = MAX_CONCURRENT_TASKS,
        show_progress: bool = True,
    ):
        self.classifier = classifier or CategoryClassifier()
        self.max_concurrent = max(1, max_concurrent)
        self.show_progress = show_progress

    async def _map(self, func: Callable[[Article], T], articles: Sequence[Article], desc: str) -> List[T]:
        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def run_with_semaphore(index: int, article: Article) -> Tuple[int, T]:
            async with semaphore:
                result = await asyncio.to_thread(func, article)
                return index, result

        tasks = [run_with_semaphore(i, article) for i, article in enumerate(articles)]
        results: List[Optional[T]] = [None] * len(tasks)

        for task in tqdm(
            asyncio.as_completed(tasks),
            total=len(tasks),
            desc=desc,
            disable=not self.show_progress,
        ):
            index, result = await task
            results[index] = result

        return results

    async def classify_articles(self, articles: Sequence[Article]) -> List[ClassificationResult]:
        """
        Classify every article of the pool.

        Args:
            articles: Article pool

        Returns:
            One ClassificationResult per article, in pool order
        """
        logger.debug(f"Classifying {len(articles)} articles (max_concurrent={self.max_concurrent})")
        return await self._map(self.classifier.classify, articles, "Classifying articles")

    async def score_articles(
        self,
        articles: Sequence[Article],
        placement: Union[Placement, str],
        now: Optional[datetime] = None,
    ) -> List[ArticleScore]:
        """
        Placement scores for every article of the pool, in pool order.

        Raises:
            ValueError: for an unknown placement name
        """
        placement = Placement.parse(placement)
        now = now or utcnow()
        return await self._map(
            lambda article: score_article(article, placement, now),
            articles,
            f"Scoring for {placement.value}",
        )
