"""
Retrieval Provider Interface.

Defines the contract for the "Article Retriever" - the component responsible
for analyzing the agent's issue description and ranking knowledge-base
articles against it. Browsing helpers (lookup, list, filter) are shared by
every implementation and simply delegate to the knowledge base.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from ..domain.models import Article
from ..repositories.knowledge_base import KnowledgeBaseRepository
from ..schemas.results import ScoredMatch, SearchResult


DEFAULT_LOW_CONFIDENCE_THRESHOLD = 9


class ArticleRetriever(ABC):
    def __init__(
        self,
        knowledge_base: KnowledgeBaseRepository,
        low_confidence_threshold: int = DEFAULT_LOW_CONFIDENCE_THRESHOLD,
    ):
        self.knowledge_base = knowledge_base
        # Top scores below this are flagged low confidence
        self.low_confidence_threshold = low_confidence_threshold

    @abstractmethod
    def search(self, query: str, top_n: int = 3) -> SearchResult:
        """
        Ranks articles for the query and returns at most top_n positive matches.
        An empty SearchResult means nothing matched.
        """
        pass

    def find_best_match(self, query: str) -> Optional[Article]:
        result = self.search(query, top_n=1)
        return result.matches[0].article if result.matches else None

    def get_article(self, article_id: str) -> Optional[Article]:
        return self.knowledge_base.get_by_id(article_id)

    def get_all(self) -> List[Article]:
        return self.knowledge_base.get_all()

    def filter(self, substring: str) -> List[Article]:
        """Case-insensitive substring match over title, summary, product and tags."""
        needle = substring.strip().lower()
        if not needle:
            return self.get_all()
        return [
            article
            for article in self.knowledge_base.get_all()
            if any(
                needle in field.lower()
                for field in (article.title, article.summary, article.product, *article.tags)
            )
        ]


class MockArticleRetriever(ArticleRetriever):
    """
    Temporary Stub: Always returns one article (the first in the knowledge
    base unless another id is given) regardless of what the agent types.
    """

    MOCK_SCORE = 10

    def __init__(
        self,
        knowledge_base: KnowledgeBaseRepository,
        article_id: Optional[str] = None,
        low_confidence_threshold: int = DEFAULT_LOW_CONFIDENCE_THRESHOLD,
    ):
        super().__init__(knowledge_base, low_confidence_threshold)
        self.article_id = article_id

    def search(self, query: str, top_n: int = 3) -> SearchResult:
        if self.article_id is not None:
            article = self.knowledge_base.get_by_id(self.article_id)
        else:
            articles = self.knowledge_base.get_all()
            article = articles[0] if articles else None

        if article is None or top_n < 1:
            return SearchResult(query=query)

        return SearchResult(
            query=query,
            matches=[ScoredMatch(article=article, score=self.MOCK_SCORE)],
            top_score=self.MOCK_SCORE,
            low_confidence=self.MOCK_SCORE < self.low_confidence_threshold,
        )
