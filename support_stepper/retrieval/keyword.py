"""
Keyword-based article retrieval.

Deterministic weighted token matching, no embeddings:
- +3 for every tag word found in the query
- +2 for every product-name word found in the query
- +1 for every title word found in the query

Each word of a multi-word field counts on its own, and the same word
scores again if it appears in more than one field.
"""

import logging
import re
from typing import Iterable, List, Set

from ..domain.models import Article
from ..schemas.results import ScoredMatch, SearchResult
from .provider import ArticleRetriever

logger = logging.getLogger(__name__)

TAG_WEIGHT = 3
PRODUCT_WEIGHT = 2
TITLE_WEIGHT = 1

# Anything that is not a letter, a digit or whitespace (underscore included).
_PUNCTUATION = re.compile(r"[^\w\s]|_")


def normalize(text: str) -> List[str]:
    """Lowercase, replace punctuation with spaces, split into tokens."""
    if not text:
        return []
    return _PUNCTUATION.sub(" ", text.lower()).split()


def _count_matches(fields: Iterable[str], query_tokens: Set[str]) -> int:
    return sum(
        1
        for value in fields
        for token in normalize(value)
        if token in query_tokens
    )


def score_article(article: Article, query_tokens: Set[str]) -> int:
    return (
        TAG_WEIGHT * _count_matches(article.tags, query_tokens)
        + PRODUCT_WEIGHT * _count_matches([article.product], query_tokens)
        + TITLE_WEIGHT * _count_matches([article.title], query_tokens)
    )


class KeywordArticleRetriever(ArticleRetriever):
    """
    Scores every article in the knowledge base against the query.
    """

    def search(self, query: str, top_n: int = 3) -> SearchResult:
        query_tokens = set(normalize(query))
        if not query_tokens or top_n < 1:
            return SearchResult(query=query)

        scored = [
            ScoredMatch(article=article, score=score_article(article, query_tokens))
            for article in self.knowledge_base.get_all()
        ]
        # sorted() is stable, so equal scores keep knowledge-base order
        ranked = sorted(scored, key=lambda m: m.score, reverse=True)
        matches = [m for m in ranked[:top_n] if m.score > 0]

        if not matches:
            logger.warning(f"No article matched query '{query}'")
            return SearchResult(query=query)

        top_score = matches[0].score
        scores = ", ".join(f"{m.article.id}={m.score}" for m in matches)
        logger.debug(f"Scores for '{query}': {scores}")
        return SearchResult(
            query=query,
            matches=matches,
            top_score=top_score,
            low_confidence=top_score < self.low_confidence_threshold,
        )
