"""
Cross-Article Fallback Matching.

When the failing article has no fallback paths of its own, the StepRunner
asks a FallbackMatcher whether some *other* article covers the reported
failure. The heuristic is a policy: swap the matcher to change it.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..domain.models import Article
from ..retrieval.keyword import normalize
from ..state.models import FailureReason

# Words that carry no meaning for matching a failure note to an article.
STOP_WORDS = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "but", "by", "can", "cant",
    "could", "did", "didnt", "do", "does", "doesnt", "for", "from", "has",
    "have", "i", "in", "is", "it", "its", "me", "my", "no", "not", "of", "on",
    "or", "other", "s", "so", "still", "t", "that", "the", "their", "there",
    "they", "this", "to", "was", "we", "were", "with", "won", "would", "you",
})


class FallbackMatcher(ABC):
    @abstractmethod
    def find(
        self,
        current: Article,
        candidates: Sequence[Article],
        reason_category: FailureReason,
        note: Optional[str],
    ) -> Optional[Article]:
        """
        Returns an article other than `current` that defines at least one
        fallback path and relates to the failure, or None.
        """
        pass


class NoCrossArticleMatcher(FallbackMatcher):
    """Disables cross-article fallbacks."""

    def find(self, current, candidates, reason_category, note) -> Optional[Article]:
        return None


class KeywordFallbackMatcher(FallbackMatcher):
    """
    Token overlap between the failure note and each candidate's summary,
    tags and keywords. Highest overlap wins; ties go to the earlier article
    in knowledge-base order.

    The reason category is not matched: its words ("system", "error",
    "change") occur in unrelated summaries. A failure with no note never
    leaves its article.
    """

    def find(self, current, candidates, reason_category, note) -> Optional[Article]:
        failure_tokens = self._note_tokens(note)
        if not failure_tokens:
            return None

        best: Optional[Article] = None
        best_score = 0
        for article in candidates:
            if article.id == current.id or not article.fallbacks:
                continue
            score = len(failure_tokens & self._article_tokens(article))
            if score > best_score:
                best, best_score = article, score
        return best

    @staticmethod
    def _note_tokens(note: Optional[str]) -> set:
        return set(normalize(note or "")) - STOP_WORDS

    @staticmethod
    def _article_tokens(article: Article) -> set:
        tokens = set(normalize(article.summary))
        for value in (*article.tags, *article.keywords):
            tokens.update(normalize(value))
        return tokens - STOP_WORDS
