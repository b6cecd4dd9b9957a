"""
Support Session - Application Orchestration Layer

A SupportSession is the explicit context object for one troubleshooting
session. It wires the knowledge base, retriever, page scanner and step
runner together, keeps the active Article at hand, and remembers the text
of every step the agent completed so fallback switches can skip repeated
work. Nothing here is global: one session, one runner, discarded on reset.
"""

import logging
from typing import Dict, List, Optional

from ..domain.models import Article
from ..execution.runner import StepRunner
from ..repositories.knowledge_base import KnowledgeBaseRepository
from ..retrieval.provider import ArticleRetriever
from ..scanners.page_scanner import PageScanner
from ..schemas.results import (
    BackResult,
    CompletionSummary,
    ContinueResult,
    FallbackSelection,
    FallbackSelectionType,
    SearchResult,
    StartResult,
    StepSnapshot,
    SwitchResult,
)
from ..state.models import FailureReason, FailureRecord

logger = logging.getLogger(__name__)


class SupportSession:
    def __init__(
        self,
        session_id: str,
        knowledge_base: KnowledgeBaseRepository,
        retriever: ArticleRetriever,
        scanner: PageScanner,
        runner: Optional[StepRunner] = None,
        top_n: int = 3,
    ):
        self.session_id = session_id
        self.knowledge_base = knowledge_base
        self.retriever = retriever
        self.scanner = scanner
        self.runner = runner or StepRunner()
        self.top_n = top_n

        self.article: Optional[Article] = None
        self.completed_step_texts: List[str] = []
        # Completed step id -> text, across every article visited this session
        self.step_texts: Dict[str, str] = {}
        self.last_failure: Optional[FailureRecord] = None

    # --- Search ---

    def initial_query(self) -> str:
        """Text from the scanned page, or "" when scanning is off or fails."""
        try:
            content = self.scanner.scan()
        except Exception as e:
            logger.warning(f"Page scan failed for session {self.session_id}: {e}")
            return ""
        return content.text.strip() if content else ""

    def search(self, query: str, top_n: Optional[int] = None) -> SearchResult:
        return self.retriever.search(query, top_n=self.top_n if top_n is None else top_n)

    # --- Navigation ---

    def start(self, article_id: str) -> Optional[StartResult]:
        """Starts the article's main path. Returns None for an unknown id."""
        article = self.knowledge_base.get_by_id(article_id)
        if article is None:
            logger.warning(f"Session {self.session_id}: article '{article_id}' not found")
            return None

        self.article = article
        self.completed_step_texts = []
        self.step_texts = {}
        self.last_failure = None
        return self.runner.start_article(article_id, article)

    def current_step(self) -> Optional[StepSnapshot]:
        return self.runner.get_snapshot(self.article)

    def is_complete(self) -> bool:
        return self.article is not None and self.runner.is_complete(self.article)

    def continue_step(self, expected_step_id: Optional[str] = None) -> ContinueResult:
        step = self.runner.get_current_step(self.article)
        result = self.runner.continue_step(self.article, expected_step_id=expected_step_id)
        if result.advanced and step is not None:
            self._remember(step.id, step.text)
        return result

    def back(self) -> BackResult:
        return self.runner.back()

    # --- Failures ---

    def report_failure(
        self, reason: FailureReason, note: Optional[str] = None
    ) -> Optional[FallbackSelection]:
        """
        Records a failure against the current step (the last step once the
        path is complete) and decides where to go next.

        Returns None when no article is active.
        """
        if self.article is None:
            return None

        step = self.runner.get_current_step(self.article)
        if step is None:
            steps = self.runner.get_steps_for_active_path(self.article)
            step_id = steps[-1].id if steps else ""
        else:
            step_id = step.id

        self.last_failure = self.runner.record_failure(step_id, reason, note)
        return self.runner.select_fallback(
            self.article, self.knowledge_base.get_all(), reason, note
        )

    def take_fallback(self, selection: FallbackSelection) -> Optional[SwitchResult]:
        """
        Applies a same-article or cross-article selection. Escalations are
        terminal and return None.
        """
        if selection.type == FallbackSelectionType.ESCALATION:
            return None
        if selection.article is None or selection.fallback is None:
            return None
        return self._switch(selection.article, selection.fallback.id)

    def switch_to_fallback(self, article_id: str, fallback_id: str) -> Optional[SwitchResult]:
        """Switches by id. Returns None for an unknown article or fallback."""
        article = self.knowledge_base.get_by_id(article_id)
        if article is None:
            return None
        return self._switch(article, fallback_id)

    def _switch(self, article: Article, fallback_id: str) -> Optional[SwitchResult]:
        result = self.runner.switch_to_fallback(fallback_id, article, self.completed_step_texts)
        if result is not None:
            self.article = article
            fallback = article.get_fallback(fallback_id)
            for step in fallback.steps[:result.skipped_count]:
                self._remember(step.id, step.text)
        return result

    def consume_skipped_count(self) -> int:
        return self.runner.consume_skipped_count()

    # --- Summary & lifecycle ---

    def summary(self) -> CompletionSummary:
        return self.runner.get_completion_summary()

    def reset(self) -> None:
        logger.info(f"Session {self.session_id} reset")
        self.runner.reset()
        self.article = None
        self.completed_step_texts = []
        self.step_texts = {}
        self.last_failure = None

    def _remember(self, step_id: str, text: str) -> None:
        if text not in self.completed_step_texts:
            self.completed_step_texts.append(text)
        self.step_texts.setdefault(step_id, text)
