"""
Step Runner - Navigation State Machine

The StepRunner is the deterministic state machine that walks an agent
through one knowledge-base article. It owns a single RunnerState and is
the only thing allowed to mutate it.
-----------------------------------------------

Phases:
    IDLE      -> no article selected (initial phase, and after reset())
    IN_STEPS  -> navigating the active path ("main" or a fallback id)
    COMPLETE  -> current_step_index has reached the end of the active path

The runner never raises for navigation mistakes. Back at step one, continue
past the end or an unknown fallback are reported through result models so
the presentation layer can decide what to show.

The runner keeps no reference to the Article: callers pass it in on every
call, the same way the engine resolves its workflow definition per turn.
"""

import logging
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Callable, Iterable, Optional, Sequence, Tuple

from ..domain.models import MAIN_PATH, Article, Step
from ..schemas.results import (
    BackResult,
    CompletionSummary,
    ContinueResult,
    FallbackSelection,
    FallbackSelectionType,
    StartResult,
    StepSnapshot,
    SwitchResult,
)
from ..state.models import AttemptedPath, FailureReason, FailureRecord, RunnerState
from .fallback import FallbackMatcher, KeywordFallbackMatcher

logger = logging.getLogger(__name__)

ALREADY_AT_FIRST_STEP = "Already at first step"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RunnerPhase(Enum):
    IDLE = auto()
    IN_STEPS = auto()
    COMPLETE = auto()


class StepRunner:
    def __init__(
        self,
        fallback_matcher: Optional[FallbackMatcher] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.fallback_matcher = fallback_matcher or KeywordFallbackMatcher()
        self._clock = clock
        self._state = RunnerState()

    @property
    def state(self) -> RunnerState:
        """A copy of the current state; mutating it has no effect on the runner."""
        return self._state.model_copy(deep=True)

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    def reset(self) -> None:
        self._state = RunnerState()

    def start_article(self, article_id: str, article: Article) -> StartResult:
        """
        Discards any previous session and starts the article's main path.
        A zero-step article is complete immediately.
        """
        self.reset()
        self._state.selected_article_id = article_id
        self._state.active_path = MAIN_PATH
        self._state.current_step_index = 0
        self._state.attempted_paths.append(
            AttemptedPath(path=MAIN_PATH, started_at=self._clock())
        )
        logger.info(f"Started article '{article_id}' ({len(article.steps)} steps)")

        return StartResult(
            total_steps=self.get_total_steps(article),
            current_step=self.get_snapshot(article),
        )

    def phase(self, article: Optional[Article]) -> RunnerPhase:
        if self._state.selected_article_id is None or article is None:
            return RunnerPhase.IDLE
        if self.is_complete(article):
            return RunnerPhase.COMPLETE
        return RunnerPhase.IN_STEPS

    # ==========================================================================
    # Queries
    # ==========================================================================

    def get_steps_for_active_path(self, article: Optional[Article]) -> Tuple[Step, ...]:
        if article is None:
            return ()
        return article.steps_for_path(self._state.active_path)

    def get_total_steps(self, article: Optional[Article]) -> int:
        return len(self.get_steps_for_active_path(article))

    def get_current_step(self, article: Optional[Article]) -> Optional[Step]:
        if self._state.selected_article_id is None:
            return None
        steps = self.get_steps_for_active_path(article)
        if self._state.current_step_index >= len(steps):
            return None
        return steps[self._state.current_step_index]

    def get_snapshot(self, article: Optional[Article]) -> Optional[StepSnapshot]:
        step = self.get_current_step(article)
        if step is None:
            return None
        index = self._state.current_step_index
        total = self.get_total_steps(article)
        return StepSnapshot(
            step_id=step.id,
            step_number=index + 1,
            total_steps=total,
            text=step.text,
            expected_result=step.expected_result,
            say_to_customer=step.say_to_customer,
            is_first=index == 0,
            is_last=index == total - 1,
        )

    def is_complete(self, article: Optional[Article]) -> bool:
        return self._state.current_step_index >= self.get_total_steps(article)

    # ==========================================================================
    # Navigation
    # ==========================================================================

    def continue_step(
        self, article: Optional[Article], expected_step_id: Optional[str] = None
    ) -> ContinueResult:
        """
        Marks the current step completed and advances.

        If `expected_step_id` is given and is no longer the current step, the
        call is a duplicate trigger for a step that was already processed and
        nothing changes.
        """
        total = self.get_total_steps(article)
        current = self.get_current_step(article)
        if current is None:
            return ContinueResult(
                completed=True,
                current_step_index=self._state.current_step_index,
                total_steps=total,
            )

        if expected_step_id is not None and expected_step_id != current.id:
            logger.debug(f"Ignoring stale continue for '{expected_step_id}' (current '{current.id}')")
            return ContinueResult(
                completed=False,
                advanced=False,
                next_step=self.get_snapshot(article),
                current_step_index=self._state.current_step_index,
                total_steps=total,
            )

        self._state.mark_completed(current.id)
        self._state.current_step_index += 1

        completed = self.is_complete(article)
        return ContinueResult(
            completed=completed,
            advanced=True,
            next_step=None if completed else self.get_snapshot(article),
            current_step_index=self._state.current_step_index,
            total_steps=total,
        )

    def back(self) -> BackResult:
        """Steps back once. Completed steps stay completed."""
        if self._state.current_step_index > 0:
            self._state.current_step_index -= 1
            return BackResult(success=True, current_step_index=self._state.current_step_index)
        return BackResult(
            success=False,
            current_step_index=self._state.current_step_index,
            message=ALREADY_AT_FIRST_STEP,
        )

    # ==========================================================================
    # Failures & Fallbacks
    # ==========================================================================

    def record_failure(
        self, step_id: str, reason_category: FailureReason, note: Optional[str] = None
    ) -> FailureRecord:
        failure = FailureRecord(
            step_id=step_id,
            reason_category=reason_category,
            note=note,
            timestamp=self._clock(),
        )
        self._state.failure_history.append(failure)
        logger.info(f"Failure recorded on step '{step_id}': {failure.reason_category.value}")
        return failure

    def select_fallback(
        self,
        article: Article,
        all_articles: Sequence[Article],
        reason_category: FailureReason,
        note: Optional[str] = None,
    ) -> FallbackSelection:
        """
        Decision policy, first match wins:
        1. the article's own first fallback path
        2. another article's first fallback path, picked by the FallbackMatcher
        3. the article's escalation record
        4. a bare escalation (no record)
        """
        if article.fallbacks:
            return FallbackSelection(
                type=FallbackSelectionType.SAME_ARTICLE,
                article=article,
                fallback=article.fallbacks[0],
            )

        target = self.fallback_matcher.find(article, all_articles, reason_category, note)
        if target is not None and target.id != article.id and target.fallbacks:
            logger.info(f"Cross-article fallback from '{article.id}' to '{target.id}'")
            return FallbackSelection(
                type=FallbackSelectionType.CROSS_ARTICLE,
                article=target,
                fallback=target.fallbacks[0],
            )

        return FallbackSelection(
            type=FallbackSelectionType.ESCALATION,
            escalation=article.escalation,
        )

    def switch_to_fallback(
        self,
        fallback_id: str,
        article: Article,
        completed_step_texts: Iterable[str],
    ) -> Optional[SwitchResult]:
        """
        Moves onto a fallback path, skipping the leading steps whose text was
        already completed. Skipping stops at the first novel step, even if a
        later step repeats earlier work.

        Returns None (and changes nothing) if the article has no such fallback.
        """
        fallback = article.get_fallback(fallback_id)
        if fallback is None:
            logger.warning(f"Article '{article.id}' has no fallback '{fallback_id}'")
            return None

        # cross-article switches make the fallback's owner the selected article
        self._state.selected_article_id = article.id
        self._state.active_path = fallback.id
        self._state.current_step_index = 0
        self._state.attempted_paths.append(
            AttemptedPath(path=fallback.id, started_at=self._clock())
        )

        already_done = set(completed_step_texts)
        skipped = 0
        for step in fallback.steps:
            if step.text not in already_done:
                break
            self._state.mark_completed(step.id)
            self._state.current_step_index += 1
            skipped += 1

        self._state.skipped_steps_count = skipped
        logger.info(f"Switched to fallback '{fallback.id}' of '{article.id}', skipped {skipped} step(s)")

        return SwitchResult(
            fallback_id=fallback.id,
            article_id=article.id,
            skipped_count=skipped,
            total_steps=len(fallback.steps),
            completed=self.is_complete(article),
            current_step=self.get_snapshot(article),
        )

    def consume_skipped_count(self) -> int:
        """Returns the skipped count of the last switch once, then clears it."""
        skipped = self._state.skipped_steps_count
        self._state.skipped_steps_count = 0
        return skipped

    # ==========================================================================
    # Summary
    # ==========================================================================

    def get_completion_summary(self) -> CompletionSummary:
        state = self.state
        return CompletionSummary(
            article_id=state.selected_article_id,
            completed_steps=state.completed_step_ids,
            failure_history=state.failure_history,
            attempted_paths=state.attempted_paths,
            completed_at=self._clock(),
        )
