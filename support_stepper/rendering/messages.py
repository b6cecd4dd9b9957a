"""
User-facing messages.

The core only returns result models; these helpers turn them into the
short texts the side panel shows (banners, warnings, summaries).
"""

from typing import Dict, Optional

from ..domain.models import Article
from ..schemas.results import CompletionSummary, FallbackSelection, SearchResult, StepSnapshot
from ..state.models import FailureReason
from .loader import render
from .templates import Template

REASON_LABELS: Dict[str, str] = {
    FailureReason.CANT_FIND_OPTION.value: "Customer can't find option/button",
    FailureReason.SYSTEM_ERROR.value: "System error message",
    FailureReason.PERMISSION_ISSUE.value: "Permission/access issue",
    FailureReason.NO_CHANGE.value: "Outcome didn't change",
    FailureReason.OTHER.value: "Other",
}


def format_reason(reason: str) -> str:
    """Human-readable label for a failure reason; unknown codes pass through."""
    key = reason.value if isinstance(reason, FailureReason) else reason
    return REASON_LABELS.get(key, key)


def step_card(step: StepSnapshot) -> str:
    return render(Template.STEP_CARD, step=step)


def low_confidence_warning(result: SearchResult, threshold: int) -> Optional[str]:
    if result.is_empty or not result.low_confidence:
        return None
    return render(Template.LOW_CONFIDENCE_WARNING, top_score=result.top_score, threshold=threshold)


def skipped_steps_banner(count: int) -> Optional[str]:
    if count <= 0:
        return None
    return render(Template.SKIPPED_STEPS_BANNER, count=count)


def fallback_notice(selection: FallbackSelection) -> str:
    return render(Template.FALLBACK_NOTICE, selection=selection)


def completion_summary(
    summary: CompletionSummary,
    article: Optional[Article] = None,
    step_texts: Optional[Dict[str, str]] = None,
) -> str:
    """
    `step_texts` maps the ids completed in a session to their text, which
    covers articles left behind by a cross-article switch. Ids it does not
    know are resolved from `article`, and fall back to the raw id.
    """
    texts = dict(step_texts or {})
    if article is not None:
        for step in article.steps:
            texts.setdefault(step.id, step.text)
        for fallback in article.fallbacks:
            for step in fallback.steps:
                texts.setdefault(step.id, step.text)
    completed_texts = [texts.get(step_id, step_id) for step_id in summary.completed_steps]

    return render(
        Template.COMPLETION_SUMMARY,
        summary=summary,
        article=article,
        completed_texts=completed_texts,
        reasons=REASON_LABELS,
    )
