"""
Schemas - Structured Results returned by the core

The core never raises for user-input-shaped conditions (missing article,
back at step one, continue past the end, no match). Instead every operation
returns one of these models, and the presentation layer decides what to show.
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from ..domain.models import Article, Escalation, FallbackPath
from ..state.models import AttemptedPath, FailureRecord


class ScoredMatch(BaseModel):
    article: Article
    score: int = Field(..., ge=0)


class SearchResult(BaseModel):
    """
    Ranked retrieval outcome.

    An empty match list ("no match") is a different condition from
    `low_confidence`, which only applies when something matched.
    """
    query: str
    matches: List[ScoredMatch] = Field(default_factory=list)
    top_score: int = 0
    low_confidence: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.matches


class StepSnapshot(BaseModel):
    """What the UI needs to render the current step card."""
    step_id: str
    step_number: int
    total_steps: int
    text: str
    expected_result: Optional[str] = None
    say_to_customer: Optional[str] = None
    is_first: bool
    is_last: bool


class StartResult(BaseModel):
    total_steps: int
    current_step: Optional[StepSnapshot] = None


class ContinueResult(BaseModel):
    completed: bool
    advanced: bool = False
    next_step: Optional[StepSnapshot] = None
    current_step_index: int = 0
    total_steps: int = 0


class BackResult(BaseModel):
    success: bool
    current_step_index: int = 0
    message: Optional[str] = None


class FallbackSelectionType(str, Enum):
    SAME_ARTICLE = "same-article"
    CROSS_ARTICLE = "cross-article"
    ESCALATION = "escalation"


class FallbackSelection(BaseModel):
    """
    Outcome of the fallback decision policy.

    same-article / cross-article carry `fallback` (and `article` for the
    article that owns it). escalation carries `escalation`, which may be None
    when the article defines nothing and the caller shows a generic message.
    """
    type: FallbackSelectionType
    article: Optional[Article] = None
    fallback: Optional[FallbackPath] = None
    escalation: Optional[Escalation] = None


class SwitchResult(BaseModel):
    fallback_id: str
    article_id: str
    skipped_count: int
    total_steps: int
    completed: bool
    current_step: Optional[StepSnapshot] = None


class CompletionSummary(BaseModel):
    article_id: Optional[str] = None
    completed_steps: List[str] = Field(default_factory=list)
    failure_history: List[FailureRecord] = Field(default_factory=list)
    attempted_paths: List[AttemptedPath] = Field(default_factory=list)
    completed_at: datetime
