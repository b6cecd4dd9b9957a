"""
State Layer - Runtime Data Models

This module defines the runtime state model that tracks the agent's journey
through one knowledge-base article: the active path, the position on it,
what has been completed, and what went wrong along the way.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Set

from pydantic import BaseModel, Field, PrivateAttr

from ..domain.models import MAIN_PATH


class FailureReason(str, Enum):
    """
    Fixed set of reasons an agent can give when a step did not work.
    """
    CANT_FIND_OPTION = "cant-find-option"
    SYSTEM_ERROR = "system-error"
    PERMISSION_ISSUE = "permission-issue"
    NO_CHANGE = "no-change"
    OTHER = "other"


class FailureRecord(BaseModel):
    step_id: str
    reason_category: FailureReason
    note: Optional[str] = None
    timestamp: datetime


class AttemptedPath(BaseModel):
    path: str
    started_at: datetime


class RunnerState(BaseModel):
    """
    Navigation state for a single troubleshooting session.

    `completed_step_ids` is an ordered set: a list that keeps insertion order
    for the summary, backed by a private membership index.
    """
    selected_article_id: Optional[str] = None
    active_path: str = MAIN_PATH
    current_step_index: int = Field(default=0, ge=0)
    completed_step_ids: List[str] = Field(default_factory=list)
    attempted_paths: List[AttemptedPath] = Field(default_factory=list)
    failure_history: List[FailureRecord] = Field(default_factory=list)
    skipped_steps_count: int = Field(default=0, ge=0)

    _completed_index: Set[str] = PrivateAttr(default_factory=set)

    def model_post_init(self, __context) -> None:
        self._completed_index = set(self.completed_step_ids)

    def mark_completed(self, step_id: str) -> bool:
        """Adds step_id once. Returns False if it was already completed."""
        if step_id in self._completed_index:
            return False
        self._completed_index.add(step_id)
        self.completed_step_ids.append(step_id)
        return True

    def is_step_completed(self, step_id: str) -> bool:
        return step_id in self._completed_index
