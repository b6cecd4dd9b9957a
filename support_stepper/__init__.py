"""
Support Stepper

Guides a support agent through a knowledge-base procedure one step at a
time, records failures, and reroutes to fallback procedures. Combines a
deterministic keyword retriever with a navigation state machine.
"""

from support_stepper.domain import (
    MAIN_PATH,
    Article,
    Escalation,
    FallbackPath,
    Step,
)
from support_stepper.state import (
    AttemptedPath,
    FailureReason,
    FailureRecord,
    RunnerState,
)
from support_stepper.schemas import (
    FallbackSelection,
    FallbackSelectionType,
    ScoredMatch,
    SearchResult,
    StepSnapshot,
)
from support_stepper.execution import (
    KeywordFallbackMatcher,
    RunnerPhase,
    StepRunner,
)

__all__ = [
    # Domain Layer
    "MAIN_PATH",
    "Article",
    "Escalation",
    "FallbackPath",
    "Step",
    # State Layer
    "AttemptedPath",
    "FailureReason",
    "FailureRecord",
    "RunnerState",
    # Schemas
    "FallbackSelection",
    "FallbackSelectionType",
    "ScoredMatch",
    "SearchResult",
    "StepSnapshot",
    # Execution Layer
    "KeywordFallbackMatcher",
    "RunnerPhase",
    "StepRunner",
]
