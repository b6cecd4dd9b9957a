"""
Schemas - Structured Results returned by the Retriever and StepRunner.
"""

from support_stepper.schemas.results import (
    BackResult,
    CompletionSummary,
    ContinueResult,
    FallbackSelection,
    FallbackSelectionType,
    ScoredMatch,
    SearchResult,
    StartResult,
    StepSnapshot,
    SwitchResult,
)

__all__ = [
    "BackResult",
    "CompletionSummary",
    "ContinueResult",
    "FallbackSelection",
    "FallbackSelectionType",
    "ScoredMatch",
    "SearchResult",
    "StartResult",
    "StepSnapshot",
    "SwitchResult",
]
