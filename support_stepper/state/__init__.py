"""
State Layer - Runtime Data Models

Defines the runtime state model that tracks agent progress through
a knowledge-base article, including failures and attempted paths.
"""

from support_stepper.state.models import (
    AttemptedPath,
    FailureReason,
    FailureRecord,
    RunnerState,
)

__all__ = [
    "AttemptedPath",
    "FailureReason",
    "FailureRecord",
    "RunnerState",
]
