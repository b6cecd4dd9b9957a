"""
Execution Layer - Step Navigation

Defines the StepRunner (deterministic navigation state machine) and the
FallbackMatcher policies it consults when a step fails.
"""

from support_stepper.execution.fallback import (
    FallbackMatcher,
    KeywordFallbackMatcher,
    NoCrossArticleMatcher,
)
from support_stepper.execution.runner import RunnerPhase, StepRunner


__all__ = [
    "FallbackMatcher",
    "KeywordFallbackMatcher",
    "NoCrossArticleMatcher",
    "RunnerPhase",
    "StepRunner",
]
