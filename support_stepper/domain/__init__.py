"""
Domain Layer - Static Data Models

Defines the core domain model representing the static structure of
knowledge-base articles: Articles, Steps, Fallback Paths and Escalations.
"""

from support_stepper.domain.models import (
    MAIN_PATH,
    Article,
    Escalation,
    FallbackPath,
    Step,
)

__all__ = [
    "MAIN_PATH",
    "Article",
    "Escalation",
    "FallbackPath",
    "Step",
]
