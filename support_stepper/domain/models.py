"""
Domain Layer - Static Data Models

This module defines the core domain model representing the static structure
of knowledge-base articles. These dataclasses are created once at load time
(from the bundled articles or a JSON export) and are never mutated afterwards.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

# Path id reserved for an article's primary step list.
MAIN_PATH = "main"


@dataclass(frozen=True)
class Step:
    """
    A single instruction the agent walks the customer through.

    Attributes:
        id: Unique identifier within the article.
        text: Internal instruction shown to the agent.
        expected_result: What the agent should observe once the step worked.
        say_to_customer: Customer-facing wording for the same instruction.
    """
    id: str
    text: str
    expected_result: Optional[str] = None
    say_to_customer: Optional[str] = None


@dataclass(frozen=True)
class FallbackPath:
    """
    Alternate ordered procedure used when the main steps did not work.

    Attributes:
        id: Unique identifier within the article (never "main").
        condition: When to use this path (e.g., "Customer cannot find the setting").
        steps: Ordered steps of the alternate procedure.
    """
    id: str
    condition: str
    steps: Tuple[Step, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.id == MAIN_PATH:
            raise ValueError(f"Fallback id '{MAIN_PATH}' is reserved for the main path.")


@dataclass(frozen=True)
class Escalation:
    """Where to send the case when no automated path is left."""
    when: str
    target: str


@dataclass(frozen=True)
class Article:
    """
    A knowledge-base procedure.

    Top-level organizational unit. Scored by the retriever (tags, product,
    title) and executed by the StepRunner (steps, then fallbacks).

    Attributes:
        id: Unique key in the knowledge base.
        title: Human-readable title (scored +1 per matching word).
        tags: Short topic labels (scored +3 per matching word).
        product: Product name (scored +2 per matching word).
        summary: One-paragraph description, also used for cross-article fallback matching.
        keywords: Extra matching vocabulary for cross-article fallback matching.
        prechecks: Things to confirm before running the steps.
        steps: The main ordered procedure.
        fallbacks: Alternate procedures, in preference order.
        escalation: Optional escalation target when everything fails.
    """
    id: str
    title: str
    product: str = ""
    summary: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)
    keywords: Tuple[str, ...] = field(default_factory=tuple)
    prechecks: Tuple[str, ...] = field(default_factory=tuple)
    steps: Tuple[Step, ...] = field(default_factory=tuple)
    fallbacks: Tuple[FallbackPath, ...] = field(default_factory=tuple)
    escalation: Optional[Escalation] = None

    def get_fallback(self, fallback_id: str) -> Optional[FallbackPath]:
        return next((f for f in self.fallbacks if f.id == fallback_id), None)

    def steps_for_path(self, path: str) -> Tuple[Step, ...]:
        """Steps for 'main' or a fallback id. Unknown paths have no steps."""
        if path == MAIN_PATH:
            return self.steps
        fallback = self.get_fallback(path)
        return fallback.steps if fallback else ()
