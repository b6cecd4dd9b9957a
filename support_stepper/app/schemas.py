"""
API Layer - Request/Response Schemas

Pydantic models for API request and response validation. Core result
models are reused as-is; these add the request bodies and the rendered
messages the side panel displays next to them.
"""

from typing import List, Optional

from pydantic import BaseModel

from ..schemas.results import (
    CompletionSummary,
    FallbackSelection,
    StartResult,
    StepSnapshot,
    SwitchResult,
)
from ..state.models import FailureReason


class CreateSessionResponse(BaseModel):
    session_id: str
    initial_query: str = ""


class ArticleListItem(BaseModel):
    id: str
    title: str
    product: str
    summary: str
    tags: List[str]


class ArticleMatch(ArticleListItem):
    score: int


class SearchResponse(BaseModel):
    query: str
    matches: List[ArticleMatch]
    top_score: int
    low_confidence: bool
    no_results: bool
    warning: Optional[str] = None


class StartRequest(BaseModel):
    article_id: str


class StartResponse(StartResult):
    card: Optional[str] = None


class StepResponse(BaseModel):
    step: Optional[StepSnapshot] = None
    complete: bool
    card: Optional[str] = None


class ContinueRequest(BaseModel):
    # The step the agent clicked "Continue" on; protects against double clicks.
    expected_step_id: Optional[str] = None


class FailureRequest(BaseModel):
    reason: FailureReason
    note: Optional[str] = None


class FailureResponse(BaseModel):
    selection: Optional[FallbackSelection] = None
    notice: str


class FallbackRequest(BaseModel):
    article_id: str
    fallback_id: str


class SwitchResponse(BaseModel):
    result: SwitchResult
    banner: Optional[str] = None


class SummaryResponse(BaseModel):
    summary: CompletionSummary
    text: str
