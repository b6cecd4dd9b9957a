"""
Dependency Injection Wiring (Composition Root).

This module acts as the central "container" for the application's services.
It is responsible for:
1. Instantiating the shared read-only services (Knowledge Base, Retriever).
2. Building a fresh SupportSession (own StepRunner, own scanner) per session.
3. Managing the lifecycle of the shared objects using @lru_cache to ensure
   they are created only once per application process.

Tests swap any of these through `app.dependency_overrides`.
"""

from functools import lru_cache
from fastapi import Depends, HTTPException

from ..config import settings
from ..execution.fallback import FallbackMatcher, KeywordFallbackMatcher, NoCrossArticleMatcher
from ..execution.runner import StepRunner
from ..repositories.knowledge_base import (
    InMemoryKnowledgeBase,
    KnowledgeBaseRepository,
    StaticKnowledgeBase,
    load_articles_from_json,
)
from ..repositories.session import InMemorySessionRepository, SessionRepository
from ..retrieval.keyword import KeywordArticleRetriever
from ..retrieval.provider import ArticleRetriever, MockArticleRetriever
from ..scanners.page_scanner import PageContent, create_page_scanner
from ..services.exceptions import SessionNotFoundError
from ..services.support_session import SupportSession

# Knowledge Base (Singleton)
@lru_cache()
def get_knowledge_base() -> KnowledgeBaseRepository:
    if settings.KNOWLEDGE_BASE_PATH:
        return InMemoryKnowledgeBase(load_articles_from_json(settings.KNOWLEDGE_BASE_PATH))
    return StaticKnowledgeBase()

# The Retriever (Singleton)
@lru_cache()
def get_retriever() -> ArticleRetriever:
    knowledge_base = get_knowledge_base()
    if settings.RETRIEVAL_PROVIDER == "mock":
        return MockArticleRetriever(knowledge_base)
    return KeywordArticleRetriever(
        knowledge_base, low_confidence_threshold=settings.LOW_CONFIDENCE_THRESHOLD
    )

# Fallback policy (Singleton, stateless)
@lru_cache()
def get_fallback_matcher() -> FallbackMatcher:
    if settings.CROSS_ARTICLE_FALLBACK:
        return KeywordFallbackMatcher()
    return NoCrossArticleMatcher()


def build_session(session_id: str) -> SupportSession:
    """One runner and one scanner per session; nothing mutable is shared."""
    scanner = create_page_scanner(
        settings.PAGE_SCANNER,
        content=PageContent(text=settings.PAGE_SCAN_TEXT) if settings.PAGE_SCAN_TEXT else None,
        enabled=settings.PAGE_SCAN_ENABLED,
    )
    return SupportSession(
        session_id=session_id,
        knowledge_base=get_knowledge_base(),
        retriever=get_retriever(),
        scanner=scanner,
        runner=StepRunner(fallback_matcher=get_fallback_matcher()),
        top_n=settings.DEFAULT_TOP_N,
    )

# Session Repository (Singleton)
# Note: In-memory storage must be a singleton so sessions survive across requests!
@lru_cache()
def get_session_repository() -> SessionRepository:
    return InMemorySessionRepository(factory=build_session)


def get_session(
    session_id: str,
    repo: SessionRepository = Depends(get_session_repository),
) -> SupportSession:
    try:
        return repo.require(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
