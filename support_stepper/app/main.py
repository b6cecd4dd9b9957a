import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Depends, Query, status
from fastapi.responses import Response

from ..config import settings
from ..domain.models import Article
from ..repositories.session import SessionRepository
from ..rendering import messages
from ..retrieval.provider import ArticleRetriever
from ..schemas.results import BackResult, ContinueResult
from ..services.support_session import SupportSession
from .dependencies import get_retriever, get_session, get_session_repository
from .schemas import (
    ArticleListItem,
    ArticleMatch,
    ContinueRequest,
    CreateSessionResponse,
    FailureRequest,
    FailureResponse,
    FallbackRequest,
    SearchResponse,
    StartRequest,
    StartResponse,
    StepResponse,
    SummaryResponse,
    SwitchResponse,
)

logging.basicConfig(level=settings.LOG_LEVEL)

app = FastAPI(title="Support Stepper")


def _list_item(article: Article) -> ArticleListItem:
    return ArticleListItem(
        id=article.id,
        title=article.title,
        product=article.product,
        summary=article.summary,
        tags=list(article.tags),
    )

# --- Sessions ---

@app.post(
    "/sessions",
    response_model=CreateSessionResponse,
    status_code=status.HTTP_201_CREATED
)
def create_session(
    repo: SessionRepository = Depends(get_session_repository)
):
    """Starts a new session, pre-filling the query from the page scanner if enabled."""
    session = repo.create()
    return CreateSessionResponse(
        session_id=session.session_id,
        initial_query=session.initial_query(),
    )


@app.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(
    session_id: str,
    repo: SessionRepository = Depends(get_session_repository)
):
    if not repo.delete(session_id):
        raise HTTPException(status_code=404, detail="Session not found")

    # For 204, we must explicitly return a Response object with no content
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# --- Knowledge base browsing ---

@app.get("/articles", response_model=List[ArticleListItem])
def list_articles(
    filter: Optional[str] = None,
    retriever: ArticleRetriever = Depends(get_retriever)
):
    articles = retriever.filter(filter) if filter else retriever.get_all()
    return [_list_item(article) for article in articles]


@app.get("/articles/{article_id}")
def get_article(
    article_id: str,
    retriever: ArticleRetriever = Depends(get_retriever)
):
    article = retriever.get_article(article_id)
    if article is None:
        raise HTTPException(status_code=404, detail="Article not found")
    return article


@app.get("/sessions/{session_id}/search", response_model=SearchResponse)
def search(
    q: str = "",
    top_n: Optional[int] = Query(None, ge=0),
    session: SupportSession = Depends(get_session)
):
    result = session.search(q, top_n=top_n)
    threshold = session.retriever.low_confidence_threshold
    return SearchResponse(
        query=result.query,
        matches=[
            ArticleMatch(**_list_item(m.article).model_dump(), score=m.score)
            for m in result.matches
        ],
        top_score=result.top_score,
        low_confidence=result.low_confidence,
        no_results=result.is_empty,
        warning=messages.low_confidence_warning(result, threshold),
    )

# --- Stepping ---

@app.post("/sessions/{session_id}/start", response_model=StartResponse)
def start_article(
    body: StartRequest,
    session: SupportSession = Depends(get_session)
):
    started = session.start(body.article_id)
    if started is None:
        raise HTTPException(status_code=404, detail="Article not found")
    card = messages.step_card(started.current_step) if started.current_step else None
    return StartResponse(**started.model_dump(), card=card)


@app.get("/sessions/{session_id}/step", response_model=StepResponse)
def current_step(session: SupportSession = Depends(get_session)):
    step = session.current_step()
    return StepResponse(
        step=step,
        complete=session.is_complete(),
        card=messages.step_card(step) if step else None,
    )


@app.post("/sessions/{session_id}/continue", response_model=ContinueResult)
def continue_step(
    body: ContinueRequest,
    session: SupportSession = Depends(get_session)
):
    return session.continue_step(expected_step_id=body.expected_step_id)


@app.post("/sessions/{session_id}/back", response_model=BackResult)
def back(session: SupportSession = Depends(get_session)):
    return session.back()

# --- Failures & fallbacks ---

@app.post("/sessions/{session_id}/failures", response_model=FailureResponse)
def report_failure(
    body: FailureRequest,
    session: SupportSession = Depends(get_session)
):
    selection = session.report_failure(body.reason, body.note)
    if selection is None:
        return FailureResponse(selection=None, notice="No article in progress.")
    return FailureResponse(selection=selection, notice=messages.fallback_notice(selection))


@app.post("/sessions/{session_id}/fallback", response_model=SwitchResponse)
def switch_to_fallback(
    body: FallbackRequest,
    session: SupportSession = Depends(get_session)
):
    result = session.switch_to_fallback(body.article_id, body.fallback_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Fallback not found")
    # The banner is shown once per switch
    banner = messages.skipped_steps_banner(session.consume_skipped_count())
    return SwitchResponse(result=result, banner=banner)

# --- Summary & reset ---

@app.get("/sessions/{session_id}/summary", response_model=SummaryResponse)
def summary(session: SupportSession = Depends(get_session)):
    completion = session.summary()
    return SummaryResponse(
        summary=completion,
        text=messages.completion_summary(completion, session.article, session.step_texts),
    )


@app.post("/sessions/{session_id}/reset", status_code=status.HTTP_204_NO_CONTENT)
def reset(session: SupportSession = Depends(get_session)):
    session.reset()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
