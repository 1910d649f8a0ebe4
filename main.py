"""Tricheck — three-compartment news verification service.

FastAPI application entry-point.
"""

from __future__ import annotations

import logging
import secrets
import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from engine.errors import CollaboratorUnavailable, InvalidInput, MalformedJudgment
from engine.judgment import build_judge
from engine.pipeline import run_pipeline
from schemas.request import AnalyzeRequest, NewsSearchRequest
from schemas.response import ErrorResponse, NewsSearchResponse, VerificationReport
from services.news_search import build_searcher

VERSION = "0.3.0"

# ── Logging ────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s | %(name)-30s | %(levelname)-7s | %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger("tricheck")


# ── Internal-token auth dependency ─────────────────────────────────────

async def verify_internal_token(
    x_internal_token: str | None = Header(default=None),
) -> None:
    """Reject requests that don't carry the shared internal token.

    Skipped when ``INTERNAL_TOKEN`` is not configured (dev mode).
    """
    expected = settings.internal_token
    if not expected:
        return  # no token configured → open access (dev only)
    if not x_internal_token or not secrets.compare_digest(x_internal_token, expected):
        raise HTTPException(status_code=401, detail="Invalid or missing internal token.")


# ── Lifespan ───────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.searcher = build_searcher()
    app.state.judge = build_judge()
    logger.info(
        "Tricheck starting — search=%s judge=%s feed_signal=%s auth=%s",
        "enabled" if app.state.searcher else "disabled",
        "enabled" if app.state.judge else "disabled",
        settings.feed_signal_enabled,
        "enabled" if settings.internal_token else "disabled (dev)",
    )
    yield
    logger.info("Tricheck shutting down.")


# ── App ────────────────────────────────────────────────────────────────

app = FastAPI(
    title="Tricheck",
    description="Heuristic news verification: relatability, legitimacy and trustworthiness.",
    version=VERSION,
    lifespan=lifespan,
)

# Parse allowed_origins (comma-separated string → list)
_origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error mapping ──────────────────────────────────────────────────────

@app.exception_handler(InvalidInput)
async def _invalid_input(request: Request, exc: InvalidInput) -> JSONResponse:  # noqa: ARG001
    return JSONResponse(status_code=422, content=ErrorResponse(error=exc.kind, detail=exc.message).model_dump())


@app.exception_handler(MalformedJudgment)
async def _malformed_judgment(request: Request, exc: MalformedJudgment) -> JSONResponse:  # noqa: ARG001
    logger.error("Analysis failed: %s", exc)
    return JSONResponse(status_code=502, content=ErrorResponse(error=exc.kind, detail=exc.message).model_dump())


@app.exception_handler(CollaboratorUnavailable)
async def _collaborator_unavailable(request: Request, exc: CollaboratorUnavailable) -> JSONResponse:  # noqa: ARG001
    return JSONResponse(status_code=503, content=ErrorResponse(error=exc.kind, detail=exc.message).model_dump())


# ── Routes ─────────────────────────────────────────────────────────────

@app.get("/health")
async def health(request: Request):
    return {
        "status": "ok",
        "engine": "tricheck",
        "version": VERSION,
        "outlet_search": getattr(request.app.state, "searcher", None) is not None,
        "narrative_judgment": getattr(request.app.state, "judge", None) is not None,
        "feed_signal": settings.feed_signal_enabled,
    }


@app.post(
    "/verify",
    response_model=VerificationReport,
    responses={
        401: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Verify news content",
    description="Scores the submitted text for relatability, legitimacy and trustworthiness "
    "and returns the combined verdict.",
    dependencies=[Depends(verify_internal_token)],
)
async def verify(payload: AnalyzeRequest, request: Request) -> VerificationReport:
    logger.info("Verifying content: length=%d has_url=%s", len(payload.text), bool(payload.source_url))
    try:
        return await run_pipeline(
            payload.text,
            source_url=payload.source_url,
            searcher=getattr(request.app.state, "searcher", None),
            judge=getattr(request.app.state, "judge", None),
            feed_signal_enabled=settings.feed_signal_enabled,
            timeout=settings.collaborator_timeout,
            article_threshold=settings.article_match_threshold,
        )
    except (InvalidInput, MalformedJudgment):
        raise
    except Exception as exc:
        logger.exception("Pipeline failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.post(
    "/news/search",
    response_model=NewsSearchResponse,
    responses={503: {"model": ErrorResponse}},
    summary="Search reference outlets",
    dependencies=[Depends(verify_internal_token)],
)
async def news_search(payload: NewsSearchRequest, request: Request) -> NewsSearchResponse:
    searcher = getattr(request.app.state, "searcher", None)
    if searcher is None:
        raise CollaboratorUnavailable("Outlet search is not configured.")
    articles, total = await searcher.search_sources(payload.sources, payload.query)
    return NewsSearchResponse(articles=articles, total_results=total)


# ── Dev runner ─────────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        reload=True,
    )
