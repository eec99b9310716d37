"""
FastAPI service exposing quiz sessions.

Endpoints:
  POST /sessions                  - Start a session for a mode (loads its data)
  GET  /sessions/{id}             - Totals, running stats and guess history
  POST /sessions/{id}/guesses     - Submit one guess
  POST /sessions/{id}/reset       - Clear guesses, keep the dataset
  GET  /health                    - Liveness + open session count
"""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from city_quiz.config import get_settings
from city_quiz.models import (
    CreateSessionRequest,
    GuessRequest,
    GuessResult,
    HealthResponse,
    SessionSummary,
    SurfaceSize,
)
from city_quiz.session import QuizSession

logger = logging.getLogger(__name__)


# ── Lifespan ──────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Sessions live in memory for the lifetime of the process."""
    app.state.sessions = OrderedDict()
    logger.info("Quiz API started")
    yield
    app.state.sessions.clear()
    logger.info("Quiz API shut down.")


# ── App ───────────────────────────────────────────────────────────────

app = FastAPI(
    title="City Quiz API",
    description="Name as many cities as you can",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Helpers ───────────────────────────────────────────────────────────

def _sessions(request: Request) -> OrderedDict[str, QuizSession]:
    return request.app.state.sessions


def _get_session(request: Request, session_id: str) -> QuizSession:
    session = _sessions(request).get(session_id)
    if session is None:
        raise HTTPException(404, "Session not found")
    return session


def _summary(session_id: str, session: QuizSession) -> SessionSummary:
    return SessionSummary(
        session_id=session_id,
        mode=session.mode,
        loaded=session.loaded,
        bounds=session.bounds,
        totals=session.totals,
        stats=session.stats.snapshot(),
        history=session.history,
    )


# ── Endpoints ─────────────────────────────────────────────────────────

@app.post("/sessions", response_model=SessionSummary, status_code=201)
async def create_session(body: CreateSessionRequest, request: Request):
    sessions = _sessions(request)
    max_sessions = get_settings().api.max_sessions
    while sessions and len(sessions) >= max_sessions:
        evicted, _ = sessions.popitem(last=False)
        logger.info("Evicted oldest session %s", evicted)

    session = QuizSession(body.mode)
    await session.load()
    session_id = uuid.uuid4().hex
    sessions[session_id] = session
    logger.info("Created session %s for mode %s", session_id, session.mode,
                extra={"session": session_id, "mode": session.mode})
    return _summary(session_id, session)


@app.get("/sessions/{session_id}", response_model=SessionSummary)
async def get_session(session_id: str, request: Request):
    return _summary(session_id, _get_session(request, session_id))


@app.post("/sessions/{session_id}/guesses", response_model=GuessResult)
async def submit_guess(session_id: str, body: GuessRequest, request: Request):
    """
    Submit a guess. Unknown and repeated names are not errors; the outcome
    field says what happened and only "accepted" carries a marker and stats.
    """
    session = _get_session(request, session_id)
    surface = None
    if body.width is not None and body.height is not None:
        surface = SurfaceSize(width=body.width, height=body.height)
    return session.submit(body.guess, surface)


@app.post("/sessions/{session_id}/reset", response_model=SessionSummary)
async def reset_session(session_id: str, request: Request):
    session = _get_session(request, session_id)
    session.reset()
    return _summary(session_id, session)


@app.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    return HealthResponse(status="ok", sessions=len(_sessions(request)))
