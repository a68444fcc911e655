from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status

from src.application.question_bank import Category
from src.managers.interview import InterviewManager
from src.interface.api.schemas import (
    AdvanceRequest,
    CreateSessionRequest,
    DraftRequest,
    OutcomeView,
    QuestionView,
    SessionResponse,
    SessionView,
)

router = APIRouter(tags=["interview"])


def get_manager(request: Request) -> InterviewManager:
    return request.app.state.manager


def _session_response(manager: InterviewManager,
                      session_id: str,
                      accepted: bool = True) -> SessionResponse:
    outcome = manager.get_outcome(session_id)
    if outcome is not None:
        return SessionResponse(session_id=session_id,
                               state=outcome.state,
                               accepted=accepted,
                               outcome=OutcomeView.from_outcome(outcome))
    session = manager.get_session(session_id)
    return SessionResponse(session_id=session_id,
                           state=session.state,
                           accepted=accepted,
                           session=SessionView.from_snapshot(session.snapshot()))


@router.get("/questions", response_model=List[QuestionView])
async def list_questions(category: Optional[Category] = None,
                         manager: InterviewManager = Depends(get_manager)):
    """List the questions a session would present for `category`."""
    return [QuestionView.from_question(q) for q in manager.list_questions(category)]


@router.post("/sessions", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(body: CreateSessionRequest,
                         manager: InterviewManager = Depends(get_manager)):
    session_id, _ = manager.create_session(category=body.category, user_id=body.user_id)
    return _session_response(manager, session_id)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, manager: InterviewManager = Depends(get_manager)):
    return _session_response(manager, session_id)


@router.put("/sessions/{session_id}/draft", response_model=SessionResponse)
async def edit_draft(session_id: str,
                     body: DraftRequest,
                     manager: InterviewManager = Depends(get_manager)):
    manager.edit_draft(session_id, body.text)
    return _session_response(manager, session_id)


@router.delete("/sessions/{session_id}/draft", response_model=SessionResponse)
async def clear_draft(session_id: str, manager: InterviewManager = Depends(get_manager)):
    manager.clear_draft(session_id)
    return _session_response(manager, session_id)


@router.post("/sessions/{session_id}/recording", response_model=SessionResponse)
async def toggle_recording(session_id: str, manager: InterviewManager = Depends(get_manager)):
    manager.toggle_recording(session_id)
    return _session_response(manager, session_id)


@router.post("/sessions/{session_id}/advance", response_model=SessionResponse)
async def advance(session_id: str,
                  body: Optional[AdvanceRequest] = None,
                  manager: InterviewManager = Depends(get_manager)):
    """
    Commit the draft (or `text`, when given) and move to the next question.
    On the last question this completes the session and returns its outcome.
    """
    text = body.text if body is not None else None
    _, accepted = manager.advance(session_id, text)
    return _session_response(manager, session_id, accepted=accepted)


@router.post("/sessions/{session_id}/skip", response_model=SessionResponse)
async def skip(session_id: str, manager: InterviewManager = Depends(get_manager)):
    manager.skip(session_id)
    return _session_response(manager, session_id)


@router.post("/sessions/{session_id}/cancel", response_model=SessionResponse)
async def cancel(session_id: str, manager: InterviewManager = Depends(get_manager)):
    manager.cancel(session_id)
    return _session_response(manager, session_id)
