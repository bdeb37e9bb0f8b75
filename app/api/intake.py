"""
Intake API endpoints
"""
from fastapi import APIRouter, Depends
from app.api.deps import get_store
from app.schemas.intake import IntakeAnswer, IntakeProgress, IntakeSessionResponse, IntakeStart, IntakeTurn
from app.services import intake_service
from app.services.store import ProfileStore

router = APIRouter()


@router.post("/start", response_model=IntakeTurn)
async def start_intake(
    request: IntakeStart,
    store: ProfileStore = Depends(get_store)
):
    """
    Start a new intake session, or resume the client's in-progress one.

    Returns:
        IntakeTurn with the next unanswered question
    """
    _, turn = await intake_service.start_intake(store, request.client_id)
    return turn


@router.post("/{session_id}/respond", response_model=IntakeTurn)
async def respond(
    session_id: str,
    request: IntakeAnswer,
    store: ProfileStore = Depends(get_store)
):
    """
    Answer the current question.

    Raises:
        404: If the session does not exist
        409: If the session is completed or abandoned
    """
    return await intake_service.process_intake_response(store, session_id, request.answer)


@router.get("/{session_id}", response_model=IntakeSessionResponse)
async def get_session(session_id: str, store: ProfileStore = Depends(get_store)):
    """Get the full session, responses included"""
    return await store.require_session(session_id)


@router.get("/{session_id}/progress", response_model=IntakeProgress)
async def get_progress(session_id: str, store: ProfileStore = Depends(get_store)):
    return await intake_service.get_intake_progress(store, session_id)


@router.post("/{session_id}/abandon", response_model=IntakeSessionResponse)
async def abandon(session_id: str, store: ProfileStore = Depends(get_store)):
    """
    Abandon an in-progress session.

    Raises:
        409: If the session is no longer in progress
    """
    return await intake_service.abandon_intake(store, session_id)
