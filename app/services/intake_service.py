"""
Intake session state machine.

personal_info → filing_status → dependents → employment → income_types →
deductions → special_situations → document_upload → review → complete

A step advances once all its questions have an answer or the classifier
says the answer closes the step early. Reaching complete ends the session
and marks the client's intake completed.
"""
from datetime import datetime
from typing import Optional, Tuple
from loguru import logger
from app.core.exceptions import InvalidStateError
from app.models.client import Client
from app.models.enums import IntakeStep, SessionStatus
from app.models.intake_session import IntakeSession
from app.schemas.intake import IntakeProgress, IntakeTurn
from app.services.answer_classifier import AnswerClassifier, default_classifier, delta_updates
from app.services.client_service import create_client
from app.services.intake_script import (
    COMPLETION_MESSAGE,
    INTAKE_QUESTIONS,
    INTAKE_STEPS,
    MORE_DETAILS_MESSAGE,
    RESUME_MESSAGE,
    next_step,
    question_at,
    question_being_answered,
    remaining_steps,
)
from app.services.store import ProfileStore


def _turn(session: IntakeSession, message: str, completed: bool = False) -> IntakeTurn:
    return IntakeTurn(
        session_id=session.id,
        client_id=session.client_id,
        current_step=session.current_step,
        status=session.status,
        message=message,
        completed=completed
    )


async def start_intake(store: ProfileStore, client_id: Optional[str] = None) -> Tuple[IntakeSession, IntakeTurn]:
    """
    Start an intake or resume the client's in-progress one.

    An unknown client_id creates a new client with that id; no client_id
    creates one with a generated id.

    Returns:
        (session, turn) where turn.message is the next unanswered question
    """
    client = await store.get_client(client_id) if client_id else None
    if client is None:
        client = await create_client(store, client_id=client_id)

    session = await store.find_active_session(client.id)
    if session is not None:
        answered = len(session.answers_for(session.current_step))
        logger.info(f"Resuming intake session {session.id} at {session.current_step.value}")
        return session, _turn(session, question_at(session.current_step, answered) or RESUME_MESSAGE)

    session = await store.add_session(IntakeSession(client_id=client.id))
    logger.info(f"Started intake session {session.id} for client {client.id}")
    return session, _turn(session, question_at(IntakeStep.PERSONAL_INFO, 0))


async def process_intake_response(
    store: ProfileStore,
    session_id: str,
    answer: str,
    classifier: Optional[AnswerClassifier] = None
) -> IntakeTurn:
    """
    Record an answer, update the client profile and advance the script.

    Args:
        store: Profile store
        session_id: Intake session ID
        answer: Free-text answer to the current question
        classifier: Answer classifier, keyword heuristics by default

    Returns:
        IntakeTurn with the next question, or the completion message

    Raises:
        NotFoundError: If the session or its client does not exist
        InvalidStateError: If the session is completed or abandoned
    """
    classifier = classifier or default_classifier
    session = await store.require_session(session_id)
    if session.status != SessionStatus.IN_PROGRESS:
        raise InvalidStateError(
            f"Session {session_id} is {session.status.value} and accepts no more responses",
            details={"session_id": session_id, "status": session.status.value}
        )
    client = await store.require_client(session.client_id)

    step = session.current_step
    answered = len(session.answers_for(step))
    now = datetime.utcnow()
    responses = [*session.responses, {
        "step": step.value,
        "question": question_being_answered(step, answered),
        "answer": answer,
        "timestamp": now.isoformat(),
    }]
    answered += 1

    delta = classifier.classify(step, answer)
    if not delta.is_empty():
        await store.update_client(client, **delta_updates(client, delta))

    if answered < len(INTAKE_QUESTIONS[step]) and not classifier.ends_step(step, answer):
        await store.update_session(session, responses=responses, last_activity_at=now)
        return _turn(session, question_at(step, answered))

    following = next_step(step)
    completed_steps = [*session.completed_steps, step.value]

    if following == IntakeStep.COMPLETE:
        await store.update_session(
            session,
            responses=responses,
            completed_steps=completed_steps,
            current_step=following,
            status=SessionStatus.COMPLETED,
            last_activity_at=now
        )
        await _complete_intake(store, client, now)
        logger.info(f"Intake session {session.id} completed for client {client.id}")
        return _turn(session, COMPLETION_MESSAGE, completed=True)

    await store.update_session(
        session,
        responses=responses,
        completed_steps=completed_steps,
        current_step=following,
        last_activity_at=now
    )
    logger.info(f"Intake session {session.id} advanced {step.value} -> {following.value}")
    return _turn(session, question_at(following, 0) or MORE_DETAILS_MESSAGE)


async def _complete_intake(store: ProfileStore, client: Client, when: datetime) -> None:
    await store.update_client(client, intake_completed=True, intake_completed_at=when)


async def get_intake_progress(store: ProfileStore, session_id: str) -> IntakeProgress:
    session = await store.require_session(session_id)
    return IntakeProgress(
        session_id=session.id,
        current_step=session.current_step,
        completed_steps=list(session.completed_steps),
        remaining_steps=[step.value for step in remaining_steps(session.current_step)],
        total_steps=len(INTAKE_STEPS),
        percent_complete=round(len(session.completed_steps) / len(INTAKE_STEPS) * 100),
        status=session.status
    )


async def abandon_intake(store: ProfileStore, session_id: str) -> IntakeSession:
    """Stop an in-progress session; it accepts no further responses"""
    session = await store.require_session(session_id)
    if session.status != SessionStatus.IN_PROGRESS:
        raise InvalidStateError(
            f"Session {session_id} is already {session.status.value}",
            details={"session_id": session_id, "status": session.status.value}
        )
    await store.update_session(session, status=SessionStatus.ABANDONED)
    logger.info(f"Intake session {session_id} abandoned at {session.current_step.value}")
    return session
