"""
Reminder API endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Depends
from app.api.deps import get_store
from app.schemas.common import OperationResult
from app.schemas.reminder import ReminderResponse
from app.services import reminder_service
from app.services.store import ProfileStore

router = APIRouter()


@router.post("/clients/{client_id}/reminders/documents", response_model=List[ReminderResponse], status_code=201)
async def create_document_reminders(
    client_id: str,
    appointment_id: Optional[str] = None,
    store: ProfileStore = Depends(get_store)
):
    """One personalized reminder per pending document"""
    return await reminder_service.create_document_reminders(store, client_id, appointment_id)


@router.get("/clients/{client_id}/reminders", response_model=List[ReminderResponse])
async def get_client_reminders(client_id: str, store: ProfileStore = Depends(get_store)):
    return await reminder_service.get_client_reminders(store, client_id)


@router.get("/reminders/pending", response_model=List[ReminderResponse])
async def get_pending_reminders(store: ProfileStore = Depends(get_store)):
    """Unsent reminders that are due now"""
    return await reminder_service.get_pending_reminders(store)


@router.post("/reminders/{reminder_id}/send", response_model=OperationResult)
async def send_reminder(reminder_id: str, store: ProfileStore = Depends(get_store)):
    return await reminder_service.send_reminder(store, reminder_id)
