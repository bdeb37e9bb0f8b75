"""
Checklist API endpoints
"""
from typing import List
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from app.api.deps import get_store
from app.models.checklist import DocumentChecklist
from app.schemas.checklist import ChecklistItemResponse, ChecklistResponse
from app.schemas.common import OperationResult
from app.services import checklist_service
from app.services.store import ProfileStore

router = APIRouter()


def checklist_response(checklist: DocumentChecklist) -> ChecklistResponse:
    return ChecklistResponse(
        client_id=checklist.client_id,
        generated_at=checklist.generated_at,
        last_updated=checklist.last_updated,
        items=[ChecklistItemResponse.model_validate(item) for item in checklist.items],
        progress=checklist_service.checklist_progress(checklist)
    )


@router.post("/{client_id}/checklist", response_model=ChecklistResponse, status_code=201)
async def generate_checklist(client_id: str, store: ProfileStore = Depends(get_store)):
    """
    Generate (or regenerate) the client's document checklist.

    Regeneration replaces the previous checklist; documents already
    collected stay collected.

    Raises:
        404: If client not found
    """
    checklist = await checklist_service.generate_document_checklist(store, client_id)
    return checklist_response(checklist)


@router.get("/{client_id}/checklist", response_model=ChecklistResponse)
async def get_checklist(client_id: str, store: ProfileStore = Depends(get_store)):
    """
    Get the client's checklist with required-document progress.

    Raises:
        404: If no checklist has been generated
    """
    checklist = await checklist_service.require_document_checklist(store, client_id)
    return checklist_response(checklist)


@router.get("/{client_id}/checklist/display", response_class=PlainTextResponse)
async def display_checklist(client_id: str, store: ProfileStore = Depends(get_store)):
    checklist = await checklist_service.require_document_checklist(store, client_id)
    return checklist_service.format_checklist_for_display(checklist)


@router.get("/{client_id}/checklist/pending", response_model=List[ChecklistItemResponse])
async def get_pending(client_id: str, store: ProfileStore = Depends(get_store)):
    """Required documents not yet collected"""
    return await checklist_service.get_pending_documents(store, client_id)


@router.post("/{client_id}/checklist/{document_id}/collect", response_model=OperationResult)
async def collect_document(client_id: str, document_id: str, store: ProfileStore = Depends(get_store)):
    return await checklist_service.mark_document_collected(store, client_id, document_id)
