"""
Tax professional directory endpoints
"""
from typing import List
from fastapi import APIRouter, Depends
from app.api.deps import get_store
from app.schemas.routing import TaxProResponse
from app.services import routing_service
from app.services.store import ProfileStore

router = APIRouter()


@router.get("", response_model=List[TaxProResponse])
async def list_tax_pros(store: ProfileStore = Depends(get_store)):
    return await routing_service.list_tax_professionals(store)
