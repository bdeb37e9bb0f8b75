"""
Client API endpoints
"""
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from app.api.deps import get_store
from app.schemas.appointment import AppointmentEstimate
from app.schemas.client import ClientCreate, ClientResponse
from app.schemas.routing import ComplexityAssessment, RecommendationResponse, RoutingResult, TaxProResponse
from app.services import client_service, routing_service
from app.services.store import ProfileStore

router = APIRouter()


@router.post("", response_model=ClientResponse, status_code=201)
async def create_client(
    client_data: ClientCreate,
    store: ProfileStore = Depends(get_store)
):
    """
    Create a client profile directly, without going through the intake script.

    Args:
        client_data: Initial profile attributes
        store: Profile store

    Returns:
        ClientResponse with created client data
    """
    return await client_service.create_client(store, client_data)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(client_id: str, store: ProfileStore = Depends(get_store)):
    return await client_service.get_client(store, client_id)


@router.get("/{client_id}/summary", response_class=PlainTextResponse)
async def get_summary(client_id: str, store: ProfileStore = Depends(get_store)):
    """Markdown intake summary"""
    return await client_service.get_intake_summary(store, client_id)


@router.get("/{client_id}/complexity", response_model=ComplexityAssessment)
async def get_complexity(client_id: str, store: ProfileStore = Depends(get_store)):
    """Current score, tier and required specializations; nothing is stored"""
    return await routing_service.assess_complexity(store, client_id)


@router.post("/{client_id}/route", response_model=RoutingResult)
async def route_client(client_id: str, store: ProfileStore = Depends(get_store)):
    """
    Assign the client to the best available tax professional.

    Failures (unknown client, nobody available or qualified) come back
    with success=false and an error_code rather than an error status.
    """
    return await routing_service.route_client_to_tax_pro(store, client_id)


@router.get("/{client_id}/recommendations", response_model=RecommendationResponse)
async def get_recommendations(client_id: str, store: ProfileStore = Depends(get_store)):
    """Best match and alternates without assigning anyone"""
    match = await routing_service.get_tax_pro_recommendations(store, client_id)
    return RecommendationResponse(
        client_id=client_id,
        tax_pro=TaxProResponse.model_validate(match.tax_pro) if match.tax_pro else None,
        alternates=[TaxProResponse.model_validate(alt) for alt in match.alternates],
        message=routing_service.format_recommendations(match)
    )


@router.get("/{client_id}/appointment-estimate", response_model=AppointmentEstimate)
async def get_appointment_estimate(client_id: str, store: ProfileStore = Depends(get_store)):
    return await routing_service.get_appointment_estimate(store, client_id)
