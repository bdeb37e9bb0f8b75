"""
Appointment API endpoints
"""
from fastapi import APIRouter, Depends
from app.api.deps import get_store
from app.schemas.appointment import AppointmentCreate, AppointmentResponse
from app.services import reminder_service, routing_service
from app.services.store import ProfileStore

router = APIRouter()


@router.post("", response_model=AppointmentResponse, status_code=201)
async def create_appointment(
    appointment_data: AppointmentCreate,
    store: ProfileStore = Depends(get_store)
):
    """
    Book an appointment and schedule its reminders.

    Duration depends on the client's complexity tier and whether the
    intake is complete.

    Raises:
        404: If the client or tax professional does not exist
    """
    appointment = await routing_service.create_appointment(
        store,
        appointment_data.client_id,
        appointment_data.tax_pro_id,
        appointment_data.scheduled_at,
        appointment_data.type
    )
    await reminder_service.schedule_appointment_reminders(store, appointment)
    return appointment


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(appointment_id: str, store: ProfileStore = Depends(get_store)):
    return await routing_service.get_appointment(store, appointment_id)
