"""
Profile store: the repository every service reads and writes through.

Services never touch the AsyncSession directly; swapping the backend only
means providing another object with the same methods.
"""
from datetime import datetime
from typing import List, Optional
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.exceptions import NotFoundError
from app.models.appointment import Appointment
from app.models.checklist import DocumentChecklist
from app.models.client import Client
from app.models.enums import SessionStatus
from app.models.intake_session import IntakeSession
from app.models.reminder import Reminder
from app.models.tax_professional import TaxProfessional


class ProfileStore:
    """Keyed access to clients, sessions, checklists, staff, appointments and reminders."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _add(self, entity):
        self.db.add(entity)
        await self.db.flush()
        return entity

    async def _update(self, entity, **fields):
        for field, value in fields.items():
            setattr(entity, field, value)
        await self.db.flush()
        return entity

    # Clients

    async def add_client(self, client: Client) -> Client:
        return await self._add(client)

    async def get_client(self, client_id: str) -> Optional[Client]:
        return await self.db.get(Client, client_id)

    async def require_client(self, client_id: str) -> Client:
        client = await self.get_client(client_id)
        if not client:
            raise NotFoundError(f"Client {client_id} not found", details={"client_id": client_id})
        return client

    async def update_client(self, client: Client, **fields) -> Client:
        fields.setdefault("updated_at", datetime.utcnow())
        return await self._update(client, **fields)

    # Intake sessions

    async def add_session(self, session: IntakeSession) -> IntakeSession:
        return await self._add(session)

    async def get_session(self, session_id: str) -> Optional[IntakeSession]:
        return await self.db.get(IntakeSession, session_id)

    async def require_session(self, session_id: str) -> IntakeSession:
        session = await self.get_session(session_id)
        if not session:
            raise NotFoundError(f"Session {session_id} not found", details={"session_id": session_id})
        return session

    async def find_active_session(self, client_id: str) -> Optional[IntakeSession]:
        """Most recent in-progress session for a client"""
        result = await self.db.execute(
            select(IntakeSession)
            .where(
                IntakeSession.client_id == client_id,
                IntakeSession.status == SessionStatus.IN_PROGRESS
            )
            .order_by(IntakeSession.started_at.desc())
        )
        return result.scalars().first()

    async def update_session(self, session: IntakeSession, **fields) -> IntakeSession:
        fields.setdefault("last_activity_at", datetime.utcnow())
        return await self._update(session, **fields)

    # Checklists

    async def get_checklist(self, client_id: str) -> Optional[DocumentChecklist]:
        return await self.db.get(DocumentChecklist, client_id)

    async def save_checklist(self, checklist: DocumentChecklist) -> DocumentChecklist:
        """Replace the client's checklist, items included"""
        existing = await self.get_checklist(checklist.client_id)
        if existing is not None:
            await self.db.delete(existing)
            await self.db.flush()
        return await self._add(checklist)

    async def touch_checklist(self, checklist: DocumentChecklist) -> DocumentChecklist:
        return await self._update(checklist, last_updated=datetime.utcnow())

    # Tax professionals

    async def get_tax_pro(self, tax_pro_id: str) -> Optional[TaxProfessional]:
        return await self.db.get(TaxProfessional, tax_pro_id)

    async def require_tax_pro(self, tax_pro_id: str) -> TaxProfessional:
        tax_pro = await self.get_tax_pro(tax_pro_id)
        if not tax_pro:
            raise NotFoundError(f"Tax professional {tax_pro_id} not found", details={"tax_pro_id": tax_pro_id})
        return tax_pro

    async def list_tax_pros(self) -> List[TaxProfessional]:
        result = await self.db.execute(select(TaxProfessional).order_by(TaxProfessional.id))
        return list(result.scalars().all())

    async def list_available_tax_pros(self) -> List[TaxProfessional]:
        """Staff marked available with load strictly below capacity, in directory order"""
        result = await self.db.execute(
            select(TaxProfessional)
            .where(
                TaxProfessional.available == True,  # noqa: E712
                TaxProfessional.current_load < TaxProfessional.max_daily_appointments
            )
            .order_by(TaxProfessional.id)
        )
        return list(result.scalars().all())

    async def update_tax_pro(self, tax_pro: TaxProfessional, **fields) -> TaxProfessional:
        return await self._update(tax_pro, **fields)

    async def add_tax_pro(self, tax_pro: TaxProfessional) -> TaxProfessional:
        return await self._add(tax_pro)

    async def increment_tax_pro_load(self, tax_pro_id: str) -> bool:
        """
        Add one to a staff member's load in a single conditional UPDATE.

        Returns:
            False when the member was already at capacity (nothing changed)
        """
        result = await self.db.execute(
            update(TaxProfessional)
            .where(
                TaxProfessional.id == tax_pro_id,
                TaxProfessional.current_load < TaxProfessional.max_daily_appointments
            )
            .values(current_load=TaxProfessional.current_load + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False
        await self.db.get(TaxProfessional, tax_pro_id, populate_existing=True)
        return True

    # Appointments

    async def add_appointment(self, appointment: Appointment) -> Appointment:
        return await self._add(appointment)

    async def get_appointment(self, appointment_id: str) -> Optional[Appointment]:
        return await self.db.get(Appointment, appointment_id)

    async def require_appointment(self, appointment_id: str) -> Appointment:
        appointment = await self.get_appointment(appointment_id)
        if not appointment:
            raise NotFoundError(
                f"Appointment {appointment_id} not found",
                details={"appointment_id": appointment_id}
            )
        return appointment

    # Reminders

    async def add_reminder(self, reminder: Reminder) -> Reminder:
        return await self._add(reminder)

    async def get_reminder(self, reminder_id: str) -> Optional[Reminder]:
        return await self.db.get(Reminder, reminder_id)

    async def list_client_reminders(self, client_id: str) -> List[Reminder]:
        result = await self.db.execute(
            select(Reminder)
            .where(Reminder.client_id == client_id)
            .order_by(Reminder.scheduled_for, Reminder.created_at)
        )
        return list(result.scalars().all())

    async def list_due_reminders(self, now: datetime) -> List[Reminder]:
        """Unsent reminders scheduled at or before now"""
        result = await self.db.execute(
            select(Reminder)
            .where(Reminder.sent == False, Reminder.scheduled_for <= now)  # noqa: E712
            .order_by(Reminder.scheduled_for)
        )
        return list(result.scalars().all())

    async def update_reminder(self, reminder: Reminder, **fields) -> Reminder:
        return await self._update(reminder, **fields)
