"""
Reminder composition and (simulated) delivery.

Sending only logs the message and marks the reminder sent; no email or
SMS gateway is involved.
"""
from datetime import datetime, timedelta
from typing import List, Optional, Sequence
from loguru import logger
from app.core.config import settings
from app.core.exceptions import InvalidStateError, NotFoundError
from app.models.appointment import Appointment
from app.models.checklist_item import ChecklistItem
from app.models.client import Client
from app.models.enums import ReminderChannel, ReminderType
from app.models.reminder import Reminder
from app.schemas.common import OperationResult
from app.services.checklist_service import get_pending_documents
from app.services.store import ProfileStore
from app.utils.formatting import format_time, humanize

# (fragment matched against document name or source, message); first match wins
DOCUMENT_MESSAGES = (
    ("uber", "Hi {first_name}! 👋 Don't forget your 1099-NEC from Uber. "
             "You can download it from your Uber driver dashboard under \"Tax Information.\""),
    ("lyft", "Hi {first_name}! 👋 Remember to grab your 1099-NEC from Lyft. "
             "Check your Lyft driver dashboard under \"Tax Info\" to download it."),
    ("doordash", "Hi {first_name}! 👋 Don't forget your 1099-NEC from DoorDash. "
                 "You can find it in your Dasher app under \"Earnings\" → \"Tax Forms.\""),
    ("mileage", "Hi {first_name}! 📱 Do you have your mileage log ready? "
                "If you used a mileage tracking app, now's the time to export those records!"),
    ("crypto", "Hi {first_name}! 🪙 Don't forget your cryptocurrency transaction records. "
               "You can export your transaction history from exchanges like Coinbase, Binance, or Kraken."),
    ("1099-nec", "Hi {first_name}! 📄 Remember to collect all your 1099-NEC forms "
                 "from clients who paid you $600 or more."),
    ("foreign bank", "Hi {first_name}! 🌍 Important: You'll need your foreign bank account statements "
                     "showing the highest balance for each account (FBAR requirement)."),
)
GENERIC_DOCUMENT_MESSAGE = "Hi {first_name}! 📋 Reminder: Please don't forget to bring your {name}. {description}"

APPOINTMENT_REMINDER_OFFSETS = (
    (ReminderType.APPOINTMENT_REMINDER_24H, timedelta(hours=24)),
    (ReminderType.APPOINTMENT_REMINDER_1H, timedelta(hours=1)),
)


def _first_name(client: Client) -> str:
    return client.first_name or "there"


def compose_document_message(client: Client, item: ChecklistItem) -> str:
    """Canonical message for well-known documents, generic template otherwise"""
    haystacks = (item.name.lower(), (item.source or "").lower())
    for fragment, template in DOCUMENT_MESSAGES:
        if any(fragment in text for text in haystacks):
            return template.format(first_name=_first_name(client))
    return GENERIC_DOCUMENT_MESSAGE.format(
        first_name=_first_name(client),
        name=item.name,
        description=item.description
    )


def compose_batch_message(client: Client, items: Sequence[ChecklistItem]) -> str:
    message = (
        f"Hi {_first_name(client)}! 📋 Your tax appointment is coming up. "
        f"Here are the documents you still need to gather:\n\n"
    )
    for index, item in enumerate(items, start=1):
        message += f"{index}. **{item.name}**\n"
        if item.source:
            message += f"   📍 Get it from: {item.source}\n"
    message += "\nHaving these ready will help us complete your taxes faster! 🚀"
    return message


async def create_document_reminders(
    store: ProfileStore,
    client_id: str,
    appointment_id: Optional[str] = None,
    items: Optional[Sequence[ChecklistItem]] = None
) -> List[Reminder]:
    """
    One reminder per pending document, due DOCUMENT_REMINDER_DELAY_HOURS from now.

    Args:
        store: Profile store
        client_id: Client ID
        appointment_id: Appointment to attach; the client's current one when omitted
        items: Documents to remind about; the client's pending documents when omitted

    Returns:
        Created reminders
    """
    client = await store.require_client(client_id)
    if items is None:
        items = await get_pending_documents(store, client_id)

    scheduled_for = datetime.utcnow() + timedelta(hours=settings.DOCUMENT_REMINDER_DELAY_HOURS)
    reminders = []
    for item in items:
        reminder = Reminder(
            client_id=client.id,
            appointment_id=appointment_id or client.appointment_id,
            type=ReminderType.DOCUMENT_REMINDER,
            message=compose_document_message(client, item),
            scheduled_for=scheduled_for,
            channel=ReminderChannel.EMAIL,
            document_ids=[item.id]
        )
        reminders.append(await store.add_reminder(reminder))

    logger.info(f"Created {len(reminders)} document reminders for client {client_id}")
    return reminders


async def create_appointment_reminder(
    store: ProfileStore,
    appointment: Appointment,
    reminder_type: ReminderType,
    scheduled_for: datetime
) -> Reminder:
    client = await store.require_client(appointment.client_id)
    tax_pro = await store.get_tax_pro(appointment.tax_pro_id)
    tax_pro_name = tax_pro.name if tax_pro else "your tax professional"

    if reminder_type == ReminderType.APPOINTMENT_REMINDER_24H:
        message = (
            f"Hi {_first_name(client)}! 📅 Your tax appointment with {tax_pro_name} is tomorrow at "
            f"{format_time(appointment.scheduled_at)}. Please make sure you have all your documents ready!"
        )
    else:
        message = f"Hi {_first_name(client)}! ⏰ Your tax appointment with {tax_pro_name} starts in 1 hour. See you soon!"

    return await store.add_reminder(Reminder(
        client_id=client.id,
        appointment_id=appointment.id,
        type=reminder_type,
        message=message,
        scheduled_for=scheduled_for,
        channel=ReminderChannel.BOTH
    ))


async def create_batch_document_reminder(
    store: ProfileStore,
    client_id: str,
    appointment_id: Optional[str] = None
) -> Optional[Reminder]:
    """
    One combined reminder listing every pending document.

    Due BATCH_REMINDER_LEAD_HOURS before the appointment, or that long from
    now when there is no appointment. None when nothing is pending.
    """
    client = await store.require_client(client_id)
    items = await get_pending_documents(store, client_id)
    if not items:
        return None

    appointment_id = appointment_id or client.appointment_id
    appointment = await store.get_appointment(appointment_id) if appointment_id else None
    lead = timedelta(hours=settings.BATCH_REMINDER_LEAD_HOURS)
    scheduled_for = appointment.scheduled_at - lead if appointment else datetime.utcnow() + lead

    return await store.add_reminder(Reminder(
        client_id=client.id,
        appointment_id=appointment.id if appointment else None,
        type=ReminderType.DOCUMENT_REMINDER,
        message=compose_batch_message(client, items),
        scheduled_for=scheduled_for,
        channel=ReminderChannel.EMAIL,
        document_ids=[item.id for item in items]
    ))


async def schedule_appointment_reminders(
    store: ProfileStore,
    appointment: Appointment,
    now: Optional[datetime] = None
) -> List[Reminder]:
    """24h and 1h reminders that are still in the future, plus the batch document reminder"""
    now = now or datetime.utcnow()
    reminders = []
    for reminder_type, offset in APPOINTMENT_REMINDER_OFFSETS:
        when = appointment.scheduled_at - offset
        if when > now:
            reminders.append(await create_appointment_reminder(store, appointment, reminder_type, when))

    batch = await create_batch_document_reminder(store, appointment.client_id, appointment.id)
    if batch:
        reminders.append(batch)

    logger.info(f"Scheduled {len(reminders)} reminders for appointment {appointment.id}")
    return reminders


async def get_client_reminders(store: ProfileStore, client_id: str) -> List[Reminder]:
    await store.require_client(client_id)
    return await store.list_client_reminders(client_id)


async def get_pending_reminders(store: ProfileStore, now: Optional[datetime] = None) -> List[Reminder]:
    """Unsent reminders that are due"""
    return await store.list_due_reminders(now or datetime.utcnow())


async def send_reminder(store: ProfileStore, reminder_id: str) -> OperationResult:
    """
    Deliver a reminder (log only) and mark it sent.

    Documents the reminder covers are flagged reminder_sent on the checklist.
    """
    reminder = await store.get_reminder(reminder_id)
    if not reminder:
        return OperationResult(success=False, message="Reminder not found", error_code=NotFoundError.error_code)
    if reminder.sent:
        return OperationResult(success=False, message="Reminder already sent", error_code=InvalidStateError.error_code)

    client = await store.get_client(reminder.client_id)
    if not client:
        return OperationResult(success=False, message="Client not found", error_code=NotFoundError.error_code)

    logger.info(f"[REMINDER] Sending to {client.email} via {reminder.channel.value}:\n{reminder.message}")
    now = datetime.utcnow()
    await store.update_reminder(reminder, sent=True, sent_at=now)

    if reminder.document_ids:
        checklist = await store.get_checklist(client.id)
        if checklist is not None:
            for item in checklist.items:
                if item.id in reminder.document_ids:
                    item.reminder_sent = True
                    item.reminder_sent_at = now
            await store.touch_checklist(checklist)

    return OperationResult(success=True, message=f"Reminder sent to {client.email} via {reminder.channel.value}")


def format_reminders_for_display(reminders: Sequence[Reminder]) -> str:
    if not reminders:
        return "No reminders scheduled."

    output = "# Scheduled Reminders\n\n"
    pending = [r for r in reminders if not r.sent]
    sent = [r for r in reminders if r.sent]

    if pending:
        output += "## Pending Reminders\n\n"
        for r in pending:
            output += f"- **{humanize(r.type)}** - Scheduled for {r.scheduled_for:%Y-%m-%d %H:%M} UTC\n"
            output += f"  Channel: {r.channel.value}\n"
            output += f"  ID: `{r.id}`\n"
        output += "\n"

    if sent:
        output += "## Sent Reminders\n\n"
        for r in sent:
            output += f"- ✅ **{humanize(r.type)}** - Sent at {r.sent_at:%Y-%m-%d %H:%M} UTC\n"

    return output
