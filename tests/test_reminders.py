"""Test reminder composition, scheduling and delivery."""

from datetime import datetime, timedelta

import pytest
from app.models.checklist_item import ChecklistItem
from app.models.client import Client
from app.models.enums import DocumentCategory, IncomeType, ReminderChannel, ReminderType
from app.services import checklist_service, reminder_service, routing_service
from app.services.reminder_service import compose_document_message


def _item(name, source=None, description="Bring it along"):
    return ChecklistItem(
        document_key="doc",
        name=name,
        description=description,
        category=DocumentCategory.INCOME,
        required=True,
        source=source,
    )


def test_well_known_documents_get_canned_messages():
    client = Client(first_name="Jane")

    uber = compose_document_message(client, _item("1099-NEC from Uber", source="Uber"))
    mileage = compose_document_message(client, _item("Mileage Log"))

    assert uber.startswith("Hi Jane! 👋 Don't forget your 1099-NEC from Uber.")
    assert "mileage log ready" in mileage


def test_other_documents_use_generic_template():
    message = compose_document_message(Client(), _item("W-2 Forms", description="From each employer"))
    assert message == "Hi there! 📋 Reminder: Please don't forget to bring your W-2 Forms. From each employer"


@pytest.fixture
def gig_client():
    return Client(
        id="client-gig",
        first_name="Jane",
        email="jane@example.com",
        income_types=[IncomeType.GIG_ECONOMY.value],
        employment_info=[{"employer": "Uber", "income_type": "gig_economy"}],
    )


@pytest.mark.asyncio
async def test_one_reminder_per_pending_document(store, gig_client):
    await store.add_client(gig_client)
    await checklist_service.generate_document_checklist(store, gig_client.id)
    pending = await checklist_service.get_pending_documents(store, gig_client.id)

    reminders = await reminder_service.create_document_reminders(store, gig_client.id)

    assert len(reminders) == len(pending)
    assert all(r.type == ReminderType.DOCUMENT_REMINDER for r in reminders)
    assert all(r.channel == ReminderChannel.EMAIL for r in reminders)
    assert {r.document_ids[0] for r in reminders} == {item.id for item in pending}
    assert any("Uber driver dashboard" in r.message for r in reminders)


@pytest.mark.asyncio
async def test_appointment_schedules_timed_and_batch_reminders(store, gig_client):
    await store.add_client(gig_client)
    await checklist_service.generate_document_checklist(store, gig_client.id)
    when = datetime.utcnow() + timedelta(days=3)
    appointment = await routing_service.create_appointment(store, gig_client.id, "tp-001", when)

    reminders = await reminder_service.schedule_appointment_reminders(store, appointment)

    by_type = {}
    for reminder in reminders:
        by_type.setdefault(reminder.type, []).append(reminder)
    assert by_type[ReminderType.APPOINTMENT_REMINDER_24H][0].scheduled_for == when - timedelta(hours=24)
    assert by_type[ReminderType.APPOINTMENT_REMINDER_1H][0].channel == ReminderChannel.BOTH
    batch = by_type[ReminderType.DOCUMENT_REMINDER][0]
    assert batch.scheduled_for == when - timedelta(hours=48)
    assert "Sarah Johnson" in by_type[ReminderType.APPOINTMENT_REMINDER_24H][0].message
    assert "📍 Get it from: Uber" in batch.message


@pytest.mark.asyncio
async def test_past_offsets_are_skipped(store, w2_client):
    await store.add_client(w2_client)
    when = datetime.utcnow() + timedelta(hours=3)
    appointment = await routing_service.create_appointment(store, w2_client.id, "tp-001", when)

    reminders = await reminder_service.schedule_appointment_reminders(store, appointment)

    # no checklist, so no batch reminder either
    assert [r.type for r in reminders] == [ReminderType.APPOINTMENT_REMINDER_1H]


@pytest.mark.asyncio
async def test_send_marks_reminder_and_checklist_items(store, gig_client):
    await store.add_client(gig_client)
    await checklist_service.generate_document_checklist(store, gig_client.id)
    reminder = (await reminder_service.create_document_reminders(store, gig_client.id))[0]

    result = await reminder_service.send_reminder(store, reminder.id)

    assert result.success is True
    assert result.message == "Reminder sent to jane@example.com via email"
    assert (await store.get_reminder(reminder.id)).sent is True
    checklist = await store.get_checklist(gig_client.id)
    flagged = [item for item in checklist.items if item.reminder_sent]
    assert [item.id for item in flagged] == reminder.document_ids

    again = await reminder_service.send_reminder(store, reminder.id)
    assert again.success is False
    assert again.message == "Reminder already sent"


@pytest.mark.asyncio
async def test_send_unknown_reminder(store):
    result = await reminder_service.send_reminder(store, "missing")
    assert result.success is False
    assert result.message == "Reminder not found"


@pytest.mark.asyncio
async def test_pending_reminders_are_due_and_unsent(store, gig_client):
    await store.add_client(gig_client)
    await checklist_service.generate_document_checklist(store, gig_client.id)
    reminders = await reminder_service.create_document_reminders(store, gig_client.id)

    assert await reminder_service.get_pending_reminders(store) == []

    later = datetime.utcnow() + timedelta(hours=25)
    due = await reminder_service.get_pending_reminders(store, now=later)
    assert {r.id for r in due} == {r.id for r in reminders}

    await reminder_service.send_reminder(store, reminders[0].id)
    due = await reminder_service.get_pending_reminders(store, now=later)
    assert reminders[0].id not in {r.id for r in due}


@pytest.mark.asyncio
async def test_display_splits_pending_and_sent(store, gig_client):
    await store.add_client(gig_client)
    await checklist_service.generate_document_checklist(store, gig_client.id)
    reminders = await reminder_service.create_document_reminders(store, gig_client.id)
    await reminder_service.send_reminder(store, reminders[0].id)

    text = reminder_service.format_reminders_for_display(
        await reminder_service.get_client_reminders(store, gig_client.id)
    )

    assert "## Pending Reminders" in text
    assert "## Sent Reminders" in text
    assert reminder_service.format_reminders_for_display([]) == "No reminders scheduled."
