"""Test checklist generation and document collection."""

import pytest
from app.core.exceptions import NotFoundError
from app.models.client import Client
from app.models.enums import IncomeType
from app.services import checklist_service
from app.services.checklist_service import collect_document_keys, gig_document_keys


def test_w2_client_document_keys(w2_client):
    assert collect_document_keys(w2_client) == ["id_primary", "id_ssn_card", "id_prior_return", "income_w2"]


def test_gig_employers_add_platform_documents_and_mileage():
    assert gig_document_keys(["Uber Technologies", "Acme Corp", "DoorDash"]) == [
        "gig_uber", "gig_doordash", "gig_mileage"
    ]
    assert gig_document_keys(["Acme Corp"]) == []


def test_document_keys_are_deduplicated():
    client = Client(
        income_types=[IncomeType.CRYPTO_INCOME.value, IncomeType.GIG_ECONOMY.value],
        has_crypto=True,
        employment_info=[{"employer": "Lyft", "income_type": "gig_economy"}],
    )
    keys = collect_document_keys(client)

    assert len(keys) == len(set(keys))
    assert keys.count("income_crypto") == 1
    assert keys.count("gig_mileage") == 1
    assert "gig_lyft" in keys


@pytest.mark.asyncio
async def test_generate_orders_required_first(store, w2_client):
    await store.add_client(w2_client)

    checklist = await checklist_service.generate_document_checklist(store, w2_client.id)

    assert [item.document_key for item in checklist.items] == [
        "id_primary", "id_ssn_card", "income_w2", "id_prior_return"
    ]
    client = await store.get_client(w2_client.id)
    assert client.documents_pending == [item.id for item in checklist.items[:3]]


@pytest.mark.asyncio
async def test_generate_for_unknown_client(store):
    with pytest.raises(NotFoundError):
        await checklist_service.generate_document_checklist(store, "missing")


@pytest.mark.asyncio
async def test_mark_collected_updates_progress(store, w2_client):
    await store.add_client(w2_client)
    checklist = await checklist_service.generate_document_checklist(store, w2_client.id)
    w2_item = next(item for item in checklist.items if item.document_key == "income_w2")

    result = await checklist_service.mark_document_collected(store, w2_client.id, w2_item.id)

    assert result.success is True
    assert result.message == 'Marked "W-2 Forms" as collected'
    client = await store.get_client(w2_client.id)
    assert client.documents_collected == ["income_w2"]
    assert w2_item.id not in client.documents_pending
    progress = checklist_service.checklist_progress(await store.get_checklist(w2_client.id))
    assert (progress.collected, progress.required_total, progress.pending) == (1, 3, 2)
    assert progress.percent_complete == pytest.approx(33.3)


@pytest.mark.asyncio
async def test_mark_collected_failures_change_nothing(store, w2_client):
    await store.add_client(w2_client)

    result = await checklist_service.mark_document_collected(store, w2_client.id, "anything")
    assert result.success is False
    assert result.message == "Checklist not found"

    await checklist_service.generate_document_checklist(store, w2_client.id)
    result = await checklist_service.mark_document_collected(store, w2_client.id, "not-an-item")
    assert result.success is False
    assert result.message == "Document not found in checklist"
    assert (await store.get_client(w2_client.id)).documents_collected == []


@pytest.mark.asyncio
async def test_regeneration_keeps_collected_documents(store, w2_client):
    await store.add_client(w2_client)
    first = await checklist_service.generate_document_checklist(store, w2_client.id)
    w2_item = next(item for item in first.items if item.document_key == "income_w2")
    await checklist_service.mark_document_collected(store, w2_client.id, w2_item.id)

    second = await checklist_service.generate_document_checklist(store, w2_client.id)

    regenerated = next(item for item in second.items if item.document_key == "income_w2")
    assert regenerated.collected is True
    assert regenerated.id != w2_item.id
    pending = await checklist_service.get_pending_documents(store, w2_client.id)
    assert [item.document_key for item in pending] == ["id_primary", "id_ssn_card"]


@pytest.mark.asyncio
async def test_pending_documents_without_checklist(store, w2_client):
    await store.add_client(w2_client)
    assert await checklist_service.get_pending_documents(store, w2_client.id) == []
    assert await checklist_service.get_document_checklist(store, w2_client.id) is None


@pytest.mark.asyncio
async def test_display_groups_by_category(store, w2_client):
    await store.add_client(w2_client)
    checklist = await checklist_service.generate_document_checklist(store, w2_client.id)

    text = checklist_service.format_checklist_for_display(checklist)

    assert "## 📋 Identity Documents" in text
    assert "## 💰 Income Documents" in text
    assert "**Progress:** 0/3 required documents collected" in text


@pytest.mark.asyncio
async def test_regeneration_reproduces_document_keys(store):
    client = await store.add_client(Client(
        income_types=[IncomeType.SELF_EMPLOYMENT_1099NEC.value, IncomeType.DIVIDENDS.value],
        deductions=["mortgage_interest", "unknown_deduction"],
        has_health_insurance=True,
    ))

    first = await checklist_service.generate_document_checklist(store, client.id)
    first_keys = [item.document_key for item in first.items]
    second = await checklist_service.generate_document_checklist(store, client.id)

    assert [item.document_key for item in second.items] == first_keys
    assert "hc_1095a" in first_keys
    assert "ded_1098" in first_keys
