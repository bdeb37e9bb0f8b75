"""Test tax professional matching, routing and appointments."""

from datetime import datetime, timedelta, timezone

import pytest
from app.core.exceptions import NotFoundError
from app.models.client import Client
from app.models.enums import AppointmentType, ComplexityLevel, IncomeType, Specialization
from app.models.tax_professional import TaxProfessional
from app.services import routing_service
from app.services.routing_service import NO_STAFF_AVAILABLE, rank_tax_pros, score_tax_pro, select_tax_pro


async def _only_available(store, *tax_pro_ids):
    for pro in await store.list_tax_pros():
        await store.update_tax_pro(pro, available=pro.id in tax_pro_ids)


@pytest.mark.asyncio
async def test_simple_client_goes_to_individual_specialist(store, w2_client):
    match = select_tax_pro(w2_client, await store.list_available_tax_pros())

    assert match.tax_pro.id == "tp-001"
    assert [alt.id for alt in match.alternates] == ["tp-004", "tp-005"]
    assert match.complexity_level == ComplexityLevel.SIMPLE


def _twin(tax_pro_id):
    return TaxProfessional(
        id=tax_pro_id,
        name=f"Twin {tax_pro_id}",
        email=f"{tax_pro_id}@taxfirm.com",
        specializations=["individual"],
        max_complexity=ComplexityLevel.EXPERT,
        current_load=0,
        max_daily_appointments=5,
        available=True,
        rating=4.0,
    )


def test_tied_candidates_keep_directory_order(w2_client):
    candidates = [_twin(tax_pro_id) for tax_pro_id in ("tp-a", "tp-b", "tp-c", "tp-d")]

    ranked = rank_tax_pros(candidates, ComplexityLevel.SIMPLE, [Specialization.INDIVIDUAL])
    assert [s.tax_pro.id for s in ranked] == ["tp-a", "tp-b", "tp-c", "tp-d"]
    assert len({s.score for s in ranked}) == 1

    match = select_tax_pro(w2_client, candidates)
    assert match.tax_pro.id == "tp-a"
    assert [alt.id for alt in match.alternates] == ["tp-b", "tp-c"]

    match = select_tax_pro(w2_client, list(reversed(candidates)))
    assert match.tax_pro.id == "tp-d"
    assert [alt.id for alt in match.alternates] == ["tp-c", "tp-b"]


@pytest.mark.asyncio
async def test_crypto_client_goes_to_expert(store, crypto_client):
    match = select_tax_pro(crypto_client, await store.list_available_tax_pros())

    assert match.tax_pro.id == "tp-002"
    assert [alt.id for alt in match.alternates] == ["tp-005", "tp-003"]
    assert match.complexity_score == 55
    assert "Michael Chen" in match.reason


@pytest.mark.asyncio
async def test_under_qualified_candidate_is_penalized(store):
    tax_pro = await store.get_tax_pro("tp-004")
    scored = score_tax_pro(tax_pro, ComplexityLevel.EXPERT, ["individual"])
    # -100 + 50 + 10 + 9
    assert scored.score == pytest.approx(-31.0)
    assert "Cannot handle complexity level" in scored.reasons


@pytest.mark.asyncio
async def test_foreign_and_crypto_client_needs_expert(store):
    client = await store.add_client(Client(
        income_types=[IncomeType.CRYPTO_INCOME.value],
        has_crypto=True,
        has_foreign_accounts=True,
    ))
    match = await routing_service.find_best_tax_pro(store, client)

    assert match.complexity_level == ComplexityLevel.EXPERT
    assert match.tax_pro.id == "tp-002"
    assert client.complexity_score == 85


@pytest.mark.asyncio
async def test_no_match_when_only_penalized_candidates_remain(store):
    await _only_available(store, "tp-004")
    client = await store.add_client(Client(
        income_types=[IncomeType.CRYPTO_INCOME.value],
        has_crypto=True,
        has_foreign_accounts=True,
    ))

    result = await routing_service.route_client_to_tax_pro(store, client.id)

    assert result.success is False
    assert result.error_code == "exhausted"
    assert "No tax professional available can handle your case" in result.message
    assert (await store.get_tax_pro("tp-004")).current_load == 6


@pytest.mark.asyncio
async def test_full_staff_member_is_never_chosen(store):
    await _only_available(store)
    await store.add_tax_pro(TaxProfessional(
        id="tp-full",
        name="Full House",
        email="full@taxfirm.com",
        specializations=["individual", "crypto", "foreign_income"],
        max_complexity=ComplexityLevel.EXPERT,
        current_load=4,
        max_daily_appointments=4,
        available=True,
        rating=5.0,
    ))
    client = await store.add_client(Client(has_crypto=True, has_foreign_accounts=True))

    result = await routing_service.route_client_to_tax_pro(store, client.id)

    assert result.success is False
    assert result.message == NO_STAFF_AVAILABLE
    assert (await store.get_tax_pro("tp-full")).current_load == 4


@pytest.mark.asyncio
async def test_routing_assigns_and_increments_load(store, crypto_client):
    await store.add_client(crypto_client)

    result = await routing_service.route_client_to_tax_pro(store, crypto_client.id)

    assert result.success is True
    assert result.tax_pro.id == "tp-002"
    assert result.tax_pro.current_load == 6
    assert [alt.id for alt in result.alternates] == ["tp-005", "tp-003"]
    client = await store.get_client(crypto_client.id)
    assert client.assigned_tax_pro_id == "tp-002"
    assert client.complexity_score == 55


@pytest.mark.asyncio
async def test_routing_unknown_client_is_a_failed_result(store):
    result = await routing_service.route_client_to_tax_pro(store, "missing")
    assert result.success is False
    assert result.message == "Client not found"
    assert result.error_code == "not_found"


@pytest.mark.asyncio
async def test_recommendations_do_not_assign(store, w2_client):
    await store.add_client(w2_client)

    match = await routing_service.get_tax_pro_recommendations(store, w2_client.id)
    text = routing_service.format_recommendations(match)

    assert match.tax_pro.id == "tp-001"
    assert "## Alternative Options" in text
    assert (await store.get_client(w2_client.id)).assigned_tax_pro_id is None
    assert (await store.get_tax_pro("tp-001")).current_load == 3


@pytest.mark.asyncio
async def test_assess_complexity_does_not_store_score(store, crypto_client):
    await store.add_client(crypto_client)

    assessment = await routing_service.assess_complexity(store, crypto_client.id)

    assert assessment.score == 55
    assert assessment.level == ComplexityLevel.COMPLEX
    assert assessment.required_specializations == ["individual", "crypto"]
    assert (await store.get_client(crypto_client.id)).complexity_score == 0


@pytest.mark.asyncio
async def test_directory_lists_every_staff_member(store):
    text = routing_service.format_tax_pro_directory(await routing_service.list_tax_professionals(store))

    assert text.startswith("# Available Tax Professionals")
    assert "Dr. Patricia Martinez 🟢" in text
    assert "2 slots remaining" in text


@pytest.mark.asyncio
async def test_appointment_duration_and_snapshot(store, w2_client):
    w2_client.intake_completed = True
    await store.add_client(w2_client)
    when = datetime.now(timezone.utc) + timedelta(days=3)

    appointment = await routing_service.create_appointment(store, w2_client.id, "tp-001", when)

    assert appointment.duration == 15
    assert appointment.type == AppointmentType.VIRTUAL
    assert appointment.estimated_complexity == ComplexityLevel.SIMPLE
    assert appointment.intake_score == 100
    assert appointment.scheduled_at.tzinfo is None
    assert (await store.get_client(w2_client.id)).appointment_id == appointment.id


@pytest.mark.asyncio
async def test_appointment_with_unknown_tax_pro(store, w2_client):
    await store.add_client(w2_client)
    with pytest.raises(NotFoundError):
        await routing_service.create_appointment(store, w2_client.id, "tp-999", datetime.utcnow())


@pytest.mark.asyncio
async def test_estimate_reports_savings_only_after_intake(store, w2_client):
    await store.add_client(w2_client)

    estimate = await routing_service.get_appointment_estimate(store, w2_client.id)
    assert estimate.estimated_duration == 30
    assert estimate.savings == 0
    assert "Incomplete" in estimate.message

    await store.update_client(w2_client, intake_completed=True)
    estimate = await routing_service.get_appointment_estimate(store, w2_client.id)
    assert estimate.estimated_duration == 15
    assert estimate.savings == 15


@pytest.mark.asyncio
async def test_appointment_snapshot_survives_client_changes(store, w2_client):
    await store.add_client(w2_client)
    when = datetime.now(timezone.utc) + timedelta(days=3)
    appointment = await routing_service.create_appointment(store, w2_client.id, "tp-001", when)
    assert appointment.duration == 30
    assert appointment.intake_score == 0
    assert appointment.estimated_complexity == ComplexityLevel.SIMPLE

    await store.update_client(
        w2_client,
        intake_completed=True,
        complexity_score=90,
        income_types=[IncomeType.CRYPTO_INCOME.value],
        has_crypto=True,
        has_foreign_accounts=True,
    )
    result = await routing_service.route_client_to_tax_pro(store, w2_client.id)
    assert result.success is True
    assert (await store.get_client(w2_client.id)).complexity_score == 85

    reloaded = await store.get_appointment(appointment.id)
    await store.db.refresh(reloaded)
    assert reloaded.intake_score == 0
    assert reloaded.estimated_complexity == ComplexityLevel.SIMPLE
    assert reloaded.duration == 30
