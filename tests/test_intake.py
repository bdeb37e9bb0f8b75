"""Test the intake script state machine and answer classification."""

import pytest
from app.core.exceptions import InvalidStateError, NotFoundError
from app.models.enums import FilingStatus, IntakeStep, SessionStatus
from app.services import intake_service
from app.services.answer_classifier import KeywordAnswerClassifier, parse_address, parse_dependent


@pytest.mark.asyncio
async def test_start_creates_client_and_asks_first_question(store):
    session, turn = await intake_service.start_intake(store)

    assert turn.message == "What is your full legal name?"
    assert turn.current_step == IntakeStep.PERSONAL_INFO
    assert await store.get_client(session.client_id) is not None


@pytest.mark.asyncio
async def test_start_with_unknown_id_creates_that_client(store):
    session, _ = await intake_service.start_intake(store, "walk-in-42")
    assert session.client_id == "walk-in-42"
    assert (await store.get_client("walk-in-42")).id == "walk-in-42"


@pytest.mark.asyncio
async def test_start_resumes_active_session(store):
    session, _ = await intake_service.start_intake(store)
    await intake_service.process_intake_response(store, session.id, "Jane Doe")

    resumed, turn = await intake_service.start_intake(store, session.client_id)

    assert resumed.id == session.id
    assert turn.message == "What is your email address?"


@pytest.mark.asyncio
async def test_full_script_builds_profile(store, intake_answers):
    session, _ = await intake_service.start_intake(store)

    turns = [await intake_service.process_intake_response(store, session.id, answer) for answer in intake_answers]

    assert [turn.completed for turn in turns] == [False] * (len(intake_answers) - 1) + [True]
    assert turns[-1].status == SessionStatus.COMPLETED
    assert turns[-1].current_step == IntakeStep.COMPLETE

    client = await store.get_client(session.client_id)
    assert (client.first_name, client.last_name) == ("Jane", "Doe")
    assert client.email == "jane@example.com"
    assert client.phone == "555-123-4567"
    assert client.date_of_birth == "03/15/1985"
    assert client.address == {"street": "123 Main St", "city": "Springfield", "state": "IL", "zip": "62701"}
    assert client.filing_status == FilingStatus.MARRIED_FILING_JOINTLY
    assert client.dependents == []
    assert {job["employer"] for job in client.employment_info} == {"Acme Corp", "Uber"}
    assert client.income_types == ["gig_economy", "wages_w2", "investment_income", "dividends"]
    assert client.deductions == ["mortgage_interest", "charitable_donations", "401k_contributions", "ira_contributions"]
    assert client.intake_completed is True
    assert client.intake_completed_at is not None

    session = await store.get_session(session.id)
    assert len(session.responses) == len(intake_answers)
    assert session.completed_steps[0] == "personal_info"
    assert "dependents" in session.completed_steps


@pytest.mark.asyncio
async def test_answering_a_completed_session_is_rejected(store, intake_answers):
    session, _ = await intake_service.start_intake(store)
    for answer in intake_answers:
        await intake_service.process_intake_response(store, session.id, answer)

    with pytest.raises(InvalidStateError):
        await intake_service.process_intake_response(store, session.id, "one more thing")


@pytest.mark.asyncio
async def test_unknown_session(store):
    with pytest.raises(NotFoundError):
        await intake_service.process_intake_response(store, "missing", "hello")


@pytest.mark.asyncio
async def test_dependents_step_collects_records(store, intake_answers):
    session, _ = await intake_service.start_intake(store)
    for answer in intake_answers[:6]:
        await intake_service.process_intake_response(store, session.id, answer)

    turn = await intake_service.process_intake_response(store, session.id, "Yes, two kids")
    assert turn.current_step == IntakeStep.DEPENDENTS
    turn = await intake_service.process_intake_response(
        store, session.id, "Emma Doe, daughter, 03/15/2015, 12; Liam Doe, son, 2018-07-01, 6 months"
    )

    assert turn.current_step == IntakeStep.EMPLOYMENT
    client = await store.get_client(session.client_id)
    assert [d["first_name"] for d in client.dependents] == ["Emma", "Liam"]
    assert client.dependents[1]["months_lived_with"] == 6


@pytest.mark.asyncio
async def test_progress_and_abandon(store, intake_answers):
    session, _ = await intake_service.start_intake(store)
    for answer in intake_answers[:6]:
        await intake_service.process_intake_response(store, session.id, answer)

    progress = await intake_service.get_intake_progress(store, session.id)
    assert progress.current_step == IntakeStep.DEPENDENTS
    assert progress.completed_steps == ["personal_info", "filing_status"]
    assert progress.total_steps == 10
    assert progress.percent_complete == 20

    abandoned = await intake_service.abandon_intake(store, session.id)
    assert abandoned.status == SessionStatus.ABANDONED
    with pytest.raises(InvalidStateError):
        await intake_service.process_intake_response(store, session.id, "back again")


def test_ends_step_on_no_and_none():
    classifier = KeywordAnswerClassifier()
    assert classifier.ends_step(IntakeStep.DEPENDENTS, "No.")
    assert classifier.ends_step(IntakeStep.DEPENDENTS, "None")
    assert not classifier.ends_step(IntakeStep.DEPENDENTS, "I know I have one")
    assert not classifier.ends_step(IntakeStep.DEPENDENTS, "Yes, two kids")
    assert classifier.ends_step(IntakeStep.SPECIAL_SITUATIONS, "No, none of those")
    assert classifier.ends_step(IntakeStep.SPECIAL_SITUATIONS, "None")
    assert classifier.ends_step(IntakeStep.SPECIAL_SITUATIONS, "Nothing, none")
    assert not classifier.ends_step(IntakeStep.SPECIAL_SITUATIONS, "Yes, I sold bitcoin")


def test_unrecognized_answers_yield_empty_delta():
    classifier = KeywordAnswerClassifier()
    assert classifier.classify(IntakeStep.FILING_STATUS, "not sure yet").is_empty()
    assert classifier.classify(IntakeStep.REVIEW, "looks good").is_empty()


def test_parsers():
    assert parse_address("42 Elm Rd, Austin, TX 78701")["state"] == "TX"
    assert parse_dependent("just some text") is None


@pytest.mark.asyncio
async def test_no_none_skips_rest_of_special_situations(store, intake_answers):
    session, _ = await intake_service.start_intake(store)
    for answer in intake_answers[:16]:
        turn = await intake_service.process_intake_response(store, session.id, answer)
    assert turn.current_step == IntakeStep.SPECIAL_SITUATIONS

    turn = await intake_service.process_intake_response(store, session.id, "No, none")

    assert turn.current_step == IntakeStep.DOCUMENT_UPLOAD
    assert turn.message.startswith("Please upload or confirm")


@pytest.mark.asyncio
async def test_bare_none_skips_rest_of_special_situations(store, intake_answers):
    session, _ = await intake_service.start_intake(store)
    for answer in intake_answers[:16]:
        await intake_service.process_intake_response(store, session.id, answer)

    turn = await intake_service.process_intake_response(store, session.id, "None")

    assert turn.current_step == IntakeStep.DOCUMENT_UPLOAD
