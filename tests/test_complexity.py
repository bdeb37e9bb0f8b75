"""Test complexity scoring, tiers and required specializations."""

import pytest
from app.models.client import Client
from app.models.enums import ComplexityLevel, DeductionType, FilingStatus, IncomeType, Specialization
from app.services.complexity import (
    appointment_duration,
    calculate_complexity_score,
    complexity_rank,
    get_complexity_level,
    get_required_specializations,
)


def test_w2_single_filer_scores_zero(w2_client):
    assert calculate_complexity_score(w2_client) == 0
    assert get_complexity_level(0) == ComplexityLevel.SIMPLE


def test_crypto_client_score(crypto_client):
    # crypto income 30 + crypto flag 25
    assert calculate_complexity_score(crypto_client) == 55


def test_score_sums_every_table():
    client = Client(
        filing_status=FilingStatus.MARRIED_FILING_JOINTLY,
        income_types=[IncomeType.WAGES_W2.value, IncomeType.DIVIDENDS.value],
        deductions=[DeductionType.MORTGAGE_INTEREST.value, DeductionType.MEDICAL_EXPENSES.value],
        dependents=[{"first_name": "Kid"}],
    )
    # 5 + 0 + 5 + 5 + 10 + 5
    assert calculate_complexity_score(client) == 30


def test_dependents_are_capped():
    client = Client(dependents=[{"first_name": f"Kid{i}"} for i in range(7)])
    assert calculate_complexity_score(client) == 20


def test_score_is_clamped_to_100():
    client = Client(
        income_types=[IncomeType.FOREIGN_INCOME.value, IncomeType.CRYPTO_INCOME.value, IncomeType.RENTAL_INCOME.value],
        has_crypto=True,
        has_foreign_accounts=True,
        has_rental_property=True,
    )
    assert calculate_complexity_score(client) == 100


def test_unknown_tags_contribute_nothing():
    client = Client(income_types=["lottery_ticket"], deductions=["yacht"])
    assert calculate_complexity_score(client) == 0


@pytest.mark.parametrize("score, level", [
    (0, ComplexityLevel.SIMPLE),
    (20, ComplexityLevel.SIMPLE),
    (21, ComplexityLevel.MODERATE),
    (50, ComplexityLevel.MODERATE),
    (51, ComplexityLevel.COMPLEX),
    (80, ComplexityLevel.COMPLEX),
    (81, ComplexityLevel.EXPERT),
    (100, ComplexityLevel.EXPERT),
])
def test_tier_boundaries(score, level):
    assert get_complexity_level(score) == level


def test_complexity_rank_orders_tiers():
    assert complexity_rank("simple") < complexity_rank(ComplexityLevel.MODERATE) < complexity_rank("complex") < complexity_rank("expert")


def test_required_specializations_start_with_individual(w2_client):
    assert get_required_specializations(w2_client) == [Specialization.INDIVIDUAL]


def test_business_flag_alone_requires_self_employment_and_small_business():
    client = Client(has_business_income=True)
    assert get_required_specializations(client) == [
        Specialization.INDIVIDUAL,
        Specialization.SELF_EMPLOYMENT,
        Specialization.SMALL_BUSINESS,
    ]


def test_flags_and_income_tags_share_specializations():
    client = Client(
        income_types=[IncomeType.GIG_ECONOMY.value, IncomeType.CAPITAL_GAINS.value, IncomeType.FOREIGN_INCOME.value],
        has_rental_property=True,
        has_crypto=True,
    )
    assert get_required_specializations(client) == [
        Specialization.INDIVIDUAL,
        Specialization.SELF_EMPLOYMENT,
        Specialization.INVESTMENTS,
        Specialization.REAL_ESTATE,
        Specialization.CRYPTO,
        Specialization.FOREIGN_INCOME,
    ]


def test_completed_intake_shortens_appointments():
    assert appointment_duration(ComplexityLevel.SIMPLE, intake_completed=False) == 30
    assert appointment_duration(ComplexityLevel.SIMPLE, intake_completed=True) == 15
    assert appointment_duration(ComplexityLevel.EXPERT, intake_completed=False) == 90
    assert appointment_duration(ComplexityLevel.EXPERT, intake_completed=True) == 45


def test_every_tag_and_flag_saturates_at_100():
    client = Client(
        filing_status=FilingStatus.MARRIED_FILING_SEPARATELY,
        income_types=[tag.value for tag in IncomeType],
        deductions=[tag.value for tag in DeductionType],
        has_crypto=True,
        has_foreign_accounts=True,
        has_rental_property=True,
        has_business_income=True,
        dependents=[{"first_name": f"Kid{i}"} for i in range(10)],
    )
    assert calculate_complexity_score(client) == 100


def test_scoring_is_idempotent(crypto_client):
    assert calculate_complexity_score(crypto_client) == calculate_complexity_score(crypto_client)
