"""
Complexity scoring.

Everything here is a pure function of the client's attributes. The weight
tables are read-only mappings; tags missing from a table contribute zero.
"""
from types import MappingProxyType
from typing import List
from app.models.enums import (
    ComplexityLevel,
    DeductionType,
    FilingStatus,
    IncomeType,
    Specialization,
)

FILING_STATUS_WEIGHTS = MappingProxyType({
    FilingStatus.SINGLE: 0,
    FilingStatus.MARRIED_FILING_JOINTLY: 5,
    FilingStatus.MARRIED_FILING_SEPARATELY: 15,
    FilingStatus.HEAD_OF_HOUSEHOLD: 10,
    FilingStatus.QUALIFYING_WIDOW: 10,
})

INCOME_TYPE_WEIGHTS = MappingProxyType({
    IncomeType.WAGES_W2: 0,
    IncomeType.SELF_EMPLOYMENT_1099NEC: 20,
    IncomeType.FREELANCE_1099MISC: 15,
    IncomeType.GIG_ECONOMY: 15,
    IncomeType.RENTAL_INCOME: 25,
    IncomeType.INVESTMENT_INCOME: 10,
    IncomeType.DIVIDENDS: 5,
    IncomeType.CAPITAL_GAINS: 15,
    IncomeType.RETIREMENT_DISTRIBUTIONS: 5,
    IncomeType.SOCIAL_SECURITY: 5,
    IncomeType.UNEMPLOYMENT: 5,
    IncomeType.ALIMONY_RECEIVED: 10,
    IncomeType.GAMBLING_WINNINGS: 10,
    IncomeType.CRYPTO_INCOME: 30,
    IncomeType.FOREIGN_INCOME: 35,
    IncomeType.OTHER: 10,
})

DEDUCTION_WEIGHTS = MappingProxyType({
    DeductionType.MORTGAGE_INTEREST: 5,
    DeductionType.PROPERTY_TAXES: 5,
    DeductionType.STATE_LOCAL_TAXES: 5,
    DeductionType.CHARITABLE_DONATIONS: 5,
    DeductionType.MEDICAL_EXPENSES: 10,
    DeductionType.STUDENT_LOAN_INTEREST: 0,
    DeductionType.EDUCATOR_EXPENSES: 0,
    DeductionType.HOME_OFFICE: 15,
    DeductionType.BUSINESS_EXPENSES: 20,
    DeductionType.HSA_CONTRIBUTIONS: 5,
    DeductionType.IRA_CONTRIBUTIONS: 5,
    DeductionType.CONTRIBUTIONS_401K: 0,
    DeductionType.CHILDCARE_EXPENSES: 5,
    DeductionType.ALIMONY_PAID: 10,
    DeductionType.MOVING_EXPENSES: 10,
    DeductionType.NONE: 0,
})

# Keyed by Client attribute name
SPECIAL_SITUATION_WEIGHTS = MappingProxyType({
    "has_crypto": 25,
    "has_foreign_accounts": 30,
    "has_rental_property": 20,
    "has_business_income": 20,
})

DEPENDENT_WEIGHT = 5
DEPENDENT_CAP = 20
MAX_SCORE = 100

# Upper bound (inclusive) of each tier below expert
COMPLEXITY_THRESHOLDS = (
    (20, ComplexityLevel.SIMPLE),
    (50, ComplexityLevel.MODERATE),
    (80, ComplexityLevel.COMPLEX),
)

COMPLEXITY_ORDER = tuple(ComplexityLevel)

STANDARD_DURATIONS = MappingProxyType({
    ComplexityLevel.SIMPLE: 30,
    ComplexityLevel.MODERATE: 45,
    ComplexityLevel.COMPLEX: 60,
    ComplexityLevel.EXPERT: 90,
})

OPTIMIZED_DURATIONS = MappingProxyType({
    ComplexityLevel.SIMPLE: 15,
    ComplexityLevel.MODERATE: 20,
    ComplexityLevel.COMPLEX: 30,
    ComplexityLevel.EXPERT: 45,
})

SELF_EMPLOYMENT_INCOME = (
    IncomeType.SELF_EMPLOYMENT_1099NEC,
    IncomeType.FREELANCE_1099MISC,
    IncomeType.GIG_ECONOMY,
)
INVESTMENT_INCOME = (
    IncomeType.INVESTMENT_INCOME,
    IncomeType.DIVIDENDS,
    IncomeType.CAPITAL_GAINS,
)

LEVEL_INTERPRETATIONS = MappingProxyType({
    ComplexityLevel.SIMPLE: "Standard return with W-2 income and basic deductions. Quick appointment expected.",
    ComplexityLevel.MODERATE: "Multiple income sources or itemized deductions. May require additional documentation.",
    ComplexityLevel.COMPLEX: "Business income, rental properties, or investments. Requires experienced tax professional.",
    ComplexityLevel.EXPERT: "Advanced situations like foreign accounts, crypto, or audit representation. Requires specialist.",
})


def calculate_complexity_score(client) -> int:
    """
    Score a client's tax situation from 0 to 100.

    Args:
        client: Anything with the Client profile attributes

    Returns:
        Sum of the table weights, clamped to 100
    """
    score = FILING_STATUS_WEIGHTS.get(client.filing_status, 0)
    score += sum(INCOME_TYPE_WEIGHTS.get(tag, 0) for tag in client.income_types or [])
    score += sum(DEDUCTION_WEIGHTS.get(tag, 0) for tag in client.deductions or [])
    score += sum(
        weight for flag, weight in SPECIAL_SITUATION_WEIGHTS.items()
        if getattr(client, flag, False)
    )
    score += min(len(client.dependents or []) * DEPENDENT_WEIGHT, DEPENDENT_CAP)
    return min(score, MAX_SCORE)


def get_complexity_level(score: int) -> ComplexityLevel:
    for upper_bound, level in COMPLEXITY_THRESHOLDS:
        if score <= upper_bound:
            return level
    return ComplexityLevel.EXPERT


def complexity_rank(level) -> int:
    """Ordinal position: simple=0 ... expert=3"""
    return COMPLEXITY_ORDER.index(ComplexityLevel(level))


def get_required_specializations(client) -> List[Specialization]:
    """
    Specializations a preparer needs for this client, in a stable display order.

    "individual" is always first. A business-income flag alone is enough
    for self_employment as well as small_business.
    """
    income_types = set(client.income_types or [])
    specs = [Specialization.INDIVIDUAL]

    if client.has_business_income or income_types.intersection(SELF_EMPLOYMENT_INCOME):
        specs.append(Specialization.SELF_EMPLOYMENT)
        if client.has_business_income:
            specs.append(Specialization.SMALL_BUSINESS)

    if income_types.intersection(INVESTMENT_INCOME):
        specs.append(Specialization.INVESTMENTS)

    if client.has_rental_property or IncomeType.RENTAL_INCOME in income_types:
        specs.append(Specialization.REAL_ESTATE)

    if client.has_crypto or IncomeType.CRYPTO_INCOME in income_types:
        specs.append(Specialization.CRYPTO)

    if client.has_foreign_accounts or IncomeType.FOREIGN_INCOME in income_types:
        specs.append(Specialization.FOREIGN_INCOME)

    return specs


def appointment_duration(level: ComplexityLevel, intake_completed: bool) -> int:
    """Appointment length in minutes; completed intake gets the shorter table"""
    table = OPTIMIZED_DURATIONS if intake_completed else STANDARD_DURATIONS
    return table[level]
