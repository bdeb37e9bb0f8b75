"""
Tax professional matching, assignment and appointment booking.

Scoring per candidate (higher is better):
- tier: -100 if the candidate's maximum tier is below the client's, otherwise +20
- specializations: matched / required * 50
- load balancing: (capacity - load) / capacity * 20
- quality: rating * 2

The tier penalty is additive rather than a filter; a penalized candidate
only wins when every candidate is penalized and still scores >= 0, which
the current weights cannot produce.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence
from loguru import logger
from app.core.config import settings
from app.core.exceptions import ExhaustedError, NotFoundError
from app.models.appointment import Appointment
from app.models.client import Client
from app.models.enums import AppointmentType, ComplexityLevel, Specialization
from app.models.tax_professional import TaxProfessional
from app.schemas.appointment import AppointmentEstimate
from app.schemas.routing import ComplexityAssessment, RoutingResult, TaxProResponse
from app.services.complexity import (
    LEVEL_INTERPRETATIONS,
    OPTIMIZED_DURATIONS,
    STANDARD_DURATIONS,
    appointment_duration,
    calculate_complexity_score,
    complexity_rank,
    get_complexity_level,
    get_required_specializations,
)
from app.services.store import ProfileStore
from app.utils.formatting import humanize_list, stars, tag_value, title, to_naive_utc

TIER_PENALTY = -100
TIER_BONUS = 20
SPECIALIZATION_WEIGHT = 50
LOAD_WEIGHT = 20
RATING_WEIGHT = 2
MAX_ALTERNATES = 2

NO_STAFF_AVAILABLE = "No tax professionals are currently available. Please try again later."


@dataclass
class ScoredTaxPro:
    tax_pro: TaxProfessional
    score: float
    reasons: List[str] = field(default_factory=list)


@dataclass
class TaxProMatch:
    """Result of a best-match search; tax_pro is None when nobody fits"""
    tax_pro: Optional[TaxProfessional]
    reason: str
    alternates: List[TaxProfessional]
    complexity_score: int
    complexity_level: ComplexityLevel
    required_specializations: List[Specialization]


def score_tax_pro(
    tax_pro: TaxProfessional,
    level: ComplexityLevel,
    required_specs: Sequence[Specialization]
) -> ScoredTaxPro:
    """Score one candidate against a client's tier and specialization needs"""
    score = 0.0
    reasons = []

    if complexity_rank(tax_pro.max_complexity) < complexity_rank(level):
        score += TIER_PENALTY
        reasons.append("Cannot handle complexity level")
    else:
        score += TIER_BONUS
        reasons.append("Can handle complexity")

    offered = set(tax_pro.specializations or [])
    matched = [spec for spec in required_specs if spec in offered]
    score += (len(matched) / len(required_specs)) * SPECIALIZATION_WEIGHT
    if len(matched) == len(required_specs):
        reasons.append("Full specialization match")
    elif matched:
        reasons.append(f"Partial specialization match ({len(matched)}/{len(required_specs)})")

    capacity = tax_pro.max_daily_appointments
    score += ((capacity - tax_pro.current_load) / capacity) * LOAD_WEIGHT
    score += tax_pro.rating * RATING_WEIGHT

    return ScoredTaxPro(tax_pro=tax_pro, score=score, reasons=reasons)


def rank_tax_pros(
    candidates: Sequence[TaxProfessional],
    level: ComplexityLevel,
    required_specs: Sequence[Specialization]
) -> List[ScoredTaxPro]:
    """Score and sort candidates, best first; ties keep candidate order"""
    scored = [score_tax_pro(pro, level, required_specs) for pro in candidates]
    return sorted(scored, key=lambda s: s.score, reverse=True)


def select_tax_pro(client, candidates: Sequence[TaxProfessional]) -> TaxProMatch:
    """
    Pick the best candidate for a client without touching storage.

    Args:
        client: Client profile
        candidates: Available staff with spare capacity, in directory order

    Returns:
        TaxProMatch; alternates are the next two ranked candidates
    """
    score = calculate_complexity_score(client)
    level = get_complexity_level(score)
    required_specs = get_required_specializations(client)

    if not candidates:
        return TaxProMatch(None, NO_STAFF_AVAILABLE, [], score, level, required_specs)

    ranked = rank_tax_pros(candidates, level, required_specs)
    best = ranked[0]

    if best.score < 0:
        reason = (
            f"No tax professional available can handle your case "
            f"(Complexity: {level.value}, Specializations needed: "
            f"{', '.join(tag_value(spec) for spec in required_specs)})"
        )
        return TaxProMatch(None, reason, [], score, level, required_specs)

    alternates = [s.tax_pro for s in ranked[1:1 + MAX_ALTERNATES]]
    reason = format_routing_reason(best.tax_pro, level, required_specs)
    return TaxProMatch(best.tax_pro, reason, alternates, score, level, required_specs)


def format_routing_reason(
    tax_pro: TaxProfessional,
    level: ComplexityLevel,
    required_specs: Sequence[Specialization]
) -> str:
    lines = [
        "Based on your tax situation:",
        "",
        f"📊 **Complexity Level:** {title(level)}",
        f"🎯 **Specializations Needed:** {humanize_list(required_specs)}",
        "",
        f"We've matched you with **{tax_pro.name}** because:",
        f"- Expertise in: {humanize_list(tax_pro.specializations)}",
        f"- Can handle {tag_value(tax_pro.max_complexity)} complexity cases",
        f"- Rating: {stars(tax_pro.rating)}",
        "- Currently has availability",
    ]
    return "\n".join(lines) + "\n"


async def find_best_tax_pro(store: ProfileStore, client: Client) -> TaxProMatch:
    """Best match for a client; stores the freshly computed complexity score on the client"""
    score = calculate_complexity_score(client)
    await store.update_client(client, complexity_score=score)
    candidates = await store.list_available_tax_pros()
    return select_tax_pro(client, candidates)


async def route_client_to_tax_pro(store: ProfileStore, client_id: str) -> RoutingResult:
    """
    Assign a client to the best available tax professional.

    The staff member's load goes up by exactly one through a conditional
    update; if that member filled up in the meantime the routing fails
    rather than overbooking.
    """
    client = await store.get_client(client_id)
    if not client:
        return RoutingResult(success=False, message="Client not found", error_code=NotFoundError.error_code)

    match = await find_best_tax_pro(store, client)
    alternates = [TaxProResponse.model_validate(alt) for alt in match.alternates]

    if match.tax_pro is None:
        logger.warning(f"No tax professional for client {client_id}: {match.reason}")
        return RoutingResult(success=False, message=match.reason, alternates=alternates, error_code=ExhaustedError.error_code)

    if not await store.increment_tax_pro_load(match.tax_pro.id):
        logger.warning(f"Tax professional {match.tax_pro.id} reached capacity while routing client {client_id}")
        return RoutingResult(
            success=False,
            message=f"{match.tax_pro.name} has no remaining capacity. Please try again.",
            alternates=alternates,
            error_code=ExhaustedError.error_code
        )

    await store.update_client(client, assigned_tax_pro_id=match.tax_pro.id)
    logger.info(
        f"Routed client {client_id} to {match.tax_pro.id} "
        f"(score={match.complexity_score}, level={match.complexity_level.value})"
    )

    return RoutingResult(
        success=True,
        message=match.reason,
        tax_pro=TaxProResponse.model_validate(match.tax_pro),
        alternates=alternates
    )


async def get_tax_pro_recommendations(store: ProfileStore, client_id: str) -> TaxProMatch:
    """Best match plus alternates without assigning anyone"""
    client = await store.require_client(client_id)
    return await find_best_tax_pro(store, client)


def format_recommendations(match: TaxProMatch) -> str:
    output = "# Tax Professional Recommendations\n\n"
    output += match.reason + "\n\n"

    if match.alternates:
        output += "## Alternative Options\n\n"
        for index, alt in enumerate(match.alternates, start=1):
            output += f"{index}. **{alt.name}**\n"
            output += f"   - Specialties: {humanize_list(alt.specializations)}\n"
            output += f"   - Rating: {stars(alt.rating)}\n\n"

    return output


async def assess_complexity(store: ProfileStore, client_id: str) -> ComplexityAssessment:
    """Score breakdown for a client; nothing is written"""
    client = await store.require_client(client_id)
    score = calculate_complexity_score(client)
    level = get_complexity_level(score)

    return ComplexityAssessment(
        client_id=client.id,
        score=score,
        level=level,
        required_specializations=[tag_value(spec) for spec in get_required_specializations(client)],
        interpretation=LEVEL_INTERPRETATIONS[level]
    )


async def list_tax_professionals(store: ProfileStore) -> List[TaxProfessional]:
    return await store.list_tax_pros()


def format_tax_pro_directory(tax_pros: Sequence[TaxProfessional]) -> str:
    output = "# Available Tax Professionals\n\n"
    for pro in tax_pros:
        output += f"## {pro.name} {'🟢' if pro.has_capacity else '🔴'}\n"
        output += f"- **ID:** {pro.id}\n"
        output += f"- **Email:** {pro.email}\n"
        output += f"- **Specializations:** {humanize_list(pro.specializations)}\n"
        output += f"- **Max Complexity:** {tag_value(pro.max_complexity)}\n"
        output += f"- **Availability:** {pro.remaining_slots} slots remaining\n"
        output += f"- **Rating:** {stars(pro.rating)}\n\n"
    return output


async def create_appointment(
    store: ProfileStore,
    client_id: str,
    tax_pro_id: str,
    scheduled_at: datetime,
    appointment_type: Optional[AppointmentType] = None
) -> Appointment:
    """
    Book an appointment and snapshot the client's intake score and tier.

    The tier comes from the client's stored complexity score, so it reflects
    the last routing or recommendation run.
    """
    client = await store.require_client(client_id)
    await store.require_tax_pro(tax_pro_id)

    level = get_complexity_level(client.complexity_score)
    appointment = Appointment(
        client_id=client.id,
        tax_pro_id=tax_pro_id,
        scheduled_at=to_naive_utc(scheduled_at),
        duration=appointment_duration(level, client.intake_completed),
        type=appointment_type or AppointmentType(settings.DEFAULT_APPOINTMENT_TYPE),
        intake_score=100 if client.intake_completed else 0,
        estimated_complexity=level
    )
    await store.add_appointment(appointment)
    await store.update_client(client, appointment_id=appointment.id)

    logger.info(
        f"Booked appointment {appointment.id} for client {client_id} with {tax_pro_id} "
        f"({appointment.duration} min, {level.value})"
    )
    return appointment


async def get_appointment(store: ProfileStore, appointment_id: str) -> Appointment:
    return await store.require_appointment(appointment_id)


async def get_appointment_estimate(store: ProfileStore, client_id: str) -> AppointmentEstimate:
    client = await store.require_client(client_id)
    level = get_complexity_level(client.complexity_score)
    standard = STANDARD_DURATIONS[level]
    optimized = OPTIMIZED_DURATIONS[level]
    savings = standard - optimized

    message = "## Appointment Time Estimate\n\n"
    message += f"📊 **Your Tax Complexity:** {title(level)}\n\n"
    if client.intake_completed:
        message += "✅ **Intake Status:** Complete\n\n"
        message += f"⏱️ **Estimated Appointment Time:** {optimized} minutes\n"
        message += f"💪 **Time Saved:** {savings} minutes (compared to {standard} min without pre-intake)\n\n"
        message += (
            "Thanks to completing your intake and gathering documents ahead of time, "
            "we can focus on what matters during your appointment!"
        )
    else:
        message += "⚠️ **Intake Status:** Incomplete\n\n"
        message += f"⏱️ **Current Estimated Time:** {standard} minutes\n"
        message += f"💡 **Complete your intake to reduce to:** {optimized} minutes\n"
        message += f"📈 **Potential Time Savings:** {savings} minutes\n"

    return AppointmentEstimate(
        client_id=client.id,
        complexity_level=level,
        intake_completed=client.intake_completed,
        standard_duration=standard,
        optimized_duration=optimized,
        estimated_duration=optimized if client.intake_completed else standard,
        savings=savings if client.intake_completed else 0,
        message=message
    )

