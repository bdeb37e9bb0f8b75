"""
Client profile creation and summaries
"""
from typing import Optional
from loguru import logger
from app.models.client import Client
from app.schemas.client import ClientCreate
from app.services.store import ProfileStore
from app.utils.formatting import humanize

SPECIAL_SITUATION_LABELS = (
    ("has_crypto", "Cryptocurrency transactions"),
    ("has_foreign_accounts", "Foreign accounts/income"),
    ("has_rental_property", "Rental property"),
    ("has_business_income", "Business income"),
    ("has_health_insurance", "Marketplace or private health coverage"),
)


async def create_client(store: ProfileStore, data: Optional[ClientCreate] = None, client_id: Optional[str] = None) -> Client:
    """
    Create a client profile.

    Args:
        store: Profile store
        data: Initial attributes; an empty profile when omitted
        client_id: Explicit id, generated when omitted

    Returns:
        The new Client
    """
    fields = {}
    if data is not None:
        fields = data.model_dump(exclude_none=True)
        fields["income_types"] = [tag.value for tag in data.income_types]
        fields["deductions"] = [tag.value for tag in data.deductions]
    if client_id:
        fields["id"] = client_id

    client = await store.add_client(Client(**fields))
    logger.info(f"Created client {client.id}")
    return client


async def get_client(store: ProfileStore, client_id: str) -> Client:
    return await store.require_client(client_id)


def format_client_summary(client: Client) -> str:
    """Markdown summary of everything the intake has learned"""
    summary = "## Client Intake Summary\n\n"
    summary += f"**Name:** {client.full_name}\n"
    summary += f"**Email:** {client.email}\n"
    summary += f"**Phone:** {client.phone}\n"
    if client.date_of_birth:
        summary += f"**Date of Birth:** {client.date_of_birth}\n"
    summary += f"**Filing Status:** {humanize(client.filing_status)}\n\n"

    if client.dependents:
        summary += f"**Dependents:** {len(client.dependents)}\n"
        for dependent in client.dependents:
            name = f"{dependent.get('first_name', '')} {dependent.get('last_name', '')}".strip()
            summary += f"  - {name} ({dependent.get('relationship') or 'dependent'})\n"
        summary += "\n"

    if client.employment_info:
        summary += "**Employers:**\n"
        for job in client.employment_info:
            summary += f"  - {job['employer']} ({humanize(job['income_type'])})\n"
        summary += "\n"

    if client.income_types:
        summary += "**Income Types:**\n"
        for income_type in client.income_types:
            summary += f"  - {humanize(income_type)}\n"
        summary += "\n"

    if client.deductions:
        summary += "**Potential Deductions:**\n"
        for deduction in client.deductions:
            summary += f"  - {humanize(deduction)}\n"
        summary += "\n"

    summary += "**Special Situations:**\n"
    situations = [label for flag, label in SPECIAL_SITUATION_LABELS if getattr(client, flag)]
    for label in situations:
        summary += f"  - {label}\n"
    if not situations:
        summary += "  - None\n"

    summary += f"\n**Complexity Score:** {client.complexity_score}/100\n"
    summary += f"**Intake Completed:** {'Yes' if client.intake_completed else 'No'}\n"
    return summary


async def get_intake_summary(store: ProfileStore, client_id: str) -> str:
    client = await store.require_client(client_id)
    return format_client_summary(client)
