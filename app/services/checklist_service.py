"""Checklist generation and document collection service."""

from datetime import datetime
from typing import Iterable, List, Optional
from loguru import logger
from app.core.exceptions import InvalidStateError, NotFoundError
from app.models.checklist import DocumentChecklist
from app.models.checklist_item import ChecklistItem
from app.schemas.checklist import ChecklistProgress
from app.schemas.common import OperationResult
from app.services.document_templates import (
    CATEGORY_HEADINGS,
    DEDUCTION_TO_DOCUMENTS,
    DOCUMENT_TEMPLATES,
    FLAG_TO_DOCUMENTS,
    GIG_MILEAGE_DOCUMENT,
    GIG_PLATFORM_DOCUMENTS,
    IDENTITY_DOCUMENTS,
    INCOME_TO_DOCUMENTS,
)
from app.services.store import ProfileStore


def gig_document_keys(employers: Iterable[str]) -> List[str]:
    """Platform 1099 documents for gig employers, plus a mileage log when any match"""
    names = [employer.lower() for employer in employers if employer]
    keys = [
        key for fragment, key in GIG_PLATFORM_DOCUMENTS.items()
        if any(fragment in name for name in names)
    ]
    if keys:
        keys.append(GIG_MILEAGE_DOCUMENT)
    return keys


def collect_document_keys(client) -> List[str]:
    """Deduplicated document keys for a client, in first-seen order.

    Args:
        client: Client profile

    Returns:
        Document keys; unknown income or deduction tags contribute nothing
    """
    keys = dict.fromkeys(IDENTITY_DOCUMENTS)

    for income_type in client.income_types or []:
        keys.update(dict.fromkeys(INCOME_TO_DOCUMENTS.get(income_type, ())))

    for deduction in client.deductions or []:
        keys.update(dict.fromkeys(DEDUCTION_TO_DOCUMENTS.get(deduction, ())))

    for flag, flag_keys in FLAG_TO_DOCUMENTS.items():
        if getattr(client, flag, False):
            keys.update(dict.fromkeys(flag_keys))

    employers = [entry.get("employer", "") for entry in client.employment_info or []]
    keys.update(dict.fromkeys(gig_document_keys(employers)))

    return [key for key in keys if key in DOCUMENT_TEMPLATES]


def build_checklist_items(client, keys: Iterable[str]) -> List[ChecklistItem]:
    """Concrete items with fresh ids, required first then by category name"""
    collected = set(client.documents_collected or [])
    items = [
        ChecklistItem(
            document_key=key,
            name=DOCUMENT_TEMPLATES[key]["name"],
            description=DOCUMENT_TEMPLATES[key]["description"],
            category=DOCUMENT_TEMPLATES[key]["category"],
            required=DOCUMENT_TEMPLATES[key]["required"],
            source=DOCUMENT_TEMPLATES[key]["source"],
            collected=key in collected,
        )
        for key in keys
    ]
    items.sort(key=lambda item: (not item.required, item.category.value))
    for position, item in enumerate(items):
        item.position = position
    return items


async def generate_document_checklist(store: ProfileStore, client_id: str) -> DocumentChecklist:
    """Build the client's checklist, replacing any previous one.

    Also rewrites the client's pending list with the ids of required,
    uncollected items.

    Args:
        store: Profile store
        client_id: Client ID

    Returns:
        The saved DocumentChecklist

    Raises:
        NotFoundError: If the client does not exist
    """
    client = await store.require_client(client_id)
    items = build_checklist_items(client, collect_document_keys(client))

    now = datetime.utcnow()
    checklist = DocumentChecklist(client_id=client.id, generated_at=now, last_updated=now, items=items)
    await store.save_checklist(checklist)

    pending = [item.id for item in items if item.is_pending]
    await store.update_client(client, documents_pending=pending)

    logger.info(f"Generated checklist for client {client_id}: {len(items)} documents, {len(pending)} pending")
    return checklist


async def get_document_checklist(store: ProfileStore, client_id: str) -> Optional[DocumentChecklist]:
    return await store.get_checklist(client_id)


async def require_document_checklist(store: ProfileStore, client_id: str) -> DocumentChecklist:
    checklist = await store.get_checklist(client_id)
    if checklist is None:
        raise NotFoundError(f"No checklist generated for client {client_id}", details={"client_id": client_id})
    return checklist


async def get_pending_documents(store: ProfileStore, client_id: str) -> List[ChecklistItem]:
    """Required, uncollected items; empty when no checklist exists"""
    checklist = await store.get_checklist(client_id)
    if checklist is None:
        return []
    return checklist.pending_items


async def mark_document_collected(store: ProfileStore, client_id: str, document_id: str) -> OperationResult:
    """Mark a checklist item collected.

    Failures are returned, not raised, and leave everything untouched.

    Args:
        store: Profile store
        client_id: Client ID
        document_id: Checklist item id

    Returns:
        OperationResult
    """
    checklist = await store.get_checklist(client_id)
    if checklist is None:
        return OperationResult(success=False, message="Checklist not found", error_code=InvalidStateError.error_code)

    item = next((i for i in checklist.items if i.id == document_id), None)
    if item is None:
        return OperationResult(success=False, message="Document not found in checklist", error_code=NotFoundError.error_code)

    item.collected = True
    await store.touch_checklist(checklist)

    client = await store.get_client(client_id)
    if client:
        collected = list(client.documents_collected or [])
        if item.document_key not in collected:
            collected.append(item.document_key)
        pending = [pid for pid in client.documents_pending or [] if pid != item.id]
        await store.update_client(client, documents_collected=collected, documents_pending=pending)

    logger.info(f"Client {client_id} collected {item.document_key}")
    return OperationResult(success=True, message=f'Marked "{item.name}" as collected')


def checklist_progress(checklist: DocumentChecklist) -> ChecklistProgress:
    required = checklist.required_items
    collected = sum(1 for item in required if item.collected)
    return ChecklistProgress(
        required_total=len(required),
        collected=collected,
        pending=len(required) - collected,
        percent_complete=round(checklist.progress_percentage, 1)
    )


def format_checklist_for_display(checklist: DocumentChecklist) -> str:
    """Markdown checklist grouped by category"""
    output = "# Document Checklist\n\n"
    output += f"Generated: {checklist.generated_at.strftime('%m/%d/%Y')}\n\n"

    categories = list(dict.fromkeys(item.category for item in checklist.items))
    for category in categories:
        output += f"## {CATEGORY_HEADINGS.get(category, category.value)}\n\n"
        for item in checklist.items:
            if item.category != category:
                continue
            if item.collected:
                status = "✅"
            elif item.required:
                status = "⬜ **Required**"
            else:
                status = "⬜ Optional"
            output += f"{status} **{item.name}**\n"
            output += f"   {item.description}\n"
            if item.source:
                output += f"   📍 Source: {item.source}\n"
            output += f"   ID: `{item.id}`\n\n"

    progress = checklist_progress(checklist)
    output += "---\n"
    output += f"**Progress:** {progress.collected}/{progress.required_total} required documents collected\n"
    output += f"**Pending:** {progress.pending} required documents remaining\n"
    return output
