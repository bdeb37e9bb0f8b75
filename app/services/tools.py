"""
Command-tool registry.

Each tool takes a dict of arguments and returns text; service exceptions
become is_error results instead of propagating.
"""
import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence
from loguru import logger
from pydantic import TypeAdapter, ValidationError
from app.core.exceptions import IntakeServiceError, NotFoundError
from app.models.enums import AppointmentType
from app.schemas.client import ClientResponse
from app.schemas.tools import TextContent, ToolDescription, ToolResult
from app.services import checklist_service, client_service, intake_service, reminder_service, routing_service
from app.services.store import ProfileStore

ToolHandler = Callable[[ProfileStore, Dict[str, Any]], Awaitable[ToolResult]]

_datetime_adapter = TypeAdapter(datetime)


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    input_schema: Dict[str, Any]
    handler: ToolHandler


TOOLS: Dict[str, Tool] = {}

CLIENT_ID = {"client_id": {"type": "string", "description": "The client ID"}}
SESSION_ID = {"session_id": {"type": "string", "description": "The intake session ID"}}


def tool(name: str, description: str, properties: Optional[Dict[str, Any]] = None, required: Sequence[str] = ()):
    """Register a tool handler under name"""
    def decorator(func: ToolHandler) -> ToolHandler:
        TOOLS[name] = Tool(
            name=name,
            description=description,
            input_schema={"type": "object", "properties": properties or {}, "required": list(required)},
            handler=func,
        )
        return func
    return decorator


def text_result(text: str, is_error: bool = False) -> ToolResult:
    return ToolResult(content=[TextContent(text=text)], is_error=is_error)


def json_result(payload: Any, is_error: bool = False) -> ToolResult:
    return text_result(json.dumps(payload, indent=2, default=str), is_error=is_error)


def list_tools() -> List[ToolDescription]:
    return [
        ToolDescription(name=t.name, description=t.description, input_schema=t.input_schema)
        for t in TOOLS.values()
    ]


async def call_tool(store: ProfileStore, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
    """
    Invoke a registered tool.

    Raises:
        NotFoundError: If no tool has that name
    """
    registered = TOOLS.get(name)
    if registered is None:
        raise NotFoundError(f"Unknown tool: {name}", details={"tool": name})

    arguments = arguments or {}
    missing = [arg for arg in registered.input_schema["required"] if arguments.get(arg) in (None, "")]
    if missing:
        return text_result(f"Error: missing required argument(s): {', '.join(missing)}", is_error=True)

    try:
        return await registered.handler(store, arguments)
    except IntakeServiceError as exc:
        logger.warning(f"Tool {name} failed: {exc.message}")
        return text_result(f"Error: {exc.message}", is_error=True)
    except ValidationError as exc:
        logger.warning(f"Tool {name} rejected arguments: {exc}")
        return text_result(f"Error: invalid arguments: {exc.errors()[0]['msg']}", is_error=True)


# Intake

@tool(
    "start_intake",
    "Start a new client intake session or resume an existing one. This begins the conversational "
    "intake process to collect all necessary information before the tax appointment.",
    {"client_id": {"type": "string", "description": "Optional existing client ID to resume intake"}},
)
async def _start_intake(store, args):
    session, turn = await intake_service.start_intake(store, args.get("client_id"))
    return json_result({
        "session_id": session.id,
        "client_id": session.client_id,
        "current_step": turn.current_step.value,
        "next_question": turn.message,
        "message": "Intake session started. Ask the client the next question.",
    })


@tool(
    "process_intake_response",
    "Process a client response during the intake conversation. "
    "Send the client's answer to continue gathering information.",
    {**SESSION_ID, "answer": {"type": "string", "description": "The client's response to the current intake question"}},
    required=("session_id", "answer"),
)
async def _process_intake_response(store, args):
    turn = await intake_service.process_intake_response(store, args["session_id"], args["answer"])
    return json_result(turn.model_dump(mode="json"))


@tool(
    "get_intake_progress",
    "Get the current progress of an intake session, including completed steps and remaining questions.",
    SESSION_ID,
    required=("session_id",),
)
async def _get_intake_progress(store, args):
    progress = await intake_service.get_intake_progress(store, args["session_id"])
    return json_result(progress.model_dump(mode="json"))


@tool(
    "get_client_summary",
    "Get a complete summary of a client's intake information, including personal details, "
    "income types, deductions, and special situations.",
    CLIENT_ID,
    required=("client_id",),
)
async def _get_client_summary(store, args):
    return text_result(await client_service.get_intake_summary(store, args["client_id"]))


# Checklist

@tool(
    "generate_document_checklist",
    "Generate a personalized document checklist based on the client's tax situation. This analyzes "
    "income types, deductions, and special situations to create a tailored list of required documents.",
    CLIENT_ID,
    required=("client_id",),
)
async def _generate_document_checklist(store, args):
    checklist = await checklist_service.generate_document_checklist(store, args["client_id"])
    return text_result(checklist_service.format_checklist_for_display(checklist))


@tool(
    "get_document_checklist",
    "Retrieve the current document checklist for a client, showing which documents have been "
    "collected and which are still pending.",
    CLIENT_ID,
    required=("client_id",),
)
async def _get_document_checklist(store, args):
    checklist = await checklist_service.get_document_checklist(store, args["client_id"])
    if checklist is None:
        return text_result("No checklist found. Generate one first using generate_document_checklist.")
    return text_result(checklist_service.format_checklist_for_display(checklist))


@tool(
    "mark_document_collected",
    "Mark a specific document as collected/received from the client.",
    {**CLIENT_ID, "document_id": {"type": "string", "description": "The document ID to mark as collected"}},
    required=("client_id", "document_id"),
)
async def _mark_document_collected(store, args):
    result = await checklist_service.mark_document_collected(store, args["client_id"], args["document_id"])
    return json_result(result.model_dump(), is_error=not result.success)


@tool(
    "get_pending_documents",
    "Get a list of required documents that the client has not yet provided.",
    CLIENT_ID,
    required=("client_id",),
)
async def _get_pending_documents(store, args):
    pending = await checklist_service.get_pending_documents(store, args["client_id"])
    if not pending:
        return text_result("All required documents have been collected! ✅")
    lines = [f"- {item.name}: {item.description} (`{item.id}`)" for item in pending]
    return text_result(f"Pending Documents ({len(pending)}):\n\n" + "\n".join(lines))


# Reminders

@tool(
    "create_document_reminders",
    "Create personalized reminders for pending documents. Generates contextual messages like "
    "\"Don't forget your 1099-NEC from Uber\".",
    {**CLIENT_ID, "appointment_id": {"type": "string", "description": "The appointment ID to associate reminders with"}},
    required=("client_id",),
)
async def _create_document_reminders(store, args):
    pending = await checklist_service.get_pending_documents(store, args["client_id"])
    if not pending:
        return text_result("No pending documents to create reminders for.")
    reminders = await reminder_service.create_document_reminders(
        store, args["client_id"], args.get("appointment_id"), pending
    )
    body = "\n\n".join(f"- {r.message} (`{r.id}`)" for r in reminders)
    return text_result(f"Created {len(reminders)} personalized reminders:\n\n{body}")


@tool(
    "get_client_reminders",
    "Get all scheduled and sent reminders for a client.",
    CLIENT_ID,
    required=("client_id",),
)
async def _get_client_reminders(store, args):
    reminders = await reminder_service.get_client_reminders(store, args["client_id"])
    return text_result(reminder_service.format_reminders_for_display(reminders))


@tool(
    "send_reminder",
    "Send a specific reminder to the client via email/SMS.",
    {"reminder_id": {"type": "string", "description": "The reminder ID to send"}},
    required=("reminder_id",),
)
async def _send_reminder(store, args):
    result = await reminder_service.send_reminder(store, args["reminder_id"])
    return json_result(result.model_dump(), is_error=not result.success)


# Complexity, routing and appointments

@tool(
    "calculate_complexity",
    "Calculate the complexity score for a client's tax situation. Returns a score from 0-100 and a "
    "complexity level (simple, moderate, complex, expert).",
    CLIENT_ID,
    required=("client_id",),
)
async def _calculate_complexity(store, args):
    assessment = await routing_service.assess_complexity(store, args["client_id"])
    return json_result(assessment.model_dump(mode="json"))


@tool(
    "route_to_tax_pro",
    "Automatically route a client to the best-matched tax professional based on their complexity "
    "level and required specializations.",
    CLIENT_ID,
    required=("client_id",),
)
async def _route_to_tax_pro(store, args):
    result = await routing_service.route_client_to_tax_pro(store, args["client_id"])
    if result.success:
        return text_result(f"✅ Client routed successfully!\n\n{result.message}")
    return text_result(f"❌ Routing failed: {result.message}", is_error=True)


@tool(
    "get_tax_pro_recommendations",
    "Get recommended tax professionals for a client without automatically assigning one.",
    CLIENT_ID,
    required=("client_id",),
)
async def _get_tax_pro_recommendations(store, args):
    match = await routing_service.get_tax_pro_recommendations(store, args["client_id"])
    return text_result(routing_service.format_recommendations(match))


@tool(
    "create_appointment",
    "Create an appointment for a client with a specific tax professional.",
    {
        **CLIENT_ID,
        "tax_pro_id": {"type": "string", "description": "The tax professional ID"},
        "scheduled_at": {"type": "string", "description": "The appointment date and time (ISO 8601 format)"},
        "type": {"type": "string", "enum": [t.value for t in AppointmentType], "description": "The type of appointment"},
    },
    required=("client_id", "tax_pro_id", "scheduled_at"),
)
async def _create_appointment(store, args):
    scheduled_at = _datetime_adapter.validate_python(args["scheduled_at"])
    appointment_type = TypeAdapter(AppointmentType).validate_python(args["type"]) if args.get("type") else None
    appointment = await routing_service.create_appointment(
        store, args["client_id"], args["tax_pro_id"], scheduled_at, appointment_type
    )
    reminders = await reminder_service.schedule_appointment_reminders(store, appointment)
    return json_result({
        "success": True,
        "appointment": {
            "id": appointment.id,
            "scheduled_at": appointment.scheduled_at.isoformat(),
            "duration": appointment.duration,
            "type": appointment.type.value,
            "estimated_complexity": appointment.estimated_complexity.value,
        },
        "reminders_scheduled": len(reminders),
        "message": f"Appointment created for {appointment.duration} minutes. {len(reminders)} reminders scheduled.",
    })


@tool(
    "get_appointment_estimate",
    "Get an estimate of appointment duration and time savings based on intake completion status.",
    CLIENT_ID,
    required=("client_id",),
)
async def _get_appointment_estimate(store, args):
    estimate = await routing_service.get_appointment_estimate(store, args["client_id"])
    return text_result(estimate.message)


# Utility

@tool(
    "list_tax_professionals",
    "List all available tax professionals with their specializations and current availability.",
)
async def _list_tax_professionals(store, args):
    tax_pros = await routing_service.list_tax_professionals(store)
    return text_result(routing_service.format_tax_pro_directory(tax_pros))


@tool(
    "get_client",
    "Get complete client profile information.",
    CLIENT_ID,
    required=("client_id",),
)
async def _get_client(store, args):
    client = await client_service.get_client(store, args["client_id"])
    return text_result(ClientResponse.model_validate(client).model_dump_json(indent=2))
