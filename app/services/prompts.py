"""
Canned workflow prompts served alongside the tools
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from app.core.exceptions import NotFoundError
from app.schemas.tools import PromptDescription, PromptResponse


@dataclass(frozen=True)
class Prompt:
    name: str
    description: str
    template: str
    arguments: List[Dict[str, object]] = field(default_factory=list)


CLIENT_ID_ARGUMENT = {"name": "client_id", "description": "The client ID", "required": True}

PROMPTS = {
    prompt.name: prompt for prompt in (
        Prompt(
            name="new_client_intake",
            description="Start a complete intake process for a new tax client",
            template=(
                "You are a friendly tax intake assistant. Start a new intake session and guide the client "
                "through the process conversationally.\n\n"
                "Your goals:\n"
                "1. Collect all necessary personal and tax information\n"
                "2. Understand their income sources (W-2, 1099, self-employment, investments, etc.)\n"
                "3. Identify potential deductions\n"
                "4. Uncover any special situations (crypto, foreign accounts, rental properties)\n"
                "5. Generate a personalized document checklist\n"
                "6. Route them to the right tax professional\n\n"
                "Be conversational, helpful, and explain why you're asking each question. "
                "Start by introducing yourself and asking for their name."
            ),
        ),
        Prompt(
            name="prepare_for_appointment",
            description="Help a client prepare all documents for their upcoming appointment",
            template=(
                "Help the client with ID \"{client_id}\" prepare for their tax appointment.\n\n"
                "1. First, get their document checklist\n"
                "2. Review which documents are still pending\n"
                "3. Provide helpful tips on where to find each document\n"
                "4. Create personalized reminders\n"
                "5. Show them the estimated appointment time and any time savings from being prepared"
            ),
            arguments=[CLIENT_ID_ARGUMENT],
        ),
        Prompt(
            name="send_document_reminders",
            description="Send reminders for all pending documents",
            template=(
                "Create and send personalized document reminders for client \"{client_id}\".\n\n"
                "1. Get the list of pending documents\n"
                "2. Create personalized, contextual reminders (e.g., \"Don't forget your 1099-NEC from Uber\")\n"
                "3. Send the reminders via the client's preferred channel"
            ),
            arguments=[CLIENT_ID_ARGUMENT],
        ),
    )
}


def list_prompts() -> List[PromptDescription]:
    return [
        PromptDescription(name=p.name, description=p.description, arguments=p.arguments)
        for p in PROMPTS.values()
    ]


def get_prompt(name: str, arguments: Optional[Dict[str, str]] = None) -> PromptResponse:
    """
    Render a prompt.

    Raises:
        NotFoundError: If no prompt has that name
    """
    prompt = PROMPTS.get(name)
    if prompt is None:
        raise NotFoundError(f"Unknown prompt: {name}", details={"prompt": name})

    arguments = arguments or {}
    values = {arg["name"]: arguments.get(arg["name"], f"<{arg['name']}>") for arg in prompt.arguments}
    return PromptResponse(name=prompt.name, description=prompt.description, text=prompt.template.format(**values))
