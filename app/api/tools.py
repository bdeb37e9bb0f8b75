"""
Command-tool protocol endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Depends
from app.api.deps import get_store
from app.schemas.tools import PromptDescription, PromptResponse, ToolCall, ToolDescription, ToolResult
from app.services import prompts, tools
from app.services.store import ProfileStore

router = APIRouter()


@router.get("/tools", response_model=List[ToolDescription])
async def list_tools():
    return tools.list_tools()


@router.post("/tools/{name}", response_model=ToolResult)
async def call_tool(name: str, call: ToolCall, store: ProfileStore = Depends(get_store)):
    """
    Invoke a tool.

    Service failures come back as is_error results; only an unknown tool
    name is an HTTP error (404).
    """
    return await tools.call_tool(store, name, call.arguments)


@router.get("/prompts", response_model=List[PromptDescription])
async def list_prompts():
    return prompts.list_prompts()


@router.get("/prompts/{name}", response_model=PromptResponse)
async def get_prompt(name: str, client_id: Optional[str] = None):
    arguments = {"client_id": client_id} if client_id else {}
    return prompts.get_prompt(name, arguments)
