"""
Tools panel API endpoints.

- GET  /api/tools              - describe every invoice tool
- POST /api/tools/{tool_name}  - validate arguments and run one tool

Validation failures come back as structured 422 errors; the handler is never
run with invalid arguments.
"""

import logging
from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status
from fastapi.encoders import jsonable_encoder

from invoice_assistant.agents.tools import ToolRegistry
from invoice_assistant.auth.dependencies import get_tool_registry
from invoice_assistant.schemas.tools import (
    ToolDescriptorResponse,
    ToolExecutionResponse,
    ToolListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tools", tags=["tools"])


@router.get(
    "",
    response_model=ToolListResponse,
    status_code=status.HTTP_200_OK,
    summary="List invoice tools",
)
async def list_tools(
    tools: Annotated[ToolRegistry, Depends(get_tool_registry)]
) -> ToolListResponse:
    """Describe every registered tool with its parameter schema."""
    return ToolListResponse(
        tools=[ToolDescriptorResponse(**descriptor) for descriptor in tools.describe()]
    )


@router.post(
    "/{tool_name}",
    response_model=ToolExecutionResponse,
    status_code=status.HTTP_200_OK,
    summary="Run an invoice tool",
    description="""
    Run one tool with the JSON body as its arguments.

    Errors:
    - 404 UNKNOWN_TOOL: no tool with that name
    - 422 VALIDATION_ERROR: arguments missing or mistyped
    - 404 INVOICE_NOT_FOUND: the invoice reference did not resolve
    - 502 PROVIDER_ERROR: QuickBooks failed and no demo invoice matched
    """
)
async def run_tool(
    tool_name: str,
    tools: Annotated[ToolRegistry, Depends(get_tool_registry)],
    args: Annotated[Optional[Dict[str, Any]], Body()] = None,
) -> ToolExecutionResponse:
    """
    Execute a tool.

    Domain errors (InvoiceAssistantError subclasses) propagate to the
    application exception handler registered in main.py.
    """
    result = await tools.execute(tool_name, args or {})
    logger.info(f"Tool {tool_name} completed")
    return ToolExecutionResponse(tool=tool_name, result=jsonable_encoder(result))
