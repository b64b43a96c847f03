"""
Pydantic schemas for the tools panel endpoints.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class ToolDescriptorResponse(BaseModel):
    """Public description of one tool."""
    name: str = Field(..., examples=["summarizeInvoice"])
    description: str = Field(..., examples=["Get a natural language summary of an invoice"])
    parameters: Dict[str, Any] = Field(
        ...,
        description="JSON-schema style object describing the tool arguments"
    )


class ToolListResponse(BaseModel):
    """Response model for GET /api/tools."""
    tools: List[ToolDescriptorResponse]


class ToolExecutionResponse(BaseModel):
    """Response model for POST /api/tools/{tool_name}."""
    tool: str = Field(..., description="Name of the executed tool")
    result: Any = Field(..., description="Tool result (shape depends on the tool)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "tool": "analyzeInvoices",
                    "result": {
                        "type": "amounts",
                        "data": {"total": 600.0, "average": 200.0, "count": 3}
                    }
                }
            ]
        }
    }
