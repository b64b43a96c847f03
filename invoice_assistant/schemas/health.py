"""
Health check endpoint schemas.

The health endpoint is PUBLIC and returns a simple status indicator plus the
active invoice data source.
"""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Response model for GET /health endpoint.

    Used by load balancers, monitoring systems, and deployment checks.
    """

    status: str = Field(
        default="ok",
        description="Health status of the API (always 'ok' if responding)",
        examples=["ok"]
    )
    invoice_source: Literal["mock", "live"] = Field(
        default="mock",
        description="Whether invoices come from the demo dataset or QuickBooks"
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "example": {
                "status": "ok",
                "invoice_source": "mock"
            }
        }
