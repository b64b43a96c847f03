"""
Health check route for the Invoice Assistant backend.

This endpoint is PUBLIC and provides a simple status check for load
balancers, monitoring, and deployment verification.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from invoice_assistant.auth.dependencies import get_invoice_repository
from invoice_assistant.schemas.health import HealthResponse
from invoice_assistant.services.invoice_repository import InvoiceRepository

logger = logging.getLogger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description=(
        "Public health check endpoint. Returns a simple status indicator and "
        "the active invoice data source."
    ),
    status_code=200,
)
async def health_check(
    repository: Annotated[InvoiceRepository, Depends(get_invoice_repository)]
) -> HealthResponse:
    """
    Example response:
        {
            "status": "ok",
            "invoice_source": "mock"
        }
    """
    logger.debug("Health check endpoint called")

    return HealthResponse(status="ok", invoice_source=repository.mode)
