"""
Invoice API endpoints.

Provides the invoice list and single-invoice lookup used by the invoice panel
and the tools panel.

Flow:
1. GET /api/invoices        - all invoices from the active data source
2. GET /api/invoices?id=X   - one invoice by id or display number
"""

import logging
from typing import Annotated, List, Optional, Union

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from invoice_assistant.auth.dependencies import get_invoice_repository
from invoice_assistant.schemas.invoices import Invoice, InvoiceErrorResponse
from invoice_assistant.services.errors import InvoiceNotFoundError, ProviderError
from invoice_assistant.services.invoice_repository import InvoiceRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.get(
    "",
    response_model=Union[Invoice, List[Invoice]],
    status_code=status.HTTP_200_OK,
    summary="List invoices or fetch one invoice",
    responses={
        404: {"model": InvoiceErrorResponse, "description": "Invoice not found"},
        502: {"model": InvoiceErrorResponse, "description": "QuickBooks lookup failed"},
    },
    description="""
    Without `id`: returns every invoice from the active data source
    (QuickBooks when connected, the demo dataset otherwise). Never fails:
    QuickBooks errors fall back to the demo dataset.

    With `id`: returns one invoice. `id` may be a raw id or a display number
    in any of the forms `N`, `INV-N`, `inv-N` or `#N`.
    """
)
async def get_invoices(
    repository: Annotated[InvoiceRepository, Depends(get_invoice_repository)],
    invoice_ref: Annotated[Optional[str], Query(alias="id", description="Invoice id or display number")] = None,
):
    """
    List invoices, or fetch one when ``id`` is given.

    Returns:
        A list of Invoice, or a single Invoice

    Raises:
        404 {"error": "Invoice not found"} when ``id`` does not resolve
    """
    if not invoice_ref:
        invoices = await repository.list_invoices()
        logger.info(f"Returning {len(invoices)} invoices (source={repository.mode})")
        return invoices

    try:
        invoice = await repository.get_invoice(invoice_ref)
    except InvoiceNotFoundError:
        logger.warning(f"Invoice {invoice_ref} not found (source={repository.mode})")
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Invoice not found"},
        )
    except ProviderError as e:
        logger.error(f"Failed to fetch invoice {invoice_ref}: {e.detail}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"error": "Failed to fetch invoice data"},
        )

    logger.info(f"Returning invoice {invoice.id} (source={repository.mode})")
    return invoice
