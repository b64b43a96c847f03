"""
QuickBooks Online accounting API client.

Thin async wrapper over the QuickBooks v3 REST API used by the invoice
repository in live mode. The repository only depends on the InvoiceProvider
protocol, so tests can swap in an in-memory fake.
"""

import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx

logger = logging.getLogger(__name__)

QUICKBOOKS_API_BASE_URLS = {
    "sandbox": "https://sandbox-quickbooks.api.intuit.com",
    "production": "https://quickbooks.api.intuit.com",
}
MINOR_VERSION = "65"
MAX_INVOICES = 100
INVOICE_SORT_KEY = "Invoice"


class QuickBooksAPIError(Exception):
    """Raised when the QuickBooks API answers with a non-success status."""

    def __init__(self, status_code: Optional[int], message: str):
        self.status_code = status_code
        super().__init__(message)


class InvoiceProvider(Protocol):
    """Capability interface the repository needs from a live data source."""

    async def list_invoices(self, limit: int = MAX_INVOICES) -> List[Dict[str, Any]]:
        """Return raw provider invoice records, newest first."""
        ...

    async def get_invoice(self, invoice_id: str) -> Dict[str, Any]:
        """Return one raw provider invoice record or raise QuickBooksAPIError."""
        ...

    async def find_invoice_by_doc_number(self, doc_number: str) -> Optional[Dict[str, Any]]:
        """Return the raw record whose DocNumber equals ``doc_number``, or None."""
        ...


class QuickBooksClient:
    """
    Invoice provider backed by the QuickBooks Online API.

    Args:
        access_token: OAuth access token from the token exchange
        realm_id: QuickBooks company id (tenant)
        environment: "sandbox" or "production"
        transport: Optional httpx transport (tests use httpx.MockTransport)

    Raises:
        ValueError: If the token, realm id or environment is invalid
    """

    def __init__(
        self,
        access_token: str,
        realm_id: str,
        environment: str = "sandbox",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not access_token:
            raise ValueError("access_token is required")
        if not realm_id:
            raise ValueError("realm_id is required")
        if environment not in QUICKBOOKS_API_BASE_URLS:
            raise ValueError(f"Unknown QuickBooks environment: {environment}")

        self._access_token = access_token
        self.realm_id = realm_id
        self.environment = environment
        self._base_url = QUICKBOOKS_API_BASE_URLS[environment]
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._access_token}",
            "Accept": "application/json",
        }

    async def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        query = {"minorversion": MINOR_VERSION}
        if params:
            query.update(params)

        async with httpx.AsyncClient(base_url=self._base_url, transport=self._transport) as client:
            response = await client.get(
                f"/v3/company/{self.realm_id}{path}",
                params=query,
                headers=self._headers(),
            )

        if response.status_code != 200:
            logger.error(
                f"QuickBooks API error: status={response.status_code}, "
                f"realm_id={self.realm_id}, path={path}"
            )
            raise QuickBooksAPIError(
                response.status_code,
                f"QuickBooks API returned {response.status_code}",
            )

        return response.json()

    async def list_invoices(self, limit: int = MAX_INVOICES) -> List[Dict[str, Any]]:
        """Query up to ``limit`` invoices ordered by the invoice sort key, descending."""
        statement = f"SELECT * FROM Invoice ORDERBY {INVOICE_SORT_KEY} DESC MAXRESULTS {limit}"
        data = await self._get("/query", params={"query": statement})
        invoices = data.get("QueryResponse", {}).get("Invoice", [])
        logger.info(f"Fetched {len(invoices)} invoices from QuickBooks realm {self.realm_id}")
        return invoices

    async def get_invoice(self, invoice_id: str) -> Dict[str, Any]:
        """Fetch a single invoice by its QuickBooks id."""
        data = await self._get(f"/invoice/{invoice_id}")
        invoice = data.get("Invoice")
        if not isinstance(invoice, dict):
            raise QuickBooksAPIError(None, "QuickBooks response did not contain an Invoice")
        return invoice

    async def find_invoice_by_doc_number(self, doc_number: str) -> Optional[Dict[str, Any]]:
        """Query the invoice whose DocNumber matches exactly; None when there is none."""
        escaped = doc_number.replace("\\", "\\\\").replace("'", "\\'")
        statement = f"SELECT * FROM Invoice WHERE DocNumber = '{escaped}'"
        data = await self._get("/query", params={"query": statement})
        invoices = data.get("QueryResponse", {}).get("Invoice", [])
        return invoices[0] if invoices else None
