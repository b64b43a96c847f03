"""
Invoice repository.

Serves invoices from a live QuickBooks session when one has been initialized,
otherwise from the static mock dataset. Live failures degrade to mock data
wherever a mock answer exists.

RULES:
1. The repository is in exactly one mode: "mock" or "live"
2. A failed live initialization never changes the current mode
3. The live session is replaced wholesale, never mutated in place
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from invoice_assistant.schemas.invoices import Invoice
from invoice_assistant.services.errors import InvoiceNotFoundError, ProviderError
from invoice_assistant.services.normalizer import normalize_invoice
from invoice_assistant.services.quickbooks_client import (
    MAX_INVOICES,
    InvoiceProvider,
    QuickBooksAPIError,
)

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[str, str], InvoiceProvider]

_INVOICE_REF_PREFIX = re.compile(r"^(?:inv-)?#?\s*", re.IGNORECASE)


def clean_invoice_ref(ref: str) -> str:
    """
    Strip display prefixes from an invoice reference.

    "7", "INV-7", "inv-7" and "#7" all clean to "7".
    """
    return _INVOICE_REF_PREFIX.sub("", ref, count=1).strip()


@dataclass(frozen=True)
class LiveSession:
    """An initialized QuickBooks session."""
    client: InvoiceProvider
    realm_id: str


class InvoiceRepository:
    """
    Invoice data access for one process.

    Args:
        mock_invoices: Canonical invoices served in mock mode
        provider_factory: Builds a live provider from (access_token, realm_id)
    """

    def __init__(self, mock_invoices: Sequence[Invoice], provider_factory: ProviderFactory):
        self._mock_invoices: List[Invoice] = list(mock_invoices)
        self._provider_factory = provider_factory
        self._session: Optional[LiveSession] = None

    @property
    def mode(self) -> str:
        return "live" if self._session is not None else "mock"

    @property
    def realm_id(self) -> Optional[str]:
        session = self._session
        return session.realm_id if session is not None else None

    def initialize_live_session(self, access_token: str, realm_id: str) -> bool:
        """
        Switch to live mode with a freshly built provider client.

        Returns:
            True on success; False if the client could not be built, in which
            case the current session (or mock mode) is kept.
        """
        try:
            client = self._provider_factory(access_token, realm_id)
        except Exception as e:
            logger.error(f"Failed to initialize QuickBooks client: {e}")
            return False

        self._session = LiveSession(client=client, realm_id=realm_id)
        logger.info(f"Live QuickBooks session initialized for realm_id={realm_id}")
        return True

    def _find_mock(self, ref: str) -> Optional[Invoice]:
        for invoice in self._mock_invoices:
            if invoice.doc_number == ref:
                return invoice

        clean_id = clean_invoice_ref(ref)
        for invoice in self._mock_invoices:
            if invoice.id == clean_id:
                return invoice
        return None

    async def list_invoices(self) -> List[Invoice]:
        """
        List invoices from the active data source.

        Never raises: live provider failures are logged and answered with the
        mock list.
        """
        session = self._session
        if session is None:
            return list(self._mock_invoices)

        try:
            raw_invoices = await session.client.list_invoices(limit=MAX_INVOICES)
        except Exception as e:
            logger.error(f"Error fetching invoices, falling back to mock data: {e}")
            return list(self._mock_invoices)

        return [normalize_invoice(raw) for raw in raw_invoices]

    async def get_invoice(self, ref: str) -> Invoice:
        """
        Resolve an invoice by id or display number.

        An exact docNumber match wins over the cleaned-id match, in both modes.

        Raises:
            InvoiceNotFoundError: ref does not resolve in the active data source
            ProviderError: live lookup failed (non-404) and no mock match exists
        """
        session = self._session
        if session is None:
            invoice = self._find_mock(ref)
            if invoice is None:
                raise InvoiceNotFoundError(ref)
            return invoice

        clean_id = clean_invoice_ref(ref)
        try:
            raw = await session.client.find_invoice_by_doc_number(ref)
            if raw is None:
                raw = await session.client.get_invoice(clean_id)
            return normalize_invoice(raw)
        except QuickBooksAPIError as e:
            logger.error(f"Error fetching invoice {clean_id}: {e}")
            error = (
                InvoiceNotFoundError(ref)
                if e.status_code == 404
                else ProviderError(str(e), status_code=e.status_code)
            )
        except Exception as e:
            logger.error(f"Error fetching invoice {clean_id}: {e}")
            error = ProviderError(str(e))

        invoice = self._find_mock(ref)
        if invoice is not None:
            logger.info(f"Serving invoice {ref} from mock data after live lookup failure")
            return invoice
        raise error
