"""
Pytest configuration for Invoice Assistant backend tests.

Sets up test environment and global fixtures.
"""
import os
from datetime import date

import httpx
import pytest
from fastapi.testclient import TestClient

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("QUICKBOOKS_CLIENT_ID", "test-client-id")
os.environ.setdefault("QUICKBOOKS_CLIENT_SECRET", "test-client-secret")
os.environ.setdefault("BASE_URL", "http://testserver")
os.environ["CHAT_STREAM_DELAY"] = "0"

from invoice_assistant.auth.dependencies import get_invoice_repository, get_oauth_session_manager  # noqa: E402
from invoice_assistant.auth.oauth import OAuthSessionManager, QuickBooksOAuthClient  # noqa: E402
from invoice_assistant.config import settings  # noqa: E402
from invoice_assistant.main import app  # noqa: E402
from invoice_assistant.services.invoice_repository import InvoiceRepository  # noqa: E402
from invoice_assistant.services.mock_data import load_mock_invoices  # noqa: E402
from invoice_assistant.services.quickbooks_client import QuickBooksAPIError  # noqa: E402

TEST_TODAY = date(2026, 10, 1)


class FakeInvoiceProvider:
    """
    In-memory stand-in for the QuickBooks client.

    Serves raw QuickBooks-shaped records and records every call. Set
    ``list_error`` / ``get_error`` to make the corresponding call raise
    (``get_error`` covers both single-invoice lookups).
    """

    def __init__(self, invoices=None, list_error=None, get_error=None):
        self.invoices = list(invoices or [])
        self.list_error = list_error
        self.get_error = get_error
        self.calls = []

    async def list_invoices(self, limit=100):
        self.calls.append(("list_invoices", limit))
        if self.list_error is not None:
            raise self.list_error
        return list(self.invoices)

    async def get_invoice(self, invoice_id):
        self.calls.append(("get_invoice", invoice_id))
        if self.get_error is not None:
            raise self.get_error
        for invoice in self.invoices:
            if invoice["Id"] == invoice_id:
                return invoice
        raise QuickBooksAPIError(404, "Object Not Found")

    async def find_invoice_by_doc_number(self, doc_number):
        self.calls.append(("find_invoice_by_doc_number", doc_number))
        if self.get_error is not None:
            raise self.get_error
        for invoice in self.invoices:
            if invoice.get("DocNumber") == doc_number:
                return invoice
        return None


@pytest.fixture
def quickbooks_invoices():
    """Raw QuickBooks invoice records as returned by the query endpoint."""
    return [
        {
            "Id": "130",
            "DocNumber": "1037",
            "TxnDate": "2026-09-14",
            "DueDate": "2026-10-14",
            "TotalAmt": 362.07,
            "Balance": 362.07,
            "CustomerRef": {"value": "58", "name": "Sonnenschein Family Store"},
            "CustomerMemo": {"value": "Thank you for your business"},
            "Line": [
                {
                    "Id": "1",
                    "LineNum": 1,
                    "Description": "Rock Fountain",
                    "Amount": 275.0,
                    "DetailType": "SalesItemLineDetail",
                    "SalesItemLineDetail": {
                        "ItemRef": {"value": "5", "name": "Rock Fountain"},
                        "UnitPrice": 275,
                        "Qty": 1,
                    },
                },
                {"Amount": 362.07, "DetailType": "SubTotalLineDetail"},
            ],
        },
        {
            "Id": "129",
            "DocNumber": "1036",
            "TxnDate": "2026-09-12",
            "DueDate": "2026-10-12",
            "TotalAmt": 477.5,
            "Balance": 0,
            "CustomerRef": {"value": "8", "name": "0969 Ocean View Road"},
            "Line": [],
        },
    ]


@pytest.fixture
def mock_invoices():
    """The five demo invoices, dated TEST_TODAY."""
    return load_mock_invoices(today=TEST_TODAY)


@pytest.fixture
def fake_provider(quickbooks_invoices):
    return FakeInvoiceProvider(invoices=quickbooks_invoices)


@pytest.fixture
def repository(mock_invoices, fake_provider):
    """Repository in mock mode whose live provider is the fake provider."""
    return InvoiceRepository(
        mock_invoices=mock_invoices,
        provider_factory=lambda access_token, realm_id: fake_provider,
    )


@pytest.fixture
def live_repository(repository):
    """Repository already switched to live mode (realm 4620816365)."""
    assert repository.initialize_live_session("test-access-token", "4620816365")
    return repository


@pytest.fixture
def token_payload():
    """Intuit token endpoint response."""
    return {
        "access_token": "eyJlbmMiOiJBMTI4Q0JDLUhTMjU2",
        "refresh_token": "AB11728405843ZqdAcnDO",
        "token_type": "bearer",
        "expires_in": 3600,
        "x_refresh_token_expires_in": 8726400,
    }


@pytest.fixture
def oauth_session_manager(repository, token_payload):
    """Session manager whose token endpoint is an httpx.MockTransport."""
    oauth_client = QuickBooksOAuthClient(
        client_id="test-client-id",
        client_secret="test-client-secret",
        redirect_uri="http://testserver/api/auth/callback",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=token_payload)),
    )
    return OAuthSessionManager(oauth_client, repository, state=settings.OAUTH_STATE)


@pytest.fixture
def client(repository, oauth_session_manager):
    """
    Test client for the FastAPI app with the repository and OAuth session
    manager replaced by the fixtures above.
    """
    app.dependency_overrides[get_invoice_repository] = lambda: repository
    app.dependency_overrides[get_oauth_session_manager] = lambda: oauth_session_manager

    yield TestClient(app)

    # Clean up after test
    app.dependency_overrides.clear()
