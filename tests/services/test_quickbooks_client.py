"""
Tests for the QuickBooks Online API client.

HTTP is served by httpx.MockTransport; no network access.
"""

import httpx
import pytest

from invoice_assistant.services.quickbooks_client import (
    MINOR_VERSION,
    QuickBooksAPIError,
    QuickBooksClient,
)


def _client(handler, environment="sandbox"):
    return QuickBooksClient(
        access_token="test-access-token",
        realm_id="4620816365",
        environment=environment,
        transport=httpx.MockTransport(handler),
    )


class TestConstruction:

    def test_requires_access_token(self):
        with pytest.raises(ValueError):
            QuickBooksClient(access_token="", realm_id="1")

    def test_requires_realm_id(self):
        with pytest.raises(ValueError):
            QuickBooksClient(access_token="token", realm_id="")

    def test_rejects_unknown_environment(self):
        with pytest.raises(ValueError):
            QuickBooksClient(access_token="token", realm_id="1", environment="staging")


class TestListInvoices:

    @pytest.mark.asyncio
    async def test_queries_newest_first_with_limit(self, quickbooks_invoices):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json={"QueryResponse": {"Invoice": quickbooks_invoices}})

        invoices = await _client(handler).list_invoices()

        request = seen["request"]
        assert request.url.host == "sandbox-quickbooks.api.intuit.com"
        assert request.url.path == "/v3/company/4620816365/query"
        assert request.url.params["query"] == "SELECT * FROM Invoice ORDERBY Invoice DESC MAXRESULTS 100"
        assert request.url.params["minorversion"] == MINOR_VERSION
        assert request.headers["Authorization"] == "Bearer test-access-token"
        assert invoices == quickbooks_invoices

    @pytest.mark.asyncio
    async def test_empty_query_response(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"QueryResponse": {}})

        assert await _client(handler).list_invoices() == []

    @pytest.mark.asyncio
    async def test_production_host(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["host"] = request.url.host
            return httpx.Response(200, json={"QueryResponse": {}})

        await _client(handler, environment="production").list_invoices()

        assert seen["host"] == "quickbooks.api.intuit.com"

    @pytest.mark.asyncio
    async def test_non_200_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"fault": {"type": "AUTHENTICATION"}})

        with pytest.raises(QuickBooksAPIError) as exc_info:
            await _client(handler).list_invoices()

        assert exc_info.value.status_code == 401


class TestGetInvoice:

    @pytest.mark.asyncio
    async def test_fetches_by_id(self, quickbooks_invoices):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            return httpx.Response(200, json={"Invoice": quickbooks_invoices[0]})

        invoice = await _client(handler).get_invoice("130")

        assert seen["path"] == "/v3/company/4620816365/invoice/130"
        assert invoice["DocNumber"] == "1037"

    @pytest.mark.asyncio
    async def test_404_carries_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"Fault": {"Error": [{"Message": "Object Not Found"}]}})

        with pytest.raises(QuickBooksAPIError) as exc_info:
            await _client(handler).get_invoice("999")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_missing_invoice_payload_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"time": "2026-10-01T00:00:00Z"})

        with pytest.raises(QuickBooksAPIError) as exc_info:
            await _client(handler).get_invoice("130")

        assert exc_info.value.status_code is None


class TestFindInvoiceByDocNumber:

    @pytest.mark.asyncio
    async def test_queries_exact_doc_number(self, quickbooks_invoices):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json={"QueryResponse": {"Invoice": [quickbooks_invoices[0]]}})

        invoice = await _client(handler).find_invoice_by_doc_number("1037")

        request = seen["request"]
        assert request.url.path == "/v3/company/4620816365/query"
        assert request.url.params["query"] == "SELECT * FROM Invoice WHERE DocNumber = '1037'"
        assert invoice["Id"] == "130"

    @pytest.mark.asyncio
    async def test_no_match_returns_none(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"QueryResponse": {}})

        assert await _client(handler).find_invoice_by_doc_number("9999") is None

    @pytest.mark.asyncio
    async def test_quotes_are_escaped(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["query"] = request.url.params["query"]
            return httpx.Response(200, json={"QueryResponse": {}})

        await _client(handler).find_invoice_by_doc_number("O'Brien-1")

        assert seen["query"] == "SELECT * FROM Invoice WHERE DocNumber = 'O\\'Brien-1'"
