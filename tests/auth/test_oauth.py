"""
Tests for the QuickBooks OAuth flow.

The Intuit token endpoint is served by httpx.MockTransport.
"""

from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from invoice_assistant.auth.oauth import (
    AUTHORIZE_URL,
    TOKEN_URL,
    OAuthSessionManager,
    QuickBooksOAuthClient,
    parse_callback_url,
)
from invoice_assistant.services.errors import AuthUrlError, CallbackError

REDIRECT_URI = "http://testserver/api/auth/callback"
STATE = "test-state"
CALLBACK_URL = f"{REDIRECT_URI}?code=auth-code-123&realmId=9130347596842384658&state={STATE}"

TOKEN_RESPONSE = {
    "access_token": "eyJlbmMiOiJBMTI4Q0JDLUhTMjU2",
    "refresh_token": "AB11728405843ZqdAcnDO",
    "token_type": "bearer",
    "expires_in": 3600,
    "x_refresh_token_expires_in": 8726400,
}


def _token_endpoint(seen, status_code=200, payload=None):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status_code, json=TOKEN_RESPONSE if payload is None else payload)
    return handler


def _oauth_client(handler=None, client_id="test-client-id"):
    return QuickBooksOAuthClient(
        client_id=client_id,
        client_secret="test-client-secret",
        redirect_uri=REDIRECT_URI,
        transport=httpx.MockTransport(handler or _token_endpoint([])),
    )


def test_parse_callback_url():
    assert parse_callback_url(CALLBACK_URL) == {
        "code": "auth-code-123",
        "realmId": "9130347596842384658",
        "state": STATE,
    }


class TestAuthorizationUrl:

    def test_contains_client_scopes_and_state(self, repository):
        manager = OAuthSessionManager(_oauth_client(), repository, state=STATE)

        url = manager.get_authorization_url()

        assert url.startswith(AUTHORIZE_URL + "?")
        params = parse_qs(urlparse(url).query)
        assert params["client_id"] == ["test-client-id"]
        assert params["redirect_uri"] == [REDIRECT_URI]
        assert params["response_type"] == ["code"]
        assert params["state"] == [STATE]
        assert params["scope"] == ["com.intuit.quickbooks.accounting openid profile email"]

    def test_missing_client_id_raises_auth_url_error(self, repository):
        manager = OAuthSessionManager(_oauth_client(client_id=""), repository, state=STATE)

        with pytest.raises(AuthUrlError):
            manager.get_authorization_url()


class TestHandleCallback:

    @pytest.mark.asyncio
    async def test_exchanges_code_and_goes_live(self, repository):
        seen = []
        manager = OAuthSessionManager(_oauth_client(_token_endpoint(seen)), repository, state=STATE)

        token = await manager.handle_callback(CALLBACK_URL)

        assert token.access_token == TOKEN_RESPONSE["access_token"]
        assert token.refresh_token == TOKEN_RESPONSE["refresh_token"]
        assert token.expires_in == 3600
        assert token.realm_id == "9130347596842384658"
        assert repository.mode == "live"
        assert repository.realm_id == "9130347596842384658"

        request = seen[0]
        assert str(request.url) == TOKEN_URL
        assert request.headers["Authorization"].startswith("Basic ")
        form = parse_qs(request.content.decode())
        assert form["grant_type"] == ["authorization_code"]
        assert form["code"] == ["auth-code-123"]
        assert form["redirect_uri"] == [REDIRECT_URI]

    @pytest.mark.asyncio
    async def test_state_mismatch_is_rejected(self, repository):
        seen = []
        manager = OAuthSessionManager(_oauth_client(_token_endpoint(seen)), repository, state=STATE)

        with pytest.raises(CallbackError):
            await manager.handle_callback(f"{REDIRECT_URI}?code=abc&realmId=1&state=forged")

        assert seen == []
        assert repository.mode == "mock"

    @pytest.mark.asyncio
    async def test_denied_authorization(self, repository):
        manager = OAuthSessionManager(_oauth_client(), repository, state=STATE)

        with pytest.raises(CallbackError):
            await manager.handle_callback(f"{REDIRECT_URI}?error=access_denied&state={STATE}")

        assert repository.mode == "mock"

    @pytest.mark.asyncio
    async def test_missing_code(self, repository):
        manager = OAuthSessionManager(_oauth_client(), repository, state=STATE)

        with pytest.raises(CallbackError):
            await manager.handle_callback(f"{REDIRECT_URI}?realmId=1&state={STATE}")

    @pytest.mark.asyncio
    async def test_token_endpoint_failure(self, repository):
        seen = []
        handler = _token_endpoint(seen, status_code=400, payload={"error": "invalid_grant"})
        manager = OAuthSessionManager(_oauth_client(handler), repository, state=STATE)

        with pytest.raises(CallbackError):
            await manager.handle_callback(CALLBACK_URL)

        assert repository.mode == "mock"

    @pytest.mark.asyncio
    async def test_token_without_realm_stays_mock(self, repository):
        manager = OAuthSessionManager(_oauth_client(), repository, state=STATE)

        token = await manager.handle_callback(f"{REDIRECT_URI}?code=abc&state={STATE}")

        assert token.realm_id is None
        assert repository.mode == "mock"
