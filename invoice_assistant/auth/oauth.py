"""
QuickBooks OAuth 2.0 session management.

Flow:
1. get_authorization_url() - send the user to Intuit's consent page
2. Intuit redirects back to /api/auth/callback?code=...&realmId=...&state=...
3. handle_callback(url) - exchange the code for a token and switch the
   invoice repository to live mode

The session manager holds no durable state; the issued token is returned to
the caller, which stores it in the session cookie.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urlencode, urlparse

import httpx

from invoice_assistant.schemas.auth import OAuthToken
from invoice_assistant.services.errors import AuthUrlError, CallbackError
from invoice_assistant.services.invoice_repository import InvoiceRepository

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://appcenter.intuit.com/connect/oauth2"
TOKEN_URL = "https://oauth.platform.intuit.com/oauth2/v1/tokens/bearer"

SCOPE_ACCOUNTING = "com.intuit.quickbooks.accounting"
SCOPE_OPENID = "openid"
SCOPE_PROFILE = "profile"
SCOPE_EMAIL = "email"
DEFAULT_SCOPES = [SCOPE_ACCOUNTING, SCOPE_OPENID, SCOPE_PROFILE, SCOPE_EMAIL]


def parse_callback_url(url: str) -> Dict[str, str]:
    """Return the first value of every query parameter in a callback URL."""
    query = parse_qs(urlparse(url).query)
    return {key: values[0] for key, values in query.items() if values}


class QuickBooksOAuthClient:
    """
    Intuit OAuth 2.0 client.

    Args:
        client_id: Intuit app client id
        client_secret: Intuit app client secret
        redirect_uri: Callback URL registered with Intuit
        environment: "sandbox" or "production" (recorded for the API client)
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        environment: str = "sandbox",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id
        self._client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.environment = environment
        self._transport = transport

    def authorize_uri(self, scopes: List[str], state: str) -> str:
        """
        Build the consent page URL.

        Raises:
            ValueError: If the client id or redirect URI is not configured
        """
        if not self.client_id:
            raise ValueError("QuickBooks client id is not configured")
        if not self.redirect_uri:
            raise ValueError("QuickBooks redirect URI is not configured")

        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": " ".join(scopes),
            "response_type": "code",
            "state": state,
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    async def create_token(self, callback_url: str) -> Dict[str, Any]:
        """
        Exchange the authorization code in a callback URL for a token.

        Returns:
            Token endpoint JSON plus the ``realmId`` from the callback URL

        Raises:
            ValueError: If the callback carries an error or no code
            httpx.HTTPError: If the token endpoint call fails
        """
        params = parse_callback_url(callback_url)
        if "error" in params:
            raise ValueError(f"Authorization was denied: {params['error']}")
        code = params.get("code")
        if not code:
            raise ValueError("Callback URL does not contain an authorization code")

        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.post(
                TOKEN_URL,
                data={
                    "grant_type": "authorization_code",
                    "code": code,
                    "redirect_uri": self.redirect_uri,
                },
                auth=(self.client_id, self._client_secret),
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            token = response.json()

        if params.get("realmId"):
            token["realmId"] = params["realmId"]
        return token


class OAuthSessionManager:
    """
    Drives the OAuth flow and hands live credentials to the repository.

    Args:
        oauth_client: Authorization URL builder and token exchanger
        repository: Repository switched to live mode after a successful callback
        state: Static anti-forgery token sent with the authorization request
    """

    def __init__(self, oauth_client: QuickBooksOAuthClient, repository: InvoiceRepository, state: str):
        self._oauth_client = oauth_client
        self._repository = repository
        self._state = state

    def get_authorization_url(self) -> str:
        """
        Raises:
            AuthUrlError: If the URL cannot be built
        """
        try:
            return self._oauth_client.authorize_uri(scopes=DEFAULT_SCOPES, state=self._state)
        except Exception as e:
            logger.error(f"Error generating auth URL: {e}")
            raise AuthUrlError(str(e)) from e

    async def handle_callback(self, request_url: str) -> OAuthToken:
        """
        Exchange the callback for a token and initialize the live session.

        Raises:
            CallbackError: If the state does not match or the exchange fails
        """
        state = parse_callback_url(request_url).get("state")
        if state is not None and state != self._state:
            logger.warning("OAuth callback rejected: state mismatch")
            raise CallbackError("state mismatch")

        try:
            raw_token = await self._oauth_client.create_token(request_url)
            token = OAuthToken(
                access_token=raw_token["access_token"],
                refresh_token=raw_token.get("refresh_token", ""),
                token_type=raw_token.get("token_type", "bearer"),
                expires_in=raw_token.get("expires_in"),
                x_refresh_token_expires_in=raw_token.get("x_refresh_token_expires_in"),
                id_token=raw_token.get("id_token"),
                realm_id=raw_token.get("realmId"),
            )
        except Exception as e:
            logger.error(f"Error handling callback: {e}")
            raise CallbackError(str(e)) from e

        if token.realm_id:
            if not self._repository.initialize_live_session(token.access_token, token.realm_id):
                logger.warning(f"Token issued but live session could not start for realm_id={token.realm_id}")

        logger.info(f"QuickBooks authorization completed (realm_id={token.realm_id})")
        return token
