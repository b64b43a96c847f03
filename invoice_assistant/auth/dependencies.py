"""
FastAPI dependency functions.

The invoice repository and OAuth session manager are built once per app
(see main.py) and stored on ``app.state``; the tool registry and chat
responder are bound to the request's repository. Tests replace
get_invoice_repository and get_oauth_session_manager through
``app.dependency_overrides``.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request

from invoice_assistant.agents.chat import ChatResponder
from invoice_assistant.agents.tools import ToolRegistry, build_invoice_tools
from invoice_assistant.auth.oauth import OAuthSessionManager, QuickBooksOAuthClient
from invoice_assistant.config import settings
from invoice_assistant.services.invoice_repository import InvoiceRepository
from invoice_assistant.services.mock_data import load_mock_invoices
from invoice_assistant.services.quickbooks_client import QuickBooksClient

logger = logging.getLogger(__name__)


def create_quickbooks_client(access_token: str, realm_id: str) -> QuickBooksClient:
    """Provider factory used by the repository to enter live mode."""
    return QuickBooksClient(
        access_token=access_token,
        realm_id=realm_id,
        environment=settings.QUICKBOOKS_ENVIRONMENT,
    )


def build_invoice_repository() -> InvoiceRepository:
    """Repository starting in mock mode with the demo dataset."""
    return InvoiceRepository(
        mock_invoices=load_mock_invoices(),
        provider_factory=create_quickbooks_client,
    )


def build_oauth_session_manager(repository: InvoiceRepository) -> OAuthSessionManager:
    oauth_client = QuickBooksOAuthClient(
        client_id=settings.QUICKBOOKS_CLIENT_ID,
        client_secret=settings.QUICKBOOKS_CLIENT_SECRET,
        redirect_uri=settings.QUICKBOOKS_REDIRECT_URI,
        environment=settings.QUICKBOOKS_ENVIRONMENT,
    )
    logger.info(f"OAuth configured for QuickBooks {oauth_client.environment}")
    return OAuthSessionManager(
        oauth_client=oauth_client,
        repository=repository,
        state=settings.OAUTH_STATE,
    )


def get_invoice_repository(request: Request) -> InvoiceRepository:
    return request.app.state.invoice_repository


def get_tool_registry(
    repository: Annotated[InvoiceRepository, Depends(get_invoice_repository)]
) -> ToolRegistry:
    return build_invoice_tools(repository)


def get_chat_responder(
    repository: Annotated[InvoiceRepository, Depends(get_invoice_repository)],
    tools: Annotated[ToolRegistry, Depends(get_tool_registry)],
) -> ChatResponder:
    return ChatResponder(repository, tools)


def get_oauth_session_manager(request: Request) -> OAuthSessionManager:
    return request.app.state.oauth_session_manager
