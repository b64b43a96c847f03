"""
QuickBooks OAuth API endpoints.

- GET /api/auth/connect   - redirect to Intuit's consent page
- GET /api/auth/callback  - exchange the code, set the session cookie, go home
- GET /api/auth/status    - which invoice data source is active
- GET /error              - landing page for failed authorizations
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from invoice_assistant.auth.dependencies import get_invoice_repository, get_oauth_session_manager
from invoice_assistant.auth.oauth import OAuthSessionManager
from invoice_assistant.config import settings
from invoice_assistant.schemas.auth import AuthErrorResponse, AuthStatusResponse
from invoice_assistant.services.errors import CallbackError
from invoice_assistant.services.invoice_repository import InvoiceRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])
error_router = APIRouter(tags=["auth"])

TOKEN_COOKIE_NAME = "qbo_token"
TOKEN_COOKIE_MAX_AGE = 60 * 60 * 24  # 24 hours


@router.get(
    "/connect",
    status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    summary="Start QuickBooks authorization",
    response_class=RedirectResponse,
)
async def connect(
    session_manager: Annotated[OAuthSessionManager, Depends(get_oauth_session_manager)]
) -> RedirectResponse:
    """
    Redirect the browser to the QuickBooks consent page.

    AuthUrlError propagates to the application exception handler (500).
    """
    auth_url = session_manager.get_authorization_url()
    logger.info("Redirecting to QuickBooks authorization")
    return RedirectResponse(url=auth_url)


@router.get(
    "/callback",
    summary="QuickBooks OAuth callback",
    response_class=RedirectResponse,
    description="""
    Intuit redirects here after the user authorizes the app.

    On success the serialized token is stored in the `qbo_token` cookie
    (http-only, same-site lax, 24h, secure in production), the invoice
    repository switches to live QuickBooks data and the browser is sent to `/`.
    On failure the browser is sent to `/error`.
    """
)
async def callback(
    request: Request,
    session_manager: Annotated[OAuthSessionManager, Depends(get_oauth_session_manager)]
) -> RedirectResponse:
    try:
        token = await session_manager.handle_callback(str(request.url))
    except CallbackError as e:
        logger.error(f"Auth callback error: {e.detail}")
        return RedirectResponse(url="/error")

    response = RedirectResponse(url="/")
    response.set_cookie(
        key=TOKEN_COOKIE_NAME,
        value=token.model_dump_json(),
        max_age=TOKEN_COOKIE_MAX_AGE,
        httponly=True,
        secure=settings.is_production(),
        samesite="lax",
    )
    return response


@router.get(
    "/status",
    response_model=AuthStatusResponse,
    status_code=status.HTTP_200_OK,
    summary="Active invoice data source",
)
async def auth_status(
    repository: Annotated[InvoiceRepository, Depends(get_invoice_repository)]
) -> AuthStatusResponse:
    return AuthStatusResponse(mode=repository.mode, realm_id=repository.realm_id)


@error_router.get(
    "/error",
    response_model=AuthErrorResponse,
    status_code=status.HTTP_400_BAD_REQUEST,
    summary="Authorization failure landing page",
)
async def authorization_error() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=AuthErrorResponse().model_dump(),
    )
