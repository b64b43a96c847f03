"""
FastAPI application entry point for the Invoice Assistant backend.

This module creates the FastAPI app instance, wires the shared invoice
repository and OAuth session manager, and registers all routers.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from invoice_assistant.auth.dependencies import build_invoice_repository, build_oauth_session_manager
from invoice_assistant.config import settings
from invoice_assistant.routes.auth import error_router as auth_error_router
from invoice_assistant.routes.auth import router as auth_router
from invoice_assistant.routes.chat import router as chat_router
from invoice_assistant.routes.health import router as health_router
from invoice_assistant.routes.invoices import router as invoices_router
from invoice_assistant.routes.tools import router as tools_router
from invoice_assistant.services.errors import (
    AuthUrlError,
    CallbackError,
    ErrorCode,
    InvoiceAssistantError,
    MalformedRequestError,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

# HTTP status per error code for errors that reach the app-level handler
ERROR_STATUS_CODES = {
    ErrorCode.INVOICE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PROVIDER_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.UNKNOWN_TOOL: status.HTTP_404_NOT_FOUND,
    ErrorCode.AUTH_URL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.CALLBACK_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.MALFORMED_REQUEST: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS (no origins if unset)
    - ENVIRONMENT=testing/development: Allows all origins for local dev

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    if settings.is_production():
        if settings.CORS_ALLOWED_ORIGINS:
            logger.info(
                f"CORS configured for production with {len(settings.CORS_ALLOWED_ORIGINS)} allowed origins"
            )
            return settings.CORS_ALLOWED_ORIGINS
        logger.warning(
            "CORS_ALLOWED_ORIGINS not set in production. "
            "No web origins allowed. Set CORS_ALLOWED_ORIGINS for the web client."
        )
        return []

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


# Create FastAPI app
app = FastAPI(
    title="Invoice Assistant API",
    description="Invoice browsing and chat assistant backed by QuickBooks Online",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# One repository per process; OAuth callbacks switch it to live mode
app.state.invoice_repository = build_invoice_repository()
app.state.oauth_session_manager = build_oauth_session_manager(app.state.invoice_repository)


# Custom validation error handler to log detailed errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Log detailed validation errors for debugging.

    This helps diagnose 422 errors from the frontend.
    """
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": jsonable_encoder(exc.errors()),
        }
    )


@app.exception_handler(MalformedRequestError)
async def malformed_request_handler(request: Request, exc: MalformedRequestError):
    """Chat bodies that cannot be parsed get a generic 500 with no details."""
    logger.error(f"Malformed request on {request.method} {request.url.path}: {exc.detail}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"}
    )


@app.exception_handler(InvoiceAssistantError)
async def invoice_assistant_error_handler(request: Request, exc: InvoiceAssistantError):
    """Map domain errors to their HTTP status with the structured error body."""
    status_code = ERROR_STATUS_CODES.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, (AuthUrlError, CallbackError)) or status_code >= 500:
        logger.error(f"{exc.code.value} on {request.method} {request.url.path}: {exc.detail or exc.message}")
    else:
        logger.warning(f"{exc.code.value} on {request.method} {request.url.path}: {exc.message}")

    return JSONResponse(status_code=status_code, content=jsonable_encoder(exc.to_dict()))


# Configure CORS with environment-based origins
cors_origins = _get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(invoices_router)
app.include_router(chat_router)
app.include_router(tools_router)
app.include_router(auth_router)
app.include_router(auth_error_router)
app.include_router(health_router)

logger.info("FastAPI app initialized successfully")
