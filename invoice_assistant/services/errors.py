"""
Invoice Assistant error types.

Every failure the core can signal carries a stable code, a user-facing
message and optional debugging context. Routes map these to HTTP responses;
the chat responder collapses them into a single apology.
"""
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(str, Enum):
    """Standardized error codes for client handling."""
    INVOICE_NOT_FOUND = "INVOICE_NOT_FOUND"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNKNOWN_TOOL = "UNKNOWN_TOOL"
    AUTH_URL_ERROR = "AUTH_URL_ERROR"
    CALLBACK_ERROR = "CALLBACK_ERROR"
    MALFORMED_REQUEST = "MALFORMED_REQUEST"


class InvoiceAssistantError(Exception):
    """Base exception with structured error info."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.detail = detail
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API response format."""
        result: Dict[str, Any] = {
            "error": self.code.value,
            "message": self.message
        }
        if self.detail:
            result["detail"] = self.detail
        if self.context:
            result["context"] = self.context
        return result


class InvoiceNotFoundError(InvoiceAssistantError):
    """An invoice reference did not resolve in the active data source."""

    def __init__(self, ref: str):
        self.ref = ref
        super().__init__(
            code=ErrorCode.INVOICE_NOT_FOUND,
            message=f"Invoice #{ref} not found. Please check the invoice number and try again.",
            context={"ref": ref}
        )


class ProviderError(InvoiceAssistantError):
    """The live accounting provider failed for a reason other than 404."""

    def __init__(self, detail: str, status_code: Optional[int] = None):
        self.status_code = status_code
        context = {"status_code": status_code} if status_code is not None else None
        super().__init__(
            code=ErrorCode.PROVIDER_ERROR,
            message="Failed to fetch invoice. Please check your QuickBooks connection.",
            detail=detail,
            context=context
        )


class ToolValidationError(InvoiceAssistantError):
    """Tool arguments failed the tool's parameter schema."""

    def __init__(self, tool_name: str, errors: List[Dict[str, Any]]):
        self.tool_name = tool_name
        self.errors = errors
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=f"Invalid arguments for tool '{tool_name}'",
            context={"tool": tool_name, "errors": errors}
        )


class UnknownToolError(InvoiceAssistantError):
    """No tool is registered under the requested name."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(
            code=ErrorCode.UNKNOWN_TOOL,
            message=f"Unknown tool '{tool_name}'",
            context={"tool": tool_name}
        )


class AuthUrlError(InvoiceAssistantError):
    """The QuickBooks authorization URL could not be built."""

    def __init__(self, detail: Optional[str] = None):
        super().__init__(
            code=ErrorCode.AUTH_URL_ERROR,
            message="Failed to generate QuickBooks authorization URL",
            detail=detail
        )


class CallbackError(InvoiceAssistantError):
    """The OAuth callback could not be exchanged for a token."""

    def __init__(self, detail: Optional[str] = None):
        super().__init__(
            code=ErrorCode.CALLBACK_ERROR,
            message="Failed to complete QuickBooks authorization",
            detail=detail
        )


class MalformedRequestError(InvoiceAssistantError):
    """A chat request body could not be parsed."""

    def __init__(self, detail: Optional[str] = None):
        super().__init__(
            code=ErrorCode.MALFORMED_REQUEST,
            message="Malformed chat request",
            detail=detail
        )
