"""
Pydantic schemas for the QuickBooks OAuth flow.
"""

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field


class OAuthToken(BaseModel):
    """
    Token issued by the Intuit token endpoint.

    Handed to the caller for external persistence (the session cookie); the
    server keeps no copy beyond the live repository client.
    """
    access_token: str = Field(..., description="Bearer token for the accounting API")
    refresh_token: str = Field("", description="Token used to obtain a new access token")
    token_type: str = Field("bearer")
    expires_in: Optional[int] = Field(None, description="Access token lifetime in seconds")
    x_refresh_token_expires_in: Optional[int] = Field(
        None,
        description="Refresh token lifetime in seconds"
    )
    id_token: Optional[str] = Field(None, description="OpenID Connect id token")
    realm_id: Optional[str] = Field(None, description="QuickBooks company id (tenant)")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class AuthStatusResponse(BaseModel):
    """Response model for GET /api/auth/status."""
    mode: Literal["mock", "live"] = Field(..., description="Active invoice data source")
    realm_id: Optional[str] = Field(
        None,
        alias="realmId",
        description="Connected QuickBooks company, when live"
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {"mode": "live", "realmId": "9130347596842384658"}
            ]
        }
    }


class AuthErrorResponse(BaseModel):
    """Response model for GET /error."""
    error: str = Field("authorization_failed")
    details: str = Field(
        "QuickBooks authorization could not be completed. Please try connecting again."
    )
