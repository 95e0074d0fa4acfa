"""Credentials for Microsoft Graph and the refresh-token exchange.

The exchange itself is handled by msal; this module only packages the inputs
and turns an msal error payload into an OutlookError.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import msal

from src.outlook.errors import OutlookError

logger = logging.getLogger(__name__)

#: Public client id used when OUTLOOK_CLIENT_ID is not set
#: (Microsoft Graph Command Line Tools, delegated permissions).
DEFAULT_CLIENT_ID = "14d82eec-204b-4c2f-b7e8-296a70dab67e"

AUTHORITY = "https://login.microsoftonline.com/common"

# msal adds offline_access/openid/profile itself and rejects them here.
SCOPES: list[str] = [
    "https://graph.microsoft.com/User.Read",
    "https://graph.microsoft.com/Mail.ReadWrite",
    "https://graph.microsoft.com/Mail.Send",
    "https://graph.microsoft.com/Calendars.ReadWrite",
    "https://graph.microsoft.com/Contacts.ReadWrite",
]


@dataclass(frozen=True)
class Credentials:
    """Everything needed to obtain a Graph access token."""

    refresh_token: str
    client_id: str = DEFAULT_CLIENT_ID

    def __repr__(self) -> str:
        return f"Credentials(client_id={self.client_id!r}, refresh_token=<redacted>)"


def _exchange(credentials: Credentials) -> str:
    """Synchronous: redeem the refresh token for an access token."""
    app = msal.PublicClientApplication(credentials.client_id, authority=AUTHORITY)
    result = app.acquire_token_by_refresh_token(credentials.refresh_token, scopes=SCOPES)
    token = result.get("access_token") if isinstance(result, dict) else None
    if not token:
        error = result.get("error", "unknown_error") if isinstance(result, dict) else "unknown_error"
        description = result.get("error_description", "") if isinstance(result, dict) else ""
        raise OutlookError(f"Token exchange failed ({error}): {description}".rstrip(": "))
    return str(token)


async def acquire_access_token(credentials: Credentials) -> str:
    """Return a Graph access token for ``credentials``.

    msal is synchronous, so the exchange runs in a worker thread.
    """
    logger.debug("Exchanging refresh token (client_id=%s)", credentials.client_id)
    token = await asyncio.to_thread(_exchange, credentials)
    logger.debug("Access token acquired")
    return token
