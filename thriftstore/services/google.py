"""Google sign-in through Authlib's Starlette integration.

The OAuth ``state`` travels in Starlette's signed session cookie between
the redirect and the callback; nothing is kept server-side.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx
import structlog
from authlib.integrations.starlette_client import OAuth, OAuthError
from starlette.requests import Request
from starlette.responses import Response

from ..core import (
    GOOGLE_CALLBACK_URL,
    GOOGLE_CLIENT_ID,
    GOOGLE_CLIENT_SECRET,
    GOOGLE_OAUTH_CONFIGURED,
)
from ..errors import UpstreamError

logger = structlog.get_logger(__name__)

GOOGLE_METADATA_URL = "https://accounts.google.com/.well-known/openid-configuration"
GOOGLE_SCOPES = "openid email profile"

oauth = OAuth()

if GOOGLE_OAUTH_CONFIGURED:
    oauth.register(
        name="google",
        client_id=GOOGLE_CLIENT_ID,
        client_secret=GOOGLE_CLIENT_SECRET,
        server_metadata_url=GOOGLE_METADATA_URL,
        client_kwargs={"scope": GOOGLE_SCOPES},
    )
else:  # pragma: no cover - allows app to boot without credentials
    logger.warning(
        "google_oauth_not_configured",
        detail="GOOGLE_CLIENT_ID/GOOGLE_CLIENT_SECRET missing; "
        "registering placeholder client for non-production use",
    )
    oauth.register(
        name="google",
        client_id="not-configured",
        client_secret="not-configured",
        server_metadata_url=GOOGLE_METADATA_URL,
        client_kwargs={"scope": GOOGLE_SCOPES},
    )


@dataclass(frozen=True)
class ExternalProfile:
    """Identity attributes returned by the provider."""

    subject: str
    email: Optional[str]
    name: Optional[str] = None
    picture: Optional[str] = None


def profile_from_userinfo(userinfo: Dict[str, Any]) -> ExternalProfile:
    email = userinfo.get("email")
    name = userinfo.get("name") or (email.split("@")[0] if email else None)
    return ExternalProfile(
        subject=str(userinfo.get("sub") or ""),
        email=email,
        name=name,
        picture=userinfo.get("picture"),
    )


class GoogleIdentityProvider:
    """Redirect and grant-exchange steps of the Google handshake."""

    name = "google"

    def __init__(self, client: Any = None, *, configured: bool = GOOGLE_OAUTH_CONFIGURED) -> None:
        self._client = client or oauth.google
        self.configured = configured

    async def authorize_redirect(self, request: Request) -> Response:
        # Building the URL may fetch Google's discovery document.
        try:
            return await self._client.authorize_redirect(request, GOOGLE_CALLBACK_URL)
        except OAuthError as exc:
            logger.warning("google_redirect_failed", error=exc.error)
            raise UpstreamError(exc.description or exc.error or "Google sign-in is unavailable") from exc
        except httpx.HTTPError as exc:
            logger.warning("google_request_failed", error=str(exc))
            raise UpstreamError("Could not reach Google") from exc

    async def fetch_profile(self, request: Request) -> ExternalProfile:
        """Exchange the authorization grant on ``request`` for a profile."""

        try:
            token = await self._client.authorize_access_token(request)
            userinfo = token.get("userinfo") or await self._client.userinfo(token=token)
        except OAuthError as exc:
            logger.warning("google_token_exchange_failed", error=exc.error)
            raise UpstreamError(exc.description or exc.error or "Google authentication failed") from exc
        except httpx.HTTPError as exc:
            logger.warning("google_request_failed", error=str(exc))
            raise UpstreamError("Could not reach Google") from exc
        return profile_from_userinfo(dict(userinfo or {}))


_provider: Optional[GoogleIdentityProvider] = None


def get_identity_provider() -> GoogleIdentityProvider:
    """FastAPI dependency returning the shared Google provider."""

    global _provider
    if _provider is None:
        _provider = GoogleIdentityProvider()
    return _provider


__all__ = [
    "ExternalProfile",
    "GoogleIdentityProvider",
    "get_identity_provider",
    "oauth",
    "profile_from_userinfo",
]
