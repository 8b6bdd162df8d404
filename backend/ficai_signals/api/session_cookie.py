"""Session Cookie Helpers: identity dependencies and cookie issuance/clearing.

Invariants:
    - get_identity never raises for a missing or bad cookie: it yields Anonymous
    - require_identity raises AuthenticationError for Anonymous
    - The cookie is HttpOnly, Secure, Path=/, domain-scoped, long-lived

Design Decisions:
    - Cookie name FicAiSession kept stable for existing browser extensions
"""

from fastapi import Cookie, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ficai_signals.config import Settings
from ficai_signals.core.domain_types import Authenticated, Identity
from ficai_signals.core.errors import AuthenticationError
from ficai_signals.infrastructure.database import get_db
from ficai_signals.services import credential_store
from ficai_signals.services.credential_store import encode_token

SESSION_COOKIE_NAME = "FicAiSession"
_SECONDS_PER_DAY = 24 * 60 * 60


async def get_identity(
    session_cookie: str | None = Cookie(None, alias=SESSION_COOKIE_NAME),
    db: AsyncSession = Depends(get_db),
) -> Identity:
    """Optional authentication: Authenticated or Anonymous."""
    return await credential_store.validate_session(db, session_cookie)


async def require_identity(
    identity: Identity = Depends(get_identity),
) -> Authenticated:
    """Mandatory authentication."""
    if not isinstance(identity, Authenticated):
        raise AuthenticationError()
    return identity


def set_session_cookie(response: Response, token: bytes, settings: Settings) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=encode_token(token),
        max_age=settings.session_cookie_max_age_days * _SECONDS_PER_DAY,
        path="/",
        domain=settings.domain,
        secure=True,
        httponly=True,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        domain=settings.domain,
        secure=True,
        httponly=True,
    )
