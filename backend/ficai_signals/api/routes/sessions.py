"""Session Routes: login and logout.

Invariants:
    - Login failures are a single 403 shape whatever the cause
    - Logout requires a valid session, deletes it, and clears the cookie
"""

import logging

from fastapi import APIRouter, Cookie, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ficai_signals.api.session_cookie import (
    SESSION_COOKIE_NAME, clear_session_cookie, require_identity,
    set_session_cookie,
)
from ficai_signals.config import Settings, get_settings
from ficai_signals.core.domain_types import Authenticated
from ficai_signals.infrastructure.database import get_db
from ficai_signals.infrastructure.password_hashing import (
    PepperedPasswordHasher, get_password_hasher,
)
from ficai_signals.schemas.account import AccountResponse, SessionCreate
from ficai_signals.services import credential_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/v1/sessions", tags=["sessions"])


@router.post("", response_model=AccountResponse)
async def log_in(
    body: SessionCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
    hasher: PepperedPasswordHasher = Depends(get_password_hasher),
    settings: Settings = Depends(get_settings),
):
    """Log in to an existing account."""
    grant = await credential_store.create_session(
        db, hasher, email=body.email, password=body.password,
    )
    set_session_cookie(response, grant.token, settings)
    return AccountResponse(id=grant.account.id, email=grant.account.email)


@router.delete("")
async def log_out(
    response: Response,
    identity: Authenticated = Depends(require_identity),
    session_cookie: str | None = Cookie(None, alias=SESSION_COOKIE_NAME),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """End the current session."""
    await credential_store.delete_session(db, session_cookie)
    clear_session_cookie(response, settings)
    logger.info("Session deleted", extra={"account_id": identity.account_id})
    return {}
