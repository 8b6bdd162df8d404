"""Account Routes: registration and whoami.

Invariants:
    - Registration returns 201 with the account and a session cookie
    - Wrong beta key → 400 INVALID_BETA_KEY; duplicate email → 409
    - whoami without a valid session → 403
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ficai_signals.api.session_cookie import require_identity, set_session_cookie
from ficai_signals.config import Settings, get_settings
from ficai_signals.core.domain_types import Authenticated
from ficai_signals.core.errors import AuthenticationError
from ficai_signals.infrastructure.database import get_db
from ficai_signals.infrastructure.password_hashing import (
    PepperedPasswordHasher, get_password_hasher,
)
from ficai_signals.schemas.account import AccountCreate, AccountResponse
from ficai_signals.services import credential_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/v1/accounts", tags=["accounts"])


@router.post(
    "", response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_account(
    body: AccountCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
    hasher: PepperedPasswordHasher = Depends(get_password_hasher),
    settings: Settings = Depends(get_settings),
):
    """Register a new account and log it in."""
    grant = await credential_store.create_account(
        db, hasher, settings.beta_key,
        email=body.email, password=body.password, beta_key=body.beta_key,
    )
    set_session_cookie(response, grant.token, settings)
    return AccountResponse(id=grant.account.id, email=grant.account.email)


@router.get("/me", response_model=AccountResponse)
async def whoami(
    identity: Authenticated = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    """The account behind the current session cookie."""
    account = await credential_store.get_account(db, identity.account_id)
    if account is None:
        raise AuthenticationError()
    return AccountResponse(id=account.id, email=account.email)
