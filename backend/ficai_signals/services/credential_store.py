"""Credential & Session Store: registration, login, and session-token lifecycle.

Invariants:
    - Registration inserts the account and its first session in one transaction
    - Unknown email and wrong password raise the same AuthenticationError
    - validate_session never raises for a missing, malformed, or unknown token:
      it returns Anonymous
    - delete_session is idempotent
    - Session tokens are 16 CSPRNG bytes; the cookie carries them as
      unpadded URL-safe base64

Design Decisions:
    - Password hashing runs in a worker thread (asyncio.to_thread): the adaptive
      hash is deliberately slow and would otherwise stall the event loop
    - Beta key compared with hmac.compare_digest
    - Duplicate email checked up front, with the unique constraint as the
      final arbiter for concurrent registrations
"""

import asyncio
import base64
import binascii
import hmac
import logging
import secrets
from dataclasses import dataclass

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ficai_signals.core.domain_types import (
    AccountId, Anonymous, Authenticated, Identity,
)
from ficai_signals.core.errors import (
    AuthenticationError, ConflictError, DatabaseError, ErrorContext,
    InvalidBetaKeyError,
)
from ficai_signals.infrastructure.password_hashing import PepperedPasswordHasher
from ficai_signals.models.account import Account
from ficai_signals.models.account_session import AccountSession

logger = logging.getLogger(__name__)

SESSION_TOKEN_BYTES = 16
_SESSION_TOKEN_ATTEMPTS = 3


@dataclass(frozen=True)
class SessionGrant:
    """An account together with a freshly issued session token."""
    account: Account
    token: bytes


def encode_token(token: bytes) -> str:
    return base64.urlsafe_b64encode(token).rstrip(b"=").decode("ascii")


def decode_token(value: str) -> bytes | None:
    """Cookie value → raw token, or None if it cannot be a token."""
    padded = value + "=" * (-len(value) % 4)
    try:
        token = base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError):
        return None
    if len(token) != SESSION_TOKEN_BYTES:
        return None
    return token


async def _issue_session(db: AsyncSession, account_id: int) -> bytes:
    """Insert a new session row (flushed, not committed) and return its token."""
    for _ in range(_SESSION_TOKEN_ATTEMPTS):
        token = secrets.token_bytes(SESSION_TOKEN_BYTES)
        taken = await db.scalar(
            select(AccountSession.token).where(AccountSession.token == token),
        )
        if taken is None:
            db.add(AccountSession(token=token, account_id=account_id))
            await db.flush()
            return token
    raise DatabaseError(
        f"No unique session token in {_SESSION_TOKEN_ATTEMPTS} attempts",
        "insert",
    )


async def create_account(
    db: AsyncSession,
    hasher: PepperedPasswordHasher,
    expected_beta_key: str,
    email: str,
    password: str,
    beta_key: str,
) -> SessionGrant:
    """Register an account and open its first session, atomically."""
    if not hmac.compare_digest(beta_key.encode(), expected_beta_key.encode()):
        raise InvalidBetaKeyError()

    existing = await db.scalar(select(Account.id).where(Account.email == email))
    if existing is not None:
        raise ConflictError()

    password_hash = await asyncio.to_thread(hasher.hash, password)
    account = Account(email=email, password_hash=password_hash)
    db.add(account)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        logger.info("Registration lost a race on a duplicate email")
        raise ConflictError()

    try:
        token = await _issue_session(db, account.id)
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    logger.info("Account created", extra={"account_id": account.id})
    return SessionGrant(account=account, token=token)


async def create_session(
    db: AsyncSession,
    hasher: PepperedPasswordHasher,
    email: str,
    password: str,
) -> SessionGrant:
    """Log in: verify credentials and open a new session."""
    account = await db.scalar(select(Account).where(Account.email == email))
    if account is None:
        await asyncio.to_thread(hasher.dummy_verify, password)
        raise AuthenticationError()
    valid = await asyncio.to_thread(hasher.verify, account.password_hash, password)
    if not valid:
        raise AuthenticationError(ErrorContext(account_id=account.id))

    token = await _issue_session(db, account.id)
    await db.commit()
    logger.info("Session created", extra={"account_id": account.id})
    return SessionGrant(account=account, token=token)


async def validate_session(db: AsyncSession, cookie_value: str | None) -> Identity:
    """Resolve a session cookie to an identity. Never raises for bad tokens."""
    if not cookie_value:
        return Anonymous()
    token = decode_token(cookie_value)
    if token is None:
        return Anonymous()
    account_id = await db.scalar(
        select(AccountSession.account_id).where(AccountSession.token == token),
    )
    if account_id is None:
        return Anonymous()
    return Authenticated(AccountId(account_id))


async def get_account(db: AsyncSession, account_id: AccountId) -> Account | None:
    return await db.get(Account, account_id)


async def delete_session(db: AsyncSession, cookie_value: str | None) -> bool:
    """Delete the session behind a cookie. Returns whether a row was removed."""
    token = decode_token(cookie_value) if cookie_value else None
    if token is None:
        return False
    result = await db.execute(
        delete(AccountSession).where(AccountSession.token == token),
    )
    await db.commit()
    return result.rowcount > 0
