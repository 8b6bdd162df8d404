"""Peppered Password Hashing: werkzeug's salted adaptive hash keyed by a server-wide pepper.

Invariants:
    - The pepper is decoded once (get_password_hasher is cached) and held immutably
    - The pepper is never written to the database or to logs
    - Stored hash strings embed method, salt and cost parameters
    - verify() on an unknown account costs the same as on a known one (dummy_verify)

Design Decisions:
    - Pepper applied as HMAC-SHA256(pepper, password) before the adaptive hash,
      so rotating the hash method does not touch the pepper handling
    - werkzeug.security for the adaptive hash (scrypt by default)
"""

import base64
import binascii
import hashlib
import hmac
import logging
from dataclasses import dataclass, field
from functools import lru_cache

from werkzeug.security import check_password_hash, generate_password_hash

from ficai_signals.config import get_settings

logger = logging.getLogger(__name__)


def decode_pepper(encoded: str) -> bytes:
    """Decode a base64 pepper, padded or unpadded. Raises ValueError if invalid or empty."""
    stripped = encoded.strip()
    padded = stripped + "=" * (-len(stripped) % 4)
    try:
        pepper = base64.b64decode(padded, validate=True)
    except binascii.Error as e:
        raise ValueError("pepper is not valid base64") from e
    if not pepper:
        raise ValueError("pepper must not be empty")
    return pepper


@dataclass(frozen=True)
class PepperedPasswordHasher:
    """Hashes and verifies passwords with a fixed pepper and hash method."""
    pepper: bytes = field(repr=False)
    method: str = "scrypt"

    def _keyed(self, password: str) -> str:
        return hmac.new(
            self.pepper, password.encode("utf-8"), hashlib.sha256,
        ).hexdigest()

    def hash(self, password: str) -> str:
        return generate_password_hash(self._keyed(password), method=self.method)

    def verify(self, password_hash: str, password: str) -> bool:
        try:
            return check_password_hash(password_hash, self._keyed(password))
        except ValueError:
            # unparseable stored hash counts as a mismatch
            logger.error("Stored password hash could not be parsed")
            return False

    def dummy_verify(self, password: str) -> None:
        """Burn one verification so unknown-email logins take as long as real ones."""
        self.verify(_dummy_hash(self.method), password)


@lru_cache
def _dummy_hash(method: str) -> str:
    return generate_password_hash("ficai-dummy-password", method=method)


@lru_cache
def get_password_hasher() -> PepperedPasswordHasher:
    """FastAPI dependency: process-wide hasher built from settings."""
    settings = get_settings()
    return PepperedPasswordHasher(
        pepper=decode_pepper(settings.pwd_pepper),
        method=settings.password_hash_method,
    )
