"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - AccountId wraps int, FicId wraps str: never bare primitives in domain logic
    - Identity is exactly one of Authenticated(account_id) or Anonymous
    - TagSignal.signal is None only when the caller has no row for that tag

Design Decisions:
    - Identity as a tagged variant threaded through read paths instead of a
      nullable ambient "current user"
    - Frozen dataclasses: values cross the core/shell boundary unchanged
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType, Union


# ─── Identity Types ──────────────────────────────────────────────

AccountId = NewType("AccountId", int)
FicId = NewType("FicId", str)


@dataclass(frozen=True)
class Authenticated:
    """A request carrying a valid session."""
    account_id: AccountId


@dataclass(frozen=True)
class Anonymous:
    """A request with no session, or one that did not resolve."""


Identity = Union[Authenticated, Anonymous]


def account_id_of(identity: Identity) -> AccountId | None:
    """Account id for an authenticated identity, None for Anonymous."""
    if isinstance(identity, Authenticated):
        return identity.account_id
    return None


# ─── Value Types ─────────────────────────────────────────────────

class SignalAction(str, Enum):
    """What a patch does to one (account, url, tag) row."""
    ADD = "add"
    RM = "rm"
    ERASE = "erase"


@dataclass(frozen=True)
class TagSignal:
    """Aggregated view of one tag on one URL."""
    tag: str
    signal: bool | None
    signals_for: int
    signals_against: int


@dataclass(frozen=True)
class FicMeta:
    """Resolved identity of a story."""
    id: FicId
    title: str
    source: str
