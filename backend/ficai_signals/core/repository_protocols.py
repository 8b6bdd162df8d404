"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - External lookups accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from typing import Protocol

from ficai_signals.core.domain_types import FicMeta


class FicMetaSource(Protocol):
    """Contract for the external fic metadata lookup, implemented by infrastructure.

    Raises UpstreamError on any failure, including exceeding its time bound.
    """
    async def meta(self, url: str) -> FicMeta: ...
