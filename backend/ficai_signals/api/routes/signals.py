"""Signal Routes: read aggregated signals for a URL, patch the caller's signals.

Invariants:
    - GET works with or without a session; anonymous callers see signal=null
    - PATCH requires a session and applies add/rm/erase atomically
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ficai_signals.api.session_cookie import get_identity, require_identity
from ficai_signals.core.domain_types import Authenticated, Identity
from ficai_signals.infrastructure.database import get_db
from ficai_signals.schemas.signal import (
    SignalPatch, SignalsResponse, TagSignalResponse,
)
from ficai_signals.services import signal_ledger

router = APIRouter(prefix="/v1/signals", tags=["signals"])


@router.get("", response_model=SignalsResponse)
async def get_signals(
    url: str = Query(..., min_length=1, max_length=2048),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    """Signals for a fic, one entry per tag."""
    signals = await signal_ledger.get_signals(db, url, identity)
    return SignalsResponse(tags=[
        TagSignalResponse(
            tag=s.tag,
            signal=s.signal,
            signals_for=s.signals_for,
            signals_against=s.signals_against,
        )
        for s in signals
    ])


@router.patch("")
async def patch_signals(
    body: SignalPatch,
    identity: Authenticated = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    """Update the caller's signals for a fic."""
    await signal_ledger.patch_signals(
        db, identity, body.url, add=body.add, rm=body.rm, erase=body.erase,
    )
    return {}
