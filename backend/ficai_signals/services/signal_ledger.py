"""Signal Ledger: per-account per-tag-per-URL votes and their aggregation.

Invariants:
    - patch requires an Authenticated identity
    - A patch is one transaction: every tag applies or none does
    - erase deletes the row; add/rm upsert sign=true/false (last writer wins)
    - get groups existing rows only, so a tag with no rows left never appears
    - get returns signal=None for every tag when the identity is Anonymous

Design Decisions:
    - Overlap precedence erase > rm > add resolved by core/signal_patch.py
    - Native INSERT .. ON CONFLICT DO UPDATE: concurrent patches on the same key
      need no application lock
    - The caller's own sign computed in the same GROUP BY as the counts
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from sqlalchemy import and_, case, delete, func, null, select
from sqlalchemy.ext.asyncio import AsyncSession

from ficai_signals.core.domain_types import (
    Identity, SignalAction, TagSignal, account_id_of,
)
from ficai_signals.core.errors import AuthenticationError, ErrorContext
from ficai_signals.core.signal_patch import count_actions, plan_patch
from ficai_signals.infrastructure.database import upsert_insert
from ficai_signals.models.signal import Signal

logger = logging.getLogger(__name__)


async def patch_signals(
    db: AsyncSession,
    identity: Identity,
    url: str,
    add: Iterable[str],
    rm: Iterable[str],
    erase: Iterable[str],
) -> None:
    """Apply add/rm/erase for one account on one URL, all-or-nothing."""
    account_id = account_id_of(identity)
    if account_id is None:
        raise AuthenticationError(ErrorContext(url=url))

    plan = plan_patch(add, rm, erase)
    insert = upsert_insert(db)
    now = datetime.now(timezone.utc)
    try:
        for tag, action in plan:
            if action is SignalAction.ERASE:
                await db.execute(
                    delete(Signal).where(
                        Signal.account_id == account_id,
                        Signal.url == url,
                        Signal.tag == tag,
                    ),
                )
                continue
            stmt = insert(Signal).values(
                account_id=account_id, url=url, tag=tag,
                sign=action is SignalAction.ADD, updated_at=now,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["account_id", "url", "tag"],
                set_={
                    "sign": stmt.excluded.sign,
                    "updated_at": stmt.excluded.updated_at,
                },
            )
            await db.execute(stmt)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        f"Signals patched {count_actions(plan)}",
        extra={"account_id": account_id, "url": url, "tag_count": len(plan)},
    )


async def get_signals(
    db: AsyncSession, url: str, identity: Identity,
) -> list[TagSignal]:
    """Aggregate every tag on a URL, ordered by tag."""
    account_id = account_id_of(identity)
    if account_id is None:
        own_sign = null()
    else:
        is_own = Signal.account_id == account_id
        own_sign = func.max(case(
            (and_(is_own, Signal.sign), 1),
            (is_own, 0),
            else_=None,
        ))

    stmt = (
        select(
            Signal.tag,
            func.sum(case((Signal.sign, 1), else_=0)).label("signals_for"),
            func.sum(case((Signal.sign, 0), else_=1)).label("signals_against"),
            own_sign.label("own_sign"),
        )
        .where(Signal.url == url)
        .group_by(Signal.tag)
        .order_by(Signal.tag)
    )
    result = await db.execute(stmt)
    return [
        TagSignal(
            tag=row.tag,
            signal=None if row.own_sign is None else bool(row.own_sign),
            signals_for=int(row.signals_for),
            signals_against=int(row.signals_against),
        )
        for row in result
    ]
