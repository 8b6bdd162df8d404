"""Signal Patch Planning: turns add/rm/erase tag sets into one action per tag.

Invariants:
    - Pure function: no IO, no async, no DB
    - Every tag in add ∪ rm ∪ erase gets exactly one action
    - Precedence for a tag listed more than once: erase > rm > add
    - Output ordered by tag, so the same request always touches rows in the same order

Design Decisions:
    - Planning separated from execution: the ledger applies the plan inside one
      transaction, the plan itself is testable without a database
"""

from collections.abc import Iterable

from ficai_signals.core.domain_types import SignalAction


def plan_patch(
    add: Iterable[str],
    rm: Iterable[str],
    erase: Iterable[str],
) -> list[tuple[str, SignalAction]]:
    """Resolve overlapping tag sets into a sorted list of (tag, action)."""
    add_set, rm_set, erase_set = set(add), set(rm), set(erase)
    plan = []
    for tag in sorted(add_set | rm_set | erase_set):
        if tag in erase_set:
            plan.append((tag, SignalAction.ERASE))
        elif tag in rm_set:
            plan.append((tag, SignalAction.RM))
        else:
            plan.append((tag, SignalAction.ADD))
    return plan


def count_actions(plan: list[tuple[str, SignalAction]]) -> dict[str, int]:
    """Per-action counts, used for the request log line."""
    counts = {action.value: 0 for action in SignalAction}
    for _, action in plan:
        counts[action.value] += 1
    return counts
