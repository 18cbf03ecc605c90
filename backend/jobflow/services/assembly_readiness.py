"""Assembly readiness evaluation over child part production records.

An order may enter final assembly only when every one of its child parts has
reached READY_FOR_ASSEMBLY. An order with no child parts is never ready.
"""

import logging
import math
from datetime import datetime, timedelta

from jobflow.core.clock import Clock, ensure_utc, utc_now
from jobflow.core.config import settings
from jobflow.schemas.child_part import ChildPartProductionOrder
from jobflow.schemas.readiness import AssemblyReadinessReport, BlockingItem, ReadyItem
from jobflow.services.production_helpers import percentage

logger = logging.getLogger(__name__)

ASSEMBLY_START_BUFFER_DAYS = settings.ASSEMBLY_START_BUFFER_DAYS

_SECONDS_PER_DAY = 24 * 60 * 60


def calculate_delay_days(child_part: ChildPartProductionOrder, now: datetime) -> int | None:
    """Whole days (rounded up) a part is past its planned completion date.

    Returns None for ready parts and for parts whose planned date is now or
    still ahead.
    """
    if child_part.is_ready_for_assembly:
        return None

    planned = ensure_utc(child_part.planned_completion_date)
    if planned >= ensure_utc(now):
        return None

    return math.ceil((ensure_utc(now) - planned).total_seconds() / _SECONDS_PER_DAY)


def check_assembly_readiness(
    order_id: str,
    child_parts: list[ChildPartProductionOrder],
    *,
    clock: Clock = utc_now,
) -> AssemblyReadinessReport:
    """Partition child parts into ready and blocking items."""
    now = ensure_utc(clock())
    ready_items: list[ReadyItem] = []
    blocking_items: list[BlockingItem] = []

    for child_part in child_parts:
        if child_part.is_ready_for_assembly:
            ready_items.append(
                ReadyItem(
                    child_part_id=child_part.id,
                    child_part_name=child_part.child_part_name,
                    ready_date=child_part.ready_for_assembly_date,
                    quantity_ready=child_part.quantity_produced,
                )
            )
        else:
            blocking_items.append(
                BlockingItem(
                    child_part_id=child_part.id,
                    child_part_name=child_part.child_part_name,
                    current_status=child_part.status,
                    expected_ready_date=child_part.planned_completion_date,
                    delay_days=calculate_delay_days(child_part, now),
                )
            )

    total = len(child_parts)

    logger.debug(
        "Order %s readiness: %d/%d child part(s) ready", order_id, len(ready_items), total
    )

    return AssemblyReadinessReport(
        order_id=order_id,
        last_checked=now,
        is_ready=not blocking_items and total > 0,
        readiness_percentage=percentage(len(ready_items), total),
        ready_items=ready_items,
        blocking_items=blocking_items,
    )


def can_start_assembly(
    order_id: str,
    child_parts: list[ChildPartProductionOrder],
    *,
    clock: Clock = utc_now,
) -> bool:
    """True when the order's readiness report says it is ready."""
    return check_assembly_readiness(order_id, child_parts, clock=clock).is_ready


def get_assembly_blocked_reason(child_parts: list[ChildPartProductionOrder]) -> str | None:
    """Human-readable reason assembly cannot start, or None if nothing blocks it."""
    blocking = [cp for cp in child_parts if not cp.is_ready_for_assembly]

    if not blocking:
        return None
    if len(blocking) == 1:
        return f"{blocking[0].child_part_name} not ready"

    names = ", ".join(cp.child_part_name for cp in blocking)
    return f"{len(blocking)} child parts not ready: {names}"


def get_expected_assembly_start(child_parts: list[ChildPartProductionOrder]) -> datetime | None:
    """Latest planned completion across all child parts plus the assembly buffer."""
    if not child_parts:
        return None

    latest = max(ensure_utc(cp.planned_completion_date) for cp in child_parts)
    return latest + timedelta(days=ASSEMBLY_START_BUFFER_DAYS)
