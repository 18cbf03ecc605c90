"""Hierarchical production views built from flat job card collections.

Job cards are grouped by order, then by child part. The assembly card of an
order is identified by its explicit role, never by its process name. Every
other card carrying a child part id, QC steps included, joins that child
part's group.
"""

import logging
from collections.abc import Iterable

from jobflow.schemas.job_card import JobCard, JobCardRole, JobCardStatus
from jobflow.schemas.production_view import ChildPartProgress, OrderProductionView
from jobflow.services.production_helpers import percentage

logger = logging.getLogger(__name__)

UNKNOWN_CHILD_PART_NAME = "Unknown Part"


def _first_with_status(cards: Iterable[JobCard], status: JobCardStatus) -> JobCard | None:
    return next((jc for jc in cards if jc.status == status), None)


def _build_child_part(child_part_id: str, cards: list[JobCard]) -> ChildPartProgress:
    processes = sorted(cards, key=lambda jc: jc.step_no)
    current = _first_with_status(processes, JobCardStatus.IN_PROGRESS) or _first_with_status(
        processes, JobCardStatus.READY
    )
    return ChildPartProgress(
        child_part_id=child_part_id,
        child_part_name=processes[0].child_part_name or UNKNOWN_CHILD_PART_NAME,
        processes=processes,
        completed_processes=sum(1 for jc in processes if jc.status == JobCardStatus.COMPLETED),
        total_processes=len(processes),
        current_process=current,
    )


def _build_order_view(order_id: str, cards: list[JobCard]) -> OrderProductionView:
    first = cards[0]
    child_part_cards: dict[str, list[JobCard]] = {}
    assembly_card: JobCard | None = None

    for jc in cards:
        if jc.role == JobCardRole.ASSEMBLY_STEP:
            if assembly_card is None:
                assembly_card = jc
            else:
                logger.warning(
                    "Order %s has more than one assembly card; keeping %s, ignoring %s",
                    order_id,
                    assembly_card.id,
                    jc.id,
                )
        elif jc.child_part_id:
            child_part_cards.setdefault(jc.child_part_id, []).append(jc)

    completed = sum(1 for jc in cards if jc.status == JobCardStatus.COMPLETED)
    in_progress = sum(1 for jc in cards if jc.status == JobCardStatus.IN_PROGRESS)

    # TODO: derive "In Progress" once QC job cards carry their own status
    qc_status = "Completed" if completed == len(cards) else "Pending"

    return OrderProductionView(
        order_id=order_id,
        order_no=first.order_no,
        customer_name=first.customer_name,
        customer_code=first.customer_code,
        product_name=first.product_name,
        product_code=first.product_code,
        child_parts=[
            _build_child_part(child_part_id, part_cards)
            for child_part_id, part_cards in child_part_cards.items()
        ],
        assembly_job_card=assembly_card,
        qc_status=qc_status,
        total_steps=len(cards),
        completed_steps=completed,
        in_progress_steps=in_progress,
        pending_steps=len(cards) - completed - in_progress,
    )


def group_job_cards_by_order(job_cards: Iterable[JobCard]) -> list[OrderProductionView]:
    """Group a flat collection of job cards into one view per order.

    Orders and child parts appear in the order their first card is seen.
    """
    by_order: dict[str, list[JobCard]] = {}
    for jc in job_cards:
        by_order.setdefault(jc.order_id, []).append(jc)

    return [_build_order_view(order_id, cards) for order_id, cards in by_order.items()]


def get_order_production_view(
    order_id: str, job_cards: Iterable[JobCard]
) -> OrderProductionView | None:
    """View for a single order, or None when no card belongs to it."""
    order_cards = [jc for jc in job_cards if jc.order_id == order_id]
    if not order_cards:
        return None
    return _build_order_view(order_id, order_cards)


def calculate_order_progress(order_view: OrderProductionView) -> int:
    """Completed steps as a rounded percentage of all steps."""
    return percentage(order_view.completed_steps, order_view.total_steps)


def get_current_step(order_view: OrderProductionView) -> JobCard | None:
    """The step an order is currently working on.

    The first IN_PROGRESS card across all child parts wins, then the first
    READY card, scanning child parts in view order. This follows child part
    order, not shop-floor priority. The assembly card is the fallback when no
    child part step is active.
    """
    for status in (JobCardStatus.IN_PROGRESS, JobCardStatus.READY):
        for child_part in order_view.child_parts:
            found = _first_with_status(child_part.processes, status)
            if found is not None:
                return found

    assembly = order_view.assembly_job_card
    if assembly is not None and assembly.status in (JobCardStatus.IN_PROGRESS, JobCardStatus.READY):
        return assembly

    return None
