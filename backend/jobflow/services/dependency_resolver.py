"""Dependency resolution across job cards.

Dependencies form a directed acyclic graph: each card lists the ids of the
cards that must complete before it can start. A reference may name either a
card id or its job card number. ``depends_on_job_card_ids`` is never
rewritten; completing a card only shrinks the ``blocked_by`` lists of its
dependents and promotes fully released BLOCKED cards to READY.
"""

import logging

from jobflow.core.clock import Clock, utc_now
from jobflow.core.config import settings
from jobflow.schemas.job_card import (
    CriticalPath,
    DeletionCheck,
    DependencyCheckResult,
    JobCard,
    JobCardStatus,
)

logger = logging.getLogger(__name__)

SYSTEM_USER = settings.SYSTEM_USER


class DependencyError(Exception):
    """Raised when a status transition would violate a card's dependencies."""


def _refers_to(reference: str, card: JobCard) -> bool:
    return reference in (card.id, card.job_card_no)


def _find(reference: str, job_cards: list[JobCard]) -> JobCard | None:
    return next((jc for jc in job_cards if _refers_to(reference, jc)), None)


def _dependents_of(card: JobCard, job_cards: list[JobCard]) -> list[JobCard]:
    return [
        jc
        for jc in job_cards
        if any(_refers_to(ref, card) for ref in jc.depends_on_job_card_ids)
    ]


def check_dependencies(job_card_id: str, job_cards: list[JobCard]) -> DependencyCheckResult:
    """Whether a card can start, plus the cards blocking it and blocked by it."""
    card = _find(job_card_id, job_cards)
    if card is None:
        return DependencyCheckResult(can_start=False)

    blocked_by = [
        dep
        for dep in (_find(ref, job_cards) for ref in card.depends_on_job_card_ids)
        if dep is not None and dep.status != JobCardStatus.COMPLETED
    ]

    return DependencyCheckResult(
        can_start=not blocked_by and card.status != JobCardStatus.BLOCKED,
        blocked_by=blocked_by,
        blocks=_dependents_of(card, job_cards),
    )


def release_dependents(
    completed_job_card_id: str,
    job_cards: list[JobCard],
    *,
    clock: Clock = utc_now,
) -> list[JobCard]:
    """Return a new card list with the completed card removed from blockers.

    Unknown ids leave the list unchanged.
    """
    completed = _find(completed_job_card_id, job_cards)
    if completed is None:
        return list(job_cards)

    now = clock()
    released = 0
    updated: list[JobCard] = []

    for jc in job_cards:
        if not any(_refers_to(ref, completed) for ref in jc.depends_on_job_card_ids):
            updated.append(jc)
            continue

        remaining = tuple(ref for ref in jc.blocked_by if not _refers_to(ref, completed))
        changes: dict = {"blocked_by": remaining, "updated_at": now}
        if not remaining and jc.status == JobCardStatus.BLOCKED:
            changes.update(status=JobCardStatus.READY, updated_by=SYSTEM_USER)
            released += 1
        updated.append(jc.model_copy(update=changes))

    if released:
        logger.info(
            "Completing %s released %d job card(s) to READY", completed.job_card_no, released
        )
    return updated


def start_job_card(card: JobCard, *, clock: Clock = utc_now) -> JobCard:
    """Move a READY, unblocked card to IN_PROGRESS."""
    if card.blocked_by:
        raise DependencyError(
            f"Job card {card.job_card_no} is blocked by {', '.join(card.blocked_by)}"
        )
    if card.status != JobCardStatus.READY:
        raise DependencyError(
            f"Job card {card.job_card_no} cannot start from status {card.status.value}"
        )

    now = clock()
    return card.model_copy(
        update={
            "status": JobCardStatus.IN_PROGRESS,
            "actual_start_time": now,
            "updated_at": now,
        }
    )


def complete_job_card(
    job_card_id: str,
    job_cards: list[JobCard],
    *,
    clock: Clock = utc_now,
) -> list[JobCard]:
    """Mark a card COMPLETED and release the cards waiting on it."""
    card = _find(job_card_id, job_cards)
    if card is None:
        raise DependencyError(f"Job card {job_card_id} not found")
    if card.status not in (JobCardStatus.IN_PROGRESS, JobCardStatus.READY) or card.blocked_by:
        raise DependencyError(
            f"Job card {card.job_card_no} cannot complete from status {card.status.value}"
        )

    now = clock()
    done = card.model_copy(
        update={"status": JobCardStatus.COMPLETED, "actual_end_time": now, "updated_at": now}
    )
    swapped = [done if jc.id == card.id else jc for jc in job_cards]
    return release_dependents(card.id, swapped, clock=clock)


def can_delete_job_card(job_card_id: str, job_cards: list[JobCard]) -> DeletionCheck:
    """A card can be deleted only when no other card depends on it."""
    card = _find(job_card_id, job_cards)
    if card is None:
        return DeletionCheck(can_delete=False, reason="Job card not found")

    dependents = _dependents_of(card, job_cards)
    if dependents:
        return DeletionCheck(
            can_delete=False,
            reason=f"Cannot delete. {len(dependents)} job card(s) depend on this one.",
            dependent_cards=dependents,
        )
    return DeletionCheck(can_delete=True)


def has_circular_dependency(
    job_card_id: str,
    depends_on: list[str],
    job_cards: list[JobCard],
) -> bool:
    """Would giving ``job_card_id`` the dependencies ``depends_on`` create a cycle?"""
    visited: set[str] = set()
    on_stack: set[str] = set()

    def _visit(reference: str) -> bool:
        card = _find(reference, job_cards)
        key = card.id if card is not None else reference
        if key in on_stack:
            return True
        if key in visited:
            return False

        visited.add(key)
        on_stack.add(key)

        edges = list(card.depends_on_job_card_ids) if card is not None else []
        if reference == job_card_id or key == job_card_id:
            edges.extend(depends_on)
        if any(_visit(ref) for ref in edges):
            return True

        on_stack.discard(key)
        return False

    return _visit(job_card_id)


def get_execution_order(job_cards: list[JobCard]) -> list[list[JobCard]]:
    """Layer cards so every card comes after all of its dependencies.

    References to cards outside the collection count as satisfied. Layering
    stops at the first layer that cannot make progress (a cycle).
    """
    levels: list[list[JobCard]] = []
    processed: set[str] = set()

    while len(processed) < len(job_cards):
        level = [
            jc
            for jc in job_cards
            if jc.id not in processed
            and all(
                dep is None or dep.id in processed
                for dep in (_find(ref, job_cards) for ref in jc.depends_on_job_card_ids)
            )
        ]
        if not level:
            logger.warning(
                "Circular dependency among %d job card(s); execution order is partial",
                len(job_cards) - len(processed),
            )
            break

        levels.append(level)
        processed.update(jc.id for jc in level)

    return levels


def calculate_critical_path(job_cards: list[JobCard]) -> CriticalPath:
    """Longest chain of estimated minutes from root cards to leaf cards."""
    best_path: list[JobCard] = []
    best_time = 0

    def _walk(card: JobCard, path: list[JobCard], elapsed: int) -> None:
        nonlocal best_path, best_time
        path = [*path, card]
        elapsed += card.estimated_total_time_min

        on_path = {jc.id for jc in path}
        dependents = [jc for jc in _dependents_of(card, job_cards) if jc.id not in on_path]
        if not dependents:
            if elapsed > best_time:
                best_time = elapsed
                best_path = path
            return
        for dependent in dependents:
            _walk(dependent, path, elapsed)

    for root in (jc for jc in job_cards if not jc.depends_on_job_card_ids):
        _walk(root, [], 0)

    return CriticalPath(path=best_path, total_time_min=best_time)
