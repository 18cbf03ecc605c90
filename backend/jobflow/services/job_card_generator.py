"""Job card generation from an order and a process template.

Converts the selected steps of a process template into a strictly sequential
chain of job cards:
- One card per selected step, in template order
- Each card depends on the card of the previous selected step
- The first card starts READY, every other card starts BLOCKED

Timing uses a flat placeholder policy (setup + cycle x quantity) sourced from
Settings until per-process timing data is modelled.
"""

import logging
from datetime import datetime, timedelta

from jobflow.core.clock import Clock, utc_now
from jobflow.core.config import settings
from jobflow.schemas.job_card import (
    JobCard,
    JobCardCreationType,
    JobCardStatus,
    JobCardSummary,
    ScheduleStatus,
)
from jobflow.schemas.order import (
    JobCardGenerationConfig,
    Order,
    ProcessTemplate,
    ProcessTemplateStep,
)

logger = logging.getLogger(__name__)

# Timing policy (sourced from Settings, configurable via env vars)
DEFAULT_SETUP_TIME_MIN = settings.DEFAULT_SETUP_TIME_MIN
DEFAULT_CYCLE_TIME_MIN = settings.DEFAULT_CYCLE_TIME_MIN
SYSTEM_USER = settings.SYSTEM_USER


def job_card_id(order_id: str, step_no: int) -> str:
    """Deterministic job card id for one step of one order."""
    return f"jc-{order_id}-{step_no}"


def job_card_number(order_no: str, step_no: int) -> str:
    """Deterministic human-facing job card number, e.g. ``JC-ORD-128-1``."""
    return f"JC-{order_no}-{step_no}"


def estimate_total_time(quantity: int) -> int:
    """Estimated minutes for one card: setup + cycle x quantity."""
    return DEFAULT_SETUP_TIME_MIN + DEFAULT_CYCLE_TIME_MIN * quantity


def select_steps(
    template: ProcessTemplate, selected_steps: set[int]
) -> list[ProcessTemplateStep]:
    """Filter template steps to the selection, keeping template order.

    Step numbers in the selection that the template does not contain are
    dropped without error.
    """
    chosen = [step for step in template.steps if step.step_no in selected_steps]

    missing = set(selected_steps) - {step.step_no for step in chosen}
    if missing:
        logger.warning(
            "Template %s has no step(s) %s; no job cards generated for them",
            template.id,
            sorted(missing),
        )
    return chosen


def generate_job_cards(
    order: Order,
    template: ProcessTemplate,
    config: JobCardGenerationConfig,
    *,
    clock: Clock = utc_now,
) -> list[JobCard]:
    """Generate one job card per selected template step as a linear chain.

    ``config.scheduling_strategy`` is carried by the caller and not
    interpreted here. Machine and operator fields stay empty even when
    ``config.auto_assign_machines`` is set; assignment happens downstream.
    """
    steps = select_steps(template, config.selected_steps)
    now = clock()

    customer_name = order.customer.name if order.customer else settings.DEFAULT_CUSTOMER_NAME
    customer_code = order.customer.code if order.customer else settings.DEFAULT_CUSTOMER_CODE
    product_name = order.product.name if order.product else settings.DEFAULT_PRODUCT_NAME
    product_code = order.product.part_code if order.product else settings.DEFAULT_PRODUCT_CODE

    cards: list[JobCard] = []
    previous: JobCard | None = None

    for step in steps:
        depends_on = (previous.id,) if previous is not None else ()

        card = JobCard(
            id=job_card_id(order.id, step.step_no),
            job_card_no=job_card_number(order.order_no, step.step_no),
            creation_type=JobCardCreationType.AUTO_GENERATED,
            order_id=order.id,
            order_no=order.order_no,
            process_id=step.process_id,
            process_name=step.process_name,
            process_code=step.process_code or f"PROC-{step.step_no}",
            step_no=step.step_no,
            process_template_id=template.id,
            role=step.role,
            child_part_id=step.child_part_id,
            child_part_name=step.child_part_name,
            depends_on_job_card_ids=depends_on,
            blocked_by=depends_on,
            quantity=order.quantity,
            status=JobCardStatus.BLOCKED if depends_on else JobCardStatus.READY,
            priority=order.priority,
            schedule_status=ScheduleStatus.UNSCHEDULED,
            estimated_setup_time_min=DEFAULT_SETUP_TIME_MIN,
            estimated_cycle_time_min=DEFAULT_CYCLE_TIME_MIN,
            estimated_total_time_min=estimate_total_time(order.quantity),
            customer_name=customer_name,
            customer_code=customer_code,
            product_name=product_name,
            product_code=product_code,
            work_instructions=f"Standard {step.process_name} operation as per process template.",
            quality_checkpoints="Check dimensions and quality as per product specifications.",
            created_at=now,
            created_by=SYSTEM_USER,
            updated_at=now,
            updated_by=SYSTEM_USER,
        )
        cards.append(card)
        previous = card

    logger.info(
        "Generated %d job card(s) for order %s from template %s (strategy=%s)",
        len(cards),
        order.order_no,
        template.id,
        config.scheduling_strategy,
    )
    return cards


def calculate_total_estimated_time(job_cards: list[JobCard]) -> int:
    """Sum of estimated minutes across a set of job cards."""
    return sum(jc.estimated_total_time_min for jc in job_cards)


def calculate_expected_completion(
    job_cards: list[JobCard], *, clock: Clock = utc_now
) -> datetime:
    """Expected completion assuming the whole route runs on a single timeline.

    Parallel machines are not accounted for.
    """
    return clock() + timedelta(minutes=calculate_total_estimated_time(job_cards))


def summarize_job_cards(
    job_cards: list[JobCard], *, clock: Clock = utc_now
) -> JobCardSummary:
    """Counts and timing for a set of job cards."""
    return JobCardSummary(
        total_job_cards=len(job_cards),
        ready_to_start=sum(1 for jc in job_cards if jc.status == JobCardStatus.READY),
        blocked=sum(1 for jc in job_cards if jc.status == JobCardStatus.BLOCKED),
        total_estimated_time_min=calculate_total_estimated_time(job_cards),
        expected_completion=calculate_expected_completion(job_cards, clock=clock),
    )
