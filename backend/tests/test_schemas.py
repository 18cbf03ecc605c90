"""Tests for production workflow Pydantic schemas."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from jobflow.schemas import (
    ChildPartProductionOrder,
    ChildPartStatus,
    JobCardGenerationConfig,
    JobCardRole,
    JobCardStatus,
    Order,
    Priority,
    ProcessTemplateStep,
)


class TestOrder:
    def test_valid_defaults(self):
        order = Order(id="o-1", order_no="ORD-1", quantity=5)
        assert order.priority == Priority.MEDIUM
        assert order.customer is None
        assert order.product is None

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            Order(id="o-1", order_no="ORD-1", quantity=0)

    def test_order_is_immutable(self):
        order = Order(id="o-1", order_no="ORD-1", quantity=5)
        with pytest.raises(ValidationError):
            order.quantity = 6


class TestProcessTemplateStep:
    def test_defaults_to_child_part_role(self):
        step = ProcessTemplateStep(step_no=1, process_id="p", process_name="Turning")
        assert step.role == JobCardRole.CHILD_PART_STEP
        assert step.process_code is None

    def test_step_no_must_be_positive(self):
        with pytest.raises(ValidationError):
            ProcessTemplateStep(step_no=0, process_id="p", process_name="Turning")

    def test_role_from_value(self):
        step = ProcessTemplateStep(step_no=1, process_id="p", process_name="Fit", role="assembly_step")
        assert step.role == JobCardRole.ASSEMBLY_STEP


class TestJobCardGenerationConfig:
    def test_defaults(self):
        config = JobCardGenerationConfig()
        assert config.selected_steps == set()
        assert config.scheduling_strategy == "ASAP"
        assert config.auto_assign_machines is False

    def test_invalid_strategy(self):
        with pytest.raises(ValidationError):
            JobCardGenerationConfig(scheduling_strategy="FASTEST")

    def test_selection_from_list(self):
        assert JobCardGenerationConfig(selected_steps=[3, 1, 3]).selected_steps == {1, 3}


class TestJobCard:
    def test_cards_are_frozen(self, job_card_factory):
        card = job_card_factory.create(step_no=1)
        with pytest.raises(ValidationError):
            card.status = JobCardStatus.COMPLETED

    def test_model_copy_produces_new_card(self, job_card_factory):
        card = job_card_factory.create(step_no=1)
        done = card.model_copy(update={"status": JobCardStatus.COMPLETED})
        assert done.status == JobCardStatus.COMPLETED
        assert card.status == JobCardStatus.READY

    def test_quantities_cannot_exceed_target(self, job_card_factory):
        with pytest.raises(ValidationError):
            job_card_factory.create(step_no=1, quantity=10, completed_qty=6, rejected_qty=5)

    def test_quantities_up_to_target_are_valid(self, job_card_factory):
        card = job_card_factory.create(step_no=1, quantity=10, completed_qty=6, in_progress_qty=4)
        assert card.completed_qty == 6

    def test_negative_quantity_rejected(self, job_card_factory):
        with pytest.raises(ValidationError):
            job_card_factory.create(step_no=1, rework_qty=-1)

    def test_status_from_value(self, job_card_factory):
        card = job_card_factory.create(step_no=1, status="In Progress")
        assert card.status == JobCardStatus.IN_PROGRESS

    def test_is_blocked(self, job_card_factory):
        assert job_card_factory.create(step_no=1).is_blocked is False
        blocked = job_card_factory.create(step_no=2, blocked_by=["jc-order-1-1"], status=JobCardStatus.BLOCKED)
        assert blocked.is_blocked is True

    def test_dependency_lists_are_tuples(self, job_card_factory):
        card = job_card_factory.create(
            step_no=2, depends_on_job_card_ids=["jc-order-1-1"], blocked_by=["jc-order-1-1"]
        )
        assert card.depends_on_job_card_ids == ("jc-order-1-1",)
        assert card.blocked_by == ("jc-order-1-1",)

    def test_dependency_lists_cannot_be_mutated(self, job_card_factory):
        card = job_card_factory.create(step_no=2, blocked_by=["jc-order-1-1"], status=JobCardStatus.BLOCKED)
        with pytest.raises(AttributeError):
            card.blocked_by.append("jc-order-1-9")
        with pytest.raises(AttributeError):
            card.depends_on_job_card_ids.append("jc-order-1-9")
        assert card.blocked_by == ("jc-order-1-1",)

    def test_naive_datetimes_are_read_as_utc(self, job_card_factory):
        card = job_card_factory.create(step_no=1, scheduled_start_time="2026-03-01T08:00:00")
        assert card.scheduled_start_time == datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)


class TestChildPartProductionOrder:
    def test_status_from_value(self, now):
        part = ChildPartProductionOrder(
            id="cpo-1",
            child_part_name="Shaft",
            status="Ready for Assembly",
            planned_completion_date=now,
            ready_for_assembly_date=now,
        )
        assert part.status == ChildPartStatus.READY_FOR_ASSEMBLY
        assert part.is_ready_for_assembly is True

    def test_unknown_status_rejected(self, now):
        with pytest.raises(ValidationError):
            ChildPartProductionOrder(
                id="cpo-1", child_part_name="Shaft", status="Shipped", planned_completion_date=now
            )

    def test_ready_part_requires_ready_date(self, now):
        with pytest.raises(ValidationError, match="ready_for_assembly_date"):
            ChildPartProductionOrder(
                id="cpo-1",
                child_part_name="Shaft",
                status=ChildPartStatus.READY_FOR_ASSEMBLY,
                planned_completion_date=now,
            )

    def test_ready_date_rejected_before_ready(self, now):
        with pytest.raises(ValidationError, match="ready_for_assembly_date"):
            ChildPartProductionOrder(
                id="cpo-1",
                child_part_name="Shaft",
                status=ChildPartStatus.IN_PROCESS,
                planned_completion_date=now,
                ready_for_assembly_date=now,
            )

    def test_naive_planned_date_is_read_as_utc(self):
        part = ChildPartProductionOrder(
            id="cpo-1", child_part_name="Shaft", planned_completion_date="2026-01-10T00:00:00"
        )
        assert part.planned_completion_date == datetime(2026, 1, 10, tzinfo=timezone.utc)
