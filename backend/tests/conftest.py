"""Pytest configuration with factories for production workflow records."""

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from jobflow.core.clock import fixed_clock
from jobflow.schemas.child_part import ChildPartProductionOrder, ChildPartStatus
from jobflow.schemas.job_card import JobCard, JobCardRole, JobCardStatus
from jobflow.schemas.order import (
    CustomerRef,
    Order,
    ProcessTemplate,
    ProcessTemplateStep,
    ProductRef,
)


# Deterministic "now" for every time-dependent test
NOW = datetime(2026, 2, 23, 9, 0, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Test Data Factories
# ---------------------------------------------------------------------------


class OrderFactory:
    """Factory for creating Order instances for testing."""

    _counter = 0

    @classmethod
    def create(cls, **overrides: Any) -> Order:
        cls._counter += 1
        defaults = {
            "id": f"order-{cls._counter}",
            "order_no": f"ORD-{cls._counter:04d}",
            "quantity": 10,
            "customer": CustomerRef(name=f"Customer {cls._counter}", code=f"CUST-{cls._counter:03d}"),
            "product": ProductRef(name=f"Gearbox {cls._counter}", part_code=f"GB-{cls._counter:03d}"),
        }
        return Order(**{**defaults, **overrides})


class ProcessTemplateFactory:
    """Factory for creating ProcessTemplate instances for testing."""

    _counter = 0

    @classmethod
    def create(cls, step_names: list[str] | None = None, **overrides: Any) -> ProcessTemplate:
        cls._counter += 1
        names = step_names or ["Cutting", "Turning", "Milling", "Grinding"]
        defaults = {
            "id": f"tpl-{cls._counter}",
            "name": f"Route {cls._counter}",
            "steps": [
                ProcessTemplateStep(step_no=i, process_id=f"proc-{i}", process_name=name)
                for i, name in enumerate(names, start=1)
            ],
        }
        return ProcessTemplate(**{**defaults, **overrides})


class JobCardFactory:
    """Factory for creating JobCard instances for testing."""

    _counter = 0

    @classmethod
    def create(cls, **overrides: Any) -> JobCard:
        cls._counter += 1
        step_no = overrides.get("step_no", cls._counter)
        order_id = overrides.get("order_id", "order-1")
        defaults = {
            "id": f"jc-{order_id}-{step_no}",
            "job_card_no": f"JC-{order_id.upper()}-{step_no}",
            "order_id": order_id,
            "order_no": f"NO-{order_id}",
            "process_id": f"proc-{step_no}",
            "process_name": f"Process {step_no}",
            "process_code": f"PROC-{step_no}",
            "step_no": step_no,
            "role": JobCardRole.CHILD_PART_STEP,
            "child_part_id": "cp-shaft",
            "child_part_name": "Shaft",
            "quantity": 10,
            "status": JobCardStatus.READY,
            "estimated_setup_time_min": 15,
            "estimated_cycle_time_min": 30,
            "estimated_total_time_min": 315,
            "customer_name": "Acme",
            "customer_code": "CUST-001",
            "product_name": "Gearbox",
            "product_code": "GB-001",
            "created_at": NOW,
            "created_by": "system",
            "updated_at": NOW,
            "updated_by": "system",
        }
        return JobCard(**{**defaults, **overrides})


class ChildPartFactory:
    """Factory for creating ChildPartProductionOrder instances for testing."""

    _counter = 0

    @classmethod
    def create(cls, **overrides: Any) -> ChildPartProductionOrder:
        cls._counter += 1
        defaults = {
            "id": f"cpo-{cls._counter}",
            "child_part_id": f"cp-{cls._counter}",
            "child_part_name": f"Child Part {cls._counter}",
            "parent_order_id": "order-1",
            "parent_order_no": "ORD-0001",
            "status": ChildPartStatus.IN_PROCESS,
            "quantity_required": 10,
            "quantity_produced": 0,
            "planned_completion_date": NOW + timedelta(days=3),
        }
        return ChildPartProductionOrder(**{**defaults, **overrides})

    @classmethod
    def ready(cls, **overrides: Any) -> ChildPartProductionOrder:
        defaults = {
            "status": ChildPartStatus.READY_FOR_ASSEMBLY,
            "quantity_produced": 10,
            "ready_for_assembly_date": NOW - timedelta(days=1),
        }
        return cls.create(**{**defaults, **overrides})


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    """A clock frozen at NOW."""
    return fixed_clock(NOW)


@pytest.fixture
def order_factory():
    """Provide OrderFactory for tests."""
    OrderFactory._counter = 0
    return OrderFactory


@pytest.fixture
def template_factory():
    """Provide ProcessTemplateFactory for tests."""
    ProcessTemplateFactory._counter = 0
    return ProcessTemplateFactory


@pytest.fixture
def job_card_factory():
    """Provide JobCardFactory for tests."""
    JobCardFactory._counter = 0
    return JobCardFactory


@pytest.fixture
def child_part_factory():
    """Provide ChildPartFactory for tests."""
    ChildPartFactory._counter = 0
    return ChildPartFactory


@pytest.fixture
def sample_order(order_factory):
    """A single order of ten units."""
    return order_factory.create(quantity=10)


@pytest.fixture
def sample_template(template_factory):
    """A four-step machining route."""
    return template_factory.create()
