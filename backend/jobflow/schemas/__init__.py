"""Pydantic v2 schemas for production workflow records."""

from jobflow.schemas.child_part import ChildPartProductionOrder, ChildPartStatus
from jobflow.schemas.job_card import (
    CriticalPath,
    DeletionCheck,
    DependencyCheckResult,
    JobCard,
    JobCardCreationType,
    JobCardRole,
    JobCardStatus,
    JobCardSummary,
    Priority,
    ScheduleStatus,
)
from jobflow.schemas.order import (
    CustomerRef,
    JobCardGenerationConfig,
    Order,
    ProcessTemplate,
    ProcessTemplateStep,
    ProductRef,
)
from jobflow.schemas.production_view import ChildPartProgress, OrderProductionView
from jobflow.schemas.readiness import AssemblyReadinessReport, BlockingItem, ReadyItem

__all__ = [
    "AssemblyReadinessReport",
    "BlockingItem",
    "ChildPartProductionOrder",
    "ChildPartProgress",
    "ChildPartStatus",
    "CriticalPath",
    "CustomerRef",
    "DeletionCheck",
    "DependencyCheckResult",
    "JobCard",
    "JobCardCreationType",
    "JobCardGenerationConfig",
    "JobCardRole",
    "JobCardStatus",
    "JobCardSummary",
    "Order",
    "OrderProductionView",
    "Priority",
    "ProcessTemplate",
    "ProcessTemplateStep",
    "ProductRef",
    "ReadyItem",
    "ScheduleStatus",
]
