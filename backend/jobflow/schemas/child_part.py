"""ChildPartProductionOrder Pydantic schemas."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from jobflow.core.clock import UtcDatetime


class ChildPartStatus(str, Enum):
    """Production states of a sub-assembly, culminating in READY_FOR_ASSEMBLY."""

    NOT_STARTED = "Not Started"
    MATERIAL_ISSUED = "Material Issued"
    IN_PROCESS = "In Process"
    QUALITY_CHECK = "Quality Check"
    READY_FOR_ASSEMBLY = "Ready for Assembly"
    CONSUMED = "Consumed in Assembly"
    REJECTED = "Rejected"
    ON_HOLD = "On Hold"


class ChildPartProductionOrder(BaseModel):
    """Schema for the production record of one child part of an order.

    Naive datetimes are read as UTC.
    """

    id: str
    child_part_id: str | None = None
    child_part_name: str
    parent_order_id: str | None = None
    parent_order_no: str | None = None
    status: ChildPartStatus = ChildPartStatus.NOT_STARTED
    quantity_required: int = Field(default=0, ge=0)
    quantity_produced: int = Field(default=0, ge=0)
    planned_start_date: UtcDatetime | None = None
    planned_completion_date: UtcDatetime
    actual_completion_date: UtcDatetime | None = None
    ready_for_assembly_date: UtcDatetime | None = Field(
        default=None, description="Present exactly when status is READY_FOR_ASSEMBLY"
    )

    @model_validator(mode="after")
    def _check_ready_date(self) -> "ChildPartProductionOrder":
        has_date = self.ready_for_assembly_date is not None
        if has_date != self.is_ready_for_assembly:
            raise ValueError(
                "ready_for_assembly_date must be set exactly when status is "
                f"{ChildPartStatus.READY_FOR_ASSEMBLY.value!r} (status={self.status.value!r})"
            )
        return self

    @property
    def is_ready_for_assembly(self) -> bool:
        return self.status == ChildPartStatus.READY_FOR_ASSEMBLY
