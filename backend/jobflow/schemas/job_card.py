"""JobCard Pydantic schemas."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from jobflow.core.clock import UtcDatetime


class Priority(str, Enum):
    """Order priority levels, carried onto every job card."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class JobCardStatus(str, Enum):
    """Lifecycle states of a job card."""

    PENDING = "Pending"
    READY = "Ready"
    IN_PROGRESS = "In Progress"
    PAUSED = "Paused"
    COMPLETED = "Completed"
    BLOCKED = "Blocked"


class JobCardCreationType(str, Enum):
    AUTO_GENERATED = "Auto-Generated"
    MANUAL = "Manual"
    REWORK = "Rework"


class ScheduleStatus(str, Enum):
    UNSCHEDULED = "Unscheduled"
    SCHEDULED = "Scheduled"
    RESCHEDULED = "Rescheduled"


class JobCardRole(str, Enum):
    """Explicit discriminator for the part of the route a card belongs to."""

    CHILD_PART_STEP = "child_part_step"
    ASSEMBLY_STEP = "assembly_step"
    QC_STEP = "qc_step"


class JobCard(BaseModel):
    """The trackable unit of work for one process step of one order.

    Instances are immutable: status changes produce a new card through
    ``model_copy(update=...)``. ``depends_on_job_card_ids`` is fixed at
    creation; only ``blocked_by`` and ``status`` evolve.
    """

    # Identity
    id: str
    job_card_no: str
    creation_type: JobCardCreationType = JobCardCreationType.AUTO_GENERATED

    # Linkage
    order_id: str
    order_no: str
    process_id: str
    process_name: str
    process_code: str
    step_no: int = Field(..., ge=1)
    process_template_id: str | None = None
    role: JobCardRole = JobCardRole.CHILD_PART_STEP
    child_part_id: str | None = None
    child_part_name: str | None = None

    # Dependencies
    depends_on_job_card_ids: tuple[str, ...] = ()
    blocked_by: tuple[str, ...] = ()

    # Quantities
    quantity: int = Field(..., ge=0)
    completed_qty: int = Field(default=0, ge=0)
    rejected_qty: int = Field(default=0, ge=0)
    rework_qty: int = Field(default=0, ge=0)
    in_progress_qty: int = Field(default=0, ge=0)

    # Status
    status: JobCardStatus
    priority: Priority = Priority.MEDIUM
    schedule_status: ScheduleStatus = ScheduleStatus.UNSCHEDULED

    # Assignment
    assigned_machine_id: str | None = None
    assigned_machine_name: str | None = None
    assigned_operator_id: str | None = None
    assigned_operator_name: str | None = None

    # Time tracking (minutes)
    estimated_setup_time_min: int = Field(default=0, ge=0)
    estimated_cycle_time_min: int = Field(default=0, ge=0)
    estimated_total_time_min: int = Field(default=0, ge=0)
    actual_setup_time_min: int | None = None
    actual_cycle_time_min: int | None = None
    actual_total_time_min: int | None = None

    scheduled_start_time: UtcDatetime | None = None
    scheduled_end_time: UtcDatetime | None = None
    actual_start_time: UtcDatetime | None = None
    actual_end_time: UtcDatetime | None = None

    # Denormalized display fields
    customer_name: str = ""
    customer_code: str = ""
    product_name: str = ""
    product_code: str = ""

    work_instructions: str | None = None
    quality_checkpoints: str | None = None
    special_notes: str | None = None

    created_at: UtcDatetime
    created_by: str
    updated_at: UtcDatetime
    updated_by: str

    # Rework
    parent_job_card_id: str | None = None
    rework_reason: str | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_quantities(self) -> "JobCard":
        accounted = self.completed_qty + self.rejected_qty + self.rework_qty + self.in_progress_qty
        if accounted > self.quantity:
            raise ValueError(
                f"completed+rejected+rework+in-progress ({accounted}) exceeds quantity ({self.quantity})"
            )
        return self

    @property
    def is_blocked(self) -> bool:
        return bool(self.blocked_by)


class JobCardSummary(BaseModel):
    """Aggregate figures for a freshly generated set of job cards."""

    total_job_cards: int = 0
    ready_to_start: int = 0
    blocked: int = 0
    total_estimated_time_min: int = 0
    expected_completion: UtcDatetime


class DependencyCheckResult(BaseModel):
    """Whether a card may start, which cards hold it back, and which it holds back."""

    can_start: bool
    blocked_by: list[JobCard] = Field(default_factory=list)
    blocks: list[JobCard] = Field(default_factory=list)


class DeletionCheck(BaseModel):
    can_delete: bool
    reason: str | None = None
    dependent_cards: list[JobCard] = Field(default_factory=list)


class CriticalPath(BaseModel):
    """Longest chain of estimated work through a dependency graph."""

    path: list[JobCard] = Field(default_factory=list)
    total_time_min: int = 0
