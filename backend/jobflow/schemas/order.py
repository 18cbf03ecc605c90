"""Order and ProcessTemplate Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field

from jobflow.schemas.job_card import JobCardRole, Priority


SchedulingStrategy = Literal["ASAP", "JIT", "MANUAL"]


class CustomerRef(BaseModel):
    """Customer reference embedded in an order."""

    name: str
    code: str


class ProductRef(BaseModel):
    """Product reference embedded in an order."""

    name: str
    part_code: str


class Order(BaseModel):
    """Schema for a released manufacturing order."""

    id: str
    order_no: str = Field(..., max_length=50)
    quantity: int = Field(..., gt=0)
    priority: Priority = Priority.MEDIUM
    customer: CustomerRef | None = None
    product: ProductRef | None = None

    model_config = {"frozen": True}


class ProcessTemplateStep(BaseModel):
    """A single step of a process template.

    ``role`` and the child part fields are copied onto the generated job card,
    so downstream grouping never has to guess them from the process name.
    """

    step_no: int = Field(..., ge=1, description="Position of the step within its template")
    process_id: str
    process_name: str
    process_code: str | None = None
    role: JobCardRole = JobCardRole.CHILD_PART_STEP
    child_part_id: str | None = None
    child_part_name: str | None = None


class ProcessTemplate(BaseModel):
    """Schema for an ordered production route."""

    id: str
    name: str = ""
    steps: list[ProcessTemplateStep] = Field(default_factory=list)


class JobCardGenerationConfig(BaseModel):
    """Schema for a job card generation request."""

    selected_steps: set[int] = Field(default_factory=set, description="Step numbers to generate cards for")
    scheduling_strategy: SchedulingStrategy = "ASAP"
    auto_assign_machines: bool = False
