"""Assembly readiness Pydantic schemas."""

from pydantic import BaseModel, Field

from jobflow.core.clock import UtcDatetime
from jobflow.schemas.child_part import ChildPartStatus


class ReadyItem(BaseModel):
    """A child part that has reached the ready-for-assembly state."""

    child_part_id: str
    child_part_name: str
    ready_date: UtcDatetime | None
    quantity_ready: int


class BlockingItem(BaseModel):
    """A child part holding up assembly."""

    child_part_id: str
    child_part_name: str
    current_status: ChildPartStatus
    expected_ready_date: UtcDatetime
    delay_days: int | None = Field(None, description="Whole days past the planned date; None when not late")


class AssemblyReadinessReport(BaseModel):
    """Schema for an assembly readiness evaluation."""

    order_id: str
    last_checked: UtcDatetime
    is_ready: bool
    readiness_percentage: int = Field(..., ge=0, le=100)
    ready_items: list[ReadyItem] = Field(default_factory=list)
    blocking_items: list[BlockingItem] = Field(default_factory=list)
