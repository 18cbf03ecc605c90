"""Order production view Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field

from jobflow.schemas.job_card import JobCard


QCStatus = Literal["Pending", "In Progress", "Completed"]


class ChildPartProgress(BaseModel):
    """Progress of one child part through its processes."""

    child_part_id: str
    child_part_name: str
    processes: list[JobCard] = Field(default_factory=list, description="Sorted by step number")
    completed_processes: int = 0
    total_processes: int = 0
    current_process: JobCard | None = None


class OrderProductionView(BaseModel):
    """Hierarchical view of an order: child parts, then assembly, then QC."""

    order_id: str
    order_no: str
    customer_name: str
    customer_code: str
    product_name: str
    product_code: str
    child_parts: list[ChildPartProgress] = Field(default_factory=list)
    assembly_job_card: JobCard | None = None
    qc_status: QCStatus = "Pending"
    total_steps: int = 0
    completed_steps: int = 0
    in_progress_steps: int = 0
    pending_steps: int = 0
