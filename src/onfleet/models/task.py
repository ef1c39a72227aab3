"""Task models.

Covers the task resource itself, its create/update params, batch creation
(sync and async), force completion, cloning, multi-task auto-assignment and
the cursor-paginated list response.
"""

from enum import Enum, IntEnum
from typing import Any

from pydantic import Field

from onfleet.models.base import Metadata, OnfleetModel
from onfleet.models.destination import DestinationCreateParams
from onfleet.models.recipient import RecipientCreateParams


class TaskState(IntEnum):
    UNASSIGNED = 0
    ASSIGNED = 1
    ACTIVE = 2
    COMPLETED = 3


class TaskAutoAssignMode(str, Enum):
    DISTANCE = "distance"
    LOAD = "load"


class TaskCompletionDetails(OnfleetModel):
    success: bool = False
    time: int | None = None
    notes: str | None = None
    failure_reason: str | None = None
    failure_notes: str | None = None
    signature_upload_id: str | None = None
    photo_upload_ids: list[str] = Field(default_factory=list)


class TaskContainer(OnfleetModel):
    type: str = Field(..., description="ORGANIZATION, TEAM or WORKER")
    organization: str | None = None
    team: str | None = None
    worker: str | None = None


class Task(OnfleetModel):
    """A pickup or dropoff job."""

    id: str = Field(..., description="Task ID")
    short_id: str = ""
    time_created: int | None = None
    time_last_modified: int | None = None
    organization: str | None = None
    merchant: str | None = None
    executor: str | None = None
    creator: str | None = None
    worker: str | None = None
    state: TaskState = TaskState.UNASSIGNED
    pickup_task: bool = False
    notes: str = ""
    complete_after: int | None = None
    complete_before: int | None = None
    dependencies: list[str] = Field(default_factory=list)
    recipients: list[dict[str, Any]] = Field(default_factory=list)
    destination: dict[str, Any] | None = None
    container: TaskContainer | None = None
    completion_details: TaskCompletionDetails | None = None
    tracking_url: str | None = Field(None, alias="trackingURL")
    source_task_id: str | None = None
    quantity: float | None = None
    service_time: float | None = None
    metadata: list[Metadata] = Field(default_factory=list)


class TasksPaginated(OnfleetModel):
    """One page of tasks; pass ``last_id`` back to fetch the next page."""

    tasks: list[Task] = Field(default_factory=list)
    last_id: str | None = None


class TaskParams(OnfleetModel):
    """Fields accepted when creating or updating a task.

    ``destination`` and ``recipients`` take either existing IDs or inline
    create params.
    """

    destination: str | DestinationCreateParams | None = None
    recipients: list[str | RecipientCreateParams] | None = None
    merchant: str | None = None
    executor: str | None = None
    complete_after: int | None = None
    complete_before: int | None = None
    pickup_task: bool | None = None
    dependencies: list[str] | None = None
    notes: str | None = None
    quantity: float | None = None
    service_time: float | None = None
    container: TaskContainer | None = None
    metadata: list[Metadata] | None = None


class TaskListQueryParams(OnfleetModel):
    """Query parameters for listing tasks; ``from_`` is required by the API."""

    from_: int = Field(..., alias="from", description="Start time, ms since epoch")
    to: int | None = None
    last_id: str | None = None
    state: str | None = Field(None, description="Comma-separated TaskState values")
    worker: str | None = None
    complete_before_time: int | None = None
    complete_after_time: int | None = None
    dependencies: str | None = None

    def to_query(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TaskBatchCreateParams(OnfleetModel):
    tasks: list[TaskParams]


class TaskBatchCreateError(OnfleetModel):
    status_code: int | None = None
    error_code: int | None = None
    message: str | None = None
    cause: Any = None
    task_data: dict[str, Any] | None = None


class TaskBatchCreateResponse(OnfleetModel):
    tasks: list[Task] = Field(default_factory=list)
    errors: list[TaskBatchCreateError] = Field(default_factory=list)


class TaskBatchCreateResponseAsync(OnfleetModel):
    status: str = ""
    job_id: str = ""


class TaskBatchStatusResponseAsync(OnfleetModel):
    status: str = ""
    submitted: str | None = None
    tasks_received: int = 0
    tasks_created: int = 0
    tasks_errored: int = 0
    new_tasks: list[Task] = Field(default_factory=list)
    new_tasks_with_warnings: list[Task] = Field(default_factory=list)
    failed_tasks: list[dict[str, Any]] = Field(default_factory=list)
    errors: list[dict[str, Any]] = Field(default_factory=list)


class TaskForceCompletionDetails(OnfleetModel):
    success: bool
    notes: str | None = None


class TaskForceCompletionParams(OnfleetModel):
    completion_details: TaskForceCompletionDetails


class TaskCloneOverrides(OnfleetModel):
    complete_after: int | None = None
    complete_before: int | None = None
    destination: str | DestinationCreateParams | None = None
    notes: str | None = None
    pickup_task: bool | None = None
    recipients: list[str | RecipientCreateParams] | None = None
    service_time: float | None = None


class TaskCloneParams(OnfleetModel):
    include_barcodes: bool | None = None
    include_dependencies: bool | None = None
    include_metadata: bool | None = None
    overrides: TaskCloneOverrides | None = None


class TaskAutoAssignMultiOptions(OnfleetModel):
    mode: TaskAutoAssignMode
    considering_dependencies: bool | None = None
    max_assigned_task_count: int | None = None
    restrict_auto_assignment_to_team: bool | None = None
    teams: list[str] | None = None
    excluded_worker_ids: list[str] | None = None


class TaskAutoAssignMultiParams(OnfleetModel):
    tasks: list[str]
    options: TaskAutoAssignMultiOptions


class TaskAutoAssignMultiResponse(OnfleetModel):
    assigned_tasks_count: int = 0
    assigned_tasks: list[str] | dict[str, str] = Field(default_factory=list)
