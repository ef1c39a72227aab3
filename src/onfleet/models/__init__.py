"""Pydantic models for Onfleet resources, params and responses."""

from onfleet.models.admin import Admin, AdminCreateParams, AdminUpdateParams
from onfleet.models.base import Metadata, MetadataType, OnfleetModel
from onfleet.models.destination import Address, Destination, DestinationCreateParams
from onfleet.models.recipient import (
    Recipient,
    RecipientCreateParams,
    RecipientQueryKey,
    RecipientUpdateParams,
)
from onfleet.models.task import (
    Task,
    TaskAutoAssignMode,
    TaskAutoAssignMultiOptions,
    TaskAutoAssignMultiParams,
    TaskAutoAssignMultiResponse,
    TaskBatchCreateError,
    TaskBatchCreateParams,
    TaskBatchCreateResponse,
    TaskBatchCreateResponseAsync,
    TaskBatchStatusResponseAsync,
    TaskCloneOverrides,
    TaskCloneParams,
    TaskCompletionDetails,
    TaskContainer,
    TaskForceCompletionDetails,
    TaskForceCompletionParams,
    TaskListQueryParams,
    TaskParams,
    TasksPaginated,
    TaskState,
)
from onfleet.models.team import Team, TeamCreateParams, TeamUpdateParams
from onfleet.models.worker import (
    Vehicle,
    Worker,
    WorkerCreateParams,
    WorkerListQueryParams,
    WorkerUpdateParams,
)

__all__ = [
    "OnfleetModel",
    "Metadata",
    "MetadataType",
    "Address",
    "Destination",
    "DestinationCreateParams",
    "Recipient",
    "RecipientCreateParams",
    "RecipientUpdateParams",
    "RecipientQueryKey",
    "Team",
    "TeamCreateParams",
    "TeamUpdateParams",
    "Admin",
    "AdminCreateParams",
    "AdminUpdateParams",
    "Vehicle",
    "Worker",
    "WorkerCreateParams",
    "WorkerUpdateParams",
    "WorkerListQueryParams",
    "Task",
    "TaskState",
    "TaskContainer",
    "TaskCompletionDetails",
    "TaskParams",
    "TasksPaginated",
    "TaskListQueryParams",
    "TaskBatchCreateParams",
    "TaskBatchCreateError",
    "TaskBatchCreateResponse",
    "TaskBatchCreateResponseAsync",
    "TaskBatchStatusResponseAsync",
    "TaskForceCompletionDetails",
    "TaskForceCompletionParams",
    "TaskCloneOverrides",
    "TaskCloneParams",
    "TaskAutoAssignMode",
    "TaskAutoAssignMultiOptions",
    "TaskAutoAssignMultiParams",
    "TaskAutoAssignMultiResponse",
]
