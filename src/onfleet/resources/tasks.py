"""Tasks resource."""

from __future__ import annotations

from typing import Any

from onfleet.config.logging import get_logger
from onfleet.models.task import (
    Task,
    TaskAutoAssignMultiParams,
    TaskAutoAssignMultiResponse,
    TaskBatchCreateParams,
    TaskBatchCreateResponse,
    TaskBatchCreateResponseAsync,
    TaskBatchStatusResponseAsync,
    TaskCloneParams,
    TaskForceCompletionParams,
    TaskListQueryParams,
    TaskParams,
    TasksPaginated,
)
from onfleet.resources.base import MetadataResourceClient

logger = get_logger(__name__)


class TasksClient(MetadataResourceClient[Task]):
    """Client for /tasks."""

    resource_model = Task

    def get(self, task_id: str) -> Task:
        return self._call("GET", self._url(task_id), response_model=Task)

    def get_by_short_id(self, short_id: str) -> Task:
        return self._call("GET", self._url("shortId", short_id), response_model=Task)

    def list(self, params: TaskListQueryParams | dict[str, Any]) -> TasksPaginated:
        """List tasks in a time window.

        Results are paginated: pass the returned ``last_id`` as ``last_id``
        in the next call's params to continue.

        Args:
            params: Query params; ``from`` is required by the API

        Returns:
            One page of tasks
        """
        if isinstance(params, dict):
            params = TaskListQueryParams.model_validate(params)
        logger.info("fetching_onfleet_tasks", worker=params.worker, state=params.state)
        return self._call(
            "GET",
            self._url("all"),
            response_model=TasksPaginated,
            params=params.to_query(),
        )

    def create(self, params: TaskParams) -> Task:
        return self._call("POST", self._url(), params, Task)

    def batch_create(self, params: TaskBatchCreateParams) -> TaskBatchCreateResponse:
        logger.info("creating_onfleet_task_batch", count=len(params.tasks))
        return self._call("POST", self._url("batch"), params, TaskBatchCreateResponse)

    def batch_create_async(self, params: TaskBatchCreateParams) -> TaskBatchCreateResponseAsync:
        """Submit a batch to be created in the background.

        Poll ``get_batch_job_status`` with the returned job ID.
        """
        logger.info("creating_onfleet_task_batch_async", count=len(params.tasks))
        return self._call("POST", self._url("batch-async"), params, TaskBatchCreateResponseAsync)

    def get_batch_job_status(self, job_id: str) -> TaskBatchStatusResponseAsync:
        return self._call("GET", self._url("batch", job_id), response_model=TaskBatchStatusResponseAsync)

    def update(self, task_id: str, params: TaskParams) -> Task:
        return self._call("PUT", self._url(task_id), params, Task)

    def force_complete(self, task_id: str, params: TaskForceCompletionParams) -> None:
        logger.info("force_completing_onfleet_task", task_id=task_id)
        self._call("POST", self._url(task_id, "complete"), params)

    def clone(self, task_id: str, params: TaskCloneParams | None = None) -> Task:
        """Clone a task, optionally overriding fields of the copy."""
        return self._call("POST", self._url(task_id, "clone"), params, Task)

    def delete(self, task_id: str) -> None:
        logger.info("deleting_onfleet_task", task_id=task_id)
        self._call("DELETE", self._url(task_id))

    def auto_assign_multi(self, params: TaskAutoAssignMultiParams) -> TaskAutoAssignMultiResponse:
        logger.info(
            "auto_assigning_onfleet_tasks",
            count=len(params.tasks),
            mode=params.options.mode.value,
        )
        return self._call("POST", self._url("autoAssign"), params, TaskAutoAssignMultiResponse)
