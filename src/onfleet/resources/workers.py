"""Workers resource."""

from __future__ import annotations

from typing import Any

from onfleet.config.logging import get_logger
from onfleet.models.task import TasksPaginated
from onfleet.models.worker import (
    Worker,
    WorkerCreateParams,
    WorkerListQueryParams,
    WorkerUpdateParams,
)
from onfleet.resources.base import MetadataResourceClient

logger = get_logger(__name__)


class WorkersClient(MetadataResourceClient[Worker]):
    """Client for /workers."""

    resource_model = Worker

    def get(self, worker_id: str) -> Worker:
        return self._call("GET", self._url(worker_id), response_model=Worker)

    def list(self, params: WorkerListQueryParams | dict[str, Any] | None = None) -> list[Worker]:
        """List workers, optionally filtered by team, state or phone."""
        if isinstance(params, dict):
            params = WorkerListQueryParams.model_validate(params)
        query = params.to_query() if params else None
        return self._call("GET", self._url(), response_model=list[Worker], params=query)

    def get_tasks(self, worker_id: str, last_id: str | None = None) -> TasksPaginated:
        """Get one page of the worker's assigned tasks."""
        return self._call(
            "GET",
            self._url(worker_id, "tasks"),
            response_model=TasksPaginated,
            params={"lastId": last_id},
        )

    def create(self, params: WorkerCreateParams) -> Worker:
        logger.info("creating_onfleet_worker", teams=params.teams)
        return self._call("POST", self._url(), params, Worker)

    def update(self, worker_id: str, params: WorkerUpdateParams) -> Worker:
        return self._call("PUT", self._url(worker_id), params, Worker)

    def delete(self, worker_id: str) -> None:
        logger.info("deleting_onfleet_worker", worker_id=worker_id)
        self._call("DELETE", self._url(worker_id))
