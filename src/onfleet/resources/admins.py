"""Administrators resource."""

from __future__ import annotations

from onfleet.models.admin import Admin, AdminCreateParams, AdminUpdateParams
from onfleet.resources.base import MetadataResourceClient


class AdminsClient(MetadataResourceClient[Admin]):
    """Client for /admins."""

    resource_model = Admin

    def list(self) -> list[Admin]:
        return self._call("GET", self._url(), response_model=list[Admin])

    def create(self, params: AdminCreateParams) -> Admin:
        return self._call("POST", self._url(), params, Admin)

    def update(self, admin_id: str, params: AdminUpdateParams) -> Admin:
        return self._call("PUT", self._url(admin_id), params, Admin)

    def delete(self, admin_id: str) -> None:
        self._call("DELETE", self._url(admin_id))
