"""Teams resource."""

from __future__ import annotations

from onfleet.models.team import Team, TeamCreateParams, TeamUpdateParams
from onfleet.resources.base import ResourceClient


class TeamsClient(ResourceClient):
    """Client for /teams."""

    def get(self, team_id: str) -> Team:
        return self._call("GET", self._url(team_id), response_model=Team)

    def list(self) -> list[Team]:
        return self._call("GET", self._url(), response_model=list[Team])

    def create(self, params: TeamCreateParams) -> Team:
        return self._call("POST", self._url(), params, Team)

    def update(self, team_id: str, params: TeamUpdateParams) -> Team:
        return self._call("PUT", self._url(team_id), params, Team)

    def delete(self, team_id: str) -> None:
        self._call("DELETE", self._url(team_id))
