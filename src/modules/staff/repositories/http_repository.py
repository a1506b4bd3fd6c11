"""HTTP implementation of the Staff gateway (``/staff``)."""

from __future__ import annotations

from typing import Any, Dict, List

from modules.core.http import RemoteServiceClient, parse_many, parse_payload
from modules.staff.models import Actor
from modules.staff.repositories.interfaces import IStaffGateway


class StaffHttpGateway(IStaffGateway):
    def __init__(self, client: RemoteServiceClient) -> None:
        self._client = client

    def list_staff(self) -> List[Actor]:
        return parse_many(Actor, self._client.get("/staff"))

    def create_staff(self, payload: Dict[str, Any]) -> Actor:
        return parse_payload(Actor, self._client.post("/staff", json=payload))

    def update_staff(self, id: str, payload: Dict[str, Any]) -> Actor:
        return parse_payload(Actor, self._client.put(f"/staff/{id}", json=payload))

    def delete_staff(self, id: str) -> None:
        self._client.delete(f"/staff/{id}")
