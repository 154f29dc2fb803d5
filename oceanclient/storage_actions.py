"""Actions on block storage volumes: attach, detach and resize."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .base import ApiObject, Client, ListOptions, Response, add_options, api_field
from .storage import STORAGE_ALLOC_PATH


@dataclass
class Action(ApiObject):
    """An action carried out on a resource."""

    id: int = api_field("id", "ID", default=0, omitempty=True)
    status: str = api_field("status", "Status", default="", omitempty=True)
    type: str = api_field("type", "Type", default="", omitempty=True)
    resource_id: int = api_field("resource_id", "ResourceID", default=0, omitempty=True)
    resource_type: str = api_field("resource_type", "ResourceType", default="", omitempty=True)


def _action_path(volume_id: str) -> str:
    return f"{STORAGE_ALLOC_PATH}/{volume_id}/actions"


class StorageActionsService:
    """Volume action endpoints."""

    def __init__(self, client: Client):
        self._client = client

    def _do(self, volume_id: str, request: dict) -> tuple[Optional[Action], Response]:
        resp = self._client.request("POST", _action_path(volume_id), request)
        return Action.from_dict((resp.data or {}).get("action")), resp

    def attach(self, volume_id: str, droplet_id: int) -> tuple[Optional[Action], Response]:
        """Attach a volume to a droplet."""
        return self._do(volume_id, {"type": "attach", "droplet_id": droplet_id})

    def detach_by_droplet_id(self, volume_id: str, droplet_id: int) -> tuple[Optional[Action], Response]:
        """Detach a volume from a droplet."""
        return self._do(volume_id, {"type": "detach", "droplet_id": droplet_id})

    def get(self, volume_id: str, action_id: int) -> tuple[Optional[Action], Response]:
        """Fetch one action of a volume."""
        resp = self._client.request("GET", f"{_action_path(volume_id)}/{action_id}")
        return Action.from_dict((resp.data or {}).get("action")), resp

    def list(self, volume_id: str, options: ListOptions | None = None) -> tuple[list[Action], Response]:
        """List the actions of a volume."""
        resp = self._client.request("GET", add_options(_action_path(volume_id), options))
        root = resp.data or {}
        return [Action.from_dict(item) for item in root.get("actions") or []], resp

    def resize(
        self, volume_id: str, size_gigabytes: int, region_slug: str
    ) -> tuple[Optional[Action], Response]:
        """Resize a volume."""
        request = {"type": "resize", "size_gigabytes": size_gigabytes, "region": region_slug}
        return self._do(volume_id, request)