"""Snapshots of droplets and volumes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .base import ApiObject, Client, ListOptions, Response, add_options, api_field

SNAPSHOT_BASE_PATH = "v2/snapshots"


@dataclass
class Snapshot(ApiObject):
    """A saved image of a droplet or volume."""

    id: str = api_field("id", "ID", default="", omitempty=True)
    name: str = api_field("name", "Name", default="", omitempty=True)
    resource_id: str = api_field("resource_id", "ResourceID", default="", omitempty=True)
    resource_type: str = api_field("resource_type", "ResourceType", default="", omitempty=True)
    regions: Optional[list] = api_field("regions", "Regions", omitempty=True)
    min_disk_size: int = api_field("min_disk_size", "MinDiskSize", default=0, omitempty=True)
    size_gigabytes: float = api_field("size_gigabytes", "SizeGigaBytes", default=0.0, omitempty=True, kind=float)
    created: str = api_field("created_at", "Created", default="", omitempty=True)
    tags: Optional[list] = api_field("tags", "Tags", omitempty=True)


def _snapshot_path(snapshot_id: str) -> str:
    return f"{SNAPSHOT_BASE_PATH}/{snapshot_id}"


class SnapshotsService:
    """Snapshot endpoints."""

    def __init__(self, client: Client):
        self._client = client

    def list(self, options: ListOptions | None = None) -> tuple[list[Snapshot], Response]:
        """List all snapshots."""
        return self._list(options, None)

    def list_volume(self, options: ListOptions | None = None) -> tuple[list[Snapshot], Response]:
        """List volume snapshots."""
        return self._list(options, "volume")

    def list_droplet(self, options: ListOptions | None = None) -> tuple[list[Snapshot], Response]:
        """List droplet snapshots."""
        return self._list(options, "droplet")

    def get(self, snapshot_id: str) -> tuple[Optional[Snapshot], Response]:
        """Fetch one snapshot by id."""
        found = self._client.request("GET", _snapshot_path(snapshot_id))
        return Snapshot.from_dict((found.data or {}).get("snapshot")), found

    def delete(self, snapshot_id: str) -> Response:
        """Delete a snapshot."""
        return self._client.request("DELETE", _snapshot_path(snapshot_id))

    def _list(self, options, resource_type):
        path = add_options(SNAPSHOT_BASE_PATH, options)
        if resource_type is not None:
            path = add_options(path, {"resource_type": resource_type})
        found = self._client.request("GET", path)
        records = (found.data or {}).get("snapshots") or []
        return [Snapshot.from_dict(record) for record in records], found