"""Block storage volumes and their snapshots."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from urllib.parse import quote

from .base import ApiObject, Client, ListOptions, Response, add_options, api_field, to_urn
from .regions import Region
from .snapshots import Snapshot
from .timestamp import Timestamp

STORAGE_BASE_PATH = "v2"
STORAGE_ALLOC_PATH = STORAGE_BASE_PATH + "/volumes"
STORAGE_SNAP_PATH = STORAGE_BASE_PATH + "/snapshots"


def _parse_time(value) -> datetime:
    return Timestamp.from_json(json.dumps(value)).time


@dataclass
class Volume(ApiObject):
    """A block storage volume."""

    id: str = api_field("id", "ID", default="")
    region: Optional[Region] = api_field("region", "Region", kind=Region)
    name: str = api_field("name", "Name", default="")
    size_gigabytes: int = api_field("size_gigabytes", "SizeGigaBytes", default=0)
    description: str = api_field("description", "Description", default="")
    droplet_ids: Optional[list] = api_field("droplet_ids", "DropletIDs")
    created_at: Optional[datetime] = api_field("created_at", "CreatedAt", kind=_parse_time)
    filesystem_type: str = api_field("filesystem_type", "FilesystemType", default="")
    filesystem_label: str = api_field("filesystem_label", "FilesystemLabel", default="")
    tags: Optional[list] = api_field("tags", "Tags")

    def urn(self) -> str:
        """Return the volume's URN."""
        return to_urn("Volume", self.id)

    def to_dict(self) -> dict:
        """Encode the volume as a JSON-ready dict."""
        out = super().to_dict()
        out["created_at"] = Timestamp(self.created_at).to_json()[1:-1]
        return out


@dataclass
class ListVolumeParams:
    """Filters and pagination for listing volumes."""

    region: str = ""
    name: str = ""
    list_options: Optional[ListOptions] = None


@dataclass
class VolumeCreateRequest(ApiObject):
    """A request to create a volume."""

    region: str = api_field("region", "Region", default="")
    name: str = api_field("name", "Name", default="")
    description: str = api_field("description", "Description", default="")
    size_gigabytes: int = api_field("size_gigabytes", "SizeGigaBytes", default=0)
    snapshot_id: str = api_field("snapshot_id", "SnapshotID", default="")
    filesystem_type: str = api_field("filesystem_type", "FilesystemType", default="")
    filesystem_label: str = api_field("filesystem_label", "FilesystemLabel", default="")
    tags: Optional[list] = api_field("tags", "Tags")


@dataclass
class SnapshotCreateRequest(ApiObject):
    """A request to snapshot a volume."""

    volume_id: str = api_field("volume_id", "VolumeID", default="")
    name: str = api_field("name", "Name", default="")
    description: str = api_field("description", "Description", default="")
    tags: Optional[list] = api_field("tags", "Tags")


class StorageService:
    """Volume and volume snapshot endpoints."""

    def __init__(self, client: Client):
        self._client = client

    def list_volumes(self, params: ListVolumeParams | None = None) -> tuple[list[Volume], Response]:
        """List volumes, optionally filtered by name and region."""
        path = STORAGE_ALLOC_PATH
        if params is not None:
            name, region = quote(params.name, safe=""), quote(params.region, safe="")
            if params.region and params.name:
                path = f"{path}?name={name}&region={region}"
            elif params.region:
                path = f"{path}?region={region}"
            elif params.name:
                path = f"{path}?name={name}"
            if params.list_options is not None:
                path = add_options(path, params.list_options)
        resp = self._client.request("GET", path)
        root = resp.data or {}
        return [Volume.from_dict(item) for item in root.get("volumes") or []], resp

    def get_volume(self, volume_id: str) -> tuple[Optional[Volume], Response]:
        """Fetch one volume."""
        resp = self._client.request("GET", f"{STORAGE_ALLOC_PATH}/{volume_id}")
        return Volume.from_dict((resp.data or {}).get("volume")), resp

    def create_volume(self, request: VolumeCreateRequest) -> tuple[Optional[Volume], Response]:
        """Create a volume; its name must be unique."""
        resp = self._client.request("POST", STORAGE_ALLOC_PATH, request)
        return Volume.from_dict((resp.data or {}).get("volume")), resp

    def delete_volume(self, volume_id: str) -> Response:
        """Delete a volume."""
        return self._client.request("DELETE", f"{STORAGE_ALLOC_PATH}/{volume_id}")

    def list_snapshots(
        self, volume_id: str, options: ListOptions | None = None
    ) -> tuple[list[Snapshot], Response]:
        """List the snapshots of a volume."""
        path = add_options(f"{STORAGE_ALLOC_PATH}/{volume_id}/snapshots", options)
        resp = self._client.request("GET", path)
        root = resp.data or {}
        return [Snapshot.from_dict(item) for item in root.get("snapshots") or []], resp

    def get_snapshot(self, snapshot_id: str) -> tuple[Optional[Snapshot], Response]:
        """Fetch one snapshot."""
        resp = self._client.request("GET", f"{STORAGE_SNAP_PATH}/{snapshot_id}")
        return Snapshot.from_dict((resp.data or {}).get("snapshot")), resp

    def create_snapshot(self, request: SnapshotCreateRequest) -> tuple[Optional[Snapshot], Response]:
        """Snapshot a volume."""
        path = f"{STORAGE_ALLOC_PATH}/{request.volume_id}/snapshots"
        resp = self._client.request("POST", path, request)
        return Snapshot.from_dict((resp.data or {}).get("snapshot")), resp

    def delete_snapshot(self, snapshot_id: str) -> Response:
        """Delete a snapshot."""
        return self._client.request("DELETE", f"{STORAGE_SNAP_PATH}/{snapshot_id}")