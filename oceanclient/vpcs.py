"""Virtual private clouds."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .base import ApiObject, Client, ListOptions, Response, add_options, api_field
from .timestamp import Timestamp

VPCS_BASE_PATH = "/v2/vpcs"


def _parse_time(value) -> datetime:
    return Timestamp.from_json(json.dumps(value)).time


@dataclass
class VPCCreateRequest(ApiObject):
    """A request to create a VPC."""

    name: str = api_field("name", "Name", default="", omitempty=True)
    region_slug: str = api_field("region", "RegionSlug", default="", omitempty=True)


@dataclass
class VPCUpdateRequest(ApiObject):
    """A request to update a VPC."""

    name: str = api_field("name", "Name", default="", omitempty=True)


class VPCSetName(str):
    """Sets the name of a VPC in a partial update."""

    def apply(self, fields: dict) -> None:
        """Write this field into a partial-update mapping."""
        fields["name"] = str(self)


@dataclass
class VPC(ApiObject):
    """A virtual private cloud."""

    id: str = api_field("id", "ID", default="", omitempty=True)
    name: str = api_field("name", "Name", default="", omitempty=True)
    region_slug: str = api_field("region", "RegionSlug", default="", omitempty=True)
    created_at: Optional[datetime] = api_field("created_at", "CreatedAt", omitempty=True, kind=_parse_time)
    default: bool = api_field("default", "Default", default=False, omitempty=True)

    def to_dict(self) -> dict:
        """Encode the VPC as a JSON-ready dict."""
        out = super().to_dict()
        if self.created_at is not None:
            out["created_at"] = Timestamp(self.created_at).to_json()[1:-1]
        return out


class VPCsService:
    """VPC endpoints."""

    def __init__(self, client: Client):
        self._client = client

    def _one(self, resp: Response) -> Optional[VPC]:
        return VPC.from_dict((resp.data or {}).get("vpc"))

    def create(self, request: VPCCreateRequest) -> tuple[Optional[VPC], Response]:
        """Create a VPC."""
        resp = self._client.request("POST", VPCS_BASE_PATH, request)
        return self._one(resp), resp

    def get(self, vpc_id: str) -> tuple[Optional[VPC], Response]:
        """Fetch a VPC by id."""
        resp = self._client.request("GET", f"{VPCS_BASE_PATH}/{vpc_id}")
        return self._one(resp), resp

    def list(self, options: ListOptions | None = None) -> tuple[list[VPC], Response]:
        """List the caller's VPCs, optionally one page at a time."""
        resp = self._client.request("GET", add_options(VPCS_BASE_PATH, options))
        root = resp.data or {}
        return [VPC.from_dict(item) for item in root.get("vpcs") or []], resp

    def update(self, vpc_id: str, request: VPCUpdateRequest) -> tuple[Optional[VPC], Response]:
        """Replace a VPC's properties."""
        resp = self._client.request("PUT", f"{VPCS_BASE_PATH}/{vpc_id}", request)
        return self._one(resp), resp

    def set(self, vpc_id: str, *args) -> tuple[Optional[VPC], Response]:
        """Change only the given fields of a VPC."""
        update: dict = {}
        for setter in args:
            setter.apply(update)
        resp = self._client.request("PATCH", f"{VPCS_BASE_PATH}/{vpc_id}", update)
        return self._one(resp), resp

    def delete(self, vpc_id: str) -> Response:
        """Delete a VPC for good."""
        return self._client.request("DELETE", f"{VPCS_BASE_PATH}/{vpc_id}")