"""Regions: where resources can be placed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .base import ApiObject, Client, ListOptions, Response, add_options, api_field

REGIONS_PATH = "v2/regions"


@dataclass
class Region(ApiObject):
    """A data centre region."""

    slug: str = api_field("slug", "Slug", default="", omitempty=True)
    name: str = api_field("name", "Name", default="", omitempty=True)
    sizes: Optional[list] = api_field("sizes", "Sizes", omitempty=True)
    available: bool = api_field("available", "Available", default=False, omitempty=True)
    features: Optional[list] = api_field("features", "Features", omitempty=True)


class RegionsService:
    """Region endpoints."""

    def __init__(self, client: Client):
        self._client = client

    def list(self, options: ListOptions | None = None) -> tuple[list[Region], Response]:
        """List all regions, one page at a time."""
        reply = self._client.request("GET", add_options(REGIONS_PATH, options))
        payload = reply.data or {}
        regions = [Region.from_dict(entry) for entry in payload.get("regions") or []]
        return regions, reply