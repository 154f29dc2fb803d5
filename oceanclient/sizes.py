"""Droplet sizes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .base import ApiObject, Client, ListOptions, Response, add_options, api_field


@dataclass
class Size(ApiObject):
    """A droplet size and its prices."""

    slug: str = api_field("slug", "Slug", default="", omitempty=True)
    memory: int = api_field("memory", "Memory", default=0, omitempty=True)
    vcpus: int = api_field("vcpus", "Vcpus", default=0, omitempty=True)
    disk: int = api_field("disk", "Disk", default=0, omitempty=True)
    price_monthly: float = api_field("price_monthly", "PriceMonthly", default=0.0, omitempty=True, kind=float)
    price_hourly: float = api_field("price_hourly", "PriceHourly", default=0.0, omitempty=True, kind=float)
    regions: Optional[list] = api_field("regions", "Regions", omitempty=True)
    available: bool = api_field("available", "Available", default=False, omitempty=True)
    transfer: float = api_field("transfer", "Transfer", default=0.0, omitempty=True, kind=float)


class SizesService:
    """Size endpoints."""

    def __init__(self, client: Client):
        self._client = client

    def list(self, options: ListOptions | None = None) -> tuple[list[Size], Response]:
        """List all sizes."""
        resp = self._client.request("GET", add_options("v2/sizes", options))
        root = resp.data or {}
        return [Size.from_dict(item) for item in root.get("sizes") or []], resp