"""Load balancers and their forwarding rules, health checks and session affinity."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .base import ApiObject, Client, ListOptions, Response, add_options, api_field, to_urn
from .regions import Region

LOAD_BALANCERS_BASE_PATH = "/v2/load_balancers"
FORWARDING_RULES_PATH = "forwarding_rules"
DROPLETS_PATH = "droplets"


@dataclass
class ForwardingRule(ApiObject):
    """How traffic entering the load balancer is passed on to droplets."""

    entry_protocol: str = api_field("entry_protocol", "EntryProtocol", default="", omitempty=True)
    entry_port: int = api_field("entry_port", "EntryPort", default=0, omitempty=True)
    target_protocol: str = api_field("target_protocol", "TargetProtocol", default="", omitempty=True)
    target_port: int = api_field("target_port", "TargetPort", default=0, omitempty=True)
    certificate_id: str = api_field("certificate_id", "CertificateID", default="", omitempty=True)
    tls_passthrough: bool = api_field("tls_passthrough", "TlsPassthrough", default=False, omitempty=True)


@dataclass
class HealthCheck(ApiObject):
    """Rules for checking that backend droplets are healthy."""

    protocol: str = api_field("protocol", "Protocol", default="", omitempty=True)
    port: int = api_field("port", "Port", default=0, omitempty=True)
    path: str = api_field("path", "Path", default="", omitempty=True)
    check_interval_seconds: int = api_field(
        "check_interval_seconds", "CheckIntervalSeconds", default=0, omitempty=True
    )
    response_timeout_seconds: int = api_field(
        "response_timeout_seconds", "ResponseTimeoutSeconds", default=0, omitempty=True
    )
    healthy_threshold: int = api_field("healthy_threshold", "HealthyThreshold", default=0, omitempty=True)
    unhealthy_threshold: int = api_field("unhealthy_threshold", "UnhealthyThreshold", default=0, omitempty=True)


@dataclass
class StickySessions(ApiObject):
    """Session affinity rules."""

    type: str = api_field("type", "Type", default="", omitempty=True)
    cookie_name: str = api_field("cookie_name", "CookieName", default="", omitempty=True)
    cookie_ttl_seconds: int = api_field("cookie_ttl_seconds", "CookieTtlSeconds", default=0, omitempty=True)


@dataclass
class LoadBalancerRequest(ApiObject):
    """Configuration to apply to a new or existing load balancer."""

    name: str = api_field("name", "Name", default="", omitempty=True)
    algorithm: str = api_field("algorithm", "Algorithm", default="", omitempty=True)
    region: str = api_field("region", "Region", default="", omitempty=True)
    forwarding_rules: Optional[list] = api_field(
        "forwarding_rules", "ForwardingRules", omitempty=True, kind=ForwardingRule
    )
    health_check: Optional[HealthCheck] = api_field("health_check", "HealthCheck", omitempty=True, kind=HealthCheck)
    sticky_sessions: Optional[StickySessions] = api_field(
        "sticky_sessions", "StickySessions", omitempty=True, kind=StickySessions
    )
    droplet_ids: Optional[list] = api_field("droplet_ids", "DropletIDs", omitempty=True)
    tag: str = api_field("tag", "Tag", default="", omitempty=True)
    tags: Optional[list] = api_field("tags", "Tags", omitempty=True)
    redirect_http_to_https: bool = api_field(
        "redirect_http_to_https", "RedirectHttpToHttps", default=False, omitempty=True
    )
    enable_proxy_protocol: bool = api_field(
        "enable_proxy_protocol", "EnableProxyProtocol", default=False, omitempty=True
    )
    vpc_uuid: str = api_field("vpc_uuid", "VPCUUID", default="", omitempty=True)


@dataclass
class LoadBalancer(ApiObject):
    """A load balancer. Tags can only be given when it is created."""

    id: str = api_field("id", "ID", default="", omitempty=True)
    name: str = api_field("name", "Name", default="", omitempty=True)
    ip: str = api_field("ip", "IP", default="", omitempty=True)
    algorithm: str = api_field("algorithm", "Algorithm", default="", omitempty=True)
    status: str = api_field("status", "Status", default="", omitempty=True)
    created: str = api_field("created_at", "Created", default="", omitempty=True)
    forwarding_rules: Optional[list] = api_field(
        "forwarding_rules", "ForwardingRules", omitempty=True, kind=ForwardingRule
    )
    health_check: Optional[HealthCheck] = api_field("health_check", "HealthCheck", omitempty=True, kind=HealthCheck)
    sticky_sessions: Optional[StickySessions] = api_field(
        "sticky_sessions", "StickySessions", omitempty=True, kind=StickySessions
    )
    region: Optional[Region] = api_field("region", "Region", omitempty=True, kind=Region)
    droplet_ids: Optional[list] = api_field("droplet_ids", "DropletIDs", omitempty=True)
    tag: str = api_field("tag", "Tag", default="", omitempty=True)
    tags: Optional[list] = api_field("tags", "Tags", omitempty=True)
    redirect_http_to_https: bool = api_field(
        "redirect_http_to_https", "RedirectHttpToHttps", default=False, omitempty=True
    )
    enable_proxy_protocol: bool = api_field(
        "enable_proxy_protocol", "EnableProxyProtocol", default=False, omitempty=True
    )
    vpc_uuid: str = api_field("vpc_uuid", "VPCUUID", default="", omitempty=True)

    def urn(self) -> str:
        """Return the load balancer's URN."""
        return to_urn("LoadBalancer", self.id)

    def as_request(self) -> LoadBalancerRequest:
        """Build an independent request carrying this load balancer's current settings."""
        return LoadBalancerRequest(
            name=self.name,
            algorithm=self.algorithm,
            region=self.region.slug if self.region is not None else "",
            forwarding_rules=[replace(rule) for rule in self.forwarding_rules] if self.forwarding_rules else None,
            health_check=replace(self.health_check) if self.health_check is not None else None,
            sticky_sessions=replace(self.sticky_sessions) if self.sticky_sessions is not None else None,
            droplet_ids=list(self.droplet_ids) if self.droplet_ids else None,
            tag=self.tag,
            redirect_http_to_https=self.redirect_http_to_https,
            enable_proxy_protocol=self.enable_proxy_protocol,
            vpc_uuid=self.vpc_uuid,
        )


def _droplet_ids_body(ids) -> dict:
    return {"droplet_ids": list(ids)} if ids else {}


def _rules_body(rules) -> dict:
    return {"forwarding_rules": [rule.to_dict() for rule in rules]} if rules else {}


class LoadBalancersService:
    """Load balancer endpoints."""

    def __init__(self, client: Client):
        self._client = client

    def _one(self, resp: Response) -> Optional[LoadBalancer]:
        return LoadBalancer.from_dict((resp.data or {}).get("load_balancer"))

    def get(self, lb_id: str) -> tuple[Optional[LoadBalancer], Response]:
        """Fetch a load balancer by id."""
        resp = self._client.request("GET", f"{LOAD_BALANCERS_BASE_PATH}/{lb_id}")
        return self._one(resp), resp

    def list(self, options: ListOptions | None = None) -> tuple[list[LoadBalancer], Response]:
        """List load balancers, optionally one page at a time."""
        resp = self._client.request("GET", add_options(LOAD_BALANCERS_BASE_PATH, options))
        root = resp.data or {}
        return [LoadBalancer.from_dict(item) for item in root.get("load_balancers") or []], resp

    def create(self, request: LoadBalancerRequest) -> tuple[Optional[LoadBalancer], Response]:
        """Create a load balancer."""
        resp = self._client.request("POST", LOAD_BALANCERS_BASE_PATH, request)
        return self._one(resp), resp

    def update(self, lb_id: str, request: LoadBalancerRequest) -> tuple[Optional[LoadBalancer], Response]:
        """Replace the configuration of a load balancer."""
        resp = self._client.request("PUT", f"{LOAD_BALANCERS_BASE_PATH}/{lb_id}", request)
        return self._one(resp), resp

    def delete(self, lb_id: str) -> Response:
        """Delete a load balancer."""
        return self._client.request("DELETE", f"{LOAD_BALANCERS_BASE_PATH}/{lb_id}")

    def add_droplets(self, lb_id: str, *args: int) -> Response:
        """Put droplets behind a load balancer."""
        path = f"{LOAD_BALANCERS_BASE_PATH}/{lb_id}/{DROPLETS_PATH}"
        return self._client.request("POST", path, _droplet_ids_body(args))

    def remove_droplets(self, lb_id: str, *args: int) -> Response:
        """Take droplets out from behind a load balancer."""
        path = f"{LOAD_BALANCERS_BASE_PATH}/{lb_id}/{DROPLETS_PATH}"
        return self._client.request("DELETE", path, _droplet_ids_body(args))

    def add_forwarding_rules(self, lb_id: str, *args: ForwardingRule) -> Response:
        """Add forwarding rules to a load balancer."""
        path = f"{LOAD_BALANCERS_BASE_PATH}/{lb_id}/{FORWARDING_RULES_PATH}"
        return self._client.request("POST", path, _rules_body(args))

    def remove_forwarding_rules(self, lb_id: str, *args: ForwardingRule) -> Response:
        """Remove forwarding rules from a load balancer."""
        path = f"{LOAD_BALANCERS_BASE_PATH}/{lb_id}/{FORWARDING_RULES_PATH}"
        return self._client.request("DELETE", path, _rules_body(args))