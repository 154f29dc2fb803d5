"""Projects: groups of resources that belong together."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Any, Optional

from .base import ApiObject, Client, ListOptions, ResourceWithURN, Response, add_options, api_field

DEFAULT_PROJECT = "default"
PROJECTS_BASE_PATH = "/v2/projects"


def _join(*parts: str) -> str:
    return posixpath.normpath("/".join(parts))


@dataclass
class Project(ApiObject):
    """A project and its settings."""

    id: str = api_field("id", "ID", default="")
    owner_uuid: str = api_field("owner_uuid", "OwnerUUID", default="")
    owner_id: int = api_field("owner_id", "OwnerID", default=0)
    name: str = api_field("name", "Name", default="")
    description: str = api_field("description", "Description", default="")
    purpose: str = api_field("purpose", "Purpose", default="")
    environment: str = api_field("environment", "Environment", default="")
    is_default: bool = api_field("is_default", "IsDefault", default=False)
    created_at: str = api_field("created_at", "CreatedAt", default="")
    updated_at: str = api_field("updated_at", "UpdatedAt", default="")


@dataclass
class CreateProjectRequest(ApiObject):
    """A request to create a project."""

    name: str = api_field("name", "Name", default="")
    description: str = api_field("description", "Description", default="")
    purpose: str = api_field("purpose", "Purpose", default="")
    environment: str = api_field("environment", "Environment", default="")


def _text_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


@dataclass
class UpdateProjectRequest:
    """A partial update of a project; attributes that are not set are sent as null."""

    name: Any = None
    description: Any = None
    purpose: Any = None
    environment: Any = None
    is_default: Any = None

    def to_dict(self) -> dict:
        """Encode the update, with null for every attribute of the wrong type or unset."""
        return {
            "name": _text_or_none(self.name),
            "description": _text_or_none(self.description),
            "purpose": _text_or_none(self.purpose),
            "environment": _text_or_none(self.environment),
            "is_default": self.is_default if isinstance(self.is_default, bool) else None,
        }


@dataclass
class ProjectResourceLinks(ApiObject):
    """Where to find more about a resource in a project."""

    self_url: str = api_field("self", "Self", default="")


@dataclass
class ProjectResource(ApiObject):
    """A resource as the projects API describes it."""

    urn: str = api_field("urn", "URN", default="")
    assigned_at: str = api_field("assigned_at", "AssignedAt", default="")
    links: Optional[ProjectResourceLinks] = api_field("links", "Links", kind=ProjectResourceLinks)
    status: str = api_field("status", "Status", default="", omitempty=True)


def _resource_urn(resource: Any) -> str:
    if isinstance(resource, ResourceWithURN):
        return resource.urn()
    if isinstance(resource, str):
        return resource
    cls = type(resource)
    raise TypeError(f"{cls.__module__}.{cls.__qualname__} must either be a string or have a valid URN method")


class ProjectsService:
    """Project endpoints."""

    def __init__(self, client: Client):
        self._client = client

    def _one(self, resp: Response) -> Optional[Project]:
        return Project.from_dict((resp.data or {}).get("project"))

    def _resources(self, resp: Response) -> list[ProjectResource]:
        root = resp.data or {}
        return [ProjectResource.from_dict(item) for item in root.get("resources") or []]

    def list(self, options: ListOptions | None = None) -> tuple[list[Project], Response]:
        """List projects."""
        resp = self._client.request("GET", add_options(PROJECTS_BASE_PATH, options))
        root = resp.data or {}
        return [Project.from_dict(item) for item in root.get("projects") or []], resp

    def get_default(self) -> tuple[Optional[Project], Response]:
        """Fetch the default project."""
        return self.get(DEFAULT_PROJECT)

    def get(self, project_id: str) -> tuple[Optional[Project], Response]:
        """Fetch a project by id."""
        resp = self._client.request("GET", _join(PROJECTS_BASE_PATH, project_id))
        return self._one(resp), resp

    def create(self, request: CreateProjectRequest) -> tuple[Optional[Project], Response]:
        """Create a project."""
        resp = self._client.request("POST", PROJECTS_BASE_PATH, request)
        return self._one(resp), resp

    def update(self, project_id: str, request: UpdateProjectRequest) -> tuple[Optional[Project], Response]:
        """Change some attributes of a project."""
        resp = self._client.request("PATCH", _join(PROJECTS_BASE_PATH, project_id), request)
        return self._one(resp), resp

    def delete(self, project_id: str) -> Response:
        """Delete a project; it must hold no resources."""
        return self._client.request("DELETE", _join(PROJECTS_BASE_PATH, project_id))

    def list_resources(
        self, project_id: str, options: ListOptions | None = None
    ) -> tuple[list[ProjectResource], Response]:
        """List the resources in a project."""
        path = add_options(_join(PROJECTS_BASE_PATH, project_id, "resources"), options)
        resp = self._client.request("GET", path)
        return self._resources(resp), resp

    def assign_resources(self, project_id: str, *args: Any) -> tuple[list[ProjectResource], Response]:
        """Assign resources, given as URN strings or objects with a urn() method, to a project."""
        urns = [_resource_urn(resource) for resource in args]
        path = _join(PROJECTS_BASE_PATH, project_id, "resources")
        resp = self._client.request("POST", path, {"resources": urns})
        return self._resources(resp), resp