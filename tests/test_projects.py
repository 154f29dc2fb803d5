import json
from types import SimpleNamespace
from urllib.parse import parse_qs, urlsplit

import pytest

from oceanclient.base import ApiError, Client, ListOptions, to_urn
from oceanclient.projects import (
    CreateProjectRequest,
    Project,
    ProjectResource,
    ProjectResourceLinks,
    ProjectsService,
    UpdateProjectRequest,
)


class FakeApi:
    def __init__(self):
        self.routes = {}
        self.requests = []

    def route(self, path, body="", status=200):
        self.routes[path] = (status, body)

    def __call__(self, method, url, headers, body):
        parts = urlsplit(url)
        self.requests.append(
            SimpleNamespace(method=method, path=parts.path, query=parse_qs(parts.query), body=body)
        )
        status, text = self.routes.get(parts.path, (404, '{"message":"not found"}'))
        return status, {}, text.encode()


class FakeDroplet:
    def __init__(self, droplet_id):
        self.droplet_id = droplet_id

    def urn(self):
        return to_urn("Droplet", self.droplet_id)


class FakeFloatingIP:
    def __init__(self, ip):
        self.ip = ip

    def urn(self):
        return to_urn("FloatingIP", self.ip)


class FakeType:
    pass


ASSIGN_BODY = b'{"resources":["do:droplet:1234","do:floatingip:1.2.3.4"]}'

ASSIGN_RESPONSE = """
{
    "resources": [
        {"urn": "do:droplet:1234", "assigned_at": "2018-09-27 00:00:00",
         "links": {"self": "http://example.com/v2/droplets/1"}},
        {"urn": "do:floatingip:1.2.3.4", "assigned_at": "2018-09-27 00:00:00",
         "links": {"self": "http://example.com/v2/floating_ips/1.2.3.4"}}
    ]
}
"""


@pytest.fixture
def api():
    return FakeApi()


@pytest.fixture
def service(api):
    return ProjectsService(Client("token", "http://api.example.com", api))


def test_list(api, service):
    projects = [Project(id="project-1", name="project-1"), Project(id="project-2", name="project-2")]
    api.route("/v2/projects", json.dumps({"projects": [p.to_dict() for p in projects]}))
    got, _ = service.list(None)
    assert got == projects
    assert api.requests[0].method == "GET"


def test_list_with_multiple_pages(api, service):
    api.route(
        "/v2/projects",
        json.dumps({
            "projects": [{"uuid": "project-1", "name": "project-1"}, {"uuid": "project-2", "name": "project-2"}],
            "links": {"pages": {"next": "http://example.com/v2/projects?page=2"}},
        }),
    )
    _, resp = service.list(None)
    assert resp.links.current_page() == 1


def test_list_with_page_number(api, service):
    api.route(
        "/v2/projects",
        json.dumps({
            "projects": [{"uuid": "project-1", "name": "project-1"}],
            "links": {"pages": {
                "next": "http://example.com/v2/projects?page=3",
                "prev": "http://example.com/v2/projects?page=1",
                "last": "http://example.com/v2/projects?page=3",
                "first": "http://example.com/v2/projects?page=1",
            }},
        }),
    )
    _, resp = service.list(ListOptions(page=2))
    assert resp.links.current_page() == 2
    assert api.requests[0].query == {"page": ["2"]}


def test_get_default(api, service):
    project = Project(id="project-1", name="project-1")
    api.route("/v2/projects/default", json.dumps({"project": project.to_dict()}))
    got, _ = service.get_default()
    assert got == project
    assert api.requests[0].method == "GET"


def test_get_with_uuid(api, service):
    project = Project(id="project-1", name="project-1")
    api.route("/v2/projects/project-1", json.dumps({"project": project.to_dict()}))
    got, _ = service.get("project-1")
    assert got == project


def test_create(api, service):
    request = CreateProjectRequest(
        name="my project",
        description="for my stuff",
        purpose="Just trying out DigitalOcean",
        environment="Production",
    )
    expected = Project(
        id="project-id",
        name=request.name,
        description=request.description,
        purpose=request.purpose,
        environment=request.environment,
    )
    api.route("/v2/projects", json.dumps({"project": expected.to_dict()}))
    got, _ = service.create(request)
    assert got == expected
    sent = api.requests[0]
    assert sent.method == "POST"
    assert CreateProjectRequest.from_dict(json.loads(sent.body)) == request


def test_update_with_one_attribute(api, service):
    request = UpdateProjectRequest(name="my-great-project")
    expected = Project(
        id="project-id",
        name="my-great-project",
        description="some-other-description",
        purpose="some-other-purpose",
        environment="some-other-env",
        is_default=False,
    )
    api.route("/v2/projects/project-1", json.dumps({"project": expected.to_dict()}))
    got, _ = service.update("project-1", request)
    assert got == expected
    sent = api.requests[0]
    assert sent.method == "PATCH"
    assert sent.body == (
        b'{"name":"my-great-project","description":null,"purpose":null,"environment":null,"is_default":null}'
    )


def test_update_with_all_attributes(api, service):
    request = UpdateProjectRequest(
        name="my-great-project",
        description="some-description",
        purpose="some-purpose",
        environment="some-env",
        is_default=True,
    )
    expected = Project(
        id="project-id",
        name="my-great-project",
        description="some-description",
        purpose="some-purpose",
        environment="some-env",
        is_default=True,
    )
    api.route("/v2/projects/project-1", json.dumps({"project": expected.to_dict()}))
    got, _ = service.update("project-1", request)
    assert got == expected
    assert api.requests[0].body == (
        b'{"name":"my-great-project","description":"some-description","purpose":"some-purpose",'
        b'"environment":"some-env","is_default":true}'
    )


def test_update_request_ignores_wrong_types():
    request = UpdateProjectRequest(name=5, is_default="yes")
    assert request.to_dict() == {
        "name": None,
        "description": None,
        "purpose": None,
        "environment": None,
        "is_default": None,
    }


def test_delete(api, service):
    api.route("/v2/projects/project-1", "", status=204)
    resp = service.delete("project-1")
    assert resp.status == 204
    assert api.requests[0].method == "DELETE"


def test_list_resources(api, service):
    resources = [
        ProjectResource(
            urn="do:droplet:1",
            assigned_at="2018-09-27 00:00:00",
            links=ProjectResourceLinks(self_url="http://example.com/v2/droplets/1"),
        ),
        ProjectResource(
            urn="do:floatingip:1.2.3.4",
            assigned_at="2018-09-27 00:00:00",
            links=ProjectResourceLinks(self_url="http://example.com/v2/floating_ips/1.2.3.4"),
        ),
    ]
    api.route("/v2/projects/project-1/resources", json.dumps({"resources": [r.to_dict() for r in resources]}))
    got, _ = service.list_resources("project-1", None)
    assert got == resources
    assert api.requests[0].method == "GET"


def test_list_resources_with_multiple_pages(api, service):
    api.route(
        "/v2/projects/project-1/resources",
        json.dumps({
            "resources": [{"urn": "do:droplet:1", "assigned_at": "2018-09-27 00:00:00",
                           "links": {"self": "http://example.com/v2/droplets/1"}}],
            "links": {"pages": {"next": "http://example.com/v2/projects/project-1/resources?page=2"}},
        }),
    )
    _, resp = service.list_resources("project-1", None)
    assert resp.links.current_page() == 1


def test_list_resources_with_page_number(api, service):
    base = "http://example.com/v2/projects/project-1/resources"
    api.route(
        "/v2/projects/project-1/resources",
        json.dumps({
            "resources": [],
            "links": {"pages": {
                "next": base + "?page=3",
                "prev": base + "?page=1",
                "last": base + "?page=3",
                "first": base + "?page=1",
            }},
        }),
    )
    _, resp = service.list_resources("project-1", ListOptions(page=2))
    assert resp.links.current_page() == 2


def test_assign_resources_with_types(api, service):
    api.route("/v2/projects/project-1/resources", ASSIGN_RESPONSE)
    got, _ = service.assign_resources("project-1", FakeDroplet(1234), FakeFloatingIP("1.2.3.4"))
    assert api.requests[0].method == "POST"
    assert api.requests[0].body == ASSIGN_BODY
    assert [r.urn for r in got] == ["do:droplet:1234", "do:floatingip:1.2.3.4"]


def test_assign_resources_with_strings(api, service):
    api.route("/v2/projects/project-1/resources", ASSIGN_RESPONSE)
    got, _ = service.assign_resources("project-1", "do:droplet:1234", "do:floatingip:1.2.3.4")
    assert api.requests[0].body == ASSIGN_BODY
    assert [r.urn for r in got] == ["do:droplet:1234", "do:floatingip:1.2.3.4"]


def test_assign_resources_with_strings_and_types(api, service):
    api.route("/v2/projects/project-1/resources", ASSIGN_RESPONSE)
    got, _ = service.assign_resources("project-1", "do:droplet:1234", FakeFloatingIP("1.2.3.4"))
    assert api.requests[0].body == ASSIGN_BODY
    assert got[1].links.self_url == "http://example.com/v2/floating_ips/1.2.3.4"


def test_assign_resources_without_urn_raises(api, service):
    with pytest.raises(TypeError, match="FakeType must either be a string or have a valid URN method"):
        service.assign_resources("project-1", FakeType())
    assert api.requests == []


def test_get_unknown_project_raises(api, service):
    with pytest.raises(ApiError) as info:
        service.get("missing")
    assert info.value.status == 404