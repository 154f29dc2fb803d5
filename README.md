# oceanclient

A small Python client for a cloud provider's v2 REST API. It needs nothing
beyond the standard library. It covers regions, sizes, snapshots, load
balancers, VPCs, projects, block storage volumes and volume actions.

## Installation

```
pip install oceanclient
```

To run the tests:

```
pip install "oceanclient[test]"
pytest
```

## The client

`oceanclient.base.Client(token, base_url, transport=None)` sends JSON
requests. Paths are resolved against `base_url`. When a token is given, it
is sent as `Authorization: Bearer <token>`. A 2xx answer gives a `Response`
with `status`, `headers`, the decoded JSON in `data`, and `links` when the
body holds a `links` object. Any other status raises `ApiError`, which
carries `status`, `message` and `response`.

By default requests go through `urllib`. You can pass any callable as
`transport`. It is called as `transport(method, url, headers, body)` and
must return `(status, headers, body)`. This makes it easy to test against
canned replies.

```python
from oceanclient.base import Client, ListOptions

client = Client(token="token", base_url="https://api.example.com/")
```

## Services

Each service wraps a client. Calls that fetch or create something return a
`(object, Response)` pair. List calls return a `(list, Response)` pair.
Delete calls return the `Response` alone.

| Module | Service | Calls |
| --- | --- | --- |
| `oceanclient.regions` | `RegionsService` | `list` |
| `oceanclient.sizes` | `SizesService` | `list` |
| `oceanclient.snapshots` | `SnapshotsService` | `list`, `list_volume`, `list_droplet`, `get`, `delete` |
| `oceanclient.load_balancers` | `LoadBalancersService` | `get`, `list`, `create`, `update`, `delete`, `add_droplets`, `remove_droplets`, `add_forwarding_rules`, `remove_forwarding_rules` |
| `oceanclient.vpcs` | `VPCsService` | `create`, `get`, `list`, `update`, `set`, `delete` |
| `oceanclient.projects` | `ProjectsService` | `list`, `get_default`, `get`, `create`, `update`, `delete`, `list_resources`, `assign_resources` |
| `oceanclient.storage` | `StorageService` | `list_volumes`, `get_volume`, `create_volume`, `delete_volume`, `list_snapshots`, `get_snapshot`, `create_snapshot`, `delete_snapshot` |
| `oceanclient.storage_actions` | `StorageActionsService` | `attach`, `detach_by_droplet_id`, `get`, `list`, `resize` |

```python
from oceanclient.regions import RegionsService
from oceanclient.load_balancers import LoadBalancersService, ForwardingRule

regions, response = RegionsService(client).list(ListOptions(page=1))
for region in regions:
    print(region.slug, region.name)
if response.links is not None:
    print("page", response.links.current_page())

lbs = LoadBalancersService(client)
lb, _ = lbs.get("37e6be88-01ec-4ec7-9bc6-a514d4719057")
request = lb.as_request()          # an independent copy of the settings
request.algorithm = "least_connections"
lbs.update(lb.id, request)
lbs.add_forwarding_rules(
    lb.id,
    ForwardingRule(entry_protocol="tcp", entry_port=8080,
                   target_protocol="tcp", target_port=8081),
)
lbs.add_droplets(lb.id, 42, 44)
```

### VPCs

`VPCsService.update` replaces a VPC's properties with a `VPCUpdateRequest`.
`VPCsService.set` sends a partial `PATCH` built from setters such as
`VPCSetName("new-name")`.

### Projects

```python
from oceanclient.projects import ProjectsService, UpdateProjectRequest

projects = ProjectsService(client)
default, _ = projects.get_default()
projects.update(default.id, UpdateProjectRequest(name="renamed"))
projects.assign_resources(default.id, "do:droplet:1234", lb)
```

`UpdateProjectRequest` sends every attribute. An attribute that is unset, or
of the wrong type, is sent as `null`. `assign_resources` accepts URN strings
and any object with a `urn()` method, such as `LoadBalancer` or `Volume`.
Any other value raises `TypeError`.

### Volumes

`StorageService.list_volumes` takes an optional `ListVolumeParams(region,
name, list_options)` to filter by region and/or name. A `Volume` exposes
`created_at` as a timezone-aware `datetime`.

## Helpers

- `to_urn(resource_type, id)` builds a URN such as `do:volume:abc`.
- `stringify(value)` renders any model in a compact form. Every model's
  `str()` uses it, for example
  `oceanclient.Region{Slug:"region", Name:"Region", Sizes:["1" "2"], Available:true}`.
- `add_options(path, options)` merges `ListOptions` or a mapping into a
  path's query string.
- `Timestamp.from_json(text)` reads raw JSON text holding either an integer
  of Unix seconds or a quoted RFC 3339 string. Anything else raises
  `ValueError`. `Timestamp.to_json()` writes a quoted RFC 3339 string.
- `ArgError` is a `ValueError` subclass for rejected arguments.

## What it does not do

- There is no tags service. Tags can be set on load balancers, volumes and
  snapshots, but they cannot be listed, created or attached to resources.
- There is no droplet, image or action-polling service.
- There is no automatic pagination. Ask for each page with `ListOptions`.
- There is no command-line tool. This is a library only.