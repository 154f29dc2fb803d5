"""Core pieces shared by every service: models, query options, links and the HTTP client."""

from __future__ import annotations

import json
import math
import urllib.error
import urllib.request
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Mapping, Optional, Protocol, runtime_checkable
from urllib.parse import parse_qs, urlencode, urljoin, urlsplit, urlunsplit

TYPE_PREFIX = "oceanclient"
JSON_MEDIA_TYPE = "application/json"
USER_AGENT = "oceanclient"

Transport = Callable[[str, str, Mapping[str, str], Optional[bytes]], tuple]


@runtime_checkable
class ResourceWithURN(Protocol):
    """Anything that can name itself with a URN."""

    def urn(self) -> str:
        """Return the resource's URN."""
        ...


def to_urn(resource_type: str, id: Any) -> str:
    """Build a URN from a resource type and an identifier."""
    return f"do:{resource_type.lower()}:{id}"


class ArgError(ValueError):
    """An argument given to a service call is not acceptable."""

    def __init__(self, arg: str, reason: str):
        self.arg = arg
        self.reason = reason
        super().__init__(f"{arg} is invalid because {reason}")


class ApiError(Exception):
    """The API answered with a status outside the 2xx range."""

    def __init__(self, status: int, message: str, response: "Response"):
        self.status = status
        self.message = message
        self.response = response
        super().__init__(f"{status} {message}")


def api_field(key: str, label: str, *, default: Any = None, factory: Callable[[], Any] | None = None,
              omitempty: bool = False, kind: Any = None):
    """Declare a model field with its wire key, display label and decoding kind."""
    metadata = {"key": key, "label": label, "omitempty": omitempty, "kind": kind}
    if factory is not None:
        return field(default_factory=factory, metadata=metadata)
    return field(default=default, metadata=metadata)


def _decode(value: Any, kind: Any) -> Any:
    if isinstance(value, list):
        return [_decode(item, kind) for item in value]
    if kind is None:
        return value
    if hasattr(kind, "from_dict"):
        return kind.from_dict(value)
    return kind(value)


def _encode(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _encode(item) for key, item in value.items()}
    return value


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, (str, bool, int, float, list, tuple, dict)) and not value


class ApiObject:
    """Base for dataclass models that map to and from API JSON."""

    @classmethod
    def from_dict(cls, data):
        """Build an instance from decoded JSON; None gives None."""
        if data is None:
            return None
        kwargs = {}
        for f in fields(cls):
            key = f.metadata.get("key", f.name)
            if data.get(key) is None:
                continue
            kwargs[f.name] = _decode(data[key], f.metadata.get("kind"))
        return cls(**kwargs)

    def to_dict(self) -> dict:
        """Encode the instance as a JSON-ready dict."""
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.metadata.get("omitempty") and _is_empty(value):
                continue
            out[f.metadata.get("key", f.name)] = _encode(value)
        return out

    def __str__(self) -> str:
        return stringify(self)


def _format_float(value: float) -> str:
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def stringify(value: Any) -> str:
    """Render a value in the library's compact human-readable form."""
    if value is None:
        return "<nil>"
    if isinstance(value, ApiObject):
        parts = []
        for f in fields(value):
            item = getattr(value, f.name)
            if item is None:
                continue
            parts.append(f"{f.metadata.get('label', f.name)}:{stringify(item)}")
        return f"{TYPE_PREFIX}.{type(value).__name__}{{{', '.join(parts)}}}"
    if getattr(type(value), "_stringify_braced", False):
        return f"{TYPE_PREFIX}.{type(value).__name__}{{{value}}}"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(stringify(item) for item in value) + "]"
    return str(value)


@dataclass
class ListOptions:
    """Pagination options for list calls."""

    page: int = 0
    per_page: int = 0

    def query(self) -> dict:
        """Return the non-empty options as query parameters."""
        params = {}
        if self.page:
            params["page"] = str(self.page)
        if self.per_page:
            params["per_page"] = str(self.per_page)
        return params


def add_options(path: str, options: Any) -> str:
    """Merge options (ListOptions or a mapping) into the query of path."""
    if options is None:
        return path
    params = options.query() if hasattr(options, "query") else dict(options)
    parts = urlsplit(path)
    merged = parse_qs(parts.query, keep_blank_values=True)
    for key, value in params.items():
        if _is_empty(value):
            continue
        merged[key] = [str(value)]
    query = urlencode(sorted(merged.items()), doseq=True)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


@dataclass
class Pages(ApiObject):
    """Links to the neighbouring pages of a listing."""

    first: str = api_field("first", "First", default="", omitempty=True)
    prev: str = api_field("prev", "Prev", default="", omitempty=True)
    last: str = api_field("last", "Last", default="", omitempty=True)
    next: str = api_field("next", "Next", default="", omitempty=True)


def _page_of(url: str) -> int:
    values = parse_qs(urlsplit(url).query).get("page")
    if not values:
        raise ValueError(f"no page in {url!r}")
    return int(values[0])


@dataclass
class Links(ApiObject):
    """Pagination links returned with list responses."""

    pages: Optional[Pages] = api_field("pages", "Pages", omitempty=True, kind=Pages)

    @classmethod
    def from_dict(cls, data):
        """Build links from decoded JSON."""
        return super().from_dict(data)

    def current_page(self) -> int:
        """Work out the number of the page these links belong to."""
        pages = self.pages
        if pages is None:
            return 1
        if not pages.prev and pages.next:
            return 1
        if pages.prev:
            return _page_of(pages.prev) + 1
        return 0


@dataclass
class Response:
    """An API response: status, headers, decoded body and pagination links."""

    status: int
    headers: dict = field(default_factory=dict)
    data: Any = None
    links: Optional[Links] = None


def _urllib_transport(method, url, headers, body):
    request = urllib.request.Request(url, data=body, headers=dict(headers), method=method)
    try:
        with urllib.request.urlopen(request) as reply:
            return reply.status, dict(reply.headers), reply.read()
    except urllib.error.HTTPError as error:
        return error.code, dict(error.headers or {}), error.read()


class Client:
    """Sends JSON requests to the API and decodes the answers."""

    def __init__(self, token: str | None, base_url: str, transport: Transport | None = None):
        self.token = token
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.transport = transport or _urllib_transport

    def request(self, method: str, path: str, body: Any = None) -> Response:
        """Send a request; raise ApiError on a non-2xx status."""
        url = urljoin(self.base_url, path)
        headers = {"Accept": JSON_MEDIA_TYPE, "User-Agent": USER_AGENT}
        payload = None
        if body is not None:
            payload = json.dumps(_encode(body), separators=(",", ":")).encode()
            headers["Content-Type"] = JSON_MEDIA_TYPE
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        status, reply_headers, raw = self.transport(method, url, headers, payload)
        ok = 200 <= status < 300
        text = (raw or b"").decode("utf-8", "replace") if isinstance(raw, (bytes, bytearray)) else (raw or "")
        data = None
        if text.strip():
            try:
                data = json.loads(text)
            except ValueError:
                if ok:
                    raise
        response = Response(status=status, headers=dict(reply_headers or {}), data=data)
        if isinstance(data, dict) and data.get("links") is not None:
            response.links = Links.from_dict(data["links"])
        if not ok:
            message = data.get("message", "") if isinstance(data, dict) else text
            raise ApiError(status, message, response)
        return response