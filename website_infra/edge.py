"""Viewer-request handling run by CloudFront Functions in front of the bucket.

The logic lives here twice: as Python (``handle_viewer_request``) and as the
JavaScript source rendered by ``render_viewer_request_source``, which is
what CloudFront executes. Both apply the same two rules, in order:

1. When an apex domain is configured and the Host header differs from it,
   answer with a 301 to ``https://<apex><uri>`` keeping the query string.
2. Otherwise append ``index.html`` to URIs that end with ``/``.
"""

import json
from dataclasses import dataclass, replace
from typing import Any

from .domain import normalize_hostname
from .errors import InvalidDomainName, UnsafeHandlerValue

INDEX_DOCUMENT = "index.html"


def _querystring_from_event(querystring: dict[str, Any]) -> str:
  parts: list[str] = []
  for key, entry in querystring.items():
    for item in entry.get("multiValue") or [entry]:
      parts.append(f"{key}={item['value']}" if "value" in item else key)
  return "&".join(parts)


def _querystring_item(value: str | None) -> dict[str, str]:
  return {} if value is None else {"value": value}


def _querystring_to_event(querystring: str) -> dict[str, Any]:
  values: dict[str, list[str | None]] = {}
  for part in querystring.split("&"):
    if not part:
      continue
    key, sep, value = part.partition("=")
    values.setdefault(key, []).append(value if sep else None)

  event: dict[str, Any] = {}
  for key, items in values.items():
    event[key] = _querystring_item(items[0])
    if len(items) > 1:
      event[key]["multiValue"] = [_querystring_item(item) for item in items]
  return event


@dataclass(frozen=True)
class ViewerRequest:
  """The parts of a viewer request the handler reads or rewrites."""

  host: str
  uri: str
  querystring: str = ""

  @classmethod
  def from_event(cls, event: dict[str, Any]) -> "ViewerRequest":
    """Read a CloudFront Functions viewer-request event."""
    request = event["request"]
    return cls(
      host=request["headers"]["host"]["value"],
      uri=request["uri"],
      querystring=_querystring_from_event(request.get("querystring", {})),
    )

  def to_event(self) -> dict[str, Any]:
    return {
      "uri": self.uri,
      "querystring": _querystring_to_event(self.querystring),
      "headers": {"host": {"value": self.host}},
    }


@dataclass(frozen=True)
class RedirectResponse:
  """Permanent redirect returned instead of forwarding to the origin."""

  location: str
  status_code: int = 301
  status_description: str = "Moved Permanently"

  def to_event(self) -> dict[str, Any]:
    return {
      "statusCode": self.status_code,
      "statusDescription": self.status_description,
      "headers": {"location": {"value": self.location}},
    }


def handle_viewer_request(
  request: ViewerRequest, apex_domain: str
) -> ViewerRequest | RedirectResponse:
  """Redirect to the apex domain or resolve directory URIs to index documents."""
  if apex_domain and request.host != apex_domain:
    location = f"https://{apex_domain}{request.uri}"
    if request.querystring:
      location = f"{location}?{request.querystring}"
    return RedirectResponse(location=location)

  if request.uri.endswith("/"):
    return replace(request, uri=request.uri + INDEX_DOCUMENT)

  return request


_HANDLER_TEMPLATE = """\
var APEX_DOMAIN = __APEX_DOMAIN__;

function querystring(qs) {
  var parts = [];
  for (var key in qs) {
    var entry = qs[key];
    var items = entry.multiValue ? entry.multiValue : [entry];
    for (var i = 0; i < items.length; i++) {
      parts.push(items[i].value !== undefined ? key + '=' + items[i].value : key);
    }
  }
  return parts.length ? '?' + parts.join('&') : '';
}

function handler(event) {
  var request = event.request;
  var host = request.headers.host.value;
  var uri = request.uri;
  if (APEX_DOMAIN !== '' && host !== APEX_DOMAIN) {
    return {
      statusCode: 301,
      statusDescription: 'Moved Permanently',
      headers: {
        location: { value: 'https://' + APEX_DOMAIN + uri + querystring(request.querystring) }
      }
    };
  }
  if (uri.endsWith('/')) {
    request.uri = uri + '__INDEX_DOCUMENT__';
  }
  return request;
}
"""


def render_viewer_request_source(apex_domain: str) -> str:
  """Render the CloudFront Functions source for the given apex domain.

  The apex must be empty or a valid hostname. It is embedded as a JSON
  string literal so it can only ever be data inside the function.

  Raises:
    UnsafeHandlerValue: If the apex domain is not a plain hostname.
  """
  if apex_domain:
    try:
      hostname = normalize_hostname(apex_domain)
    except InvalidDomainName as e:
      raise UnsafeHandlerValue(f"Refusing to embed apex domain {apex_domain!r}") from e
    if hostname != apex_domain:
      raise UnsafeHandlerValue(f"Apex domain {apex_domain!r} is not in canonical form")

  return _HANDLER_TEMPLATE.replace(
    "__APEX_DOMAIN__", json.dumps(apex_domain, ensure_ascii=True)
  ).replace("__INDEX_DOCUMENT__", INDEX_DOCUMENT)
