"""Domain names served by a website and the hosted zones they live in."""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .errors import InvalidDomainName

_LABEL = re.compile(r"^[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?$")
_MAX_HOSTNAME_LENGTH = 253


def normalize_hostname(value: str) -> str:
  """Lowercase a hostname, drop a trailing dot and check every label.

  Raises:
    InvalidDomainName: If the value is not a valid DNS hostname.
  """
  if not isinstance(value, str):
    raise InvalidDomainName(f"Hostname must be a string, got {type(value).__name__}")

  hostname = value.strip().lower()
  if hostname.endswith("."):
    hostname = hostname[:-1]

  if not hostname or len(hostname) > _MAX_HOSTNAME_LENGTH:
    raise InvalidDomainName(f"Invalid hostname: {value!r}")
  if not all(_LABEL.match(label) for label in hostname.split(".")):
    raise InvalidDomainName(f"Invalid hostname: {value!r}")

  return hostname


def _encode(hostname: str) -> str:
  # Doubling hyphens first keeps "a-b.c" and "a.b-c" apart.
  return hostname.replace("-", "--").replace(".", "-")


@dataclass(frozen=True)
class DomainName:
  """A hostname to serve and the Route 53 zone that holds its record."""

  name: str
  zone: str

  def __post_init__(self) -> None:
    name = normalize_hostname(self.name)
    zone = normalize_hostname(self.zone)
    if name != zone and not name.endswith(f".{zone}"):
      raise InvalidDomainName(f"Domain {name!r} is not inside zone {zone!r}")

    object.__setattr__(self, "name", name)
    object.__setattr__(self, "zone", zone)

  def __str__(self) -> str:
    return self.name

  def to_identifier(self) -> str:
    """Return a token safe for construct ids, unique per (name, zone)."""
    return f"{_encode(self.name)}_{_encode(self.zone)}"

  @classmethod
  def parse(cls, value: Any) -> "DomainName":
    """Build a DomainName from an instance, a {name, zone} mapping or a hostname.

    A bare hostname is treated as the apex of its own zone.
    """
    if isinstance(value, DomainName):
      return value
    if isinstance(value, str):
      return cls(name=value, zone=value)
    if isinstance(value, Mapping):
      if "name" not in value:
        raise InvalidDomainName(f"Domain mapping is missing 'name': {dict(value)!r}")
      return cls(name=value["name"], zone=value.get("zone", value["name"]))
    raise InvalidDomainName(f"Cannot interpret {value!r} as a domain name")


def parse_domain_names(values: Sequence[Any] | None) -> tuple[DomainName, ...]:
  """Parse a list of domain values, keeping their order."""
  return tuple(DomainName.parse(value) for value in values or ())


def select_apex(domain_names: Sequence[DomainName]) -> str:
  """The first domain is the apex; every other hostname redirects to it."""
  return str(domain_names[0]) if domain_names else ""
