"""Configuration loader for multi-website management."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from aws_cdk import Duration, RemovalPolicy
from aws_cdk import aws_cloudfront as cloudfront

from .domain import DomainName, parse_domain_names
from .errors import ConfigurationError
from .publishing import DEFAULT_BUILDER_IMAGE

PRICE_CLASSES = {
  "100": cloudfront.PriceClass.PRICE_CLASS_100,
  "200": cloudfront.PriceClass.PRICE_CLASS_200,
  "all": cloudfront.PriceClass.PRICE_CLASS_ALL,
}

PROTOCOL_VERSIONS = {
  "TLSv1.2_2018": cloudfront.SecurityPolicyProtocol.TLS_V1_2_2018,
  "TLSv1.2_2019": cloudfront.SecurityPolicyProtocol.TLS_V1_2_2019,
  "TLSv1.2_2021": cloudfront.SecurityPolicyProtocol.TLS_V1_2_2021,
}

HTTP_VERSIONS = {
  "http1.1": cloudfront.HttpVersion.HTTP1_1,
  "http2": cloudfront.HttpVersion.HTTP2,
  "http2and3": cloudfront.HttpVersion.HTTP2_AND_3,
  "http3": cloudfront.HttpVersion.HTTP3,
}

ZONE_LOOKUPS = ("route53", "context")

REMOVAL_POLICIES = {
  "retain": RemovalPolicy.RETAIN,
  "destroy": RemovalPolicy.DESTROY,
  "snapshot": RemovalPolicy.SNAPSHOT,
}


def _choice(options: dict[str, Any], key: str, value: Any) -> Any:
  """Map a config string onto its CDK enum, or None when unset."""
  if value is None:
    return None
  try:
    return options[str(value)]
  except KeyError:
    raise ConfigurationError(
      f"Unknown {key} {value!r}; expected one of {', '.join(options)}"
    ) from None


@dataclass
class WebsiteConfig:
  """Configuration for a single website."""

  name: str
  source_directory: str
  domain_names: list[DomainName] = field(default_factory=list)
  certificate_arn: str | None = None
  generate_certificate: bool = False
  price_class: cloudfront.PriceClass | None = None
  minimum_protocol_version: cloudfront.SecurityPolicyProtocol | None = None
  http_version: cloudfront.HttpVersion | None = None
  max_age_minutes: int = 60
  prune: bool = False
  builder_image: str | None = DEFAULT_BUILDER_IMAGE
  hosted_zone_ids: dict[str, str] = field(default_factory=dict)
  zone_lookup: str = "route53"
  removal_policy: RemovalPolicy = RemovalPolicy.RETAIN
  region: str = "us-east-1"
  owner: str = ""

  @property
  def max_age(self) -> Duration:
    return Duration.minutes(self.max_age_minutes)


@dataclass
class Config:
  """Multi-website configuration."""

  websites: list[WebsiteConfig] = field(default_factory=list)

  @classmethod
  def from_yaml(cls, path: Path | str = "websites.yaml") -> "Config":
    """Load configuration from YAML file.

    Raises:
      ConfigurationError: If a website entry has an unknown option value.
    """
    with open(path) as f:
      data = yaml.safe_load(f) or {}

    defaults = data.get("defaults", {})
    websites: list[WebsiteConfig] = []

    for site_data in data.get("websites", []):
      # Merge defaults with site-specific config
      merged = {**defaults, **site_data}

      removal_policy = _choice(
        REMOVAL_POLICIES, "removal_policy", str(merged.get("removal_policy", "retain")).lower()
      )

      zone_lookup = merged.get("zone_lookup", "route53")
      if zone_lookup not in ZONE_LOOKUPS:
        raise ConfigurationError(
          f"Unknown zone_lookup {zone_lookup!r}; expected one of {', '.join(ZONE_LOOKUPS)}"
        )

      websites.append(
        WebsiteConfig(
          name=merged["name"],
          source_directory=merged["source_directory"],
          domain_names=list(parse_domain_names(merged.get("domain_names"))),
          certificate_arn=merged.get("certificate_arn"),
          generate_certificate=merged.get("generate_certificate", False),
          price_class=_choice(PRICE_CLASSES, "price_class", merged.get("price_class")),
          minimum_protocol_version=_choice(
            PROTOCOL_VERSIONS,
            "minimum_protocol_version",
            merged.get("minimum_protocol_version"),
          ),
          http_version=_choice(HTTP_VERSIONS, "http_version", merged.get("http_version")),
          max_age_minutes=merged.get("max_age_minutes", 60),
          prune=merged.get("prune", False),
          builder_image=merged.get("builder_image", DEFAULT_BUILDER_IMAGE),
          hosted_zone_ids=merged.get("hosted_zone_ids", {}),
          zone_lookup=zone_lookup,
          removal_policy=removal_policy,
          region=merged.get("region", "us-east-1"),
          owner=merged.get("owner", ""),
        )
      )

    return cls(websites=websites)
