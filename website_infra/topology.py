"""Rules for composing the CloudFront distribution of a website."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from aws_cdk import aws_cloudfront as cloudfront

from .domain import DomainName, parse_domain_names, select_apex
from .errors import ConfigurationError

DEFAULT_PRICE_CLASS = cloudfront.PriceClass.PRICE_CLASS_100
DEFAULT_MINIMUM_PROTOCOL_VERSION = cloudfront.SecurityPolicyProtocol.TLS_V1_2_2021
DEFAULT_HTTP_VERSION = cloudfront.HttpVersion.HTTP1_1
DEFAULT_ROOT_OBJECT = "index.html"
NOT_FOUND_PAGE_PATH = "/404.html"


@dataclass(frozen=True)
class DeliveryConfig:
  """Everything the distribution needs, with defaults already applied."""

  domain_names: tuple[DomainName, ...]
  apex_domain: str
  price_class: cloudfront.PriceClass
  minimum_protocol_version: cloudfront.SecurityPolicyProtocol
  http_version: cloudfront.HttpVersion
  certificate_arn: str | None = None
  generate_certificate: bool = False
  default_root_object: str = DEFAULT_ROOT_OBJECT
  not_found_page_path: str = NOT_FOUND_PAGE_PATH
  enable_ipv6: bool = True

  @property
  def has_certificate(self) -> bool:
    return self.certificate_arn is not None or self.generate_certificate

  @property
  def aliases(self) -> list[str]:
    """Hostnames the distribution answers to (custom domains need a certificate)."""
    if not self.has_certificate:
      return []
    return [str(domain) for domain in self.domain_names]


def compose_delivery_config(
  *,
  domain_names: Sequence[Any] | None = None,
  certificate_arn: str | None = None,
  generate_certificate: bool = False,
  price_class: cloudfront.PriceClass | None = None,
  minimum_protocol_version: cloudfront.SecurityPolicyProtocol | None = None,
  http_version: cloudfront.HttpVersion | None = None,
) -> DeliveryConfig:
  """Apply defaults and check that the options describe a reachable site.

  Raises:
    ConfigurationError: If custom domains are requested without a
      certificate, a certificate is given without domains, or a
      certificate is both supplied and requested.
    InvalidDomainName: If a domain cannot be parsed.
  """
  domains = parse_domain_names(domain_names)

  if certificate_arn is not None and generate_certificate:
    raise ConfigurationError(
      "Pass either certificate_arn or generate_certificate=True, not both"
    )
  if not domains and (certificate_arn is not None or generate_certificate):
    raise ConfigurationError("A certificate needs at least one domain name to cover")
  if domains and certificate_arn is None and not generate_certificate:
    hostnames = ", ".join(str(domain) for domain in domains)
    raise ConfigurationError(
      f"Domains [{hostnames}] cannot be served over HTTPS without a certificate; "
      "set certificate_arn or generate_certificate=True"
    )

  return DeliveryConfig(
    domain_names=domains,
    apex_domain=select_apex(domains),
    certificate_arn=certificate_arn,
    generate_certificate=generate_certificate,
    price_class=price_class or DEFAULT_PRICE_CLASS,
    minimum_protocol_version=minimum_protocol_version or DEFAULT_MINIMUM_PROTOCOL_VERSION,
    http_version=http_version or DEFAULT_HTTP_VERSION,
  )


def resolve_distribution_url(apex_domain: str, distribution_domain_name: str) -> str:
  """Public URL of the site: the apex when there is one, else the CloudFront hostname."""
  return f"https://{apex_domain or distribution_domain_name}"
