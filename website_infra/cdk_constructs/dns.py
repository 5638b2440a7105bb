"""Route 53 zone lookups and alias records for the website domains."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_route53 as route53
from aws_cdk import aws_route53_targets as targets
from constructs import Construct

from ..domain import DomainName
from ..errors import ZoneNotFound


class ZoneLookup(Protocol):
  """Finds the hosted zone a domain's records belong in."""

  def lookup(self, scope: Construct, id: str, domain: DomainName) -> route53.IHostedZone: ...


class ContextZoneLookup:
  """Resolve zones through the CDK context provider (cached in cdk.context.json)."""

  def lookup(self, scope: Construct, id: str, domain: DomainName) -> route53.IHostedZone:
    return route53.HostedZone.from_lookup(scope, id, domain_name=domain.zone)


class MappedZoneLookup:
  """Resolve zones from a fixed zone name -> hosted zone id mapping."""

  def __init__(self, hosted_zone_ids: Mapping[str, str]) -> None:
    self.hosted_zone_ids = {
      name.lower().rstrip("."): zone_id for name, zone_id in hosted_zone_ids.items()
    }

  def lookup(self, scope: Construct, id: str, domain: DomainName) -> route53.IHostedZone:
    zone_id = self.hosted_zone_ids.get(domain.zone)
    if zone_id is None:
      raise ZoneNotFound(domain.zone, str(domain))
    return route53.HostedZone.from_hosted_zone_attributes(
      scope,
      id,
      hosted_zone_id=zone_id,
      zone_name=domain.zone,
    )


class Route53ZoneLookup:
  """Resolve public zones with the Route 53 API while the app synthesizes."""

  def __init__(self, client: Any) -> None:
    self.client = client

  def lookup(self, scope: Construct, id: str, domain: DomainName) -> route53.IHostedZone:
    response = self.client.list_hosted_zones_by_name(DNSName=domain.zone, MaxItems="10")
    for zone in response.get("HostedZones", []):
      if zone["Name"] != f"{domain.zone}." or zone.get("Config", {}).get("PrivateZone"):
        continue
      return route53.HostedZone.from_hosted_zone_attributes(
        scope,
        id,
        hosted_zone_id=zone["Id"].split("/")[-1],
        zone_name=domain.zone,
      )
    raise ZoneNotFound(domain.zone, str(domain))


@dataclass(frozen=True)
class DnsBinding:
  """The alias records pointing one domain at the distribution."""

  domain: DomainName
  a_record: route53.ARecord
  aaaa_record: route53.AaaaRecord


class DnsRecords(Construct):
  """Hosted zones for the website domains and their alias records.

  Zones are resolved when the construct is created, so a missing zone
  fails the synth before any record exists.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    domain_names: Sequence[DomainName],
    zone_lookup: ZoneLookup,
  ) -> None:
    super().__init__(scope, id)

    self.domain_names = list(domain_names)
    self.bindings: list[DnsBinding] = []
    self.zones: dict[str, route53.IHostedZone] = {}

    for domain in self.domain_names:
      if domain.zone not in self.zones:
        zone_id = DomainName(domain.zone, domain.zone).to_identifier()
        self.zones[domain.zone] = zone_lookup.lookup(self, f"Zone-{zone_id}", domain)

  def zone_for(self, domain: DomainName) -> route53.IHostedZone:
    return self.zones[domain.zone]

  def create_alias_records(self, distribution: cloudfront.IDistribution) -> list[DnsBinding]:
    """Create A and AAAA alias records for every domain."""
    target = route53.RecordTarget.from_alias(targets.CloudFrontTarget(distribution))

    for domain in self.domain_names:
      identifier = domain.to_identifier()
      zone = self.zone_for(domain)
      self.bindings.append(
        DnsBinding(
          domain=domain,
          a_record=route53.ARecord(
            self,
            f"{identifier}-a",
            zone=zone,
            record_name=str(domain),
            target=target,
          ),
          aaaa_record=route53.AaaaRecord(
            self,
            f"{identifier}-aaaa",
            zone=zone,
            record_name=str(domain),
            target=target,
          ),
        )
      )

    return self.bindings
