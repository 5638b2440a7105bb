"""Main composite construct for a static website served through CloudFront."""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from aws_cdk import Duration, RemovalPolicy
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_s3 as s3
from constructs import Construct

from ..publishing import DEFAULT_BUILDER_IMAGE, DEFAULT_MAX_AGE_SECONDS, PublishJob
from ..topology import compose_delivery_config, resolve_distribution_url
from .certificate import WebsiteCertificate
from .deployment import ContentDeployment
from .distribution import WebsiteDistribution
from .dns import ContextZoneLookup, DnsBinding, DnsRecords, ZoneLookup
from .origin import ContentOrigin
from .storage import StorageBucket
from .viewer_request import ViewerRequestFunction


class Website(Construct):
  """Complete static website infrastructure.

  Creates:
  - S3 bucket for the built site (unless one is passed in)
  - Origin access identity so only CloudFront can read the bucket
  - CloudFront Function redirecting to the apex domain and resolving
    directory URIs to index.html
  - CloudFront distribution with HTTPS and a custom 404 page
  - A and AAAA alias records for every domain
  - Bucket deployment that builds the site and invalidates the cache

  The first entry of ``domain_names`` is the apex domain.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    website_source_directory: str | Path,
    bucket: s3.IBucket | None = None,
    certificate_arn: str | None = None,
    generate_certificate: bool = False,
    domain_names: Sequence[Any] | None = None,
    price_class: cloudfront.PriceClass | None = None,
    minimum_protocol_version: cloudfront.SecurityPolicyProtocol | None = None,
    http_version: cloudfront.HttpVersion | None = None,
    max_age: Duration | None = None,
    prune: bool = False,
    builder_image: str | None = DEFAULT_BUILDER_IMAGE,
    zone_lookup: ZoneLookup | None = None,
    removal_policy: RemovalPolicy = RemovalPolicy.RETAIN,
  ) -> None:
    super().__init__(scope, id)

    # Validate before creating anything
    self.config = compose_delivery_config(
      domain_names=domain_names,
      certificate_arn=certificate_arn,
      generate_certificate=generate_certificate,
      price_class=price_class,
      minimum_protocol_version=minimum_protocol_version,
      http_version=http_version,
    )
    self.apex_domain = self.config.apex_domain
    self.publish_job = PublishJob(
      source_directory=Path(website_source_directory),
      max_age_seconds=int(max_age.to_seconds()) if max_age else DEFAULT_MAX_AGE_SECONDS,
      prune=prune,
      builder_image=builder_image,
    )

    self.bucket = bucket or StorageBucket(self, "Bucket", removal_policy=removal_policy).bucket

    self.origin = ContentOrigin(self, "Origin", bucket=self.bucket)
    self.origin_access_identity = self.origin.origin_access_identity

    self.viewer_request_function = ViewerRequestFunction(
      self, "ViewerRequest", apex_domain=self.apex_domain
    ).function

    # Zones are looked up before the certificate needs them for validation
    self.dns: DnsRecords | None = None
    if self.config.domain_names:
      self.dns = DnsRecords(
        self,
        "Dns",
        domain_names=self.config.domain_names,
        zone_lookup=zone_lookup or ContextZoneLookup(),
      )

    self.certificate = None
    if self.config.has_certificate:
      self.certificate = WebsiteCertificate(
        self, "Certificate", config=self.config, dns=self.dns
      ).certificate

    self.distribution = WebsiteDistribution(
      self,
      "Distribution",
      origin=self.origin,
      viewer_request_function=self.viewer_request_function,
      config=self.config,
      certificate=self.certificate,
    ).distribution

    self.distribution_url = resolve_distribution_url(
      self.apex_domain, self.distribution.distribution_domain_name
    )

    self.dns_bindings: list[DnsBinding] = []
    if self.dns is not None:
      self.dns_bindings = self.dns.create_alias_records(self.distribution)

    self.deployment = ContentDeployment(
      self,
      "Deployment",
      job=self.publish_job,
      bucket=self.bucket,
      distribution=self.distribution,
    ).deployment
