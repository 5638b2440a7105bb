"""CDK stack for a single static website."""

from typing import Any

import aws_cdk as cdk
import boto3
from constructs import Construct

from website_infra.cdk_constructs import (
  ContextZoneLookup,
  MappedZoneLookup,
  Route53ZoneLookup,
  Website,
  ZoneLookup,
)
from website_infra.config import WebsiteConfig


def zone_lookup_for(site_config: WebsiteConfig) -> ZoneLookup:
  """Pick how hosted zones are found for a website."""
  if site_config.hosted_zone_ids:
    return MappedZoneLookup(site_config.hosted_zone_ids)
  if site_config.zone_lookup == "context":
    return ContextZoneLookup()
  return Route53ZoneLookup(boto3.client("route53"))


class WebsiteStack(cdk.Stack):
  """Stack for a single static website."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    site_config: WebsiteConfig,
    zone_lookup: ZoneLookup | None = None,
    **kwargs: Any,
  ) -> None:
    super().__init__(scope, id, **kwargs)

    if zone_lookup is None and site_config.domain_names:
      zone_lookup = zone_lookup_for(site_config)

    self.website = Website(
      self,
      "Website",
      website_source_directory=site_config.source_directory,
      certificate_arn=site_config.certificate_arn,
      generate_certificate=site_config.generate_certificate,
      domain_names=site_config.domain_names,
      price_class=site_config.price_class,
      minimum_protocol_version=site_config.minimum_protocol_version,
      http_version=site_config.http_version,
      max_age=site_config.max_age,
      prune=site_config.prune,
      builder_image=site_config.builder_image,
      zone_lookup=zone_lookup,
      removal_policy=site_config.removal_policy,
    )

    # Outputs read by scripts/publish_site.py
    cdk.CfnOutput(
      self,
      "BucketName",
      value=self.website.bucket.bucket_name,
      description="S3 bucket name",
    )
    cdk.CfnOutput(
      self,
      "DistributionId",
      value=self.website.distribution.distribution_id,
      description="CloudFront distribution ID",
    )
    cdk.CfnOutput(
      self,
      "DistributionDomainName",
      value=self.website.distribution.distribution_domain_name,
      description="CloudFront distribution domain name",
    )
    cdk.CfnOutput(
      self,
      "WebsiteUrl",
      value=self.website.distribution_url,
      description="Public website URL",
    )

    cdk.Tags.of(self).add("Project", "static-websites")
    cdk.Tags.of(self).add("Website", site_config.name)
    if site_config.owner:
      cdk.Tags.of(self).add("Owner", site_config.owner)
