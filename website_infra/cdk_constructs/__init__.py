"""CDK constructs for static website infrastructure."""

from .certificate import WebsiteCertificate
from .deployment import ContentDeployment
from .distribution import WebsiteDistribution
from .dns import (
  ContextZoneLookup,
  DnsBinding,
  DnsRecords,
  MappedZoneLookup,
  Route53ZoneLookup,
  ZoneLookup,
)
from .origin import ContentOrigin
from .storage import StorageBucket
from .viewer_request import ViewerRequestFunction
from .website import Website

__all__ = [
  "ContentDeployment",
  "ContentOrigin",
  "ContextZoneLookup",
  "DnsBinding",
  "DnsRecords",
  "MappedZoneLookup",
  "Route53ZoneLookup",
  "StorageBucket",
  "ViewerRequestFunction",
  "Website",
  "WebsiteCertificate",
  "WebsiteDistribution",
  "ZoneLookup",
]
