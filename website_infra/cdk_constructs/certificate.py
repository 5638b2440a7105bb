"""ACM certificate for the website's custom domains."""

from aws_cdk import Stack, Token
from aws_cdk import aws_certificatemanager as acm
from constructs import Construct

from ..errors import ConfigurationError
from ..topology import DeliveryConfig
from .dns import DnsRecords

# CloudFront only accepts certificates issued in this region
CLOUDFRONT_CERTIFICATE_REGION = "us-east-1"


class WebsiteCertificate(Construct):
  """Imports an existing certificate or issues a DNS-validated one.

  An issued certificate covers every configured domain, each validated in
  its own hosted zone.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    config: DeliveryConfig,
    dns: DnsRecords | None = None,
  ) -> None:
    super().__init__(scope, id)

    if config.certificate_arn is not None:
      self.certificate: acm.ICertificate = acm.Certificate.from_certificate_arn(
        self, "Certificate", config.certificate_arn
      )
      return

    if not config.generate_certificate or dns is None:
      raise ConfigurationError("No certificate ARN given and certificate generation is off")

    region = Stack.of(self).region
    if not Token.is_unresolved(region) and region != CLOUDFRONT_CERTIFICATE_REGION:
      raise ConfigurationError(
        f"CloudFront certificates must be issued in {CLOUDFRONT_CERTIFICATE_REGION}, "
        f"this stack deploys to {region}"
      )

    apex, *alternates = config.domain_names
    self.certificate = acm.Certificate(
      self,
      "Certificate",
      domain_name=str(apex),
      subject_alternative_names=[str(domain) for domain in alternates] or None,
      validation=acm.CertificateValidation.from_dns_multi_zone(
        {str(domain): dns.zone_for(domain) for domain in config.domain_names}
      ),
    )
