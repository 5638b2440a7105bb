"""CloudFront distribution for the website."""

from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_cloudfront as cloudfront
from constructs import Construct

from ..topology import DeliveryConfig
from .origin import ContentOrigin


class WebsiteDistribution(Construct):
  """CloudFront distribution in front of the private bucket origin."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    origin: ContentOrigin,
    viewer_request_function: cloudfront.IFunction,
    config: DeliveryConfig,
    certificate: acm.ICertificate | None = None,
  ) -> None:
    super().__init__(scope, id)

    aliases = config.aliases if certificate is not None else []

    self.distribution = cloudfront.Distribution(
      self,
      "Distribution",
      default_behavior=cloudfront.BehaviorOptions(
        origin=origin.origin,
        viewer_protocol_policy=cloudfront.ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
        allowed_methods=cloudfront.AllowedMethods.ALLOW_GET_HEAD,
        cached_methods=cloudfront.CachedMethods.CACHE_GET_HEAD,
        function_associations=[
          cloudfront.FunctionAssociation(
            function=viewer_request_function,
            event_type=cloudfront.FunctionEventType.VIEWER_REQUEST,
          )
        ],
      ),
      error_responses=[
        cloudfront.ErrorResponse(
          http_status=404,
          response_http_status=404,
          response_page_path=config.not_found_page_path,
        )
      ],
      http_version=config.http_version,
      minimum_protocol_version=config.minimum_protocol_version,
      default_root_object=config.default_root_object,
      certificate=certificate,
      domain_names=aliases or None,
      enable_ipv6=config.enable_ipv6,
      price_class=config.price_class,
    )
