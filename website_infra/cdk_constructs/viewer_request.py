"""CloudFront Function that runs on every viewer request."""

from aws_cdk import aws_cloudfront as cloudfront
from constructs import Construct

from ..edge import render_viewer_request_source


class ViewerRequestFunction(Construct):
  """Apex redirect and directory index rewrite at the edge."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    apex_domain: str,
  ) -> None:
    super().__init__(scope, id)

    self.function = cloudfront.Function(
      self,
      "Function",
      code=cloudfront.FunctionCode.from_inline(render_viewer_request_source(apex_domain)),
      runtime=cloudfront.FunctionRuntime.JS_2_0,
      comment="Apex redirect and directory index rewrite",
    )
