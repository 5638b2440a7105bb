"""CloudFront origin for the website bucket."""

from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_cloudfront_origins as origins
from aws_cdk import aws_s3 as s3
from constructs import Construct


class ContentOrigin(Construct):
  """Bucket origin reached through an origin access identity.

  The identity is the only principal granted read access, so content is
  never served straight from S3.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    bucket: s3.IBucket,
  ) -> None:
    super().__init__(scope, id)

    self.bucket = bucket
    self.origin_access_identity = cloudfront.OriginAccessIdentity(self, "Access")
    bucket.grant_read(self.origin_access_identity)

    self.origin = origins.S3BucketOrigin.with_origin_access_identity(
      bucket,
      origin_access_identity=self.origin_access_identity,
    )
