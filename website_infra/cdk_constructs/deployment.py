"""Build the site in Docker and deploy it to the bucket on every stack deploy."""

from aws_cdk import BundlingOptions, DockerImage, Duration
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_s3 as s3
from aws_cdk import aws_s3_deployment as s3_deploy
from constructs import Construct

from ..publishing import PublishJob

# Where CDK collects the output of a bundling container
ASSET_OUTPUT_DIR = "/asset-output"


class ContentDeployment(Construct):
  """Deploys the built site and invalidates the distribution afterwards.

  With ``builder_image`` set, the generator runs in that image against the
  source directory. Without it the directory is deployed as-is.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    job: PublishJob,
    bucket: s3.IBucket,
    distribution: cloudfront.IDistribution,
  ) -> None:
    super().__init__(scope, id)

    if job.builder_image is None:
      source = s3_deploy.Source.asset(str(job.source_directory))
    else:
      source = s3_deploy.Source.asset(
        str(job.source_directory),
        bundling=BundlingOptions(
          image=DockerImage.from_registry(job.builder_image),
          command=job.build_arguments(ASSET_OUTPUT_DIR),
        ),
      )

    self.deployment = s3_deploy.BucketDeployment(
      self,
      "Assets",
      sources=[source],
      destination_bucket=bucket,
      distribution=distribution,
      distribution_paths=["/*"],
      cache_control=[s3_deploy.CacheControl.max_age(Duration.seconds(job.max_age_seconds))],
      prune=job.prune,
    )
