#!/usr/bin/env python3
"""Build a website and publish it to its bucket without a stack deploy.

Do not run two publishes for the same website at once.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

import boto3  # noqa: E402

from website_infra.errors import PublishError  # noqa: E402
from website_infra.publishing import (  # noqa: E402
  DEFAULT_MAX_AGE_SECONDS,
  CloudFrontInvalidator,
  ContentPublisher,
  HugoSiteBuilder,
  PublishJob,
  S3ObjectUploader,
)


def get_stack_outputs(stack_name: str, region: str = "us-east-1") -> dict[str, str]:
  """Read BucketName and DistributionId from a deployed website stack."""
  cloudformation = boto3.client("cloudformation", region_name=region)
  response = cloudformation.describe_stacks(StackName=stack_name)
  outputs = response["Stacks"][0].get("Outputs", [])
  return {output["OutputKey"]: output["OutputValue"] for output in outputs}


def main() -> None:
  """Main entry point."""
  parser = argparse.ArgumentParser(description="Build and publish a static website")
  parser.add_argument(
    "source_directory",
    help="Directory with the site sources",
  )
  parser.add_argument(
    "--stack-name",
    help="Website stack to read the bucket and distribution from (e.g., Website-blog)",
  )
  parser.add_argument("--bucket", help="Destination bucket (overrides the stack output)")
  parser.add_argument(
    "--distribution-id",
    help="Distribution to invalidate (overrides the stack output)",
  )
  parser.add_argument(
    "--max-age",
    type=int,
    default=DEFAULT_MAX_AGE_SECONDS,
    help=f"Cache-Control max-age in seconds (default: {DEFAULT_MAX_AGE_SECONDS})",
  )
  parser.add_argument(
    "--prune",
    action="store_true",
    help="Delete objects that are not part of the new build",
  )
  parser.add_argument(
    "--no-build",
    action="store_true",
    help="Upload the source directory as-is instead of running hugo",
  )
  parser.add_argument("--hugo", default="hugo", help="Hugo executable (default: hugo)")
  parser.add_argument(
    "--region",
    default="us-east-1",
    help="AWS region (default: us-east-1)",
  )
  args = parser.parse_args()

  logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

  outputs: dict[str, str] = {}
  if args.stack_name:
    try:
      outputs = get_stack_outputs(args.stack_name, args.region)
    except Exception as e:
      print(f"Error reading stack {args.stack_name}: {e}", file=sys.stderr)
      sys.exit(1)

  bucket = args.bucket or outputs.get("BucketName")
  distribution_id = args.distribution_id or outputs.get("DistributionId")
  if not bucket:
    parser.error("a bucket is required: pass --bucket or --stack-name")

  job = PublishJob(
    source_directory=Path(args.source_directory),
    max_age_seconds=args.max_age,
    prune=args.prune,
  )
  publisher = ContentPublisher(
    job,
    builder=None if args.no_build else HugoSiteBuilder(args.hugo),
    uploader=S3ObjectUploader(bucket, boto3.client("s3", region_name=args.region)),
    invalidator=CloudFrontInvalidator(distribution_id, boto3.client("cloudfront"))
    if distribution_id
    else None,
  )

  try:
    result = publisher.publish()
  except PublishError as e:
    print(f"✗ Publish failed during {e.phase}: {e}", file=sys.stderr)
    sys.exit(1)

  print(f"✓ Published {len(result.uploaded_keys)} objects to s3://{bucket}")
  if result.deleted_keys:
    print(f"  Deleted {len(result.deleted_keys)} stale objects")
  if result.invalidation_id:
    print(f"  Invalidation: {result.invalidation_id}")


if __name__ == "__main__":
  main()
