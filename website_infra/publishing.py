"""Build a static site and publish it to the website bucket.

The CDK ``ContentDeployment`` construct publishes on every deploy. This
module does the same job outside CloudFormation so a site can be rebuilt
and re-published from CI without a stack update:

1. run the site generator (``hugo -d <output>``) in the source directory,
2. upload every output file with a ``Cache-Control: max-age`` header,
3. invalidate the uploaded paths on the CloudFront distribution.

Publishing is additive unless the job asks for pruning. Two publishes must
never run at the same time against the same bucket and distribution; the
CI runner is expected to serialize them.
"""

import logging
import mimetypes
import subprocess
import tempfile
import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import quote

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError

from .errors import BuildFailure, InvalidationFailure, UploadFailure

logger = logging.getLogger(__name__)

DEFAULT_BUILDER_IMAGE = "klakegg/hugo:latest-ext"
DEFAULT_MAX_AGE_SECONDS = 3600

# Above this many paths a wildcard invalidation is cheaper than listing them
MAX_INVALIDATION_PATHS = 15

_DELETE_BATCH_SIZE = 1000


@dataclass(frozen=True)
class PublishJob:
  """What to build and how to publish it."""

  source_directory: Path
  max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS
  prune: bool = False
  builder_image: str | None = DEFAULT_BUILDER_IMAGE

  @property
  def cache_control(self) -> str:
    return f"max-age={self.max_age_seconds}"

  def build_arguments(self, output_dir: str | Path) -> list[str]:
    """Site generator arguments writing the built site to ``output_dir``."""
    return ["-d", str(output_dir)]


@dataclass
class PublishResult:
  """Outcome of a successful publish."""

  uploaded_keys: list[str] = field(default_factory=list)
  deleted_keys: list[str] = field(default_factory=list)
  invalidation_id: str | None = None


def walk(root: Path) -> Iterator[tuple[Path, str]]:
  """Yield (file path, object key) for every file under root, sorted by key."""
  for path in sorted(root.rglob("*")):
    if path.is_file():
      yield path, path.relative_to(root).as_posix()


def invalidation_paths(keys: Iterable[str]) -> list[str]:
  """CloudFront paths for the given object keys, collapsed to /* when there are many."""
  paths = sorted({"/" + quote(key) for key in keys})
  if len(paths) > MAX_INVALIDATION_PATHS:
    return ["/*"]
  return paths


class HugoSiteBuilder:
  """Runs the Hugo CLI against a source directory."""

  def __init__(self, executable: str = "hugo") -> None:
    self.executable = executable

  def build(self, job: PublishJob, output_dir: Path) -> None:
    command = [self.executable, *job.build_arguments(output_dir)]
    logger.info("Building %s: %s", job.source_directory, " ".join(command))
    try:
      result = subprocess.run(
        command,
        cwd=job.source_directory,
        capture_output=True,
        text=True,
        check=False,
      )
    except OSError as e:
      raise BuildFailure(f"Could not run {self.executable}: {e}") from e

    if result.returncode != 0:
      raise BuildFailure(
        f"{self.executable} exited with status {result.returncode}: {result.stderr.strip()}"
      )


class S3ObjectUploader:
  """Uploads a directory tree to a bucket."""

  def __init__(self, bucket_name: str, client: Any = None) -> None:
    self.bucket_name = bucket_name
    self.client = client or boto3.client("s3")

  def upload_tree(self, root: Path, cache_control: str) -> list[str]:
    """Upload every file under root and return the keys written."""
    uploaded: list[str] = []
    for path, key in walk(root):
      content_type, _ = mimetypes.guess_type(path.name)
      extra_args = {"CacheControl": cache_control}
      if content_type:
        extra_args["ContentType"] = content_type

      try:
        self.client.upload_file(str(path), self.bucket_name, key, ExtraArgs=extra_args)
      except (ClientError, BotoCoreError, S3UploadFailedError) as e:
        raise UploadFailure(
          f"Failed to upload {key} to {self.bucket_name} after {len(uploaded)} objects: {e}",
          uploaded_keys=uploaded,
          failed_key=key,
        ) from e
      uploaded.append(key)

    logger.info("Uploaded %d objects to s3://%s", len(uploaded), self.bucket_name)
    return uploaded

  def prune_except(self, keep: Iterable[str]) -> list[str]:
    """Delete every object in the bucket whose key is not in ``keep``."""
    keep_keys = set(keep)
    stale: list[str] = []
    try:
      paginator = self.client.get_paginator("list_objects_v2")
      for page in paginator.paginate(Bucket=self.bucket_name):
        for obj in page.get("Contents", []):
          if obj["Key"] not in keep_keys:
            stale.append(obj["Key"])

      for start in range(0, len(stale), _DELETE_BATCH_SIZE):
        batch = stale[start : start + _DELETE_BATCH_SIZE]
        self.client.delete_objects(
          Bucket=self.bucket_name,
          Delete={"Objects": [{"Key": key} for key in batch], "Quiet": True},
        )
    except (ClientError, BotoCoreError) as e:
      raise UploadFailure(f"Failed to prune {self.bucket_name}: {e}") from e

    logger.info("Pruned %d stale objects from s3://%s", len(stale), self.bucket_name)
    return stale


class CloudFrontInvalidator:
  """Creates cache invalidations on a distribution."""

  def __init__(self, distribution_id: str, client: Any = None) -> None:
    self.distribution_id = distribution_id
    self.client = client or boto3.client("cloudfront")

  def invalidate(self, paths: list[str]) -> str:
    try:
      response = self.client.create_invalidation(
        DistributionId=self.distribution_id,
        InvalidationBatch={
          "Paths": {"Quantity": len(paths), "Items": paths},
          "CallerReference": str(time.time()),
        },
      )
    except (ClientError, BotoCoreError) as e:
      raise InvalidationFailure(
        f"Failed to invalidate {self.distribution_id}: {e}"
      ) from e

    invalidation_id: str = response["Invalidation"]["Id"]
    logger.info("Created invalidation %s for %d paths", invalidation_id, len(paths))
    return invalidation_id


class ContentPublisher:
  """Builds a site and publishes it: build, upload, optional prune, invalidate."""

  def __init__(
    self,
    job: PublishJob,
    *,
    builder: HugoSiteBuilder | None,
    uploader: S3ObjectUploader,
    invalidator: CloudFrontInvalidator | None = None,
  ) -> None:
    self.job = job
    self.builder = builder
    self.uploader = uploader
    self.invalidator = invalidator

  def publish(self) -> PublishResult:
    """Publish the site.

    Raises:
      BuildFailure: Before anything is uploaded.
      UploadFailure: With the keys that did make it into the bucket.
      InvalidationFailure: After all content was uploaded.
    """
    result = PublishResult()

    with tempfile.TemporaryDirectory(prefix="website-build-") as tmp:
      if self.builder is None:
        output_dir = Path(self.job.source_directory)
      else:
        output_dir = Path(tmp)
        self.builder.build(self.job, output_dir)

      result.uploaded_keys = self.uploader.upload_tree(output_dir, self.job.cache_control)

    if self.job.prune:
      result.deleted_keys = self.uploader.prune_except(result.uploaded_keys)

    if self.invalidator is not None:
      changed = result.uploaded_keys + result.deleted_keys
      if changed:
        result.invalidation_id = self.invalidator.invalidate(invalidation_paths(changed))

    return result
