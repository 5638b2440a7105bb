"""Exceptions raised while assembling or publishing a website."""


class WebsiteError(Exception):
  """Base class for all website infrastructure errors."""


class ConfigurationError(WebsiteError):
  """Construction options that cannot produce a working website."""


class InvalidDomainName(ConfigurationError, ValueError):
  """A hostname or zone name that is not a valid DNS name."""


class ZoneNotFound(ConfigurationError):
  """No hosted zone exists for a configured domain."""

  def __init__(self, zone_name: str, domain_name: str) -> None:
    super().__init__(f"Hosted zone {zone_name!r} not found for domain {domain_name!r}")
    self.zone_name = zone_name
    self.domain_name = domain_name


class UnsafeHandlerValue(WebsiteError):
  """A value that cannot be embedded into the viewer-request function source."""


class PublishError(WebsiteError):
  """Publishing failed. ``phase`` tells the caller where it stopped."""

  phase = "publish"


class BuildFailure(PublishError):
  """The static site generator failed. Nothing was uploaded."""

  phase = "build"


class UploadFailure(PublishError):
  """An object failed to upload. The bucket may hold old and new objects."""

  phase = "upload"

  def __init__(
    self,
    message: str,
    *,
    uploaded_keys: list[str] | None = None,
    failed_key: str | None = None,
  ) -> None:
    super().__init__(message)
    self.uploaded_keys = uploaded_keys or []
    self.failed_key = failed_key


class InvalidationFailure(PublishError):
  """Content was uploaded but the CloudFront cache was not invalidated."""

  phase = "invalidation"
