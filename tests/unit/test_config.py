"""Tests for the configuration loader."""

import tempfile
from pathlib import Path

import pytest
from aws_cdk import RemovalPolicy
from aws_cdk import aws_cloudfront as cloudfront

from website_infra.config import Config, WebsiteConfig
from website_infra.domain import DomainName
from website_infra.errors import ConfigurationError, InvalidDomainName


def load(yaml_content: str) -> Config:
  with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
    f.write(yaml_content)
    f.flush()

    return Config.from_yaml(Path(f.name))


class TestWebsiteConfig:
  """Test WebsiteConfig dataclass."""

  def test_default_values(self) -> None:
    """Verify default values are set correctly."""
    config = WebsiteConfig(name="blog", source_directory="sites/blog")

    assert config.domain_names == []
    assert config.certificate_arn is None
    assert config.generate_certificate is False
    assert config.price_class is None
    assert config.minimum_protocol_version is None
    assert config.http_version is None
    assert config.max_age_minutes == 60
    assert config.max_age.to_seconds() == 3600
    assert config.prune is False
    assert config.builder_image == "klakegg/hugo:latest-ext"
    assert config.zone_lookup == "route53"
    assert config.removal_policy == RemovalPolicy.RETAIN
    assert config.region == "us-east-1"


class TestConfigFromYaml:
  """Test Config.from_yaml loading."""

  def test_load_simple_config(self) -> None:
    """Test loading a simple configuration."""
    config = load(
      """
websites:
  - name: blog
    source_directory: sites/blog
"""
    )

    assert len(config.websites) == 1
    assert config.websites[0].name == "blog"
    assert config.websites[0].source_directory == "sites/blog"

  def test_load_domains_in_order(self) -> None:
    """Domains keep their order and accept both forms."""
    config = load(
      """
websites:
  - name: blog
    source_directory: sites/blog
    certificate_arn: arn:aws:acm:us-east-1:123456789012:certificate/abc
    domain_names:
      - name: www.example.com
        zone: example.com
      - example.com
"""
    )

    assert config.websites[0].domain_names == [
      DomainName("www.example.com", "example.com"),
      DomainName("example.com", "example.com"),
    ]

  def test_load_with_defaults(self) -> None:
    """Defaults apply to every website and sites override them."""
    config = load(
      """
defaults:
  region: us-west-2
  max_age_minutes: 5
  prune: true

websites:
  - name: one
    source_directory: one
  - name: two
    source_directory: two
    prune: false
"""
    )

    assert [s.region for s in config.websites] == ["us-west-2", "us-west-2"]
    assert config.websites[0].max_age_minutes == 5
    assert config.websites[0].prune is True
    assert config.websites[1].prune is False

  def test_enum_conversion(self) -> None:
    """Distribution options map onto CDK enums."""
    config = load(
      """
websites:
  - name: blog
    source_directory: sites/blog
    price_class: "all"
    minimum_protocol_version: TLSv1.2_2019
    http_version: http2and3
    removal_policy: destroy
"""
    )

    site = config.websites[0]
    assert site.price_class == cloudfront.PriceClass.PRICE_CLASS_ALL
    assert site.minimum_protocol_version == cloudfront.SecurityPolicyProtocol.TLS_V1_2_2019
    assert site.http_version == cloudfront.HttpVersion.HTTP2_AND_3
    assert site.removal_policy == RemovalPolicy.DESTROY

  def test_numeric_price_class(self) -> None:
    """An unquoted 100 still means PriceClass_100."""
    config = load(
      """
websites:
  - name: blog
    source_directory: sites/blog
    price_class: 100
"""
    )

    assert config.websites[0].price_class == cloudfront.PriceClass.PRICE_CLASS_100

  def test_unknown_http_version(self) -> None:
    """Unknown option values fail loudly."""
    with pytest.raises(ConfigurationError, match="http_version"):
      load(
        """
websites:
  - name: blog
    source_directory: sites/blog
    http_version: http9
"""
      )

  def test_unknown_zone_lookup(self) -> None:
    """Only route53 and context lookups exist."""
    with pytest.raises(ConfigurationError, match="zone_lookup"):
      load(
        """
websites:
  - name: blog
    source_directory: sites/blog
    zone_lookup: dns
"""
      )

  def test_unknown_removal_policy(self) -> None:
    """A misspelled removal policy is not silently retained."""
    with pytest.raises(ConfigurationError, match="removal_policy"):
      load(
        """
websites:
  - name: blog
    source_directory: sites/blog
    removal_policy: destory
"""
      )

  def test_invalid_domain(self) -> None:
    """Malformed domains are rejected while loading."""
    with pytest.raises(InvalidDomainName):
      load(
        """
websites:
  - name: blog
    source_directory: sites/blog
    domain_names:
      - "not a domain"
"""
      )

  def test_prebuilt_site_and_zone_ids(self) -> None:
    """builder_image may be null and zone ids are kept."""
    config = load(
      """
websites:
  - name: docs
    source_directory: public
    builder_image: null
    hosted_zone_ids:
      example.org: Z123
"""
    )

    assert config.websites[0].builder_image is None
    assert config.websites[0].hosted_zone_ids == {"example.org": "Z123"}

  def test_empty_file(self) -> None:
    """An empty file has no websites."""
    assert load("").websites == []
