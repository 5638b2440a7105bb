"""Tests for domain names and apex selection."""

import pytest

from website_infra.domain import DomainName, parse_domain_names, select_apex
from website_infra.errors import ConfigurationError, InvalidDomainName


class TestDomainName:
  """Test DomainName normalization and validation."""

  def test_str_is_hostname(self) -> None:
    """str() renders the hostname, not the zone."""
    domain = DomainName("www.example.com", "example.com")

    assert str(domain) == "www.example.com"
    assert domain.zone == "example.com"

  def test_normalizes_case_and_trailing_dot(self) -> None:
    """Hostnames are lowercased and lose a trailing dot."""
    domain = DomainName("WWW.Example.COM.", "example.com.")

    assert domain.name == "www.example.com"
    assert domain.zone == "example.com"

  def test_equal_descriptors_compare_equal(self) -> None:
    """Identity is the (name, zone) pair."""
    assert DomainName("www.example.com", "example.com") == DomainName(
      "WWW.example.com", "example.com"
    )
    assert DomainName("a.b.example.com", "example.com") != DomainName(
      "a.b.example.com", "b.example.com"
    )

  def test_immutable(self) -> None:
    """Descriptors cannot be modified after construction."""
    domain = DomainName("example.com", "example.com")

    with pytest.raises(AttributeError):
      domain.name = "other.com"  # type: ignore[misc]

  @pytest.mark.parametrize(
    "hostname",
    [
      "",
      "-bad.example.com",
      "bad-.example.com",
      "under_score.example.com",
      "double..dot.com",
      "example.com'; alert(1); '",
      "a" * 64 + ".com",
    ],
  )
  def test_rejects_invalid_hostnames(self, hostname: str) -> None:
    """Malformed hostnames raise InvalidDomainName."""
    with pytest.raises(InvalidDomainName):
      DomainName(hostname, "example.com")

  def test_rejects_hostname_outside_zone(self) -> None:
    """A record must live inside its zone."""
    with pytest.raises(InvalidDomainName, match="not inside zone"):
      DomainName("www.example.org", "example.com")

  def test_suffix_that_is_not_a_subdomain_is_rejected(self) -> None:
    """notexample.com is not inside example.com."""
    with pytest.raises(InvalidDomainName):
      DomainName("notexample.com", "example.com")

  def test_invalid_domain_is_a_configuration_error(self) -> None:
    """InvalidDomainName is part of the configuration error family."""
    with pytest.raises(ConfigurationError):
      DomainName("bad domain", "example.com")


class TestToIdentifier:
  """Test construct identifier tokens."""

  def test_identifier_format(self) -> None:
    """Dots become hyphens and the zone is appended."""
    domain = DomainName("www.example.com", "example.com")

    assert domain.to_identifier() == "www-example-com_example-com"

  def test_hyphen_and_dot_do_not_collide(self) -> None:
    """a-b.example.com and a.b-example.com stay distinct."""
    first = DomainName("a-b.example.com", "example.com")
    second = DomainName("a.b-example.com", "b-example.com")

    assert first.to_identifier() != second.to_identifier()

  def test_same_name_in_different_zones_differs(self) -> None:
    """The zone is part of the identifier."""
    first = DomainName("a.b.example.com", "example.com")
    second = DomainName("a.b.example.com", "b.example.com")

    assert first.to_identifier() != second.to_identifier()

  def test_identifier_is_construct_id_safe(self) -> None:
    """No path separators or dots end up in construct ids."""
    identifier = DomainName("shop.eu.example.co.uk", "example.co.uk").to_identifier()

    assert identifier
    assert "/" not in identifier
    assert "." not in identifier


class TestParse:
  """Test DomainName.parse and parse_domain_names."""

  def test_parse_mapping(self) -> None:
    """Mappings carry name and zone."""
    domain = DomainName.parse({"name": "www.example.com", "zone": "example.com"})

    assert domain == DomainName("www.example.com", "example.com")

  def test_parse_bare_hostname_is_own_zone(self) -> None:
    """A bare hostname is the apex of its own zone."""
    assert DomainName.parse("example.com") == DomainName("example.com", "example.com")

  def test_parse_instance_passthrough(self) -> None:
    """An existing DomainName is returned unchanged."""
    domain = DomainName("example.com", "example.com")

    assert DomainName.parse(domain) is domain

  def test_parse_mapping_without_name(self) -> None:
    """A mapping needs a name."""
    with pytest.raises(InvalidDomainName, match="missing 'name'"):
      DomainName.parse({"zone": "example.com"})

  def test_parse_rejects_other_types(self) -> None:
    """Numbers are not domains."""
    with pytest.raises(InvalidDomainName):
      DomainName.parse(42)

  def test_parse_domain_names_keeps_order(self) -> None:
    """Order is preserved so the apex stays first."""
    domains = parse_domain_names(["b.com", {"name": "www.a.com", "zone": "a.com"}])

    assert [str(d) for d in domains] == ["b.com", "www.a.com"]

  def test_parse_domain_names_none(self) -> None:
    """No domains parses to an empty tuple."""
    assert parse_domain_names(None) == ()


class TestSelectApex:
  """Test apex selection."""

  def test_first_domain_is_apex(self) -> None:
    """[A, B, C] selects A."""
    domains = parse_domain_names(["a.com", "b.com", "c.com"])

    assert select_apex(domains) == "a.com"

  def test_no_domains_means_no_apex(self) -> None:
    """An empty set selects the empty string."""
    assert select_apex([]) == ""
