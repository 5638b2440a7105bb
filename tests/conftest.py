"""Pytest fixtures for CDK construct tests."""

from pathlib import Path

import aws_cdk as cdk
import pytest


@pytest.fixture
def app() -> cdk.App:
  """Create a CDK App for testing, with Docker bundling skipped."""
  return cdk.App(context={"aws:cdk:bundling-stacks": []})


@pytest.fixture
def stack(app: cdk.App) -> cdk.Stack:
  """Create a CDK Stack for testing."""
  return cdk.Stack(app, "TestStack", env=cdk.Environment(region="us-east-1"))


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
  """A minimal website source directory."""
  (tmp_path / "index.html").write_text("<h1>Home</h1>")
  (tmp_path / "404.html").write_text("<h1>Not found</h1>")
  (tmp_path / "blog").mkdir()
  (tmp_path / "blog" / "index.html").write_text("<h1>Blog</h1>")
  return tmp_path
