#!/usr/bin/env python3
"""CDK application entry point for static website infrastructure."""

import sys
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

import aws_cdk as cdk
import boto3

from website_infra.config import Config
from website_infra.errors import ConfigurationError
from website_infra.stacks.website_stack import WebsiteStack


def get_account_id() -> str:
  """Get AWS account ID from current credentials."""
  sts = boto3.client("sts")
  return str(sts.get_caller_identity()["Account"])


def main() -> None:
  """Create CDK app with a stack for each configured website."""
  app = cdk.App()

  # Load configuration
  config_path = app.node.try_get_context("config") or "websites.yaml"
  config = Config.from_yaml(Path(config_path))

  # Get account ID from credentials
  account_id = get_account_id()

  # Create a stack for each website
  for site in config.websites:
    stack_name = f"Website-{site.name}"
    try:
      WebsiteStack(
        app,
        stack_name,
        site_config=site,
        env=cdk.Environment(
          account=account_id,
          region=site.region,
        ),
        description=f"Static website infrastructure for {site.name}",
      )
    except ConfigurationError as e:
      print(f"✗ {stack_name}: {e}", file=sys.stderr)
      sys.exit(1)

  app.synth()


if __name__ == "__main__":
  main()
