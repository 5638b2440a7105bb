"""CDK stacks for static website infrastructure."""

from .website_stack import WebsiteStack

__all__ = ["WebsiteStack"]
