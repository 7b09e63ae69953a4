"""Serverless plugin compiling ``subscriptionFilter`` events into CloudFormation."""

from subscription_filter.errors import (
    ConfigurationError,
    QuotaExceededError,
    ResolutionError,
    ServerlessError,
)
from subscription_filter.host import Serverless
from subscription_filter.plugin import SubscriptionFilterPlugin

__all__ = [
    "ConfigurationError",
    "QuotaExceededError",
    "ResolutionError",
    "Serverless",
    "ServerlessError",
    "SubscriptionFilterPlugin",
]
