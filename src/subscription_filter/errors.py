"""Error classes raised during subscription filter compilation.

Everything derives from ``ServerlessError`` so the host renders the failure
uniformly.
"""

from __future__ import annotations

from typing import Optional

QUOTA_DOCS_URL = "https://docs.aws.amazon.com/AmazonCloudWatch/latest/logs/cloudwatch_limits_cwl.html"


class ServerlessError(Exception):
    """Host-level error class (``serverless.classes.Error``)."""


class ConfigurationError(ServerlessError):
    """Raised when a declared subscriptionFilter event is malformed."""


class QuotaExceededError(ServerlessError):
    """Raised when a log group would carry more subscription filters than allowed."""

    def __init__(self, log_group_name: str, detail: Optional[str] = None) -> None:
        self.log_group_name = log_group_name
        message = f"Subscription filters of {log_group_name} log group exceeded the limit."
        if detail:
            message = f"{message} {detail}"
        super().__init__(f"{message} See {QUOTA_DOCS_URL}")


class ResolutionError(ServerlessError):
    """Raised when a remote lookup fails or the log group does not exist."""
