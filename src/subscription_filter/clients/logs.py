"""CloudWatch Logs lookups: log group ARN and current subscription destination."""

from __future__ import annotations

from typing import Any, Dict, Optional

import boto3
from botocore.client import BaseClient
from botocore.exceptions import ClientError

from subscription_filter.errors import ResolutionError
from subscription_filter.utils.logger import get_logger

logger = get_logger(__name__)


class LogsClient:
    def __init__(self, region: Optional[str] = None, client: Optional[BaseClient] = None) -> None:
        self._client = client or boto3.client("logs", region_name=region)

    def get_log_group_arn(self, log_group_name: str) -> str:
        """Return the ARN of the log group named exactly ``log_group_name``.

        DescribeLogGroups only filters by prefix, so pages are scanned for an
        exact name match, following ``nextToken`` until one is found.
        """
        next_token: Optional[str] = None
        page = 0
        while True:
            kwargs: Dict[str, Any] = {"logGroupNamePrefix": log_group_name}
            if next_token:
                kwargs["nextToken"] = next_token
            try:
                response = self._client.describe_log_groups(**kwargs)
            except ClientError as error:
                raise ResolutionError(str(error)) from error

            page += 1
            log_groups = response.get("logGroups", [])
            if not log_groups:
                raise ResolutionError("LogGroup not found")

            for log_group in log_groups:
                if log_group.get("logGroupName") == log_group_name:
                    logger.debug(
                        "Resolved log group ARN",
                        extra={"log_group_name": log_group_name, "page": page},
                    )
                    return log_group["arn"]

            next_token = response.get("nextToken")
            if not next_token:
                raise ResolutionError("LogGroup not found")

    def get_existing_destination(self, log_group_name: str) -> Optional[str]:
        """Return the destination ARN currently subscribed to the log group, if any."""
        try:
            response = self._client.describe_subscription_filters(logGroupName=log_group_name)
        except ClientError as error:
            if error.response.get("Error", {}).get("Code") == "ResourceNotFoundException":
                raise ResolutionError("LogGroup not found") from error
            raise ResolutionError(str(error)) from error

        filters = response.get("subscriptionFilters", [])
        if not filters:
            return None
        return filters[0].get("destinationArn")
