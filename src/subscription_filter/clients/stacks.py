"""Outputs recorded by the previous deployment of the service stack."""

from __future__ import annotations

from typing import Dict, Optional

import boto3
from botocore.client import BaseClient
from botocore.exceptions import ClientError

from subscription_filter.errors import ResolutionError


def _is_stack_missing(error: ClientError) -> bool:
    err = error.response.get("Error", {})
    return err.get("Code") == "ValidationError" and "does not exist" in str(err.get("Message", ""))


class StackOutputsClient:
    def __init__(self, region: Optional[str] = None, client: Optional[BaseClient] = None) -> None:
        self._client = client or boto3.client("cloudformation", region_name=region)

    def get_outputs(self, stack_name: str) -> Optional[Dict[str, str]]:
        """Return ``{OutputKey: OutputValue}`` or None when the stack was never deployed."""
        try:
            response = self._client.describe_stacks(StackName=stack_name)
        except ClientError as error:
            if _is_stack_missing(error):
                return None
            raise ResolutionError(str(error)) from error

        stacks = response.get("Stacks", [])
        if not stacks:
            return None
        return {
            output["OutputKey"]: output.get("OutputValue", "")
            for output in stacks[0].get("Outputs", []) or []
            if output.get("OutputKey")
        }

    def get_output(self, stack_name: str, output_key: str) -> Optional[str]:
        outputs = self.get_outputs(stack_name)
        if outputs is None:
            return None
        return outputs.get(output_key)
