"""Remote state port consulted by the quota guard and the orchestrator."""

from __future__ import annotations

from typing import Optional, Protocol

from subscription_filter.clients.logs import LogsClient
from subscription_filter.clients.stacks import StackOutputsClient
from subscription_filter.host import Naming
from subscription_filter.naming import destination_output_key


class RemoteState(Protocol):
    def resolve_log_group_identity(self, log_group_name: str) -> str: ...

    def resolve_existing_destination(self, log_group_name: str) -> Optional[str]: ...

    def reconstruct_expected_destination(
        self, log_group_name: str, function_qualified_name: str
    ) -> Optional[str]: ...


class AwsRemoteState:
    """boto3-backed ``RemoteState`` for one stack in one region."""

    def __init__(
        self,
        stack_name: str,
        naming: Naming,
        *,
        region: Optional[str] = None,
        logs: Optional[LogsClient] = None,
        stacks: Optional[StackOutputsClient] = None,
    ) -> None:
        self.stack_name = stack_name
        self.naming = naming
        self.logs = logs or LogsClient(region=region)
        self.stacks = stacks or StackOutputsClient(region=region)

    def resolve_log_group_identity(self, log_group_name: str) -> str:
        return self.logs.get_log_group_arn(log_group_name)

    def resolve_existing_destination(self, log_group_name: str) -> Optional[str]:
        return self.logs.get_existing_destination(log_group_name)

    def reconstruct_expected_destination(self, log_group_name: str, function_qualified_name: str) -> Optional[str]:
        key = destination_output_key(self.naming, log_group_name, function_qualified_name)
        return self.stacks.get_output(self.stack_name, key)
