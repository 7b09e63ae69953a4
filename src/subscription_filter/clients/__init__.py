from .logs import LogsClient
from .remote import AwsRemoteState, RemoteState
from .stacks import StackOutputsClient

__all__ = ["AwsRemoteState", "LogsClient", "RemoteState", "StackOutputsClient"]
