"""Host-tool seams used by the plugin.

The deployment tool owns the service model, the provider (stage, region, naming
service) and the compiled CloudFormation template. This module gives those
collaborators a small Python shape so the plugin can be driven from a parsed
service definition:

    serverless = Serverless.from_config(config, stage="dev")
    plugin = SubscriptionFilterPlugin(serverless, {})
    plugin.hooks["deploy:compileEvents"]()
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from subscription_filter.errors import ServerlessError

_NON_ALPHANUMERIC = re.compile(r"[^0-9A-Za-z]")


def _upper_first(value: str) -> str:
    return value[:1].upper() + value[1:]


class Naming:
    """Normalization rules of the host's AWS naming service."""

    def normalize_name(self, name: str) -> str:
        return _upper_first(name)

    def normalize_name_to_alpha_numeric_only(self, name: str) -> str:
        return self.normalize_name(_NON_ALPHANUMERIC.sub("", name))

    def get_normalized_function_name(self, function_name: str) -> str:
        return self.normalize_name(function_name.replace("-", "Dash").replace("_", "Underscore"))

    def get_lambda_logical_id(self, function_name: str) -> str:
        return f"{self.get_normalized_function_name(function_name)}LambdaFunction"


class FunctionConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    handler: Optional[str] = None
    name: Optional[str] = None
    events: List[Dict[str, Any]] = Field(default_factory=list)

    @field_validator("events", mode="before")
    @classmethod
    def _coerce_events(cls, v: Any) -> List[Dict[str, Any]]:
        if v is None:
            return []
        if isinstance(v, list):
            # Non-mapping entries carry no event kind at all
            return [e for e in v if isinstance(e, dict)]
        return []


class ProviderConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = "aws"
    region: str = "us-east-1"
    stage: str = "dev"
    compiled_cloudformation_template: Dict[str, Any] = Field(
        default_factory=lambda: {"Resources": {}, "Outputs": {}}
    )


class ServiceConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    service: str
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    functions: Dict[str, FunctionConfig] = Field(default_factory=dict)

    @field_validator("functions", mode="before")
    @classmethod
    def _coerce_functions(cls, v: Any) -> Dict[str, Any]:
        return v or {}

    def get_all_functions(self) -> List[str]:
        return list(self.functions.keys())

    def get_function(self, function_name: str) -> FunctionConfig:
        try:
            return self.functions[function_name]
        except KeyError:
            raise ServerlessError(f'Function "{function_name}" doesn\'t exist in this Service') from None


class AwsProvider:
    """Read-only view over the provider section plus the naming service."""

    def __init__(self, service: ServiceConfig) -> None:
        self._service = service
        self.naming = Naming()

    def get_stage(self) -> str:
        return self._service.provider.stage

    def get_region(self) -> str:
        return self._service.provider.region

    def get_stack_name(self) -> str:
        return f"{self._service.service}-{self.get_stage()}"

    def get_function_qualified_name(self, function_name: str) -> str:
        function = self._service.get_function(function_name)
        return function.name or f"{self._service.service}-{self.get_stage()}-{function_name}"


class _Classes:
    Error = ServerlessError


class Serverless:
    """Minimal host object handed to plugins."""

    classes = _Classes

    def __init__(self, service: ServiceConfig) -> None:
        self.service = service
        self._providers = {"aws": AwsProvider(service)}

    def get_provider(self, name: str) -> AwsProvider:
        if name not in self._providers:
            raise ServerlessError(f"Unknown provider: {name}")
        return self._providers[name]

    @classmethod
    def from_config(
        cls,
        config: Dict[str, Any],
        *,
        stage: Optional[str] = None,
        region: Optional[str] = None,
    ) -> "Serverless":
        service = ServiceConfig.model_validate(config)
        if stage:
            service.provider.stage = stage
        if region:
            service.provider.region = region
        template = service.provider.compiled_cloudformation_template
        template.setdefault("Resources", {})
        template.setdefault("Outputs", {})
        return cls(service)
