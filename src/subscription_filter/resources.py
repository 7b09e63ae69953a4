"""CloudFormation fragments for one subscriptionFilter trigger.

Fragments are rendered from JSON text templates and parsed back, so every
interpolated value is escaped first and a malformed result fails loudly.
"""

from __future__ import annotations

import json
from string import Template
from typing import Any, Dict

from subscription_filter.host import AwsProvider
from subscription_filter.models.triggers import TriggerSetting
from subscription_filter.naming import (
    lambda_permission_logical_id,
    subscription_filter_logical_id,
    subscription_filter_name,
)

Fragment = Dict[str, Dict[str, Any]]

PERMISSION_TEMPLATE = Template(
    """
    {
      "Type": "AWS::Lambda::Permission",
      "Properties": {
        "FunctionName": { "Fn::GetAtt": ["$lambda_logical_id", "Arn"] },
        "Action": "lambda:InvokeFunction",
        "Principal": "logs.$region.amazonaws.com",
        "SourceArn": "$log_group_arn"
      }
    }
    """
)

SUBSCRIPTION_FILTER_TEMPLATE = Template(
    """
    {
      "Type": "AWS::Logs::SubscriptionFilter",
      "Properties": {
        "DestinationArn": { "Fn::GetAtt": ["$lambda_logical_id", "Arn"] },
        "FilterPattern": "$filter_pattern",
        "FilterName": "$filter_name",
        "LogGroupName": "$log_group_name"
      },
      "DependsOn": "$permission_logical_id"
    }
    """
)


def escape_double_quote(text: str) -> str:
    """Escape ``"`` (and the backslash itself) for a JSON string literal."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _render(template: Template, **values: str) -> str:
    return template.substitute({key: escape_double_quote(value) for key, value in values.items()})


def render_permission(provider: AwsProvider, function_name: str, log_group_arn: str) -> str:
    return _render(
        PERMISSION_TEMPLATE,
        lambda_logical_id=provider.naming.get_lambda_logical_id(function_name),
        region=provider.get_region(),
        log_group_arn=log_group_arn,
    )


def render_subscription_filter(provider: AwsProvider, setting: TriggerSetting, function_name: str, index: int) -> str:
    permission_id = lambda_permission_logical_id(provider.naming, function_name, setting.log_group_name, index)
    return _render(
        SUBSCRIPTION_FILTER_TEMPLATE,
        lambda_logical_id=provider.naming.get_lambda_logical_id(function_name),
        filter_pattern=setting.filter_pattern,
        filter_name=subscription_filter_name(permission_id, setting),
        log_group_name=setting.log_group_name,
        permission_logical_id=permission_id,
    )


def build_permission(
    provider: AwsProvider,
    setting: TriggerSetting,
    function_name: str,
    log_group_arn: str,
    index: int,
) -> Fragment:
    logical_id = lambda_permission_logical_id(provider.naming, function_name, setting.log_group_name, index)
    return {logical_id: json.loads(render_permission(provider, function_name, log_group_arn))}


def build_subscription_filter(provider: AwsProvider, setting: TriggerSetting, function_name: str, index: int) -> Fragment:
    logical_id = subscription_filter_logical_id(provider.naming, function_name, setting.log_group_name, index)
    return {logical_id: json.loads(render_subscription_filter(provider, setting, function_name, index))}


def build_destination_output(provider: AwsProvider, output_key: str, function_name: str) -> Fragment:
    """Output recording the filter destination for the next deployment's quota check."""
    lambda_logical_id = provider.naming.get_lambda_logical_id(function_name)
    return {
        output_key: {
            "Description": "Subscription filter destination",
            "Value": {"Fn::GetAtt": [lambda_logical_id, "Arn"]},
        }
    }


def merge_fragment(target: Dict[str, Any], fragment: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``fragment`` into ``target`` without dropping existing keys."""
    for key, value in fragment.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merge_fragment(current, value)
        else:
            target[key] = value
    return target
