"""Unit tests for the CloudFormation fragment builders."""

from __future__ import annotations

import json

from subscription_filter.models.triggers import TriggerSetting
from subscription_filter.resources import (
    build_destination_output,
    build_permission,
    build_subscription_filter,
    escape_double_quote,
    merge_fragment,
    render_subscription_filter,
)
from tests.fixtures.remote import log_group_arn
from tests.fixtures.service_builders import build_serverless


def _provider(region: str = "ap-northeast-2"):
    return build_serverless({"shipper": []}, region=region).get_provider("aws")


def _setting(pattern: str = "ERROR", log_group: str = "/aws/lambda/orders") -> TriggerSetting:
    return TriggerSetting(stage="dev", log_group_name=log_group, filter_pattern=pattern, display_stage="dev-a1b2c3")


def test_permission_fragment_shape() -> None:
    """
    Given: a resolved log group ARN in ap-northeast-2
    When: building the permission fragment
    Then: invoke rights for the regional logs principal scoped to that ARN
    """
    arn = log_group_arn("/aws/lambda/orders", region="ap-northeast-2")
    fragment = build_permission(_provider(), _setting(), "shipper", arn, 0)

    assert list(fragment) == ["ShipperLambdaPermissionAwslambdaorders0"]
    resource = fragment["ShipperLambdaPermissionAwslambdaorders0"]
    assert resource["Type"] == "AWS::Lambda::Permission"
    assert resource["Properties"] == {
        "FunctionName": {"Fn::GetAtt": ["ShipperLambdaFunction", "Arn"]},
        "Action": "lambda:InvokeFunction",
        "Principal": "logs.ap-northeast-2.amazonaws.com",
        "SourceArn": arn,
    }


def test_subscription_filter_depends_on_paired_permission() -> None:
    provider = _provider()
    permission = build_permission(provider, _setting(), "shipper", log_group_arn("/aws/lambda/orders"), 3)
    subscription = build_subscription_filter(provider, _setting(), "shipper", 3)

    (permission_id,) = permission
    (filter_id,) = subscription
    resource = subscription[filter_id]
    assert filter_id == "ShipperSubscriptionFilterAwslambdaorders3"
    assert resource["Type"] == "AWS::Logs::SubscriptionFilter"
    assert resource["DependsOn"] == permission_id
    assert resource["Properties"]["DestinationArn"] == {"Fn::GetAtt": ["ShipperLambdaFunction", "Arn"]}
    assert resource["Properties"]["LogGroupName"] == "/aws/lambda/orders"
    assert resource["Properties"]["FilterName"] == f"{permission_id}-dev-a1b2c3"


def test_filter_pattern_quotes_are_escaped() -> None:
    """
    Given: a filter pattern containing double quotes
    When: rendering the subscription filter
    Then: each quote is backslash-escaped in the text and the text stays valid JSON
    """
    pattern = '{ $.level = "ERROR" }'
    text = render_subscription_filter(_provider(), _setting(pattern), "shipper", 0)

    assert '\\"ERROR\\"' in text
    parsed = json.loads(text)
    assert parsed["Properties"]["FilterPattern"] == pattern

    fragment = build_subscription_filter(_provider(), _setting(pattern), "shipper", 0)
    assert '\\"ERROR\\"' in json.dumps(fragment)


def test_escape_double_quote() -> None:
    assert escape_double_quote('"a"') == '\\"a\\"'
    assert escape_double_quote("a\\b") == "a\\\\b"
    assert escape_double_quote("plain") == "plain"


def test_destination_output_references_function_arn() -> None:
    output = build_destination_output(_provider(), "Awslambdaorderslogshipperdevshipper", "shipper")
    assert output == {
        "Awslambdaorderslogshipperdevshipper": {
            "Description": "Subscription filter destination",
            "Value": {"Fn::GetAtt": ["ShipperLambdaFunction", "Arn"]},
        }
    }


def test_merge_is_additive() -> None:
    """
    Given: a template with an unrelated resource
    When: merging generated fragments
    Then: the unrelated resource survives and nested keys are merged
    """
    target = {"Bucket": {"Type": "AWS::S3::Bucket"}, "Fn": {"Properties": {"A": 1}}}
    merge_fragment(target, {"Fn": {"Properties": {"B": 2}}, "New": {"Type": "X"}})

    assert target == {
        "Bucket": {"Type": "AWS::S3::Bucket"},
        "Fn": {"Properties": {"A": 1, "B": 2}},
        "New": {"Type": "X"},
    }
