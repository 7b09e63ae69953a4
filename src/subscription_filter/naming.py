"""Logical identifiers and display names for generated resources."""

from __future__ import annotations

import uuid
from typing import Dict, Iterable

from subscription_filter.errors import ConfigurationError
from subscription_filter.host import Naming
from subscription_filter.models.triggers import FunctionTrigger, TriggerSetting


def _parts(naming: Naming, function_name: str, log_group_name: str) -> tuple[str, str]:
    return (
        naming.get_normalized_function_name(function_name),
        naming.normalize_name_to_alpha_numeric_only(log_group_name),
    )


def subscription_filter_logical_id(naming: Naming, function_name: str, log_group_name: str, index: int) -> str:
    function_part, log_group_part = _parts(naming, function_name, log_group_name)
    return f"{function_part}SubscriptionFilter{log_group_part}{index}"


def lambda_permission_logical_id(naming: Naming, function_name: str, log_group_name: str, index: int) -> str:
    function_part, log_group_part = _parts(naming, function_name, log_group_name)
    return f"{function_part}LambdaPermission{log_group_part}{index}"


def destination_output_key(naming: Naming, log_group_name: str, function_qualified_name: str) -> str:
    """Stack output key recording the destination of a log group for one function."""
    return naming.normalize_name_to_alpha_numeric_only(f"{log_group_name}{function_qualified_name}")


def random_suffix(length: int) -> str:
    return uuid.uuid4().hex[:length]


def with_display_suffix(setting: TriggerSetting, length: int) -> TriggerSetting:
    """Return a copy whose display stage carries a random suffix.

    Only FilterName uses the display stage; stage matching keeps using
    ``setting.stage``.
    """
    return setting.with_display_stage(f"{setting.stage}-{random_suffix(length)}")


def subscription_filter_name(permission_logical_id: str, setting: TriggerSetting) -> str:
    return f"{permission_logical_id}-{setting.effective_display_stage}"


def check_unique_logical_ids(naming: Naming, triggers: Iterable[FunctionTrigger]) -> None:
    """Raise if two triggers would emit resources under the same logical id.

    Ids carry no separator, so ``logs1`` at index 0 and ``logs`` at index 10 on
    one function render identically.
    """
    owners: Dict[str, FunctionTrigger] = {}
    for trigger in triggers:
        for build in (lambda_permission_logical_id, subscription_filter_logical_id):
            logical_id = build(naming, trigger.function_name, trigger.setting.log_group_name, trigger.index)
            previous = owners.setdefault(logical_id, trigger)
            if previous is not trigger:
                raise ConfigurationError(
                    f"subscriptionFilter events of {trigger.function_name} on {previous.setting.log_group_name}"
                    f" and {trigger.setting.log_group_name} both compile to {logical_id}."
                    " Rename a log group or reorder the events."
                )
