"""Guards for the one-subscription-filter-per-log-group quota.

The static check runs once over the declared triggers and never touches the
network. The dynamic check compares deployed state against what this service
recorded on its previous deployment; it is compare-then-act, so a concurrent
writer outside this run can still win the race.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from subscription_filter.clients.remote import RemoteState
from subscription_filter.errors import QuotaExceededError
from subscription_filter.models.triggers import FunctionTrigger
from subscription_filter.utils.logger import get_logger

DEFAULT_FILTERS_PER_LOG_GROUP = 1

logger = get_logger(__name__)


def check_declared_quota(
    triggers: Iterable[FunctionTrigger],
    limit: int = DEFAULT_FILTERS_PER_LOG_GROUP,
) -> None:
    """Raise if any log group is targeted by more than ``limit`` declared triggers."""
    counts = Counter(trigger.setting.log_group_name for trigger in triggers)
    for log_group_name, count in counts.items():
        if count > limit:
            raise QuotaExceededError(
                log_group_name,
                f"{count} subscriptionFilter events target it; at most {limit} allowed.",
            )


def check_deployed_quota(
    remote: RemoteState,
    trigger: FunctionTrigger,
    function_qualified_name: str,
) -> None:
    """Raise if the log group's only slot is taken by a filter we did not create."""
    log_group_name = trigger.setting.log_group_name
    existing = remote.resolve_existing_destination(log_group_name)
    if existing is None:
        return

    expected = remote.reconstruct_expected_destination(log_group_name, function_qualified_name)
    if existing == expected:
        logger.info(
            "Existing subscription filter belongs to this function; updating in place",
            extra={"log_group_name": log_group_name, "function": trigger.function_name},
        )
        return

    raise QuotaExceededError(
        log_group_name,
        f"It is already subscribed by {existing}.",
    )
