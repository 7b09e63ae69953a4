from __future__ import annotations

from typing import Any, Dict, List, Optional

from subscription_filter.host import Serverless


def subscription_event(
    log_group_name: str,
    *,
    stage: str = "dev",
    filter_pattern: str = "ERROR",
) -> Dict[str, Any]:
    return {
        "subscriptionFilter": {
            "stage": stage,
            "logGroupName": log_group_name,
            "filterPattern": filter_pattern,
        }
    }


def build_serverless(
    functions: Dict[str, List[Dict[str, Any]]],
    *,
    stage: str = "dev",
    region: str = "us-east-1",
    service: str = "log-shipper",
    existing_resources: Optional[Dict[str, Any]] = None,
) -> Serverless:
    config = {
        "service": service,
        "provider": {"name": "aws", "region": region, "stage": stage},
        "functions": {name: {"handler": f"handler.{name}", "events": events} for name, events in functions.items()},
    }
    serverless = Serverless.from_config(config)
    if existing_resources:
        serverless.service.provider.compiled_cloudformation_template["Resources"].update(existing_resources)
    return serverless
