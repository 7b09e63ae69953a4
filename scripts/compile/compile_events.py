#!/usr/bin/env python3
"""Compile subscriptionFilter events of a JSON service definition and print the template."""

import argparse
import json
import sys
from pathlib import Path

from subscription_filter import Serverless, ServerlessError, SubscriptionFilterPlugin


def compile_service(service_path: Path, stage: str, region: str = "") -> dict:
    """Run the compileEvents hook for the service and return the compiled template."""
    config = json.loads(service_path.read_text(encoding="utf-8"))
    serverless = Serverless.from_config(config, stage=stage, region=region or None)
    plugin = SubscriptionFilterPlugin(serverless, {"stage": stage, "region": region})
    plugin.hooks["deploy:compileEvents"]()
    return serverless.service.provider.compiled_cloudformation_template


def main():
    parser = argparse.ArgumentParser(description="Compile subscriptionFilter events into CloudFormation")
    parser.add_argument("--service", "-f", required=True, type=Path, help="Path to the JSON service definition")
    parser.add_argument("--stage", "-s", default="dev", help="Deployment stage")
    parser.add_argument("--region", "-r", default="", help="Override provider region")

    args = parser.parse_args()

    try:
        template = compile_service(args.service, args.stage, args.region)
    except ServerlessError as error:
        print(f"Compilation failed: {error}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(template, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
