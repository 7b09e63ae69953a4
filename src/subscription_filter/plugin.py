"""Compile ``subscriptionFilter`` events into CloudFormation resources.

Per trigger: quota check against deployed state, log group ARN lookup, then a
Lambda permission and a subscription filter merged into the compiled template
(permission first; the filter depends on it). Triggers run concurrently and
the first failure fails the whole compile.
"""

from __future__ import annotations

import threading
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Any, Callable, Dict, List, Optional

from subscription_filter.clients.remote import AwsRemoteState, RemoteState
from subscription_filter.errors import ServerlessError
from subscription_filter.host import Serverless
from subscription_filter.models.settings import PluginSettings
from subscription_filter.models.triggers import FunctionTrigger, TriggerSetting
from subscription_filter.naming import check_unique_logical_ids, destination_output_key, with_display_suffix
from subscription_filter.quota import check_declared_quota, check_deployed_quota
from subscription_filter.resources import (
    build_destination_output,
    build_permission,
    build_subscription_filter,
    merge_fragment,
)
from subscription_filter.utils.logger import get_logger
from subscription_filter.validation import validate_settings

EVENT_KEY = "subscriptionFilter"


class SubscriptionFilterPlugin:
    def __init__(
        self,
        serverless: Serverless,
        options: Optional[Dict[str, Any]] = None,
        *,
        remote: Optional[RemoteState] = None,
        settings: Optional[PluginSettings] = None,
    ) -> None:
        self.serverless = serverless
        self.options = options or {}
        self.provider = serverless.get_provider("aws")
        self.settings = settings or PluginSettings.load()
        self._remote = remote
        self.logger = get_logger(
            __name__,
            stage=self.provider.get_stage(),
            service=serverless.service.service,
            level=self.settings.log_level,
        )

        self.hooks: Dict[str, Callable[[], None]] = {
            "deploy:compileEvents": self.compile_subscription_filter_events,
        }

    @property
    def remote(self) -> RemoteState:
        # Created lazily so runs with nothing to compile never build AWS clients
        if self._remote is None:
            self._remote = AwsRemoteState(
                self.provider.get_stack_name(),
                self.provider.naming,
                region=self.provider.get_region(),
            )
        return self._remote

    @property
    def resources(self) -> Dict[str, Any]:
        template = self.serverless.service.provider.compiled_cloudformation_template
        return template.setdefault("Resources", {})

    @property
    def outputs(self) -> Dict[str, Any]:
        template = self.serverless.service.provider.compiled_cloudformation_template
        return template.setdefault("Outputs", {})

    def collect_triggers(self) -> List[FunctionTrigger]:
        """Validate every declared event and return those for the current stage."""
        stage = self.provider.get_stage()
        service = self.serverless.service
        triggers: List[FunctionTrigger] = []

        for function_name in service.get_all_functions():
            function = service.get_function(function_name)
            for index, event in enumerate(function.events):
                raw = event.get(EVENT_KEY)
                if not validate_settings(raw):
                    continue

                setting = TriggerSetting.from_event(raw)
                if setting.stage != stage:
                    self.logger.info(
                        f"Skipping to compile {setting.log_group_name} subscription filter object...",
                        extra={"function": function_name, "log_group_name": setting.log_group_name},
                    )
                    continue

                triggers.append(FunctionTrigger(function_name=function_name, setting=setting, index=index))

        return triggers

    def compile_subscription_filter_events(self) -> None:
        triggers = self.collect_triggers()
        if not triggers:
            return

        check_declared_quota(triggers, self.settings.filters_per_log_group)
        check_unique_logical_ids(self.provider.naming, triggers)

        triggers = [
            FunctionTrigger(
                function_name=trigger.function_name,
                setting=with_display_suffix(trigger.setting, self.settings.display_suffix_length),
                index=trigger.index,
            )
            for trigger in triggers
        ]

        # Built once, before worker threads share the clients
        remote = self.remote
        aborted = threading.Event()
        workers = min(self.settings.max_workers, len(triggers))
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="subscription-filter")
        try:
            futures: List[Future] = [
                executor.submit(self._run_pipeline, trigger, remote, aborted) for trigger in triggers
            ]
            wait(futures, return_when=FIRST_EXCEPTION)
        finally:
            # Pipelines not yet started are dropped or skip on `aborted`; running ones finish their merges
            executor.shutdown(wait=True, cancel_futures=True)

        # First failure in submission order, not completion order
        for future in futures:
            if future.cancelled():
                continue
            error = future.exception()
            if error is not None:
                raise error

    def _run_pipeline(self, trigger: FunctionTrigger, remote: RemoteState, aborted: threading.Event) -> None:
        if aborted.is_set():
            self.logger.info(
                "Skipping subscription filter after an earlier failure",
                extra={"function": trigger.function_name, "log_group_name": trigger.setting.log_group_name},
            )
            return
        try:
            self.do_compile(trigger, remote)
        except Exception:
            aborted.set()
            raise

    def do_compile(self, trigger: FunctionTrigger, remote: Optional[RemoteState] = None) -> None:
        remote = remote or self.remote
        setting = trigger.setting
        function_name = trigger.function_name
        log_extra = {"function": function_name, "log_group_name": setting.log_group_name}
        self.logger.info(f"Compiling {setting.log_group_name} subscription filter object...", extra=log_extra)

        try:
            qualified_name = self.provider.get_function_qualified_name(function_name)
            check_deployed_quota(remote, trigger, qualified_name)

            log_group_arn = remote.resolve_log_group_identity(setting.log_group_name)

            permission = build_permission(self.provider, setting, function_name, log_group_arn, trigger.index)
            merge_fragment(self.resources, permission)

            subscription_filter = build_subscription_filter(self.provider, setting, function_name, trigger.index)
            merge_fragment(self.resources, subscription_filter)

            output_key = destination_output_key(self.provider.naming, setting.log_group_name, qualified_name)
            merge_fragment(self.outputs, build_destination_output(self.provider, output_key, function_name))
        except ServerlessError:
            raise
        except Exception as error:
            self.logger.exception("Subscription filter compilation failed", extra=log_extra)
            raise self.serverless.classes.Error(str(error)) from error
