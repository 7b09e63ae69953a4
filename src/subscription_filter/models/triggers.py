"""Trigger declarations after validation."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class TriggerSetting:
    stage: str
    log_group_name: str
    filter_pattern: str
    # Stage with a random per-run suffix; only ever used inside FilterName
    display_stage: Optional[str] = None

    @staticmethod
    def from_event(setting: Mapping[str, Any]) -> "TriggerSetting":
        return TriggerSetting(
            stage=setting["stage"],
            log_group_name=setting["logGroupName"],
            filter_pattern=setting["filterPattern"],
        )

    def with_display_stage(self, display_stage: str) -> "TriggerSetting":
        return replace(self, display_stage=display_stage)

    @property
    def effective_display_stage(self) -> str:
        return self.display_stage or self.stage


@dataclass(frozen=True)
class FunctionTrigger:
    function_name: str
    setting: TriggerSetting
    # Position of the event in the function's event list
    index: int
