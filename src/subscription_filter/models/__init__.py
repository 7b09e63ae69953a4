from .settings import PluginSettings
from .triggers import FunctionTrigger, TriggerSetting

__all__ = ["FunctionTrigger", "PluginSettings", "TriggerSetting"]
