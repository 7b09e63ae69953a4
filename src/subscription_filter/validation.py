"""Validation of declared ``subscriptionFilter`` event settings."""

from __future__ import annotations

from typing import Any

from subscription_filter.errors import ConfigurationError

# Checked in this order; the first failure aborts the run
REQUIRED_FIELDS = ("stage", "logGroupName", "filterPattern")


def _missing_field_message(field: str) -> str:
    return " ".join(
        [
            f"You can't set {field} properties of a subscriptionFilter event.",
            f"{field} property is required.",
        ]
    )


def validate_settings(setting: Any) -> bool:
    """Return True when the setting should be compiled.

    An absent or falsy scalar setting (``None``, ``""``, ``False``, ``0``) means
    the event is of another kind and is skipped. A present but malformed
    setting, including an empty mapping, raises ``ConfigurationError``.
    """
    if not setting and not isinstance(setting, (dict, list)):
        return False

    if not isinstance(setting, dict):
        # No field can be read from a non-mapping; stage is checked first
        raise ConfigurationError(_missing_field_message(REQUIRED_FIELDS[0]))

    for field in REQUIRED_FIELDS:
        value = setting.get(field)
        if not value or not isinstance(value, str):
            raise ConfigurationError(_missing_field_message(field))

    return True
