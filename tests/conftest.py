import os
import sys
from pathlib import Path
from typing import Iterator

import pytest


# Ensure the src layout is importable without an editable install
_repo_root = Path(__file__).resolve().parents[1]
for _path in (str(_repo_root), str(_repo_root / "src")):
    if _path not in sys.path:
        sys.path.insert(0, _path)


@pytest.fixture(autouse=True)
def aws_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure default AWS region and dummy credentials for moto/boto3 clients.

    Also clears plugin settings so tests never inherit them from the shell.
    """
    monkeypatch.setenv("AWS_REGION", os.environ.get("AWS_REGION", "us-east-1"))
    monkeypatch.setenv("AWS_DEFAULT_REGION", os.environ.get("AWS_DEFAULT_REGION", "us-east-1"))
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")

    for name in (
        "SUBSCRIPTION_FILTER_MAX_WORKERS",
        "SUBSCRIPTION_FILTER_LIMIT",
        "SUBSCRIPTION_FILTER_SUFFIX_LENGTH",
        "SUBSCRIPTION_FILTER_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def plugin_env(monkeypatch: pytest.MonkeyPatch):
    """Apply plugin settings through the environment."""

    def _apply(*, max_workers: int = 4, limit: int = 1, suffix_length: int = 6) -> None:
        monkeypatch.setenv("SUBSCRIPTION_FILTER_MAX_WORKERS", str(max_workers))
        monkeypatch.setenv("SUBSCRIPTION_FILTER_LIMIT", str(limit))
        monkeypatch.setenv("SUBSCRIPTION_FILTER_SUFFIX_LENGTH", str(suffix_length))

    return _apply
