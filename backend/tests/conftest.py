from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure `backend/` is on sys.path so `import journal_harvest.*` works in tests.
BACKEND_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND_DIR))


_ENV_VARS = (
    "APP_ENV",
    "LOG_FORMAT",
    "BOTOCORE_LOG_LEVEL",
    "HARVEST_QUEUE_URL",
    "HARVEST_AWS_ACCESS_KEY_ID",
    "HARVEST_AWS_SECRET_ACCESS_KEY",
    "HARVEST_UNKNOWN_SYSTEM_POLICY",
    "SQS_MAX_ATTEMPTS",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    # Settings read the process environment; keep a developer's shell out of the tests.
    from journal_harvest.settings import get_settings

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
