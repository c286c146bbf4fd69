"""
Pytest config.

Pins the repo root on sys.path so `import sessiongate` works whether or not
the package was installed.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()

from sessiongate.shared.domain.identity import Identity  # noqa: E402
from tests.helpers.fakes import FakeIdentityClient, RecordingDiagnostics  # noqa: E402


@pytest.fixture
def alice() -> Identity:
    return Identity(home_account_id="alice-oid.tenant", username="alice@contoso.com")


@pytest.fixture
def bob() -> Identity:
    return Identity(home_account_id="bob-oid.tenant", username="bob@contoso.com")


@pytest.fixture
def client() -> FakeIdentityClient:
    return FakeIdentityClient()


@pytest.fixture
def diagnostics() -> RecordingDiagnostics:
    return RecordingDiagnostics()


@pytest.fixture(autouse=True)
def _clear_sessiongate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of configuration tests."""
    for key in (
        "SESSIONGATE_CLIENT_ID",
        "SESSIONGATE_AUTHORITY",
        "SESSIONGATE_REDIRECT_URI",
        "SESSIONGATE_SCOPES",
        "FLET_WEB_MODE",
        "FLET_PORT",
        "FLET_WEB_RENDERER",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
