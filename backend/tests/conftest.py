from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[2]

# Ensure `backend/userroles` is importable as top-level `userroles` for tests.
BACKEND_DIR = ROOT / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

import userroles.core.env as env_mod  # noqa: E402
from userroles.security.records import UserRecord  # noqa: E402


@pytest.fixture(autouse=True)
def _no_strict_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Tests opt in to strict is_in_role explicitly; no repo .env leaks in."""
    monkeypatch.setattr(env_mod, "ENV_ROOT", tmp_path)
    monkeypatch.delenv("USERROLES_STRICT_IN_ROLE", raising=False)


@pytest.fixture()
def super_user() -> UserRecord:
    return UserRecord(groups=["editor", "super"], allRoles=["editor", "super", "viewer"])


@pytest.fixture()
def admin_user() -> UserRecord:
    return UserRecord(groups=["admin"], allRoles=["admin"])


@pytest.fixture()
def plain_user() -> UserRecord:
    return UserRecord(groups=["a", "viewer"])


class Recorder:
    """Callback double capturing `(error, result)` calls."""

    def __init__(self) -> None:
        self.calls: list[tuple[object, object]] = []

    def __call__(self, err, result) -> None:
        self.calls.append((err, result))

    @property
    def only(self) -> tuple[object, object]:
        assert len(self.calls) == 1
        return self.calls[0]


@pytest.fixture()
def cb() -> Recorder:
    return Recorder()
