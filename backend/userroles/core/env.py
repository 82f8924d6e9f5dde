from __future__ import annotations

import os
from pathlib import Path

# backend/userroles/core/env.py -> backend/userroles/core -> backend/userroles -> backend -> repo root
ENV_ROOT: Path = Path(__file__).resolve().parents[3]

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _parse_env_line(line: str) -> tuple[str, str] | None:
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    if "=" not in line:
        return None
    key, value = line.split("=", 1)
    key = key.strip()
    value = value.strip()
    if not key:
        return None
    # KEY="value" or KEY='value'
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        value = value[1:-1]
    return key, value


def load_env_if_present(*, override: bool = False, root: Path | None = None) -> list[Path]:
    """Load .env files into process env if present.

    - Searches repo root `.env` then `backend/.env` (if exist).
    - Does NOT override existing environment variables unless override=True.
    - Returns the files that were read.
    """

    repo_root = root or ENV_ROOT
    candidates = [
        repo_root / ".env",
        repo_root / "backend" / ".env",
    ]

    loaded: list[Path] = []
    for p in candidates:
        if not p.is_file():
            continue
        try:
            content = p.read_text(encoding="utf-8")
        except OSError:
            continue
        loaded.append(p)
        for raw in content.splitlines():
            parsed = _parse_env_line(raw)
            if not parsed:
                continue
            k, v = parsed
            if not override and k in os.environ:
                continue
            os.environ[k] = v
    return loaded


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable; unknown spellings are a config error."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in _TRUE_VALUES:
        return True
    if v in _FALSE_VALUES:
        return False
    raise RuntimeError(f"Invalid {name}; must be a boolean (1/0, true/false, yes/no, on/off).")


def get_strict_in_role() -> bool:
    """Whether `is_in_role` checks every requested role instead of the legacy super-only result."""
    load_env_if_present()
    return env_flag("USERROLES_STRICT_IN_ROLE", default=False)
