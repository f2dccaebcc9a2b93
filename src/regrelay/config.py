from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_URL = "http://127.0.0.1:8000"
DEFAULT_SENDER_ID = "928633261430"
DEFAULT_TIMEOUT_S = 10.0


def _default_state_file() -> Path:
    return Path.home() / ".regrelay" / "state.json"


def normalize_base_url(url: str) -> str:
    url = url.strip()
    if not url:
        return ""
    # Allow passing just host:port.
    if "://" not in url:
        url = "http://" + url
    return url.rstrip("/")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as ex:
        raise ValueError(f"Invalid {name}: {raw!r}") from ex
    if value <= 0:
        raise ValueError(f"{name} must be > 0")
    return value


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_URL
    sender_id: str = DEFAULT_SENDER_ID
    state_file: Path = _default_state_file()
    timeout_s: float = DEFAULT_TIMEOUT_S

    @classmethod
    def from_env(cls) -> "Settings":
        state_file = os.getenv("REGRELAY_STATE_FILE", "").strip()
        return cls(
            base_url=normalize_base_url(os.getenv("REGRELAY_URL", "")) or DEFAULT_URL,
            sender_id=os.getenv("REGRELAY_SENDER_ID", "").strip() or DEFAULT_SENDER_ID,
            state_file=Path(state_file).expanduser() if state_file else _default_state_file(),
            timeout_s=_env_float("REGRELAY_TIMEOUT_S", DEFAULT_TIMEOUT_S),
        )
