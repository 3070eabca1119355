from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    v = os.getenv(name)
    return v if v is not None and v != "" else default


def _env_str_map(name: str, default: str = "") -> dict[str, str]:
    raw = os.getenv(name, default).strip()
    out: dict[str, str] = {}
    if not raw:
        return out
    for part in raw.split(","):
        item = part.strip()
        if not item or "=" not in item:
            continue
        key, value = item.split("=", 1)
        key = key.strip()
        value = value.strip()
        if key and value:
            out[key] = value
    return out


@dataclass(frozen=True)
class Settings:
    command_timeout_sec: int = 60
    max_output_chars: int = 20000

    min_binary_versions: dict[str, str] = field(default_factory=dict)
    default_working_dir: str = "."

    log_level: str = "INFO"
    log_json: bool = False

    @staticmethod
    def load() -> "Settings":
        return Settings(
            command_timeout_sec=max(1, _env_int("VERSION_CHECK_TIMEOUT_SEC", 60)),
            max_output_chars=max(0, _env_int("VERSION_CHECK_MAX_OUTPUT_CHARS", 20000)),
            min_binary_versions=_env_str_map("MIN_BINARY_VERSIONS", ""),
            default_working_dir=_env_str("VERSION_CHECK_WORKDIR", "."),
            log_level=_env_str("LOG_LEVEL", "INFO"),
            log_json=_env_bool("LOG_JSON", False),
        )
