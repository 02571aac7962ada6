from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_CONFIG_PATH = "choque-config.json"
DEFAULT_LOG_PATH = os.path.join("logs", "choque.log")


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return str(default)
    s = str(raw).strip()
    return s if s else str(default)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return float(default)
    try:
        return float(str(raw).strip())
    except ValueError:
        return float(default)


@dataclass(frozen=True)
class RuntimeSettings:
    # Relative paths resolve against the working directory at call time.
    config_path: str = field(default_factory=lambda: _env_str("CHOQUE_CONFIG", DEFAULT_CONFIG_PATH))
    log_path: str = field(default_factory=lambda: _env_str("CHOQUE_LOG_FILE", DEFAULT_LOG_PATH))
    log_level: str = field(default_factory=lambda: _env_str("LOG_LEVEL", "INFO"))
    probe_timeout_seconds: float = field(default_factory=lambda: _env_float("CHOQUE_PROBE_TIMEOUT", 5.0))
