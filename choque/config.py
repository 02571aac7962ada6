"""Target list persistence for the prober."""

import json
from pathlib import Path
from typing import Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError
from .intervals import validate_interval

logger = structlog.get_logger(__name__)

DEFAULT_INTERVAL_MS = 300000


class TargetConfig(BaseModel):
    """One URL to keep alive."""
    url: str = Field(description="URL to probe")
    interval: Optional[int] = Field(default=None, description="Probe interval in milliseconds")


class ChoqueConfig(BaseModel):
    """On-disk configuration: the targets and the fallback interval."""

    model_config = ConfigDict(populate_by_name=True)

    urls: list[TargetConfig] = Field(default_factory=list, description="Targets to probe")
    default_interval: int = Field(
        default=DEFAULT_INTERVAL_MS,
        alias="defaultInterval",
        description="Interval in milliseconds for targets without their own",
    )

    def resolve_interval(self, target: TargetConfig) -> int:
        """Validated interval for a target, falling back to the default."""
        return validate_interval(target.interval or self.default_interval)


def save_config(config: ChoqueConfig, config_path: str | Path) -> None:
    """Write the config as indented JSON, replacing the file atomically."""
    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = config.model_dump(by_alias=True)
    tmp = path.with_name(f"{path.name}.tmp")
    tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    tmp.replace(path)


def load_config(config_path: str | Path) -> ChoqueConfig:
    """Load the config, creating and persisting a default one if absent."""
    path = Path(config_path)

    if not path.exists():
        config = ChoqueConfig()
        save_config(config, path)
        logger.info("Created default config", path=str(path))
        return config

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return ChoqueConfig.model_validate(data)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        raise ConfigError(f"Cannot load config {path}: {e}") from e


def add_target(config: ChoqueConfig, url: str, interval_ms: int) -> TargetConfig:
    """Append a target with a clamped interval and return it."""
    target = TargetConfig(url=url, interval=validate_interval(interval_ms))
    config.urls.append(target)
    return target
