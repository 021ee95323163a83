"""Settings for calkit, validated from args/calkit.yaml.

Every section has working defaults, so a missing or broken file never stops
the shell from starting.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from calkit import CONFIG_PATH

logger = logging.getLogger(__name__)


class DefaultCalendarConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    enabled: bool = Field(default=False)
    name: str = Field(default="Default", min_length=1)
    timezone: str = Field(default="UTC", min_length=1)


class EventsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    auto_decline: bool = Field(default=True)


class ShellConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    prompt: str = Field(default="> ")
    stop_on_error: bool = Field(default=True)


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    level: str = Field(default="WARNING")
    json_output: bool = Field(default=False, alias="json")


class CalkitConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    default_calendar: DefaultCalendarConfig = Field(default_factory=DefaultCalendarConfig)
    events: EventsConfig = Field(default_factory=EventsConfig)
    shell: ShellConfig = Field(default_factory=ShellConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: Optional[Path] = None) -> CalkitConfig:
    """Load and validate the YAML config, falling back to defaults on any problem."""
    yaml_path = Path(path) if path is not None else CONFIG_PATH

    try:
        if yaml_path.exists():
            with open(yaml_path) as f:
                raw = yaml.safe_load(f) or {}
        else:
            raw = {}

        return CalkitConfig.model_validate(raw)
    except Exception as e:
        logger.warning(f"Config validation failed for {yaml_path}: {e}, using defaults")
        return CalkitConfig()


__all__ = [
    "CalkitConfig",
    "DefaultCalendarConfig",
    "EventsConfig",
    "LoggingConfig",
    "ShellConfig",
    "load_config",
]
