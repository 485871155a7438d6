"""Configuration module — frozen dataclass loaded from env vars or YAML."""

import logging
import os
from dataclasses import dataclass, field, fields
from typing import Any, Optional

import yaml

from logbatch.sender import Sender

logger = logging.getLogger(__name__)

DEFAULT_LINE_BUFFER = 50
DEFAULT_INTERVAL_MS = 10000


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class AgentConfig:
    """Options accepted by ``LoggingAgent.configure``.

    ``line_buffer`` is the number of records buffered before a flush and
    ``interval`` the periodic flush cadence in milliseconds. ``send_logs``
    replaces the default HTTP sender; ``headers`` and ``timeout`` only apply
    to the default sender.
    """

    disabled: bool = False
    endpoint: Optional[str] = None
    request_fields: dict = field(default_factory=dict)
    line_buffer: int = DEFAULT_LINE_BUFFER
    interval: int = DEFAULT_INTERVAL_MS
    level: Optional[str] = None
    send_logs: Optional[Sender] = None
    headers: dict = field(default_factory=dict)
    timeout: float = 5.0


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def load_config() -> AgentConfig:
    """Build AgentConfig from environment variables with sensible defaults."""
    return AgentConfig(
        disabled=_parse_bool(os.environ.get("LOGBATCH_DISABLED", "false")),
        endpoint=os.environ.get("LOGBATCH_ENDPOINT") or None,
        line_buffer=_env_int("LOGBATCH_LINE_BUFFER", AgentConfig.line_buffer),
        interval=_env_int("LOGBATCH_INTERVAL", AgentConfig.interval),
        level=os.environ.get("LOGBATCH_LEVEL") or None,
    )


def load_yaml_config(path: str, **overrides: Any) -> AgentConfig:
    """Build AgentConfig from a YAML mapping at *path*.

    A missing file or invalid YAML falls back to defaults; unknown keys are
    ignored with a warning. Keyword *overrides* (e.g. ``send_logs``) win over
    the file.
    """
    options: dict = {}
    try:
        with open(path, "r") as f:
            loaded = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        loaded = None
    except yaml.YAMLError as exc:
        logger.warning("Invalid YAML in %s, using defaults: %s", path, exc)
        loaded = None

    if isinstance(loaded, dict):
        known = {f.name for f in fields(AgentConfig)} - {"send_logs"}
        for key, value in loaded.items():
            if key in known:
                options[key] = value
            else:
                logger.warning("Ignoring unknown config key %r in %s", key, path)
    elif loaded is not None:
        logger.warning("Config file %s is not a mapping, using defaults", path)

    options.update(overrides)
    return AgentConfig(**options)
