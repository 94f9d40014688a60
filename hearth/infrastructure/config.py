"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from a JSON file
- Provides typed access to the server target, timings and sinks
- Falls back to sensible defaults when the config file is absent
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- The "server" section is the ServerTarget value object itself, so the same
  object flows from config into every lifecycle operation
"""

from __future__ import annotations
import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import json
import logging
import os

from hearth.domain.value_objects.server_target import ServerTarget
from hearth.domain.value_objects.timings import LifecycleTimings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResultsConfig:
    """Result sink configuration. Empty db_path keeps results in memory."""
    db_path: str = ""


@dataclass(frozen=True)
class MetricsConfig:
    """Remote locations written by the textfile metrics sink."""
    textfile_dir: str = "/var/lib/node_exporter/textfile_collector"
    audit_log: str = "/var/log/game-players.log"


@dataclass(frozen=True)
class HearthConfig:
    """Root configuration for the Hearth controller."""
    server: ServerTarget = field(default_factory=ServerTarget)
    timing: LifecycleTimings = field(default_factory=LifecycleTimings)
    results: ResultsConfig = field(default_factory=ResultsConfig)
    metrics: MetricsConfig = field(default_factory=MetricsConfig)
    log_level: str = "WARNING"
    json_logs: bool = False


_TOP_LEVEL_KEYS = ("log_level", "json_logs")


def _env_override(data: dict, prefix: str = "HEARTH") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern HEARTH_SECTION_KEY.
    For example: HEARTH_SERVER_SSH_HOST=10.0.0.5, HEARTH_TIMING_READY_TIMEOUT=600.
    Top-level keys are matched whole: HEARTH_LOG_LEVEL=DEBUG.
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        rest = key[len(prefix) + 1:].lower()
        if rest in _TOP_LEVEL_KEYS:
            data[rest] = value
            continue
        parts = rest.split("_", 1)
        if len(parts) == 2:
            section, field_name = parts
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][field_name] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            return json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}


def _to_bool(value) -> bool:
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes")
    return bool(value)


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    valid_fields = {f.name: f for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    for name, value in filtered.items():
        ftype = valid_fields[name].type
        if ftype in ("int", int):
            filtered[name] = int(value)
        elif ftype in ("float", float):
            filtered[name] = float(value)
        elif ftype in ("bool", bool):
            filtered[name] = _to_bool(value)
        elif ftype in ("str", str) and value is None:
            filtered[name] = ""

    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "HEARTH",
) -> HearthConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (HEARTH_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to hearth.json in CWD.
        env_prefix: Environment variable prefix. Defaults to HEARTH.
    """
    config_path = Path(path) if path else Path("hearth.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    return HearthConfig(
        server=_build_sub_config(ServerTarget, data.get("server", {})),
        timing=_build_sub_config(LifecycleTimings, data.get("timing", {})),
        results=_build_sub_config(ResultsConfig, data.get("results", {})),
        metrics=_build_sub_config(MetricsConfig, data.get("metrics", {})),
        log_level=str(data.get("log_level", "WARNING")),
        json_logs=_to_bool(data.get("json_logs", False)),
    )
