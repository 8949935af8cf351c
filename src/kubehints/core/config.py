#!/usr/bin/env python3
"""
KUBEHINTS DISCOVERY CONFIG
--------------------------
The `discovery` block of the receiver creator:

    discovery:
      enabled: true
      ignore_receivers: [redis]

Loaded from YAML and validated strictly; unknown keys are rejected.

Author: KubeHints Team
Date: 2026-10-19
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, List, Union

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from kubehints.core.errors import ConfigError

logger = logging.getLogger("kubehints.config")

KNOWN_KEYS = ("enabled", "ignore_receivers")


@dataclass(frozen=True)
class DiscoveryConfig:
    enabled: bool = False
    ignore_receivers: List[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> "DiscoveryConfig":
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Discovery config must be a mapping, got {type(data).__name__}")
        # Accept both the bare block and one nested under `discovery:`
        if set(data.keys()) == {"discovery"}:
            data = data["discovery"] or {}
            if not isinstance(data, dict):
                raise ConfigError("'discovery' must be a mapping")

        validate_discovery_config(data)
        return cls(
            enabled=data.get("enabled", False),
            ignore_receivers=list(data.get("ignore_receivers") or []),
        )


def validate_discovery_config(data: Dict[str, Any]) -> None:
    for key in data:
        if key not in KNOWN_KEYS:
            raise ConfigError(f"Unknown discovery config key '{key}'")

    enabled = data.get("enabled", False)
    if not isinstance(enabled, bool):
        raise ConfigError(f"'enabled' must be a boolean, got {enabled!r}")

    ignore = data.get("ignore_receivers")
    if ignore is None:
        return
    if not isinstance(ignore, list):
        raise ConfigError(f"'ignore_receivers' must be a list, got {type(ignore).__name__}")
    for name in ignore:
        if not isinstance(name, str) or not name.strip():
            raise ConfigError(f"'ignore_receivers' entries must be non-empty strings, got {name!r}")


def load_discovery_config(path: Union[str, Path]) -> DiscoveryConfig:
    """Reads a discovery config from a YAML file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as e:
        logger.error(f"Unable to read discovery config from {path}")
        raise ConfigError(f"Failed to read discovery config: {e}")

    try:
        data = YAML(typ="safe", pure=True).load(text)
    except YAMLError as e:
        raise ConfigError(f"Discovery config {path} is not valid YAML: {e}")

    config = DiscoveryConfig.from_mapping(data)
    logger.debug(f"Loaded discovery config from {path}: enabled={config.enabled}, "
                 f"ignore_receivers={config.ignore_receivers}")
    return config
