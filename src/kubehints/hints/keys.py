#!/usr/bin/env python3
"""
KUBEHINTS HINT KEYS
-------------------
Annotation namespaces and the scope-aware lookup of hint values.

Hints are written as `{prefix}[.{port}]/{suffix}`. A port-scoped value
always replaces the pod-level one for the same prefix and suffix; the two
are never merged.

Author: KubeHints Team
Date: 2026-10-19
"""

from typing import Dict, Optional

HINTS_PREFIX = "io.opentelemetry.discovery"

METRICS_HINTS = f"{HINTS_PREFIX}.metrics"
LOGS_HINTS = f"{HINTS_PREFIX}.logs"
TRACES_HINTS = f"{HINTS_PREFIX}.traces"

# Signal kind -> annotation namespace, in resolution order
SIGNAL_HINTS = {
    "metrics": METRICS_HINTS,
    "logs": LOGS_HINTS,
    "traces": TRACES_HINTS,
}

ENABLED_HINT = "enabled"
SCRAPER_HINT = "scraper"
CONFIG_HINT = "config"

_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}


def hint_key(prefix: str, suffix: str, scope: str = "") -> str:
    if scope:
        return f"{prefix}.{scope}/{suffix}"
    return f"{prefix}/{suffix}"


def get_hint_annotation(annotations: Dict[str, str], prefix: str, suffix: str,
                        scope: str = "") -> Optional[str]:
    """
    Returns the effective raw value of a hint, or None when it is not set.
    The port-scoped key wins over the pod-level key.
    """
    candidates = [hint_key(prefix, suffix)]
    if scope:
        candidates.insert(0, hint_key(prefix, suffix, scope))

    for key in candidates:
        if key in annotations:
            return annotations[key]
    return None


def parse_bool(value: Optional[str]) -> Optional[bool]:
    """Parses the boolean spellings accepted by the collector; None if unparseable."""
    if value is None:
        return None
    value = value.strip()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


def discovery_enabled(annotations: Dict[str, str], prefix: str, scope: str = "") -> bool:
    """True only when the effective `enabled` hint parses as true."""
    return parse_bool(get_hint_annotation(annotations, prefix, ENABLED_HINT, scope)) is True
