import pytest

from kubehints.hints.keys import (
    CONFIG_HINT,
    METRICS_HINTS,
    SCRAPER_HINT,
    discovery_enabled,
    get_hint_annotation,
    hint_key,
    parse_bool,
)

CONFIG = 'endpoint: "0.0.0.0:8080"'


def test_hint_key_layout():
    assert hint_key(METRICS_HINTS, "enabled") == "io.opentelemetry.discovery.metrics/enabled"
    assert hint_key(METRICS_HINTS, "enabled", "8080") == "io.opentelemetry.discovery.metrics.8080/enabled"


@pytest.mark.parametrize("annotations, scope, expected", [
    ({"io.opentelemetry.discovery.metrics/config": CONFIG,
      "io.opentelemetry.discovery.metrics/enabled": "true"}, "", True),
    ({"io.opentelemetry.discovery.metrics/config": CONFIG,
      "io.opentelemetry.discovery.metrics/enabled": "false"}, "", False),
    ({"io.opentelemetry.discovery.metrics/config": CONFIG,
      "io.opentelemetry.discovery.metrics.8080/enabled": "true"}, "8080", True),
    ({"io.opentelemetry.discovery.metrics/config": CONFIG,
      "io.opentelemetry.discovery.metrics.8080/enabled": "false"}, "8080", False),
    ({}, "", False),
    ({"io.opentelemetry.discovery.metrics/enabled": "yes please"}, "", False),
    # A scoped hint for another port does not apply
    ({"io.opentelemetry.discovery.metrics.9090/enabled": "true"}, "8080", False),
])
def test_discovery_metrics_enabled(annotations, scope, expected):
    assert discovery_enabled(annotations, METRICS_HINTS, scope) is expected


def test_scoped_enabled_overrides_pod_level():
    annotations = {
        "io.opentelemetry.discovery.metrics/enabled": "true",
        "io.opentelemetry.discovery.metrics.6379/enabled": "false",
    }
    assert discovery_enabled(annotations, METRICS_HINTS, "6379") is False
    assert discovery_enabled(annotations, METRICS_HINTS, "") is True


@pytest.mark.parametrize("suffix", ["enabled", SCRAPER_HINT, CONFIG_HINT])
def test_scoped_value_replaces_unscoped(suffix):
    annotations = {
        f"io.opentelemetry.discovery.metrics/{suffix}": "pod: level\nshared: a",
        f"io.opentelemetry.discovery.metrics.6379/{suffix}": "container: level",
    }
    assert get_hint_annotation(annotations, METRICS_HINTS, suffix, "6379") == "container: level"


def test_unscoped_value_used_without_scoped_key():
    annotations = {"io.opentelemetry.discovery.metrics/scraper": "redis"}
    assert get_hint_annotation(annotations, METRICS_HINTS, SCRAPER_HINT, "6379") == "redis"
    assert get_hint_annotation(annotations, METRICS_HINTS, CONFIG_HINT, "6379") is None


@pytest.mark.parametrize("value, expected", [
    ("1", True), ("t", True), ("TRUE", True), ("True", True), (" true ", True),
    ("0", False), ("F", False), ("false", False),
    ("yes", None), ("", None), (None, None),
])
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected
