#!/usr/bin/env python3
"""
KUBEHINTS ERRORS
----------------
Error types raised while resolving hints for a single endpoint. All of them
stem from operator-authored annotations and abort only that endpoint.

Author: KubeHints Team
Date: 2026-10-19
"""

from typing import Optional


class HintError(Exception):
    """Base class for endpoint-level hint resolution failures."""


class MissingPortError(HintError):
    def __init__(self, endpoint_id: str, target: str = ""):
        self.endpoint_id = endpoint_id
        self.target = target
        super().__init__(
            f"Endpoint '{endpoint_id}' (target '{target}') carries no port; "
            f"a port is required to build a receiver from hints"
        )


class MalformedConfigError(HintError):
    def __init__(self, prefix: str, scope: str, reason: str):
        self.prefix = prefix
        self.scope = scope
        self.reason = reason
        where = f"{prefix}.{scope}" if scope else prefix
        super().__init__(f"Could not decode configuration from hint '{where}/config': {reason}")


class InvalidEndpointError(HintError):
    def __init__(self, endpoint: object, default_endpoint: str, reason: Optional[str] = None):
        self.endpoint = endpoint
        self.default_endpoint = default_endpoint
        super().__init__(
            reason or f"Configured endpoint '{endpoint}' should point to the target "
                      f"Pod's endpoint '{default_endpoint}'"
        )


class ConflictingScraperError(HintError):
    def __init__(self, endpoint_id: str, scrapers: dict):
        self.endpoint_id = endpoint_id
        self.scrapers = dict(scrapers)
        listing = ", ".join(f"{signal}={name}" for signal, name in self.scrapers.items())
        super().__init__(f"Endpoint '{endpoint_id}' requests different scrapers per signal ({listing})")


class ConfigError(Exception):
    """Raised when the discovery configuration itself is unusable."""
