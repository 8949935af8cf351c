#!/usr/bin/env python3
"""
KUBEHINTS VALIDATOR - Endpoint Address Check
--------------------------------------------
A user-declared `endpoint` inside a config hint must point at the very
target the observer discovered. Anything else would let a pod annotation
aim a receiver at an arbitrary address.

Deferred expressions such as `` `endpoint`/stats `` are resolved later
against the live target and are accepted as-is.

Author: KubeHints Team
Date: 2026-10-19
"""

import re
import logging
from typing import Tuple
from urllib.parse import urlsplit

from kubehints.core.errors import InvalidEndpointError

logger = logging.getLogger("kubehints.validator")

# Backtick expression that references the reserved `endpoint` variable
# Matches anywhere in the value: a deferred endpoint is checked when it is expanded, not here
DYNAMIC_ENDPOINT_PATTERN = re.compile(r"`[^`]*\bendpoint\b[^`]*`")
SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")
PLACEHOLDER_SCHEME = "placeholder://"


class EndpointValidator:
    """
    Compares a declared endpoint against the discovered target on the
    parsed URI authority only. Paths, queries and fragments are ignored.
    """

    def is_dynamic(self, endpoint: str) -> bool:
        return bool(DYNAMIC_ENDPOINT_PATTERN.search(endpoint))

    def authority(self, endpoint: str) -> str:
        """
        Extracts `host:port` from a URI or from a bare `host:port[/path]`.
        """
        candidate = endpoint.strip()
        if not SCHEME_PATTERN.match(candidate):
            candidate = PLACEHOLDER_SCHEME + candidate
        try:
            netloc = urlsplit(candidate).netloc
        except ValueError as e:
            raise InvalidEndpointError(endpoint, "", f"Configured endpoint '{endpoint}' is not a valid URI: {e}")
        # Drop userinfo, keep host:port
        return netloc.rpartition("@")[2]

    def validate(self, endpoint: str, default_endpoint: str) -> None:
        if self.is_dynamic(endpoint):
            logger.debug(f"Endpoint '{endpoint}' is a deferred expression; skipping address check")
            return

        try:
            host = self.authority(endpoint)
        except InvalidEndpointError as e:
            raise InvalidEndpointError(endpoint, default_endpoint, str(e))

        if host != default_endpoint:
            raise InvalidEndpointError(endpoint, default_endpoint)

    def check(self, endpoint: str, default_endpoint: str) -> Tuple[bool, str]:
        """Non-raising variant for reporting surfaces."""
        try:
            self.validate(endpoint, default_endpoint)
        except InvalidEndpointError as e:
            return False, str(e)
        if self.is_dynamic(endpoint):
            return True, f"Endpoint '{endpoint}' is resolved against the target at runtime."
        return True, f"Endpoint '{endpoint}' matches target '{default_endpoint}'."


def validate_endpoint(endpoint: str, default_endpoint: str) -> None:
    """Raises InvalidEndpointError unless `endpoint` points at `default_endpoint`."""
    EndpointValidator().validate(endpoint, default_endpoint)
