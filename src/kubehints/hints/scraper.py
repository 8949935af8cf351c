#!/usr/bin/env python3
"""
KUBEHINTS SCRAPER CONFIG - Config Hint Resolution
-------------------------------------------------
Turns the `config` hint of one signal into a configuration tree:
1. Resolve the effective hint (port scope wins)
2. Decode it as YAML
3. Validate a declared `endpoint`, or inject the discovered target

Author: KubeHints Team
Date: 2026-10-19
"""

import logging
from typing import Dict, Any, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from kubehints.core.errors import MalformedConfigError, InvalidEndpointError
from kubehints.hints.keys import CONFIG_HINT, get_hint_annotation
from kubehints.validator.validator import validate_endpoint

ENDPOINT_CONFIG_KEY = "endpoint"

default_logger = logging.getLogger("kubehints.scraper")


def decode_config(text: str, prefix: str, scope: str = "") -> Dict[str, Any]:
    """
    Decodes a config hint into a plain dict. An empty document decodes to {}.
    """
    # A loader per call: YAML instances carry parser state
    yaml = YAML(typ="safe", pure=True)
    try:
        data = yaml.load(text)
    except YAMLError as e:
        raise MalformedConfigError(prefix, scope, str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedConfigError(
            prefix, scope, f"expected a mapping, got {type(data).__name__}"
        )
    return data


def get_scraper_conf_from_annotations(annotations: Dict[str, str], prefix: str,
                                      default_endpoint: str, scope: str = "",
                                      logger: Optional[logging.Logger] = None) -> Dict[str, Any]:
    """
    Returns the configuration tree of a signal with `endpoint` completed.

    Raises MalformedConfigError when the hint does not decode to a mapping,
    and InvalidEndpointError when a declared endpoint does not point at
    `default_endpoint`.
    """
    logger = logger or default_logger

    raw = get_hint_annotation(annotations, prefix, CONFIG_HINT, scope)
    if raw is None or not raw.strip():
        return {ENDPOINT_CONFIG_KEY: default_endpoint}

    conf = decode_config(raw, prefix, scope)

    declared = conf.get(ENDPOINT_CONFIG_KEY)
    if declared is None or declared == "":
        conf[ENDPOINT_CONFIG_KEY] = default_endpoint
        return conf

    if not isinstance(declared, str):
        logger.debug(f"Could not extract configured endpoint from '{prefix}' hint: {declared!r}")
        raise InvalidEndpointError(
            declared, default_endpoint,
            f"Configured endpoint must be a string, got {type(declared).__name__}"
        )

    try:
        validate_endpoint(declared, default_endpoint)
    except InvalidEndpointError as e:
        logger.debug(f"Configured endpoint of '{prefix}' hint is not valid: {e}")
        raise

    return conf
