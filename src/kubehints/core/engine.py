#!/usr/bin/env python3
"""
KUBEHINTS ENGINE - Receiver Template Builder
--------------------------------------------
The HintsTemplateBuilder turns one observed endpoint into a receiver
template, or decides that no receiver should exist for it. It walks the
resolution in a fixed order:

1. Gate      - is any signal kind enabled for this endpoint?
2. Scraper   - which receiver type do the hints ask for?
3. Ignore    - is that type excluded by the discovery config?
4. Port      - is there a concrete port to dial?
5. Config    - resolve and validate each enabled signal's config hint
6. Assembly  - identity, signals and one combined config tree

Skips return None. Endpoint-level failures raise a HintError; callers log
them and move on to the next endpoint.

Author: KubeHints Team
Date: 2026-10-19
"""

import logging
from typing import Dict, Any, List, Optional

from kubehints.core.config import DiscoveryConfig
from kubehints.core.errors import ConflictingScraperError, MissingPortError
from kubehints.core.models import Endpoint, PORT_TYPE, ReceiverIdentity, ReceiverSignals, ReceiverTemplate
from kubehints.hints.context import HintContext
from kubehints.hints.keys import SCRAPER_HINT, SIGNAL_HINTS, discovery_enabled, get_hint_annotation
from kubehints.hints.scraper import get_scraper_conf_from_annotations

default_logger = logging.getLogger("kubehints.engine")


class HintsTemplateBuilder:
    """
    Stateless per call: the builder only holds its discovery configuration,
    so a single instance can serve concurrent endpoint events.
    """

    def __init__(self, config: Optional[DiscoveryConfig] = None,
                 logger: Optional[logging.Logger] = None):
        self.config = config or DiscoveryConfig(enabled=True)
        self.ignore_receivers = frozenset(self.config.ignore_receivers)
        self.logger = logger or default_logger

    def create_receiver_template(self, endpoint: Endpoint) -> Optional[ReceiverTemplate]:
        """Entry point for observer events."""
        return self.create_receiver_template_from_hints(HintContext.from_endpoint(endpoint))

    def create_receiver_template_from_hints(self, context: HintContext) -> Optional[ReceiverTemplate]:
        if not self.config.enabled:
            return None

        if context.endpoint_type != PORT_TYPE:
            self.logger.debug(f"Endpoint '{context.endpoint_id}' is not a port endpoint; no hints to apply")
            return None

        self.logger.debug(f"Handling hints for endpoint '{context.endpoint_id}'")
        return self._create_scraper(context)

    def _enabled_signals(self, context: HintContext) -> List[str]:
        return [
            signal for signal, prefix in SIGNAL_HINTS.items()
            if discovery_enabled(context.annotations, prefix, context.scope)
        ]

    def _requested_scrapers(self, context: HintContext, signals: List[str]) -> Dict[str, str]:
        """Scraper named by each enabled signal, in signal order; unset signals are left out."""
        requested: Dict[str, str] = {}
        for signal in signals:
            value = get_hint_annotation(context.annotations, SIGNAL_HINTS[signal], SCRAPER_HINT, context.scope)
            if value and value.strip():
                requested[signal] = value.strip()
        return requested

    def _create_scraper(self, context: HintContext) -> Optional[ReceiverTemplate]:
        # 1. Gate
        signals = self._enabled_signals(context)
        if not signals:
            self.logger.debug(f"No signal enabled by hints for endpoint '{context.endpoint_id}'")
            return None

        # 2. Scraper selection: the first enabled signal picks it
        requested = self._requested_scrapers(context, signals)
        scraper = requested.get(signals[0])
        if not scraper:
            self.logger.debug(f"No scraper hint found for endpoint '{context.endpoint_id}'")
            return None

        # 3. Ignore policy, before any conflict check or config decoding
        if scraper in self.ignore_receivers:
            self.logger.info(f"Receiver '{scraper}' is ignored by the discovery config; "
                             f"skipping endpoint '{context.endpoint_id}'")
            return None

        # Other enabled signals may repeat the scraper or leave it unset
        if len(set(requested.values())) > 1:
            raise ConflictingScraperError(context.endpoint_id, requested)

        # 4. Port requirement
        if not context.port:
            raise MissingPortError(context.endpoint_id, context.target)

        # 5. Per-signal config, first error wins
        config: Dict[str, Any] = {}
        for signal in signals:
            signal_conf = get_scraper_conf_from_annotations(
                context.annotations, SIGNAL_HINTS[signal], context.target, context.scope, self.logger
            )
            for key, value in signal_conf.items():
                config.setdefault(key, value)

        # 6. Assembly
        template = ReceiverTemplate(
            identity=ReceiverIdentity.for_port(scraper, context.pod_uid, context.port),
            config=config,
            signals=ReceiverSignals(
                metrics="metrics" in signals,
                logs="logs" in signals,
                traces="traces" in signals,
            ),
        )
        self.logger.debug(f"Built receiver '{template.identity}' for endpoint '{context.endpoint_id}'")
        return template
