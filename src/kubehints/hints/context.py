#!/usr/bin/env python3
"""
KUBEHINTS HINT CONTEXT
----------------------
The flattened view of one observed endpoint, as consumed by the template
builder. It carries the pod annotations together with the fields derived
from the endpoint (target address, port and the port scope of hints).

Author: KubeHints Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional

from kubehints.core.models import Endpoint, Pod, Port


@dataclass(frozen=True)
class HintContext:
    """
    Read-only resolution input for a single endpoint.

    Built fresh for every resolution call so that concurrent resolutions
    never share state.
    """
    endpoint_id: str                       # Opaque observer id
    endpoint_type: Optional[str]           # "port", "pod" or None
    target: str                            # Discovered dial target (host[:port])
    port: int = 0                          # 0 when no port is known
    port_name: str = ""                    # Scraper-visible port name
    pod: Optional[Pod] = None              # Owning pod, if any
    annotations: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_endpoint(cls, endpoint: Endpoint) -> "HintContext":
        details = endpoint.details
        if isinstance(details, Port):
            return cls(
                endpoint_id=endpoint.id,
                endpoint_type=endpoint.endpoint_type,
                target=endpoint.target,
                port=details.port or 0,
                port_name=details.name,
                pod=details.pod,
                annotations=dict(details.pod.annotations),
            )
        if isinstance(details, Pod):
            return cls(
                endpoint_id=endpoint.id,
                endpoint_type=endpoint.endpoint_type,
                target=endpoint.target,
                pod=details,
                annotations=dict(details.annotations),
            )
        return cls(endpoint_id=endpoint.id, endpoint_type=None, target=endpoint.target)

    @property
    def scope(self) -> str:
        """Port scope of container-level hints; empty when no port is known."""
        return str(self.port) if self.port else ""

    @property
    def pod_uid(self) -> str:
        return self.pod.uid if self.pod else ""

    def to_env(self) -> Dict[str, Any]:
        """Renders the context as the observer's flat endpoint environment."""
        env: Dict[str, Any] = {
            "type": self.endpoint_type or "",
            "id": self.endpoint_id,
            "endpoint": self.target,
        }
        if self.endpoint_type == "port":
            env["name"] = self.port_name
            env["port"] = self.port
        if self.pod is not None:
            env["pod"] = self.pod.env()
        return env
