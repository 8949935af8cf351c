#!/usr/bin/env python3
"""
KUBEHINTS CORE MODELS
---------------------
Defines the fundamental data structures shared across the KubeHints engine.
Observed endpoints come in from the cluster observer; receiver templates
go out to the discovery loop that starts and stops receivers.

Author: KubeHints Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Union

# Endpoint detail types as reported by the observer
PORT_TYPE = "port"
POD_TYPE = "pod"


@dataclass(frozen=True)
class Pod:
    """
    The owning pod of an observed endpoint.

    Annotations carry the discovery hints; labels are passed through to the
    endpoint environment untouched.
    """
    name: str
    namespace: str = ""
    uid: str = ""
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)

    def env(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "namespace": self.namespace,
            "uid": self.uid,
            "labels": dict(self.labels),
            "annotations": dict(self.annotations),
        }


@dataclass(frozen=True)
class Port:
    """A port exposed by a pod container. A port of 0 means no port is known."""
    name: str
    pod: Pod
    port: int = 0
    transport: str = "TCP"


@dataclass(frozen=True)
class Endpoint:
    """
    A single discovery target reported by the observer.

    `details` is polymorphic: a `Port` for container ports, a `Pod` for
    the pod itself. Only `Port` details are actionable by the hints engine.
    """
    id: str
    target: str
    details: Union[Port, Pod, None] = None

    @property
    def endpoint_type(self) -> Optional[str]:
        if isinstance(self.details, Port):
            return PORT_TYPE
        if isinstance(self.details, Pod):
            return POD_TYPE
        return None


@dataclass(frozen=True)
class ReceiverSignals:
    """Which signal kinds the resolved receiver should collect."""
    metrics: bool = False
    logs: bool = False
    traces: bool = False

    def names(self):
        return [name for name in ("metrics", "logs", "traces") if getattr(self, name)]


@dataclass(frozen=True)
class ReceiverIdentity:
    """Receiver component id, rendered as `type/name`."""
    type: str
    name: str = ""

    @classmethod
    def parse(cls, text: str) -> "ReceiverIdentity":
        type_part, _, name_part = text.partition("/")
        if not type_part.strip():
            raise ValueError(f"Receiver id '{text}' has an empty type")
        return cls(type=type_part.strip(), name=name_part.strip())

    @classmethod
    def for_port(cls, scraper: str, pod_uid: str, port: int) -> "ReceiverIdentity":
        return cls(type=scraper, name=f"{pod_uid}_{port}")

    def __str__(self) -> str:
        return f"{self.type}/{self.name}" if self.name else self.type


@dataclass
class ReceiverTemplate:
    """
    The output unit of a hints resolution: identity, the combined user
    configuration tree, and the enabled signal set.
    """
    identity: ReceiverIdentity
    config: Dict[str, Any] = field(default_factory=dict)
    signals: ReceiverSignals = field(default_factory=ReceiverSignals)
