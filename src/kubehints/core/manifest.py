#!/usr/bin/env python3
"""
KUBEHINTS MANIFEST ADAPTER
--------------------------
Derives observer-style endpoints from a Kubernetes Pod manifest so hints
can be resolved offline, without a running cluster observer.

Author: KubeHints Team
Date: 2026-10-19
"""

from typing import Any, List, Optional

from kubehints.core.models import Endpoint, Pod, Port


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _map(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _str_map(value: Any) -> dict:
    return {str(k): "" if v is None else str(v) for k, v in _map(value).items()}


def pod_from_manifest(doc: Any) -> Optional[Pod]:
    if not isinstance(doc, dict) or doc.get("kind") != "Pod":
        return None
    metadata = _map(doc.get("metadata"))
    name = str(metadata.get("name", ""))
    namespace = str(metadata.get("namespace") or "default")
    return Pod(
        name=name,
        namespace=namespace,
        # Manifests that were never applied have no uid; fall back to the name
        uid=str(metadata.get("uid") or name),
        labels=_str_map(metadata.get("labels")),
        annotations=_str_map(metadata.get("annotations")),
    )


def endpoints_from_manifest(doc: Any, pod_ip: Optional[str] = None) -> List[Endpoint]:
    """
    One Port endpoint per declared containerPort. A pod that declares no
    ports yields a single port-less endpoint targeting the pod IP.
    Entries that are not mappings are skipped.
    """
    pod = pod_from_manifest(doc)
    if pod is None:
        return []

    status = _map(doc.get("status"))
    host = pod_ip or str(status.get("podIP") or "")
    spec = _map(doc.get("spec"))

    endpoints = []
    for container in _list(spec.get("containers")):
        if not isinstance(container, dict):
            continue
        container_name = str(container.get("name", ""))
        for port_spec in _list(container.get("ports")):
            if not isinstance(port_spec, dict):
                continue
            number = port_spec.get("containerPort")
            # bool is an int subclass; `containerPort: true` is not a port
            if isinstance(number, bool) or not isinstance(number, int) or number <= 0:
                continue
            port_name = str(port_spec.get("name") or container_name)
            endpoints.append(Endpoint(
                id=f"{pod.namespace}/{pod.uid}/{port_name}({number})",
                target=f"{host}:{number}",
                details=Port(
                    name=port_name,
                    pod=pod,
                    port=number,
                    transport=str(port_spec.get("protocol") or "TCP"),
                ),
            ))

    if not endpoints:
        endpoints.append(Endpoint(
            id=f"{pod.namespace}/{pod.uid}",
            target=host,
            details=Port(name=pod.name, pod=pod),
        ))
    return endpoints
