from ruamel.yaml import YAML

from kubehints.core.manifest import endpoints_from_manifest, pod_from_manifest
from kubehints.core.models import Port

POD_MANIFEST = """
apiVersion: v1
kind: Pod
metadata:
  name: redis-0
  namespace: cache
  uid: 7f3a
  labels:
    app: redis
  annotations:
    io.opentelemetry.discovery.metrics/enabled: "true"
    io.opentelemetry.discovery.metrics/scraper: redis
spec:
  containers:
  - name: redis
    image: redis:7
    ports:
    - name: redis
      containerPort: 6379
  - name: exporter
    image: oliver006/redis_exporter
    ports:
    - containerPort: 9121
      protocol: TCP
status:
  podIP: 10.1.2.3
"""


def load(text):
    return YAML(typ="safe").load(text)


def test_one_endpoint_per_container_port():
    endpoints = endpoints_from_manifest(load(POD_MANIFEST))

    assert [e.id for e in endpoints] == ["cache/7f3a/redis(6379)", "cache/7f3a/exporter(9121)"]
    assert [e.target for e in endpoints] == ["10.1.2.3:6379", "10.1.2.3:9121"]
    first = endpoints[0].details
    assert isinstance(first, Port)
    assert first.port == 6379
    assert first.pod.annotations["io.opentelemetry.discovery.metrics/scraper"] == "redis"
    assert first.pod.labels == {"app": "redis"}


def test_pod_ip_override():
    endpoints = endpoints_from_manifest(load(POD_MANIFEST), pod_ip="192.168.0.9")
    assert endpoints[0].target == "192.168.0.9:6379"


def test_pod_without_ports_yields_portless_endpoint():
    doc = load("kind: Pod\nmetadata:\n  name: web\nspec:\n  containers:\n  - name: web\nstatus:\n  podIP: 10.0.0.1\n")
    endpoints = endpoints_from_manifest(doc)
    assert len(endpoints) == 1
    assert endpoints[0].target == "10.0.0.1"
    assert endpoints[0].details.port == 0
    # Without a uid the pod name is used
    assert endpoints[0].details.pod.uid == "web"
    assert endpoints[0].details.pod.namespace == "default"


def test_non_pod_documents_ignored():
    assert endpoints_from_manifest(load("kind: Service\nmetadata:\n  name: svc\n")) == []
    assert pod_from_manifest(None) is None


def test_malformed_entries_skipped():
    doc = load(
        "kind: Pod\n"
        "metadata: broken\n"
        "spec:\n"
        "  containers:\n"
        "  - nginx\n"
        "  - name: web\n"
        "    ports: [8080, {containerPort: 9090}]\n"
        "status: [10.0.0.1]\n"
    )
    endpoints = endpoints_from_manifest(doc, pod_ip="10.0.0.1")
    assert [e.target for e in endpoints] == ["10.0.0.1:9090"]
    assert endpoints[0].details.pod.namespace == "default"


def test_boolean_container_port_ignored():
    doc = load("kind: Pod\nmetadata:\n  name: web\nspec:\n  containers:\n  - name: web\n    ports:\n    - containerPort: true\n")
    endpoints = endpoints_from_manifest(doc, pod_ip="10.0.0.1")
    assert len(endpoints) == 1
    assert endpoints[0].details.port == 0
