from ruamel.yaml import YAML

from kubehints.cli.main import KubeHintsCLI
from kubehints.core.models import ReceiverIdentity, ReceiverSignals, ReceiverTemplate
from kubehints.render.exporter import TemplateExporter

MANIFESTS = """
apiVersion: v1
kind: Pod
metadata:
  name: redis-0
  uid: redis-uid
  annotations:
    io.opentelemetry.discovery.metrics/enabled: "true"
    io.opentelemetry.discovery.metrics/scraper: redis
    io.opentelemetry.discovery.metrics/config: |
      collection_interval: 20s
spec:
  containers:
  - name: redis
    ports:
    - containerPort: 6379
status:
  podIP: 1.2.3.4
---
apiVersion: v1
kind: Pod
metadata:
  name: broken
  uid: broken-uid
  annotations:
    io.opentelemetry.discovery.metrics/enabled: "true"
    io.opentelemetry.discovery.metrics/scraper: nginx
spec:
  containers:
  - name: nginx
status:
  podIP: 1.2.3.5
"""


def test_export_receivers_block():
    template = ReceiverTemplate(
        identity=ReceiverIdentity("redis", "pod-2-UID_6379"),
        config={"timeout": "30s", "endpoint": "1.2.3.4:6379", "nested": {"foo": "bar"}},
        signals=ReceiverSignals(metrics=True),
    )
    text = TemplateExporter().export([template])

    data = YAML(typ="safe").load(text)
    assert data == {
        "receivers": {
            "redis/pod-2-UID_6379": {
                "config": {"endpoint": "1.2.3.4:6379", "timeout": "30s", "nested": {"foo": "bar"}},
                "signals": ["metrics"],
            }
        }
    }
    # endpoint is written first
    assert text.index("endpoint:") < text.index("timeout:")


def test_resolve_reports_each_endpoint(tmp_path, capsys):
    path = tmp_path / "pods.yaml"
    path.write_text(MANIFESTS)

    exit_code = KubeHintsCLI().run(["resolve", str(path), "--show-config"])
    out = capsys.readouterr().out

    # The port-less pod fails, the redis pod resolves
    assert exit_code == 1
    assert "redis/redis-uid_6379" in out
    assert "RECEIVER" in out
    assert "ERROR" in out


def test_resolve_with_ignore(tmp_path):
    path = tmp_path / "pods.yaml"
    path.write_text(MANIFESTS)

    cli = KubeHintsCLI()
    exit_code = cli.run(["resolve", str(path), "--ignore", "nginx", "--ignore", "redis"])
    assert exit_code == 0


def test_resolve_missing_file(tmp_path):
    assert KubeHintsCLI().run(["resolve", str(tmp_path / "nope.yaml")]) == 2


def test_check_endpoint_exit_codes(capsys):
    cli = KubeHintsCLI()
    assert cli.run(["check-endpoint", "http://1.2.3.4:8080/stats", "1.2.3.4:8080"]) == 0
    assert cli.run(["check-endpoint", "http://0.0.0.0:8080/some?foo=1.2.3.4:8080", "1.2.3.4:8080"]) == 1
    out = capsys.readouterr().out
    assert "VALID" in out
    assert "INVALID" in out


def test_resolve_malformed_pod_does_not_abort(tmp_path, capsys):
    path = tmp_path / "pods.yaml"
    path.write_text(
        "kind: Pod\n"
        "metadata:\n"
        "  name: web\n"
        "spec:\n"
        "  containers: [nginx]\n"
        "status:\n"
        "  podIP: 10.0.0.1\n"
        "---\n" + MANIFESTS
    )

    exit_code = KubeHintsCLI().run(["resolve", str(path)])
    out = capsys.readouterr().out

    # The malformed pod has no hints and is skipped; the others still resolve
    assert exit_code == 1
    assert "SKIPPED" in out
    assert "RECEIVER" in out


def test_resolve_unreadable_manifest(tmp_path, capsys):
    path = tmp_path / "pods.yaml"
    path.write_bytes(b"\xff\xfe\x00kind: Pod")

    assert KubeHintsCLI().run(["resolve", str(path)]) == 2
    assert "Manifest error" in capsys.readouterr().out
