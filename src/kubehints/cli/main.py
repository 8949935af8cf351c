#!/usr/bin/env python3
"""
KUBEHINTS CLI - Offline Hint Diagnostics
----------------------------------------
Resolves discovery hints on Pod manifests exactly as the collector would,
so operators can check their annotations before rolling them out.

Author: KubeHints Team
Date: 2026-10-19
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from kubehints.core.config import DiscoveryConfig, load_discovery_config
from kubehints.core.engine import HintsTemplateBuilder
from kubehints.core.errors import ConfigError, HintError
from kubehints.core.manifest import endpoints_from_manifest
from kubehints.cli.formatter import HintsFormatter
from kubehints.render.exporter import TemplateExporter
from kubehints.validator.validator import EndpointValidator

# Global console for consistent styling across the application
console = Console()
logger = logging.getLogger("kubehints.cli")


class KubeHintsCLI:
    """
    CLI wrapper that translates user commands into builder runs and
    renders the outcome of every endpoint.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="kubehints",
            description="KubeHints - Resolve telemetry discovery hints on Kubernetes Pods",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = HintsFormatter()
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("-V", "--version", action="version", version="kubehints v0.1.0")
        self.parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        resolve_parser = subparsers.add_parser("resolve", help="Resolve hints of Pod manifests")
        resolve_parser.add_argument("path", help="YAML file holding one or more Pod manifests")
        resolve_parser.add_argument("--config", help="Discovery config file (enabled, ignore_receivers)")
        resolve_parser.add_argument("--ignore", action="append", default=[], metavar="NAME",
                                    help="Scraper type to ignore (repeatable)")
        resolve_parser.add_argument("--pod-ip", help="Override the pod IP used as dial target")
        resolve_parser.add_argument("--show-config", action="store_true",
                                    help="Print the generated receivers block")

        check_parser = subparsers.add_parser("check-endpoint", help="Validate a declared endpoint")
        check_parser.add_argument("endpoint", help="Endpoint as written in a config hint")
        check_parser.add_argument("target", help="Discovered target, host:port")

    def print_header(self, subtitle: str):
        console.print(Panel.fit(
            "[bold cyan]KubeHints v0.1.0[/bold cyan]",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def _load_config(self, args: argparse.Namespace) -> DiscoveryConfig:
        config = load_discovery_config(args.config) if args.config else DiscoveryConfig(enabled=True)
        if args.ignore:
            config = DiscoveryConfig(
                enabled=config.enabled,
                ignore_receivers=list(config.ignore_receivers) + list(args.ignore),
            )
        return config

    def _load_manifests(self, path: Path) -> List[Any]:
        yaml = YAML(typ="safe", pure=True)
        docs = []
        for doc in yaml.load_all(path.read_text(encoding="utf-8-sig")):
            if isinstance(doc, dict) and doc.get("kind") == "List":
                items = doc.get("items")
                docs.extend(items if isinstance(items, list) else [])
            elif doc is not None:
                docs.append(doc)
        return docs

    def resolve_documents(self, docs: List[Any], builder: HintsTemplateBuilder,
                          pod_ip: Optional[str] = None) -> List[Dict[str, Any]]:
        reports = []
        for doc in docs:
            for endpoint in endpoints_from_manifest(doc, pod_ip=pod_ip):
                report: Dict[str, Any] = {"endpoint_id": endpoint.id, "template": None}
                try:
                    template = builder.create_receiver_template(endpoint)
                except HintError as e:
                    logger.warning(f"Skipping endpoint '{endpoint.id}': {e}")
                    report.update(outcome="ERROR", error=str(e))
                else:
                    if template is None:
                        report["outcome"] = "SKIPPED"
                    else:
                        report.update(
                            outcome="RECEIVER",
                            receiver=str(template.identity),
                            signals=template.signals.names(),
                            template=template,
                        )
                reports.append(report)
        return reports

    def _run_resolve(self, args: argparse.Namespace) -> int:
        path = Path(args.path)
        if not path.is_file():
            console.print(f"[bold red]Error:[/bold red] Path '{args.path}' not found.")
            return 2

        try:
            config = self._load_config(args)
            docs = self._load_manifests(path)
        except ConfigError as e:
            console.print(f"[bold red]Config error:[/bold red] {escape(str(e))}")
            return 2
        except YAMLError as e:
            console.print(f"[bold red]Manifest error:[/bold red] {escape(str(e))}")
            return 2
        except (OSError, UnicodeDecodeError) as e:
            console.print(f"[bold red]Manifest error:[/bold red] Unable to read {escape(str(path))}: {escape(str(e))}")
            return 2

        builder = HintsTemplateBuilder(config)
        reports = self.resolve_documents(docs, builder, pod_ip=args.pod_ip)
        if not reports:
            console.print("\n[bold yellow]No Pod manifests found.[/bold yellow]")
            return 0

        self.formatter.print_report_table(reports)
        if args.show_config:
            templates = [r["template"] for r in reports if r["template"] is not None]
            if templates:
                self.formatter.print_receivers(TemplateExporter().export(templates))
        self.formatter.print_summary(reports)
        return 1 if any(r["outcome"] == "ERROR" for r in reports) else 0

    def _run_check_endpoint(self, args: argparse.Namespace) -> int:
        ok, message = EndpointValidator().check(args.endpoint, args.target)
        color = "green" if ok else "red"
        console.print(f"[bold {color}]{'VALID' if ok else 'INVALID'}:[/bold {color}] {escape(message)}")
        return 0 if ok else 1

    def run(self, argv: Optional[List[str]] = None) -> int:
        args = self.parser.parse_args(argv)
        logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

        if args.command == "resolve":
            self.print_header("Hint Resolution")
            return self._run_resolve(args)
        if args.command == "check-endpoint":
            return self._run_check_endpoint(args)

        self.parser.print_help()
        return 0


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(KubeHintsCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
