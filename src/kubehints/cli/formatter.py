# src/kubehints/cli/formatter.py
from typing import List, Dict, Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

# Initialize the Rich console for high-quality terminal output
console = Console()


class HintsFormatter:
    """
    Renders resolution reports: one row per endpoint, plus the optional
    generated receivers block.
    """

    def print_report_table(self, reports: List[Dict[str, Any]]):
        table = Table(title="KubeHints Resolution Report", show_lines=True, header_style="bold magenta")
        table.add_column("Endpoint", style="cyan")
        table.add_column("Receiver", style="white")
        table.add_column("Signals")
        table.add_column("Outcome", style="bold")

        for r in reports:
            outcome = r.get("outcome", "ERROR")
            color = {"RECEIVER": "green", "SKIPPED": "yellow"}.get(outcome, "red")
            table.add_row(
                escape(str(r.get("endpoint_id"))),
                escape(str(r.get("receiver") or "-")),
                ", ".join(r.get("signals") or []) or "-",
                f"[{color}]{outcome}[/{color}]",
            )

        console.print(table)

        for r in reports:
            if r.get("error"):
                console.print(f"[bold red]Error in {escape(str(r['endpoint_id']))}:[/bold red] {escape(r['error'])}")

    def print_receivers(self, yaml_text: str):
        if not yaml_text.strip():
            return
        syntax = Syntax(yaml_text, "yaml", theme="monokai", line_numbers=False)
        console.print(Panel(syntax, title="Generated receivers", border_style="green"))

    def print_summary(self, reports: List[Dict[str, Any]]):
        total = len(reports)
        built = sum(1 for r in reports if r.get("outcome") == "RECEIVER")
        skipped = sum(1 for r in reports if r.get("outcome") == "SKIPPED")
        failed = total - built - skipped
        console.print(Panel(
            f"[bold white]Summary Report[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Endpoints:  {total}\n"
            f"Receivers:  [green]{built}[/green]\n"
            f"Skipped:    [yellow]{skipped}[/yellow]\n"
            f"Errors:     [red]{failed}[/red]",
            border_style="dim"
        ))
