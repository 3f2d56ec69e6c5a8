"""Rich console summary of an audit report."""

import logging
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.models.audit_models import CheckStatus, UXReport
from src.scoring.threshold_gate import GateResult

logger = logging.getLogger(__name__)

STATUS_STYLES = {
    CheckStatus.PASS: "green",
    CheckStatus.WARNING: "yellow",
    CheckStatus.FAIL: "red",
}


def score_style(score: int) -> str:
    """Color band for an overall score."""
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    return "red"


class ConsoleReporter:
    """
    Render an audit summary to the terminal.

    Shows the overall score, status counts, critical issues and the top
    recommendations.
    """

    def __init__(self, console: Optional[Console] = None, max_recommendations: int = 5):
        """
        Initialize console reporter.

        Args:
            console: Rich console (creates new if not provided)
            max_recommendations: Number of recommendations to print
        """
        self.console = console or Console()
        self.max_recommendations = max_recommendations

    def render(self, report: UXReport) -> None:
        """
        Render the report summary.

        Args:
            report: Finished audit report
        """
        style = score_style(report.overall_score)
        self.console.print(
            Panel(
                f"[bold {style}]{report.overall_score}/100[/bold {style}]\n{report.url}",
                title="UX/UI Audit Score",
                border_style=style,
            )
        )

        counts = report.summary()
        table = Table(title="Results", show_header=True)
        table.add_column("Status")
        table.add_column("Count", justify="right")
        for status in CheckStatus:
            color = STATUS_STYLES[status]
            table.add_row(f"[{color}]{status.value}[/{color}]", str(counts[status.value]))
        table.add_row("[bold]total[/bold]", str(counts["total"]))
        self.console.print(table)

        critical = report.critical_findings()
        if critical:
            self.console.print("\n[bold red]Critical issues:[/bold red]")
            for finding in critical:
                self.console.print(
                    f"  • {finding.category} - {finding.test}: {finding.details}"
                )

        if report.recommendations:
            self.console.print("\n[bold]Top recommendations:[/bold]")
            for index, text in enumerate(
                report.recommendations[: self.max_recommendations], start=1
            ):
                self.console.print(f"  {index}. {text.strip()}")

    def render_gate(self, result: GateResult) -> None:
        """
        Render a threshold gate outcome.

        Args:
            result: Gate evaluation result
        """
        if result.passed:
            self.console.print("[green]Threshold gate passed[/green]")
            return
        self.console.print("[red]Threshold gate failed:[/red]")
        for violation in result.violations:
            self.console.print(f"  [red]✗[/red] {violation}")
