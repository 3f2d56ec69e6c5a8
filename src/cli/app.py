"""Main CLI application entry point."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

# Load .env file from project root or current directory
_env_paths = [
    Path(__file__).parent.parent.parent / ".env",  # Project root
    Path.cwd() / ".env",  # Current working directory
]
for env_path in _env_paths:
    if env_path.exists():
        load_dotenv(env_path)
        break

from src.auditor.orchestrator import UXAuditor
from src.config.audit_config import PROFILES, AuditConfig, get_config, load_config
from src.models.audit_models import UXReport
from src.reporters.console_reporter import ConsoleReporter
from src.reporters.json_reporter import JsonReporter
from src.scoring.threshold_gate import ThresholdGate

logger = logging.getLogger(__name__)

REPORT_FILENAME = "ux-report.json"
PROBLEM_AREAS_FILENAME = "problem-areas.json"

EXIT_ERROR = 1
EXIT_GATE_FAILED = 2


@click.command()
@click.option("--url", help="Page to audit (overrides TEST_URL)")
@click.option(
    "--env", "environment",
    type=click.Choice(sorted(PROFILES)),
    default="production",
    show_default=True,
    help="Configuration profile",
)
@click.option(
    "--config", "config_path",
    type=click.Path(),
    help="YAML or JSON config file merged over the profile",
)
@click.option(
    "--output", "-o", "output_dir",
    type=click.Path(),
    help="Output directory for reports and screenshots",
)
@click.option(
    "--headed",
    is_flag=True,
    help="Show the browser window",
)
@click.option(
    "--gate",
    is_flag=True,
    help="Exit with status 2 when configured thresholds are not met",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose logging",
)
def main(
    url: Optional[str],
    environment: str,
    config_path: Optional[str],
    output_dir: Optional[str],
    headed: bool,
    gate: bool,
    verbose: bool,
) -> None:
    """
    UX Auditor - audit the UX/UI and accessibility of a web page.

    Audit the default target:
        ux-audit

    Audit a specific page with the quick profile:
        ux-audit --url https://example.com --env quick

    Fail the build when thresholds are not met:
        ux-audit --env cicd --gate
    """
    # Configure logging
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Suppress noisy loggers in non-verbose mode
    if not verbose:
        logging.getLogger("asyncio").setLevel(logging.WARNING)

    try:
        config = build_config(environment, config_path, url, output_dir, headed)
        passed = asyncio.run(run_audit(config, gate=gate))
    except KeyboardInterrupt:
        sys.exit(EXIT_ERROR)
    except Exception as e:
        if verbose:
            logger.exception("CLI error")
        else:
            click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    if not passed:
        sys.exit(EXIT_GATE_FAILED)


def build_config(
    environment: str,
    config_path: Optional[str] = None,
    url: Optional[str] = None,
    output_dir: Optional[str] = None,
    headed: bool = False,
) -> AuditConfig:
    """
    Resolve the profile, config file and command line overrides.

    Args:
        environment: Profile name
        config_path: Optional YAML/JSON override file
        url: Target URL override
        output_dir: Output directory override
        headed: Run with a visible browser

    Returns:
        Final audit configuration
    """
    config = get_config(environment)
    if config_path:
        config = load_config(config_path, base=config)

    updates = {}
    if url:
        updates["url"] = url
    if output_dir:
        updates["output_dir"] = output_dir
    if headed:
        updates["browser"] = config.browser.model_copy(update={"headless": False})
    if updates:
        config = config.model_copy(update=updates)
    return config


def write_artifacts(auditor: UXAuditor, report: UXReport) -> Path:
    """
    Persist the JSON report and the problem areas file.

    Args:
        auditor: Auditor holding the session evidence
        report: Finished report

    Returns:
        Path to the JSON report
    """
    output_dir = Path(auditor.config.output_dir)
    report_path = JsonReporter().save(report, output_dir / REPORT_FILENAME)
    auditor.session.evidence.save_problem_areas(output_dir / PROBLEM_AREAS_FILENAME)
    return report_path


async def run_audit(config: AuditConfig, gate: bool = False) -> bool:
    """
    Async audit runner.

    Args:
        config: Audit configuration
        gate: Whether to evaluate the threshold gate

    Returns:
        False only when the gate was requested and failed
    """
    config.ensure_directories()
    console = ConsoleReporter()

    auditor = UXAuditor(config)
    report = await auditor.run_all_tests()

    report_path = write_artifacts(auditor, report)
    console.render(report)
    console.console.print(f"\n[dim]Report saved to {report_path}[/dim]")

    if not gate:
        return True

    result = ThresholdGate(config.thresholds).evaluate(report)
    console.render_gate(result)
    return result.passed


if __name__ == "__main__":
    main()
