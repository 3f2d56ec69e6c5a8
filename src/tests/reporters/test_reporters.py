"""Unit tests for report output.

Tests the JSON report file and the rich console summary.
"""

import pytest
import json
from datetime import datetime
from rich.console import Console

from src.models.audit_models import (
    AccessibilityIssue,
    CheckStatus,
    ElementIssue,
    Finding,
    Impact,
    PerformanceMetrics,
    ProblemArea,
    Severity,
    UXReport,
)
from src.reporters.console_reporter import ConsoleReporter, score_style
from src.reporters.json_reporter import JsonReporter
from src.scoring.threshold_gate import GateResult


@pytest.fixture
def sample_report():
    """Create a sample audit report for testing."""
    issue = ElementIssue(
        selector="#signup",
        x=10,
        y=20,
        width=60,
        height=30,
        description="CTA button is too small (< 80x40px)",
        severity=Severity.HIGH,
        recommendation="Increase button size to at least 80x40px for better usability",
        screenshot_path="screenshots/problem_interactive_elements_cta_buttons_size_0.png",
    )
    return UXReport(
        url="https://example.com/",
        test_date=datetime(2024, 5, 1, 12, 30),
        overall_score=72,
        results=[
            Finding(
                category="Visual Design",
                test="H1 Heading",
                status=CheckStatus.FAIL,
                score=0,
                details="Found 0 H1 tag(s). Recommended: exactly 1",
                severity=Severity.HIGH,
            ),
            Finding(
                category="Navigation",
                test="Mobile Menu",
                status=CheckStatus.WARNING,
                score=7,
                details="No mobile menu button detected",
            ),
            Finding(
                category="SEO",
                test="Page Title",
                status=CheckStatus.PASS,
                score=10,
                details="Title: \"Café Ünïcode\" (12 chars)",
                severity=Severity.LOW,
            ),
        ],
        performance=PerformanceMetrics(load_time=1800, largest_contentful_paint=2100),
        accessibility=[
            AccessibilityIssue(
                type="image-alt",
                severity=Impact.CRITICAL,
                element="img.hero",
                description="Images must have alternate text",
                wcag_level="wcag2a, wcag111",
            )
        ],
        recommendations=[f"Recommendation {i}" for i in range(8)],
        problem_areas=[
            ProblemArea(category="Interactive Elements", test="CTA Buttons Size", issues=[issue])
        ],
    )


class TestJsonReporter:
    """Tests for JSON reporter."""

    def test_generate_report(self, sample_report):
        data = json.loads(JsonReporter().generate_report(sample_report))

        assert data["url"] == "https://example.com/"
        assert data["overall_score"] == 72
        assert data["test_date"].startswith("2024-05-01T12:30")
        assert data["results"][0]["status"] == "fail"
        assert data["results"][0]["severity"] == "high"
        assert data["accessibility"][0]["severity"] == "critical"
        assert data["problem_areas"][0]["issues"][0]["selector"] == "#signup"
        assert data["performance"]["load_time"] == 1800

    def test_unicode_is_preserved(self, sample_report):
        output = JsonReporter().generate_report(sample_report)
        assert "Café Ünïcode" in output

    def test_compact_output(self, sample_report):
        output = JsonReporter(pretty=False).generate_report(sample_report)
        assert "\n" not in output

    def test_generate_summary(self, sample_report):
        data = json.loads(JsonReporter().generate_summary(sample_report))

        assert data["counts"] == {"pass": 1, "fail": 1, "warning": 1, "total": 3}
        assert data["critical_findings"] == [
            "Visual Design - H1 Heading: Found 0 H1 tag(s). Recommended: exactly 1"
        ]
        assert data["accessibility_issues"] == 1

    def test_save_creates_directories(self, sample_report, tmp_path):
        path = JsonReporter().save(sample_report, tmp_path / "nested" / "ux-report.json")

        assert path.exists()
        saved = UXReport.model_validate_json(path.read_text(encoding="utf-8"))
        assert saved.overall_score == 72
        assert saved.results[1].test == "Mobile Menu"


class TestConsoleReporter:
    """Tests for the terminal summary."""

    @pytest.fixture
    def console(self):
        return Console(record=True, width=120)

    @pytest.mark.parametrize("score,style", [(100, "green"), (80, "green"), (79, "yellow"), (60, "yellow"), (59, "red")])
    def test_score_style(self, score, style):
        assert score_style(score) == style

    def test_render(self, sample_report, console):
        ConsoleReporter(console).render(sample_report)
        output = console.export_text()

        assert "72/100" in output
        assert "https://example.com/" in output
        assert "Visual Design - H1 Heading" in output
        assert "5. Recommendation 4" in output
        assert "Recommendation 5" not in output

    def test_render_without_recommendations(self, sample_report, console):
        report = sample_report.model_copy(update={"recommendations": [], "results": []})
        ConsoleReporter(console).render(report)
        output = console.export_text()

        assert "Critical issues" not in output
        assert "Top recommendations" not in output

    def test_render_gate(self, console):
        reporter = ConsoleReporter(console)
        reporter.render_gate(GateResult(passed=True))
        reporter.render_gate(
            GateResult(passed=False, violations=["Overall score 50 is below minimum 80"])
        )
        output = console.export_text()

        assert "Threshold gate passed" in output
        assert "Overall score 50 is below minimum 80" in output
