"""Tests for audit data models."""

import pytest
from pydantic import ValidationError

from src.models.audit_models import (
    AccessibilityIssue,
    CheckStatus,
    DeviceViewport,
    Finding,
    Impact,
    Severity,
    UXReport,
)


def finding(status, severity, test="Check"):
    return Finding(category="Cat", test=test, status=status, score=5, details="d", severity=severity)


class TestDeviceViewport:
    @pytest.mark.parametrize(
        "name,width,mobile",
        [
            ("Mobile iPhone 12", 390, True),
            ("Mobile Samsung S21", 360, True),
            ("android phone", 1080, True),
            ("Narrow", 400, True),
            ("Tablet iPad", 768, False),
            ("Desktop 1920x1080", 1920, False),
        ],
    )
    def test_is_mobile(self, name, width, mobile):
        assert DeviceViewport(name=name, width=width, height=800).is_mobile is mobile

    def test_slug(self):
        assert DeviceViewport(name="Mobile  iPhone 12", width=390, height=844).slug == "Mobile_iPhone_12"

    def test_dimensions_must_be_positive(self):
        with pytest.raises(ValidationError):
            DeviceViewport(name="Broken", width=0, height=10)


class TestFinding:
    def test_frozen(self):
        f = finding(CheckStatus.PASS, Severity.LOW)
        with pytest.raises(ValidationError):
            f.score = 3

    @pytest.mark.parametrize("score", [-1, 10.5])
    def test_score_bounds(self, score):
        with pytest.raises(ValidationError):
            Finding(category="C", test="T", status=CheckStatus.PASS, score=score, details="d")

    def test_defaults(self):
        f = Finding(category="C", test="T", status=CheckStatus.WARNING, score=6.5, details="d")
        assert f.severity == Severity.MEDIUM
        assert f.elements is None
        assert f.recommendations is None


class TestUXReport:
    def test_summary(self):
        report = UXReport(
            url="https://example.com/",
            overall_score=50,
            results=[
                finding(CheckStatus.PASS, Severity.LOW),
                finding(CheckStatus.FAIL, Severity.HIGH),
                finding(CheckStatus.WARNING, Severity.MEDIUM),
                finding(CheckStatus.FAIL, Severity.MEDIUM),
            ],
        )
        assert report.summary() == {"pass": 1, "fail": 2, "warning": 1, "total": 4}

    def test_critical_findings_are_high_failures_in_order(self):
        results = [finding(CheckStatus.FAIL, Severity.HIGH, test=f"T{i}") for i in range(7)]
        results.insert(1, finding(CheckStatus.WARNING, Severity.HIGH, test="warn"))
        report = UXReport(url="u", overall_score=0, results=results)

        assert [f.test for f in report.critical_findings()] == ["T0", "T1", "T2", "T3", "T4"]

    def test_count_accessibility(self):
        issues = [
            AccessibilityIssue(type="a", severity=impact, element="e", description="d")
            for impact in (Impact.CRITICAL, Impact.SERIOUS, Impact.SERIOUS, Impact.MINOR)
        ]
        report = UXReport(url="u", overall_score=0, accessibility=issues)

        assert report.count_accessibility(Impact.SERIOUS) == 2
        assert report.count_accessibility(Impact.CRITICAL, Impact.SERIOUS) == 3

    def test_score_bounds(self):
        with pytest.raises(ValidationError):
            UXReport(url="u", overall_score=101)
