"""Tests for the performance probe."""

import pytest
from unittest.mock import AsyncMock, Mock

from src.browser.performance_monitor import PerformanceMonitor
from src.models.audit_models import CheckStatus, LCPEntry, PerformanceMetrics, Severity
from src.probes.performance import (
    PerformanceProbe,
    classify_lcp,
    classify_load_time,
    classify_page_size,
)


def _monitor(metrics):
    monitor = Mock(spec=PerformanceMonitor)
    monitor.collect_metrics = AsyncMock(return_value=metrics)
    return monitor


class TestClassification:
    """Tests for threshold classification."""

    @pytest.mark.parametrize(
        "load_time,expected",
        [
            (2999, (CheckStatus.PASS, 10)),
            (3000, (CheckStatus.WARNING, 7)),
            (4999, (CheckStatus.WARNING, 7)),
            (5000, (CheckStatus.FAIL, 4)),
            (7999, (CheckStatus.FAIL, 4)),
            (8000, (CheckStatus.FAIL, 1)),
        ],
    )
    def test_load_time_boundaries(self, load_time, expected):
        assert classify_load_time(load_time) == expected

    @pytest.mark.parametrize(
        "lcp,expected",
        [
            (2499, (CheckStatus.PASS, 10)),
            (2500, (CheckStatus.WARNING, 7)),
            (4000, (CheckStatus.FAIL, 4)),
        ],
    )
    def test_lcp_boundaries(self, lcp, expected):
        assert classify_lcp(lcp) == expected

    def test_page_size_never_fails(self):
        assert classify_page_size(2_999_999) == (CheckStatus.PASS, 10)
        assert classify_page_size(3_000_000) == (CheckStatus.WARNING, 7)
        assert classify_page_size(50_000_000) == (CheckStatus.WARNING, 4)


class TestPerformanceProbe:
    """Tests for the probe."""

    @pytest.mark.asyncio
    async def test_fast_page(self, session):
        metrics = PerformanceMetrics(
            load_time=1200, largest_contentful_paint=1800, total_size=900_000, request_count=20
        )

        await PerformanceProbe(monitor=_monitor(metrics)).run(session)

        assert session.performance is metrics
        assert [f.test for f in session.findings] == [
            "Page Load Time",
            "Largest Contentful Paint",
            "Total Page Size",
        ]
        assert all(f.status == CheckStatus.PASS for f in session.findings)
        assert session.findings[2].severity == Severity.LOW

    @pytest.mark.asyncio
    async def test_slow_page_is_high_severity(self, session):
        metrics = PerformanceMetrics(
            load_time=6000,
            largest_contentful_paint=4500,
            largest_contentful_paint_entry=LCPEntry(url="https://example.com/hero.png"),
            total_size=6_000_000,
        )

        await PerformanceProbe(monitor=_monitor(metrics)).run(session)

        load, lcp, size = session.findings
        assert (load.status, load.score, load.severity) == (CheckStatus.FAIL, 4, Severity.HIGH)
        assert (lcp.status, lcp.score, lcp.severity) == (CheckStatus.FAIL, 4, Severity.HIGH)
        assert (size.status, size.score) == (CheckStatus.WARNING, 4)

    @pytest.mark.asyncio
    async def test_passes_navigation_time_to_monitor(self, session):
        monitor = _monitor(PerformanceMetrics())
        session.navigation_time_ms = 1500.0

        await PerformanceProbe(monitor=monitor).run(session)

        monitor.collect_metrics.assert_called_once_with(
            session.page, navigation_time_ms=1500.0
        )
