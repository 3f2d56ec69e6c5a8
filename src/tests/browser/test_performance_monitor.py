"""Tests for PerformanceMonitor."""

import asyncio

import pytest
from unittest.mock import AsyncMock

from src.browser.performance_monitor import PerformanceMonitor


def _evaluate_returning(timing, resources, lcp):
    return AsyncMock(side_effect=[timing, resources, lcp])


class TestCollectMetrics:
    """Tests for metric collection."""

    @pytest.mark.asyncio
    async def test_collects_snapshot(self, mock_page):
        """Test that navigation, resource and LCP data are combined."""
        mock_page.evaluate = _evaluate_returning(
            {"load_time": 1234.4, "dom_content_loaded": 800, "first_paint": 300,
             "first_contentful_paint": 350},
            {"count": 42, "total_size": 1_500_000},
            {"value": 1800, "entry": {"url": "https://example.com/hero.jpg", "size": 5000}},
        )

        metrics = await PerformanceMonitor().collect_metrics(mock_page)

        assert metrics.load_time == 1234
        assert metrics.first_contentful_paint == 350
        assert metrics.largest_contentful_paint == 1800
        assert metrics.largest_contentful_paint_entry.url == "https://example.com/hero.jpg"
        assert metrics.total_size == 1_500_000
        assert metrics.request_count == 42

    @pytest.mark.asyncio
    async def test_falls_back_to_navigation_time(self, mock_page):
        """Test that a zero timing load time uses the measured navigation time."""
        mock_page.evaluate = _evaluate_returning(
            {"load_time": 0}, {"count": 0, "total_size": 0}, {"value": 0, "entry": None}
        )

        metrics = await PerformanceMonitor().collect_metrics(
            mock_page, navigation_time_ms=2100.7
        )

        assert metrics.load_time == 2101
        assert metrics.largest_contentful_paint_entry is None

    @pytest.mark.asyncio
    async def test_lcp_timeout_reports_zero(self, mock_page):
        """Test that a hanging LCP observer resolves to zero."""

        async def hang(*args, **kwargs):
            await asyncio.sleep(10)

        mock_page.evaluate = AsyncMock(side_effect=hang)

        result = await PerformanceMonitor(lcp_timeout_ms=0)._collect_lcp(mock_page)

        assert result == {"value": 0, "entry": None}
