"""Performance metric capture for the audited page.

This module provides the PerformanceMonitor class which reads Navigation
Timing, Paint Timing, Resource Timing and the buffered largest-contentful-paint
entry from an already loaded page.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from playwright.async_api import Page

from src.models.audit_models import LCPEntry, PerformanceMetrics

logger = logging.getLogger(__name__)

NAVIGATION_TIMING_JS = """
() => {
    const nav = performance.getEntriesByType('navigation')[0];
    const paints = performance.getEntriesByType('paint');
    const paint = (name) => {
        const entry = paints.find(e => e.name === name);
        return entry ? entry.startTime : 0;
    };
    return {
        load_time: nav ? Math.max(0, nav.loadEventEnd - nav.startTime) : 0,
        dom_content_loaded: nav
            ? nav.domContentLoadedEventEnd - nav.domContentLoadedEventStart
            : 0,
        first_paint: paint('first-paint'),
        first_contentful_paint: paint('first-contentful-paint'),
    };
}
"""

RESOURCE_TIMING_JS = """
() => {
    const entries = performance.getEntriesByType('resource');
    return {
        count: entries.length,
        total_size: entries.reduce((sum, r) => sum + (r.transferSize || 0), 0),
    };
}
"""

# Resolves with zero after the timeout instead of hanging.
LCP_JS = """
(timeoutMs) => new Promise((resolve) => {
    try {
        new PerformanceObserver((list) => {
            const entries = list.getEntries();
            const e = entries[entries.length - 1];
            if (!e) return;
            resolve({
                value: e.renderTime || e.loadTime || 0,
                entry: {
                    start_time: e.startTime || 0,
                    render_time: e.renderTime || e.loadTime || 0,
                    load_time: e.loadTime || 0,
                    size: e.size || null,
                    url: e.url || null,
                    element: e.element ? (e.element.outerHTML || e.element.tagName) : null,
                },
            });
        }).observe({ type: 'largest-contentful-paint', buffered: true });
    } catch (err) {
        resolve({ value: 0, entry: null });
    }
    setTimeout(() => resolve({ value: 0, entry: null }), timeoutMs);
})
"""


class PerformanceMonitor:
    """Collect a one-shot performance snapshot.

    PATTERN: Use the Performance Observer API via page.evaluate() with a
    buffered observer so entries recorded before injection are seen.
    """

    LCP_TIMEOUT_MS = 5000

    def __init__(self, lcp_timeout_ms: int = LCP_TIMEOUT_MS):
        self.lcp_timeout_ms = lcp_timeout_ms

    async def collect_metrics(
        self, page: Page, navigation_time_ms: Optional[float] = None
    ) -> PerformanceMetrics:
        """Collect performance metrics from a loaded page.

        Args:
            page: Playwright page instance
            navigation_time_ms: Wall-clock navigation duration measured by the
                caller, used when Navigation Timing reports nothing

        Returns:
            PerformanceMetrics snapshot
        """
        timing = await page.evaluate(NAVIGATION_TIMING_JS)
        resources = await page.evaluate(RESOURCE_TIMING_JS)
        lcp = await self._collect_lcp(page)

        load_time = float(timing.get("load_time") or 0)
        if load_time <= 0 and navigation_time_ms:
            load_time = float(navigation_time_ms)

        entry = lcp.get("entry")
        metrics = PerformanceMetrics(
            load_time=round(load_time),
            dom_content_loaded=timing.get("dom_content_loaded") or 0,
            first_paint=timing.get("first_paint") or 0,
            first_contentful_paint=timing.get("first_contentful_paint") or 0,
            largest_contentful_paint=lcp.get("value") or 0,
            largest_contentful_paint_entry=LCPEntry(**entry) if entry else None,
            total_size=int(resources.get("total_size") or 0),
            request_count=int(resources.get("count") or 0),
        )

        logger.info(
            f"Metrics collected - load: {metrics.load_time:.0f}ms, "
            f"LCP: {metrics.largest_contentful_paint:.0f}ms, "
            f"{metrics.request_count} requests"
        )
        return metrics

    async def _collect_lcp(self, page: Page) -> Dict[str, Any]:
        """Largest contentful paint, or zero when the soft timeout elapses."""
        try:
            result = await asyncio.wait_for(
                page.evaluate(LCP_JS, self.lcp_timeout_ms),
                timeout=self.lcp_timeout_ms / 1000 + 1,
            )
        except asyncio.TimeoutError:
            logger.warning("LCP capture timed out; reporting 0")
            return {"value": 0, "entry": None}
        return result or {"value": 0, "entry": None}
