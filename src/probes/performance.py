"""Performance probe: load time, LCP and page weight."""

import logging
from typing import Optional, Tuple

from src.auditor.session import AuditSession
from src.browser.performance_monitor import PerformanceMonitor
from src.models.audit_models import CheckStatus, Severity
from src.probes.base import BaseProbe

logger = logging.getLogger(__name__)

MB = 1024 * 1024


def classify_load_time(load_time_ms: float) -> Tuple[CheckStatus, int]:
    """``<3000`` pass/10, ``<5000`` warning/7, ``<8000`` fail/4, else fail/1."""
    if load_time_ms < 3000:
        return CheckStatus.PASS, 10
    if load_time_ms < 5000:
        return CheckStatus.WARNING, 7
    if load_time_ms < 8000:
        return CheckStatus.FAIL, 4
    return CheckStatus.FAIL, 1


def classify_lcp(lcp_ms: float) -> Tuple[CheckStatus, int]:
    """``<2500`` pass/10, ``<4000`` warning/7, else fail/4."""
    if lcp_ms < 2500:
        return CheckStatus.PASS, 10
    if lcp_ms < 4000:
        return CheckStatus.WARNING, 7
    return CheckStatus.FAIL, 4


def classify_page_size(total_bytes: int) -> Tuple[CheckStatus, int]:
    """``<3MB`` pass/10, ``<5MB`` warning/7, else warning/4."""
    if total_bytes < 3_000_000:
        return CheckStatus.PASS, 10
    if total_bytes < 5_000_000:
        return CheckStatus.WARNING, 7
    return CheckStatus.WARNING, 4


class PerformanceProbe(BaseProbe):
    """Capture the performance snapshot and score it."""

    name = "Performance"
    category = "Performance"
    toggle = "performance"

    def __init__(self, monitor: Optional[PerformanceMonitor] = None):
        self.monitor = monitor or PerformanceMonitor()

    async def run(self, session: AuditSession) -> None:
        metrics = await self.monitor.collect_metrics(
            session.page, navigation_time_ms=session.navigation_time_ms
        )
        session.performance = metrics

        load_time = metrics.load_time
        status, score = classify_load_time(load_time)
        session.add_result(
            self.category,
            "Page Load Time",
            status,
            score,
            f"Page loaded in {load_time:.0f}ms. Recommended: < 3000ms",
            Severity.HIGH if load_time > 5000 else Severity.MEDIUM,
        )

        lcp = metrics.largest_contentful_paint
        status, score = classify_lcp(lcp)
        session.add_result(
            self.category,
            "Largest Contentful Paint",
            status,
            score,
            f"LCP: {round(lcp)}ms. Recommended: < 2500ms",
            Severity.HIGH if lcp > 4000 else Severity.MEDIUM,
        )

        status, score = classify_page_size(metrics.total_size)
        session.add_result(
            self.category,
            "Total Page Size",
            status,
            score,
            f"Total size: {metrics.total_size / MB:.2f}MB, "
            f"{metrics.request_count} requests",
            Severity.LOW,
        )
