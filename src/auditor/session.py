"""Session-scoped audit state.

An AuditSession exclusively owns the findings, metrics, accessibility issues,
responsive results and element evidence of one run. Probes receive it by
reference and append to it; nothing else shares it.
"""

import logging
from typing import List, Optional

from playwright.async_api import Page

from src.browser.browser_manager import BrowserContextManager
from src.browser.evidence_recorder import EvidenceRecorder
from src.browser.playwright_integration import PlaywrightManager
from src.config.audit_config import AuditConfig
from src.models.audit_models import (
    AccessibilityIssue,
    CheckStatus,
    ElementIssue,
    Finding,
    PerformanceMetrics,
    ResponsiveResult,
    Severity,
)

logger = logging.getLogger(__name__)


class AuditSession:
    """Mutable result state for a single audit run.

    Attributes:
        config: Run configuration
        page: Shared page the probes inspect
        findings: Ordered findings (insertion order kept for reports)
        performance: Snapshot captured by the performance probe
        accessibility_issues: axe-core violations
        responsive_results: One entry per device checked
        evidence: Element-level problem areas
    """

    def __init__(
        self,
        config: AuditConfig,
        page: Optional[Page] = None,
        playwright_manager: Optional[PlaywrightManager] = None,
        evidence: Optional[EvidenceRecorder] = None,
    ):
        self.config = config
        self.page = page
        self.playwright_manager = playwright_manager
        self.evidence = evidence or EvidenceRecorder(config.screenshots_path)
        self.navigation_time_ms: Optional[float] = None

        self.findings: List[Finding] = []
        self.performance = PerformanceMetrics()
        self.accessibility_issues: List[AccessibilityIssue] = []
        self.responsive_results: List[ResponsiveResult] = []

    @property
    def contexts(self) -> BrowserContextManager:
        """Factory for isolated contexts on the session's browser."""
        if self.playwright_manager is None:
            raise RuntimeError("Session has no browser attached")
        return BrowserContextManager(self.playwright_manager)

    def add_result(
        self,
        category: str,
        test: str,
        status: CheckStatus,
        score: float,
        details: str,
        severity: Severity = Severity.MEDIUM,
        elements: Optional[List[ElementIssue]] = None,
        recommendations: Optional[List[str]] = None,
    ) -> Finding:
        """Append a finding and return it."""
        finding = Finding(
            category=category,
            test=test,
            status=status,
            score=score,
            details=details,
            severity=severity,
            elements=elements or None,
            recommendations=recommendations or None,
        )
        self.findings.append(finding)
        logger.debug(
            f"[{category}] {test}: {status.value} ({score:g}/10) - {details}"
        )
        return finding

    def add_degraded(
        self, category: str, test: str, details: str, score: float = 5
    ) -> Finding:
        """Append a low severity warning documenting a check that could not run."""
        return self.add_result(
            category, test, CheckStatus.WARNING, score, details, Severity.LOW
        )
