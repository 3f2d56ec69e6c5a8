"""Audit orchestration.

UXAuditor owns the browser lifecycle of one audit: it launches Chromium,
navigates to the target, runs every enabled probe in a fixed order through
run_probe(), and always releases the browser. The result is a UXReport.

PATTERN: One AuditSession per run; probes never share state outside it.
CRITICAL: Only BrowserLaunchError escapes run_all_tests(). Any other failure
becomes a degraded finding so a partial report is still produced.
"""

import logging
import time
from typing import Awaitable, Callable, List, Optional

from playwright.async_api import BrowserContext, Page

from src.auditor.exceptions import BrowserLaunchError, NavigationError
from src.auditor.session import AuditSession
from src.browser.accessibility_tester import RuleEngine
from src.browser.playwright_integration import DEFAULT_USER_AGENT, PlaywrightManager
from src.config.audit_config import AuditConfig, get_config
from src.models.audit_models import DeviceViewport, UXReport
from src.probes.accessibility import AccessibilityProbe
from src.probes.base import BaseProbe
from src.probes.contrast import ColorContrastProbe
from src.probes.cta import CTAProbe
from src.probes.forms import FormsProbe
from src.probes.interactive import InteractiveElementsProbe
from src.probes.keyboard import KeyboardNavigationProbe
from src.probes.navigation import NavigationProbe
from src.probes.performance import PerformanceProbe
from src.probes.readability import ReadabilityProbe
from src.probes.responsive import ResponsiveProbe
from src.probes.seo import SEOProbe
from src.probes.visual import VisualHierarchyProbe
from src.scoring.scorer import calculate_overall_score, generate_recommendations

logger = logging.getLogger(__name__)

MAIN_VIEWPORT = DeviceViewport(name="Desktop", width=1920, height=1080)


def default_probes(rule_engine: Optional[RuleEngine] = None) -> List[BaseProbe]:
    """Probes in execution order."""
    return [
        PerformanceProbe(),
        VisualHierarchyProbe(),
        ColorContrastProbe(),
        NavigationProbe(),
        ReadabilityProbe(),
        CTAProbe(),
        FormsProbe(),
        InteractiveElementsProbe(),
        KeyboardNavigationProbe(),
        SEOProbe(),
        ResponsiveProbe(),
        AccessibilityProbe(rule_engine),
    ]


class UXAuditor:
    """Run a full UX/UI audit of a single page.

    Example:
        async with UXAuditor(get_config("quick")) as auditor:
            report = await auditor.run_all_tests()
        print(report.overall_score)
    """

    def __init__(
        self,
        config: Optional[AuditConfig] = None,
        rule_engine: Optional[RuleEngine] = None,
        playwright_manager: Optional[PlaywrightManager] = None,
        probes: Optional[List[BaseProbe]] = None,
    ):
        """Initialize the auditor.

        Args:
            config: Run configuration (production profile when omitted)
            rule_engine: Accessibility rule engine (axe-core when omitted)
            playwright_manager: Browser manager, injectable for tests
            probes: Probe sequence override
        """
        self.config = config or get_config()
        self.playwright_manager = playwright_manager or PlaywrightManager()
        self.probes = probes if probes is not None else default_probes(rule_engine)
        self.session = AuditSession(
            self.config, playwright_manager=self.playwright_manager
        )
        self.context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None

    async def __aenter__(self):
        try:
            await self.initialize()
        except BaseException:
            await self.cleanup()
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.cleanup()

    async def initialize(self) -> None:
        """Launch the browser and open the main 1920x1080 page.

        The page gets ``timeouts.default`` as its action timeout.

        Raises:
            BrowserLaunchError: If any part of the browser setup fails
        """
        logger.info("Initializing browser")
        manager = self.playwright_manager
        try:
            await manager.initialize()
            await manager.launch_browser(
                headless=self.config.browser.headless,
                slow_mo=self.config.browser.slow_mo,
            )
            self.context = await manager.create_context(
                viewport=MAIN_VIEWPORT, is_mobile=False, user_agent=DEFAULT_USER_AGENT
            )
            self.page = await manager.create_page(self.context)
            self.page.set_default_timeout(self.config.timeouts.default)
        except BrowserLaunchError:
            raise
        except Exception as e:
            raise BrowserLaunchError(f"Browser setup failed: {e}") from e
        self.session.page = self.page

    async def run_probe(
        self,
        name: str,
        fn: Callable[[], Awaitable[None]],
        category: Optional[str] = None,
    ) -> bool:
        """Run one probe, converting any failure into a degraded finding.

        Args:
            name: Probe name, used as the degraded finding's test name
            fn: Zero-argument coroutine function running the probe
            category: Category for the degraded finding (defaults to ``name``)

        Returns:
            True if the probe completed, False if it was degraded
        """
        logger.info(f"Running probe: {name}")
        try:
            await fn()
            return True
        except Exception as e:
            logger.warning(f"Probe '{name}' failed, continuing: {e}")
            self.session.add_degraded(
                category or name, name, f"Could not complete {name} check: {e}"
            )
            return False

    async def _navigate(self) -> None:
        url = self.config.url
        logger.info(f"Navigating to {url}")
        start = time.perf_counter()
        try:
            await self.playwright_manager.navigate(
                self.page,
                url,
                wait_until="networkidle",
                timeout=self.config.timeouts.navigation,
            )
        except NavigationError as e:
            logger.warning(str(e))
            self.session.add_degraded("Navigation", "Page Load", str(e))
        finally:
            self.session.navigation_time_ms = (time.perf_counter() - start) * 1000

    async def run_all_tests(self) -> UXReport:
        """Navigate to the target and run every enabled probe.

        The browser is always cleaned up before returning.

        Returns:
            The finished UXReport

        Raises:
            BrowserLaunchError: If the browser cannot be started
        """
        logger.info(f"Starting UX audit of {self.config.url}")
        try:
            if self.page is None:
                await self.initialize()
            await self._navigate()

            for probe in self.probes:
                if not probe.enabled(self.session):
                    logger.info(f"Skipping disabled probe: {probe.name}")
                    continue
                await self.run_probe(
                    probe.name,
                    lambda probe=probe: probe.run(self.session),
                    probe.category,
                )

            report = self.generate_report()
            logger.info(f"Audit completed with score {report.overall_score}/100")
            return report
        finally:
            await self.cleanup()

    async def cleanup(self) -> None:
        """Release the browser. Never raises."""
        try:
            await self.playwright_manager.cleanup()
        except Exception as e:
            logger.error(f"Cleanup failed: {e}")
        self.page = None
        self.context = None

    def generate_report(self) -> UXReport:
        """Build the report from the current session state."""
        session = self.session
        return UXReport(
            url=self.config.url,
            overall_score=calculate_overall_score(session.findings),
            results=list(session.findings),
            performance=session.performance,
            accessibility=list(session.accessibility_issues),
            responsive=list(session.responsive_results),
            recommendations=generate_recommendations(
                session.findings,
                session.performance,
                session.accessibility_issues,
                session.responsive_results,
            ),
            problem_areas=session.evidence.problem_areas,
        )
