"""Responsive design probe.

Each configured device gets its own browser context, so the shared audit page
is never resized. Devices are checked one after another and a failure on one
device is recorded as a degraded finding without stopping the rest.
"""

import logging
from typing import List

from playwright.async_api import Page

from src.auditor.session import AuditSession
from src.models.audit_models import (
    CheckStatus,
    DeviceViewport,
    ResponsiveResult,
    Severity,
)
from src.probes.base import BaseProbe

logger = logging.getLogger(__name__)

HORIZONTAL_SCROLL_JS = """
() => document.documentElement.scrollWidth > document.documentElement.clientWidth
"""

SMALL_TEXT_JS = """
() => Array.from(document.querySelectorAll('p, li, span, div')).filter(el => {
    const text = (el.textContent || '').trim();
    return text.length > 10 && parseFloat(window.getComputedStyle(el).fontSize) < 14;
}).length
"""

SMALL_TOUCH_TARGETS_JS = """
() => Array.from(document.querySelectorAll('a, button, input, [role="button"]'))
    .filter(el => {
        const rect = el.getBoundingClientRect();
        return rect.width < 44 || rect.height < 44;
    }).length
"""

SMALL_TEXT_LIMIT = 5


def device_score(issue_count: int) -> int:
    if issue_count == 0:
        return 10
    return 7 if issue_count == 1 else 5


class ResponsiveProbe(BaseProbe):
    name = "Responsive Design"
    category = "Responsive Design"
    toggle = "responsive"

    async def run(self, session: AuditSession) -> None:
        for device in session.config.devices:
            try:
                await self._check_device(session, device)
            except Exception as e:
                logger.warning(f"Responsive check for {device.name} failed: {e}")
                session.add_degraded(
                    self.category,
                    device.name,
                    "Could not fully test responsive design for this device",
                )

    async def _check_device(self, session: AuditSession, device: DeviceViewport) -> None:
        async with session.contexts.isolated_page(
            device, is_mobile=device.is_mobile
        ) as page:
            await session.playwright_manager.navigate(
                page,
                session.config.url,
                timeout=session.config.timeouts.navigation,
            )
            issues = await self.collect_issues(page, device)
            screenshot = await session.evidence.take_full_page_screenshot(
                page, device.slug
            )

        session.responsive_results.append(
            ResponsiveResult(
                device=device.name,
                width=device.width,
                height=device.height,
                issues=issues,
                screenshot=screenshot,
            )
        )
        session.add_result(
            self.category,
            device.name,
            CheckStatus.PASS if not issues else CheckStatus.WARNING,
            device_score(len(issues)),
            ", ".join(issues) if issues else "No issues detected",
            Severity.MEDIUM if len(issues) > 1 else Severity.LOW,
        )

    async def collect_issues(self, page: Page, device: DeviceViewport) -> List[str]:
        """Run the per-device layout checks against an already loaded page."""
        issues = []
        if await page.evaluate(HORIZONTAL_SCROLL_JS):
            issues.append("Horizontal scrollbar detected")

        small_text = await page.evaluate(SMALL_TEXT_JS)
        if small_text > SMALL_TEXT_LIMIT:
            issues.append(f"{small_text} text elements smaller than 14px")

        if device.is_mobile:
            small_targets = await page.evaluate(SMALL_TOUCH_TARGETS_JS)
            if small_targets > 0:
                issues.append(f"{small_targets} touch targets smaller than 44x44")
        return issues
