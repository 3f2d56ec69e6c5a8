"""Interactive element probe: buttons, links and touch target sizes."""

from src.auditor.session import AuditSession
from src.models.audit_models import CheckStatus, Severity
from src.probes.base import BaseProbe

MIN_TOUCH_TARGET_PX = 44

INTERACTIVE_ANALYSIS_JS = """
(minSize) => {
    const buttons = Array.from(document.querySelectorAll(
        'button, [role="button"], input[type="submit"], input[type="button"]'
    ));
    const links = Array.from(document.querySelectorAll('a'));
    const external = links.filter(a => {
        const href = a.getAttribute('href') || '';
        return href.startsWith('http') && !href.includes(window.location.hostname);
    });
    const smallTargets = buttons.filter(btn => {
        const rect = btn.getBoundingClientRect();
        return rect.width < minSize || rect.height < minSize;
    });
    return {
        button_count: buttons.length,
        link_count: links.length,
        external_link_count: external.length,
        small_touch_target_count: smallTargets.length,
    };
}
"""


def touch_target_score(small_targets: int) -> int:
    """``0`` → 10, ``<3`` → 7, else 4."""
    if small_targets == 0:
        return 10
    return 7 if small_targets < 3 else 4


class InteractiveElementsProbe(BaseProbe):
    name = "Interactive Elements"
    category = "Interactive Elements"
    toggle = "interactive"

    async def run(self, session: AuditSession) -> None:
        analysis = await session.page.evaluate(
            INTERACTIVE_ANALYSIS_JS, MIN_TOUCH_TARGET_PX
        )

        buttons = analysis["button_count"]
        session.add_result(
            self.category,
            "Buttons",
            CheckStatus.PASS if buttons > 0 else CheckStatus.WARNING,
            10 if buttons > 0 else 7,
            f"Found {buttons} buttons",
            Severity.LOW,
        )

        links = analysis["link_count"]
        session.add_result(
            self.category,
            "Links",
            CheckStatus.PASS if links > 0 else CheckStatus.WARNING,
            10 if links > 0 else 7,
            f"Found {links} links ({analysis['external_link_count']} external)",
            Severity.LOW,
        )

        small = analysis["small_touch_target_count"]
        session.add_result(
            self.category,
            "Touch Target Size",
            CheckStatus.PASS if small == 0 else CheckStatus.WARNING,
            touch_target_score(small),
            f"{small} buttons/links smaller than "
            f"{MIN_TOUCH_TARGET_PX}x{MIN_TOUCH_TARGET_PX}px",
            Severity.HIGH if small > 3 else Severity.MEDIUM,
        )
