"""Call-to-action probe: keyword-matched buttons, their size and visibility."""

import logging
from typing import List

from src.auditor.session import AuditSession
from src.models.audit_models import CheckStatus, ElementIssue, Severity
from src.probes.base import SELECTOR_HELPER_JS, BaseProbe

logger = logging.getLogger(__name__)

CTA_KEYWORDS = [
    "subscribe",
    "contact",
    "get started",
    "learn more",
    "download",
    "buy",
    "register",
    "sign up",
    "join",
    "submit",
]

CTA_ANALYSIS_JS = (
    """
(keywords) => {
"""
    + SELECTOR_HELPER_JS
    + """
    const buttons = Array.from(document.querySelectorAll(
        'button, a[role="button"], input[type="submit"]'
    ));
    const ctas = [];
    buttons.forEach((btn) => {
        const text = (btn.textContent || btn.value || '').toLowerCase();
        if (keywords.some(kw => text.includes(kw))) ctas.push({ btn });
    });
    const small = ctas.filter(({ btn }) => {
        const rect = btn.getBoundingClientRect();
        return rect.width < 80 || rect.height < 40;
    });
    const notVisible = ctas.filter(({ btn }) => {
        const rect = btn.getBoundingClientRect();
        return rect.top < 0 || rect.top > window.innerHeight;
    });
    return {
        total: ctas.length,
        small: small.length,
        small_selectors: small.slice(0, 1).map(({ btn }) => selectorOf(btn)),
        not_visible: notVisible.length,
        with_aria_label: ctas.filter(({ btn }) => btn.getAttribute('aria-label')).length,
    };
}
"""
)


def cta_score(total: int, not_visible: int) -> int:
    """10 when every CTA is above the fold, 7 when some are not, 5 with none."""
    if total == 0:
        return 5
    return 10 if not_visible == 0 else 7


class CTAProbe(BaseProbe):
    name = "Call-to-Action Buttons"
    category = "Interactive Elements"
    toggle = "interactive"

    async def run(self, session: AuditSession) -> None:
        page = session.page
        analysis = await page.evaluate(CTA_ANALYSIS_JS, CTA_KEYWORDS)
        total = analysis["total"]
        small = analysis["small"]
        not_visible = analysis["not_visible"]

        elements: List[ElementIssue] = []
        for selector in analysis["small_selectors"]:
            issue = await session.evidence.record_problem_area(
                page,
                self.category,
                "CTA Buttons Size",
                selector,
                "CTA button is too small (< 80x40px)",
                Severity.HIGH,
                "Increase button size to at least 80x40px for better usability",
            )
            if issue is not None:
                elements.append(issue)

        recommendations = []
        if small > 0:
            recommendations.append(
                "Increase CTA button size to at least 80x40px for better touch targets"
            )
            recommendations.append(
                "Ensure buttons are easily clickable on mobile devices "
                "(minimum 44x44px recommended)"
            )
        if not_visible > 0:
            recommendations.append(
                "Move CTA buttons above the fold to improve visibility"
            )
            recommendations.append(
                "Ensure primary CTAs are visible without scrolling on initial page load"
            )
        if analysis.get("with_aria_label", 0) < total:
            recommendations.append(
                "Add proper aria-label attributes to all CTA buttons for accessibility"
            )

        session.add_result(
            self.category,
            "Call-to-Action Buttons",
            CheckStatus.PASS if total > not_visible else CheckStatus.WARNING,
            cta_score(total, not_visible),
            f"Found {total} CTA buttons, {small} are too small, "
            f"{not_visible} not visible above fold",
            Severity.HIGH if small > 2 else Severity.MEDIUM,
            elements=elements,
            recommendations=recommendations,
        )
