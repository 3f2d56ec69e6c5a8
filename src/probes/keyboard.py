"""Static keyboard navigation probe.

Counts focusable elements, elements whose focus style is suppressed, and
positive tabindex values. The live Tab simulation runs in the accessibility
probe.
"""

from src.auditor.session import AuditSession
from src.models.audit_models import CheckStatus, Severity
from src.probes.base import BaseProbe

KEYBOARD_ANALYSIS_JS = """
() => {
    const focusable = Array.from(document.querySelectorAll(
        'a, button, input, textarea, select, [tabindex]:not([tabindex="-1"])'
    ));
    return {
        total_focusable: focusable.length,
        without_visible_focus: focusable.filter(el => {
            const style = window.getComputedStyle(el);
            return style.outline === 'none' && !style.boxShadow.includes('rgb');
        }).length,
        positive_tabindex: focusable.filter(el => {
            const tabindex = el.getAttribute('tabindex');
            return tabindex && parseInt(tabindex, 10) > 0;
        }).length,
    };
}
"""


class KeyboardNavigationProbe(BaseProbe):
    name = "Keyboard Navigation"
    category = "Accessibility"
    toggle = "keyboard"

    async def run(self, session: AuditSession) -> None:
        analysis = await session.page.evaluate(KEYBOARD_ANALYSIS_JS)
        focusable = analysis["total_focusable"]
        no_focus_style = analysis["without_visible_focus"]
        positive_tabindex = analysis["positive_tabindex"]

        recommendations = []
        if no_focus_style > 0:
            recommendations += [
                "Add visible focus indicators to all interactive elements",
                "Use CSS :focus or :focus-visible pseudo-classes with clear styling "
                "(outline, box-shadow, or border)",
                "Ensure focus styles have sufficient contrast to be visible",
            ]
        if positive_tabindex > 0:
            recommendations += [
                "Avoid using positive tabindex values; let natural HTML order "
                "define tab sequence",
                'Use tabindex="0" for elements that need focus but are not '
                "naturally focusable",
            ]

        session.add_result(
            self.category,
            "Keyboard Navigation",
            CheckStatus.PASS if focusable > 3 else CheckStatus.WARNING,
            min(10, focusable),
            f"{focusable} focusable elements, {no_focus_style} without visible "
            f"focus, {positive_tabindex} with positive tabindex",
            Severity.HIGH if no_focus_style > 5 else Severity.MEDIUM,
            recommendations=recommendations,
        )
