"""Readability probe: body font size, line height and horizontal overflow."""

from src.auditor.session import AuditSession
from src.models.audit_models import CheckStatus, Severity
from src.probes.base import BaseProbe

TEXT_METRICS_JS = """
() => {
    const candidates = Array.from(document.querySelectorAll('p, li, td, div'));
    const textElements = candidates.filter(el => {
        const text = (el.textContent || '').trim();
        return text.length > 20 && !el.querySelector('p, li');
    });
    const fontSizes = [];
    const lineHeights = [];
    textElements.forEach(el => {
        const style = window.getComputedStyle(el);
        const size = parseFloat(style.fontSize);
        fontSizes.push(size);
        lineHeights.push(style.lineHeight === 'normal' ? 1.5 : parseFloat(style.lineHeight) / size);
    });
    const avg = (xs) => xs.length ? xs.reduce((a, b) => a + b, 0) / xs.length : 0;
    return {
        min_font_size: fontSizes.length ? Math.min(...fontSizes) : null,
        avg_font_size: avg(fontSizes),
        avg_line_height: avg(lineHeights),
        text_elements: textElements.length,
    };
}
"""

OVERFLOW_COUNT_JS = """
() => Array.from(document.querySelectorAll('*'))
    .filter(el => el.scrollWidth > el.clientWidth).length
"""


class ReadabilityProbe(BaseProbe):
    name = "Readability"
    category = "Readability"
    toggle = "readability"

    async def run(self, session: AuditSession) -> None:
        metrics = await session.page.evaluate(TEXT_METRICS_JS)

        # No body text at all: nothing is too small.
        min_font = metrics.get("min_font_size")
        if min_font is None:
            min_font = 16.0
        if min_font >= 16:
            status, score = CheckStatus.PASS, 10
        elif min_font >= 14:
            status, score = CheckStatus.WARNING, 7
        else:
            status, score = CheckStatus.WARNING, 4
        session.add_result(
            self.category,
            "Font Size",
            status,
            score,
            f"Minimum font size: {min_font:.1f}px. Recommended: >= 16px",
            Severity.HIGH if min_font < 14 else Severity.MEDIUM,
        )

        line_height = metrics.get("avg_line_height") or 0
        if line_height >= 1.5:
            score = 10
        elif line_height >= 1.3:
            score = 7
        else:
            score = 4
        session.add_result(
            self.category,
            "Line Height",
            CheckStatus.PASS if line_height >= 1.5 else CheckStatus.WARNING,
            score,
            f"Average line height: {line_height:.2f}. Recommended: >= 1.5",
            Severity.LOW,
        )

        overflow = await session.page.evaluate(OVERFLOW_COUNT_JS)
        session.add_result(
            self.category,
            "Text Overflow",
            CheckStatus.PASS if overflow == 0 else CheckStatus.WARNING,
            10 if overflow == 0 else 7,
            f"{overflow} elements with horizontal overflow detected"
            if overflow
            else "No overflow detected",
        )
