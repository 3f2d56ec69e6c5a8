"""WCAG color contrast math and the color contrast probe."""

import logging
import re
from typing import Any, Dict, List, Tuple

from src.auditor.session import AuditSession
from src.models.audit_models import CheckStatus, Severity
from src.probes.base import SELECTOR_HELPER_JS, BaseProbe

logger = logging.getLogger(__name__)

WCAG_AA_NORMAL_TEXT = 4.5
MAX_SAMPLED_ELEMENTS = 100

_NUMBER = re.compile(r"\d+(?:\.\d+)?")

RGB = Tuple[int, int, int]


def parse_rgb(color: str) -> RGB:
    """Parse ``rgb(...)``/``rgba(...)`` into an (r, g, b) triple.

    Unparseable input yields black, matching the in-browser behaviour.
    """
    values = _NUMBER.findall(color or "")
    if len(values) < 3:
        return (0, 0, 0)
    r, g, b = (int(float(v)) for v in values[:3])
    return (r, g, b)


def _linearize(channel: int) -> float:
    c = channel / 255
    return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(rgb: RGB) -> float:
    r, g, b = (_linearize(c) for c in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(foreground: RGB, background: RGB) -> float:
    """WCAG contrast ratio, from 1.0 (identical) to 21.0 (black on white)."""
    l1 = relative_luminance(foreground)
    l2 = relative_luminance(background)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def is_low_contrast(foreground: str, background: str) -> bool:
    return contrast_ratio(parse_rgb(foreground), parse_rgb(background)) < WCAG_AA_NORMAL_TEXT


SAMPLE_TEXT_COLORS_JS = (
    """
(limit) => {
"""
    + SELECTOR_HELPER_JS
    + """
    const elements = Array.from(document.querySelectorAll(
        'p, a, button, label, h1, h2, h3, h4, h5, h6, li, span'
    )).slice(0, limit);
    const samples = [];
    elements.forEach((el) => {
        const style = window.getComputedStyle(el);
        const text = (el.textContent || '').trim();
        const bg = style.backgroundColor;
        if (text.length > 0 && style.color && bg && bg !== 'rgba(0, 0, 0, 0)' && bg !== 'transparent') {
            samples.push({
                tag: el.tagName,
                selector: selectorOf(el),
                color: style.color,
                background: bg,
                text: text.substring(0, 50),
            });
        }
    });
    return samples;
}
"""
)


def find_contrast_issues(samples: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Samples whose contrast ratio is below 4.5:1, with the ratio attached."""
    issues = []
    for sample in samples:
        ratio = contrast_ratio(
            parse_rgb(sample.get("color", "")), parse_rgb(sample.get("background", ""))
        )
        if ratio < WCAG_AA_NORMAL_TEXT:
            issues.append({**sample, "contrast": round(ratio, 2)})
    return issues


class ColorContrastProbe(BaseProbe):
    """Sample text elements and flag WCAG AA contrast failures."""

    name = "Color Contrast"
    category = "Visual Design"
    toggle = "visual_design"

    async def run(self, session: AuditSession) -> None:
        samples = await session.page.evaluate(SAMPLE_TEXT_COLORS_JS, MAX_SAMPLED_ELEMENTS)
        issues = find_contrast_issues(samples or [])

        recommendations: List[str] = []
        if issues:
            recommendations = [
                "Increase contrast ratio between text and background colors",
                "Use tools like WebAIM Color Contrast Checker to validate WCAG AA compliance (4.5:1)",
                "Consider using darker text on light backgrounds or lighter text on dark backgrounds",
            ]
            for issue in issues[:2]:
                await session.evidence.record_problem_area(
                    session.page,
                    self.category,
                    "Color Contrast",
                    issue["selector"],
                    f"Text has low contrast ratio ({issue['contrast']:.2f}:1, requires 4.5:1)",
                    Severity.HIGH,
                    "Increase contrast ratio to meet WCAG AA standards (4.5:1)",
                )

        count = len(issues)
        session.add_result(
            self.category,
            "Color Contrast (WCAG AA)",
            CheckStatus.PASS if count == 0 else CheckStatus.WARNING,
            max(0, 10 - count * 0.5),
            "All text has sufficient contrast"
            if count == 0
            else f"{count} text elements have low contrast (< 4.5:1)",
            Severity.HIGH if count > 5 else Severity.MEDIUM,
            recommendations=recommendations,
        )
