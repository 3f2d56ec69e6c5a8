"""Visual hierarchy probe: H1, heading structure and image alt text."""

import logging

from src.auditor.session import AuditSession
from src.models.audit_models import CheckStatus, Severity
from src.probes.base import SELECTOR_HELPER_JS, BaseProbe

logger = logging.getLogger(__name__)

HEADING_COUNTS_JS = """
() => ['h1', 'h2', 'h3', 'h4', 'h5', 'h6'].map(tag => ({
    tag,
    count: document.querySelectorAll(tag).length,
}))
"""

IMAGE_ALT_JS = (
    """
() => {
"""
    + SELECTOR_HELPER_JS
    + """
    const imgs = Array.from(document.querySelectorAll('img'));
    const missing = [];
    imgs.forEach((img) => {
        if (!img.alt || img.alt.trim() === '') missing.push(selectorOf(img));
    });
    return {
        total: imgs.length,
        without_alt: missing.length,
        missing_alt_selectors: missing.slice(0, 3),
    };
}
"""
)


def alt_text_score(missing: int) -> int:
    """Two points off per image without alt text."""
    return max(0, 10 - missing * 2)


class VisualHierarchyProbe(BaseProbe):
    name = "Visual Hierarchy"
    category = "Visual Design"
    toggle = "visual_design"

    async def run(self, session: AuditSession) -> None:
        page = session.page

        h1_count = await page.locator("h1").count()
        session.add_result(
            self.category,
            "H1 Heading",
            CheckStatus.PASS if h1_count == 1 else CheckStatus.FAIL,
            10 if h1_count == 1 else 0,
            f"Found {h1_count} H1 tag(s). Recommended: exactly 1",
            Severity.HIGH if h1_count == 0 else Severity.MEDIUM,
        )

        headings = await page.evaluate(HEADING_COUNTS_JS)
        counts = {h["tag"]: h["count"] for h in headings}
        proper = counts.get("h1", 0) > 0 and counts.get("h2", 0) > 0
        session.add_result(
            self.category,
            "Heading Hierarchy",
            CheckStatus.PASS if proper else CheckStatus.WARNING,
            10 if proper else 6,
            "Heading structure: "
            + ", ".join(f"{h['tag']}:{h['count']}" for h in headings),
            Severity.MEDIUM,
        )

        images = await page.evaluate(IMAGE_ALT_JS)
        missing = images["without_alt"]
        for selector in images["missing_alt_selectors"]:
            await session.evidence.record_problem_area(
                page,
                self.category,
                "Image Alt Text",
                selector,
                "Image missing alt text - impacts accessibility",
                Severity.HIGH,
                "Add descriptive alt text to all images for better accessibility",
            )

        session.add_result(
            self.category,
            "Image Alt Text",
            CheckStatus.PASS if missing == 0 else CheckStatus.FAIL,
            alt_text_score(missing),
            f"{missing} out of {images['total']} images missing alt text",
            Severity.HIGH if missing > 0 else Severity.LOW,
        )
