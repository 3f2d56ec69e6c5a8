"""SEO basics probe: meta description, title, canonical and structured data."""

from src.auditor.session import AuditSession
from src.models.audit_models import CheckStatus, Severity
from src.probes.base import BaseProbe

SEO_ANALYSIS_JS = """
() => {
    const description = document.querySelector('meta[name="description"]');
    return {
        has_meta_description: !!description,
        meta_description: description ? (description.getAttribute('content') || '') : '',
        has_canonical: !!document.querySelector('link[rel="canonical"]'),
        has_og_tags: !!document.querySelector('meta[property^="og:"]'),
        has_structured_data: !!document.querySelector('script[type="application/ld+json"]'),
        title: document.title || '',
    };
}
"""


def description_score(has_description: bool, length: int) -> int:
    return 10 if has_description and 120 <= length <= 160 else 7


def title_score(length: int) -> int:
    return 10 if 30 <= length <= 60 else 7


class SEOProbe(BaseProbe):
    name = "SEO"
    category = "SEO"
    toggle = "seo"

    async def run(self, session: AuditSession) -> None:
        analysis = await session.page.evaluate(SEO_ANALYSIS_JS)

        has_description = analysis["has_meta_description"]
        description_length = len(analysis["meta_description"])
        recommendations = []
        if not has_description:
            recommendations.append("Add a meta description tag in the <head> section")
        if not 120 <= description_length <= 160:
            recommendations.append(
                "Keep meta description between 120-160 characters for optimal "
                "display in search results"
            )
        session.add_result(
            self.category,
            "Meta Description",
            CheckStatus.PASS if has_description else CheckStatus.FAIL,
            description_score(has_description, description_length),
            f"Found ({description_length} chars)"
            if has_description
            else "Missing meta description",
            Severity.LOW if has_description else Severity.HIGH,
            recommendations=recommendations,
        )

        title = analysis["title"]
        recommendations = []
        if not title:
            recommendations.append("Add a meaningful page title in the <head> section")
        if not 30 <= len(title) <= 60:
            recommendations.append(
                "Keep page title between 30-60 characters for optimal search "
                "result display"
            )
        session.add_result(
            self.category,
            "Page Title",
            CheckStatus.PASS if title else CheckStatus.FAIL,
            title_score(len(title)),
            f'"{title[:50]}..." ({len(title)} chars)',
            Severity.LOW,
            recommendations=recommendations,
        )

        has_canonical = analysis["has_canonical"]
        session.add_result(
            self.category,
            "Canonical Tag",
            CheckStatus.PASS if has_canonical else CheckStatus.WARNING,
            10 if has_canonical else 7,
            "Canonical tag present" if has_canonical else "No canonical tag found",
            Severity.LOW,
            recommendations=None
            if has_canonical
            else ["Add a canonical tag to prevent duplicate content issues"],
        )

        has_structured = analysis["has_structured_data"]
        session.add_result(
            self.category,
            "Structured Data",
            CheckStatus.PASS if has_structured else CheckStatus.WARNING,
            10 if has_structured else 5,
            "JSON-LD structured data found"
            if has_structured
            else "No structured data detected",
            Severity.MEDIUM,
            recommendations=None
            if has_structured
            else [
                "Add JSON-LD structured data (schema.org) to help search engines "
                "understand your content"
            ],
        )
