"""Overall score and prioritized recommendations.

Both functions are pure: the same findings always give the same score and the
same recommendation list.
"""

import logging
import math
from typing import List, Sequence

from src.models.audit_models import (
    AccessibilityIssue,
    CheckStatus,
    Finding,
    Impact,
    PerformanceMetrics,
    ResponsiveResult,
    Severity,
)

logger = logging.getLogger(__name__)

MAX_FINDING_SCORE = 10

BEST_PRACTICES = [
    "📊 Consider implementing user analytics to track real user behavior",
    "🔍 Conduct user testing with real users to validate these findings",
    "✅ Create a prioritized action plan based on severity and business impact",
]


def calculate_overall_score(findings: Sequence[Finding]) -> int:
    """Normalize finding scores to a 0-100 integer.

    Every finding weighs the same and halves round up. An empty list scores 0.

    Args:
        findings: Findings with scores in [0, 10]

    Returns:
        ``floor(100 * sum(scores) / (10 * len(findings)) + 0.5)``
    """
    if not findings:
        return 0
    total = sum(f.score for f in findings)
    return math.floor(total / (len(findings) * MAX_FINDING_SCORE) * 100 + 0.5)


def _failing(findings: Sequence[Finding], severity: Severity) -> List[Finding]:
    return [
        f for f in findings if f.severity == severity and f.status == CheckStatus.FAIL
    ]


def generate_recommendations(
    findings: Sequence[Finding],
    performance: PerformanceMetrics,
    accessibility: Sequence[AccessibilityIssue],
    responsive: Sequence[ResponsiveResult],
) -> List[str]:
    """Build the ordered recommendation list for a report.

    Order: high priority failures (top 3 quoted), load time, LCP and the LCP
    resource, missing alt text, responsive devices, critical accessibility
    issues, medium priority backlog, then the fixed best practices.
    """
    recommendations: List[str] = []

    high = _failing(findings, Severity.HIGH)
    if high:
        recommendations.append(
            f"🔴 HIGH PRIORITY: Found {len(high)} critical issues that need "
            "immediate attention"
        )
        for finding in high[:3]:
            recommendations.append(
                f"   • {finding.category} - {finding.test}: {finding.details}"
            )

    if performance.load_time > 3000:
        recommendations.append(
            "⚡ Optimize page load time by compressing images, minifying CSS/JS, "
            "and enabling caching"
        )
    if performance.largest_contentful_paint > 2500:
        recommendations.append(
            "⚡ Improve Largest Contentful Paint (LCP) by optimizing above-the-fold "
            "content"
        )
    entry = performance.largest_contentful_paint_entry
    if entry is not None and entry.url:
        recommendations.append(
            f"⚡ Consider optimizing LCP resource: {entry.url} (compress/convert to "
            "AVIF/WebP, resize to display size, or preload if it is the hero image)"
        )

    if any(
        f.test == "Image Alt Text" and f.status == CheckStatus.FAIL for f in findings
    ):
        recommendations.append(
            "♿ Add descriptive alt text to all images for better accessibility"
        )

    devices = [r.device for r in responsive if r.issues]
    if devices:
        recommendations.append(
            f"📱 Fix responsive design issues on {', '.join(devices)}"
        )

    critical = [
        i for i in accessibility if i.severity in (Impact.CRITICAL, Impact.SERIOUS)
    ]
    if critical:
        recommendations.append(
            f"♿ Address {len(critical)} critical accessibility issues for WCAG "
            "compliance"
        )

    medium = _failing(findings, Severity.MEDIUM)
    if len(medium) > 5:
        recommendations.append(
            f"🟡 MEDIUM PRIORITY: {len(medium)} issues that should be addressed soon"
        )

    recommendations.extend(BEST_PRACTICES)
    logger.debug(f"Generated {len(recommendations)} recommendations")
    return recommendations
