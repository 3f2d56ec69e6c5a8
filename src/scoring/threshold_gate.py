"""CI threshold gate for audit reports.

The audit itself never fails a build; the gate is applied on top of a
finished report by the CLI (``--gate``) or by a CI job.
"""

import logging
from typing import List

from pydantic import BaseModel, Field

from src.config.audit_config import ScoreThresholds
from src.models.audit_models import Impact, UXReport

logger = logging.getLogger(__name__)


class GateResult(BaseModel):
    """Outcome of a gate evaluation."""

    passed: bool
    violations: List[str] = Field(default_factory=list)


class ThresholdGate:
    """Check a UXReport against minimum score and maximum budget thresholds.

    Example:
        gate = ThresholdGate(config.thresholds)
        result = gate.evaluate(report)
        if not result.passed:
            print("\\n".join(result.violations))
    """

    def __init__(self, thresholds: ScoreThresholds):
        self.thresholds = thresholds

    def evaluate(self, report: UXReport) -> GateResult:
        """Evaluate every threshold and collect the violated ones.

        Args:
            report: Finished audit report

        Returns:
            GateResult with ``passed`` and human readable violations
        """
        t = self.thresholds
        violations: List[str] = []

        if report.overall_score < t.overall_score:
            violations.append(
                f"Overall score {report.overall_score} is below minimum {t.overall_score}"
            )

        load_time = report.performance.load_time
        if load_time > t.load_time:
            violations.append(
                f"Load time {load_time:.0f}ms exceeds maximum {t.load_time}ms"
            )

        lcp = report.performance.largest_contentful_paint
        if lcp > t.lcp:
            violations.append(f"LCP {lcp:.0f}ms exceeds maximum {t.lcp}ms")

        critical = report.count_accessibility(Impact.CRITICAL)
        if critical > t.accessibility.max_critical:
            violations.append(
                f"{critical} critical accessibility violations "
                f"(max {t.accessibility.max_critical})"
            )

        serious = report.count_accessibility(Impact.SERIOUS)
        if serious > t.accessibility.max_serious:
            violations.append(
                f"{serious} serious accessibility violations "
                f"(max {t.accessibility.max_serious})"
            )

        for violation in violations:
            logger.debug(f"Gate violation: {violation}")

        return GateResult(passed=not violations, violations=violations)
