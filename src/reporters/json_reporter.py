"""JSON report generator for UX audits.

This module serializes a UXReport into the machine-readable report consumed by
CI jobs and dashboards.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from src.models.audit_models import UXReport

logger = logging.getLogger(__name__)


class JsonReporter:
    """
    Generate JSON reports for audit results.

    GOTCHA: Handles datetime and enum serialization through pydantic's JSON mode
    """

    def __init__(self, pretty: bool = True):
        """
        Initialize JSON reporter.

        Args:
            pretty: Whether to pretty-print JSON output
        """
        self.pretty = pretty

    def _dumps(self, data: Dict[str, Any]) -> str:
        if self.pretty:
            return json.dumps(data, indent=2, ensure_ascii=False, default=str)
        return json.dumps(data, ensure_ascii=False, default=str)

    def generate_report(self, report: UXReport) -> str:
        """
        Generate the full JSON report.

        Args:
            report: Audit report to serialize

        Returns:
            JSON string
        """
        json_str = self._dumps(report.model_dump(mode="json"))
        logger.info(f"JSON report generated ({len(json_str)} bytes)")
        return json_str

    def generate_summary(self, report: UXReport) -> str:
        """
        Generate a compact summary without per-finding detail.

        Args:
            report: Audit report

        Returns:
            JSON string with score, status counts and top issues
        """
        summary = {
            "url": report.url,
            "test_date": report.test_date.isoformat(),
            "overall_score": report.overall_score,
            "counts": report.summary(),
            "critical_findings": [
                f"{f.category} - {f.test}: {f.details}"
                for f in report.critical_findings()
            ],
            "accessibility_issues": len(report.accessibility),
        }
        return self._dumps(summary)

    def save(self, report: UXReport, output_path: Union[str, Path]) -> Path:
        """
        Generate and save the JSON report.

        Args:
            report: Audit report to serialize
            output_path: Destination file (parent directories are created)

        Returns:
            Path to saved file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.generate_report(report), encoding="utf-8")
        logger.info(f"JSON report saved to: {output_path}")
        return output_path
