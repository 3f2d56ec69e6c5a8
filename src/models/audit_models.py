"""UX audit data models for findings, evidence and the final report.

This module defines the Pydantic models produced by the probe routines and
consumed by the scorer and reporters: findings, element-level evidence,
performance snapshots, accessibility violations, responsive results and the
root UXReport aggregate.
"""

import re
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CheckStatus(str, Enum):
    """Outcome of a single check."""

    PASS = "pass"
    FAIL = "fail"
    WARNING = "warning"


class Severity(str, Enum):
    """Finding and element issue severity."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Impact(str, Enum):
    """axe-core violation impact levels."""

    CRITICAL = "critical"
    SERIOUS = "serious"
    MODERATE = "moderate"
    MINOR = "minor"


class ElementIssue(BaseModel):
    """A specific DOM element flagged by a probe."""

    selector: str = Field(description="CSS selector identifying the element")
    x: int = Field(description="Bounding box left")
    y: int = Field(description="Bounding box top")
    width: int = Field(description="Bounding box width")
    height: int = Field(description="Bounding box height")
    description: str = Field(description="What is wrong with the element")
    severity: Severity = Field(description="Issue severity")
    recommendation: str = Field(description="How to fix it")
    screenshot_path: Optional[str] = Field(
        default=None, description="Element screenshot, if captured"
    )


class ProblemArea(BaseModel):
    """Element issues grouped by (category, test)."""

    category: str
    test: str
    issues: List[ElementIssue] = Field(default_factory=list)
    full_page_screenshot: Optional[str] = None


class Finding(BaseModel):
    """One evaluated check's outcome."""

    model_config = ConfigDict(frozen=True)

    category: str = Field(description="Probe category, e.g. 'Performance'")
    test: str = Field(description="Check name within the category")
    status: CheckStatus
    score: float = Field(ge=0, le=10, description="Per-check score (0-10)")
    details: str = Field(description="Human readable outcome")
    severity: Severity = Field(default=Severity.MEDIUM)
    timestamp: datetime = Field(default_factory=datetime.now)
    elements: Optional[List[ElementIssue]] = None
    recommendations: Optional[List[str]] = None


class LCPEntry(BaseModel):
    """Details of the largest-contentful-paint entry."""

    start_time: float = 0.0
    render_time: float = 0.0
    load_time: float = 0.0
    size: Optional[float] = None
    url: Optional[str] = None
    element: Optional[str] = None


class PerformanceMetrics(BaseModel):
    """Performance snapshot captured once per session (all times in ms)."""

    load_time: float = 0.0
    dom_content_loaded: float = 0.0
    first_paint: float = 0.0
    first_contentful_paint: float = 0.0
    largest_contentful_paint: float = 0.0
    largest_contentful_paint_entry: Optional[LCPEntry] = None
    total_size: int = Field(default=0, description="Total transfer size (bytes)")
    request_count: int = 0


class AccessibilityIssue(BaseModel):
    """One axe-core violation."""

    type: str = Field(description="axe rule id")
    severity: Impact
    element: str = Field(description="Target selector(s)")
    description: str
    wcag_level: str = Field(default="", description="Comma-joined WCAG tags")


class ResponsiveResult(BaseModel):
    """Result of checking one device viewport."""

    device: str
    width: int
    height: int
    issues: List[str] = Field(default_factory=list)
    screenshot: Optional[str] = None


_MOBILE_NAME = re.compile(r"mobile|iphone|android|s21", re.IGNORECASE)


class DeviceViewport(BaseModel):
    """Device/viewport pair used by the responsive probe."""

    name: str
    width: int = Field(gt=0)
    height: int = Field(gt=0)

    @property
    def is_mobile(self) -> bool:
        """Mobile-classified by name or by narrow width."""
        return bool(_MOBILE_NAME.search(self.name)) or self.width <= 420

    @property
    def slug(self) -> str:
        return re.sub(r"\s+", "_", self.name)


class UXReport(BaseModel):
    """Root aggregate returned by an audit run."""

    url: str
    test_date: datetime = Field(default_factory=datetime.now)
    overall_score: int = Field(ge=0, le=100)
    results: List[Finding] = Field(default_factory=list)
    performance: PerformanceMetrics = Field(default_factory=PerformanceMetrics)
    accessibility: List[AccessibilityIssue] = Field(default_factory=list)
    responsive: List[ResponsiveResult] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    problem_areas: List[ProblemArea] = Field(default_factory=list)

    def summary(self) -> Dict[str, int]:
        """Count findings by status."""
        counts = {status.value: 0 for status in CheckStatus}
        for finding in self.results:
            counts[finding.status.value] += 1
        counts["total"] = len(self.results)
        return counts

    def critical_findings(self, limit: int = 5) -> List[Finding]:
        """High severity failing findings, in report order."""
        return [
            f
            for f in self.results
            if f.severity == Severity.HIGH and f.status == CheckStatus.FAIL
        ][:limit]

    def count_accessibility(self, *impacts: Impact) -> int:
        return sum(1 for issue in self.accessibility if issue.severity in impacts)
