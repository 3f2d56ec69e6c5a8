"""Models package for the UX auditor."""

from .audit_models import (
    CheckStatus,
    Severity,
    Impact,
    ElementIssue,
    ProblemArea,
    Finding,
    LCPEntry,
    PerformanceMetrics,
    AccessibilityIssue,
    ResponsiveResult,
    DeviceViewport,
    UXReport,
)

__all__ = [
    # Enums
    "CheckStatus",
    "Severity",
    "Impact",
    # Evidence
    "ElementIssue",
    "ProblemArea",
    # Results
    "Finding",
    "LCPEntry",
    "PerformanceMetrics",
    "AccessibilityIssue",
    "ResponsiveResult",
    "DeviceViewport",
    "UXReport",
]
