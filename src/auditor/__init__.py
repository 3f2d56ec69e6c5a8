"""Audit engine: session state, orchestration and error types.

Import UXAuditor from src.auditor.orchestrator; this package only re-exports
the exception hierarchy so the browser layer can import it without pulling in
the probes.
"""

from src.auditor.exceptions import (
    AuditError,
    BrowserLaunchError,
    NavigationError,
    ProbeError,
    RuleEngineUnavailableError,
)

__all__ = [
    "AuditError",
    "BrowserLaunchError",
    "NavigationError",
    "ProbeError",
    "RuleEngineUnavailableError",
]
