"""Exception hierarchy for the audit engine.

Only BrowserLaunchError is fatal to a run; every other error is converted
into a degraded finding by the orchestrator.
"""


class AuditError(Exception):
    """Base class for audit errors."""


class BrowserLaunchError(AuditError):
    """The browser process, context or page could not be created."""


class NavigationError(AuditError):
    """The target page did not reach a quiescent state in time."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Navigation to {url} failed: {message}")


class ProbeError(AuditError):
    """A probe could not evaluate its condition."""


class RuleEngineUnavailableError(AuditError):
    """The accessibility rule engine could not be loaded into the page."""
