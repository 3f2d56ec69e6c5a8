"""Base abstract class for audit probes.

A probe reads the live page held by an AuditSession and appends findings to
it. Probes do not catch their own failures: the orchestrator runs each one
through run_probe(), which converts any exception into a degraded finding.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.auditor.session import AuditSession

# Shared in-page helper: id, then first class, then the element's document-wide
# index among its tag, as a Playwright ``nth=`` selector.
SELECTOR_HELPER_JS = """
    const selectorOf = (el) => {
        if (el.id) return `#${el.id}`;
        if (typeof el.className === 'string' && el.className.trim()) {
            return `.${el.className.trim().split(/\\s+/)[0]}`;
        }
        const tag = el.tagName.toLowerCase();
        const index = Array.from(document.querySelectorAll(tag)).indexOf(el);
        return `${tag} >> nth=${index}`;
    };
"""


class BaseProbe(ABC):
    """Abstract base class for probes.

    Attributes:
        name: Display name used in logs and degraded findings
        category: Finding category the probe reports under
        toggle: Name of the ProbeToggles flag enabling the probe
    """

    name: str = "probe"
    category: str = "General"
    toggle: Optional[str] = None

    def enabled(self, session: AuditSession) -> bool:
        if self.toggle is None:
            return True
        return bool(getattr(session.config.tests, self.toggle, True))

    @abstractmethod
    async def run(self, session: AuditSession) -> None:
        """Inspect ``session.page`` and append findings to ``session``."""
