"""Browser layer for page audits.

This package wraps Playwright for the audit engine:
- Browser lifecycle and isolated contexts
- Element evidence and screenshots
- axe-core rule engine injection
- Navigation, paint and resource timing capture
"""

from src.browser.playwright_integration import PlaywrightManager
from src.browser.browser_manager import BrowserContextManager
from src.browser.evidence_recorder import EvidenceRecorder
from src.browser.accessibility_tester import AxeRuleEngine, RuleEngine
from src.browser.performance_monitor import PerformanceMonitor

__all__ = [
    "PlaywrightManager",
    "BrowserContextManager",
    "EvidenceRecorder",
    "AxeRuleEngine",
    "RuleEngine",
    "PerformanceMonitor",
]
