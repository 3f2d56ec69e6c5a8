"""Accessibility rule engine integration (axe-core).

This module defines the RuleEngine capability consumed by the accessibility
probe and the AxeRuleEngine implementation, which injects axe-core into the
page (bundled local file first, CDN second) and runs it. Violations are
mapped into AccessibilityIssue records.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from playwright.async_api import Page

from src.auditor.exceptions import RuleEngineUnavailableError
from src.config.audit_config import AXE_CORE_CDN
from src.models.audit_models import AccessibilityIssue, Impact

logger = logging.getLogger(__name__)


class RuleEngine(ABC):
    """Pluggable rule evaluation engine.

    ``run`` must return ``{"violations": [{id, impact, description, tags,
    nodes: [{target: [...]}], help}]}``.
    """

    @abstractmethod
    async def run(self, page: Page) -> Dict[str, Any]:
        """Evaluate the rules against the page.

        Raises:
            RuleEngineUnavailableError: If the engine cannot be loaded
        """


class AxeRuleEngine(RuleEngine):
    """Run axe-core inside the page.

    PATTERN: Use evaluate() to run JavaScript libraries in browser context.
    """

    def __init__(
        self,
        local_path: Optional[str] = None,
        cdn_url: str = AXE_CORE_CDN,
    ):
        """Initialize the engine.

        Args:
            local_path: Bundled axe.min.js, tried first when it exists
            cdn_url: Remote axe.min.js fallback
        """
        self.local_path = Path(local_path) if local_path else None
        self.cdn_url = cdn_url
        self.loaded_from: Optional[str] = None

    async def _is_loaded(self, page: Page) -> bool:
        return bool(await page.evaluate("() => typeof window.axe !== 'undefined'"))

    async def inject(self, page: Page) -> str:
        """Load axe-core into the page.

        Returns:
            "local" or "cdn", depending on which source loaded

        Raises:
            RuleEngineUnavailableError: If neither source loads
        """
        if self.local_path and self.local_path.exists():
            try:
                await page.add_script_tag(path=str(self.local_path))
                if await self._is_loaded(page):
                    self.loaded_from = "local"
                    logger.info(f"axe-core loaded from {self.local_path}")
                    return self.loaded_from
            except Exception as e:
                logger.debug(f"Local axe-core injection failed: {e}")

        try:
            await page.add_script_tag(url=self.cdn_url)
            if await self._is_loaded(page):
                self.loaded_from = "cdn"
                logger.info(f"axe-core loaded from {self.cdn_url}")
                return self.loaded_from
        except Exception as e:
            logger.debug(f"CDN axe-core injection failed: {e}")

        raise RuleEngineUnavailableError(
            "axe-core could not be loaded (local asset and CDN fallback failed)"
        )

    async def run(self, page: Page) -> Dict[str, Any]:
        await self.inject(page)
        results = await page.evaluate("async () => await window.axe.run()")
        return results or {"violations": []}


def format_target(target: List[Any]) -> str:
    """Join an axe node target; shadow DOM targets are nested selector lists."""
    parts = []
    for selector in target:
        if isinstance(selector, (list, tuple)):
            parts.append(",".join(str(s) for s in selector))
        else:
            parts.append(str(selector))
    return ", ".join(parts)


def parse_violations(violations: List[Dict[str, Any]]) -> List[AccessibilityIssue]:
    """Map axe-core violations to AccessibilityIssue records, one per rule.

    Args:
        violations: Raw ``violations`` list from axe-core

    Returns:
        List of AccessibilityIssue objects
    """
    issues = []
    for violation in violations:
        nodes = violation.get("nodes") or []
        target = nodes[0].get("target", []) if nodes else []
        try:
            impact = Impact(violation.get("impact") or Impact.MINOR.value)
        except ValueError:
            impact = Impact.MINOR

        issues.append(
            AccessibilityIssue(
                type=violation.get("id", "unknown"),
                severity=impact,
                element=format_target(target) or "Unknown",
                description=violation.get("description", ""),
                wcag_level=", ".join(
                    tag for tag in violation.get("tags", []) if tag.startswith("wcag")
                ),
            )
        )
    return issues


def count_by_impact(issues: List[AccessibilityIssue]) -> str:
    """Format counts by impact level for logging."""
    counts = {impact.value: 0 for impact in Impact}
    for issue in issues:
        counts[issue.severity.value] += 1

    parts = [f"{count} {level}" for level, count in counts.items() if count > 0]
    return ", ".join(parts) if parts else "no issues"
