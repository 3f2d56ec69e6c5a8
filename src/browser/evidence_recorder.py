"""Element evidence capture for audit findings.

This module provides the EvidenceRecorder class which resolves CSS selectors
to live bounding boxes, optionally captures element screenshots, and groups
the resulting ElementIssue records into ProblemArea entries keyed by
(category, test).
"""

import json
import logging
import re
import time
from collections import defaultdict
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from playwright.async_api import Page

from src.models.audit_models import ElementIssue, ProblemArea, Severity

logger = logging.getLogger(__name__)


def _slug(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", name).strip("_")


class EvidenceRecorder:
    """Stateless-per-element accumulator of problem areas.

    Evidence is best effort: screenshot failures are logged and swallowed,
    and a selector with no match yields no record at all.

    Attributes:
        screenshots_dir: Directory for element and full page screenshots
    """

    def __init__(self, screenshots_dir: Path):
        """Initialize the recorder.

        Args:
            screenshots_dir: Directory to save screenshots (created if missing)
        """
        self.screenshots_dir = Path(screenshots_dir)
        self.screenshots_dir.mkdir(parents=True, exist_ok=True)
        self._problem_areas: List[ProblemArea] = []

    def _screenshot_path(self, name: str) -> Path:
        return self.screenshots_dir / f"{_slug(name)}-{int(time.time() * 1000)}.png"

    async def take_full_page_screenshot(self, page: Page, name: str) -> Optional[str]:
        """Capture the whole scrollable page.

        Returns:
            Path to the saved screenshot, or None if capture failed
        """
        path = self._screenshot_path(f"{name}-fullpage")
        try:
            await page.screenshot(path=str(path), full_page=True)
            logger.debug(f"Full page screenshot saved: {path}")
            return str(path)
        except Exception as e:
            logger.warning(f"Failed to capture full page screenshot '{name}': {e}")
            return None

    async def take_element_screenshot(
        self, page: Page, selector: str, name: str
    ) -> Optional[str]:
        """Capture the first element matching ``selector``.

        Returns:
            Path to the saved screenshot, or None if nothing was captured
        """
        try:
            locator = page.locator(selector)
            if await locator.count() == 0:
                return None
            path = self._screenshot_path(f"{name}-element")
            await locator.first.screenshot(path=str(path))
            return str(path)
        except Exception as e:
            logger.warning(f"Failed to capture element {selector}: {e}")
            return None

    async def record_problem_area(
        self,
        page: Page,
        category: str,
        test: str,
        selector: str,
        description: str,
        severity: Severity,
        recommendation: str,
        capture_screenshot: bool = True,
    ) -> Optional[ElementIssue]:
        """Record an offending element under (category, test).

        Args:
            page: Page holding the element
            category: Finding category
            test: Finding test name
            selector: CSS selector of the element
            description: What is wrong
            severity: Issue severity
            recommendation: How to fix it
            capture_screenshot: Whether to save an element screenshot

        Returns:
            The created ElementIssue, or None if the selector matched nothing
        """
        try:
            locator = page.locator(selector)
            if await locator.count() == 0:
                logger.debug(f"No element matches {selector}; nothing recorded")
                return None
            box = await locator.first.bounding_box()
        except Exception as e:
            logger.warning(f"Could not resolve {selector}: {e}")
            return None

        if not box:
            return None

        screenshot_path = None
        if capture_screenshot:
            screenshot_path = await self.take_element_screenshot(
                page, selector, f"{category}-{test}"
            )

        issue = ElementIssue(
            selector=selector,
            x=round(box["x"]),
            y=round(box["y"]),
            width=round(box["width"]),
            height=round(box["height"]),
            description=description,
            severity=severity,
            recommendation=recommendation,
            screenshot_path=screenshot_path,
        )
        self._store(category, test, issue)
        return issue

    def _store(self, category: str, test: str, issue: ElementIssue) -> None:
        for area in self._problem_areas:
            if area.category == category and area.test == test:
                area.issues.append(issue)
                return
        self._problem_areas.append(
            ProblemArea(category=category, test=test, issues=[issue])
        )

    @property
    def problem_areas(self) -> List[ProblemArea]:
        return list(self._problem_areas)

    def clear(self) -> None:
        self._problem_areas = []

    def get_recommendations_by_category(self) -> Dict[str, List[str]]:
        """Unique element recommendations per category, first-seen order."""
        recommendations: Dict[str, List[str]] = {}
        for area in self._problem_areas:
            bucket = recommendations.setdefault(area.category, [])
            for issue in area.issues:
                if issue.recommendation not in bucket:
                    bucket.append(issue.recommendation)
        return recommendations

    def get_high_severity_issues(self) -> List[ElementIssue]:
        return [
            issue
            for area in self._problem_areas
            for issue in area.issues
            if issue.severity == Severity.HIGH
        ]

    def create_issue_summary(self) -> Dict[str, object]:
        """Totals by category and by severity."""
        by_category: Dict[str, int] = defaultdict(int)
        by_severity: Dict[str, int] = {s.value: 0 for s in Severity}
        total = 0
        for area in self._problem_areas:
            for issue in area.issues:
                total += 1
                by_category[area.category] += 1
                by_severity[issue.severity.value] += 1
        return {
            "total_issues": total,
            "by_category": dict(by_category),
            "by_severity": by_severity,
        }

    def save_problem_areas(self, output_path: Path) -> Path:
        """Write problem areas, summary and recommendations as JSON."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "timestamp": datetime.now().isoformat(),
            "problem_areas": [area.model_dump(mode="json") for area in self._problem_areas],
            "summary": self.create_issue_summary(),
            "recommendations": self.get_recommendations_by_category(),
        }
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        logger.info(f"Problem areas saved to {output_path}")
        return output_path
