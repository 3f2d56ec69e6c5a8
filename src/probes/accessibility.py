"""Accessibility probe: rule engine scan plus live keyboard and landmark checks.

Every sub-check degrades on its own: an unavailable rule engine or a failing
Tab simulation leaves a warning finding and the remaining checks still run.
"""

import logging
from typing import Optional, Tuple

from src.auditor.exceptions import RuleEngineUnavailableError
from src.auditor.session import AuditSession
from src.browser.accessibility_tester import (
    AxeRuleEngine,
    RuleEngine,
    count_by_impact,
    format_target,
    parse_violations,
)
from src.models.audit_models import CheckStatus, Impact, Severity
from src.probes.base import BaseProbe

logger = logging.getLogger(__name__)

TAB_PRESSES = 30

RULE_RECOMMENDATIONS = {
    "button-name": "Ensure buttons with only icons have accessible names "
    "(aria-label or visually hidden text)",
    "aria-input-field-name": "Provide accessible names for form inputs "
    "(label element or aria-label)",
    "color-contrast": "Increase color contrast to meet WCAG AA (4.5:1 for normal text)",
    "scrollable-region-focusable": "Ensure scrollable regions are keyboard "
    "focusable and have a visible focus indicator",
}

ACTIVE_ELEMENT_JS = """
() => {
    const el = document.activeElement;
    if (!el) return 'none';
    const id = el.id ? `#${el.id}` : '';
    const cls = (typeof el.className === 'string' && el.className)
        ? `.${el.className.split(' ')[0]}` : '';
    return `${el.tagName}${id}${cls}`;
}
"""

SKIP_LINK_JS = """
() => !!document.querySelector('a.skip, a[href="#main"], a[href="#content"], a[href^="#skip"]')
"""

LANG_ATTRIBUTE_JS = "() => document.documentElement.hasAttribute('lang')"

LANDMARKS_JS = """
() => {
    const implicit = { banner: 'header', navigation: 'nav', main: 'main', contentinfo: 'footer' };
    return ['banner', 'navigation', 'main', 'contentinfo', 'complementary'].map(role => ({
        role,
        count: document.querySelectorAll(`[role="${role}"]`).length
            + (implicit[role] ? document.querySelectorAll(implicit[role]).length : 0),
    }));
}
"""


def a11y_summary(critical_count: int) -> Tuple[CheckStatus, int]:
    """Status and score for the critical+serious violation count."""
    if critical_count == 0:
        return CheckStatus.PASS, 10
    if critical_count <= 2:
        return CheckStatus.WARNING, 7
    if critical_count <= 5:
        return CheckStatus.FAIL, 4
    return CheckStatus.FAIL, 1


class AccessibilityProbe(BaseProbe):
    """Run the rule engine and the interactive accessibility checks."""

    name = "Accessibility"
    category = "Accessibility"
    toggle = "accessibility"

    def __init__(self, rule_engine: Optional[RuleEngine] = None):
        self.rule_engine = rule_engine

    def _engine(self, session: AuditSession) -> RuleEngine:
        if self.rule_engine is None:
            self.rule_engine = AxeRuleEngine(
                local_path=session.config.axe_script_path,
                cdn_url=session.config.axe_cdn_url,
            )
        return self.rule_engine

    async def run(self, session: AuditSession) -> None:
        await self._scan_rules(session)

        checks = [
            ("Keyboard Navigation", "keyboard navigation", self._check_tab_order),
            ("Skip Link", "for skip link", self._check_skip_link),
            ("Language Attribute", "language attribute", self._check_lang),
            ("ARIA Landmarks", "ARIA landmarks", self._check_landmarks),
        ]
        for test, subject, check in checks:
            try:
                await check(session)
            except Exception as e:
                logger.warning(f"Accessibility check '{test}' failed: {e}")
                session.add_degraded(self.category, test, f"Could not test {subject}")

        critical = [
            issue
            for issue in session.accessibility_issues
            if issue.severity in (Impact.CRITICAL, Impact.SERIOUS)
        ]
        status, score = a11y_summary(len(critical))
        session.add_result(
            self.category,
            "Overall A11y Issues",
            status,
            score,
            f"{len(session.accessibility_issues)} total issues "
            f"({len(critical)} critical/serious)",
            Severity.HIGH if len(critical) > 2 else Severity.MEDIUM,
        )

    async def _scan_rules(self, session: AuditSession) -> None:
        try:
            results = await self._engine(session).run(session.page)
        except RuleEngineUnavailableError as e:
            logger.warning(str(e))
            session.add_degraded(
                self.category,
                "axe-core",
                "axe-core could not be loaded; accessibility automated checks were limited",
            )
            return
        except Exception as e:
            logger.warning(f"Accessibility scan failed: {e}")
            session.add_degraded(
                self.category, "axe-core", f"Accessibility scan failed: {e}"
            )
            return

        violations = results.get("violations") or []
        issues = parse_violations(violations)
        session.accessibility_issues.extend(issues)
        logger.info(f"Accessibility scan: {count_by_impact(issues)}")

        for violation in violations:
            rule = violation.get("id")
            if rule not in RULE_RECOMMENDATIONS:
                continue
            nodes = violation.get("nodes") or []
            target = format_target(nodes[0].get("target", [])) if nodes else ""
            session.add_result(
                self.category,
                rule,
                CheckStatus.FAIL,
                0,
                f"{violation.get('help', rule)}: {target}",
                Severity.HIGH,
                recommendations=[RULE_RECOMMENDATIONS[rule]],
            )

    async def _check_tab_order(self, session: AuditSession) -> None:
        page = session.page
        focused = set()
        for _ in range(TAB_PRESSES):
            await page.keyboard.press("Tab")
            focused.add(await page.evaluate(ACTIVE_ELEMENT_JS) or "none")

        moves = len(focused) > 1
        session.add_result(
            self.category,
            "Keyboard Navigation",
            CheckStatus.PASS if moves else CheckStatus.FAIL,
            10 if moves else 0,
            f"{len(focused)} distinct focus targets reached via Tab",
            Severity.LOW if moves else Severity.HIGH,
        )

    async def _check_skip_link(self, session: AuditSession) -> None:
        has_skip_link = await session.page.evaluate(SKIP_LINK_JS)
        session.add_result(
            self.category,
            "Skip Link",
            CheckStatus.PASS if has_skip_link else CheckStatus.WARNING,
            10 if has_skip_link else 7,
            "Skip link present"
            if has_skip_link
            else 'Consider adding a "skip to content" link for keyboard users',
            Severity.LOW if has_skip_link else Severity.MEDIUM,
        )

    async def _check_lang(self, session: AuditSession) -> None:
        has_lang = await session.page.evaluate(LANG_ATTRIBUTE_JS)
        session.add_result(
            self.category,
            "Language Attribute",
            CheckStatus.PASS if has_lang else CheckStatus.FAIL,
            10 if has_lang else 0,
            "Language attribute present"
            if has_lang
            else "Missing lang attribute on <html>",
            Severity.HIGH,
        )

    async def _check_landmarks(self, session: AuditSession) -> None:
        landmarks = await session.page.evaluate(LANDMARKS_JS)
        present = [entry["role"] for entry in landmarks if entry["count"] > 0]
        has_main = "main" in present
        session.add_result(
            self.category,
            "ARIA Landmarks",
            CheckStatus.PASS if has_main else CheckStatus.WARNING,
            10 if has_main else 7,
            f"Landmarks found: {', '.join(present)}",
            Severity.MEDIUM,
        )
