"""Navigation probe: nav landmark, home link, menu items and mobile menu."""

from src.auditor.session import AuditSession
from src.models.audit_models import CheckStatus, Severity
from src.probes.base import BaseProbe

NAV_SELECTOR = 'nav, [role="navigation"]'

HOME_LINK_SELECTORS = [
    'a[href="/"]',
    'a[href="./"]',
    ".logo a",
    ".brand a",
    "nav a:first-child",
]

MOBILE_MENU_SELECTORS = [
    ".hamburger",
    ".menu-toggle",
    ".mobile-menu-button",
    '[aria-label*="menu" i]',
    "button[aria-expanded]",
]

ANY_SELECTOR_JS = """
(selectors) => selectors.some(s => document.querySelector(s) !== null)
"""

MENU_ITEMS_JS = """
() => {
    const nav = document.querySelector('nav, [role="navigation"]');
    if (!nav) return [];
    return Array.from(nav.querySelectorAll('a')).map(a => ({
        text: (a.textContent || '').trim(),
        href: a.getAttribute('href') || '',
    }));
}
"""


class NavigationProbe(BaseProbe):
    name = "Navigation"
    category = "Navigation"
    toggle = "navigation"

    async def run(self, session: AuditSession) -> None:
        page = session.page

        nav_exists = await page.locator(NAV_SELECTOR).count() > 0
        session.add_result(
            self.category,
            "Navigation Element",
            CheckStatus.PASS if nav_exists else CheckStatus.FAIL,
            10 if nav_exists else 0,
            "Navigation element found"
            if nav_exists
            else "No semantic navigation element found",
            Severity.HIGH,
        )

        logo_exists = await page.evaluate(ANY_SELECTOR_JS, HOME_LINK_SELECTORS)
        session.add_result(
            self.category,
            "Logo/Home Link",
            CheckStatus.PASS if logo_exists else CheckStatus.WARNING,
            10 if logo_exists else 7,
            "Logo/home link found" if logo_exists else "No clear home link found",
        )

        menu_items = await page.evaluate(MENU_ITEMS_JS)
        session.add_result(
            self.category,
            "Menu Items",
            CheckStatus.PASS if menu_items else CheckStatus.FAIL,
            10 if len(menu_items) > 2 else 5,
            f"Found {len(menu_items)} navigation links",
        )

        mobile_menu = await page.evaluate(ANY_SELECTOR_JS, MOBILE_MENU_SELECTORS)
        session.add_result(
            self.category,
            "Mobile Menu",
            CheckStatus.PASS if mobile_menu else CheckStatus.WARNING,
            10 if mobile_menu else 7,
            "Mobile menu button found"
            if mobile_menu
            else "No mobile menu button detected",
        )
