"""Playwright browser lifecycle for audit sessions.

This module provides the PlaywrightManager class which owns the Playwright
driver, the Chromium process and every context/page opened during an audit.
It translates Playwright failures into audit exceptions.

CRITICAL: Proper cleanup is essential to avoid leaking browser processes.
"""

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)
from typing import Optional, Dict, Any, List
import logging

from src.auditor.exceptions import BrowserLaunchError, NavigationError
from src.models.audit_models import DeviceViewport

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)
SANDBOX_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


class PlaywrightManager:
    """Manage the Playwright driver, browser and contexts for one audit.

    PATTERN: One browser per audit, isolated contexts per viewport.

    CRITICAL: Always call cleanup() or use as async context manager to ensure
    proper resource cleanup.
    """

    def __init__(self):
        """Initialize the Playwright manager."""
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.contexts: Dict[str, BrowserContext] = {}
        self.pages: Dict[str, Page] = {}
        self._initialized = False

    async def __aenter__(self):
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.cleanup()

    async def initialize(self) -> None:
        """Start the Playwright driver.

        Raises:
            BrowserLaunchError: If the driver cannot start
        """
        if self._initialized:
            return

        try:
            self.playwright = await async_playwright().start()
            self._initialized = True
            logger.info("Playwright initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize Playwright: {e}")
            raise BrowserLaunchError(f"Playwright initialization failed: {e}") from e

    async def launch_browser(
        self,
        headless: bool = True,
        slow_mo: Optional[int] = None,
        args: Optional[List[str]] = None,
    ) -> Browser:
        """Launch Chromium, reusing the running instance if any.

        Args:
            headless: Whether to run in headless mode
            slow_mo: Delay inserted after each operation (ms)
            args: Extra Chromium command line switches

        Returns:
            Browser instance

        Raises:
            BrowserLaunchError: If the browser fails to launch
        """
        if not self._initialized:
            await self.initialize()

        if self.browser is not None:
            logger.debug("Reusing existing chromium browser")
            return self.browser

        options: Dict[str, Any] = {
            "headless": headless,
            "args": args if args is not None else list(SANDBOX_ARGS),
        }
        if slow_mo:
            options["slow_mo"] = slow_mo

        try:
            self.browser = await self.playwright.chromium.launch(**options)
            logger.info(f"Launched chromium browser (headless={headless})")
            return self.browser
        except Exception as e:
            logger.error(f"Failed to launch chromium browser: {e}")
            raise BrowserLaunchError(f"Browser launch failed: {e}") from e

    async def create_context(
        self,
        viewport: Optional[DeviceViewport] = None,
        is_mobile: Optional[bool] = None,
        user_agent: Optional[str] = None,
    ) -> BrowserContext:
        """Create an isolated browser context.

        Args:
            viewport: Viewport size; Playwright's default when omitted
            is_mobile: Mobile emulation (defaults to the viewport's classification)
            user_agent: User agent override

        Returns:
            Browser context

        Raises:
            BrowserLaunchError: If no browser is running or creation fails
        """
        if self.browser is None:
            raise BrowserLaunchError("Browser has not been launched")

        context_options: Dict[str, Any] = {}
        if viewport:
            context_options["viewport"] = {
                "width": viewport.width,
                "height": viewport.height,
            }
            context_options["is_mobile"] = (
                viewport.is_mobile if is_mobile is None else is_mobile
            )
        if user_agent:
            context_options["user_agent"] = user_agent

        try:
            context = await self.browser.new_context(**context_options)
        except Exception as e:
            logger.error(f"Failed to create browser context: {e}")
            raise BrowserLaunchError(f"Context creation failed: {e}") from e

        context_id = f"context_{id(context)}"
        self.contexts[context_id] = context
        logger.debug(f"Created browser context: {context_id}")
        return context

    async def create_page(self, context: BrowserContext) -> Page:
        """Create a new page in the specified context.

        Raises:
            BrowserLaunchError: If page creation fails
        """
        try:
            page = await context.new_page()
        except Exception as e:
            logger.error(f"Failed to create page: {e}")
            raise BrowserLaunchError(f"Page creation failed: {e}") from e

        page_id = f"page_{id(page)}"
        self.pages[page_id] = page
        logger.debug(f"Created page: {page_id}")
        return page

    async def close_context(self, context: BrowserContext) -> None:
        """Close a context and forget it. Errors are logged, not raised."""
        context_id = f"context_{id(context)}"
        try:
            await context.close()
            logger.debug(f"Closed context: {context_id}")
        except Exception as e:
            logger.error(f"Error closing context {context_id}: {e}")
        finally:
            self.contexts.pop(context_id, None)
            for page_id, page in list(self.pages.items()):
                if getattr(page, "context", None) is context:
                    del self.pages[page_id]

    async def navigate(
        self,
        page: Page,
        url: str,
        wait_until: str = "networkidle",
        timeout: int = 30000,
    ) -> None:
        """Navigate page to URL and wait for the given load state.

        Args:
            page: Page instance
            url: Target URL
            wait_until: Wait condition (load, domcontentloaded, networkidle)
            timeout: Navigation timeout in milliseconds

        Raises:
            NavigationError: If navigation fails or times out
        """
        try:
            await page.goto(url, wait_until=wait_until, timeout=timeout)
            logger.debug(f"Navigated to {url}")
        except Exception as e:
            logger.error(f"Navigation to {url} failed: {e}")
            raise NavigationError(url, str(e)) from e

    async def cleanup(self) -> None:
        """Close all pages, contexts, the browser and the driver.

        Never raises: a failure while closing one resource must not prevent
        the others from being released.
        """
        errors = []

        for page_id, page in list(self.pages.items()):
            try:
                await page.close()
                logger.debug(f"Closed page: {page_id}")
            except Exception as e:
                errors.append(f"Failed to close page {page_id}: {e}")
        self.pages.clear()

        for context_id, context in list(self.contexts.items()):
            try:
                await context.close()
                logger.debug(f"Closed context: {context_id}")
            except Exception as e:
                errors.append(f"Failed to close context {context_id}: {e}")
        self.contexts.clear()

        if self.browser is not None:
            try:
                await self.browser.close()
                logger.debug("Closed browser")
            except Exception as e:
                errors.append(f"Failed to close browser: {e}")
            self.browser = None

        if self.playwright is not None:
            try:
                await self.playwright.stop()
                logger.info("Playwright stopped successfully")
            except Exception as e:
                errors.append(f"Failed to stop Playwright: {e}")
            self.playwright = None

        self._initialized = False

        if errors:
            logger.warning(f"Cleanup completed with errors: {'; '.join(errors)}")
        else:
            logger.info("Cleanup completed successfully")
