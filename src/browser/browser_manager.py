"""Isolated browser context management.

This module provides the BrowserContextManager used by probes that must not
touch the shared audit page (the responsive probe opens one context per
device). Every context is closed on exit, even if the probe body raises.
"""

from typing import Optional
import logging
from contextlib import asynccontextmanager

from src.browser.playwright_integration import PlaywrightManager
from src.models.audit_models import DeviceViewport

logger = logging.getLogger(__name__)


class BrowserContextManager:
    """Create short-lived contexts with automatic cleanup.

    PATTERN: Use context managers for automatic resource cleanup.
    """

    def __init__(self, playwright_manager: PlaywrightManager):
        """Initialize the browser context manager.

        Args:
            playwright_manager: Manager owning the running browser
        """
        self.playwright_manager = playwright_manager

    @asynccontextmanager
    async def isolated_page(
        self,
        viewport: DeviceViewport,
        is_mobile: Optional[bool] = None,
    ):
        """Open a fresh context sized to ``viewport`` and yield its page.

        Args:
            viewport: Device viewport to emulate
            is_mobile: Mobile emulation override

        Yields:
            Page instance

        Example:
            async with manager.isolated_page(device) as page:
                await page.goto(url)
            # Context automatically closed
        """
        context = None
        try:
            context = await self.playwright_manager.create_context(
                viewport=viewport, is_mobile=is_mobile
            )
            page = await self.playwright_manager.create_page(context)
            logger.debug(
                f"Opened isolated page for {viewport.name} "
                f"({viewport.width}x{viewport.height})"
            )
            yield page
        finally:
            if context is not None:
                await self.playwright_manager.close_context(context)
