"""Tests for PlaywrightManager class.

This module contains tests for the browser lifecycle used by audits: driver
start, Chromium launch, context and page creation, navigation errors and
resource cleanup.
"""

import pytest
from unittest.mock import AsyncMock, Mock, patch
from playwright.async_api import Browser, BrowserContext, Page

from src.auditor.exceptions import BrowserLaunchError, NavigationError
from src.browser.browser_manager import BrowserContextManager
from src.browser.playwright_integration import SANDBOX_ARGS, PlaywrightManager
from src.models.audit_models import DeviceViewport


@pytest.fixture
def manager():
    """Create a PlaywrightManager instance for testing."""
    return PlaywrightManager()


@pytest.fixture
def mock_playwright():
    """Create a mock Playwright instance."""
    playwright = AsyncMock()
    playwright.chromium = AsyncMock()
    return playwright


@pytest.fixture
def mock_browser():
    """Create a mock Browser instance."""
    browser = AsyncMock(spec=Browser)
    browser.new_context = AsyncMock()
    browser.close = AsyncMock()
    return browser


@pytest.fixture
def mock_context():
    """Create a mock BrowserContext instance."""
    context = AsyncMock(spec=BrowserContext)
    context.new_page = AsyncMock()
    context.close = AsyncMock()
    return context


@pytest.fixture
def page_double():
    """Create a mock Page instance."""
    page = AsyncMock(spec=Page)
    page.goto = AsyncMock()
    page.close = AsyncMock()
    return page


@pytest.fixture
def launched(manager, mock_playwright, mock_browser):
    """Manager with a running (mocked) browser."""
    manager.playwright = mock_playwright
    manager._initialized = True
    manager.browser = mock_browser
    return manager


class TestPlaywrightManagerInitialization:
    """Tests for PlaywrightManager initialization."""

    def test_init(self):
        """Test PlaywrightManager initialization."""
        manager = PlaywrightManager()
        assert manager.playwright is None
        assert manager.browser is None
        assert manager.contexts == {}
        assert manager.pages == {}
        assert manager._initialized is False

    @pytest.mark.asyncio
    async def test_initialize_success(self, manager):
        """Test successful Playwright initialization."""
        with patch("src.browser.playwright_integration.async_playwright") as mock_async_pw:
            mock_async_pw.return_value.start = AsyncMock(return_value=AsyncMock())

            await manager.initialize()

            assert manager.playwright is not None
            assert manager._initialized is True

    @pytest.mark.asyncio
    async def test_initialize_is_idempotent(self, manager):
        """Test that initialize only starts the driver once."""
        with patch("src.browser.playwright_integration.async_playwright") as mock_async_pw:
            mock_async_pw.return_value.start = AsyncMock(return_value=AsyncMock())

            await manager.initialize()
            await manager.initialize()

            mock_async_pw.return_value.start.assert_called_once()

    @pytest.mark.asyncio
    async def test_initialize_failure(self, manager):
        """Test that driver start failures become BrowserLaunchError."""
        with patch("src.browser.playwright_integration.async_playwright") as mock_async_pw:
            mock_async_pw.return_value.start = AsyncMock(
                side_effect=Exception("driver missing")
            )

            with pytest.raises(BrowserLaunchError, match="Playwright initialization failed"):
                await manager.initialize()

            assert manager._initialized is False


class TestBrowserLaunch:
    """Tests for browser launch functionality."""

    @pytest.mark.asyncio
    async def test_launch_chromium_with_sandbox_args(
        self, manager, mock_playwright, mock_browser
    ):
        """Test launching Chromium headless with the sandbox switches."""
        manager.playwright = mock_playwright
        manager._initialized = True
        mock_playwright.chromium.launch = AsyncMock(return_value=mock_browser)

        browser = await manager.launch_browser()

        assert browser is mock_browser
        mock_playwright.chromium.launch.assert_called_once_with(
            headless=True, args=SANDBOX_ARGS
        )

    @pytest.mark.asyncio
    async def test_launch_passes_slow_mo(self, manager, mock_playwright, mock_browser):
        """Test that slow_mo is forwarded when set."""
        manager.playwright = mock_playwright
        manager._initialized = True
        mock_playwright.chromium.launch = AsyncMock(return_value=mock_browser)

        await manager.launch_browser(headless=False, slow_mo=250)

        kwargs = mock_playwright.chromium.launch.call_args.kwargs
        assert kwargs["headless"] is False
        assert kwargs["slow_mo"] == 250

    @pytest.mark.asyncio
    async def test_launch_reuses_browser(self, launched, mock_playwright, mock_browser):
        """Test that a running browser is reused."""
        browser = await launched.launch_browser()

        assert browser is mock_browser
        mock_playwright.chromium.launch.assert_not_called()

    @pytest.mark.asyncio
    async def test_launch_failure(self, manager, mock_playwright):
        """Test that launch failures become BrowserLaunchError."""
        manager.playwright = mock_playwright
        manager._initialized = True
        mock_playwright.chromium.launch = AsyncMock(side_effect=Exception("no chromium"))

        with pytest.raises(BrowserLaunchError, match="Browser launch failed"):
            await manager.launch_browser()


class TestContextCreation:
    """Tests for context and page creation."""

    @pytest.mark.asyncio
    async def test_create_context_requires_browser(self, manager):
        """Test that contexts cannot be created before launch."""
        with pytest.raises(BrowserLaunchError, match="not been launched"):
            await manager.create_context()

    @pytest.mark.asyncio
    async def test_create_context_with_mobile_viewport(
        self, launched, mock_browser, mock_context
    ):
        """Test that a phone viewport enables mobile emulation."""
        mock_browser.new_context.return_value = mock_context
        device = DeviceViewport(name="Mobile iPhone 12", width=390, height=844)

        context = await launched.create_context(viewport=device)

        assert context is mock_context
        mock_browser.new_context.assert_called_once_with(
            viewport={"width": 390, "height": 844}, is_mobile=True
        )
        assert len(launched.contexts) == 1

    @pytest.mark.asyncio
    async def test_create_context_with_user_agent(
        self, launched, mock_browser, mock_context
    ):
        """Test explicit is_mobile and user agent overrides."""
        mock_browser.new_context.return_value = mock_context
        device = DeviceViewport(name="Desktop", width=1920, height=1080)

        await launched.create_context(viewport=device, is_mobile=False, user_agent="UA")

        mock_browser.new_context.assert_called_once_with(
            viewport={"width": 1920, "height": 1080}, is_mobile=False, user_agent="UA"
        )

    @pytest.mark.asyncio
    async def test_create_page(self, launched, mock_context, page_double):
        """Test page creation registers the page."""
        mock_context.new_page.return_value = page_double

        page = await launched.create_page(mock_context)

        assert page is page_double
        assert len(launched.pages) == 1

    @pytest.mark.asyncio
    async def test_create_page_failure(self, launched, mock_context):
        """Test that page creation failures become BrowserLaunchError."""
        mock_context.new_page.side_effect = Exception("crashed")

        with pytest.raises(BrowserLaunchError, match="Page creation failed"):
            await launched.create_page(mock_context)


class TestNavigation:
    """Tests for navigation."""

    @pytest.mark.asyncio
    async def test_navigate_waits_for_network_idle(self, manager, page_double):
        """Test default navigation options."""
        await manager.navigate(page_double, "https://example.com")

        page_double.goto.assert_called_once_with(
            "https://example.com", wait_until="networkidle", timeout=30000
        )

    @pytest.mark.asyncio
    async def test_navigate_failure_raises_navigation_error(self, manager, page_double):
        """Test that goto failures become NavigationError carrying the URL."""
        page_double.goto.side_effect = Exception("Timeout 30000ms exceeded")

        with pytest.raises(NavigationError) as exc_info:
            await manager.navigate(page_double, "https://slow.example.com")

        assert exc_info.value.url == "https://slow.example.com"
        assert "Timeout" in str(exc_info.value)


class TestCleanup:
    """Tests for resource cleanup."""

    @pytest.mark.asyncio
    async def test_cleanup_closes_everything(
        self, launched, mock_playwright, mock_browser, mock_context, page_double
    ):
        """Test that cleanup releases pages, contexts, browser and driver."""
        launched.contexts["c"] = mock_context
        launched.pages["p"] = page_double

        await launched.cleanup()

        page_double.close.assert_called_once()
        mock_context.close.assert_called_once()
        mock_browser.close.assert_called_once()
        mock_playwright.stop.assert_called_once()
        assert launched.browser is None
        assert launched.playwright is None
        assert launched._initialized is False

    @pytest.mark.asyncio
    async def test_cleanup_never_raises(
        self, launched, mock_playwright, mock_browser, mock_context
    ):
        """Test that one failing close does not stop the others."""
        mock_context.close.side_effect = Exception("already closed")
        launched.contexts["c"] = mock_context

        await launched.cleanup()

        mock_browser.close.assert_called_once()
        mock_playwright.stop.assert_called_once()

    @pytest.mark.asyncio
    async def test_cleanup_without_browser(self, manager):
        """Test cleanup on a manager that never started."""
        await manager.cleanup()
        assert manager._initialized is False


class TestIsolatedPage:
    """Tests for BrowserContextManager.isolated_page."""

    @pytest.mark.asyncio
    async def test_context_closed_after_use(self, launched, mock_browser, mock_context, page_double):
        """Test that the context is closed when the block exits."""
        mock_browser.new_context.return_value = mock_context
        mock_context.new_page.return_value = page_double
        device = DeviceViewport(name="Tablet iPad", width=768, height=1024)

        async with BrowserContextManager(launched).isolated_page(device) as page:
            assert page is page_double

        mock_context.close.assert_called_once()
        assert launched.contexts == {}

    @pytest.mark.asyncio
    async def test_context_closed_when_body_raises(
        self, launched, mock_browser, mock_context, page_double
    ):
        """Test that the context is closed even if the caller fails."""
        mock_browser.new_context.return_value = mock_context
        mock_context.new_page.return_value = page_double
        device = DeviceViewport(name="Tablet iPad", width=768, height=1024)

        with pytest.raises(RuntimeError):
            async with BrowserContextManager(launched).isolated_page(device):
                raise RuntimeError("probe failed")

        mock_context.close.assert_called_once()
