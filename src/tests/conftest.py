"""Shared fixtures for audit tests.

Pages are AsyncMock(spec=Page) doubles; no test launches a real browser.
"""

import pytest
from unittest.mock import AsyncMock, Mock
from playwright.async_api import Page

from src.auditor.session import AuditSession
from src.config.audit_config import AuditConfig
from src.models.audit_models import DeviceViewport

DEFAULT_BOX = {"x": 10.4, "y": 20.6, "width": 60.0, "height": 30.0}


def make_locator(count=1, box=DEFAULT_BOX):
    """Build a locator double with count(), first.bounding_box() and first.screenshot()."""
    locator = Mock()
    locator.count = AsyncMock(return_value=count)
    locator.first.bounding_box = AsyncMock(return_value=box)
    locator.first.screenshot = AsyncMock()
    return locator


@pytest.fixture
def locator_factory():
    """Factory for locator doubles."""
    return make_locator


@pytest.fixture
def audit_config(tmp_path):
    """Configuration writing into a temporary directory."""
    return AuditConfig(
        url="https://example.com/",
        output_dir=str(tmp_path / "report"),
        devices=[
            DeviceViewport(name="Desktop 1920x1080", width=1920, height=1080),
            DeviceViewport(name="Mobile iPhone 12", width=390, height=844),
        ],
    )


@pytest.fixture
def mock_page():
    """Create a mock Page instance."""
    page = AsyncMock(spec=Page)
    page.evaluate = AsyncMock()
    page.screenshot = AsyncMock()
    page.add_script_tag = AsyncMock()
    page.goto = AsyncMock()
    page.close = AsyncMock()
    page.keyboard = Mock()
    page.keyboard.press = AsyncMock()
    page.locator = Mock(return_value=make_locator())
    page.set_default_timeout = Mock()
    return page


@pytest.fixture
def session(audit_config, mock_page):
    """AuditSession bound to the mock page."""
    return AuditSession(audit_config, page=mock_page)
