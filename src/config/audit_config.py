"""Audit configuration with environment variable loading and named profiles."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from src.models.audit_models import DeviceViewport

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://jigsawaiteam.com/"
AXE_CORE_CDN = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.7.2/axe.min.js"


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


class TimeoutConfig(BaseModel):
    """Timeouts in milliseconds."""

    navigation: int = Field(default=30000, gt=0, description="Navigation timeout")
    default: int = Field(default=10000, gt=0, description="Default action timeout")


class BrowserConfig(BaseModel):
    """Browser launch mode."""

    headless: bool = Field(default=True, description="Run without a visible window")
    slow_mo: Optional[int] = Field(
        default=None, ge=0, description="Slow down each operation (ms)"
    )


class ProbeToggles(BaseModel):
    """Per-category probe enable flags."""

    performance: bool = True
    visual_design: bool = True
    navigation: bool = True
    readability: bool = True
    forms: bool = True
    interactive: bool = True
    keyboard: bool = True
    seo: bool = True
    responsive: bool = True
    accessibility: bool = True


class AccessibilityThresholds(BaseModel):
    """Maximum tolerated axe-core violations by impact."""

    max_critical: int = Field(
        default_factory=lambda: _env_int("MAX_CRITICAL_A11Y", 0), ge=0
    )
    max_serious: int = Field(
        default_factory=lambda: _env_int("MAX_SERIOUS_A11Y", 2), ge=0
    )


class ScoreThresholds(BaseModel):
    """Pass/fail thresholds consumed by the CI gate."""

    overall_score: int = Field(
        default_factory=lambda: _env_int("MIN_SCORE", 80),
        ge=0,
        le=100,
        description="Minimum overall score",
    )
    load_time: int = Field(
        default_factory=lambda: _env_int("MAX_LOAD_TIME", 3000),
        description="Maximum load time (ms)",
    )
    lcp: int = Field(
        default_factory=lambda: _env_int("MAX_LCP", 2500),
        description="Maximum LCP (ms)",
    )
    accessibility: AccessibilityThresholds = Field(
        default_factory=AccessibilityThresholds
    )


class NotificationConfig(BaseModel):
    """Notification settings (consumed by external integrations)."""

    enabled: bool = Field(
        default_factory=lambda: os.getenv("ENABLE_NOTIFICATIONS", "false").lower()
        == "true"
    )
    slack_webhook_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("SLACK_WEBHOOK_URL") or None
    )


def _default_devices() -> List[DeviceViewport]:
    return [
        DeviceViewport(name="Desktop 1920x1080", width=1920, height=1080),
        DeviceViewport(name="Desktop 1366x768", width=1366, height=768),
        DeviceViewport(name="Tablet iPad", width=768, height=1024),
        DeviceViewport(name="Mobile iPhone 12", width=390, height=844),
        DeviceViewport(name="Mobile Samsung S21", width=360, height=800),
    ]


class AuditConfig(BaseModel):
    """Configuration for a single-page UX audit run."""

    url: str = Field(
        default_factory=lambda: os.getenv("TEST_URL", DEFAULT_URL),
        description="Target page URL",
    )
    output_dir: str = Field(
        default_factory=lambda: os.getenv("UX_OUTPUT_DIR", "./outputs/ux-report"),
        description="Report output directory",
    )
    screenshots_dir: Optional[str] = Field(
        default=None,
        description="Screenshot directory (defaults to <output_dir>/screenshots)",
    )
    devices: List[DeviceViewport] = Field(default_factory=_default_devices)
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    tests: ProbeToggles = Field(default_factory=ProbeToggles)
    thresholds: ScoreThresholds = Field(default_factory=ScoreThresholds)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)

    # axe-core loading
    axe_script_path: Optional[str] = Field(
        default_factory=lambda: os.getenv("AXE_CORE_PATH") or None,
        description="Local axe.min.js, tried before the CDN",
    )
    axe_cdn_url: str = Field(
        default_factory=lambda: os.getenv("AXE_CORE_CDN", AXE_CORE_CDN),
        description="Remote axe.min.js fallback",
    )

    @property
    def screenshots_path(self) -> Path:
        if self.screenshots_dir:
            return Path(self.screenshots_dir)
        return Path(self.output_dir) / "screenshots"

    def ensure_directories(self) -> None:
        """Create output and screenshot directories."""
        for directory in (Path(self.output_dir), self.screenshots_path):
            directory.mkdir(parents=True, exist_ok=True)


def _development() -> AuditConfig:
    return AuditConfig(
        url="http://localhost:3000",
        devices=[
            DeviceViewport(name="Desktop", width=1920, height=1080),
            DeviceViewport(name="Mobile", width=375, height=667),
        ],
        timeouts=TimeoutConfig(navigation=10000, default=5000),
        browser=BrowserConfig(headless=False, slow_mo=100),
        thresholds=ScoreThresholds(
            overall_score=60,
            load_time=5000,
            lcp=4000,
            accessibility=AccessibilityThresholds(max_critical=5, max_serious=10),
        ),
        notifications=NotificationConfig(enabled=False),
    )


def _staging() -> AuditConfig:
    return AuditConfig(
        url="https://staging.jigsawaiteam.com",
        devices=[
            DeviceViewport(name="Desktop", width=1920, height=1080),
            DeviceViewport(name="Tablet", width=768, height=1024),
            DeviceViewport(name="Mobile", width=375, height=667),
        ],
        timeouts=TimeoutConfig(navigation=20000, default=10000),
        thresholds=ScoreThresholds(
            overall_score=70,
            load_time=4000,
            lcp=3000,
            accessibility=AccessibilityThresholds(max_critical=2, max_serious=5),
        ),
    )


def _production() -> AuditConfig:
    return AuditConfig(
        url=DEFAULT_URL,
        thresholds=ScoreThresholds(
            overall_score=80,
            load_time=3000,
            lcp=2500,
            accessibility=AccessibilityThresholds(max_critical=0, max_serious=2),
        ),
    )


def _quick() -> AuditConfig:
    return AuditConfig(
        url=DEFAULT_URL,
        devices=[DeviceViewport(name="Desktop", width=1920, height=1080)],
        timeouts=TimeoutConfig(navigation=15000, default=5000),
        tests=ProbeToggles(
            readability=False, forms=False, interactive=False, responsive=False
        ),
        thresholds=ScoreThresholds(
            overall_score=60,
            load_time=5000,
            lcp=4000,
            accessibility=AccessibilityThresholds(max_critical=5, max_serious=10),
        ),
        notifications=NotificationConfig(enabled=False),
    )


def _cicd() -> AuditConfig:
    # Every field falls back to its environment variable.
    return AuditConfig(
        devices=[
            DeviceViewport(name="Desktop", width=1920, height=1080),
            DeviceViewport(name="Mobile", width=375, height=667),
        ],
        thresholds=ScoreThresholds(overall_score=_env_int("MIN_SCORE", 70)),
    )


PROFILES = {
    "development": _development,
    "staging": _staging,
    "production": _production,
    "quick": _quick,
    "cicd": _cicd,
}


def get_config(environment: str = "production") -> AuditConfig:
    """Build the named profile; unknown names fall back to production."""
    factory = PROFILES.get(environment)
    if factory is None:
        logger.warning(f"Unknown config profile '{environment}', using production")
        factory = _production
    return factory()


def load_config(
    path: Union[str, Path], base: Optional[AuditConfig] = None
) -> AuditConfig:
    """Load a YAML or JSON file and merge it over ``base``.

    Args:
        path: Config file (.yaml, .yml or .json)
        base: Config to override (defaults to the production profile)

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file does not contain a mapping
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        if path.suffix == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    merged = _deep_merge((base or _production()).model_dump(), data)
    logger.debug(f"Loaded config overrides from {path}")
    return AuditConfig.model_validate(merged)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
