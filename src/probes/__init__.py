"""Page probes. Each probe inspects the audited page and appends findings."""

from src.probes.base import BaseProbe
from src.probes.performance import PerformanceProbe
from src.probes.visual import VisualHierarchyProbe
from src.probes.contrast import ColorContrastProbe
from src.probes.navigation import NavigationProbe
from src.probes.readability import ReadabilityProbe
from src.probes.cta import CTAProbe
from src.probes.forms import FormsProbe
from src.probes.interactive import InteractiveElementsProbe
from src.probes.keyboard import KeyboardNavigationProbe
from src.probes.seo import SEOProbe
from src.probes.responsive import ResponsiveProbe
from src.probes.accessibility import AccessibilityProbe

__all__ = [
    "BaseProbe",
    "PerformanceProbe",
    "VisualHierarchyProbe",
    "ColorContrastProbe",
    "NavigationProbe",
    "ReadabilityProbe",
    "CTAProbe",
    "FormsProbe",
    "InteractiveElementsProbe",
    "KeyboardNavigationProbe",
    "SEOProbe",
    "ResponsiveProbe",
    "AccessibilityProbe",
]
