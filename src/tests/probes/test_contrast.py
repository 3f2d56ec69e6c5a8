"""Tests for WCAG contrast math and the color contrast probe."""

import pytest

from src.models.audit_models import CheckStatus, Severity
from src.probes.contrast import (
    ColorContrastProbe,
    contrast_ratio,
    find_contrast_issues,
    is_low_contrast,
    parse_rgb,
    relative_luminance,
)

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


class TestContrastMath:
    """Tests for luminance and contrast ratio."""

    def test_black_on_white_is_21(self):
        assert contrast_ratio(BLACK, WHITE) == pytest.approx(21.0)

    def test_ratio_is_symmetric(self):
        assert contrast_ratio(WHITE, BLACK) == contrast_ratio(BLACK, WHITE)

    def test_equal_colors_ratio_is_one(self):
        gray = (128, 128, 128)
        assert contrast_ratio(gray, gray) == pytest.approx(1.0)

    def test_luminance_bounds(self):
        assert relative_luminance(BLACK) == 0.0
        assert relative_luminance(WHITE) == pytest.approx(1.0)

    def test_deterministic(self):
        fg, bg = (118, 118, 118), (255, 255, 255)
        assert contrast_ratio(fg, bg) == contrast_ratio(fg, bg)

    def test_aa_threshold(self):
        # #767676 on white is the darkest gray that still passes at ~4.54:1
        assert not is_low_contrast("rgb(118, 118, 118)", "rgb(255, 255, 255)")
        assert is_low_contrast("rgb(150, 150, 150)", "rgb(255, 255, 255)")


class TestParseRgb:
    """Tests for computed color parsing."""

    def test_rgb(self):
        assert parse_rgb("rgb(12, 34, 56)") == (12, 34, 56)

    def test_rgba_ignores_alpha(self):
        assert parse_rgb("rgba(255, 0, 0, 0.5)") == (255, 0, 0)

    def test_unparseable_is_black(self):
        assert parse_rgb("transparent") == BLACK
        assert parse_rgb("") == BLACK


class TestColorContrastProbe:
    """Tests for the probe."""

    def test_find_issues_attaches_ratio(self):
        samples = [
            {"selector": "p >> nth=0", "color": "rgb(0, 0, 0)", "background": "rgb(255, 255, 255)"},
            {"selector": ".muted", "color": "rgb(200, 200, 200)", "background": "rgb(255, 255, 255)"},
        ]

        issues = find_contrast_issues(samples)

        assert [i["selector"] for i in issues] == [".muted"]
        assert issues[0]["contrast"] < 4.5

    @pytest.mark.asyncio
    async def test_all_sufficient_passes(self, session, mock_page):
        mock_page.evaluate.return_value = [
            {"selector": "h1", "color": "rgb(0, 0, 0)", "background": "rgb(255, 255, 255)"}
        ]

        await ColorContrastProbe().run(session)

        finding = session.findings[0]
        assert finding.test == "Color Contrast (WCAG AA)"
        assert finding.status == CheckStatus.PASS
        assert finding.score == 10
        assert session.evidence.problem_areas == []

    @pytest.mark.asyncio
    async def test_low_contrast_warns_and_records_two_areas(self, session, mock_page):
        low = {"color": "rgb(210, 210, 210)", "background": "rgb(255, 255, 255)"}
        mock_page.evaluate.return_value = [
            {**low, "selector": f"#t{i}"} for i in range(7)
        ]

        await ColorContrastProbe().run(session)

        finding = session.findings[0]
        assert finding.status == CheckStatus.WARNING
        assert finding.score == pytest.approx(6.5)
        assert finding.severity == Severity.HIGH
        assert len(finding.recommendations) == 3
        areas = session.evidence.problem_areas
        assert len(areas) == 1
        assert len(areas[0].issues) == 2
