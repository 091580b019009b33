"""
Tests for options, presets and configuration
"""

import logging

import pytest
from pydantic import ValidationError

from config import LOG_FORMAT, Settings, configure_logging
from core.enums import Orientation, TargetFormat
from schemas import (
    CompositionOptions,
    Region,
    get_format_presets,
    get_label_presets,
)


class TestCompositionOptions:
    """CompositionOptions validation"""

    def test_defaults(self):
        options = CompositionOptions()

        assert options.before_label == "BEFORE"
        assert options.after_label == "AFTER"
        assert options.orientation == Orientation.HORIZONTAL
        assert options.target_format == TargetFormat.ORIGINAL

    def test_parses_strings(self):
        options = CompositionOptions(orientation="vertical", target_format="instagram-square")

        assert options.orientation == Orientation.VERTICAL
        assert options.target_format == TargetFormat.INSTAGRAM_SQUARE

    def test_unknown_format_rejected(self):
        with pytest.raises(ValidationError):
            CompositionOptions(target_format="tiktok")

    def test_multiline_label_rejected(self):
        with pytest.raises(ValidationError):
            CompositionOptions(before_label="TWO\nLINES")

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError):
            CompositionOptions(quality=80)

    def test_immutable(self):
        options = CompositionOptions()
        with pytest.raises(ValidationError):
            options.before_label = "OTHER"

    def test_from_preset(self):
        options = CompositionOptions.from_preset(
            "clogged-clear", target_format=TargetFormat.TWITTER_POST
        )

        assert (options.before_label, options.after_label) == ("CLOGGED", "CLEAR")
        assert options.target_format == TargetFormat.TWITTER_POST

    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            CompositionOptions.from_preset("good-bad")


class TestPresets:
    """Preset listings"""

    def test_label_presets(self):
        presets = get_label_presets()

        assert [p.id for p in presets] == [
            "before-after",
            "dirty-clean",
            "broken-fixed",
            "clogged-clear",
            "old-new",
        ]
        assert presets[0].left_label == "BEFORE"
        assert presets[0].right_label == "AFTER"

    def test_format_presets(self):
        presets = {p.id: p for p in get_format_presets()}

        assert set(presets) == set(TargetFormat)
        assert presets[TargetFormat.ORIGINAL].width is None
        assert (presets[TargetFormat.INSTAGRAM_STORY].width, presets[TargetFormat.INSTAGRAM_STORY].height) == (1080, 1920)
        assert presets[TargetFormat.FACEBOOK_POST].ratio.startswith("1.91:1")


class TestRegion:
    """Region geometry"""

    def test_edges(self):
        region = Region(x=10, y=20, width=30, height=40)

        assert (region.x2, region.y2) == (40, 60)
        assert region.bounds == (10, 20, 40, 60)
        assert region.area_pixels == 1200

    def test_contains(self):
        outer = Region(x=0, y=0, width=100, height=100)

        assert outer.contains(Region(x=0, y=0, width=100, height=100))
        assert not outer.contains(Region(x=50, y=50, width=51, height=10))
        assert not outer.contains(Region(x=-1, y=0, width=10, height=10))

    def test_intersection(self):
        canvas = Region(x=0, y=0, width=100, height=50)

        assert Region(x=-10, y=40, width=30, height=30).intersection(canvas) == Region(
            x=0, y=40, width=20, height=10
        )
        assert canvas.intersection(Region(x=10, y=10, width=5, height=5)).area_pixels == 25
        assert canvas.intersection(Region(x=200, y=0, width=5, height=5)).area_pixels == 0

    def test_from_points(self):
        assert Region.from_points(30, 40, 10, 20).to_dict() == {
            "x": 10,
            "y": 20,
            "width": 20,
            "height": 20,
        }


class TestSettings:
    """Environment-driven configuration"""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.compositor.separator_px == 15
        assert settings.compositor.jpeg_quality == 95
        assert settings.system.log_level == "INFO"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("COMPOSITOR_SYSTEM__LOG_LEVEL", "debug")
        monkeypatch.setenv("COMPOSITOR_COMPOSITOR__JPEG_QUALITY", "80")

        settings = Settings(_env_file=None)

        assert settings.system.log_level == "DEBUG"
        assert settings.compositor.jpeg_quality == 80

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, system={"log_level": "LOUD"})

    def test_to_dict(self):
        data = Settings(_env_file=None).to_dict()
        assert data["compositor"]["separator_px"] == 15

    def test_configure_logging(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        configure_logging(Settings(_env_file=None, system={"log_level": "warning"}))

        assert calls["level"] == logging.WARNING
        assert calls["format"] == LOG_FORMAT
        assert logging.getLogger("PIL").level == logging.WARNING
