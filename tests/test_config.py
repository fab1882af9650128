"""
Unit tests for TilingConfig.
"""

import pytest

from scrolltile.config import TilingConfig, parse_modifier
from scrolltile.protocol import Modifiers


@pytest.mark.unit
class TestTilingConfig:
    """Test config defaults and validation."""

    def test_defaults(self):
        config = TilingConfig()

        assert config.window_gap == 20
        assert config.horizontal_margin == 19
        assert config.animation_time_ms == 250
        assert config.animation_time == 0.25
        assert config.half_gap == 10
        assert config.freefloat_modifier == Modifiers.CTRL

    def test_vertical_margin_floor(self):
        """Test the vertical margin is at least half the gap."""
        assert TilingConfig().vertical_margin == 10
        assert TilingConfig(window_gap=40, vertical_margin=5).vertical_margin == 20
        assert TilingConfig(window_gap=10, vertical_margin=30).vertical_margin == 30

    @pytest.mark.parametrize(
        "changes",
        [
            {"window_gap": -1},
            {"horizontal_margin": -5},
            {"animation_time_ms": -1},
            {"drag_scale_range": 0},
            {"dnd_scale": 0},
            {"dnd_scale": 1.5},
            {"dnd_opacity": 300},
        ],
    )
    def test_invalid_values(self, changes):
        with pytest.raises(ValueError):
            TilingConfig(**changes)

    def test_frozen(self):
        config = TilingConfig()
        with pytest.raises(AttributeError):
            config.window_gap = 5

    def test_replace(self):
        config = TilingConfig().replace(window_gap=30)
        assert config.window_gap == 30
        assert config.vertical_margin == 15

    def test_from_settings(self):
        config = TilingConfig.from_settings(
            {
                "window-gap": 12,
                "horizontal-margin": 40,
                "animation-time": 0.4,
                "freefloat-modifier": "alt",
                "unknown-key": True,
            }
        )

        assert config.window_gap == 12
        assert config.horizontal_margin == 40
        assert config.animation_time_ms == 400
        assert config.freefloat_modifier == Modifiers.MOD1

    def test_from_settings_validates(self):
        with pytest.raises(ValueError):
            TilingConfig.from_settings({"window-gap": -3})


@pytest.mark.unit
class TestParseModifier:
    def test_names(self):
        assert parse_modifier("ctrl") == Modifiers.CTRL
        assert parse_modifier("Super") == Modifiers.MOD4
        assert parse_modifier(" shift ") == Modifiers.SHIFT

    def test_passthrough(self):
        assert parse_modifier(Modifiers.MOD1) == Modifiers.MOD1
        assert parse_modifier(4) == Modifiers.CTRL

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_modifier("hyper")
        with pytest.raises(ValueError):
            parse_modifier(None)
