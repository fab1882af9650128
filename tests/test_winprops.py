"""
Unit tests for window properties.
"""

import re

import pytest

from scrolltile.winprops import WinProp, WinPropRegistry, parse_matcher, parse_width


@pytest.mark.unit
class TestParsing:
    """Test matcher and width parsing."""

    def test_plain_string(self):
        assert parse_matcher("Firefox") == "Firefox"

    def test_regex_literal(self):
        matcher = parse_matcher("/fire.*/i")
        assert isinstance(matcher, re.Pattern)
        assert matcher.flags & re.IGNORECASE
        assert matcher.search("FIREFOX")

    def test_invalid_regex(self):
        with pytest.raises(ValueError):
            parse_matcher("/(unclosed/")

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("50%", (50.0, "%")),
            ("400px", (400.0, "px")),
            ("400", (400.0, "px")),
            (640, (640.0, "px")),
            (None, None),
        ],
    )
    def test_width(self, value, expected):
        assert parse_width(value) == expected

    def test_width_bad_unit(self):
        with pytest.raises(ValueError):
            parse_width("12em")


@pytest.mark.unit
class TestWinProp:
    """Test matching and width resolution."""

    def test_match_class(self, make_window):
        prop = WinProp(wm_class="Riot")
        assert prop.matches(make_window(wm_class="Riot"))
        assert not prop.matches(make_window(wm_class="riot"))

    def test_match_class_and_title(self, make_window):
        prop = WinProp(wm_class="/term/i", title="/^vim/")
        assert prop.matches(make_window(wm_class="XTerm", title="vim notes"))
        assert not prop.matches(make_window(wm_class="XTerm", title="bash"))

    def test_resolve_width(self):
        assert WinProp(wm_class="a", preferred_width="50%").resolve_width(1920) == 960
        assert WinProp(wm_class="a", preferred_width="300px").resolve_width(1920) == 300
        assert WinProp(wm_class="a").resolve_width(1920) is None


@pytest.mark.unit
class TestWinPropRegistry:
    """Test rule ordering and user rules."""

    def test_first_match_wins(self, make_window):
        registry = WinPropRegistry(
            [WinProp(wm_class="/.*/", focus=True), WinProp(wm_class="Riot")]
        )
        assert registry.find(make_window(wm_class="Riot")).focus

    def test_no_match(self, make_window):
        registry = WinPropRegistry([WinProp(wm_class="Riot")])
        assert registry.find(make_window(wm_class="Other")) is None

    def test_user_props_take_precedence(self, make_window):
        registry = WinPropRegistry([WinProp(wm_class="Riot", scratch_layer=True)])
        registry.load_user_props(['{"wm_class": "Riot", "preferred_width": "50%"}'])

        prop = registry.find(make_window(wm_class="Riot"))
        assert prop.user
        assert not prop.scratch_layer

    def test_user_regex(self, make_window):
        registry = WinPropRegistry()
        registry.load_user_props(['{"wm_class": "/^gimp/i", "scratch_layer": true}'])
        assert registry.find(make_window(wm_class="Gimp-2.10")).scratch_layer

    def test_reload_replaces_user_props(self, make_window):
        registry = WinPropRegistry([WinProp(wm_class="Builtin")])
        registry.load_user_props(['{"wm_class": "A"}', '{"wm_class": "B"}'])
        registry.reload_user_props(['{"wm_class": "C"}'])

        classes = [p.wm_class for p in registry.props]
        assert classes == ["C", "Builtin"]

    @pytest.mark.parametrize("value", ["not json", '["list"]', '{"title": "x"}'])
    def test_invalid_user_props(self, value):
        with pytest.raises(ValueError):
            WinPropRegistry().load_user_props([value])
