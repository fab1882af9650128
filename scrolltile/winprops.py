"""
Window Properties

Per-window rules, matched on WM class and title, that decide how a newly
mapped window enters the layout.

    registry.define(WinProp(wm_class="Riot", scratch_layer=True))
    registry.define(WinProp(wm_class=re.compile("firefox", re.I),
                            preferred_width="50%"))

User-supplied rules (load_user_props) always take precedence over rules
defined in code.
"""

from __future__ import annotations
import json
import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .host import HostWindow

logger = logging.getLogger(__name__)

Matcher = Union[str, re.Pattern]

_REGEX_LITERAL = re.compile(r"^/(.+)/([a-z]*)$")
_REGEX_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL}


def parse_matcher(value: Optional[str]) -> Optional[Matcher]:
    """Turn "/inner/flags" into a compiled regex; anything else stays a string."""
    if value is None or not isinstance(value, str):
        return value
    match = _REGEX_LITERAL.match(value)
    if not match:
        return value
    inner, flags = match.groups()
    compiled_flags = 0
    for flag in flags:
        # g, u and y have no Python equivalent and do not change matching here
        compiled_flags |= _REGEX_FLAGS.get(flag, 0)
    try:
        return re.compile(inner, compiled_flags)
    except re.error as e:
        raise ValueError(f"Invalid regex {value!r}: {e}") from e


def parse_width(value: Union[str, int, float, None]) -> Optional[Tuple[float, str]]:
    """
    Parse a preferred width into (value, unit).

    Accepts:
    - "50%": fraction of the work area width
    - "400px" or 400: pixels
    """
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return (float(value), "px")
    digits = re.search(r"\d+(\.\d+)?", value)
    unit = re.search(r"[a-zA-Z%]+", value)
    number = float(digits.group(0)) if digits else 0.0
    unit_name = unit.group(0).lower() if unit else "px"
    if unit_name not in ("px", "%"):
        raise ValueError(f"Invalid width unit in {value!r}. Use % or px")
    return (number, unit_name)


def _matches(matcher: Optional[Matcher], value: str) -> bool:
    if isinstance(matcher, re.Pattern):
        return matcher.search(value) is not None
    return matcher == value


@dataclass
class WinProp:
    """A rule applied to windows it matches."""

    wm_class: Matcher
    title: Optional[Matcher] = None
    scratch_layer: bool = False
    preferred_width: Optional[Union[str, int, float]] = None
    focus: bool = False
    user: bool = False  # came from user settings

    def __post_init__(self):
        self.wm_class = parse_matcher(self.wm_class)
        self.title = parse_matcher(self.title)
        self._width = parse_width(self.preferred_width)

    def matches(self, window: "HostWindow") -> bool:
        if not _matches(self.wm_class, window.wm_class or ""):
            return False
        if self.title and not _matches(self.title, window.title or ""):
            return False
        return True

    def resolve_width(self, available_width: float) -> Optional[float]:
        """Preferred width in pixels for a work area of available_width."""
        if self._width is None:
            return None
        value, unit = self._width
        if unit == "%":
            return round(available_width * value / 100)
        return value


class WinPropRegistry:
    """Ordered list of window rules; the first match wins."""

    def __init__(self, props: Optional[Iterable[WinProp]] = None):
        self.props: List[WinProp] = []
        for prop in props or ():
            self.define(prop)

    def define(self, prop: WinProp):
        """Add a rule, keeping user rules ahead of code-defined ones."""
        self.props.append(prop)
        # Stable sort: relative order inside each group is kept
        self.props.sort(key=lambda p: not p.user)

    def find(self, window: "HostWindow") -> Optional[WinProp]:
        for prop in self.props:
            if prop.matches(window):
                return prop
        return None

    def load_user_props(self, values: Iterable[str]):
        """Add rules from JSON object strings, as stored in user settings."""
        for value in values:
            try:
                data = json.loads(value)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid winprop JSON {value!r}: {e}") from e
            if not isinstance(data, dict) or "wm_class" not in data:
                raise ValueError(f"Winprop needs a wm_class: {value!r}")
            known = {
                k: data[k]
                for k in ("wm_class", "title", "scratch_layer", "preferred_width", "focus")
                if k in data
            }
            self.define(WinProp(user=True, **known))
            logger.debug("Loaded user winprop %s", known)

    def remove_user_props(self):
        self.props = [p for p in self.props if not p.user]

    def reload_user_props(self, values: Iterable[str]):
        """Replace every user rule with the given set."""
        self.remove_user_props()
        self.load_user_props(values)
