"""
Geometry and Input Primitives

Plain value types shared by the layout engine, the drop-zone detector and
the gesture state machines.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntFlag, auto
from typing import Optional, Sequence


class Modifiers(IntFlag):
    """Keyboard modifiers carried on pointer and key events."""

    NONE = 0
    SHIFT = 1
    CTRL = 4
    MOD1 = 8  # Alt
    MOD3 = 32
    MOD4 = 64  # Super/Logo
    MOD5 = 128


class Cursor(Enum):
    """Pointer cursors the core asks the host to show."""

    DEFAULT = auto()
    MOVE_OR_RESIZE_WINDOW = auto()


@dataclass
class Position:
    """Position in logical coordinate space."""

    x: float = 0
    y: float = 0


@dataclass
class Area:
    """Area with position and dimensions."""

    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        return is_in_rect(x, y, self)


def is_in_rect(x: float, y: float, r: Area) -> bool:
    """Half-open containment test: left/top edges inside, right/bottom outside."""
    return r.x <= x < r.x + r.width and r.y <= y < r.y + r.height


def area_at_point(areas: Sequence, x: float, y: float) -> Optional[Area]:
    """Return the first area (or object with an ``area``) containing the point."""
    for item in areas:
        rect = getattr(item, "area", item)
        if is_in_rect(x, y, rect):
            return item
    return None
