"""
Input Events

Host input is decoded once at the boundary into these small tagged types
before it is published on the event bus. Gesture code never inspects raw
host payloads.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Union

from .protocol import Modifiers

if TYPE_CHECKING:
    from .host import Monitor


class Button(IntEnum):
    """Pointer buttons (linux/input-event-codes.h)."""

    LEFT = 0x110
    RIGHT = 0x111
    MIDDLE = 0x112


# Keysyms the core reacts to
KEY_ESCAPE = 0xFF1B


@dataclass(frozen=True)
class MotionEvent:
    """Pointer moved to global position (x, y)."""

    x: float
    y: float
    modifiers: Modifiers = Modifiers.NONE


@dataclass(frozen=True)
class ButtonPressEvent:
    """Pointer button pressed at global position (x, y)."""

    x: float
    y: float
    button: Button = Button.LEFT
    modifiers: Modifiers = Modifiers.NONE


@dataclass(frozen=True)
class ButtonReleaseEvent:
    """Pointer button released at global position (x, y)."""

    x: float
    y: float
    button: Button = Button.LEFT
    modifiers: Modifiers = Modifiers.NONE


@dataclass(frozen=True)
class KeyPressEvent:
    """Key pressed while a grab holds the keyboard."""

    keysym: int
    modifiers: Modifiers = Modifiers.NONE


@dataclass(frozen=True)
class MonitorEnteredEvent:
    """A window's frame entered a different monitor."""

    monitor: "Monitor"


InputEvent = Union[
    MotionEvent, ButtonPressEvent, ButtonReleaseEvent, KeyPressEvent, MonitorEnteredEvent
]
