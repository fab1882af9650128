"""
Tiling Configuration

A frozen snapshot of every tunable the core reads. The integration layer owns
the live preferences and hands the core a new snapshot when they change.
"""

from __future__ import annotations
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping

from .protocol import Modifiers


def parse_modifier(value: str | int | Modifiers) -> Modifiers:
    """
    Parse a modifier name into a Modifiers flag.

    Accepts:
    - Modifiers value or plain int
    - Name string: "ctrl", "shift", "alt", "super" (case-insensitive)
    """
    if isinstance(value, Modifiers):
        return value
    if isinstance(value, int):
        return Modifiers(value)
    if isinstance(value, str):
        names = {
            "ctrl": Modifiers.CTRL,
            "control": Modifiers.CTRL,
            "shift": Modifiers.SHIFT,
            "alt": Modifiers.MOD1,
            "super": Modifiers.MOD4,
            "logo": Modifiers.MOD4,
        }
        try:
            return names[value.strip().lower()]
        except KeyError:
            raise ValueError(f"Invalid modifier: {value!r}") from None
    raise ValueError(f"Invalid modifier type: {type(value)}. Use a name or Modifiers")


@dataclass(frozen=True)
class TilingConfig:
    """Layout and gesture configuration."""

    # Layout settings
    window_gap: int = 20
    vertical_margin: int = 3
    vertical_margin_bottom: int = 3
    horizontal_margin: int = 19

    # Animation
    animation_time_ms: int = 250

    # Workspace overview scale, used as zoom when no grid overrides it
    minimap_scale: float = 0.15

    # Pointer barrier at monitor edges (consumed by the host)
    pressure_barrier: bool = True

    # Drag gesture
    drag_threshold: int = 300  # vertical distance that promotes to freefloat
    drag_scale_range: int = 500  # cubic falloff denominator
    freefloat_modifier: Modifiers = Modifiers.CTRL
    dnd_scale: float = 0.5
    dnd_opacity: int = 240

    # Drop zones
    column_zone_margin: int = 100
    row_zone_margin: int = 250

    def __post_init__(self):
        """Validate values and enforce the vertical margin floor."""
        for name in (
            "window_gap",
            "vertical_margin",
            "vertical_margin_bottom",
            "horizontal_margin",
            "animation_time_ms",
            "drag_threshold",
            "column_zone_margin",
            "row_zone_margin",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.drag_scale_range <= 0:
            raise ValueError("drag_scale_range must be > 0")
        if not 0 < self.dnd_scale <= 1:
            raise ValueError(f"dnd_scale must be in (0, 1], got {self.dnd_scale}")
        if not 0 <= self.dnd_opacity <= 255:
            raise ValueError(f"dnd_opacity must be in [0, 255], got {self.dnd_opacity}")

        object.__setattr__(
            self, "freefloat_modifier", parse_modifier(self.freefloat_modifier)
        )
        # Windows never touch the screen edge closer than half a gap
        object.__setattr__(
            self,
            "vertical_margin",
            max(round(self.window_gap / 2), self.vertical_margin),
        )

    @property
    def half_gap(self) -> float:
        return self.window_gap / 2

    @property
    def animation_time(self) -> float:
        """Animation duration in seconds."""
        return self.animation_time_ms / 1000

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> "TilingConfig":
        """Build a config from a preferences mapping.

        Keys may use dashes ("window-gap") or underscores. Unknown keys are
        ignored so a full preferences dump can be passed through. The legacy
        "animation-time" key is in seconds.
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in settings.items():
            name = key.replace("-", "_")
            if name == "animation_time":
                kwargs["animation_time_ms"] = int(round(float(value) * 1000))
            elif name in known:
                kwargs[name] = value
        return cls(**kwargs)

    def replace(self, **changes) -> "TilingConfig":
        """Return a copy with the given fields changed."""
        return replace(self, **changes)
