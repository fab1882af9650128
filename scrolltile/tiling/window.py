"""
Window Handle

Wraps a host window with the layout state the grid caches for it.
"""

from __future__ import annotations
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..host import Actor, HostWindow
    from ..protocol import Area


class WindowHandle:
    """A host window plus its committed grid geometry.

    target_x/target_y are in the owning grid's scroll coordinates. The handle
    does not know its grid; ask Spaces.grid_of() instead.
    """

    def __init__(self, host_window: "HostWindow"):
        self.host = host_window
        self.target_x: float = 0.0
        self.target_y: float = 0.0
        frame = host_window.get_frame_rect()
        self.width: float = frame.width
        self.height: float = frame.height
        # Size requested by layout; None means "use the live frame size"
        self.target_width: Optional[float] = None
        self.target_height: Optional[float] = None
        # Fractional scroll position used while animating
        self.anchor: float = 0.0

    @property
    def window_id(self) -> int:
        return self.host.window_id

    @property
    def clone(self) -> "Actor":
        return self.host.get_clone()

    @property
    def actor(self) -> "Actor":
        return self.host.get_actor()

    def frame_rect(self) -> "Area":
        return self.host.get_frame_rect()

    def preferred_width(self) -> float:
        if self.target_width is not None:
            return self.target_width
        return self.frame_rect().width

    def preferred_height(self) -> float:
        if self.target_height is not None:
            return self.target_height
        return self.frame_rect().height

    def invalidate_target_size(self):
        """Forget the layout-requested size so the live frame size wins."""
        self.target_width = None
        self.target_height = None

    def __hash__(self):
        return hash(self.window_id)

    def __eq__(self, other):
        if not isinstance(other, WindowHandle):
            return False
        return self.window_id == other.window_id

    def __repr__(self):
        return f"WindowHandle({self.window_id})"
