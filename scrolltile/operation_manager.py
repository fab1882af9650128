"""
Operation Manager

Handles interactive move and resize operations for windows.
"""

from __future__ import annotations
import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional, Union

from . import topics
from .grab import MoveGrab, ResizeGrab

if TYPE_CHECKING:
    from .animation import Easer
    from .config import TilingConfig
    from .events import (
        ButtonPressEvent,
        ButtonReleaseEvent,
        KeyPressEvent,
        MonitorEnteredEvent,
        MotionEvent,
    )
    from .host import Host, HostCapabilities, HostWindow
    from .tiling.spaces import Spaces
    from .tiling.window import WindowHandle

logger = logging.getLogger(__name__)


class OpType(Enum):
    """Type of interactive operation."""

    NONE = auto()
    MOVE = auto()
    RESIZE = auto()


class OperationManager:
    """Manages interactive move and resize operations.

    At most one grab runs at a time. The manager holds the bus subscriptions
    for input events and forwards each one to the running grab, dropping the
    grab once it reports itself finished.
    """

    def __init__(
        self,
        spaces: "Spaces",
        host: "Host",
        easer: "Easer",
        config: "TilingConfig",
        capabilities: "HostCapabilities",
    ):
        self.spaces = spaces
        self.host = host
        self.easer = easer
        self.config = config
        self.capabilities = capabilities
        self.current: Optional[Union[MoveGrab, ResizeGrab]] = None

        self._setup_subscriptions()

    def _subscriptions(self):
        return (
            (self._on_pointer_motion, topics.POINTER_MOTION),
            (self._on_button_press, topics.POINTER_BUTTON_PRESS),
            (self._on_button_release, topics.POINTER_BUTTON_RELEASE),
            (self._on_background_motion, topics.BACKGROUND_MOTION),
            (self._on_entered_monitor, topics.WINDOW_ENTERED_MONITOR),
            (self._on_key_press, topics.KEY_PRESS),
            (self._on_size_changed, topics.WINDOW_SIZE_CHANGED),
            (self._on_window_closed, topics.WINDOW_CLOSED),
            (self._on_cancel_grab, topics.CMD_CANCEL_GRAB),
            (self._on_drag_ended, topics.DRAG_ENDED),
            (self._on_resize_ended, topics.RESIZE_ENDED),
        )

    def _setup_subscriptions(self):
        """Subscribe to input and command events."""
        from pubsub import pub

        for listener, topic in self._subscriptions():
            pub.subscribe(listener, topic)

    def teardown(self):
        """Cancel any grab and unsubscribe from the bus."""
        from pubsub import pub

        self.cancel_operation()
        for listener, topic in self._subscriptions():
            pub.unsubscribe(listener, topic)

    def _dispatch(self, topic: str, **kwargs):
        """Forward an input event to the running grab."""
        grab = self.current
        if grab is None:
            return
        grab.dispatch(topic, **kwargs)
        self._reap()

    def _reap(self):
        if self.current is not None and self.current.finished:
            logger.debug("Operation on %r finished", self.current.window)
            self.current = None

    def is_active(self) -> bool:
        """Check if an operation is currently active."""
        return self.current is not None

    def get_operation_type(self) -> OpType:
        """Get the current operation type."""
        if isinstance(self.current, MoveGrab):
            return OpType.MOVE
        if isinstance(self.current, ResizeGrab):
            return OpType.RESIZE
        return OpType.NONE

    def get_current_window(self) -> Optional["WindowHandle"]:
        """Get the window involved in the current operation."""
        return self.current.window if self.current else None

    def start_move(self, window: "WindowHandle", center: bool = False) -> bool:
        """Start an interactive move operation.

        Args:
            window: The window to move
            center: Float the window centred on the pointer at once

        Returns:
            True if operation started, False if operation already active
            or the window has no grid to move in
        """
        if self.current is not None:
            return False

        grab = MoveGrab(
            window, self.spaces, self.host, self.easer, self.config, self.capabilities
        )
        if not grab.begin(center=center):
            return False
        self.current = grab
        if center:
            grab.begin_dnd(center=True)
        return True

    def start_resize(self, window: "WindowHandle") -> bool:
        """Start an interactive resize operation.

        Returns:
            True if operation started, False if operation already active
            or the window is not tiled
        """
        if self.current is not None:
            return False

        grab = ResizeGrab(window, self.spaces)
        if not grab.active:
            return False
        self.current = grab
        return True

    def end_operation(self):
        """End the current operation, committing its result."""
        if not self.current:
            return
        self.current.end()
        self._reap()

    def cancel_operation(self):
        """Abandon the current operation."""
        grab = self.current
        if grab is None:
            return
        if isinstance(grab, MoveGrab):
            grab.cancel()
        else:
            grab.end()
        self.current = None

    # Event handlers

    def _on_pointer_motion(self, event: "MotionEvent"):
        self._dispatch(topics.POINTER_MOTION, event=event)

    def _on_button_press(self, event: "ButtonPressEvent"):
        self._dispatch(topics.POINTER_BUTTON_PRESS, event=event)

    def _on_button_release(self, event: "ButtonReleaseEvent"):
        self._dispatch(topics.POINTER_BUTTON_RELEASE, event=event)

    def _on_background_motion(self, workspace_id: int, event: "MotionEvent"):
        self._dispatch(topics.BACKGROUND_MOTION, workspace_id=workspace_id, event=event)

    def _on_entered_monitor(self, window: "HostWindow", event: "MonitorEnteredEvent"):
        self._dispatch(topics.WINDOW_ENTERED_MONITOR, window=window, event=event)

    def _on_key_press(self, event: "KeyPressEvent"):
        self._dispatch(topics.KEY_PRESS, event=event)

    def _on_size_changed(self, window: "HostWindow"):
        self._dispatch(topics.WINDOW_SIZE_CHANGED, window=window)

    def _on_window_closed(self, window: "HostWindow"):
        """Handle WINDOW_CLOSED event."""
        grab = self.current
        if grab is None or grab.window.window_id != window.window_id:
            return
        logger.debug("Window %s closed mid-operation", window.window_id)
        if isinstance(grab, MoveGrab):
            grab.destroy()
        else:
            grab.disconnect_all()
            grab.active = False
        self.current = None

    def _on_cancel_grab(self):
        """Handle CMD_CANCEL_GRAB event."""
        self.cancel_operation()

    def _on_drag_ended(self, window: "WindowHandle", committed: bool, grid):
        """Handle DRAG_ENDED event."""
        if isinstance(self.current, MoveGrab) and self.current.window == window:
            self.current = None

    def _on_resize_ended(self, window: "WindowHandle"):
        """Handle RESIZE_ENDED event."""
        if isinstance(self.current, ResizeGrab) and self.current.window == window:
            self.current = None
