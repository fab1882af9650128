"""
Event Topics for scrolltile

All pub/sub topics are defined here for easy discovery and documentation.
Topic naming convention: <category>.<action>

Host notifications are published by the compositor integration layer with the
keyword arguments listed in each docstring. Every publisher of a topic must
use the same keyword arguments, since PyPubSub fixes a topic's message data
specification on first use.
"""

# Window lifecycle events (published by the host)
WINDOW_CREATED = "window.created"
"""Published when the host maps a new window. Params: window, workspace_id"""

WINDOW_CLOSED = "window.closed"
"""Published when a window is destroyed. Params: window"""

WINDOW_SIZE_CHANGED = "window.size_changed"
"""Published when a window's frame size changes. Params: window"""

WINDOW_ENTERED_MONITOR = "window.entered_monitor"
"""Published when a window's frame enters another monitor. Params: window, event"""

# Workspace events (published by the host)
WORKSPACE_CREATED = "workspace.created"
"""Published when a workspace comes into existence. Params: workspace_id, monitor"""

WORKSPACE_REMOVED = "workspace.removed"
"""Published when a workspace is destroyed. Params: workspace_id"""

WORKSPACE_SWITCHED = "workspace.switched"
"""Published when a monitor shows another workspace. Params: workspace_id, monitor"""

# Pointer and keyboard events (published by the host while a grab is active)
POINTER_MOTION = "pointer.motion"
"""Pointer motion over the grab actor. Params: event (MotionEvent)"""

POINTER_BUTTON_PRESS = "pointer.button_press"
"""Button press anywhere on the stage. Params: event (ButtonPressEvent)"""

POINTER_BUTTON_RELEASE = "pointer.button_release"
"""Button release on the grab actor. Params: event (ButtonReleaseEvent)"""

BACKGROUND_MOTION = "pointer.background_motion"
"""Pointer motion over a workspace background. Params: workspace_id, event"""

KEY_PRESS = "key.press"
"""Key press while a grab holds the keyboard. Params: event (KeyPressEvent)"""

# Gesture notifications (published by the core)
DRAG_STARTED = "drag.started"
"""Published when a move grab begins. Params: window"""

DRAG_MODE_CHANGED = "drag.mode_changed"
"""Published when a move grab changes mode. Params: window, mode"""

DROP_ZONE_CHANGED = "drag.drop_zone_changed"
"""Published when the highlighted drop zone changes. Params: window, zone (or None)"""

DRAG_ENDED = "drag.ended"
"""Published when a move grab ends. Params: window, committed, grid (or None)"""

RESIZE_ENDED = "resize.ended"
"""Published when a resize grab ends. Params: window"""

# Layout notifications (published by the core)
GRID_LAID_OUT = "grid.laid_out"
"""Published after a grid recomputed its targets. Params: workspace_id, animate"""

GRID_MOVE_DONE = "grid.move_done"
"""Published when a grid's scroll and window transitions settled. Params: workspace_id"""

# Command events (imperative, published by bindings or IPC)
CMD_START_MOVE = "cmd.start_move"
"""Command: Start interactive window move. Params: window, center"""

CMD_START_RESIZE = "cmd.start_resize"
"""Command: Start interactive window resize. Params: window"""

CMD_END_RESIZE = "cmd.end_resize"
"""Command: End the interactive resize in progress."""

CMD_CANCEL_GRAB = "cmd.cancel_grab"
"""Command: Cancel the move grab in progress, restoring the origin position."""
