"""
scrolltile

The tiling core of a scrolling window manager: windows live in columns on an
endless horizontal strip per workspace, and can be dragged between columns,
rows and workspaces.

This package provides:
- The scrolling grid layout (columns of stacked windows)
- Interactive move (drag and drop) and resize gestures
- Drop-zone detection for drag and drop
- Window rules (winprops) applied to newly mapped windows
- Host interfaces a compositor integration layer implements

Example usage:
    from scrolltile import TilingEngine, TilingConfig

    engine = TilingEngine(host, TilingConfig(window_gap=12))
    engine.add_workspace(0, monitor)

Host events are published on the PyPubSub bus (see scrolltile.topics).
"""

__version__ = "0.1.0"

from .protocol import Area, Cursor, Modifiers, Position

from .config import TilingConfig, parse_modifier

from .host import (
    Actor,
    Animator,
    Host,
    HostCapabilities,
    HostWindow,
    Monitor,
    MonitorProvider,
    PointerProvider,
    Scheduler,
    Stage,
    WorkspaceLayoutPolicy,
)

from .animation import Easer, InstantAnimator

from .events import (
    Button,
    ButtonPressEvent,
    ButtonReleaseEvent,
    KeyPressEvent,
    MonitorEnteredEvent,
    MotionEvent,
)

from .tiling import Grid, Spaces, WindowHandle, allocate_default, allocate_equal_height

from .dropzone import DropZone, ZoneKind, find_drop_zone

from .grab import DragMode, MoveGrab, ResizeGrab, drag_scale

from .operation_manager import OperationManager, OpType

from .winprops import WinProp, WinPropRegistry

from .engine import TilingEngine

from . import topics

__all__ = [
    # Version
    "__version__",
    # Protocol types
    "Area",
    "Cursor",
    "Modifiers",
    "Position",
    # Config
    "TilingConfig",
    "parse_modifier",
    # Host interfaces
    "Actor",
    "Animator",
    "Host",
    "HostCapabilities",
    "HostWindow",
    "Monitor",
    "MonitorProvider",
    "PointerProvider",
    "Scheduler",
    "Stage",
    "WorkspaceLayoutPolicy",
    # Animation
    "Easer",
    "InstantAnimator",
    # Input events
    "Button",
    "ButtonPressEvent",
    "ButtonReleaseEvent",
    "KeyPressEvent",
    "MonitorEnteredEvent",
    "MotionEvent",
    # Tiling
    "Grid",
    "Spaces",
    "WindowHandle",
    "allocate_default",
    "allocate_equal_height",
    # Drag and drop
    "DropZone",
    "ZoneKind",
    "find_drop_zone",
    "DragMode",
    "MoveGrab",
    "ResizeGrab",
    "drag_scale",
    "OperationManager",
    "OpType",
    # Window rules
    "WinProp",
    "WinPropRegistry",
    # Engine
    "TilingEngine",
    "topics",
]
