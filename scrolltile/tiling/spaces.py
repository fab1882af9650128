"""
Workspace Grids

Spaces owns one Grid per workspace and the window -> workspace index that
keeps every window in at most one grid.
"""

from __future__ import annotations
import logging
from typing import Dict, Iterator, Optional, TYPE_CHECKING

from .grid import Grid
from .window import WindowHandle

if TYPE_CHECKING:
    from ..animation import Easer
    from ..config import TilingConfig
    from ..host import HostWindow, Monitor, Stage, WorkspaceLayoutPolicy
    from ..winprops import WinPropRegistry

logger = logging.getLogger(__name__)


class Spaces:
    """
    Manages the grids of all workspaces.

    This component subscribes to window and workspace lifecycle events.

    Responsibilities:
    - Create and destroy grids with their workspaces
    - Track which monitor shows which workspace
    - Wrap host windows in WindowHandles
    - Tile newly mapped windows (honouring winprops) and drop closed ones
    - Keep the window -> workspace index consistent with grid membership
    """

    def __init__(
        self,
        config: "TilingConfig",
        easer: "Easer",
        stage: Optional["Stage"] = None,
        policy: Optional["WorkspaceLayoutPolicy"] = None,
        winprops: Optional["WinPropRegistry"] = None,
    ):
        self.config = config
        self.easer = easer
        self.stage = stage
        self.policy = policy
        self.winprops = winprops

        self.grids: Dict[int, Grid] = {}  # workspace_id -> Grid
        self.handles: Dict[int, WindowHandle] = {}  # window_id -> handle
        self.window_workspace: Dict[int, int] = {}  # window_id -> workspace_id
        self.active_workspace: Dict[int, int] = {}  # monitor index -> workspace_id

        self._setup_subscriptions()

    def _setup_subscriptions(self):
        """Subscribe to events Spaces cares about."""
        from pubsub import pub
        from .. import topics

        pub.subscribe(self._on_window_created, topics.WINDOW_CREATED)
        pub.subscribe(self._on_window_closed, topics.WINDOW_CLOSED)
        pub.subscribe(self._on_workspace_created, topics.WORKSPACE_CREATED)
        pub.subscribe(self._on_workspace_removed, topics.WORKSPACE_REMOVED)
        pub.subscribe(self._on_workspace_switched, topics.WORKSPACE_SWITCHED)

    def teardown(self):
        """Unsubscribe from the bus."""
        from pubsub import pub
        from .. import topics

        pub.unsubscribe(self._on_window_created, topics.WINDOW_CREATED)
        pub.unsubscribe(self._on_window_closed, topics.WINDOW_CLOSED)
        pub.unsubscribe(self._on_workspace_created, topics.WORKSPACE_CREATED)
        pub.unsubscribe(self._on_workspace_removed, topics.WORKSPACE_REMOVED)
        pub.unsubscribe(self._on_workspace_switched, topics.WORKSPACE_SWITCHED)

    def __iter__(self) -> Iterator[Grid]:
        return iter(list(self.grids.values()))

    # Workspaces

    def ensure_grid(self, workspace_id: int, monitor: "Monitor") -> Grid:
        """Get the grid for a workspace, creating it on first use."""
        grid = self.grids.get(workspace_id)
        if grid is None:
            grid = Grid(workspace_id, monitor, self.config, self.easer, self.stage)
            self.grids[workspace_id] = grid
            self.active_workspace.setdefault(monitor.index, workspace_id)
            logger.debug("Created %r on monitor %d", grid, monitor.index)
        return grid

    def remove_workspace(self, workspace_id: int) -> Optional[Grid]:
        grid = self.grids.pop(workspace_id, None)
        if grid is None:
            return None
        for window in grid.windows():
            self.window_workspace.pop(window.window_id, None)
        for monitor_index, ws_id in list(self.active_workspace.items()):
            if ws_id == workspace_id:
                del self.active_workspace[monitor_index]
        return grid

    def switch_workspace(self, monitor: "Monitor", workspace_id: int):
        grid = self.ensure_grid(workspace_id, monitor)
        grid.monitor = monitor
        self.active_workspace[monitor.index] = workspace_id

    def active_grid(self, monitor: "Monitor") -> Optional[Grid]:
        workspace_id = self.active_workspace.get(monitor.index)
        if workspace_id is None:
            return None
        return self.grids.get(workspace_id)

    # Windows

    def handle_for(self, window: "HostWindow") -> WindowHandle:
        """Get the handle wrapping a host window, creating it if needed."""
        handle = self.handles.get(window.window_id)
        if handle is None:
            handle = WindowHandle(window)
            self.handles[window.window_id] = handle
        return handle

    def grid_of(self, window: WindowHandle) -> Optional[Grid]:
        """The grid window is tiled in, or None."""
        workspace_id = self.window_workspace.get(window.window_id)
        if workspace_id is None:
            return None
        grid = self.grids.get(workspace_id)
        if grid is None or window not in grid:
            # Stale index entry
            self.window_workspace.pop(window.window_id, None)
            return None
        return grid

    def add_window(
        self,
        grid: Grid,
        window: WindowHandle,
        column_index: int,
        row_index: Optional[int] = None,
    ) -> bool:
        """Tile window in grid, taking it out of any other grid first."""
        current = self.grid_of(window)
        if current is not None and current is not grid:
            current.remove(window)
        if not grid.insert(window, column_index, row_index):
            return False
        self.window_workspace[window.window_id] = grid.workspace_id
        return True

    def remove_window(self, window: WindowHandle) -> Optional[Grid]:
        """Untile window. Returns the grid it left, or None."""
        grid = self.grid_of(window)
        self.window_workspace.pop(window.window_id, None)
        if grid is None:
            return None
        grid.remove(window)
        return grid

    def set_config(self, config: "TilingConfig"):
        """Swap in a new config snapshot and relayout every grid."""
        self.config = config
        self.easer.duration_ms = config.animation_time_ms
        for grid in self:
            grid.config = config
            grid.layout()

    # Event handlers

    def _on_window_created(self, window: "HostWindow", workspace_id: int):
        """Handle WINDOW_CREATED event."""
        handle = self.handle_for(window)
        if self.grid_of(handle) is not None:
            return

        prop = self.winprops.find(window) if self.winprops else None
        if prop and prop.scratch_layer:
            if self.policy:
                self.policy.make_scratch(window)
            return
        if self.policy and self.policy.is_scratch(window):
            return

        grid = self.grids.get(workspace_id)
        if grid is None:
            logger.warning("Window %s mapped on unknown workspace %s", window.window_id, workspace_id)
            return

        if prop:
            width = prop.resolve_width(grid.monitor.work_area.width)
            if width is not None:
                handle.target_width = width

        index = grid.column_index(grid.selected_window) + 1 if grid.selected_window else 0
        self.add_window(grid, handle, index)
        grid.selected_window = handle
        grid.layout()
        grid.ensure_viewport(handle)

        if prop and prop.focus and self.policy:
            self.policy.activate(window)

    def _on_window_closed(self, window: "HostWindow"):
        """Handle WINDOW_CLOSED event."""
        handle = self.handles.pop(window.window_id, None)
        if handle is None:
            return
        grid = self.remove_window(handle)
        self.easer.remove_ease(handle.clone)
        if grid is not None:
            grid.layout()

    def _on_workspace_created(self, workspace_id: int, monitor: "Monitor"):
        """Handle WORKSPACE_CREATED event."""
        self.ensure_grid(workspace_id, monitor)

    def _on_workspace_removed(self, workspace_id: int):
        """Handle WORKSPACE_REMOVED event."""
        self.remove_workspace(workspace_id)

    def _on_workspace_switched(self, workspace_id: int, monitor: "Monitor"):
        """Handle WORKSPACE_SWITCHED event."""
        self.switch_workspace(monitor, workspace_id)
