"""
Scrolling Grid Layout

A grid is one workspace's tiling: an ordered list of columns, each an ordered
stack of windows. Columns run left to right in scroll coordinates, which pan
horizontally as the grid scrolls across its monitor.

Structural changes (insert/remove) never reposition anything; callers batch
them and then run a single layout() pass.
"""

from __future__ import annotations
import logging
from typing import Dict, Iterator, List, Optional, Tuple, TYPE_CHECKING

from ..host import Actor
from .allocators import Allocator, allocate_default

if TYPE_CHECKING:
    from ..animation import Easer
    from ..config import TilingConfig
    from ..host import Monitor, Stage
    from .window import WindowHandle

logger = logging.getLogger(__name__)


class Grid:
    """Columns of stacked windows on one workspace.

    Coordinate spaces:
    - global: stage coordinates across all monitors
    - viewport: relative to the grid's monitor origin
    - scroll: viewport shifted by the grid's scroll offset; window targets
      live here
    """

    def __init__(
        self,
        workspace_id: int,
        monitor: "Monitor",
        config: "TilingConfig",
        easer: "Easer",
        stage: Optional["Stage"] = None,
    ):
        self.workspace_id = workspace_id
        self.monitor = monitor
        self.config = config
        self.easer = easer
        self.stage = stage

        self.columns: List[List["WindowHandle"]] = []
        self.selected_window: Optional["WindowHandle"] = None

        # Workspace actor at the monitor origin; its scale is the zoom level
        self.actor = Actor(monitor.x, monitor.y, monitor.width, monitor.height)
        # Clone container; its x is the rendered scroll offset
        self.container = Actor(0, 0, monitor.width, monitor.height)
        self.container.parent = self.actor
        # Committed scroll offset (where the container is heading)
        self.target_x: float = 0.0
        self.animating = False

    # Sequence protocol over columns

    def __len__(self) -> int:
        return len(self.columns)

    def __getitem__(self, index: int) -> List["WindowHandle"]:
        return self.columns[index]

    def __iter__(self) -> Iterator[List["WindowHandle"]]:
        return iter(self.columns)

    def __repr__(self):
        return f"Grid(workspace={self.workspace_id}, columns={len(self.columns)})"

    @property
    def zoom(self) -> float:
        return self.actor.scale_x

    @property
    def width(self) -> float:
        return self.monitor.width

    @property
    def height(self) -> float:
        return self.monitor.height

    def windows(self) -> Iterator["WindowHandle"]:
        for column in self.columns:
            yield from column

    def __contains__(self, window: "WindowHandle") -> bool:
        return self.index_of(window) is not None

    # Structure

    def index_of(self, window: "WindowHandle") -> Optional[Tuple[int, int]]:
        """Return (column, row) of window, or None if it is not tiled here."""
        for i, column in enumerate(self.columns):
            for j, member in enumerate(column):
                if member == window:
                    return (i, j)
        return None

    def column_index(self, window: "WindowHandle") -> int:
        """Column of window, or -1."""
        index = self.index_of(window)
        return index[0] if index else -1

    def insert(
        self,
        window: "WindowHandle",
        column_index: int,
        row_index: Optional[int] = None,
    ) -> bool:
        """Place window in the grid.

        Without row_index the window gets a new column at column_index. With
        row_index it joins the existing column at that row (appended when the
        row is out of range); a column_index past the last column appends a
        new column. Returns False, changing nothing, if window is already
        here.
        """
        if window in self:
            logger.debug("%r already in %r, not inserting", window, self)
            return False

        column_index = max(0, min(column_index, len(self.columns)))
        if row_index is None or column_index == len(self.columns):
            self.columns.insert(column_index, [window])
        else:
            column = self.columns[column_index]
            row_index = max(0, min(row_index, len(column)))
            column.insert(row_index, window)

        if self.selected_window is None:
            self.selected_window = window
        if self.stage is not None and window.clone.parent is not self.container:
            self.stage.reparent_to_grid(window.clone, self)
        return True

    def remove(self, window: "WindowHandle") -> bool:
        """Take window out of the grid, dropping its column if it empties."""
        index = self.index_of(window)
        if index is None:
            return False

        i, j = index
        column = self.columns[i]
        del column[j]
        if not column:
            del self.columns[i]

        if self.selected_window == window:
            self.selected_window = self._neighbour(i, j, column_removed=not column)
        return True

    def _neighbour(
        self, i: int, j: int, column_removed: bool
    ) -> Optional["WindowHandle"]:
        """Window closest to a just-vacated cell."""
        if not column_removed:
            column = self.columns[i]
            return column[min(j, len(column) - 1)]
        if i > 0:
            return self.columns[i - 1][0]
        if self.columns:
            return self.columns[0][0]
        return None

    # Layout

    def available_height(self) -> float:
        work = self.monitor.work_area
        return (
            work.height - self.config.vertical_margin - self.config.vertical_margin_bottom
        )

    def top(self) -> float:
        """Viewport y where the first row starts."""
        return self.monitor.panel_height + self.config.vertical_margin

    def _column_width(self, column: List["WindowHandle"]) -> float:
        if self.selected_window is not None and self.selected_window in column:
            return self.selected_window.preferred_width()
        return max(w.preferred_width() for w in column)

    def layout(
        self,
        animate: bool = True,
        custom_allocators: Optional[Dict[int, Allocator]] = None,
    ):
        """Recompute every member's target geometry and move it there.

        custom_allocators maps a column index to the height allocator used for
        that column in this pass only.
        """
        from pubsub import pub
        from .. import topics

        gap = self.config.window_gap
        available = self.available_height()
        top = self.top()
        custom_allocators = custom_allocators or {}

        x = 0.0
        for i, column in enumerate(self.columns):
            allocator = custom_allocators.get(i, allocate_default)
            width = self._column_width(column)
            heights = allocator(column, available, gap)

            y = top
            for window, height in zip(column, heights):
                window.target_x = x
                window.target_y = y
                window.width = width
                window.height = height
                window.target_width = width
                window.target_height = height
                self._place(window, animate)
                y += height + gap
            x += width + gap

        pub.sendMessage(
            topics.GRID_LAID_OUT, workspace_id=self.workspace_id, animate=animate
        )

    def _place(self, window: "WindowHandle", animate: bool):
        clone = window.clone
        if animate:
            self.animating = True
            self.easer.add_ease(clone, {"x": window.target_x, "y": window.target_y})
        else:
            if self.easer.is_easing(clone, "x") or self.easer.is_easing(clone, "y"):
                self.easer.remove_ease(clone)
            clone.x = window.target_x
            clone.y = window.target_y
        self._sync_frame(window)

    def _sync_frame(self, window: "WindowHandle"):
        gx, gy = self.scroll_to_global(window.target_x, window.target_y, use_target=True)
        window.host.move_resize_frame(gx, gy, window.width, window.height)

    def total_width(self) -> float:
        if not self.columns:
            return 0.0
        last = self.columns[-1][0]
        return last.target_x + last.width

    # Scrolling

    def move_to(self, window: "WindowHandle", x: float, animate: bool = True):
        """Scroll so window's left edge lands on viewport x."""
        self.target_x = x - window.target_x
        if animate:
            self.animating = True
            self.easer.add_ease(
                self.container, {"x": self.target_x}, on_complete=self.move_done
            )
        else:
            self.easer.remove_ease(self.container)
            self.container.x = self.target_x
            self.move_done()

    def ensure_viewport(self, window: "WindowHandle", animate: bool = True) -> bool:
        """Scroll the least amount needed to show window. Returns True if it scrolled."""
        if window not in self:
            return False
        margin = self.config.horizontal_margin
        left = self.target_x + window.target_x
        right = left + window.width
        if left < margin:
            self.move_to(window, margin, animate)
            return True
        if right > self.width - margin:
            self.move_to(window, max(margin, self.width - margin - window.width), animate)
            return True
        return False

    def move_done(self):
        """Transitions settled: commit frames to their final positions."""
        from pubsub import pub
        from .. import topics

        self.animating = False
        for window in self.windows():
            self._sync_frame(window)
        pub.sendMessage(topics.GRID_MOVE_DONE, workspace_id=self.workspace_id)

    # Coordinate conversion

    def global_to_viewport(self, gx: float, gy: float) -> Tuple[float, float]:
        return (gx - self.monitor.x, gy - self.monitor.y)

    def viewport_to_scroll(
        self, vx: float, vy: float, use_target: bool = False
    ) -> Tuple[float, float]:
        offset = self.target_x if use_target else self.container.x
        return (vx - offset, vy)

    def global_to_scroll(
        self, gx: float, gy: float, use_target: bool = False
    ) -> Tuple[float, float]:
        vx, vy = self.global_to_viewport(gx, gy)
        return self.viewport_to_scroll(vx, vy, use_target)

    def scroll_to_global(
        self, sx: float, sy: float, use_target: bool = False
    ) -> Tuple[float, float]:
        offset = self.target_x if use_target else self.container.x
        return (sx + offset + self.monitor.x, sy + self.monitor.y)
