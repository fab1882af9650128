"""
Interactive Grabs

MoveGrab drives a window from button press to release: first reordering it
inside its own grid, then, once promoted, floating it freely over every
workspace while highlighting the drop zone under the pointer. ResizeGrab keeps
a grid following a window that the host is resizing.

Grabs never subscribe to the bus themselves. The OperationManager owns the
subscriptions and forwards events through Grab.dispatch(), so disconnecting a
grab is just forgetting its handlers.
"""

from __future__ import annotations
import logging
from enum import Enum, auto
from typing import Callable, Dict, Optional, Set, TYPE_CHECKING

from . import topics
from .dropzone import DropZone, ZoneKind, find_drop_zone, same_target
from .events import KEY_ESCAPE
from .protocol import Area, Cursor
from .tiling.allocators import allocate_equal_height

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
    from .host import Actor, Host, HostCapabilities, HostWindow
    from .tiling.grid import Grid
    from .tiling.spaces import Spaces
    from .tiling.window import WindowHandle

logger = logging.getLogger(__name__)


class DragMode(Enum):
    """States of a move grab."""

    IDLE = auto()
    GRABBED = auto()
    REORDER = auto()
    FREEFLOAT = auto()
    ENDED = auto()


def drag_scale(distance: float, threshold: float = 300, scale_range: float = 500) -> float:
    """Visual shrink of a window dragged vertically out of its column."""
    d = min(threshold, abs(distance))
    return 1 - (d / scale_range) ** 3


def _ratio(offset: float, size: float) -> float:
    return offset / size if size else 0.0


class Grab:
    """Handler table for the events a grab currently listens to."""

    def __init__(self):
        self._handlers: Dict[str, Callable] = {}

    def connect(self, topic: str, handler: Callable):
        self._handlers[topic] = handler

    def disconnect_all(self):
        self._handlers.clear()

    def is_connected(self, topic: str) -> bool:
        return topic in self._handlers

    def dispatch(self, topic: str, **kwargs) -> bool:
        """Forward a bus message to the connected handler, if any."""
        handler = self._handlers.get(topic)
        if handler is None:
            return False
        handler(**kwargs)
        return True

    @property
    def finished(self) -> bool:
        raise NotImplementedError


class MoveGrab(Grab):
    """Drag gesture for one window."""

    def __init__(
        self,
        window: "WindowHandle",
        spaces: "Spaces",
        host: "Host",
        easer: "Easer",
        config: "TilingConfig",
        capabilities: "HostCapabilities",
        grid: Optional["Grid"] = None,
    ):
        super().__init__()
        self.window = window
        self.spaces = spaces
        self.host = host
        self.easer = easer
        self.config = config
        self.capabilities = capabilities

        if grid is None:
            grid = spaces.grid_of(window)
        if grid is None:
            grid = self._grid_under_frame()
        # Grid is a sequence of columns, so an empty one is falsy
        self.initial_grid = grid
        self.origin_index = grid.index_of(window) if grid is not None else None
        self.origin_single = (
            self.origin_index is not None
            and len(self.initial_grid[self.origin_index[0]]) == 1
        )
        frame = window.frame_rect()
        self.origin_frame = Area(frame.x, frame.y, frame.width, frame.height)
        self.origin_scroll = grid.target_x if grid is not None else 0.0
        # Whether this was a tiled window at the start of the grab
        self.was_tiled = self.origin_index is not None and not host.policy.is_scratch(
            window.host
        )

        self.mode = DragMode.IDLE
        self.center = False
        self.pointer_offset = (0.0, 0.0)
        self.initial_y = 0.0
        self.scroll_anchor = 0.0
        self.dnd_target: Optional[DropZone] = None
        self.zone_actors: Set["Actor"] = set()
        self._old_opacity = 255

    def __repr__(self):
        return f"MoveGrab({self.window!r}, {self.mode.name})"

    @property
    def finished(self) -> bool:
        return self.mode == DragMode.ENDED

    @property
    def dnd(self) -> bool:
        return self.mode == DragMode.FREEFLOAT

    def _grid_under_frame(self) -> Optional["Grid"]:
        frame = self.window.frame_rect()
        monitor = self.host.monitors.monitor_at_point(
            frame.x + frame.width / 2, frame.y + frame.height / 2
        )
        return self.spaces.active_grid(monitor) if monitor else None

    def _grid_at_point(self, gx: float, gy: float) -> Optional["Grid"]:
        monitor = self.host.monitors.monitor_at_point(gx, gy)
        return self.spaces.active_grid(monitor) if monitor else None

    def _set_mode(self, mode: DragMode):
        from pubsub import pub

        if mode == self.mode:
            return
        logger.debug("%r -> %s", self, mode.name)
        self.mode = mode
        pub.sendMessage(topics.DRAG_MODE_CHANGED, window=self.window, mode=mode)

    # Gesture

    def begin(self, center: bool = False) -> bool:
        """Start the grab. Returns False if it was already started or cannot run."""
        from pubsub import pub

        if self.mode != DragMode.IDLE:
            return False
        if self.initial_grid is None:
            logger.debug("No grid for %r, not grabbing", self.window)
            return False

        logger.debug("begin %r", self.window)
        self.center = center
        self.mode = DragMode.GRABBED

        pointer = self.host.pointer
        if self.capabilities.can_end_grab_op:
            pointer.end_grab_op()
        pointer.set_cursor(Cursor.MOVE_OR_RESIZE_WINDOW)

        window = self.window
        actor = window.actor
        clone = window.clone
        grid = self.initial_grid
        frame = window.frame_rect()

        self.initial_y = window.target_y
        self.easer.remove_ease(clone)
        gx, gy, _ = pointer.get_pointer()

        actor.set_pivot_point(
            _ratio(gx - actor.x, actor.width), _ratio(gy - actor.y, actor.height)
        )

        x, y = grid.global_to_scroll(gx, gy)
        if clone.parent is grid.container:
            self.pointer_offset = (x - clone.x, y - clone.y)
            px = _ratio(x - clone.x, clone.width)
            py = _ratio(y - clone.y, clone.height)
        else:
            self.pointer_offset = (gx - frame.x, gy - frame.y)
            clone.x = frame.x
            clone.y = frame.y
            px = _ratio(gx - clone.x, clone.width)
            py = _ratio(gy - clone.y, clone.height)
        if center:
            clone.set_pivot_point(0, 0)
        else:
            clone.set_pivot_point(px, py)

        self.connect(topics.POINTER_BUTTON_RELEASE, self.end)
        self.connect(topics.POINTER_MOTION, self.motion)
        self.connect(topics.WINDOW_ENTERED_MONITOR, self._on_entered_monitor)
        self.connect(topics.KEY_PRESS, self._on_key_press)

        self.scroll_anchor = x
        grid.animating = True
        self.easer.remove_ease(grid.container)

        pub.sendMessage(topics.DRAG_STARTED, window=window)
        return True

    def motion(self, event: "MotionEvent"):
        window = self.window
        gx, gy = event.x, event.y
        dx, dy = self.pointer_offset
        clone = window.clone

        if self.dnd:
            if not self.easer.retarget(clone, x=gx - dx, y=gy - dy):
                clone.x = gx - dx
                clone.y = gy - dy
            return

        grid = self.initial_grid
        monitor = self.host.monitors.monitor_at_point(gx, gy)
        if monitor != grid.monitor:
            self.begin_dnd()
            return

        if event.modifiers & self.config.freefloat_modifier:
            self.begin_dnd()
            return

        self._set_mode(DragMode.REORDER)
        x, y = grid.global_to_viewport(gx, gy)
        grid.target_x = x - self.scroll_anchor
        grid.container.x = grid.target_x

        clone.y = y - dy

        threshold = self.config.drag_threshold
        distance = min(threshold, abs(clone.y - self.initial_y))
        s = drag_scale(distance, threshold, self.config.drag_scale_range)
        window.actor.set_scale(s, s)
        clone.set_scale(s, s)

        if distance >= threshold:
            self.begin_dnd()

    def begin_dnd(self, center: bool = False):
        """Detach the window from its grid and start tracking drop zones."""
        if self.mode not in (DragMode.GRABBED, DragMode.REORDER):
            return
        self.center = center
        self._set_mode(DragMode.FREEFLOAT)
        logger.debug("begin DnD %r", self.window)

        pointer = self.host.pointer
        pointer.set_cursor(Cursor.MOVE_OR_RESIZE_WINDOW)
        window = self.window
        clone = window.clone
        grid = self.initial_grid
        config = self.config

        gx, gy, _ = pointer.get_pointer()
        if center:
            tx, ty = clone.get_transformed_position()
            point = (round(tx), round(ty))
        else:
            dx, dy = self.pointer_offset
            point = (gx - dx, gy - dy)

        index = grid.index_of(window)
        i = index[0] if index else -1
        single = index is not None and len(grid[i]) == 1
        if self.spaces.remove_window(window) is not None:
            grid.layout()

        self.host.stage.reparent_to_overlay(clone)
        clone.x = round(point[0])
        clone.y = round(point[1])
        new_scale = clone.scale_x * grid.zoom
        clone.set_scale(new_scale, new_scale)

        params = {
            "scale_x": config.dnd_scale,
            "scale_y": config.dnd_scale,
            "opacity": config.dnd_opacity,
        }
        if center:
            self.pointer_offset = (0.0, 0.0)
            clone.set_pivot_point(0, 0)
            params["x"] = gx
            params["y"] = gy

        self._old_opacity = clone.opacity
        self.easer.add_ease(clone, params)

        self.connect(topics.POINTER_BUTTON_PRESS, self.end)

        monitor = self.host.monitors.monitor_at_point(gx, gy)
        on_same = monitor == grid.monitor

        # Scroll so the neighbour closes the gap under the pointer
        x, _ = grid.global_to_viewport(gx, gy)
        half_gap = config.half_gap
        if not center and on_same and single and 0 <= i < len(grid):
            grid.move_to(grid[i][0], x + half_gap)
        elif not center and on_same and single and 0 <= i - 1 < len(grid):
            neighbour = grid[i - 1][0]
            grid.move_to(neighbour, x - neighbour.width - half_gap)
        elif not center and on_same and len(grid) == 0:
            grid.target_x = x
            grid.container.x = x

        self.connect(topics.BACKGROUND_MOTION, self.space_motion)

        target_grid = self._grid_at_point(gx, gy)
        if target_grid is None:
            target_grid = grid
        sx, sy = target_grid.global_to_scroll(gx, gy, use_target=True)
        self.select_dnd_zone(target_grid, sx, sy, initial=single and on_same)

    def space_motion(self, workspace_id: int, event: "MotionEvent"):
        """Pointer moved over a workspace background while floating."""
        grid = self.spaces.grids.get(workspace_id)
        if grid is None:
            return
        sx, sy = grid.global_to_scroll(event.x, event.y, use_target=True)
        self.select_dnd_zone(grid, sx, sy)

    def select_dnd_zone(
        self, grid: "Grid", x: float, y: float, initial: bool = False
    ) -> Optional[DropZone]:
        """Highlight the drop zone at (x, y), in grid scroll coordinates."""
        from pubsub import pub

        target = find_drop_zone(grid, x, y, self.config)
        if not same_target(target, self.dnd_target):
            if self.dnd_target:
                self.deactivate_dnd_target(self.dnd_target)
            if target:
                self.activate_dnd_target(target, initial)
            pub.sendMessage(topics.DROP_ZONE_CHANGED, window=self.window, zone=target)
        return self.dnd_target

    def activate_dnd_target(self, zone: DropZone, first: bool = False):
        stage = self.host.stage
        actor = stage.create_zone_actor()
        params = zone.actor_params
        actor.x = params.get("x", 0)
        actor.y = params.get("y", 0)
        actor.width = params.get("width", 0)
        actor.height = params.get("height", 0)

        zone.actor = actor
        self.dnd_target = zone
        self.zone_actors.add(actor)

        ease = {
            zone.origin_prop: zone.center - zone.margin_a,
            zone.size_prop: zone.margin_a + zone.margin_b,
        }
        if first:
            # Grow the highlight out of the window's own footprint
            if zone.kind == ZoneKind.COLUMN:
                ease["height"] = actor.height
                ease["y"] = actor.y
            clone = self.window.clone
            x, y = zone.grid.global_to_scroll(*clone.get_transformed_position())
            actor.set_position(x, y)
            actor.set_size(*clone.get_transformed_size())
        else:
            setattr(actor, zone.size_prop, 0)
            setattr(actor, zone.origin_prop, zone.center)

        stage.reparent_to_grid(actor, zone.grid)
        self.host.policy.show_selection(zone.grid, False)
        actor.show()
        stage.raise_actor(actor)
        self.easer.add_ease(actor, ease)

    def deactivate_dnd_target(self, zone: Optional[DropZone]):
        if zone:
            self.host.policy.show_selection(zone.grid, True)
            actor = zone.actor

            def destroy():
                actor.destroy()
                self.zone_actors.discard(actor)

            self.easer.add_ease(
                actor,
                {zone.origin_prop: zone.center, zone.size_prop: 0},
                on_complete=destroy,
            )
        self.dnd_target = None

    def _destroy_zone_actors(self):
        for actor in list(self.zone_actors):
            self.easer.remove_ease(actor)
            actor.destroy()
        self.zone_actors.clear()

    def end(self, event: Optional["ButtonReleaseEvent | ButtonPressEvent"] = None):
        """Release: commit to the highlighted zone, float, or settle in place."""
        if self.mode in (DragMode.IDLE, DragMode.ENDED):
            return
        logger.debug("end %r", self)
        self.disconnect_all()

        window = self.window
        actor = window.actor
        clone = window.clone
        gx, gy, _ = self.host.pointer.get_pointer()

        self._destroy_zone_actors()
        params = {"scale_x": 1, "scale_y": 1, "opacity": self._old_opacity}

        dest_grid = None
        if self.dnd:
            if self.dnd_target:
                dest_grid = self._commit_drop(self.dnd_target, gx, gy, params)
            else:
                self._float_at_clone(params)
        elif window in self.initial_grid:
            grid = self.initial_grid
            dest_grid = grid
            grid.target_x = grid.container.x

            actor.set_scale(1, 1)
            actor.set_pivot_point(0, 0)

            def on_stopped():
                grid.move_done()
                clone.set_pivot_point(0, 0)

            self.easer.add_ease(clone, params, on_stopped=on_stopped)
            grid.ensure_viewport(window)

        self.dnd_target = None
        self._finish(dest_grid, committed=True)

    def _commit_drop(self, zone: DropZone, gx: float, gy: float, params: dict) -> "Grid":
        window = self.window
        host_window = window.host
        actor = window.actor
        clone = window.clone
        grid = zone.grid
        policy = self.host.policy

        policy.show_selection(grid, True)
        if policy.is_scratch(host_window):
            policy.unmake_scratch(host_window)

        # Remember the global position of the clone
        x, _ = clone.get_position()
        self.spaces.add_window(grid, window, *zone.position)
        self.host.stage.reparent_to_grid(clone, grid)

        sx, sy = grid.global_to_scroll(gx, gy)
        dx, dy = self.pointer_offset
        clone.x = sx - dx
        clone.y = sy - dy
        new_scale = clone.scale_x / grid.zoom
        clone.set_scale(new_scale, new_scale)

        actor.set_scale(1, 1)
        actor.set_pivot_point(0, 0)

        def on_stopped():
            grid.move_done()
            clone.set_pivot_point(0, 0)

        self.easer.add_ease(clone, params, on_stopped=on_stopped)

        grid.target_x = grid.container.x
        grid.selected_window = window
        grid.layout(True, custom_allocators={zone.column_index: allocate_equal_height})
        grid.move_to(window, x - grid.monitor.x)
        grid.ensure_viewport(window)
        self.host.stage.raise_actor(clone)
        return grid

    def _float_at_clone(self, params: dict):
        window = self.window
        actor = window.actor
        clone = window.clone

        self.easer.remove_ease(clone)
        window.host.move_frame(clone.x, clone.y)
        self.host.policy.make_scratch(window.host)
        self.spaces.remove_window(window)
        self.initial_grid.move_done()

        actor.set_scale(clone.scale_x, clone.scale_y)
        actor.opacity = clone.opacity

        clone.opacity = self._old_opacity or 255
        clone.set_scale(1, 1)
        clone.set_pivot_point(0, 0)

        self.easer.add_ease(
            actor, params, on_stopped=lambda: actor.set_pivot_point(0, 0)
        )

    def cancel(self):
        """Abandon the gesture, putting the window back where it started."""
        if self.mode in (DragMode.IDLE, DragMode.ENDED):
            return
        logger.debug("cancel %r", self)
        self.disconnect_all()
        self._destroy_zone_actors()
        self.dnd_target = None

        window = self.window
        clone = window.clone
        grid = self.initial_grid

        self.easer.remove_ease(clone)
        window.actor.set_scale(1, 1)
        window.actor.set_pivot_point(0, 0)
        clone.set_scale(1, 1)
        clone.set_pivot_point(0, 0)
        clone.opacity = self._old_opacity or 255

        dest_grid = None
        if self.origin_index is not None:
            if window not in grid:
                col, row = self.origin_index
                self.spaces.add_window(
                    grid, window, col, None if self.origin_single else row
                )
                sx, sy = grid.global_to_scroll(clone.x, clone.y)
                self.host.stage.reparent_to_grid(clone, grid)
                clone.x = sx
                clone.y = sy
            dest_grid = grid
        else:
            window.host.move_frame(self.origin_frame.x, self.origin_frame.y)
            clone.x = self.origin_frame.x
            clone.y = self.origin_frame.y

        grid.target_x = self.origin_scroll
        self.easer.add_ease(grid.container, {"x": self.origin_scroll})
        self._finish(dest_grid, committed=False)

    def destroy(self):
        """Drop the grab without touching the window (it is going away)."""
        from pubsub import pub

        if self.mode in (DragMode.IDLE, DragMode.ENDED):
            return
        self.disconnect_all()
        self._destroy_zone_actors()
        self.dnd_target = None
        self.mode = DragMode.ENDED
        self.host.pointer.set_cursor(Cursor.DEFAULT)
        pub.sendMessage(topics.DRAG_ENDED, window=self.window, committed=False, grid=None)

    def _finish(self, dest_grid: Optional["Grid"], committed: bool):
        from pubsub import pub

        window = self.window
        self.mode = DragMode.ENDED

        self.initial_grid.layout()
        scheduler = self.host.scheduler
        # Refocus once layout and viewport transitions have settled
        scheduler.idle_add(lambda: self.host.policy.activate(window.host))

        self.host.pointer.set_cursor(Cursor.DEFAULT)

        # Without end_grab_op the host's own move grab may still be running;
        # release it with a click at the pointer
        if self.capabilities.needs_click_out and self.was_tiled:
            scheduler.idle_add(self._click_out)

        pub.sendMessage(
            topics.DRAG_ENDED, window=window, committed=committed, grid=dest_grid
        )

    def _click_out(self):
        x, y, _ = self.host.pointer.get_pointer()
        self.host.pointer.synthesize_click(x, y)

    # Bus handlers

    def _on_entered_monitor(self, window: "HostWindow", event: "MonitorEnteredEvent"):
        if window.window_id == self.window.window_id:
            self.begin_dnd()

    def _on_key_press(self, event: "KeyPressEvent"):
        if event.keysym == KEY_ESCAPE:
            self.cancel()


class ResizeGrab(Grab):
    """Keeps a grid following a window the host is resizing.

    Inert when the window is not tiled at construction.
    """

    def __init__(self, window: "WindowHandle", spaces: "Spaces"):
        super().__init__()
        self.window = window
        self.grid = spaces.grid_of(window)
        self.active = self.grid is not None
        if not self.active:
            return

        self.scroll_anchor = window.target_x + self.grid.monitor.x
        self.connect(topics.WINDOW_SIZE_CHANGED, self._on_size_changed)

    @property
    def finished(self) -> bool:
        return not self.active

    def _on_size_changed(self, window: "HostWindow"):
        if window.window_id != self.window.window_id:
            return
        self.window.invalidate_target_size()
        frame = self.window.frame_rect()

        grid = self.grid
        grid.target_x = frame.x - self.scroll_anchor
        grid.container.x = grid.target_x
        grid.layout(False)

    def end(self):
        from pubsub import pub

        if not self.active:
            return
        self.disconnect_all()
        self.active = False
        self.grid.layout()
        pub.sendMessage(topics.RESIZE_ENDED, window=self.window)
