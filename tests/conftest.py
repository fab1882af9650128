"""
Shared pytest fixtures for scrolltile tests.
"""

import itertools

import pytest
from pubsub import pub

from scrolltile.animation import Easer, InstantAnimator
from scrolltile.config import TilingConfig
from scrolltile.host import (
    Actor,
    Animator,
    Host,
    HostWindow,
    Monitor,
    MonitorProvider,
    PointerProvider,
    Scheduler,
    Stage,
    WorkspaceLayoutPolicy,
)
from scrolltile.protocol import Area, Modifiers
from scrolltile.tiling.spaces import Spaces


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without a compositor")


@pytest.fixture(autouse=True)
def reset_bus():
    """Drop every bus listener left behind by a test."""
    yield
    pub.unsubAll()


class FakeHostWindow(HostWindow):
    """Host window whose frame, clone and actor are plain objects."""

    _ids = itertools.count(1)

    def __init__(self, x=0, y=0, width=800, height=600, wm_class="test_app", title="test"):
        self._id = next(self._ids)
        self.frame = Area(x, y, width, height)
        self.clone = Actor(x, y, width, height)
        self.actor = Actor(x, y, width, height)
        self._wm_class = wm_class
        self._title = title
        self.frame_moves = []

    @property
    def window_id(self):
        return self._id

    @property
    def wm_class(self):
        return self._wm_class

    @property
    def title(self):
        return self._title

    def get_frame_rect(self):
        return self.frame

    def move_frame(self, x, y):
        self.frame = Area(x, y, self.frame.width, self.frame.height)
        self.frame_moves.append((x, y))

    def move_resize_frame(self, x, y, width, height):
        self.frame = Area(x, y, width, height)

    def get_clone(self):
        return self.clone

    def get_actor(self):
        return self.actor


class FakeMonitors(MonitorProvider):
    def __init__(self, monitors):
        self._monitors = list(monitors)

    def monitors(self):
        return self._monitors


class FakePointer(PointerProvider):
    """Pointer that can end host grabs itself."""

    def __init__(self, x=0, y=0):
        self.x = x
        self.y = y
        self.modifiers = Modifiers.NONE
        self.cursors = []
        self.grab_ops_ended = 0

    def get_pointer(self):
        return (self.x, self.y, self.modifiers)

    def set_cursor(self, cursor):
        self.cursors.append(cursor)

    def end_grab_op(self):
        self.grab_ops_ended += 1


class ClickingPointer(PointerProvider):
    """Pointer without end_grab_op that releases grabs by clicking."""

    def __init__(self, x=0, y=0):
        self.x = x
        self.y = y
        self.modifiers = Modifiers.NONE
        self.cursors = []
        self.clicks = []

    def get_pointer(self):
        return (self.x, self.y, self.modifiers)

    def set_cursor(self, cursor):
        self.cursors.append(cursor)

    def synthesize_click(self, x, y):
        self.clicks.append((x, y))


class ManualAnimator(Animator):
    """Animator whose transitions only finish when the test says so."""

    def __init__(self):
        self.pending = []

    def animate(self, target, props, duration_ms, on_complete=None):
        self.pending.append((target, dict(props), on_complete))

    def cancel(self, target):
        interrupted = [p for p in self.pending if p[0] is target]
        self.pending = [p for p in self.pending if p[0] is not target]
        for _, _, on_complete in interrupted:
            if on_complete:
                on_complete(False)

    def finish_all(self):
        pending, self.pending = self.pending, []
        for target, props, on_complete in pending:
            for name, value in props.items():
                setattr(target, name, value)
            if on_complete:
                on_complete(True)


class FakeStage(Stage):
    def __init__(self):
        self.zone_actors = []
        self.raised = []

    def create_zone_actor(self):
        actor = Actor()
        self.zone_actors.append(actor)
        return actor

    def raise_actor(self, actor):
        self.raised.append(actor)


class FakeScheduler(Scheduler):
    def __init__(self):
        self.idle = []

    def idle_add(self, callback):
        self.idle.append(callback)

    def run_idle(self):
        idle, self.idle = self.idle, []
        for callback in idle:
            callback()


class FakePolicy(WorkspaceLayoutPolicy):
    def __init__(self):
        self.scratch = set()
        self.activated = []
        self.selection = {}

    def is_scratch(self, window):
        return window.window_id in self.scratch

    def make_scratch(self, window):
        self.scratch.add(window.window_id)

    def unmake_scratch(self, window):
        self.scratch.discard(window.window_id)

    def activate(self, window):
        self.activated.append(window)

    def show_selection(self, grid, visible):
        self.selection[grid.workspace_id] = visible


@pytest.fixture
def make_window():
    """Factory fixture for creating fake host windows."""
    return FakeHostWindow


@pytest.fixture
def monitor():
    """1920x1080 monitor with a 30px panel at the top."""
    return Monitor(0, Area(0, 0, 1920, 1080), Area(0, 30, 1920, 1050))


@pytest.fixture
def second_monitor():
    """1920x1080 monitor to the right of the first, without a panel."""
    return Monitor(1, Area(1920, 0, 1920, 1080))


@pytest.fixture
def config():
    return TilingConfig()


@pytest.fixture
def stage():
    return FakeStage()


@pytest.fixture
def policy():
    return FakePolicy()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def pointer():
    return FakePointer()


@pytest.fixture
def animator():
    return InstantAnimator()


@pytest.fixture
def host(monitor, second_monitor, pointer, animator, stage, scheduler, policy):
    return Host(
        monitors=FakeMonitors([monitor, second_monitor]),
        pointer=pointer,
        animator=animator,
        stage=stage,
        scheduler=scheduler,
        policy=policy,
    )


@pytest.fixture
def easer(animator, config):
    return Easer(animator, config.animation_time_ms)


@pytest.fixture
def spaces(config, easer, stage, policy, monitor, second_monitor):
    """Spaces with workspace 0 on the first monitor and 1 on the second."""
    spaces = Spaces(config, easer, stage=stage, policy=policy)
    spaces.ensure_grid(0, monitor)
    spaces.ensure_grid(1, second_monitor)
    yield spaces
    spaces.teardown()


@pytest.fixture
def grid(spaces):
    return spaces.grids[0]


@pytest.fixture
def tile(spaces):
    """Tile fake windows as new columns and lay the grid out without animation."""

    def tile(grid, *host_windows):
        handles = []
        for host_window in host_windows:
            handle = spaces.handle_for(host_window)
            spaces.add_window(grid, handle, len(grid))
            handles.append(handle)
        grid.layout(animate=False)
        return handles

    return tile


@pytest.fixture
def clicking_pointer():
    return ClickingPointer()


@pytest.fixture
def manual_animator():
    return ManualAnimator()
