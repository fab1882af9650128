"""
Host Interfaces

The compositor is consumed, not built. These interfaces are the whole surface
the core depends on; a compositor integration layer supplies concrete
implementations and bridges host input onto the event bus (see topics).
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple, TYPE_CHECKING

from .protocol import Area, Cursor, Modifiers, area_at_point

if TYPE_CHECKING:
    from .tiling.grid import Grid

logger = logging.getLogger(__name__)


class Actor:
    """A render-layer object the core positions, scales and fades.

    Hosts subclass this and push attribute changes to their scene graph; the
    base class just stores them, which is all the layout math needs.
    """

    def __init__(self, x=0.0, y=0.0, width=0.0, height=0.0):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.scale_x = 1.0
        self.scale_y = 1.0
        self.opacity = 255
        self.pivot_point: Tuple[float, float] = (0.0, 0.0)
        self.visible = True
        self.parent = None
        self._destroyed = False

    def set_position(self, x: float, y: float):
        self.x = x
        self.y = y

    def get_position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def set_size(self, width: float, height: float):
        self.width = width
        self.height = height

    def set_scale(self, sx: float, sy: float):
        self.scale_x = sx
        self.scale_y = sy

    def set_pivot_point(self, px: float, py: float):
        self.pivot_point = (px, py)

    def get_transformed_position(self) -> Tuple[float, float]:
        """Position in global (stage) coordinates."""
        if self.parent is not None:
            px, py = self.parent.get_transformed_position()
            return (px + self.x, py + self.y)
        return (self.x, self.y)

    def get_transformed_size(self) -> Tuple[float, float]:
        return (self.width * self.scale_x, self.height * self.scale_y)

    def show(self):
        self.visible = True

    def hide(self):
        self.visible = False

    def destroy(self):
        self._destroyed = True
        self.parent = None

    @property
    def is_valid(self) -> bool:
        """Check if the actor is still alive."""
        return not self._destroyed


@dataclass
class Monitor:
    """A physical output and its usable work area (panels excluded)."""

    index: int
    area: Area
    work_area: Optional[Area] = None

    def __post_init__(self):
        if self.work_area is None:
            self.work_area = Area(
                self.area.x, self.area.y, self.area.width, self.area.height
            )

    @property
    def x(self) -> float:
        return self.area.x

    @property
    def y(self) -> float:
        return self.area.y

    @property
    def width(self) -> float:
        return self.area.width

    @property
    def height(self) -> float:
        return self.area.height

    @property
    def panel_height(self) -> float:
        """Height of chrome reserved at the top of the monitor."""
        return self.work_area.y - self.area.y

    def __hash__(self):
        return hash(self.index)


class HostWindow(ABC):
    """Capability set of one compositor window."""

    @property
    @abstractmethod
    def window_id(self) -> int:
        """Stable identifier, unique among live windows."""

    @abstractmethod
    def get_frame_rect(self) -> Area:
        """Frame geometry in global coordinates."""

    @abstractmethod
    def move_frame(self, x: float, y: float):
        """Move the frame to global (x, y)."""

    @abstractmethod
    def move_resize_frame(self, x: float, y: float, width: float, height: float):
        """Move and resize the frame in global coordinates."""

    @abstractmethod
    def get_clone(self) -> Actor:
        """The clone actor the tiling layer animates."""

    @abstractmethod
    def get_actor(self) -> Actor:
        """The compositor's own actor for this window."""

    @property
    def wm_class(self) -> str:
        return ""

    @property
    def title(self) -> str:
        return ""


class MonitorProvider(ABC):
    """Monitor enumeration and lookup."""

    @abstractmethod
    def monitors(self) -> List[Monitor]:
        pass

    def monitor_at_point(self, x: float, y: float) -> Optional[Monitor]:
        return area_at_point(self.monitors(), x, y)


class PointerProvider(ABC):
    """Pointer state and grab control."""

    @abstractmethod
    def get_pointer(self) -> Tuple[float, float, Modifiers]:
        """Current global pointer position and modifier state."""

    @abstractmethod
    def set_cursor(self, cursor: Cursor):
        pass

    # Optional capability: hosts that can end an implicit move grab override
    # this with a real method. HostCapabilities probes for it once.
    end_grab_op: Optional[Callable[[], None]] = None

    def synthesize_click(self, x: float, y: float):
        """Warp a virtual pointer to (x, y) and click the primary button.

        Used to release an implicit host grab when end_grab_op is missing.
        """
        raise NotImplementedError


class Animator(ABC):
    """Eased property transitions.

    animate() returns immediately; on_complete fires later on the event loop
    with True when the transition finished and False when it was interrupted.
    """

    @abstractmethod
    def animate(
        self,
        target: Actor,
        props: Dict[str, float],
        duration_ms: int,
        on_complete: Optional[Callable[[bool], None]] = None,
    ):
        pass

    @abstractmethod
    def cancel(self, target: Actor):
        pass


class Stage(ABC):
    """Scene graph operations: reparenting, stacking and zone highlights."""

    def reparent_to_overlay(self, actor: Actor):
        """Move an actor to the screen-global overlay layer.

        Overrides must call this so the actor's transformed position stays
        correct.
        """
        actor.parent = None

    def reparent_to_grid(self, actor: Actor, grid: "Grid"):
        """Move an actor into a grid's scrolling clone container."""
        actor.parent = grid.container

    @abstractmethod
    def create_zone_actor(self) -> Actor:
        """Create a drop-zone highlight actor (not yet parented)."""

    def raise_actor(self, actor: Actor):
        pass


class Scheduler(ABC):
    """Deferred callbacks on the host event loop."""

    @abstractmethod
    def idle_add(self, callback: Callable[[], None]):
        """Run callback once the loop is idle (transitions settled)."""


class WorkspaceLayoutPolicy(ABC):
    """Host behaviour the core asks for but does not own."""

    @abstractmethod
    def is_scratch(self, window: HostWindow) -> bool:
        pass

    @abstractmethod
    def make_scratch(self, window: HostWindow):
        pass

    @abstractmethod
    def unmake_scratch(self, window: HostWindow):
        pass

    @abstractmethod
    def activate(self, window: HostWindow):
        """Focus and raise a window."""

    def show_selection(self, grid: "Grid", visible: bool):
        """Show or hide the grid's selection indicator."""


@dataclass
class Host:
    """Bundle of host collaborators injected into the core."""

    monitors: MonitorProvider
    pointer: PointerProvider
    animator: Animator
    stage: Stage
    scheduler: Scheduler
    policy: WorkspaceLayoutPolicy


@dataclass
class HostCapabilities:
    """Optional host features, probed once at setup."""

    can_end_grab_op: bool = False
    can_synthesize_click: bool = False
    missing: List[str] = field(default_factory=list)

    @classmethod
    def probe(cls, host: Host) -> "HostCapabilities":
        pointer = host.pointer
        can_end = callable(getattr(pointer, "end_grab_op", None))
        can_click = (
            type(pointer).synthesize_click is not PointerProvider.synthesize_click
        )
        caps = cls(can_end_grab_op=can_end, can_synthesize_click=can_click)
        if not can_end:
            caps.missing.append("end_grab_op")
        if not can_click:
            caps.missing.append("synthesize_click")
        if caps.missing:
            logger.info("Host lacks %s; using fallbacks", ", ".join(caps.missing))
        return caps

    @property
    def needs_click_out(self) -> bool:
        """Whether a finished grab must be released with a synthetic click."""
        return not self.can_end_grab_op and self.can_synthesize_click
