"""
Tiling Engine

Wires the core together: config, host capabilities, the per-workspace grids
and the interactive operations, all talking over the event bus.
"""

from __future__ import annotations
import logging
import os
from typing import Any, Mapping, Optional, TYPE_CHECKING

from pubsub import pub

from . import topics
from .animation import Easer
from .config import TilingConfig
from .host import HostCapabilities
from .operation_manager import OperationManager, OpType
from .tiling.spaces import Spaces
from .winprops import WinPropRegistry

if TYPE_CHECKING:
    from .host import Host, HostWindow, Monitor
    from .tiling.grid import Grid

logger = logging.getLogger(__name__)


def configure_logging():
    """Apply SCROLLTILE_LOG_LEVEL to the package logger, if set."""
    level = os.getenv("SCROLLTILE_LOG_LEVEL")
    if not level:
        return
    package_logger = logging.getLogger("scrolltile")
    try:
        package_logger.setLevel(level.upper())
    except ValueError:
        logger.warning("Ignoring unknown SCROLLTILE_LOG_LEVEL %r", level)


class TilingEngine:
    """The scrolling tiling core, driven by host events on the bus."""

    def __init__(
        self,
        host: "Host",
        config: Optional[TilingConfig] = None,
        winprops: Optional[WinPropRegistry] = None,
    ):
        """Initialize the engine.

        Architecture:
        1. Probe optional host capabilities once
        2. Create components - they self-subscribe to events
        3. Subscribe to command topics
        """
        configure_logging()
        self.host = host
        self.config = config or TilingConfig()
        self.winprops = winprops or WinPropRegistry()

        # Setup debug event logging if enabled
        self._debug = bool(os.getenv("SCROLLTILE_DEBUG"))
        if self._debug:
            pub.subscribe(self.debug_event_logger, pub.ALL_TOPICS)

        self.capabilities = HostCapabilities.probe(host)
        self.easer = Easer(host.animator, self.config.animation_time_ms)

        self.spaces = Spaces(
            self.config,
            self.easer,
            stage=host.stage,
            policy=host.policy,
            winprops=self.winprops,
        )
        self.operations = OperationManager(
            self.spaces, host, self.easer, self.config, self.capabilities
        )

        self._setup_subscriptions()
        logger.info("Tiling engine started")

    def _setup_subscriptions(self):
        """Subscribe to command events."""
        pub.subscribe(self._on_start_move, topics.CMD_START_MOVE)
        pub.subscribe(self._on_start_resize, topics.CMD_START_RESIZE)
        pub.subscribe(self._on_end_resize, topics.CMD_END_RESIZE)

    def teardown(self):
        """Unsubscribe every component from the bus."""
        pub.unsubscribe(self._on_start_move, topics.CMD_START_MOVE)
        pub.unsubscribe(self._on_start_resize, topics.CMD_START_RESIZE)
        pub.unsubscribe(self._on_end_resize, topics.CMD_END_RESIZE)
        if self._debug:
            pub.unsubscribe(self.debug_event_logger, pub.ALL_TOPICS)
        self.operations.teardown()
        self.spaces.teardown()

    def debug_event_logger(self, topic=pub.AUTO_TOPIC, **kwargs):
        """Log all events published on the event bus."""
        data_str = ", ".join(f"{k}={v}" for k, v in kwargs.items() if k != "topic")
        logger.debug("EVENT: %s | %s", topic.getName(), data_str)

    # Workspaces

    def add_workspace(self, workspace_id: int, monitor: "Monitor") -> "Grid":
        """Create (or fetch) the grid of a workspace shown on monitor."""
        return self.spaces.ensure_grid(workspace_id, monitor)

    # Operations

    def start_move(self, window: "HostWindow", center: bool = False) -> bool:
        """Begin an interactive move of window. Returns False if none started."""
        return self.operations.start_move(self.spaces.handle_for(window), center)

    def start_resize(self, window: "HostWindow") -> bool:
        """Begin tracking a host-driven resize of window."""
        return self.operations.start_resize(self.spaces.handle_for(window))

    def end_resize(self):
        """Finish the resize in progress, if any."""
        if self.operations.get_operation_type() == OpType.RESIZE:
            self.operations.end_operation()

    def cancel(self):
        """Abandon any operation in progress."""
        self.operations.cancel_operation()

    # Configuration

    def reload_config(
        self,
        config: Optional[TilingConfig] = None,
        settings: Optional[Mapping[str, Any]] = None,
    ) -> TilingConfig:
        """Swap in a new config and relayout every grid.

        Either pass a TilingConfig or a settings mapping with dashed keys.
        Invalid settings raise ValueError and leave the running config alone.
        """
        if config is None:
            config = TilingConfig.from_settings(settings or {})
        self.config = config
        self.operations.config = config
        self.spaces.set_config(config)
        logger.info("Config reloaded")
        return config

    def reload_winprops(self, values):
        """Replace user window rules with the JSON strings in values."""
        self.winprops.reload_user_props(values)

    # Event handlers

    def _on_start_move(self, window: "HostWindow", center: bool):
        """Handle CMD_START_MOVE event."""
        self.start_move(window, center)

    def _on_start_resize(self, window: "HostWindow"):
        """Handle CMD_START_RESIZE event."""
        self.start_resize(window)

    def _on_end_resize(self):
        """Handle CMD_END_RESIZE event."""
        self.end_resize()
