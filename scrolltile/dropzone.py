"""
Drop-Zone Detection

Given a grid and a pointer position in that grid's scroll coordinates, find
the insertion point a dropped window would take: before a column, or between
two rows of a column.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .config import TilingConfig
    from .host import Actor
    from .tiling.grid import Grid

logger = logging.getLogger(__name__)


class ZoneKind(Enum):
    """Which axis a drop zone inserts along."""

    COLUMN = auto()  # new column before position[0]
    ROW = auto()  # into column position[0] before row position[1]


@dataclass
class DropZone:
    """One candidate insertion point and its highlight geometry."""

    kind: ZoneKind
    position: Tuple[int, ...]
    center: float
    margin_a: float  # highlight extent before center
    margin_b: float  # highlight extent after center
    grid: "Grid"
    actor_params: Dict[str, float] = field(default_factory=dict)
    actor: Optional["Actor"] = None

    @property
    def origin_prop(self) -> str:
        return "x" if self.kind == ZoneKind.COLUMN else "y"

    @property
    def size_prop(self) -> str:
        return "width" if self.kind == ZoneKind.COLUMN else "height"

    @property
    def column_index(self) -> int:
        return self.position[0]

    @property
    def row_index(self) -> Optional[int]:
        return self.position[1] if len(self.position) > 1 else None

    def same_target(self, other: Optional["DropZone"]) -> bool:
        return same_target(self, other)


def same_target(a: Optional[DropZone], b: Optional[DropZone]) -> bool:
    """Whether two zones would drop the window in the same place."""
    if a is b:
        return True
    if a is None or b is None:
        return False
    return (
        a.grid is b.grid
        and a.column_index == b.column_index
        and a.row_index == b.row_index
    )


@dataclass
class _Cell:
    """Stand-in geometry for a column or row that does not exist yet."""

    target_x: float
    target_y: float
    width: float
    height: float


def find_drop_zone(
    grid: "Grid", x: float, y: float, config: "TilingConfig"
) -> Optional[DropZone]:
    """Find the drop zone under (x, y), in grid scroll coordinates.

    Columns are scanned left to right and, inside a column, rows top to
    bottom; the first band containing the pointer wins. A trailing "new
    column" candidate always follows the last column.
    """
    gap = config.window_gap
    half_gap = gap / 2
    column_margin_viz = config.column_zone_margin + half_gap
    column_margin = column_margin_viz if len(grid) > 0 else round(grid.width / 4)
    row_margin = config.row_zone_margin + half_gap
    panel_height = grid.monitor.panel_height
    tiling_height = grid.height - panel_height

    if len(grid) > 0:
        last = grid[len(grid) - 1][0]
        trailing_x = last.target_x + last.width + gap
    else:
        sx, _ = grid.viewport_to_scroll(round(grid.width / 2), 0)
        trailing_x = sx + half_gap
    trailing = _Cell(trailing_x, 0, column_margin, tiling_height)

    columns: List[list] = [list(column) for column in grid] + [[trailing]]
    for j, column in enumerate(columns):
        if not column:
            logger.debug("Empty column %d in %r, no drop zone", j, grid)
            return None

        col_x = column[0].target_x
        col_w = column[0].width

        # Fast forward if the pointer is neither in the column nor its zone
        if x < col_x - gap - column_margin:
            continue
        if col_x + col_w < x:
            continue

        cx = col_x - half_gap
        if cx - column_margin <= x <= cx + column_margin:
            return DropZone(
                kind=ZoneKind.COLUMN,
                position=(j,),
                center=cx,
                margin_a=column_margin_viz,
                margin_b=column_margin_viz,
                grid=grid,
                actor_params={"y": panel_height, "height": tiling_height},
            )

        # Must be strictly within the column to tile vertically
        if x < col_x:
            continue

        for i in range(len(column) + 1):
            if i < len(column):
                cell = column[i]
            else:
                above = column[i - 1]
                cell = _Cell(
                    above.target_x,
                    above.target_y + above.height + gap,
                    above.width,
                    0,
                )
            cy = cell.target_y - half_gap
            if cy - row_margin <= y <= cy + row_margin:
                return DropZone(
                    kind=ZoneKind.ROW,
                    position=(j, i),
                    center=cy,
                    margin_a=0 if i == 0 else row_margin,
                    margin_b=0 if i == len(column) else row_margin,
                    grid=grid,
                    actor_params={"x": cell.target_x, "width": cell.width},
                )

    return None
