"""
Scrolling tiling: grids of columns, one per workspace.
"""

from .allocators import Allocator, allocate_default, allocate_equal_height
from .window import WindowHandle
from .grid import Grid
from .spaces import Spaces

__all__ = [
    "Allocator",
    "allocate_default",
    "allocate_equal_height",
    "WindowHandle",
    "Grid",
    "Spaces",
]
