"""
Column Height Allocators

An allocator decides the heights of the windows stacked in one column:

    allocator(column, available_height, gap) -> List[int]

The returned heights, plus a gap between each pair, must not exceed
available_height.
"""

from __future__ import annotations
from typing import Callable, List, TYPE_CHECKING

if TYPE_CHECKING:
    from .window import WindowHandle

Allocator = Callable[[List["WindowHandle"], float, float], List[int]]


def allocate_equal_height(
    column: List["WindowHandle"], available_height: float, gap: float
) -> List[int]:
    """Every window in the column gets the same share."""
    n = len(column)
    if n == 0:
        return []
    share = int((available_height - (n - 1) * gap) // n)
    return [max(0, share)] * n


def allocate_default(
    column: List["WindowHandle"], available_height: float, gap: float
) -> List[int]:
    """Keep the windows' own heights when they fit.

    A lone window fills the column. A column whose windows would overflow the
    available height falls back to equal shares.
    """
    n = len(column)
    if n == 0:
        return []
    if n == 1:
        return [int(available_height)]

    heights = [int(w.preferred_height()) for w in column]
    if sum(heights) + (n - 1) * gap > available_height or min(heights) <= 0:
        return allocate_equal_height(column, available_height, gap)
    return heights

