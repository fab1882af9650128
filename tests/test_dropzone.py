"""
Unit tests for drop-zone detection.
"""

import pytest

from scrolltile.dropzone import DropZone, ZoneKind, find_drop_zone, same_target


@pytest.mark.unit
class TestEmptyGrid:
    """Test detection on a grid without columns."""

    def test_midpoint_is_first_column(self, grid, config):
        """Test the screen midpoint of an empty grid offers column 0."""
        zone = find_drop_zone(grid, 960, 500, config)

        assert zone is not None
        assert zone.kind == ZoneKind.COLUMN
        assert zone.position == (0,)
        assert zone.grid is grid

    def test_midpoint_follows_scroll(self, grid, config):
        """Test the synthetic column tracks the scroll offset."""
        grid.container.x = 300
        zone = find_drop_zone(grid, 960 - 300, 500, config)
        assert zone is not None and zone.position == (0,)

    @pytest.mark.parametrize("x", [-5000, -1, 0, 200, 959, 1500, 1919, 5000])
    def test_total(self, grid, config, x):
        """Test any pointer position yields a zone or None, never an error."""
        zone = find_drop_zone(grid, x, 500, config)
        assert zone is None or zone.position == (0,)

    def test_far_left_has_no_zone(self, grid, config):
        """Test pointers far from the midpoint find nothing."""
        assert find_drop_zone(grid, 100, 500, config) is None


@pytest.mark.unit
class TestColumnsAndRows:
    """Test detection on a populated grid."""

    @pytest.fixture
    def stacked(self, grid, spaces, make_window):
        """One column of two windows, then a single-window column."""
        a = spaces.handle_for(make_window(width=800, height=700))
        b = spaces.handle_for(make_window(width=800, height=700))
        c = spaces.handle_for(make_window(width=600))
        spaces.add_window(grid, a, 0)
        spaces.add_window(grid, b, 0, 1)
        spaces.add_window(grid, c, 1)
        grid.layout(animate=False)
        return a, b, c

    def test_between_rows(self, grid, config, stacked):
        """Test the gap above the second row offers a row zone."""
        a, b, c = stacked
        x = b.target_x + b.width / 2
        zone = find_drop_zone(grid, x, b.target_y - config.half_gap, config)

        assert zone.kind == ZoneKind.ROW
        assert zone.position == (0, 1)
        assert zone.center == b.target_y - config.half_gap
        assert zone.actor_params == {"x": b.target_x, "width": b.width}

    def test_above_first_row(self, grid, config, stacked):
        """Test the top row zone has no visual margin above it."""
        a, b, c = stacked
        zone = find_drop_zone(grid, 400, a.target_y, config)

        assert zone.position == (0, 0)
        assert zone.margin_a == 0
        assert zone.margin_b == config.row_zone_margin + config.half_gap

    def test_below_last_row(self, grid, config, stacked):
        """Test the synthetic row after the last window."""
        a, b, c = stacked
        zone = find_drop_zone(grid, 400, b.target_y + b.height + config.half_gap, config)

        assert zone.position == (0, 2)
        assert zone.margin_b == 0

    def test_column_gap(self, grid, config, stacked):
        """Test the gap left of a column offers a column zone."""
        a, b, c = stacked
        zone = find_drop_zone(grid, c.target_x - config.half_gap, 300, config)

        assert zone.kind == ZoneKind.COLUMN
        assert zone.position == (1,)
        assert zone.center == c.target_x - config.half_gap
        assert zone.actor_params == {"y": 30, "height": 1050}

    def test_trailing_column(self, grid, config, stacked):
        """Test the space right of the last column offers a new column."""
        a, b, c = stacked
        x = c.target_x + c.width + config.half_gap
        zone = find_drop_zone(grid, x, 300, config)

        assert zone.kind == ZoneKind.COLUMN
        assert zone.position == (2,)

    def test_column_beats_row_near_left_edge(self, grid, config, stacked):
        """Test bands are checked column first."""
        a, b, c = stacked
        zone = find_drop_zone(grid, c.target_x + 50, c.target_y, config)
        assert zone.kind == ZoneKind.COLUMN

    def test_middle_of_window_has_no_zone(self, grid, config, stacked):
        """Test the centre of a tall single window is not a drop target."""
        a, b, c = stacked
        x = c.target_x + c.width / 2
        assert find_drop_zone(grid, x, c.target_y + c.height / 2, config) is None

    def test_recompute_is_same_target(self, grid, config, stacked):
        """Test recomputing at the same point yields an equal zone."""
        a, b, c = stacked
        first = find_drop_zone(grid, 400, b.target_y, config)
        second = find_drop_zone(grid, 400, b.target_y, config)

        assert first is not second
        assert same_target(first, second)
        assert first.same_target(second)


@pytest.mark.unit
class TestSameTarget:
    """Test drop-zone identity."""

    def make(self, grid, position, kind=ZoneKind.COLUMN):
        return DropZone(kind, position, 0, 0, 0, grid)

    def test_none(self, grid):
        assert same_target(None, None)
        assert not same_target(self.make(grid, (0,)), None)
        assert not same_target(None, self.make(grid, (0,)))

    def test_position(self, grid):
        assert same_target(self.make(grid, (1,)), self.make(grid, (1,)))
        assert not same_target(self.make(grid, (1,)), self.make(grid, (2,)))
        assert not same_target(
            self.make(grid, (1,)), self.make(grid, (1, 0), ZoneKind.ROW)
        )

    def test_grid(self, spaces):
        g0, g1 = spaces.grids[0], spaces.grids[1]
        assert not same_target(self.make(g0, (0,)), self.make(g1, (0,)))
