"""
Tests for grid-shift tables and the grid lookup.
"""

import math

import numpy as np
import pytest

from projcore.core.datum.grid import Grid, GridShiftStatus, apply_grid_shift
from projcore.models.coordinate import ProjCoordinate

SEC = math.radians(1.0 / 3600.0)


def _point(lon_deg: float, lat_deg: float) -> ProjCoordinate:
    return ProjCoordinate(math.radians(lon_deg), math.radians(lat_deg))


def _constant_grid(name: str, ll_lon_deg: float, ll_lat_deg: float, dlon_sec: float, dlat_sec: float) -> Grid:
    shifts = np.empty((3, 3, 2))
    shifts[..., 0] = dlon_sec * SEC
    shifts[..., 1] = dlat_sec * SEC
    return Grid(
        name=name,
        ll_lon=math.radians(ll_lon_deg),
        ll_lat=math.radians(ll_lat_deg),
        del_lon=math.radians(1.0),
        del_lat=math.radians(1.0),
        cols=3,
        rows=3,
        shifts=shifts,
    )


class TestGridModel:
    """Tests for grid construction and comparison."""

    def test_shape_mismatch_rejected(self):
        """Test the shift array must be (rows, cols, 2)."""
        with pytest.raises(ValueError):
            Grid("bad", 0.0, 0.0, 0.1, 0.1, cols=3, rows=2, shifts=np.zeros((3, 2, 2)))

    def test_shifts_read_only(self, synthetic_grid):
        """Test the shift table cannot be modified."""
        with pytest.raises(ValueError):
            synthetic_grid.shifts[0, 0, 0] = 1.0

    def test_bounds(self, synthetic_grid):
        """Test the upper-right node is derived from the cell counts."""
        assert math.degrees(synthetic_grid.ur_lon) == pytest.approx(2.0)
        assert math.degrees(synthetic_grid.ur_lat) == pytest.approx(42.0)

    def test_equality_ignores_shift_values(self):
        """Test grids compare by name and geometry."""
        a = _constant_grid("same", 0.0, 0.0, 1.0, 1.0)
        b = _constant_grid("same", 0.0, 0.0, 5.0, 5.0)
        c = _constant_grid("other", 0.0, 0.0, 1.0, 1.0)

        assert a == b
        assert hash(a) == hash(b)
        assert a != c


class TestNullGrid:
    """Tests for the @null identity grid."""

    def test_covers_everything(self):
        """Test the null grid contains any point."""
        grid = Grid.null_grid()
        assert grid.null
        assert grid.name == "@null"
        assert grid.contains(math.pi, -math.pi / 2.0)
        assert grid.contains(-3.0, 1.5)

    @pytest.mark.parametrize("inverse", [False, True])
    def test_identity(self, inverse):
        """Test the null grid leaves coordinates untouched."""
        coord = _point(-76.640625, 49.921875)
        before = coord.to_tuple()

        status = apply_grid_shift([Grid.null_grid()], inverse, coord)

        assert status == GridShiftStatus.APPLIED
        assert coord.to_tuple() == before


class TestGridLookup:
    """Tests for containment, interpolation and conversion."""

    def test_contains(self, synthetic_grid):
        """Test the padded bounding box test."""
        assert synthetic_grid.contains(math.radians(1.0), math.radians(41.0))
        assert synthetic_grid.contains(math.radians(2.0), math.radians(42.0))
        assert not synthetic_grid.contains(math.radians(2.1), math.radians(41.0))
        assert not synthetic_grid.contains(math.radians(1.0), math.radians(39.9))

    def test_interpolate_at_node(self, synthetic_grid):
        """Test interpolation at the lower-left node returns the stored shift."""
        dlon, dlat = synthetic_grid.interpolate(0.0, 0.0)

        assert dlon == pytest.approx(-2.0 * SEC, rel=1e-6)
        assert dlat == pytest.approx(1.5 * SEC, rel=1e-6)

    def test_interpolate_outside(self, synthetic_grid):
        """Test positions off the table interpolate to None."""
        assert synthetic_grid.interpolate(-math.radians(0.6), 0.0) is None
        assert synthetic_grid.interpolate(0.0, math.radians(2.6)) is None

    def test_forward_shift(self, synthetic_grid):
        """Test the forward shift subtracts the positive-west longitude shift."""
        lon, lat = synthetic_grid.convert(math.radians(1.0), math.radians(41.0), inverse=False)

        # At (1E, 41N) the file stores -1.8" (west) and +1.6"
        assert lon == pytest.approx(math.radians(1.0) + 1.8 * SEC, abs=1e-11)
        assert lat == pytest.approx(math.radians(41.0) + 1.6 * SEC, abs=1e-11)

    def test_bilinear_between_nodes(self, synthetic_grid):
        """Test a linear shift field is reproduced between nodes."""
        lon, lat = synthetic_grid.convert(math.radians(0.3), math.radians(40.7), inverse=False)

        assert lon == pytest.approx(math.radians(0.3) + 1.94 * SEC, abs=1e-11)
        assert lat == pytest.approx(math.radians(40.7) + 1.57 * SEC, abs=1e-11)

    def test_inverse_undoes_forward(self, synthetic_grid):
        """Test the iterative inverse recovers the original point."""
        lon0, lat0 = math.radians(1.234), math.radians(41.567)
        lon, lat = synthetic_grid.convert(lon0, lat0, inverse=False)
        back_lon, back_lat = synthetic_grid.convert(lon, lat, inverse=True)

        assert back_lon == pytest.approx(lon0, abs=1e-11)
        assert back_lat == pytest.approx(lat0, abs=1e-11)

    def test_upper_right_corner(self, synthetic_grid):
        """Test the last node is reachable."""
        assert synthetic_grid.convert(math.radians(2.0), math.radians(42.0), inverse=False) is not None

    def test_outside_returns_none(self, synthetic_grid):
        """Test a point beyond the table cannot be converted."""
        assert synthetic_grid.convert(math.radians(5.0), math.radians(41.0), inverse=False) is None


class TestApplyGridShift:
    """Tests for the multi-grid lookup."""

    def test_miss_leaves_point(self, synthetic_grid):
        """Test a point outside every grid is reported and unchanged."""
        coord = _point(10.0, 10.0)
        before = coord.to_tuple()

        status = apply_grid_shift([synthetic_grid], False, coord)

        assert status == GridShiftStatus.NOT_APPLICABLE
        assert coord.to_tuple() == before

    def test_first_covering_grid_wins(self):
        """Test grids are tried in order."""
        first = _constant_grid("first", 0.0, 0.0, 0.0, 1.0)
        second = _constant_grid("second", 0.0, 0.0, 0.0, 2.0)
        coord = _point(1.0, 1.0)

        assert apply_grid_shift([first, second], False, coord) == GridShiftStatus.APPLIED
        assert coord.y == pytest.approx(math.radians(1.0) + SEC, abs=1e-12)

    def test_falls_through_to_covering_grid(self):
        """Test a grid that misses the point is skipped."""
        elsewhere = _constant_grid("elsewhere", 50.0, 50.0, 0.0, 1.0)
        here = _constant_grid("here", 0.0, 0.0, 0.0, 2.0)
        coord = _point(1.0, 1.0)

        assert apply_grid_shift([elsewhere, here], False, coord) == GridShiftStatus.APPLIED
        assert coord.y == pytest.approx(math.radians(1.0) + 2.0 * SEC, abs=1e-12)
