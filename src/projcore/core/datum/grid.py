"""
Horizontal grid-shift tables and the proj.4 lookup algorithm.

A grid stores (dlon, dlat) corrections in radians on a regular lon/lat
lattice. Longitude shifts are positive-west, as in NTv2 files.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np

from projcore.core.projections.projection_math import adjlon
from projcore.models.coordinate import ProjCoordinate

logger = logging.getLogger(__name__)

NULL_GRID_NAME = "@null"

GRID_INVERSE_MAX_ITERATIONS = 9
GRID_INVERSE_TOLERANCE = 1e-12

# Fractions this close to a cell boundary are snapped onto it at the edges
_EDGE_SNAP_HIGH = 0.99999999999
_EDGE_SNAP_LOW = 1e-11


class GridShiftStatus(Enum):
    """Outcome of a grid-shift stage."""

    APPLIED = "applied"
    NOT_APPLICABLE = "not_applicable"


@dataclass(frozen=True, eq=False)
class Grid:
    """
    Immutable grid-shift table.

    Attributes:
        name: Grid identifier (usually the file name)
        ll_lon: Longitude of the lower-left node (radians)
        ll_lat: Latitude of the lower-left node (radians)
        del_lon: Cell width (radians)
        del_lat: Cell height (radians)
        cols: Number of nodes along longitude
        rows: Number of nodes along latitude
        shifts: ``(rows, cols, 2)`` array of ``(dlon, dlat)`` in radians
        null: True for the identity sentinel that matches everywhere
    """

    name: str
    ll_lon: float
    ll_lat: float
    del_lon: float
    del_lat: float
    cols: int
    rows: int
    shifts: np.ndarray = field(repr=False)
    null: bool = False

    def __post_init__(self) -> None:
        shifts = np.asarray(self.shifts, dtype=np.float64)
        if shifts.shape != (self.rows, self.cols, 2):
            raise ValueError(
                f"Grid {self.name!r}: shifts shape {shifts.shape} does not match "
                f"({self.rows}, {self.cols}, 2)"
            )
        shifts.setflags(write=False)
        object.__setattr__(self, "shifts", shifts)

    @classmethod
    def null_grid(cls) -> "Grid":
        """The ``@null`` sentinel: an identity shift valid everywhere."""
        return cls(
            name=NULL_GRID_NAME,
            ll_lon=-math.pi,
            ll_lat=-math.pi / 2.0,
            del_lon=math.pi,
            del_lat=math.pi / 2.0,
            cols=3,
            rows=3,
            shifts=np.zeros((3, 3, 2)),
            null=True,
        )

    @property
    def ur_lon(self) -> float:
        return self.ll_lon + (self.cols - 1) * self.del_lon

    @property
    def ur_lat(self) -> float:
        return self.ll_lat + (self.rows - 1) * self.del_lat

    def contains(self, lon: float, lat: float) -> bool:
        """Whether a point (radians) lies inside the padded bounding box."""
        if self.null:
            return True
        eps = (abs(self.del_lat) + abs(self.del_lon)) / 10000.0
        return (
            self.ll_lat - eps <= lat <= self.ur_lat + eps
            and self.ll_lon - eps <= lon <= self.ur_lon + eps
        )

    def interpolate(self, lon: float, lat: float) -> Optional[Tuple[float, float]]:
        """
        Bilinearly interpolate the shift at a grid-relative position.

        Args:
            lon: Longitude offset from the lower-left node (radians)
            lat: Latitude offset from the lower-left node (radians)

        Returns:
            ``(dlon, dlat)``, or None if the position is outside the table
        """
        t_lon = lon / self.del_lon
        t_lat = lat / self.del_lat
        in_lon = math.floor(t_lon)
        in_lat = math.floor(t_lat)
        frct_lon = t_lon - in_lon
        frct_lat = t_lat - in_lat

        located = _snap(int(in_lon), frct_lon, self.cols)
        if located is None:
            return None
        col, frct_lon = located
        located = _snap(int(in_lat), frct_lat, self.rows)
        if located is None:
            return None
        row, frct_lat = located

        s = self.shifts
        m10 = frct_lon
        m00 = 1.0 - frct_lon
        m11 = m10 * frct_lat
        m01 = m00 * frct_lat
        frct_lat = 1.0 - frct_lat
        m00 *= frct_lat
        m10 *= frct_lat

        f00 = s[row, col]
        f10 = s[row, col + 1]
        f01 = s[row + 1, col]
        f11 = s[row + 1, col + 1]

        dlon = m00 * f00[0] + m10 * f10[0] + m01 * f01[0] + m11 * f11[0]
        dlat = m00 * f00[1] + m10 * f10[1] + m01 * f01[1] + m11 * f11[1]
        return float(dlon), float(dlat)

    def convert(self, lon: float, lat: float, inverse: bool) -> Optional[Tuple[float, float]]:
        """
        Apply this grid's shift to a point.

        The forward shift subtracts the (positive-west) longitude correction
        and adds the latitude correction. The inverse has no closed form and
        is found by fixed-point iteration, keeping the last estimate if it has
        not converged after GRID_INVERSE_MAX_ITERATIONS.

        Returns:
            Shifted ``(lon, lat)`` in radians, or None outside the table
        """
        if self.null:
            return lon, lat

        tb_lon = lon - self.ll_lon
        tb_lat = lat - self.ll_lat
        tb_lon = adjlon(tb_lon - math.pi) + math.pi

        shift = self.interpolate(tb_lon, tb_lat)
        if shift is None:
            return None

        if not inverse:
            return lon - shift[0], lat + shift[1]

        t_lon = tb_lon + shift[0]
        t_lat = tb_lat - shift[1]
        for _ in range(GRID_INVERSE_MAX_ITERATIONS):
            del_shift = self.interpolate(t_lon, t_lat)
            if del_shift is None:
                break
            dif_lon = t_lon - del_shift[0] - tb_lon
            dif_lat = t_lat + del_shift[1] - tb_lat
            t_lon -= dif_lon
            t_lat -= dif_lat
            if (
                abs(dif_lon) <= GRID_INVERSE_TOLERANCE
                and abs(dif_lat) <= GRID_INVERSE_TOLERANCE
            ):
                break

        return adjlon(t_lon + self.ll_lon), t_lat + self.ll_lat

    def _key(self) -> Tuple[object, ...]:
        return (
            self.name,
            self.ll_lon,
            self.ll_lat,
            self.del_lon,
            self.del_lat,
            self.cols,
            self.rows,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())


def _snap(index: int, frct: float, limit: int) -> Optional[Tuple[int, float]]:
    """Place a node index inside ``[0, limit - 1)``, snapping edge fractions."""
    if index < 0:
        if index == -1 and frct > _EDGE_SNAP_HIGH:
            return 0, 0.0
        return None
    if index + 1 >= limit:
        if index + 1 == limit and frct < _EDGE_SNAP_LOW:
            return index - 1, 1.0
        return None
    return index, frct


def apply_grid_shift(
    grids: Sequence[Grid], inverse: bool, coord: ProjCoordinate
) -> GridShiftStatus:
    """
    Shift a geographic coordinate (radians) with the first grid that covers it.

    Args:
        grids: Candidate grids in priority order
        inverse: Remove the shift instead of applying it
        coord: Coordinate updated in place

    Returns:
        APPLIED if a grid covered the point, NOT_APPLICABLE otherwise
    """
    for grid in grids:
        if not grid.contains(coord.x, coord.y):
            continue
        result = grid.convert(coord.x, coord.y, inverse)
        if result is None:
            continue
        coord.x, coord.y = result
        return GridShiftStatus.APPLIED

    logger.debug(
        "No grid covers point (%.9f, %.9f)",
        math.degrees(coord.x),
        math.degrees(coord.y),
    )
    return GridShiftStatus.NOT_APPLICABLE
