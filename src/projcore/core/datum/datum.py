"""
Geodetic datum model.

A datum pairs an ellipsoid with the information needed to reach WGS84:
either a Helmert parameter set or a list of grid-shift tables.
"""

import math
from enum import Enum
from typing import ClassVar, List, Optional, Sequence, Tuple

from projcore.core.datum.geocentric import GeocentricConverter
from projcore.core.datum.grid import Grid, GridShiftStatus, apply_grid_shift
from projcore.core.errors import DatumError
from projcore.models.coordinate import ProjCoordinate
from projcore.models.ellipsoid import Ellipsoid

SEC_TO_RAD = math.pi / 180.0 / 3600.0

# Squared-eccentricity tolerance used when comparing datums (pj_compare_datums)
DATUM_ES_TOLERANCE = 0.000000000050


class DatumTransformType(Enum):
    """How a datum reaches WGS84."""

    NONE = "none"
    THREE_PARAM = "3param"
    SEVEN_PARAM = "7param"
    GRIDSHIFT = "gridshift"
    UNKNOWN = "unknown"
    WGS84 = "wgs84"


class Datum:
    """
    Immutable geodetic datum.

    Attributes:
        name: Datum name (ignored by equality)
        ellipsoid: Reference ellipsoid
        transform_type: Classification derived from the supplied parameters
    """

    WGS84: ClassVar["Datum"]
    GGRS87: ClassVar["Datum"]
    NAD83: ClassVar["Datum"]
    POTSDAM: ClassVar["Datum"]
    CH1903: ClassVar["Datum"]
    OSGB36: ClassVar["Datum"]

    def __init__(
        self,
        name: str,
        ellipsoid: Ellipsoid,
        towgs84: Optional[Sequence[float]] = None,
        grids: Optional[Sequence[Grid]] = None,
    ):
        """
        Initialize Datum.

        Args:
            name: Datum name
            ellipsoid: Reference ellipsoid
            towgs84: 3 values ``(dx, dy, dz)`` in metres or 7 values
                ``(dx, dy, dz, rx, ry, rz, ppm)`` with rotations in
                arc-seconds and scale in parts per million
            grids: Grid-shift tables tried in order; takes precedence over
                ``towgs84``

        Raises:
            DatumError: If the Helmert list has the wrong length or the grid
                list is empty
        """
        self.name = name
        self.ellipsoid = ellipsoid
        self._grids: Tuple[Grid, ...] = ()
        self._params: Optional[Tuple[float, ...]] = None

        if grids is not None:
            if len(grids) == 0:
                raise DatumError(
                    "A grid-shift datum needs at least one grid",
                    datum_name=name,
                    suggestions=["Use Grid.null_grid() for an explicit identity shift"],
                )
            self._grids = tuple(grids)
            self.transform_type = DatumTransformType.GRIDSHIFT
        elif towgs84 is None:
            self.transform_type = DatumTransformType.UNKNOWN
        else:
            self._params, self.transform_type = _classify(name, towgs84)

    @property
    def towgs84(self) -> Optional[Tuple[float, ...]]:
        """Helmert parameters in internal units (radians, scale multiplier)."""
        return self._params

    @property
    def grids(self) -> List[Grid]:
        return list(self._grids)

    def has_transform_to_wgs84(self) -> bool:
        return self.transform_type in (
            DatumTransformType.THREE_PARAM,
            DatumTransformType.SEVEN_PARAM,
        )

    def is_equal(self, other: "Datum") -> bool:
        """
        Logical equality: same classification, ellipsoid and parameters.

        Names are ignored, so WGS84 and NAD83 compare equal.
        """
        if self.transform_type != other.transform_type:
            return False
        if self.ellipsoid.a != other.ellipsoid.a:
            return False
        if abs(self.ellipsoid.es - other.ellipsoid.es) > DATUM_ES_TOLERANCE:
            return False
        if self.transform_type in (
            DatumTransformType.THREE_PARAM,
            DatumTransformType.SEVEN_PARAM,
        ):
            return self._params == other._params
        if self.transform_type == DatumTransformType.GRIDSHIFT:
            return self._grids == other._grids
        return True

    def transform_from_geocentric_to_wgs84(self, p: ProjCoordinate) -> None:
        """Apply this datum's Helmert shift towards WGS84 (geocentric, in place)."""
        if self._params is not None and self.has_transform_to_wgs84():
            GeocentricConverter.apply_helmert(p, self._params, to_wgs84=True)

    def transform_to_geocentric_from_wgs84(self, p: ProjCoordinate) -> None:
        """Apply this datum's Helmert shift from WGS84 (geocentric, in place)."""
        if self._params is not None and self.has_transform_to_wgs84():
            GeocentricConverter.apply_helmert(p, self._params, to_wgs84=False)

    def shift(self, p: ProjCoordinate) -> GridShiftStatus:
        """Apply the grid shift towards WGS84 to a geographic point (radians)."""
        return apply_grid_shift(self._grids, False, p)

    def inverse_shift(self, p: ProjCoordinate) -> GridShiftStatus:
        """Remove the grid shift from a WGS84-based geographic point (radians)."""
        return apply_grid_shift(self._grids, True, p)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Datum):
            return NotImplemented
        return self.is_equal(other)

    def __hash__(self) -> int:
        params = self._params if self.has_transform_to_wgs84() else None
        grids = self._grids if self.transform_type == DatumTransformType.GRIDSHIFT else None
        return hash((self.transform_type, self.ellipsoid.a, params, grids))

    def __repr__(self) -> str:
        return (
            f"Datum(name={self.name!r}, ellipsoid={self.ellipsoid.name!r}, "
            f"type={self.transform_type.value})"
        )

    def __str__(self) -> str:
        return self.name


def transform_type_of(datum: Optional[Datum]) -> DatumTransformType:
    """Classification of an optional datum; NONE when there is no datum."""
    if datum is None:
        return DatumTransformType.NONE
    return datum.transform_type


def _classify(
    name: str, towgs84: Sequence[float]
) -> Tuple[Tuple[float, ...], DatumTransformType]:
    values = [float(v) for v in towgs84]
    if len(values) not in (3, 7):
        raise DatumError(
            f"towgs84 needs 3 or 7 values, got {len(values)}",
            datum_name=name,
            details={"towgs84": values},
        )

    if all(v == 0.0 for v in values):
        return (0.0, 0.0, 0.0), DatumTransformType.WGS84

    if len(values) == 7 and all(v == 0.0 for v in values[3:]):
        values = values[:3]

    if len(values) == 3:
        return tuple(values), DatumTransformType.THREE_PARAM

    dx, dy, dz, rx, ry, rz, ppm = values
    params = (
        dx,
        dy,
        dz,
        rx * SEC_TO_RAD,
        ry * SEC_TO_RAD,
        rz * SEC_TO_RAD,
        1.0 + ppm / 1000000.0,
    )
    return params, DatumTransformType.SEVEN_PARAM


Datum.WGS84 = Datum("WGS84", Ellipsoid.WGS84, towgs84=(0.0, 0.0, 0.0))
Datum.GGRS87 = Datum("GGRS87", Ellipsoid.GRS80, towgs84=(-199.87, 74.79, 246.62))
Datum.NAD83 = Datum("NAD83", Ellipsoid.GRS80, towgs84=(0.0, 0.0, 0.0))
Datum.POTSDAM = Datum(
    "Potsdam Rauenberg 1950 DHDN",
    Ellipsoid.BESSEL,
    towgs84=(598.1, 73.7, 418.2, 0.202, 0.045, -2.455, 6.7),
)
Datum.CH1903 = Datum("CH1903", Ellipsoid.BESSEL, towgs84=(674.374, 15.056, 405.346))
Datum.OSGB36 = Datum(
    "OSGB36",
    Ellipsoid.AIRY,
    towgs84=(446.448, -125.157, 542.060, 0.1502, 0.2470, 0.8421, -20.4894),
)
