"""
Projection base class.

A projection is a mutable configuration object: set its parameters, call
``initialize()`` once, then project. Variants implement only the unit-sphere
or unit-ellipsoid equations in ``forward``/``inverse``; the wrapper methods
here apply the central meridian, the ``a * k0`` scaling, false
easting/northing and unit conversion, so every variant handles those the
same way.
"""

import copy
import math
from typing import Any, ClassVar, Tuple

from projcore.core.errors import ProjectionError
from projcore.core.projections.projection_math import normalize_longitude
from projcore.models.axis import AxisOrder
from projcore.models.coordinate import ProjCoordinate
from projcore.models.ellipsoid import Ellipsoid
from projcore.models.prime_meridian import PrimeMeridian
from projcore.models.units import Unit, Units


class Projection:
    """
    Base class for all map projections.

    Angles are stored in radians. Linear parameters (false easting and
    northing) are stored in metres regardless of ``unit``.

    Attributes:
        projection_latitude: Latitude of origin (lat_0)
        projection_longitude: Central meridian (lon_0)
        projection_latitude1: First standard parallel (lat_1)
        projection_latitude2: Second standard parallel (lat_2)
        true_scale_latitude: Latitude of true scale (lat_ts)
        scale_factor: Scale factor at origin (k_0)
        false_easting: False easting in metres (x_0)
        false_northing: False northing in metres (y_0)
        unit: Output unit of the projected coordinates
        axis_order: External axis order
        prime_meridian: Meridian longitudes are measured from
        ellipsoid: Reference ellipsoid
    """

    name: ClassVar[str] = "projection"

    def __init__(self) -> None:
        self.projection_latitude = 0.0
        self.projection_longitude = 0.0
        self.projection_latitude1 = 0.0
        self.projection_latitude2 = 0.0
        self.true_scale_latitude = 0.0
        self.scale_factor = 1.0
        self.false_easting = 0.0
        self.false_northing = 0.0
        self.unit: Unit = Units.METRES
        self.axis_order = AxisOrder.ENU
        self.prime_meridian = PrimeMeridian.GREENWICH
        self.ellipsoid = Ellipsoid.SPHERE
        self._initialized = False

    @property
    def from_metres(self) -> float:
        """Number of output units per metre."""
        return 1.0 / self.unit.value

    def initialize(self) -> None:
        """
        Recompute derived constants from the current parameters.

        Subclasses extend this and must call it first. Safe to call again
        after changing parameters.

        Raises:
            ProjectionError: If the parameters are inconsistent
        """
        self.a = self.ellipsoid.a
        self.es = self.ellipsoid.es
        self.e = math.sqrt(self.es)
        self.one_es = 1.0 - self.es
        self.rone_es = 1.0 / self.one_es
        self.spherical = self.es == 0.0
        self.total_scale = self.a * self.scale_factor * self.from_metres
        self.total_false_easting = self.false_easting * self.from_metres
        self.total_false_northing = self.false_northing * self.from_metres
        self._initialized = True

    def forward(self, lam: float, phi: float) -> Tuple[float, float]:
        """
        Project radians relative to the central meridian onto the unit figure.

        Args:
            lam: Longitude offset from the central meridian (radians)
            phi: Latitude (radians)

        Returns:
            Unscaled planar ``(x, y)``
        """
        raise NotImplementedError

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        """
        Inverse of ``forward``.

        Args:
            x: Unscaled easting
            y: Unscaled northing

        Returns:
            ``(lam, phi)`` in radians relative to the central meridian
        """
        raise ProjectionError(
            f"{self.name} has no inverse", projection=self.name
        )

    def has_inverse(self) -> bool:
        return True

    def is_geographic(self) -> bool:
        return False

    def _check_initialized(self) -> None:
        if not self._initialized:
            raise ProjectionError(
                f"{self.name} used before initialize()", projection=self.name
            )

    def project(self, src: ProjCoordinate, dst: ProjCoordinate) -> ProjCoordinate:
        """
        Project a geographic coordinate given in degrees.

        Args:
            src: Longitude/latitude in degrees
            dst: Buffer receiving the projected coordinate

        Returns:
            ``dst``
        """
        return self._project(math.radians(src.x), math.radians(src.y), dst)

    def project_radians(self, src: ProjCoordinate, dst: ProjCoordinate) -> ProjCoordinate:
        """Project a geographic coordinate given in radians."""
        return self._project(src.x, src.y, dst)

    def _project(self, lam: float, phi: float, dst: ProjCoordinate) -> ProjCoordinate:
        self._check_initialized()
        if self.projection_longitude != 0.0:
            lam = normalize_longitude(lam - self.projection_longitude)
        x, y = self.forward(lam, phi)
        if self.unit.angular:
            dst.x = math.degrees(x)
            dst.y = math.degrees(y)
        else:
            dst.x = self.total_scale * x + self.total_false_easting
            dst.y = self.total_scale * y + self.total_false_northing
        return dst

    def inverse_project(self, src: ProjCoordinate, dst: ProjCoordinate) -> ProjCoordinate:
        """
        Inverse-project to longitude/latitude in degrees.

        Args:
            src: Projected coordinate
            dst: Buffer receiving longitude/latitude in degrees

        Returns:
            ``dst``
        """
        self.inverse_project_radians(src, dst)
        dst.x = math.degrees(dst.x)
        dst.y = math.degrees(dst.y)
        return dst

    def inverse_project_radians(
        self, src: ProjCoordinate, dst: ProjCoordinate
    ) -> ProjCoordinate:
        """
        Inverse-project to longitude/latitude in radians.

        Raises:
            ProjectionError: If the projection is forward-only
        """
        self._check_initialized()
        if not self.has_inverse():
            raise ProjectionError(f"{self.name} has no inverse", projection=self.name)

        if self.unit.angular:
            x = math.radians(src.x)
            y = math.radians(src.y)
        else:
            x = (src.x - self.total_false_easting) / self.total_scale
            y = (src.y - self.total_false_northing) / self.total_scale

        lam, phi = self.inverse(x, y)
        if lam < -math.pi:
            lam = -math.pi
        elif lam > math.pi:
            lam = math.pi
        # NaN marks a point outside the projection's domain; pass it through
        if self.projection_longitude != 0.0 and not math.isnan(lam):
            lam = normalize_longitude(lam + self.projection_longitude)
        dst.x = lam
        dst.y = phi
        return dst

    def _extra_parameters(self) -> Tuple[Any, ...]:
        """Variant-specific values that take part in equality."""
        return ()

    def _parameters(self) -> Tuple[Any, ...]:
        return (
            type(self),
            self.ellipsoid,
            self.projection_latitude,
            self.projection_longitude,
            self.projection_latitude1,
            self.projection_latitude2,
            self.true_scale_latitude,
            self.scale_factor,
            self.false_easting,
            self.false_northing,
            self.unit,
            self.axis_order,
            self.prime_meridian,
        ) + self._extra_parameters()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Projection):
            return NotImplemented
        return self._parameters() == other._parameters()

    def __hash__(self) -> int:
        return hash(self._parameters())

    def copy(self) -> "Projection":
        """Return an independent deep copy."""
        return copy.deepcopy(self)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(lat_0={math.degrees(self.projection_latitude)}, "
            f"lon_0={math.degrees(self.projection_longitude)}, ellipsoid={self.ellipsoid})"
        )
