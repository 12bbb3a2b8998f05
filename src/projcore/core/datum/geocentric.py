"""
Geodetic <-> geocentric conversion and the Helmert datum shift.
"""

import math
from typing import Sequence

from projcore.core.errors import DatumTransformError
from projcore.models.coordinate import ProjCoordinate
from projcore.models.ellipsoid import Ellipsoid

HALFPI = math.pi / 2.0

# Latitudes up to this far past the pole are clamped rather than rejected
LATITUDE_OVERSHOOT = 1.001

INVERSE_TOLERANCE = 1e-12
INVERSE_MAX_ITERATIONS = 30


class GeocentricConverter:
    """
    Converts between geodetic (lon, lat, h) and geocentric (X, Y, Z).

    Coordinates are radians and metres and are converted in place.

    Attributes:
        a: Semi-major axis
        b: Semi-minor axis
        e2: Squared eccentricity
        ep2: Second eccentricity squared
    """

    def __init__(self, a: float, es: float):
        self.a = a
        self.e2 = es
        self._update()

    @classmethod
    def from_ellipsoid(cls, ellipsoid: Ellipsoid) -> "GeocentricConverter":
        return cls(ellipsoid.a, ellipsoid.es)

    def _update(self) -> None:
        self.b = self.a * math.sqrt(1.0 - self.e2)
        self.ep2 = self.e2 / (1.0 - self.e2)

    def override_with_wgs84_params(self) -> None:
        """Replace this converter's figure with the WGS84 ellipsoid."""
        self.a = Ellipsoid.WGS84.a
        self.e2 = Ellipsoid.WGS84.es
        self._update()

    def convert_geodetic_to_geocentric(self, p: ProjCoordinate) -> None:
        """
        Convert (lon, lat, h) in radians to geocentric X, Y, Z.

        A missing height is treated as zero.

        Raises:
            DatumTransformError: If the latitude is beyond a pole
        """
        longitude = p.x
        latitude = p.y
        height = p.z if p.has_valid_z() else 0.0

        if latitude < -HALFPI and latitude > -LATITUDE_OVERSHOOT * HALFPI:
            latitude = -HALFPI
        elif latitude > HALFPI and latitude < LATITUDE_OVERSHOOT * HALFPI:
            latitude = HALFPI
        elif latitude < -HALFPI or latitude > HALFPI:
            raise DatumTransformError(
                f"Geodetic latitude out of range: {math.degrees(latitude)}",
                details={"latitude": latitude},
            )

        if longitude > math.pi:
            longitude -= 2.0 * math.pi

        sin_lat = math.sin(latitude)
        cos_lat = math.cos(latitude)
        rn = self.a / math.sqrt(1.0 - self.e2 * sin_lat * sin_lat)

        p.x = (rn + height) * cos_lat * math.cos(longitude)
        p.y = (rn + height) * cos_lat * math.sin(longitude)
        p.z = ((rn * (1.0 - self.e2)) + height) * sin_lat

    def convert_geocentric_to_geodetic(self, p: ProjCoordinate) -> None:
        """
        Convert geocentric X, Y, Z to (lon, lat, h) in radians.

        Iterative method from the University of Hannover (Wenzel), accurate
        to about 1e-12 radians within INVERSE_MAX_ITERATIONS steps.
        """
        x = p.x
        y = p.y
        z = p.z if p.has_valid_z() else 0.0

        d2 = x * x + y * y
        dist = math.sqrt(d2)
        rr = math.sqrt(d2 + z * z)

        if dist / self.a < INVERSE_TOLERANCE:
            longitude = 0.0
            if rr / self.a < INVERSE_TOLERANCE:
                p.x = 0.0
                p.y = HALFPI
                p.z = -self.b
                return
        else:
            longitude = math.atan2(y, x)

        ct = z / rr
        st = dist / rr
        rx = 1.0 / math.sqrt(1.0 - self.e2 * (2.0 - self.e2) * st * st)
        cphi0 = st * (1.0 - self.e2) * rx
        sphi0 = ct * rx

        height = 0.0
        cphi = cphi0
        sphi = sphi0
        for _ in range(INVERSE_MAX_ITERATIONS):
            rn = self.a / math.sqrt(1.0 - self.e2 * sphi0 * sphi0)
            height = dist * cphi0 + z * sphi0 - rn * (1.0 - self.e2 * sphi0 * sphi0)

            rk = self.e2 * rn / (rn + height)
            rx = 1.0 / math.sqrt(1.0 - rk * (2.0 - rk) * st * st)
            cphi = st * (1.0 - rk) * rx
            sphi = ct * rx
            sdphi = sphi * cphi0 - cphi * sphi0
            cphi0 = cphi
            sphi0 = sphi
            if sdphi * sdphi <= INVERSE_TOLERANCE * INVERSE_TOLERANCE:
                break

        p.x = longitude
        p.y = math.atan(sphi / abs(cphi))
        p.z = height

    @staticmethod
    def apply_helmert(p: ProjCoordinate, params: Sequence[float], to_wgs84: bool) -> None:
        """
        Apply a 3- or 7-parameter Helmert shift to a geocentric coordinate.

        Args:
            p: Geocentric coordinate, modified in place
            params: ``(dx, dy, dz)`` or ``(dx, dy, dz, rx, ry, rz, m)`` with
                rotations in radians and ``m`` the scale multiplier
            to_wgs84: Direction of the shift
        """
        dx, dy, dz = params[0], params[1], params[2]
        if len(params) == 3:
            if to_wgs84:
                p.x += dx
                p.y += dy
                p.z += dz
            else:
                p.x -= dx
                p.y -= dy
                p.z -= dz
            return

        rx, ry, rz, m = params[3], params[4], params[5], params[6]
        if to_wgs84:
            x = m * (p.x - rz * p.y + ry * p.z) + dx
            y = m * (rz * p.x + p.y - rx * p.z) + dy
            z = m * (-ry * p.x + rx * p.y + p.z) + dz
        else:
            tx = (p.x - dx) / m
            ty = (p.y - dy) / m
            tz = (p.z - dz) / m
            x = tx + rz * ty - ry * tz
            y = -rz * tx + ty + rx * tz
            z = ry * tx - rx * ty + tz
        p.x = x
        p.y = y
        p.z = z

    def is_equal(self, other: "GeocentricConverter") -> bool:
        return self.a == other.a and self.e2 == other.e2

    def __repr__(self) -> str:
        return f"GeocentricConverter(a={self.a}, e2={self.e2})"
