"""
Geocentric pseudo-projection.
"""

from projcore.core.datum.geocentric import GeocentricConverter
from projcore.core.projections.base import Projection
from projcore.models.coordinate import ProjCoordinate


class GeocentProjection(Projection):
    """
    Maps geodetic coordinates to Earth-centred X, Y, Z in metres.

    Forward-only: the output is already metric, so the wrapper's scaling
    and false origin are bypassed.
    """

    name = "Geocentric"

    def initialize(self) -> None:
        super().initialize()
        self._converter = GeocentricConverter.from_ellipsoid(self.ellipsoid)

    def _project(self, lam: float, phi: float, dst: ProjCoordinate) -> ProjCoordinate:
        self._check_initialized()
        dst.x = lam
        dst.y = phi
        if not dst.has_valid_z():
            dst.z = 0.0
        self._converter.convert_geodetic_to_geocentric(dst)
        return dst

    def has_inverse(self) -> bool:
        return False
