"""
Mercator projection.
"""

import math
from typing import Tuple

from projcore.core.errors import ProjectionError
from projcore.core.projections import projection_math as pm
from projcore.core.projections.base import Projection


class MercatorProjection(Projection):
    """
    Normal-aspect Mercator, scaled to be true at ``true_scale_latitude``.

    The poles have no finite image and raise ``ProjectionError``.
    """

    name = "Mercator"

    def initialize(self) -> None:
        super().initialize()
        phits = abs(self.true_scale_latitude)
        if phits >= pm.HALFPI:
            raise ProjectionError(
                "lat_ts must be strictly between -90 and 90 degrees", projection=self.name
            )
        if self.spherical:
            self._k = math.cos(phits)
        else:
            self._k = pm.msfn(math.sin(phits), math.cos(phits), self.es)

    def forward(self, lam: float, phi: float) -> Tuple[float, float]:
        if abs(abs(phi) - pm.HALFPI) <= pm.EPS10:
            raise ProjectionError(
                "Mercator is undefined at the poles",
                projection=self.name,
                details={"latitude": math.degrees(phi)},
            )
        if self.spherical:
            return self._k * lam, self._k * math.log(math.tan(pm.FORTPI + 0.5 * phi))
        return (
            self._k * lam,
            -self._k * math.log(pm.tsfn(phi, math.sin(phi), self.e)),
        )

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        if self.spherical:
            return x / self._k, pm.HALFPI - 2.0 * math.atan(math.exp(-y / self._k))
        return x / self._k, pm.phi2(math.exp(-y / self._k), self.e)
