"""
Lambert Conformal Conic projection.
"""

import math
from typing import Tuple

from projcore.core.errors import ProjectionError
from projcore.core.projections import projection_math as pm
from projcore.core.projections.base import Projection


class LambertConformalConicProjection(Projection):
    """
    Lambert Conformal Conic with one or two standard parallels.

    With equal parallels the cone is tangent at ``projection_latitude1``;
    otherwise it is secant through both.
    """

    name = "Lambert Conformal Conic"

    def initialize(self) -> None:
        super().initialize()
        phi1 = self.projection_latitude1
        phi2 = self.projection_latitude2
        if abs(phi1 + phi2) < pm.EPS10:
            raise ProjectionError(
                "Standard parallels must not be symmetric about the equator",
                projection=self.name,
            )

        sinphi = math.sin(phi1)
        cosphi = math.cos(phi1)
        self._n = sinphi
        secant = abs(phi1 - phi2) >= pm.EPS10

        if not self.spherical:
            m1 = pm.msfn(sinphi, cosphi, self.es)
            ml1 = pm.tsfn(phi1, sinphi, self.e)
            if secant:
                sinphi = math.sin(phi2)
                cosphi = math.cos(phi2)
                self._n = math.log(m1 / pm.msfn(sinphi, cosphi, self.es))
                self._n /= math.log(ml1 / pm.tsfn(phi2, sinphi, self.e))
            self._c = m1 * math.pow(ml1, -self._n) / self._n
            self._rho0 = self._c
            if abs(abs(self.projection_latitude) - pm.HALFPI) < pm.EPS10:
                self._rho0 = 0.0
            else:
                self._rho0 *= math.pow(
                    pm.tsfn(
                        self.projection_latitude,
                        math.sin(self.projection_latitude),
                        self.e,
                    ),
                    self._n,
                )
        else:
            if secant:
                self._n = math.log(cosphi / math.cos(phi2)) / math.log(
                    math.tan(pm.FORTPI + 0.5 * phi2) / math.tan(pm.FORTPI + 0.5 * phi1)
                )
            self._c = cosphi * math.pow(math.tan(pm.FORTPI + 0.5 * phi1), self._n) / self._n
            if abs(abs(self.projection_latitude) - pm.HALFPI) < pm.EPS10:
                self._rho0 = 0.0
            else:
                self._rho0 = self._c * math.pow(
                    math.tan(pm.FORTPI + 0.5 * self.projection_latitude), -self._n
                )

    def forward(self, lam: float, phi: float) -> Tuple[float, float]:
        if abs(abs(phi) - pm.HALFPI) < pm.EPS10:
            if phi * self._n <= 0.0:
                raise ProjectionError(
                    "Pole opposite the cone apex has no image", projection=self.name
                )
            rho = 0.0
        elif self.spherical:
            rho = self._c * math.pow(math.tan(pm.FORTPI + 0.5 * phi), -self._n)
        else:
            rho = self._c * math.pow(pm.tsfn(phi, math.sin(phi), self.e), self._n)
        lam *= self._n
        return rho * math.sin(lam), self._rho0 - rho * math.cos(lam)

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        y = self._rho0 - y
        rho = math.hypot(x, y)
        if rho == 0.0:
            return 0.0, pm.HALFPI if self._n > 0.0 else -pm.HALFPI

        if self._n < 0.0:
            rho = -rho
            x = -x
            y = -y
        if self.spherical:
            phi = 2.0 * math.atan(math.pow(self._c / rho, 1.0 / self._n)) - pm.HALFPI
        else:
            phi = pm.phi2(math.pow(rho / self._c, 1.0 / self._n), self.e)
        return math.atan2(x, y) / self._n, phi
