"""
Albers Equal-Area Conic projection.
"""

import math
from typing import Tuple

from projcore.core.errors import ProjectionError
from projcore.core.projections import projection_math as pm
from projcore.core.projections.base import Projection

PHI1_MAX_ITERATIONS = 15
PHI1_TOLERANCE = 1e-10
TOL7 = 1e-7


def _phi1(qs: float, e: float, one_es: float) -> float:
    """Latitude from the authalic quantity ``qs``; best estimate at the cap."""
    phi = pm.asin(0.5 * qs)
    if e < pm.QSFN_EPSILON:
        return phi
    for _ in range(PHI1_MAX_ITERATIONS):
        sinpi = math.sin(phi)
        cospi = math.cos(phi)
        con = e * sinpi
        com = 1.0 - con * con
        dphi = (
            0.5 * com * com / cospi
            * (qs / one_es - sinpi / com + 0.5 / e * math.log((1.0 - con) / (1.0 + con)))
        )
        phi += dphi
        if abs(dphi) <= PHI1_TOLERANCE:
            break
    return phi


class AlbersProjection(Projection):
    """Albers conic equal-area projection with two standard parallels."""

    name = "Albers Equal Area"

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
            ml1 = pm.qsfn(sinphi, self.e, self.one_es)
            if secant:
                sinphi = math.sin(phi2)
                cosphi = math.cos(phi2)
                m2 = pm.msfn(sinphi, cosphi, self.es)
                ml2 = pm.qsfn(sinphi, self.e, self.one_es)
                self._n = (m1 * m1 - m2 * m2) / (ml2 - ml1)
            self._ec = 1.0 - 0.5 * self.one_es * math.log((1.0 - self.e) / (1.0 + self.e)) / self.e
            self._c = m1 * m1 + self._n * ml1
            self._dd = 1.0 / self._n
            self._rho0 = self._dd * math.sqrt(
                self._c
                - self._n * pm.qsfn(math.sin(self.projection_latitude), self.e, self.one_es)
            )
        else:
            if secant:
                self._n = 0.5 * (self._n + math.sin(phi2))
            self._n2 = self._n + self._n
            self._c = cosphi * cosphi + self._n2 * sinphi
            self._dd = 1.0 / self._n
            self._rho0 = self._dd * math.sqrt(
                self._c - self._n2 * math.sin(self.projection_latitude)
            )

    def forward(self, lam: float, phi: float) -> Tuple[float, float]:
        if self.spherical:
            rho = self._c - self._n2 * math.sin(phi)
        else:
            rho = self._c - self._n * pm.qsfn(math.sin(phi), self.e, self.one_es)
        if rho < 0.0:
            raise ProjectionError(
                "Point outside the projection domain", projection=self.name
            )
        rho = self._dd * math.sqrt(rho)
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
        phi = rho / self._dd
        if self.spherical:
            phi = (self._c - phi * phi) / self._n2
            phi = pm.asin(phi) if abs(phi) <= 1.0 else (pm.HALFPI if phi > 0 else -pm.HALFPI)
        else:
            phi = (self._c - phi * phi) / self._n
            if abs(self._ec - abs(phi)) > TOL7:
                phi = _phi1(phi, self.e, self.one_es)
            else:
                phi = pm.HALFPI if phi > 0.0 else -pm.HALFPI
        return math.atan2(x, y) / self._n, phi
