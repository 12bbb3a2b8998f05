"""
Mollweide projection.
"""

import math
from typing import Tuple

from projcore.core.projections import projection_math as pm
from projcore.core.projections.base import Projection

MAX_ITERATIONS = 10
LOOP_TOLERANCE = 1e-7


class MollweideProjection(Projection):
    """Mollweide equal-area pseudocylindrical projection (spherical form)."""

    name = "Mollweide"

    def initialize(self) -> None:
        super().initialize()
        p = pm.HALFPI
        p2 = p + p
        sp = math.sin(p)
        r = math.sqrt(pm.TWOPI * sp / (p2 + math.sin(p2)))
        self._cx = 2.0 * r / math.pi
        self._cy = r / sp
        self._cp = p2 + math.sin(p2)

    def forward(self, lam: float, phi: float) -> Tuple[float, float]:
        k = self._cp * math.sin(phi)
        converged = False
        for _ in range(MAX_ITERATIONS):
            v = (phi + math.sin(phi) - k) / (1.0 + math.cos(phi))
            phi -= v
            if abs(v) < LOOP_TOLERANCE:
                converged = True
                break
        if converged:
            phi *= 0.5
        else:
            phi = -pm.HALFPI if phi < 0.0 else pm.HALFPI
        return self._cx * lam * math.cos(phi), self._cy * math.sin(phi)

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        phi = pm.asin(y / self._cy)
        lam = x / (self._cx * math.cos(phi))
        phi += phi
        phi = pm.asin((phi + math.sin(phi)) / self._cp)
        return lam, phi
