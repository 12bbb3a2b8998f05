"""
Krovak oblique conformal conic projection (Czech/Slovak S-JTSK).

The pseudo-standard parallel, the cone azimuth and the Bessel eccentricity
are fixed constants of the national system rather than free parameters.
"""

import math
from typing import Any, Tuple

from projcore.core.projections import projection_math as pm
from projcore.core.projections.base import Projection

S45 = 0.785398163397448
S90 = 2.0 * S45
BESSEL_E2 = 0.006674372230614
# Latitude of the cone pole on the Gauss sphere, 59d42'42.69689"
UQ = 1.04216856380474
# Pseudo-standard parallel, 78d30'
S0 = 1.37008346281555

MAX_ITERATIONS = 15
TOLERANCE = 1e-15


class KrovakProjection(Projection):
    """
    Krovak projection.

    Attributes:
        czech: Keep the native south/west-positive axes instead of negating
            them into the usual east/north-negative EPSG:5514 layout
    """

    name = "Krovak"

    def __init__(self) -> None:
        super().__init__()
        self.czech = False
        self.projection_latitude = math.radians(49.5)
        self.projection_longitude = math.radians(24.833333333333333)
        self.scale_factor = 0.9999

    def initialize(self) -> None:
        super().initialize()
        fi0 = self.projection_latitude
        e2 = BESSEL_E2
        self._ke = math.sqrt(e2)
        ke = self._ke

        self._alfa = math.sqrt(1.0 + (e2 * math.pow(math.cos(fi0), 4)) / (1.0 - e2))
        u0 = pm.asin(math.sin(fi0) / self._alfa)
        g = math.pow(
            (1.0 + ke * math.sin(fi0)) / (1.0 - ke * math.sin(fi0)),
            self._alfa * ke / 2.0,
        )
        self._k = math.tan(u0 / 2.0 + S45) / math.pow(math.tan(fi0 / 2.0 + S45), self._alfa) * g
        n0 = math.sqrt(1.0 - e2) / (1.0 - e2 * math.pow(math.sin(fi0), 2))
        self._n = math.sin(S0)
        self._ro0 = n0 / math.tan(S0)
        self._ad = S90 - UQ

    def forward(self, lam: float, phi: float) -> Tuple[float, float]:
        ke = self._ke
        alfa = self._alfa
        gfi = math.pow(
            (1.0 + ke * math.sin(phi)) / (1.0 - ke * math.sin(phi)), alfa * ke / 2.0
        )
        u = 2.0 * (math.atan(self._k * math.pow(math.tan(phi / 2.0 + S45), alfa) / gfi) - S45)
        deltav = -lam * alfa

        # Rotate onto the oblique sphere whose pole is the cone apex
        sin_ad = math.sin(self._ad)
        cos_ad = math.cos(self._ad)
        s = pm.asin(cos_ad * math.sin(u) + sin_ad * math.cos(u) * math.cos(deltav))
        d = math.atan2(
            math.cos(u) * math.sin(deltav),
            cos_ad * math.cos(u) * math.cos(deltav) - sin_ad * math.sin(u),
        )
        eps = self._n * d
        ro = (
            self._ro0
            * math.pow(math.tan(S0 / 2.0 + S45), self._n)
            / math.pow(math.tan(s / 2.0 + S45), self._n)
        )

        # southing/westing axes
        x = ro * math.sin(eps)
        y = ro * math.cos(eps)
        if not self.czech:
            x = -x
            y = -y
        return x, y

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        xs = y
        ys = x
        if not self.czech:
            xs = -xs
            ys = -ys

        ro = math.hypot(xs, ys)
        eps = math.atan2(ys, xs)
        d = eps / math.sin(S0)
        s = 2.0 * (math.atan(math.pow(self._ro0 / ro, 1.0 / self._n) * math.tan(S0 / 2.0 + S45)) - S45)

        sin_ad = math.sin(self._ad)
        cos_ad = math.cos(self._ad)
        u = pm.asin(cos_ad * math.sin(s) - sin_ad * math.cos(s) * math.cos(d))
        deltav = math.atan2(
            math.cos(s) * math.sin(d),
            sin_ad * math.sin(s) + cos_ad * math.cos(s) * math.cos(d),
        )
        lam = -deltav / self._alfa

        ke = self._ke
        fi1 = u
        phi = u
        for _ in range(MAX_ITERATIONS):
            phi = 2.0 * (
                math.atan(
                    math.pow(self._k, -1.0 / self._alfa)
                    * math.pow(math.tan(u / 2.0 + S45), 1.0 / self._alfa)
                    * math.pow((1.0 + ke * math.sin(fi1)) / (1.0 - ke * math.sin(fi1)), ke / 2.0)
                )
                - S45
            )
            if abs(fi1 - phi) < TOLERANCE:
                break
            fi1 = phi
        return lam, phi

    def _extra_parameters(self) -> Tuple[Any, ...]:
        return (self.czech,)
