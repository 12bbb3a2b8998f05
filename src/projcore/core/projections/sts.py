"""
Sine/tangent series pseudocylindrical projections.

Kavraisky V, Quartic Authalic, McBryde-Thomas Flat-Polar Sine (No. 1) and
Foucaut share one formula parameterized by ``(p, q, tan_mode)``.
"""

import math
from typing import Any, Tuple

from projcore.core.projections import projection_math as pm
from projcore.core.projections.base import Projection


class SineTangentSeriesProjection(Projection):
    """
    Member of the sine/tangent series family.

    Attributes:
        C_x: Longitude scale, ``q / p``
        C_y: Latitude scale, ``p``
        C_p: Latitude multiplier, ``1 / q``
        tan_mode: Use the tangent rather than the sine form
    """

    name = "Sine-Tangent Series"

    def __init__(self, p: float = 1.50488, q: float = 1.35439, tan_mode: bool = False):
        super().__init__()
        self.C_x = q / p
        self.C_y = p
        self.C_p = 1.0 / q
        self.tan_mode = tan_mode

    def forward(self, lam: float, phi: float) -> Tuple[float, float]:
        x = self.C_x * lam * math.cos(phi)
        y = self.C_y
        phi *= self.C_p
        c = math.cos(phi)
        if self.tan_mode:
            x *= c * c
            y *= math.tan(phi)
        else:
            x /= c
            y *= math.sin(phi)
        return x, y

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        y /= self.C_y
        phi = math.atan(y) if self.tan_mode else pm.asin(y)
        c = math.cos(phi)
        phi /= self.C_p
        lam = x / (self.C_x * math.cos(phi))
        if self.tan_mode:
            lam /= c * c
        else:
            lam *= c
        return lam, phi

    def _extra_parameters(self) -> Tuple[Any, ...]:
        return (self.C_x, self.C_y, self.C_p, self.tan_mode)


class KavraiskyVProjection(SineTangentSeriesProjection):
    name = "Kavraisky V"

    def __init__(self) -> None:
        super().__init__(1.50488, 1.35439, False)


class QuarticAuthalicProjection(SineTangentSeriesProjection):
    name = "Quartic Authalic"

    def __init__(self) -> None:
        super().__init__(2.0, 2.0, False)


class McBrydeThomasFlatPolarSineProjection(SineTangentSeriesProjection):
    name = "McBryde-Thomas Flat-Polar Sine (No. 1)"

    def __init__(self) -> None:
        super().__init__(1.48875, 1.36509, False)


class FoucautProjection(SineTangentSeriesProjection):
    name = "Foucaut"

    def __init__(self) -> None:
        super().__init__(2.0, 2.0, True)
