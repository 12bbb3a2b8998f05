"""
Transverse Mercator and UTM.

The ellipsoidal form uses the Poder/Engsager 6th-order trigonometric series
(Gauss-Krueger via the Gaussian sphere), which stays accurate and invertible
far from the central meridian. Spheres use the closed-form equations.
"""

import math
from typing import Any, List, Optional, Sequence, Tuple

from projcore.core.errors import ProjectionError
from projcore.core.projections import projection_math as pm
from projcore.core.projections.base import Projection

ETMERC_ORDER = 6

# Normalized easting limit (about 150 degrees from the central meridian)
MAX_NORMALIZED_EASTING = 2.623395162778


def _gatg(coeffs: Sequence[float], b: float) -> float:
    """Clenshaw sum converting between geodetic and Gaussian latitude."""
    cos_2b = 2.0 * math.cos(2.0 * b)
    h = 0.0
    h2 = 0.0
    h1 = coeffs[-1]
    for c in reversed(coeffs[:-1]):
        h = -h2 + cos_2b * h1 + c
        h2, h1 = h1, h
    return b + h * math.sin(2.0 * b)


def _clens(coeffs: Sequence[float], arg_r: float) -> float:
    """Real Clenshaw summation."""
    r = 2.0 * math.cos(arg_r)
    hr1 = 0.0
    hr = coeffs[-1]
    for c in reversed(coeffs[:-1]):
        hr2 = hr1
        hr1 = hr
        hr = -hr2 + r * hr1 + c
    return math.sin(arg_r) * hr


def _clen_s(coeffs: Sequence[float], arg_r: float, arg_i: float) -> Tuple[float, float]:
    """Complex Clenshaw summation, returns (real, imaginary)."""
    sin_r = math.sin(arg_r)
    cos_r = math.cos(arg_r)
    sinh_i = math.sinh(arg_i)
    cosh_i = math.cosh(arg_i)
    r = 2.0 * cos_r * cosh_i
    i = -2.0 * sin_r * sinh_i
    hi1 = hr1 = hi = 0.0
    hr = coeffs[-1]
    for c in reversed(coeffs[:-1]):
        hr2 = hr1
        hi2 = hi1
        hr1 = hr
        hi1 = hi
        hr = -hr2 + r * hr1 - i * hi1 + c
        hi = -hi2 + i * hr1 + r * hi1
    r = sin_r * cosh_i
    i = cos_r * sinh_i
    return r * hr - i * hi, r * hi + i * hr


class TransverseMercatorProjection(Projection):
    """
    Transverse Mercator projection, optionally configured as a UTM zone.

    Attributes:
        utm_zone: UTM zone number when configured through ``set_utm_zone``
        is_south: Whether the UTM zone is in the southern hemisphere
    """

    name = "Transverse Mercator"

    def __init__(self) -> None:
        super().__init__()
        self.utm_zone: Optional[int] = None
        self.is_south = False

    def set_utm_zone(self, zone: int, south: bool = False) -> None:
        """
        Configure the standard UTM parameters for a zone.

        Args:
            zone: Zone number, 1-60
            south: True for the southern hemisphere false northing

        Raises:
            ProjectionError: If the zone is out of range
        """
        if not 1 <= zone <= 60:
            raise ProjectionError(
                f"UTM zone must be between 1 and 60, got {zone}", projection="utm"
            )
        self.utm_zone = zone
        self.is_south = south
        self.projection_longitude = (zone - 1 + 0.5) * math.pi / 30.0 - math.pi
        self.projection_latitude = 0.0
        self.scale_factor = 0.9996
        self.false_easting = 500000.0
        self.false_northing = 10000000.0 if south else 0.0

    def initialize(self) -> None:
        super().initialize()
        if self.spherical:
            return

        # third flattening
        f = self.es / (1.0 + math.sqrt(1.0 - self.es))
        n = f / (2.0 - f)
        np_ = n

        cgb: List[float] = [0.0] * ETMERC_ORDER
        cbg: List[float] = [0.0] * ETMERC_ORDER
        utg: List[float] = [0.0] * ETMERC_ORDER
        gtu: List[float] = [0.0] * ETMERC_ORDER

        # Gaussian <-> geodetic latitude
        cgb[0] = n * (2 + n * (-2 / 3.0 + n * (-2 + n * (116 / 45.0 + n * (26 / 45.0 + n * (-2854 / 675.0))))))
        cbg[0] = n * (-2 + n * (2 / 3.0 + n * (4 / 3.0 + n * (-82 / 45.0 + n * (32 / 45.0 + n * (4642 / 4725.0))))))
        np_ *= n
        cgb[1] = np_ * (7 / 3.0 + n * (-8 / 5.0 + n * (-227 / 45.0 + n * (2704 / 315.0 + n * (2323 / 945.0)))))
        cbg[1] = np_ * (5 / 3.0 + n * (-16 / 15.0 + n * (-13 / 9.0 + n * (904 / 315.0 + n * (-1522 / 945.0)))))
        np_ *= n
        cgb[2] = np_ * (56 / 15.0 + n * (-136 / 35.0 + n * (-1262 / 105.0 + n * (73814 / 2835.0))))
        cbg[2] = np_ * (-26 / 15.0 + n * (34 / 21.0 + n * (8 / 5.0 + n * (-12686 / 2835.0))))
        np_ *= n
        cgb[3] = np_ * (4279 / 630.0 + n * (-332 / 35.0 + n * (-399572 / 14175.0)))
        cbg[3] = np_ * (1237 / 630.0 + n * (-12 / 5.0 + n * (-24832 / 14175.0)))
        np_ *= n
        cgb[4] = np_ * (4174 / 315.0 + n * (-144838 / 6237.0))
        cbg[4] = np_ * (-734 / 315.0 + n * (109598 / 31185.0))
        np_ *= n
        cgb[5] = np_ * (601676 / 22275.0)
        cbg[5] = np_ * (444337 / 155925.0)

        # Normalized meridian quadrant, without k0
        np_ = n * n
        self._qn = 1.0 / (1 + n) * (1 + np_ * (1 / 4.0 + np_ * (1 / 64.0 + np_ / 256.0)))

        # ellipsoidal N, E <-> spherical N, E
        utg[0] = n * (-0.5 + n * (2 / 3.0 + n * (-37 / 96.0 + n * (1 / 360.0 + n * (81 / 512.0 + n * (-96199 / 604800.0))))))
        gtu[0] = n * (0.5 + n * (-2 / 3.0 + n * (5 / 16.0 + n * (41 / 180.0 + n * (-127 / 288.0 + n * (7891 / 37800.0))))))
        utg[1] = np_ * (-1 / 48.0 + n * (-1 / 15.0 + n * (437 / 1440.0 + n * (-46 / 105.0 + n * (1118711 / 3870720.0)))))
        gtu[1] = np_ * (13 / 48.0 + n * (-3 / 5.0 + n * (557 / 1440.0 + n * (281 / 630.0 + n * (-1983433 / 1935360.0)))))
        np_ *= n
        utg[2] = np_ * (-17 / 480.0 + n * (37 / 840.0 + n * (209 / 4480.0 + n * (-5569 / 90720.0))))
        gtu[2] = np_ * (61 / 240.0 + n * (-103 / 140.0 + n * (15061 / 26880.0 + n * (167603 / 181440.0))))
        np_ *= n
        utg[3] = np_ * (-4397 / 161280.0 + n * (11 / 504.0 + n * (830251 / 7257600.0)))
        gtu[3] = np_ * (49561 / 161280.0 + n * (-179 / 168.0 + n * (6601661 / 7257600.0)))
        np_ *= n
        utg[4] = np_ * (-4583 / 161280.0 + n * (108847 / 3991680.0))
        gtu[4] = np_ * (34729 / 80640.0 + n * (-3418889 / 1995840.0))
        np_ *= n
        utg[5] = np_ * (-20648693 / 638668800.0)
        gtu[5] = np_ * (212378941 / 319334400.0)

        self._cgb = tuple(cgb)
        self._cbg = tuple(cbg)
        self._utg = tuple(utg)
        self._gtu = tuple(gtu)

        # Gaussian latitude of the origin and the northing offset it implies
        z = _gatg(self._cbg, self.projection_latitude)
        self._zb = -self._qn * (z + _clens(self._gtu, 2.0 * z))

    def forward(self, lam: float, phi: float) -> Tuple[float, float]:
        if self.spherical:
            return self._sphere_forward(lam, phi)

        cn = _gatg(self._cbg, phi)
        sin_cn = math.sin(cn)
        cos_cn = math.cos(cn)
        sin_ce = math.sin(lam)
        cos_ce = math.cos(lam)

        cn = math.atan2(sin_cn, cos_ce * cos_cn)
        ce = math.atan2(sin_ce * cos_cn, math.hypot(sin_cn, cos_cn * cos_ce))

        ce = math.asinh(math.tan(ce))
        dcn, dce = _clen_s(self._gtu, 2.0 * cn, 2.0 * ce)
        cn += dcn
        ce += dce
        if abs(ce) > MAX_NORMALIZED_EASTING:
            raise ProjectionError(
                "Point too far from the central meridian", projection=self.name
            )
        return self._qn * ce, self._qn * cn + self._zb

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        if self.spherical:
            return self._sphere_inverse(x, y)

        cn = (y - self._zb) / self._qn
        ce = x / self._qn
        if abs(ce) > MAX_NORMALIZED_EASTING:
            raise ProjectionError(
                "Easting too far from the central meridian", projection=self.name
            )

        dcn, dce = _clen_s(self._utg, 2.0 * cn, 2.0 * ce)
        cn += dcn
        ce += dce
        ce = math.atan(math.sinh(ce))

        sin_cn = math.sin(cn)
        cos_cn = math.cos(cn)
        sin_ce = math.sin(ce)
        cos_ce = math.cos(ce)
        ce = math.atan2(sin_ce, cos_ce * cos_cn)
        cn = math.atan2(sin_cn * cos_ce, math.hypot(sin_ce, cos_ce * cos_cn))

        return ce, _gatg(self._cgb, cn)

    def _sphere_forward(self, lam: float, phi: float) -> Tuple[float, float]:
        cosphi = math.cos(phi)
        b = cosphi * math.sin(lam)
        if abs(abs(b) - 1.0) <= pm.EPS10:
            raise ProjectionError("Point lies on the projection's singular line", projection=self.name)

        x = 0.5 * math.log((1.0 + b) / (1.0 - b))
        y = cosphi * math.cos(lam) / math.sqrt(1.0 - b * b)
        b = abs(y)
        if b >= 1.0:
            if b - 1.0 > pm.EPS10:
                raise ProjectionError("Tolerance condition failed", projection=self.name)
            y = 0.0
        else:
            y = math.acos(y)
        if phi < 0.0:
            y = -y
        return x, y - self.projection_latitude

    def _sphere_inverse(self, x: float, y: float) -> Tuple[float, float]:
        h = math.exp(x)
        g = 0.5 * (h - 1.0 / h)
        d = self.projection_latitude + y
        h = math.cos(d)
        phi = pm.asin(math.sqrt((1.0 - h * h) / (1.0 + g * g)))
        if d < 0.0:
            phi = -phi
        lam = math.atan2(g, h) if (g != 0.0 or h != 0.0) else 0.0
        return lam, phi

    def _extra_parameters(self) -> Tuple[Any, ...]:
        return (self.utm_zone, self.is_south)

    def __str__(self) -> str:
        if self.utm_zone is not None:
            return f"Universal Transverse Mercator zone {self.utm_zone}{'S' if self.is_south else 'N'}"
        return self.name
