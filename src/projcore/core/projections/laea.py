"""
Lambert Azimuthal Equal Area projection.
"""

import math
from typing import Tuple

from projcore.core.errors import ProjectionError
from projcore.core.projections import projection_math as pm
from projcore.core.projections.base import Projection
from projcore.core.projections.stere import AspectMode, aspect_for


class LambertAzimuthalEqualAreaProjection(Projection):
    """
    Lambert azimuthal equal-area projection in all four aspects.

    The ellipsoidal form works on the authalic sphere and converts back with
    the authalic latitude series.
    """

    name = "Lambert Azimuthal Equal Area"

    def initialize(self) -> None:
        super().initialize()
        self._mode = aspect_for(self.projection_latitude)
        mode = self._mode

        if self.spherical:
            if mode == AspectMode.OBLIQUE:
                self._sinb1 = math.sin(self.projection_latitude)
                self._cosb1 = math.cos(self.projection_latitude)
            return

        self._qp = pm.qsfn(1.0, self.e, self.one_es)
        self._mmf = 0.5 / (1.0 - self.es)
        self._apa = pm.authset(self.es)
        if mode in (AspectMode.N_POLE, AspectMode.S_POLE):
            self._dd = 1.0
        elif mode == AspectMode.EQUATORIAL:
            self._rq = math.sqrt(0.5 * self._qp)
            self._dd = 1.0 / self._rq
            self._xmf = 1.0
            self._ymf = 0.5 * self._qp
        else:
            self._rq = math.sqrt(0.5 * self._qp)
            sinphi = math.sin(self.projection_latitude)
            self._sinb1 = pm.qsfn(sinphi, self.e, self.one_es) / self._qp
            self._cosb1 = math.sqrt(1.0 - self._sinb1 * self._sinb1)
            self._dd = math.cos(self.projection_latitude) / (
                math.sqrt(1.0 - self.es * sinphi * sinphi) * self._rq * self._cosb1
            )
            self._xmf = self._rq * self._dd
            self._ymf = self._rq / self._dd

    def forward(self, lam: float, phi: float) -> Tuple[float, float]:
        if self.spherical:
            return self._sphere_forward(lam, phi)

        coslam = math.cos(lam)
        sinlam = math.sin(lam)
        sinphi = math.sin(phi)
        q = pm.qsfn(sinphi, self.e, self.one_es)
        mode = self._mode
        sinb = cosb = 0.0

        if mode in (AspectMode.OBLIQUE, AspectMode.EQUATORIAL):
            sinb = q / self._qp
            cosb = math.sqrt(max(0.0, 1.0 - sinb * sinb))

        if mode == AspectMode.OBLIQUE:
            b = 1.0 + self._sinb1 * sinb + self._cosb1 * cosb * coslam
        elif mode == AspectMode.EQUATORIAL:
            b = 1.0 + cosb * coslam
        elif mode == AspectMode.N_POLE:
            b = pm.HALFPI + phi
            q = self._qp - q
        else:
            b = phi - pm.HALFPI
            q = self._qp + q
        if abs(b) < pm.EPS10:
            raise ProjectionError(
                "Antipode of the projection centre has no image", projection=self.name
            )

        if mode in (AspectMode.OBLIQUE, AspectMode.EQUATORIAL):
            b = math.sqrt(2.0 / b)
            if mode == AspectMode.OBLIQUE:
                y = self._ymf * b * (self._cosb1 * sinb - self._sinb1 * cosb * coslam)
            else:
                y = (b * sinb) * self._ymf
            return self._xmf * b * cosb * sinlam, y

        if q >= 0.0:
            b = math.sqrt(q)
            y = coslam * (-b if mode == AspectMode.N_POLE else b)
            return b * sinlam, y
        return 0.0, 0.0

    def _sphere_forward(self, lam: float, phi: float) -> Tuple[float, float]:
        sinphi = math.sin(phi)
        cosphi = math.cos(phi)
        coslam = math.cos(lam)
        mode = self._mode

        if mode in (AspectMode.OBLIQUE, AspectMode.EQUATORIAL):
            if mode == AspectMode.EQUATORIAL:
                y = 1.0 + cosphi * coslam
            else:
                y = 1.0 + self._sinb1 * sinphi + self._cosb1 * cosphi * coslam
            if y <= pm.EPS10:
                raise ProjectionError(
                    "Antipode of the projection centre has no image", projection=self.name
                )
            y = math.sqrt(2.0 / y)
            x = y * cosphi * math.sin(lam)
            if mode == AspectMode.EQUATORIAL:
                y *= sinphi
            else:
                y *= self._cosb1 * sinphi - self._sinb1 * cosphi * coslam
            return x, y

        if mode == AspectMode.N_POLE:
            coslam = -coslam
        if abs(phi + self.projection_latitude) < pm.EPS10:
            raise ProjectionError("Opposite pole has no image", projection=self.name)
        y = pm.FORTPI - phi * 0.5
        y = 2.0 * (math.cos(y) if mode == AspectMode.S_POLE else math.sin(y))
        return y * math.sin(lam), y * coslam

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        if self.spherical:
            return self._sphere_inverse(x, y)

        mode = self._mode
        if mode in (AspectMode.OBLIQUE, AspectMode.EQUATORIAL):
            x /= self._dd
            y *= self._dd
            rho = math.hypot(x, y)
            if rho < pm.EPS10:
                return 0.0, self.projection_latitude
            s_ce = 2.0 * pm.asin(0.5 * rho / self._rq)
            c_ce = math.cos(s_ce)
            s_ce = math.sin(s_ce)
            x *= s_ce
            if mode == AspectMode.OBLIQUE:
                ab = c_ce * self._sinb1 + y * s_ce * self._cosb1 / rho
                y = rho * self._cosb1 * c_ce - y * self._sinb1 * s_ce
            else:
                ab = y * s_ce / rho
                y = rho * c_ce
        else:
            if mode == AspectMode.N_POLE:
                y = -y
            q = x * x + y * y
            if q == 0.0:
                return 0.0, self.projection_latitude
            ab = 1.0 - q / self._qp
            if mode == AspectMode.S_POLE:
                ab = -ab
        return math.atan2(x, y), pm.authlat(pm.asin(ab), self._apa)

    def _sphere_inverse(self, x: float, y: float) -> Tuple[float, float]:
        rh = math.hypot(x, y)
        phi = rh * 0.5
        if phi > 1.0:
            raise ProjectionError(
                "Point outside the projection domain", projection=self.name
            )
        phi = 2.0 * pm.asin(phi)
        mode = self._mode
        if mode in (AspectMode.OBLIQUE, AspectMode.EQUATORIAL):
            sinz = math.sin(phi)
            cosz = math.cos(phi)
            if mode == AspectMode.EQUATORIAL:
                phi = 0.0 if abs(rh) <= pm.EPS10 else pm.asin(y * sinz / rh)
                x *= sinz
                y = cosz * rh
            else:
                if abs(rh) <= pm.EPS10:
                    phi = self.projection_latitude
                else:
                    phi = pm.asin(cosz * self._sinb1 + y * sinz * self._cosb1 / rh)
                x *= sinz * self._cosb1
                y = (cosz - math.sin(phi) * self._sinb1) * rh
        elif mode == AspectMode.N_POLE:
            y = -y
            phi = pm.HALFPI - phi
        else:
            phi -= pm.HALFPI
        lam = 0.0 if (y == 0.0 and mode in (AspectMode.EQUATORIAL, AspectMode.OBLIQUE)) else math.atan2(x, y)
        return lam, phi
