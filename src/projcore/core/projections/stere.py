"""
Stereographic projections.

``StereographicAzimuthalProjection`` is the proj.4 ``stere`` formulation
(conformal latitude, four aspect modes). ``ObliqueStereographicAlternativeProjection``
is ``sterea``: a double projection through the Gauss conformal sphere, used
by national grids such as the Dutch RD.
"""

import math
from enum import Enum
from typing import Tuple

from projcore.core.errors import ProjectionError
from projcore.core.projections import projection_math as pm
from projcore.core.projections.base import Projection

STERE_MAX_ITERATIONS = 8
STERE_TOLERANCE = 1e-10
TOL8 = 1e-8

GAUSS_MAX_ITERATIONS = 20
GAUSS_TOLERANCE = 1e-14


class AspectMode(Enum):
    """Aspect of an azimuthal projection, chosen from the latitude of origin."""

    S_POLE = "south_pole"
    N_POLE = "north_pole"
    OBLIQUE = "oblique"
    EQUATORIAL = "equatorial"


def aspect_for(phi0: float) -> AspectMode:
    t = abs(phi0)
    if abs(t - pm.HALFPI) < pm.EPS10:
        return AspectMode.S_POLE if phi0 < 0.0 else AspectMode.N_POLE
    if t > pm.EPS10:
        return AspectMode.OBLIQUE
    return AspectMode.EQUATORIAL


def _ssfn(phit: float, sinphi: float, eccen: float) -> float:
    sinphi *= eccen
    return math.tan(0.5 * (pm.HALFPI + phit)) * math.pow(
        (1.0 - sinphi) / (1.0 + sinphi), 0.5 * eccen
    )


class StereographicAzimuthalProjection(Projection):
    """
    Stereographic azimuthal projection.

    Polar aspects honor ``true_scale_latitude`` (defaulting to the pole
    itself when it is left at zero).
    """

    name = "Stereographic"

    def initialize(self) -> None:
        super().initialize()
        self._mode = aspect_for(self.projection_latitude)
        phits = abs(self.true_scale_latitude) if self.true_scale_latitude != 0.0 else pm.HALFPI
        self._phits = phits
        mode = self._mode

        if not self.spherical:
            if mode in (AspectMode.N_POLE, AspectMode.S_POLE):
                if abs(phits - pm.HALFPI) < pm.EPS10:
                    self._akm1 = 2.0 / math.sqrt(
                        math.pow(1.0 + self.e, 1.0 + self.e)
                        * math.pow(1.0 - self.e, 1.0 - self.e)
                    )
                else:
                    t = math.sin(phits) * self.e
                    self._akm1 = (
                        math.cos(phits)
                        / pm.tsfn(phits, math.sin(phits), self.e)
                        / math.sqrt(1.0 - t * t)
                    )
            elif mode == AspectMode.EQUATORIAL:
                self._akm1 = 2.0
                self._sin_x1 = 0.0
                self._cos_x1 = 1.0
            else:
                sinphi0 = math.sin(self.projection_latitude)
                x = 2.0 * math.atan(
                    _ssfn(self.projection_latitude, sinphi0, self.e)
                ) - pm.HALFPI
                t = sinphi0 * self.e
                self._akm1 = 2.0 * math.cos(self.projection_latitude) / math.sqrt(1.0 - t * t)
                self._sin_x1 = math.sin(x)
                self._cos_x1 = math.cos(x)
        else:
            if mode == AspectMode.OBLIQUE:
                self._sinph0 = math.sin(self.projection_latitude)
                self._cosph0 = math.cos(self.projection_latitude)
                self._akm1 = 2.0
            elif mode == AspectMode.EQUATORIAL:
                self._akm1 = 2.0
            elif abs(phits - pm.HALFPI) >= pm.EPS10:
                self._akm1 = math.cos(phits) / math.tan(pm.FORTPI - 0.5 * phits)
            else:
                self._akm1 = 2.0

    def forward(self, lam: float, phi: float) -> Tuple[float, float]:
        if self.spherical:
            return self._sphere_forward(lam, phi)

        coslam = math.cos(lam)
        sinlam = math.sin(lam)
        sinphi = math.sin(phi)
        mode = self._mode

        if mode in (AspectMode.OBLIQUE, AspectMode.EQUATORIAL):
            x_ang = 2.0 * math.atan(_ssfn(phi, sinphi, self.e)) - pm.HALFPI
            sin_x = math.sin(x_ang)
            cos_x = math.cos(x_ang)
            if mode == AspectMode.OBLIQUE:
                denom = self._cos_x1 * (
                    1.0 + self._sin_x1 * sin_x + self._cos_x1 * cos_x * coslam
                )
            else:
                denom = 1.0 + cos_x * coslam
            if abs(denom) < pm.EPS10:
                raise ProjectionError(
                    "Antipode of the projection centre has no image", projection=self.name
                )
            a = self._akm1 / denom
            y = a * (
                self._cos_x1 * sin_x - self._sin_x1 * cos_x * coslam
                if mode == AspectMode.OBLIQUE
                else sin_x
            )
            return a * cos_x * sinlam, y

        if mode == AspectMode.S_POLE:
            phi = -phi
            coslam = -coslam
            sinphi = -sinphi
        if abs(phi + pm.HALFPI) < pm.EPS10:
            raise ProjectionError(
                "Opposite pole has no image", projection=self.name
            )
        rho = self._akm1 * pm.tsfn(phi, sinphi, self.e)
        return rho * sinlam, -rho * coslam

    def _sphere_forward(self, lam: float, phi: float) -> Tuple[float, float]:
        sinphi = math.sin(phi)
        cosphi = math.cos(phi)
        coslam = math.cos(lam)
        sinlam = math.sin(lam)
        mode = self._mode

        if mode == AspectMode.EQUATORIAL:
            y = 1.0 + cosphi * coslam
            if y <= pm.EPS10:
                raise ProjectionError(
                    "Antipode of the projection centre has no image", projection=self.name
                )
            y = self._akm1 / y
            return y * cosphi * sinlam, y * sinphi
        if mode == AspectMode.OBLIQUE:
            y = 1.0 + self._sinph0 * sinphi + self._cosph0 * cosphi * coslam
            if y <= pm.EPS10:
                raise ProjectionError(
                    "Antipode of the projection centre has no image", projection=self.name
                )
            y = self._akm1 / y
            return (
                y * cosphi * sinlam,
                y * (self._cosph0 * sinphi - self._sinph0 * cosphi * coslam),
            )

        if mode == AspectMode.N_POLE:
            coslam = -coslam
            phi = -phi
        if abs(phi - pm.HALFPI) < TOL8:
            raise ProjectionError("Opposite pole has no image", projection=self.name)
        y = self._akm1 * math.tan(pm.FORTPI + 0.5 * phi)
        return sinlam * y, coslam * y

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        if self.spherical:
            return self._sphere_inverse(x, y)

        rho = math.hypot(x, y)
        mode = self._mode
        if mode in (AspectMode.OBLIQUE, AspectMode.EQUATORIAL):
            tp = 2.0 * math.atan2(rho * self._cos_x1, self._akm1)
            cosphi = math.cos(tp)
            sinphi = math.sin(tp)
            if rho == 0.0:
                phi_l = pm.asin(cosphi * self._sin_x1)
            else:
                phi_l = pm.asin(cosphi * self._sin_x1 + (y * sinphi * self._cos_x1 / rho))
            tp = math.tan(0.5 * (pm.HALFPI + phi_l))
            x *= sinphi
            y = rho * self._cos_x1 * cosphi - y * self._sin_x1 * sinphi
            half_pi = pm.HALFPI
            half_e = 0.5 * self.e
        else:
            if mode == AspectMode.N_POLE:
                y = -y
            tp = -rho / self._akm1
            phi_l = pm.HALFPI - 2.0 * math.atan(tp)
            half_pi = -pm.HALFPI
            half_e = -0.5 * self.e

        phi = phi_l
        for _ in range(STERE_MAX_ITERATIONS):
            sinphi = self.e * math.sin(phi_l)
            phi = 2.0 * math.atan(
                tp * math.pow((1.0 + sinphi) / (1.0 - sinphi), half_e)
            ) - half_pi
            if abs(phi_l - phi) < STERE_TOLERANCE:
                break
            phi_l = phi

        if mode == AspectMode.S_POLE:
            phi = -phi
        lam = 0.0 if (x == 0.0 and y == 0.0) else math.atan2(x, y)
        return lam, phi

    def _sphere_inverse(self, x: float, y: float) -> Tuple[float, float]:
        rh = math.hypot(x, y)
        c = 2.0 * math.atan(rh / self._akm1)
        sinc = math.sin(c)
        cosc = math.cos(c)
        mode = self._mode
        lam = 0.0

        if mode == AspectMode.EQUATORIAL:
            phi = 0.0 if abs(rh) <= pm.EPS10 else pm.asin(y * sinc / rh)
            if cosc != 0.0 or x != 0.0:
                lam = math.atan2(x * sinc, cosc * rh)
        elif mode == AspectMode.OBLIQUE:
            if abs(rh) <= pm.EPS10:
                phi = self.projection_latitude
            else:
                phi = pm.asin(cosc * self._sinph0 + y * sinc * self._cosph0 / rh)
            c = cosc - self._sinph0 * math.sin(phi)
            if c != 0.0 or x != 0.0:
                lam = math.atan2(x * sinc * self._cosph0, c * rh)
        else:
            if mode == AspectMode.N_POLE:
                y = -y
            if abs(rh) <= pm.EPS10:
                phi = self.projection_latitude
            else:
                phi = pm.asin(-cosc if mode == AspectMode.S_POLE else cosc)
            lam = 0.0 if (x == 0.0 and y == 0.0) else math.atan2(x, y)
        return lam, phi


def _srat(esinp: float, exp: float) -> float:
    return math.pow((1.0 - esinp) / (1.0 + esinp), exp)


class ObliqueStereographicAlternativeProjection(Projection):
    """Oblique stereographic through the Gauss conformal sphere (``sterea``)."""

    name = "Oblique Stereographic Alternative"

    def initialize(self) -> None:
        super().initialize()
        phi0 = self.projection_latitude
        sphi = math.sin(phi0)
        cphi = math.cos(phi0)
        cphi *= cphi

        self._rc = math.sqrt(1.0 - self.es) / (1.0 - self.es * sphi * sphi)
        self._C = math.sqrt(1.0 + self.es * cphi * cphi / (1.0 - self.es))
        self._chi0 = pm.asin(sphi / self._C)
        self._ratexp = 0.5 * self._C * self.e
        self._K = math.tan(0.5 * self._chi0 + pm.FORTPI) / (
            math.pow(math.tan(0.5 * phi0 + pm.FORTPI), self._C)
            * _srat(self.e * sphi, self._ratexp)
        )
        self._sinc0 = math.sin(self._chi0)
        self._cosc0 = math.cos(self._chi0)
        self._R2 = 2.0 * self._rc

    def _gauss(self, lam: float, phi: float) -> Tuple[float, float]:
        chi = 2.0 * math.atan(
            self._K
            * math.pow(math.tan(0.5 * phi + pm.FORTPI), self._C)
            * _srat(self.e * math.sin(phi), self._ratexp)
        ) - pm.HALFPI
        return self._C * lam, chi

    def _inverse_gauss(self, lam: float, chi: float) -> Tuple[float, float]:
        lam /= self._C
        num = math.pow(math.tan(0.5 * chi + pm.FORTPI) / self._K, 1.0 / self._C)
        phi = chi
        for _ in range(GAUSS_MAX_ITERATIONS):
            elp_phi = 2.0 * math.atan(num * _srat(self.e * math.sin(phi), -0.5 * self.e)) - pm.HALFPI
            if abs(elp_phi - phi) < GAUSS_TOLERANCE:
                phi = elp_phi
                break
            phi = elp_phi
        return lam, phi

    def forward(self, lam: float, phi: float) -> Tuple[float, float]:
        lam, phi = self._gauss(lam, phi)
        sinc = math.sin(phi)
        cosc = math.cos(phi)
        cosl = math.cos(lam)
        denom = 1.0 + self._sinc0 * sinc + self._cosc0 * cosc * cosl
        if denom <= 0.0:
            raise ProjectionError(
                "Antipode of the projection centre has no image", projection=self.name
            )
        k = self._R2 / denom
        return (
            k * cosc * math.sin(lam),
            k * (self._cosc0 * sinc - self._sinc0 * cosc * cosl),
        )

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        x /= self._R2
        y /= self._R2
        rho = math.hypot(x, y)
        if rho != 0.0:
            c = 2.0 * math.atan2(rho, 1.0)
            sinc = math.sin(c)
            cosc = math.cos(c)
            phi = pm.asin(cosc * self._sinc0 + y * sinc * self._cosc0 / rho)
            lam = math.atan2(x * sinc, rho * self._cosc0 * cosc - y * self._sinc0 * sinc)
        else:
            phi = self._chi0
            lam = 0.0
        return self._inverse_gauss(lam, phi)
