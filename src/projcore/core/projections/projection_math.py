"""
Shared math for projection formulas.

Helpers follow the proj.4 naming (msfn, tsfn, qsfn, phi2) so each projection
module reads like its published equations.
"""

import math
from typing import Tuple

from projcore.core.errors import ProjectionError

HALFPI = math.pi / 2.0
FORTPI = math.pi / 4.0
TWOPI = math.pi * 2.0
EPS10 = 1e-10

PHI2_MAX_ITERATIONS = 15
PHI2_TOLERANCE = 1e-10

# Below this eccentricity qsfn/phi1 fall back to spherical forms
QSFN_EPSILON = 1e-7

# Authalic latitude series coefficients
_P00 = 0.33333333333333333333
_P01 = 0.17222222222222222222
_P02 = 0.10257936507936507936
_P10 = 0.06388888888888888888
_P11 = 0.06640211640211640211
_P20 = 0.01641501294219154443


def asin(value: float) -> float:
    """Arc sine with the argument clamped to [-1, 1]."""
    if value <= -1.0:
        return -HALFPI
    if value >= 1.0:
        return HALFPI
    return math.asin(value)


def acos(value: float) -> float:
    """Arc cosine with the argument clamped to [-1, 1]."""
    if value <= -1.0:
        return math.pi
    if value >= 1.0:
        return 0.0
    return math.acos(value)


def normalize_longitude(angle: float) -> float:
    """
    Wrap a longitude into [-pi, pi].

    Raises:
        ProjectionError: If the angle is infinite or NaN
    """
    if math.isinf(angle) or math.isnan(angle):
        raise ProjectionError("Infinite or NaN longitude", details={"longitude": angle})
    while angle > math.pi:
        angle -= TWOPI
    while angle < -math.pi:
        angle += TWOPI
    return angle


def adjlon(lon: float) -> float:
    """Wrap a longitude into [-pi, pi] without looping (used by grid lookups)."""
    if abs(lon) <= math.pi:
        return lon
    lon += math.pi
    lon -= TWOPI * math.floor(lon / TWOPI)
    return lon - math.pi


def msfn(sinphi: float, cosphi: float, es: float) -> float:
    return cosphi / math.sqrt(1.0 - es * sinphi * sinphi)


def tsfn(phi: float, sinphi: float, e: float) -> float:
    sinphi *= e
    return math.tan(0.5 * (HALFPI - phi)) / math.pow((1.0 - sinphi) / (1.0 + sinphi), 0.5 * e)


def phi2(ts: float, e: float) -> float:
    """
    Latitude from the isometric quantity ``ts`` by fixed-point iteration.

    Returns the last estimate when PHI2_MAX_ITERATIONS is reached.
    """
    half_e = 0.5 * e
    phi = HALFPI - 2.0 * math.atan(ts)
    for _ in range(PHI2_MAX_ITERATIONS):
        con = e * math.sin(phi)
        dphi = HALFPI - 2.0 * math.atan(ts * math.pow((1.0 - con) / (1.0 + con), half_e)) - phi
        phi += dphi
        if abs(dphi) <= PHI2_TOLERANCE:
            break
    return phi


def qsfn(sinphi: float, e: float, one_es: float) -> float:
    if e >= QSFN_EPSILON:
        con = e * sinphi
        return one_es * (
            sinphi / (1.0 - con * con) - (0.5 / e) * math.log((1.0 - con) / (1.0 + con))
        )
    return sinphi + sinphi


def authset(es: float) -> Tuple[float, float, float]:
    """Coefficients for converting authalic to geodetic latitude."""
    t = es * es
    apa0 = es * _P00 + t * _P01
    apa1 = t * _P10
    t *= es
    apa0 += t * _P02
    apa1 += t * _P11
    apa2 = t * _P20
    return (apa0, apa1, apa2)


def authlat(beta: float, apa: Tuple[float, float, float]) -> float:
    t = beta + beta
    return beta + apa[0] * math.sin(t) + apa[1] * math.sin(t + t) + apa[2] * math.sin(t + t + t)
