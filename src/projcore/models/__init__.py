"""
Value types shared across projcore.
"""

from projcore.models.axis import AxisOrder
from projcore.models.coordinate import ProjCoordinate
from projcore.models.ellipsoid import Ellipsoid
from projcore.models.prime_meridian import PrimeMeridian
from projcore.models.units import Unit, Units

__all__ = [
    "AxisOrder",
    "Ellipsoid",
    "PrimeMeridian",
    "ProjCoordinate",
    "Unit",
    "Units",
]
