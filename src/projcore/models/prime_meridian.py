"""
Prime meridian model.
"""

import math
from dataclasses import dataclass
from typing import ClassVar

from projcore.models.coordinate import ProjCoordinate


@dataclass(frozen=True)
class PrimeMeridian:
    """
    Reference meridian that a CRS measures longitudes from.

    Attributes:
        name: Meridian name
        longitude: Degrees east of Greenwich
    """

    name: str
    longitude: float

    GREENWICH: ClassVar["PrimeMeridian"]
    PARIS: ClassVar["PrimeMeridian"]
    FERRO: ClassVar["PrimeMeridian"]
    ROME: ClassVar["PrimeMeridian"]
    MADRID: ClassVar["PrimeMeridian"]
    LISBON: ClassVar["PrimeMeridian"]
    BERN: ClassVar["PrimeMeridian"]
    OSLO: ClassVar["PrimeMeridian"]

    @property
    def longitude_radians(self) -> float:
        return math.radians(self.longitude)

    def to_greenwich(self, coord: ProjCoordinate) -> None:
        """Shift a geographic coordinate (radians) to be Greenwich-relative."""
        if self.longitude != 0.0:
            coord.x += self.longitude_radians

    def from_greenwich(self, coord: ProjCoordinate) -> None:
        """Shift a Greenwich-relative coordinate (radians) to this meridian."""
        if self.longitude != 0.0:
            coord.x -= self.longitude_radians

    def __str__(self) -> str:
        return self.name


PrimeMeridian.GREENWICH = PrimeMeridian("greenwich", 0.0)
PrimeMeridian.PARIS = PrimeMeridian("paris", 2.337229166667)
PrimeMeridian.FERRO = PrimeMeridian("ferro", -17.666666666667)
PrimeMeridian.ROME = PrimeMeridian("rome", 12.452333333333)
PrimeMeridian.MADRID = PrimeMeridian("madrid", -3.687938888889)
PrimeMeridian.LISBON = PrimeMeridian("lisbon", -9.131906111111)
PrimeMeridian.BERN = PrimeMeridian("bern", 7.439583333333)
PrimeMeridian.OSLO = PrimeMeridian("oslo", 10.722916666667)
