"""
Units of measure for projected and geographic coordinates.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Unit:
    """
    A unit of measure.

    Attributes:
        name: Singular name
        abbreviation: proj.4 style abbreviation (``m``, ``us-ft``, ``deg``)
        value: Size of one unit in metres (linear) or radians (angular)
        angular: Whether the unit measures angles
    """

    name: str
    abbreviation: str
    value: float
    angular: bool = False

    def __post_init__(self) -> None:
        """Validate the unit size."""
        if not self.value > 0:
            raise ValueError(f"Unit size must be positive, got {self.value}")

    def to_base(self, amount: float) -> float:
        """Convert an amount in this unit to metres (or radians)."""
        return amount * self.value

    def from_base(self, amount: float) -> float:
        """Convert an amount in metres (or radians) to this unit."""
        return amount / self.value

    def __str__(self) -> str:
        return self.abbreviation


class Units:
    """Commonly used units."""

    METRES = Unit("metre", "m", 1.0)
    KILOMETRES = Unit("kilometre", "km", 1000.0)
    FEET = Unit("foot", "ft", 0.3048)
    US_FEET = Unit("U.S. survey foot", "us-ft", 1200.0 / 3937.0)
    YARDS = Unit("yard", "yd", 0.9144)
    DEGREES = Unit("degree", "deg", math.pi / 180.0, angular=True)
    RADIANS = Unit("radian", "rad", 1.0, angular=True)
