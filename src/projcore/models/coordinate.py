"""
Mutable coordinate buffer passed through transforms.
"""

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(eq=False)
class ProjCoordinate:
    """
    A point with an optional third ordinate.

    Transforms overwrite instances in place so callers can reuse one buffer
    across many points. ``z`` is NaN when no height is present.

    Attributes:
        x: Easting or longitude
        y: Northing or latitude
        z: Height, NaN when absent
    """

    x: float = 0.0
    y: float = 0.0
    z: float = math.nan

    def has_valid_z(self) -> bool:
        return not math.isnan(self.z)

    def clear_z(self) -> None:
        self.z = math.nan

    def set_value(self, other: "ProjCoordinate") -> "ProjCoordinate":
        """Copy all three ordinates from another coordinate."""
        self.x = other.x
        self.y = other.y
        self.z = other.z
        return self

    def copy(self) -> "ProjCoordinate":
        return ProjCoordinate(self.x, self.y, self.z)

    def are_xy_equal(self, other: "ProjCoordinate", tolerance: float = 0.0) -> bool:
        """
        Compare horizontal ordinates within a tolerance.

        Args:
            other: Coordinate to compare against
            tolerance: Maximum absolute difference per ordinate

        Returns:
            True if both x and y are within tolerance
        """
        return abs(self.x - other.x) <= tolerance and abs(self.y - other.y) <= tolerance

    def to_tuple(self) -> Tuple[float, ...]:
        """Return ``(x, y)`` or ``(x, y, z)`` when a height is present."""
        if self.has_valid_z():
            return (self.x, self.y, self.z)
        return (self.x, self.y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProjCoordinate):
            return NotImplemented
        if self.x != other.x or self.y != other.y:
            return False
        if self.has_valid_z() or other.has_valid_z():
            return self.z == other.z
        return True

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        if self.has_valid_z():
            return f"ProjCoordinate[{self.x} {self.y} {self.z}]"
        return f"ProjCoordinate[{self.x} {self.y}]"
