"""
Axis order handling.

Transforms work in east-north-up internally; a CRS whose external axes differ
(``neu`` for latitude-first, ``wsu`` for south-west oriented grids) is
reordered on the way in and out.
"""

from typing import ClassVar, Dict, Tuple

from projcore.models.coordinate import ProjCoordinate

# axis letter -> (ENU index, sign)
_AXES: Dict[str, Tuple[int, float]] = {
    "e": (0, 1.0),
    "w": (0, -1.0),
    "n": (1, 1.0),
    "s": (1, -1.0),
    "u": (2, 1.0),
    "d": (2, -1.0),
}


class AxisOrder:
    """
    Three-letter axis order such as ``enu`` or ``neu``.

    Each letter names the direction of the corresponding ordinate; exactly
    one of e/w, one of n/s and one of u/d must appear.
    """

    ENU: ClassVar["AxisOrder"]
    NEU: ClassVar["AxisOrder"]

    def __init__(self, spec: str = "enu"):
        """
        Initialize AxisOrder.

        Args:
            spec: Three-letter axis specification

        Raises:
            ValueError: If the specification is malformed
        """
        spec = spec.lower()
        if len(spec) != 3 or any(letter not in _AXES for letter in spec):
            raise ValueError(f"Invalid axis order: {spec!r}")
        if sorted(_AXES[letter][0] for letter in spec) != [0, 1, 2]:
            raise ValueError(f"Axis order must name each direction once: {spec!r}")
        self.spec = spec
        self._mapping = tuple(_AXES[letter] for letter in spec)

    @property
    def is_enu(self) -> bool:
        return self.spec == "enu"

    def to_enu(self, coord: ProjCoordinate) -> None:
        """Reorder a coordinate from this axis order to ENU, in place."""
        if self.is_enu:
            return
        values = (coord.x, coord.y, coord.z)
        enu = [0.0, 0.0, 0.0]
        for value, (index, sign) in zip(values, self._mapping):
            enu[index] = sign * value
        coord.x, coord.y, coord.z = enu

    def from_enu(self, coord: ProjCoordinate) -> None:
        """Reorder a coordinate from ENU to this axis order, in place."""
        if self.is_enu:
            return
        enu = (coord.x, coord.y, coord.z)
        coord.x, coord.y, coord.z = (sign * enu[index] for index, sign in self._mapping)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AxisOrder):
            return NotImplemented
        return self.spec == other.spec

    def __hash__(self) -> int:
        return hash(self.spec)

    def __repr__(self) -> str:
        return f"AxisOrder({self.spec!r})"


AxisOrder.ENU = AxisOrder("enu")
AxisOrder.NEU = AxisOrder("neu")
