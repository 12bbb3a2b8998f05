"""
Reference ellipsoid model.
"""

import math
from dataclasses import dataclass
from typing import Any, ClassVar, Dict

# Tolerance on squared eccentricity when comparing ellipsoids built from
# different parameter pairs (a/b vs a/rf rounding).
ES_TOLERANCE = 1e-12


@dataclass(frozen=True, eq=False)
class Ellipsoid:
    """
    Immutable reference ellipsoid.

    Build instances with one of the ``from_*`` constructors; they keep
    ``a``, ``b`` and ``es`` consistent whichever pair was supplied.

    Attributes:
        name: Display name (ignored by equality)
        a: Semi-major (equatorial) axis in metres
        b: Semi-minor (polar) axis in metres
        es: Squared eccentricity, ``1 - (b/a)^2``
    """

    name: str
    a: float
    b: float
    es: float

    WGS84: ClassVar["Ellipsoid"]
    GRS80: ClassVar["Ellipsoid"]
    CLARKE_1866: ClassVar["Ellipsoid"]
    CLARKE_1880: ClassVar["Ellipsoid"]
    BESSEL: ClassVar["Ellipsoid"]
    INTERNATIONAL: ClassVar["Ellipsoid"]
    AIRY: ClassVar["Ellipsoid"]
    KRASSOVSKY: ClassVar["Ellipsoid"]
    SPHERE: ClassVar["Ellipsoid"]

    def __post_init__(self) -> None:
        """Validate the axis lengths and eccentricity."""
        if not self.a > 0:
            raise ValueError(f"Semi-major axis must be positive, got {self.a}")
        if not 0 < self.b <= self.a:
            raise ValueError(f"Semi-minor axis must be in (0, a], got {self.b}")
        if not 0 <= self.es < 1:
            raise ValueError(f"Squared eccentricity must be in [0, 1), got {self.es}")

    @classmethod
    def from_axes(cls, name: str, a: float, b: float) -> "Ellipsoid":
        """Create an ellipsoid from semi-major and semi-minor axes."""
        return cls(name=name, a=a, b=b, es=1.0 - (b * b) / (a * a))

    @classmethod
    def from_inverse_flattening(cls, name: str, a: float, rf: float) -> "Ellipsoid":
        """Create an ellipsoid from the semi-major axis and 1/f."""
        if rf <= 0:
            raise ValueError(f"Inverse flattening must be positive, got {rf}")
        return cls.from_flattening(name, a, 1.0 / rf)

    @classmethod
    def from_flattening(cls, name: str, a: float, f: float) -> "Ellipsoid":
        """Create an ellipsoid from the semi-major axis and flattening."""
        if not 0 <= f < 1:
            raise ValueError(f"Flattening must be in [0, 1), got {f}")
        return cls(name=name, a=a, b=a * (1.0 - f), es=f * (2.0 - f))

    @classmethod
    def from_eccentricity_squared(cls, name: str, a: float, es: float) -> "Ellipsoid":
        """Create an ellipsoid from the semi-major axis and squared eccentricity."""
        if not 0 <= es < 1:
            raise ValueError(f"Squared eccentricity must be in [0, 1), got {es}")
        return cls(name=name, a=a, b=a * math.sqrt(1.0 - es), es=es)

    @classmethod
    def sphere(cls, radius: float, name: str = "sphere") -> "Ellipsoid":
        """Create a sphere of the given radius."""
        return cls(name=name, a=radius, b=radius, es=0.0)

    @property
    def e(self) -> float:
        """First eccentricity."""
        return math.sqrt(self.es)

    @property
    def flattening(self) -> float:
        return 1.0 - math.sqrt(1.0 - self.es)

    @property
    def inverse_flattening(self) -> float:
        """1/f, infinite for a sphere."""
        f = self.flattening
        return math.inf if f == 0 else 1.0 / f

    @property
    def is_sphere(self) -> bool:
        return self.es == 0.0

    def is_equal(self, other: "Ellipsoid") -> bool:
        """
        Compare numeric parameters.

        Args:
            other: Ellipsoid to compare against

        Returns:
            True if both axes describe the same figure
        """
        return self.a == other.a and abs(self.es - other.es) <= ES_TOLERANCE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ellipsoid):
            return NotImplemented
        return self.is_equal(other)

    def __hash__(self) -> int:
        return hash(self.a)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "a": self.a,
            "b": self.b,
            "es": self.es,
            "inverse_flattening": self.inverse_flattening,
        }

    def __str__(self) -> str:
        return self.name


Ellipsoid.WGS84 = Ellipsoid.from_inverse_flattening("WGS 84", 6378137.0, 298.257223563)
Ellipsoid.GRS80 = Ellipsoid.from_inverse_flattening("GRS 1980", 6378137.0, 298.257222101)
Ellipsoid.CLARKE_1866 = Ellipsoid.from_axes("Clarke 1866", 6378206.4, 6356583.8)
Ellipsoid.CLARKE_1880 = Ellipsoid.from_inverse_flattening("Clarke 1880 (modified)", 6378249.145, 293.4663)
Ellipsoid.BESSEL = Ellipsoid.from_inverse_flattening("Bessel 1841", 6377397.155, 299.1528128)
Ellipsoid.INTERNATIONAL = Ellipsoid.from_inverse_flattening("International 1924", 6378388.0, 297.0)
Ellipsoid.AIRY = Ellipsoid.from_axes("Airy 1830", 6377563.396, 6356256.910)
Ellipsoid.KRASSOVSKY = Ellipsoid.from_inverse_flattening("Krassovsky, 1942", 6378245.0, 298.3)
Ellipsoid.SPHERE = Ellipsoid.sphere(6370997.0, name="Normal Sphere (r=6370997)")
