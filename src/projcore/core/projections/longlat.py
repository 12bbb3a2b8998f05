"""
Geographic identity projection.
"""

from typing import Tuple

from projcore.core.projections.base import Projection
from projcore.models.units import Units


class LongLatProjection(Projection):
    """
    Identity projection for geographic CRSs.

    Coordinates stay longitude/latitude; the wrapper only converts between
    degrees and radians.
    """

    name = "Geographic (longlat)"

    def __init__(self) -> None:
        super().__init__()
        self.unit = Units.DEGREES

    def forward(self, lam: float, phi: float) -> Tuple[float, float]:
        return lam, phi

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        return x, y

    def is_geographic(self) -> bool:
        return True
