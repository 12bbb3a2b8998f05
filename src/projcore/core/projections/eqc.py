"""
Equidistant Cylindrical (Plate Carree) projection.
"""

import math
from typing import Tuple

from projcore.core.errors import ProjectionError
from projcore.core.projections.base import Projection


class EquidistantCylindricalProjection(Projection):
    """Equidistant cylindrical projection, always evaluated on the sphere."""

    name = "Equidistant Cylindrical (Plate Carree)"

    def initialize(self) -> None:
        super().initialize()
        self._rc = math.cos(self.true_scale_latitude)
        if self._rc <= 0.0:
            raise ProjectionError(
                "lat_ts must be strictly between -90 and 90 degrees", projection=self.name
            )

    def forward(self, lam: float, phi: float) -> Tuple[float, float]:
        return self._rc * lam, phi - self.projection_latitude

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        return x / self._rc, y + self.projection_latitude
