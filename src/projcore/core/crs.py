"""
Coordinate reference system model.
"""

import logging
from typing import Any, Optional

from projcore.core.datum.datum import Datum
from projcore.core.errors import CRSError
from projcore.core.projections.base import Projection
from projcore.core.projections.longlat import LongLatProjection
from projcore.core.projections.registry import build_projection
from projcore.models.axis import AxisOrder
from projcore.models.prime_meridian import PrimeMeridian

logger = logging.getLogger(__name__)


class CoordinateReferenceSystem:
    """
    A named pairing of a datum and a projection.

    Two systems are equal when their projections and datums are equal; the
    name is descriptive only.

    Attributes:
        name: Display name, e.g. ``"EPSG:32636"``
        datum: Geodetic datum, None only for the ``CS_GEO`` marker
        projection: Initialized projection
    """

    def __init__(self, name: str, datum: Optional[Datum], projection: Projection):
        """
        Initialize CoordinateReferenceSystem.

        Raises:
            CRSError: If no projection is supplied
        """
        if projection is None:
            raise CRSError("A coordinate reference system needs a projection", crs_name=name)
        self.name = name
        self.datum = datum
        self.projection = projection

    @property
    def is_geographic(self) -> bool:
        return self.projection.is_geographic()

    @property
    def axis_order(self) -> AxisOrder:
        return self.projection.axis_order

    @property
    def prime_meridian(self) -> PrimeMeridian:
        return self.projection.prime_meridian

    def create_geographic(self) -> "CoordinateReferenceSystem":
        """
        Return the geographic system underlying this one.

        Same datum, prime meridian and axis order, with a longlat projection.
        """
        if self.datum is None:
            return self
        projection = LongLatProjection()
        projection.ellipsoid = self.datum.ellipsoid
        projection.axis_order = self.projection.axis_order
        projection.prime_meridian = self.projection.prime_meridian
        projection.initialize()
        return CoordinateReferenceSystem(f"GEOGCS({self.name})", self.datum, projection)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, CoordinateReferenceSystem):
            return NotImplemented
        return self.projection == other.projection and self.datum == other.datum

    def __hash__(self) -> int:
        return hash((self.projection, self.datum))

    def __repr__(self) -> str:
        return f"CoordinateReferenceSystem(name={self.name!r}, projection={self.projection})"

    def __str__(self) -> str:
        return self.name


def create_crs(
    name: str,
    projection_name: str,
    datum: Optional[Datum] = None,
    **params: Any,
) -> CoordinateReferenceSystem:
    """
    Build a CRS from a projection name and proj.4-style parameters.

    Args:
        name: Display name
        projection_name: proj.4 projection name (``longlat``, ``utm``...)
        datum: Datum supplying the ellipsoid (defaults to WGS84)
        **params: Passed to ``build_projection`` (degrees, metres)

    Returns:
        The new coordinate reference system

    Example:
        >>> utm36 = create_crs("EPSG:32636", "utm", zone=36)
        >>> utm36.is_geographic
        False
    """
    datum = datum or Datum.WGS84
    projection = build_projection(projection_name, datum.ellipsoid, **params)
    logger.debug("Created CRS %s (%s, datum %s)", name, projection, datum)
    return CoordinateReferenceSystem(name, datum, projection)


def _geographic_marker() -> CoordinateReferenceSystem:
    projection = LongLatProjection()
    projection.initialize()
    return CoordinateReferenceSystem("CS_GEO", None, projection)


# Identity marker: coordinates are already geographic radians and no datum
# transform applies. Compared by identity.
CS_GEO = _geographic_marker()

WGS84_CRS = create_crs("EPSG:4326", "longlat", Datum.WGS84)
