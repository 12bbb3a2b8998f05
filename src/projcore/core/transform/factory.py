"""
Transform factory.

Chooses between a direct transform and routing through WGS84.
"""

import logging
from typing import Optional

from projcore.core.crs import WGS84_CRS, CoordinateReferenceSystem
from projcore.core.transform.base import CoordinateTransform
from projcore.core.transform.basic import BasicCoordinateTransform
from projcore.core.transform.compound import CompoundCoordinateTransform

logger = logging.getLogger(__name__)


def requires_wgs84_routing(
    source: CoordinateReferenceSystem, target: CoordinateReferenceSystem
) -> bool:
    """
    Whether a transform must pass through geographic WGS84.

    True when the datums differ and one side has Helmert parameters while
    the other side is projected.
    """
    src_datum = source.datum
    tgt_datum = target.datum
    if src_datum is None or tgt_datum is None or src_datum == tgt_datum:
        return False
    return (src_datum.has_transform_to_wgs84() and not target.is_geographic) or (
        tgt_datum.has_transform_to_wgs84() and not source.is_geographic
    )


class CoordinateTransformFactory:
    """
    Creates transforms between coordinate reference systems.

    Attributes:
        strict_grid_shift: Passed to every transform created (None uses settings)
        strict_datum: Passed to every transform created (None uses settings)
    """

    def __init__(
        self,
        strict_grid_shift: Optional[bool] = None,
        strict_datum: Optional[bool] = None,
    ):
        self.strict_grid_shift = strict_grid_shift
        self.strict_datum = strict_datum

    def create_transform(
        self,
        source: CoordinateReferenceSystem,
        target: CoordinateReferenceSystem,
        intermediate: Optional[CoordinateReferenceSystem] = None,
    ) -> CoordinateTransform:
        """
        Create a transform from ``source`` to ``target``.

        Args:
            source: System to transform from
            target: System to transform to
            intermediate: Force routing through this system

        Returns:
            A direct or compound transform
        """
        if intermediate is None and requires_wgs84_routing(source, target):
            intermediate = WGS84_CRS
        if intermediate is not None:
            logger.debug(
                "Routing %s -> %s through %s", source.name, target.name, intermediate.name
            )
            return CompoundCoordinateTransform(
                self._basic(source, intermediate), self._basic(intermediate, target)
            )
        return self._basic(source, target)

    def _basic(
        self, source: CoordinateReferenceSystem, target: CoordinateReferenceSystem
    ) -> BasicCoordinateTransform:
        return BasicCoordinateTransform(
            source,
            target,
            strict_grid_shift=self.strict_grid_shift,
            strict_datum=self.strict_datum,
        )


def create_transform(
    source: CoordinateReferenceSystem,
    target: CoordinateReferenceSystem,
    strict_grid_shift: Optional[bool] = None,
    strict_datum: Optional[bool] = None,
) -> CoordinateTransform:
    """
    Convenience function to create a transform with the default factory.

    Example:
        utm = create_crs("UTM 36N", "utm", zone=36)
        lon, lat = create_transform(utm, WGS84_CRS).transform_point(500000.0, 4649776.22482)
        # lon, lat ~= 33.0, 42.0
    """
    factory = CoordinateTransformFactory(strict_grid_shift, strict_datum)
    return factory.create_transform(source, target)
