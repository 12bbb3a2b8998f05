"""
Direct transform between two coordinate reference systems.

Per point the pipeline is::

    [inverse projection] -> [datum conversion] -> [forward projection]

Which stages run, and whether the datum conversion goes through geocentric
coordinates, is decided once at construction.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from projcore.core.config import settings
from projcore.core.crs import CS_GEO, CoordinateReferenceSystem
from projcore.core.datum.datum import Datum, DatumTransformType
from projcore.core.datum.geocentric import GeocentricConverter
from projcore.core.datum.grid import GridShiftStatus
from projcore.core.errors import DatumTransformError, GridShiftError
from projcore.core.transform.base import CoordinateTransform
from projcore.models.coordinate import ProjCoordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformStrategy:
    """
    Stages a BasicCoordinateTransform runs for every point.

    Attributes:
        inverse_projection: Source coordinates need inverse projection
        forward_projection: Target coordinates need forward projection
        datum_transform: Source and target datums differ
        via_geocentric: The datum step goes through geocentric coordinates
        source_converter: Geocentric converter for the source side
        target_converter: Geocentric converter for the target side
    """

    inverse_projection: bool
    forward_projection: bool
    datum_transform: bool
    via_geocentric: bool
    source_converter: Optional[GeocentricConverter] = None
    target_converter: Optional[GeocentricConverter] = None


def compute_strategy(
    source: CoordinateReferenceSystem, target: CoordinateReferenceSystem
) -> TransformStrategy:
    """Decide which pipeline stages a transform between two systems needs."""
    do_inverse = source is not CS_GEO
    do_forward = target is not CS_GEO
    src_datum = source.datum
    tgt_datum = target.datum
    if (
        not (do_inverse and do_forward)
        or src_datum is None
        or tgt_datum is None
        or src_datum == tgt_datum
    ):
        return TransformStrategy(do_inverse, do_forward, False, False)

    geocentric = (
        not src_datum.ellipsoid.is_equal(tgt_datum.ellipsoid)
        or src_datum.has_transform_to_wgs84()
        or tgt_datum.has_transform_to_wgs84()
    )
    if not geocentric:
        return TransformStrategy(do_inverse, do_forward, True, False)

    src_conv = GeocentricConverter.from_ellipsoid(src_datum.ellipsoid)
    tgt_conv = GeocentricConverter.from_ellipsoid(tgt_datum.ellipsoid)
    src_grid = src_datum.transform_type == DatumTransformType.GRIDSHIFT
    tgt_grid = tgt_datum.transform_type == DatumTransformType.GRIDSHIFT
    if src_grid or tgt_grid:
        # Grid shifts land on WGS84, so that side's geocentric figure is WGS84
        if src_grid:
            src_conv.override_with_wgs84_params()
        if tgt_grid:
            tgt_conv.override_with_wgs84_params()
        if src_conv.is_equal(tgt_conv):
            return TransformStrategy(do_inverse, do_forward, True, False)

    return TransformStrategy(do_inverse, do_forward, True, True, src_conv, tgt_conv)


class BasicCoordinateTransform(CoordinateTransform):
    """
    Transform between two systems using inverse projection, datum conversion
    and forward projection as required.

    Attributes:
        strategy: Precomputed pipeline stages
        strict_grid_shift: Raise GridShiftError when no grid covers a point
        strict_datum: Raise DatumTransformError when a datum has no known
            relation to WGS84
    """

    def __init__(
        self,
        source: CoordinateReferenceSystem,
        target: CoordinateReferenceSystem,
        strict_grid_shift: Optional[bool] = None,
        strict_datum: Optional[bool] = None,
    ):
        """
        Initialize BasicCoordinateTransform.

        Args:
            source: System to transform from
            target: System to transform to
            strict_grid_shift: Override ``settings.strict_grid_shift``
            strict_datum: Override ``settings.strict_datum``
        """
        self._source = source
        self._target = target
        self.strict_grid_shift = (
            settings.strict_grid_shift if strict_grid_shift is None else strict_grid_shift
        )
        self.strict_datum = settings.strict_datum if strict_datum is None else strict_datum
        self.strategy = compute_strategy(source, target)

        logger.debug(
            "Transform %s -> %s: inverse=%s datum=%s geocentric=%s forward=%s",
            source.name,
            target.name,
            self.strategy.inverse_projection,
            self.strategy.datum_transform,
            self.strategy.via_geocentric,
            self.strategy.forward_projection,
        )

    @property
    def source_crs(self) -> CoordinateReferenceSystem:
        return self._source

    @property
    def target_crs(self) -> CoordinateReferenceSystem:
        return self._target

    def transform(self, src: ProjCoordinate, dst: ProjCoordinate) -> ProjCoordinate:
        strategy = self.strategy
        src_proj = self._source.projection
        tgt_proj = self._target.projection
        had_z = src.has_valid_z()

        dst.set_value(src)
        src_proj.axis_order.to_enu(dst)

        if strategy.inverse_projection:
            src_proj.inverse_project_radians(dst, dst)

        src_proj.prime_meridian.to_greenwich(dst)

        # Only a height the caller supplied survives; stale values are dropped
        if not had_z:
            dst.clear_z()

        if strategy.datum_transform:
            self._datum_transform(dst)

        tgt_proj.prime_meridian.from_greenwich(dst)

        if strategy.forward_projection:
            tgt_proj.project_radians(dst, dst)

        tgt_proj.axis_order.from_enu(dst)
        return dst

    def _datum_transform(self, p: ProjCoordinate) -> None:
        src_datum = self._source.datum
        tgt_datum = self._target.datum
        if src_datum is None or tgt_datum is None or src_datum.is_equal(tgt_datum):
            return
        if (
            src_datum.transform_type == DatumTransformType.UNKNOWN
            or tgt_datum.transform_type == DatumTransformType.UNKNOWN
        ):
            self._unknown_datum(src_datum, tgt_datum)
            return

        if src_datum.transform_type == DatumTransformType.GRIDSHIFT:
            self._check_shift(src_datum.shift(p), src_datum, p)

        # Converters are set only for the geocentric path
        src_conv = self.strategy.source_converter
        tgt_conv = self.strategy.target_converter
        if src_conv is not None and tgt_conv is not None:
            src_conv.convert_geodetic_to_geocentric(p)
            if src_datum.has_transform_to_wgs84():
                src_datum.transform_from_geocentric_to_wgs84(p)
            if tgt_datum.has_transform_to_wgs84():
                tgt_datum.transform_to_geocentric_from_wgs84(p)
            tgt_conv.convert_geocentric_to_geodetic(p)

        if tgt_datum.transform_type == DatumTransformType.GRIDSHIFT:
            self._check_shift(tgt_datum.inverse_shift(p), tgt_datum, p)

    def _unknown_datum(self, src_datum: Datum, tgt_datum: Datum) -> None:
        if self.strict_datum:
            logger.warning(
                "No known relation between datums %s and %s", src_datum, tgt_datum
            )
            raise DatumTransformError(
                "Cannot convert between datums without a path to WGS84",
                source_datum=src_datum.name,
                target_datum=tgt_datum.name,
            )
        logger.debug(
            "Skipping datum conversion %s -> %s: unknown relation to WGS84",
            src_datum,
            tgt_datum,
        )

    def _check_shift(self, status: GridShiftStatus, datum: Datum, p: ProjCoordinate) -> None:
        if status == GridShiftStatus.APPLIED:
            return
        if self.strict_grid_shift:
            logger.warning(
                "Point (%.9f, %.9f) is outside every grid of datum %s",
                math.degrees(p.x),
                math.degrees(p.y),
                datum,
            )
            raise GridShiftError(
                f"No grid of datum {datum.name} covers the point",
                longitude=p.x,
                latitude=p.y,
                details={"grids": [grid.name for grid in datum.grids]},
            )
        logger.debug("Grid shift not applied for datum %s", datum)

    def inverse(self) -> "BasicCoordinateTransform":
        return BasicCoordinateTransform(
            self._target,
            self._source,
            strict_grid_shift=self.strict_grid_shift,
            strict_datum=self.strict_datum,
        )

    def __repr__(self) -> str:
        return (
            f"BasicCoordinateTransform(source={self._source.name!r}, "
            f"target={self._target.name!r})"
        )
