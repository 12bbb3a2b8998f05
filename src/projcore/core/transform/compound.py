"""
Chained transform through an intermediate system.
"""

from projcore.core.crs import CoordinateReferenceSystem
from projcore.core.transform.base import CoordinateTransform
from projcore.models.coordinate import ProjCoordinate


class CompoundCoordinateTransform(CoordinateTransform):
    """
    Applies two transforms in sequence.

    Used to route between datums through WGS84 when each datum only knows
    its own relation to WGS84.
    """

    def __init__(self, first: CoordinateTransform, second: CoordinateTransform):
        self.first = first
        self.second = second

    @property
    def source_crs(self) -> CoordinateReferenceSystem:
        return self.first.source_crs

    @property
    def target_crs(self) -> CoordinateReferenceSystem:
        return self.second.target_crs

    def transform(self, src: ProjCoordinate, dst: ProjCoordinate) -> ProjCoordinate:
        had_z = src.has_valid_z()
        dst = self.first.transform(src, dst)
        # A height computed by the first datum hop is not caller data
        if not had_z:
            dst.clear_z()
        return self.second.transform(dst, dst)

    def inverse(self) -> "CompoundCoordinateTransform":
        return CompoundCoordinateTransform(self.second.inverse(), self.first.inverse())

    def __repr__(self) -> str:
        return f"CompoundCoordinateTransform({self.first!r}, {self.second!r})"
