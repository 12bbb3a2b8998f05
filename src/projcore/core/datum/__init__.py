"""
Geodetic datums, geocentric conversion and grid shifts.
"""

from projcore.core.datum.datum import Datum, DatumTransformType, transform_type_of
from projcore.core.datum.geocentric import GeocentricConverter
from projcore.core.datum.grid import Grid, GridShiftStatus, apply_grid_shift
from projcore.core.datum.ntv2 import load_ntv2, read_ntv2, read_ntv2_subgrids

__all__ = [
    "Datum",
    "DatumTransformType",
    "GeocentricConverter",
    "Grid",
    "GridShiftStatus",
    "apply_grid_shift",
    "load_ntv2",
    "read_ntv2",
    "read_ntv2_subgrids",
    "transform_type_of",
]
