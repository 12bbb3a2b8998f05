"""
projcore - geodetic coordinate transformations.

Converts coordinates between geographic and projected reference systems,
including datum shifts via Helmert parameters or NTv2 grids, reproducing
proj.4 numerics.

Example:
    from projcore import WGS84_CRS, create_crs, create_transform

    utm = create_crs("UTM 36N", "utm", zone=36)
    lon, lat = create_transform(utm, WGS84_CRS).transform_point(500000.0, 4649776.22482)
"""

from projcore.core.cache import CRSCache
from projcore.core.config import Settings, settings
from projcore.core.crs import CS_GEO, WGS84_CRS, CoordinateReferenceSystem, create_crs
from projcore.core.datum import (
    Datum,
    DatumTransformType,
    GeocentricConverter,
    Grid,
    GridShiftStatus,
    load_ntv2,
    read_ntv2,
    read_ntv2_subgrids,
)
from projcore.core.errors import (
    ConfigurationError,
    CRSError,
    DatumError,
    DatumTransformError,
    GridFormatError,
    GridShiftError,
    ProjCoreException,
    ProjectionError,
    UnknownProjectionError,
)
from projcore.core.projections import Projection, build_projection, get_projection_class
from projcore.core.transform import (
    BasicCoordinateTransform,
    CompoundCoordinateTransform,
    CoordinateTransform,
    CoordinateTransformFactory,
    create_transform,
)
from projcore.models import AxisOrder, Ellipsoid, PrimeMeridian, ProjCoordinate, Unit, Units

__version__ = "0.1.0"

__all__ = [
    # Models
    "AxisOrder",
    "Ellipsoid",
    "PrimeMeridian",
    "ProjCoordinate",
    "Unit",
    "Units",
    # Datums and grids
    "Datum",
    "DatumTransformType",
    "GeocentricConverter",
    "Grid",
    "GridShiftStatus",
    "load_ntv2",
    "read_ntv2",
    "read_ntv2_subgrids",
    # Projections
    "Projection",
    "build_projection",
    "get_projection_class",
    # Reference systems
    "CS_GEO",
    "WGS84_CRS",
    "CoordinateReferenceSystem",
    "CRSCache",
    "create_crs",
    # Transforms
    "BasicCoordinateTransform",
    "CompoundCoordinateTransform",
    "CoordinateTransform",
    "CoordinateTransformFactory",
    "create_transform",
    # Configuration
    "Settings",
    "settings",
    # Errors
    "ConfigurationError",
    "CRSError",
    "DatumError",
    "DatumTransformError",
    "GridFormatError",
    "GridShiftError",
    "ProjCoreException",
    "ProjectionError",
    "UnknownProjectionError",
]
