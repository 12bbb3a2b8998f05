"""
Map projections.
"""

from projcore.core.projections.aea import AlbersProjection
from projcore.core.projections.base import Projection
from projcore.core.projections.eqc import EquidistantCylindricalProjection
from projcore.core.projections.geocent import GeocentProjection
from projcore.core.projections.krovak import KrovakProjection
from projcore.core.projections.laea import LambertAzimuthalEqualAreaProjection
from projcore.core.projections.lcc import LambertConformalConicProjection
from projcore.core.projections.longlat import LongLatProjection
from projcore.core.projections.merc import MercatorProjection
from projcore.core.projections.moll import MollweideProjection
from projcore.core.projections.registry import (
    PROJECTIONS,
    available_projections,
    build_projection,
    get_projection_class,
)
from projcore.core.projections.robin import RobinsonProjection
from projcore.core.projections.stere import (
    ObliqueStereographicAlternativeProjection,
    StereographicAzimuthalProjection,
)
from projcore.core.projections.sts import (
    FoucautProjection,
    KavraiskyVProjection,
    McBrydeThomasFlatPolarSineProjection,
    QuarticAuthalicProjection,
    SineTangentSeriesProjection,
)
from projcore.core.projections.tmerc import TransverseMercatorProjection

__all__ = [
    # Base
    "Projection",
    # Variants
    "AlbersProjection",
    "EquidistantCylindricalProjection",
    "FoucautProjection",
    "GeocentProjection",
    "KavraiskyVProjection",
    "KrovakProjection",
    "LambertAzimuthalEqualAreaProjection",
    "LambertConformalConicProjection",
    "LongLatProjection",
    "McBrydeThomasFlatPolarSineProjection",
    "MercatorProjection",
    "MollweideProjection",
    "ObliqueStereographicAlternativeProjection",
    "QuarticAuthalicProjection",
    "RobinsonProjection",
    "SineTangentSeriesProjection",
    "StereographicAzimuthalProjection",
    "TransverseMercatorProjection",
    # Registry
    "PROJECTIONS",
    "available_projections",
    "build_projection",
    "get_projection_class",
]
