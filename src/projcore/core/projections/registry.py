"""
Projection registry and keyword builder.

Maps proj.4 projection names to classes and applies proj.4-named
parameters (in degrees) to a fresh instance.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Type, Union

from projcore.core.errors import ProjectionError, UnknownProjectionError
from projcore.core.projections import projection_math as pm
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
)
from projcore.core.projections.tmerc import TransverseMercatorProjection
from projcore.models.axis import AxisOrder
from projcore.models.ellipsoid import Ellipsoid
from projcore.models.prime_meridian import PrimeMeridian
from projcore.models.units import Unit

logger = logging.getLogger(__name__)

PROJECTIONS: Dict[str, Type[Projection]] = {
    "longlat": LongLatProjection,
    "latlong": LongLatProjection,
    "lonlat": LongLatProjection,
    "latlon": LongLatProjection,
    "tmerc": TransverseMercatorProjection,
    "etmerc": TransverseMercatorProjection,
    "utm": TransverseMercatorProjection,
    "merc": MercatorProjection,
    "lcc": LambertConformalConicProjection,
    "aea": AlbersProjection,
    "stere": StereographicAzimuthalProjection,
    "sterea": ObliqueStereographicAlternativeProjection,
    "laea": LambertAzimuthalEqualAreaProjection,
    "eqc": EquidistantCylindricalProjection,
    "robin": RobinsonProjection,
    "moll": MollweideProjection,
    "kav5": KavraiskyVProjection,
    "qua_aut": QuarticAuthalicProjection,
    "mbt_s": McBrydeThomasFlatPolarSineProjection,
    "fouc": FoucautProjection,
    "krovak": KrovakProjection,
    "geocent": GeocentProjection,
}

# Angular keyword -> Projection attribute
_ANGLE_PARAMETERS = {
    "lat_0": "projection_latitude",
    "lon_0": "projection_longitude",
    "lat_1": "projection_latitude1",
    "lat_2": "projection_latitude2",
    "lat_ts": "true_scale_latitude",
}

SUPPORTED_PARAMETERS = frozenset(
    list(_ANGLE_PARAMETERS)
    + ["k_0", "k", "x_0", "y_0", "units", "zone", "south", "axis", "pm", "alpha", "czech"]
)


def available_projections() -> List[str]:
    return sorted(PROJECTIONS)


def get_projection_class(name: str) -> Type[Projection]:
    """
    Look up a projection class by its proj.4 name.

    Raises:
        UnknownProjectionError: If the name is not registered
    """
    try:
        return PROJECTIONS[name.lower()]
    except KeyError:
        raise UnknownProjectionError(name, available=available_projections()) from None


def build_projection(
    name: str,
    ellipsoid: Optional[Ellipsoid] = None,
    **params: Any,
) -> Projection:
    """
    Create and initialize a projection from proj.4-style parameters.

    Angles are given in degrees and linear values in metres, exactly as they
    would appear after ``+lat_0=`` etc. in a proj.4 definition.

    Args:
        name: proj.4 projection name (``lcc``, ``utm``, ``merc``...)
        ellipsoid: Reference ellipsoid (defaults to WGS84)
        **params: Any of ``lat_0, lon_0, lat_1, lat_2, lat_ts, k_0 (or k),
            x_0, y_0, units, zone, south, axis, pm, alpha, czech``

    Returns:
        An initialized projection

    Raises:
        UnknownProjectionError: If the name is not registered
        ProjectionError: If a parameter is unknown or inconsistent

    Example:
        >>> proj = build_projection("utm", Ellipsoid.WGS84, zone=36)
        >>> proj.utm_zone
        36
    """
    cls = get_projection_class(name)
    unknown = set(params) - SUPPORTED_PARAMETERS
    if unknown:
        raise ProjectionError(
            f"Unsupported projection parameters: {', '.join(sorted(unknown))}",
            projection=name,
            suggestions=[f"Supported parameters: {', '.join(sorted(SUPPORTED_PARAMETERS))}"],
        )

    projection = cls()
    projection.ellipsoid = ellipsoid or Ellipsoid.WGS84

    if name.lower() == "utm":
        _apply_utm(projection, params)  # type: ignore[arg-type]

    for key, attribute in _ANGLE_PARAMETERS.items():
        if key in params:
            setattr(projection, attribute, math.radians(float(params[key])))

    # A lone lat_1 is a tangent cone; tangent lcc also takes lat_0 from it
    if "lat_1" in params and "lat_2" not in params:
        projection.projection_latitude2 = projection.projection_latitude1
        if isinstance(projection, LambertConformalConicProjection) and "lat_0" not in params:
            projection.projection_latitude = projection.projection_latitude1

    if "k_0" in params:
        projection.scale_factor = float(params["k_0"])
    elif "k" in params:
        projection.scale_factor = float(params["k"])
    if "x_0" in params:
        projection.false_easting = float(params["x_0"])
    if "y_0" in params:
        projection.false_northing = float(params["y_0"])
    if "units" in params:
        projection.unit = _as_unit(params["units"], name)
    if "axis" in params:
        axis = params["axis"]
        projection.axis_order = axis if isinstance(axis, AxisOrder) else AxisOrder(axis)
    if "pm" in params:
        projection.prime_meridian = _as_prime_meridian(params["pm"])

    if isinstance(projection, KrovakProjection):
        if "czech" in params:
            projection.czech = bool(params["czech"])
        if "alpha" in params:
            logger.debug(
                "Krovak uses a fixed cone azimuth; ignoring alpha=%s",
                params["alpha"],
            )
    elif "czech" in params or "alpha" in params:
        raise ProjectionError(
            "alpha/czech only apply to the krovak projection", projection=name
        )

    projection.initialize()
    return projection


def _apply_utm(projection: TransverseMercatorProjection, params: Dict[str, Any]) -> None:
    zone = params.get("zone")
    if zone is None:
        lon0 = math.radians(float(params.get("lon_0", 0.0)))
        zone = int(math.floor((pm.adjlon(lon0) + math.pi) * 30.0 / math.pi)) + 1
        zone = min(max(zone, 1), 60)
    projection.set_utm_zone(int(zone), bool(params.get("south", False)))
    # UTM fixes its own origin and scale
    for key in ("lat_0", "lon_0", "k_0", "k", "x_0", "y_0"):
        params.pop(key, None)


def _as_unit(value: Union[Unit, Any], name: str) -> Unit:
    if isinstance(value, Unit):
        return value
    raise ProjectionError(
        f"units must be a Unit instance, got {value!r}",
        projection=name,
        suggestions=["Pass one of the projcore.models.units.Units constants"],
    )


def _as_prime_meridian(value: Union[PrimeMeridian, float]) -> PrimeMeridian:
    if isinstance(value, PrimeMeridian):
        return value
    return PrimeMeridian("custom", float(value))
