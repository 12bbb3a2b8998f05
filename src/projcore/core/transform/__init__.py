"""
Coordinate transforms between reference systems.
"""

from projcore.core.transform.base import CoordinateTransform
from projcore.core.transform.basic import (
    BasicCoordinateTransform,
    TransformStrategy,
    compute_strategy,
)
from projcore.core.transform.compound import CompoundCoordinateTransform
from projcore.core.transform.factory import (
    CoordinateTransformFactory,
    create_transform,
    requires_wgs84_routing,
)

__all__ = [
    "BasicCoordinateTransform",
    "CompoundCoordinateTransform",
    "CoordinateTransform",
    "CoordinateTransformFactory",
    "TransformStrategy",
    "compute_strategy",
    "create_transform",
    "requires_wgs84_routing",
]
