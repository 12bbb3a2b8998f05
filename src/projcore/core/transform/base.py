"""
Coordinate transform interface.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike

from projcore.core.crs import CoordinateReferenceSystem
from projcore.models.coordinate import ProjCoordinate


class CoordinateTransform(ABC):
    """
    Transforms coordinates from a source CRS to a target CRS.

    Implementations are immutable after construction and may be shared
    between threads as long as each thread passes its own coordinate buffers.
    """

    @property
    @abstractmethod
    def source_crs(self) -> CoordinateReferenceSystem:
        ...

    @property
    @abstractmethod
    def target_crs(self) -> CoordinateReferenceSystem:
        ...

    @abstractmethod
    def transform(self, src: ProjCoordinate, dst: ProjCoordinate) -> ProjCoordinate:
        """
        Transform one coordinate.

        Args:
            src: Input coordinate in source CRS units (not modified unless it
                is also ``dst``)
            dst: Buffer that receives the result

        Returns:
            ``dst``
        """

    @abstractmethod
    def inverse(self) -> "CoordinateTransform":
        """Return the transform from the target CRS back to the source CRS."""

    def transform_point(
        self, x: float, y: float, z: Optional[float] = None
    ) -> Tuple[float, ...]:
        """
        Transform a single point given as numbers.

        Returns:
            ``(x, y)``, or ``(x, y, z)`` when a height was given
        """
        if z is None:
            result = self.transform(ProjCoordinate(x, y), ProjCoordinate())
            return result.x, result.y
        result = self.transform(ProjCoordinate(x, y, z), ProjCoordinate())
        return result.x, result.y, result.z

    def transform_arrays(
        self,
        x: ArrayLike,
        y: ArrayLike,
        z: Optional[ArrayLike] = None,
    ) -> Tuple[np.ndarray, ...]:
        """
        Transform arrays of coordinates.

        Args:
            x: X coordinates (easting or longitude)
            y: Y coordinates (northing or latitude)
            z: Optional heights

        Returns:
            New ``(x, y)`` arrays, plus ``z`` when heights were given

        Raises:
            ValueError: If the array shapes differ
        """
        x_arr = np.asarray(x, dtype=np.float64)
        y_arr = np.asarray(y, dtype=np.float64)
        if x_arr.shape != y_arr.shape:
            raise ValueError(
                f"x and y arrays must have the same shape: {x_arr.shape} != {y_arr.shape}"
            )
        z_arr = None
        if z is not None:
            z_arr = np.asarray(z, dtype=np.float64)
            if z_arr.shape != x_arr.shape:
                raise ValueError(
                    f"z array must match x and y: {z_arr.shape} != {x_arr.shape}"
                )

        x_out = np.empty_like(x_arr)
        y_out = np.empty_like(y_arr)
        z_out = np.empty_like(z_arr) if z_arr is not None else None

        point = ProjCoordinate()
        for index in np.ndindex(x_arr.shape):
            point.x = float(x_arr[index])
            point.y = float(y_arr[index])
            point.z = float(z_arr[index]) if z_arr is not None else np.nan
            self.transform(point, point)
            x_out[index] = point.x
            y_out[index] = point.y
            if z_out is not None:
                z_out[index] = point.z

        if z_out is None:
            return x_out, y_out
        return x_out, y_out, z_out
