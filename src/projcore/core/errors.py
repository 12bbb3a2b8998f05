"""
Exception hierarchy for projcore.

Configuration problems (bad projection parameters, unknown projection names,
malformed grid files) fail fast when objects are built. Per-point numerical
edge cases are absorbed by the algorithms themselves and only surface here
when a point has no defined image or a strict policy is enabled.
"""

from typing import Any, Dict, List, Optional


class ProjCoreException(Exception):
    """
    Base exception for all projcore errors.

    Attributes:
        error_code: String identifier for the error type
        message: Human-readable error message
        details: Technical details for logging/debugging
        suggestions: Optional list of resolution suggestions
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ProjCoreException.

        Args:
            message: Human-readable error message
            error_code: String identifier for the error type
            details: Technical details for logging
            suggestions: List of suggestions for resolution
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestions = suggestions or []

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to a dictionary.

        Returns:
            Dictionary representation of the error
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "suggestions": self.suggestions,
        }

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.error_code}: {self.message}"

    def __repr__(self) -> str:
        """Detailed string representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"error_code='{self.error_code}', "
            f"message='{self.message}')"
        )


class ConfigurationError(ProjCoreException):
    """
    Raised when library settings are invalid.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: Human-readable error message
            config_key: Configuration key that is invalid
            details: Technical details about the configuration error
            suggestions: List of suggestions for resolution
        """
        error_details = details or {}
        if config_key:
            error_details["config_key"] = config_key

        default_suggestions = [
            "Check PROJCORE_* environment variables are set correctly",
            "Verify .env file syntax",
        ]

        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )


class ProjectionError(ProjCoreException):
    """
    Raised when a projection is misconfigured or a point cannot be projected.

    Covers invalid parameter combinations detected by ``initialize()``,
    points with no finite image (e.g. Mercator at the pole) and inverse
    calls on forward-only projections.
    """

    def __init__(
        self,
        message: str,
        projection: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: str = "PROJECTION_ERROR",
    ):
        """
        Initialize ProjectionError.

        Args:
            message: Human-readable error message
            projection: Name of the projection involved
            details: Technical details about the failure
            suggestions: List of suggestions for resolution
            error_code: Override for subclasses
        """
        error_details = details or {}
        if projection:
            error_details["projection"] = projection

        default_suggestions = [
            "Check the projection parameters (standard parallels, latitude of origin)",
            "Verify the point lies inside the projection's valid domain",
        ]

        super().__init__(
            message=message,
            error_code=error_code,
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )


class UnknownProjectionError(ProjectionError):
    """
    Raised when a projection name has no registered implementation.
    """

    def __init__(self, name: str, available: Optional[List[str]] = None):
        """
        Initialize UnknownProjectionError.

        Args:
            name: The unsupported projection name
            available: Registered projection names
        """
        details: Dict[str, Any] = {"name": name}
        if available:
            details["available"] = available

        super().__init__(
            message=f"Unknown projection: {name}",
            details=details,
            suggestions=["Use one of the registered projection names"],
            error_code="UNKNOWN_PROJECTION",
        )


class CRSError(ProjCoreException):
    """
    Raised when a coordinate reference system cannot be assembled.
    """

    def __init__(
        self,
        message: str,
        crs_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize CRSError.

        Args:
            message: Human-readable error message
            crs_name: Name of the CRS being built
            details: Technical details about the CRS error
            suggestions: List of suggestions for fixing the CRS
        """
        error_details = details or {}
        if crs_name:
            error_details["crs_name"] = crs_name

        super().__init__(
            message=message,
            error_code="CRS_ERROR",
            details=error_details,
            suggestions=suggestions or ["Supply both a datum and a projection"],
        )


class DatumError(ProjCoreException):
    """
    Raised when a datum definition is malformed.

    Used for Helmert parameter lists of the wrong length and grid-shift
    datums without any grid.
    """

    def __init__(
        self,
        message: str,
        datum_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize DatumError.

        Args:
            message: Human-readable error message
            datum_name: Name of the datum being built
            details: Technical details about the datum error
            suggestions: List of suggestions for fixing the datum
        """
        error_details = details or {}
        if datum_name:
            error_details["datum_name"] = datum_name

        default_suggestions = [
            "Provide either 3 or 7 towgs84 values",
            "Use the null grid for an explicit identity grid shift",
        ]

        super().__init__(
            message=message,
            error_code="DATUM_ERROR",
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )


class DatumTransformError(ProjCoreException):
    """
    Raised when a datum transformation cannot be carried out.
    """

    def __init__(
        self,
        message: str,
        source_datum: Optional[str] = None,
        target_datum: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize DatumTransformError.

        Args:
            message: Human-readable error message
            source_datum: Name of the source datum
            target_datum: Name of the target datum
            details: Technical details about the failure
            suggestions: List of suggestions for resolution
        """
        error_details = details or {}
        if source_datum:
            error_details["source_datum"] = source_datum
        if target_datum:
            error_details["target_datum"] = target_datum

        default_suggestions = [
            "Give both datums towgs84 parameters or a grid",
            "Disable strict_datum to treat unrelated datums as identical",
        ]

        super().__init__(
            message=message,
            error_code="DATUM_TRANSFORM_ERROR",
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )


class GridFormatError(ProjCoreException):
    """
    Raised when grid-shift file bytes cannot be decoded.
    """

    def __init__(
        self,
        message: str,
        grid_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize GridFormatError.

        Args:
            message: Human-readable error message
            grid_name: Name of the grid being decoded
            details: Technical details about the decoding failure
            suggestions: List of suggestions for fixing the file
        """
        error_details = details or {}
        if grid_name:
            error_details["grid_name"] = grid_name

        default_suggestions = [
            "Verify the file is an NTv2 (.gsb) grid",
            "Check the file was not truncated during download",
        ]

        super().__init__(
            message=message,
            error_code="GRID_FORMAT_ERROR",
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )


class GridShiftError(ProjCoreException):
    """
    Raised in strict mode when no grid covers a point.
    """

    def __init__(
        self,
        message: str,
        longitude: Optional[float] = None,
        latitude: Optional[float] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize GridShiftError.

        Args:
            message: Human-readable error message
            longitude: Longitude of the point in radians
            latitude: Latitude of the point in radians
            details: Technical details about the miss
            suggestions: List of suggestions for resolution
        """
        error_details = details or {}
        if longitude is not None:
            error_details["longitude"] = longitude
        if latitude is not None:
            error_details["latitude"] = latitude

        default_suggestions = [
            "Add a grid covering this area to the datum",
            "Disable strict_grid_shift to leave uncovered points unshifted",
        ]

        super().__init__(
            message=message,
            error_code="GRID_SHIFT_ERROR",
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )
