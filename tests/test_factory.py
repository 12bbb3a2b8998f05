"""
Tests for the transform factory and WGS84 routing.
"""

import pytest

from projcore.core.crs import CS_GEO, WGS84_CRS, create_crs
from projcore.core.datum.datum import Datum
from projcore.core.datum.grid import Grid
from projcore.core.transform import (
    BasicCoordinateTransform,
    CompoundCoordinateTransform,
    CoordinateTransformFactory,
    create_transform,
    requires_wgs84_routing,
)
from projcore.models.coordinate import ProjCoordinate
from projcore.models.ellipsoid import Ellipsoid

BNG = create_crs(
    "EPSG:27700",
    "tmerc",
    Datum.OSGB36,
    lat_0=49,
    lon_0=-2,
    k=0.9996012717,
    x_0=400000,
    y_0=-100000,
)
WEB_MERCATOR = create_crs(
    "EPSG:3857",
    "merc",
    Datum("WGS84 sphere", Ellipsoid.sphere(6378137.0), grids=[Grid.null_grid()]),
)
UTM_31 = create_crs("EPSG:32631", "utm", zone=31)
OSGB_GEOGRAPHIC = create_crs("EPSG:4277", "longlat", Datum.OSGB36)


class TestRoutingDecision:
    """Tests for requires_wgs84_routing."""

    def test_projected_helmert_to_projected(self):
        """Test a Helmert datum feeding a projected target needs routing."""
        assert requires_wgs84_routing(BNG, WEB_MERCATOR)
        assert requires_wgs84_routing(WEB_MERCATOR, BNG)
        assert requires_wgs84_routing(BNG, UTM_31)

    def test_geographic_endpoint_is_direct(self):
        """Test a geographic endpoint can take the Helmert step directly."""
        assert not requires_wgs84_routing(WGS84_CRS, BNG)
        assert not requires_wgs84_routing(BNG, WGS84_CRS)

    def test_equal_datums_are_direct(self):
        """Test no routing is needed without a datum change."""
        assert not requires_wgs84_routing(BNG, OSGB_GEOGRAPHIC)
        assert not requires_wgs84_routing(UTM_31, WGS84_CRS)

    def test_missing_datum_is_direct(self):
        """Test the radians marker never routes."""
        assert not requires_wgs84_routing(CS_GEO, BNG)
        assert not requires_wgs84_routing(BNG, CS_GEO)


class TestFactory:
    """Tests for CoordinateTransformFactory."""

    def test_direct_transform(self):
        """Test a direct transform is a BasicCoordinateTransform."""
        transform = CoordinateTransformFactory().create_transform(WGS84_CRS, UTM_31)
        assert isinstance(transform, BasicCoordinateTransform)

    def test_routed_transform(self):
        """Test routing builds a two-step chain through WGS84."""
        transform = CoordinateTransformFactory().create_transform(BNG, WEB_MERCATOR)

        assert isinstance(transform, CompoundCoordinateTransform)
        assert transform.first.target_crs is WGS84_CRS
        assert transform.second.source_crs is WGS84_CRS
        assert transform.source_crs is BNG
        assert transform.target_crs is WEB_MERCATOR

    def test_routed_matches_manual_chain(self):
        """Test the chain gives exactly the two steps applied by hand."""
        routed = create_transform(BNG, WEB_MERCATOR)
        lon, lat = BasicCoordinateTransform(BNG, WGS84_CRS).transform_point(327420.988668, 690284.547110)
        expected = BasicCoordinateTransform(WGS84_CRS, WEB_MERCATOR).transform_point(lon, lat)

        assert routed.transform_point(327420.988668, 690284.547110) == expected

    def test_routed_drops_intermediate_height(self):
        """Test a height computed by the first step does not leak to the caller."""
        routed = create_transform(BNG, WEB_MERCATOR)
        dst = routed.transform(ProjCoordinate(327420.988668, 690284.547110), ProjCoordinate())

        assert not dst.has_valid_z()

    def test_routed_round_trip(self):
        """Test the inverse chain returns to the start."""
        routed = create_transform(BNG, WEB_MERCATOR)
        inverse = routed.inverse()

        assert isinstance(inverse, CompoundCoordinateTransform)
        assert inverse.source_crs is WEB_MERCATOR
        assert inverse.target_crs is BNG

        x, y = routed.transform_point(327420.988668, 690284.547110)
        back_x, back_y = inverse.transform_point(x, y)
        assert back_x == pytest.approx(327420.988668, abs=1e-3)
        assert back_y == pytest.approx(690284.547110, abs=1e-3)

    def test_explicit_intermediate(self):
        """Test an intermediate system can be forced."""
        utm_32 = create_crs("EPSG:32632", "utm", zone=32)
        routed = CoordinateTransformFactory().create_transform(UTM_31, utm_32, intermediate=WGS84_CRS)
        direct = CoordinateTransformFactory().create_transform(UTM_31, utm_32)

        assert isinstance(routed, CompoundCoordinateTransform)
        assert isinstance(direct, BasicCoordinateTransform)

        x, y = routed.transform_point(400000.0, 5000000.0)
        dx, dy = direct.transform_point(400000.0, 5000000.0)
        assert x == pytest.approx(dx, abs=1e-6)
        assert y == pytest.approx(dy, abs=1e-6)

    def test_flags_propagate(self):
        """Test strictness reaches both steps of a chain."""
        factory = CoordinateTransformFactory(strict_grid_shift=True, strict_datum=True)
        routed = factory.create_transform(BNG, WEB_MERCATOR)

        assert routed.first.strict_grid_shift and routed.first.strict_datum
        assert routed.second.strict_grid_shift and routed.second.strict_datum

    def test_module_function_flags(self):
        """Test the convenience function forwards strictness."""
        transform = create_transform(WGS84_CRS, UTM_31, strict_grid_shift=True, strict_datum=False)

        assert transform.strict_grid_shift
        assert not transform.strict_datum
