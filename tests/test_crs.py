"""
Tests for coordinate reference systems.
"""

import pytest

from projcore.core.crs import CS_GEO, WGS84_CRS, CoordinateReferenceSystem, create_crs
from projcore.core.datum.datum import Datum
from projcore.core.errors import CRSError, ProjectionError, UnknownProjectionError
from projcore.models.axis import AxisOrder
from projcore.models.prime_meridian import PrimeMeridian


class TestCreateCRS:
    """Tests for building systems from proj.4-style parameters."""

    def test_projected(self):
        """Test a UTM system."""
        crs = create_crs("EPSG:32636", "utm", zone=36)

        assert crs.name == "EPSG:32636"
        assert str(crs) == "EPSG:32636"
        assert crs.datum == Datum.WGS84
        assert not crs.is_geographic
        assert crs.projection.utm_zone == 36

    def test_geographic(self):
        """Test the WGS84 geographic system."""
        assert WGS84_CRS.is_geographic
        assert WGS84_CRS.datum is Datum.WGS84
        assert WGS84_CRS.axis_order == AxisOrder.ENU
        assert WGS84_CRS.prime_meridian == PrimeMeridian.GREENWICH

    def test_datum_supplies_ellipsoid(self):
        """Test the projection is built on the datum's ellipsoid."""
        crs = create_crs("EPSG:27700", "tmerc", Datum.OSGB36, lat_0=49, lon_0=-2)
        assert crs.projection.ellipsoid == Datum.OSGB36.ellipsoid

    def test_unknown_projection(self):
        """Test an unregistered projection name is reported."""
        with pytest.raises(UnknownProjectionError):
            create_crs("bad", "no_such_projection")

    def test_unknown_parameter(self):
        """Test unsupported parameters are reported."""
        with pytest.raises(ProjectionError):
            create_crs("bad", "merc", towgs84="1,2,3")

    def test_missing_projection(self):
        """Test a system needs a projection."""
        with pytest.raises(CRSError):
            CoordinateReferenceSystem("empty", Datum.WGS84, None)


class TestGeographicSystem:
    """Tests for deriving the underlying geographic system."""

    def test_create_geographic(self):
        """Test the geographic system keeps datum, meridian and axes."""
        crs = create_crs("Paris grid", "lcc", Datum.WGS84, lat_1=46.8, lon_0=0.0, pm=PrimeMeridian.PARIS, axis="neu")
        geographic = crs.create_geographic()

        assert geographic.is_geographic
        assert geographic.datum == crs.datum
        assert geographic.prime_meridian == PrimeMeridian.PARIS
        assert geographic.axis_order == AxisOrder.NEU
        assert geographic.projection.ellipsoid == crs.projection.ellipsoid

    def test_cs_geo_is_its_own_geographic(self):
        """Test the radians marker has no datum to derive from."""
        assert CS_GEO.datum is None
        assert CS_GEO.create_geographic() is CS_GEO


class TestEquality:
    """Tests for CRS equality."""

    def test_same_definition_equal(self):
        """Test two independently built systems are equal and hash alike."""
        a = create_crs("one", "utm", zone=33)
        b = create_crs("two", "utm", zone=33)

        assert a == b
        assert hash(a) == hash(b)

    def test_different_projection(self):
        """Test different zones differ."""
        assert create_crs("a", "utm", zone=33) != create_crs("a", "utm", zone=34)

    def test_different_datum(self):
        """Test the same projection on different datums differs."""
        a = create_crs("a", "longlat", Datum.CH1903)
        b = create_crs("a", "longlat", Datum.POTSDAM)
        assert a != b

    def test_cs_geo_compared_by_identity(self):
        """Test the marker differs from a WGS84 geographic system."""
        assert CS_GEO != WGS84_CRS
        assert CS_GEO == CS_GEO
