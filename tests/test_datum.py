"""
Tests for the datum model and its classification.
"""

import math

import pytest

from projcore.core.datum.datum import Datum, DatumTransformType, transform_type_of
from projcore.core.datum.grid import Grid, GridShiftStatus
from projcore.core.errors import DatumError
from projcore.models.coordinate import ProjCoordinate
from projcore.models.ellipsoid import Ellipsoid


class TestClassification:
    """Tests for deriving the transform type from the parameters."""

    def test_no_parameters_is_unknown(self):
        """Test a datum without Helmert parameters or grids is UNKNOWN."""
        datum = Datum("local", Ellipsoid.BESSEL)
        assert datum.transform_type == DatumTransformType.UNKNOWN
        assert datum.towgs84 is None
        assert not datum.has_transform_to_wgs84()

    @pytest.mark.parametrize("towgs84", [(0, 0, 0), (0, 0, 0, 0, 0, 0, 0)])
    def test_all_zero_is_wgs84(self, towgs84):
        """Test all-zero parameters classify as WGS84."""
        datum = Datum("zero", Ellipsoid.GRS80, towgs84=towgs84)
        assert datum.transform_type == DatumTransformType.WGS84
        assert not datum.has_transform_to_wgs84()

    def test_three_parameter(self):
        """Test a translation-only datum."""
        datum = Datum("CH1903", Ellipsoid.BESSEL, towgs84=[674.374, 15.056, 405.346])
        assert datum.transform_type == DatumTransformType.THREE_PARAM
        assert datum.towgs84 == (674.374, 15.056, 405.346)
        assert datum.has_transform_to_wgs84()

    def test_seven_parameter_without_rotation_collapses(self):
        """Test zero rotations and scale give a 3-parameter datum."""
        datum = Datum("flat", Ellipsoid.BESSEL, towgs84=(1.0, 2.0, 3.0, 0.0, 0.0, 0.0, 0.0))
        assert datum.transform_type == DatumTransformType.THREE_PARAM
        assert datum.towgs84 == (1.0, 2.0, 3.0)

    def test_seven_parameter_units(self):
        """Test rotations become radians and ppm a scale multiplier."""
        datum = Datum.OSGB36
        dx, dy, dz, rx, ry, rz, m = datum.towgs84

        assert datum.transform_type == DatumTransformType.SEVEN_PARAM
        assert (dx, dy, dz) == (446.448, -125.157, 542.060)
        assert rx == pytest.approx(math.radians(0.1502 / 3600.0))
        assert rz == pytest.approx(math.radians(0.8421 / 3600.0))
        assert m == pytest.approx(1.0 - 20.4894e-6)

    def test_grids_take_precedence(self, synthetic_grid):
        """Test grids win over Helmert parameters."""
        datum = Datum("both", Ellipsoid.INTERNATIONAL, towgs84=(1, 2, 3), grids=[synthetic_grid])
        assert datum.transform_type == DatumTransformType.GRIDSHIFT
        assert datum.grids == [synthetic_grid]
        assert datum.towgs84 is None
        assert not datum.has_transform_to_wgs84()

    @pytest.mark.parametrize("towgs84", [(), (1.0,), (1.0, 2.0, 3.0, 4.0)])
    def test_bad_parameter_count(self, towgs84):
        """Test only 3 or 7 parameters are accepted."""
        with pytest.raises(DatumError):
            Datum("bad", Ellipsoid.WGS84, towgs84=towgs84)

    def test_empty_grid_list(self):
        """Test an empty grid list is rejected."""
        with pytest.raises(DatumError) as exc_info:
            Datum("bad", Ellipsoid.WGS84, grids=[])

        assert exc_info.value.details["datum_name"] == "bad"

    def test_transform_type_of_none(self):
        """Test a missing datum classifies as NONE."""
        assert transform_type_of(None) == DatumTransformType.NONE
        assert transform_type_of(Datum.CH1903) == DatumTransformType.THREE_PARAM


class TestEquality:
    """Tests for logical datum equality."""

    def test_wgs84_equals_nad83(self):
        """Test WGS84 and NAD83 are the same datum for transformation purposes."""
        assert Datum.WGS84 == Datum.NAD83
        assert hash(Datum.WGS84) == hash(Datum.NAD83)

    def test_name_ignored(self):
        """Test two differently named datums with equal content are equal."""
        a = Datum("a", Ellipsoid.BESSEL, towgs84=(1.0, 2.0, 3.0))
        b = Datum("b", Ellipsoid.BESSEL, towgs84=(1.0, 2.0, 3.0, 0.0, 0.0, 0.0, 0.0))
        assert a == b
        assert hash(a) == hash(b)

    def test_different_parameters(self):
        """Test different translations are not equal."""
        assert Datum("a", Ellipsoid.BESSEL, towgs84=(1, 2, 3)) != Datum(
            "a", Ellipsoid.BESSEL, towgs84=(1, 2, 4)
        )

    def test_different_ellipsoids(self):
        """Test different ellipsoids are not equal."""
        assert Datum("a", Ellipsoid.BESSEL) != Datum("a", Ellipsoid.INTERNATIONAL)

    def test_different_types(self):
        """Test a WGS84-type datum differs from an unknown datum on the same ellipsoid."""
        assert Datum.WGS84 != Datum("plain", Ellipsoid.WGS84)

    def test_grid_datums(self, synthetic_grid):
        """Test grid datums compare by their grid lists."""
        a = Datum("a", Ellipsoid.INTERNATIONAL, grids=[synthetic_grid])
        b = Datum("b", Ellipsoid.INTERNATIONAL, grids=[synthetic_grid])
        c = Datum("c", Ellipsoid.INTERNATIONAL, grids=[Grid.null_grid()])

        assert a == b
        assert a != c

    def test_not_equal_to_other_types(self):
        """Test comparison with unrelated objects."""
        assert Datum.WGS84 != "WGS84"


class TestDatumOperations:
    """Tests for the Helmert and grid hooks."""

    def test_helmert_round_trip(self):
        """Test shifting to WGS84 and back recovers the coordinate."""
        p = ProjCoordinate(4000000.0, 500000.0, 4900000.0)
        Datum.CH1903.transform_from_geocentric_to_wgs84(p)
        assert p.x == pytest.approx(4000674.374)

        Datum.CH1903.transform_to_geocentric_from_wgs84(p)
        assert p.to_tuple() == pytest.approx((4000000.0, 500000.0, 4900000.0))

    def test_helmert_noop_without_parameters(self):
        """Test datums without parameters leave geocentric points alone."""
        p = ProjCoordinate(1.0, 2.0, 3.0)
        Datum.WGS84.transform_from_geocentric_to_wgs84(p)
        assert p.to_tuple() == (1.0, 2.0, 3.0)

    def test_grid_shift(self, grid_datum):
        """Test the grid shift and its inverse."""
        p = ProjCoordinate(math.radians(1.0), math.radians(41.0))

        assert grid_datum.shift(p) == GridShiftStatus.APPLIED
        assert p.x > math.radians(1.0)

        assert grid_datum.inverse_shift(p) == GridShiftStatus.APPLIED
        assert p.x == pytest.approx(math.radians(1.0), abs=1e-11)
        assert p.y == pytest.approx(math.radians(41.0), abs=1e-11)

    def test_grid_miss(self, grid_datum):
        """Test a point outside the grids is reported."""
        p = ProjCoordinate(math.radians(20.0), math.radians(41.0))
        assert grid_datum.shift(p) == GridShiftStatus.NOT_APPLICABLE

    def test_constants(self):
        """Test the predefined datums."""
        assert Datum.GGRS87.transform_type == DatumTransformType.THREE_PARAM
        assert Datum.POTSDAM.transform_type == DatumTransformType.SEVEN_PARAM
        assert Datum.POTSDAM.ellipsoid == Ellipsoid.BESSEL
        assert str(Datum.OSGB36) == "OSGB36"
