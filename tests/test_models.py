"""
Tests for the value models: ellipsoids, units, coordinates, axes and meridians.
"""

import math

import pytest

from projcore.models.axis import AxisOrder
from projcore.models.coordinate import ProjCoordinate
from projcore.models.ellipsoid import Ellipsoid
from projcore.models.prime_meridian import PrimeMeridian
from projcore.models.units import Unit, Units


class TestEllipsoid:
    """Tests for the Ellipsoid model."""

    def test_wgs84_constants(self) -> None:
        """Test the derived WGS84 values."""
        wgs84 = Ellipsoid.WGS84
        assert wgs84.a == 6378137.0
        assert wgs84.b == pytest.approx(6356752.314245, abs=1e-6)
        assert wgs84.es == pytest.approx(0.00669437999014, abs=1e-14)
        assert wgs84.inverse_flattening == pytest.approx(298.257223563, abs=1e-9)

    def test_equal_across_constructors(self) -> None:
        """Test axis and flattening definitions of one figure compare equal."""
        from_rf = Ellipsoid.from_inverse_flattening("a/rf", 6378137.0, 298.257223563)
        from_axes = Ellipsoid.from_axes("a/b", 6378137.0, from_rf.b)
        from_es = Ellipsoid.from_eccentricity_squared("a/es", 6378137.0, from_rf.es)

        assert from_rf == from_axes == from_es
        assert hash(from_rf) == hash(from_axes) == hash(from_es)

    def test_name_ignored_by_equality(self) -> None:
        """Test two ellipsoids with different names compare equal."""
        assert Ellipsoid.sphere(6370997.0, name="other") == Ellipsoid.SPHERE

    def test_different_figures_not_equal(self) -> None:
        """Test WGS84 and Bessel differ."""
        assert Ellipsoid.WGS84 != Ellipsoid.BESSEL
        assert Ellipsoid.WGS84 != Ellipsoid.INTERNATIONAL

    def test_sphere(self) -> None:
        """Test sphere properties."""
        sphere = Ellipsoid.sphere(1000.0)
        assert sphere.is_sphere
        assert sphere.es == 0.0
        assert sphere.inverse_flattening == math.inf

    @pytest.mark.parametrize(
        "factory",
        [
            lambda: Ellipsoid.from_axes("bad", -1.0, 1.0),
            lambda: Ellipsoid.from_axes("bad", 1.0, 2.0),
            lambda: Ellipsoid.from_inverse_flattening("bad", 6378137.0, 0.0),
            lambda: Ellipsoid.from_eccentricity_squared("bad", 6378137.0, 1.0),
        ],
    )
    def test_invalid_parameters(self, factory) -> None:
        """Test invalid axes or eccentricities are rejected."""
        with pytest.raises(ValueError):
            factory()

    def test_to_dict(self) -> None:
        """Test dictionary conversion."""
        data = Ellipsoid.BESSEL.to_dict()
        assert data["name"] == "Bessel 1841"
        assert data["a"] == 6377397.155
        assert data["inverse_flattening"] == pytest.approx(299.1528128)


class TestUnits:
    """Tests for units of measure."""

    def test_linear_conversions(self) -> None:
        """Test conversion to and from metres."""
        assert Units.KILOMETRES.to_base(1.5) == 1500.0
        assert Units.FEET.from_base(0.3048) == pytest.approx(1.0)
        assert Units.US_FEET.value == pytest.approx(0.304800609601219)

    def test_angular_flag(self) -> None:
        """Test angular units are flagged."""
        assert Units.DEGREES.angular
        assert Units.RADIANS.angular
        assert not Units.METRES.angular

    def test_non_positive_value_rejected(self) -> None:
        """Test a unit must have a positive size."""
        with pytest.raises(ValueError):
            Unit("nothing", "x", 0.0)

    def test_str_is_abbreviation(self) -> None:
        """Test the string form is the proj.4 abbreviation."""
        assert str(Units.US_FEET) == "us-ft"


class TestProjCoordinate:
    """Tests for the coordinate buffer."""

    def test_default_has_no_z(self) -> None:
        """Test a 2D coordinate has no valid height."""
        coord = ProjCoordinate(1.0, 2.0)
        assert not coord.has_valid_z()
        assert coord.to_tuple() == (1.0, 2.0)

    def test_with_z(self) -> None:
        """Test a 3D coordinate keeps its height."""
        coord = ProjCoordinate(1.0, 2.0, 3.0)
        assert coord.has_valid_z()
        assert coord.to_tuple() == (1.0, 2.0, 3.0)
        coord.clear_z()
        assert not coord.has_valid_z()

    def test_set_value_and_copy(self) -> None:
        """Test copying ordinates between buffers."""
        source = ProjCoordinate(1.0, 2.0, 3.0)
        target = ProjCoordinate().set_value(source)
        assert target == source

        clone = source.copy()
        clone.x = 10.0
        assert source.x == 1.0

    def test_equality_ignores_missing_z(self) -> None:
        """Test two 2D coordinates compare equal despite NaN heights."""
        assert ProjCoordinate(1.0, 2.0) == ProjCoordinate(1.0, 2.0)
        assert ProjCoordinate(1.0, 2.0) != ProjCoordinate(1.0, 2.0, 0.0)

    def test_are_xy_equal(self) -> None:
        """Test tolerance comparison of horizontal ordinates."""
        a = ProjCoordinate(1.0, 2.0)
        b = ProjCoordinate(1.0005, 1.9995)
        assert a.are_xy_equal(b, 0.001)
        assert not a.are_xy_equal(b, 0.0001)


class TestAxisOrder:
    """Tests for axis reordering."""

    def test_enu_is_identity(self) -> None:
        """Test ENU leaves coordinates untouched."""
        coord = ProjCoordinate(1.0, 2.0, 3.0)
        AxisOrder.ENU.to_enu(coord)
        assert coord.to_tuple() == (1.0, 2.0, 3.0)

    def test_neu_swaps(self) -> None:
        """Test latitude-first order swaps x and y."""
        coord = ProjCoordinate(52.0, 5.0, 0.0)
        AxisOrder.NEU.to_enu(coord)
        assert coord.to_tuple() == (5.0, 52.0, 0.0)
        AxisOrder.NEU.from_enu(coord)
        assert coord.to_tuple() == (52.0, 5.0, 0.0)

    def test_south_west_negates(self) -> None:
        """Test south/west axes flip signs."""
        axis = AxisOrder("wsu")
        coord = ProjCoordinate(100.0, 200.0, 1.0)
        axis.to_enu(coord)
        assert coord.to_tuple() == (-100.0, -200.0, 1.0)
        axis.from_enu(coord)
        assert coord.to_tuple() == (100.0, 200.0, 1.0)

    @pytest.mark.parametrize("spec", ["en", "eeu", "xyz", "nnu"])
    def test_invalid_spec(self, spec: str) -> None:
        """Test malformed axis specifications are rejected."""
        with pytest.raises(ValueError):
            AxisOrder(spec)

    def test_equality(self) -> None:
        """Test axis orders compare by specification."""
        assert AxisOrder("NEU") == AxisOrder.NEU
        assert hash(AxisOrder("neu")) == hash(AxisOrder.NEU)


class TestPrimeMeridian:
    """Tests for prime meridian shifts."""

    def test_greenwich_is_noop(self) -> None:
        """Test Greenwich does not move longitudes."""
        coord = ProjCoordinate(0.1, 0.2)
        PrimeMeridian.GREENWICH.to_greenwich(coord)
        assert coord.x == 0.1

    def test_paris_round_trip(self) -> None:
        """Test shifting to Greenwich and back."""
        coord = ProjCoordinate(0.0, 0.8)
        PrimeMeridian.PARIS.to_greenwich(coord)
        assert math.degrees(coord.x) == pytest.approx(2.337229166667)
        PrimeMeridian.PARIS.from_greenwich(coord)
        assert coord.x == pytest.approx(0.0, abs=1e-15)
