import jax
import pytest

from pluto99.epoch import Epoch, TimeReference, is_time_reference, validate_time_reference


class _DuckTime:
    """Minimal time reference that is not an Epoch."""

    def __init__(self, jde):
        self._jde = jde

    def jde(self):
        return self._jde

    def jdec(self):
        return (self._jde - 2451545.0) / 36525.0


class _AttributeTime:
    """Exposes jde and jdec as plain values instead of methods."""

    jde = 2446896.0
    jdec = -0.127


# ──────────────────────────────────────────────
# Construction
# ──────────────────────────────────────────────


class TestEpochConstruction:
    def test_from_date(self):
        epc = Epoch(2000, 1, 1, 12, 0, 0.0)
        assert float(epc.jde()) == 2451545.0

    def test_from_date_defaults(self):
        assert float(Epoch(2000, 1, 1).jde()) == 2451544.5

    def test_from_jde(self):
        assert float(Epoch.from_jde(2446896.0).jde()) == 2446896.0

    def test_from_jde_fractional(self):
        assert float(Epoch.from_jde(2446896.25).jde()) == 2446896.25

    def test_from_string_date_only(self):
        assert float(Epoch("2000-01-01").jde()) == 2451544.5

    def test_from_string_iso(self):
        assert Epoch("2000-01-01T12:00:00Z") == Epoch(2000, 1, 1, 12)

    def test_from_string_fractional_seconds(self):
        epc = Epoch("2020-06-15T10:30:15.500Z")
        _, _, _, hour, minute, second = epc.caldate()
        assert (hour, minute) == (10, 30)
        assert second == pytest.approx(15.5, abs=1e-4)

    def test_from_string_negative_year(self):
        assert float(Epoch("-2998-04-23").jde()) == 626150.5

    def test_copy(self):
        epc = Epoch(2015, 7, 14)
        assert Epoch(epc) == epc

    def test_time_overflow_rolls_day(self):
        assert Epoch(2000, 1, 1, 36) == Epoch(2000, 1, 2, 12)

    def test_invalid_string(self):
        with pytest.raises(ValueError, match="ISO 8601"):
            Epoch("14 July 2015")

    def test_invalid_single_argument(self):
        with pytest.raises(ValueError, match="Cannot construct Epoch"):
            Epoch(2451545.0)

    def test_invalid_argument_count(self):
        with pytest.raises(ValueError):
            Epoch(2000, 1)


# ──────────────────────────────────────────────
# Time reference capability
# ──────────────────────────────────────────────


class TestEpochTimeReference:
    def test_jdec_at_j2000(self):
        assert float(Epoch(2000, 1, 1, 12).jdec()) == 0.0

    def test_jdec_one_century(self):
        assert float(Epoch.from_jde(2451545.0 + 36525.0).jdec()) == 1.0

    def test_jdec_matches_jde(self):
        epc = Epoch.from_jde(2446896.0)
        expected = (float(epc.jde()) - 2451545.0) / 36525.0
        assert float(epc.jdec()) == pytest.approx(expected, abs=1e-15)

    def test_mjd(self):
        assert float(Epoch(2000, 1, 1, 12).mjd()) == pytest.approx(51544.5)

    def test_caldate(self):
        year, month, day, hour, minute, second = Epoch(2024, 3, 15, 6, 30, 45.0).caldate()
        assert (year, month, day, hour, minute) == (2024, 3, 15, 6, 30)
        assert second == pytest.approx(45.0, abs=1e-4)

    def test_caldate_julian_calendar(self):
        year, month, day, _, _, _ = Epoch.from_jde(626150.5).caldate()
        assert (year, month, day) == (-2998, 4, 23)

    def test_str(self):
        assert str(Epoch(2000, 1, 1, 12)) == "2000-01-01T12:00:00.000Z"

    def test_str_rounds_to_milliseconds(self):
        assert str(Epoch("1987-04-10T23:59:59.9999Z")) == "1987-04-11T00:00:00.000Z"
        assert str(Epoch("1987-04-10T10:30:15.2504Z")) == "1987-04-10T10:30:15.250Z"

    def test_caldate_rounding_carries_day(self):
        assert Epoch("1999-12-31T23:59:59.9999Z").caldate() == (2000, 1, 1, 0, 0, 0.0)

    def test_jit_compatible(self):
        epc = Epoch.from_jde(2446896.0)
        eager = epc.jdec()
        jitted = jax.jit(lambda e: e.jdec())(epc)
        assert float(jitted) == pytest.approx(float(eager), abs=1e-15)


# ──────────────────────────────────────────────
# Arithmetic and comparison
# ──────────────────────────────────────────────


class TestEpochArithmetic:
    def test_add_days(self):
        epc = Epoch.from_jde(2451545.0) + 1.5
        assert float(epc.jde()) == 2451546.5

    def test_subtract_days(self):
        epc = Epoch.from_jde(2451545.0) - 0.25
        assert float(epc.jde()) == 2451544.75

    def test_difference(self):
        delta = Epoch.from_jde(2451546.5) - Epoch.from_jde(2451545.0)
        assert float(delta) == pytest.approx(1.5)

    def test_ordering(self):
        early = Epoch.from_jde(2446896.0)
        late = Epoch.from_jde(2451545.0)
        assert early < late
        assert late > early
        assert early <= early
        assert early != late

    def test_hash_consistent_with_eq(self):
        assert hash(Epoch(2000, 1, 1, 12)) == hash(Epoch.from_jde(2451545.0))


# ──────────────────────────────────────────────
# Protocol checks
# ──────────────────────────────────────────────


class TestTimeReferenceProtocol:
    def test_epoch_is_time_reference(self):
        assert isinstance(Epoch(2000, 1, 1), TimeReference)
        assert is_time_reference(Epoch(2000, 1, 1))

    def test_duck_type_is_time_reference(self):
        assert is_time_reference(_DuckTime(2451545.0))

    @pytest.mark.parametrize("candidate", [None, 2451545.0, "2000-01-01", object()])
    def test_rejected(self, candidate):
        assert not is_time_reference(candidate)
        with pytest.raises(TypeError, match="jde"):
            validate_time_reference(candidate)

    def test_non_callable_attributes_rejected(self):
        assert not is_time_reference(_AttributeTime())
        with pytest.raises(TypeError, match="jde"):
            validate_time_reference(_AttributeTime())

    def test_validate_returns_argument(self):
        epc = Epoch(2000, 1, 1)
        assert validate_time_reference(epc) is epc

    def test_validate_names_argument(self):
        with pytest.raises(TypeError, match="ob_time"):
            validate_time_reference(None, "ob_time")
